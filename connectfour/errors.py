"""Exception types raised by the board, agents and configuration layer."""

from __future__ import annotations


class Connect4Error(Exception):
    """Base class for all errors raised by this package."""


class OutOfRangeError(Connect4Error, IndexError):
    """A row or column index lies outside the grid."""


class ColumnFullError(Connect4Error, ValueError):
    """A piece was dropped into a saturated column."""


class ColumnEmptyError(Connect4Error, ValueError):
    """A piece was removed from a column that holds none."""


class InvalidConfigurationError(Connect4Error, ValueError):
    """Unknown agent type, malformed depth or otherwise unusable settings."""
