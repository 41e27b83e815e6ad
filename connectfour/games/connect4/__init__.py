from __future__ import annotations

from .grid import (
    COLS,
    CONNECT,
    DIRECTIONS,
    EMPTY,
    MARK_A,
    MARK_B,
    ROWS,
    SYMBOLS,
    Grid,
    Outcome,
    window_indices,
)
from .render import print_grid, render_grid

__all__ = [
    "COLS",
    "CONNECT",
    "DIRECTIONS",
    "EMPTY",
    "MARK_A",
    "MARK_B",
    "ROWS",
    "SYMBOLS",
    "Grid",
    "Outcome",
    "print_grid",
    "render_grid",
    "window_indices",
]
