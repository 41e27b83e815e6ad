"""Base agent interface."""

from __future__ import annotations

from abc import ABC, abstractmethod

from connectfour.games.connect4 import Grid


class BaseAgent(ABC):
    """Base class for all agents."""

    @abstractmethod
    def choose(self, grid: Grid, mark: int) -> int:
        """
        Return a legal column for the side playing ``mark``.

        The grid may be used for hypothetical moves but must be handed back
        exactly as it was received.
        """

    def reset(self) -> None:
        """Called before each new game."""
