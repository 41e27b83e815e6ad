"""One-ply lookahead agent for Connect Four."""

from __future__ import annotations

from typing import List, Optional

import numpy as np

from connectfour.games.connect4 import Grid, Outcome
from .base_agent import BaseAgent


class GreedyAgent(BaseAgent):
    """
    Heuristic agent that looks one move ahead:
    1. Win if possible
    2. Block a column the opponent would win with
    3. Play a column that does not hand the opponent a win on top of it
    4. Otherwise random
    """

    def __init__(self, rng: Optional[np.random.Generator] = None):
        """
        Initialize greedy agent.

        Args:
            rng: Generator used for tie-breaks (a fresh one if omitted)
        """
        self.rng = rng or np.random.default_rng()

    def choose(self, grid: Grid, mark: int) -> int:
        legal_columns = grid.legal_columns()
        if not legal_columns:
            raise ValueError("No legal columns available")
        opponent = -mark

        # Try to win
        winning = [col for col in legal_columns if self._would_win(grid, col, mark)]
        if winning:
            return self._pick(winning)

        # Try to block opponent
        blocking = [col for col in legal_columns if self._would_win(grid, col, opponent)]
        if blocking:
            return self._pick(blocking)

        safe = [col for col in legal_columns if self._is_safe(grid, col, mark)]
        if safe:
            return self._pick(safe)

        # Every move loses; give up
        return self._pick(legal_columns)

    def _pick(self, columns: List[int]) -> int:
        if len(columns) == 1:
            return columns[0]
        return int(self.rng.choice(columns))

    @staticmethod
    def _would_win(grid: Grid, col: int, mark: int) -> bool:
        """Check if dropping ``mark`` into ``col`` completes a line."""
        grid.place(col, mark)
        try:
            return grid.terminal_status() is Outcome.for_mark(mark)
        finally:
            grid.undo_last(col)

    @staticmethod
    def _is_safe(grid: Grid, col: int, mark: int) -> bool:
        """
        Check that playing ``col`` does not set up an immediate loss.

        With room for two more pieces, the opponent's reply on top of ours
        must not win. With room for one, our piece must not end the game.
        """
        height = grid.column_height(col)
        if height <= grid.rows - 2:
            grid.place(col, mark)
            grid.place(col, -mark)
            try:
                return grid.terminal_status() is not Outcome.for_mark(-mark)
            finally:
                grid.undo_last(col)
                grid.undo_last(col)

        grid.place(col, mark)
        try:
            return grid.terminal_status() is Outcome.IN_PROGRESS
        finally:
            grid.undo_last(col)
