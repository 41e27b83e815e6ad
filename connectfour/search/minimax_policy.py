"""Fixed-depth negamax search, plain and with alpha-beta pruning."""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Dict, List, Optional, Sequence

import numpy as np

from connectfour.errors import InvalidConfigurationError
from connectfour.games.connect4 import MARK_A, MARK_B, Grid
from .evaluator import INF, evaluate, is_terminal_score

logger = logging.getLogger(__name__)


@dataclass
class SearchConfig:
    depth: int = 4

    def __post_init__(self) -> None:
        if isinstance(self.depth, bool) or not isinstance(self.depth, (int, np.integer)):
            raise InvalidConfigurationError(f"Search depth must be an integer, got {self.depth!r}")
        if self.depth <= 0:
            raise InvalidConfigurationError(f"Search depth must be >= 1, got {self.depth}")
        self.depth = int(self.depth)


def center_out_order(cols: int) -> List[int]:
    """Columns sorted by distance from the middle, left side first on ties."""
    return sorted(range(cols), key=lambda col: (abs(2 * col - (cols - 1)), col))


class NegamaxPolicy:
    """
    Depth-limited negamax over a :class:`Grid`.

    The search always plays MARK_A: :meth:`select_column` flips the board when
    MARK_B is to move, and every ply flips again before recursing, so a child
    value is simply negated on the way back up. Moves are tried with
    ``place``/``undo_last`` on the caller's grid; nothing is copied.
    """

    def __init__(
        self,
        config: Optional[SearchConfig] = None,
        rng: Optional[np.random.Generator] = None,
    ) -> None:
        self.config = config or SearchConfig()
        self.rng = rng or np.random.default_rng()
        self.nodes = 0

    def reset_nodes(self) -> None:
        self.nodes = 0

    def select_column(self, grid: Grid, mark: int) -> int:
        scores = self._root_scores(grid, mark)
        best = max(scores.values())
        candidates = sorted(col for col, score in scores.items() if score == best)
        logger.debug("root scores for mark %d: %s (best %s)", mark, dict(sorted(scores.items())), candidates)
        if len(candidates) == 1:
            return candidates[0]
        return int(self.rng.choice(candidates))

    def search_score(self, grid: Grid, mark: int) -> int:
        """Value of ``grid`` for the side playing ``mark``."""
        return max(self._root_scores(grid, mark).values())

    def _root_scores(self, grid: Grid, mark: int) -> Dict[int, int]:
        if mark not in (MARK_A, MARK_B):
            raise ValueError(f"Invalid mark {mark}")
        if not grid.legal_columns():
            raise ValueError("No legal columns available for search")

        flipped = mark == MARK_B
        if flipped:
            grid.flip_perspective()
        try:
            return self._scan(grid, self.config.depth)
        finally:
            if flipped:
                grid.flip_perspective()

    def _order(self, grid: Grid) -> Sequence[int]:
        return range(grid.cols)

    def _scan(self, grid: Grid, depth: int) -> Dict[int, int]:
        scores: Dict[int, int] = {}
        for col in self._order(grid):
            if not grid.is_legal(col):
                continue
            scores[col] = self._score_move(grid, col, depth)
        return scores

    def _search(self, grid: Grid, depth: int) -> int:
        best = -2 * INF
        for score in self._scan(grid, depth).values():
            if score > best:
                best = score
        return best

    def _score_move(self, grid: Grid, col: int, depth: int) -> int:
        grid.place(col, MARK_A)
        self.nodes += 1
        try:
            score = evaluate(grid)
            if depth > 1 and not is_terminal_score(score) and grid.legal_columns():
                grid.flip_perspective()
                try:
                    score = -self._search(grid, depth - 1)
                finally:
                    grid.flip_perspective()
        finally:
            grid.undo_last(col)
        return score


class AlphaBetaPolicy(NegamaxPolicy):
    """
    Negamax with an ``(alpha, beta)`` window and center-first move ordering.

    After a column is scored, a score above ``beta`` stops the scan of its
    siblings. The column that caused the cut keeps its score, so the root
    always has at least one candidate.
    """

    def __init__(
        self,
        config: Optional[SearchConfig] = None,
        rng: Optional[np.random.Generator] = None,
    ) -> None:
        super().__init__(config=config, rng=rng)
        self._orders: Dict[int, List[int]] = {}

    def _order(self, grid: Grid) -> Sequence[int]:
        if grid.cols not in self._orders:
            self._orders[grid.cols] = center_out_order(grid.cols)
        return self._orders[grid.cols]

    def _scan(
        self,
        grid: Grid,
        depth: int,
        alpha: int = -4 * INF,
        beta: int = 4 * INF,
    ) -> Dict[int, int]:
        scores: Dict[int, int] = {}
        for col in self._order(grid):
            if not grid.is_legal(col):
                continue
            score = self._score_move(grid, col, depth, alpha, beta)
            scores[col] = score
            if score > beta:
                break
            if score > alpha:
                alpha = score
        return scores

    def _search(self, grid: Grid, depth: int, alpha: int = -4 * INF, beta: int = 4 * INF) -> int:
        best = -2 * INF
        for score in self._scan(grid, depth, alpha, beta).values():
            if score > best:
                best = score
        return best

    def _score_move(
        self,
        grid: Grid,
        col: int,
        depth: int,
        alpha: int = -4 * INF,
        beta: int = 4 * INF,
    ) -> int:
        grid.place(col, MARK_A)
        self.nodes += 1
        try:
            score = evaluate(grid)
            if depth > 1 and not is_terminal_score(score) and grid.legal_columns():
                grid.flip_perspective()
                try:
                    score = -self._search(grid, depth - 1, -beta, -alpha)
                finally:
                    grid.flip_perspective()
        finally:
            grid.undo_last(col)
        return score
