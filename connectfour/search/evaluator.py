"""Static evaluation of Connect Four positions from MARK_A's point of view."""

from __future__ import annotations

import numpy as np

from connectfour.games.connect4 import CONNECT, EMPTY, MARK_A, MARK_B, Grid, window_indices

# Scores with magnitude >= INF mark decided positions.
INF = 100


def evaluate(grid: Grid) -> int:
    """
    Score ``grid`` for MARK_A.

    A completed line returns ``INF + empty`` (negated for MARK_B), so a win
    reached with more empty cells left scores higher. Otherwise the score is
    the number of windows still open for MARK_A minus the number still open
    for MARK_B.
    """
    flat = grid.board.ravel()
    cells = flat[window_indices(grid.rows, grid.cols)]
    own = np.count_nonzero(cells == MARK_A, axis=1)
    other = np.count_nonzero(cells == MARK_B, axis=1)

    decided = np.flatnonzero((own == CONNECT) | (other == CONNECT))
    if decided.size:
        empty = int(np.count_nonzero(flat == EMPTY))
        if own[decided[0]] == CONNECT:
            return INF + empty
        return -(INF + empty)

    return int(np.count_nonzero(other == 0) - np.count_nonzero(own == 0))


def is_terminal_score(score: int) -> bool:
    return abs(score) >= INF
