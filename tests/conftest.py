"""Shared fixtures."""

import pytest

from connectfour.games.connect4 import Grid

# Full board with no four in a row: rows alternate "ooxxoox" and its inverse.
DRAW_ROWS = [
    "xxooxxo",
    "ooxxoox",
    "xxooxxo",
    "ooxxoox",
    "xxooxxo",
    "ooxxoox",
]


@pytest.fixture
def draw_grid() -> Grid:
    return Grid.from_rows(DRAW_ROWS)


@pytest.fixture
def almost_draw_grid() -> Grid:
    """The draw board with the top of column 6 still empty."""
    return Grid.from_rows(["xxooxx."] + DRAW_ROWS[1:])
