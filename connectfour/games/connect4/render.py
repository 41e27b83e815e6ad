"""Plain-text board rendering."""

from __future__ import annotations

from .grid import SYMBOLS, Grid


def render_grid(grid: Grid) -> str:
    """Return the board top row first, one character per cell."""
    board = grid.board
    return "\n".join(
        "".join(SYMBOLS[int(cell)] for cell in board[row])
        for row in range(grid.rows - 1, -1, -1)
    )


def print_grid(grid: Grid) -> None:
    print(render_grid(grid))
    print()
