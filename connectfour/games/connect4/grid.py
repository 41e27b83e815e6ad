"""Mutable Connect Four board with per-column heights and place/undo."""

from __future__ import annotations

from enum import Enum
from functools import lru_cache
from typing import Iterable, List, Sequence

import numpy as np

from connectfour.errors import ColumnEmptyError, ColumnFullError, OutOfRangeError

ROWS = 6
COLS = 7
CONNECT = 4

EMPTY = 0
MARK_A = 1
MARK_B = -1

# Scan order for windows: right, up a column, rising diagonal, falling diagonal.
DIRECTIONS = ((0, 1), (1, 0), (1, 1), (1, -1))

SYMBOLS = {EMPTY: ".", MARK_A: "o", MARK_B: "x"}


class Outcome(Enum):
    IN_PROGRESS = "in_progress"
    WIN_A = "win_a"
    WIN_B = "win_b"
    DRAW = "draw"

    @classmethod
    def for_mark(cls, mark: int) -> "Outcome":
        if mark == MARK_A:
            return cls.WIN_A
        if mark == MARK_B:
            return cls.WIN_B
        raise ValueError(f"No outcome for mark {mark}")

    @property
    def is_terminal(self) -> bool:
        return self is not Outcome.IN_PROGRESS


@lru_cache(maxsize=None)
def window_indices(rows: int = ROWS, cols: int = COLS) -> np.ndarray:
    """
    Flat cell indices of every in-bounds window of ``CONNECT`` cells.

    Windows are ordered by start cell (row-major) and then by direction, so
    "first match" lookups over this table are deterministic.

    Returns:
        Read-only ``int`` array of shape ``(n_windows, CONNECT)``.
    """
    windows: List[List[int]] = []
    for row in range(rows):
        for col in range(cols):
            for dr, dc in DIRECTIONS:
                end_r = row + dr * (CONNECT - 1)
                end_c = col + dc * (CONNECT - 1)
                if not (0 <= end_r < rows and 0 <= end_c < cols):
                    continue
                windows.append(
                    [(row + dr * k) * cols + (col + dc * k) for k in range(CONNECT)]
                )
    table = np.array(windows, dtype=np.intp).reshape(-1, CONNECT)
    table.setflags(write=False)
    return table


class Grid:
    """
    Dense board plus a fill-height counter per column.

    Row 0 is the bottom row. Pieces only enter through :meth:`place` and leave
    through :meth:`undo_last`, so every column is filled bottom-up without gaps
    and ``heights.sum()`` always equals the number of occupied cells.
    """

    def __init__(self, rows: int = ROWS, cols: int = COLS) -> None:
        if rows < CONNECT and cols < CONNECT:
            raise ValueError(f"A {rows}x{cols} grid has no room for {CONNECT} in a row")
        self.rows = rows
        self.cols = cols
        self._board = np.zeros((rows, cols), dtype=np.int8)
        self._heights = np.zeros(cols, dtype=np.int64)

    @classmethod
    def from_moves(
        cls,
        columns: Iterable[int],
        first: int = MARK_A,
        rows: int = ROWS,
        cols: int = COLS,
    ) -> "Grid":
        """Build a grid by dropping alternating marks into ``columns``."""
        grid = cls(rows=rows, cols=cols)
        mark = first
        for col in columns:
            grid.place(col, mark)
            mark = -mark
        return grid

    @classmethod
    def from_rows(cls, lines: Sequence[str]) -> "Grid":
        """
        Parse the rendered text form (top row first, ``.``/``o``/``x``).

        Cells are replayed column by column from the bottom so the heights
        stay consistent; a floating piece raises ``ValueError``.
        """
        lines = [line.strip() for line in lines if line.strip()]
        if not lines:
            raise ValueError("No rows to parse")
        width = len(lines[0])
        if any(len(line) != width for line in lines):
            raise ValueError("All rows must have the same width")
        lookup = {symbol: mark for mark, symbol in SYMBOLS.items()}
        grid = cls(rows=len(lines), cols=width)
        bottom_up = list(reversed(lines))
        for col in range(width):
            gap_seen = False
            for line in bottom_up:
                try:
                    mark = lookup[line[col]]
                except KeyError:
                    raise ValueError(f"Unknown cell symbol {line[col]!r}") from None
                if mark == EMPTY:
                    gap_seen = True
                    continue
                if gap_seen:
                    raise ValueError(f"Floating piece in column {col}")
                grid.place(col, mark)
        return grid

    @property
    def board(self) -> np.ndarray:
        """Read-only view of the cells, indexed ``[row, col]``."""
        view = self._board.view()
        view.setflags(write=False)
        return view

    @property
    def heights(self) -> np.ndarray:
        view = self._heights.view()
        view.setflags(write=False)
        return view

    def copy(self) -> "Grid":
        clone = Grid(rows=self.rows, cols=self.cols)
        clone._board[...] = self._board
        clone._heights[...] = self._heights
        return clone

    def query(self, row: int, col: int) -> int:
        if not (0 <= row < self.rows and 0 <= col < self.cols):
            raise OutOfRangeError(f"Invalid square ({row}, {col})")
        return int(self._board[row, col])

    def column_height(self, col: int) -> int:
        self._check_column(col)
        return int(self._heights[col])

    def is_legal(self, col: int) -> bool:
        return 0 <= col < self.cols and self._heights[col] < self.rows

    def legal_columns(self) -> List[int]:
        return [int(col) for col in np.flatnonzero(self._heights < self.rows)]

    def empty_count(self) -> int:
        return int(self._board.size - self._heights.sum())

    def place(self, col: int, mark: int) -> None:
        self._check_column(col)
        if mark not in (MARK_A, MARK_B):
            raise ValueError(f"Invalid mark {mark}")
        height = self._heights[col]
        if height >= self.rows:
            raise ColumnFullError(f"Column {col} is full")
        self._board[height, col] = mark
        self._heights[col] = height + 1

    def undo_last(self, col: int) -> None:
        """Remove the top piece of ``col``; search uses this to backtrack."""
        self._check_column(col)
        height = self._heights[col]
        if height <= 0:
            raise ColumnEmptyError(f"Column {col} is empty")
        self._board[height - 1, col] = EMPTY
        self._heights[col] = height - 1

    def flip_perspective(self) -> None:
        """Swap MARK_A and MARK_B in place. Applying it twice is a no-op."""
        np.negative(self._board, out=self._board)

    def terminal_status(self) -> Outcome:
        cells = self._board.ravel()[window_indices(self.rows, self.cols)]
        complete = (cells[:, 0] != EMPTY) & np.all(cells == cells[:, :1], axis=1)
        winners = np.flatnonzero(complete)
        if winners.size:
            return Outcome.for_mark(int(cells[winners[0], 0]))
        if self.empty_count() > 0:
            return Outcome.IN_PROGRESS
        return Outcome.DRAW

    def _check_column(self, col: int) -> None:
        if not (0 <= col < self.cols):
            raise OutOfRangeError(f"Invalid column {col}")

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Grid):
            return NotImplemented
        return (
            self.rows == other.rows
            and self.cols == other.cols
            and np.array_equal(self._board, other._board)
            and np.array_equal(self._heights, other._heights)
        )

    __hash__ = None  # mutable

    def __repr__(self) -> str:
        return f"Grid(rows={self.rows}, cols={self.cols}, moves={int(self._heights.sum())})"
