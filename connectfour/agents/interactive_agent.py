"""Agent that asks a human for every move."""

from __future__ import annotations

from typing import Callable

from connectfour.games.connect4 import Grid
from .base_agent import BaseAgent


class InteractiveAgent(BaseAgent):
    """
    Reads a column from ``input_fn`` until a legal one is given.

    Anything that is not an integer naming a non-full column is rejected with
    a message and the prompt is repeated; bad input never raises.
    """

    def __init__(
        self,
        input_fn: Callable[[str], str] = input,
        output_fn: Callable[[str], None] = print,
        prompt: str = "",
    ) -> None:
        self.input_fn = input_fn
        self.output_fn = output_fn
        self.prompt = prompt

    def choose(self, grid: Grid, mark: int) -> int:
        while True:
            raw = self.input_fn(self.prompt).strip()
            try:
                col = int(raw)
            except ValueError:
                col = None
            if col is not None and grid.is_legal(col):
                return col
            self.output_fn(f"Column {raw} is full or invalid")
