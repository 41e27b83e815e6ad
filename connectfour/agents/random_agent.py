"""Random agent implementation."""

from typing import Optional

import numpy as np

from connectfour.games.connect4 import Grid
from .base_agent import BaseAgent


class RandomAgent(BaseAgent):
    """Agent that selects a legal column uniformly at random."""

    def __init__(self, rng: Optional[np.random.Generator] = None):
        """
        Initialize random agent.

        Args:
            rng: Generator used for every draw (a fresh one if omitted)
        """
        self.rng = rng or np.random.default_rng()

    def choose(self, grid: Grid, mark: int) -> int:
        legal_columns = grid.legal_columns()
        if not legal_columns:
            raise ValueError("No legal columns available")
        return int(self.rng.choice(legal_columns))
