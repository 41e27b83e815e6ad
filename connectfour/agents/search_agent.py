"""Agents backed by fixed-depth negamax search."""

from __future__ import annotations

from typing import Optional

import numpy as np

from connectfour.games.connect4 import Grid
from connectfour.search import AlphaBetaPolicy, NegamaxPolicy, SearchConfig
from .base_agent import BaseAgent


class NegamaxAgent(BaseAgent):
    """Plays the best column found by a full-width negamax search."""

    policy_cls = NegamaxPolicy

    def __init__(self, depth: int = 4, rng: Optional[np.random.Generator] = None) -> None:
        self.policy = self.policy_cls(config=SearchConfig(depth=depth), rng=rng)

    @property
    def depth(self) -> int:
        return self.policy.config.depth

    @property
    def nodes(self) -> int:
        """Positions visited since construction."""
        return self.policy.nodes

    def choose(self, grid: Grid, mark: int) -> int:
        return self.policy.select_column(grid, mark)

    def __repr__(self) -> str:
        return f"{type(self).__name__}(depth={self.depth})"


class AlphaBetaAgent(NegamaxAgent):
    """Same contract as :class:`NegamaxAgent`, searched with alpha-beta pruning."""

    policy_cls = AlphaBetaPolicy
