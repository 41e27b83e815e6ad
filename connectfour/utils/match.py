"""Utilities for playing matches between agents."""

from __future__ import annotations

import logging
import time
from dataclasses import dataclass, field
from typing import Callable, List, Optional

from connectfour.agents.base_agent import BaseAgent
from connectfour.games.connect4 import MARK_A, MARK_B, Grid, Outcome, print_grid
from .metrics import MetricsLogger

logger = logging.getLogger(__name__)


@dataclass
class GameRecord:
    outcome: Outcome
    moves: List[int] = field(default_factory=list)
    grid: Optional[Grid] = None


@dataclass
class MatchResult:
    """Tallies from agent 1's point of view."""

    wins: int = 0
    losses: int = 0
    draws: int = 0
    elapsed_ms: float = 0.0

    @property
    def games(self) -> int:
        return self.wins + self.losses + self.draws

    def record(self, outcome: Outcome) -> None:
        if outcome is Outcome.WIN_A:
            self.wins += 1
        elif outcome is Outcome.WIN_B:
            self.losses += 1
        elif outcome is Outcome.DRAW:
            self.draws += 1
        else:
            raise ValueError(f"Cannot record unfinished game ({outcome})")

    def summary(self) -> str:
        return f"{self.wins} {self.losses} {self.draws}"


def play_game(
    agent1: BaseAgent,
    agent2: BaseAgent,
    render: Optional[Callable[[Grid], None]] = None,
    grid: Optional[Grid] = None,
) -> GameRecord:
    """
    Play one game; ``agent1`` plays MARK_A and moves first.

    Args:
        agent1: First player
        agent2: Second player
        render: Optional callback invoked with the grid after every move
        grid: Starting grid (a fresh empty one if None)

    Returns:
        GameRecord with the final outcome, the column sequence and the grid.
    """
    grid = grid if grid is not None else Grid()
    players = {MARK_A: agent1, MARK_B: agent2}
    mark = MARK_A
    moves: List[int] = []

    for agent in (agent1, agent2):
        agent.reset()

    outcome = grid.terminal_status()
    while outcome is Outcome.IN_PROGRESS:
        col = players[mark].choose(grid, mark)
        grid.place(col, mark)
        moves.append(col)

        if render is not None:
            render(grid)

        outcome = grid.terminal_status()
        mark = -mark

    return GameRecord(outcome=outcome, moves=moves, grid=grid)


def play_match(
    agent1: BaseAgent,
    agent2: BaseAgent,
    num_games: int = 1,
    render: bool = False,
    metrics: Optional[MetricsLogger] = None,
    grid_factory: Callable[[], Grid] = Grid,
) -> MatchResult:
    """
    Play ``num_games`` games with fixed roles and tally the results.

    Args:
        agent1: Agent that always moves first
        agent2: Agent that always moves second
        num_games: Number of games to play
        render: Print every board and the running tally after each game
        metrics: Optional logger receiving one row per game
        grid_factory: Builds the starting grid of each game

    Returns:
        MatchResult with wins/losses/draws for agent1 and wall-clock time.
    """
    if num_games < 1:
        raise ValueError(f"num_games must be >= 1, got {num_games}")

    result = MatchResult()
    start = time.perf_counter()

    for game_idx in range(num_games):
        record = play_game(
            agent1,
            agent2,
            render=print_grid if render else None,
            grid=grid_factory(),
        )
        result.record(record.outcome)

        logger.debug(
            "game %d/%d: %s after %d moves (%s)",
            game_idx + 1,
            num_games,
            record.outcome.value,
            len(record.moves),
            result.summary(),
        )
        if render:
            print(result.summary())
        if metrics is not None:
            metrics.log_dict(
                {
                    "outcome": record.outcome.value,
                    "moves": len(record.moves),
                    "wins": result.wins,
                    "losses": result.losses,
                    "draws": result.draws,
                },
                step=game_idx,
            )
            metrics.increment_episode()

    result.elapsed_ms = (time.perf_counter() - start) * 1000.0
    logger.info(
        "match finished: %s in %.0f ms (%d games)",
        result.summary(),
        result.elapsed_ms,
        result.games,
    )
    return result
