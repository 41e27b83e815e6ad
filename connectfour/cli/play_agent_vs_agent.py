"""CLI for playing agent vs agent."""

import logging
import sys
import time
from typing import Literal, Optional

import tyro

from connectfour.config import AgentConfig, MatchConfig, load_config
from connectfour.errors import Connect4Error
from connectfour.utils import MetricsLogger, play_match

logger = logging.getLogger(__name__)

LogLevel = Literal["DEBUG", "INFO", "WARNING", "ERROR"]


def run_match(config: MatchConfig, start: Optional[float] = None) -> int:
    """
    Play the configured match and print ``wins losses draws`` then elapsed ms.

    Returns:
        Process exit status (0 on success, 1 on a fatal error).
    """
    start = time.perf_counter() if start is None else start
    try:
        agent1, agent2 = config.build_agents()
        metrics = MetricsLogger(config.log_dir) if config.log_dir else None
        try:
            result = play_match(
                agent1,
                agent2,
                num_games=config.num_games,
                render=config.render,
                metrics=metrics,
            )
        finally:
            if metrics is not None:
                metrics.close()
    except Connect4Error as exc:
        logger.error("%s", exc)
        return 1
    except EOFError as exc:
        logger.error("Input ended before the match finished: %s", str(exc) or "EOF")
        return 1

    for name, agent in (("agent1", agent1), ("agent2", agent2)):
        nodes = getattr(agent, "nodes", None)
        if nodes is not None:
            logger.info("%s %r visited %d nodes", name, agent, nodes)

    print(result.summary())
    print(f"{(time.perf_counter() - start) * 1000.0:.0f}")
    return 0


def play_agent_vs_agent(
    agent1_type: str = "alphabeta",
    agent2_type: str = "greedy",
    agent1_depth: int = 4,
    agent2_depth: int = 4,
    num_games: int = 1,
    render: bool = False,
    seed: Optional[int] = None,
    config: Optional[str] = None,
    log_dir: Optional[str] = None,
    log_level: LogLevel = "WARNING",
) -> int:
    """
    Play agent vs agent games.

    Args:
        agent1_type: Agent moving first: a name (interactive, random, greedy,
            negamax, alphabeta) or its type code 0-4
        agent2_type: Agent moving second, same choices
        agent1_depth: Search depth for agent1 (negamax/alphabeta only)
        agent2_depth: Search depth for agent2 (negamax/alphabeta only)
        num_games: Number of games to play
        render: Print every board and the running tally
        seed: Seed for tie-breaks; omit for non-reproducible play
        config: YAML match file; when given, the flags above are ignored
        log_dir: Directory for a per-game CSV log
        log_level: Logging verbosity on stderr
    """
    start = time.perf_counter()
    logging.basicConfig(level=log_level, format="%(levelname)s %(name)s: %(message)s")

    try:
        if config is not None:
            match_config = load_config(config)
        else:
            match_config = MatchConfig(
                agent1=AgentConfig(type=agent1_type, depth=agent1_depth),
                agent2=AgentConfig(type=agent2_type, depth=agent2_depth),
                num_games=num_games,
                seed=seed,
                render=render,
                log_dir=log_dir,
            )
    except Connect4Error as exc:
        logger.error("%s", exc)
        return 1

    return run_match(match_config, start=start)


def main() -> None:
    sys.exit(tyro.cli(play_agent_vs_agent))


if __name__ == "__main__":
    main()
