"""
Run a match from the whitespace protocol on stdin.

Input: ``type depth`` for agent 1, ``type depth`` for agent 2, then the
number of games. Any further tokens are the moves of interactive agents.
"""

import logging
import sys
import time
from typing import Iterator, Optional, TextIO

import tyro

from connectfour.agents import InteractiveAgent
from connectfour.cli.play_agent_vs_agent import LogLevel, run_match
from connectfour.config import parse_classic
from connectfour.errors import Connect4Error

logger = logging.getLogger(__name__)


def iter_tokens(stream: TextIO) -> Iterator[str]:
    for line in stream:
        yield from line.split()


def classic(
    render: bool = True,
    seed: Optional[int] = None,
    log_level: LogLevel = "WARNING",
) -> int:
    """
    Play a match configured through stdin.

    Args:
        render: Print every board and the running tally
        seed: Seed for tie-breaks; omit for non-reproducible play
        log_level: Logging verbosity on stderr
    """
    start = time.perf_counter()
    logging.basicConfig(level=log_level, format="%(levelname)s %(name)s: %(message)s")

    tokens = iter_tokens(sys.stdin)
    header = " ".join(token for _, token in zip(range(5), tokens))
    try:
        config = parse_classic(header, render=render)
    except Connect4Error as exc:
        logger.error("%s", exc)
        return 1
    if seed is not None and seed < 0:
        logger.error("seed must be non-negative, got %d", seed)
        return 1
    config.seed = seed

    def next_token(prompt: str) -> str:
        try:
            return next(tokens)
        except StopIteration:
            raise EOFError("stdin closed while waiting for a move") from None

    for agent_config in (config.agent1, config.agent2):
        if agent_config.id == "interactive":
            agent_config.params.setdefault("input_fn", next_token)

    return run_match(config, start=start)


def main() -> None:
    sys.exit(tyro.cli(classic))


if __name__ == "__main__":
    main()
