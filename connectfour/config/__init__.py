"""Config package exports."""

from .schema import AgentConfig, MatchConfig, load_config, parse_classic

__all__ = [
    "AgentConfig",
    "MatchConfig",
    "load_config",
    "parse_classic",
]
