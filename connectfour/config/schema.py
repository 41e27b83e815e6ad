"""Configuration schema for matches."""

from __future__ import annotations

from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Dict, Optional, Union

import numpy as np
import yaml

import connectfour.agents  # noqa: F401 - ensures default agents are registered
from connectfour.errors import InvalidConfigurationError
from connectfour.registry import SEARCH_AGENTS, make_agent, resolve_agent_id


_TRUE_STRINGS = {"true", "yes", "on", "1"}
_FALSE_STRINGS = {"false", "no", "off", "0"}


def _parse_bool(key: str, value: Any) -> bool:
    if isinstance(value, bool):
        return value
    if isinstance(value, str):
        lowered = value.strip().lower()
        if lowered in _TRUE_STRINGS:
            return True
        if lowered in _FALSE_STRINGS:
            return False
    raise InvalidConfigurationError(f"{key} must be a boolean, got {value!r}")


@dataclass
class AgentConfig:
    type: Union[int, str]
    depth: int = 4
    params: Dict[str, Any] = field(default_factory=dict)

    def __post_init__(self) -> None:
        self.type = resolve_agent_id(self.type)
        if self.params is None:
            self.params = {}
        elif not isinstance(self.params, dict):
            raise InvalidConfigurationError(f"params must be a mapping, got {self.params!r}")
        try:
            self.depth = int(self.depth)
        except (TypeError, ValueError):
            raise InvalidConfigurationError(f"Malformed depth {self.depth!r}") from None
        if self.type in SEARCH_AGENTS and self.depth <= 0:
            raise InvalidConfigurationError(
                f"Agent '{self.type}' needs a positive search depth, got {self.depth}"
            )

    @property
    def id(self) -> str:
        return str(self.type)

    def build(self, rng: Optional[np.random.Generator] = None) -> Any:
        """Instantiate the configured agent from the registry."""
        kwargs = dict(self.params)
        if self.id in SEARCH_AGENTS:
            kwargs.setdefault("depth", self.depth)
        if self.id != "interactive":
            kwargs.setdefault("rng", rng)
        return make_agent(self.id, **kwargs)


@dataclass
class MatchConfig:
    agent1: AgentConfig
    agent2: AgentConfig
    num_games: int = 1
    seed: Optional[int] = None
    render: bool = False
    log_dir: Optional[str] = None

    def __post_init__(self) -> None:
        if isinstance(self.num_games, bool) or int(self.num_games) < 1:
            raise InvalidConfigurationError(f"num_games must be a positive integer, got {self.num_games!r}")
        self.num_games = int(self.num_games)
        if self.seed is not None and self.seed < 0:
            raise InvalidConfigurationError(f"seed must be non-negative, got {self.seed}")

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "MatchConfig":
        agents = []
        for key in ("agent1", "agent2"):
            agent_data = data.get(key)
            if not isinstance(agent_data, dict) or "type" not in agent_data:
                raise InvalidConfigurationError(f"{key}.type is required")
            agents.append(
                AgentConfig(
                    type=agent_data["type"],
                    depth=agent_data.get("depth", 4),
                    params=agent_data.get("params", {}),
                )
            )

        seed = data.get("seed")
        if seed is not None:
            try:
                seed = int(seed)
            except (TypeError, ValueError):
                raise InvalidConfigurationError(f"Malformed seed {seed!r}") from None

        try:
            num_games = int(data.get("num_games", 1))
        except (TypeError, ValueError):
            raise InvalidConfigurationError(f"Malformed num_games {data.get('num_games')!r}") from None

        return cls(
            agent1=agents[0],
            agent2=agents[1],
            num_games=num_games,
            seed=seed,
            render=_parse_bool("render", data.get("render", False)),
            log_dir=data.get("log_dir"),
        )

    def build_agents(self):
        """
        Build both agents, each with its own generator.

        The generators are spawned from one ``SeedSequence`` so a fixed
        ``seed`` reproduces the whole match.
        """
        first, second = np.random.SeedSequence(self.seed).spawn(2)
        return (
            self.agent1.build(np.random.default_rng(first)),
            self.agent2.build(np.random.default_rng(second)),
        )


def load_config(path: Union[str, Path]) -> MatchConfig:
    """Load MatchConfig from a YAML file."""
    path = Path(path)
    try:
        with path.open() as f:
            data = yaml.safe_load(f)
    except OSError as exc:
        raise InvalidConfigurationError(f"Cannot read config {path}: {exc.strerror or exc}") from exc
    except yaml.YAMLError as exc:
        raise InvalidConfigurationError(f"Cannot parse config {path}: {exc}") from exc
    if not isinstance(data, dict):
        raise InvalidConfigurationError(f"Config must be a YAML mapping, got {type(data)}")
    return MatchConfig.from_dict(data)


def parse_classic(text: str, render: bool = True) -> MatchConfig:
    """
    Parse ``type depth type depth N`` (any whitespace) into a MatchConfig.

    The depth token is always present but only used by search agents.
    """
    tokens = text.split()
    if len(tokens) < 5:
        raise InvalidConfigurationError(
            f"Expected 'type depth type depth N', got {len(tokens)} token(s)"
        )
    try:
        type1, depth1, type2, depth2, num_games = (int(token) for token in tokens[:5])
    except ValueError:
        raise InvalidConfigurationError(f"Non-integer token in {' '.join(tokens[:5])!r}") from None
    return MatchConfig(
        agent1=AgentConfig(type=type1, depth=depth1),
        agent2=AgentConfig(type=type2, depth=depth2),
        num_games=num_games,
        render=render,
    )
