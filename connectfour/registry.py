"""Central registry for agents."""

from __future__ import annotations

from typing import Any, Callable, Dict, Iterable, Optional, Union

from connectfour.errors import InvalidConfigurationError

AgentFactory = Callable[..., Any]

_AGENT_REGISTRY: Dict[str, AgentFactory] = {}

# Numeric agent types accepted by the classic stdin protocol.
AGENT_TYPE_CODES: Dict[int, str] = {
    0: "interactive",
    1: "random",
    2: "greedy",
    3: "negamax",
    4: "alphabeta",
}

# Agents whose constructor takes a search depth.
SEARCH_AGENTS = frozenset({"negamax", "alphabeta"})


def register_agent(agent_id: str, ctor: AgentFactory, code: Optional[int] = None) -> None:
    """
    Register an agent constructor, optionally under a numeric type code.

    Codes make the agent selectable from the classic stdin protocol; a code
    already taken by another agent is rejected.
    """
    if agent_id in _AGENT_REGISTRY:
        raise ValueError(f"Agent id '{agent_id}' is already registered.")
    if code is not None and code in AGENT_TYPE_CODES:
        raise ValueError(f"Type code {code} is already used by '{AGENT_TYPE_CODES[code]}'.")
    _AGENT_REGISTRY[agent_id] = ctor
    if code is not None:
        AGENT_TYPE_CODES[code] = agent_id


def make_agent(agent_id: str, **kwargs: Any) -> Any:
    return get_agent_entry(agent_id)(**kwargs)


def list_agents() -> Iterable[str]:
    return tuple(_AGENT_REGISTRY)


def get_agent_entry(agent_id: str) -> AgentFactory:
    try:
        return _AGENT_REGISTRY[agent_id]
    except KeyError:
        raise KeyError(f"No agent registered as '{agent_id}'") from None


def resolve_agent_id(agent_type: Union[int, str]) -> str:
    """
    Map a numeric type code or a registered name to an agent id.

    ``"3"`` and ``3`` both resolve to ``"negamax"``.
    """
    if isinstance(agent_type, bool):
        raise InvalidConfigurationError(f"Invalid agent type {agent_type!r}")
    if isinstance(agent_type, str):
        name = agent_type.strip().lower()
        if name.lstrip("-").isdigit():
            agent_type = int(name)
        elif name in _AGENT_REGISTRY:
            return name
        else:
            raise InvalidConfigurationError(f"Unable to initialize a player (invalid player type) {agent_type}")
    if isinstance(agent_type, int) and agent_type in AGENT_TYPE_CODES:
        return AGENT_TYPE_CODES[agent_type]
    raise InvalidConfigurationError(f"Unable to initialize a player (invalid player type) {agent_type}")
