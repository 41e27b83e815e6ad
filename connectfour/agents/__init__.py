"""Agent modules."""

from .base_agent import BaseAgent
from .interactive_agent import InteractiveAgent
from .random_agent import RandomAgent
from .greedy_agent import GreedyAgent
from .search_agent import AlphaBetaAgent, NegamaxAgent
from ..registry import list_agents, register_agent

if "interactive" not in list_agents():
    register_agent("interactive", InteractiveAgent)
if "random" not in list_agents():
    register_agent("random", RandomAgent)
if "greedy" not in list_agents():
    register_agent("greedy", GreedyAgent)
if "negamax" not in list_agents():
    register_agent("negamax", NegamaxAgent)
if "alphabeta" not in list_agents():
    register_agent("alphabeta", AlphaBetaAgent)

__all__ = [
    "BaseAgent",
    "InteractiveAgent",
    "RandomAgent",
    "GreedyAgent",
    "NegamaxAgent",
    "AlphaBetaAgent",
]
