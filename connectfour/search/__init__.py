"""Static evaluation and negamax search over the Connect Four grid."""

from .evaluator import INF, evaluate, is_terminal_score
from .minimax_policy import AlphaBetaPolicy, NegamaxPolicy, SearchConfig, center_out_order

__all__ = [
    "INF",
    "AlphaBetaPolicy",
    "NegamaxPolicy",
    "SearchConfig",
    "center_out_order",
    "evaluate",
    "is_terminal_score",
]
