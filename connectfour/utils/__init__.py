"""Utility modules."""

from .metrics import MetricsLogger
from .match import GameRecord, MatchResult, play_game, play_match

__all__ = ["MetricsLogger", "GameRecord", "MatchResult", "play_game", "play_match"]
