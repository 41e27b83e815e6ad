"""Connect Four game-tree search engine and match runner."""

__version__ = "0.1.0"
