"""A chain-reaction atom board game with classic and challenge modes."""

__version__ = "0.1.0"