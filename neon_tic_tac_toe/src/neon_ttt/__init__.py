"""Neon Tic Tac Toe: local single-page tic-tac-toe with a persisted player profile."""

__version__ = "0.1.0"
