"""Exceptions raised by the SeaBattle engine."""

from __future__ import annotations


class SeaBattleError(Exception):
    """Base class for engine failures that end the current game session."""


class InvalidConfigurationError(SeaBattleError, ValueError):
    """Board dimensions or ship count cannot produce a playable board."""


class OutOfBoundsError(SeaBattleError, ValueError):
    """A coordinate outside the board reached the engine."""


class GameOverError(SeaBattleError, RuntimeError):
    """A move was requested after a winner had been declared."""
