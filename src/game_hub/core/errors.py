"""
Recoverable engine errors.

Both derive from the exception types the engines historically raised
(ValueError for bad moves, RuntimeError for finished games), so callers that
catch those keep working.
"""


class GameError(Exception):
    """Base class for expected, recoverable engine rejections."""


class IllegalMove(GameError, ValueError):
    """Move is not legal for the active player in the current state."""


class AlreadyFinished(GameError, RuntimeError):
    """The game has a terminal outcome; no further queries or moves."""
