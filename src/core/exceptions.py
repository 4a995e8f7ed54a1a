"""
Custom exceptions used across layers.

Everything derives from GameError, so the outer layers can catch a single type.
"""


class GameError(Exception):
    """Top-level exception of the chess application."""


class NotationError(GameError):
    """A move string could not be turned into a move (unknown format, no legal source, ambiguous)."""


class PromotionError(GameError):
    """Finalizing a promotion that is not pending, or promoting into a piece type that is not allowed."""


class GameStateError(GameError):
    """The requested action does not fit the current state of the game."""


class InvalidRequestError(GameError):
    """Request data is malformed (raised by the request models)."""


class BoardInvariantError(GameError):
    """
    The board is in a state that correct play can never produce (e.g. a missing king).
    Not a normal error path: it points at a setup that skipped its checks.
    """
