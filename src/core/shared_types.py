"""
Type definitions used across layers
"""

from enum import StrEnum


class MoveResult(StrEnum):
    """Outcome of a single move attempt."""

    VALID = "valid"
    INVALID = "invalid"
    PROMOTION_PENDING = "promotion pending"


class Status(StrEnum):
    """
    Where the game stands for the side to move.
    NOTE: The engine only says "no legal moves" / "in check"; the service combines the two into a status.
    """

    SETTING_UP = "setting up"
    IN_PROGRESS = "in progress"
    CHECK = "check"
    CHECKMATE = "checkmate"
    STALEMATE = "stalemate"
