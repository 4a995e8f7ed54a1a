"""
Pytest will auto-discover / import this file called 'conftest.py'.
This file defines fixtures/variables required for testing multiple layers.
"""

from collections.abc import Iterator

import pytest
from loguru import logger

from src.chess.board import Board
from src.chess.game import Game


@pytest.fixture(autouse=True)
def quiet_logger() -> Iterator[None]:
    """Keep loguru's default stderr handler out of the test output."""
    logger.remove()
    yield
    logger.remove()


@pytest.fixture
def kings_only_board() -> Board:
    """
    A board with only kings on their canonical starting squares.
    Because making a move involves inferring if a king is under attack, moves cannot be played on a board without one of the kings.
    """
    return Board.from_placements(["Ke1", "ke8"])


@pytest.fixture
def castling_board() -> Board:
    """A board with only the Kings and the Rooks. Ready to perform any castling move (if allowed)."""
    return Board.from_placements(["Ke1", "Ra1", "Rh1", "ke8", "ra8", "rh8"])


@pytest.fixture
def new_game() -> Game:
    return Game.new_game()
