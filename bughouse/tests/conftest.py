import pytest

from bughouse.board import Board
from bughouse.game import Game


@pytest.fixture
def board() -> Board:
    return Board()


@pytest.fixture
def game() -> Game:
    return Game()
