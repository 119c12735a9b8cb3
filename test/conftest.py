"""Shared fixtures: a 3-player game whose dice are scripted."""

import pytest

from conquest.engine.game import Game
from conquest.engine.state import Board, Player


class ScriptedDice:
    """Dice source that returns pre-arranged rolls and fails once they run out."""

    def __init__(self, rolls):
        self.rolls = list(rolls)

    def __call__(self) -> int:
        if not self.rolls:
            raise RuntimeError("no dice rolls left")
        return self.rolls.pop(0)


@pytest.fixture
def scripted_dice():
    return ScriptedDice


@pytest.fixture
def players():
    return [Player(1), Player(2), Player(3)]


@pytest.fixture
def board():
    return Board.with_ids([0, 1, 2, 3, 4])


@pytest.fixture
def game(board, players):
    """Player 1 starts."""
    return Game(board, players, ScriptedDice([1]))
