"""
Utility functions for the game engine.
"""

import random
from collections import Counter
from typing import Callable

from conquest.engine.state import Board, GameState, Player
from conquest.engine.events import GameEvent
from conquest.engine.reducer import start_game
from conquest.engine import DICE_SIDES, STARTING_UNITS

Dice = Callable[[], int]


def make_dice(sides: int = DICE_SIDES, rng: random.Random | None = None) -> Dice:
    """
    Return a dice source: a callable producing one roll in 1..sides per call.

    To pick a starting player use one face per player (sides=len(players)).
    """
    if sides < 1:
        raise ValueError(f"Dice needs at least one side, got {sides}")
    source = rng or random.Random()
    return lambda: source.randint(1, sides)


def initialize_game_state(
    board: Board,
    players: list[Player],
    dice: Dice,
    starting_units: int = STARTING_UNITS,
) -> tuple[GameState, list[GameEvent]]:
    """
    Create the initial game state: grant reinforcements and decide who starts.

    The dice source is called exactly once. Anything it raises propagates
    unchanged; a faulty dice source is fatal to game creation.

    Args:
        board: Territories in play (copied, never modified)
        players: Participants in seating order, ids must be unique
        dice: Callable returning the roll that selects the starting player (1-indexed)
        starting_units: Flat reinforcement allowance per player

    Returns:
        Tuple of (initial_state, events)
    """
    if not players:
        raise ValueError("At least one player is required")
    roll = dice()
    return start_game(board, players, roll, starting_units)


def print_game_state(state: GameState) -> None:
    """Pretty-print the current game state."""
    print(f"\n{'='*60}")
    current = state.current_player.id if state.players else "-"
    print(f"Phase: {state.phase.value} | Current player: {current}")
    print(f"{'='*60}")

    for territory_id in sorted(state.board.ids()):
        territory = state.board.get(territory_id)
        label = territory.name or f"Territory {territory_id}"
        owner_str = territory.owner if territory.owner is not None else "unclaimed"
        print(f"  {label} (Owner: {owner_str})")

    owned = Counter(t.owner for t in state.board.territories.values() if t.owner is not None)
    print(f"\n{'Players':.<40}")
    for player in state.players:
        print(f"  {player.id}: {player.units_remaining} units to place, "
              f"{owned.get(player.id, 0)} territories")
    print()
