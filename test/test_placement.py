"""
Placement phase: placing units, rule violations, turn passing and the switch to playing.
"""

import pytest

from conquest.engine import reducer
from conquest.engine.actions import Action, place_unit
from conquest.engine.errors import PlacementError, PlacementInvariantError
from conquest.engine.events import (
    PHASE_CHANGED,
    TERRITORY_CLAIMED,
    TURN_PASSED,
    UNIT_PLACED,
)
from conquest.engine.game import Game
from conquest.engine.queries import get_placeable_territories
from conquest.engine.reducer import apply_action
from conquest.engine.state import Board, GameState, Phase, Player


def units_of(game, player_id):
    return game.state.find_player(player_id).units_remaining


def test_player1_places_a_unit(game):
    result = game.place_unit(1, 0)

    assert result.ok
    assert result.error is None
    state = game.state
    assert state.phase == Phase.PLACING
    assert state.current_player.id == 2
    assert state.board.get(0).owner == 1
    assert units_of(game, 1) == 34
    assert units_of(game, 2) == 35


def test_successful_placement_events(game):
    result = game.place_unit(1, 0)
    assert [e.type for e in result.events] == [TERRITORY_CLAIMED, UNIT_PLACED, TURN_PASSED]
    assert result.events[1].payload == {"player": 1, "territory": 0, "units_remaining": 34}
    assert result.events[2].payload == {"from_player": 1, "to_player": 2}


def test_turn_passes_through_all_players_and_wraps(game):
    assert game.place_unit(1, 0).ok
    assert game.place_unit(2, 1).ok
    assert game.current_player_id == 3
    assert game.place_unit(3, 2).ok

    assert game.current_player_id == 1
    assert game.state.phase == Phase.PLACING


def test_player2_tries_to_place_when_not_in_turn(game):
    before = game.state

    result = game.place_unit(2, 0)

    assert not result.ok
    assert result.error == PlacementError.NOT_PLAYERS_TURN
    assert result.events == []
    assert game.state == before


def test_unknown_player(game):
    before = game.state
    result = game.place_unit(4, 0)
    assert result.error == PlacementError.PLAYER_NOT_FOUND
    assert game.state == before


def test_unknown_territory(game):
    before = game.state
    result = game.place_unit(1, 99)
    assert result.error == PlacementError.TERRITORY_NOT_FOUND
    assert game.state == before


def test_unknown_player_reported_before_unknown_territory(game):
    assert game.place_unit(4, 99).error == PlacementError.PLAYER_NOT_FOUND


def test_not_found_reported_before_not_your_turn(game):
    # Player 2 exists but is not current; the bad territory wins
    assert game.place_unit(2, 99).error == PlacementError.TERRITORY_NOT_FOUND


def test_claiming_territory_owned_by_other_player(game):
    game.place_unit(1, 1)
    before = game.state

    result = game.place_unit(2, 1)

    assert result.error == PlacementError.ILLEGAL_MOVE
    assert game.state == before
    assert game.state.board.get(1).owner == 1
    assert game.current_player_id == 2
    assert units_of(game, 2) == 35


def test_placing_again_on_own_territory_is_allowed(game):
    game.place_unit(1, 1)
    game.place_unit(2, 2)
    game.place_unit(3, 3)

    result = game.place_unit(1, 1)

    assert result.ok
    assert [e.type for e in result.events] == [UNIT_PLACED, TURN_PASSED]
    assert game.state.board.get(1).owner == 1
    assert units_of(game, 1) == 33


def test_stricter_rule_rejects_own_territory(game, monkeypatch):
    monkeypatch.setattr(reducer, "ALLOW_REINFORCING_OWN_TERRITORY", False)
    game.place_unit(1, 1)
    game.place_unit(2, 2)
    game.place_unit(3, 3)

    result = game.place_unit(1, 1)

    assert result.error == PlacementError.ILLEGAL_MOVE
    assert units_of(game, 1) == 34


def test_stricter_rule_allows_own_territory_once_board_is_claimed(scripted_dice, monkeypatch):
    monkeypatch.setattr(reducer, "ALLOW_REINFORCING_OWN_TERRITORY", False)
    game = Game(Board.with_ids([1, 2]), [Player(1), Player(2)], scripted_dice([1]), starting_units=2)
    assert game.place_unit(1, 1).ok
    assert game.place_unit(2, 2).ok

    assert get_placeable_territories(game.state, 1) == [1]
    assert game.place_unit(1, 1).ok
    assert game.place_unit(2, 2).ok
    assert game.state.phase == Phase.PLAYING


def test_placement_phase_ends_when_no_player_has_units_left(scripted_dice):
    board = Board.with_ids([1, 2, 3])
    game = Game(board, [Player(1), Player(2), Player(3)], scripted_dice([1]), starting_units=1)

    first = game.place_unit(1, 1)
    assert game.state.board.get(1).owner == 1
    assert game.current_player_id == 2
    assert PHASE_CHANGED not in [e.type for e in first.events]

    game.place_unit(2, 2)
    assert game.state.board.get(2).owner == 2
    assert game.current_player_id == 3
    assert game.state.phase == Phase.PLACING

    last = game.place_unit(3, 3)
    state = game.state
    assert state.board.owners() == {1: 1, 2: 2, 3: 3}
    assert state.current_player.id == 1
    assert state.phase == Phase.PLAYING
    assert last.events[-1].type == PHASE_CHANGED
    assert last.events[-1].payload == {"old_phase": "placing", "new_phase": "playing"}


def test_no_placement_once_playing(scripted_dice):
    game = Game(Board.with_ids([1, 2]), [Player(1), Player(2)], scripted_dice([1]), starting_units=1)
    game.place_unit(1, 1)
    game.place_unit(2, 2)
    before = game.state

    result = game.place_unit(1, 1)

    assert result.error == PlacementError.WRONG_PHASE
    assert game.state == before
    # Existence is still checked first
    assert game.place_unit(9, 1).error == PlacementError.PLAYER_NOT_FOUND


def test_state_queries_are_stable(game):
    game.place_unit(1, 0)
    assert game.state == game.state
    assert game.state is not game.state


def test_mutating_a_snapshot_does_not_touch_the_game(game):
    snapshot = game.state
    snapshot.board.get(0).owner = 3
    snapshot.players[0].units_remaining = 0
    snapshot.players.reverse()

    state = game.state
    assert state.board.get(0).owner is None
    assert state.current_player.id == 1
    assert state.current_player.units_remaining == 35


def test_apply_action_leaves_input_state_untouched(game):
    state = game.state
    new_state, _ = apply_action(state, place_unit(1, 0))

    assert state.board.get(0).owner is None
    assert state.current_player.id == 1
    assert new_state.board.get(0).owner == 1
    assert new_state.current_player.id == 2


def test_spending_a_unit_at_zero_is_an_invariant_error():
    player = Player(1, units_remaining=0)
    with pytest.raises(PlacementInvariantError):
        player.spend_unit()
    assert player.units_remaining == 0


def test_reducer_guards_against_placing_with_no_units():
    state = GameState(
        board=Board.with_ids([1]),
        phase=Phase.PLACING,
        players=[Player(1, units_remaining=0), Player(2, units_remaining=3)],
    )
    before = state.copy()

    with pytest.raises(PlacementInvariantError):
        apply_action(state, place_unit(1, 1))
    assert state == before


def test_unknown_action_type_is_rejected(game):
    with pytest.raises(ValueError, match="Unknown action type"):
        apply_action(game.state, Action(type="attack", player=1))
