"""
Main game reducer.
Applies actions to state, enforcing placement rules and producing new state.
Returns (new_state, events) where events describe what happened.
"""

from copy import deepcopy

from conquest.engine.state import GameState, Board, Phase, Player
from conquest.engine.actions import Action, PLACE_UNIT
from conquest.engine.errors import PlacementError, RuleViolation
from conquest.engine.events import (
    GameEvent,
    game_started,
    unit_placed,
    territory_claimed,
    turn_passed,
    phase_changed,
)


# Placing another unit on a territory you already own is accepted.
# Set to False to require claiming an unclaimed territory while any remain;
# once the board is fully claimed, players reinforce their own territories.
ALLOW_REINFORCING_OWN_TERRITORY = True

# Phase rules: which action types are allowed in which phases
PHASE_ALLOWED_ACTIONS = {
    Phase.PLACING: [PLACE_UNIT],
    Phase.PLAYING: [],
}


def decide_turn_order(players: list[Player], roll: int) -> list[Player]:
    """
    Rotate players so the one at (1-indexed) position `roll` goes first.
    Relative order of the others is kept.
    """
    if not players:
        raise ValueError("At least one player is required")
    if not 1 <= roll <= len(players):
        raise ValueError(
            f"Dice roll {roll} does not select a player (expected 1..{len(players)})"
        )
    start = roll - 1
    return list(players[start:]) + list(players[:start])


def _next_turn_order(players: list[Player]) -> list[Player]:
    """Current player moves to the back; everyone else moves up one place."""
    return players[1:] + players[:1]


def start_game(
    board: Board,
    players: list[Player],
    roll: int,
    starting_units: int,
) -> tuple[GameState, list[GameEvent]]:
    """
    Build the first state of a game from an already-rolled dice value.

    Every player gets the same flat allowance. The caller's board and players are not modified.

    Returns:
        Tuple of (initial_state, events)
    """
    if not players:
        raise ValueError("At least one player is required")
    ids = [p.id for p in players]
    if len(set(ids)) != len(ids):
        raise ValueError(f"Player ids must be unique, got {ids}")
    if starting_units < 1:
        raise ValueError(f"starting_units must be at least 1, got {starting_units}")

    granted = [Player(id=p.id, units_remaining=starting_units) for p in players]
    turn_order = decide_turn_order(granted, roll)

    state = GameState(
        board=deepcopy(board),
        phase=Phase.PLACING,
        players=turn_order,
        cards=[],
    )
    events = [game_started(roll, state.player_ids(), starting_units)]
    return state, events


def check_action(state: GameState, action: Action) -> None:
    """
    Raise RuleViolation if the action may not be applied to this state.
    Never mutates state.
    """
    if action.type == PLACE_UNIT:
        _check_place_unit(state, action)
    else:
        raise ValueError(f"Unknown action type: {action.type}")


def _check_place_unit(state: GameState, action: Action) -> None:
    """
    Checks run in a fixed order: an unknown id always reports "not found"
    rather than "not your turn".
    """
    player_id = action.player
    territory_id = action.payload.get("territory_id")

    if not state.has_player(player_id):
        raise RuleViolation(
            PlacementError.PLAYER_NOT_FOUND,
            f"Player {player_id} is not in this game",
        )

    territory = state.board.get(territory_id)
    if territory is None:
        raise RuleViolation(
            PlacementError.TERRITORY_NOT_FOUND,
            f"Territory {territory_id} is not on the board",
        )

    if state.current_player.id != player_id:
        raise RuleViolation(
            PlacementError.NOT_PLAYERS_TURN,
            f"Not player {player_id}'s turn. Current player: {state.current_player.id}",
        )

    if action.type not in PHASE_ALLOWED_ACTIONS.get(state.phase, []):
        raise RuleViolation(
            PlacementError.WRONG_PHASE,
            f"Action '{action.type}' is not allowed in phase '{state.phase.value}'",
        )

    if territory.is_claimed() and not territory.is_owned_by(player_id):
        raise RuleViolation(
            PlacementError.ILLEGAL_MOVE,
            f"Territory {territory_id} is owned by player {territory.owner}",
        )

    if (
        territory.is_owned_by(player_id)
        and not ALLOW_REINFORCING_OWN_TERRITORY
        and state.board.has_unclaimed()
    ):
        raise RuleViolation(
            PlacementError.ILLEGAL_MOVE,
            f"Territory {territory_id} is already claimed by player {player_id}; unclaimed territories remain",
        )


def apply_action(state: GameState, action: Action) -> tuple[GameState, list[GameEvent]]:
    """
    Apply a single action to the current state, returning new state and events.

    Validation happens against the given state before anything is copied, so a
    rejected action has no effect at all.

    Raises:
        RuleViolation: the action breaks a placement rule
        PlacementInvariantError: the engine reached an impossible state

    Returns:
        Tuple of (new_state, events) where events describe what happened
    """
    check_action(state, action)

    new_state = state.copy()
    events: list[GameEvent] = []

    if action.type == PLACE_UNIT:
        new_state, evts = _handle_place_unit(new_state, action)
        events.extend(evts)

    return new_state, events


def _handle_place_unit(state: GameState, action: Action) -> tuple[GameState, list[GameEvent]]:
    """
    Place one unit for the current player.
    - Claims the territory if it is unowned
    - Spends one of the player's remaining units
    - Passes the turn to the next player
    - Moves to the playing phase once nobody has units left
    """
    events: list[GameEvent] = []
    player = state.current_player
    territory = state.board.get(action.payload["territory_id"])

    if not territory.is_claimed():
        territory.owner = player.id
        events.append(territory_claimed(territory.id, player.id))

    player.spend_unit()
    events.append(unit_placed(player.id, territory.id, player.units_remaining))

    state.players = _next_turn_order(state.players)
    events.append(turn_passed(player.id, state.current_player.id))

    if not any(p.has_units() for p in state.players):
        old_phase = state.phase
        state.phase = Phase.PLAYING
        events.append(phase_changed(old_phase.value, state.phase.value))

    return state, events


def replay_from_actions(
    initial_state: GameState,
    actions: list[Action],
) -> tuple[GameState, list[GameEvent]]:
    """
    Replay a series of actions from an initial state.
    Event sourcing: state is derived from action log.

    Returns:
        Tuple of (final_state, all_events) after all actions applied
    """
    current_state = initial_state.copy()
    all_events: list[GameEvent] = []

    for action in actions:
        current_state, events = apply_action(current_state, action)
        all_events.extend(events)

    return current_state, all_events
