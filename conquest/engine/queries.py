"""
Query functions for UI integration.
These functions help callers understand what actions are available
without mutating game state.
"""

from dataclasses import dataclass
from typing import Any

from conquest.engine.state import GameState, Player, Territory
from conquest.engine.actions import Action, place_unit
from conquest.engine.errors import PlacementError, RuleViolation
from conquest.engine.reducer import check_action, PHASE_ALLOWED_ACTIONS


@dataclass
class ValidationResult:
    """Result of action validation."""
    valid: bool
    error: PlacementError | None = None
    message: str | None = None

    def to_dict(self) -> dict[str, Any]:
        return {
            "valid": self.valid,
            "error": self.error.value if self.error else None,
            "message": self.message,
        }


# ===== Action Validation =====

def validate_action(state: GameState, action: Action) -> ValidationResult:
    """
    Validate an action without applying it.
    Uses the same checks, in the same order, as apply_action.
    """
    try:
        check_action(state, action)
    except RuleViolation as e:
        return ValidationResult(False, e.kind, e.message)
    return ValidationResult(True)


# ===== Player Queries =====

def get_current_player(state: GameState) -> Player:
    return state.current_player


def get_player(state: GameState, player_id: int) -> Player | None:
    return state.find_player(player_id)


def get_units_remaining(state: GameState) -> dict[int, int]:
    """player_id -> reinforcements still to place."""
    return {p.id: p.units_remaining for p in state.players}


def get_available_action_types(state: GameState) -> list[str]:
    """Get action types available in the current phase."""
    return list(PHASE_ALLOWED_ACTIONS.get(state.phase, []))


# ===== Territory Queries =====

def get_unclaimed_territories(state: GameState) -> list[Territory]:
    return [t for t in state.board.territories.values() if not t.is_claimed()]


def get_territories_owned_by(state: GameState, player_id: int) -> list[Territory]:
    return [t for t in state.board.territories.values() if t.is_owned_by(player_id)]


def get_placeable_territories(state: GameState, player_id: int) -> list[int]:
    """
    Territory ids where this player could place a unit right now.
    Empty when it is not the player's turn or placing is over.
    """
    return [
        tid for tid in state.board.ids()
        if validate_action(state, place_unit(player_id, tid)).valid
    ]


def get_game_summary(state: GameState) -> dict[str, Any]:
    """
    Get a summary of the current game state for UI display.
    """
    territory_counts: dict[int, int] = {p.id: 0 for p in state.players}
    for territory in state.board.territories.values():
        if territory.owner is not None:
            territory_counts[territory.owner] = territory_counts.get(territory.owner, 0) + 1

    return {
        "phase": state.phase.value,
        "current_player": state.current_player.id if state.players else None,
        "turn_order": state.player_ids(),
        "units_remaining": get_units_remaining(state),
        "territory_counts": territory_counts,
        "unclaimed_territories": len(get_unclaimed_territories(state)),
        "available_actions": get_available_action_types(state),
    }
