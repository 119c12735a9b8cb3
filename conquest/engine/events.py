"""
Game events for UI hooks and logging.
Events describe what happened during action processing.
"""

from dataclasses import dataclass
from typing import Any


@dataclass
class GameEvent:
    """Base event class. All events have a type and payload."""
    type: str
    payload: dict[str, Any]

    def to_dict(self) -> dict[str, Any]:
        return {"type": self.type, "payload": self.payload}

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "GameEvent":
        return cls(type=data["type"], payload=data["payload"])


# ===== Event Type Constants =====

# Setup events
GAME_STARTED = "game_started"

# Placement events
UNIT_PLACED = "unit_placed"
TERRITORY_CLAIMED = "territory_claimed"

# Phase/Turn events
TURN_PASSED = "turn_passed"
PHASE_CHANGED = "phase_changed"


# ===== Event Factory Functions =====

def game_started(dice_roll: int, turn_order: list[int], starting_units: int) -> GameEvent:
    """Emitted once, after the starting player has been decided."""
    return GameEvent(GAME_STARTED, {
        "dice_roll": dice_roll,
        "turn_order": turn_order,  # player_ids, first is the starting player
        "starting_units": starting_units,
    })


def unit_placed(player: int, territory: int, units_remaining: int) -> GameEvent:
    return GameEvent(UNIT_PLACED, {
        "player": player,
        "territory": territory,
        "units_remaining": units_remaining,  # after this placement
    })


def territory_claimed(territory: int, player: int) -> GameEvent:
    return GameEvent(TERRITORY_CLAIMED, {
        "territory": territory,
        "player": player,
    })


def turn_passed(from_player: int, to_player: int) -> GameEvent:
    return GameEvent(TURN_PASSED, {
        "from_player": from_player,
        "to_player": to_player,
    })


def phase_changed(old_phase: str, new_phase: str) -> GameEvent:
    return GameEvent(PHASE_CHANGED, {
        "old_phase": old_phase,
        "new_phase": new_phase,
    })
