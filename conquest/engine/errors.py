"""
Error kinds for the placement phase.

User-facing rule failures are a closed set (PlacementError). WRONG_PHASE extends the
four placement failures: it rejects a placement once the game has moved on to
playing, so such a command never reaches the zero-unit guard.
The pure reducer raises them as RuleViolation; Game and the query layer report them as data.
A PlacementInvariantError means the engine itself is wrong and is never reported as a result.
"""

from enum import Enum


class PlacementError(str, Enum):
    PLAYER_NOT_FOUND = "player_not_found"
    TERRITORY_NOT_FOUND = "territory_not_found"
    NOT_PLAYERS_TURN = "not_players_turn"
    ILLEGAL_MOVE = "illegal_move"
    WRONG_PHASE = "wrong_phase"


class RuleViolation(ValueError):
    """An action broke a placement rule. State is left untouched."""

    def __init__(self, kind: PlacementError, message: str):
        super().__init__(message)
        self.kind = kind
        self.message = message


class PlacementInvariantError(RuntimeError):
    """Internal contract broken (e.g. spending a unit the player does not have)."""
