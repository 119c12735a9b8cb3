"""
Stateful placement-phase engine.

Game holds exactly one current GameState. Every accepted command computes a new
state with the pure reducer and swaps it in; a rejected command leaves the slot as it was.
There is no internal locking: callers that share a Game across threads must
serialize commands themselves (see conquest.api.main).
"""

from dataclasses import dataclass, field
from typing import Any

from conquest.engine import STARTING_UNITS
from conquest.engine.actions import Action, place_unit
from conquest.engine.errors import PlacementError, RuleViolation
from conquest.engine.events import GameEvent
from conquest.engine.reducer import apply_action
from conquest.engine.state import Board, GameState, Player
from conquest.engine.utils import Dice, initialize_game_state


@dataclass
class PlacementResult:
    """Outcome of a command: ok, or exactly one PlacementError kind."""
    ok: bool
    error: PlacementError | None = None
    message: str | None = None
    events: list[GameEvent] = field(default_factory=list)

    def to_dict(self) -> dict[str, Any]:
        return {
            "ok": self.ok,
            "error": self.error.value if self.error else None,
            "message": self.message,
            "events": [e.to_dict() for e in self.events],
        }


class Game:
    """Placement-phase engine for one game."""

    def __init__(
        self,
        board: Board,
        players: list[Player],
        dice: Dice,
        starting_units: int = STARTING_UNITS,
    ):
        self._dice = dice
        self._state, self.start_events = initialize_game_state(
            board, players, dice, starting_units
        )

    @property
    def state(self) -> GameState:
        """Snapshot of the current state. Changing it does not affect the game."""
        return self._state.copy()

    @property
    def phase(self):
        return self._state.phase

    @property
    def current_player_id(self) -> int:
        return self._state.current_player.id

    def apply(self, action: Action) -> PlacementResult:
        """Validate and apply an action; all-or-nothing."""
        try:
            new_state, events = apply_action(self._state, action)
        except RuleViolation as e:
            return PlacementResult(ok=False, error=e.kind, message=e.message)
        self._state = new_state
        return PlacementResult(ok=True, events=events)

    def place_unit(self, player_id: int, territory_id: int) -> PlacementResult:
        """Place one of the player's reinforcements on a territory."""
        return self.apply(place_unit(player_id, territory_id))
