"""
Action definitions for the game.
Actions are immutable, deterministic instructions.
"""

from dataclasses import dataclass, field

PLACE_UNIT = "place_unit"


@dataclass(frozen=True)
class Action:
    """Base action class. All actions have a type, acting player, and payload."""
    type: str  # e.g., "place_unit"
    player: int  # player_id performing the action
    payload: dict = field(default_factory=dict)  # Action-specific data

    def to_dict(self) -> dict:
        return {"type": self.type, "player": self.player, "payload": dict(self.payload)}

    @classmethod
    def from_dict(cls, data: dict) -> "Action":
        return cls(
            type=str(data["type"]),
            player=int(data["player"]),
            payload=dict(data.get("payload") or {}),
        )


def place_unit(player: int, territory_id: int) -> Action:
    """
    Place one reinforcement on a territory.
    Claims the territory if it is unowned; the territory must not belong to another player.
    Example: place_unit(1, 7)
    """
    return Action(
        type=PLACE_UNIT,
        player=player,
        payload={"territory_id": territory_id},
    )
