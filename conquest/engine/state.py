"""
Game state representation.
All state is immutable from the outside; transitions return new state copies.
Includes JSON serialization so snapshots can be handed to external collaborators.
"""

import json
from copy import deepcopy
from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Iterable

from conquest.engine.errors import PlacementInvariantError


class Phase(str, Enum):
    """Coarse stage of the game. PLACING -> PLAYING is one-way."""
    PLACING = "placing"
    PLAYING = "playing"


def _int_or_none(value: Any) -> int | None:
    if value is None:
        return None
    try:
        return int(value)
    except (TypeError, ValueError):
        return None


@dataclass
class Player:
    """A participant with a count of reinforcements still to place."""
    id: int
    units_remaining: int = 0

    def has_units(self) -> bool:
        return self.units_remaining > 0

    def spend_unit(self) -> None:
        """Use up one reinforcement. Spending at zero is a programming error."""
        if self.units_remaining <= 0:
            raise PlacementInvariantError(
                f"Player {self.id} has no units left to place"
            )
        self.units_remaining -= 1

    def to_dict(self) -> dict[str, Any]:
        return {"id": self.id, "units_remaining": self.units_remaining}

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "Player":
        if not isinstance(data, dict) or data.get("id") is None:
            raise ValueError(f"Player entry needs an id, got {data!r}")
        units = _int_or_none(data.get("units_remaining")) or 0
        return cls(id=int(data["id"]), units_remaining=max(0, units))


@dataclass
class Territory:
    """A region of the board. owner is a player id, or None while unclaimed."""
    id: int
    name: str = ""
    owner: int | None = None

    def is_claimed(self) -> bool:
        return self.owner is not None

    def is_owned_by(self, player_id: int) -> bool:
        return self.owner == player_id

    def to_dict(self) -> dict[str, Any]:
        return {"id": self.id, "name": self.name, "owner": self.owner}

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "Territory":
        if not isinstance(data, dict) or data.get("id") is None:
            raise ValueError(f"Territory entry needs an id, got {data!r}")
        return cls(
            id=int(data["id"]),
            name=str(data.get("name") or ""),
            owner=_int_or_none(data.get("owner")),
        )


@dataclass
class Board:
    """Territories keyed by id. Never shared between states; transitions work on a copy."""
    territories: dict[int, Territory] = field(default_factory=dict)

    @classmethod
    def from_territories(cls, territories: Iterable[Territory]) -> "Board":
        """Build a board from territories, rejecting duplicate ids."""
        by_id: dict[int, Territory] = {}
        for territory in territories:
            if territory.id in by_id:
                raise ValueError(f"Duplicate territory id: {territory.id}")
            by_id[territory.id] = territory
        return cls(territories=by_id)

    @classmethod
    def with_ids(cls, territory_ids: Iterable[int]) -> "Board":
        """Unclaimed, unnamed territories for the given ids."""
        return cls.from_territories(Territory(id=tid) for tid in territory_ids)

    def __contains__(self, territory_id: object) -> bool:
        return territory_id in self.territories

    def __len__(self) -> int:
        return len(self.territories)

    def get(self, territory_id: int) -> Territory | None:
        return self.territories.get(territory_id)

    def ids(self) -> list[int]:
        return list(self.territories.keys())

    def owners(self) -> dict[int, int | None]:
        """territory_id -> owner (None when unclaimed)."""
        return {tid: t.owner for tid, t in self.territories.items()}

    def has_unclaimed(self) -> bool:
        return any(not t.is_claimed() for t in self.territories.values())

    def to_dict(self) -> dict[str, Any]:
        # JSON object keys are strings; store territories as a list to keep int ids.
        return {"territories": [t.to_dict() for t in self.territories.values()]}

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "Board":
        if not isinstance(data, dict):
            data = {}
        raw = data.get("territories") or []
        if not isinstance(raw, list):
            raw = []
        return cls.from_territories(
            Territory.from_dict(t) for t in raw if isinstance(t, dict)
        )


@dataclass
class GameState:
    """
    Snapshot of a game in progress.

    players is the turn order: players[0] is always the current player.
    cards is carried through untouched; nothing in the placement phase reads it.
    """
    board: Board
    phase: Phase
    players: list[Player]
    cards: list[Any] = field(default_factory=list)

    def copy(self) -> "GameState":
        """Return a deep copy of this game state."""
        return deepcopy(self)

    @property
    def current_player(self) -> Player:
        return self.players[0]

    def player_ids(self) -> list[int]:
        return [p.id for p in self.players]

    def find_player(self, player_id: int) -> Player | None:
        for player in self.players:
            if player.id == player_id:
                return player
        return None

    def has_player(self, player_id: int) -> bool:
        return self.find_player(player_id) is not None

    # ===== Serialization Methods =====

    def to_dict(self) -> dict[str, Any]:
        """Convert GameState to a dictionary for JSON serialization."""
        return {
            "board": self.board.to_dict(),
            "phase": self.phase.value,
            "players": [p.to_dict() for p in self.players],
            "current_player": self.current_player.id if self.players else None,
            "cards": list(self.cards),
        }

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "GameState":
        """Create GameState from a dictionary (missing keys fall back to a fresh placing state)."""
        board = data.get("board") or {}
        players = data.get("players") or []
        if not isinstance(players, list):
            players = []
        cards = data.get("cards")
        try:
            phase = Phase(data.get("phase") or Phase.PLACING.value)
        except ValueError:
            phase = Phase.PLACING
        return cls(
            board=Board.from_dict(board),
            phase=phase,
            players=[Player.from_dict(p) for p in players if isinstance(p, dict)],
            cards=list(cards) if isinstance(cards, list) else [],
        )

    def to_json(self, indent: int = 2) -> str:
        """Serialize GameState to a JSON string."""
        return json.dumps(self.to_dict(), indent=indent)

    @classmethod
    def from_json(cls, json_str: str) -> "GameState":
        """Deserialize GameState from a JSON string."""
        return cls.from_dict(json.loads(json_str))
