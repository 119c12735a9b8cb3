"""
Static board definitions.
Each setup lives under data/setups/<setup_id>/: territories.json and an optional manifest.json
(display_name). Only territory identity is loaded; adjacency belongs to the map layer.
"""

import json
from dataclasses import dataclass
from pathlib import Path

from conquest.engine.state import Board, Territory

DATA_DIR = Path(__file__).parent.parent / "data"
SETUPS_DIR = DATA_DIR / "setups"


def _default_setup_id() -> str:
    """Single place for default: conquest.config.DEFAULT_SETUP_ID."""
    from conquest.config import DEFAULT_SETUP_ID
    return DEFAULT_SETUP_ID


def _setup_dir(setup_id: str) -> Path:
    return SETUPS_DIR / setup_id


@dataclass
class TerritoryDefinition:
    """Defines immutable properties of a territory."""
    id: int
    display_name: str


def list_setups() -> list[dict]:
    """Return [{ id, display_name }, ...] for all setups (subdirs of data/setups/ with territories.json)."""
    out = []
    if not SETUPS_DIR.exists():
        return out
    for d in sorted(SETUPS_DIR.iterdir()):
        if not d.is_dir() or not (d / "territories.json").exists():
            continue
        setup_id = d.name
        manifest_path = d / "manifest.json"
        if manifest_path.exists():
            try:
                with open(manifest_path, "r") as f:
                    m = json.load(f)
                out.append({
                    "id": m.get("id", setup_id),
                    "display_name": m.get("display_name", setup_id),
                })
                continue
            except (json.JSONDecodeError, OSError):
                pass
        out.append({"id": setup_id, "display_name": setup_id})
    return out


def load_territory_definitions(
    data_dir: Path | str | None = None,
    setup_id: str | None = None,
) -> dict[int, TerritoryDefinition]:
    """
    Load territory definitions.

    Args:
        data_dir: Directory containing territories.json.
        setup_id: If set, use data/setups/<setup_id>/ (ignored if data_dir is set).
            Defaults to conquest.config.DEFAULT_SETUP_ID.

    Returns: territory_id -> TerritoryDefinition
    """
    if data_dir is not None:
        data_dir = Path(data_dir)
    else:
        data_dir = _setup_dir(setup_id or _default_setup_id())

    path = data_dir / "territories.json"
    if not path.exists():
        raise FileNotFoundError(f"territories.json not found in {data_dir}")
    with open(path, "r") as f:
        raw = json.load(f)
    if not isinstance(raw, list):
        raise ValueError(f"{path} must contain a list of territories")

    territories: dict[int, TerritoryDefinition] = {}
    for data in raw:
        tid = int(data["id"])
        if tid in territories:
            raise ValueError(f"Duplicate territory id {tid} in {path}")
        territories[tid] = TerritoryDefinition(
            id=tid,
            display_name=data.get("name") or str(tid),
        )
    return territories


def load_board(
    setup_id: str | None = None,
    data_dir: Path | str | None = None,
) -> Board:
    """Fresh board (every territory unclaimed) for a setup."""
    defs = load_territory_definitions(data_dir=data_dir, setup_id=setup_id)
    return Board.from_territories(
        Territory(id=d.id, name=d.display_name) for d in defs.values()
    )
