"""
core/data.py — TOML → ECS loader

Reads the scenario data files and spawns entities with the right
components.  The mapping from TOML keys to components lives here.

    data/cast.toml       one table per NPC
    data/clues.toml      one table per clue
    data/dialogue/*.toml one file per NPC (see logic.dialogue)

Usage:
    loader = DataLoader(world)
    loader.load_clues("data/clues.toml")
    npc_ids = loader.load_cast("data/cast.toml", "data/dialogue")  # {name: eid}

A cast entry::

    [platypus]
    name = "Mrs Platypus"
    sprite = "platypus.png"
    room = "Kitchen"
    tile = [3, 4]
    can_be_killer = true
    dialogue = "platypus.toml"
    facing = "south"          # optional
"""

from __future__ import annotations
import tomllib
from pathlib import Path

from core.constants import DIRECTION_DELTAS, SOUTH, STEP_TIME
from core.ecs import World
from core import tuning
from components import (
    TilePosition, Facing, Walker, Identity, Clue, ClueRegistry,
    Temperament, Suspect, Knowledge, Interaction, Brain, DialogueData,
)
from logic.dialogue import load_dialogue_file


class DataError(ValueError):
    """A data file is missing a field or has a bad value."""


class DataLoader:
    def __init__(self, world: World):
        self.world = world

    # ── Clues ────────────────────────────────────────────────────────

    def load_clues(self, path: str | Path) -> ClueRegistry:
        """Load clues into the world's ClueRegistry (created if absent)."""
        registry = self.world.res(ClueRegistry)
        if registry is None:
            registry = ClueRegistry()
            self.world.set_res(registry)

        for key, section in _read(path).items():
            if not isinstance(section, dict):
                continue
            registry.register(Clue(
                name=_str(section, "name", key),
                description=_str(section, "description", ""),
                weapon=bool(section.get("weapon", False)),
                red_herring=bool(section.get("red_herring", False)),
            ))
        print(f"[DATA] Loaded {len(registry)} clues from {path}")
        return registry

    # ── Cast ─────────────────────────────────────────────────────────

    def load_cast(self, path: str | Path,
                  dialogue_dir: str | Path = "data/dialogue") -> dict[str, int]:
        """Spawn one NPC entity per table.  Returns ``{name: eid}``."""
        dialogue_dir = Path(dialogue_dir)
        ids: dict[str, int] = {}
        for key, section in _read(path).items():
            if not isinstance(section, dict):
                continue
            name = _str(section, "name", key)
            if name in ids:
                raise DataError(f"{path}: NPC name {name!r} used twice")
            if "dialogue" not in section:
                raise DataError(f"{path}: {key} has no 'dialogue' file")
            dialogue = load_dialogue_file(dialogue_dir / section["dialogue"], name)
            ids[name] = self.spawn_npc(
                name,
                dialogue,
                room=_str(section, "room", ""),
                tile=_tile(section, key),
                can_be_killer=bool(section.get("can_be_killer", False)),
                sprite=_str(section, "sprite", ""),
                facing=_str(section, "facing", SOUTH),
            )
        print(f"[DATA] Spawned {len(ids)} NPCs from {path}")
        return ids

    def spawn_npc(self, name: str, dialogue: DialogueData, *, room: str = "",
                  tile: tuple[int, int] = (0, 0), can_be_killer: bool = False,
                  sprite: str = "", facing: str = SOUTH) -> int:
        """Attach the full NPC component set to a new entity."""
        if facing not in DIRECTION_DELTAS:
            raise DataError(f"{name}: unknown facing {facing!r}")
        w = self.world
        eid = w.spawn()
        w.add(eid, Identity(name=name, kind="npc", sprite=sprite))
        w.add(eid, TilePosition(x=tile[0], y=tile[1], room=room))
        w.add(eid, Facing(direction=facing))
        w.add(eid, Walker(step_time=float(tuning.get("wander", "step_time", STEP_TIME))))
        w.add(eid, Temperament(personality=dialogue.personality))
        w.add(eid, Suspect(can_be_killer=can_be_killer))
        w.add(eid, Knowledge())
        w.add(eid, Interaction())
        w.add(eid, dialogue)
        w.add(eid, Brain(kind="idle_wander"))
        w.room_add(eid, room)
        return eid


# ── helpers ──────────────────────────────────────────────────────────

def _read(path: str | Path) -> dict:
    path = Path(path)
    if not path.exists():
        raise DataError(f"data file {path} not found")
    with open(path, "rb") as f:
        return tomllib.load(f)


def _str(section: dict, key: str, default: str) -> str:
    value = section.get(key, default)
    if not isinstance(value, str):
        raise DataError(f"field {key!r} must be text, got {value!r}")
    return value


def _tile(section: dict, key: str) -> tuple[int, int]:
    raw = section.get("tile", [0, 0])
    try:
        x, y = raw
        return int(x), int(y)
    except (TypeError, ValueError):
        raise DataError(f"{key}: 'tile' must be [x, y], got {raw!r}") from None
