"""core/bootstrap.py — Session bootstrap helpers.

Extracted from main.py to keep the entry point clean and readable.
Handles:
  - World creation with the session-wide resources
  - Room resolution (NBT on disk vs. fresh install from rooms.toml)
  - Cast + clue loading
  - Player creation
  - Scenario roll
"""

from __future__ import annotations
from pathlib import Path

from core import tuning
from core.data import DataError, DataLoader
from core.ecs import World
from core.events import EventBus
from core.rooms import RoomMap, load_rooms_from_disk, rooms_from_toml, save_rooms_to_disk
from components import GameClock, DevLog, Interrogator, Personality, Identity, TilePosition
from logic.scenario import Scenario, setup_scenario


# ── World ────────────────────────────────────────────────────────────

def create_world() -> World:
    """A fresh world with clock, event bus and dev log installed."""
    world = World()
    world.set_res(GameClock())
    world.set_res(EventBus())
    world.set_res(DevLog())
    return world


# ── Room resolution ─────────────────────────────────────────────────

def resolve_rooms(data_dir: Path, rooms_dir: Path, *,
                  export: bool = True) -> RoomMap:
    """Load rooms from NBT; on a fresh install build them from TOML.

    Strategy:
      1. If ``rooms_dir`` has .nbt files → use them.
      2. Otherwise → parse ``data/rooms.toml`` and (if *export*) write
         the NBT files so the next start takes path 1.
    """
    rooms = load_rooms_from_disk(rooms_dir)
    if rooms.rooms:
        return rooms

    rooms = rooms_from_toml(data_dir / "rooms.toml")
    print(f"[ROOMS] built {len(rooms.rooms)} rooms from {data_dir / 'rooms.toml'}")
    if export:
        save_rooms_to_disk(rooms, rooms_dir)
    return rooms


# ── Data loading ─────────────────────────────────────────────────────

def load_game_data(world: World, data_dir: Path) -> dict[str, int]:
    """Load clues and cast.  Returns ``{npc name: eid}``."""
    loader = DataLoader(world)
    loader.load_clues(data_dir / "clues.toml")
    ids = loader.load_cast(data_dir / "cast.toml", data_dir / "dialogue")
    rooms = world.res(RoomMap)
    if rooms is not None:
        check_cast_rooms(world, rooms)
    return ids


def check_cast_rooms(world: World, rooms: RoomMap) -> None:
    """Every NPC must start on a walkable tile of a known room."""
    for eid, ident, pos in world.query(Identity, TilePosition):
        if pos.room not in rooms:
            raise DataError(f"{ident.name}: unknown room {pos.room!r}")
        if not rooms.is_walkable_tile(pos.room, pos.x, pos.y):
            raise DataError(f"{ident.name}: tile ({pos.x}, {pos.y}) in "
                            f"{pos.room!r} is not walkable")


# ── Player ───────────────────────────────────────────────────────────

def create_player(world: World, personality: Personality | str | None = None) -> Interrogator:
    if personality is None:
        personality = tuning.get("player", "personality", "NEUTRAL")
    player = Interrogator(personality=Personality.parse(personality))
    world.set_res(player)
    return player


# ── Everything ───────────────────────────────────────────────────────

def bootstrap(data_dir: str | Path = "data", rooms_dir: str | Path = "rooms", *,
              seed: int | None = None,
              personality: Personality | str | None = None,
              export_rooms: bool = True) -> World:
    """Build a ready-to-play world: rooms, cast, clues, player, scenario."""
    data_dir = Path(data_dir)
    tuning.load(data_dir / "tuning.toml")

    world = create_world()
    world.set_res(resolve_rooms(data_dir, Path(rooms_dir), export=export_rooms))
    load_game_data(world, data_dir)
    create_player(world, personality)
    setup_scenario(world, seed)
    return world


def scenario_of(world: World) -> Scenario:
    scenario = world.res(Scenario)
    if scenario is None:
        raise LookupError("world has no scenario; call bootstrap() or setup_scenario()")
    return scenario
