"""core/rooms.py — Room tile maps and the walkability service.

Rooms are authored as ASCII layouts in ``data/rooms.toml`` and stored
as NBT under ``rooms/`` (see ``core.nbt``).  At runtime they live in a
``RoomMap`` world resource that answers the only questions the rest of
the game asks of a map:

    rooms.is_walkable_tile("Kitchen", 4, 2)
    rooms.get("Kitchen").name
    rooms.outdoor_name                    # the single outdoor area

Layout rows in the TOML file are written top row first, the way they
read on screen; they are flipped on import so ``tiles[y][x]`` has
y = 0 at the bottom, matching tile coordinates.
"""
from __future__ import annotations
import random
import tomllib
from dataclasses import dataclass, field
from pathlib import Path

from core.constants import TILE_FLOOR, TILE_LEGEND, TILE_WALL, WALKABLE_TILES
from core.nbt import load_room_nbt, save_room_nbt


ROOMS_DIR = Path("rooms")


class RoomError(ValueError):
    """A room layout is malformed or a room is unknown."""


@dataclass
class Room:
    name: str
    tiles: list[list[int]] = field(default_factory=list)   # tiles[y][x]
    outdoor: bool = False
    spawns: dict[str, tuple[int, int]] = field(default_factory=dict)

    @property
    def width(self) -> int:
        return len(self.tiles[0]) if self.tiles else 0

    @property
    def height(self) -> int:
        return len(self.tiles)

    def get_name(self) -> str:
        return self.name

    def is_walkable_tile(self, x: int, y: int) -> bool:
        if x < 0 or y < 0 or y >= self.height or x >= self.width:
            return False
        return self.tiles[y][x] in WALKABLE_TILES

    def walkable_tiles(self) -> list[tuple[int, int]]:
        return [(x, y)
                for y, row in enumerate(self.tiles)
                for x, t in enumerate(row)
                if t in WALKABLE_TILES]


@dataclass
class RoomMap:
    """World resource holding every room of the map."""
    rooms: dict[str, Room] = field(default_factory=dict)

    def add(self, room: Room) -> Room:
        self.rooms[room.name] = room
        return room

    def get(self, name: str) -> Room:
        room = self.rooms.get(name)
        if room is None:
            raise RoomError(f"unknown room {name!r}")
        return room

    def __contains__(self, name: object) -> bool:
        return name in self.rooms

    def names(self) -> list[str]:
        return list(self.rooms)

    def is_walkable_tile(self, room: str, x: int, y: int) -> bool:
        r = self.rooms.get(room)
        return r is not None and r.is_walkable_tile(x, y)

    @property
    def outdoor_name(self) -> str:
        """Name of the outdoor area, or "" when the map has none."""
        for room in self.rooms.values():
            if room.outdoor:
                return room.name
        return ""

    def random_walkable_spot(self, rng: random.Random,
                             room: str | None = None) -> tuple[str, int, int]:
        """Pick a random walkable tile, in *room* or anywhere."""
        candidates = [self.get(room)] if room else [
            r for r in self.rooms.values() if r.walkable_tiles()]
        if not candidates:
            raise RoomError("no walkable tiles on the map")
        chosen = rng.choice(candidates)
        spots = chosen.walkable_tiles()
        if not spots:
            raise RoomError(f"room {chosen.name!r} has no walkable tiles")
        x, y = rng.choice(spots)
        return chosen.name, x, y


# ── Loading ──────────────────────────────────────────────────────────

def parse_layout(name: str, rows: list[str]) -> list[list[int]]:
    """Turn ASCII *rows* (top row first) into ``tiles[y][x]``."""
    if not rows:
        raise RoomError(f"room {name!r} has an empty layout")
    width = max(len(r) for r in rows)
    tiles: list[list[int]] = []
    for row in reversed(rows):
        out = []
        for ch in row.ljust(width):
            if ch not in TILE_LEGEND:
                raise RoomError(f"room {name!r}: unknown tile character {ch!r}")
            out.append(TILE_LEGEND[ch])
        tiles.append(out)
    return tiles


def rooms_from_toml(path: str | Path) -> RoomMap:
    """Build a RoomMap from the ASCII layouts in a TOML file::

        [Kitchen]
        layout = ["#####", "#...#", "##D##"]
        spawns = { sink = [1, 1] }

        ["Outside Ron Cooke Hub"]
        outdoor = true
        layout = [",,,,,", ",,,,,"]
    """
    with open(path, "rb") as f:
        data = tomllib.load(f)

    rooms = RoomMap()
    for name, section in data.items():
        if not isinstance(section, dict):
            continue
        tiles = parse_layout(name, list(section.get("layout", [])))
        spawns = {k: (int(v[0]), int(v[1]))
                  for k, v in section.get("spawns", {}).items()}
        rooms.add(Room(name=name, tiles=tiles,
                       outdoor=bool(section.get("outdoor", False)),
                       spawns=spawns))
    _check_outdoor(rooms)
    return rooms


def load_rooms_from_disk(dir_path: str | Path | None = None) -> RoomMap:
    """Load every ``*.nbt`` room in *dir_path* (default ``rooms/``)."""
    dir_path = Path(dir_path) if dir_path is not None else ROOMS_DIR
    rooms = RoomMap()
    if not dir_path.exists():
        return rooms
    for p in sorted(dir_path.glob("*.nbt")):
        obj = load_room_nbt(p)
        rooms.add(Room(name=obj["name"], tiles=obj["tiles"],
                       outdoor=obj["outdoor"], spawns=obj["spawns"]))
    _check_outdoor(rooms)
    print(f"[ROOMS] loaded {len(rooms.rooms)} rooms from {dir_path}")
    return rooms


def save_rooms_to_disk(rooms: RoomMap, dir_path: str | Path | None = None) -> list[Path]:
    """Export every room of *rooms* as NBT."""
    dir_path = Path(dir_path) if dir_path is not None else ROOMS_DIR
    paths = [save_room_nbt(r.name, r.tiles, outdoor=r.outdoor,
                           spawns=r.spawns, dir_path=dir_path)
             for r in rooms.rooms.values()]
    print(f"[ROOMS] saved {len(paths)} rooms to {dir_path}")
    return paths


def blank_room(name: str, width: int, height: int, *, outdoor: bool = False,
               fill: int = TILE_FLOOR) -> Room:
    """Open rectangular room with a wall border (handy for tests)."""
    tiles = [[fill] * width for _ in range(height)]
    for y in range(height):
        for x in range(width):
            if x in (0, width - 1) or y in (0, height - 1):
                tiles[y][x] = TILE_WALL
    return Room(name=name, tiles=tiles, outdoor=outdoor)


def _check_outdoor(rooms: RoomMap) -> None:
    outdoor = [r.name for r in rooms.rooms.values() if r.outdoor]
    if len(outdoor) > 1:
        raise RoomError(f"more than one outdoor room: {', '.join(outdoor)}")
