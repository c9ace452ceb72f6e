"""core/constants.py — Shared constants used across the codebase.

Centralises magic numbers so there's exactly one place to change them.

Unit System
-----------
Everything spatial is measured in whole **tiles**.  Tile coordinates
are map-relative with (0, 0) at the bottom-left of a room, x growing
east and y growing north.  NPCs only ever stand on a tile; a move is a
one-tile step that takes ``STEP_TIME`` seconds to complete.

Time is measured in real seconds and advances once per tick.
"""

# ── Tile IDs  (must match data/rooms.toml legend and *.nbt files) ───
TILE_VOID   = 0
TILE_FLOOR  = 1
TILE_GRASS  = 2
TILE_CARPET = 3
TILE_WALL   = 6
TILE_FURNITURE = 7
TILE_DOOR   = 9

# Tiles an NPC may stand on
WALKABLE_TILES = frozenset({TILE_FLOOR, TILE_GRASS, TILE_CARPET, TILE_DOOR})

# ASCII legend used by data/rooms.toml layouts
TILE_LEGEND = {
    " ": TILE_VOID,
    ".": TILE_FLOOR,
    ",": TILE_GRASS,
    "~": TILE_CARPET,
    "#": TILE_WALL,
    "T": TILE_FURNITURE,
    "D": TILE_DOOR,
}

# ── Directions  (dx, dy) ────────────────────────────────────────────
NORTH = "north"
SOUTH = "south"
EAST  = "east"
WEST  = "west"

DIRECTION_DELTAS = {
    NORTH: (0, 1),
    SOUTH: (0, -1),
    EAST:  (1, 0),
    WEST:  (-1, 0),
}

# ── Walker states ───────────────────────────────────────────────────
STANDING = "standing"
WALKING  = "walking"

# ── Idle wander defaults (overridable in data/tuning.toml) ──────────
MOVE_CHANCE     = 0.01   # chance per tick that a standing NPC tries to move
CONTINUE_WEIGHT = 0.5    # share of moves that keep the current facing
STEP_TIME       = 0.25   # s to cross one tile

# ── Dialogue ────────────────────────────────────────────────────────
NPC_PLACEHOLDER = "%NPC"
OUTDOOR_HINT = " Last I saw them, they were outside."
ROOM_HINT = " Last I saw them, they were in the {room}."
OUTDOOR_ROOM = "Outside Ron Cooke Hub"

# Response categories in the per-NPC dialogue files
CATEGORY_RESPONSES = "responses"
CATEGORY_NONE = "noneResponses"
CATEGORY_IGNORED = "ignored"
CATEGORY_ACCUSED = "accused"

# ── Simulation ──────────────────────────────────────────────────────
TICK_RATE = 60               # ticks per second
DT = 1.0 / TICK_RATE
