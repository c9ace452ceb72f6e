"""components.spatial — Tile positions, facing and in-flight moves.

All coordinates are whole tiles, relative to the bottom-left corner
of the room the entity stands in.
"""

from __future__ import annotations
from dataclasses import dataclass

from core.constants import SOUTH, STANDING, STEP_TIME


@dataclass
class TilePosition:
    x: int = 0
    y: int = 0
    room: str = ""


@dataclass
class Facing:
    """Which way an entity faces: 'north', 'south', 'east' or 'west'."""
    direction: str = SOUTH


@dataclass
class Walker:
    """One-tile movement state.

    ``state`` is ``"standing"`` or ``"walking"``.  While walking,
    ``target`` is the destination tile and ``progress`` counts up to
    ``step_time`` seconds; the position only changes when the step
    completes.  ``can_move`` freezes the entity (e.g. the victim or
    an NPC in conversation).
    """
    state: str = STANDING
    can_move: bool = True
    target: tuple[int, int] | None = None
    progress: float = 0.0
    step_time: float = STEP_TIME
