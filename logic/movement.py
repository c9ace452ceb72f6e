"""logic/movement.py — One-tile NPC steps and the random idle move.

NPCs move a whole tile at a time.  ``move()`` starts a step if the
destination is walkable (otherwise the NPC just turns to face it);
``walker_system()`` advances steps in flight and commits the new tile
when the step completes.

``random_move()`` is the idle behaviour: on any tick a standing NPC
has a small chance of trying a step, mostly carrying on the way it
faces, otherwise turning to one of the four compass directions.
"""

from __future__ import annotations
import random

from core import tuning
from core.constants import (
    DIRECTION_DELTAS, NORTH, SOUTH, EAST, WEST,
    STANDING, WALKING, MOVE_CHANCE, CONTINUE_WEIGHT,
)
from core.ecs import World
from core.events import NpcMoved, emit
from core.rooms import RoomMap
from components import TilePosition, Facing, Walker
from components.dev_log import log_event


TURN_WEIGHT = 0.12    # per compass direction; west takes whatever is left


def move(world: World, eid: int, direction: str, rooms: RoomMap) -> bool:
    """Try to start a one-tile step.  Returns True if the NPC set off."""
    walker = world.get(eid, Walker)
    pos = world.get(eid, TilePosition)
    facing = world.get(eid, Facing)
    if walker is None or pos is None:
        return False
    if walker.state != STANDING or not walker.can_move:
        return False

    dx, dy = DIRECTION_DELTAS[direction]
    if facing is not None:
        facing.direction = direction
    tx, ty = pos.x + dx, pos.y + dy
    if not rooms.is_walkable_tile(pos.room, tx, ty):
        return False

    walker.state = WALKING
    walker.target = (tx, ty)
    walker.progress = 0.0
    return True


def pick_direction(rng: random.Random, current: str) -> str:
    """Weighted draw: keep *current* facing or turn N/S/E/W."""
    keep = float(tuning.get("wander", "continue_weight", CONTINUE_WEIGHT))
    turn = float(tuning.get("wander", "turn_weight", TURN_WEIGHT))
    roll = rng.random()
    if roll < keep:
        return current
    if roll < keep + turn:
        return NORTH
    if roll < keep + 2 * turn:
        return SOUTH
    if roll < keep + 3 * turn:
        return EAST
    return WEST


def random_move(world: World, eid: int, rng: random.Random,
                rooms: RoomMap) -> bool:
    """Maybe take an idle step.  Returns True if a step started."""
    walker = world.get(eid, Walker)
    if walker is None or walker.state == WALKING:
        return False

    chance = float(tuning.get("wander", "move_chance", MOVE_CHANCE))
    if rng.random() > chance:
        return False

    facing = world.get(eid, Facing)
    current = facing.direction if facing is not None else SOUTH
    return move(world, eid, pick_direction(rng, current), rooms)


def walker_system(world: World, dt: float) -> int:
    """Advance in-flight steps.  Returns how many completed this tick."""
    done = 0
    for eid, pos, walker in world.query(TilePosition, Walker):
        if walker.state != WALKING or walker.target is None:
            continue
        walker.progress += dt
        if walker.progress < walker.step_time:
            continue
        pos.x, pos.y = walker.target
        walker.state = STANDING
        walker.target = None
        walker.progress = 0.0
        done += 1
        log_event(world, eid, "move", f"-> ({pos.x}, {pos.y})")
        emit(world, NpcMoved(eid=eid, x=pos.x, y=pos.y, room=pos.room))
    return done
