"""logic/brains — Brain registry and runner.

Public API
----------
``register_brain(name, fn)``     — add a brain to the registry
``get_brain(name)``              — look up a brain by name
``run_brains(world, dt, rng)``   — tick every active brain once

Brain modules register themselves at import time via ``register_brain``.
A brain function has the signature::

    fn(world, eid, brain, dt, ctx) -> None

where ``ctx`` is a ``BrainContext`` carrying the session random
source, the room map and the current game time.  Brains never touch
the ``random`` module's global generator.
"""

from __future__ import annotations
import random
from dataclasses import dataclass
from typing import Callable

from core.ecs import World
from core.rooms import RoomMap
from components import Brain, TilePosition, GameClock


@dataclass
class BrainContext:
    rng: random.Random
    rooms: RoomMap
    game_time: float = 0.0


_registry: dict[str, Callable] = {}


def register_brain(name: str, fn: Callable) -> None:
    _registry[name] = fn


def get_brain(name: str) -> Callable | None:
    return _registry.get(name)


def registered_names() -> list[str]:
    return sorted(_registry)


def run_brains(world: World, dt: float, rng: random.Random) -> int:
    """Execute every active brain that has a position.  Returns count run.

    An unknown brain kind is a data error and raises ``KeyError``.
    """
    rooms = world.res(RoomMap)
    if rooms is None:
        return 0
    clock = world.res(GameClock)
    ctx = BrainContext(rng=rng, rooms=rooms,
                       game_time=clock.time if clock else 0.0)

    ran = 0
    for eid, brain in world.all_of(Brain):
        if not brain.active or not world.has(eid, TilePosition):
            continue
        fn = get_brain(brain.kind)
        if fn is None:
            raise KeyError(f"no brain registered as {brain.kind!r}")
        fn(world, eid, brain, dt, ctx)
        ran += 1
    return ran


# Import brain modules to trigger their register_brain() calls.
# These imports MUST come after the registry functions are defined.
from logic.brains import wander as _wander                       # noqa: F401, E402
