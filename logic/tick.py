"""logic/tick.py — System tick orchestration.

One call per frame advances the whole simulation in a fixed order:

    clock → brains (idle wander) → walkers → event bus → purge

Usage::

    from logic.tick import tick_systems, run_ticks
    tick_systems(world, dt)

Brains only run once a ``Scenario`` resource exists, because they
draw from the scenario's random source.
"""

from __future__ import annotations
from typing import TYPE_CHECKING

from components import GameClock
from core.events import EventBus
from logic.brains import run_brains
from logic.movement import walker_system
from logic.scenario import Scenario

if TYPE_CHECKING:
    from core.ecs import World


def tick_systems(world: "World", dt: float, *,
                 skip_brains: bool = False) -> None:
    """Run every per-frame system once, in pipeline order."""
    clock = world.res(GameClock)
    if clock:
        clock.time += dt
        clock.ticks += 1

    # Idle behaviour
    if not skip_brains:
        scenario = world.res(Scenario)
        if scenario is not None:
            run_brains(world, dt, scenario.rng)

    # In-flight steps
    walker_system(world, dt)

    # Event bus drain
    bus = world.res(EventBus)
    if bus:
        bus.drain()

    world.purge()


def run_ticks(world: "World", n: int, dt: float) -> None:
    """Headless helper: advance *n* frames of *dt* seconds."""
    for _ in range(n):
        tick_systems(world, dt)
