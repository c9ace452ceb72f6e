"""logic/brains/wander.py — Idle wander brain.

Stands around and, now and then, takes a single step.  The step
itself (chance, direction weights, walkability) lives in
``logic.movement.random_move``; this brain only counts how often the
NPC has set off so the dev log can show restless characters.
"""

from __future__ import annotations
from core.ecs import World
from components import Brain
from logic.brains import BrainContext, register_brain
from logic.movement import random_move


def _idle_wander_brain(world: World, eid: int, brain: Brain, dt: float,
                       ctx: BrainContext) -> None:
    if random_move(world, eid, ctx.rng, ctx.rooms):
        brain.state["steps"] = brain.state.get("steps", 0) + 1
        brain.state["last_step"] = ctx.game_time


register_brain("idle_wander", _idle_wander_brain)
