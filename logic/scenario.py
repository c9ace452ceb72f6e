"""logic/scenario.py — One session's mystery: who, with what, and where.

``setup_scenario(world, seed)`` rolls a new mystery on a world that
already holds the cast, the clues and the rooms:

    1. victim, then killer, then motives        (logic.roles)
    2. one weapon-eligible clue becomes the murder weapon
    3. every clue is dropped on a random walkable tile
    4. each NPC is told about a few clues (the killer always knows
       about the weapon)
    5. the victim stops wandering and leaves the conversation roster

If a step after 1 fails, the roles are cleared again before the error
propagates, so the world can be set up again with another seed.

All of it draws from a single ``random.Random`` seeded from *seed*,
kept on the ``Scenario`` resource for the rest of the session so that
idle movement and dialogue stay reproducible too.
"""

from __future__ import annotations
import random
from dataclasses import dataclass, field

from core import tuning
from core.constants import OUTDOOR_ROOM
from core.ecs import World
from core.rooms import RoomMap
from components import (
    Identity, Knowledge, Brain, Walker, Clue, ClueRegistry, Interrogator,
)
from components.dev_log import log_event
from logic.roles import RoleAssignment, assign_roles, reset_roles, roster


class ScenarioError(RuntimeError):
    """The world cannot host (or has not yet got) a mystery."""


@dataclass
class Scenario:
    """World resource describing the current mystery."""
    seed: int
    rng: random.Random = field(repr=False, default_factory=random.Random)
    killer: int = 0
    victim: int = 0
    motive: str = ""
    murder_weapon: str = ""
    outdoor_room: str = OUTDOOR_ROOM


def choose_murder_weapon(registry: ClueRegistry, rng: random.Random) -> Clue:
    """Flag one weapon-eligible clue as the murder weapon.

    The flag is one-way, so a registry that already has a murder
    weapon keeps it.
    """
    existing = registry.murder_weapon()
    if existing is not None:
        return existing
    weapons = registry.weapons()
    if not weapons:
        raise ScenarioError("no clue is marked as a possible weapon")
    weapon = rng.choice(weapons)
    weapon.set_murder_weapon()
    return weapon


def scatter_clues(registry: ClueRegistry, rooms: RoomMap,
                  rng: random.Random) -> None:
    """Put every clue on a random walkable tile somewhere on the map."""
    for clue in registry:
        room, x, y = rooms.random_walkable_spot(rng)
        clue.move_to(x, y, room)


def associate_clues(world: World, registry: ClueRegistry, rng: random.Random,
                    per_npc: int, killer: int | None = None) -> None:
    """Give each living NPC *per_npc* random clues to know about."""
    clues = list(registry)
    weapon = registry.murder_weapon()
    for eid, ident, knowledge in world.query(Identity, Knowledge):
        if ident.kind != "npc":
            continue
        picked = rng.sample(clues, min(per_npc, len(clues)))
        knowledge.associated.update(picked)
        if eid == killer and weapon is not None:
            knowledge.associated.add(weapon)


def retire_victim(world: World, victim: int) -> None:
    """The victim stays where they fell and is no longer an NPC."""
    ident = world.get(victim, Identity)
    if ident is not None:
        ident.kind = "victim"
    brain = world.get(victim, Brain)
    if brain is not None:
        brain.active = False
    walker = world.get(victim, Walker)
    if walker is not None:
        walker.can_move = False


def setup_scenario(world: World, seed: int | None = None, *,
                   victim: int | None = None,
                   clues_per_npc: int | None = None) -> Scenario:
    """Roll a new mystery on *world* and store it as a resource."""
    if seed is None:
        seed = tuning.get("scenario", "seed", None)
    if seed is None:
        seed = random.SystemRandom().randrange(2 ** 31)
    if clues_per_npc is None:
        clues_per_npc = int(tuning.get("scenario", "clues_per_npc", 2))
    if not roster(world):
        raise ScenarioError("no NPCs loaded")

    rng = random.Random(seed)
    roles: RoleAssignment = assign_roles(world, rng, victim)

    registry = world.res(ClueRegistry)
    weapon_name = ""
    try:
        if registry is not None and len(registry):
            weapon_name = choose_murder_weapon(registry, rng).name
            rooms = world.res(RoomMap)
            if rooms is not None and rooms.rooms:
                scatter_clues(registry, rooms, rng)
            associate_clues(world, registry, rng, clues_per_npc, roles.killer)
    except Exception as exc:
        reset_roles(world)
        print(f"[SCENARIO] seed {seed} failed, roles cleared: {exc}")
        raise

    retire_victim(world, roles.victim)

    rooms = world.res(RoomMap)
    outdoor = rooms.outdoor_name if rooms is not None else ""
    if not outdoor:
        outdoor = tuning.get("rooms", "outdoor", OUTDOOR_ROOM)

    if world.res(Interrogator) is None:
        world.set_res(Interrogator())

    scenario = Scenario(seed=seed, rng=rng, killer=roles.killer,
                        victim=roles.victim, motive=roles.motive,
                        murder_weapon=weapon_name, outdoor_room=outdoor)
    world.set_res(scenario)
    log_event(world, roles.killer, "scenario", "scenario ready",
              seed=seed, weapon=weapon_name,
              missing_motives=roles.missing_motives)
    print(f"[SCENARIO] seed {seed}: {len(roster(world))} NPCs, "
          f"{len(registry) if registry is not None else 0} clues")
    return scenario
