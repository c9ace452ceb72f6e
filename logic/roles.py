"""logic/roles.py — Killer, victim and motive assignment.

Runs once per session, before anyone can be questioned::

    result = assign_roles(world, rng)            # victim sampled
    result = assign_roles(world, rng, victim=eid)

Order matters: the victim is marked first, then the killer is drawn
from the ``can_be_killer`` suspects other than the victim.  A draw
whose ``set_killer()`` is refused is dropped from the pool and the draw
repeats, so the loop ends after at most one attempt per candidate.

Motives are looked up by victim name in each suspect's dialogue data.
The killer must have one; other eligible suspects get theirs when
present (so a wrong accusation still has a plausible motive to show),
and any that are missing are reported on the result and the dev log.
"""

from __future__ import annotations
import random
from dataclasses import dataclass, field

from core.ecs import World
from core.events import RoleAssigned, emit
from components import Identity, Suspect, DialogueData
from components.dev_log import log_event
from components.social import MissingMotiveError


class RoleAssignmentError(RuntimeError):
    """No valid killer/victim pair could be assigned."""


@dataclass
class RoleAssignment:
    killer: int
    victim: int
    motive: str
    missing_motives: list[str] = field(default_factory=list)


# ── Roster ───────────────────────────────────────────────────────────

def roster(world: World) -> list[int]:
    """Every NPC entity that takes part in the mystery, in spawn order."""
    return [eid for eid, _, _ in world.query(Identity, Suspect)]


def find_killer(world: World) -> int | None:
    for eid, suspect in world.all_of(Suspect):
        if suspect.is_killer:
            return eid
    return None


def find_victim(world: World) -> int | None:
    for eid, suspect in world.all_of(Suspect):
        if suspect.is_victim:
            return eid
    return None


def _name(world: World, eid: int) -> str:
    ident = world.get(eid, Identity)
    return ident.name if ident else f"e{eid}"


# ── Single transitions ───────────────────────────────────────────────

def mark_victim(world: World, eid: int) -> bool:
    suspect = world.get(eid, Suspect)
    if suspect is None or not suspect.set_victim():
        return False
    print(f"[ROLES] {_name(world, eid)} is the victim")
    log_event(world, eid, "roles", "victim")
    emit(world, RoleAssigned(eid=eid, name=_name(world, eid), role="victim"))
    return True


def mark_killer(world: World, eid: int) -> bool:
    suspect = world.get(eid, Suspect)
    if suspect is None or not suspect.set_killer():
        return False
    print(f"[ROLES] {_name(world, eid)} is the killer")
    log_event(world, eid, "roles", "killer")
    emit(world, RoleAssigned(eid=eid, name=_name(world, eid), role="killer"))
    return True


def assign_motive(world: World, eid: int, victim_eid: int) -> str:
    """Give *eid* its motive for killing *victim_eid*.

    Raises ``MissingMotiveError`` when the dialogue data has no entry.
    """
    suspect = world.get(eid, Suspect)
    dialogue = world.get(eid, DialogueData)
    victim_name = _name(world, victim_eid)
    if suspect is None or dialogue is None:
        raise MissingMotiveError(_name(world, eid), victim_name)
    return suspect.set_motive(dialogue, victim_name)


# ── Full assignment ──────────────────────────────────────────────────

def assign_roles(world: World, rng: random.Random,
                 victim: int | None = None) -> RoleAssignment:
    """Pick the victim (unless given) and the killer, then set motives."""
    npcs = roster(world)
    if len(npcs) < 2:
        raise RoleAssignmentError(f"need at least two NPCs, have {len(npcs)}")
    if find_killer(world) is not None or find_victim(world) is not None:
        raise RoleAssignmentError("roles already assigned; call reset_roles() first")

    if victim is None:
        victim = rng.choice(npcs)
    elif victim not in npcs:
        raise RoleAssignmentError(f"victim e{victim} is not in the roster")

    if not mark_victim(world, victim):
        raise RoleAssignmentError(f"{_name(world, victim)} cannot be the victim")

    candidates = [eid for eid in npcs
                  if eid != victim and world.get(eid, Suspect).can_be_killer]
    killer = None
    while candidates:
        pick = rng.choice(candidates)
        if mark_killer(world, pick):
            killer = pick
            break
        candidates.remove(pick)

    if killer is None:
        reset_roles(world)
        raise RoleAssignmentError(
            f"no NPC other than {_name(world, victim)} can be the killer")

    try:
        motive = assign_motive(world, killer, victim)
    except MissingMotiveError:
        reset_roles(world)
        raise

    missing: list[str] = []
    for eid in npcs:
        if eid in (killer, victim) or not world.get(eid, Suspect).can_be_killer:
            continue
        try:
            assign_motive(world, eid, victim)
        except MissingMotiveError as exc:
            missing.append(_name(world, eid))
            log_event(world, eid, "error", str(exc))

    return RoleAssignment(killer=killer, victim=victim, motive=motive,
                          missing_motives=missing)


def reset_roles(world: World) -> None:
    """Clear every role and motive so the scenario can be re-rolled."""
    for _, suspect in world.all_of(Suspect):
        suspect.clear()
