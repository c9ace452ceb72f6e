"""logic/interrogation.py — What an NPC says when questioned about a clue.

The heart of the game.  ``resolve()`` is a pure function of the NPC
being questioned, the clue, the questioning style, the player's own
personality and an explicit ``DialogueContext`` (roster, killer,
question counter, random source).  It never looks anything up in the
world, so it can be driven directly from tests.

Three branches, checked in this order:

    PERFECT   style == NPC personality == player personality
              "responses" line.  The killer names a random other NPC;
              anyone else names the killer and says where they are.
    PARTIAL   style matches the NPC *or* the player
              "responses" line.  The killer, or anyone asked about a
              red herring, names a decoy that is neither themselves nor
              the killer; anyone else names the killer.
    NONE      "noneResponses" line, untouched.  The clue is ignored.

PERFECT and PARTIAL answers count towards the player's question total.
The counter only moves once the line is fully built, so an error part
way through (no decoy available, missing dialogue) leaves the session
exactly as it was.

``question()``, ``ignore()`` and ``accuse()`` are the world-facing
wrappers the presentation layer calls.  Questioning the victim, or an
NPC who has been wrongly accused, is REFUSED and never counted.
"""

from __future__ import annotations
import random
from dataclasses import dataclass
from enum import Enum

from core import tuning
from core.constants import (
    NPC_PLACEHOLDER, OUTDOOR_HINT, ROOM_HINT,
    CATEGORY_RESPONSES, CATEGORY_NONE, CATEGORY_IGNORED, CATEGORY_ACCUSED,
)
from core.ecs import World
from core.events import QuestionAsked, AccusationMade, emit
from components import (
    Identity, Temperament, Suspect, Knowledge, Interaction, DialogueData,
    TilePosition, Clue, ClueRegistry, Interrogator, Personality,
)
from components.dev_log import log_event
from logic.dialogue import choose_line, substitute
from logic.roles import find_killer, roster
from logic.scenario import Scenario, ScenarioError


class RosterTooSmallError(RuntimeError):
    """No NPC is left to name as a decoy."""


class MatchBranch(Enum):
    PERFECT = "perfect"
    PARTIAL = "partial"
    NONE = "none"
    REFUSED = "refused"


class AccusationResult(Enum):
    CORRECT = "correct"
    NOT_ENOUGH_EVIDENCE = "not_enough_evidence"
    WRONG = "wrong"


@dataclass(frozen=True)
class NpcView:
    """The parts of an NPC that decide what it says."""
    name: str
    personality: Personality
    is_killer: bool
    dialogue: DialogueData


@dataclass
class DialogueContext:
    """Session state one resolution reads (and the counter it bumps).

    ``roster`` lists the names that may be mentioned as a decoy.
    """
    roster: list[str]
    killer: str
    killer_room: str
    outdoor_room: str
    interrogator: Interrogator
    rng: random.Random
    placeholder: str = NPC_PLACEHOLDER
    outdoor_hint: str = OUTDOOR_HINT
    room_hint: str = ROOM_HINT


@dataclass(frozen=True)
class Response:
    text: str
    branch: MatchBranch
    named: str | None = None       # NPC name put into the line, if any
    counted: bool = False          # did it bump the question counter


# ── Pure resolution ──────────────────────────────────────────────────

def match_branch(npc: Personality, style: Personality,
                 player: Personality) -> MatchBranch:
    if style == npc and player == style:
        return MatchBranch.PERFECT
    if style == npc or style == player:
        return MatchBranch.PARTIAL
    return MatchBranch.NONE


def choose_decoy(names: list[str], exclude: set[str],
                 rng: random.Random) -> str:
    """Draw one name from *names* that is not in *exclude*.

    Names are compared by value.  Raises ``RosterTooSmallError`` when
    nothing is left to draw from.
    """
    candidates = [n for n in names if n not in exclude]
    if not candidates:
        raise RosterTooSmallError(
            f"no decoy available: roster {names!r} minus {sorted(exclude)!r}")
    return rng.choice(candidates)


def location_hint(ctx: DialogueContext) -> str:
    if ctx.outdoor_room and ctx.killer_room == ctx.outdoor_room:
        return ctx.outdoor_hint
    return ctx.room_hint.format(room=ctx.killer_room)


def resolve(speaker: NpcView, clue: Clue, style: Personality,
            player: Personality, ctx: DialogueContext) -> Response:
    """Resolve one question into a line of dialogue."""
    branch = match_branch(speaker.personality, style, player)

    if branch is MatchBranch.NONE:
        line = choose_line(speaker.dialogue.templates(CATEGORY_NONE), ctx.rng)
        return Response(text=line, branch=branch)

    template = choose_line(
        speaker.dialogue.templates(CATEGORY_RESPONSES, clue), ctx.rng)

    if branch is MatchBranch.PERFECT:
        if speaker.is_killer:
            named = choose_decoy(ctx.roster, {speaker.name}, ctx.rng)
            text = substitute(template, named, ctx.placeholder)
        else:
            named = ctx.killer
            text = substitute(template, named, ctx.placeholder) + location_hint(ctx)
    else:
        if speaker.is_killer or clue.is_red_herring():
            named = choose_decoy(ctx.roster, {speaker.name, ctx.killer}, ctx.rng)
        else:
            named = ctx.killer
        text = substitute(template, named, ctx.placeholder)

    ctx.interrogator.add_question()
    return Response(text=text, branch=branch, named=named, counted=True)


# ── World wrappers ───────────────────────────────────────────────────

def npc_view(world: World, eid: int) -> NpcView:
    ident = world.get(eid, Identity)
    dialogue = world.get(eid, DialogueData)
    if ident is None or dialogue is None:
        raise ValueError(f"e{eid} is not an NPC")
    temperament = world.get(eid, Temperament)
    suspect = world.get(eid, Suspect)
    return NpcView(
        name=ident.name,
        personality=temperament.personality if temperament else dialogue.personality,
        is_killer=bool(suspect and suspect.is_killer),
        dialogue=dialogue,
    )


def roster_names(world: World) -> list[str]:
    """Names that can come up in conversation: everyone but the victim."""
    names = []
    for eid in roster(world):
        if world.get(eid, Suspect).is_victim:
            continue
        names.append(world.get(eid, Identity).name)
    return names


def build_context(world: World) -> DialogueContext:
    scenario = world.res(Scenario)
    interrogator = world.res(Interrogator)
    killer = find_killer(world)
    if scenario is None or interrogator is None or killer is None:
        raise ScenarioError("interrogation needs a set-up scenario (see setup_scenario)")
    pos = world.get(killer, TilePosition)
    return DialogueContext(
        roster=roster_names(world),
        killer=world.get(killer, Identity).name,
        killer_room=pos.room if pos else "",
        outdoor_room=scenario.outdoor_room,
        interrogator=interrogator,
        rng=scenario.rng,
        placeholder=tuning.get("dialogue", "placeholder", NPC_PLACEHOLDER),
        outdoor_hint=tuning.get("dialogue", "outdoor_hint", OUTDOOR_HINT),
        room_hint=tuning.get("dialogue", "room_hint", ROOM_HINT),
    )


def question(world: World, npc_eid: int, clue: Clue,
             style: Personality) -> Response:
    """The player asks *npc_eid* about *clue* in the given *style*."""
    speaker = npc_view(world, npc_eid)
    ctx = build_context(world)
    interaction = world.get(npc_eid, Interaction)

    if world.get(npc_eid, Identity).kind != "npc":
        # The victim has nothing more to say.
        response = Response(text="", branch=MatchBranch.REFUSED)
    elif interaction is not None and interaction.accused:
        line = _fallback_line(speaker.dialogue, CATEGORY_ACCUSED, ctx.rng)
        response = Response(text=line, branch=MatchBranch.REFUSED)
    else:
        response = resolve(speaker, clue, style, ctx.interrogator.personality, ctx)
        knowledge = world.get(npc_eid, Knowledge)
        if knowledge is not None:
            knowledge.mark_asked(clue)

    log_event(world, npc_eid, "dialogue", response.branch.value,
              clue=clue.name, style=style.name, named=response.named)
    emit(world, QuestionAsked(npc_eid=npc_eid, clue=clue.name, style=style.name,
                              branch=response.branch.value,
                              counted=response.counted))
    return response


def ignore(world: World, npc_eid: int) -> str:
    """The player walks away from *npc_eid* mid-conversation."""
    speaker = npc_view(world, npc_eid)
    scenario = world.res(Scenario)
    if scenario is None:
        raise ScenarioError("ignore() needs a set-up scenario")
    interaction = world.get(npc_eid, Interaction)
    if interaction is not None:
        interaction.ignored = True
    log_event(world, npc_eid, "dialogue", "ignored")
    return _fallback_line(speaker.dialogue, CATEGORY_IGNORED, scenario.rng)


def accuse(world: World, npc_eid: int) -> AccusationResult:
    """Accuse *npc_eid* of the murder.

    Right person *and* the murder weapon in hand wins.  The right
    person without the weapon is not enough.  Anyone else is offended
    and refuses to answer questions from then on.
    """
    suspect = world.get(npc_eid, Suspect)
    if suspect is None:
        raise ValueError(f"e{npc_eid} is not a suspect")
    interrogator = world.res(Interrogator)
    registry = world.res(ClueRegistry)
    weapon = registry.murder_weapon() if registry is not None else None

    if suspect.is_killer:
        has_weapon = weapon is None or (interrogator is not None and interrogator.has(weapon))
        result = (AccusationResult.CORRECT if has_weapon
                  else AccusationResult.NOT_ENOUGH_EVIDENCE)
    else:
        result = AccusationResult.WRONG
        interaction = world.get(npc_eid, Interaction)
        if interaction is not None:
            interaction.accused = True

    log_event(world, npc_eid, "dialogue", f"accused: {result.value}")
    emit(world, AccusationMade(npc_eid=npc_eid, outcome=result.value))
    return result


def _fallback_line(dialogue: DialogueData, category: str,
                   rng: random.Random) -> str:
    if not dialogue.has_category(category):
        category = CATEGORY_NONE
    return choose_line(dialogue.templates(category), rng)
