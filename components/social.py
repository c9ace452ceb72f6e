"""components.social — Personality, suspect roles, and dialogue data.

Everything an NPC needs to take part in an interrogation lives here:

    Temperament   which archetype the NPC responds best to
    Suspect       killer / victim eligibility, roles and motive
    Knowledge     clues the NPC knows about / has been asked about
    Interaction   whether the player ignored or falsely accused them
    DialogueData  the NPC's imported response set and motive table
"""

from __future__ import annotations
from dataclasses import dataclass, field
from enum import Enum
from types import MappingProxyType
from typing import Mapping

from components.clues import Clue


# ── Errors ───────────────────────────────────────────────────────────

class UnknownPersonalityError(ValueError):
    """A data file named a personality outside the closed set."""

    def __init__(self, token: object):
        self.token = token
        known = ", ".join(p.name for p in Personality)
        super().__init__(f"unknown personality {token!r} (expected one of {known})")


class MissingMotiveError(KeyError):
    """An NPC has no motive entry for the given victim."""

    def __init__(self, npc: str, victim: str):
        self.npc = npc
        self.victim = victim
        super().__init__(f"{npc or 'NPC'} has no motive for victim {victim!r}")

    def __str__(self) -> str:
        return self.args[0]


class MissingDialogueError(KeyError):
    """A response category (or clue entry) is missing from dialogue data."""

    def __init__(self, npc: str, category: str, clue: str | None = None):
        self.npc = npc
        self.category = category
        self.clue = clue
        where = f"{category!r}" if clue is None else f"{category!r} / {clue!r}"
        super().__init__(f"{npc or 'NPC'} has no dialogue for {where}")

    def __str__(self) -> str:
        return self.args[0]


# ── Personality ──────────────────────────────────────────────────────

class Personality(Enum):
    """Dialogue archetypes shared by NPCs and the player.

    Also used as the player's *questioning style*.
    """
    AGGRESSIVE = "aggressive"
    NEUTRAL = "neutral"
    NICE = "nice"

    @classmethod
    def parse(cls, token: object) -> Personality:
        """Parse a data-file token (member name, any case)."""
        if isinstance(token, Personality):
            return token
        if isinstance(token, str):
            member = cls.__members__.get(token.strip().upper())
            if member is not None:
                return member
        raise UnknownPersonalityError(token)


@dataclass
class Temperament:
    """The NPC's own personality.  Fixed once dialogue is imported."""
    personality: Personality = Personality.NEUTRAL


# ── Dialogue data ────────────────────────────────────────────────────

@dataclass(frozen=True)
class DialogueData:
    """Imported, read-only response set for one NPC.

    ``categories`` maps a category key to either

    * a tuple of templates shared by every clue, or
    * a mapping ``clue name → tuple of templates`` with a
      ``"default"`` entry.

    ``motives`` maps victim name → motive text.
    """
    owner: str = ""
    personality: Personality = Personality.NEUTRAL
    categories: Mapping[str, object] = field(default_factory=lambda: MappingProxyType({}))
    motives: Mapping[str, str] = field(default_factory=lambda: MappingProxyType({}))

    def has_category(self, category: str) -> bool:
        return category in self.categories

    def templates(self, category: str, clue: Clue | None = None) -> list[str]:
        """Candidate lines for *category*, narrowed to *clue* if keyed."""
        entry = self.categories.get(category)
        if entry is None:
            raise MissingDialogueError(self.owner, category)
        if isinstance(entry, tuple):
            return list(entry)
        if clue is not None and clue.name in entry:
            return list(entry[clue.name])
        if "default" in entry:
            return list(entry["default"])
        raise MissingDialogueError(self.owner, category,
                                   clue.name if clue is not None else None)

    def motive_for(self, victim_name: str) -> str:
        try:
            return self.motives[victim_name]
        except KeyError:
            raise MissingMotiveError(self.owner, victim_name) from None


# ── Roles ────────────────────────────────────────────────────────────

@dataclass
class Suspect:
    """Killer / victim state for one NPC.

    ``can_be_killer`` comes from the cast file and never changes.
    ``is_killer`` / ``is_victim`` are set at most once per session by
    the role assignment and are mutually exclusive.
    """
    can_be_killer: bool = False
    is_killer: bool = False
    is_victim: bool = False
    motive: str = ""

    def set_victim(self) -> bool:
        """Mark as the victim.  Fails (no change) if already the killer."""
        if self.is_killer:
            return False
        self.is_victim = True
        return True

    def set_killer(self) -> bool:
        """Mark as the killer.

        Fails (no change) if already the victim or not eligible.
        """
        if self.is_victim or not self.can_be_killer:
            return False
        self.is_killer = True
        return True

    def set_motive(self, dialogue: DialogueData, victim_name: str) -> str:
        """Look up and store the motive for *victim_name*.

        Raises ``MissingMotiveError`` (leaving ``motive`` untouched)
        when the dialogue data has no entry for that victim.
        """
        self.motive = dialogue.motive_for(victim_name)
        return self.motive

    def get_motive(self) -> str:
        return self.motive

    def clear(self) -> None:
        """Drop the session roles so the scenario can be re-rolled."""
        self.is_killer = False
        self.is_victim = False
        self.motive = ""


# ── Knowledge & interaction history ──────────────────────────────────

@dataclass
class Knowledge:
    """Clues relevant to this NPC, and the ones already discussed."""
    associated: set[Clue] = field(default_factory=set)
    already_asked: set[Clue] = field(default_factory=set)

    def knows(self, clue: Clue) -> bool:
        return clue in self.associated

    def was_asked(self, clue: Clue) -> bool:
        return clue in self.already_asked

    def mark_asked(self, clue: Clue) -> None:
        self.already_asked.add(clue)


@dataclass
class Interaction:
    """How the player has treated this NPC so far."""
    ignored: bool = False
    accused: bool = False
