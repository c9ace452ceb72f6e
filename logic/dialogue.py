"""logic/dialogue.py — Dialogue data import and line selection.

Each NPC has one dialogue file.  It names the NPC's personality, the
lines they use for each response category, and a motive for every
victim they could have killed::

    personality = "NICE"
    noneResponses = ["Sorry, I can't help with that."]
    ignored = ["Fine, be like that."]

    [responses]
    default = "Have you asked %NPC about it?"
    "Broken Glass" = ["%NPC was by the window all night.",
                      "I'd ask %NPC about that glass."]

    [motives]
    "Lord Ashworth" = "He cut me out of the will."

A category is either a list of lines (any clue) or a table keyed by
clue name, which must include a ``default``.  A bare string counts as a
one-line list.  Lines may contain ``%NPC``, replaced at resolution
time with another NPC's name.

Parsing is strict.  An unknown personality, an empty category, a
non-string line, a keyed table with no ``default``, or a file without
``responses`` and ``noneResponses`` fails here, at import, never
during an interrogation.
"""

from __future__ import annotations
import random
import tomllib
from pathlib import Path
from types import MappingProxyType

from components.social import DialogueData, Personality
from core.constants import CATEGORY_NONE, CATEGORY_RESPONSES


class DialogueFormatError(ValueError):
    """A dialogue file does not have the expected shape."""


_RESERVED = {"personality", "motives"}
_REQUIRED = (CATEGORY_RESPONSES, CATEGORY_NONE)


def parse_dialogue(raw: dict, owner: str = "") -> DialogueData:
    """Build an immutable ``DialogueData`` from a parsed TOML/JSON dict."""
    if "personality" not in raw:
        raise DialogueFormatError(f"{owner or 'dialogue'}: missing 'personality'")
    personality = Personality.parse(raw["personality"])

    categories: dict[str, object] = {}
    for key, value in raw.items():
        if key in _RESERVED:
            continue
        categories[key] = _parse_category(owner, key, value)
    for key in _REQUIRED:
        if key not in categories:
            raise DialogueFormatError(f"{owner or 'dialogue'}: missing {key!r}")

    motives_raw = raw.get("motives", {})
    if not isinstance(motives_raw, dict):
        raise DialogueFormatError(f"{owner}: 'motives' must be a table")
    motives = {}
    for victim, text in motives_raw.items():
        if not isinstance(text, str):
            raise DialogueFormatError(f"{owner}: motive for {victim!r} must be text")
        motives[victim] = text

    return DialogueData(
        owner=owner,
        personality=personality,
        categories=MappingProxyType(categories),
        motives=MappingProxyType(motives),
    )


def load_dialogue_file(path: str | Path, owner: str = "") -> DialogueData:
    path = Path(path)
    with open(path, "rb") as f:
        raw = tomllib.load(f)
    return parse_dialogue(raw, owner or path.stem)


def choose_line(templates: list[str], rng: random.Random) -> str:
    """Pick one template.  A single candidate is returned without a draw."""
    if not templates:
        raise DialogueFormatError("no candidate lines to choose from")
    if len(templates) == 1:
        return templates[0]
    return rng.choice(templates)


def substitute(template: str, name: str, placeholder: str) -> str:
    return template.replace(placeholder, name)


# ── helpers ──────────────────────────────────────────────────────────

def _parse_lines(owner: str, where: str, value) -> tuple[str, ...]:
    if isinstance(value, str):
        value = [value]
    if not isinstance(value, list) or not value:
        raise DialogueFormatError(f"{owner}: {where} needs at least one line")
    for line in value:
        if not isinstance(line, str):
            raise DialogueFormatError(f"{owner}: {where} has a non-text line {line!r}")
    return tuple(value)


def _parse_category(owner: str, key: str, value):
    if isinstance(value, dict):
        if not value:
            raise DialogueFormatError(f"{owner}: category {key!r} is empty")
        if "default" not in value:
            raise DialogueFormatError(f"{owner}: category {key!r} has no default")
        return MappingProxyType({
            clue: _parse_lines(owner, f"{key}.{clue}", lines)
            for clue, lines in value.items()
        })
    return _parse_lines(owner, key, value)
