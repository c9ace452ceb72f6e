"""components — ECS component dataclasses, organised by domain.

Submodules
----------
spatial    TilePosition, Facing, Walker
identity   Identity
social     Personality, Temperament, Suspect, Knowledge, Interaction,
           DialogueData
clues      Clue, ClueRegistry
ai         Brain
resources  GameClock, Interrogator
dev_log    DevLog

All public names are re-exported here so code can simply do
``from components import Suspect``.
"""

# ── Spatial ──────────────────────────────────────────────────────────
from components.spatial import TilePosition, Facing, Walker

# ── Identity ─────────────────────────────────────────────────────────
from components.identity import Identity

# ── Clues ────────────────────────────────────────────────────────────
from components.clues import Clue, ClueRegistry

# ── Social ───────────────────────────────────────────────────────────
from components.social import (
    Personality, Temperament, Suspect, Knowledge, Interaction, DialogueData,
)

# ── AI ───────────────────────────────────────────────────────────────
from components.ai import Brain

# ── World resources / singletons ─────────────────────────────────────
from components.resources import GameClock, Interrogator
from components.dev_log import DevLog

__all__ = [
    # spatial
    "TilePosition", "Facing", "Walker",
    # identity
    "Identity",
    # clues
    "Clue", "ClueRegistry",
    # social
    "Personality", "Temperament", "Suspect", "Knowledge", "Interaction",
    "DialogueData",
    # ai
    "Brain",
    # resources
    "GameClock", "Interrogator", "DevLog",
]
