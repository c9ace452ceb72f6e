"""components.identity — Who an entity is."""

from __future__ import annotations
from dataclasses import dataclass


@dataclass
class Identity:
    name: str = "unnamed"
    kind: str = "npc"          # "npc", "victim", "player"
    sprite: str = ""           # spritesheet reference kept from the cast file
