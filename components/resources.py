"""components.resources — World-level singletons (not per-entity)."""

from __future__ import annotations
from dataclasses import dataclass, field

from components.clues import Clue
from components.social import Personality


@dataclass
class GameClock:
    """Monotonic game time: accumulated ``dt`` since session start.

    Single source of truth for timestamps in the dev log and events.
    Advanced once per tick by ``logic.tick.tick_systems``.
    """
    time: float = 0.0
    ticks: int = 0


@dataclass
class Interrogator:
    """The player, as far as interrogation is concerned.

    ``questions`` is the session-wide count of questions that got a
    real answer (perfect or partial match).  ``found`` holds every
    clue the player has picked up.
    """
    personality: Personality = Personality.NEUTRAL
    questions: int = 0
    found: set[Clue] = field(default_factory=set)

    def add_question(self) -> int:
        self.questions += 1
        return self.questions

    def collect(self, clue: Clue) -> bool:
        """Add *clue* to the notebook.  Returns False if already held."""
        if clue in self.found:
            return False
        self.found.add(clue)
        return True

    def has(self, clue: Clue) -> bool:
        return clue in self.found
