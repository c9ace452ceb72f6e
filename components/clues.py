"""components.clues — Clue entities and the clue registry resource.

A clue is identified by its name: two ``Clue`` objects with the same
name are the same clue, whatever their position or flags.  Everything
about a clue is fixed when the scenario loads except where it lies
(``move_to``) and, once, whether it is the murder weapon.
"""

from __future__ import annotations
from dataclasses import dataclass, field
from typing import Iterator


class DuplicateClueError(ValueError):
    """Two clues with the same name were registered."""


@dataclass(eq=False)
class Clue:
    """A discoverable object the player can ask NPCs about.

    ``weapon``      : authored flag: may be chosen as the murder weapon.
    ``murder_weapon``: set once per session by the scenario.
    ``red_herring`` : misleading clue; partial-match answers about it
                       always point at a decoy.
    ``tile``        : (x, y) within ``room``, bottom-left origin.
    """
    name: str
    description: str = ""
    murder_weapon: bool = False
    red_herring: bool = False
    weapon: bool = False
    tile: tuple[int, int] = (0, 0)
    room: str = ""

    def __eq__(self, other: object) -> bool:
        if isinstance(other, Clue):
            return other.name == self.name
        return NotImplemented

    def __hash__(self) -> int:
        return hash(self.name)

    @property
    def tile_x(self) -> int:
        return self.tile[0]

    @property
    def tile_y(self) -> int:
        return self.tile[1]

    def is_murder_weapon(self) -> bool:
        return self.murder_weapon

    def is_red_herring(self) -> bool:
        return self.red_herring

    def set_murder_weapon(self) -> None:
        """Flag this clue as the murder weapon (one-way)."""
        self.murder_weapon = True

    def move_to(self, x: int, y: int, room: str | None = None) -> None:
        self.tile = (int(x), int(y))
        if room is not None:
            self.room = room


@dataclass
class ClueRegistry:
    """World resource: every clue in the scenario, keyed by name."""
    _clues: dict[str, Clue] = field(default_factory=dict)

    def register(self, clue: Clue) -> Clue:
        if clue.name in self._clues:
            raise DuplicateClueError(f"clue {clue.name!r} registered twice")
        self._clues[clue.name] = clue
        return clue

    def get(self, name: str) -> Clue | None:
        return self._clues.get(name)

    def __contains__(self, item: object) -> bool:
        if isinstance(item, Clue):
            return item.name in self._clues
        return item in self._clues

    def __iter__(self) -> Iterator[Clue]:
        return iter(self._clues.values())

    def __len__(self) -> int:
        return len(self._clues)

    def names(self) -> list[str]:
        return list(self._clues)

    def weapons(self) -> list[Clue]:
        """Clues that may be picked as the murder weapon."""
        return [c for c in self._clues.values() if c.weapon]

    def murder_weapon(self) -> Clue | None:
        for clue in self._clues.values():
            if clue.murder_weapon:
                return clue
        return None

    def in_room(self, room: str) -> list[Clue]:
        return [c for c in self._clues.values() if c.room == room]
