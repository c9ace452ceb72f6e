"""
core/ecs.py — Entity-Component-System

Entities are ints. Components are any object, stored by type.
Query by component types to get matching entities.

    w = World()
    e = w.spawn()
    w.add(e, Identity("Mrs Platypus"))
    w.add(e, Suspect(can_be_killer=True))

    for eid, ident, suspect in w.query(Identity, Suspect):
        if suspect.is_killer:
            print(ident.name)

Singletons that belong to the session rather than to one entity
(the clue registry, the room map, the scenario, the event bus) are
stored as *resources* with ``set_res`` / ``res``.

Every iteration is in spawn order, so a seeded session walks the cast
the same way on every run.
"""

from __future__ import annotations
from typing import Any, Iterator


_RES = -1      # resource slot inside a component store


class World:
    def __init__(self):
        self._next_id = 0
        self._stores: dict[type, dict[int, Any]] = {}
        self._removed: set[int] = set()
        self._rooms: dict[str, set[int]] = {}     # room name → eids

    # -- Entities --

    def spawn(self) -> int:
        self._next_id += 1
        return self._next_id

    def despawn(self, eid: int):
        """Hide *eid* from queries now; its data goes at the next purge."""
        self._removed.add(eid)

    def alive(self, eid: int) -> bool:
        return 0 < eid <= self._next_id and eid not in self._removed

    def purge(self):
        """Drop despawned entities from every store. Called once per tick."""
        if not self._removed:
            return
        for store in self._stores.values():
            for eid in self._removed:
                store.pop(eid, None)
        for eids in self._rooms.values():
            eids -= self._removed
        self._removed.clear()

    # -- Rooms --

    def room_add(self, eid: int, room: str):
        self._rooms.setdefault(room, set()).add(eid)

    def room_entities(self, room: str) -> set[int]:
        """Live entities that were placed in *room*."""
        return self._rooms.get(room, set()) - self._removed

    # -- Components --

    def add(self, eid: int, comp: Any):
        """Attach *comp*, replacing any component of the same type."""
        self._stores.setdefault(type(comp), {})[eid] = comp

    def get(self, eid: int, comp_type: type) -> Any | None:
        return self._stores.get(comp_type, {}).get(eid)

    def has(self, eid: int, comp_type: type) -> bool:
        return eid in self._stores.get(comp_type, {})

    # -- Queries --

    def query(self, *types: type) -> Iterator[tuple]:
        """Yield (eid, comp1, comp2, ...) for live entities with ALL types."""
        if not types:
            return
        stores = [self._stores.get(t, {}) for t in types]
        for eid in sorted(min(stores, key=len)):
            if eid == _RES or eid in self._removed:
                continue
            if all(eid in s for s in stores):
                yield (eid, *(s[eid] for s in stores))

    def all_of(self, comp_type: type) -> Iterator[tuple[int, Any]]:
        """Yield (eid, component) for every live entity with this type."""
        for eid, comp in sorted(self._stores.get(comp_type, {}).items()):
            if eid != _RES and eid not in self._removed:
                yield eid, comp

    # -- Resources (singletons, not tied to entities) --

    def set_res(self, resource: Any):
        self._stores.setdefault(type(resource), {})[_RES] = resource

    def res(self, res_type: type) -> Any | None:
        return self._stores.get(res_type, {}).get(_RES)
