"""components.dev_log — Structured session event log.

A ring-buffer resource that records timestamped notes about what the
session did and to whom: role assignment, each question and the branch
it took, NPC steps, data problems that were tolerated.  Tests and the
``--verbose`` bootstrap read it back instead of scraping console output.

Usage:
    log = world.res(DevLog)
    log.record(eid, "dialogue", "partial match", details={"clue": "Knife"})

Each entry is a dict:
    {"t": float, "eid": int, "name": str, "cat": str,
     "msg": str, "details": dict | None}
"""

from __future__ import annotations
from dataclasses import dataclass, field


@dataclass
class DevLog:
    """Ring-buffer of session events."""

    entries: list[dict] = field(default_factory=list)
    max_entries: int = 500

    def record(self, eid: int, cat: str, msg: str, *,
               name: str = "", t: float = 0.0,
               details: dict | None = None) -> None:
        self.entries.append({
            "t": t,
            "eid": eid,
            "name": name,
            "cat": cat,
            "msg": msg,
            "details": details,
        })
        if len(self.entries) > self.max_entries:
            del self.entries[:-self.max_entries]

    def recent(self, n: int = 50) -> list[dict]:
        """Return the *n* most recent entries (newest last)."""
        return self.entries[-n:]

    def for_cat(self, cat: str, n: int = 50) -> list[dict]:
        return [e for e in self.entries if e["cat"] == cat][-n:]


def log_event(world, eid: int, cat: str, msg: str, **details) -> None:
    """Record on the world's DevLog (if present), stamped with game time."""
    log = world.res(DevLog)
    if log is None:
        return
    from components.identity import Identity
    from components.resources import GameClock
    ident = world.get(eid, Identity)
    clock = world.res(GameClock)
    log.record(eid, cat, msg,
               name=ident.name if ident else f"e{eid}",
               t=clock.time if clock else 0.0,
               details=details or None)
