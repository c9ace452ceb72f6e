"""core/events.py — Lightweight event bus.

Decouples systems that need to *signal* something from systems that
*react* to it.  The bus lives as an ECS resource::

    from core.events import EventBus
    bus = world.res(EventBus)
    bus.emit(QuestionAsked(npc_eid=4, clue="Broken Glass", branch="perfect"))

Consumers subscribe with a callable::

    bus.subscribe("QuestionAsked", my_handler)

And the tick loop drains once per frame::

    bus.drain()          # calls all handlers for pending events

Design rules:
  - Events are plain dataclasses — no behaviour.
  - ``emit()`` is O(1) (just appends).
  - ``drain()`` processes all queued events in FIFO order.
  - Handlers may emit new events; those are processed in the same drain.
  - A handler that raises stops the drain; the exception propagates to
    the caller and the rest of the batch stays queued.
"""

from __future__ import annotations
from dataclasses import dataclass
from typing import Any, Callable
from collections import defaultdict


# ═══════════════════════════════════════════════════════════════════
#  Event definitions
# ═══════════════════════════════════════════════════════════════════

@dataclass
class RoleAssigned:
    """An NPC was marked as the killer or the victim."""
    eid: int
    name: str = ""
    role: str = ""                 # "killer" | "victim"


@dataclass
class QuestionAsked:
    """The player questioned an NPC about a clue."""
    npc_eid: int
    clue: str = ""
    style: str = ""
    branch: str = ""               # "perfect" | "partial" | "none" | "refused"
    counted: bool = False


@dataclass
class NpcMoved:
    """An NPC finished a one-tile step."""
    eid: int
    x: int = 0
    y: int = 0
    room: str = ""


@dataclass
class AccusationMade:
    """The player accused an NPC of the murder."""
    npc_eid: int
    outcome: str = ""              # AccusationResult value


# ═══════════════════════════════════════════════════════════════════
#  Event Bus
# ═══════════════════════════════════════════════════════════════════

class EventBus:
    """Fire-and-forget event bus stored as an ECS resource."""

    MAX_PASSES = 100

    def __init__(self):
        self._queue: list[Any] = []
        self._subs: dict[str, list[Callable]] = defaultdict(list)
        self._stats: dict[str, int] = defaultdict(int)

    # ── Public API ───────────────────────────────────────────────────

    def emit(self, event) -> None:
        """Queue an event for processing on next ``drain()``."""
        self._queue.append(event)

    def subscribe(self, event_type: str, handler: Callable) -> None:
        """Register *handler* to receive events of *event_type*.

        *event_type* is the class name, e.g. ``"QuestionAsked"``.
        """
        self._subs[event_type].append(handler)

    def drain(self) -> int:
        """Process all queued events.  Returns number processed.

        Handlers may emit new events — those are processed in the
        same drain pass (breadth-first), up to ``MAX_PASSES`` rounds.
        """
        processed = 0
        passes = 0
        while self._queue and passes < self.MAX_PASSES:
            batch = self._queue[:]
            self._queue.clear()
            for i, event in enumerate(batch):
                name = type(event).__name__
                self._stats[name] += 1
                try:
                    for handler in self._subs.get(name, []):
                        handler(event)
                except Exception:
                    # keep the unprocessed tail for the next drain
                    self._queue[:0] = batch[i + 1:]
                    raise
                processed += 1
            passes += 1
        return processed

    def stats(self) -> dict[str, int]:
        """Return cumulative event counts by type."""
        return dict(self._stats)

    def pending_count(self) -> int:
        """Number of events waiting to be drained."""
        return len(self._queue)

    def __repr__(self) -> str:
        return f"EventBus(pending={len(self._queue)}, subs={len(self._subs)})"


def emit(world, event) -> None:
    """Emit *event* on the world's bus if one is installed."""
    bus = world.res(EventBus)
    if bus is not None:
        bus.emit(event)
