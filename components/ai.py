"""components.ai — Brain component."""

from __future__ import annotations
from dataclasses import dataclass, field


@dataclass
class Brain:
    """Entity AI controller — minimal.

    ``kind`` selects the behaviour registered in ``logic.brains``
    ("idle_wander", …).  ``state`` is an opaque dict brain functions
    use across ticks.  ``active`` must be True for the brain runner to
    execute.
    """
    kind: str = "idle_wander"
    state: dict = field(default_factory=dict)
    active: bool = True
