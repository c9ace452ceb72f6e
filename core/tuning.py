"""core/tuning.py — Data-driven tuning constants.

Gameplay numbers and dialogue phrasing live in ``data/tuning.toml``
and are loaded once at startup.  Any system can read a value with::

    from core.tuning import get
    chance = get("wander", "move_chance", 0.01)

Every caller passes its own default, so a missing file or key simply
falls back to the built-in value from ``core.constants``.

Tests pin values with ``override()`` and undo them with ``reset()``.
"""

from __future__ import annotations
import tomllib
from pathlib import Path


_data: dict = {}

DEFAULT_PATH = Path(__file__).resolve().parent.parent / "data" / "tuning.toml"


def load(path: str | Path | None = None) -> None:
    """Load tuning constants from *path*.

    If *path* is ``None``, default to ``data/tuning.toml`` relative to
    the project root.
    """
    global _data

    path = DEFAULT_PATH if path is None else Path(path)

    if not path.exists():
        print(f"[TUNING] {path} not found, using defaults")
        _data = {}
        return

    with open(path, "rb") as f:
        _data = tomllib.load(f)

    print(f"[TUNING] Loaded {_count_leaves(_data)} values from {path}")


def reset() -> None:
    """Forget every loaded and overridden value."""
    global _data
    _data = {}


def override(section_path: str, key: str, value) -> None:
    """Set a single value in memory (used by tests)."""
    node = _data
    for part in section_path.split("."):
        node = node.setdefault(part, {})
    node[key] = value


def get(section_path: str, key: str, default=None):
    """Read a tuning value.

    *section_path* uses dot-notation to traverse nested tables, e.g.
    ``"dialogue.hints"`` looks up ``[dialogue.hints]``.

    >>> get("wander", "move_chance", 0.01)
    0.01
    """
    node = section(section_path)
    return node.get(key, default)


def section(section_path: str) -> dict:
    """Return an entire section dict (shallow copy), or empty dict."""
    node = _data
    for part in section_path.split("."):
        if not isinstance(node, dict):
            return {}
        node = node.get(part)
        if node is None:
            return {}
    return dict(node) if isinstance(node, dict) else {}


def _count_leaves(d: dict, _n: int = 0) -> int:
    for v in d.values():
        if isinstance(v, dict):
            _n = _count_leaves(v, _n)
        else:
            _n += 1
    return _n
