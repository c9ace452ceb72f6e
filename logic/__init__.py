"""logic — Game systems package.

Subpackages
-----------
brains/     — brain registry and the idle-wander brain

Top-level modules
-----------------
dialogue       — dialogue file import, line selection, substitution
roles          — killer / victim / motive assignment
interrogation  — question resolution, ignore, accuse
scenario       — session setup: roles, murder weapon, clue placement
movement       — one-tile NPC steps and the random idle move
tick           — per-frame system orchestrator
"""
