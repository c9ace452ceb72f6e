"""
main.py — Bootstrap

1. Load tuning, rooms, clues and cast
2. Create the player
3. Roll the mystery
4. Let the NPCs wander for a while
5. Print a short interrogation transcript

Run:
    python main.py --seed 7 --ticks 600 --style NICE
"""

from __future__ import annotations
import argparse

from core.bootstrap import bootstrap, scenario_of
from core.constants import DT
from core.rooms import RoomMap
from components import Identity, TilePosition, ClueRegistry, Interrogator, DevLog, Personality
from logic.interrogation import question
from logic.roles import roster
from logic.tick import run_ticks


def build_parser() -> argparse.ArgumentParser:
    p = argparse.ArgumentParser(description="Run a headless murder-mystery session.")
    p.add_argument("--data", default="data", help="data directory (default: data)")
    p.add_argument("--rooms", default="rooms", help="NBT room directory (default: rooms)")
    p.add_argument("--seed", type=int, default=None, help="fix the mystery")
    p.add_argument("--ticks", type=int, default=600, help="frames to simulate")
    p.add_argument("--style", default=None,
                   help="questioning style: AGGRESSIVE, NEUTRAL or NICE "
                        "(default: the player's own personality)")
    p.add_argument("--player", default=None, help="player personality")
    p.add_argument("--verbose", action="store_true", help="dump the dev log")
    return p


def main(argv: list[str] | None = None) -> int:
    args = build_parser().parse_args(argv)

    world = bootstrap(args.data, args.rooms, seed=args.seed,
                      personality=args.player)
    scenario = scenario_of(world)
    player = world.res(Interrogator)
    registry = world.res(ClueRegistry)

    victim = world.get(scenario.victim, Identity).name
    print(f"[MAIN] seed {scenario.seed}: {victim} has been murdered")
    print(f"[MAIN] player personality: {player.personality.name}")

    run_ticks(world, args.ticks, DT)
    for eid in roster(world):
        ident = world.get(eid, Identity)
        pos = world.get(eid, TilePosition)
        print(f"[MAIN]   {ident.name:<18} {pos.room} ({pos.x}, {pos.y})")
    for room in world.res(RoomMap).rooms:
        here = registry.in_room(room)
        if here:
            print(f"[MAIN]   clues in {room}: {', '.join(c.name for c in here)}")

    style = Personality.parse(args.style) if args.style else player.personality
    clues = list(registry)
    if not clues:
        print("[MAIN] no clues loaded, nothing to ask about")
        return 0
    print(f"\n[MAIN] Questioning everyone in a {style.name} style")
    for i, eid in enumerate(roster(world)):
        ident = world.get(eid, Identity)
        if ident.kind != "npc":
            continue
        clue = clues[i % len(clues)]
        response = question(world, eid, clue, style)
        print(f"  {ident.name} ({clue.name}, {response.branch.value}): {response.text}")
    print(f"[MAIN] {player.questions} questions answered")

    if args.verbose:
        for entry in world.res(DevLog).recent(100):
            print(f"  {entry['t']:7.2f}  {entry['name']:<18} "
                  f"[{entry['cat']}] {entry['msg']}")
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
