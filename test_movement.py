"""test_movement.py — Idle wander, one-tile steps, the brain runner, the
tick pipeline and the event bus.

Run:  python test_movement.py      (or: pytest test_movement.py)
"""
from __future__ import annotations
import sys, random, traceback

from core import tuning
from core.constants import (
    NORTH, SOUTH, EAST, WEST, STANDING, WALKING, DT, TILE_WALL, STEP_TIME,
)
from core.data import DataLoader
from core.ecs import World
from core.events import EventBus, NpcMoved, QuestionAsked
from core.rooms import RoomMap, blank_room
from components import (
    TilePosition, Facing, Walker, Brain, GameClock, DevLog, Suspect,
    Interrogator, Clue, ClueRegistry,
)
from logic.brains import registered_names, run_brains
from logic.dialogue import parse_dialogue
from logic.movement import move, pick_direction, random_move, walker_system
from logic.scenario import setup_scenario
from logic.tick import run_ticks, tick_systems


# ── Test harness ─────────────────────────────────────────────────────

_passed = 0
_failed = 0

def ok(label: str):
    global _passed
    _passed += 1
    print(f"  [PASS] {label}")


class _FixedRng:
    """Stands in for random.Random where a test needs exact rolls."""

    def __init__(self, *values: float):
        self.values = list(values)

    def random(self) -> float:
        return self.values.pop(0)


# ── Builders ─────────────────────────────────────────────────────────

def _walker_world(w_tiles: int = 10, h_tiles: int = 8):
    tuning.reset()
    w = World()
    w.set_res(GameClock())
    w.set_res(EventBus())
    w.set_res(DevLog())
    rooms = RoomMap()
    rooms.add(blank_room("Hall", w_tiles, h_tiles))
    w.set_res(rooms)
    return w, rooms


def _walker(w: World, x: int, y: int, facing: str = SOUTH) -> int:
    eid = w.spawn()
    w.add(eid, TilePosition(x=x, y=y, room="Hall"))
    w.add(eid, Facing(direction=facing))
    w.add(eid, Walker())
    w.room_add(eid, "Hall")
    return eid


def _scenario_world(seed: int = 2):
    w, rooms = _walker_world(12, 10)
    reg = ClueRegistry()
    reg.register(Clue(name="Rope", weapon=True))
    w.set_res(reg)
    w.set_res(Interrogator())
    loader = DataLoader(w)
    ids = {}
    for name, tile, can_kill in (("Ann", (3, 3), True), ("Ben", (6, 4), True),
                                 ("Cal", (8, 6), True), ("Dot", (5, 5), False)):
        d = parse_dialogue({"personality": "NEUTRAL",
                            "responses": ["%NPC."], "noneResponses": ["-"],
                            "motives": {"Dot": "reasons"}}, name)
        ids[name] = loader.spawn_npc(name, d, room="Hall", tile=tile,
                                     can_be_killer=can_kill)
    setup_scenario(w, seed, victim=ids["Dot"])
    return w, rooms, ids


# ═══════════════════════════════════════════════════════════════════════
#  1. Direction weights
# ═══════════════════════════════════════════════════════════════════════

def test_pick_direction():
    print("\n=== 1: Direction weights ===")
    tuning.reset()

    cases = [
        (0.0, EAST), (0.499, EAST),
        (0.5, NORTH), (0.615, NORTH),
        (0.625, SOUTH), (0.735, SOUTH),
        (0.745, EAST), (0.855, EAST),
        (0.865, WEST), (0.999, WEST),
    ]
    for roll, expected in cases:
        got = pick_direction(_FixedRng(roll), EAST)
        assert got == expected, f"roll {roll}: {got} != {expected}"
    ok("1a: rolls map to keep / N / S / E / W at 0.5, 0.62, 0.74, 0.86")

    rng = random.Random(1234)
    n = 100_000
    counts = {NORTH: 0, SOUTH: 0, EAST: 0, WEST: 0}
    for _ in range(n):
        counts[pick_direction(rng, NORTH)] += 1
    # west also takes the 2% the other weights leave over
    expected = {NORTH: 0.62, SOUTH: 0.12, EAST: 0.12, WEST: 0.14}
    for d, share in expected.items():
        assert abs(counts[d] / n - share) < 0.01, counts
    ok(f"1b: 100k draws facing north ≈ 62/12/12/14 % ({counts})")

    tuning.override("wander", "continue_weight", 0.0)
    tuning.override("wander", "turn_weight", 0.25)
    try:
        assert pick_direction(_FixedRng(0.1), EAST) == NORTH
        assert pick_direction(_FixedRng(0.8), EAST) == WEST
    finally:
        tuning.reset()
    ok("1c: weights come from tuning")


# ═══════════════════════════════════════════════════════════════════════
#  2. Single steps
# ═══════════════════════════════════════════════════════════════════════

def test_move_and_walk():
    print("\n=== 2: move() / walker_system() ===")

    w, rooms = _walker_world()
    npc = _walker(w, 1, 1, facing=NORTH)
    assert rooms.get("Hall").tiles[1][0] == TILE_WALL

    assert move(w, npc, WEST, rooms) is False
    pos, walker = w.get(npc, TilePosition), w.get(npc, Walker)
    assert (pos.x, pos.y) == (1, 1)
    assert walker.state == STANDING and walker.target is None
    assert w.get(npc, Facing).direction == WEST
    ok("2a: blocked move only turns the NPC")

    assert move(w, npc, EAST, rooms) is True
    assert walker.state == WALKING and walker.target == (2, 1)
    assert w.get(npc, Facing).direction == EAST
    assert move(w, npc, NORTH, rooms) is False
    assert w.get(npc, Facing).direction == EAST
    ok("2b: a walking NPC ignores further moves")

    assert walker.step_time == Walker().step_time == STEP_TIME
    events = []
    w.res(EventBus).subscribe("NpcMoved", events.append)
    assert walker_system(w, 0.1) == 0
    assert walker_system(w, 0.1) == 0
    assert (pos.x, pos.y) == (1, 1)
    assert walker_system(w, 0.1) == 1
    assert (pos.x, pos.y) == (2, 1)
    assert walker.state == STANDING and walker.target is None
    w.res(EventBus).drain()
    assert len(events) == 1 and (events[0].x, events[0].y) == (2, 1)
    ok("2c: step commits after the default STEP_TIME and emits NpcMoved")

    walker.can_move = False
    assert move(w, npc, EAST, rooms) is False
    assert (pos.x, pos.y) == (2, 1)
    ok("2d: can_move=False pins the NPC")


# ═══════════════════════════════════════════════════════════════════════
#  3. Idle wander
# ═══════════════════════════════════════════════════════════════════════

def test_random_move():
    print("\n=== 3: random_move() ===")

    w, rooms = _walker_world(21, 21)
    npc = _walker(w, 10, 10)
    walker = w.get(npc, Walker)

    rng = random.Random(77)
    trials = 50_000
    moved = 0
    for _ in range(trials):
        if random_move(w, npc, rng, rooms):
            moved += 1
            walker.state = STANDING
            walker.target = None
    rate = moved / trials
    assert abs(rate - 0.01) < 0.002, rate
    ok(f"3a: ~1% of standing ticks start a step (got {rate:.4f})")

    walker.state = WALKING
    rng = random.Random(5)
    state = rng.getstate()
    assert random_move(w, npc, rng, rooms) is False
    assert rng.getstate() == state
    ok("3b: a walking NPC draws nothing")

    walker.state = STANDING
    w.get(npc, Facing).direction = SOUTH
    assert random_move(w, npc, _FixedRng(0.5), rooms) is False
    assert walker.state == STANDING
    assert random_move(w, npc, _FixedRng(0.005, 0.1), rooms) is True
    assert walker.target == (10, 9)       # kept facing south
    ok("3c: roll above the chance skips, below it steps")


# ═══════════════════════════════════════════════════════════════════════
#  4. Brains and the tick pipeline
# ═══════════════════════════════════════════════════════════════════════

def test_brains():
    print("\n=== 4: Brain runner ===")

    assert "idle_wander" in registered_names()
    ok("4a: idle_wander is registered")

    w, rooms = _walker_world()
    a = _walker(w, 3, 3)
    b = _walker(w, 5, 5)
    w.add(a, Brain(kind="idle_wander"))
    w.add(b, Brain(kind="idle_wander", active=False))
    assert run_brains(w, DT, random.Random(1)) == 1
    ok("4b: inactive brains are skipped")

    w.add(b, Brain(kind="daydream"))
    try:
        run_brains(w, DT, random.Random(1))
        raise AssertionError("unknown brain kind should raise")
    except KeyError:
        pass
    ok("4c: an unknown brain kind raises KeyError")


def test_tick_pipeline():
    print("\n=== 5: Tick pipeline ===")

    w, rooms = _walker_world()
    _walker(w, 3, 3)
    run_ticks(w, 30, DT)
    clock = w.res(GameClock)
    assert clock.ticks == 30 and abs(clock.time - 30 * DT) < 1e-9
    ok("5a: clock advances without a scenario (brains idle)")

    w, rooms, ids = _scenario_world()
    tuning.override("wander", "move_chance", 1.0)
    try:
        victim = w.get(ids["Dot"], TilePosition)
        start = (victim.x, victim.y)
        moved = []
        w.res(EventBus).subscribe("NpcMoved", moved.append)
        for _ in range(600):
            tick_systems(w, DT)
            for eid, pos in w.all_of(TilePosition):
                assert rooms.is_walkable_tile(pos.room, pos.x, pos.y), (eid, pos)
        assert (victim.x, victim.y) == start
        assert moved and all(e.eid != ids["Dot"] for e in moved)
        for name in ("Ann", "Ben", "Cal"):
            assert w.get(ids[name], Brain).state.get("steps", 0) > 0, name
    finally:
        tuning.reset()
    ok(f"5b: NPCs wander on walkable tiles only; the victim stays put ({len(moved)} steps)")

    a, _, _ = _scenario_world(seed=8)
    b, _, _ = _scenario_world(seed=8)
    tuning.override("wander", "move_chance", 0.2)
    try:
        run_ticks(a, 300, DT)
        run_ticks(b, 300, DT)
    finally:
        tuning.reset()
    pa = [(p.x, p.y) for _, p in a.all_of(TilePosition)]
    pb = [(p.x, p.y) for _, p in b.all_of(TilePosition)]
    assert pa == pb
    ok("5c: same seed, same wandering")

    killer = next(e for e, s in a.all_of(Suspect) if s.is_killer)
    assert a.alive(killer)
    a.despawn(killer)
    assert not a.alive(killer)
    assert killer not in [e for e, _ in a.all_of(Suspect)]
    assert killer not in a.room_entities("Hall")
    tick_systems(a, DT)
    assert a.get(killer, Suspect) is None
    ok("5d: a despawned entity leaves queries at once and is purged by the tick")


# ═══════════════════════════════════════════════════════════════════════
#  6. Event bus
# ═══════════════════════════════════════════════════════════════════════

def test_event_bus():
    print("\n=== 6: EventBus ===")

    bus = EventBus()
    order = []
    bus.subscribe("NpcMoved", lambda e: order.append(("moved", e.eid)))
    bus.subscribe("QuestionAsked", lambda e: order.append(("asked", e.npc_eid)))
    bus.emit(NpcMoved(eid=1))
    bus.emit(QuestionAsked(npc_eid=2))
    bus.emit(NpcMoved(eid=3))
    assert bus.drain() == 3
    assert order == [("moved", 1), ("asked", 2), ("moved", 3)]
    assert bus.stats() == {"NpcMoved": 2, "QuestionAsked": 1}
    ok("6a: FIFO delivery and per-type stats")

    bus = EventBus()
    chained = []
    bus.subscribe("QuestionAsked", lambda e: bus.emit(NpcMoved(eid=e.npc_eid)))
    bus.subscribe("NpcMoved", chained.append)
    bus.emit(QuestionAsked(npc_eid=9))
    assert bus.drain() == 2 and [e.eid for e in chained] == [9]
    ok("6b: events emitted by handlers are handled in the same drain")

    bus = EventBus()
    def boom(event):
        if event.eid == 2:
            raise RuntimeError("handler failed")
    bus.subscribe("NpcMoved", boom)
    for i in (1, 2, 3):
        bus.emit(NpcMoved(eid=i))
    try:
        bus.drain()
        raise AssertionError("handler error should propagate")
    except RuntimeError as exc:
        assert "handler failed" in str(exc)
    assert bus.pending_count() == 1
    assert bus.drain() == 1 and bus.pending_count() == 0
    ok("6c: a failing handler propagates; the rest of the batch stays queued")


# ═══════════════════════════════════════════════════════════════════════
#  MAIN
# ═══════════════════════════════════════════════════════════════════════

if __name__ == "__main__":
    sections = [
        ("Direction weights", test_pick_direction),
        ("move() / walker_system()", test_move_and_walk),
        ("random_move()", test_random_move),
        ("Brain runner", test_brains),
        ("Tick pipeline", test_tick_pipeline),
        ("EventBus", test_event_bus),
    ]

    for name, fn in sections:
        try:
            fn()
        except Exception:
            _failed += 1
            print(f"\n  [CRASH] {name} — unhandled exception:")
            traceback.print_exc()

    print(f"\n{'=' * 60}")
    print(f"  Movement Tests: {_passed} passed, {_failed} failed")
    print(f"{'=' * 60}")
    sys.exit(1 if _failed else 0)
