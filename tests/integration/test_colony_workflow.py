"""End-to-end runs of the engine against the demo colony.

Why these tests exist:
Unit tests pin each controller in isolation. These check that the phases
compose over hundreds of ticks: agents are born, harvest, deliver, and the
registry never leaks entries.
"""

from creepcore.__main__ import demo_world, main
from creepcore.core.outcome import ReturnCode
from creepcore.scheduling import TickEngine
from creepcore.tracing import InMemoryHistoryStore


def ok(world, action):
    return [d for d in world.directives_of(action) if d.code == ReturnCode.OK]


def test_colony_bootstraps(settings):
    world = demo_world()
    history = InMemoryHistoryStore(max_ticks=500)
    engine = TickEngine(settings, history=history)

    for _ in range(200):
        engine.tick(world)
        live = {a.name for a in world.agents()}
        assert set(engine.registry.snapshot()) <= live
        world.advance()

    assert world.agents()
    assert ok(world, "spawn")
    assert ok(world, "harvest")
    assert ok(world, "transfer")
    assert history.tick_count == 200
    assert history.get_events(1, 200)
    assert not [e for e in history.get_events(1, 200) if e.kind == "error"]


def test_towers_clear_hostiles(settings):
    world = demo_world(hostiles=1)
    engine = TickEngine(settings)

    first = engine.tick(world)
    world.advance()
    second = engine.tick(world)

    assert first.events_of("defense")[0].detail == {"hits": 1}
    assert second.events_of("defense")
    assert world.room("W1N1").hostiles() == []


def test_runs_are_reproducible(settings):
    def run():
        world = demo_world()
        engine = TickEngine(settings)
        records = []
        for _ in range(60):
            records.append(engine.tick(world).to_dict()["events"])
            world.advance()
        return records, [(d.tick, d.actor, d.action, d.target) for d in world.directives]

    assert run() == run()


def test_cli_main(capsys):
    assert main(["--ticks", "5", "--seed", "3", "--log-level", "WARNING"]) == 0

    lines = capsys.readouterr().out.strip().splitlines()
    assert len(lines) == 5
    assert lines[0].startswith("tick 1:")
