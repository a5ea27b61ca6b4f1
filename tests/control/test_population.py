"""Tests for population control.

Critical Invariants:
- The first row with ceiling > population and cost <= energy wins
- For a fixed energy budget, chosen cost never rises as population grows
- No spawn directive once the population reaches the top ceiling
- Names are "<tick>-<seq>" with seq counting every attempt this tick
- Busy spawns are skipped; rejections are logged, not raised
"""

import logging

import pytest
from hypothesis import given
from hypothesis import strategies as st

from creepcore.config import DEFAULT_POPULATION, EngineSettings, PopulationRow
from creepcore.control import PopulationController, choose_row
from creepcore.core.geometry import Position
from creepcore.core.identity import ObjectKind
from creepcore.core.outcome import Outcome, ReturnCode
from creepcore.core.parts import BodyPart
from creepcore.world import LocalWorld

ROOM = "W1N1"


def at(x: int, y: int, room: str = ROOM) -> Position:
    return Position(x, y, room)


@pytest.fixture
def controller(settings):
    return PopulationController(settings)


@pytest.mark.parametrize(
    "population,energy,expected",
    [
        (0, 550, 0),
        (0, 549, 1),
        (1, 300, 2),
        (2, 550, 1),
        (5, 400, 1),
        (6, 10_000, 2),
        (9, 250, 2),
        (10, 10_000, None),
        (0, 249, None),
    ],
    ids=[
        "big-first",
        "cannot-afford-big",
        "only-small-affordable",
        "past-first-ceiling",
        "below-second-ceiling",
        "past-second-ceiling",
        "last-slot",
        "at-max",
        "too-poor",
    ],
)
def test_choose_row(population, energy, expected):
    row = choose_row(DEFAULT_POPULATION, population, energy)
    if expected is None:
        assert row is None
    else:
        assert row is DEFAULT_POPULATION[expected]


@st.composite
def tables(draw):
    """Valid tables: ascending ceilings, non-increasing costs."""
    ceilings = sorted(draw(st.sets(st.integers(1, 30), min_size=1, max_size=5)))
    moves = sorted(
        draw(st.lists(st.integers(1, 12), min_size=len(ceilings), max_size=len(ceilings))),
        reverse=True,
    )
    return tuple(
        PopulationRow(ceiling=c, cost=50 * m, loadout=(BodyPart.MOVE,) * m)
        for c, m in zip(ceilings, moves, strict=True)
    )


@given(tables(), st.integers(0, 800), st.integers(0, 30))
def test_chosen_cost_is_monotone_in_population(table, energy, population):
    """Property: one more agent never buys a more expensive loadout."""
    now = choose_row(table, population, energy)
    later = choose_row(table, population + 1, energy)
    if now is None:
        assert later is None
    elif later is not None:
        assert later.cost <= now.cost


def test_spawns_affordable_row(world, controller):
    world.add_spawn(at(20, 20), energy=300)

    (attempt,) = controller.run(world, tick=7)

    assert attempt.outcome is Outcome.SUCCESS
    assert attempt.code == ReturnCode.OK
    assert attempt.name == "7-0"
    assert attempt.row is DEFAULT_POPULATION[2]
    spawned = {a.name: a for a in world.agents()}["7-0"]
    assert spawned.spawning
    assert spawned.body == list(DEFAULT_POPULATION[2].loadout)
    assert world.room(ROOM).energy_available == 50


def test_extensions_count_toward_energy(world, controller):
    world.add_spawn(at(20, 20), energy=300)
    world.add_store(ObjectKind.EXTENSION, at(21, 20), energy=50)
    world.add_store(ObjectKind.EXTENSION, at(22, 20), energy=50)

    (attempt,) = controller.run(world, tick=1)

    assert attempt.row is DEFAULT_POPULATION[1]
    assert world.room(ROOM).energy_available == 0


def test_no_spawn_at_max_population(world, controller):
    """CRITICAL: no directive once population reaches the top ceiling."""
    world.add_spawn(at(20, 20), energy=300)
    for i in range(10):
        world.add_agent(f"a{i}", at(i, 0))

    assert controller.run(world, tick=1) == []
    assert world.directives_of("spawn") == []


def test_spawning_agents_count_toward_population(world, controller):
    world.add_spawn(at(20, 20), energy=300)
    for i in range(10):
        world.add_agent(f"a{i}", at(i, 0), spawning_ticks=5)

    assert controller.run(world, tick=1) == []


def test_busy_spawn_is_skipped(world, controller):
    spawn = world.add_spawn(at(20, 20), energy=300)
    spawn.spawning_ticks = 4

    assert controller.run(world, tick=1) == []
    assert world.directives_of("spawn") == []


def test_too_poor_issues_nothing(world, controller):
    world.add_spawn(at(20, 20), energy=100)

    assert controller.run(world, tick=1) == []


def test_seq_distinguishes_spawns_in_one_tick(controller):
    world = LocalWorld()
    world.add_spawn(at(20, 20, "W1N1"), energy=300)
    world.add_spawn(at(20, 20, "W2N1"), energy=300)

    attempts = controller.run(world, tick=5)

    assert [a.name for a in attempts] == ["5-0", "5-1"]
    assert all(a.outcome is Outcome.SUCCESS for a in attempts)
    assert len(world.agents()) == 2


def test_rejection_is_logged_and_seq_still_advances(controller, caplog):
    world = LocalWorld()
    world.add_spawn(at(20, 20, "W1N1"), energy=300)
    world.add_spawn(at(20, 20, "W2N1"), energy=300)
    world.add_agent("5-0", at(1, 1))

    with caplog.at_level(logging.WARNING, logger="creepcore"):
        first, second = controller.run(world, tick=5)

    assert first.outcome is Outcome.CREATION_REJECTED
    assert first.code == ReturnCode.ERR_NAME_EXISTS
    assert "ERR_NAME_EXISTS" in caplog.text
    assert second.name == "5-1"
    assert second.outcome is Outcome.SUCCESS


def test_custom_table(world):
    row = PopulationRow(
        ceiling=1, cost=200, loadout=(BodyPart.WORK, BodyPart.CARRY, BodyPart.MOVE)
    )
    controller = PopulationController(EngineSettings(_env_file=None, population=(row,)))
    world.add_spawn(at(20, 20), energy=300)

    (attempt,) = controller.run(world, tick=3)
    assert attempt.row is row
    assert controller.run(world, tick=4) == []
