"""Tests for the local in-memory host.

Why these tests exist:
Every engine test runs against LocalWorld, so its rules must match what the
engine expects from a real host: range checks, return codes, spawn energy
accounting and the tick clock.
"""

import pytest

from creepcore.core.geometry import Position, Terrain
from creepcore.core.identity import ObjectKind
from creepcore.core.outcome import ReturnCode
from creepcore.core.parts import BodyPart
from creepcore.world import LocalWorld

ROOM = "W1N1"


def at(x: int, y: int, room: str = ROOM) -> Position:
    return Position(x, y, room)


class TestScenarioBuilding:
    def test_ids_are_unique(self, world):
        ids = {
            world.add_source(at(1, 1)).id,
            world.add_spawn(at(2, 2)).id,
            world.add_store(ObjectKind.EXTENSION, at(3, 3)).id,
            world.add_road(at(4, 4)).id,
        }
        assert len(ids) == 4

    def test_objects_create_their_room(self):
        world = LocalWorld()
        world.add_source(at(1, 1, "E5S5"))

        assert [r.name for r in world.rooms()] == ["E5S5"]

    @pytest.mark.parametrize(
        "terrain,hits_max",
        [(Terrain.PLAIN, 5_000), (Terrain.SWAMP, 25_000), (Terrain.WALL, 750_000)],
        ids=["plain", "swamp", "wall"],
    )
    def test_road_hits_follow_terrain(self, terrain, hits_max):
        world = LocalWorld()
        world.add_room(ROOM, terrain={(4, 4): terrain})

        road = world.add_road(at(4, 4))

        assert road.hits == road.hits_max == hits_max

    def test_controller_starts_with_full_timer(self, world):
        assert world.add_controller(at(1, 1), level=3).ticks_to_downgrade == 20_000

    def test_agent_capacity_from_carry_parts(self, world):
        agent = world.add_agent("a", at(1, 1), body=[BodyPart.CARRY, BodyPart.CARRY])

        assert agent.store_capacity("energy") == 100
        assert agent.store_capacity("power") == 0


class TestRoom:
    def test_energy_available_counts_spawns_and_extensions(self, world):
        world.add_spawn(at(1, 1), energy=120)
        world.add_store(ObjectKind.EXTENSION, at(2, 2), energy=30)
        world.add_store(ObjectKind.CONTAINER, at(3, 3), energy=50)

        assert world.room(ROOM).energy_available == 150

    def test_structures_include_controller(self, world):
        controller = world.add_controller(at(1, 1))
        road = world.add_road(at(2, 2))
        world.add_source(at(3, 3))
        world.add_site(at(4, 4))

        assert world.room(ROOM).structures() == [controller, road]

    def test_active_sources_skip_depleted(self, world):
        world.add_source(at(1, 1), energy=0)
        live = world.add_source(at(2, 2))

        assert world.room(ROOM).active_sources() == [live]

    def test_unknown_room(self, world):
        assert world.room("nowhere") is None


class TestDirectives:
    def test_harvest_needs_adjacency(self, world):
        agent = world.add_agent("a", at(1, 1))
        source = world.add_source(at(3, 3))

        assert agent.harvest(source) == ReturnCode.ERR_NOT_IN_RANGE

    def test_harvest_caps_at_free_capacity(self, world):
        body = [BodyPart.WORK] * 10 + [BodyPart.CARRY, BodyPart.MOVE]
        agent = world.add_agent("a", at(1, 1), body=body, energy=45)
        source = world.add_source(at(2, 2))

        assert agent.harvest(source) == ReturnCode.OK
        assert agent.energy == 50
        assert source.energy == 2_995

    def test_build_finishes_site(self, world):
        agent = world.add_agent("a", at(1, 1), energy=50)
        site = world.add_site(at(4, 4), progress_total=3)

        assert agent.build(site) == ReturnCode.OK
        assert world.get_object(site.id) is None
        assert agent.energy == 47

    def test_repair_caps_at_hits_max(self, world):
        agent = world.add_agent("a", at(1, 1), energy=50)
        road = world.add_road(at(2, 2), hits=4_950)

        assert agent.repair(road) == ReturnCode.OK
        assert road.hits == 5_000

    def test_upgrade_refreshes_timer(self, world):
        agent = world.add_agent("a", at(1, 1), energy=50)
        controller = world.add_controller(at(2, 2), level=2, ticks_to_downgrade=100)

        assert agent.upgrade_controller(controller) == ReturnCode.OK
        assert controller.ticks_to_downgrade == 200

    def test_transfer_needs_energy(self, world):
        agent = world.add_agent("a", at(1, 1))
        spawn = world.add_spawn(at(2, 2), energy=0)

        assert agent.transfer(spawn, "energy") == ReturnCode.ERR_NOT_ENOUGH_RESOURCES

    def test_move_across_rooms_has_no_path(self, world):
        agent = world.add_agent("a", at(1, 1))

        assert agent.move_to(at(1, 1, "W2N1"), 5) == ReturnCode.ERR_NO_PATH
        assert agent.pos == at(1, 1)

    def test_every_directive_is_logged(self, world):
        agent = world.add_agent("a", at(1, 1))
        source = world.add_source(at(9, 9))

        agent.harvest(source)
        agent.move_to(source.pos, 7)

        assert [(d.action, d.code) for d in world.directives] == [
            ("harvest", ReturnCode.ERR_NOT_IN_RANGE),
            ("move", ReturnCode.OK),
        ]
        assert world.directives[1].reuse_path == 7


class TestSpawning:
    def test_spawn_withdraws_from_spawn_then_extensions(self, world):
        spawn = world.add_spawn(at(1, 1), energy=300)
        extension = world.add_store(ObjectKind.EXTENSION, at(2, 2), energy=50)
        loadout = [BodyPart.WORK, BodyPart.WORK, BodyPart.WORK, BodyPart.MOVE]

        assert spawn.spawn_agent(loadout, "x") == ReturnCode.OK
        assert spawn.energy == 0
        assert extension.energy == 0
        assert spawn.busy

    def test_spawn_refusals(self, world):
        spawn = world.add_spawn(at(1, 1), energy=100)
        world.add_agent("taken", at(5, 5))

        assert spawn.spawn_agent([BodyPart.MOVE], "taken") == ReturnCode.ERR_NAME_EXISTS
        assert spawn.spawn_agent([], "x") == ReturnCode.ERR_INVALID_ARGS
        assert spawn.spawn_agent([BodyPart.WORK] * 2, "x") == ReturnCode.ERR_NOT_ENOUGH_RESOURCES

    def test_advance_finishes_spawning(self, world):
        spawn = world.add_spawn(at(1, 1), energy=300)
        spawn.spawn_agent([BodyPart.MOVE], "x")
        agent = {a.name: a for a in world.agents()}["x"]

        world.advance(2)
        assert agent.spawning
        world.advance()
        assert not agent.spawning
        assert not spawn.busy
        assert spawn.spawn_agent([BodyPart.MOVE], "y") == ReturnCode.OK


class TestClock:
    def test_advance_decays_own_controllers(self, world):
        mine = world.add_controller(at(1, 1), ticks_to_downgrade=10)
        theirs = world.add_controller(at(5, 5), ticks_to_downgrade=10, my=False)

        world.advance(3)

        assert world.time() == 4
        assert mine.ticks_to_downgrade == 7
        assert theirs.ticks_to_downgrade == 10

    def test_advance_resets_cpu(self, world):
        world.charge_cpu(3.0)
        world.advance()

        assert world.cpu_used() == 0.0
