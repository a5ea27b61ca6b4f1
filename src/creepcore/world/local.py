"""Local in-memory host world.

Simple dict-based implementation of the HostWorld protocol, suitable for
tests, demos and replaying scenarios offline. Game rules are deliberately
small: enough to exercise every directive and return code the engine
handles, nothing more.

Usage:
    world = LocalWorld()
    room = world.add_room("W1N1")
    source = world.add_source(Position(10, 10, "W1N1"))
    world.add_agent("a", Position(12, 12, "W1N1"), body=[WORK, CARRY, MOVE])

    engine.tick(world)
    world.advance()

Every directive the engine issues is appended to world.directives.
"""

from __future__ import annotations

from collections.abc import Sequence
from dataclasses import dataclass, field
from typing import Any

from creepcore.config import CONTROLLER_DOWNGRADE, ROAD_HITS
from creepcore.core import RESOURCE_ENERGY
from creepcore.core.geometry import Position, Terrain
from creepcore.core.identity import ObjectKind
from creepcore.core.outcome import ReturnCode
from creepcore.core.parts import BodyPart, loadout_cost

HARVEST_POWER = 2
BUILD_POWER = 5
REPAIR_POWER = 100
UPGRADE_POWER = 1
TOWER_POWER = 600
TOWER_ENERGY_COST = 10
SPAWN_TIME = 3
CARRY_CAPACITY = 50


@dataclass(frozen=True, slots=True)
class Directive:
    """One directive issued to the local world."""

    tick: int
    actor: str
    action: str
    target: str | None = None
    code: int = ReturnCode.OK
    reuse_path: int | None = None


@dataclass(eq=False)
class LocalObject:
    """Base of every object the local world can look up by id."""

    id: str
    kind: ObjectKind
    pos: Position
    world: LocalWorld = field(repr=False)


@dataclass(eq=False)
class LocalSource(LocalObject):
    energy: int = 3000
    energy_capacity: int = 3000


@dataclass(eq=False)
class LocalSite(LocalObject):
    progress: int = 0
    progress_total: int = 300


@dataclass(eq=False)
class LocalController(LocalObject):
    level: int = 1
    ticks_to_downgrade: int = 20_000
    my: bool = True
    progress: int = 0


@dataclass(eq=False)
class LocalStructure(LocalObject):
    hits: int = 1000
    hits_max: int = 1000


@dataclass(eq=False)
class LocalStoreStructure(LocalStructure):
    energy: int = 0
    capacity: int = 50

    def store_used(self, resource: str) -> int:
        return self.energy if resource == RESOURCE_ENERGY else 0

    def store_free(self, resource: str) -> int:
        return self.capacity - self.energy if resource == RESOURCE_ENERGY else 0


@dataclass(eq=False)
class LocalTower(LocalStoreStructure):
    capacity: int = 1000

    def attack(self, target: Any) -> ReturnCode:
        code = self._attack(target)
        self.world._log(self.id, "attack", getattr(target, "id", None), code)
        return code

    def _attack(self, target: Any) -> ReturnCode:
        if not isinstance(target, LocalHostile) or target.id not in self.world._hostiles:
            return ReturnCode.ERR_INVALID_TARGET
        if self.energy < TOWER_ENERGY_COST:
            return ReturnCode.ERR_NOT_ENOUGH_RESOURCES
        self.energy -= TOWER_ENERGY_COST
        target.hits -= TOWER_POWER
        if target.hits <= 0:
            del self.world._hostiles[target.id]
        return ReturnCode.OK


@dataclass(eq=False)
class LocalSpawn(LocalStoreStructure):
    capacity: int = 300
    spawning_ticks: int = 0

    @property
    def busy(self) -> bool:
        return self.spawning_ticks > 0

    def spawn_agent(self, loadout: Sequence[BodyPart], name: str) -> ReturnCode:
        code = self._spawn(loadout, name)
        self.world._log(self.id, "spawn", name, code)
        return code

    def _spawn(self, loadout: Sequence[BodyPart], name: str) -> ReturnCode:
        if self.busy:
            return ReturnCode.ERR_BUSY
        if name in self.world._agents:
            return ReturnCode.ERR_NAME_EXISTS
        if not loadout:
            return ReturnCode.ERR_INVALID_ARGS
        room = self.world._rooms[self.pos.room]
        cost = loadout_cost(loadout)
        if cost > room.energy_available:
            return ReturnCode.ERR_NOT_ENOUGH_RESOURCES
        room._withdraw(cost)
        self.spawning_ticks = SPAWN_TIME * len(loadout)
        self.world.add_agent(
            name, self.pos, body=list(loadout), spawning_ticks=self.spawning_ticks
        )
        return ReturnCode.OK


@dataclass(eq=False)
class LocalHostile:
    id: str
    pos: Position
    hits: int = 1000


@dataclass(eq=False)
class LocalAgent:
    """Our agent. Directives mutate the local world immediately."""

    name: str
    pos: Position
    body: list[BodyPart]
    world: LocalWorld = field(repr=False)
    energy: int = 0
    capacity: int | None = None
    spawning_ticks: int = 0

    @property
    def spawning(self) -> bool:
        return self.spawning_ticks > 0

    def _parts(self, part: BodyPart) -> int:
        return sum(1 for p in self.body if p == part)

    def store_capacity(self, resource: str) -> int:
        if resource != RESOURCE_ENERGY:
            return 0
        if self.capacity is not None:
            return self.capacity
        return CARRY_CAPACITY * self._parts(BodyPart.CARRY)

    def store_used(self, resource: str) -> int:
        return self.energy if resource == RESOURCE_ENERGY else 0

    def store_free(self, resource: str) -> int:
        return self.store_capacity(resource) - self.store_used(resource)

    def move_to(self, target: Position, reuse_path: int) -> ReturnCode:
        if self._parts(BodyPart.MOVE) == 0:
            code = ReturnCode.ERR_NO_BODYPART
        elif target.room != self.pos.room:
            code = ReturnCode.ERR_NO_PATH
        else:
            self.pos = self.pos.step_toward(target)
            code = ReturnCode.OK
        self.world._log(self.name, "move", f"{target.x},{target.y}", code, reuse_path=reuse_path)
        return code

    def harvest(self, source: Any) -> ReturnCode:
        code = self._harvest(source)
        self.world._log(self.name, "harvest", source.id, code)
        return code

    def _harvest(self, source: Any) -> ReturnCode:
        if not isinstance(source, LocalSource):
            return ReturnCode.ERR_INVALID_TARGET
        if not self.pos.is_near_to(source.pos):
            return ReturnCode.ERR_NOT_IN_RANGE
        work = self._parts(BodyPart.WORK)
        if work == 0:
            return ReturnCode.ERR_NO_BODYPART
        if source.energy == 0:
            return ReturnCode.ERR_NOT_ENOUGH_RESOURCES
        free = self.store_free(RESOURCE_ENERGY)
        if free == 0:
            return ReturnCode.ERR_FULL
        gained = min(HARVEST_POWER * work, source.energy, free)
        source.energy -= gained
        self.energy += gained
        return ReturnCode.OK

    def transfer(self, target: Any, resource: str) -> ReturnCode:
        code = self._transfer(target, resource)
        self.world._log(self.name, "transfer", target.id, code)
        return code

    def _transfer(self, target: Any, resource: str) -> ReturnCode:
        if not isinstance(target, LocalStoreStructure):
            return ReturnCode.ERR_INVALID_TARGET
        if not self.pos.is_near_to(target.pos):
            return ReturnCode.ERR_NOT_IN_RANGE
        if self.store_used(resource) == 0:
            return ReturnCode.ERR_NOT_ENOUGH_RESOURCES
        free = target.store_free(resource)
        if free == 0:
            return ReturnCode.ERR_FULL
        amount = min(free, self.energy)
        self.energy -= amount
        target.energy += amount
        return ReturnCode.OK

    def build(self, site: Any) -> ReturnCode:
        code = self._build(site)
        self.world._log(self.name, "build", site.id, code)
        return code

    def _build(self, site: Any) -> ReturnCode:
        if not isinstance(site, LocalSite):
            return ReturnCode.ERR_INVALID_TARGET
        if not self.pos.in_range_to(site.pos, 3):
            return ReturnCode.ERR_NOT_IN_RANGE
        work = self._parts(BodyPart.WORK)
        if work == 0:
            return ReturnCode.ERR_NO_BODYPART
        if self.energy == 0:
            return ReturnCode.ERR_NOT_ENOUGH_RESOURCES
        spent = min(BUILD_POWER * work, self.energy, site.progress_total - site.progress)
        self.energy -= spent
        site.progress += spent
        if site.progress >= site.progress_total:
            self.world.remove(site.id)
        return ReturnCode.OK

    def repair(self, structure: Any) -> ReturnCode:
        code = self._repair(structure)
        self.world._log(self.name, "repair", structure.id, code)
        return code

    def _repair(self, structure: Any) -> ReturnCode:
        if not isinstance(structure, LocalStructure):
            return ReturnCode.ERR_INVALID_TARGET
        if not self.pos.in_range_to(structure.pos, 3):
            return ReturnCode.ERR_NOT_IN_RANGE
        work = self._parts(BodyPart.WORK)
        if work == 0:
            return ReturnCode.ERR_NO_BODYPART
        if self.energy == 0:
            return ReturnCode.ERR_NOT_ENOUGH_RESOURCES
        spent = min(work, self.energy)
        self.energy -= spent
        structure.hits = min(structure.hits_max, structure.hits + REPAIR_POWER * spent)
        return ReturnCode.OK

    def upgrade_controller(self, controller: Any) -> ReturnCode:
        code = self._upgrade(controller)
        self.world._log(self.name, "upgrade", controller.id, code)
        return code

    def _upgrade(self, controller: Any) -> ReturnCode:
        if not isinstance(controller, LocalController):
            return ReturnCode.ERR_INVALID_TARGET
        if not controller.my:
            return ReturnCode.ERR_NOT_OWNER
        if not self.pos.in_range_to(controller.pos, 3):
            return ReturnCode.ERR_NOT_IN_RANGE
        work = self._parts(BodyPart.WORK)
        if work == 0:
            return ReturnCode.ERR_NO_BODYPART
        if self.energy == 0:
            return ReturnCode.ERR_NOT_ENOUGH_RESOURCES
        spent = min(UPGRADE_POWER * work, self.energy)
        self.energy -= spent
        controller.progress += spent
        full = CONTROLLER_DOWNGRADE.get(controller.level, 0)
        controller.ticks_to_downgrade = min(full, controller.ticks_to_downgrade + 100)
        return ReturnCode.OK


class LocalRoom:
    """One room: terrain plus the ids of the objects inside it."""

    def __init__(self, world: LocalWorld, name: str, terrain: dict[tuple[int, int], Terrain]):
        self._world = world
        self.name = name
        self._terrain = terrain

    def _objects(self) -> list[Any]:
        return [o for o in self._world._objects.values() if o.pos.room == self.name]

    @property
    def energy_available(self) -> int:
        return sum(s.energy for s in self._spawn_stores())

    def _spawn_stores(self) -> list[LocalStoreStructure]:
        kinds = (ObjectKind.SPAWN, ObjectKind.EXTENSION)
        return [o for o in self._objects() if o.kind in kinds]

    def _withdraw(self, amount: int) -> None:
        for store in self._spawn_stores():
            taken = min(store.energy, amount)
            store.energy -= taken
            amount -= taken
            if amount == 0:
                return

    def structures(self) -> list[Any]:
        return [o for o in self._objects() if isinstance(o, LocalStructure | LocalController)]

    def construction_sites(self) -> list[Any]:
        return [o for o in self._objects() if isinstance(o, LocalSite)]

    def active_sources(self) -> list[Any]:
        return [o for o in self._objects() if isinstance(o, LocalSource) and o.energy > 0]

    def hostiles(self) -> list[LocalHostile]:
        return [h for h in self._world._hostiles.values() if h.pos.room == self.name]

    def terrain(self, pos: Position) -> Terrain:
        return self._terrain.get((pos.x, pos.y), Terrain.PLAIN)


class LocalWorld:
    """In-memory HostWorld.

    Structure:
        _objects[object_id] = LocalObject
        _agents[name] = LocalAgent
        _hostiles[hostile_id] = LocalHostile

    Args:
        time: Starting tick.
    """

    def __init__(self, time: int = 1) -> None:
        self._time = time
        self._cpu = 0.0
        self._next_id = 0
        self._rooms: dict[str, LocalRoom] = {}
        self._objects: dict[str, Any] = {}
        self._agents: dict[str, LocalAgent] = {}
        self._hostiles: dict[str, LocalHostile] = {}
        self.directives: list[Directive] = []

    # HostWorld protocol

    def time(self) -> int:
        return self._time

    def cpu_used(self) -> float:
        return self._cpu

    def rooms(self) -> list[LocalRoom]:
        return list(self._rooms.values())

    def room(self, name: str) -> LocalRoom | None:
        return self._rooms.get(name)

    def agents(self) -> list[LocalAgent]:
        return list(self._agents.values())

    def get_object(self, object_id: str) -> Any | None:
        return self._objects.get(object_id)

    # Scenario building

    def add_room(
        self, name: str, terrain: dict[tuple[int, int], Terrain] | None = None
    ) -> LocalRoom:
        """Create a room. Tiles missing from terrain are plain."""
        room = LocalRoom(self, name, dict(terrain or {}))
        self._rooms[name] = room
        return room

    def _new_id(self, prefix: str) -> str:
        self._next_id += 1
        return f"{prefix}{self._next_id}"

    def _add(self, obj: Any) -> Any:
        if obj.pos.room not in self._rooms:
            self.add_room(obj.pos.room)
        self._objects[obj.id] = obj
        return obj

    def add_source(self, pos: Position, energy: int = 3000) -> LocalSource:
        return self._add(
            LocalSource(self._new_id("src"), ObjectKind.SOURCE, pos, self, energy=energy)
        )

    def add_site(self, pos: Position, progress_total: int = 300) -> LocalSite:
        return self._add(
            LocalSite(
                self._new_id("site"),
                ObjectKind.CONSTRUCTION_SITE,
                pos,
                self,
                progress_total=progress_total,
            )
        )

    def add_controller(
        self,
        pos: Position,
        level: int = 1,
        ticks_to_downgrade: int | None = None,
        my: bool = True,
    ) -> LocalController:
        ttd = ticks_to_downgrade
        if ttd is None:
            ttd = CONTROLLER_DOWNGRADE.get(level, 0)
        return self._add(
            LocalController(
                self._new_id("ctrl"),
                ObjectKind.CONTROLLER,
                pos,
                self,
                level=level,
                ticks_to_downgrade=ttd,
                my=my,
            )
        )

    def add_spawn(self, pos: Position, energy: int = 300) -> LocalSpawn:
        return self._add(
            LocalSpawn(self._new_id("spawn"), ObjectKind.SPAWN, pos, self, energy=energy)
        )

    def add_store(
        self, kind: ObjectKind, pos: Position, energy: int = 0, capacity: int = 50
    ) -> LocalStoreStructure:
        """Add an extension, container or storage."""
        return self._add(
            LocalStoreStructure(
                self._new_id(kind.value), kind, pos, self, energy=energy, capacity=capacity
            )
        )

    def add_tower(self, pos: Position, energy: int = 1000) -> LocalTower:
        return self._add(
            LocalTower(self._new_id("tower"), ObjectKind.TOWER, pos, self, energy=energy)
        )

    def add_road(self, pos: Position, hits: int | None = None) -> LocalStructure:
        """Add a road whose hits_max follows the terrain it sits on."""
        room = self._rooms.get(pos.room) or self.add_room(pos.room)
        hits_max = ROAD_HITS[room.terrain(pos)]
        return self._add(
            LocalStructure(
                self._new_id("road"),
                ObjectKind.ROAD,
                pos,
                self,
                hits=hits_max if hits is None else hits,
                hits_max=hits_max,
            )
        )

    def add_agent(
        self,
        name: str,
        pos: Position,
        body: list[BodyPart] | None = None,
        energy: int = 0,
        capacity: int | None = None,
        spawning_ticks: int = 0,
    ) -> LocalAgent:
        if pos.room not in self._rooms:
            self.add_room(pos.room)
        agent = LocalAgent(
            name=name,
            pos=pos,
            body=list(body or [BodyPart.WORK, BodyPart.CARRY, BodyPart.MOVE]),
            world=self,
            energy=energy,
            capacity=capacity,
            spawning_ticks=spawning_ticks,
        )
        self._agents[name] = agent
        return agent

    def add_hostile(self, pos: Position, hits: int = 1000) -> LocalHostile:
        hostile = LocalHostile(self._new_id("hostile"), pos, hits)
        self._hostiles[hostile.id] = hostile
        return hostile

    def remove(self, object_id: str) -> None:
        """Remove an object; refs to it stop resolving."""
        self._objects.pop(object_id, None)

    def kill(self, name: str) -> None:
        """Remove an agent."""
        self._agents.pop(name, None)

    def charge_cpu(self, amount: float) -> None:
        """Pretend the current tick consumed more CPU."""
        self._cpu += amount

    def advance(self, ticks: int = 1) -> None:
        """Move the clock forward: timers decay, spawns finish, CPU resets."""
        for _ in range(ticks):
            self._time += 1
            self._cpu = 0.0
            for obj in self._objects.values():
                if isinstance(obj, LocalController) and obj.my:
                    obj.ticks_to_downgrade = max(0, obj.ticks_to_downgrade - 1)
                elif isinstance(obj, LocalSpawn) and obj.spawning_ticks:
                    obj.spawning_ticks -= 1
            for agent in self._agents.values():
                if agent.spawning_ticks:
                    agent.spawning_ticks -= 1

    def directives_of(self, action: str, actor: str | None = None) -> list[Directive]:
        """Directives filtered by action and optionally by actor."""
        return [
            d
            for d in self.directives
            if d.action == action and (actor is None or d.actor == actor)
        ]

    def _log(
        self,
        actor: str,
        action: str,
        target: str | None,
        code: int,
        reuse_path: int | None = None,
    ) -> None:
        self.directives.append(
            Directive(self._time, actor, action, target, int(code), reuse_path)
        )
