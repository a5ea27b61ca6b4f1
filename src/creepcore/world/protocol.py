"""Host world protocol: everything the engine needs from the game.

The host owns the real objects. It hands out live handles that are only
valid for the current tick; the engine keeps ObjectRefs and goes back through
HostWorld.get_object every tick.

Usage:
    world = LocalWorld()           # or any object satisfying HostWorld
    engine = TickEngine()
    engine.tick(world)
"""

from __future__ import annotations

from collections.abc import Sequence
from typing import Protocol, runtime_checkable

from creepcore.core.geometry import Position, Terrain
from creepcore.core.identity import ObjectKind
from creepcore.core.outcome import ReturnCode
from creepcore.core.parts import BodyPart


@runtime_checkable
class Referent(Protocol):
    """Live, tick-scoped world object."""

    @property
    def id(self) -> str: ...

    @property
    def kind(self) -> ObjectKind: ...

    @property
    def pos(self) -> Position: ...


@runtime_checkable
class Storable(Referent, Protocol):
    """Referent with a capacity query for a single resource kind."""

    def store_used(self, resource: str) -> int:
        """Amount of resource currently held."""
        ...

    def store_free(self, resource: str) -> int:
        """Room left for resource."""
        ...


@runtime_checkable
class Damageable(Referent, Protocol):
    """Referent with durability."""

    @property
    def hits(self) -> int: ...

    @property
    def hits_max(self) -> int: ...


@runtime_checkable
class Controller(Referent, Protocol):
    """Room controller that decays when not upgraded."""

    @property
    def level(self) -> int: ...

    @property
    def ticks_to_downgrade(self) -> int: ...

    @property
    def my(self) -> bool: ...


class Hostile(Protocol):
    """Enemy agent visible in a room."""

    @property
    def id(self) -> str: ...

    @property
    def pos(self) -> Position: ...


@runtime_checkable
class Spawn(Storable, Protocol):
    """Structure that creates agents."""

    @property
    def busy(self) -> bool:
        """True while a previous agent is still being produced."""
        ...

    def spawn_agent(self, loadout: Sequence[BodyPart], name: str) -> ReturnCode:
        """Start producing an agent."""
        ...


@runtime_checkable
class Tower(Storable, Protocol):
    """Defensive structure."""

    def attack(self, target: Hostile) -> ReturnCode:
        """Fire at a hostile anywhere in the room."""
        ...


class Agent(Protocol):
    """Handle to one of our agents for the current tick."""

    @property
    def name(self) -> str: ...

    @property
    def pos(self) -> Position: ...

    @property
    def spawning(self) -> bool:
        """Agents still being produced cannot act and are skipped."""
        ...

    def store_used(self, resource: str) -> int: ...

    def store_free(self, resource: str) -> int: ...

    def store_capacity(self, resource: str) -> int: ...

    def move_to(self, target: Position, reuse_path: int) -> ReturnCode:
        """Step toward target, reusing a cached path for reuse_path ticks."""
        ...

    def harvest(self, source: Referent) -> ReturnCode: ...

    def build(self, site: Referent) -> ReturnCode: ...

    def transfer(self, target: Storable, resource: str) -> ReturnCode: ...

    def repair(self, structure: Referent) -> ReturnCode: ...

    def upgrade_controller(self, controller: Controller) -> ReturnCode: ...


class Room(Protocol):
    """Snapshot query interface for one room."""

    @property
    def name(self) -> str: ...

    @property
    def energy_available(self) -> int:
        """Energy spawns may draw on right now (spawns plus extensions)."""
        ...

    def structures(self) -> Sequence[Referent]:
        """All structures, controller included, tagged by kind."""
        ...

    def construction_sites(self) -> Sequence[Referent]: ...

    def active_sources(self) -> Sequence[Referent]:
        """Sources that still hold energy."""
        ...

    def hostiles(self) -> Sequence[Hostile]: ...

    def terrain(self, pos: Position) -> Terrain: ...


@runtime_checkable
class HostWorld(Protocol):
    """The external collaborator driving the engine."""

    def time(self) -> int:
        """Monotonic tick counter."""
        ...

    def cpu_used(self) -> float:
        """CPU consumed since the start of the current tick."""
        ...

    def rooms(self) -> Sequence[Room]: ...

    def room(self, name: str) -> Room | None: ...

    def agents(self) -> Sequence[Agent]: ...

    def get_object(self, object_id: str) -> Referent | None:
        """Look an object up by its stable id. None if it no longer exists."""
        ...
