"""creepcore: per-tick task assignment and execution for colony agents.

Usage:
    from creepcore import EngineSettings, LocalWorld, Position, TickEngine

    world = LocalWorld()
    world.add_source(Position(10, 10, "W1N1"))
    world.add_agent("worker", Position(12, 12, "W1N1"))

    engine = TickEngine(EngineSettings(rng_seed=1))
    record = engine.tick(world)      # once per host tick
    world.advance()
"""

__version__ = "0.1.0"

# Core primitives
from creepcore.core import (
    RESOURCE_ENERGY,
    STORE_KINDS,
    AgentId,
    BodyPart,
    Construct,
    Harvest,
    ObjectKind,
    ObjectRef,
    Outcome,
    Position,
    Repair,
    ReturnCode,
    Store,
    TaskHandle,
    TaskKind,
    Terrain,
    Upgrade,
)

# Configuration
from creepcore.config import EngineSettings, PopulationRow

# Controllers
from creepcore.control import (
    DefenseController,
    PopulationController,
    TaskExecutor,
    TaskSelector,
)
from creepcore.errors import CreepCoreError, RegistryError, TaskError
from creepcore.log import setup_logging

# Registry
from creepcore.registry import OccupiedEntry, TaskRegistry, VacantEntry

# Engine
from creepcore.scheduling import TickEngine

# Tracing
from creepcore.tracing import CpuTimer, HistoryStore, InMemoryHistoryStore, TickRecord

# Host world
from creepcore.world import HostWorld, LocalWorld, resolve

__all__ = [
    # Version
    "__version__",
    # Core
    "RESOURCE_ENERGY",
    "STORE_KINDS",
    "AgentId",
    "ObjectKind",
    "ObjectRef",
    "Position",
    "Terrain",
    "BodyPart",
    "ReturnCode",
    "Outcome",
    "TaskHandle",
    "TaskKind",
    "Upgrade",
    "Harvest",
    "Construct",
    "Repair",
    "Store",
    # Errors
    "CreepCoreError",
    "TaskError",
    "RegistryError",
    # Config
    "EngineSettings",
    "PopulationRow",
    "setup_logging",
    # Registry
    "TaskRegistry",
    "OccupiedEntry",
    "VacantEntry",
    # Controllers
    "TaskSelector",
    "TaskExecutor",
    "PopulationController",
    "DefenseController",
    # Engine
    "TickEngine",
    # Tracing
    "CpuTimer",
    "HistoryStore",
    "InMemoryHistoryStore",
    "TickRecord",
    # World
    "HostWorld",
    "LocalWorld",
    "resolve",
]
