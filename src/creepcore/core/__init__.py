"""Core functionalities: stateless value types and pure helpers.

Architecture Note:
    core/ holds immutable models (references, tasks, positions, parts) and
    pure functions over them. Anything that keeps state between ticks lives
    in registry/, scheduling/ or tracing/.
"""

from creepcore.core.geometry import Position, Terrain
from creepcore.core.identity import (
    STORE_KINDS,
    STRUCTURE_KINDS,
    AgentId,
    ObjectKind,
    ObjectRef,
)
from creepcore.core.outcome import Outcome, ReturnCode, classify, code_name
from creepcore.core.parts import PART_COST, BodyPart, loadout_cost
from creepcore.core.task import (
    Construct,
    Harvest,
    Repair,
    Store,
    TaskHandle,
    TaskKind,
    Upgrade,
    task_from_dict,
    task_to_dict,
)

RESOURCE_ENERGY = "energy"
"""The only resource kind the engine tracks."""

__all__ = [
    "RESOURCE_ENERGY",
    # Identity
    "AgentId",
    "ObjectKind",
    "ObjectRef",
    "STORE_KINDS",
    "STRUCTURE_KINDS",
    # Geometry
    "Position",
    "Terrain",
    # Parts
    "BodyPart",
    "PART_COST",
    "loadout_cost",
    # Outcomes
    "ReturnCode",
    "Outcome",
    "classify",
    "code_name",
    # Tasks
    "TaskHandle",
    "TaskKind",
    "Upgrade",
    "Harvest",
    "Construct",
    "Repair",
    "Store",
    "task_to_dict",
    "task_from_dict",
]
