"""Task handles: the tagged union an agent commits to across ticks.

Usage:
    task = Store(ObjectRef("abc", ObjectKind.EXTENSION))

    match task:
        case Harvest(source=ref):
            ...
        case Store(target=ref):
            ...

Each case wraps exactly one ObjectRef. The kind carried by the ref is the tag
for the store-target union, so adding a new storable structure only means
adding it to STORE_KINDS.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import StrEnum
from typing import Any, ClassVar, TypeAlias

from creepcore.core.identity import STORE_KINDS, STRUCTURE_KINDS, ObjectKind, ObjectRef
from creepcore.errors import TaskError


class TaskKind(StrEnum):
    """Discriminator of the TaskHandle union."""

    UPGRADE = "upgrade"
    HARVEST = "harvest"
    CONSTRUCT = "construct"
    REPAIR = "repair"
    STORE = "store"


def _check_kind(task: str, ref: ObjectRef, allowed: frozenset[ObjectKind]) -> None:
    if ref.kind not in allowed:
        raise TaskError(f"{task} cannot target {ref.kind} ({ref.id})")


@dataclass(frozen=True, slots=True)
class Upgrade:
    """Pour carried energy into a room controller."""

    controller: ObjectRef
    kind: ClassVar[TaskKind] = TaskKind.UPGRADE

    def __post_init__(self) -> None:
        _check_kind("Upgrade", self.controller, frozenset({ObjectKind.CONTROLLER}))

    @property
    def target(self) -> ObjectRef:
        return self.controller


@dataclass(frozen=True, slots=True)
class Harvest:
    """Mine energy from a source until full."""

    source: ObjectRef
    kind: ClassVar[TaskKind] = TaskKind.HARVEST

    def __post_init__(self) -> None:
        _check_kind("Harvest", self.source, frozenset({ObjectKind.SOURCE}))

    @property
    def target(self) -> ObjectRef:
        return self.source


@dataclass(frozen=True, slots=True)
class Construct:
    """Spend energy on a construction site."""

    site: ObjectRef
    kind: ClassVar[TaskKind] = TaskKind.CONSTRUCT

    def __post_init__(self) -> None:
        _check_kind("Construct", self.site, frozenset({ObjectKind.CONSTRUCTION_SITE}))

    @property
    def target(self) -> ObjectRef:
        return self.site


@dataclass(frozen=True, slots=True)
class Repair:
    """Single-shot repair of a damaged structure."""

    structure: ObjectRef
    kind: ClassVar[TaskKind] = TaskKind.REPAIR

    def __post_init__(self) -> None:
        _check_kind("Repair", self.structure, STRUCTURE_KINDS)

    @property
    def target(self) -> ObjectRef:
        return self.structure


@dataclass(frozen=True, slots=True)
class Store:
    """Transfer carried energy into a structure with free capacity."""

    target: ObjectRef
    kind: ClassVar[TaskKind] = TaskKind.STORE

    def __post_init__(self) -> None:
        _check_kind("Store", self.target, STORE_KINDS)


TaskHandle: TypeAlias = Upgrade | Harvest | Construct | Repair | Store

_BY_KIND: dict[TaskKind, type[Any]] = {
    TaskKind.UPGRADE: Upgrade,
    TaskKind.HARVEST: Harvest,
    TaskKind.CONSTRUCT: Construct,
    TaskKind.REPAIR: Repair,
    TaskKind.STORE: Store,
}


def task_to_dict(task: TaskHandle) -> dict[str, Any]:
    """Convert a task to a JSON-serializable dict."""
    return {"kind": task.kind.value, "target": task.target.to_dict()}


def task_from_dict(data: dict[str, Any]) -> TaskHandle:
    """Rebuild a task from task_to_dict() output.

    Raises:
        TaskError: If the kind or target is unknown or malformed.
    """
    try:
        task_cls = _BY_KIND[TaskKind(data["kind"])]
        ref = ObjectRef.from_dict(data["target"])
    except (KeyError, TypeError, ValueError) as e:
        raise TaskError(f"Cannot decode task from {data!r}") from e
    task: TaskHandle = task_cls(ref)
    return task
