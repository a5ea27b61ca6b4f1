"""Task functionality: the TaskHandle union and its dict codec."""

from creepcore.core.task.models import (
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

__all__ = [
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
