"""Per-tick controllers: task selection and execution, population, defense."""

from creepcore.control.defense import DefenseController, nearest
from creepcore.control.executor import Execution, TaskExecutor
from creepcore.control.population import PopulationController, SpawnAttempt, choose_row
from creepcore.control.selector import TaskSelector, biased_index

__all__ = [
    "TaskSelector",
    "biased_index",
    "TaskExecutor",
    "Execution",
    "PopulationController",
    "SpawnAttempt",
    "choose_row",
    "DefenseController",
    "nearest",
]
