"""Exception hierarchy.

Exceptions are reserved for programming and configuration mistakes. Expected
world churn (a target died, an action was refused) is reported through
creepcore.core.outcome.Outcome instead.
"""


class CreepCoreError(Exception):
    """Base class for all creepcore errors."""

    pass


class TaskError(CreepCoreError):
    """Raised when a task is built or decoded with an invalid target."""

    pass


class RegistryError(CreepCoreError):
    """Raised when an insert would give an agent a second active task."""

    pass
