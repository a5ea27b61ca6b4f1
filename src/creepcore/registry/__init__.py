"""Task registry service.

Architecture Note:
    registry/ is stateful: it holds the only data the engine keeps between
    ticks. Everything else is re-read from the host world every tick.
"""

from creepcore.registry.registry import OccupiedEntry, TaskRegistry, VacantEntry

__all__ = [
    "TaskRegistry",
    "OccupiedEntry",
    "VacantEntry",
]
