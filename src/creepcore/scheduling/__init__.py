"""Tick scheduling: the engine that runs the phase plan."""

from creepcore.scheduling.engine import Phase, TickEngine

__all__ = [
    "Phase",
    "TickEngine",
]
