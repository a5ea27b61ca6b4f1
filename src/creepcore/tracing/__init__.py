"""Tracing infrastructure: CPU timing and per-tick history.

Usage:
    from creepcore.tracing import InMemoryHistoryStore

    store = InMemoryHistoryStore(max_ticks=500)
    engine = TickEngine(history=store)
"""

from creepcore.tracing.memory import InMemoryHistoryStore
from creepcore.tracing.models import TickEvent, TickRecord
from creepcore.tracing.protocol import HistoryStore
from creepcore.tracing.timer import CpuTimer

__all__ = [
    "CpuTimer",
    "HistoryStore",
    "InMemoryHistoryStore",
    "TickEvent",
    "TickRecord",
]
