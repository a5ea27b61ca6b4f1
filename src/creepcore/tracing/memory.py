"""Bounded in-memory history store."""

from __future__ import annotations

from collections import OrderedDict
from typing import Any

from creepcore.tracing.models import TickEvent, TickRecord


class InMemoryHistoryStore:
    """Keeps the last max_ticks records in memory.

    Args:
        max_ticks: Capacity; the oldest tick is dropped when exceeded.
    """

    def __init__(self, max_ticks: int = 100) -> None:
        if max_ticks < 1:
            raise ValueError(f"max_ticks must be positive, got {max_ticks}")
        self._max_ticks = max_ticks
        self._records: OrderedDict[int, TickRecord] = OrderedDict()

    def record_tick(self, record: TickRecord) -> None:
        self._records[record.tick] = record
        self._records.move_to_end(record.tick)
        while len(self._records) > self._max_ticks:
            self._records.popitem(last=False)

    def get_tick(self, tick: int) -> TickRecord | None:
        return self._records.get(tick)

    def get_snapshot(self, tick: int) -> dict[str, Any] | None:
        record = self._records.get(tick)
        return None if record is None else record.snapshot

    def get_events(self, start_tick: int, end_tick: int) -> list[TickEvent]:
        events: list[TickEvent] = []
        for tick, record in self._records.items():
            if start_tick <= tick <= end_tick:
                events.extend(record.events)
        return events

    def get_tick_range(self) -> tuple[int, int] | None:
        if not self._records:
            return None
        return min(self._records), max(self._records)

    def clear(self) -> None:
        self._records.clear()

    @property
    def tick_count(self) -> int:
        return len(self._records)
