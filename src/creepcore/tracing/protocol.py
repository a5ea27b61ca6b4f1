"""Protocol for tick history storage backends."""

from __future__ import annotations

from typing import TYPE_CHECKING, Any, Protocol, runtime_checkable

if TYPE_CHECKING:
    from creepcore.tracing.models import TickEvent, TickRecord


@runtime_checkable
class HistoryStore(Protocol):
    """Stores TickRecords and gives random access to past ticks.

    Usage:
        store = InMemoryHistoryStore(max_ticks=100)
        engine = TickEngine(history=store)
        engine.tick(world)

        snapshot = store.get_snapshot(tick=world.time())
    """

    def record_tick(self, record: TickRecord) -> None:
        """Record a tick. Bounded stores may drop the oldest records."""
        ...

    def get_tick(self, tick: int) -> TickRecord | None:
        """Get a complete tick record, None if not stored."""
        ...

    def get_snapshot(self, tick: int) -> dict[str, Any] | None:
        """Get the registry snapshot at a tick, None if not stored."""
        ...

    def get_events(self, start_tick: int, end_tick: int) -> list[TickEvent]:
        """Flattened events of the inclusive tick range."""
        ...

    def get_tick_range(self) -> tuple[int, int] | None:
        """(min_tick, max_tick) if history exists, None if empty."""
        ...

    def clear(self) -> None:
        """Clear all stored history."""
        ...

    @property
    def tick_count(self) -> int:
        """Number of ticks currently stored."""
        ...
