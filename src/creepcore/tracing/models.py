"""Data models for tick tracing.

These models are plain data and convert to JSON-compatible dicts so any
history backend can store them.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any


@dataclass(frozen=True, slots=True)
class TickEvent:
    """Something worth recording that happened during a tick.

    Attributes:
        kind: Event type: "assign", "evict", "idle", "forget", "error",
            "defense", "spawn" or "spawn_rejected".
        agent: Agent or spawn name the event is about.
        detail: Free-form JSON-compatible payload.
    """

    kind: str
    agent: str
    detail: dict[str, Any] = field(default_factory=dict)

    def to_dict(self) -> dict[str, Any]:
        """Convert to JSON-serializable dictionary."""
        return {"kind": self.kind, "agent": self.agent, "detail": self.detail}

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> TickEvent:
        """Create from dictionary."""
        return cls(kind=data["kind"], agent=data["agent"], detail=data.get("detail", {}))


@dataclass(slots=True)
class TickRecord:
    """Complete record of a single tick.

    Attributes:
        tick: Host tick counter.
        cpu_start: CPU already used when the engine started the tick.
        cpu_used: CPU the engine consumed during the tick.
        events: Events in the order they happened.
        snapshot: Task registry at the end of the tick.
        metadata: Optional annotations.

    Example:
        record = TickRecord(
            tick=41230,
            cpu_start=0.12,
            cpu_used=3.4,
            events=[TickEvent("evict", "41200-0", {"outcome": "REFERENT_GONE"})],
            snapshot={"41200-1": {"kind": "harvest", "target": {...}}},
        )
    """

    tick: int
    cpu_start: float
    cpu_used: float
    events: list[TickEvent] = field(default_factory=list)
    snapshot: dict[str, Any] = field(default_factory=dict)
    metadata: dict[str, Any] | None = None

    def events_of(self, kind: str) -> list[TickEvent]:
        """Events of one kind, in order."""
        return [e for e in self.events if e.kind == kind]

    def to_dict(self) -> dict[str, Any]:
        """Convert to JSON-serializable dictionary."""
        result: dict[str, Any] = {
            "tick": self.tick,
            "cpu_start": self.cpu_start,
            "cpu_used": self.cpu_used,
            "events": [e.to_dict() for e in self.events],
            "snapshot": self.snapshot,
        }
        if self.metadata is not None:
            result["metadata"] = self.metadata
        return result

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> TickRecord:
        """Create from dictionary (for deserialization)."""
        return cls(
            tick=data["tick"],
            cpu_start=data["cpu_start"],
            cpu_used=data["cpu_used"],
            events=[TickEvent.from_dict(e) for e in data.get("events", [])],
            snapshot=data.get("snapshot", {}),
            metadata=data.get("metadata"),
        )
