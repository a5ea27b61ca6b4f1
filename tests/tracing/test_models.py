"""Tests for tracing data models.

Why these tests exist:
- TickRecord is what history stores keep and replay tools read
- Serialization must preserve events in order and the registry snapshot
- Optional fields must be handled properly
"""

import json

import pytest

from creepcore.tracing import TickEvent, TickRecord


@pytest.mark.parametrize(
    ("kwargs", "has_metadata"),
    [
        ({"tick": 42, "cpu_start": 0.1, "cpu_used": 2.5}, False),
        (
            {
                "tick": 100,
                "cpu_start": 0.4,
                "cpu_used": 7.25,
                "events": [TickEvent("spawn", "100-0", {"cost": 250})],
                "snapshot": {"a": {"kind": "harvest", "target": {"id": "s", "kind": "source"}}},
                "metadata": {"shard": "shard3"},
            },
            True,
        ),
    ],
    ids=["minimal", "full"],
)
def test_tick_record_to_dict(kwargs, has_metadata) -> None:
    """to_dict omits metadata when unset and is JSON-serializable."""
    data = TickRecord(**kwargs).to_dict()

    assert data["tick"] == kwargs["tick"]
    assert data["events"] == [e.to_dict() for e in kwargs.get("events", [])]
    assert data["snapshot"] == kwargs.get("snapshot", {})
    assert ("metadata" in data) == has_metadata
    json.dumps(data)


def test_tick_record_round_trip() -> None:
    """Why: history backends store dicts and must rebuild identical records."""
    original = TickRecord(
        tick=41230,
        cpu_start=0.12,
        cpu_used=3.4,
        events=[
            TickEvent("evict", "41200-0", {"outcome": "REFERENT_GONE"}),
            TickEvent("assign", "41200-0", {"kind": "harvest"}),
        ],
        snapshot={"41200-0": {"kind": "harvest", "target": {"id": "src1", "kind": "source"}}},
        metadata={"note": "test"},
    )

    restored = TickRecord.from_dict(json.loads(json.dumps(original.to_dict())))

    assert restored == original


def test_tick_record_from_dict_minimal() -> None:
    record = TickRecord.from_dict({"tick": 10, "cpu_start": 0.0, "cpu_used": 1.0})

    assert record.events == []
    assert record.snapshot == {}
    assert record.metadata is None


def test_events_of_keeps_order() -> None:
    record = TickRecord(
        tick=1,
        cpu_start=0.0,
        cpu_used=0.0,
        events=[
            TickEvent("assign", "a"),
            TickEvent("idle", "b"),
            TickEvent("assign", "c"),
        ],
    )

    assert [e.agent for e in record.events_of("assign")] == ["a", "c"]
    assert record.events_of("error") == []


def test_event_defaults_to_empty_detail() -> None:
    assert TickEvent.from_dict({"kind": "forget", "agent": "x"}) == TickEvent("forget", "x")
