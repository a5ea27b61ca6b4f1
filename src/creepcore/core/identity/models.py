"""Identity models: agent names and stable object references.

Usage:
    ref = ObjectRef("5bbcac4b9099fc012e635c8f", ObjectKind.SOURCE)
    agent: AgentId = "41230-0"
"""

from dataclasses import dataclass
from enum import StrEnum
from typing import TypeAlias

AgentId: TypeAlias = str
"""Agent name as reported by the host. Stable for the agent's whole life."""


class ObjectKind(StrEnum):
    """Kinds of world objects a task can point at."""

    CONTROLLER = "controller"
    SOURCE = "source"
    CONSTRUCTION_SITE = "construction_site"
    SPAWN = "spawn"
    EXTENSION = "extension"
    TOWER = "tower"
    ROAD = "road"
    CONTAINER = "container"
    STORAGE = "storage"
    WALL = "wall"


STORE_KINDS: frozenset[ObjectKind] = frozenset(
    {
        ObjectKind.SPAWN,
        ObjectKind.EXTENSION,
        ObjectKind.TOWER,
        ObjectKind.CONTAINER,
        ObjectKind.STORAGE,
    }
)
"""Kinds exposing a capacity query. Extend this set when the host grows new stores."""

STRUCTURE_KINDS: frozenset[ObjectKind] = frozenset(ObjectKind) - {
    ObjectKind.SOURCE,
    ObjectKind.CONSTRUCTION_SITE,
}


@dataclass(frozen=True, slots=True)
class ObjectRef:
    """Stable, serializable handle to a world object.

    Live host objects are only valid for the tick they were fetched in, so
    tasks hold one of these and re-resolve it every tick.
    """

    id: str
    kind: ObjectKind

    def __str__(self) -> str:
        return f"{self.kind}:{self.id}"

    def to_dict(self) -> dict[str, str]:
        """Convert to a plain dict."""
        return {"id": self.id, "kind": self.kind.value}

    @classmethod
    def from_dict(cls, data: dict[str, str]) -> "ObjectRef":
        """Create from a dict produced by to_dict()."""
        return cls(id=data["id"], kind=ObjectKind(data["kind"]))
