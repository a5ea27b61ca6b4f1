"""Identity functionality: agent names and stable object references."""

from creepcore.core.identity.models import (
    STORE_KINDS,
    STRUCTURE_KINDS,
    AgentId,
    ObjectKind,
    ObjectRef,
)

__all__ = [
    "AgentId",
    "ObjectKind",
    "ObjectRef",
    "STORE_KINDS",
    "STRUCTURE_KINDS",
]
