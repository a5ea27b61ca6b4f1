"""Referent resolution: stable ObjectRef to live, tick-scoped object.

Failure to resolve is the normal signal that the world moved on. Callers
evict the task holding the ref; nothing here raises.
"""

from __future__ import annotations

import logging

from creepcore.core.identity import STORE_KINDS, ObjectRef
from creepcore.world.protocol import HostWorld, Referent, Storable

logger = logging.getLogger(__name__)


def resolve(world: HostWorld, ref: ObjectRef) -> Referent | None:
    """Resolve ref for the current tick.

    Returns:
        The live object, or None if it is gone or its id now names an object
        of another kind.
    """
    obj = world.get_object(ref.id)
    if obj is None:
        return None
    if obj.kind != ref.kind:
        logger.debug("Ref %s now resolves to a %s", ref, obj.kind)
        return None
    return obj


def resolve_store_target(world: HostWorld, ref: ObjectRef) -> Storable | None:
    """Resolve a store target. Only store-capable kinds are looked up."""
    if ref.kind not in STORE_KINDS:
        return None
    obj = resolve(world, ref)
    if obj is None or not isinstance(obj, Storable):
        return None
    return obj
