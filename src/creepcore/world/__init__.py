"""Host world interface, referent resolution and the local in-memory host.

Architecture Note:
    world/ is the seam to the game. protocol.py says what the engine needs,
    resolver.py turns stable refs into tick-scoped objects, local.py is a
    complete in-memory host for tests and offline runs.
"""

from creepcore.world.local import Directive, LocalWorld
from creepcore.world.protocol import (
    Agent,
    Controller,
    Damageable,
    Hostile,
    HostWorld,
    Referent,
    Room,
    Spawn,
    Storable,
    Tower,
)
from creepcore.world.resolver import resolve, resolve_store_target

__all__ = [
    "HostWorld",
    "Room",
    "Agent",
    "Referent",
    "Storable",
    "Damageable",
    "Controller",
    "Spawn",
    "Tower",
    "Hostile",
    "resolve",
    "resolve_store_target",
    "LocalWorld",
    "Directive",
]
