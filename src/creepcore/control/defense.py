"""Tower defense: every tower shoots the nearest hostile in range."""

from __future__ import annotations

import logging
from collections.abc import Sequence

from creepcore.config import EngineSettings
from creepcore.core.geometry import Position
from creepcore.core.identity import ObjectKind
from creepcore.core.outcome import ReturnCode, code_name
from creepcore.world.protocol import Hostile, HostWorld, Tower

logger = logging.getLogger(__name__)


def nearest(pos: Position, hostiles: Sequence[Hostile], max_range: int) -> Hostile | None:
    """Closest hostile within max_range of pos. Ties go to the earlier one."""
    best: Hostile | None = None
    best_range = max_range + 1
    for hostile in hostiles:
        if hostile.pos.room != pos.room:
            continue
        distance = pos.range_to(hostile.pos)
        if distance < best_range:
            best, best_range = hostile, distance
    return best


class DefenseController:
    """Stateless per-tick tower targeting.

    Args:
        settings: Tower engagement range.
    """

    def __init__(self, settings: EngineSettings) -> None:
        self._settings = settings

    def run(self, world: HostWorld) -> int:
        """Issue attack directives.

        Returns:
            Number of attacks that succeeded.
        """
        hits = 0
        for room in world.rooms():
            hostiles = room.hostiles()
            if not hostiles:
                continue
            for tower in room.structures():
                if tower.kind != ObjectKind.TOWER or not isinstance(tower, Tower):
                    continue
                target = nearest(tower.pos, hostiles, self._settings.tower_range)
                if target is None:
                    continue
                code = tower.attack(target)
                if code == ReturnCode.OK:
                    hits += 1
                else:
                    logger.warning(
                        "Tower %s cannot attack %s: %s", tower.id, target.id, code_name(code)
                    )
        return hits
