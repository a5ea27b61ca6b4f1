"""Task selection: fixed-priority scan for agents without a task.

Loaded agents walk a priority list, first match wins:

    1. controller close to downgrading      -> Upgrade
    2. store kinds in store_priority order  -> Store
    3. structures below repair threshold    -> Repair
    4. construction sites                   -> Construct
    5. any controller                       -> Upgrade

Empty agents pick an active source, biased toward later indices.
"""

from __future__ import annotations

import logging
import random
from collections.abc import Callable, Sequence

from creepcore.config import EngineSettings
from creepcore.core import RESOURCE_ENERGY
from creepcore.core.identity import ObjectKind, ObjectRef
from creepcore.core.task import Construct, Harvest, Repair, Store, TaskHandle, Upgrade
from creepcore.registry import VacantEntry
from creepcore.world.protocol import Agent, Controller, Damageable, Referent, Room, Storable

logger = logging.getLogger(__name__)


def biased_index(rng: random.Random, n: int) -> int:
    """Draw two uniform indices in [0, n) and keep the larger.

    Favors later candidates: P(index <= k) = ((k + 1) / n) ** 2.

    Raises:
        ValueError: If n is not positive.
    """
    if n <= 0:
        raise ValueError(f"Cannot pick from {n} candidates")
    return max(rng.randrange(n), rng.randrange(n))


def _ref(obj: Referent) -> ObjectRef:
    return ObjectRef(obj.id, obj.kind)


class TaskSelector:
    """Chooses a new task for an agent with a vacant registry entry.

    Args:
        settings: Priority policy (thresholds, store order, repair kinds).
        rng: Process-wide random generator used for source picks.
    """

    def __init__(self, settings: EngineSettings, rng: random.Random) -> None:
        self._settings = settings
        self._rng = rng
        self._scan: list[Callable[[Room], TaskHandle | None]] = [
            self._controller_in_danger,
            self._store_target,
            self._repair_target,
            self._construction_site,
            self._any_controller,
        ]

    def select(self, agent: Agent, room: Room) -> TaskHandle | None:
        """Pick a task for agent in room, or None when there is nothing to do."""
        if agent.store_used(RESOURCE_ENERGY) > 0:
            for scan in self._scan:
                task = scan(room)
                if task is not None:
                    return task
            return None
        return self._harvest_target(room)

    def assign(self, entry: VacantEntry, agent: Agent, room: Room) -> TaskHandle | None:
        """Select a task and insert it into the vacant entry.

        Returns:
            The inserted task, or None when the agent stays idle.
        """
        task = self.select(agent, room)
        if task is None:
            logger.debug("%s idle: nothing to do in %s", agent.name, room.name)
            return None
        entry.insert(task)
        logger.debug("%s assigned %s %s", agent.name, task.kind, task.target)
        return task

    def _controllers(self, room: Room) -> list[Controller]:
        return [
            s
            for s in room.structures()
            if s.kind == ObjectKind.CONTROLLER and isinstance(s, Controller)
        ]

    def _controller_in_danger(self, room: Room) -> TaskHandle | None:
        for controller in self._controllers(room):
            if not controller.my:
                continue
            if controller.ticks_to_downgrade < self._settings.downgrade_danger(controller.level):
                return Upgrade(_ref(controller))
        return None

    def _store_target(self, room: Room) -> TaskHandle | None:
        structures = room.structures()
        for kind in self._settings.store_priority:
            for s in structures:
                if s.kind != kind or not isinstance(s, Storable):
                    continue
                if s.store_free(RESOURCE_ENERGY) > 0:
                    return Store(_ref(s))
        return None

    def _repair_target(self, room: Room) -> TaskHandle | None:
        repair_kinds = self._settings.repair_kinds
        for s in room.structures():
            if s.kind not in repair_kinds or not isinstance(s, Damageable):
                continue
            if s.hits < self._settings.repair_threshold(room.terrain(s.pos)):
                return Repair(_ref(s))
        return None

    def _construction_site(self, room: Room) -> TaskHandle | None:
        for site in room.construction_sites():
            return Construct(_ref(site))
        return None

    def _any_controller(self, room: Room) -> TaskHandle | None:
        for controller in self._controllers(room):
            return Upgrade(_ref(controller))
        return None

    def _harvest_target(self, room: Room) -> TaskHandle | None:
        sources: Sequence[Referent] = room.active_sources()
        if not sources:
            return None
        return Harvest(_ref(sources[biased_index(self._rng, len(sources))]))
