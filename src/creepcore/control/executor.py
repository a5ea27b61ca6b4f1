"""Task execution: drive an agent one step through its current task.

For an occupied registry entry the executor checks the task still fits the
agent's load, re-resolves the target, and then either performs the terminal
action (in range) or moves toward the target (out of range). Eviction
happens here and only here.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import assert_never, cast

from creepcore.config import EngineSettings
from creepcore.core import RESOURCE_ENERGY
from creepcore.core.identity import AgentId
from creepcore.core.outcome import Outcome, ReturnCode, classify, code_name
from creepcore.core.task import Construct, Harvest, Repair, Store, TaskHandle, Upgrade
from creepcore.registry import OccupiedEntry
from creepcore.world.protocol import Agent, Controller, HostWorld, Referent, Storable
from creepcore.world.resolver import resolve, resolve_store_target

logger = logging.getLogger(__name__)


@dataclass(frozen=True, slots=True)
class Execution:
    """Result of executing one agent's task for one tick.

    Attributes:
        agent: Agent that ran the task.
        task: The task as it was at the start of the tick.
        outcome: Classified result.
        code: Last host return code, if a directive was issued.
    """

    agent: AgentId
    task: TaskHandle
    outcome: Outcome
    code: int | None = None

    @property
    def evicted(self) -> bool:
        """Whether the task was removed from the registry."""
        return self.outcome.evicts


class TaskExecutor:
    """Runs the terminal action or a move step for an occupied entry.

    Args:
        settings: Action ranges and path reuse hints.
    """

    def __init__(self, settings: EngineSettings) -> None:
        self._settings = settings

    def execute(self, world: HostWorld, agent: Agent, entry: OccupiedEntry) -> Execution:
        """Execute entry.task for agent, evicting it when it cannot continue."""
        task = entry.task
        match task:
            case Upgrade() if agent.store_used(RESOURCE_ENERGY) > 0:
                target = resolve(world, task.controller)
                if target is not None and not isinstance(target, Controller):
                    target = None
            case Harvest() if agent.store_free(RESOURCE_ENERGY) > 0:
                target = resolve(world, task.source)
            case Construct() | Repair():
                target = resolve(world, task.target)
            case Store():
                target = resolve_store_target(world, task.target)
            case _:
                entry.remove()
                logger.debug("%s dropped stale %s %s", agent.name, task.kind, task.target)
                return Execution(agent.name, task, Outcome.STALE)

        if target is None:
            entry.remove()
            logger.debug("%s lost target %s", agent.name, task.target)
            return Execution(agent.name, task, Outcome.REFERENT_GONE)

        return self._step(agent, entry, target)

    def _step(self, agent: Agent, entry: OccupiedEntry, target: Referent) -> Execution:
        task = entry.task
        reach = self._settings.action_ranges.for_task(task.kind)

        if agent.pos.in_range_to(target.pos, reach):
            code = self._act(agent, task, target)
            outcome = classify(code)
            if outcome is Outcome.SUCCESS:
                if isinstance(task, Repair):
                    entry.remove()
                    return Execution(agent.name, task, Outcome.COMPLETED, code)
                return Execution(agent.name, task, outcome, code)
            if outcome is Outcome.ACTION_REJECTED:
                entry.remove()
                logger.warning(
                    "%s failed %s on %s: %s", agent.name, task.kind, task.target, code_name(code)
                )
                return Execution(agent.name, task, outcome, code)
            # ERR_NOT_IN_RANGE: the host disagrees with our geometry, walk closer.

        reuse = self._settings.path_reuse.for_task(task.kind)
        code = agent.move_to(target.pos, reuse)
        if code != ReturnCode.OK:
            logger.debug("%s cannot move to %s: %s", agent.name, target.pos, code_name(code))
        return Execution(agent.name, task, Outcome.MOVING, code)

    def _act(self, agent: Agent, task: TaskHandle, target: Referent) -> int:
        match task:
            case Upgrade():
                return agent.upgrade_controller(cast(Controller, target))
            case Harvest():
                return agent.harvest(target)
            case Construct():
                return agent.build(target)
            case Repair():
                return agent.repair(target)
            case Store():
                return agent.transfer(cast(Storable, target), RESOURCE_ENERGY)
            case _:
                assert_never(task)
