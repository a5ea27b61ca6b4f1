"""Tick engine: runs the per-tick phase plan against a host world.

Usage:
    engine = TickEngine(EngineSettings(rng_seed=7))

    # once per host tick
    record = engine.tick(world)

    # after a worker restart
    engine.reset()

Phase plan (fixed order):
    defense     towers fire at the nearest hostile
    tasks       every live agent executes or selects its task
    population  every idle spawn may request one new agent
"""

from __future__ import annotations

import logging
import random
from collections.abc import Callable

from creepcore.config import EngineSettings
from creepcore.control import (
    DefenseController,
    PopulationController,
    TaskExecutor,
    TaskSelector,
)
from creepcore.core.outcome import Outcome
from creepcore.core.task import task_to_dict
from creepcore.registry import OccupiedEntry, TaskRegistry, VacantEntry
from creepcore.tracing import CpuTimer, HistoryStore, TickEvent, TickRecord
from creepcore.world.protocol import Agent, HostWorld

logger = logging.getLogger(__name__)

Phase = Callable[[HostWorld, int, list[TickEvent]], None]


class TickEngine:
    """Owns the process-lifetime state and runs one tick at a time.

    The registry and the random generator survive between ticks for as long
    as the engine does. Nothing else is cached: every tick starts from a
    fresh look at the host world.

    Args:
        settings: Engine policy. Defaults to EngineSettings() (env/.env aware).
        registry: Task registry to drive. Defaults to an empty one.
        rng: Random generator for source picks. Defaults to one seeded with
            settings.rng_seed.
        history: Optional store receiving every TickRecord.
    """

    def __init__(
        self,
        settings: EngineSettings | None = None,
        registry: TaskRegistry | None = None,
        rng: random.Random | None = None,
        history: HistoryStore | None = None,
    ) -> None:
        self._settings = settings or EngineSettings()
        self._registry = registry if registry is not None else TaskRegistry()
        self._rng = rng or random.Random(self._settings.rng_seed)
        self._history = history

        self._selector = TaskSelector(self._settings, self._rng)
        self._executor = TaskExecutor(self._settings)
        self._population = PopulationController(self._settings)
        self._defense = DefenseController(self._settings)

        self._phases: list[tuple[str, Phase]] = [
            ("defense", self._run_defense),
            ("tasks", self._run_tasks),
            ("population", self._run_population),
        ]

    @property
    def settings(self) -> EngineSettings:
        return self._settings

    @property
    def registry(self) -> TaskRegistry:
        return self._registry

    def tick(self, world: HostWorld) -> TickRecord:
        """Run every phase once.

        Returns:
            Record of what happened, also pushed to the history store.
        """
        tick = world.time()
        events: list[TickEvent] = []

        with CpuTimer("Main Loop", world.cpu_used) as timer:
            for _name, phase in self._phases:
                phase(world, tick, events)

        record = TickRecord(
            tick=tick,
            cpu_start=timer.loaded,
            cpu_used=timer.elapsed(),
            events=events,
            snapshot=self._registry.snapshot(),
        )

        budget = self._settings.cpu_budget
        if budget is not None and record.cpu_used > budget:
            logger.warning(
                "Tick %d used %.2fcpu, over budget %.2f", tick, record.cpu_used, budget
            )

        if self._history is not None:
            self._history.record_tick(record)
        return record

    def reset(self) -> None:
        """Drop all process state, as a worker restart would."""
        self._registry.clear()
        self._rng.seed(self._settings.rng_seed)

    def get_execution_plan_info(self) -> list[str]:
        """Phase names in execution order (for debugging)."""
        return [name for name, _ in self._phases]

    def _run_defense(self, world: HostWorld, tick: int, events: list[TickEvent]) -> None:
        hits = self._defense.run(world)
        if hits:
            events.append(TickEvent("defense", "towers", {"hits": hits}))

    def _run_tasks(self, world: HostWorld, tick: int, events: list[TickEvent]) -> None:
        agents = {agent.name: agent for agent in world.agents()}

        for agent_id in self._registry.prune(agents):
            logger.debug("Forgetting task of dead agent %s", agent_id)
            events.append(TickEvent("forget", agent_id))

        # One visit per agent the host reported at the start of the phase.
        for agent_id, agent in agents.items():
            if agent.spawning:
                continue
            try:
                self._process_agent(world, agent, events)
            except Exception as e:
                logger.exception("Agent %s failed this tick", agent_id)
                events.append(TickEvent("error", agent_id, {"error": repr(e)}))

    def _process_agent(self, world: HostWorld, agent: Agent, events: list[TickEvent]) -> None:
        entry = self._registry.entry(agent.name)

        if isinstance(entry, OccupiedEntry):
            result = self._executor.execute(world, agent, entry)
            if not result.evicted:
                return
            events.append(
                TickEvent(
                    "evict",
                    agent.name,
                    {"task": task_to_dict(result.task), "outcome": result.outcome.name},
                )
            )
            entry = self._registry.entry(agent.name)

        if not isinstance(entry, VacantEntry):
            return
        room = world.room(agent.pos.room)
        if room is None:
            logger.debug("%s is in unknown room %s", agent.name, agent.pos.room)
            return
        task = self._selector.assign(entry, agent, room)
        if task is None:
            idle = {"outcome": Outcome.EMPTY_CANDIDATE_SET.name}
            events.append(TickEvent("idle", agent.name, idle))
        else:
            events.append(TickEvent("assign", agent.name, task_to_dict(task)))

    def _run_population(self, world: HostWorld, tick: int, events: list[TickEvent]) -> None:
        for attempt in self._population.run(world, tick):
            kind = "spawn" if attempt.outcome is Outcome.SUCCESS else "spawn_rejected"
            events.append(
                TickEvent(
                    kind,
                    attempt.name,
                    {"spawn": attempt.spawn_id, "cost": attempt.row.cost, "code": attempt.code},
                )
            )
