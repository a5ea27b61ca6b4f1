"""Task registry: the process-wide map from agent to its current task.

TaskRegistry is a stateful service owned by the tick engine and passed
explicitly into every phase. It lives as long as the worker process; a
restart (TickEngine.reset() or a fresh engine) starts it empty again.

Usage:
    registry = TaskRegistry()

    match registry.entry("41230-0"):
        case OccupiedEntry() as entry:
            entry.remove()
        case VacantEntry() as entry:
            entry.insert(Harvest(source_ref))
"""

from __future__ import annotations

from collections.abc import Iterable
from typing import Any

from creepcore.core.identity import AgentId
from creepcore.core.task import TaskHandle, task_from_dict, task_to_dict
from creepcore.errors import RegistryError


class OccupiedEntry:
    """Registry slot holding an agent's current task."""

    __slots__ = ("_registry", "agent_id", "task")

    def __init__(self, registry: TaskRegistry, agent_id: AgentId, task: TaskHandle) -> None:
        self._registry = registry
        self.agent_id = agent_id
        self.task = task

    def remove(self) -> TaskHandle:
        """Evict the task. Returns it for logging.

        Returns:
            The evicted task.
        """
        self._registry._tasks.pop(self.agent_id, None)
        return self.task

    def __repr__(self) -> str:
        return f"OccupiedEntry({self.agent_id!r}, {self.task!r})"


class VacantEntry:
    """Registry slot for an agent without a task."""

    __slots__ = ("_registry", "agent_id")

    def __init__(self, registry: TaskRegistry, agent_id: AgentId) -> None:
        self._registry = registry
        self.agent_id = agent_id

    def insert(self, task: TaskHandle) -> OccupiedEntry:
        """Assign task to the agent.

        Raises:
            RegistryError: If the agent got a task since this entry was taken.
        """
        if self.agent_id in self._registry._tasks:
            raise RegistryError(f"Agent {self.agent_id} already has a task")
        self._registry._tasks[self.agent_id] = task
        return OccupiedEntry(self._registry, self.agent_id, task)

    def __repr__(self) -> str:
        return f"VacantEntry({self.agent_id!r})"


class TaskRegistry:
    """Mapping AgentId -> TaskHandle with at most one task per agent.

    Structure:
        _tasks[agent_id] = task

    Entries are inserted by the selector and removed by the executor. Iterate
    over agent_ids() (a copy) when entries may be evicted during the loop.
    """

    def __init__(self) -> None:
        self._tasks: dict[AgentId, TaskHandle] = {}

    def entry(self, agent_id: AgentId) -> OccupiedEntry | VacantEntry:
        """Get the agent's slot, occupied or vacant."""
        task = self._tasks.get(agent_id)
        if task is None:
            return VacantEntry(self, agent_id)
        return OccupiedEntry(self, agent_id, task)

    def get(self, agent_id: AgentId) -> TaskHandle | None:
        """Current task of an agent, if any."""
        return self._tasks.get(agent_id)

    def agent_ids(self) -> list[AgentId]:
        """Snapshot of the agents that currently hold a task."""
        return list(self._tasks)

    def prune(self, live_ids: Iterable[AgentId]) -> list[AgentId]:
        """Drop entries of agents confirmed gone.

        Args:
            live_ids: Every agent the host still reports.

        Returns:
            The agent ids whose entries were removed.
        """
        live = set(live_ids)
        gone = [agent_id for agent_id in self._tasks if agent_id not in live]
        for agent_id in gone:
            del self._tasks[agent_id]
        return gone

    def clear(self) -> None:
        """Forget every task, as after a worker restart."""
        self._tasks.clear()

    def snapshot(self) -> dict[str, Any]:
        """Serialize to a JSON-compatible dict."""
        return {agent_id: task_to_dict(task) for agent_id, task in self._tasks.items()}

    def restore(self, data: dict[str, Any]) -> None:
        """Replace contents with a snapshot() result.

        Raises:
            TaskError: If any stored task cannot be decoded.
        """
        tasks = {agent_id: task_from_dict(raw) for agent_id, raw in data.items()}
        self._tasks = tasks

    def __len__(self) -> int:
        return len(self._tasks)

    def __contains__(self, agent_id: object) -> bool:
        return agent_id in self._tasks
