"""Population control: decide when to spawn and with which loadout.

The threshold table is scanned in ascending ceiling order; the first row
whose ceiling is above the current population and whose cost the room can
pay wins. Names are "<tick>-<seq>" so several spawns in one tick never
collide with each other.
"""

from __future__ import annotations

import logging
from collections.abc import Sequence
from dataclasses import dataclass

from creepcore.config import EngineSettings, PopulationRow
from creepcore.core.identity import ObjectKind
from creepcore.core.outcome import Outcome, ReturnCode, code_name
from creepcore.world.protocol import HostWorld, Spawn

logger = logging.getLogger(__name__)


def choose_row(
    table: Sequence[PopulationRow], population: int, energy: int
) -> PopulationRow | None:
    """First row with ceiling > population that costs at most energy."""
    for row in table:
        if row.ceiling > population and row.cost <= energy:
            return row
    return None


@dataclass(frozen=True, slots=True)
class SpawnAttempt:
    """A spawn directive issued this tick."""

    spawn_id: str
    name: str
    row: PopulationRow
    outcome: Outcome
    code: int


class PopulationController:
    """Requests new agents from idle spawns.

    Args:
        settings: Threshold table.
    """

    def __init__(self, settings: EngineSettings) -> None:
        self._settings = settings

    def run(self, world: HostWorld, tick: int) -> list[SpawnAttempt]:
        """Evaluate every spawn once.

        Returns:
            One SpawnAttempt per directive issued, successful or not.
        """
        table = self._settings.population
        ceiling = self._settings.max_population
        population = len(world.agents())
        seq = 0
        attempts: list[SpawnAttempt] = []

        for room in world.rooms():
            for spawn in room.structures():
                if spawn.kind != ObjectKind.SPAWN or not isinstance(spawn, Spawn):
                    continue
                if population >= ceiling:
                    return attempts
                if spawn.busy:
                    continue
                row = choose_row(table, population, room.energy_available)
                if row is None:
                    continue

                name = f"{tick}-{seq}"
                seq += 1
                code = spawn.spawn_agent(row.loadout, name)
                if code == ReturnCode.OK:
                    population += 1
                    outcome = Outcome.SUCCESS
                    logger.info("Spawning %s (%d parts) at %s", name, len(row.loadout), spawn.id)
                else:
                    outcome = Outcome.CREATION_REJECTED
                    logger.warning("Spawn %s refused %s: %s", spawn.id, name, code_name(code))
                attempts.append(SpawnAttempt(spawn.id, name, row, outcome, code))

        return attempts
