"""Engine policy settings using Pydantic Settings.

Every number the task selector, executor and controllers depend on lives
here. The values are policy, not law: earlier colonies tuned them
differently, so override them per deployment.

Usage:
    from creepcore.config import EngineSettings

    # Load from environment variables (CREEPCORE_*) and .env
    settings = EngineSettings()

    # Or override with explicit values
    settings = EngineSettings(downgrade_safety_margin=2000, rng_seed=7)

    # Nested values through the environment
    #   CREEPCORE_PATH_REUSE__HARVEST=3
    #   CREEPCORE_POPULATION='[{"ceiling": 4, "cost": 200, "loadout": ["work", "carry", "move"]}]'
"""

from __future__ import annotations

from pydantic import BaseModel, ConfigDict, Field, field_validator, model_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

from creepcore.core.geometry import Terrain
from creepcore.core.identity import STORE_KINDS, STRUCTURE_KINDS, ObjectKind
from creepcore.core.parts import BodyPart, loadout_cost
from creepcore.core.task import TaskKind

CONTROLLER_DOWNGRADE: dict[int, int] = {
    1: 20_000,
    2: 10_000,
    3: 20_000,
    4: 40_000,
    5: 80_000,
    6: 120_000,
    7: 150_000,
    8: 200_000,
}
"""Full downgrade timer per controller level."""

ROAD_HITS: dict[Terrain, int] = {
    Terrain.PLAIN: 5_000,
    Terrain.SWAMP: 25_000,
    Terrain.WALL: 750_000,
}
"""Maximum road durability per terrain the road is built on."""


class PerTask(BaseModel):
    """One integer per task kind.

    The construct value is stored as construct_ (BaseModel.construct is
    taken) and read or written as "construct" everywhere else.
    """

    model_config = ConfigDict(frozen=True, populate_by_name=True)

    upgrade: int
    harvest: int
    construct_: int = Field(alias="construct")
    repair: int
    store: int

    def for_task(self, kind: TaskKind) -> int:
        """Look up the value for a task kind."""
        name = "construct_" if kind is TaskKind.CONSTRUCT else kind.value
        return int(getattr(self, name))


class ActionRanges(PerTask):
    """Maximum distance at which each terminal action works.

    Contact actions (harvest, transfer) need adjacency; ranged ones reach 3.
    """

    upgrade: int = Field(default=3, ge=1)
    harvest: int = Field(default=1, ge=1)
    construct_: int = Field(default=3, ge=1, alias="construct")
    repair: int = Field(default=3, ge=1)
    store: int = Field(default=1, ge=1)


class PathReuse(PerTask):
    """Path cache lifetime hint passed with move directives, per task kind.

    Sources are contested and short-lived targets, controllers never move.
    """

    upgrade: int = Field(default=50, ge=0)
    harvest: int = Field(default=5, ge=0)
    construct_: int = Field(default=20, ge=0, alias="construct")
    repair: int = Field(default=10, ge=0)
    store: int = Field(default=10, ge=0)


class PopulationRow(BaseModel):
    """One row of the population threshold table.

    Attributes:
        ceiling: Spawn with this loadout only while population is below it.
        cost: Energy needed; must equal the loadout's part cost.
        loadout: Ordered body parts of the new agent.
    """

    model_config = ConfigDict(frozen=True)

    ceiling: int = Field(gt=0)
    cost: int = Field(ge=0)
    loadout: tuple[BodyPart, ...] = Field(min_length=1)

    @model_validator(mode="after")
    def _cost_matches_loadout(self) -> PopulationRow:
        expected = loadout_cost(self.loadout)
        if self.cost != expected:
            raise ValueError(f"cost {self.cost} does not match loadout cost {expected}")
        return self


DEFAULT_POPULATION: tuple[PopulationRow, ...] = (
    PopulationRow(
        ceiling=2,
        cost=550,
        loadout=(
            BodyPart.WORK,
            BodyPart.WORK,
            BodyPart.WORK,
            BodyPart.CARRY,
            BodyPart.CARRY,
            BodyPart.MOVE,
            BodyPart.MOVE,
            BodyPart.MOVE,
        ),
    ),
    PopulationRow(
        ceiling=6,
        cost=400,
        loadout=(
            BodyPart.WORK,
            BodyPart.WORK,
            BodyPart.CARRY,
            BodyPart.CARRY,
            BodyPart.MOVE,
            BodyPart.MOVE,
        ),
    ),
    PopulationRow(
        ceiling=10,
        cost=250,
        loadout=(BodyPart.MOVE, BodyPart.MOVE, BodyPart.CARRY, BodyPart.WORK),
    ),
)


class EngineSettings(BaseSettings):  # type: ignore[misc]
    """Configuration for the tick engine.

    Attributes:
        rng_seed: Seed for the process-wide random generator (source picks).
        controller_downgrade: Full downgrade timer per controller level.
        downgrade_safety_margin: Subtracted from the level timer to get the
            danger threshold below which upgrading preempts everything else.
        store_priority: Order in which store-capable kinds are refilled.
        repair_kinds: Structure kinds considered for repair.
        road_hits: Maximum durability per terrain.
        repair_safety_factor: Fraction of road_hits below which repair starts.
        action_ranges: Terminal action reach per task kind.
        path_reuse: Move directive reuse hint per task kind.
        population: Threshold table, ascending ceilings, non-increasing cost.
        tower_range: Maximum distance at which towers engage hostiles.
        cpu_budget: CPU ceiling reported against after each tick (None: off).
        log_level: Level for setup_logging().

    Environment Variables:
        CREEPCORE_RNG_SEED
        CREEPCORE_DOWNGRADE_SAFETY_MARGIN
        CREEPCORE_STORE_PRIORITY
        CREEPCORE_REPAIR_SAFETY_FACTOR
        CREEPCORE_PATH_REUSE__<TASK>
        CREEPCORE_POPULATION
        CREEPCORE_TOWER_RANGE
        CREEPCORE_CPU_BUDGET
        CREEPCORE_LOG_LEVEL
    """

    model_config = SettingsConfigDict(
        env_prefix="CREEPCORE_",
        env_file=".env",
        env_file_encoding="utf-8",
        env_nested_delimiter="__",
        extra="ignore",
    )

    rng_seed: int = 200
    controller_downgrade: dict[int, int] = Field(
        default_factory=lambda: dict(CONTROLLER_DOWNGRADE)
    )
    downgrade_safety_margin: int = Field(default=5_000, ge=0)
    store_priority: tuple[ObjectKind, ...] = (
        ObjectKind.SPAWN,
        ObjectKind.EXTENSION,
        ObjectKind.TOWER,
    )
    repair_kinds: tuple[ObjectKind, ...] = (ObjectKind.ROAD,)
    road_hits: dict[Terrain, int] = Field(default_factory=lambda: dict(ROAD_HITS))
    repair_safety_factor: float = Field(default=0.5, gt=0.0, le=1.0)
    action_ranges: ActionRanges = Field(default_factory=ActionRanges)
    path_reuse: PathReuse = Field(default_factory=PathReuse)
    population: tuple[PopulationRow, ...] = DEFAULT_POPULATION
    tower_range: int = Field(default=50, ge=0)
    cpu_budget: float | None = None
    log_level: str = "INFO"

    @field_validator("store_priority")
    @classmethod
    def _storable(cls, kinds: tuple[ObjectKind, ...]) -> tuple[ObjectKind, ...]:
        bad = [k for k in kinds if k not in STORE_KINDS]
        if bad:
            raise ValueError(f"not store-capable: {', '.join(bad)}")
        return kinds

    @field_validator("repair_kinds")
    @classmethod
    def _repairable(cls, kinds: tuple[ObjectKind, ...]) -> tuple[ObjectKind, ...]:
        bad = [k for k in kinds if k not in STRUCTURE_KINDS]
        if bad:
            raise ValueError(f"not a structure kind: {', '.join(bad)}")
        return kinds

    @field_validator("population")
    @classmethod
    def _ordered_table(cls, rows: tuple[PopulationRow, ...]) -> tuple[PopulationRow, ...]:
        for prev, row in zip(rows, rows[1:], strict=False):
            if row.ceiling <= prev.ceiling:
                raise ValueError("population ceilings must be strictly ascending")
            if row.cost > prev.cost:
                raise ValueError("population costs must not increase with the ceiling")
        return rows

    @property
    def max_population(self) -> int:
        """Highest ceiling in the threshold table (0 when empty)."""
        return self.population[-1].ceiling if self.population else 0

    def downgrade_danger(self, level: int) -> int:
        """Ticks-to-downgrade below which a controller of this level needs help."""
        return self.controller_downgrade.get(level, 0) - self.downgrade_safety_margin

    def repair_threshold(self, terrain: Terrain) -> float:
        """Durability below which a structure on this terrain gets repaired."""
        return self.road_hits.get(terrain, 0) * self.repair_safety_factor
