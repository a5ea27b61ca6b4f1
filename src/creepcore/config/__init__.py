"""Configuration module using Pydantic Settings.

Provides typed engine policy with environment variable support.

Usage:
    from creepcore.config import EngineSettings

    settings = EngineSettings(rng_seed=1)
"""

from creepcore.config.settings import (
    CONTROLLER_DOWNGRADE,
    DEFAULT_POPULATION,
    ROAD_HITS,
    ActionRanges,
    EngineSettings,
    PathReuse,
    PopulationRow,
)

__all__ = [
    "EngineSettings",
    "ActionRanges",
    "PathReuse",
    "PopulationRow",
    "CONTROLLER_DOWNGRADE",
    "DEFAULT_POPULATION",
    "ROAD_HITS",
]
