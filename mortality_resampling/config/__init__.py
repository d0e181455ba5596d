"""Configuration layer: constants and typed config dataclasses."""

from mortality_resampling.config.constants import (
    AGE_COLUMN,
    ALIVE_DATE_SENTINEL,
    DEATH_DATE_COLUMN,
    DEFAULT_CONFIDENCE_LEVEL,
    DEFAULT_REPS,
    DIED_LABEL,
    LOW_POWER_GROUP_SIZE,
    MAX_DEGENERATE_REDRAWS,
    MIN_BOOTSTRAP_GROUP_SIZE,
    MIN_RESAMPLE_ROWS,
    SUBSAMPLE_ROWS,
    SURVIVED_LABEL,
)
from mortality_resampling.config.types import (
    AnalysisConfig,
    IngestConfig,
    ResampleMode,
    validate_level,
    validate_reps,
)

__all__ = [
    "AGE_COLUMN",
    "ALIVE_DATE_SENTINEL",
    "AnalysisConfig",
    "DEATH_DATE_COLUMN",
    "DEFAULT_CONFIDENCE_LEVEL",
    "DEFAULT_REPS",
    "DIED_LABEL",
    "IngestConfig",
    "LOW_POWER_GROUP_SIZE",
    "MAX_DEGENERATE_REDRAWS",
    "MIN_BOOTSTRAP_GROUP_SIZE",
    "MIN_RESAMPLE_ROWS",
    "ResampleMode",
    "SUBSAMPLE_ROWS",
    "SURVIVED_LABEL",
    "validate_level",
    "validate_reps",
]
