"""Configuration dataclasses for ingestion and analysis runs.

All frozen dataclasses that parameterise patient-table loading and the
permutation/bootstrap analysis live here.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from numbers import Integral, Real

from mortality_resampling.config.constants import (
    AGE_COLUMN,
    ALIVE_DATE_SENTINEL,
    DEATH_DATE_COLUMN,
    DEFAULT_CONFIDENCE_LEVEL,
    DEFAULT_REPS,
    DIED_LABEL,
    SUBSAMPLE_ROWS,
    SURVIVED_LABEL,
)
from mortality_resampling.errors import InvalidLabel, InvalidLevel, InvalidReps

__all__ = [
    "AnalysisConfig",
    "IngestConfig",
    "ResampleMode",
    "validate_level",
    "validate_reps",
]


class ResampleMode(Enum):
    """How synthetic replicates are drawn from the observed dataset."""

    PERMUTATION = "permutation"
    BOOTSTRAP = "bootstrap"


def validate_reps(reps: object) -> int:
    """Return *reps* as an int or raise :exc:`InvalidReps`."""
    if isinstance(reps, bool) or not isinstance(reps, Integral):
        raise InvalidReps(f"reps must be a positive integer, got {reps!r}")
    if reps <= 0:
        raise InvalidReps(f"reps must be >= 1, got {reps}")
    return int(reps)


def validate_level(level: object) -> float:
    """Return *level* as a float or raise :exc:`InvalidLevel`."""
    if isinstance(level, bool) or not isinstance(level, Real):
        raise InvalidLevel(f"level must be a number in (0, 1), got {level!r}")
    value = float(level)
    # NaN fails both comparisons
    if not 0.0 < value < 1.0:
        raise InvalidLevel(f"level must be in (0, 1), got {level}")
    return value


@dataclass(frozen=True)
class IngestConfig:
    """Patient-table column mapping and row filtering."""

    age_column: str = AGE_COLUMN
    death_date_column: str = DEATH_DATE_COLUMN
    alive_sentinel: str = ALIVE_DATE_SENTINEL
    age_sentinels: tuple[float, ...] = ()
    subsample_rows: int | None = SUBSAMPLE_ROWS
    subsample_seed: int = 0

    def __post_init__(self) -> None:
        if not self.age_column:
            raise ValueError("age_column must not be empty")
        if not self.death_date_column:
            raise ValueError("death_date_column must not be empty")
        if self.age_column == self.death_date_column:
            raise ValueError("age_column and death_date_column must differ")
        if self.subsample_rows is not None and self.subsample_rows < 1:
            raise ValueError("subsample_rows must be >= 1 or None")


@dataclass(frozen=True)
class AnalysisConfig:
    """Knobs for one permutation-test plus bootstrap-interval run.

    ``seed`` feeds a single :class:`numpy.random.SeedSequence` from which the
    permutation and bootstrap streams are spawned; ``None`` draws fresh OS
    entropy.
    """

    reps: int = DEFAULT_REPS
    level: float = DEFAULT_CONFIDENCE_LEVEL
    seed: int | None = None
    workers: int = 1
    deadline: float | None = None
    group_a: str = DIED_LABEL
    group_b: str = SURVIVED_LABEL

    def __post_init__(self) -> None:
        validate_reps(self.reps)
        validate_level(self.level)
        if self.workers < 1:
            raise ValueError("workers must be >= 1")
        if self.deadline is not None and self.deadline <= 0:
            raise ValueError("deadline must be > 0 seconds or None")
        if self.group_a == self.group_b:
            raise InvalidLabel("group_a and group_b must be distinct labels")
