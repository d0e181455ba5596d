"""Replicate distributions and the intervals extracted from them."""

from __future__ import annotations

from collections.abc import Iterator
from dataclasses import dataclass

import numpy as np

from mortality_resampling.config.types import ResampleMode


@dataclass(frozen=True, eq=False)
class Distribution:
    """Immutable sequence of replicate statistics.

    Holds exactly ``reps`` values unless ``partial`` is set, which marks a run
    that stopped early on its deadline.
    """

    values: np.ndarray
    mode: ResampleMode
    reps: int
    statistic: str = "diff_in_means"
    seed: int | None = None
    partial: bool = False

    def __post_init__(self) -> None:
        values = np.array(self.values, dtype=np.float64).reshape(-1)
        if self.partial:
            if values.shape[0] > self.reps:
                raise ValueError("partial distribution holds more values than requested reps")
        elif values.shape[0] != self.reps:
            raise ValueError(
                f"distribution must hold exactly {self.reps} replicates, got {values.shape[0]}"
            )
        values.setflags(write=False)
        object.__setattr__(self, "values", values)

    def __len__(self) -> int:
        return int(self.values.shape[0])

    def __iter__(self) -> Iterator[float]:
        return iter(self.values.tolist())

    def summary(self) -> dict[str, float | int | bool | str | None]:
        """Location/spread summary, JSON-serialisable."""
        n = len(self)
        return {
            "mode": self.mode.value,
            "statistic": self.statistic,
            "reps": self.reps,
            "n": n,
            "partial": self.partial,
            "seed": self.seed,
            "mean": float(self.values.mean()) if n else None,
            "std": float(self.values.std(ddof=1)) if n >= 2 else None,
            "min": float(self.values.min()) if n else None,
            "max": float(self.values.max()) if n else None,
        }


@dataclass(frozen=True)
class ConfidenceInterval:
    """Closed interval ``[lower, upper]`` at coverage ``level``."""

    lower: float
    upper: float
    level: float

    def __post_init__(self) -> None:
        if self.lower > self.upper:
            raise ValueError(f"lower bound {self.lower} exceeds upper bound {self.upper}")

    @property
    def width(self) -> float:
        return self.upper - self.lower

    def contains(self, value: float) -> bool:
        return self.lower <= value <= self.upper

    def to_dict(self) -> dict[str, float]:
        return {"lower": self.lower, "upper": self.upper, "level": self.level}
