"""Two-group observation tables.

A :class:`Dataset` pairs one real-valued measurement (patient age) with one
of exactly two group labels (died / survived) per row. Missing measurements
are stored as NaN and excluded from every statistic; they are never imputed.
Instances are immutable: the backing arrays are copied on construction and
flagged read-only.
"""

from __future__ import annotations

import math
from collections.abc import Hashable, Iterable, Sequence
from dataclasses import dataclass
from typing import Any

import numpy as np

from mortality_resampling.errors import InsufficientData, InvalidLabel

Label = Hashable


def _is_missing(value: Any) -> bool:
    if value is None:
        return True
    return isinstance(value, float) and math.isnan(value)


def _read_only(array: np.ndarray) -> np.ndarray:
    array.setflags(write=False)
    return array


@dataclass(frozen=True)
class Observation:
    """One patient record reduced to (measurement, group)."""

    measurement: float | None
    group: Label

    @property
    def is_missing(self) -> bool:
        return _is_missing(self.measurement)


@dataclass(frozen=True, eq=False)
class Dataset:
    """Immutable collection of observations split into exactly two groups."""

    measurements: np.ndarray
    labels: np.ndarray

    def __post_init__(self) -> None:
        measurements = np.array(self.measurements, dtype=np.float64).reshape(-1)
        if np.isinf(measurements).any():
            raise ValueError("measurements must be finite (NaN marks a missing value)")
        labels = np.empty(len(self.labels), dtype=object)
        labels[:] = [v.item() if isinstance(v, np.generic) else v for v in self.labels]
        if measurements.shape[0] != labels.shape[0]:
            raise ValueError(
                f"measurements and labels must have equal length "
                f"({measurements.shape[0]} != {labels.shape[0]})"
            )
        if any(_is_missing(label) for label in labels):
            raise InvalidLabel("group labels must not be missing")
        distinct = list(dict.fromkeys(labels.tolist()))
        if len(distinct) != 2:
            raise InvalidLabel(
                f"group labels must take exactly two distinct values, got {len(distinct)}"
            )
        object.__setattr__(self, "measurements", _read_only(measurements))
        object.__setattr__(self, "labels", _read_only(labels))
        object.__setattr__(self, "_groups", (distinct[0], distinct[1]))

    @classmethod
    def from_arrays(
        cls, measurements: Sequence[float | None] | np.ndarray, labels: Sequence[Label]
    ) -> Dataset:
        """Build from parallel measurement and label sequences (``None`` = missing)."""
        values = [float("nan") if _is_missing(v) else float(v) for v in measurements]
        return cls(measurements=np.asarray(values, dtype=np.float64), labels=list(labels))

    @classmethod
    def from_observations(cls, observations: Iterable[Observation]) -> Dataset:
        """Build from :class:`Observation` records."""
        rows = list(observations)
        return cls.from_arrays([o.measurement for o in rows], [o.group for o in rows])

    def __len__(self) -> int:
        return int(self.measurements.shape[0])

    @property
    def groups(self) -> tuple[Label, Label]:
        """The two labels, in order of first appearance."""
        return self._groups  # type: ignore[attr-defined,no-any-return]

    @property
    def missing_mask(self) -> np.ndarray:
        return np.isnan(self.measurements)

    @property
    def missing_count(self) -> int:
        return int(self.missing_mask.sum())

    def group_mask(self, label: Label) -> np.ndarray:
        """Boolean row mask for *label*; raises :exc:`InvalidLabel` for unknown labels."""
        if label not in self.groups:
            raise InvalidLabel(f"unknown group label {label!r}; expected one of {self.groups}")
        return np.fromiter((value == label for value in self.labels), dtype=bool, count=len(self))

    def measurements_for(self, label: Label) -> np.ndarray:
        """Non-missing measurements of group *label* (a fresh copy)."""
        mask = self.group_mask(label) & ~self.missing_mask
        return self.measurements[mask].copy()

    def group_counts(self) -> dict[Label, int]:
        """Non-missing measurement count per group."""
        return {label: int(self.measurements_for(label).shape[0]) for label in self.groups}

    def dropna(self) -> Dataset:
        """Return the rows whose measurement is present.

        Raises :exc:`InsufficientData` when a group has no measured rows left.
        """
        counts = self.group_counts()
        empty = [label for label, count in counts.items() if count == 0]
        if empty:
            raise InsufficientData(f"group {empty[0]!r} has no non-missing measurements")
        keep = ~self.missing_mask
        return Dataset(measurements=self.measurements[keep], labels=self.labels[keep])

    def observations(self) -> list[Observation]:
        return [
            Observation(None if math.isnan(m) else float(m), label)
            for m, label in zip(self.measurements.tolist(), self.labels.tolist(), strict=True)
        ]
