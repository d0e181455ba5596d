"""Difference-in-means statistic for two-group datasets."""

from __future__ import annotations

import numpy as np

from mortality_resampling.domain.dataset import Dataset, Label
from mortality_resampling.errors import InsufficientData, InvalidLabel

STATISTIC_NAME = "diff_in_means"


def resolve_groups(data: Dataset, group_a: Label, group_b: Label) -> None:
    """Require *group_a* and *group_b* to be the dataset's two distinct labels."""
    if group_a == group_b:
        raise InvalidLabel(f"group_a and group_b must differ, both are {group_a!r}")
    for label in (group_a, group_b):
        if label not in data.groups:
            raise InvalidLabel(f"unknown group label {label!r}; expected one of {data.groups}")


def mean_difference(values: np.ndarray, mask_a: np.ndarray) -> float:
    """Mean of ``values[mask_a]`` minus mean of ``values[~mask_a]``.

    Callers guarantee both sides are non-empty and free of NaN.
    """
    return float(values[mask_a].mean() - values[~mask_a].mean())


def diff_in_means(data: Dataset, group_a: Label, group_b: Label) -> float:
    """Return mean(measurement | group_a) - mean(measurement | group_b).

    Missing measurements are excluded from each mean. Swapping the groups
    flips the sign. The input dataset is never modified.

    Raises:
        InvalidLabel: a label is unknown or both labels are equal.
        InsufficientData: a group has no non-missing measurement.
    """
    resolve_groups(data, group_a, group_b)
    values_a = data.measurements_for(group_a)
    values_b = data.measurements_for(group_b)
    for label, values in ((group_a, values_a), (group_b, values_b)):
        if values.shape[0] == 0:
            raise InsufficientData(f"group {label!r} has no non-missing measurements")
    return float(values_a.mean() - values_b.mean())
