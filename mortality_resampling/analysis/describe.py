"""Descriptive statistics for a two-group dataset."""

from __future__ import annotations

from typing import Any

import numpy as np

from mortality_resampling.config.constants import DIED_LABEL
from mortality_resampling.domain.dataset import Dataset, Label


def _summarize(values: np.ndarray) -> dict[str, float | None]:
    n = values.shape[0]
    if n == 0:
        return {"mean": None, "median": None, "std": None, "min": None, "max": None}
    return {
        "mean": float(values.mean()),
        "median": float(np.median(values)),
        "std": float(values.std(ddof=1)) if n >= 2 else None,
        "min": float(values.min()),
        "max": float(values.max()),
    }


def describe_dataset(data: Dataset, event_label: Label = DIED_LABEL) -> dict[str, Any]:
    """Summarize row counts, missingness and measurement spread per group.

    ``event_rate`` is the share of all rows carrying *event_label* (the
    in-hospital mortality rate for the default label), or ``None`` when the
    dataset does not use that label.
    """
    missing = data.missing_mask
    groups: dict[str, dict[str, Any]] = {}
    for label in data.groups:
        mask = data.group_mask(label)
        groups[str(label)] = {
            "rows": int(mask.sum()),
            "missing": int((mask & missing).sum()),
            **_summarize(data.measurements_for(label)),
        }
    event_rate = (
        float(data.group_mask(event_label).mean()) if event_label in data.groups else None
    )
    return {
        "rows": len(data),
        "missing": data.missing_count,
        "groups": groups,
        "event_label": str(event_label),
        "event_rate": event_rate,
    }
