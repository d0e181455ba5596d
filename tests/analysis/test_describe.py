"""Tests for analysis/describe.py."""

from __future__ import annotations

import json

import pytest

from mortality_resampling.analysis.describe import describe_dataset
from mortality_resampling.domain.dataset import Dataset


def _patients() -> Dataset:
    return Dataset.from_arrays(
        [70, 72, None, 30, 32, 34], ["died", "died", "died", "survived", "survived", "survived"]
    )


def test_describe_counts_and_moments() -> None:
    summary = describe_dataset(_patients())
    assert summary["rows"] == 6
    assert summary["missing"] == 1
    died = summary["groups"]["died"]
    assert died["rows"] == 3
    assert died["missing"] == 1
    assert died["mean"] == pytest.approx(71.0)
    assert died["median"] == pytest.approx(71.0)
    survived = summary["groups"]["survived"]
    assert survived["std"] == pytest.approx(2.0)
    assert (survived["min"], survived["max"]) == (30.0, 34.0)


def test_describe_event_rate() -> None:
    summary = describe_dataset(_patients())
    assert summary["event_label"] == "died"
    assert summary["event_rate"] == pytest.approx(0.5)


def test_describe_unknown_event_label() -> None:
    data = Dataset.from_arrays([1.0, 2.0], ["a", "b"])
    assert describe_dataset(data)["event_rate"] is None


def test_describe_single_and_empty_groups() -> None:
    data = Dataset.from_arrays([None, 40.0], ["died", "survived"])
    summary = describe_dataset(data)
    assert summary["groups"]["died"]["mean"] is None
    assert summary["groups"]["survived"]["std"] is None
    assert summary["groups"]["survived"]["mean"] == 40.0


def test_describe_is_json_serialisable() -> None:
    json.dumps(describe_dataset(_patients()))
