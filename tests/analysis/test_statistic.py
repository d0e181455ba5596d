"""Tests for analysis/statistic.py: difference in group means."""

from __future__ import annotations

import numpy as np
import pytest

from mortality_resampling.analysis.statistic import diff_in_means, mean_difference
from mortality_resampling.domain.dataset import Dataset
from mortality_resampling.errors import InsufficientData, InvalidLabel


def _four_patients() -> Dataset:
    return Dataset.from_arrays([70, 72, 30, 32], ["died", "died", "survived", "survived"])


def _random_dataset(seed: int, n: int = 50) -> Dataset:
    rng = np.random.default_rng(seed)
    ages = rng.normal(50.0, 15.0, size=n)
    labels = ["died" if flag else "survived" for flag in rng.random(n) < 0.4]
    labels[0], labels[1] = "died", "survived"
    return Dataset.from_arrays(ages, labels)


def test_four_patient_scenario() -> None:
    assert diff_in_means(_four_patients(), "died", "survived") == 40.0


@pytest.mark.parametrize("seed", range(5))
def test_swapping_groups_flips_sign(seed: int) -> None:
    data = _random_dataset(seed)
    assert diff_in_means(data, "died", "survived") == -diff_in_means(data, "survived", "died")


def test_repeated_calls_are_bit_identical() -> None:
    data = _random_dataset(11)
    first = diff_in_means(data, "died", "survived")
    second = diff_in_means(data, "died", "survived")
    assert first.hex() == second.hex()


def test_missing_measurements_are_excluded() -> None:
    data = Dataset.from_arrays(
        [70, None, 30, 32, float("nan")], ["died", "died", "survived", "survived", "survived"]
    )
    assert diff_in_means(data, "died", "survived") == 39.0


def test_input_is_not_mutated() -> None:
    data = _random_dataset(3)
    before = data.measurements.copy()
    labels_before = data.labels.copy()
    diff_in_means(data, "died", "survived")
    np.testing.assert_array_equal(data.measurements, before)
    assert data.labels.tolist() == labels_before.tolist()


def test_row_order_does_not_change_result() -> None:
    data = _four_patients()
    reversed_data = Dataset.from_arrays(data.measurements[::-1], data.labels[::-1].tolist())
    assert diff_in_means(reversed_data, "died", "survived") == 40.0


def test_group_without_measurements_is_insufficient() -> None:
    data = Dataset.from_arrays([None, 30.0], ["died", "survived"])
    with pytest.raises(InsufficientData, match="died"):
        diff_in_means(data, "died", "survived")


def test_single_row_per_group_is_valid() -> None:
    data = Dataset.from_arrays([80.0, 20.0], ["died", "survived"])
    assert diff_in_means(data, "died", "survived") == 60.0


def test_unknown_or_equal_labels_are_rejected() -> None:
    data = _four_patients()
    with pytest.raises(InvalidLabel):
        diff_in_means(data, "died", "recovered")
    with pytest.raises(InvalidLabel, match="must differ"):
        diff_in_means(data, "died", "died")


def test_mean_difference_matches_public_statistic() -> None:
    data = _random_dataset(8)
    mask = data.group_mask("died")
    assert mean_difference(data.measurements, mask) == diff_in_means(data, "died", "survived")
