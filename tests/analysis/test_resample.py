"""Tests for analysis/resample.py: permutation and bootstrap replicate generation."""

from __future__ import annotations

import warnings

import numpy as np
import pytest

from mortality_resampling.analysis.inference import p_value_two_sided
from mortality_resampling.analysis.resample import (
    bootstrap_distribution,
    complete_rows,
    generate_distribution,
    permutation_distribution,
)
from mortality_resampling.analysis.statistic import diff_in_means
from mortality_resampling.config.types import ResampleMode
from mortality_resampling.domain.dataset import Dataset
from mortality_resampling.errors import InsufficientData, InvalidLabel, InvalidReps


def _four_patients() -> Dataset:
    return Dataset.from_arrays([70, 72, 30, 32], ["died", "died", "survived", "survived"])


def _independent_dataset(seed: int, n: int = 200) -> Dataset:
    rng = np.random.default_rng(seed)
    ages = rng.normal(50.0, 10.0, size=n)
    labels = ["died" if flag else "survived" for flag in rng.random(n) < 0.5]
    return Dataset.from_arrays(ages, labels)


# ── Size and reproducibility ─────────────────────────────────────────────────


@pytest.mark.parametrize("mode", list(ResampleMode))
def test_distribution_has_exactly_reps_values(mode: ResampleMode) -> None:
    dist = generate_distribution(_independent_dataset(0), "died", "survived", mode, 250, seed=1)
    assert len(dist) == 250
    assert dist.mode is mode
    assert not dist.partial
    assert dist.statistic == "diff_in_means"


@pytest.mark.parametrize("mode", list(ResampleMode))
def test_same_seed_reproduces_distribution(mode: ResampleMode) -> None:
    data = _independent_dataset(1)
    first = generate_distribution(data, "died", "survived", mode, 100, seed=42)
    second = generate_distribution(data, "died", "survived", mode, 100, seed=42)
    other = generate_distribution(data, "died", "survived", mode, 100, seed=43)
    np.testing.assert_array_equal(first.values, second.values)
    assert not np.array_equal(first.values, other.values)
    assert first.seed == 42


def test_explicit_generator_matches_seed() -> None:
    data = _independent_dataset(2)
    from_seed = permutation_distribution(data, "died", "survived", 50, seed=5)
    from_rng = permutation_distribution(
        data, "died", "survived", 50, rng=np.random.default_rng(5)
    )
    np.testing.assert_array_equal(from_seed.values, from_rng.values)
    assert from_rng.seed is None


@pytest.mark.parametrize("mode", list(ResampleMode))
def test_parallel_workers_are_reproducible(mode: ResampleMode) -> None:
    data = _independent_dataset(3)
    first = generate_distribution(data, "died", "survived", mode, 301, seed=9, workers=4)
    second = generate_distribution(data, "died", "survived", mode, 301, seed=9, workers=4)
    assert len(first) == 301
    np.testing.assert_array_equal(first.values, second.values)


def test_more_workers_than_reps() -> None:
    dist = permutation_distribution(_independent_dataset(4), "died", "survived", 3, workers=8)
    assert len(dist) == 3


# ── Permutation semantics ────────────────────────────────────────────────────


def test_four_patient_permutations_reach_six_relabelings() -> None:
    data = _four_patients()
    dist = permutation_distribution(data, "died", "survived", 6_000, seed=0)
    assert set(np.round(dist.values, 9).tolist()) == {-40.0, -2.0, 0.0, 2.0, 40.0}
    observed = diff_in_means(data, "died", "survived")
    p_value = p_value_two_sided(dist, observed)
    # 2 of the 6 equally likely relabelings reach |40|.
    assert p_value >= 1 / 6
    assert p_value == pytest.approx(2 / 6, abs=0.03)


def test_constant_measurements_give_zero_null() -> None:
    data = Dataset.from_arrays([50.0] * 10, ["died"] * 4 + ["survived"] * 6)
    dist = permutation_distribution(data, "died", "survived", 200, seed=0)
    assert np.all(dist.values == 0.0)


def test_permutation_null_is_centred_under_independence() -> None:
    means = [
        permutation_distribution(_independent_dataset(seed), "died", "survived", 2_000, seed=seed)
        .values.mean()
        for seed in range(5)
    ]
    assert abs(float(np.mean(means))) < 0.25
    assert all(abs(m) < 0.5 for m in means)


def test_permutation_works_with_one_row_per_group() -> None:
    data = Dataset.from_arrays([80.0, 20.0], ["died", "survived"])
    dist = permutation_distribution(data, "died", "survived", 100, seed=0)
    assert set(dist.values.tolist()) <= {60.0, -60.0}


# ── Bootstrap semantics ──────────────────────────────────────────────────────


def test_bootstrap_preserves_row_pairing() -> None:
    data = Dataset.from_arrays([60.0] * 12 + [40.0] * 12, ["died"] * 12 + ["survived"] * 12)
    dist = bootstrap_distribution(data, "died", "survived", 200, seed=0)
    assert np.all(dist.values == 20.0)


def test_bootstrap_replicates_stay_within_measurement_range() -> None:
    data = _independent_dataset(5)
    dist = bootstrap_distribution(data, "died", "survived", 300, seed=5)
    spread = float(data.measurements.max() - data.measurements.min())
    assert np.all(np.abs(dist.values) <= spread)


def test_bootstrap_redraws_single_group_resamples() -> None:
    with pytest.warns(RuntimeWarning, match="smallest group"):
        dist = bootstrap_distribution(_four_patients(), "died", "survived", 500, seed=0)
    assert len(dist) == 500
    assert np.all(np.isfinite(dist.values))


def test_bootstrap_rejects_one_row_per_group() -> None:
    data = Dataset.from_arrays([80.0, 20.0], ["died", "survived"])
    with pytest.raises(InsufficientData, match="at least 2"):
        bootstrap_distribution(data, "died", "survived", 10, seed=0)


def test_large_groups_do_not_warn() -> None:
    with warnings.catch_warnings():
        warnings.simplefilter("error")
        bootstrap_distribution(_independent_dataset(6), "died", "survived", 20, seed=0)


# ── Validation ───────────────────────────────────────────────────────────────


@pytest.mark.parametrize("reps", [0, -5, True, 2.5])
def test_invalid_reps(reps: object) -> None:
    with pytest.raises(InvalidReps):
        permutation_distribution(_four_patients(), "died", "survived", reps)  # type: ignore[arg-type]


def test_fewer_than_two_measured_rows() -> None:
    data = Dataset.from_arrays([70.0, None], ["died", "survived"])
    with pytest.raises(InsufficientData):
        permutation_distribution(data, "died", "survived", 10)


def test_missing_rows_are_dropped_before_resampling() -> None:
    data = Dataset.from_arrays(
        [70.0, None, 30.0, 31.0, None], ["died", "died", "survived", "survived", "died"]
    )
    values, mask_a = complete_rows(data, "died", "survived")
    assert values.tolist() == [70.0, 30.0, 31.0]
    assert mask_a.tolist() == [True, False, False]


def test_unknown_labels_are_rejected() -> None:
    with pytest.raises(InvalidLabel):
        permutation_distribution(_four_patients(), "died", "alive", 10)


def test_invalid_workers_and_deadline() -> None:
    with pytest.raises(ValueError, match="workers"):
        permutation_distribution(_four_patients(), "died", "survived", 10, workers=0)
    with pytest.raises(ValueError, match="deadline"):
        permutation_distribution(_four_patients(), "died", "survived", 10, deadline=-1.0)


# ── Deadline ─────────────────────────────────────────────────────────────────


def test_deadline_returns_partial_distribution() -> None:
    with pytest.warns(RuntimeWarning, match="deadline"):
        dist = permutation_distribution(
            _independent_dataset(7), "died", "survived", 100_000, seed=0, deadline=1e-9
        )
    assert dist.partial
    assert 1 <= len(dist) < 100_000
    assert dist.reps == 100_000


def test_deadline_with_workers_keeps_one_replicate_per_chunk() -> None:
    with pytest.warns(RuntimeWarning, match="deadline"):
        dist = bootstrap_distribution(
            _independent_dataset(8), "died", "survived", 100_000, seed=0, workers=4, deadline=1e-9
        )
    assert dist.partial
    assert 4 <= len(dist) < 100_000
