"""Permutation and bootstrap replicate generation.

Both modes drop rows with a missing measurement, then repeatedly build a
synthetic labelling of the remaining rows and evaluate the difference in
group means on it:

- permutation: the label column is shuffled uniformly at random while the
  measurement column stays fixed, giving the null distribution of "no
  association between group and measurement";
- bootstrap: ``n`` rows are drawn with replacement, each keeping its own
  (measurement, group) pair, giving the sampling distribution of the
  observed statistic.

Randomness comes from an explicit :class:`numpy.random.Generator` (or a seed
used to build one). With ``workers > 1`` the replicates are split into
contiguous chunks, each driven by an independent child generator spawned
from the parent, and evaluated on a thread pool. Chunks are concatenated in
order, so a given seed and worker count always yield the same distribution.
"""

from __future__ import annotations

import logging
import time
import warnings
from collections.abc import Callable
from concurrent.futures import ThreadPoolExecutor

import numpy as np

from mortality_resampling.analysis.statistic import (
    STATISTIC_NAME,
    mean_difference,
    resolve_groups,
)
from mortality_resampling.config.constants import (
    DEFAULT_REPS,
    LOW_POWER_GROUP_SIZE,
    MAX_DEGENERATE_REDRAWS,
    MIN_BOOTSTRAP_GROUP_SIZE,
    MIN_RESAMPLE_ROWS,
)
from mortality_resampling.config.types import ResampleMode, validate_reps
from mortality_resampling.domain.dataset import Dataset, Label
from mortality_resampling.domain.distribution import Distribution
from mortality_resampling.errors import InsufficientData

logger = logging.getLogger(__name__)

ReplicateFn = Callable[[np.ndarray, np.ndarray, np.random.Generator], float]


def _permutation_replicate(
    values: np.ndarray, mask_a: np.ndarray, rng: np.random.Generator
) -> float:
    return mean_difference(values, rng.permutation(mask_a))


def _bootstrap_replicate(
    values: np.ndarray, mask_a: np.ndarray, rng: np.random.Generator
) -> float:
    n = values.shape[0]
    for _ in range(MAX_DEGENERATE_REDRAWS):
        idx = rng.integers(0, n, size=n)
        resampled_mask = mask_a[idx]
        # A resample holding a single group has no defined mean difference.
        if resampled_mask.any() and not resampled_mask.all():
            return mean_difference(values[idx], resampled_mask)
    raise InsufficientData(
        f"bootstrap resample kept only one group after {MAX_DEGENERATE_REDRAWS} redraws"
    )


_REPLICATE_FNS: dict[ResampleMode, ReplicateFn] = {
    ResampleMode.PERMUTATION: _permutation_replicate,
    ResampleMode.BOOTSTRAP: _bootstrap_replicate,
}


def complete_rows(data: Dataset, group_a: Label, group_b: Label) -> tuple[np.ndarray, np.ndarray]:
    """Return ``(values, mask_a)`` for rows with a present measurement.

    Raises :exc:`InsufficientData` when fewer than two rows remain or a group
    has no measured rows.
    """
    resolve_groups(data, group_a, group_b)
    keep = ~data.missing_mask
    values = data.measurements[keep]
    mask_a = data.group_mask(group_a)[keep]
    if values.shape[0] < MIN_RESAMPLE_ROWS:
        raise InsufficientData(
            f"need at least {MIN_RESAMPLE_ROWS} non-missing rows to resample, "
            f"got {values.shape[0]}"
        )
    if not mask_a.any():
        raise InsufficientData(f"group {group_a!r} has no non-missing measurements")
    if mask_a.all():
        raise InsufficientData(f"group {group_b!r} has no non-missing measurements")
    return values, mask_a


def _check_bootstrap_groups(mask_a: np.ndarray, group_a: Label, group_b: Label) -> None:
    sizes = {group_a: int(mask_a.sum()), group_b: int((~mask_a).sum())}
    for label, size in sizes.items():
        if size < MIN_BOOTSTRAP_GROUP_SIZE:
            raise InsufficientData(
                f"bootstrap needs at least {MIN_BOOTSTRAP_GROUP_SIZE} non-missing rows in "
                f"group {label!r}, got {size}"
            )
    smallest = min(sizes.values())
    if smallest < LOW_POWER_GROUP_SIZE:
        warnings.warn(
            f"smallest group has only {smallest} rows (< {LOW_POWER_GROUP_SIZE}); "
            "bootstrap interval will be unstable",
            RuntimeWarning,
            stacklevel=3,
        )


def _run_chunk(
    replicate: ReplicateFn,
    values: np.ndarray,
    mask_a: np.ndarray,
    n_reps: int,
    rng: np.random.Generator,
    deadline_at: float | None,
) -> np.ndarray:
    """Draw up to *n_reps* replicates; always completes at least one."""
    out = np.empty(n_reps, dtype=np.float64)
    for i in range(n_reps):
        out[i] = replicate(values, mask_a, rng)
        if deadline_at is not None and time.monotonic() >= deadline_at:
            return out[: i + 1]
    return out


def _chunk_sizes(reps: int, workers: int) -> list[int]:
    n_chunks = min(workers, reps)
    base, extra = divmod(reps, n_chunks)
    return [base + (1 if i < extra else 0) for i in range(n_chunks)]


def generate_distribution(
    data: Dataset,
    group_a: Label,
    group_b: Label,
    mode: ResampleMode,
    reps: int = DEFAULT_REPS,
    *,
    rng: np.random.Generator | None = None,
    seed: int | None = None,
    workers: int = 1,
    deadline: float | None = None,
) -> Distribution:
    """Generate ``reps`` replicate statistics in the requested *mode*.

    Args:
        data: Two-group dataset; rows with a missing measurement are ignored.
        group_a: Label whose mean is the minuend.
        group_b: Label whose mean is the subtrahend.
        mode: Permutation (null) or bootstrap (sampling) resampling.
        reps: Number of replicates, must be >= 1.
        rng: Explicit generator. Takes precedence over *seed*.
        seed: Seed for a fresh generator when *rng* is not given. With neither,
            OS entropy is used and runs are not reproducible.
        workers: Thread count; each thread gets an independent child stream.
        deadline: Wall-clock budget in seconds. When exceeded, generation stops
            and the returned distribution is tagged ``partial``.

    Raises:
        InvalidReps: *reps* is not a positive integer.
        InvalidLabel: the labels do not name the dataset's two groups.
        InsufficientData: too few measured rows (or, for bootstrap, fewer than
            two measured rows in a group).
    """
    reps = validate_reps(reps)
    if workers < 1:
        raise ValueError("workers must be >= 1")
    if deadline is not None and deadline <= 0:
        raise ValueError("deadline must be > 0 seconds or None")
    values, mask_a = complete_rows(data, group_a, group_b)
    if mode is ResampleMode.BOOTSTRAP:
        _check_bootstrap_groups(mask_a, group_a, group_b)

    replicate = _REPLICATE_FNS[mode]
    base_rng = rng if rng is not None else np.random.default_rng(seed)
    deadline_at = None if deadline is None else time.monotonic() + deadline
    sizes = _chunk_sizes(reps, workers)
    logger.debug(
        "generating %d %s replicates over %d rows in %d chunk(s)",
        reps,
        mode.value,
        values.shape[0],
        len(sizes),
    )

    if len(sizes) == 1:
        chunks = [_run_chunk(replicate, values, mask_a, reps, base_rng, deadline_at)]
    else:
        child_rngs = base_rng.spawn(len(sizes))
        with ThreadPoolExecutor(max_workers=len(sizes)) as pool:
            futures = [
                pool.submit(_run_chunk, replicate, values, mask_a, size, child, deadline_at)
                for size, child in zip(sizes, child_rngs, strict=True)
            ]
            chunks = [future.result() for future in futures]

    replicates = np.concatenate(chunks)
    partial = replicates.shape[0] < reps
    if partial:
        warnings.warn(
            f"deadline of {deadline}s reached after {replicates.shape[0]} of {reps} "
            f"{mode.value} replicates; distribution is partial",
            RuntimeWarning,
            stacklevel=2,
        )
    return Distribution(
        values=replicates,
        mode=mode,
        reps=reps,
        statistic=STATISTIC_NAME,
        seed=seed if rng is None else None,
        partial=partial,
    )


def permutation_distribution(
    data: Dataset,
    group_a: Label,
    group_b: Label,
    reps: int = DEFAULT_REPS,
    *,
    rng: np.random.Generator | None = None,
    seed: int | None = None,
    workers: int = 1,
    deadline: float | None = None,
) -> Distribution:
    """Null distribution of the mean difference under label permutation."""
    return generate_distribution(
        data,
        group_a,
        group_b,
        ResampleMode.PERMUTATION,
        reps,
        rng=rng,
        seed=seed,
        workers=workers,
        deadline=deadline,
    )


def bootstrap_distribution(
    data: Dataset,
    group_a: Label,
    group_b: Label,
    reps: int = DEFAULT_REPS,
    *,
    rng: np.random.Generator | None = None,
    seed: int | None = None,
    workers: int = 1,
    deadline: float | None = None,
) -> Distribution:
    """Sampling distribution of the mean difference under row bootstrap."""
    return generate_distribution(
        data,
        group_a,
        group_b,
        ResampleMode.BOOTSTRAP,
        reps,
        rng=rng,
        seed=seed,
        workers=workers,
        deadline=deadline,
    )
