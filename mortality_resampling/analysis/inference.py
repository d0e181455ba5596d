"""Empirical p-values and percentile confidence intervals."""

from __future__ import annotations

import math

import numpy as np

from mortality_resampling.config.constants import DEFAULT_CONFIDENCE_LEVEL
from mortality_resampling.config.types import validate_level
from mortality_resampling.domain.distribution import ConfidenceInterval, Distribution
from mortality_resampling.errors import InsufficientData

# Relative slack so replicates that reproduce |observed| up to rounding count as ties.
_TIE_RTOL = 1e-12


def _percentile_pre_sorted(sorted_values: np.ndarray, q: float) -> float:
    """Compute percentile in [0, 1] with linear interpolation on pre-sorted values."""
    if sorted_values.shape[0] == 1:
        return float(sorted_values[0])

    pos = (sorted_values.shape[0] - 1) * q
    lo = int(pos)
    hi = min(lo + 1, sorted_values.shape[0] - 1)
    fraction = pos - lo
    return float(sorted_values[lo] * (1.0 - fraction) + sorted_values[hi] * fraction)


def p_value_two_sided(distribution: Distribution, observed: float) -> float:
    """Fraction of replicates at least as extreme as *observed* in absolute value.

    When no replicate reaches ``|observed|`` the result is ``1 / n`` rather than
    zero: ``n`` replicates cannot resolve a tail probability below that.
    """
    n = len(distribution)
    if n == 0:
        raise InsufficientData("distribution holds no replicates")
    if math.isnan(observed):
        raise ValueError("observed statistic must not be NaN")
    magnitude = abs(float(observed))
    threshold = magnitude - _TIE_RTOL * magnitude
    hits = int(np.count_nonzero(np.abs(distribution.values) >= threshold))
    if hits == 0:
        return 1.0 / n
    return hits / n


def percentile_interval(
    distribution: Distribution, level: float = DEFAULT_CONFIDENCE_LEVEL
) -> ConfidenceInterval:
    """Percentile interval at coverage *level*.

    ``level=0.95`` returns the 2.5th and 97.5th empirical percentiles. Both
    bounds lie within the replicate range.

    Raises:
        InvalidLevel: *level* is outside (0, 1).
        InsufficientData: the distribution is empty.
    """
    level = validate_level(level)
    if len(distribution) == 0:
        raise InsufficientData("distribution holds no replicates")
    tail = (1.0 - level) / 2.0
    sorted_values = np.sort(distribution.values)
    lo_bound, hi_bound = float(sorted_values[0]), float(sorted_values[-1])
    lower = min(max(_percentile_pre_sorted(sorted_values, tail), lo_bound), hi_bound)
    upper = min(max(_percentile_pre_sorted(sorted_values, 1.0 - tail), lower), hi_bound)
    return ConfidenceInterval(lower=lower, upper=upper, level=level)
