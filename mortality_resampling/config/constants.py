"""Centralized constants for ingestion and resampling.

Magic numbers shared across modules are defined here. Consuming modules
should import from this module rather than defining their own literals.
"""

from __future__ import annotations

DEFAULT_REPS = 10_000
"""Default number of resampling replicates per distribution."""

DEFAULT_CONFIDENCE_LEVEL = 0.95
"""Default coverage of the percentile confidence interval."""

MIN_RESAMPLE_ROWS = 2
"""Minimum non-missing rows required before any resampling."""

MIN_BOOTSTRAP_GROUP_SIZE = 2
"""Minimum non-missing rows per group for bootstrap resampling."""

LOW_POWER_GROUP_SIZE = 10
"""Groups smaller than this trigger a low-power RuntimeWarning."""

MAX_DEGENERATE_REDRAWS = 1_000
"""Redraw cap for a bootstrap replicate that lost one of the two groups."""

SUBSAMPLE_ROWS = 10_000
"""Default row cap applied to the patient table before analysis."""

AGE_COLUMN = "AGE"
"""Default name of the patient age column."""

DEATH_DATE_COLUMN = "DATE_DIED"
"""Default name of the date-of-death column."""

ALIVE_DATE_SENTINEL = "9999-99-99"
"""DATE_DIED value marking a patient who did not die in hospital."""

DIED_LABEL = "died"
"""Group label for patients with a recorded date of death."""

SURVIVED_LABEL = "survived"
"""Group label for patients without a recorded date of death."""
