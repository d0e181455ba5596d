"""Validation errors raised by the statistical core.

Every error subclasses :exc:`ValueError` so callers that already guard input
validation with ``except ValueError`` keep working.
"""

from __future__ import annotations


class ResamplingError(ValueError):
    """Base class for input problems detected before or during resampling."""


class InsufficientData(ResamplingError):
    """Not enough non-missing rows per group, or too few rows to resample."""


class InvalidReps(ResamplingError):
    """Replicate count is not a positive integer."""


class InvalidLevel(ResamplingError):
    """Confidence level lies outside the open interval (0, 1)."""


class InvalidLabel(ResamplingError):
    """Group labels are missing or do not form exactly two distinct values."""
