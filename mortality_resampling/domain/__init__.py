"""Domain layer: observation tables and replicate distributions."""

from mortality_resampling.domain.dataset import Dataset, Label, Observation
from mortality_resampling.domain.distribution import ConfidenceInterval, Distribution

__all__ = [
    "ConfidenceInterval",
    "Dataset",
    "Distribution",
    "Label",
    "Observation",
]
