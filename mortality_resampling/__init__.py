"""Permutation and bootstrap inference for age vs. in-hospital mortality."""

from mortality_resampling.analysis import (
    AnalysisResult,
    bootstrap_distribution,
    describe_dataset,
    diff_in_means,
    generate_distribution,
    p_value_two_sided,
    percentile_interval,
    permutation_distribution,
    run_analysis,
    save_analysis,
)
from mortality_resampling.config import AnalysisConfig, IngestConfig, ResampleMode
from mortality_resampling.domain import ConfidenceInterval, Dataset, Distribution, Observation
from mortality_resampling.errors import (
    InsufficientData,
    InvalidLabel,
    InvalidLevel,
    InvalidReps,
    ResamplingError,
)
from mortality_resampling.io import load_patient_dataset

__all__ = [
    "AnalysisConfig",
    "AnalysisResult",
    "ConfidenceInterval",
    "Dataset",
    "Distribution",
    "IngestConfig",
    "InsufficientData",
    "InvalidLabel",
    "InvalidLevel",
    "InvalidReps",
    "Observation",
    "ResampleMode",
    "ResamplingError",
    "bootstrap_distribution",
    "describe_dataset",
    "diff_in_means",
    "generate_distribution",
    "load_patient_dataset",
    "p_value_two_sided",
    "percentile_interval",
    "permutation_distribution",
    "run_analysis",
    "save_analysis",
]
