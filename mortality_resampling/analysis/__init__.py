"""Analysis layer: statistic, resampling, inference and the end-to-end run."""

from mortality_resampling.analysis.describe import describe_dataset
from mortality_resampling.analysis.inference import p_value_two_sided, percentile_interval
from mortality_resampling.analysis.pipeline import AnalysisResult, run_analysis, save_analysis
from mortality_resampling.analysis.resample import (
    bootstrap_distribution,
    generate_distribution,
    permutation_distribution,
)
from mortality_resampling.analysis.statistic import diff_in_means

__all__ = [
    "AnalysisResult",
    "bootstrap_distribution",
    "describe_dataset",
    "diff_in_means",
    "generate_distribution",
    "p_value_two_sided",
    "percentile_interval",
    "permutation_distribution",
    "run_analysis",
    "save_analysis",
]
