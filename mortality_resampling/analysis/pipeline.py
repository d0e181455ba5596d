"""End-to-end permutation test plus bootstrap interval for one dataset."""

from __future__ import annotations

import json
from dataclasses import dataclass
from pathlib import Path
from typing import Any

import numpy as np
import pyarrow as pa
import pyarrow.parquet as pq

from mortality_resampling.analysis.describe import describe_dataset
from mortality_resampling.analysis.inference import p_value_two_sided, percentile_interval
from mortality_resampling.analysis.resample import bootstrap_distribution, permutation_distribution
from mortality_resampling.analysis.statistic import diff_in_means
from mortality_resampling.config.types import AnalysisConfig
from mortality_resampling.domain.dataset import Dataset
from mortality_resampling.domain.distribution import ConfidenceInterval, Distribution
from mortality_resampling.io.paths import (
    bootstrap_distribution_path,
    null_distribution_path,
    summary_path,
)
from mortality_resampling.io.schemas import DISTRIBUTION_SCHEMA, SUMMARY_SCHEMA_VERSION


@dataclass(frozen=True)
class AnalysisResult:
    """Observed statistic with its null and bootstrap distributions."""

    config: AnalysisConfig
    observed: float
    p_value: float
    interval: ConfidenceInterval
    null_distribution: Distribution
    bootstrap_distribution: Distribution
    description: dict[str, Any]

    def to_dict(self) -> dict[str, Any]:
        return {
            "schema_version": SUMMARY_SCHEMA_VERSION,
            "statistic": self.null_distribution.statistic,
            "group_a": self.config.group_a,
            "group_b": self.config.group_b,
            "observed": self.observed,
            "p_value": self.p_value,
            "confidence_interval": self.interval.to_dict(),
            "seed": self.config.seed,
            "workers": self.config.workers,
            "null_distribution": self.null_distribution.summary(),
            "bootstrap_distribution": self.bootstrap_distribution.summary(),
            "description": self.description,
        }


def run_analysis(data: Dataset, config: AnalysisConfig | None = None) -> AnalysisResult:
    """Observed statistic -> permutation null -> p-value -> bootstrap -> interval.

    The permutation and bootstrap streams are two independent children of a
    single :class:`numpy.random.SeedSequence` built from ``config.seed``.
    """
    config = config or AnalysisConfig()
    observed = diff_in_means(data, config.group_a, config.group_b)
    null_rng, boot_rng = (
        np.random.default_rng(child) for child in np.random.SeedSequence(config.seed).spawn(2)
    )
    null_dist = permutation_distribution(
        data,
        config.group_a,
        config.group_b,
        config.reps,
        rng=null_rng,
        workers=config.workers,
        deadline=config.deadline,
    )
    boot_dist = bootstrap_distribution(
        data,
        config.group_a,
        config.group_b,
        config.reps,
        rng=boot_rng,
        workers=config.workers,
        deadline=config.deadline,
    )
    return AnalysisResult(
        config=config,
        observed=observed,
        p_value=p_value_two_sided(null_dist, observed),
        interval=percentile_interval(boot_dist, config.level),
        null_distribution=null_dist,
        bootstrap_distribution=boot_dist,
        description=describe_dataset(data, event_label=config.group_a),
    )


def _distribution_table(distribution: Distribution) -> pa.Table:
    n = len(distribution)
    return pa.Table.from_pydict(
        {
            "replicate": list(range(n)),
            "mode": [distribution.mode.value] * n,
            "statistic": [distribution.statistic] * n,
            "value": distribution.values.tolist(),
        },
        schema=DISTRIBUTION_SCHEMA,
    )


def save_analysis(result: AnalysisResult, out_dir: Path) -> dict[str, Path]:
    """Persist the JSON summary and both replicate distributions under *out_dir*."""
    out_dir = Path(out_dir)
    out_dir.mkdir(parents=True, exist_ok=True)
    paths = {
        "summary": summary_path(out_dir),
        "null_distribution": null_distribution_path(out_dir),
        "bootstrap_distribution": bootstrap_distribution_path(out_dir),
    }
    paths["summary"].write_text(json.dumps(result.to_dict(), ensure_ascii=False, indent=2))
    pq.write_table(_distribution_table(result.null_distribution), paths["null_distribution"])
    pq.write_table(
        _distribution_table(result.bootstrap_distribution), paths["bootstrap_distribution"]
    )
    return paths
