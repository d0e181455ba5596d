"""Path construction helpers for analysis output directories."""

from __future__ import annotations

from pathlib import Path


def summary_path(out_dir: Path) -> Path:
    """Return path to the analysis summary JSON file."""
    return out_dir / "summary.json"


def null_distribution_path(out_dir: Path) -> Path:
    """Return path to the permutation null distribution Parquet file."""
    return out_dir / "null_distribution.parquet"


def bootstrap_distribution_path(out_dir: Path) -> Path:
    """Return path to the bootstrap distribution Parquet file."""
    return out_dir / "bootstrap_distribution.parquet"


def figure_path(out_dir: Path, name: str) -> Path:
    """Return path to a rendered figure inside ``out_dir/figures``."""
    return out_dir / "figures" / f"{name}.png"
