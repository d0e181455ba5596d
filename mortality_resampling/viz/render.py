"""Matplotlib rendering of replicate distributions."""

from __future__ import annotations

from pathlib import Path

import matplotlib.pyplot as plt

from mortality_resampling.config.types import ResampleMode
from mortality_resampling.domain.distribution import ConfidenceInterval, Distribution

_MODE_COLORS: dict[ResampleMode, str] = {
    ResampleMode.PERMUTATION: "steelblue",
    ResampleMode.BOOTSTRAP: "darkorange",
}

_MODE_TITLES: dict[ResampleMode, str] = {
    ResampleMode.PERMUTATION: "Permutation Null Distribution",
    ResampleMode.BOOTSTRAP: "Bootstrap Distribution",
}


def render_distribution(
    distribution: Distribution,
    observed: float,
    output_path: Path,
    interval: ConfidenceInterval | None = None,
    bins: int = 50,
    xlabel: str = "Difference in Mean Age (years)",
) -> Path:
    """Histogram of *distribution* with the observed statistic marked.

    Permutation nulls get lines at ``+observed`` and ``-observed`` (both tails
    of the two-sided test); bootstrap distributions get a single line and,
    when *interval* is given, a shaded band over it.
    """
    color = _MODE_COLORS[distribution.mode]
    fig, ax = plt.subplots(figsize=(7, 4))
    ax.hist(distribution.values, bins=bins, color=color, alpha=0.75, edgecolor="white")

    ax.axvline(observed, color="crimson", linewidth=1.5, label=f"observed = {observed:.2f}")
    if distribution.mode is ResampleMode.PERMUTATION:
        ax.axvline(-observed, color="crimson", linewidth=1.5, linestyle="--")
    if interval is not None:
        ax.axvspan(
            interval.lower,
            interval.upper,
            color="grey",
            alpha=0.2,
            label=f"{interval.level:.0%} CI [{interval.lower:.2f}, {interval.upper:.2f}]",
        )

    title = _MODE_TITLES[distribution.mode]
    if distribution.partial:
        title += f" (partial: {len(distribution)}/{distribution.reps})"
    ax.set_title(title)
    ax.set_xlabel(xlabel)
    ax.set_ylabel("Replicates")
    ax.legend()

    output_path = Path(output_path)
    output_path.parent.mkdir(parents=True, exist_ok=True)
    fig.savefig(str(output_path), bbox_inches="tight", dpi=150)
    plt.close(fig)
    return output_path
