"""Visualization layer: distribution figures."""

from mortality_resampling.viz.render import render_distribution

__all__ = ["render_distribution"]
