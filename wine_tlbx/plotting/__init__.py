"""Plotting utilities for data visualization."""

from .correlation_plots import plot_correlation_heatmap, plot_target_correlations, plot_top_correlated_pairs
from .distribution_plots import (
    plot_bucket_distribution,
    plot_metric_densities,
    plot_metric_violins,
    plot_quartiles,
)
from .scatter_plots import plot_bivariate_scatter, plot_scatter_pairs


__all__ = [
    "plot_bivariate_scatter",
    "plot_bucket_distribution",
    "plot_correlation_heatmap",
    "plot_metric_densities",
    "plot_metric_violins",
    "plot_quartiles",
    "plot_scatter_pairs",
    "plot_target_correlations",
    "plot_top_correlated_pairs",
]
