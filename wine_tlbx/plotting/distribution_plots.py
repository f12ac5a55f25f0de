"""Per-bucket distribution plots: bucket sizes, densities, quartiles and violins."""

import math
from collections.abc import Sequence

import matplotlib.pyplot as plt
import numpy as np
import seaborn as sns
from matplotlib.axes import Axes
from matplotlib.figure import Figure

from wine_tlbx.analysis.summary_analyzer import SummaryResult
from wine_tlbx.data.views import DatasetView
from wine_tlbx.utils.plotting_config import DEFAULT_PLOT_CFG, PlottingConfig


def _metric_grid(
    n: int,
    ncols: int,
    panel_size: tuple[float, float],
) -> tuple[Figure, list[Axes]]:
    """Create a grid with one panel per metric; unused panels are hidden."""
    nrows = max(1, math.ceil(n / ncols))
    fig, axes = plt.subplots(
        nrows,
        ncols,
        figsize=(panel_size[0] * ncols, panel_size[1] * nrows),
        squeeze=False,
    )
    flat = list(axes.flat)
    for ax in flat[n:]:
        ax.set_visible(False)
    return fig, flat[:n]


def plot_bucket_distribution(
    result: SummaryResult,
    figsize: tuple[int, int] = (8, 5),
    plot_cfg: PlottingConfig = DEFAULT_PLOT_CFG,
    **kwargs: object,
) -> Figure:
    """Bar chart of rows per quality bucket, labelled with the rounded percentage."""
    dist = result.distribution.reset_index()

    fig, ax = plt.subplots(figsize=figsize)
    sns.barplot(
        data=dist,
        x="bucket",
        y="count",
        hue="bucket",
        order=result.bucket_order,
        hue_order=result.bucket_order,
        palette=plot_cfg.bucket_colors(len(result.bucket_order)),
        legend=False,
        ax=ax,
        **kwargs,  # type: ignore[arg-type]
    )
    labelled = dist.set_index("bucket").loc[result.bucket_order]
    for pos, (count, pct) in enumerate(zip(labelled["count"], labelled["percent_rounded"], strict=True)):
        ax.text(pos, count, f"{pct}%", ha="center", va="bottom")

    ax.set_title(f"Rows per Quality Bucket (rounded total {result.rounded_percent_total}%)")
    ax.set_xlabel("Quality Bucket")
    ax.set_ylabel("Count")
    fig.tight_layout()
    return fig


def plot_metric_densities(
    view: DatasetView,
    metrics: Sequence[str] | None = None,
    ncols: int = 3,
    panel_size: tuple[float, float] = (5, 3.5),
    plot_cfg: PlottingConfig = DEFAULT_PLOT_CFG,
    **kwargs: object,
) -> Figure:
    """Kernel density estimate of each metric, one curve per quality bucket.

    Densities are normalized per bucket (``common_norm=False``) so that small buckets stay visible.
    """
    metrics = list(metrics or view.numeric_cols)
    order = view.group_order
    fig, axes = _metric_grid(len(metrics), ncols, panel_size)

    for ax, metric in zip(axes, metrics, strict=True):
        sns.kdeplot(
            data=view.df,
            x=metric,
            hue=view.group_col,
            hue_order=order,
            palette=plot_cfg.bucket_colors(len(order)),
            common_norm=False,
            warn_singular=False,
            ax=ax,
            **kwargs,  # type: ignore[arg-type]
        )
        ax.set_xlabel(view.pretty(metric))
        ax.set_title(view.pretty(metric))

    fig.suptitle("Metric Densities by Quality Bucket")
    fig.tight_layout()
    return fig


def plot_quartiles(
    result: SummaryResult,
    metrics: Sequence[str] | None = None,
    ncols: int = 3,
    panel_size: tuple[float, float] = (5, 3.5),
) -> Figure:
    """Median per bucket with a bar spanning the 25th to 75th percentile, one panel per metric.

    Empty cells (no observations) are skipped.
    """
    metrics = list(metrics or result.metrics)
    order = result.bucket_order
    positions = np.arange(len(order))
    fig, axes = _metric_grid(len(metrics), ncols, panel_size)

    for ax, metric in zip(axes, metrics, strict=True):
        table = result.metric_table(metric).reindex(order)
        present = table["count"].to_numpy() > 0
        median = table["median"].to_numpy()
        yerr = np.vstack([median - table["p25"].to_numpy(), table["p75"].to_numpy() - median])

        ax.errorbar(
            positions[present],
            median[present],
            yerr=yerr[:, present],
            fmt="o-",
            capsize=4,
            color="tab:blue",
        )
        ax.set_xticks(positions, order)
        ax.set_xlim(-0.5, len(order) - 0.5)
        ax.set_title(result.pretty_by_col.get(metric, metric))
        ax.set_xlabel("Quality Bucket")

    fig.suptitle("Median and Interquartile Range by Quality Bucket")
    fig.tight_layout()
    return fig


def plot_metric_violins(
    view: DatasetView,
    metrics: Sequence[str] | None = None,
    ncols: int = 3,
    panel_size: tuple[float, float] = (5, 3.5),
    plot_cfg: PlottingConfig = DEFAULT_PLOT_CFG,
    **kwargs: object,
) -> Figure:
    """Violin plot of each metric per quality bucket."""
    metrics = list(metrics or view.numeric_cols)
    order = view.group_order
    fig, axes = _metric_grid(len(metrics), ncols, panel_size)

    for ax, metric in zip(axes, metrics, strict=True):
        sns.violinplot(
            data=view.df,
            x=view.group_col,
            y=metric,
            hue=view.group_col,
            order=order,
            hue_order=order,
            palette=plot_cfg.bucket_colors(len(order)),
            inner="quart",
            cut=0,
            legend=False,
            ax=ax,
            **kwargs,  # type: ignore[arg-type]
        )
        ax.set_title(view.pretty(metric))
        ax.set_xlabel("Quality Bucket")
        ax.set_ylabel("z-score" if view.is_standardized else view.pretty(metric))

    fig.suptitle("Metric Distributions by Quality Bucket" + (" (standardized)" if view.is_standardized else ""))
    fig.tight_layout()
    return fig
