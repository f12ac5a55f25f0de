"""Bivariate scatter plots with median reference lines."""

import math
from collections.abc import Sequence

import matplotlib.pyplot as plt
import seaborn as sns
from matplotlib.axes import Axes
from matplotlib.figure import Figure

from wine_tlbx.data.views import DatasetView
from wine_tlbx.errors import MissingColumn
from wine_tlbx.utils.plotting_config import DEFAULT_PLOT_CFG, PlottingConfig


def _draw_scatter(
    view: DatasetView,
    x: str,
    y: str,
    ax: Axes,
    plot_cfg: PlottingConfig,
    **kwargs: object,
) -> None:
    for col in (x, y):
        if col not in view.df.columns:
            raise MissingColumn("Column not in view", stage="plotting", column=col)

    order = view.group_order
    sns.scatterplot(
        data=view.df,
        x=x,
        y=y,
        hue=view.group_col,
        hue_order=order,
        palette=plot_cfg.bucket_colors(len(order)),
        alpha=0.6,
        ax=ax,
        **kwargs,  # type: ignore[arg-type]
    )
    ax.axvline(view.df[x].median(), color="gray", linewidth=1, linestyle="--")
    ax.axhline(view.df[y].median(), color="gray", linewidth=1, linestyle="--")
    ax.set_xlabel(view.pretty(x))
    ax.set_ylabel(view.pretty(y))
    ax.legend(title="Quality Bucket", fontsize="small")


def plot_bivariate_scatter(
    view: DatasetView,
    x: str,
    y: str,
    figsize: tuple[int, int] = (8, 6),
    plot_cfg: PlottingConfig = DEFAULT_PLOT_CFG,
    **kwargs: object,
) -> Figure:
    """Scatter ``y`` against ``x`` colored by quality bucket, with dashed lines at both medians.

    The medians split the plane into quadrants, so the share of high-quality wines above or
    below the typical value of each metric can be read off directly.

    Args:
        view: Dataset view containing ``x``, ``y`` and the grouping column.
        x: Column on the horizontal axis.
        y: Column on the vertical axis.
        figsize: Figure size.
        plot_cfg: Plotting configuration (bucket palette).
        **kwargs: Forwarded to :func:`seaborn.scatterplot`.

    Raises:
        MissingColumn: If ``x`` or ``y`` is not in the view.
    """
    fig, ax = plt.subplots(figsize=figsize)
    _draw_scatter(view, x, y, ax, plot_cfg, **kwargs)
    ax.set_title(f"{view.pretty(y)} vs {view.pretty(x)}")
    fig.tight_layout()
    return fig


def plot_scatter_pairs(
    view: DatasetView,
    pairs: Sequence[tuple[str, str]],
    ncols: int = 2,
    panel_size: tuple[float, float] = (6, 4.5),
    plot_cfg: PlottingConfig = DEFAULT_PLOT_CFG,
) -> Figure:
    """Grid of :func:`plot_bivariate_scatter` panels, one per ``(x, y)`` pair."""
    nrows = max(1, math.ceil(len(pairs) / ncols))
    fig, axes = plt.subplots(nrows, ncols, figsize=(panel_size[0] * ncols, panel_size[1] * nrows), squeeze=False)
    flat = list(axes.flat)
    for ax in flat[len(pairs) :]:
        ax.set_visible(False)

    for ax, (x, y) in zip(flat, pairs, strict=False):
        _draw_scatter(view, x, y, ax, plot_cfg)
        ax.set_title(f"{view.pretty(y)} vs {view.pretty(x)}")

    fig.tight_layout()
    return fig
