"""Correlation analysis visualization functions."""

import matplotlib.pyplot as plt
import numpy as np
import pandas as pd
import seaborn as sns
from matplotlib.figure import Figure

from wine_tlbx.analysis.correlation_analyzer import CorrelationResult


_SIGN_COLORS = {"positive": "#d62728", "negative": "#1f77b4", "zero": "gray"}


def plot_correlation_heatmap(
    result: CorrelationResult,
    figsize: tuple[int, int] = (12, 10),
    **kwargs: object,
) -> Figure:
    """Plot the lower triangle of the correlation matrix.

    The diagonal (always 1) and the mirrored upper triangle are hidden; undefined cells are
    hidden as well.
    """
    fig, ax = plt.subplots(figsize=figsize)

    label_map = {col: result.pretty_by_col.get(col, col) for col in result.matrix.columns}
    mask = np.triu(np.ones(result.matrix.shape, dtype=bool)) | result.undefined_mask.to_numpy()

    sns.heatmap(
        result.matrix.rename(index=label_map, columns=label_map),
        mask=mask,
        annot=True,
        fmt=".2f",
        cmap="coolwarm",
        vmin=-1,
        vmax=1,
        ax=ax,
        square=True,
        cbar_kws={"shrink": 0.8},
        **kwargs,  # type: ignore[arg-type]
    )

    ax.set_xticklabels(
        ax.get_xticklabels(),
        rotation=45,
        ha="right",
        rotation_mode="anchor",
    )
    ax.tick_params(axis="y", rotation=0)
    ax.set_title("Metric Correlation Matrix (Pearson)")
    fig.tight_layout()

    return fig


def _prettify_pair_columns(
    pairs: pd.DataFrame,
    pretty_by_col: dict[str, str],
) -> pd.DataFrame:
    """Attach pretty labels for plotting convenience."""
    return pairs.assign(
        pretty_pair=[
            f"{pretty_by_col.get(a, a)} vs {pretty_by_col.get(b, b)}"
            for a, b in zip(pairs["feature_a"], pairs["feature_b"], strict=True)
        ],
    )


def plot_top_correlated_pairs(
    result: CorrelationResult,
    n: int = 10,
    threshold: float | None = 0.5,
    figsize: tuple[int, int] = (10, 6),
) -> tuple[Figure, Figure]:
    """Plot top positively and negatively correlated metric pairs.

    Args:
        result: CorrelationResult from CorrelationAnalyzer.
        n: Number of top correlated pairs to display in each plot.
        threshold: Reference line marking a strong absolute correlation.
        figsize: Figure size for each plot.
    """
    pairs = _prettify_pair_columns(result.feature_pairs, result.pretty_by_col)
    positive = pairs.query("correlation > 0").nlargest(n, "abs_correlation")
    negative = pairs.query("correlation < 0").nlargest(n, "abs_correlation")

    figures = []
    for subset, color, title, sign in (
        (positive, _SIGN_COLORS["positive"], "Positive", 1),
        (negative, _SIGN_COLORS["negative"], "Negative", -1),
    ):
        fig, ax = plt.subplots(figsize=figsize)
        sns.barplot(data=subset, x="correlation", y="pretty_pair", color=color, ax=ax)
        ax.set_title(f"Top {len(subset)} {title} Correlations")
        ax.set_xlabel("Pearson Correlation")
        ax.set_ylabel("")
        ax.axvline(0, color="black", linewidth=1, linestyle="--")
        if threshold is not None:
            ax.axvline(sign * threshold, color="tab:orange", linewidth=2, linestyle="--")
        fig.tight_layout()
        figures.append(fig)

    return figures[0], figures[1]


def plot_target_correlations(
    result: CorrelationResult,
    figsize: tuple[int, int] = (10, 6),
) -> tuple[Figure, Figure]:
    """Bar charts of every metric's correlation with the target.

    Returns:
        ``(signed_fig, abs_fig)``: bars ordered by signed coefficient, and by absolute coefficient
        colored by sign. Undefined coefficients are left out.
    """
    target_label = result.pretty_by_col.get(result.target_col or "", result.target_col or "Target")

    signed = result.sorted_by_signed().query("sign != 'undefined'")
    by_abs = result.sorted_by_absolute().query("sign != 'undefined'")

    figures = []
    for frame, x, title in (
        (signed, "correlation", f"Correlation with {target_label}"),
        (by_abs, "abs_correlation", f"Absolute Correlation with {target_label}"),
    ):
        frame = frame.assign(pretty_feature=frame["feature"].map(lambda c: result.pretty_by_col.get(c, c)))
        fig, ax = plt.subplots(figsize=figsize)
        sns.barplot(
            data=frame,
            x=x,
            y="pretty_feature",
            hue="sign",
            palette=_SIGN_COLORS,
            dodge=False,
            ax=ax,
        )
        ax.set_title(title)
        ax.set_xlabel("Pearson Correlation" if x == "correlation" else "|Pearson Correlation|")
        ax.set_ylabel("")
        ax.axvline(0, color="black", linewidth=1, linestyle="--")
        fig.tight_layout()
        figures.append(fig)

    return figures[0], figures[1]
