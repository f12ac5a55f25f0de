"""Correlation analysis for dataset metrics."""

from collections.abc import Sequence
from dataclasses import dataclass
from typing import Self

import numpy as np
import pandas as pd

from wine_tlbx.data.views import DatasetView
from wine_tlbx.errors import MissingColumn, UndefinedCorrelation

from .base_analyser import BaseAnalyser


_STAGE = "correlation"


def pearson_correlation(
    x: Sequence[float] | np.ndarray | pd.Series,
    y: Sequence[float] | np.ndarray | pd.Series,
    *,
    x_name: str = "x",
    y_name: str = "y",
) -> float:
    r"""Pearson correlation coefficient of two paired samples.

    :math:`r = \sum (x_i - \bar x)(y_i - \bar y) / \sqrt{\sum (x_i - \bar x)^2 \sum (y_i - \bar y)^2}`,
    computed over the pairs where both values are present and clipped to [-1, 1].
    See [Wikipedia :: Pearson Correlation](https://en.wikipedia.org/wiki/Pearson_correlation_coefficient).

    Raises:
        ValueError: If ``x`` and ``y`` differ in length.
        UndefinedCorrelation: With fewer than two pairs or if either side is constant.
    """
    x_arr = np.asarray(x, dtype=float)
    y_arr = np.asarray(y, dtype=float)
    if x_arr.shape != y_arr.shape:
        raise ValueError(f"Samples must have the same length, got {x_arr.size} and {y_arr.size}")

    present = ~(np.isnan(x_arr) | np.isnan(y_arr))
    x_arr, y_arr = x_arr[present], y_arr[present]

    if x_arr.size < 2:
        raise UndefinedCorrelation(
            f"Need at least two paired observations, got {x_arr.size}",
            stage=_STAGE,
            column=f"{x_name} vs {y_name}",
        )
    for name, arr in ((x_name, x_arr), (y_name, y_arr)):
        if np.ptp(arr) == 0:
            raise UndefinedCorrelation("Zero variance", stage=_STAGE, column=name)

    dx = x_arr - x_arr.mean()
    dy = y_arr - y_arr.mean()
    r = (dx @ dy) / np.sqrt((dx @ dx) * (dy @ dy))
    return float(np.clip(r, -1.0, 1.0))


def _sign_tags(values: pd.Series) -> np.ndarray:
    return np.select(
        [values > 0, values < 0, values == 0],
        ["positive", "negative", "zero"],
        default="undefined",
    )


@dataclass(frozen=True)
class CorrelationResult:
    """Correlation analysis outputs grouped for plotting and reporting.

    Attributes:
        matrix: Symmetric Pearson correlation matrix over the metrics (target and bucket excluded).
            The diagonal is exactly 1.0 for every defined metric.
        undefined_mask: Boolean frame aligned with ``matrix``; True where the coefficient is undefined
            (zero variance or fewer than two paired observations). Those cells are NaN in ``matrix``.
        pretty_by_col: Mapping from raw metric names to presentation labels.
        feature_pairs: DataFrame with columns `feature_a`, `feature_b`, `correlation`,
            `abs_correlation`, `pair`; sorted by strongest absolute correlations.
        target_correlations: Optional DataFrame with columns `feature`, `correlation`, `sign`,
            `abs_correlation`, one row per metric in original column order.
        target_col: Name of the target the vector was computed against.
    """

    matrix: pd.DataFrame
    undefined_mask: pd.DataFrame
    pretty_by_col: dict[str, str]
    feature_pairs: pd.DataFrame
    target_correlations: pd.DataFrame | None = None
    target_col: str | None = None

    @property
    def undefined_columns(self) -> list[str]:
        """Metrics whose self-correlation is undefined (constant or fewer than two observations)."""
        return [col for col in self.matrix.columns if bool(self.undefined_mask.loc[col, col])]

    def _require_target(self) -> pd.DataFrame:
        if self.target_correlations is None:
            msg = "CorrelationResult does not include target correlations."
            raise ValueError(msg)
        return self.target_correlations

    def sorted_by_signed(self) -> pd.DataFrame:
        """Target correlations sorted by signed coefficient (descending, stable, undefined last)."""
        return (
            self._require_target()
            .sort_values("correlation", ascending=False, kind="stable", na_position="last")
            .reset_index(drop=True)
        )

    def sorted_by_absolute(self) -> pd.DataFrame:
        """Target correlations sorted by absolute coefficient (descending, stable, undefined last)."""
        return (
            self._require_target()
            .sort_values("abs_correlation", ascending=False, kind="stable", na_position="last")
            .reset_index(drop=True)
        )

    # ------------------------------------------------------------------ plotting shortcuts
    def plot_heatmap(self, **kwargs: object):
        """Plot correlation heatmap using the plotting helper."""
        from wine_tlbx.plotting.correlation_plots import plot_correlation_heatmap  # noqa: PLC0415

        return plot_correlation_heatmap(self, **kwargs)

    def plot_top_pairs(self, **kwargs: object):
        """Plot top positive/negative correlated pairs."""
        from wine_tlbx.plotting.correlation_plots import plot_top_correlated_pairs  # noqa: PLC0415

        return plot_top_correlated_pairs(self, **kwargs)

    def plot_target_correlations(self, **kwargs: object):
        """Plot correlations with the target variable."""
        from wine_tlbx.plotting.correlation_plots import plot_target_correlations  # noqa: PLC0415

        return plot_target_correlations(self, **kwargs)


class CorrelationAnalyzer(BaseAnalyser):
    """Analyzer for computing metric correlations and metric-vs-target correlations.

    Every coefficient comes from :func:`pearson_correlation`; the matrix is filled from the
    upper triangle so it is symmetric by construction. Undefined coefficients (zero variance,
    fewer than two paired observations) are never passed on as bare NaN: in strict mode
    ``fit()`` raises :class:`UndefinedCorrelation`, otherwise the cells are tagged in
    :attr:`CorrelationResult.undefined_mask` and the target vector marks them with
    ``sign == "undefined"``.

    Example:
        >>> from wine_tlbx.data import RedWineDataset
        >>> from wine_tlbx.plotting.correlation_plots import plot_correlation_heatmap, plot_target_correlations
        >>> ds = RedWineDataset.from_csv()
        >>> corr_res = ds.make_correlation_analyzer().fit().result()
        >>> _ = plot_correlation_heatmap(corr_res)
        >>> signed_fig, abs_fig = plot_target_correlations(corr_res)
        >>> corr_res.sorted_by_absolute().head(3)
    """

    def __init__(self, view: DatasetView, strict: bool = True):
        """Initialize the correlation analyzer with a dataset view."""
        self._view = view
        self.strict = strict
        self._corr_mat: pd.DataFrame | None = None
        self._undefined: pd.DataFrame | None = None
        self._target_corr: pd.DataFrame | None = None

    @property
    def metrics(self) -> list[str]:
        excluded = {self._view.target_col, self._view.group_col}
        return [col for col in self._view.numeric_cols if col not in excluded]

    def _pearson(self, a: str, b: str) -> float:
        """Coefficient of one column pair; NaN (tagged by the caller) if undefined and not strict."""
        try:
            return pearson_correlation(self._view.df[a], self._view.df[b], x_name=a, y_name=b)
        except UndefinedCorrelation:
            if self.strict:
                raise
            return np.nan

    def get_correlation_matrix(self) -> pd.DataFrame:
        """Compute the Pearson correlation matrix over the metrics.

        Raises:
            UndefinedCorrelation: In strict mode, on the first undefined coefficient.
        """
        if self._corr_mat is not None:
            return self._corr_mat

        metrics = self.metrics
        values = np.full((len(metrics), len(metrics)), np.nan)
        for i, a in enumerate(metrics):
            for j in range(i, len(metrics)):
                r = self._pearson(a, metrics[j])
                # pin the diagonal to exactly 1.0
                values[i, j] = values[j, i] = 1.0 if i == j and not np.isnan(r) else r

        self._corr_mat = pd.DataFrame(values, index=metrics, columns=metrics)
        self._undefined = self._corr_mat.isna()
        return self._corr_mat

    def get_top_correlated_pairs(self, n: int = 20) -> pd.DataFrame:
        """Return the strongest absolute Pearson correlations between metric pairs.

        Only the upper triangle (diagonal excluded) is considered, via :func:`np.triu_indices`.
        Undefined pairs are left out; ties keep column order.
        """
        corr_matrix = self.get_correlation_matrix()
        rows, cols = np.triu_indices(len(corr_matrix), k=1)

        return (
            pd.DataFrame(
                {
                    "feature_a": corr_matrix.index[rows],
                    "feature_b": corr_matrix.columns[cols],
                    "correlation": corr_matrix.to_numpy()[rows, cols],
                },
            )
            .dropna(subset=["correlation"])
            .assign(
                abs_correlation=lambda d: d.correlation.abs(),
                pair=lambda d: d.feature_a + " vs " + d.feature_b,
            )
            .sort_values("abs_correlation", ascending=False, kind="stable")
            .head(n)
            .reset_index(drop=True)
        )

    def get_target_correlations(self) -> pd.DataFrame:
        """Return the correlation of each metric with the target column, in column order.

        The target is the integer score column, never the derived bucket.

        Raises:
            ValueError: If the view has no target column configured.
            MissingColumn: If the target column is absent from the data.
            UndefinedCorrelation: In strict mode, on the first undefined coefficient.
        """
        target = self._view.target_col
        if not target:
            raise ValueError("Dataset view has no target column configured.")
        if target not in self._view.df.columns:
            raise MissingColumn("Target column not found in data", stage=_STAGE, column=target)

        if self._target_corr is None:
            corr = pd.Series({metric: self._pearson(metric, target) for metric in self.metrics}, dtype=float)
            self._target_corr = pd.DataFrame(
                {
                    "feature": corr.index,
                    "correlation": corr.to_numpy(),
                    "sign": _sign_tags(corr),
                    "abs_correlation": corr.abs().to_numpy(),
                },
            )
        return self._target_corr

    def _has_target(self) -> bool:
        return bool(self._view.target_col) and self._view.target_col in self._view.df.columns

    def fit(self) -> Self:
        """Compute the correlation matrix and, if the view has a target, the target vector."""
        self._corr_mat = None
        self._target_corr = None
        self.get_correlation_matrix()
        if self._has_target():
            self.get_target_correlations()
        return self

    def result(self, *, top_n_pairs: int = 20) -> CorrelationResult:
        if self._corr_mat is None or self._undefined is None:
            raise ValueError("Must call fit() before result()")

        target_col = self._view.target_col if self._target_corr is not None else None
        labelled = [*self._corr_mat.columns, *([target_col] if target_col else [])]

        return CorrelationResult(
            matrix=self._corr_mat,
            undefined_mask=self._undefined,
            pretty_by_col={col: self._view.pretty(col) for col in labelled},
            feature_pairs=self.get_top_correlated_pairs(n=top_n_pairs),
            target_correlations=self._target_corr,
            target_col=target_col,
        )
