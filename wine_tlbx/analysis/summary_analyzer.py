"""Per-bucket descriptive statistics for dataset metrics."""

from dataclasses import dataclass
from typing import Self

import numpy as np
import pandas as pd

from wine_tlbx.data.views import DatasetView
from wine_tlbx.errors import InsufficientData, MissingColumn

from .base_analyser import BaseAnalyser


_STAGE = "summary"

SUMMARY_COLUMNS: list[str] = ["count", "min", "p25", "median", "p75", "max"]
_DESCRIBE_TO_SUMMARY = {"25%": "p25", "50%": "median", "75%": "p75"}


def half_up_percent(percent: pd.Series) -> pd.Series:
    """Round percentages to whole numbers, ties rounding up (12.5 -> 13)."""
    return np.floor(percent + 0.5).astype(int)


@dataclass(frozen=True)
class FiveNumberSummary:
    """Five-number summary of one (metric, bucket) cell."""

    count: int
    min: float
    p25: float
    median: float
    p75: float
    max: float


@dataclass(frozen=True)
class SummaryResult:
    """Bucket distribution and per-bucket five-number summaries.

    Attributes:
        distribution: Index = bucket (declared order); columns ``count``, ``percent`` (exact)
            and ``percent_rounded`` (half-up whole percent, not normalized to 100).
        five_number: MultiIndex ``(metric, bucket)``; columns ``count``, ``min``, ``p25``,
            ``median``, ``p75``, ``max``. Empty cells have ``count == 0`` and NaN statistics.
        overall: Five-number summary per metric across all rows.
        pretty_by_col: Mapping from metric names to presentation labels.
        bucket_order: Ordinal order of the buckets.
    """

    distribution: pd.DataFrame
    five_number: pd.DataFrame
    overall: pd.DataFrame
    pretty_by_col: dict[str, str]
    bucket_order: list[str]

    @property
    def metrics(self) -> list[str]:
        return self.overall.index.tolist()

    @property
    def rounded_percent_total(self) -> int:
        """Sum of the rounded percentages; may differ from 100 by the rounding of each bucket."""
        return int(self.distribution["percent_rounded"].sum())

    def metric_table(self, metric: str) -> pd.DataFrame:
        """Five-number summaries of one metric, one row per bucket."""
        if metric not in self.metrics:
            raise MissingColumn("Metric not summarized", stage=_STAGE, column=metric)
        return self.five_number.xs(metric, level="metric")

    def cell(self, metric: str, bucket: str) -> FiveNumberSummary:
        """Return the summary of one (metric, bucket) cell.

        Raises:
            MissingColumn: If ``metric`` was not summarized or ``bucket`` is not a known bucket.
            InsufficientData: If the cell has no observations.
        """
        table = self.metric_table(metric)
        if str(bucket) not in self.bucket_order:
            raise MissingColumn("Unknown quality bucket", stage=_STAGE, column=metric, bucket=str(bucket))
        row = table.loc[str(bucket)]
        if row["count"] == 0:
            raise InsufficientData("No observations in this group", stage=_STAGE, column=metric, bucket=str(bucket))
        return FiveNumberSummary(count=int(row["count"]), **{k: float(row[k]) for k in SUMMARY_COLUMNS[1:]})

    # ------------------------------------------------------------------ plotting shortcuts
    def plot_distribution(self, **kwargs: object):
        """Plot bucket counts with percentage labels."""
        from wine_tlbx.plotting.distribution_plots import plot_bucket_distribution  # noqa: PLC0415

        return plot_bucket_distribution(self, **kwargs)

    def plot_quartiles(self, **kwargs: object):
        """Plot p25/median/p75 per bucket for each metric."""
        from wine_tlbx.plotting.distribution_plots import plot_quartiles  # noqa: PLC0415

        return plot_quartiles(self, **kwargs)


class SummaryAnalyzer(BaseAnalyser):
    """Bucket distribution and five-number summaries of every metric within every bucket.

    Quantiles use linear interpolation between order statistics (rank ``p * (n - 1)``),
    which is the default of :meth:`pandas.Series.quantile`.

    Example:
        >>> from wine_tlbx.data import RedWineDataset
        >>> ds = RedWineDataset.from_csv()
        >>> res = ds.make_summary_analyzer().fit().result()
        >>> res.distribution
        >>> res.cell("alcohol", "7to8").median

    Args:
        view: Dataset view with metric columns and a grouping column.
        strict: Raise :class:`InsufficientData` on the first empty (metric, bucket) cell.
            If False, empty cells are kept absent (NaN) and only :meth:`SummaryResult.cell` raises.
    """

    def __init__(self, view: DatasetView, strict: bool = True) -> None:
        self._view = view
        self.strict = strict
        self._distribution: pd.DataFrame | None = None
        self._five_number: pd.DataFrame | None = None
        self._overall: pd.DataFrame | None = None

    @property
    def metrics(self) -> list[str]:
        return [col for col in self._view.numeric_cols if col != self._view.group_col]

    def _bucket_order(self) -> list[str]:
        return self._view.group_order

    def get_distribution(self) -> pd.DataFrame:
        """Count and percentage of rows per bucket, in bucket order.

        Raises:
            InsufficientData: If the view has no rows.
        """
        order = self._bucket_order()
        counts = self._view.groups.astype(str).value_counts().reindex(order, fill_value=0)
        total = int(counts.sum())
        if total == 0:
            raise InsufficientData("Dataset has no rows to summarize", stage=_STAGE)

        # multiply first: integer * 100 is exact, so .5 ties survive the division
        percent = counts * 100 / total
        return pd.DataFrame(
            {
                "count": counts.astype(int),
                "percent": percent,
                "percent_rounded": half_up_percent(percent),
            },
        ).rename_axis("bucket")

    def get_five_number_summary(self) -> pd.DataFrame:
        """Five-number summary per (metric, bucket).

        The view is reshaped to long format, grouped once by ``(metric, bucket)`` and every
        group is reduced with :meth:`pandas.core.groupby.SeriesGroupBy.describe`. The result is
        reindexed to the full metric x bucket product so that empty groups show up as absent
        (``count == 0``, NaN statistics) instead of disappearing.
        """
        group_col = self._view.groups.name
        order = self._bucket_order()
        long = (
            self._view.df.melt(id_vars=[group_col], value_vars=self.metrics, var_name="metric", value_name="value")
            .dropna(subset=["value"])
            .astype({group_col: str})
        )
        full_index = pd.MultiIndex.from_product([self.metrics, order], names=["metric", "bucket"])

        if long.empty:
            table = pd.DataFrame(np.nan, index=full_index, columns=SUMMARY_COLUMNS)
        else:
            table = (
                long.groupby(["metric", group_col])["value"]
                .describe()
                .rename(columns=_DESCRIBE_TO_SUMMARY)
                .reindex(full_index)
                .loc[:, SUMMARY_COLUMNS]
            )
        return table.assign(count=table["count"].fillna(0).astype(int))

    def get_overall_summary(self) -> pd.DataFrame:
        """Five-number summary per metric across all buckets."""
        overall = self._view.df[self.metrics].describe().T.rename(columns=_DESCRIBE_TO_SUMMARY)
        return overall.loc[:, SUMMARY_COLUMNS].assign(count=lambda d: d["count"].astype(int)).rename_axis("metric")

    def fit(self) -> Self:
        """Compute the distribution and all summaries.

        Raises:
            MissingColumn: If the view has no grouping column.
            InsufficientData: If the view is empty, or (strict mode) a cell has no observations.
        """
        distribution = self.get_distribution()
        five_number = self.get_five_number_summary()

        if self.strict:
            empty = five_number.index[five_number["count"] == 0]
            if len(empty):
                metric, bucket = empty[0]
                raise InsufficientData("No observations in this group", stage=_STAGE, column=metric, bucket=bucket)

        self._distribution = distribution
        self._five_number = five_number
        self._overall = self.get_overall_summary()
        return self

    def result(self) -> SummaryResult:
        """Return the packaged summaries.

        Raises:
            ValueError: If fit() has not been called yet.
        """
        if self._distribution is None or self._five_number is None or self._overall is None:
            raise ValueError("Must call fit() before result()")

        return SummaryResult(
            distribution=self._distribution,
            five_number=self._five_number,
            overall=self._overall,
            pretty_by_col={col: self._view.pretty(col) for col in self.metrics},
            bucket_order=self._bucket_order(),
        )
