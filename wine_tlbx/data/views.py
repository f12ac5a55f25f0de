"""Task-specific views over dataset content."""

from collections.abc import Mapping
from dataclasses import dataclass

import pandas as pd

from wine_tlbx.errors import MissingColumn

from .buckets import QualityBucket


@dataclass(frozen=True)
class DatasetView:
    """Immutable snapshot of dataset data and related metadata.

    Attributes:
        df: Dataframe slice containing the relevant columns.
        pretty_by_col: Mapping from canonical column names to display-friendly labels.
        numeric_cols: Ordered list of numeric metric names present in ``df``.
        target_col: Optional name of the target (score) column.
        group_col: Optional name of the ordered categorical grouping column.
        is_standardized: Indicates if numeric metrics have been standardized (zero mean, unit variance).
    """

    df: pd.DataFrame
    """Dataframe slice containing the relevant columns."""
    pretty_by_col: Mapping[str, str]
    """Mapping from canonical column names to display-friendly labels."""
    numeric_cols: list[str]
    target_col: str | None = None
    group_col: str | None = None
    is_standardized: bool | None = None
    """Indicates if numeric metrics have been standardized (zero mean, unit variance)."""

    @property
    def features(self) -> pd.DataFrame:
        """Return view over numeric metric columns."""
        cols = self.numeric_cols or self.df.columns.tolist()
        return self.df.loc[:, cols]

    @property
    def groups(self) -> pd.Series:
        """Return the grouping column.

        Raises:
            MissingColumn: If no grouping column is configured or present.
        """
        if not self.group_col or self.group_col not in self.df.columns:
            raise MissingColumn("Dataset view has no grouping column", stage="view", column=self.group_col)
        return self.df[self.group_col]

    def pretty(self, col: str) -> str:
        """Display label for ``col`` (falls back to the column name)."""
        return self.pretty_by_col.get(col, col)

    @property
    def group_order(self) -> list[str]:
        """Group labels in ordinal order (category order of an ordered categorical column)."""
        groups = self.groups
        if isinstance(groups.dtype, pd.CategoricalDtype):
            return [str(c) for c in groups.dtype.categories]
        return QualityBucket.order()
