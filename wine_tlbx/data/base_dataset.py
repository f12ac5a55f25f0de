"""Base dataset class for all dataset implementations."""

from abc import ABC, abstractmethod
from collections.abc import Iterable
from pathlib import Path
from typing import TYPE_CHECKING

import pandas as pd
from sklearn.preprocessing import StandardScaler

from wine_tlbx.errors import MissingColumn


if TYPE_CHECKING:
    from wine_tlbx.analysis.correlation_analyzer import CorrelationAnalyzer
    from wine_tlbx.analysis.summary_analyzer import SummaryAnalyzer

from .base_columns import BaseColumn
from .views import DatasetView


class BaseDataset(ABC):
    """Abstract base class for dataset handlers used throughout the toolbox.

    A dataset wraps one preprocessed DataFrame. It is never modified in place: every
    view, standardized copy and analyzer works on data derived from it.
    """

    Col: type[BaseColumn]

    def __init__(self, df: pd.DataFrame | None = None) -> None:
        """Initialize the base dataset.

        Args:
            df: Pre-loaded and preprocessed DataFrame (optional)
        """
        self._df: pd.DataFrame | None = df
        self._df_standardized: pd.DataFrame | None = None

    @classmethod
    @abstractmethod
    def from_csv(cls, source: str | Path | None = None, **kwargs: object) -> "BaseDataset":
        """Load dataset from a delimited file (URL or path).

        Args:
            source: URL or path of the file
            **kwargs: Additional loading parameters

        Returns:
            Dataset instance with loaded data
        """
        ...

    @property
    def df(self) -> pd.DataFrame:
        """Get the preprocessed DataFrame.

        Raises:
            ValueError: If dataset not loaded
        """
        if self._df is None:
            raise ValueError("Dataset not loaded. Use from_csv() to load data.")
        return self._df

    @property
    def df_pretty(self) -> pd.DataFrame:
        """Get the DataFrame with pretty column names."""
        return self.df.rename(columns={col: self.get_pretty_name(col) for col in self.df.columns})

    @property
    def numeric_cols(self) -> pd.Index:
        """Get numeric column names (the ordered bucket column is categorical and never included)."""
        return self.df.select_dtypes(include=["number"]).columns

    @property
    def group_col(self) -> str | None:
        """Name of the ordered categorical grouping column, if the dataset has one."""
        derived = self.Col.derived_columns()
        return str(derived[0]) if derived and str(derived[0]) in self.df.columns else None

    @property
    def df_standardized(self) -> pd.DataFrame:
        """Get the DataFrame with metric columns standardized.

        X <- (X - E[X]) / sd(X)
        """
        if self._df_standardized is None:
            self._df_standardized = self.standardize()
        return self._df_standardized

    def standardize(self, df: pd.DataFrame | None = None) -> pd.DataFrame:
        """Standardize the metric columns with [sklearn's StandardScaler](https://scikit-learn.org/stable/modules/generated/sklearn.preprocessing.StandardScaler.html).

        Target and grouping columns are carried over unchanged.

        Returns:
            Copy of the DataFrame with metric columns scaled to mean=0, std=1
        """
        if df is None:
            df = self.df

        metrics = self.feature_columns()
        scaled = StandardScaler().fit_transform(df[metrics])
        return df.assign(**{col: scaled[:, i] for i, col in enumerate(metrics)})

    def get_pretty_name(self, column_name: str) -> str:
        """Convert column name to pretty name for visualization."""
        try:
            col_enum = self.Col(column_name)
        except ValueError:
            return column_name.replace("_", " ").title()
        else:
            return str(col_enum.pretty_name)

    def get_pretty_names(self, column_names: list[str] | None = None) -> list[str]:
        return [self.get_pretty_name(name) for name in column_names or self.df.columns.to_list()]

    def feature_columns(
        self,
        include_target: bool = False,
        extra_exclude: Iterable[str] | None = None,
    ) -> list[str]:
        """Return numeric metric columns in file order, optionally including the target."""
        exclude = {str(col) for col in self.Col.derived_columns()}
        if extra_exclude:
            exclude.update(extra_exclude)
        if not include_target and self.Col.TARGET:
            exclude.add(str(self.Col.TARGET))
        return [col for col in self.numeric_cols if col not in exclude]

    def view(
        self,
        columns: Iterable[str] | None = None,
        standardized: bool = False,
        target_col: str | None = None,
        include_group: bool = True,
    ) -> DatasetView:
        """Build an immutable dataset view for analyzers and plotting layers.

        Args:
            columns: Metric columns to include in the view (defaults to all columns)
            standardized: Use the standardized dataframe
            target_col: Optional target column reference (defaults to ``Col.TARGET`` if present)
            include_group: Carry the grouping column along with the selected columns

        Raises:
            MissingColumn: If a requested column is not in the dataset.
        """
        frame = self.df_standardized if standardized else self.df
        selected_cols = list(columns if columns is not None else frame.columns.to_list())

        default_target = str(self.Col.TARGET)
        target_col = target_col or (default_target if default_target in frame.columns else None)
        extra = [target_col] if target_col else []
        if include_group and self.group_col:
            extra.append(self.group_col)
        selected_cols += [col for col in extra if col not in selected_cols]

        missing = [col for col in selected_cols if col not in frame.columns]
        if missing:
            raise MissingColumn("Requested column not in dataset", stage="view", column=missing[0])

        return DatasetView(
            df=frame.loc[:, selected_cols].copy(),
            pretty_by_col={col: self.get_pretty_name(col) for col in selected_cols},
            numeric_cols=[col for col in selected_cols if col in self.numeric_cols and col != target_col],
            target_col=target_col,
            group_col=self.group_col if include_group else None,
            is_standardized=standardized,
        )

    def analyzer_view(
        self,
        columns: Iterable[str] | None = None,
        standardized: bool = False,
        include_target: bool = True,
    ) -> DatasetView:
        """Build a dataset view tailored for downstream analyzers (metrics, target and group)."""
        view = self.view(
            columns=columns if columns is not None else self.feature_columns(),
            standardized=standardized,
        )
        if include_target:
            return view
        df = view.df.drop(columns=[view.target_col]) if view.target_col else view.df
        return DatasetView(
            df=df,
            pretty_by_col={col: view.pretty_by_col[col] for col in df.columns},
            numeric_cols=view.numeric_cols,
            group_col=view.group_col,
            is_standardized=view.is_standardized,
        )

    def make_summary_analyzer(
        self,
        columns: Iterable[str] | None = None,
        strict: bool = True,
    ) -> "SummaryAnalyzer":
        """Instantiate a per-bucket summary analyzer configured for this dataset."""
        from wine_tlbx.analysis.summary_analyzer import SummaryAnalyzer

        return SummaryAnalyzer(self.analyzer_view(columns=columns, include_target=False), strict=strict)

    def make_correlation_analyzer(
        self,
        columns: Iterable[str] | None = None,
        include_target: bool = True,
        strict: bool = True,
    ) -> "CorrelationAnalyzer":
        """Instantiate a correlation analyzer configured for this dataset."""
        from wine_tlbx.analysis.correlation_analyzer import CorrelationAnalyzer

        return CorrelationAnalyzer(
            self.analyzer_view(columns=columns, include_target=include_target),
            strict=strict,
        )
