"""Base column definitions and metadata structures."""

from __future__ import annotations

from dataclasses import dataclass
from enum import StrEnum


@dataclass(frozen=True)
class ColumnMetadata:
    """Metadata for a dataset column.

    Attributes:
        cleaned_name: Canonical column name used in DataFrames.
        dtype: Expected pandas data type as a string.
        pretty_name: Human-readable name (with units) for plots and tables.
        unit: Measurement unit, empty for dimensionless columns.
    """

    original_name: str
    """Column name as it appears in the raw header row."""
    cleaned_name: str
    dtype: str
    pretty_name: str
    unit: str = ""


class BaseColumn(StrEnum):
    """Base class for dataset column enums.

    Derived enums must define a ``TARGET`` member naming the score column.

    Subclasses must implement:
    - metadata(): Return ColumnMetadata for each enum member
    - metric_columns(): Return the measurement column names
    - derived_columns(): Return columns computed from other columns
    """

    TARGET: str

    def metadata(self) -> ColumnMetadata:
        """Get metadata for this column.

        Raises:
            NotImplementedError: If not implemented by subclass.
        """
        raise NotImplementedError(f"{self.__class__.__name__} must implement metadata() method")

    @classmethod
    def metric_columns(cls) -> list[str]:
        """Get the numeric measurement column names (target excluded).

        Raises:
            NotImplementedError: If not implemented by subclass.
        """
        raise NotImplementedError(f"{cls.__name__} must implement metric_columns() method")

    @classmethod
    def derived_columns(cls) -> list[str]:
        """Get columns derived during preprocessing (e.g. the quality bucket)."""
        return []

    @classmethod
    def expected_header(cls) -> list[str]:
        """Raw header names in file order."""
        return [col.original_name for col in cls if col.value not in cls.derived_columns()]

    @property
    def pretty_name(self) -> str:
        """Get the human-readable name for plots and visualizations."""
        return self.metadata().pretty_name

    @property
    def original_name(self) -> str:
        """Get the original column name from the raw file."""
        return self.metadata().original_name

    @property
    def dtype_name(self) -> str:
        """Get the expected data type as a string."""
        return self.metadata().dtype

    @property
    def unit(self) -> str:
        return self.metadata().unit
