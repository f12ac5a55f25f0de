"""Exploratory analysis toolbox for the red wine quality dataset.

Load -> canonical column names -> ordinal quality bucket -> per-bucket summaries and correlations.

>>> from wine_tlbx import RedWineDataset
>>> ds = RedWineDataset.from_csv()
>>> ds.make_summary_analyzer().fit().result().distribution
"""

from .analysis import CorrelationAnalyzer, CorrelationResult, SummaryAnalyzer, SummaryResult
from .data import QualityBucket, RedWineDataset, WineCol
from .errors import (
    InsufficientData,
    MissingColumn,
    ParseError,
    SchemaCollision,
    SourceUnavailable,
    UndefinedCorrelation,
    WineToolboxError,
)


__all__ = [
    "CorrelationAnalyzer",
    "CorrelationResult",
    "InsufficientData",
    "MissingColumn",
    "ParseError",
    "QualityBucket",
    "RedWineDataset",
    "SchemaCollision",
    "SourceUnavailable",
    "SummaryAnalyzer",
    "SummaryResult",
    "UndefinedCorrelation",
    "WineCol",
    "WineToolboxError",
]
