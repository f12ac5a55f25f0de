"""Analysis modules for summary statistics and correlations."""

from .correlation_analyzer import CorrelationAnalyzer, CorrelationResult, pearson_correlation
from .summary_analyzer import FiveNumberSummary, SummaryAnalyzer, SummaryResult, half_up_percent


__all__ = [
    "CorrelationAnalyzer",
    "CorrelationResult",
    "FiveNumberSummary",
    "SummaryAnalyzer",
    "SummaryResult",
    "half_up_percent",
    "pearson_correlation",
]
