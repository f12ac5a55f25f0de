"""Data module for dataset classes."""

from .buckets import QualityBucket, assign_quality_bucket
from .loader import load_delimited
from .schema import normalize_column_names
from .wine_columns import WineColumn as WineCol
from .wine_dataset import RedWineDataset


__all__ = [
    "QualityBucket",
    "RedWineDataset",
    "WineCol",
    "assign_quality_bucket",
    "load_delimited",
    "normalize_column_names",
]
