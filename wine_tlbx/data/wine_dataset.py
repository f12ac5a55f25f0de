"""Dataset class for the red wine quality data: loading and preprocessing only."""

import logging
from pathlib import Path

import pandas as pd

from wine_tlbx.utils.sources import DEFAULT_SOURCE

from .base_dataset import BaseDataset
from .buckets import assign_quality_bucket
from .loader import load_delimited
from .schema import normalize_column_names
from .wine_columns import WineColumn as Col


logger = logging.getLogger(__name__)


class RedWineDataset(BaseDataset):
    """Loading and preprocessing for the [Wine Quality dataset](https://archive.ics.uci.edu/dataset/186/wine+quality).

    Preprocessing runs strictly one way: load -> canonical column names -> ordinal quality bucket.

    **Example workflow**:
    >>> from wine_tlbx.data import RedWineDataset, WineCol
    >>> from wine_tlbx.plotting import plot_bucket_distribution, plot_target_correlations
    >>> ds = RedWineDataset.from_csv()
    >>> summary = ds.make_summary_analyzer().fit().result()
    >>> summary.distribution
    >>> corr = ds.make_correlation_analyzer().fit().result()
    >>> corr.sorted_by_absolute().head()
    >>> _ = plot_bucket_distribution(summary)
    >>> _ = plot_target_correlations(corr)

    Using an in-memory frame with raw headers:

    >>> raw = pd.read_csv("winequality-red.csv", sep=";")
    >>> ds = RedWineDataset.from_frame(raw)
    >>> ds.df[WineCol.QUALITY_BUCKET].cat.categories.tolist()
    ['3to4', '5', '6', '7to8']
    """

    Col = Col

    @classmethod
    def from_csv(
        cls,
        source: str | Path | None = None,
        *,
        sep: str | None = None,
        timeout: float | None = None,
    ) -> "RedWineDataset":
        """Load and preprocess the dataset from a URL or local path.

        Args:
            source: URL or path of the delimited file (defaults to the UCI red wine file)
            sep: Field delimiter (defaults to ``";"``)
            timeout: Network timeout in seconds for URL sources

        Returns:
            RedWineDataset with canonical columns and the quality bucket attached

        Raises:
            SourceUnavailable: If the file cannot be fetched.
            ParseError: If the content is malformed.
            SchemaCollision: If two headers normalize to the same name.
            MissingColumn: If the ``quality`` column is absent.
        """
        config = DEFAULT_SOURCE.with_overrides(url=str(source) if source is not None else None, sep=sep, timeout=timeout)
        raw = load_delimited(config.url, sep=config.sep, timeout=config.timeout)
        return cls.from_frame(raw)

    @classmethod
    def from_frame(cls, raw: pd.DataFrame) -> "RedWineDataset":
        """Preprocess an already parsed frame with raw headers."""
        wine_df = raw.pipe(normalize_column_names).pipe(assign_quality_bucket, quality_col=Col.TARGET.value)

        unexpected = [col for col in wine_df.columns if col not in {c.value for c in Col}]
        if unexpected:
            logger.warning("Columns outside the wine schema kept as metrics: %s", unexpected)

        return cls(df=wine_df)
