"""Ordinal quality buckets derived from the integer quality score."""

from enum import StrEnum

import numpy as np
import pandas as pd

from wine_tlbx.errors import MissingColumn, ParseError


_STAGE = "bucketing"

QUALITY_COL = "quality"
BUCKET_COL = "quality_bucket"
QUALITY_DOMAIN: tuple[int, int] = (0, 10)


class QualityBucket(StrEnum):
    """Coarsened quality scale.

    ``quality <= 4`` -> ``"3to4"``, ``5`` -> ``"5"``, ``6`` -> ``"6"``, ``quality >= 7`` -> ``"7to8"``.
    Member order is the ordinal order used by every grouped table and plot.
    """

    LOW = "3to4"
    FIVE = "5"
    SIX = "6"
    HIGH = "7to8"

    @classmethod
    def order(cls) -> list[str]:
        """Bucket labels in ordinal order."""
        return [bucket.value for bucket in cls]

    @classmethod
    def dtype(cls) -> pd.CategoricalDtype:
        """Ordered categorical dtype used for the bucket column."""
        return pd.CategoricalDtype(categories=cls.order(), ordered=True)

    @classmethod
    def from_quality(cls, quality: int) -> "QualityBucket":
        """Classify a single quality score."""
        if quality <= 4:
            return cls.LOW
        if quality == 5:
            return cls.FIVE
        if quality == 6:
            return cls.SIX
        return cls.HIGH


# Right-closed bins: (-inf, 4], (4, 5], (5, 6], (6, inf]
_BUCKET_EDGES = [-np.inf, 4, 5, 6, np.inf]


def _validate_quality(quality: pd.Series) -> None:
    values = pd.to_numeric(quality, errors="coerce")
    lo, hi = QUALITY_DOMAIN
    bad = values.isna() | (values % 1 != 0) | (values < lo) | (values > hi)
    if bad.any():
        raise ParseError(
            f"Quality must be an integer in [{lo}, {hi}], got {quality[bad].iloc[0]!r}",
            stage=_STAGE,
            column=QUALITY_COL,
        )


def quality_to_bucket(quality: pd.Series) -> pd.Series:
    """Map integer quality scores to an ordered categorical bucket Series."""
    _validate_quality(quality)
    return pd.cut(
        quality,
        bins=_BUCKET_EDGES,
        labels=QualityBucket.order(),
        right=True,
        ordered=True,
    ).astype(QualityBucket.dtype())


def assign_quality_bucket(
    df: pd.DataFrame,
    quality_col: str = QUALITY_COL,
    bucket_col: str = BUCKET_COL,
) -> pd.DataFrame:
    """Return a copy of ``df`` with the ordinal quality bucket attached.

    Raises:
        MissingColumn: If ``quality_col`` is absent.
        ParseError: If a quality value is not an integer in the declared domain.
    """
    if quality_col not in df.columns:
        raise MissingColumn("Quality column required for bucketing", stage=_STAGE, column=quality_col)

    buckets = quality_to_bucket(df[quality_col])
    return df.assign(**{quality_col: df[quality_col].astype(int), bucket_col: buckets})
