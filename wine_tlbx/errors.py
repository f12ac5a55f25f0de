"""Error taxonomy shared by the loading, preprocessing and analysis stages."""

from __future__ import annotations


class WineToolboxError(ValueError):
    """Base class for all toolbox errors.

    Attributes:
        stage: Pipeline stage that detected the failure (e.g. ``"loader"``).
        column: Offending column name, if any.
        bucket: Offending quality bucket, if any.
    """

    def __init__(
        self,
        message: str,
        *,
        stage: str,
        column: str | None = None,
        bucket: str | None = None,
    ) -> None:
        self.stage = stage
        self.column = column
        self.bucket = bucket
        self.detail = message
        super().__init__(self._format())

    def _format(self) -> str:
        where = [f"stage={self.stage}"]
        if self.column is not None:
            where.append(f"column={self.column!r}")
        if self.bucket is not None:
            where.append(f"bucket={self.bucket!r}")
        return f"[{', '.join(where)}] {self.detail}"


class SourceUnavailable(WineToolboxError):
    """The network or file fetch failed."""


class ParseError(WineToolboxError):
    """Malformed delimited content, header/row arity mismatch or invalid values."""


class SchemaCollision(WineToolboxError):
    """Two distinct headers normalize to the same canonical name."""


class MissingColumn(WineToolboxError):
    """A column required by a stage is absent."""


class InsufficientData(WineToolboxError):
    """A summary was requested on an empty or too-small group."""


class UndefinedCorrelation(WineToolboxError):
    """Pearson correlation is undefined (zero variance or fewer than two observations)."""


__all__ = [
    "InsufficientData",
    "MissingColumn",
    "ParseError",
    "SchemaCollision",
    "SourceUnavailable",
    "UndefinedCorrelation",
    "WineToolboxError",
]
