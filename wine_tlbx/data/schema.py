"""Canonical column naming."""

import re

import pandas as pd

from wine_tlbx.errors import ParseError, SchemaCollision


_STAGE = "normalizer"
_NON_ALNUM = re.compile(r"[^0-9a-z]+")


def canonical_name(name: object) -> str:
    """Return the canonical form of a header: lowercase, runs of whitespace/punctuation as a single ``_``."""
    return _NON_ALNUM.sub("_", str(name).strip().lower()).strip("_")


def normalize_column_names(df: pd.DataFrame) -> pd.DataFrame:
    """Return a copy of ``df`` with canonical column names.

    ``"fixed acidity"`` -> ``"fixed_acidity"``, ``"pH"`` -> ``"ph"``. Canonical names map to themselves,
    so the function is idempotent.

    Raises:
        SchemaCollision: If two distinct headers map to the same canonical name.
        ParseError: If a header has no alphanumeric characters.
    """
    seen: dict[str, str] = {}
    for original in df.columns:
        cleaned = canonical_name(original)
        if not cleaned:
            raise ParseError("Header has no usable characters", stage=_STAGE, column=str(original))
        if cleaned in seen:
            raise SchemaCollision(
                f"Headers {seen[cleaned]!r} and {original!r} both normalize to {cleaned!r}",
                stage=_STAGE,
                column=cleaned,
            )
        seen[cleaned] = str(original)

    return df.set_axis(list(seen), axis=1)
