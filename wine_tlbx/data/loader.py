"""Fetch and parse delimited text resources into DataFrames."""

import io
import logging
import warnings
from pathlib import Path

import pandas as pd
import requests

from wine_tlbx.errors import ParseError, SourceUnavailable


logger = logging.getLogger(__name__)

_STAGE = "loader"


def is_url(source: str | Path) -> bool:
    """Return True if ``source`` looks like an http(s) URL."""
    return isinstance(source, str) and source.lower().startswith(("http://", "https://"))


def _fetch_text(url: str, timeout: float) -> str:
    try:
        response = requests.get(url, timeout=timeout)
        response.raise_for_status()
    except requests.RequestException as exc:
        raise SourceUnavailable(f"Could not fetch {url}: {exc}", stage=_STAGE) from exc
    return response.text


def _read_text(path: Path) -> str:
    if not path.is_file():
        raise SourceUnavailable(f"File not found: {path}", stage=_STAGE)
    try:
        return path.read_text(encoding="utf-8")
    except OSError as exc:
        raise SourceUnavailable(f"Could not read {path}: {exc}", stage=_STAGE) from exc


def parse_delimited(text: str, *, sep: str = ";") -> pd.DataFrame:
    """Parse delimited text with a header row into a numeric DataFrame.

    Args:
        text: Raw file content; the first line is the header.
        sep: Field delimiter.

    Returns:
        DataFrame with one numeric column per header field.

    Raises:
        ParseError: On tokenizer failures, empty content, short rows or non-numeric values.
    """
    # index_col=False keeps pandas from turning an extra leading field into the index;
    # the resulting ParserWarning about dropped fields is raised as an error instead
    try:
        with warnings.catch_warnings():
            warnings.simplefilter("error", pd.errors.ParserWarning)
            df = pd.read_csv(io.StringIO(text), sep=sep, index_col=False)
    except pd.errors.EmptyDataError as exc:
        raise ParseError("No content to parse", stage=_STAGE) from exc
    except pd.errors.ParserError as exc:
        raise ParseError(f"Malformed delimited content: {exc}", stage=_STAGE) from exc
    except pd.errors.ParserWarning as exc:
        raise ParseError(f"Rows have more fields than the header: {exc}", stage=_STAGE) from exc

    if df.shape[1] < 2:
        raise ParseError(
            f"Expected several {sep!r}-delimited columns, got header {list(df.columns)}",
            stage=_STAGE,
        )
    if df.empty:
        raise ParseError("No data rows below the header", stage=_STAGE)

    for col in df.columns:
        if not pd.api.types.is_numeric_dtype(df[col]):
            raise ParseError("Column contains non-numeric values", stage=_STAGE, column=str(col))

    missing = df.isna()
    if missing.any().any():
        row = missing.any(axis=1).idxmax()
        col = missing.loc[row].idxmax()
        # +2: one for the header line, one for 1-based line numbers
        raise ParseError(
            f"Missing value on line {row + 2} (row shorter than header?)",
            stage=_STAGE,
            column=str(col),
        )

    return df


def load_delimited(source: str | Path, *, sep: str = ";", timeout: float = 30.0) -> pd.DataFrame:
    """Load a delimited file from a URL or local path.

    A single best-effort read: failures are surfaced to the caller, never retried.

    Args:
        source: http(s) URL or filesystem path.
        sep: Field delimiter.
        timeout: Network timeout in seconds for URL sources.

    Returns:
        Parsed DataFrame (raw header names).

    Raises:
        SourceUnavailable: If the resource cannot be fetched or read.
        ParseError: If the content is malformed.
    """
    logger.info("Loading %s (sep=%r)", source, sep)
    text = _fetch_text(str(source), timeout) if is_url(source) else _read_text(Path(source))
    df = parse_delimited(text, sep=sep)
    logger.info("Loaded %d rows x %d columns from %s", df.shape[0], df.shape[1], source)
    return df
