from dataclasses import dataclass, replace
from typing import Literal


__all__ = ["DEFAULT_SOURCE", "SourceConfig", "get_dataset_source"]


_UCI_BASE_URL = "https://archive.ics.uci.edu/ml/machine-learning-databases/wine-quality"


@dataclass(frozen=True)
class SourceConfig:
    """Location and parsing options of a delimited dataset.

    Attributes:
        url: URL or filesystem path of the delimited file.
        sep: Field delimiter.
        timeout: Network timeout in seconds (ignored for local paths).
    """

    url: str
    sep: str = ";"
    timeout: float = 30.0

    def with_overrides(self, **changes: object) -> "SourceConfig":
        """Return a copy with the given fields replaced (``None`` values are ignored)."""
        return replace(self, **{k: v for k, v in changes.items() if v is not None})


_DATASET_MAP: dict[str, SourceConfig] = {
    "red_wine": SourceConfig(url=f"{_UCI_BASE_URL}/winequality-red.csv"),
    "white_wine": SourceConfig(url=f"{_UCI_BASE_URL}/winequality-white.csv"),
}

DEFAULT_SOURCE = _DATASET_MAP["red_wine"]


def get_dataset_source(name: Literal["red_wine", "white_wine"] | str) -> SourceConfig:  # noqa: PYI051
    """Resolve a known dataset key, or treat ``name`` as a custom URL/path.

    Args:
        name: Key of a known dataset or a custom URL/path

    Returns:
        SourceConfig for the dataset (semicolon-delimited by default)

    Supported: red_wine white_wine
    """
    return _DATASET_MAP.get(name, SourceConfig(url=name))
