"""Test configuration for the wine toolbox."""

from pathlib import Path

import matplotlib
import numpy as np
import pandas as pd
import pytest


matplotlib.use("Agg")

RAW_HEADER = [
    "fixed acidity",
    "volatile acidity",
    "citric acid",
    "residual sugar",
    "chlorides",
    "free sulfur dioxide",
    "total sulfur dioxide",
    "density",
    "pH",
    "sulphates",
    "alcohol",
    "quality",
]


@pytest.fixture(autouse=True)
def _close_figures():
    """Release figures created by plotting tests."""
    yield
    import matplotlib.pyplot as plt

    plt.close("all")


@pytest.fixture(scope="session")
def raw_wine_df() -> pd.DataFrame:
    """Synthetic red wine sample with raw headers; every bucket holds several rows."""
    rng = np.random.default_rng(42)
    quality = np.tile([3, 4, 5, 5, 6, 6, 7, 8], 6)
    n = quality.size
    data = {
        "fixed acidity": rng.normal(8.3, 1.7, n).round(1),
        "volatile acidity": (1.0 - 0.08 * quality + rng.normal(0, 0.05, n)).round(3),
        "citric acid": rng.uniform(0.0, 0.8, n).round(2),
        "residual sugar": rng.uniform(1.2, 6.0, n).round(1),
        "chlorides": rng.uniform(0.04, 0.2, n).round(3),
        "free sulfur dioxide": rng.integers(3, 60, n).astype(float),
        "total sulfur dioxide": rng.integers(10, 150, n).astype(float),
        "density": rng.normal(0.9967, 0.0018, n).round(5),
        "pH": rng.normal(3.31, 0.15, n).round(2),
        "sulphates": rng.uniform(0.4, 1.2, n).round(2),
        "alcohol": (8.0 + 0.6 * quality + rng.normal(0, 0.3, n)).round(1),
        "quality": quality,
    }
    return pd.DataFrame(data, columns=RAW_HEADER)


@pytest.fixture
def wine_dataset(raw_wine_df: pd.DataFrame):
    """Preprocessed dataset built from the synthetic sample."""
    from wine_tlbx.data import RedWineDataset

    return RedWineDataset.from_frame(raw_wine_df)


@pytest.fixture
def wine_csv(tmp_path: Path, raw_wine_df: pd.DataFrame) -> Path:
    """The synthetic sample written as a semicolon-delimited file."""
    path = tmp_path / "winequality-red.csv"
    raw_wine_df.to_csv(path, sep=";", index=False)
    return path
