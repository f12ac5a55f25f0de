"""Tests for RedWineDataset loading, preprocessing and view building."""

from pathlib import Path

import numpy as np
import pandas as pd
import pytest

from wine_tlbx.data import RedWineDataset, WineCol
from wine_tlbx.errors import MissingColumn, SchemaCollision, SourceUnavailable


class TestPreprocessing:
    """Test the load -> normalize -> bucket pipeline."""

    def test_from_frame_columns(self, wine_dataset: RedWineDataset) -> None:
        assert wine_dataset.df.columns.tolist() == [*WineCol.metric_columns(), "quality", "quality_bucket"]
        assert isinstance(wine_dataset.df[WineCol.QUALITY_BUCKET].dtype, pd.CategoricalDtype)

    def test_raw_frame_not_modified(self, raw_wine_df: pd.DataFrame) -> None:
        before = raw_wine_df.copy()
        RedWineDataset.from_frame(raw_wine_df)
        pd.testing.assert_frame_equal(raw_wine_df, before)

    def test_from_csv_local(self, wine_csv: Path) -> None:
        ds = RedWineDataset.from_csv(wine_csv)
        assert len(ds.df) == 48
        assert ds.group_col == "quality_bucket"

    def test_from_csv_missing_file(self, tmp_path: Path) -> None:
        with pytest.raises(SourceUnavailable):
            RedWineDataset.from_csv(tmp_path / "nope.csv")

    def test_schema_collision(self, raw_wine_df: pd.DataFrame) -> None:
        with pytest.raises(SchemaCollision):
            RedWineDataset.from_frame(raw_wine_df.assign(**{"Alcohol ": raw_wine_df["alcohol"]}))

    def test_missing_quality(self, raw_wine_df: pd.DataFrame) -> None:
        with pytest.raises(MissingColumn):
            RedWineDataset.from_frame(raw_wine_df.drop(columns=["quality"]))

    def test_unexpected_column_is_logged(self, raw_wine_df: pd.DataFrame, caplog: pytest.LogCaptureFixture) -> None:
        with caplog.at_level("WARNING", logger="wine_tlbx.data.wine_dataset"):
            ds = RedWineDataset.from_frame(raw_wine_df.assign(tannin=1.0))
        assert "tannin" in ds.df.columns
        assert "tannin" in caplog.text

    def test_df_not_loaded(self) -> None:
        with pytest.raises(ValueError, match="not loaded"):
            _ = RedWineDataset().df


class TestDatasetViews:
    """Test view and analyzer-view construction."""

    def test_feature_columns(self, wine_dataset: RedWineDataset) -> None:
        assert wine_dataset.feature_columns() == WineCol.metric_columns()
        assert wine_dataset.feature_columns(include_target=True)[-1] == "quality"

    def test_view_adds_target_and_group(self, wine_dataset: RedWineDataset) -> None:
        view = wine_dataset.view(columns=["alcohol"])
        assert view.df.columns.tolist() == ["alcohol", "quality", "quality_bucket"]
        assert view.numeric_cols == ["alcohol"]
        assert view.target_col == "quality"

    def test_view_unknown_column(self, wine_dataset: RedWineDataset) -> None:
        with pytest.raises(MissingColumn) as excinfo:
            wine_dataset.view(columns=["tannin"])
        assert excinfo.value.column == "tannin"

    def test_analyzer_view_without_target(self, wine_dataset: RedWineDataset) -> None:
        view = wine_dataset.analyzer_view(include_target=False)
        assert "quality" not in view.df.columns
        assert view.target_col is None
        assert view.group_col == "quality_bucket"
        assert view.numeric_cols == WineCol.metric_columns()

    def test_standardized_view(self, wine_dataset: RedWineDataset) -> None:
        view = wine_dataset.view(standardized=True)
        metrics = view.df[WineCol.metric_columns()]
        assert np.allclose(metrics.mean(), 0.0)
        assert np.allclose(metrics.std(ddof=0), 1.0)
        assert view.df["quality"].equals(wine_dataset.df["quality"])
        assert view.is_standardized

    def test_pretty_names(self, wine_dataset: RedWineDataset) -> None:
        assert wine_dataset.get_pretty_name("alcohol") == "Alcohol (% vol.)"
        assert wine_dataset.get_pretty_name("tannin_index") == "Tannin Index"
        assert "Alcohol (% vol.)" in wine_dataset.df_pretty.columns
        assert wine_dataset.get_pretty_names(["ph", "quality_bucket"]) == ["pH", "Quality Bucket"]
