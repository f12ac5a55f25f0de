"""Tests for CorrelationAnalyzer."""

import numpy as np
import pandas as pd
import pytest

from wine_tlbx.analysis.correlation_analyzer import CorrelationAnalyzer, CorrelationResult, pearson_correlation
from wine_tlbx.data.views import DatasetView
from wine_tlbx.errors import MissingColumn, UndefinedCorrelation


def _view(data: dict[str, list[float]], target_col: str | None = None) -> DatasetView:
    df = pd.DataFrame(data)
    return DatasetView(
        df=df,
        pretty_by_col={col: col.replace("_", " ").title() for col in df.columns},
        numeric_cols=[col for col in df.columns if col != target_col],
        target_col=target_col,
    )


class TestPearsonCorrelation:
    """Test the coefficient itself."""

    def test_perfect_negative_is_exact(self) -> None:
        assert pearson_correlation([1, 2, 3, 4], [4, 3, 2, 1]) == -1.0

    def test_perfect_positive(self) -> None:
        assert pearson_correlation([1, 2, 3, 4], [2, 4, 6, 8]) == pytest.approx(1.0)

    def test_matches_numpy(self) -> None:
        rng = np.random.default_rng(0)
        x, y = rng.normal(size=50), rng.normal(size=50)
        assert pearson_correlation(x, y) == pytest.approx(np.corrcoef(x, y)[0, 1])

    def test_constant_column_is_undefined(self) -> None:
        with pytest.raises(UndefinedCorrelation) as excinfo:
            pearson_correlation([5, 5, 5, 5], [1, 2, 3, 4], x_name="const", y_name="a")
        assert excinfo.value.column == "const"
        assert excinfo.value.stage == "correlation"

    def test_too_few_pairs(self) -> None:
        with pytest.raises(UndefinedCorrelation):
            pearson_correlation([1.0, np.nan, 3.0], [np.nan, 2.0, 1.0])

    def test_pairwise_complete(self) -> None:
        assert pearson_correlation([1.0, 2.0, np.nan, 4.0], [2.0, 4.0, 100.0, 8.0]) == pytest.approx(1.0)

    def test_length_mismatch(self) -> None:
        with pytest.raises(ValueError, match="same length"):
            pearson_correlation([1, 2, 3], [1, 2])


class TestCorrelationAnalyzer:
    """Test CorrelationAnalyzer functionality."""

    @pytest.fixture
    def sample_view(self) -> DatasetView:
        """Create a sample DatasetView for testing."""
        return _view(
            {
                "feature1": [1.0, 2.0, 3.0, 4.0, 5.0],
                "feature2": [2.0, 4.0, 6.0, 8.0, 10.0],  # Perfect positive correlation
                "feature3": [5.0, 4.0, 3.0, 2.0, 1.0],  # Perfect negative correlation with feature1
                "feature4": [1.0, 3.0, 2.0, 5.0, 4.0],
                "target": [10.0, 15.0, 20.0, 25.0, 30.0],
            },
            target_col="target",
        )

    @pytest.fixture
    def view_without_target(self) -> DatasetView:
        """Create a DatasetView without a target column."""
        return _view({"feature1": [1.0, 2.0, 3.0, 4.0], "feature2": [2.0, 4.0, 6.0, 8.0]})

    def test_matrix_excludes_target(self, sample_view: DatasetView) -> None:
        corr_matrix = CorrelationAnalyzer(sample_view).get_correlation_matrix()
        assert corr_matrix.columns.tolist() == ["feature1", "feature2", "feature3", "feature4"]
        assert "target" not in corr_matrix.index

    def test_matrix_symmetric_with_unit_diagonal(self, sample_view: DatasetView) -> None:
        corr_matrix = CorrelationAnalyzer(sample_view).get_correlation_matrix().to_numpy()

        assert (np.diag(corr_matrix) == 1.0).all()
        assert (corr_matrix == corr_matrix.T).all()
        assert ((corr_matrix >= -1.0) & (corr_matrix <= 1.0)).all()

    def test_perfect_correlations(self, sample_view: DatasetView) -> None:
        corr_matrix = CorrelationAnalyzer(sample_view).get_correlation_matrix()
        assert np.isclose(corr_matrix.loc["feature1", "feature2"], 1.0)
        assert corr_matrix.loc["feature1", "feature3"] == -1.0

    def test_get_top_correlated_pairs(self, sample_view: DatasetView) -> None:
        top_pairs = CorrelationAnalyzer(sample_view).get_top_correlated_pairs(n=3)

        assert len(top_pairs) == 3
        assert {"feature_a", "feature_b", "correlation", "abs_correlation", "pair"} <= set(top_pairs.columns)
        assert np.isclose(top_pairs.iloc[0]["abs_correlation"], 1.0)
        assert top_pairs["abs_correlation"].is_monotonic_decreasing

    def test_top_pairs_never_include_diagonal(self, sample_view: DatasetView) -> None:
        top_pairs = CorrelationAnalyzer(sample_view).get_top_correlated_pairs()
        assert len(top_pairs) == 6
        assert (top_pairs["feature_a"] != top_pairs["feature_b"]).all()

    def test_get_target_correlations(self, sample_view: DatasetView) -> None:
        target_corrs = CorrelationAnalyzer(sample_view).get_target_correlations()

        assert target_corrs.columns.tolist() == ["feature", "correlation", "sign", "abs_correlation"]
        assert target_corrs["feature"].tolist() == ["feature1", "feature2", "feature3", "feature4"]
        assert target_corrs["sign"].tolist() == ["positive", "positive", "negative", "positive"]
        assert np.allclose(target_corrs["abs_correlation"], target_corrs["correlation"].abs())

    def test_get_target_correlations_no_target(self, view_without_target: DatasetView) -> None:
        with pytest.raises(ValueError, match=r"Dataset view has no target column"):
            CorrelationAnalyzer(view_without_target).get_target_correlations()

    def test_target_column_absent(self) -> None:
        view = DatasetView(
            df=pd.DataFrame({"a": [1.0, 2.0, 3.0]}),
            pretty_by_col={},
            numeric_cols=["a"],
            target_col="quality",
        )
        with pytest.raises(MissingColumn):
            CorrelationAnalyzer(view).get_target_correlations()

    def test_fit_returns_result(self, sample_view: DatasetView) -> None:
        analyzer = CorrelationAnalyzer(sample_view)
        fitted = analyzer.fit()
        result = analyzer.result()

        assert fitted is analyzer
        assert isinstance(result, CorrelationResult)
        assert result.target_col == "target"
        assert result.pretty_by_col["target"] == "Target"
        assert result.undefined_columns == []

    def test_fit_without_target(self, view_without_target: DatasetView) -> None:
        result = CorrelationAnalyzer(view_without_target).fit().result()
        assert result.target_correlations is None
        with pytest.raises(ValueError, match="does not include target"):
            result.sorted_by_absolute()

    def test_result_before_fit(self, sample_view: DatasetView) -> None:
        with pytest.raises(ValueError, match="Must call fit"):
            CorrelationAnalyzer(sample_view).result()


class TestSortedTargetCorrelations:
    """Ordering of the target vector."""

    @pytest.fixture
    def result(self) -> CorrelationResult:
        view = _view(
            {
                "up": [1.0, 2.0, 3.0, 4.0],
                "down": [4.0, 3.0, 2.0, 1.0],
                "up_again": [2.0, 4.0, 6.0, 8.0],
                "weak": [1.0, 3.0, 2.0, 2.5],
                "quality": [5.0, 6.0, 7.0, 8.0],
            },
            target_col="quality",
        )
        return CorrelationAnalyzer(view).fit().result()

    def test_sorted_by_signed(self, result: CorrelationResult) -> None:
        ordered = result.sorted_by_signed()
        assert ordered["feature"].tolist() == ["up", "up_again", "weak", "down"]

    def test_sorted_by_absolute_keeps_ties_in_column_order(self, result: CorrelationResult) -> None:
        ordered = result.sorted_by_absolute()
        assert ordered["feature"].tolist()[:3] == ["up", "down", "up_again"]
        assert ordered["feature"].iloc[-1] == "weak"


class TestUndefinedCorrelations:
    """Zero-variance columns."""

    @pytest.fixture
    def const_view(self) -> DatasetView:
        return _view(
            {"a": [1.0, 2.0, 3.0, 4.0], "const": [5.0, 5.0, 5.0, 5.0], "b": [4.0, 3.0, 2.0, 1.0], "q": [3, 4, 5, 7]},
            target_col="q",
        )

    def test_strict_raises(self, const_view: DatasetView) -> None:
        with pytest.raises(UndefinedCorrelation) as excinfo:
            CorrelationAnalyzer(const_view).fit()
        assert excinfo.value.column == "const"

    def test_non_strict_tags_cells(self, const_view: DatasetView) -> None:
        result = CorrelationAnalyzer(const_view, strict=False).fit().result()

        assert result.undefined_columns == ["const"]
        assert result.undefined_mask.loc["const"].all()
        assert not result.undefined_mask.loc["a", "b"]
        assert result.matrix.loc["a", "b"] == -1.0
        assert result.matrix.loc["a", "a"] == 1.0

        target = result.target_correlations.set_index("feature")
        assert target.loc["const", "sign"] == "undefined"
        assert np.isnan(target.loc["const", "correlation"])
        assert result.sorted_by_absolute()["feature"].iloc[-1] == "const"

        assert "const" not in set(result.feature_pairs["feature_a"]) | set(result.feature_pairs["feature_b"])


def test_dataset_factory(wine_dataset) -> None:
    result = wine_dataset.make_correlation_analyzer().fit().result()
    assert result.matrix.shape == (11, 11)
    assert result.target_col == "quality"
    assert result.sorted_by_absolute()["feature"].iloc[0] in {"alcohol", "volatile_acidity"}
    assert result.target_correlations.set_index("feature").loc["alcohol", "sign"] == "positive"
