"""Tests for the report builder and its command-line entry point."""

import logging
from pathlib import Path

import pandas as pd
import pytest

from wine_tlbx.report import build_report, main


def test_build_report_writes_artifacts(wine_dataset, tmp_path: Path) -> None:
    artifacts = build_report(wine_dataset, tmp_path / "out")

    assert set(artifacts.tables) == {
        "bucket_distribution",
        "five_number_summary",
        "overall_summary",
        "correlation_matrix",
        "top_correlated_pairs",
        "target_correlations",
    }
    for path in [*artifacts.tables.values(), *artifacts.figures.values()]:
        assert path.is_file()
        assert path.stat().st_size > 0
    assert all(path.suffix == ".png" for path in artifacts.figures.values())

    dist = pd.read_csv(artifacts.tables["bucket_distribution"], dtype={"bucket": str})
    assert dist["bucket"].tolist() == ["3to4", "5", "6", "7to8"]
    assert dist["count"].sum() == 48


def test_build_report_closes_figures_on_plot_failure(
    wine_dataset,
    tmp_path: Path,
    monkeypatch: pytest.MonkeyPatch,
) -> None:
    import matplotlib.pyplot as plt

    from wine_tlbx import report

    def broken_heatmap(result):
        plt.figure()
        raise RuntimeError("heatmap failed")

    monkeypatch.setattr(report, "plot_correlation_heatmap", broken_heatmap)
    open_before = set(plt.get_fignums())

    with pytest.raises(RuntimeError, match="heatmap failed"):
        build_report(wine_dataset, tmp_path / "out")
    assert set(plt.get_fignums()) == open_before


def test_main_success(wine_csv: Path, tmp_path: Path) -> None:
    out = tmp_path / "report"
    assert main(["--source", str(wine_csv), "--output-dir", str(out), "--log-level", "WARNING"]) == 0
    assert (out / "correlation_matrix.csv").is_file()
    assert (out / "bucket_distribution.png").is_file()


def test_main_reports_stage_on_failure(tmp_path: Path, caplog: pytest.LogCaptureFixture) -> None:
    with caplog.at_level(logging.ERROR, logger="wine_tlbx.report"):
        code = main(["--source", str(tmp_path / "missing.csv"), "--output-dir", str(tmp_path / "out")])

    assert code == 1
    assert "stage=loader" in caplog.text
    assert not (tmp_path / "out").exists()


def test_main_constant_metric_fails_in_correlation(raw_wine_df: pd.DataFrame, tmp_path: Path, caplog) -> None:
    src = tmp_path / "const.csv"
    raw_wine_df.assign(chlorides=0.08).to_csv(src, sep=";", index=False)

    with caplog.at_level(logging.ERROR, logger="wine_tlbx.report"):
        code = main(["--source", str(src), "--output-dir", str(tmp_path / "out")])

    assert code == 1
    assert "stage=correlation" in caplog.text
    assert "chlorides" in caplog.text
