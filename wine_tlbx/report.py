"""Command-line entry point that runs the full exploratory analysis and writes tables and figures.

Usage
-----
    wine-tlbx-report --output-dir report/
    wine-tlbx-report --source data/winequality-red.csv --sep ";" --log-level DEBUG

Every table is written as CSV and every figure as PNG into ``--output-dir``. Any toolbox error
aborts the run with exit code 1 and a single log line naming the failing stage.
"""

import argparse
import logging
from collections.abc import Sequence
from dataclasses import dataclass, field
from pathlib import Path

import matplotlib.pyplot as plt
import pandas as pd
from matplotlib.figure import Figure

from wine_tlbx.analysis.correlation_analyzer import CorrelationResult
from wine_tlbx.analysis.summary_analyzer import SummaryResult
from wine_tlbx.data.wine_dataset import RedWineDataset
from wine_tlbx.errors import WineToolboxError
from wine_tlbx.plotting import (
    plot_bucket_distribution,
    plot_correlation_heatmap,
    plot_metric_densities,
    plot_metric_violins,
    plot_quartiles,
    plot_scatter_pairs,
    plot_target_correlations,
    plot_top_correlated_pairs,
)
from wine_tlbx.utils.plotting_config import DEFAULT_PLOT_CFG, PlottingConfig
from wine_tlbx.utils.sources import DEFAULT_SOURCE


logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class ReportArtifacts:
    """Analysis results and the files written for them."""

    summary: SummaryResult
    correlation: CorrelationResult
    tables: dict[str, Path] = field(default_factory=dict)
    figures: dict[str, Path] = field(default_factory=dict)


def _write_table(frame: pd.DataFrame, path: Path, index: bool = True) -> Path:
    frame.to_csv(path, index=index)
    logger.debug("Wrote table %s", path)
    return path


def _save_figure(fig: Figure, path: Path, plot_cfg: PlottingConfig) -> Path:
    fig.savefig(path, dpi=plot_cfg.save_dpi, bbox_inches="tight")
    plt.close(fig)
    logger.debug("Wrote figure %s", path)
    return path


def build_report(
    dataset: RedWineDataset,
    output_dir: str | Path,
    plot_cfg: PlottingConfig = DEFAULT_PLOT_CFG,
    top_n_pairs: int = 6,
) -> ReportArtifacts:
    """Run the summary and correlation analyses and write all artifacts to ``output_dir``.

    Raises:
        WineToolboxError: If any analysis stage fails (propagated unchanged).
    """
    out = Path(output_dir)
    out.mkdir(parents=True, exist_ok=True)

    summary = dataset.make_summary_analyzer().fit().result()
    correlation = dataset.make_correlation_analyzer().fit().result()
    logger.info("Analyzed %d rows, %d metrics", int(summary.distribution["count"].sum()), len(summary.metrics))

    tables = {
        "bucket_distribution": _write_table(summary.distribution, out / "bucket_distribution.csv"),
        "five_number_summary": _write_table(summary.five_number, out / "five_number_summary.csv"),
        "overall_summary": _write_table(summary.overall, out / "overall_summary.csv"),
        "correlation_matrix": _write_table(correlation.matrix, out / "correlation_matrix.csv"),
        "top_correlated_pairs": _write_table(
            correlation.feature_pairs,
            out / "top_correlated_pairs.csv",
            index=False,
        ),
    }
    if correlation.target_correlations is not None:
        tables["target_correlations"] = _write_table(
            correlation.sorted_by_absolute(),
            out / "target_correlations.csv",
            index=False,
        )

    view = dataset.analyzer_view(include_target=False)
    pairs = list(zip(correlation.feature_pairs["feature_a"], correlation.feature_pairs["feature_b"], strict=True))

    open_before = set(plt.get_fignums())
    try:
        with plot_cfg.apply():
            figures = {
                "bucket_distribution": _save_figure(
                    plot_bucket_distribution(summary, plot_cfg=plot_cfg),
                    out / "bucket_distribution.png",
                    plot_cfg,
                ),
                "metric_densities": _save_figure(
                    plot_metric_densities(view, plot_cfg=plot_cfg),
                    out / "metric_densities.png",
                    plot_cfg,
                ),
                "metric_violins": _save_figure(
                    plot_metric_violins(dataset.analyzer_view(standardized=True, include_target=False), plot_cfg=plot_cfg),
                    out / "metric_violins.png",
                    plot_cfg,
                ),
                "quartiles": _save_figure(plot_quartiles(summary), out / "quartiles.png", plot_cfg),
                "correlation_heatmap": _save_figure(
                    plot_correlation_heatmap(correlation),
                    out / "correlation_heatmap.png",
                    plot_cfg,
                ),
            }
            if pairs:
                figures["top_pair_scatter"] = _save_figure(
                    plot_scatter_pairs(view, pairs[:top_n_pairs], plot_cfg=plot_cfg),
                    out / "top_pair_scatter.png",
                    plot_cfg,
                )
            if correlation.target_correlations is not None:
                signed_fig, abs_fig = plot_target_correlations(correlation)
                figures["target_correlations"] = _save_figure(signed_fig, out / "target_correlations.png", plot_cfg)
                figures["target_correlations_abs"] = _save_figure(
                    abs_fig,
                    out / "target_correlations_abs.png",
                    plot_cfg,
                )
            pos_fig, neg_fig = plot_top_correlated_pairs(correlation)
            figures["top_pairs_positive"] = _save_figure(pos_fig, out / "top_pairs_positive.png", plot_cfg)
            figures["top_pairs_negative"] = _save_figure(neg_fig, out / "top_pairs_negative.png", plot_cfg)
    finally:
        # a failing plot helper must not leave earlier figures open
        for num in set(plt.get_fignums()) - open_before:
            plt.close(num)

    logger.info("Wrote %d tables and %d figures to %s", len(tables), len(figures), out)
    return ReportArtifacts(summary=summary, correlation=correlation, tables=tables, figures=figures)


def _build_arg_parser() -> argparse.ArgumentParser:
    p = argparse.ArgumentParser(description="Exploratory analysis of the red wine quality dataset.")
    p.add_argument("--source", default=None, help=f"URL or path of the delimited file (default: {DEFAULT_SOURCE.url}).")
    p.add_argument("--sep", default=None, help="Field delimiter (default: ';').")
    p.add_argument("--timeout", type=float, default=None, help="Network timeout in seconds for URL sources.")
    p.add_argument("--output-dir", default="report", help="Directory for CSV tables and PNG figures.")
    p.add_argument(
        "--log-level",
        default="INFO",
        choices=["DEBUG", "INFO", "WARNING", "ERROR"],
        help="Logging verbosity.",
    )
    return p


def main(argv: Sequence[str] | None = None) -> int:
    args = _build_arg_parser().parse_args(argv)
    logging.basicConfig(level=getattr(logging, args.log_level), format="%(levelname)s: %(message)s")

    try:
        dataset = RedWineDataset.from_csv(args.source, sep=args.sep, timeout=args.timeout)
        build_report(dataset, args.output_dir)
    except WineToolboxError as exc:
        logger.error("Analysis failed: %s", exc)  # noqa: TRY400
        return 1
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
