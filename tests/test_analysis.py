"""Tests for figures, comparison tables and reports."""

import numpy as np
import pandas as pd
import pytest

from gsbench.experiments.analysis import (
    comparison_frame,
    generate_report,
    plot_benchmark,
    plot_stage_one_population,
    stats_frame,
    write_reports,
)
from gsbench.models.problem import Ackley
from gsbench.models.stats import RunStatistics
from gsbench.optimizer.scatter import ScatterSearchOptimizer


class TestFrames:
    def test_stats_frame_rows(self, sample_stats):
        df = stats_frame(sample_stats)
        assert list(df["function"]) == ["Ackley", "Ackley", "Ackley", "SixHumpCamel"]
        assert list(df["dim"]) == [50, 10, 100, 2]

    def test_empty_stats_frame(self):
        df = stats_frame(RunStatistics())
        assert df.empty
        assert "avg_runtime_sec" in df.columns

    def test_without_baseline(self, sample_stats):
        df = comparison_frame(sample_stats)
        assert not any(col.startswith("baseline_") for col in df.columns)

    def test_deltas(self, sample_stats, baseline_stats):
        df = comparison_frame(sample_stats, baseline_stats)

        assert list(df["dim"]) == [50, 10, 100, 2]
        ackley_50 = df.iloc[0]
        assert ackley_50["baseline_avg_runtime_sec"] == pytest.approx(0.1234567890123 * 2.0)
        assert ackley_50["delta_avg_runtime_sec"] == pytest.approx(-0.1234567890123)
        assert ackley_50["delta_success_rate"] == pytest.approx(0.0)

    def test_unmatched_rows_are_nan(self, sample_stats, baseline_stats):
        df = comparison_frame(sample_stats, baseline_stats)
        assert pd.isna(df.iloc[2]["baseline_success_rate"])
        assert pd.isna(df.iloc[3]["delta_avg_runtime_sec"])

    def test_empty_baseline(self, sample_stats):
        df = comparison_frame(sample_stats, RunStatistics())
        assert len(df) == 4
        assert df["baseline_success_rate"].isna().all()


class TestReport:
    def test_current_only(self, sample_stats):
        report = generate_report(sample_stats)
        assert report.startswith("# Optimizer Benchmark Report")
        assert "**Baseline:** no" in report
        assert "| Ackley | 50 |" in report
        assert "Comparison with Baseline" not in report

    def test_with_baseline(self, sample_stats, baseline_stats, tmp_path):
        path = tmp_path / "reports" / "report.md"
        report = generate_report(sample_stats, baseline_stats, output_path=path)

        assert path.read_text() == report
        assert "## Comparison with Baseline" in report
        assert "0.50×" in report
        assert "| Ackley | 100 | n/a | n/a | n/a | n/a |" in report


class TestFigures:
    def test_plot_benchmark(self, sample_stats, baseline_stats, tmp_path):
        path = plot_benchmark(
            "Ackley", sample_stats.get("Ackley"), baseline_stats.get("Ackley"), tmp_path / "plots"
        )
        assert path == tmp_path / "plots" / "ackley_benchmark.png"
        assert path.stat().st_size > 0

    def test_stage_one_population(self, tmp_path):
        path = plot_stage_one_population(
            Ackley(),
            ScatterSearchOptimizer(),
            tmp_path,
            bounds=np.array([[-4.0, 6.0], [-4.0, 6.0]]),
            runs=2,
            population_size=10,
            resolution=20,
        )
        assert path.name == "ackley_population.png"
        assert path.exists()

    def test_write_reports(self, sample_stats, baseline_stats, tmp_path):
        plots = tmp_path / "plots"
        report = tmp_path / "report.md"
        written = write_reports(sample_stats, baseline_stats, plots_dir=plots, report_path=report)

        assert plots / "ackley_benchmark.png" in written
        assert plots / "sixhumpcamel_benchmark.png" in written
        assert plots / "comparison.csv" in written
        assert report in written
        assert all(p.exists() for p in written)

        csv = pd.read_csv(plots / "comparison.csv")
        assert list(csv["dim"]) == [50, 10, 100, 2]

    def test_write_reports_without_baseline(self, sample_stats, tmp_path):
        written = write_reports(sample_stats, None, plots_dir=tmp_path, report_path=None)
        assert not (tmp_path / "comparison.csv").exists()
        assert len(written) == 2

    def test_nothing_requested(self, sample_stats):
        assert write_reports(sample_stats, None, plots_dir=None, report_path=None) == []
