"""Reporting for benchmark statistics.

This module provides functions for:
- Per-function figures (success rate, runtime, solution set size),
  with the baseline overlaid when one was loaded
- Stage-1 population plots for the 2-D view of each benchmark
- A current-vs-baseline comparison table and markdown report
"""
from __future__ import annotations

from pathlib import Path
from typing import TYPE_CHECKING, List, Optional, Sequence, Tuple
import logging

import numpy as np
import pandas as pd
import matplotlib
matplotlib.use("Agg")
import matplotlib.pyplot as plt

from ..models.stats import STAT_FIELDS, RunStatistics, StatPoint
from ..optimizer.base import OptimizerParams

if TYPE_CHECKING:
    from ..models.problem import BenchmarkFunction
    from ..optimizer.scatter import ScatterSearchOptimizer

logger = logging.getLogger(__name__)

STAGE_ONE_SEED_STRIDE = 82731

# Compared columns and whether a higher value is better
COMPARED_METRICS: Tuple[Tuple[str, bool], ...] = (
    ("success_rate", True),
    ("avg_runtime_sec", False),
    ("avg_solution_set_size", True),
    ("avg_best_obj", False),
)


def _series(points: Sequence[StatPoint], attr: str) -> List[float]:
    return [getattr(p, attr) for p in points]


def plot_benchmark(
    name: str,
    current: Sequence[StatPoint],
    baseline: Optional[Sequence[StatPoint]] = None,
    output_dir: str | Path = "plots",
) -> Path:
    """Plot the statistics of one benchmark function.

    Three stacked panels: success rate, total runtime (with std error bars
    and stage-1/stage-2 averages), and solution set size (with std error
    bars). Baseline series are drawn dashed on the same axes.

    Args:
        name: Benchmark function name
        current: StatPoints of the current run
        baseline: StatPoints of the baseline run (optional)
        output_dir: Directory for the figure

    Returns:
        Path of the saved PNG
    """
    output_dir = Path(output_dir)
    output_dir.mkdir(parents=True, exist_ok=True)

    fig, axes = plt.subplots(3, 1, figsize=(8, 12))
    ax_sr, ax_rt, ax_sz = axes

    series = [("Current", current, '-')]
    if baseline:
        series.append(("Baseline", baseline, '--'))

    for label, points, style in series:
        dims = _series(points, "dim")

        ax_sr.plot(dims, _series(points, "success_rate"), style, marker='o', label=f"{label} SR")

        ax_rt.errorbar(dims, _series(points, "avg_runtime_sec"),
                       yerr=_series(points, "std_runtime_sec"),
                       fmt=style, marker='o', capsize=3, label=f"{label} Total RT")
        ax_rt.plot(dims, _series(points, "avg_stage1_sec"), style, alpha=0.5,
                   marker='^', label=f"{label} Stage 1 RT")
        ax_rt.plot(dims, _series(points, "avg_stage2_sec"), style, alpha=0.5,
                   marker='v', label=f"{label} Stage 2 RT")

        ax_sz.errorbar(dims, _series(points, "avg_solution_set_size"),
                       yerr=_series(points, "std_solution_set_size"),
                       fmt=style, marker='o', capsize=3, label=f"{label} SolSize")

    ax_sr.set_ylabel('Success Rate')
    ax_sr.set_ylim(-0.05, 1.05)
    ax_rt.set_ylabel('Time (s)')
    ax_sz.set_ylabel('Solution Set Size')
    for ax in axes:
        ax.set_xlabel('Dimension')
        ax.grid(True, alpha=0.3)
        ax.legend(fontsize=8)

    fig.suptitle(f"{name} Benchmarks")
    fig.tight_layout()

    path = output_dir / f"{name.lower()}_benchmark.png"
    fig.savefig(path, dpi=150, bbox_inches='tight')
    plt.close(fig)
    return path


def plot_stage_one_population(
    function: BenchmarkFunction,
    optimizer: ScatterSearchOptimizer,
    output_dir: str | Path = "plots",
    bounds: Optional[np.ndarray] = None,
    runs: int = 6,
    population_size: int = 20,
    resolution: int = 80,
) -> Path:
    """Plot the stage-1 reference set of several runs over the 2-D objective.

    Each run uses seed ``run * 82731``; one panel per run, contour of the
    objective in the background.

    Args:
        function: Benchmark to visualize (evaluated in 2-D)
        optimizer: Optimizer exposing ``stage_one(problem, params)``
        output_dir: Directory for the figure
        bounds: (2, 2) plotting/search box (defaults to the problem bounds)
        runs: Number of stochastic runs
        population_size: Stage-1 population size
        resolution: Contour grid resolution per axis

    Returns:
        Path of the saved PNG
    """
    output_dir = Path(output_dir)
    output_dir.mkdir(parents=True, exist_ok=True)

    problem = function.problem(2)
    if bounds is not None:
        problem.bounds = np.asarray(bounds, dtype=np.float64)
    b = problem.variable_bounds()

    xs = np.linspace(b[0, 0], b[0, 1], resolution)
    ys = np.linspace(b[1, 0], b[1, 1], resolution)
    z = np.array([[problem.fn(np.array([x, y])) for x in xs] for y in ys])

    cols = 3
    rows = int(np.ceil(runs / cols))
    fig, axes = plt.subplots(rows, cols, figsize=(12, 4 * rows), squeeze=False)

    for run in range(runs):
        ax = axes[run // cols][run % cols]
        params = OptimizerParams(seed=run * STAGE_ONE_SEED_STRIDE, population_size=population_size)
        reference_set = optimizer.stage_one(problem, params)

        ax.contour(xs, ys, z, levels=30, cmap='viridis')
        ax.scatter([p[0] for p, _ in reference_set], [p[1] for p, _ in reference_set],
                   s=20, c='red', zorder=3)
        ax.set_title(f"Run {run + 1}")

    for idx in range(runs, rows * cols):
        axes[idx // cols][idx % cols].axis('off')

    fig.suptitle(f"{function.name} - Stage 1 Population ({runs} Stochastic Runs)")
    fig.tight_layout()

    path = output_dir / f"{function.name.lower()}_population.png"
    fig.savefig(path, dpi=150, bbox_inches='tight')
    plt.close(fig)
    return path


def stats_frame(stats: RunStatistics) -> pd.DataFrame:
    """Flatten RunStatistics into one row per (function, dim)."""
    rows = [
        {"function": name, **p.to_dict()}
        for name, points in stats.items()
        for p in points
    ]
    df = pd.DataFrame(rows, columns=["function", *STAT_FIELDS])
    return df.astype({"function": str, "dim": "int64"})


def comparison_frame(current: RunStatistics, baseline: Optional[RunStatistics] = None) -> pd.DataFrame:
    """Current statistics joined with the baseline on (function, dim).

    Rows keep the order of the current run. Baseline columns get a
    ``baseline_`` prefix and each compared metric a ``delta_`` column
    (current minus baseline); they are NaN where the baseline has no
    matching point.
    """
    df = stats_frame(current)
    if baseline is None:
        return df

    base = stats_frame(baseline).rename(
        columns={k: f"baseline_{k}" for k in STAT_FIELDS if k != "dim"}
    )
    merged = df.merge(base, on=["function", "dim"], how="left", sort=False)
    for metric, _ in COMPARED_METRICS:
        merged[f"delta_{metric}"] = merged[metric] - merged[f"baseline_{metric}"]
    return merged


def generate_report(
    current: RunStatistics,
    baseline: Optional[RunStatistics] = None,
    output_path: Optional[str | Path] = None,
) -> str:
    """Generate a markdown report of the run (and its comparison).

    Args:
        current: Statistics of the current run
        baseline: Baseline statistics (optional)
        output_path: Path to save report (None = do not write)

    Returns:
        Report as markdown string
    """
    df = comparison_frame(current, baseline)

    lines = [
        "# Optimizer Benchmark Report",
        "",
        f"**Functions:** {len(current)}",
        f"**Baseline:** {'yes' if baseline is not None else 'no'}",
        "",
        "| Function | Dim | SR | Runtime (s) | Stage 1 (s) | Stage 2 (s) | SolSize | Best Obj |",
        "|----------|-----|----|-------------|-------------|-------------|---------|----------|",
    ]
    for row in df.itertuples(index=False):
        lines.append(
            f"| {row.function} | {row.dim} | {row.success_rate:.2f} | "
            f"{row.avg_runtime_sec:.4f} ± {row.std_runtime_sec:.4f} | "
            f"{row.avg_stage1_sec:.4f} | {row.avg_stage2_sec:.4f} | "
            f"{row.avg_solution_set_size:.1f} ± {row.std_solution_set_size:.1f} | "
            f"{row.avg_best_obj:.3e} |"
        )

    if baseline is not None:
        lines.extend([
            "",
            "## Comparison with Baseline",
            "",
            "| Function | Dim | Δ SR | Δ Runtime (s) | Runtime ratio | Δ SolSize |",
            "|----------|-----|------|---------------|---------------|-----------|",
        ])
        for row in df.itertuples(index=False):
            if pd.isna(row.baseline_success_rate):
                lines.append(f"| {row.function} | {row.dim} | n/a | n/a | n/a | n/a |")
                continue
            ratio = (row.avg_runtime_sec / row.baseline_avg_runtime_sec
                     if row.baseline_avg_runtime_sec > 0 else float('nan'))
            lines.append(
                f"| {row.function} | {row.dim} | {row.delta_success_rate:+.2f} | "
                f"{row.delta_avg_runtime_sec:+.4f} | {ratio:.2f}× | "
                f"{row.delta_avg_solution_set_size:+.1f} |"
            )

    report = "\n".join(lines) + "\n"

    if output_path is not None:
        output_path = Path(output_path)
        output_path.parent.mkdir(parents=True, exist_ok=True)
        with open(output_path, 'w') as f:
            f.write(report)

    return report


def write_reports(
    current: RunStatistics,
    baseline: Optional[RunStatistics] = None,
    plots_dir: Optional[str | Path] = "plots",
    report_path: Optional[str | Path] = None,
) -> List[Path]:
    """Write every artifact for a run.

    Figures go to ``plots_dir`` (one per function, plus ``comparison.csv``
    when a baseline is present); the markdown report goes to
    ``report_path``. Either may be None to skip it.

    Returns:
        Paths written
    """
    written: List[Path] = []

    if plots_dir is not None:
        for name, points in current.items():
            base_points = baseline.get(name) if baseline is not None else None
            if baseline is not None and base_points is None:
                logger.warning(f"No baseline data for {name}; plotting current run only")
            written.append(plot_benchmark(name, points, base_points, plots_dir))

        if baseline is not None:
            csv_path = Path(plots_dir) / "comparison.csv"
            comparison_frame(current, baseline).to_csv(csv_path, index=False)
            written.append(csv_path)

    if report_path is not None:
        generate_report(current, baseline, report_path)
        written.append(Path(report_path))

    for path in written:
        logger.info(f"Saved {path}")
    return written
