"""Benchmark runner for the optimizer under test.

This module provides the main benchmark runner that:
- Runs the optimizer once per (function, dimension, seed) trial
- Reduces each batch of trials to summary statistics
- Saves the statistics as a baseline and/or compares against one
- Writes figures and a report for the run

Usage:
    python -m gsbench run --function ackley --dim 10 --runs 5
"""
from __future__ import annotations

from dataclasses import dataclass, replace
from typing import List, Optional, Sequence, Iterator, Tuple
from pathlib import Path
import time
import logging
import argparse
import sys

from ..models.problem import BenchmarkFunction, select_functions
from ..models.stats import RunStatistics, StatPoint, TrialResult, summarize_trials
from ..optimizer.base import (
    DEFAULT_OPTIMIZER,
    EvaluationError,
    Optimizer,
    OptimizerError,
    OptimizerParams,
    load_optimizer,
)
from .analysis import write_reports
from .baseline import BaselineLoadError, load_baseline, save_baseline

logger = logging.getLogger(__name__)

# Seeds are index * stride so every trial index maps to its own fixed seed.
SEED_STRIDE = 702983
DEFAULT_DIMS: Tuple[int, ...] = (10, 50, 100)


class TrialError(Exception):
    """Raised when a trial produces no usable result."""


def trial_seed(index: int) -> int:
    """Seed used for the trial with the given index."""
    return index * SEED_STRIDE


@dataclass
class BenchmarkConfig:
    """Configuration for a benchmark run.

    Attributes:
        function: Benchmark to run (None = all)
        dims: Dimensions offered to each benchmark
        runs: Trials per (function, dimension)
        save_json: Write the run statistics to this file
        load_baseline: Compare against statistics loaded from this file
        optimizer: Import path of the optimizer (``module:attr``)
        population_size: Stage-1 population size passed to the optimizer
        plots_dir: Directory for figures (None = no figures)
        report_path: Markdown report path (None = no report)
    """
    function: Optional[str] = None
    dims: Sequence[int] = DEFAULT_DIMS
    runs: int = 20
    save_json: Optional[Path] = None
    load_baseline: Optional[Path] = None
    optimizer: str = DEFAULT_OPTIMIZER
    population_size: Optional[int] = None
    plots_dir: Optional[Path] = Path("plots")
    report_path: Optional[Path] = None

    def __post_init__(self):
        if self.runs < 1:
            raise ValueError("runs must be >= 1")
        self.dims = tuple(self.dims)
        for attr in ("save_json", "load_baseline", "plots_dir", "report_path"):
            value = getattr(self, attr)
            if isinstance(value, str):
                setattr(self, attr, Path(value))


class TrialRunner:
    """Runs the optimizer once and extracts a TrialResult."""

    def __init__(self, optimizer: Optimizer, params: Optional[OptimizerParams] = None):
        self.optimizer = optimizer
        self.params = params if params is not None else OptimizerParams()

    def run_trial(self, function: BenchmarkFunction, dim: int, seed: int) -> TrialResult:
        """Run a single trial.

        Args:
            function: Benchmark to solve
            dim: Problem dimension
            seed: Seed passed to the optimizer

        Returns:
            TrialResult for this run

        Raises:
            OptimizerError: If the optimizer fails or lets an objective
                evaluation error through
            TrialError: If the optimizer returns no solution
        """
        problem = function.problem(dim)
        params = replace(self.params, seed=seed)

        start = time.perf_counter()
        try:
            solution_set = self.optimizer.run(problem, params)
        except EvaluationError as e:
            raise OptimizerError(f"{function.name} (dim={dim}, seed={seed}): {e}") from e
        runtime = time.perf_counter() - start

        best = solution_set.best_solution()
        if best is None:
            raise TrialError(f"{function.name} (dim={dim}, seed={seed}): no solutions found")

        objective = float(best.objective)
        return TrialResult(
            success=function.is_success(objective),
            runtime=runtime,
            stage1_runtime=float(solution_set.stage1_time or 0.0),
            stage2_runtime=float(solution_set.stage2_time or 0.0),
            best_obj=objective,
            solution_set_size=len(solution_set),
        )


class StatsAggregator:
    """Aggregates trials into StatPoints and holds the current/baseline runs.

    Attributes:
        runner: Trial runner used for every invocation
        trials: Number of trials per (function, dimension)
        current: Statistics of this run
        baseline: Statistics loaded for comparison (optional)
    """

    def __init__(self, runner: TrialRunner, trials: int = 20):
        if trials < 1:
            raise ValueError("trials must be >= 1")
        self.runner = runner
        self.trials = trials
        self.current = RunStatistics()
        self.baseline: Optional[RunStatistics] = None

    def measure(self, function: BenchmarkFunction, dim: int) -> StatPoint:
        """Run ``trials`` trials for one dimension and summarise them."""
        results = [
            self.runner.run_trial(function, dim, trial_seed(i))
            for i in range(self.trials)
        ]
        point = summarize_trials(dim, results)
        print(
            f"    SR: {point.success_rate:.2f}, Avg T: {point.avg_runtime_sec:.4f}s, "
            f"Avg SolSize: {point.avg_solution_set_size:.1f}"
        )
        return point

    def run_function(self, function: BenchmarkFunction, default_dims: Sequence[int]) -> List[StatPoint]:
        """Measure every dimension the function supports, in its order."""
        logger.info(f"Running benchmark for: {function.name}")
        points = []
        for dim in function.supported_dims(default_dims):
            logger.info(f"  Dimension: {dim}")
            point = self.measure(function, dim)
            self.current.add(function.name, point)
            points.append(point)
        return points

    def run(self, functions: Sequence[BenchmarkFunction], default_dims: Sequence[int]) -> RunStatistics:
        for function in functions:
            self.run_function(function, default_dims)
        return self.current

    def load_baseline(self, path: Path) -> RunStatistics:
        self.baseline = load_baseline(path)
        return self.baseline

    def comparisons(self) -> Iterator[Tuple[str, List[StatPoint], Optional[List[StatPoint]]]]:
        """Yield (name, current points, baseline points or None) per function."""
        for name, points in self.current.items():
            baseline = self.baseline.get(name) if self.baseline is not None else None
            yield name, points, baseline


def run_benchmarks(config: BenchmarkConfig, optimizer: Optional[Optimizer] = None) -> StatsAggregator:
    """Run a full benchmark pass.

    The baseline (if any) is loaded before the first trial so that a bad
    baseline file fails the run before any work is done.

    Raises:
        BaselineLoadError: If the baseline cannot be loaded
        OptimizerError, TrialError: If any trial fails
    """
    functions = select_functions(config.function)
    if optimizer is None:
        optimizer = load_optimizer(config.optimizer)

    params = OptimizerParams()
    if config.population_size is not None:
        params = replace(params, population_size=config.population_size)

    aggregator = StatsAggregator(TrialRunner(optimizer, params), trials=config.runs)
    if config.load_baseline is not None:
        aggregator.load_baseline(config.load_baseline)
        logger.info(f"Loaded baseline stats from {config.load_baseline}")

    aggregator.run(functions, config.dims)

    if config.save_json is not None:
        save_baseline(aggregator.current, config.save_json)
        logger.info(f"Saved stats to {config.save_json}")

    return aggregator


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(description="Benchmark the global optimizer")
    parser.add_argument("-f", "--function", type=str, default=None,
                        help="Benchmark function to run (all if not specified)")
    parser.add_argument("-d", "--dim", type=int, default=None,
                        help="Specific dimension to run (default set 10, 50, 100 if not specified)")
    parser.add_argument("-r", "--runs", type=int, default=20,
                        help="Number of runs per dimension")
    parser.add_argument("--save-json", type=str, default=None,
                        help="Save current stats to a JSON file")
    parser.add_argument("--load-baseline", type=str, default=None,
                        help="Load baseline stats from a JSON file to compare against")
    parser.add_argument("--optimizer", type=str, default=DEFAULT_OPTIMIZER,
                        help="Optimizer to benchmark, as module:attr")
    parser.add_argument("--population-size", type=int, default=None,
                        help="Stage-1 population size")
    parser.add_argument("--plots-dir", type=str, default="plots",
                        help="Output directory for figures")
    parser.add_argument("--no-plots", action="store_true", help="Skip figure generation")
    parser.add_argument("--report", type=str, default=None,
                        help="Write a markdown report to this path")
    parser.add_argument("--log-level", type=str, default="INFO",
                        choices=["DEBUG", "INFO", "WARNING", "ERROR"])
    return parser


def main(argv: Optional[Sequence[str]] = None) -> int:
    """Command-line entry point."""
    args = build_parser().parse_args(argv)

    logging.basicConfig(
        level=getattr(logging, args.log_level),
        format='%(asctime)s - %(levelname)s - %(message)s',
    )

    try:
        config = BenchmarkConfig(
            function=args.function,
            dims=[args.dim] if args.dim is not None else DEFAULT_DIMS,
            runs=args.runs,
            save_json=args.save_json,
            load_baseline=args.load_baseline,
            optimizer=args.optimizer,
            population_size=args.population_size,
            plots_dir=None if args.no_plots else args.plots_dir,
            report_path=args.report,
        )
        aggregator = run_benchmarks(config)
    except BaselineLoadError as e:
        logger.error(f"Baseline unusable, comparison aborted: {e}")
        return 1
    except (OptimizerError, TrialError) as e:
        logger.error(f"Trial failed: {e}")
        return 1
    except ValueError as e:
        logger.error(str(e))
        return 2

    write_reports(
        aggregator.current,
        aggregator.baseline,
        plots_dir=config.plots_dir,
        report_path=config.report_path,
    )
    return 0


if __name__ == "__main__":
    sys.exit(main())
