"""Benchmark orchestration, persistence, comparison and reporting."""

from .run_experiment import (
    BenchmarkConfig,
    TrialRunner,
    StatsAggregator,
    TrialError,
    SEED_STRIDE,
    DEFAULT_DIMS,
    trial_seed,
    run_benchmarks,
    main as run_experiment_main,
)
from .baseline import (
    BaselineLoadError,
    save_baseline,
    load_baseline,
    stats_from_document,
)
from .compare import (
    DirectoryGuard,
    CompareConfig,
    ComparisonOrchestrator,
    ComparisonOutcome,
    SwapError,
    CandidateNotFound,
    StalePreviousRun,
    RenameFailed,
    RestoreFailed,
    PhaseFailed,
    main as compare_main,
)
from .analysis import (
    plot_benchmark,
    plot_stage_one_population,
    stats_frame,
    comparison_frame,
    generate_report,
    write_reports,
)

__all__ = [
    # Benchmark runner
    "BenchmarkConfig",
    "TrialRunner",
    "StatsAggregator",
    "TrialError",
    "SEED_STRIDE",
    "DEFAULT_DIMS",
    "trial_seed",
    "run_benchmarks",
    "run_experiment_main",
    # Baseline persistence
    "BaselineLoadError",
    "save_baseline",
    "load_baseline",
    "stats_from_document",
    # Source tree comparison
    "DirectoryGuard",
    "CompareConfig",
    "ComparisonOrchestrator",
    "ComparisonOutcome",
    "SwapError",
    "CandidateNotFound",
    "StalePreviousRun",
    "RenameFailed",
    "RestoreFailed",
    "PhaseFailed",
    "compare_main",
    # Reporting
    "plot_benchmark",
    "plot_stage_one_population",
    "stats_frame",
    "comparison_frame",
    "generate_report",
    "write_reports",
]
