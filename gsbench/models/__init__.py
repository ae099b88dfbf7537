"""Data models: benchmark problems and run statistics."""

from .problem import (
    Problem,
    BenchmarkFunction,
    Rosenbrock,
    Rastrigin,
    Ackley,
    Griewank,
    Levy,
    SixHumpCamel,
    CrossInTray,
    ALL_FUNCTIONS,
    SUCCESS_TOLERANCE,
    select_functions,
)
from .stats import (
    TrialResult,
    StatPoint,
    RunStatistics,
    STAT_FIELDS,
    mean,
    std_dev,
    summarize_trials,
)

__all__ = [
    # Problems
    "Problem",
    "BenchmarkFunction",
    "Rosenbrock",
    "Rastrigin",
    "Ackley",
    "Griewank",
    "Levy",
    "SixHumpCamel",
    "CrossInTray",
    "ALL_FUNCTIONS",
    "SUCCESS_TOLERANCE",
    "select_functions",
    # Statistics
    "TrialResult",
    "StatPoint",
    "RunStatistics",
    "STAT_FIELDS",
    "mean",
    "std_dev",
    "summarize_trials",
]
