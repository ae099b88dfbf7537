"""Optimizer interface and the reference scipy implementation."""

from .base import (
    Optimizer,
    OptimizerParams,
    OptimizerError,
    EvaluationError,
    Solution,
    SolutionSet,
    DEFAULT_OPTIMIZER,
    load_optimizer,
)
from .scatter import ScatterSearchOptimizer

__all__ = [
    "Optimizer",
    "OptimizerParams",
    "OptimizerError",
    "EvaluationError",
    "Solution",
    "SolutionSet",
    "DEFAULT_OPTIMIZER",
    "load_optimizer",
    "ScatterSearchOptimizer",
]
