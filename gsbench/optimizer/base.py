"""Interface to the optimizer under test.

The harness never looks inside the optimizer. It only needs something that
takes a problem and a parameter set and hands back a set of solutions,
together with the time spent in each of the two internal stages.
"""
from __future__ import annotations

from abc import ABC, abstractmethod
from dataclasses import dataclass, field
from typing import TYPE_CHECKING, Iterator, List, Optional
import importlib
import logging

import numpy as np

if TYPE_CHECKING:
    from ..models.problem import Problem

logger = logging.getLogger(__name__)

DEFAULT_OPTIMIZER = "gsbench.optimizer.scatter:ScatterSearchOptimizer"


class OptimizerError(Exception):
    """Raised when the optimizer fails to complete a run."""


class EvaluationError(Exception):
    """Raised when an objective cannot be evaluated at a point."""


@dataclass
class OptimizerParams:
    """Parameters handed to the optimizer for a single run.

    Attributes:
        seed: Random seed for the run
        population_size: Number of points sampled in stage 1
        reference_set_size: Number of diverse points kept after stage 1
        local_max_iter: Iteration cap for each stage-2 local search
        distance_factor: Minimum distance (relative to the box diagonal)
            between two retained solutions
        threshold_factor: Relative objective slack for keeping a local
            minimum in the final solution set
    """
    seed: int = 0
    population_size: int = 250
    reference_set_size: int = 10
    local_max_iter: int = 200
    distance_factor: float = 0.05
    threshold_factor: float = 0.2

    def __post_init__(self):
        if self.population_size < 1:
            raise ValueError("population_size must be >= 1")
        if self.reference_set_size < 1:
            raise ValueError("reference_set_size must be >= 1")


@dataclass(frozen=True)
class Solution:
    """A local minimum found by the optimizer."""
    point: np.ndarray
    objective: float


@dataclass
class SolutionSet:
    """Solutions retained at the end of a run.

    Stage timings are optional; an optimizer that does not report them
    leaves them as None.
    """
    solutions: List[Solution] = field(default_factory=list)
    stage1_time: Optional[float] = None
    stage2_time: Optional[float] = None

    def best_solution(self) -> Optional[Solution]:
        if not self.solutions:
            return None
        return min(self.solutions, key=lambda s: s.objective)

    def __len__(self) -> int:
        return len(self.solutions)

    def __iter__(self) -> Iterator[Solution]:
        return iter(self.solutions)


class Optimizer(ABC):
    """Capability contract for the optimizer under test."""

    name: str = "optimizer"

    @abstractmethod
    def run(self, problem: Problem, params: OptimizerParams) -> SolutionSet:
        """Run the optimizer on a problem.

        Raises:
            OptimizerError: If the run cannot complete
        """


def load_optimizer(path: str = DEFAULT_OPTIMIZER) -> Optimizer:
    """Import and instantiate an optimizer from a ``module:attr`` path.

    The attribute may be a class (instantiated without arguments), a factory
    function, or an already constructed optimizer object.

    Raises:
        ValueError: If the path is malformed or does not resolve
    """
    module_name, sep, attr = path.partition(":")
    if not sep or not module_name or not attr:
        raise ValueError(f"Optimizer path must look like 'module:attr', got {path!r}")

    try:
        module = importlib.import_module(module_name)
    except ImportError as e:
        raise ValueError(f"Cannot import optimizer module {module_name!r}: {e}") from e

    target = getattr(module, attr, None)
    if target is None:
        raise ValueError(f"Module {module_name!r} has no attribute {attr!r}")

    if isinstance(target, type) or (callable(target) and not hasattr(target, "run")):
        optimizer = target()
    else:
        optimizer = target
    if not hasattr(optimizer, "run"):
        raise ValueError(f"{path!r} does not provide a run(problem, params) method")

    logger.debug(f"Loaded optimizer {path} from {getattr(module, '__file__', '?')}")
    return optimizer
