"""Benchmark problem catalog.

Each benchmark function knows its objective, its search box, the dimensions
it can be run in, and how close to the known global optimum a result has to
be to count as a success. The catalog is a fixed list; the only lookup by
name is the command-line selection in :func:`select_functions`.
"""
from __future__ import annotations

from abc import ABC, abstractmethod
from dataclasses import dataclass, field
from typing import Callable, List, Optional, Sequence, Tuple
import numpy as np

from ..optimizer.base import EvaluationError
from . import functions

SUCCESS_TOLERANCE = 1e-4


@dataclass
class Problem:
    """A box-constrained minimisation problem handed to the optimizer.

    Attributes:
        name: Benchmark name
        dim: Number of variables
        fn: Objective on a 1-D array
        bounds: (dim, 2) array of [min, max] per variable
    """
    name: str
    dim: int
    fn: Callable[[np.ndarray], float] = field(repr=False)
    bounds: np.ndarray = field(repr=False)

    def __post_init__(self):
        self.bounds = np.asarray(self.bounds, dtype=np.float64)
        if self.bounds.shape != (self.dim, 2):
            raise ValueError(
                f"{self.name}: bounds shape {self.bounds.shape} does not match dim={self.dim}"
            )

    def objective(self, x: np.ndarray) -> float:
        """Evaluate the objective at a point.

        Raises:
            EvaluationError: If the point has the wrong shape or the
                objective is not finite
        """
        x = np.asarray(x, dtype=np.float64)
        if x.shape != (self.dim,):
            raise EvaluationError(
                f"{self.name}: expected {self.dim}D point, got shape {x.shape}"
            )
        value = self.fn(x)
        if not np.isfinite(value):
            raise EvaluationError(f"{self.name}: objective is not finite at {x}")
        return value

    def variable_bounds(self) -> np.ndarray:
        return self.bounds.copy()


class BenchmarkFunction(ABC):
    """A named benchmark in the suite."""

    name: str = ""
    global_minimum: float = 0.0

    @abstractmethod
    def problem(self, dim: int) -> Problem:
        """Build the problem instance for a dimension."""

    def supported_dims(self, default_dims: Sequence[int]) -> List[int]:
        """Dimensions to test, in the order they should be run."""
        return list(default_dims)

    def is_success(self, objective: float) -> bool:
        """Whether an objective value reached the known global optimum."""
        return abs(objective - self.global_minimum) < SUCCESS_TOLERANCE

    def __repr__(self) -> str:
        return f"{type(self).__name__}()"


class _BoxFunction(BenchmarkFunction):
    """Benchmark defined on the same interval in every dimension."""

    lower: float = 0.0
    upper: float = 0.0
    fn: Callable[[np.ndarray], float]

    def problem(self, dim: int) -> Problem:
        if dim < 1:
            raise ValueError(f"{self.name}: dimension must be >= 1, got {dim}")
        bounds = np.tile([self.lower, self.upper], (dim, 1))
        return Problem(name=self.name, dim=dim, fn=type(self).fn, bounds=bounds)


class _PlanarFunction(BenchmarkFunction):
    """Benchmark that only exists in two dimensions."""

    bounds: Tuple[Tuple[float, float], Tuple[float, float]] = ((0.0, 0.0), (0.0, 0.0))
    fn: Callable[[np.ndarray], float]

    def supported_dims(self, default_dims: Sequence[int]) -> List[int]:
        return [2]

    def problem(self, dim: int = 2) -> Problem:
        return Problem(name=self.name, dim=2, fn=type(self).fn, bounds=np.array(self.bounds))


# Box bounds are shifted by +1 where the optimum would otherwise sit at the
# centre of the box.

class Rosenbrock(_BoxFunction):
    name = "Rosenbrock"
    lower, upper = -5.0, 10.0
    fn = staticmethod(functions.rosenbrock)


class Rastrigin(_BoxFunction):
    name = "Rastrigin"
    lower, upper = -5.12 + 1.0, 5.12 + 1.0
    fn = staticmethod(functions.rastrigin)


class Ackley(_BoxFunction):
    name = "Ackley"
    lower, upper = -32.768 + 1.0, 32.768 + 1.0
    fn = staticmethod(functions.ackley)

    def is_success(self, objective: float) -> bool:
        return objective < SUCCESS_TOLERANCE


class Griewank(_BoxFunction):
    name = "Griewank"
    lower, upper = -600.0 + 1.0, 600.0 + 1.0
    fn = staticmethod(functions.griewank)

    def is_success(self, objective: float) -> bool:
        return objective < SUCCESS_TOLERANCE


class Levy(_BoxFunction):
    name = "Levy"
    lower, upper = -10.0, 10.0
    fn = staticmethod(functions.levy)


class SixHumpCamel(_PlanarFunction):
    name = "SixHumpCamel"
    global_minimum = -1.0316
    bounds = ((-3.0, 3.0), (-2.0, 2.0))
    fn = staticmethod(functions.six_hump_camel)


class CrossInTray(_PlanarFunction):
    name = "CrossInTray"
    global_minimum = -2.06261
    bounds = ((-10.0, 10.0), (-10.0, 10.0))
    fn = staticmethod(functions.cross_in_tray)


ALL_FUNCTIONS: Tuple[BenchmarkFunction, ...] = (
    Rosenbrock(),
    Rastrigin(),
    Ackley(),
    Griewank(),
    Levy(),
    SixHumpCamel(),
    CrossInTray(),
)


def select_functions(name: Optional[str] = None) -> List[BenchmarkFunction]:
    """Select benchmarks by case-insensitive name (all when name is None).

    Raises:
        ValueError: If no benchmark has that name
    """
    if name is None:
        return list(ALL_FUNCTIONS)

    selected = [f for f in ALL_FUNCTIONS if f.name.lower() == name.lower()]
    if not selected:
        available = ", ".join(f.name for f in ALL_FUNCTIONS)
        raise ValueError(f"Unknown benchmark function {name!r} (available: {available})")
    return selected
