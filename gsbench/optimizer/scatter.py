"""Reference two-stage optimizer built on scipy.

Stage 1 samples a Latin-hypercube population over the search box and keeps
a small, diverse reference set of the best points. Stage 2 runs a bounded
L-BFGS-B local search from every reference point and keeps the distinct
local minima close to the best one.

This is the optimizer the harness uses when no other implementation is
configured; any object with the same ``run`` signature can replace it.
"""
from __future__ import annotations

from typing import TYPE_CHECKING, List, Tuple
import logging
import time

import numpy as np
from scipy.optimize import minimize
from scipy.stats import qmc

from .base import EvaluationError, Optimizer, OptimizerError, OptimizerParams, Solution, SolutionSet

if TYPE_CHECKING:
    from ..models.problem import Problem

logger = logging.getLogger(__name__)


class ScatterSearchOptimizer(Optimizer):
    """Scatter-search population followed by local refinement.

    Example:
        >>> optimizer = ScatterSearchOptimizer()
        >>> result = optimizer.run(problem, OptimizerParams(seed=42))
        >>> print(result.best_solution().objective)
    """

    name = "scatter-search"

    def __init__(self, local_method: str = "L-BFGS-B"):
        self.local_method = local_method

    def run(self, problem: Problem, params: OptimizerParams) -> SolutionSet:
        """Run both stages on a problem.

        Raises:
            OptimizerError: If the objective cannot be evaluated
        """
        start = time.perf_counter()
        reference_set = self.stage_one(problem, params)
        stage1_time = time.perf_counter() - start

        start = time.perf_counter()
        solutions = self.stage_two(problem, params, reference_set)
        stage2_time = time.perf_counter() - start

        logger.debug(
            f"{problem.name} (dim={problem.dim}, seed={params.seed}): "
            f"{len(solutions)} solutions, stage1={stage1_time:.3f}s, stage2={stage2_time:.3f}s"
        )
        return SolutionSet(solutions=solutions, stage1_time=stage1_time, stage2_time=stage2_time)

    def stage_one(self, problem: Problem, params: OptimizerParams) -> List[Tuple[np.ndarray, float]]:
        """Sample the population and select the reference set.

        Returns:
            List of (point, objective) pairs, best first
        """
        bounds = problem.variable_bounds()
        lower, upper = bounds[:, 0], bounds[:, 1]

        sampler = qmc.LatinHypercube(d=problem.dim, rng=np.random.default_rng(params.seed))
        population = qmc.scale(sampler.random(params.population_size), lower, upper)
        values = np.array([self._evaluate(problem, x) for x in population])

        min_distance = params.distance_factor * float(np.linalg.norm(upper - lower))
        reference_set: List[Tuple[np.ndarray, float]] = []
        for idx in np.argsort(values, kind="stable"):
            point = population[idx]
            if all(np.linalg.norm(point - p) >= min_distance for p, _ in reference_set):
                reference_set.append((point, float(values[idx])))
            if len(reference_set) >= params.reference_set_size:
                break

        return reference_set

    def stage_two(
        self,
        problem: Problem,
        params: OptimizerParams,
        reference_set: List[Tuple[np.ndarray, float]],
    ) -> List[Solution]:
        """Refine every reference point and keep distinct good minima."""
        bounds = problem.variable_bounds()
        candidates: List[Solution] = []

        for start_point, _ in reference_set:
            try:
                res = minimize(
                    lambda x: self._evaluate(problem, x),
                    start_point,
                    method=self.local_method,
                    bounds=bounds,
                    options={"maxiter": params.local_max_iter},
                )
            except (ValueError, FloatingPointError) as e:
                raise OptimizerError(f"Local search failed on {problem.name}: {e}") from e
            candidates.append(Solution(point=np.asarray(res.x), objective=float(res.fun)))

        if not candidates:
            return []

        best = min(c.objective for c in candidates)
        threshold = best + params.threshold_factor * max(abs(best), 1.0)
        min_distance = params.distance_factor * float(np.linalg.norm(bounds[:, 1] - bounds[:, 0]))

        kept: List[Solution] = []
        for sol in sorted(candidates, key=lambda s: s.objective):
            if sol.objective > threshold:
                break
            if all(np.linalg.norm(sol.point - k.point) >= min_distance for k in kept):
                kept.append(sol)
        return kept

    @staticmethod
    def _evaluate(problem: Problem, x: np.ndarray) -> float:
        try:
            return problem.objective(x)
        except EvaluationError as e:
            raise OptimizerError(str(e)) from e
