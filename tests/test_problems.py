"""Tests for the benchmark catalog."""

import numpy as np
import pytest

from gsbench.models.problem import (
    ALL_FUNCTIONS,
    Ackley,
    CrossInTray,
    Griewank,
    Levy,
    Problem,
    Rastrigin,
    Rosenbrock,
    SixHumpCamel,
    select_functions,
)
from gsbench.optimizer.base import EvaluationError


class TestObjectives:
    @pytest.mark.parametrize("function,optimum", [
        (Rosenbrock(), np.ones(10)),
        (Rastrigin(), np.zeros(10)),
        (Ackley(), np.zeros(10)),
        (Griewank(), np.zeros(10)),
        (Levy(), np.ones(10)),
    ])
    def test_box_functions_reach_zero(self, function, optimum):
        problem = function.problem(10)
        value = problem.objective(optimum)
        assert value == pytest.approx(0.0, abs=1e-10)
        assert function.is_success(value)

    def test_six_hump_camel_optimum(self):
        function = SixHumpCamel()
        value = function.problem(2).objective(np.array([0.0898, -0.7126]))
        assert value == pytest.approx(-1.0316, abs=1e-4)
        assert function.is_success(value)

    def test_cross_in_tray_optimum(self):
        function = CrossInTray()
        value = function.problem(2).objective(np.array([1.3491, 1.3491]))
        assert value == pytest.approx(-2.06261, abs=1e-4)

    def test_far_from_optimum_is_not_success(self):
        function = Ackley()
        value = function.problem(5).objective(np.full(5, 3.0))
        assert value > 1.0
        assert not function.is_success(value)


class TestProblem:
    def test_box_bounds_shape(self):
        problem = Ackley().problem(50)
        assert problem.dim == 50
        assert problem.bounds.shape == (50, 2)
        assert np.all(problem.bounds[:, 0] < problem.bounds[:, 1])

    def test_optimum_is_off_centre(self):
        bounds = Rastrigin().problem(3).bounds
        centre = bounds.mean(axis=1)
        assert not np.allclose(centre, 0.0)

    def test_variable_bounds_is_a_copy(self):
        problem = Levy().problem(3)
        bounds = problem.variable_bounds()
        bounds[:] = 0.0
        assert not np.allclose(problem.bounds, 0.0)

    def test_wrong_point_shape(self):
        problem = Ackley().problem(4)
        with pytest.raises(EvaluationError):
            problem.objective(np.zeros(3))

    def test_non_finite_objective(self):
        problem = Problem(name="Bad", dim=1, fn=lambda x: float("nan"), bounds=[[0.0, 1.0]])
        with pytest.raises(EvaluationError):
            problem.objective(np.array([0.5]))

    def test_bounds_must_match_dim(self):
        with pytest.raises(ValueError):
            Problem(name="Bad", dim=3, fn=lambda x: 0.0, bounds=[[0.0, 1.0]])

    def test_invalid_dimension(self):
        with pytest.raises(ValueError):
            Rosenbrock().problem(0)


class TestSupportedDims:
    def test_box_functions_use_defaults_in_order(self):
        assert Ackley().supported_dims([50, 10, 100]) == [50, 10, 100]

    @pytest.mark.parametrize("function", [SixHumpCamel(), CrossInTray()])
    def test_planar_functions_only_run_in_2d(self, function):
        assert function.supported_dims([10, 50, 100]) == [2]
        assert function.supported_dims([7]) == [2]
        assert function.problem(2).dim == 2


class TestSelectFunctions:
    def test_all_by_default(self):
        assert select_functions() == list(ALL_FUNCTIONS)
        assert [f.name for f in select_functions()] == [
            "Rosenbrock", "Rastrigin", "Ackley", "Griewank", "Levy",
            "SixHumpCamel", "CrossInTray",
        ]

    @pytest.mark.parametrize("name", ["ackley", "ACKLEY", "Ackley"])
    def test_case_insensitive(self, name):
        selected = select_functions(name)
        assert len(selected) == 1
        assert selected[0].name == "Ackley"

    def test_unknown_name(self):
        with pytest.raises(ValueError, match="Unknown benchmark function"):
            select_functions("himmelblau")
