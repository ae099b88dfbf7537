"""Benchmark objective functions.

Standard test functions for global optimization, vectorised with numpy.
All of them take a 1-D array and return a float.

References:
    - Jamil, M., & Yang, X. S. (2013). A literature survey of benchmark
      functions for global optimization problems.
"""
from __future__ import annotations

import numpy as np


def rosenbrock(x: np.ndarray, a: float = 1.0, b: float = 100.0) -> float:
    """Rosenbrock valley. Global minimum 0 at (1, ..., 1)."""
    x = np.asarray(x, dtype=np.float64)
    return float(np.sum((a - x[:-1]) ** 2 + b * (x[1:] - x[:-1] ** 2) ** 2))


def rastrigin(x: np.ndarray, a: float = 10.0) -> float:
    """Rastrigin function. Global minimum 0 at the origin."""
    x = np.asarray(x, dtype=np.float64)
    return float(a * x.size + np.sum(x ** 2 - a * np.cos(2.0 * np.pi * x)))


def ackley(
    x: np.ndarray,
    a: float = 20.0,
    b: float = 0.2,
    c: float = 2.0 * np.pi,
) -> float:
    """Ackley function. Global minimum 0 at the origin.

    f(x) = -a·exp(-b·sqrt(Σxᵢ²/n)) - exp(Σcos(c·xᵢ)/n) + a + e
    """
    x = np.asarray(x, dtype=np.float64)
    n = x.size
    term1 = -a * np.exp(-b * np.sqrt(np.sum(x ** 2) / n))
    term2 = -np.exp(np.sum(np.cos(c * x)) / n)
    return float(term1 + term2 + a + np.e)


def griewank(x: np.ndarray) -> float:
    """Griewank function. Global minimum 0 at the origin."""
    x = np.asarray(x, dtype=np.float64)
    i = np.arange(1, x.size + 1)
    return float(np.sum(x ** 2) / 4000.0 - np.prod(np.cos(x / np.sqrt(i))) + 1.0)


def levy(x: np.ndarray) -> float:
    """Levy function. Global minimum 0 at (1, ..., 1)."""
    x = np.asarray(x, dtype=np.float64)
    w = 1.0 + (x - 1.0) / 4.0
    head = np.sin(np.pi * w[0]) ** 2
    body = np.sum((w[:-1] - 1.0) ** 2 * (1.0 + 10.0 * np.sin(np.pi * w[:-1] + 1.0) ** 2))
    tail = (w[-1] - 1.0) ** 2 * (1.0 + np.sin(2.0 * np.pi * w[-1]) ** 2)
    return float(head + body + tail)


def six_hump_camel(x: np.ndarray) -> float:
    """Six-hump camel function (2-D). Global minimum -1.0316 at (±0.0898, ∓0.7126)."""
    x1, x2 = float(x[0]), float(x[1])
    return (
        (4.0 - 2.1 * x1 ** 2 + x1 ** 6 / 3.0) * x1 ** 2
        + x1 * x2
        + (-4.0 + 4.0 * x2 ** 2) * x2 ** 2
    )


def cross_in_tray(x: np.ndarray) -> float:
    """Cross-in-tray function (2-D). Global minimum -2.06261 at (±1.3491, ±1.3491)."""
    x1, x2 = float(x[0]), float(x[1])
    inner = abs(100.0 - np.sqrt(x1 ** 2 + x2 ** 2) / np.pi)
    return float(-0.0001 * (abs(np.sin(x1) * np.sin(x2) * np.exp(inner)) + 1.0) ** 0.1)
