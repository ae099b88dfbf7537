#!/usr/bin/env python3
"""Visualize the stage-1 population of the reference optimizer.

For every benchmark, plots the 2-D objective as a contour with the stage-1
reference set of six stochastic runs on top.

Usage:
    python scripts/visualize_stage_one.py --output-dir plots/
"""

import sys
import logging
import argparse
from pathlib import Path

import numpy as np

# Setup path
sys.path.insert(0, str(Path(__file__).parent.parent))

from gsbench.models.problem import select_functions
from gsbench.optimizer.scatter import ScatterSearchOptimizer
from gsbench.experiments.analysis import plot_stage_one_population

logger = logging.getLogger(__name__)

# Tighter boxes than the benchmark bounds so the landscape is readable
VISUAL_BOUNDS = {
    "Rosenbrock": [[-2.0, 2.0], [-1.0, 3.0]],
    "Ackley": [[-5.0 + 1.0, 5.0 + 1.0], [-5.0 + 1.0, 5.0 + 1.0]],
}


def main():
    parser = argparse.ArgumentParser(description="Plot stage-1 populations of the reference optimizer")
    parser.add_argument("-f", "--function", type=str, default=None,
                        help="Benchmark function (all if not specified)")
    parser.add_argument("--runs", type=int, default=6, help="Stochastic runs per function")
    parser.add_argument("--population-size", type=int, default=20)
    parser.add_argument("--output-dir", type=str, default="plots")
    args = parser.parse_args()

    logging.basicConfig(
        level=logging.INFO,
        format='%(asctime)s - %(levelname)s - %(message)s',
    )

    try:
        functions = select_functions(args.function)
    except ValueError as e:
        logger.error(str(e))
        return 2

    optimizer = ScatterSearchOptimizer()
    for function in functions:
        print(f"Visualizing Stage 1 population for: {function.name}")
        bounds = VISUAL_BOUNDS.get(function.name)
        path = plot_stage_one_population(
            function,
            optimizer,
            output_dir=args.output_dir,
            bounds=np.array(bounds) if bounds is not None else None,
            runs=args.runs,
            population_size=args.population_size,
        )
        print(f"  Saved plot to {path}")

    return 0


if __name__ == "__main__":
    sys.exit(main())
