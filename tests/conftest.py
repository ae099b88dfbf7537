from pathlib import Path
from typing import Callable, Dict, List, Optional, Tuple

import numpy as np
import pytest

from gsbench.models.stats import RunStatistics, StatPoint
from gsbench.optimizer.base import Optimizer, OptimizerParams, Solution, SolutionSet


class RecordingOptimizer(Optimizer):
    """Optimizer stand-in that records every call.

    ``objective_for`` maps a seed to the best objective returned;
    ``size_for`` maps a seed to the number of solutions returned.
    """

    name = "recording"

    def __init__(
        self,
        objective_for: Callable[[int], float] = lambda seed: 0.0,
        size_for: Callable[[int], int] = lambda seed: 1,
        stage1_time: Optional[float] = 0.5,
        stage2_time: Optional[float] = 0.25,
    ):
        self.objective_for = objective_for
        self.size_for = size_for
        self.stage1_time = stage1_time
        self.stage2_time = stage2_time
        self.calls: List[Tuple[str, int, int]] = []

    def run(self, problem, params: OptimizerParams) -> SolutionSet:
        self.calls.append((problem.name, problem.dim, params.seed))
        best = self.objective_for(params.seed)
        solutions = [
            Solution(point=np.zeros(problem.dim), objective=best + i)
            for i in range(self.size_for(params.seed))
        ]
        return SolutionSet(
            solutions=solutions,
            stage1_time=self.stage1_time,
            stage2_time=self.stage2_time,
        )


@pytest.fixture
def recording_optimizer():
    return RecordingOptimizer()


@pytest.fixture
def make_optimizer():
    return RecordingOptimizer


def make_point(dim: int, scale: float = 1.0) -> StatPoint:
    return StatPoint(
        dim=dim,
        success_rate=0.75,
        avg_runtime_sec=0.1234567890123 * scale,
        std_runtime_sec=0.01 * scale,
        avg_stage1_sec=0.05 * scale,
        avg_stage2_sec=0.07 * scale,
        avg_solution_set_size=3.5,
        std_solution_set_size=0.5,
        avg_best_obj=1.0e-9 * scale,
    )


@pytest.fixture
def sample_stats() -> RunStatistics:
    stats = RunStatistics()
    for dim in (50, 10, 100):
        stats.add("Ackley", make_point(dim))
    stats.add("SixHumpCamel", make_point(2, scale=3.0))
    return stats


@pytest.fixture
def baseline_stats() -> RunStatistics:
    stats = RunStatistics()
    for dim in (50, 10):
        stats.add("Ackley", make_point(dim, scale=2.0))
    return stats


@pytest.fixture
def source_tree(tmp_path) -> Path:
    """Optimizer root with an active tree and a candidate tree."""
    root = tmp_path / "optimizer"
    (root / "src").mkdir(parents=True)
    (root / "src" / "lib.py").write_text("VERSION = 'original'\n")
    (root / "src" / "nested").mkdir()
    (root / "src" / "nested" / "core.py").write_text("# original core\n")
    (root / "src-new").mkdir()
    (root / "src-new" / "lib.py").write_text("VERSION = 'candidate'\n")
    return root


def snapshot(root: Path) -> Dict[str, str]:
    """Relative path -> file contents for every file under root."""
    return {
        str(p.relative_to(root)): p.read_text()
        for p in sorted(root.rglob("*"))
        if p.is_file()
    }


@pytest.fixture
def tree_snapshot():
    return snapshot
