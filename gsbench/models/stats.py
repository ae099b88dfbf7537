"""Trial results and their aggregate statistics.

A trial is one optimizer run; a StatPoint summarises a batch of trials for
one (function, dimension) pair; RunStatistics collects the StatPoints of a
whole measurement phase.
"""
from __future__ import annotations

from dataclasses import dataclass, field, asdict, fields
from typing import Dict, Iterator, List, Optional, Sequence, Tuple
import numpy as np


@dataclass(frozen=True)
class TrialResult:
    """Outcome of a single optimizer run (times in seconds)."""
    success: bool
    runtime: float
    stage1_runtime: float
    stage2_runtime: float
    best_obj: float
    solution_set_size: int


@dataclass(frozen=True)
class StatPoint:
    """Statistics over a batch of trials sharing one dimension.

    Means and standard deviations are population statistics over the
    whole batch.
    """
    dim: int
    success_rate: float
    avg_runtime_sec: float
    std_runtime_sec: float
    avg_stage1_sec: float
    avg_stage2_sec: float
    avg_solution_set_size: float
    std_solution_set_size: float
    avg_best_obj: float

    def to_dict(self) -> Dict[str, float]:
        return asdict(self)


STAT_FIELDS: Tuple[str, ...] = tuple(f.name for f in fields(StatPoint))


def mean(values: Sequence[float]) -> float:
    """Arithmetic mean of a non-empty sequence."""
    if len(values) == 0:
        raise ValueError("mean of an empty sequence")
    return float(np.mean(values))


def std_dev(values: Sequence[float]) -> float:
    """Population standard deviation (divides by n, not n - 1)."""
    if len(values) == 0:
        raise ValueError("std_dev of an empty sequence")
    # np.mean of identical values can round away from them
    if np.ptp(values) == 0:
        return 0.0
    return float(np.std(values, ddof=0))


def summarize_trials(dim: int, results: Sequence[TrialResult]) -> StatPoint:
    """Reduce a batch of trials to a StatPoint.

    Args:
        dim: Dimension the trials were run in
        results: Trial outcomes (at least one)

    Returns:
        StatPoint over exactly ``len(results)`` trials

    Raises:
        ValueError: If results is empty
    """
    if not results:
        raise ValueError(f"cannot summarise an empty batch (dim={dim})")

    runtimes = [r.runtime for r in results]
    sizes = [float(r.solution_set_size) for r in results]
    successes = sum(1 for r in results if r.success)

    return StatPoint(
        dim=int(dim),
        success_rate=successes / len(results),
        avg_runtime_sec=mean(runtimes),
        std_runtime_sec=std_dev(runtimes),
        avg_stage1_sec=mean([r.stage1_runtime for r in results]),
        avg_stage2_sec=mean([r.stage2_runtime for r in results]),
        avg_solution_set_size=mean(sizes),
        std_solution_set_size=std_dev(sizes),
        avg_best_obj=mean([r.best_obj for r in results]),
    )


@dataclass
class RunStatistics:
    """StatPoints of one measurement phase, keyed by function name.

    Insertion order is preserved both across functions and within each
    function's list (the order dimensions were run in).
    """
    data: Dict[str, List[StatPoint]] = field(default_factory=dict)

    def add(self, name: str, point: StatPoint) -> None:
        self.data.setdefault(name, []).append(point)

    def get(self, name: str) -> Optional[List[StatPoint]]:
        return self.data.get(name)

    def names(self) -> List[str]:
        return list(self.data)

    def items(self) -> Iterator[Tuple[str, List[StatPoint]]]:
        return iter(self.data.items())

    def __contains__(self, name: str) -> bool:
        return name in self.data

    def __len__(self) -> int:
        return len(self.data)

    def to_dict(self) -> Dict[str, Dict[str, List[Dict[str, float]]]]:
        return {"data": {name: [p.to_dict() for p in points] for name, points in self.data.items()}}
