"""Two-phase A/B comparison of optimizer source trees.

The optimizer root holds the active implementation (``src``) and, when a
comparison is wanted, a candidate implementation next to it (``src-new``).
A comparison run:

1. measures the active tree and saves the statistics as a baseline,
2. swaps the candidate into place (the original goes to ``src-original-temp``),
3. rebuilds the installed optimizer package,
4. measures again against the saved baseline,
5. puts both trees back where they were.

Step 5 runs on every exit path. Without a candidate tree only step 1's
measurement is run, with no baseline and no swap.

Usage:
    python -m gsbench compare --root .. --runs 5
"""
from __future__ import annotations

from dataclasses import dataclass, field
from typing import Callable, List, Optional, Sequence
from pathlib import Path
import argparse
import logging
import subprocess
import sys

logger = logging.getLogger(__name__)

BENCH_MODULE = "gsbench"


class SwapError(Exception):
    """Base class for directory swap failures."""


class CandidateNotFound(SwapError):
    """The candidate tree does not exist."""


class StalePreviousRun(SwapError):
    """A temp directory from an earlier run is still present."""


class RenameFailed(SwapError):
    """A rename during the swap failed.

    Attributes:
        step: 1 for active -> temp, 2 for candidate -> active
    """

    def __init__(self, step: int, src: Path, dst: Path, cause: OSError):
        super().__init__(f"swap step {step} failed renaming {src} -> {dst}: {cause}")
        self.step = step
        self.src = src
        self.dst = dst
        self.cause = cause


class RestoreFailed(SwapError):
    """A rename while restoring the original layout failed."""


class PhaseFailed(Exception):
    """A benchmark phase exited with a non-zero status."""


class DirectoryGuard:
    """Swaps the candidate tree into place and guarantees it is put back.

    Use as a context manager: leaving the ``with`` block restores the
    original layout whether the block finished or raised. ``restore`` may be
    called any number of times, including when no swap happened.

    Attributes:
        swapped: True only after both swap renames succeeded
        restore_error: Failure of the last restore attempt while still swapped
    """

    def __init__(
        self,
        root: str | Path,
        active: str = "src",
        candidate: str = "src-new",
        temp: str = "src-original-temp",
    ):
        self.root = Path(root)
        self.active = self.root / active
        self.candidate = self.root / candidate
        self.temp = self.root / temp
        self.swapped = False
        self.restore_error: Optional[RestoreFailed] = None

    def check_preconditions(self) -> None:
        """Raise if a swap cannot start.

        Raises:
            CandidateNotFound: If the candidate tree is missing
            StalePreviousRun: If the temp directory already exists
        """
        if not self.candidate.exists():
            raise CandidateNotFound(f"{self.candidate} not found")
        if self.temp.exists():
            raise StalePreviousRun(
                f"{self.temp} already exists. Previous run might have failed; "
                f"restore {self.active.name} by hand before retrying."
            )

    def swap(self) -> None:
        """Move active -> temp, then candidate -> active.

        If the second rename fails the first is undone before RenameFailed
        propagates, so the tree is never left half-swapped.
        """
        if self.swapped:
            raise SwapError(f"{self.root} is already swapped")
        self.check_preconditions()

        logger.info(f"Renaming {self.active} -> {self.temp}")
        self._rename(self.active, self.temp, step=1)

        logger.info(f"Renaming {self.candidate} -> {self.active}")
        try:
            self._rename(self.candidate, self.active, step=2)
        except RenameFailed:
            self._rollback()
            raise

        self.swapped = True

    def restore(self) -> None:
        """Put the candidate back and the original in place. No-op if not swapped.

        Raises:
            RestoreFailed: If a rename fails; the guard stays swapped so a
                later call retries the remaining steps
        """
        if not self.swapped:
            return

        logger.info("Restoring...")
        if self.active.exists():
            logger.info(f"Renaming {self.active} -> {self.candidate}")
            try:
                self.active.rename(self.candidate)
            except OSError as e:
                raise RestoreFailed(f"renaming {self.active} -> {self.candidate}: {e}") from e
        if self.temp.exists():
            logger.info(f"Renaming {self.temp} -> {self.active}")
            try:
                self.temp.rename(self.active)
            except OSError as e:
                raise RestoreFailed(f"renaming {self.temp} -> {self.active}: {e}") from e

        self.swapped = False

    def __enter__(self) -> "DirectoryGuard":
        return self

    def __exit__(self, exc_type, exc, tb) -> bool:
        if self.swapped:
            logger.info("Auto-restoring directory structure...")
            try:
                self.restore()
            except RestoreFailed as e:
                logger.error(f"Error restoring directories: {e}")
                self.restore_error = e
            else:
                self.restore_error = None
        return False

    def _rename(self, src: Path, dst: Path, step: int) -> None:
        try:
            src.rename(dst)
        except OSError as e:
            raise RenameFailed(step, src, dst, e) from e

    def _rollback(self) -> None:
        if self.temp.exists() and not self.active.exists():
            logger.warning(f"Rolling back: renaming {self.temp} -> {self.active}")
            try:
                self.temp.rename(self.active)
            except OSError as e:
                logger.error(f"Rollback failed, {self.active} is at {self.temp}: {e}")


@dataclass
class CompareConfig:
    """Configuration for a comparison run.

    Attributes:
        root: Directory holding the source trees (default: parent of cwd)
        active_dir: Name of the active implementation directory
        candidate_dir: Name of the candidate implementation directory
        temp_dir: Where the active tree is parked while swapped
        baseline_json: Baseline file written by phase 1, read by phase 2
        bench_args: Extra arguments for every benchmark phase
        rebuild_cmd: Command that reinstalls the optimizer package
        workdir: Working directory of the benchmark phases (default: cwd)
    """
    root: Optional[Path] = None
    active_dir: str = "src"
    candidate_dir: str = "src-new"
    temp_dir: str = "src-original-temp"
    baseline_json: Path = Path("baseline_results.json")
    bench_args: List[str] = field(default_factory=list)
    rebuild_cmd: Optional[List[str]] = None
    workdir: Optional[Path] = None

    def __post_init__(self):
        if self.root is None:
            self.root = Path.cwd().parent
        self.root = Path(self.root)
        if self.workdir is None:
            self.workdir = Path.cwd()
        self.workdir = Path(self.workdir)
        self.baseline_json = Path(self.baseline_json)
        if self.rebuild_cmd is None:
            self.rebuild_cmd = [
                sys.executable, "-m", "pip", "install", "--quiet",
                "--no-deps", "--force-reinstall", str(self.root),
            ]


@dataclass
class ComparisonOutcome:
    """What a comparison run did.

    Attributes:
        compared: False when no candidate tree was found
        phases_run: Number of benchmark phases that completed
        rebuild_ok: Result of the rebuild (None if not attempted)
        restore_error: Restore failure, if the layout could not be put back
    """
    compared: bool
    phases_run: int
    rebuild_ok: Optional[bool] = None
    restore_error: Optional[RestoreFailed] = None


PhaseRunner = Callable[[Sequence[str]], None]
RebuildRunner = Callable[[], bool]


def run_bench_process(args: Sequence[str], bench_args: Sequence[str] = (), cwd: Optional[Path] = None) -> None:
    """Run one benchmark phase in a fresh interpreter.

    A new process is needed so the (possibly swapped) optimizer package is
    imported from scratch.

    Raises:
        PhaseFailed: If the process cannot start or exits non-zero
    """
    cmd = [sys.executable, "-m", BENCH_MODULE, "run", *bench_args, *args]
    logger.debug(f"Running: {' '.join(cmd)}")
    try:
        rc = subprocess.call(cmd, cwd=str(cwd) if cwd is not None else None)
    except OSError as e:
        raise PhaseFailed(f"Could not start benchmark command: {e}") from e
    if rc != 0:
        raise PhaseFailed(f"Benchmark command failed (exit code {rc})")


def run_rebuild_process(cmd: Sequence[str], cwd: Optional[Path] = None) -> bool:
    """Run the rebuild command; True on success. Never raises."""
    logger.info(f"Rebuilding optimizer package: {' '.join(cmd)}")
    try:
        rc = subprocess.call(list(cmd), cwd=str(cwd) if cwd is not None else None)
    except OSError as e:
        logger.warning(f"Could not start rebuild command: {e}")
        return False
    return rc == 0


class ComparisonOrchestrator:
    """Drives a baseline/candidate comparison over one optimizer root.

    ``run_phase`` and ``rebuild`` default to subprocess invocations; they can
    be replaced with any callables of the same shape.
    """

    def __init__(
        self,
        config: CompareConfig,
        run_phase: Optional[PhaseRunner] = None,
        rebuild: Optional[RebuildRunner] = None,
    ):
        self.config = config
        self.run_phase = run_phase or (
            lambda args: run_bench_process(args, config.bench_args, config.workdir)
        )
        self.rebuild = rebuild or (lambda: run_rebuild_process(config.rebuild_cmd, config.root))

    def guard(self) -> DirectoryGuard:
        return DirectoryGuard(
            self.config.root,
            active=self.config.active_dir,
            candidate=self.config.candidate_dir,
            temp=self.config.temp_dir,
        )

    def run(self) -> ComparisonOutcome:
        """Run the comparison (or a single phase when there is no candidate).

        Raises:
            StalePreviousRun: Before anything runs, if a temp directory exists
            RenameFailed: If the swap fails (the layout is rolled back)
            PhaseFailed: If a benchmark phase fails (the layout is restored)
        """
        guard = self.guard()
        baseline = self.config.baseline_json

        if not guard.candidate.exists():
            logger.info(
                f"'{guard.candidate.name}' folder not found at {guard.candidate}. "
                f"Running standard benchmarks only."
            )
            self.run_phase([])
            return ComparisonOutcome(compared=False, phases_run=1)

        logger.info(f"Found '{guard.candidate.name}'. Starting Comparison Benchmark Suite.")
        guard.check_preconditions()

        if baseline.exists():
            baseline.unlink()

        print("\n- Phase 1: Baseline (Original Source)")
        self.run_phase(["--save-json", str(baseline)])
        outcome = ComparisonOutcome(compared=True, phases_run=1)

        with guard:
            print(f"\n- Swapping {guard.active.name} with {guard.candidate.name}")
            guard.swap()

            outcome.rebuild_ok = self.rebuild()
            if not outcome.rebuild_ok:
                # Known sharp edge: phase 2 may be measuring the phase-1 build.
                logger.warning("Rebuild failed. Phase 2 might not pick up the candidate changes.")

            print("\n- Phase 2: Comparison (New Source)")
            self.run_phase(["--load-baseline", str(baseline)])
            outcome.phases_run = 2

            print("\n- Restoring directory structure")
            try:
                guard.restore()
            except RestoreFailed as e:
                # Still swapped; __exit__ retries and logs if the retry fails too
                guard.restore_error = e

        outcome.restore_error = guard.restore_error
        return outcome


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        description="Compare the active optimizer source tree against a candidate tree"
    )
    parser.add_argument("--root", type=str, default=None,
                        help="Directory holding the source trees (default: parent of cwd)")
    parser.add_argument("--active-dir", type=str, default="src")
    parser.add_argument("--candidate-dir", type=str, default="src-new")
    parser.add_argument("--temp-dir", type=str, default="src-original-temp")
    parser.add_argument("--baseline-json", type=str, default="baseline_results.json",
                        help="Baseline file passed between the two phases")
    parser.add_argument("--rebuild-cmd", type=str, nargs="+", default=None,
                        help="Command that reinstalls the optimizer package")
    parser.add_argument("-f", "--function", type=str, default=None)
    parser.add_argument("-d", "--dim", type=int, default=None)
    parser.add_argument("-r", "--runs", type=int, default=None)
    parser.add_argument("--optimizer", type=str, default=None,
                        help="Optimizer import path (module:attr) for both phases")
    parser.add_argument("--log-level", type=str, default="INFO",
                        choices=["DEBUG", "INFO", "WARNING", "ERROR"])
    return parser


def _bench_args(args: argparse.Namespace) -> List[str]:
    bench_args: List[str] = []
    for flag, value in (
        ("--function", args.function),
        ("--dim", args.dim),
        ("--runs", args.runs),
        ("--optimizer", args.optimizer),
    ):
        if value is not None:
            bench_args.extend([flag, str(value)])
    return bench_args


def main(argv: Optional[Sequence[str]] = None) -> int:
    """Command-line entry point."""
    args = build_parser().parse_args(argv)

    logging.basicConfig(
        level=getattr(logging, args.log_level),
        format='%(asctime)s - %(levelname)s - %(message)s',
    )

    config = CompareConfig(
        root=args.root,
        active_dir=args.active_dir,
        candidate_dir=args.candidate_dir,
        temp_dir=args.temp_dir,
        baseline_json=args.baseline_json,
        bench_args=_bench_args(args),
        rebuild_cmd=args.rebuild_cmd,
    )

    try:
        outcome = ComparisonOrchestrator(config).run()
    except StalePreviousRun as e:
        logger.error(f"Refusing to swap: {e}")
        return 1
    except (SwapError, PhaseFailed) as e:
        logger.error(f"Comparison aborted: {e}")
        return 1
    except OSError as e:
        logger.error(f"Comparison aborted, file system error: {e}")
        return 1

    if outcome.restore_error is not None:
        logger.error(
            f"Directory layout under {config.root} was NOT fully restored: {outcome.restore_error}. "
            f"Move {config.temp_dir} back to {config.active_dir} by hand."
        )

    print("Comparison complete." if outcome.compared else "Benchmarks complete.")
    return 0


if __name__ == "__main__":
    sys.exit(main())
