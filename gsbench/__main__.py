"""Entry point: ``python -m gsbench [run|compare] ...``."""
from __future__ import annotations

from typing import List, Optional
import sys

from .experiments import compare, run_experiment


def main(argv: Optional[List[str]] = None) -> int:
    argv = list(sys.argv[1:] if argv is None else argv)
    if argv and argv[0] == "compare":
        return compare.main(argv[1:])
    if argv and argv[0] == "run":
        argv = argv[1:]
    return run_experiment.main(argv)


if __name__ == "__main__":
    sys.exit(main())
