#!/usr/bin/env python3
"""Run the benchmark suite from a source checkout.

Same options as ``python -m gsbench run``:
    python scripts/run_benchmarks.py --function ackley --dim 10 --runs 5 --save-json results.json
"""

import sys
from pathlib import Path

# Setup path
sys.path.insert(0, str(Path(__file__).parent.parent))

from gsbench.experiments.run_experiment import main


if __name__ == "__main__":
    sys.exit(main())
