#!/usr/bin/env python3
"""Compare the active optimizer tree against ``src-new`` from a source checkout.

Same options as ``python -m gsbench compare``. Run it from the benchmark
directory inside the optimizer root (the root defaults to the parent of
the working directory):
    python scripts/compare.py --runs 5
"""

import sys
from pathlib import Path

# Setup path
sys.path.insert(0, str(Path(__file__).parent.parent))

from gsbench.experiments.compare import main


if __name__ == "__main__":
    sys.exit(main())
