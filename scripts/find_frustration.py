"""Run find-frustration from a source checkout.

Usage:
    PYTHONPATH=./src python3 scripts/find_frustration.py -f qmasm problem.qmasm
    python3 scripts/find_frustration.py --all-cycles --max-seconds 60 problem.qubist
"""

import sys
from pathlib import Path

sys.path.insert(0, str(Path(__file__).parent.parent / "src"))

from frustration.cli import main


if __name__ == "__main__":
    sys.exit(main())
