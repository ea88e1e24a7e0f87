#!/usr/bin/env python3
"""
Generate cube structures without installing the package.

Usage:
    python scripts/generate_structures.py -n 30 -m 5 -k 20
    python scripts/generate_structures.py --mode river -n 200 -m 100 -k 10 --seed 7

See ``cubegen --help`` for all options.
"""
import sys
from pathlib import Path

sys.path.insert(0, str(Path(__file__).parent.parent / "src"))

from cubegen.cli import main

if __name__ == "__main__":
    sys.exit(main())
