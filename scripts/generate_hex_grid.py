#!/usr/bin/env python3
"""
Generate the H3 cells covering a bounding box and export them as CSV.

Usage:
    python generate_hex_grid.py --city "New York" --resolution 6
    python generate_hex_grid.py --bbox "0.99,0.0,1.0,0.01" --dry-run
"""

import sys
from pathlib import Path

# Add package root to path
sys.path.insert(0, str(Path(__file__).parent.parent))

from hexgrid.cli import main

if __name__ == "__main__":
    main()
