#!/usr/bin/env python3
"""
Convert local fonts in src/ to glyph PBF ranges in dist/fonts/.

Run from the repository root:

    python scripts/generate_glyphs.py
"""

import pathlib
import sys

# Make the package importable without installing it
sys.path.insert(0, str(pathlib.Path(__file__).resolve().parent.parent))
from fontglyphs.generate import main

if __name__ == "__main__":
    sys.exit(main())
