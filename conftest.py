"""
Root conftest.py: puts the repository on sys.path so that tests can import
bwreach without installing the package.
"""

import sys
from pathlib import Path

_ROOT = str(Path(__file__).resolve().parent)
if _ROOT not in sys.path:
    sys.path.insert(0, _ROOT)
