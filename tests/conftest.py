import sys, os

# Ensure src (and the repository root, for tests.helpers) are on path for test imports
ROOT = os.path.dirname(os.path.dirname(__file__))
SRC = os.path.join(ROOT, 'src')
for path in (SRC, ROOT):
    if path not in sys.path:
        sys.path.insert(0, path)

from tests.helpers import ScriptedRandom, base_grid, drive_ticks

__all__ = [
    "ScriptedRandom",
    "base_grid",
    "drive_ticks",
]
