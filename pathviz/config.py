"""
Configuration constants for the pathviz grid visualizer.

Everything tunable lives here. A few values can be overridden from the
environment (PATHVIZ_*, LOG_LEVEL) or, for the algorithm, from the command
line with --algo=bfs|dfs.
"""

import os
import sys
from typing import List, Optional

# =============================================================================
# Traversal
# =============================================================================

# One traversal step per animation frame (~60 FPS)
TICK_INTERVAL_MS = 16

# Bounds for the +/- speed controls
MIN_TICKS_PER_SEC = 1
MAX_TICKS_PER_SEC = 120

ALGORITHM_CHOICES = ("bfs", "dfs")
DEFAULT_ALGORITHM = os.environ.get("PATHVIZ_ALGORITHM", "bfs").lower()
if DEFAULT_ALGORITHM not in ALGORITHM_CHOICES:
    DEFAULT_ALGORITHM = "bfs"

# Backfill the found route as PATH cells after a successful run
HIGHLIGHT_PATH = os.environ.get("PATHVIZ_HIGHLIGHT_PATH", "1").lower() not in ("0", "false", "no", "off")

# =============================================================================
# Grid / canvas
# =============================================================================

CANVAS_WIDTH = 900
CANVAS_HEIGHT = 600

DEFAULT_BOX_SIZE = 30
MIN_BOX_SIZE = 8
MAX_BOX_SIZE = 80

MIN_ROWS = 1
MAX_ROWS = 150
MIN_COLUMNS = 1
MAX_COLUMNS = 200

# =============================================================================
# Logging
# =============================================================================

LOG_LEVEL = os.environ.get("LOG_LEVEL", "INFO")
LOG_FORMAT = "%(asctime)s %(levelname)-7s %(name)s: %(message)s"


def resolve_algorithm(argv: Optional[List[str]] = None) -> str:
    """Pick the traversal algorithm: --algo= flag, then env, then bfs."""
    algo = DEFAULT_ALGORITHM
    for arg in (sys.argv if argv is None else argv):
        if arg.startswith("--algo="):
            algo = arg.split("=", 1)[1].lower()
    return algo if algo in ALGORITHM_CHOICES else DEFAULT_ALGORITHM
