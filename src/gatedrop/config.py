"""Centralized configuration for Gatedrop.

Scoring rules, roster rules, and paths in one place.
Environment variables can override defaults.

Scoring Constants:
    POSITION_POINTS_TABLE - Points by finish position (index 0 = 1st)
    DOUBLING_CUTOFF - Worst adjusted position that still doubles
    DNF_SENTINEL - Marker accepted in place of a finish position
    DNF_POSITION - Position a DNF is scored as

Roster Constants:
    SLOTS_PER_CLASS - Riders picked per bike class
    DEFAULT_REQUIRE_ALL_STAR - Whether each class must carry one All-Star

Path Constants:
    PROJECT_ROOT - Root directory of the project
    STORAGE_DIR - Storage for reports
    REPORTS_DIR - CLI report output (overridable via GATEDROP_REPORTS_DIR)

Environment Variables:
    GATEDROP_REQUIRE_ALL_STAR - "0"/"false"/"no"/"off" disables the All-Star rule
    GATEDROP_REPORTS_DIR - Override report output directory
    GATEDROP_LOG_LEVEL - Logging level for CLI scripts (default INFO)
"""

from __future__ import annotations

import os
from pathlib import Path

# Project root (src/gatedrop/config.py -> gatedrop -> src -> project_root)
PROJECT_ROOT = Path(__file__).parent.parent.parent
STORAGE_DIR = PROJECT_ROOT / "storage"
REPORTS_DIR = Path(os.environ.get("GATEDROP_REPORTS_DIR", str(STORAGE_DIR / "reports")))

# Official points table, positions 1-22. Anything past 22nd scores 0.
POSITION_POINTS_TABLE = (
    25, 22, 20, 18, 17, 16, 15, 14, 13, 12,  # 1st-10th
    11, 10, 9, 8, 7, 6, 5, 4, 3, 2,          # 11th-20th
    1, 0,                                    # 21st-22nd
)

# Non-All-Stars double their points at or above this adjusted position
DOUBLING_CUTOFF = 10

# DNF is scored as the first position past the table
DNF_SENTINEL = "DNF"
DNF_POSITION = len(POSITION_POINTS_TABLE) + 1

# Roster rules
SLOTS_PER_CLASS = 4
_FALSE_VALUES = {"0", "false", "no", "off"}
DEFAULT_REQUIRE_ALL_STAR = (
    os.environ.get("GATEDROP_REQUIRE_ALL_STAR", "1").strip().lower() not in _FALSE_VALUES
)

# Logging (CLI scripts)
LOG_LEVEL = os.environ.get("GATEDROP_LOG_LEVEL", "INFO").upper()
LOG_FORMAT = "%(asctime)s [%(levelname)s] %(message)s"
LOG_DATE_FORMAT = "%Y-%m-%d %H:%M:%S"
