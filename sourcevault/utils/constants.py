"""Centralized constants for sourcevault.

Single source of truth for the working directory layout used by the CLI.
"""

from pathlib import Path

# ============================================================================
# OUTPUT DIRECTORIES
# ============================================================================

SV_DIR = Path("./.sourcevault")

ERROR_LOG_FILE = SV_DIR / "error.log"

# ============================================================================
# DATA TYPES
# ============================================================================

# Only SOURCE rows take part in the persist step; TEST rows are reserved for
# test execution data and are never read by the previous-state index.
DATA_TYPE_SOURCE = "SOURCE"
DATA_TYPE_TEST = "TEST"
