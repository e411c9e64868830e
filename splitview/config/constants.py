"""
Centralized constants for splitview.

Defaults for the layout engine and the locations it reads configuration
from. Everything here can be overridden through the settings file or
environment variables (see settings.py).
"""

from pathlib import Path

# =============================================================================
# LAYOUT DEFAULTS
# =============================================================================

DEFAULT_DIVISION = 0.5  # Share of slot 1 in a freshly created split
DEFAULT_ORIENTATION = "row"  # Axis of the root split
DEFAULT_MAX_DEPTH = None  # No nesting limit unless configured

# Weight resolution used when turning divisions into fr units
FR_UNITS_PER_SPLIT = 1000

# =============================================================================
# CONFIGURATION LOCATIONS
# =============================================================================

SPLITVIEW_CONFIG_DIR = Path.home() / ".config" / "splitview"
CONFIG_FILE_NAME = "config.yaml"

# Environment variables read by load_settings()
ENV_CONFIG_PATH = "SPLITVIEW_CONFIG"
ENV_MAX_DEPTH = "SPLITVIEW_MAX_DEPTH"
ENV_ORIENTATION = "SPLITVIEW_ORIENTATION"
