"""
Engine settings for splitview.

Settings are read from ~/.config/splitview/config.yaml (or the file named by
SPLITVIEW_CONFIG) and then overridden by SPLITVIEW_* environment variables.
A missing file is not an error; the defaults from constants.py apply.

Example config.yaml:

    max_depth: 4
    root_orientation: column
    default_division: 0.5
"""

import logging
import os
from dataclasses import dataclass
from pathlib import Path
from typing import Any, Dict, Optional, Union

import yaml

from splitview.exceptions import ConfigurationError
from splitview.types import Orientation

from .constants import (
    CONFIG_FILE_NAME,
    DEFAULT_DIVISION,
    DEFAULT_MAX_DEPTH,
    DEFAULT_ORIENTATION,
    ENV_CONFIG_PATH,
    ENV_MAX_DEPTH,
    ENV_ORIENTATION,
    SPLITVIEW_CONFIG_DIR,
)

logger = logging.getLogger(__name__)


@dataclass
class EngineSettings:
    """Tunables of the layout engine.

    Attributes:
        max_depth: Deepest level a new split may be created at, or None
            for no limit. Inserts that would exceed it are refused.
        root_orientation: Axis of the root split
        default_division: Division given to newly created splits
    """

    max_depth: Optional[int] = DEFAULT_MAX_DEPTH
    root_orientation: Orientation = Orientation(DEFAULT_ORIENTATION)
    default_division: float = DEFAULT_DIVISION

    def __post_init__(self) -> None:
        """Coerce string values and validate ranges."""
        if isinstance(self.root_orientation, str):
            try:
                self.root_orientation = Orientation.from_string(self.root_orientation)
            except ValueError as e:
                raise ConfigurationError(str(e), setting="root_orientation") from e

        if self.max_depth is not None:
            if isinstance(self.max_depth, bool) or not isinstance(self.max_depth, int):
                raise ConfigurationError(
                    "max_depth must be an integer or null",
                    setting="max_depth",
                    value=self.max_depth,
                )
            if self.max_depth < 0:
                raise ConfigurationError(
                    "max_depth must be non-negative",
                    setting="max_depth",
                    value=self.max_depth,
                )

        if isinstance(self.default_division, bool) or not isinstance(
            self.default_division, (int, float)
        ):
            raise ConfigurationError(
                "default_division must be a number",
                setting="default_division",
                value=self.default_division,
            )
        if not 0.0 <= self.default_division <= 1.0:
            raise ConfigurationError(
                "default_division must be between 0 and 1",
                setting="default_division",
                value=self.default_division,
            )
        self.default_division = float(self.default_division)

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "EngineSettings":
        """Create settings from a dictionary (e.g., from YAML).

        Unknown keys are logged and ignored.
        """
        known = {"max_depth", "root_orientation", "default_division"}
        for key in sorted(set(data) - known):
            logger.warning(f"Ignoring unknown setting: {key}")

        return cls(
            max_depth=data.get("max_depth", DEFAULT_MAX_DEPTH),
            root_orientation=data.get("root_orientation", DEFAULT_ORIENTATION),
            default_division=data.get("default_division", DEFAULT_DIVISION),
        )

    def to_dict(self) -> Dict[str, Any]:
        """Convert settings to a plain dictionary."""
        return {
            "max_depth": self.max_depth,
            "root_orientation": self.root_orientation.value,
            "default_division": self.default_division,
        }


def get_config_path() -> Path:
    """Get the settings file path, respecting SPLITVIEW_CONFIG."""
    override = os.environ.get(ENV_CONFIG_PATH)
    if override:
        return Path(override).expanduser()
    return SPLITVIEW_CONFIG_DIR / CONFIG_FILE_NAME


def _read_settings_file(path: Path) -> Dict[str, Any]:
    """Read the YAML settings file, returning {} when it doesn't exist."""
    if not path.exists():
        logger.debug(f"No settings file at {path}, using defaults")
        return {}

    try:
        with open(path) as f:
            data = yaml.safe_load(f)
    except yaml.YAMLError as e:
        raise ConfigurationError("Settings file is not valid YAML", path=str(path)) from e
    except OSError as e:
        raise ConfigurationError("Failed to read settings file", path=str(path)) from e

    if data is None:
        return {}
    if not isinstance(data, dict):
        raise ConfigurationError("Settings file must contain a mapping", path=str(path))
    return data


def _apply_env_overrides(data: Dict[str, Any]) -> Dict[str, Any]:
    """Overlay SPLITVIEW_* environment variables on file settings."""
    result = dict(data)

    max_depth = os.environ.get(ENV_MAX_DEPTH)
    if max_depth is not None:
        if max_depth.strip().lower() in ("", "none", "null"):
            result["max_depth"] = None
        else:
            try:
                result["max_depth"] = int(max_depth)
            except ValueError:
                raise ConfigurationError(
                    f"Invalid value '{max_depth}' for {ENV_MAX_DEPTH}",
                    setting="max_depth",
                ) from None

    orientation = os.environ.get(ENV_ORIENTATION)
    if orientation:
        result["root_orientation"] = orientation

    return result


def load_settings(path: Optional[Union[str, Path]] = None) -> EngineSettings:
    """Load engine settings.

    Args:
        path: Settings file to read (defaults to get_config_path())

    Returns:
        EngineSettings with file values and environment overrides applied

    Raises:
        ConfigurationError: If the file or a value in it is invalid
    """
    config_path = Path(path) if path is not None else get_config_path()
    data = _apply_env_overrides(_read_settings_file(config_path))
    return EngineSettings.from_dict(data)
