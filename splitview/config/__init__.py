"""Configuration for splitview."""

from .settings import EngineSettings, get_config_path, load_settings

__all__ = ["EngineSettings", "get_config_path", "load_settings"]
