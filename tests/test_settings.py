"""
Tests for engine settings loading.
"""

import logging

import pytest

from splitview.config import EngineSettings, get_config_path, load_settings
from splitview.config.constants import ENV_CONFIG_PATH, ENV_MAX_DEPTH, ENV_ORIENTATION
from splitview.exceptions import ConfigurationError
from splitview.types import Orientation


class TestEngineSettings:
    """Tests for the EngineSettings dataclass."""

    def test_defaults(self):
        settings = EngineSettings()
        assert settings.max_depth is None
        assert settings.root_orientation is Orientation.ROW
        assert settings.default_division == 0.5

    def test_orientation_from_string(self):
        assert EngineSettings(root_orientation="vertical").root_orientation is Orientation.COLUMN

    def test_invalid_orientation(self):
        with pytest.raises(ConfigurationError, match="Invalid orientation"):
            EngineSettings(root_orientation="diagonal")

    @pytest.mark.parametrize("value", [-1, "3", 2.5, True])
    def test_invalid_max_depth(self, value):
        with pytest.raises(ConfigurationError) as exc_info:
            EngineSettings(max_depth=value)
        assert exc_info.value.context["setting"] == "max_depth"

    @pytest.mark.parametrize("value", [-0.1, 1.5, "half"])
    def test_invalid_division(self, value):
        with pytest.raises(ConfigurationError):
            EngineSettings(default_division=value)

    def test_integer_division_coerced(self):
        assert EngineSettings(default_division=1).default_division == 1.0

    def test_round_trip_dict(self):
        settings = EngineSettings(max_depth=3, root_orientation="column", default_division=0.4)
        assert EngineSettings.from_dict(settings.to_dict()) == settings

    def test_unknown_keys_warned(self, caplog):
        with caplog.at_level(logging.WARNING):
            settings = EngineSettings.from_dict({"max_depth": 2, "theme": "dark"})
        assert settings.max_depth == 2
        assert "Ignoring unknown setting: theme" in caplog.text


class TestLoadSettings:
    """Tests for load_settings."""

    def test_missing_file_uses_defaults(self, tmp_path):
        assert load_settings(tmp_path / "nope.yaml") == EngineSettings()

    def test_reads_yaml(self, tmp_path):
        path = tmp_path / "config.yaml"
        path.write_text("max_depth: 4\nroot_orientation: column\ndefault_division: 0.3\n")

        settings = load_settings(path)

        assert settings.max_depth == 4
        assert settings.root_orientation is Orientation.COLUMN
        assert settings.default_division == pytest.approx(0.3)

    def test_empty_file(self, tmp_path):
        path = tmp_path / "config.yaml"
        path.write_text("")
        assert load_settings(path) == EngineSettings()

    def test_invalid_yaml(self, tmp_path):
        path = tmp_path / "config.yaml"
        path.write_text("max_depth: [unclosed\n")
        with pytest.raises(ConfigurationError, match="not valid YAML"):
            load_settings(path)

    def test_non_mapping(self, tmp_path):
        path = tmp_path / "config.yaml"
        path.write_text("- just\n- a list\n")
        with pytest.raises(ConfigurationError, match="must contain a mapping"):
            load_settings(path)

    def test_config_path_from_env(self, tmp_path, monkeypatch):
        path = tmp_path / "custom.yaml"
        path.write_text("max_depth: 1\n")
        monkeypatch.setenv(ENV_CONFIG_PATH, str(path))

        assert get_config_path() == path
        assert load_settings().max_depth == 1

    def test_default_config_path(self, monkeypatch):
        monkeypatch.delenv(ENV_CONFIG_PATH)
        path = get_config_path()
        assert path.name == "config.yaml"
        assert path.parent.name == "splitview"


class TestEnvironmentOverrides:
    """Tests for SPLITVIEW_* variables."""

    def test_env_overrides_file(self, tmp_path, monkeypatch):
        path = tmp_path / "config.yaml"
        path.write_text("max_depth: 4\nroot_orientation: row\n")
        monkeypatch.setenv(ENV_MAX_DEPTH, "2")
        monkeypatch.setenv(ENV_ORIENTATION, "column")

        settings = load_settings(path)

        assert settings.max_depth == 2
        assert settings.root_orientation is Orientation.COLUMN

    @pytest.mark.parametrize("value", ["none", "NULL", ""])
    def test_env_clears_max_depth(self, tmp_path, monkeypatch, value):
        path = tmp_path / "config.yaml"
        path.write_text("max_depth: 4\n")
        monkeypatch.setenv(ENV_MAX_DEPTH, value)

        assert load_settings(path).max_depth is None

    def test_env_invalid_max_depth(self, monkeypatch):
        monkeypatch.setenv(ENV_MAX_DEPTH, "deep")
        with pytest.raises(ConfigurationError, match=ENV_MAX_DEPTH):
            load_settings()
