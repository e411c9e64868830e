"""Shared pytest fixtures for splitview tests."""

import itertools

import pytest

from splitview.config.constants import ENV_CONFIG_PATH, ENV_MAX_DEPTH, ENV_ORIENTATION
from splitview.config.settings import EngineSettings
from splitview.layout import ViewController


@pytest.fixture(autouse=True)
def clean_env(monkeypatch, tmp_path):
    """Keep the user's real settings and SPLITVIEW_* variables out of tests."""
    monkeypatch.delenv(ENV_MAX_DEPTH, raising=False)
    monkeypatch.delenv(ENV_ORIENTATION, raising=False)
    monkeypatch.setenv(ENV_CONFIG_PATH, str(tmp_path / "missing-config.yaml"))


@pytest.fixture
def id_factory():
    """Deterministic id service producing id-1, id-2, ..."""
    counter = itertools.count(1)
    return lambda: f"id-{next(counter)}"


@pytest.fixture
def controller(id_factory):
    """Controller with default settings and predictable ids."""
    return ViewController(EngineSettings(), id_factory=id_factory)
