"""Pytest configuration and fixtures for trivialmerge tests."""

import sys
import tempfile
from pathlib import Path

import pytest

from trivialmerge.core.log import ConsoleSink, setup_logger


@pytest.fixture(autouse=True, scope="session")
def configure_logging():
    """Log to the console only, at debug level, during tests."""
    test_log_root = Path(tempfile.gettempdir()) / "trivialmerge-tests"
    setup_logger(
        log_root=test_log_root,
        run_name="test",
        console=ConsoleSink(level="debug"),
    )


@pytest.fixture
def mock_argv():
    """Give settings classes a clean argv and restore pytest's after."""
    original = sys.argv
    sys.argv = ["trivialmerge"]
    yield sys.argv
    sys.argv = original


@pytest.fixture
def user_config_dir(tmp_path, monkeypatch):
    """Point the user configuration directory at an empty temp dir."""
    config_dir = tmp_path / "user-config"
    config_dir.mkdir()
    monkeypatch.setattr(
        "trivialmerge.core.yaml_settings.user_config_dir",
        lambda *args, **kwargs: str(config_dir),
    )
    return config_dir


@pytest.fixture
def load_state(mock_argv, user_config_dir, tmp_path, monkeypatch):
    """Factory building a State outside any project config.

    Runs from an empty directory so a trivialmerge.yaml in the
    checkout cannot leak into the tests.
    """
    from trivialmerge.core.config import State

    project = tmp_path / "project"
    project.mkdir()
    monkeypatch.chdir(project)

    def _load(**kwargs):
        return State(**kwargs)

    return _load
