"""
Shared test fixtures and configuration.
"""

from pathlib import Path

import pytest

_ENV_VARS = (
    "DOCKSIDE_VERSION",
    "DOCKSIDE_INSTALL_DIR",
    "DOCKSIDE_CONFIG",
    "DOCKSIDE_LOG_LEVEL",
    "DOCKSIDE_LOG_FILE",
    "DOCKSIDE_LOG_FILE_LEVEL",
    "GITHUB_TOKEN",
)


@pytest.fixture(autouse=True)
def clean_env(monkeypatch: pytest.MonkeyPatch) -> None:
    """Keep the developer's own installer settings out of every test."""
    for name in _ENV_VARS:
        monkeypatch.delenv(name, raising=False)


@pytest.fixture
def home(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> Path:
    """A throwaway home directory with a bash login and a minimal PATH."""
    home_dir = tmp_path / "home"
    home_dir.mkdir()
    monkeypatch.setenv("HOME", str(home_dir))
    monkeypatch.setenv("SHELL", "/bin/bash")
    monkeypatch.setenv("PATH", "/usr/bin:/bin")
    return home_dir
