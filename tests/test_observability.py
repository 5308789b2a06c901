"""
Tests for observability — logging setup and progress reporting.
"""

import logging
from pathlib import Path

import pytest

from dockside_installer.core.observability.logging_config import resolve_level, setup_logging
from dockside_installer.core.services.provision.progress import ProgressReporter


@pytest.fixture(autouse=True)
def restore_root_logger():
    root = logging.getLogger()
    handlers, level = list(root.handlers), root.level
    yield
    for h in root.handlers:
        if h not in handlers:
            h.close()
    root.handlers[:] = handlers
    root.setLevel(level)


class TestResolveLevel:
    def test_default(self):
        assert resolve_level() == "WARNING"

    def test_env_fallback(self):
        assert resolve_level(env_level="INFO") == "INFO"

    def test_precedence(self):
        assert resolve_level(debug=True, verbose=True, quiet=True, env_level="ERROR") == "DEBUG"
        assert resolve_level(verbose=True, quiet=True, env_level="ERROR") == "INFO"
        assert resolve_level(quiet=True, env_level="DEBUG") == "ERROR"


class TestSetupLogging:
    def test_console_level(self):
        setup_logging(level="INFO")
        root = logging.getLogger()
        assert root.level == logging.INFO
        assert len(root.handlers) == 1

    @pytest.mark.parametrize("level,marker", [
        ("DEBUG", "%(lineno)d"),
        ("INFO", "[%(name)s]"),
        ("ERROR", "%(levelname)s %(message)s"),
    ])
    def test_console_format_follows_level(self, level: str, marker: str):
        setup_logging(level=level)
        assert marker in logging.getLogger().handlers[0].formatter._fmt

    def test_unknown_level_falls_back_to_warning(self):
        setup_logging(level="LOUD")
        assert logging.getLogger().level == logging.WARNING

    def test_file_handler_lowers_root_level(self, tmp_path: Path):
        log_file = tmp_path / "install.log"
        setup_logging(level="WARNING", log_file=str(log_file), log_file_level="DEBUG")
        root = logging.getLogger()
        assert root.level == logging.DEBUG
        logging.getLogger("dockside_installer.test").debug("written to file only")
        for h in root.handlers:
            h.flush()
        assert "written to file only" in log_file.read_text()


class TestProgressReporter:
    def test_events_and_warnings(self):
        reporter = ProgressReporter()
        reporter.info("a")
        reporter.warn("b")
        reporter.success("c")
        assert reporter.events == [("info", "a"), ("warn", "b"), ("success", "c")]
        assert reporter.warnings == ["b"]

    def test_sink_receives_every_event(self):
        seen = []
        reporter = ProgressReporter(sink=lambda kind, msg: seen.append(kind))
        reporter.info("x")
        reporter.warn("y")
        assert seen == ["info", "warn"]
