"""Unit tests for logging utilities."""

import logging
from logging.handlers import RotatingFileHandler
from pathlib import Path

import orjson
import pytest
from pyfakefs.fake_filesystem import FakeFilesystem  # noqa: TC002

from runwatch.utils import create_null_logger, create_run_logger
from runwatch.utils._logging import (
    _create_logger,
    _get_log_level,
    _log_level_from_string,
)


class TestCreateLogger:
    def test_creates_log_directory_if_missing(self, fs: FakeFilesystem) -> None:
        log_path = Path("/artifacts/logs/runner.log")
        assert not log_path.parent.exists()

        _ = _create_logger(str(log_path))

        assert log_path.parent.exists()

    def test_default_format_is_json(self, fs: FakeFilesystem) -> None:
        logger = _create_logger("/logs/test.log", log_level=logging.INFO)

        logger.info("attempt_started", attempt=1)

        entry = orjson.loads(Path("/logs/test.log").read_text().splitlines()[0])
        assert entry["event"] == "attempt_started"
        assert entry["attempt"] == 1
        assert entry["level"] == "info"
        assert "timestamp" in entry

    def test_text_format(self, fs: FakeFilesystem) -> None:
        logger = _create_logger(
            "/logs/test.log", log_level=logging.INFO, log_format="text"
        )

        logger.info("attempt_started", attempt=1)

        log_content = Path("/logs/test.log").read_text()
        assert "attempt_started" in log_content
        assert "attempt=1" in log_content

    def test_level_filters_events(self, fs: FakeFilesystem) -> None:
        logger = _create_logger("/logs/test.log", log_level=logging.WARNING)

        logger.info("dropped")
        logger.warning("kept")

        log_content = Path("/logs/test.log").read_text()
        assert "dropped" not in log_content
        assert "kept" in log_content


class TestCreateLoggerRotation:
    def test_with_rotation_uses_stdlib_logger(self, fs: FakeFilesystem) -> None:
        _ = _create_logger("/logs/rotating.log", max_bytes=1000, backup_count=3)

        names = [
            name
            for name in logging.root.manager.loggerDict
            if name.startswith("runwatch.rotating.")
        ]
        assert names
        stdlib_logger = logging.getLogger(names[-1])
        assert len(stdlib_logger.handlers) == 1
        handler = stdlib_logger.handlers[0]
        assert isinstance(handler, RotatingFileHandler)
        assert handler.maxBytes == 1000
        assert handler.backupCount == 3


class TestLogLevels:
    def test_debug_env_wins(self, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.setenv("RUNWATCH_DEBUG", "1")

        assert _get_log_level() == logging.DEBUG
        assert _log_level_from_string("error", respect_env=True) == logging.DEBUG

    def test_log_level_env(self, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.delenv("RUNWATCH_DEBUG", raising=False)
        monkeypatch.setenv("RUNWATCH_LOG_LEVEL", "warning")

        assert _get_log_level() == logging.WARNING

    def test_unknown_level_defaults_to_info(self) -> None:
        assert _log_level_from_string("chatty") == logging.INFO

    def test_env_ignored_unless_requested(
        self, monkeypatch: pytest.MonkeyPatch
    ) -> None:
        monkeypatch.setenv("RUNWATCH_DEBUG", "1")

        assert _log_level_from_string("error") == logging.ERROR


class TestCreateRunLogger:
    def test_binds_command(
        self, fs: FakeFilesystem, monkeypatch: pytest.MonkeyPatch
    ) -> None:
        monkeypatch.delenv("RUNWATCH_DEBUG", raising=False)
        log_file = Path("/artifacts/logs/runner.log")

        logger = create_run_logger(log_file, command="run")
        logger.info("run_started")

        entry = orjson.loads(log_file.read_text().splitlines()[0])
        assert entry["command"] == "run"
        assert entry["event"] == "run_started"

    def test_respects_level(
        self, fs: FakeFilesystem, monkeypatch: pytest.MonkeyPatch
    ) -> None:
        monkeypatch.delenv("RUNWATCH_DEBUG", raising=False)
        log_file = Path("/artifacts/logs/runner.log")

        logger = create_run_logger(log_file, level="error")
        logger.warning("ignored")
        logger.error("recorded")

        log_content = log_file.read_text()
        assert "ignored" not in log_content
        assert "recorded" in log_content


class TestCreateNullLogger:
    def test_accepts_events_silently(self) -> None:
        logger = create_null_logger()

        logger.error("anything", key="value")
        logger.bind(command="run").info("bound")
