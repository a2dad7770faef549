"""Unit tests for logger creation."""

import io
import json
import logging
from pathlib import Path

import pytest

from speckeep.config import LogFormat, LoggingConfig, LogLevel
from speckeep.utils import create_logger
from speckeep.utils._logging import _get_log_level, _log_level_from_string


class TestLogLevels:
    def test_defaults_to_info(self) -> None:
        assert _get_log_level() == logging.INFO

    def test_env_level(self, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.setenv("SPECKEEP_LOG_LEVEL", "warning")

        assert _get_log_level() == logging.WARNING

    def test_debug_env_wins(self, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.setenv("SPECKEEP_LOG_LEVEL", "error")
        monkeypatch.setenv("SPECKEEP_DEBUG", "1")

        assert _get_log_level() == logging.DEBUG
        assert _log_level_from_string("error", respect_env=True) == logging.DEBUG

    def test_unknown_level_falls_back_to_info(self) -> None:
        assert _log_level_from_string("chatty") == logging.INFO


class TestCreateLogger:
    def test_json_to_stream(self) -> None:
        stream = io.StringIO()
        logger = create_logger(LoggingConfig(level=LogLevel.INFO), stream=stream)

        logger.info("index_rebuilt", documents=3)
        logger.debug("hidden")

        lines = stream.getvalue().splitlines()
        assert len(lines) == 1
        record = json.loads(lines[0])
        assert record["event"] == "index_rebuilt"
        assert record["documents"] == 3
        assert record["level"] == "info"
        assert "timestamp" in record

    def test_text_format(self) -> None:
        stream = io.StringIO()
        logger = create_logger(
            LoggingConfig(level=LogLevel.DEBUG, format=LogFormat.TEXT), stream=stream
        )

        logger.debug("sync_started", interval_seconds=2.0)

        output = stream.getvalue()
        assert "sync_started" in output
        assert "interval_seconds=2.0" in output

    def test_level_filters(self) -> None:
        stream = io.StringIO()
        logger = create_logger(LoggingConfig(level=LogLevel.ERROR), stream=stream)

        logger.warning("ignored")

        assert stream.getvalue() == ""

    def test_rotating_file(self, tmp_path: Path) -> None:
        log_file = tmp_path / "logs" / "speckeep.log"
        logger = create_logger(LoggingConfig(file=str(log_file)))

        logger.info("written")

        record = json.loads(log_file.read_text(encoding="utf-8").splitlines()[0])
        assert record["event"] == "written"
