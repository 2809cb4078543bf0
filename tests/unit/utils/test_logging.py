"""Unit tests for logging utilities."""

from __future__ import annotations

import io
import json
import logging
import sys
from pathlib import Path
from typing import TYPE_CHECKING

import pytest

if TYPE_CHECKING:
    from pyfakefs.fake_filesystem import FakeFilesystem


@pytest.fixture(autouse=True)
def clean_env(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.delenv("MUSTACHE_LAYOUT_DEBUG", raising=False)
    monkeypatch.delenv("MUSTACHE_LAYOUT_LOG_LEVEL", raising=False)


class TestCreateLogger:
    def test_creates_log_directory_if_missing(self, fs: FakeFilesystem) -> None:
        from mustache_layout.utils import create_logger

        log_path = Path("/logs/render.log")
        assert not log_path.parent.exists()

        _ = create_logger(log_file=str(log_path))

        assert log_path.parent.exists()

    def test_default_format_is_text(self, fs: FakeFilesystem) -> None:
        from mustache_layout.utils import create_logger

        logger = create_logger(log_file="/logs/render.log")

        logger.info("test_event", key="value")

        log_content = Path("/logs/render.log").read_text()
        assert "test_event" in log_content
        assert "key=value" in log_content
        assert "plugin=mustache-layout" in log_content

    def test_json_format(self, fs: FakeFilesystem) -> None:
        from mustache_layout.utils import create_logger

        logger = create_logger(log_format="json", log_file="/logs/render.log")

        logger.info("test_event", key="value")

        record = json.loads(Path("/logs/render.log").read_text().splitlines()[0])
        assert record["event"] == "test_event"
        assert record["key"] == "value"
        assert record["plugin"] == "mustache-layout"
        assert record["level"] == "info"
        assert "timestamp" in record

    def test_level_filters_lower_events(self, fs: FakeFilesystem) -> None:
        from mustache_layout.utils import create_logger

        logger = create_logger(level="warning", log_file="/logs/render.log")

        logger.info("hidden")
        logger.warning("shown")

        log_content = Path("/logs/render.log").read_text()
        assert "hidden" not in log_content
        assert "shown" in log_content

    def test_debug_env_overrides_level(
        self, fs: FakeFilesystem, monkeypatch: pytest.MonkeyPatch
    ) -> None:
        from mustache_layout.utils import create_logger

        monkeypatch.setenv("MUSTACHE_LAYOUT_DEBUG", "1")
        logger = create_logger(level="error", log_file="/logs/render.log")

        logger.debug("debug_event")

        assert "debug_event" in Path("/logs/render.log").read_text()

    def test_defaults_to_stderr(self, capsys: pytest.CaptureFixture[str]) -> None:
        from mustache_layout.utils import create_logger

        logger = create_logger()
        logger.info("to_stderr")

        assert "to_stderr" in capsys.readouterr().err

    def test_default_level_applies_without_level_or_env(
        self, fs: FakeFilesystem
    ) -> None:
        from mustache_layout.utils import create_logger

        logger = create_logger(default_level="warning", log_file="/logs/render.log")

        logger.info("hidden")
        logger.warning("shown")

        log_content = Path("/logs/render.log").read_text()
        assert "hidden" not in log_content
        assert "shown" in log_content

    def test_writes_to_given_sink(self) -> None:
        from mustache_layout.utils import create_logger

        sink = io.StringIO()
        logger = create_logger(sink=sink)

        logger.info("sink_event")

        assert "sink_event" in sink.getvalue()


class TestOpenLogger:
    def test_closes_log_file_on_exit(self, fs: FakeFilesystem) -> None:
        from mustache_layout.utils import open_logger

        with open_logger(log_file="/logs/render.log") as logger:
            logger.info("inside")
            sink = logger._logger._file  # noqa: SLF001
            assert not sink.closed

        assert sink.closed
        assert "inside" in Path("/logs/render.log").read_text()

    def test_closes_log_file_on_error(self, fs: FakeFilesystem) -> None:
        from mustache_layout.utils import open_logger

        with (
            pytest.raises(RuntimeError),
            open_logger(log_file="/logs/render.log") as logger,
        ):
            sink = logger._logger._file  # noqa: SLF001
            raise RuntimeError

        assert sink.closed

    def test_leaves_stderr_open(self, capsys: pytest.CaptureFixture[str]) -> None:
        from mustache_layout.utils import open_logger

        with open_logger() as logger:
            logger.info("to_stderr")

        assert "to_stderr" in capsys.readouterr().err
        assert not sys.stderr.closed


class TestLogLevels:
    def test_env_level_used_without_explicit_level(
        self, monkeypatch: pytest.MonkeyPatch
    ) -> None:
        from mustache_layout.utils._logging import _get_log_level

        monkeypatch.setenv("MUSTACHE_LAYOUT_LOG_LEVEL", "warning")

        assert _get_log_level() == logging.WARNING

    def test_default_level_is_info(self) -> None:
        from mustache_layout.utils._logging import _get_log_level

        assert _get_log_level() == logging.INFO

    def test_unknown_level_falls_back_to_info(self) -> None:
        from mustache_layout.utils._logging import _log_level_from_string

        assert _log_level_from_string("chatty") == logging.INFO

    def test_level_names_are_case_insensitive(self) -> None:
        from mustache_layout.utils._logging import _log_level_from_string

        assert _log_level_from_string("DEBUG") == logging.DEBUG
        assert _log_level_from_string("error") == logging.ERROR
