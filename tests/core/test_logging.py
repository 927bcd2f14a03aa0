"""Tests for structured logging."""

import json
import logging
from pathlib import Path

import pytest
import structlog

from covtree.config.models import LoggingConfig, LogOutputConfig
from covtree.core.logging import configure_logging, get_log_file_path, get_logger


class TestLoggingConfiguration:
    """Logging configuration tests."""

    def setup_method(self) -> None:
        """Reset structlog and stdlib logging before each test."""
        structlog.reset_defaults()
        logging.getLogger().handlers.clear()

    def test_given_json_format_when_log_then_outputs_json(
        self, capsys: pytest.CaptureFixture[str]
    ) -> None:
        """JSON format produces parseable JSON lines on stderr."""
        # Given
        configure_logging(json_format=True, level="INFO")
        logger = get_logger("test")

        # When
        logger.info("tracefile.parsed", files=3)

        # Then
        captured = capsys.readouterr()
        data = json.loads(captured.err.strip().splitlines()[-1])
        assert data["event"] == "tracefile.parsed"
        assert data["files"] == 3
        assert data["level"] == "info"
        assert data["logger"] == "test"
        assert "timestamp" in data

    def test_given_default_level_when_info_logged_then_suppressed(
        self, capsys: pytest.CaptureFixture[str]
    ) -> None:
        """Default WARNING level hides routine events."""
        # Given
        configure_logging(json_format=True)
        logger = get_logger()

        # When
        logger.info("tree.built", nodes=4)
        logger.warning("element.missing", path="coverage")

        # Then
        lines = capsys.readouterr().err.strip().splitlines()
        events = [json.loads(line)["event"] for line in lines]
        assert events == ["element.missing"]

    def test_given_console_format_when_log_then_renders_event(
        self, capsys: pytest.CaptureFixture[str]
    ) -> None:
        """Console format renders the event name and key-value pairs."""
        # Given
        configure_logging(level="DEBUG")

        # When
        get_logger().debug("check.completed", passed=True)

        # Then
        err = capsys.readouterr().err
        assert "check.completed" in err
        assert "passed=True" in err

    def test_given_no_file_output_when_configured_then_no_log_path(self) -> None:
        configure_logging()
        assert get_log_file_path() is None


class TestMultiOutput:
    """Per-output destinations and levels."""

    def setup_method(self) -> None:
        structlog.reset_defaults()
        logging.getLogger().handlers.clear()

    def test_given_file_output_when_log_then_written_to_file(self, tmp_path: Path) -> None:
        """File destinations receive JSON records."""
        # Given
        log_file = tmp_path / "logs" / "covtree.log"
        config = LoggingConfig(
            level="DEBUG",
            outputs=[LogOutputConfig(format="json", destination=str(log_file))],
        )
        configure_logging(config=config)

        # When
        get_logger().debug("tracefile.merged", inputs=2)
        for handler in logging.getLogger().handlers:
            handler.flush()

        # Then
        record = json.loads(log_file.read_text().strip().splitlines()[-1])
        assert record["event"] == "tracefile.merged"
        assert record["inputs"] == 2
        assert get_log_file_path() == log_file

    def test_given_per_output_levels_when_log_then_filtered_independently(
        self, tmp_path: Path, capsys: pytest.CaptureFixture[str]
    ) -> None:
        """Console at WARNING and file at DEBUG see different events."""
        # Given
        log_file = tmp_path / "debug.log"
        config = LoggingConfig(
            level="DEBUG",
            outputs=[
                LogOutputConfig(format="json", destination="stderr", level="WARNING"),
                LogOutputConfig(format="json", destination=str(log_file), level="DEBUG"),
            ],
        )
        configure_logging(config=config)
        logger = get_logger()

        # When
        logger.debug("tracefile.filtered", kept=2)
        logger.warning("element.missing", path="x")
        for handler in logging.getLogger().handlers:
            handler.flush()

        # Then
        console_events = [
            json.loads(line)["event"] for line in capsys.readouterr().err.strip().splitlines()
        ]
        file_events = [
            json.loads(line)["event"] for line in log_file.read_text().strip().splitlines()
        ]
        assert console_events == ["element.missing"]
        assert file_events == ["tracefile.filtered", "element.missing"]

    def test_given_reconfigure_when_called_then_old_handlers_removed(
        self, tmp_path: Path
    ) -> None:
        """Reconfiguring replaces previous handlers."""
        # Given
        configure_logging(
            config=LoggingConfig(
                outputs=[LogOutputConfig(destination=str(tmp_path / "first.log"))]
            )
        )

        # When
        configure_logging()

        # Then
        handlers = logging.getLogger().handlers
        assert len(handlers) == 1
        assert not isinstance(handlers[0], logging.FileHandler)
        assert get_log_file_path() is None


class TestLogOutputConfig:
    """Destination validation."""

    def test_given_relative_file_when_validated_then_rejected(self) -> None:
        with pytest.raises(ValueError, match="absolute"):
            LogOutputConfig(destination="logs/covtree.log")

    @pytest.mark.parametrize("destination", ["stderr", "stdout"])
    def test_given_stream_when_validated_then_kept(self, destination: str) -> None:
        assert LogOutputConfig(destination=destination).destination == destination
