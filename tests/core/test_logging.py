"""Tests for structured logging."""

import json
import logging
from pathlib import Path

import pytest
import structlog

from codeoutline.config.models import LoggingConfig, LogOutputConfig
from codeoutline.core.logging import (
    clear_batch_id,
    configure_logging,
    get_batch_id,
    set_batch_id,
)


class TestBatchIdCorrelation:
    """Batch ID context variable tests."""

    def setup_method(self) -> None:
        """Clear batch ID before each test."""
        clear_batch_id()

    def test_given_batch_id_when_set_then_can_retrieve(self) -> None:
        """Batch ID can be set and retrieved."""
        # Given
        batch_id = "batch-123"

        # When
        result = set_batch_id(batch_id)

        # Then
        assert result == batch_id
        assert get_batch_id() == batch_id

    def test_given_no_id_when_set_then_generates_uuid(self) -> None:
        """Set generates a short UUID-based ID when none provided."""
        # When
        bid = set_batch_id()

        # Then
        assert len(bid) == 12  # uuid4().hex[:12]
        assert get_batch_id() == bid

    def test_given_set_id_when_clear_then_removes_id(self) -> None:
        """Clear removes the current batch ID."""
        # Given
        set_batch_id("to-clear")

        # When
        clear_batch_id()

        # Then
        assert get_batch_id() is None


@pytest.mark.usefixtures("reset_logging")
class TestLoggingConfiguration:
    """Logging configuration tests."""

    def setup_method(self) -> None:
        """Reset structlog and stdlib logging before each test."""
        structlog.reset_defaults()
        logging.getLogger().handlers.clear()
        clear_batch_id()

    def test_given_json_file_output_when_log_then_valid_json(self, tmp_path: Path) -> None:
        """JSON output has event, level, timestamp and bound fields."""
        # Given
        log_file = tmp_path / "out.log"
        configure_logging(
            config=LoggingConfig(
                level="INFO",
                outputs=[LogOutputConfig(format="json", destination=str(log_file))],
            )
        )

        # When
        structlog.get_logger("test").info("grammar_loaded", language="python")

        # Then
        data = json.loads(log_file.read_text().strip().splitlines()[-1])
        assert data["event"] == "grammar_loaded"
        assert data["language"] == "python"
        assert data["level"] == "info"
        assert "timestamp" in data

    def test_given_batch_id_when_log_then_event_carries_it(self, tmp_path: Path) -> None:
        """Events logged inside a batch carry its correlation ID."""
        # Given
        log_file = tmp_path / "out.log"
        configure_logging(
            config=LoggingConfig(
                level="DEBUG",
                outputs=[LogOutputConfig(format="json", destination=str(log_file))],
            )
        )
        set_batch_id("abc123")

        # When
        structlog.get_logger("codeoutline.test").debug("file_extracted")

        # Then
        data = json.loads(log_file.read_text().strip().splitlines()[-1])
        assert data["batch_id"] == "abc123"

    def test_given_config_object_when_configure_then_takes_precedence(self, tmp_path: Path) -> None:
        """LoggingConfig object takes precedence over simple params."""
        # Given
        log_file = tmp_path / "test.log"
        config = LoggingConfig(
            level="DEBUG",
            outputs=[LogOutputConfig(format="json", destination=str(log_file))],
        )

        # When - config's DEBUG should override the level="ERROR" param
        configure_logging(config=config, json_format=False, level="ERROR")
        structlog.get_logger().debug("debug msg")

        # Then
        assert "debug msg" in log_file.read_text()

    def test_given_multi_output_config_when_configure_then_levels_per_output(
        self, tmp_path: Path
    ) -> None:
        """Each output filters at its own level."""
        # Given
        debug_file = tmp_path / "debug.log"
        info_file = tmp_path / "info.log"
        config = LoggingConfig(
            level="DEBUG",
            outputs=[
                LogOutputConfig(format="json", destination=str(info_file), level="INFO"),
                LogOutputConfig(format="json", destination=str(debug_file)),
            ],
        )

        # When
        configure_logging(config=config)
        logger = structlog.get_logger()
        logger.debug("debug only")
        logger.info("info msg")

        # Then
        info_content = info_file.read_text()
        assert "info msg" in info_content
        assert "debug only" not in info_content

        debug_content = debug_file.read_text()
        assert "debug only" in debug_content
        assert "info msg" in debug_content

    def test_given_reconfigure_then_old_handlers_replaced(self, tmp_path: Path) -> None:
        """Reconfiguring does not stack handlers."""
        config = LoggingConfig(
            outputs=[LogOutputConfig(format="json", destination=str(tmp_path / "a.log"))]
        )
        configure_logging(config=config)
        configure_logging(config=config)

        assert len(logging.getLogger().handlers) == 1
