# ABOUTME: Unit tests for structured logging utilities
# ABOUTME: Validates loguru configuration, the transition/snapshot helpers, and context attachment

import sys
import tempfile
from pathlib import Path
from unittest.mock import patch

import pytest
from loguru import logger

from battle_guide.utils.logging import (
    DEFAULT_FORMAT,
    get_logger,
    log_phase_transition,
    log_snapshot_event,
    setup_logging,
)


@pytest.fixture(autouse=True)
def reset_logger():
    """Reset logger state before each test"""
    logger.remove()
    yield
    logger.remove()


@pytest.fixture
def temp_log_dir():
    """Create a temporary directory for log files"""
    with tempfile.TemporaryDirectory() as tmpdir:
        yield Path(tmpdir)


class TestSetupLogging:
    """Test suite for setup_logging function"""

    def test_valid_log_levels(self):
        """Test that all valid log levels are accepted"""
        for level in ["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"]:
            logger.remove()
            setup_logging(log_level=level, console_output=True, file_output=False)

    def test_log_level_case_insensitive(self):
        for level in ["debug", "Debug", "DeBuG"]:
            logger.remove()
            setup_logging(log_level=level, console_output=True, file_output=False)

    def test_invalid_log_level_raises_error(self):
        """Test that invalid log level raises ValueError"""
        with pytest.raises(ValueError, match="Invalid log level"):
            setup_logging(log_level="VERBOSE")

        with pytest.raises(ValueError, match="Invalid log level"):
            setup_logging(log_level="TRACE")  # Valid in loguru but not in our API

    def test_console_output_goes_to_stderr(self):
        """Test that console logs never share stdout with the terminal guide"""
        with patch.object(logger, 'add') as mock_add:
            setup_logging(log_level="INFO", console_output=True, file_output=False)

            assert mock_add.call_args[0][0] == sys.stderr

    def test_console_output_disabled(self):
        with patch.object(logger, 'add') as mock_add:
            setup_logging(log_level="INFO", console_output=False, file_output=False)

            assert not mock_add.called

    def test_file_output_enabled(self, temp_log_dir):
        """Test that file output writes a dated log file"""
        setup_logging(
            log_level="INFO",
            log_dir=temp_log_dir,
            console_output=False,
            file_output=True
        )

        logger.info("test message")
        logger.complete()

        log_files = list(temp_log_dir.glob("battle_guide_*.log"))
        assert len(log_files) == 1

    def test_file_output_disabled(self, temp_log_dir):
        setup_logging(
            log_level="INFO",
            log_dir=temp_log_dir,
            console_output=False,
            file_output=False
        )

        logger.info("test message")

        assert list(temp_log_dir.glob("*.log")) == []

    def test_log_directory_creation(self, temp_log_dir):
        """Test that nested log directories are created"""
        nested_dir = temp_log_dir / "nested" / "logs"

        setup_logging(log_level="INFO", log_dir=nested_dir, console_output=False, file_output=True)

        assert nested_dir.exists()

    def test_custom_format_string(self):
        custom_format = "{time} | {level} | {message}"

        with patch.object(logger, 'add') as mock_add:
            setup_logging(log_level="INFO", console_output=True, format_string=custom_format)

            assert mock_add.call_args[1]['format'] == custom_format

    def test_default_format_string(self):
        with patch.object(logger, 'add') as mock_add:
            setup_logging(log_level="INFO", console_output=True)

            assert mock_add.call_args[1]['format'] == DEFAULT_FORMAT

    def test_file_handler_parameters(self, temp_log_dir):
        """Test that rotation, retention and compression reach the file sink"""
        with patch.object(logger, 'add') as mock_add:
            setup_logging(
                log_level="INFO",
                log_dir=temp_log_dir,
                console_output=False,
                file_output=True,
                rotation="50 MB",
                retention="7 days",
                compression="gz"
            )

            file_kwargs = mock_add.call_args[1]
            assert file_kwargs['rotation'] == "50 MB"
            assert file_kwargs['retention'] == "7 days"
            assert file_kwargs['compression'] == "gz"
            assert file_kwargs['enqueue'] is True

    def test_log_level_filtering(self, temp_log_dir):
        """Test that messages below the configured level are dropped"""
        setup_logging(log_level="WARNING", console_output=False, file_output=True, log_dir=temp_log_dir)

        logger.info("info message")
        logger.warning("warning message")
        logger.complete()

        log_content = list(temp_log_dir.glob("*.log"))[0].read_text()
        assert "info message" not in log_content
        assert "warning message" in log_content


class TestGetLogger:

    def test_returns_loguru_logger(self):
        assert get_logger() is logger

    def test_bind_method_works(self):
        setup_logging(log_level="INFO", console_output=False, file_output=False)

        get_logger().bind(session_id="abc", version=1).info("test message")


class TestLogPhaseTransition:
    """Test suite for log_phase_transition convenience function"""

    def test_attaches_phase_names(self):
        with patch.object(logger, 'bind') as mock_bind:
            mock_bind.return_value = logger

            log_phase_transition(from_phase="FIGHT PHASE", to_phase="END OF TURN")

            call_kwargs = mock_bind.call_args[1]
            assert call_kwargs == {"from_phase": "FIGHT PHASE", "to_phase": "END OF TURN"}

    def test_attaches_optional_context(self):
        with patch.object(logger, 'bind') as mock_bind:
            mock_bind.return_value = logger

            log_phase_transition(
                from_phase="COMMAND PHASE",
                to_phase="VP SCORING",
                session_id="abc",
                version=7,
                round_number=2
            )

            call_kwargs = mock_bind.call_args[1]
            assert call_kwargs['session_id'] == "abc"
            assert call_kwargs['version'] == 7
            assert call_kwargs['round'] == 2

    def test_message_names_both_phases(self, temp_log_dir):
        setup_logging(log_level="INFO", log_dir=temp_log_dir, console_output=False, file_output=True)

        log_phase_transition(from_phase="MOVEMENT PHASE", to_phase="SHOOTING PHASE")
        logger.complete()

        log_content = list(temp_log_dir.glob("*.log"))[0].read_text()
        assert "Phase transition: MOVEMENT PHASE -> SHOOTING PHASE" in log_content


class TestLogSnapshotEvent:
    """Test suite for log_snapshot_event convenience function"""

    def test_attaches_operation_and_version(self):
        with patch.object(logger, 'bind') as mock_bind:
            mock_bind.return_value = logger

            log_snapshot_event("restore", session_id="abc", version=3, phase="COMMAND PHASE")

            call_kwargs = mock_bind.call_args[1]
            assert call_kwargs['operation'] == "restore"
            assert call_kwargs['version'] == 3
            assert call_kwargs['session_id'] == "abc"
            assert call_kwargs['phase'] == "COMMAND PHASE"

    def test_omits_missing_session_id(self):
        with patch.object(logger, 'bind') as mock_bind:
            mock_bind.return_value = logger

            log_snapshot_event("save", session_id=None, version=0)

            assert "session_id" not in mock_bind.call_args[1]

    def test_logged_at_debug(self, temp_log_dir):
        setup_logging(log_level="INFO", log_dir=temp_log_dir, console_output=False, file_output=True)

        log_snapshot_event("save", session_id="abc", version=0)
        logger.complete()

        log_content = list(temp_log_dir.glob("*.log"))[0].read_text()
        assert "Snapshot operation" not in log_content
