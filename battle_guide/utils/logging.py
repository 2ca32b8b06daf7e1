# ABOUTME: Structured logging configuration using loguru for the battle guide.
# ABOUTME: Supports context fields (session_id, version, phase) and file/console output.

import sys
from pathlib import Path
from typing import Any

from loguru import logger


# Default log format with structured context
DEFAULT_FORMAT = (
    "<green>{time:YYYY-MM-DD HH:mm:ss.SSS}</green> | "
    "<level>{level: <8}</level> | "
    "<cyan>{name}</cyan>:<cyan>{function}</cyan>:<cyan>{line}</cyan> | "
    "<level>{message}</level> | "
    "{extra}"
)

VALID_LOG_LEVELS = {"DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"}


def setup_logging(
    log_level: str = "INFO",
    log_dir: str | Path | None = None,
    console_output: bool = True,
    file_output: bool = False,
    format_string: str | None = None,
    rotation: str = "10 MB",
    retention: str = "14 days",
    compression: str = "zip"
) -> None:
    """
    Configure loguru sinks for the guide.

    The terminal guide prints to stdout, so console logging goes to stderr
    and stays out of the way of the phase text.

    Usage:
        >>> setup_logging(log_level="DEBUG", log_dir="logs", file_output=True)
        >>> logger = get_logger()
        >>> logger.bind(session_id="abc").info("Session created")

    Args:
        log_level: Minimum log level ("DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL")
        log_dir: Directory for log files (default: "logs")
        console_output: Enable stderr logging (default: True)
        file_output: Enable rotating file logging (default: False)
        format_string: Custom format string (default: structured format)
        rotation: When to rotate log files
        retention: How long to keep old logs
        compression: Compression for rotated logs

    Raises:
        ValueError: If log_level is invalid
    """
    log_level = log_level.upper()
    if log_level not in VALID_LOG_LEVELS:
        raise ValueError(
            f"Invalid log level: '{log_level}'. "
            f"Must be one of: {', '.join(sorted(VALID_LOG_LEVELS))}"
        )

    logger.remove()

    fmt = format_string or DEFAULT_FORMAT

    if console_output:
        logger.add(
            sys.stderr,
            format=fmt,
            level=log_level,
            colorize=True,
            backtrace=True,
            diagnose=False,
        )

    if file_output:
        log_dir = Path("logs") if log_dir is None else Path(log_dir)
        log_dir.mkdir(parents=True, exist_ok=True)

        log_file = log_dir / "battle_guide_{time:YYYY-MM-DD}.log"
        logger.add(
            str(log_file),
            format=fmt,
            level=log_level,
            rotation=rotation,
            retention=retention,
            compression=compression,
            backtrace=True,
            diagnose=False,
            enqueue=True,  # Thread-safe; web sessions log from worker threads
        )

    logger.debug(
        f"Logging configured: level={log_level}, "
        f"console={console_output}, file={file_output}"
    )


def get_logger() -> Any:
    """
    Get configured loguru logger instance.

    Usage:
        >>> logger = get_logger()
        >>> logger.bind(session_id="abc", version=3).info("Snapshot restored")
    """
    return logger


def log_phase_transition(
    from_phase: str,
    to_phase: str,
    session_id: str | None = None,
    version: int | None = None,
    round_number: int | None = None
) -> None:
    """
    Log a move from one phase to the next.

    Usage:
        >>> log_phase_transition(
        ...     from_phase="FIGHT PHASE",
        ...     to_phase="END OF TURN",
        ...     session_id="3f2a...",
        ...     version=14,
        ...     round_number=2
        ... )

    Args:
        from_phase: Name of the phase being left
        to_phase: Name of the phase being entered
        session_id: Optional session identifier (web driver)
        version: Optional snapshot version after the transition
        round_number: Optional current battle round
    """
    context: dict[str, Any] = {
        "from_phase": from_phase,
        "to_phase": to_phase,
    }

    if session_id is not None:
        context["session_id"] = session_id
    if version is not None:
        context["version"] = version
    if round_number is not None:
        context["round"] = round_number

    logger.bind(**context).info(f"Phase transition: {from_phase} -> {to_phase}")


def log_snapshot_event(
    operation: str,
    session_id: str | None,
    version: int,
    **extra_context: Any
) -> None:
    """
    Log a snapshot store operation ("save", "restore", "restore_miss", "reset").

    Usage:
        >>> log_snapshot_event("restore", session_id="3f2a...", version=2, phase="COMMAND PHASE")
    """
    context = {
        "operation": operation,
        "version": version,
        **extra_context
    }

    if session_id is not None:
        context["session_id"] = session_id

    logger.bind(**context).debug(f"Snapshot operation: {operation}")
