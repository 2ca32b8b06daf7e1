# ABOUTME: Utility module exports for structured logging.
# ABOUTME: Provides logging.py (loguru config plus phase and snapshot event helpers).

from battle_guide.utils.logging import (
    get_logger,
    log_phase_transition,
    log_snapshot_event,
    setup_logging,
)

__all__ = [
    "setup_logging",
    "get_logger",
    "log_phase_transition",
    "log_snapshot_event",
]
