"""
Learning context logger.

Provides logging interface for the learning context with automatic [learn] prefix.
All learning modules should import from this module, not from utils.logger directly.
"""

from pathlib import Path
from typing import Optional

from loguru import logger

from herald.utils.logger import setup_logger as _setup_logger

CONTEXT_PREFIX = "[learn]"


def setup_learning_logger(
    log_dir: Optional[Path], store: str, console_level: str = "INFO"
) -> Optional[Path]:
    """
    Setup logger for the learning context.

    Args:
        log_dir: Directory for the log file (console only if None)
        store: Description of the configured store, recorded in the provenance header
        console_level: Minimum level echoed to the console

    Returns:
        Path to log file, or None
    """
    return _setup_logger(
        context_name="learn",
        log_dir=log_dir,
        extra_provenance={"Store": store},
        console_level=console_level,
    )


def _log_success(message: str) -> None:
    """Log success message with [learn] prefix."""
    logger.success(f"{CONTEXT_PREFIX} {message}")


def _log_error(message: str) -> None:
    """Log error message with [learn] prefix."""
    logger.error(f"{CONTEXT_PREFIX} {message}")


def _log_warning(message: str) -> None:
    """Log warning message with [learn] prefix."""
    logger.warning(f"{CONTEXT_PREFIX} {message}")


def _log_debug(message: str) -> None:
    """Log debug message with [learn] prefix."""
    logger.debug(f"{CONTEXT_PREFIX} {message}")
