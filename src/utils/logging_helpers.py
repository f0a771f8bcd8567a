"""
Logging helper utilities for the helmscan CLI.

Provides consistent formatting for error messages, warnings, and informational output.
"""

import logging
from typing import Callable, List, Optional

SEPARATOR_WIDTH = 60


def _log_section(
    emit: Callable[[str], None],
    title: str,
    messages: List[str],
    width: int,
) -> None:
    emit("=" * width)
    emit(title)
    for message in messages:
        emit(message or "")
    emit("=" * width)


def log_error_section(
    title: str,
    messages: List[str],
    logger: Optional[logging.Logger] = None,
    width: int = SEPARATOR_WIDTH
) -> None:
    """
    Log an error section with separator lines and multiple messages.

    Args:
        title: Title message for the error section
        messages: List of error messages to display (empty strings print blank lines)
        logger: Logger instance (defaults to root logger if not provided)
        width: Width of separator line in characters

    Examples:
        >>> log_error_section(
        ...     "Trivy is not installed",
        ...     ["Install it from https://trivy.dev and retry"]
        ... )
        ============================================================
        Trivy is not installed
        Install it from https://trivy.dev and retry
        ============================================================
    """
    _log_section((logger or logging.getLogger()).error, title, messages, width)


def log_warning_section(
    title: str,
    messages: List[str],
    logger: Optional[logging.Logger] = None,
    width: int = SEPARATOR_WIDTH
) -> None:
    """Log a warning section with separator lines and multiple messages."""
    _log_section((logger or logging.getLogger()).warning, title, messages, width)


def log_info_header(
    message: str,
    logger: Optional[logging.Logger] = None,
    width: int = SEPARATOR_WIDTH,
    char: str = "="
) -> None:
    """
    Log an informational header with separator lines.

    Examples:
        >>> log_info_header("Comparing bitnami/nginx@15.0.0 to bitnami/nginx@15.1.0")
        ============================================================
        Comparing bitnami/nginx@15.0.0 to bitnami/nginx@15.1.0
        ============================================================
    """
    if logger is None:
        logger = logging.getLogger()

    logger.info(char * width)
    logger.info(message)
    logger.info(char * width)


def format_scan_failures(failures) -> List[str]:
    """
    Format failed image scans as bullet lines for a log section.

    Args:
        failures: Iterable of ImageScanOutcome with scan_successful False

    Returns:
        One line per failure
    """
    return [f"  - {outcome.reference}: {outcome.error_message}" for outcome in failures]
