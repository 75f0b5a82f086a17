"""
Logging configuration for vcd-tool.

Every module logs through the standard ``logging`` package; this module only
decides levels and formatting for command line runs.
"""

import logging
from typing import Optional

# ============================================================================
# Logging Configuration Constants
# ============================================================================

# Default width for log message wrapping
DEFAULT_LOG_WIDTH = 120

# Format shared by the plain and wrapping handlers
LOG_FORMAT = "%(asctime)s - %(levelname)s - %(message)s"

# Loggers of the HTTP stack, noisy below maximum verbosity
HTTP_LOGGERS = ("httpx", "httpcore")

# ============================================================================
# Custom Formatters
# ============================================================================


class WrappingFormatter(logging.Formatter):
    """
    Formatter that breaks long records into lines of at most ``width`` characters.

    Task descriptions and vCD error messages easily run past a terminal
    width; splitting on word boundaries keeps them readable.
    """

    def __init__(
        self, fmt: Optional[str] = None, datefmt: Optional[str] = None, width: int = DEFAULT_LOG_WIDTH
    ) -> None:
        super().__init__(fmt, datefmt)
        self.width = width

    def format(self, record: logging.LogRecord) -> str:
        formatted = super().format(record)
        if len(formatted) <= self.width:
            return formatted

        lines = []
        current_line = ""
        for word in formatted.split():
            candidate = f"{current_line} {word}" if current_line else word
            if len(candidate) <= self.width:
                current_line = candidate
                continue
            if current_line:
                lines.append(current_line)
            current_line = word
        if current_line:
            lines.append(current_line)

        return "\n".join(lines)


# ============================================================================
# Logging Setup Functions
# ============================================================================


def _level_for(verbosity: int) -> int:
    if verbosity <= 0:
        return logging.WARNING
    if verbosity == 1:
        return logging.INFO
    return logging.DEBUG


def setup_logging(verbosity: int = 0, use_wrapping: bool = False) -> None:
    """
    Configure the root logger from a ``-d`` count.

    Args:
        verbosity: 0=WARNING, 1=INFO (task progress), 2=DEBUG (link
            navigation, retries), 3+=DEBUG including httpx request logs
        use_wrapping: If True, wrap long messages with WrappingFormatter

    Example:
        >>> setup_logging(1)  # show task progress
        >>> setup_logging(3, use_wrapping=True)  # everything, wrapped
    """
    level = _level_for(verbosity)

    if use_wrapping:
        handler = logging.StreamHandler()
        handler.setFormatter(WrappingFormatter(fmt=LOG_FORMAT, width=DEFAULT_LOG_WIDTH))

        root_logger = logging.getLogger()
        root_logger.handlers.clear()
        root_logger.addHandler(handler)
        root_logger.setLevel(level)
    else:
        logging.basicConfig(level=level, format=LOG_FORMAT)

    http_level = logging.DEBUG if verbosity >= 3 else logging.WARNING
    for name in HTTP_LOGGERS:
        logging.getLogger(name).setLevel(http_level)


__all__ = [
    "WrappingFormatter",
    "setup_logging",
]
