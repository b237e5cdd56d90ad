"""
Logging configuration for maptool.
"""

import logging
import logging.handlers
import sys
from typing import TYPE_CHECKING, Optional, TextIO

if TYPE_CHECKING:
    from ..settings import ToolSettings

CONSOLE_FORMAT = "%(asctime)s : %(levelname)-8s : %(message)s"
CONSOLE_DATEFMT = "%H:%M:%S"


class ColoredFormatter(logging.Formatter):
    """Console formatter that colours the level name."""

    # ANSI color codes
    COLORS = {
        "DEBUG": "\033[36m",  # Cyan
        "INFO": "\033[32m",  # Green
        "WARNING": "\033[33m",  # Yellow
        "ERROR": "\033[31m",  # Red
        "CRITICAL": "\033[35m",  # Magenta
        "RESET": "\033[0m",  # Reset
    }

    def format(self, record: logging.LogRecord) -> str:
        color = self.COLORS.get(record.levelname, self.COLORS["RESET"])
        reset = self.COLORS["RESET"]

        formatted = super().format(record)

        # Colour only the level name, not the message
        if record.levelname in formatted:
            formatted = formatted.replace(
                record.levelname, f"{color}{record.levelname}{reset}", 1
            )

        return formatted


class CSVFormatter(logging.Formatter):
    """CSV-safe formatter for file logging."""

    def format(self, record: logging.LogRecord) -> str:
        timestamp = self.formatTime(record, self.datefmt)
        level = record.levelname.ljust(8)
        duration = f"{int(record.relativeCreated)} ms"
        module = record.name
        line_no = str(record.lineno)
        message = record.getMessage()

        # Standard CSV quote escaping
        message = message.replace('"', '""')

        return f'"{timestamp}";{level};"{duration}";"{module}";"{line_no}";"{message}"'


def setup_logging(
    settings: Optional["ToolSettings"] = None,
    verbose: bool = False,
    stream: Optional[TextIO] = None,
) -> None:
    """
    Setup logging with console and optional file handlers.

    Args:
        settings: ToolSettings instance for logging configuration; defaults
            apply when omitted (INFO, coloured, no file)
        verbose: Force DEBUG on the console regardless of settings
        stream: Console stream (default: stderr, keeping stdout for output)
    """
    console_level = settings.console_log_level if settings else "INFO"
    use_colors = settings.console_use_colors if settings else True
    file_enabled = settings.file_logging if settings else False
    if verbose:
        console_level = "DEBUG"

    root_logger = logging.getLogger()
    root_logger.setLevel(logging.DEBUG)

    maptool_logger = logging.getLogger("maptool")
    maptool_logger.setLevel(logging.DEBUG)

    # Clear any existing handlers
    root_logger.handlers.clear()

    console_stream = stream or sys.stderr
    if use_colors and console_stream.isatty():
        console_formatter: logging.Formatter = ColoredFormatter(
            fmt=CONSOLE_FORMAT, datefmt=CONSOLE_DATEFMT
        )
    else:
        console_formatter = logging.Formatter(fmt=CONSOLE_FORMAT, datefmt=CONSOLE_DATEFMT)

    console_handler = logging.StreamHandler(console_stream)
    console_handler.setLevel(getattr(logging, console_level.upper(), logging.INFO))
    console_handler.setFormatter(console_formatter)
    root_logger.addHandler(console_handler)

    # File handler with rotation - only if enabled
    log_path = None
    if file_enabled and settings is not None:
        try:
            log_path = settings.log_file_path
            log_path.parent.mkdir(parents=True, exist_ok=True)

            file_handler = logging.handlers.RotatingFileHandler(
                log_path,
                maxBytes=10 * 1024 * 1024,  # 10MB
                backupCount=5,
                encoding="utf-8",
            )
            file_handler.setLevel(logging.DEBUG)
            file_handler.setFormatter(CSVFormatter(datefmt="%Y-%m-%d %H:%M:%S"))
            root_logger.addHandler(file_handler)
        except OSError as e:
            # Console logging still works without the file
            root_logger.warning(f"Could not setup file logging: {e}")
            log_path = None

    # Suppress DEBUG logs from noisy libraries
    logging.getLogger("PIL").setLevel(logging.INFO)
    logging.getLogger("PIL.PngImagePlugin").setLevel(logging.INFO)

    logger = logging.getLogger(__name__)
    logger.debug(f"Console logging: {console_level} (colors: {use_colors})")
    if log_path:
        logger.debug(f"File logging: DEBUG at {log_path}")
