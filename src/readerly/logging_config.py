"""Colored logging configuration for the readerly CLI."""

import logging
import re
import sys

RESET = "\033[0m"
BOLD = "\033[1m"

LEVEL_COLORS = {
    "DEBUG": "\033[36m",      # Cyan
    "INFO": "\033[32m",       # Green
    "WARNING": "\033[33m",    # Yellow
    "ERROR": "\033[31m",      # Red
    "CRITICAL": "\033[35m",   # Magenta
}

# Bracketed prefixes the library puts at the start of its messages
PREFIX_COLORS = {
    "FETCH": "\033[96m",      # Bright Cyan
    "EXTRACT": "\033[97m",    # Bright White
    "CLEAN": "\033[93m",      # Bright Yellow
    "CLI": "\033[94m",        # Bright Blue
}

_PREFIX = re.compile(r"^\[(%s)\]" % "|".join(PREFIX_COLORS))


class ColoredFormatter(logging.Formatter):
    """Logging formatter that colors the level name and the message prefix."""

    def format(self, record: logging.LogRecord) -> str:
        original_levelname = record.levelname
        original_msg = record.msg

        record.levelname = f"{LEVEL_COLORS.get(record.levelname, '')}{record.levelname:<7}{RESET}"
        if isinstance(record.msg, str):
            record.msg = _PREFIX.sub(
                lambda m: f"{PREFIX_COLORS[m.group(1)]}{BOLD}{m.group(0)}{RESET}", record.msg
            )

        try:
            return super().format(record)
        finally:
            record.levelname = original_levelname
            record.msg = original_msg


def setup_colored_logging(verbose: bool = False) -> None:
    """Configure colored logging for the CLI.

    Logs go to stderr so extracted content on stdout stays pipeable.

    Args:
        verbose: If True, set log level to DEBUG. Otherwise WARNING.
    """
    handler = logging.StreamHandler(sys.stderr)
    handler.setFormatter(ColoredFormatter(fmt="%(asctime)s %(levelname)s %(message)s", datefmt="%H:%M:%S"))

    root_logger = logging.getLogger()
    root_logger.setLevel(logging.DEBUG if verbose else logging.WARNING)
    for existing_handler in root_logger.handlers[:]:
        root_logger.removeHandler(existing_handler)
    root_logger.addHandler(handler)

    logging.getLogger("httpx").setLevel(logging.WARNING)
    logging.getLogger("httpcore").setLevel(logging.WARNING)
