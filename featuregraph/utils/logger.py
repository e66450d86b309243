"""Logging setup shared by all featuregraph modules"""
import logging
import os
import sys

from colorama import Fore, Style

PACKAGE_LOGGER = "featuregraph"
LOG_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"

LEVEL_COLORS = {
    logging.DEBUG: Fore.CYAN,
    logging.INFO: Fore.GREEN,
    logging.WARNING: Fore.YELLOW,
    logging.ERROR: Fore.RED,
    logging.CRITICAL: Fore.RED + Style.BRIGHT,
}


class ColoredFormatter(logging.Formatter):
    """Formatter that colours the whole record by level"""

    def format(self, record: logging.LogRecord) -> str:
        message = super().format(record)
        color = LEVEL_COLORS.get(record.levelno)
        if color:
            return f"{color}{message}{Style.RESET_ALL}"
        return message


def _package_logger() -> logging.Logger:
    logger = logging.getLogger(PACKAGE_LOGGER)
    if not logger.handlers:
        handler = logging.StreamHandler(sys.stderr)
        handler.setFormatter(ColoredFormatter(LOG_FORMAT))
        logger.addHandler(handler)
        logger.setLevel(os.environ.get("FEATURE_GRAPH_LOG_LEVEL", "WARNING").upper())
    return logger


def setup_logger(name: str) -> logging.Logger:
    """Return a logger that writes through the package handler"""
    _package_logger()
    if name != PACKAGE_LOGGER and not name.startswith(f"{PACKAGE_LOGGER}."):
        name = f"{PACKAGE_LOGGER}.{name}"
    return logging.getLogger(name)


def set_level(level) -> None:
    """Change the level of every featuregraph logger at once"""
    _package_logger().setLevel(level)
