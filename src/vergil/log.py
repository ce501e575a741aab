"""Logging setup. Modules log through get_logger(__name__); programs call configure_log
once at start-up to write everything to a log file."""

from enum import Enum
from pathlib import Path
import logging

ROOT_LOGGER_NAME = "vergil"
LOG_FORMAT = "(%(asctime)s) [%(levelname)s] %(message)s"
DATE_FORMAT = "%Y-%m-%d %H:%M:%S"


class Severity(Enum):
    """Severity of log messages and problems."""

    INFO = logging.INFO
    DEBUG = logging.DEBUG
    WARNING = logging.WARNING
    SEVERE = logging.ERROR

    @property
    def level(self) -> int:
        return self.value


def get_logger(name: str) -> logging.Logger:
    """Get a logger below the vergil root logger.

    Args:
        name (str): Logger name (typically __name__).

    Returns:
        logging.Logger: The logger.
    """
    if name != ROOT_LOGGER_NAME and not name.startswith(f"{ROOT_LOGGER_NAME}."):
        name = f"{ROOT_LOGGER_NAME}.{name}"
    return logging.getLogger(name)


def configure_log(
    path: str | Path, level: int = logging.INFO, name: str = ROOT_LOGGER_NAME
) -> logging.Logger:
    """Write the records of a logger (and its children) to a file.

    Calling this repeatedly with the same path doesn't add further handlers.

    Args:
        path (str | Path): The log file. Parent directories are created if missing.
        level (int, optional): Minimum level to log. Defaults to logging.INFO.
        name (str, optional): Name of the logger to configure.
            Defaults to "vergil".

    Returns:
        logging.Logger: The configured logger.
    """
    path = Path(path).resolve()
    logger = logging.getLogger(name)
    logger.setLevel(level)

    for handler in logger.handlers:
        if isinstance(handler, logging.FileHandler) and Path(handler.baseFilename) == path:
            handler.setLevel(level)
            return logger

    path.parent.mkdir(parents=True, exist_ok=True)
    handler = logging.FileHandler(path, encoding="utf-8")
    handler.setLevel(level)
    handler.setFormatter(logging.Formatter(LOG_FORMAT, datefmt=DATE_FORMAT))
    logger.addHandler(handler)
    return logger


def close_log(name: str = ROOT_LOGGER_NAME) -> None:
    """Flush and detach all file handlers of a logger."""
    logger = logging.getLogger(name)
    for handler in list(logger.handlers):
        if isinstance(handler, logging.FileHandler):
            handler.close()
            logger.removeHandler(handler)
