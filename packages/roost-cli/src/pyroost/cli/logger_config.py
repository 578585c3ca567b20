import logging
import sys
from pathlib import Path
from typing import Optional

from .config import LOG_LEVEL

LOG_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"


def level_for(name: str) -> int:
    level = logging.getLevelName(str(name).upper())
    if not isinstance(level, int):
        raise ValueError(f"unknown log level '{name}'")
    return level


def _logs_to(root_logger: logging.Logger, log_file: Path) -> bool:
    target = str(log_file.resolve())
    return any(
        isinstance(handler, logging.FileHandler) and handler.baseFilename == target
        for handler in root_logger.handlers
    )


def setup_logging(level: Optional[str] = None, log_file: Optional[Path] = None):
    """
    Configure the root logger.

    A stderr handler is attached only when the root logger has none yet.
    ``log_file`` (truncated on start) is always attached, once per file.
    An explicit ``level`` always applies; unknown names raise ValueError.
    """
    root_logger = logging.getLogger()
    formatter = logging.Formatter(fmt=LOG_FORMAT, datefmt="%Y-%m-%d %H:%M:%S")

    if level:
        root_logger.setLevel(level_for(level))
    elif not root_logger.handlers:
        root_logger.setLevel(level_for(LOG_LEVEL))

    if log_file is not None:
        if not _logs_to(root_logger, log_file):
            log_file.parent.mkdir(parents=True, exist_ok=True)
            file_handler = logging.FileHandler(log_file, mode="w", encoding="utf-8")
            file_handler.setFormatter(formatter)
            root_logger.addHandler(file_handler)
    elif not root_logger.handlers:
        handler = logging.StreamHandler(sys.stderr)
        handler.setFormatter(formatter)
        root_logger.addHandler(handler)

    return root_logger
