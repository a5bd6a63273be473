"""
Logging setup for the forcelayout package logger.

Library modules only create `logging.getLogger(__name__)` loggers; nothing
is printed until an application (a demo, a notebook) calls setup_logging.
Lifecycle events (start, stop, convergence, reset) are logged at INFO,
ignored node ids at DEBUG.
"""
from pathlib import Path
from typing import Optional, Union
import logging
import sys

PACKAGE_LOGGER = "forcelayout"
LOG_FORMAT = '%(asctime)s - %(name)s - %(levelname)s - %(message)s'
DATE_FORMAT = '%H:%M:%S'


def _resolve_level(level: Union[int, str]) -> int:
    if isinstance(level, str):
        resolved = logging.getLevelName(level.upper())
        if not isinstance(resolved, int):
            raise ValueError(f"Unknown logging level: {level!r}")
        return resolved
    return level


def setup_logging(
    level: Union[int, str] = logging.INFO,
    log_file: Optional[Union[str, Path]] = None,
) -> logging.Logger:
    """
    Configure the 'forcelayout' logger.

    Calling it again replaces the previous handlers.

    Args:
        level: Level number or name ("DEBUG", "info", ...)
        log_file: Optional file to also write to; parent directories are
                  created and the file is truncated.

    Returns:
        The configured package logger
    """
    level = _resolve_level(level)
    logger = logging.getLogger(PACKAGE_LOGGER)
    logger.setLevel(level)

    for handler in list(logger.handlers):
        logger.removeHandler(handler)
        handler.close()

    formatter = logging.Formatter(LOG_FORMAT, datefmt=DATE_FORMAT)
    handlers: list[logging.Handler] = [logging.StreamHandler(sys.stdout)]

    if log_file is not None:
        log_file = Path(log_file)
        log_file.parent.mkdir(parents=True, exist_ok=True)
        handlers.append(logging.FileHandler(log_file, mode='w', encoding='utf-8'))

    for handler in handlers:
        handler.setLevel(level)
        handler.setFormatter(formatter)
        logger.addHandler(handler)

    logger.debug("Logging initialized (level=%s, file=%s)", logging.getLevelName(level), log_file)
    return logger
