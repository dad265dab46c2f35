"""Logger setup shared by the smartlink modules.

Log lines go to stderr by default: the linkify CLI writes the rewritten
article to stdout and the two streams must not mix.
"""

from __future__ import annotations

import logging
import sys
from typing import TextIO, Union

LOG_FORMAT = "%(asctime)s [%(levelname)s] %(name)s: %(message)s"
DATE_FORMAT = "%Y-%m-%d %H:%M:%S"


def resolve_level(level: Union[int, str]) -> int:
    """Turn "debug"/"INFO"/logging.WARNING into a logging level number.

    Unknown names fall back to INFO, matching the `log_level` default in
    config/settings.yaml.
    """
    if isinstance(level, int):
        return level
    value = getattr(logging, level.strip().upper(), None)
    return value if isinstance(value, int) else logging.INFO


def setup_logging(
    level: Union[int, str] = logging.INFO,
    module_name: str = "smartlink",
    stream: TextIO | None = None,
) -> logging.Logger:
    """Return a named logger with one stream handler attached.

    Calling it again for the same name returns the existing logger
    untouched.

    Args:
        level: Level number or name, e.g. settings.log_level.
        module_name: Name for the logger instance.
        stream: Handler stream (default stderr).
    """
    logger = logging.getLogger(module_name)

    if logger.handlers:
        return logger

    resolved = resolve_level(level)
    logger.setLevel(resolved)

    handler = logging.StreamHandler(stream or sys.stderr)
    handler.setLevel(resolved)
    handler.setFormatter(logging.Formatter(fmt=LOG_FORMAT, datefmt=DATE_FORMAT))
    logger.addHandler(handler)

    return logger
