"""Logging configuration for the content index builder.

Every module asks for a child of the ``content_index`` logger, so a single
call at CLI start-up controls verbosity for the whole build.
"""

from __future__ import annotations

import logging
import sys
from typing import TextIO

ROOT_LOGGER_NAME = "content_index"


def setup_logging(
    level: int = logging.INFO,
    module_name: str = ROOT_LOGGER_NAME,
    stream: TextIO | None = None,
) -> logging.Logger:
    """Configure and return a logger with consistent formatting.

    Only the root ``content_index`` logger gets a handler; module loggers
    (``content_index.builder`` etc.) propagate to it. Calling again with a
    different level re-levels the existing handler instead of stacking a
    second one.

    Args:
        level: Logging level (default INFO).
        module_name: Dotted name below ``content_index`` or the root name.
        stream: Output stream (default stdout).

    Returns:
        Configured logger.
    """
    if module_name != ROOT_LOGGER_NAME and not module_name.startswith(ROOT_LOGGER_NAME + "."):
        module_name = f"{ROOT_LOGGER_NAME}.{module_name}"

    root = logging.getLogger(ROOT_LOGGER_NAME)
    root.setLevel(level)

    if root.handlers:
        for handler in root.handlers:
            handler.setLevel(level)
    else:
        handler = logging.StreamHandler(stream or sys.stdout)
        handler.setLevel(level)
        handler.setFormatter(logging.Formatter(
            fmt="%(asctime)s [%(levelname)s] %(name)s: %(message)s",
            datefmt="%Y-%m-%d %H:%M:%S",
        ))
        root.addHandler(handler)

    return logging.getLogger(module_name)
