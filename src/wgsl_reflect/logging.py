# ===-----------------------------------------------------------------------===#
# Distributed under the 3-Clause BSD License. See accompanying file LICENSE or
# copy at https://opensource.org/licenses/BSD-3-Clause.
# SPDX-License-Identifier: BSD-3-Clause
# ===-----------------------------------------------------------------------===#

"""Logging utilities for wgsl_reflect.

Library modules only call :func:`get_logger`; handlers are installed by the
CLI through :func:`configure_logging`.
"""

from __future__ import annotations

import logging
import os
import sys
from typing import Optional

from rich.console import Console
from rich.logging import RichHandler

_LOGGER_NAME = "wgsl_reflect"

__all__ = [
    "get_logger",
    "configure_logging",
    "wants_color",
]


def get_logger() -> logging.Logger:
    return logging.getLogger(_LOGGER_NAME)


def wants_color(mode: str = "auto", stream=None) -> bool:
    """Decide whether to colorize output for ``mode`` (auto|always|never)."""
    mode = (mode or "auto").lower()
    if mode == "never":
        return False
    if mode == "always":
        return True
    if os.environ.get("NO_COLOR") is not None:
        return False
    stream = stream or sys.stderr
    return bool(getattr(stream, "isatty", lambda: False)())


def configure_logging(
    verbosity: int = 1, *, use_color: Optional[bool] = None
) -> logging.Logger:
    """Install a single handler on the package logger.

    verbosity: 0 = errors only, 1 = warnings, 2 = info, 3+ = debug.
    """
    logger = get_logger()
    if verbosity <= 0:
        level = logging.ERROR
    elif verbosity == 1:
        level = logging.WARNING
    elif verbosity == 2:
        level = logging.INFO
    else:
        level = logging.DEBUG
    logger.setLevel(level)

    for h in list(logger.handlers):
        logger.removeHandler(h)

    if use_color is None:
        use_color = wants_color()

    handler: logging.Handler
    if use_color:
        handler = RichHandler(
            console=Console(stderr=True, highlight=False),
            show_time=False,
            show_path=False,
        )
        handler.setFormatter(logging.Formatter("%(message)s"))
    else:
        handler = logging.StreamHandler(sys.stderr)
        handler.setFormatter(logging.Formatter("[%(levelname)s] %(message)s"))
    logger.addHandler(handler)
    return logger
