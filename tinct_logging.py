# -*- coding: utf-8 -*-
"""
Tinct: Perceptual colormaps for scientific visualization
Copyright (c) 2026 opticsWolf

SPDX-License-Identifier: LGPL-3.0-or-later

Logging setup for front-ends.

The engine modules log through ``logging.getLogger(__name__)`` and never
attach handlers. A command-line tool or GUI that embeds the engine calls
:func:`setup_default_logging` once at startup, and may raise or lower the
engine's own verbosity separately with :func:`set_engine_log_level`
(e.g. DEBUG records for every generated colormap while the rest of the
application stays at INFO).
"""

from __future__ import annotations

import logging
from typing import Final, Optional, Tuple, Union

__all__ = [
    "ENGINE_LOGGERS",
    "LOG_FORMAT",
    "resolve_level",
    "set_engine_log_level",
    "setup_default_logging",
]

LOG_FORMAT: Final[str] = "%(asctime)s [%(levelname)s] %(name)s: %(message)s"

# Loggers of the modules that emit records.
ENGINE_LOGGERS: Final[Tuple[str, ...]] = ("tinct_colorengine", "tinct_colormaps")

logger = logging.getLogger(__name__)


def resolve_level(level: Union[int, str]) -> int:
    """Numeric level for a name ("debug", "WARNING", ...) or number; unknown names give INFO."""
    if isinstance(level, str):
        value = getattr(logging, level.upper(), None)
        return value if isinstance(value, int) else logging.INFO
    return int(level)


def set_engine_log_level(level: Union[int, str]) -> int:
    """Set the level of every engine logger and return the numeric level."""
    lvl = resolve_level(level)
    for name in ENGINE_LOGGERS:
        logging.getLogger(name).setLevel(lvl)
    return lvl


def setup_default_logging(
    level: Union[int, str] = "INFO",
    *,
    fmt: str = LOG_FORMAT,
    engine_level: Optional[Union[int, str]] = None,
) -> bool:
    """
    Configure the root logger once.

    The root logger is left alone if it already has handlers (the
    application configured logging itself); ``engine_level`` is applied
    in either case.

    Args:
        level: Root level, as a name or number.
        fmt: Format string for the root handler.
        engine_level: Optional separate level for :data:`ENGINE_LOGGERS`.

    Returns:
        True if a root handler was installed, False if one already existed.
    """
    lvl = resolve_level(level)
    if engine_level is not None:
        set_engine_log_level(engine_level)

    root = logging.getLogger()
    if root.handlers:
        return False
    logging.basicConfig(level=lvl, format=fmt)
    logger.debug("root logging configured at %s", logging.getLevelName(lvl))
    return True
