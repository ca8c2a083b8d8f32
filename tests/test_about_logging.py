import contextlib
import logging
from typing import Iterator

import pytest

import tinct_about
import tinct_colorengine
import tinct_colormaps
from tinct_colorengine import ColorScienceConstants
from tinct_logging import (
    ENGINE_LOGGERS,
    LOG_FORMAT,
    resolve_level,
    set_engine_log_level,
    setup_default_logging,
)


def test_metadata_summary():
    meta = tinct_about.metadata_summary()
    assert meta["title"] == "Tinct"
    assert meta["version"] == tinct_about.__version__
    assert meta["license"] == "LGPL-3.0-or-later"


def test_version_is_reexported():
    assert tinct_colormaps.__version__ == tinct_about.__version__


@contextlib.contextmanager
def bare_root() -> Iterator[logging.Logger]:
    """
    Empty the root logger for the duration of a test body.

    pytest attaches its capture handlers when the test call starts, so this
    runs inside the test rather than as a fixture. The handler list is
    cleared and restored in place; pytest removes its own handlers from it
    afterwards.
    """
    root = logging.getLogger()
    handlers = root.handlers[:]
    level = root.level
    engine_levels = {name: logging.getLogger(name).level for name in ENGINE_LOGGERS}
    root.handlers.clear()
    try:
        yield root
    finally:
        root.handlers[:] = handlers
        root.setLevel(level)
        for name, lvl in engine_levels.items():
            logging.getLogger(name).setLevel(lvl)


@pytest.mark.parametrize("level, expected", [
    ("debug", logging.DEBUG),
    ("WARNING", logging.WARNING),
    (logging.ERROR, logging.ERROR),
    ("nonsense", logging.INFO),
])
def test_setup_default_logging_configures_root(level, expected):
    with bare_root() as root:
        assert setup_default_logging(level) is True
        assert root.level == expected
        assert len(root.handlers) == 1
        assert root.handlers[0].formatter._fmt == LOG_FORMAT


def test_setup_default_logging_custom_format():
    with bare_root() as root:
        assert setup_default_logging("INFO", fmt="%(name)s %(message)s")
        assert root.handlers[0].formatter._fmt == "%(name)s %(message)s"


def test_setup_default_logging_respects_existing_handlers():
    with bare_root() as root:
        handler = logging.NullHandler()
        root.addHandler(handler)
        root.setLevel(logging.CRITICAL)
        assert setup_default_logging("DEBUG") is False
        assert root.handlers == [handler]
        assert root.level == logging.CRITICAL


def test_engine_level_applies_with_existing_handlers():
    with bare_root() as root:
        root.addHandler(logging.NullHandler())
        assert setup_default_logging("WARNING", engine_level="debug") is False
        for name in ENGINE_LOGGERS:
            assert logging.getLogger(name).level == logging.DEBUG


def test_engine_level_is_separate_from_root():
    with bare_root() as root:
        setup_default_logging("WARNING", engine_level=logging.DEBUG)
        assert root.level == logging.WARNING
        assert logging.getLogger("tinct_colormaps").getEffectiveLevel() == logging.DEBUG
        assert logging.getLogger("tinct_profile").getEffectiveLevel() == logging.WARNING


@pytest.mark.parametrize("level, expected", [
    ("info", logging.INFO),
    ("Error", logging.ERROR),
    (15, 15),
    ("basicConfig", logging.INFO),
    ("", logging.INFO),
])
def test_resolve_level(level, expected):
    assert resolve_level(level) == expected


def test_set_engine_log_level_returns_numeric_level():
    with bare_root():
        assert set_engine_log_level("error") == logging.ERROR
        assert logging.getLogger("tinct_colorengine").level == logging.ERROR


def test_engine_loggers_match_modules():
    assert set(ENGINE_LOGGERS) == {tinct_colorengine.logger.name, tinct_colormaps.logger.name}


def test_colorengine_logs_at_debug(caplog):
    with caplog.at_level(logging.DEBUG, logger="tinct_colorengine"):
        ColorScienceConstants.from_white_point((95.5, 100.0, 107.5))
        tinct_colorengine.set_strict_ieee(True)
        tinct_colorengine.set_strict_ieee(False)
    messages = [r.getMessage() for r in caplog.records if r.name == "tinct_colorengine"]
    assert any(m.startswith("white point (95.5, 100.0, 107.5)") for m in messages)
    assert "strict IEEE kernels on" in messages
    assert "strict IEEE kernels off" in messages
