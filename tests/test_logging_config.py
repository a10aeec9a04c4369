import logging

import pytest

from tile_renderer.logging_config import LOG_LEVEL_ENV_VAR, get_logger, setup_logging


@pytest.fixture(autouse=True)
def restore_logging():
    yield
    logger = logging.getLogger("tile_renderer")
    for handler in logger.handlers:
        handler.close()
    logger.handlers.clear()


@pytest.mark.parametrize("verbosity, level", [
    (2, logging.DEBUG),
    (1, logging.DEBUG),
    (0, logging.INFO),
    (-1, logging.WARNING),
    (-2, logging.ERROR),
])
def test_verbosity_levels(monkeypatch, verbosity, level):
    monkeypatch.delenv(LOG_LEVEL_ENV_VAR, raising=False)

    setup_logging(verbosity=verbosity)

    assert logging.getLogger("tile_renderer").level == level


def test_environment_overrides_verbosity(monkeypatch):
    monkeypatch.setenv(LOG_LEVEL_ENV_VAR, "error")

    setup_logging(verbosity=1)

    assert logging.getLogger("tile_renderer").level == logging.ERROR


def test_repeated_setup_does_not_duplicate_handlers():
    setup_logging()
    setup_logging()
    assert len(logging.getLogger("tile_renderer").handlers) == 1


def test_log_file_receives_debug(tmp_path, monkeypatch):
    monkeypatch.delenv(LOG_LEVEL_ENV_VAR, raising=False)
    log_file = tmp_path / "tiles.log"

    setup_logging(verbosity=1, log_file=str(log_file))
    get_logger("tile_renderer.tests").debug("fitted viewport")
    for handler in logging.getLogger("tile_renderer").handlers:
        handler.flush()

    assert "fitted viewport" in log_file.read_text()


def test_get_logger_returns_named_logger():
    logger = get_logger("tile_renderer.rendering.surface")
    assert logger is logging.getLogger("tile_renderer.rendering.surface")
