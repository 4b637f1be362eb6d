"""Tests for logging setup and its environment switches."""
import logging

import pytest

from streetgallery.logging_config import ROOT_LOGGER, level_from_env, setup_logging


@pytest.fixture
def app_logger():
    logger = logging.getLogger(ROOT_LOGGER)
    yield logger
    for handler in list(logger.handlers):
        handler.close()
        logger.removeHandler(handler)
    logger.setLevel(logging.NOTSET)


class TestLevelFromEnv:
    def test_default_is_info(self):
        assert level_from_env({}) == logging.INFO

    def test_debug_flag_wins(self):
        assert level_from_env({"STREETGALLERY_DEBUG": "1", "STREETGALLERY_LOG_LEVEL": "ERROR"}) == logging.DEBUG

    def test_level_name(self):
        assert level_from_env({"STREETGALLERY_LOG_LEVEL": "warning"}) == logging.WARNING

    def test_unknown_level_name_falls_back(self):
        assert level_from_env({"STREETGALLERY_LOG_LEVEL": "chatty"}) == logging.INFO


class TestSetupLogging:
    def test_repeated_setup_does_not_duplicate_handlers(self, tmp_path, app_logger):
        log_file = tmp_path / "app.log"

        setup_logging(level=logging.DEBUG, log_file=str(log_file), environ={}, capture_qt=False)
        setup_logging(level=logging.DEBUG, log_file=str(log_file), environ={}, capture_qt=False)

        assert app_logger.level == logging.DEBUG
        assert len(app_logger.handlers) == 2

    def test_log_file_from_environment(self, tmp_path, app_logger):
        log_file = tmp_path / "env.log"

        setup_logging(environ={"STREETGALLERY_LOG_FILE": str(log_file), "STREETGALLERY_DEBUG": "1"},
                      capture_qt=False)
        logging.getLogger(f"{ROOT_LOGGER}.test").debug("hello")
        for handler in app_logger.handlers:
            handler.flush()

        assert app_logger.level == logging.DEBUG
        assert "hello" in log_file.read_text(encoding="utf-8")

    def test_explicit_level_overrides_environment(self, app_logger):
        setup_logging(level=logging.ERROR, environ={"STREETGALLERY_DEBUG": "1"}, capture_qt=False)
        assert app_logger.level == logging.ERROR
