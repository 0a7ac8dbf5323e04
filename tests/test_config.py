"""Tests for settings and logging setup."""

import importlib
import logging

import settings
from logging_config import setup_logging


class TestSettings:
    def test_defaults(self, monkeypatch):
        for name in ("RT_WORKERS", "RT_MAX_DEPTH", "RT_QUEUE_SIZE", "RT_TAICHI_ARCH"):
            monkeypatch.delenv(name, raising=False)
        importlib.reload(settings)
        assert settings.WORKERS == 8
        assert settings.MAX_DEPTH == 5
        assert settings.QUEUE_SIZE == 1024
        assert settings.TAICHI_ARCH == "cpu"

    def test_environment_overrides(self, monkeypatch):
        monkeypatch.setenv("RT_WORKERS", "3")
        monkeypatch.setenv("RT_MAX_DEPTH", "2")
        importlib.reload(settings)
        try:
            assert settings.WORKERS == 3
            assert settings.MAX_DEPTH == 2
        finally:
            monkeypatch.undo()
            importlib.reload(settings)


class TestSetupLogging:
    def test_level_and_single_handler(self):
        logger = setup_logging("rt-test", level="DEBUG")
        setup_logging("rt-test", level="DEBUG")
        assert logger.level == logging.DEBUG
        assert len(logger.handlers) == 1

    def test_unknown_level_falls_back_to_info(self):
        assert setup_logging("rt-test-fallback", level="chatty").level == logging.INFO

    def test_log_file(self, tmp_path):
        log_file = tmp_path / "logs" / "render.log"
        logger = setup_logging("rt-test-file", level="INFO", log_file=log_file)
        logger.info("hello")
        for handler in logger.handlers:
            handler.flush()
        assert "hello" in log_file.read_text()
        for handler in list(logger.handlers):
            logger.removeHandler(handler)
            handler.close()
