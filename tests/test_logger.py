"""Logger setup."""

import logging

from core.logger import LogContext, setup_logger


class TestSetupLogger:
    def test_idempotent_handlers(self):
        first = setup_logger("roi_engine.test_idempotent")
        second = setup_logger("roi_engine.test_idempotent")
        assert first is second
        assert len(second.handlers) == len(first.handlers)

    def test_level_from_environment(self, monkeypatch):
        monkeypatch.setenv("ROI_ENGINE_LOG_LEVEL", "DEBUG")
        logger = setup_logger("roi_engine.test_env_level")
        assert logger.level == logging.DEBUG

    def test_explicit_level_wins(self, monkeypatch):
        monkeypatch.setenv("ROI_ENGINE_LOG_LEVEL", "DEBUG")
        logger = setup_logger("roi_engine.test_explicit_level", level=logging.WARNING)
        assert logger.level == logging.WARNING


class TestLogContext:
    def test_logs_start_and_finish(self, caplog):
        logger = setup_logger("roi_engine.test_context", level=logging.DEBUG)
        logger.propagate = True
        with caplog.at_level(logging.DEBUG, logger="roi_engine.test_context"):
            with LogContext(logger, "unit of work"):
                pass
        text = caplog.text
        assert "unit of work" in text
