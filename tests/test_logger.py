import logging
import logging.handlers

import pytest

from capitalflow.core.logger import PACKAGE_LOGGER, get_logger, setup_logger


@pytest.fixture(autouse=True)
def fresh_package_logger():
    logger = logging.getLogger(PACKAGE_LOGGER)
    saved = (logger.handlers[:], logger.level)
    logger.handlers = []
    yield logger
    for handler in logger.handlers:
        handler.close()
    logger.handlers, logger.level = saved[0], saved[1]


class TestSetupLogger:
    def test_console_only_by_default(self):
        logger = setup_logger("debug")
        assert logger.level == logging.DEBUG
        assert len(logger.handlers) == 1
        assert isinstance(logger.handlers[0], logging.StreamHandler)

    def test_second_call_changes_level_not_handlers(self):
        setup_logger("INFO")
        logger = setup_logger(logging.WARNING)
        assert logger.level == logging.WARNING
        assert len(logger.handlers) == 1

    def test_file_handler_with_log_dir(self, tmp_path):
        logger = setup_logger("INFO", log_dir=str(tmp_path / "logs"))
        file_handlers = [h for h in logger.handlers if isinstance(h, logging.handlers.TimedRotatingFileHandler)]
        assert len(file_handlers) == 1
        assert (tmp_path / "logs" / "capitalflow.log").exists()

    def test_module_loggers_propagate_to_package(self):
        setup_logger("INFO")
        assert get_logger("capitalflow.pipeline").parent is logging.getLogger(PACKAGE_LOGGER)
