"""
Logging configuration tests.
"""
import logging
from logging.handlers import RotatingFileHandler

import pytest

from hms_console.core.config import settings
from hms_console.core.logging import configure_logging


@pytest.fixture
def bare_root_logger():
    root = logging.getLogger()
    saved_handlers, saved_level = root.handlers[:], root.level
    root.handlers = []
    yield root
    for handler in root.handlers:
        handler.close()
    root.handlers = saved_handlers
    root.setLevel(saved_level)


class TestConfigureLogging:
    def test_writes_to_configured_path(self, bare_root_logger, tmp_path):
        log_path = tmp_path / "logs" / "console.log"
        configure_logging(log_path, "DEBUG")

        file_handlers = [h for h in bare_root_logger.handlers if isinstance(h, RotatingFileHandler)]
        assert len(file_handlers) == 1
        assert file_handlers[0].baseFilename == str(log_path)
        assert bare_root_logger.level == logging.DEBUG

    def test_configures_once(self, bare_root_logger, tmp_path):
        configure_logging(tmp_path / "a.log")
        configure_logging(tmp_path / "b.log")
        assert len(bare_root_logger.handlers) == 2
        assert not (tmp_path / "b.log").exists()

    def test_default_path_lives_in_data_dir(self):
        assert settings.log_path == settings.data_dir / "console.log"
