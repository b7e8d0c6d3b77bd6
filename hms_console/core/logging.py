import logging
from logging.handlers import RotatingFileHandler
from pathlib import Path

from hms_console.core.config import settings


def configure_logging(log_path: Path | None = None, level: str | None = None) -> None:
    """Attach console and rotating-file handlers to the root logger once."""
    root_logger = logging.getLogger()
    if root_logger.handlers:
        return

    log_path = log_path or settings.log_path
    log_path.parent.mkdir(parents=True, exist_ok=True)
    root_logger.setLevel(level or settings.log_level)

    formatter = logging.Formatter(
        "%(asctime)s | %(levelname)s | %(name)s | %(message)s"
    )

    console_handler = logging.StreamHandler()
    console_handler.setFormatter(formatter)

    file_handler = RotatingFileHandler(log_path, maxBytes=1_000_000, backupCount=3, encoding="utf-8")
    file_handler.setFormatter(formatter)

    root_logger.addHandler(console_handler)
    root_logger.addHandler(file_handler)
