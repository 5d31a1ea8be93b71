import logging
from logging.handlers import RotatingFileHandler
import os
from typing import Optional

from raumbuchung.config import settings

CONSOLE_FORMAT = '%(levelname)s - %(message)s'
FILE_FORMAT = '%(asctime)s - %(name)s - %(levelname)s - %(message)s'


def _console_handler() -> logging.Handler:
    handler = logging.StreamHandler()
    handler.setLevel(logging.DEBUG if settings.debug else logging.INFO)
    handler.setFormatter(logging.Formatter(CONSOLE_FORMAT))
    return handler


def _file_handler(log_dir: str) -> logging.Handler:
    os.makedirs(log_dir, exist_ok=True)
    handler = RotatingFileHandler(
        os.path.join(log_dir, "app.log"),
        maxBytes=settings.log_file_max_bytes,
        backupCount=settings.log_backup_count,
        encoding="utf-8",
    )
    handler.setLevel(logging.INFO)
    handler.setFormatter(logging.Formatter(FILE_FORMAT))
    return handler


def setup_logging(log_dir: Optional[str] = None) -> logging.Logger:
    """
    Konsole + rotierende Datei für alle "raumbuchung.*" Logger.
    Mehrfacher Aufruf (z.B. Reload, Tests) fügt keine Handler doppelt hinzu.
    """
    logger = logging.getLogger("raumbuchung")
    logger.setLevel(logging.DEBUG)
    if logger.handlers:
        return logger

    logger.addHandler(_console_handler())
    logger.addHandler(_file_handler(log_dir or settings.log_dir))
    return logger
