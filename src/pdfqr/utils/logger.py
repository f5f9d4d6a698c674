import logging
from logging.handlers import RotatingFileHandler
from pathlib import Path
from typing import Optional, Union

from pdfqr.info.config import ReaderSettings

LOG_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"
MAX_LOG_BYTES = 10 * 1024 * 1024
LOG_BACKUP_COUNT = 5

_HANDLER_MARK = "_pdfqr_handler"


def setup_logging(log_file: Optional[Union[str, Path]] = None, level: Union[int, str] = "INFO") -> logging.Logger:
    """
    Attach console (and optionally rotating file) handlers to the ``pdfqr`` logger.

    Calling it again replaces the handlers installed by a previous call.

    Args:
        log_file: Optional path of a log file; its directory is created if missing
        level: Logging level name or number

    Returns:
        logging.Logger: the configured package logger
    """
    logger = logging.getLogger("pdfqr")
    if isinstance(level, str):
        name = level.upper()
        level = logging.getLevelName(name)
        if not isinstance(level, int):
            raise ValueError(f"Unknown logging level: {name}")
    logger.setLevel(level)

    for handler in list(logger.handlers):
        if getattr(handler, _HANDLER_MARK, False):
            logger.removeHandler(handler)
            handler.close()

    formatter = logging.Formatter(LOG_FORMAT)
    handlers = [logging.StreamHandler()]
    if log_file:
        path = Path(log_file)
        path.parent.mkdir(parents=True, exist_ok=True)
        handlers.append(
            RotatingFileHandler(path, maxBytes=MAX_LOG_BYTES, backupCount=LOG_BACKUP_COUNT, encoding="utf-8")
        )

    for handler in handlers:
        handler.setFormatter(formatter)
        setattr(handler, _HANDLER_MARK, True)
        logger.addHandler(handler)

    return logger


def configure_logging(settings: ReaderSettings) -> logging.Logger:
    """Apply the log file and level held in ``settings``."""
    return setup_logging(settings.log_file, settings.log_level)
