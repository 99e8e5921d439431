import logging
import os
import sys
from logging import Formatter, StreamHandler, getLogger
from logging.handlers import RotatingFileHandler
from logging import DEBUG, INFO, WARNING, ERROR, CRITICAL

from openai_images.config import LOG_LEVEL

class ColourFormatter(Formatter):
    """Custom formatter with colored output for different log levels."""

    LEVEL_COLOURS = [
        (DEBUG, "\x1b[40;1m"),
        (INFO, "\x1b[34;1m"),
        (WARNING, "\x1b[33;1m"),
        (ERROR, "\x1b[31m"),
        (CRITICAL, "\x1b[41m"),
    ]

    FORMATS = {
        level: Formatter(
            f"\x1b[30;1m%(asctime)s\x1b[0m {colour}%(levelname)-8s\x1b[0m "
            f"\x1b[35m%(name)s\x1b[0m %(message)s",
            "%H:%M:%S",
        )
        for level, colour in LEVEL_COLOURS
    }

    def format(self, record):
        formatter = self.FORMATS.get(record.levelno, self.FORMATS[DEBUG])
        return formatter.format(record)

class PlainFormatter(Formatter):
    """Formatter without colors, for files and non-terminal streams."""

    def __init__(self):
        super().__init__(
            "%(asctime)s %(levelname)-8s %(name)s %(message)s (%(filename)s:%(lineno)d)",
            "%Y-%m-%d %H:%M:%S"
        )

def setup_logging(level=None, log_file_path=None, max_file_size=10*1024*1024, backup_count=5, stream=None):
    """
    Set up logging for an application using the images client.

    The library itself never calls this; it only creates module loggers.

    Args:
        level (str): Logging level name, defaults to LOG_LEVEL from config
        log_file_path (str): Optional path of a rotating log file
        max_file_size (int): Maximum size of log file before rotation (default 10MB)
        backup_count (int): Number of backup files to keep
        stream: Console stream, defaults to sys.stderr

    Returns:
        logging.Logger: The configured root logger
    """
    level = level or LOG_LEVEL
    stream = stream or sys.stderr

    handlers = []

    console_handler = StreamHandler(stream)
    if hasattr(stream, "isatty") and stream.isatty():
        console_handler.setFormatter(ColourFormatter())
    else:
        console_handler.setFormatter(PlainFormatter())
    handlers.append(console_handler)

    if log_file_path:
        log_dir = os.path.dirname(log_file_path)
        if log_dir:
            os.makedirs(log_dir, exist_ok=True)

        file_handler = RotatingFileHandler(
            log_file_path,
            maxBytes=max_file_size,
            backupCount=backup_count
        )
        file_handler.setFormatter(PlainFormatter())
        handlers.append(file_handler)

    logging.basicConfig(
        level=getattr(logging, level.upper(), logging.INFO),
        handlers=handlers,
        force=True  # Override any existing configuration
    )

    return logging.getLogger()

def get_logger(name=None):
    """
    Get a module logger.

    Args:
        name (str): Logger name (typically __name__ from the calling module)

    Returns:
        logging.Logger: Logger that propagates to the application's handlers
    """
    logger = getLogger(name)

    # Library loggers stay silent unless the application configures logging
    if name and name.split(".")[0] == "openai_images" and not logging.getLogger("openai_images").handlers:
        logging.getLogger("openai_images").addHandler(logging.NullHandler())

    return logger
