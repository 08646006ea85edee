import logging
from pathlib import Path

LOG_FORMAT = "%(asctime)s - %(filename)s - %(lineno)d - %(levelname)s - %(message)s"


def _logger() -> logging.Logger:
    return logging.getLogger("minitodo")


def configure(log_level: int | str, *, log_file: Path | None, logger: logging.Logger) -> None:
    """
    Route log records to a file.

    curses owns the terminal while the app runs, so nothing may go to stderr.
    The file is only created once the first record is written.
    """
    logger.setLevel(log_level)
    for handler in list(logger.handlers):
        logger.removeHandler(handler)
        handler.close()

    if log_file is None:
        logger.addHandler(logging.NullHandler())
    else:
        handler = logging.FileHandler(log_file, delay=True, encoding="utf-8")
        handler.setFormatter(logging.Formatter(LOG_FORMAT))
        logger.addHandler(handler)

    # Keep records away from the root logger's stderr handler
    logger.propagate = False


logger = _logger()
