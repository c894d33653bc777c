import logging
import sys
import os
from typing import Optional

LOG_FORMAT = "[%(asctime)s] [%(name)-30s] [%(levelname)-8s] %(message)s"
ITEM_LOG_FORMAT = "[%(asctime)s] [%(item)-30s] [%(levelname)-8s] %(message)s"
DATE_FORMAT = "%Y-%m-%d %H:%M:%S"


class ItemContextFilter(logging.Filter):
    """Fills in the ``item`` field for records logged outside an item context."""

    def filter(self, record):
        if not hasattr(record, 'item'):
            record.item = "SYSTEM"
        return True


def _level_from_verbosity(verbosity_level: int) -> int:
    """
    Verbosity levels:
    0 (default): WARNING
    1 (-v):      INFO
    2+ (-vv...): DEBUG
    """
    if verbosity_level <= 0:
        return logging.WARNING
    elif verbosity_level == 1:
        return logging.INFO
    return logging.DEBUG


def setup_main_logging(verbosity_level: int = 0, log_file: Optional[str] = None):
    """
    Configures the root logger for a host application using qres.
    Logs to the console and, if ``log_file`` is given, to that file.

    Returns:
        Tuple[int, Optional[str]]: The applied log level and the log file path.
    """
    log_level = _level_from_verbosity(verbosity_level)

    handlers = [logging.StreamHandler(sys.stdout)]
    if log_file:
        log_dir = os.path.dirname(log_file)
        if log_dir:
            os.makedirs(log_dir, exist_ok=True)
        handlers.append(logging.FileHandler(log_file))

    logging.basicConfig(
        level=log_level,
        format=LOG_FORMAT,
        datefmt=DATE_FORMAT,
        handlers=handlers,
        force=True,
    )

    # numpy reports RuntimeWarnings through the warnings module
    logging.captureWarnings(True)
    logging.getLogger("numpy").setLevel(logging.WARNING)

    logging.getLogger(__name__).info(
        f"Main logger configured. Level: {logging.getLevelName(log_level)}. Log file: {log_file}"
    )
    return log_level, log_file


def initialize_item_logger(log_level: int, log_file: Optional[str] = None):
    """
    Configures the dedicated "qres.items" logger whose records carry the
    identifier of the analysed failure mode or characteristic.
    """
    formatter = logging.Formatter(ITEM_LOG_FORMAT, DATE_FORMAT)
    context_filter = ItemContextFilter()

    handlers = []
    ch = logging.StreamHandler(sys.stdout)
    ch.setFormatter(formatter)
    ch.addFilter(context_filter)
    handlers.append(ch)

    if log_file:
        fh = logging.FileHandler(log_file)
        fh.setFormatter(formatter)
        fh.addFilter(context_filter)
        handlers.append(fh)

    logger = logging.getLogger("qres.items")
    logger.setLevel(log_level)
    logger.propagate = False
    logger.handlers = []  # Clear existing handlers if any
    for h in handlers:
        logger.addHandler(h)

    return logger


def get_item_logger(item_id: str):
    """
    Returns a LoggerAdapter that injects the item identifier into log records.
    Uses the "qres.items" logger configured by initialize_item_logger.
    """
    logger = logging.getLogger("qres.items")
    return logging.LoggerAdapter(logger, {"item": item_id})
