# tests/test_logging_config.py
import logging
import pytest

from qres.services.logging_config import (
    setup_main_logging,
    initialize_item_logger,
    get_item_logger,
    ItemContextFilter,
)


@pytest.fixture
def restore_logging():
    """Put root and item loggers back the way the test found them."""
    root = logging.getLogger()
    items = logging.getLogger("qres.items")
    saved = (root.level, list(root.handlers), items.level, list(items.handlers), items.propagate)
    yield
    for h in root.handlers:
        if h not in saved[1]:
            h.close()
    for h in items.handlers:
        h.close()
    root.setLevel(saved[0])
    root.handlers = saved[1]
    items.setLevel(saved[2])
    items.handlers = saved[3]
    items.propagate = saved[4]


@pytest.mark.parametrize("verbosity, expected", [
    (0, logging.WARNING),
    (1, logging.INFO),
    (2, logging.DEBUG),
    (5, logging.DEBUG),
])
def test_verbosity_mapping(restore_logging, verbosity, expected):
    level, log_file = setup_main_logging(verbosity)
    assert level == expected
    assert log_file is None
    assert logging.getLogger().level == expected


def test_log_file_created(restore_logging, tmp_path):
    log_file = tmp_path / "logs" / "qres.log"
    setup_main_logging(1, str(log_file))
    logging.getLogger("qres.test").info("hello")
    for h in logging.getLogger().handlers:
        h.flush()
    assert log_file.exists()
    assert "hello" in log_file.read_text()


def test_item_logger_writes_item_id(restore_logging, tmp_path):
    log_file = tmp_path / "items.log"
    initialize_item_logger(logging.DEBUG, str(log_file))

    get_item_logger("FM-17").warning("check ratings")
    logging.getLogger("qres.items").info("no context")
    for h in logging.getLogger("qres.items").handlers:
        h.flush()

    text = log_file.read_text()
    assert "FM-17" in text
    assert "check ratings" in text
    assert "SYSTEM" in text


def test_get_item_logger_adapter():
    adapter = get_item_logger("FM-3")
    assert isinstance(adapter, logging.LoggerAdapter)
    assert adapter.extra == {"item": "FM-3"}
    assert adapter.logger.name == "qres.items"


def test_item_context_filter_default():
    record = logging.LogRecord("x", logging.INFO, __file__, 1, "msg", None, None)
    assert ItemContextFilter().filter(record) is True
    assert record.item == "SYSTEM"
