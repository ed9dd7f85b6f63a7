# tests/test_logging_config.py
import io
import logging

from backend.logging_config import LOGGER_NAME, SensitiveDataFilter, get_logger, setup_logging


def _record(msg, *args):
    return logging.LogRecord("t", logging.INFO, __file__, 1, msg, args, None)


def test_masks_card_numbers_and_tokens():
    f = SensitiveDataFilter()
    record = _record("card %s cvv=123 header Bearer abc.def.ghi", "4242 4242 4242 4242")
    f.filter(record)
    text = record.getMessage()
    assert "4242" not in text
    assert "123" not in text
    assert "abc.def.ghi" not in text


def test_leaves_short_numbers_alone():
    f = SensitiveDataFilter()
    record = _record("card ending %s saved for user %s", "4242", "user-1")
    f.filter(record)
    assert record.getMessage() == "card ending 4242 saved for user user-1"


def test_setup_logging_is_idempotent():
    stream = io.StringIO()
    setup_logging("DEBUG", stream=stream)
    setup_logging("DEBUG", stream=stream)

    root = logging.getLogger(LOGGER_NAME)
    assert len([h for h in root.handlers if h.get_name() == "lendbridge-stream"]) == 1
    assert root.level == logging.DEBUG


def test_child_loggers_share_the_handler():
    assert get_logger("backend.cards").name == f"{LOGGER_NAME}.backend.cards"
    assert get_logger().name == LOGGER_NAME
