import logging

from tzsource.utils.logging import setup_logging
from tzsource.utils.messages import MessagePaneHandler, capture_messages


def test_capture_messages_collects_warnings_and_errors():
    logger = logging.getLogger("tzsource.ingest.test")
    with capture_messages() as pane:
        logger.info("listing opened")
        logger.warning("slow mirror %s", "tz.example.com")
        logger.error("listing failed")

    messages = pane.messages()
    assert [message.level for message in messages] == ["WARNING", "ERROR"]
    assert messages[0].message == "slow mirror tz.example.com"
    assert messages[0].logger == "tzsource.ingest.test"
    assert not messages[0].is_error
    assert messages[1].is_error
    assert str(messages[1]) == "ERROR: listing failed"


def test_capture_messages_detaches_handler_on_exit():
    logger = logging.getLogger("tzsource")
    with capture_messages() as pane:
        assert pane in logger.handlers
    assert pane not in logger.handlers

    logging.getLogger("tzsource.catalog").error("after the pass")
    assert pane.messages() == []


def test_capture_messages_ignores_other_loggers():
    with capture_messages() as pane:
        logging.getLogger("httpx").error("not ours")
    assert pane.messages() == []


def test_pane_keeps_most_recent_messages():
    handler = MessagePaneHandler(capacity=2)
    logger = logging.getLogger("tzsource.catalog.test")
    logger.addHandler(handler)
    try:
        for index in range(3):
            logger.warning("warning %d", index)
    finally:
        logger.removeHandler(handler)

    assert [message.message for message in handler.messages()] == ["warning 1", "warning 2"]


def test_setup_logging_attaches_single_stream_handler():
    logger = setup_logging(level="DEBUG")
    again = setup_logging()

    assert again is logger
    assert len(logger.handlers) == 1
    assert type(logger.handlers[0]) is logging.StreamHandler
    assert logger.level == logging.DEBUG
    assert not logger.propagate


def test_pane_still_collects_after_setup_logging():
    setup_logging(level="WARNING")
    with capture_messages() as pane:
        logging.getLogger("tzsource.ingest.discovery").warning("Failed to close listing stream")
    assert [message.level for message in pane.messages()] == ["WARNING"]
