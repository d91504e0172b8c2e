from __future__ import annotations

import logging
from io import StringIO

import microchip_update.logging.init as log_init
from microchip_update.logging.init import (
    LOGGER_NAME,
    SUMMARY_LEVEL,
    LabeledFormatter,
    get_logger,
    log_summary,
    reset_logging,
    set_debug,
    setup_logging,
)


def test_setup_logging_creates_logger_with_labeled_formatter():
    """Test that setup_logging creates a logger with labeled format."""
    logger = setup_logging()

    assert logger.name == LOGGER_NAME
    assert logger.level == logging.INFO
    assert len(logger.handlers) == 1
    assert isinstance(logger.handlers[0], logging.StreamHandler)
    assert isinstance(logger.handlers[0].formatter, LabeledFormatter)
    assert logger.propagate is False


def test_setup_logging_is_idempotent():
    first = setup_logging()
    second = setup_logging()
    assert first is second
    assert len(second.handlers) == 1


def test_logging_labeled_prefixes():
    """Test that logging outputs have correct labeled prefixes (INFO|WARN|ERROR|SUMMARY)."""
    captured_output = StringIO()

    logger = logging.getLogger("test_microchip_update")
    logger.setLevel(logging.INFO)
    for handler in logger.handlers[:]:
        logger.removeHandler(handler)
    logging.addLevelName(SUMMARY_LEVEL, "SUMMARY")

    handler = logging.StreamHandler(captured_output)
    handler.setFormatter(LabeledFormatter())
    logger.addHandler(handler)
    logger.propagate = False

    logger.info("Test info message")
    logger.warning("Test warning message")
    logger.error("Test error message")
    logger.log(SUMMARY_LEVEL, "Test summary message")

    lines = captured_output.getvalue().strip().split("\n")
    assert lines == [
        "INFO Test info message",
        "WARN Test warning message",
        "ERROR Test error message",
        "SUMMARY Test summary message",
    ]


def test_child_loggers_reach_the_app_handler(capsys):
    setup_logging()
    logging.getLogger(f"{LOGGER_NAME}.services.snapshot").info("Read 3 rows from dir.csv")
    assert "INFO Read 3 rows from dir.csv" in capsys.readouterr().out


def test_get_logger_configures_on_first_use():
    assert log_init._logger is None
    logger = get_logger()
    assert logger is setup_logging()


def test_log_summary(capsys):
    setup_logging()
    log_summary("old_dogs=1 new_dogs=2")
    assert capsys.readouterr().out == "SUMMARY old_dogs=1 new_dogs=2\n"


def test_debug_hidden_until_set_debug(capsys):
    logger = setup_logging()
    logger.debug("hidden")
    set_debug(logger)
    logger.debug("shown")
    out = capsys.readouterr().out
    assert "hidden" not in out
    assert "DEBUG shown" in out


def test_reset_logging_removes_handlers():
    logger = setup_logging()
    reset_logging()
    assert log_init._logger is None
    assert logger.handlers == []
