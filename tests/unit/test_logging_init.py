from __future__ import annotations

import logging
from io import StringIO
from unittest.mock import patch

import inventory_compliance.logging.init as log_init
from inventory_compliance.logging.error_log import ErrorLogBuffer
from inventory_compliance.logging.init import (
    LabeledFormatter,
    get_logger,
    log_summary,
    set_debug,
    setup_logging,
)
from inventory_compliance.models.error_record import ErrorRecord


def _capture(logger_name: str) -> tuple[logging.Logger, StringIO]:
    captured_output = StringIO()
    logger = logging.getLogger(logger_name)
    logger.setLevel(logging.INFO)
    for handler in logger.handlers[:]:
        logger.removeHandler(handler)
    handler = logging.StreamHandler(captured_output)
    handler.setLevel(logging.INFO)
    handler.setFormatter(LabeledFormatter())
    logger.addHandler(handler)
    logger.propagate = False
    return logger, captured_output


def test_setup_logging_creates_logger_with_labeled_formatter():
    """setup_logging creates the package logger with one labeled stdout handler."""
    logger = setup_logging()

    assert logger.name == "inventory_compliance"
    assert logger.level == logging.INFO
    assert len(logger.handlers) == 1

    handler = logger.handlers[0]
    assert isinstance(handler, logging.StreamHandler)
    assert isinstance(handler.formatter, LabeledFormatter)


def test_logging_labeled_prefixes():
    """Log lines carry the INFO|WARN|ERROR|SUMMARY labels."""
    logging.addLevelName(25, "SUMMARY")
    logger, captured_output = _capture("test_inventory_compliance")

    logger.info("Test info message")
    logger.warning("Test warning message")
    logger.error("Test error message")
    logger.log(25, "Test summary message")

    lines = captured_output.getvalue().strip().split("\n")
    assert lines == [
        "INFO Test info message",
        "WARN Test warning message",
        "ERROR Test error message",
        "SUMMARY Test summary message",
    ]


def test_get_logger_returns_configured_logger():
    setup_logger = setup_logging()
    logger = get_logger()
    assert logger is setup_logger
    assert logger.name == "inventory_compliance"


def test_setup_logging_idempotent():
    """Calling setup_logging twice returns the same logger without extra handlers."""
    logger1 = setup_logging()
    logger2 = setup_logging()
    assert logger1 is logger2
    assert len(logger1.handlers) == 1


def test_module_loggers_propagate_to_package_logger():
    """Library modules log through logging.getLogger(__name__)."""
    logger, captured_output = _capture("inventory_compliance")
    log_init._logger = logger

    logging.getLogger("inventory_compliance.services.orchestrator").warning("errors recorded")

    assert captured_output.getvalue().strip() == "WARN errors recorded"


def test_set_debug_lowers_levels():
    logger = setup_logging()
    set_debug(True)
    assert logger.level == logging.DEBUG
    assert all(h.level == logging.DEBUG for h in logger.handlers)
    set_debug(False)
    assert logger.level == logging.INFO


def test_error_log_buffer_integration():
    """Logger and error buffer work side by side."""
    logger = setup_logging()
    error_buffer = ErrorLogBuffer()
    error_buffer.append(ErrorRecord.create("test.xlsx", "Hoja1", 1, "processor", "CLASSIFICATION_ERROR", "boom"))
    assert len(error_buffer) == 1
    logger.info("Analysing test.xlsx")


def test_logging_with_progress_bar_disabled():
    with patch("sys.stdout.isatty", return_value=False):
        logger = setup_logging()
        logger.info("Test message when not TTY")
        assert logger.level == logging.INFO


def test_log_summary_convenience_function():
    """log_summary writes one SUMMARY line through the package logger."""
    logging.addLevelName(25, "SUMMARY")
    logger, captured_output = _capture("inventory_compliance")
    log_init._logger = logger

    log_summary("files=2/2 success=2 failed=0 rows=150 passing=120 failing=30 compliance_rate=80 elapsed_sec=2.5")

    lines = captured_output.getvalue().strip().split("\n")
    assert lines == [
        "SUMMARY files=2/2 success=2 failed=0 rows=150 passing=120 failing=30 compliance_rate=80 elapsed_sec=2.5"
    ]
