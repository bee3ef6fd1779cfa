"""Tests for logging configuration."""

import io
import logging

import pytest

from finrecon.logging_setup import LOG_LEVEL_ENV, PACKAGE_LOGGER_NAME, configure_logging, parse_level


def test_parse_level_names_and_numbers():
    assert parse_level("debug") == logging.DEBUG
    assert parse_level(" Info ") == logging.INFO
    assert parse_level("15") == 15
    assert parse_level(logging.ERROR) == logging.ERROR


def test_parse_level_defaults_to_environment(monkeypatch):
    monkeypatch.delenv(LOG_LEVEL_ENV, raising=False)
    assert parse_level(None) == logging.WARNING

    monkeypatch.setenv(LOG_LEVEL_ENV, "DEBUG")
    assert parse_level(None) == logging.DEBUG


def test_parse_level_rejects_unknown_names():
    with pytest.raises(ValueError, match="Unknown log level"):
        parse_level("chatty")


def test_configure_logging_replaces_previous_handler():
    first, second = io.StringIO(), io.StringIO()

    configure_logging("INFO", stream=first)
    logger = configure_logging("INFO", stream=second, fmt="%(levelname)s %(message)s")
    logging.getLogger(f"{PACKAGE_LOGGER_NAME}.domain.report").info("assembled")

    assert logger.name == PACKAGE_LOGGER_NAME
    assert first.getvalue() == ""
    assert second.getvalue() == "INFO assembled\n"
    stream_handlers = [h for h in logger.handlers if not isinstance(h, logging.NullHandler)]
    assert len(stream_handlers) == 1


def test_configure_logging_respects_level():
    stream = io.StringIO()

    configure_logging("WARNING", stream=stream)
    logging.getLogger(f"{PACKAGE_LOGGER_NAME}.domain").info("quiet")

    assert stream.getvalue() == ""
