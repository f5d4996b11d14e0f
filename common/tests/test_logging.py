# SPDX-FileCopyrightText: 2024 Swiss Confederation
#
# SPDX-License-Identifier: MIT

import re
import json
import logging
from enum import Enum

import pytest

from common.logging import setup as log_setup, splunk
from common import config as conf

# Expected format: 2024-02-07T14:38:19.565+01:00
_TIMESTAMP_PATTERN = r"[0-9]{4}-[0-9]{2}-[0-9]{2}T[0-9]{2}:[0-9]{2}:[0-9]{2}\.[0-9]{3}[+-][0-9]{2}:[0-9]{2}"


class _Color(Enum):
    red = "RED"


class _ExtendedEntry(splunk.SplunkExtendedLogEntry):
    color: _Color
    count: int
    comment: str | None = None


@pytest.fixture()
def formatted_caplog(caplog):
    caplog.handler.setFormatter(splunk.SplunkFormatter(defaults={"app_name": "test_app", "correlation_id": "test"}))
    return caplog


def _parse_single_record(caplog) -> dict[str, object]:
    assert len(caplog.records) == 1
    data = json.loads(caplog.text)
    assert data["hash"] == "test"
    assert data["app"] == "test_app"
    assert re.fullmatch(_TIMESTAMP_PATTERN, data["@timestamp"]), data["@timestamp"]
    return data


@pytest.mark.parametrize("level", ["ERROR", "WARNING", "INFO", "DEBUG"])
def test_formatter(formatted_caplog, level: str):
    logger = logging.getLogger(f"{__name__}_test_formatter")
    with formatted_caplog.at_level("DEBUG"):
        logger.log(getattr(logging, level), f"{level} message for testing")
    data = _parse_single_record(formatted_caplog)
    assert data["message"] == f"{level} message for testing"
    assert data["level"] == level
    assert data["logger"] == logger.name


def test_extended_entry_fields(formatted_caplog):
    entry = _ExtendedEntry(message="Counted", color=_Color.red, count=3)
    assert str(entry) == "Counted color=RED count=3"

    with formatted_caplog.at_level("INFO"):
        logging.getLogger(f"{__name__}_test_extended").info(entry)
    data = _parse_single_record(formatted_caplog)
    assert data["message"] == "Counted color=RED count=3"
    assert data["color"] == "RED"
    assert data["count"] == 3
    # Unset optional fields are neither in the message nor in the structured data
    assert "comment" not in data


def test_exception_formatter(formatted_caplog):
    with formatted_caplog.at_level("DEBUG"):
        try:
            raise ValueError("Test")
        except ValueError:
            logging.getLogger(f"{__name__}_test_exception").exception("Test message")
    data = _parse_single_record(formatted_caplog)
    assert data["level"] == "ERROR"
    assert "Traceback" in data["exception"]
    assert "ValueError: Test" in data["exception"]


def test_missing_correlation_id():
    assert log_setup.get_log_id() == ""


def test_configure_logging_replaces_handler():
    app_config = conf.Config()
    app_config.app_name = "Logging Test"
    app_config.enable_splunk_log = True
    app_config.log_level = "INFO"
    root = logging.getLogger()
    original_level = root.level
    try:
        log_setup.configure_logging(app_config)
        first_handler = log_setup._console_handler
        log_setup.configure_logging(app_config)
        assert first_handler not in root.handlers
        assert log_setup._console_handler in root.handlers
        assert isinstance(log_setup._console_handler.formatter, splunk.SplunkFormatter)
    finally:
        root.removeHandler(log_setup._console_handler)
        root.setLevel(original_level)
