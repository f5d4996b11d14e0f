# SPDX-FileCopyrightText: 2024 Swiss Confederation
#
# SPDX-License-Identifier: MIT

"""
Splunk compatible log output.

Every record is rendered as a single line JSON object. Records whose message is a
`SplunkExtendedLogEntry` additionally contribute their fields as top level keys,
so they can be searched for in splunk directly.
"""

import json
import logging
import datetime
from enum import Enum

from pydantic import BaseModel


def _plain(value: object) -> object:
    if isinstance(value, Enum):
        return value.value
    if isinstance(value, (str, int, float, bool)) or value is None:
        return value
    return str(value)


class SplunkExtendedLogEntry(BaseModel):
    """Log message carrying additional, structured fields."""

    message: str

    def log_fields(self) -> dict[str, object]:
        """All fields except the message which are set."""
        return {key: _plain(value) for key, value in iter(self) if key != "message" and value is not None}

    def __str__(self) -> str:
        fields = " ".join(f"{key}={value}" for key, value in self.log_fields().items())
        return f"{self.message} {fields}" if fields else self.message


class SplunkFormatter(logging.Formatter):
    """Formats records as JSON with the keys expected by the splunk index."""

    def __init__(self, defaults: dict[str, str] | None = None) -> None:
        super().__init__()
        self._defaults = defaults or {}

    def _attribute(self, record: logging.LogRecord, name: str) -> object:
        value = getattr(record, name, None)
        return value if value is not None else self._defaults.get(name)

    def formatTime(self, record: logging.LogRecord, datefmt: str | None = None) -> str:
        # eg. 2024-02-07T14:38:19.565+01:00
        timestamp = datetime.datetime.fromtimestamp(record.created).astimezone()
        return timestamp.isoformat(timespec="milliseconds")

    def format(self, record: logging.LogRecord) -> str:
        data: dict[str, object] = {
            "@timestamp": self.formatTime(record),
            "level": record.levelname,
            "message": record.getMessage(),
            "app": self._attribute(record, "app_name"),
            "hash": self._attribute(record, "correlation_id"),
            "logger": record.name,
        }
        if isinstance(record.msg, SplunkExtendedLogEntry):
            data.update(record.msg.log_fields())
        if record.exc_info:
            data["exception"] = self.formatException(record.exc_info)
        return json.dumps(data)
