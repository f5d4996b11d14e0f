# SPDX-FileCopyrightText: 2024 Swiss Confederation
#
# SPDX-License-Identifier: MIT

import logging
import sys

from asgi_correlation_id import CorrelationIdFilter, correlation_id

from common.config import Config
from common.logging import splunk

_correlation_id_length = 16

_console_handler: logging.Handler | None = None
"""Handler installed by the last call of `configure_logging`"""


def get_log_id() -> str:
    """Correlation id of the current request, empty outside of a request"""
    return (correlation_id.get() or "")[:_correlation_id_length]


def _create_console_handler(config: Config) -> logging.Handler:
    console_handler = logging.StreamHandler(stream=sys.stdout)
    # Add correlation id to all records passing the handler
    console_handler.addFilter(CorrelationIdFilter(uuid_length=_correlation_id_length))
    if config.enable_splunk_log:
        console_handler.setFormatter(splunk.SplunkFormatter(defaults={"app_name": config.app_name}))
    return console_handler


def configure_logging(config: Config) -> None:
    """
    Routes all known loggers to a single stdout handler.
    Calling it again replaces the handler of the previous call.
    """
    global _console_handler
    previous_handler = _console_handler
    _console_handler = _create_console_handler(config)

    root = logging.getLogger()
    if previous_handler is not None:
        root.removeHandler(previous_handler)
    root.addHandler(_console_handler)
    root.setLevel(config.log_level)

    # uvicorn & co. bring their own handlers, replace them so every line has the same format
    for logger in logging.root.manager.loggerDict.values():
        if isinstance(logger, logging.Logger) and logger.handlers:
            logger.handlers = [_console_handler]
            logger.propagate = False
