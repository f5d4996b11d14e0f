# SPDX-FileCopyrightText: 2024 Swiss Confederation
#
# SPDX-License-Identifier: MIT

"""
Environment configuration shared by the services, injected with FastAPI dependencies.
Values are read when the config object is created, so tests can override them per instance.
"""

import os
from typing import Annotated

from fastapi import Depends

from common.parsing import interpret_as_bool


def _flag(name: str, default: bool) -> bool:
    return interpret_as_bool(os.getenv(name, str(default)))


class Config:
    def __init__(self):
        self.enable_debug_mode: bool = _flag("ENABLE_DEBUG_MODE", False)
        '''Turns on the developer conveniences below unless they are set explicitly.'''

        self.api_key: str = os.getenv("API_KEY", "tergum_dev_key")
        '''Key the gateway presents in the x-api-key header on state changing requests.'''

        self.app_name: str = os.getenv("APP_NAME", "anonymous")
        '''Title of the OpenAPI document and "app" of every splunk log line'''
        self.log_level: str = os.getenv("LOG_LEVEL", "INFO").upper()
        self.enable_splunk_log: bool = _flag("ENABLE_SPLUNK_LOG", not self.enable_debug_mode)
        '''JSON log lines for splunk, plain text lines in debug mode.'''

        self.enable_documentation_endpoints: bool = _flag("ENABLE_DOCUMENTATION_ENDPOINTS", self.enable_debug_mode)
        '''/docs, /redoc & /openapi.json'''

        self.external_url: str | None = os.getenv("EXTERNAL_URL")
        self.enable_cors: bool = _flag("ENABLE_CORS", self.enable_debug_mode)
        self.additional_allowed_origins: list[str] = [origin for origin in os.getenv("ADDITIONAL_ALLOWED_ORIGINS", "").split(",") if origin]
        '''Allowed in addition to EXTERNAL_URL when CORS is enabled, comma separated'''

    @property
    def allowed_origins(self) -> list[str]:
        """Origins for CORS; any origin if no external url is known."""
        return [self.external_url or "*"] + self.additional_allowed_origins


inject = Annotated[Config, Depends(Config)]


class DBConfig:
    def __init__(self):
        self.connection_url: str = os.getenv("DB_CONNECTION", "postgresql://reg:supersecret@db_certificate/registry")
        self.schema: str = os.getenv("DB_SCHEMA", "certificate_registry")
        '''Postgres schema holding the tables, created if missing'''
        component = os.getenv("COMPONENT", "registry_certificate")
        self.alembic_config_file: str = f"{component}/alembic.ini"
        '''Relative to the working directory, the migrations are expected in an alembic folder next to it'''


inject_db_config = Annotated[DBConfig, Depends(DBConfig)]
