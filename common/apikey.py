# SPDX-FileCopyrightText: 2024 Swiss Confederation
#
# SPDX-License-Identifier: MIT

import secrets

from fastapi import Security, HTTPException, status
from fastapi.security import APIKeyHeader

from common import config


def require_api_key(conf: config.inject, api_key: str = Security(APIKeyHeader(name="x-api-key", auto_error=False))) -> None:
    """Guards routes which may only be called through the authenticating gateway"""
    if api_key is None or not secrets.compare_digest(api_key.encode(), conf.api_key.encode()):
        raise HTTPException(status_code=status.HTTP_401_UNAUTHORIZED, detail="Invalid or missing API Key")
