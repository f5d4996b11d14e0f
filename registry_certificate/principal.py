# SPDX-FileCopyrightText: 2024 Swiss Confederation
#
# SPDX-License-Identifier: MIT

"""
Identification of the calling principal.

The registry sits behind a gateway authenticating the principals. The gateway passes the
address of the authenticated principal in the x-caller-address header and proves itself with the api key.
"""

from typing import Annotated

from fastapi import Security
from fastapi.security import APIKeyHeader

from common import parsing
from registry_certificate.exception.registry_errors import AuthorizationError

CALLER_HEADER = "x-caller-address"


def require_caller(caller_address: str | None = Security(APIKeyHeader(name=CALLER_HEADER, scheme_name="CallerAddress", auto_error=False))) -> str:
    """Normalized address of the caller, raises an AuthorizationError if not provided"""
    if not caller_address:
        raise AuthorizationError(f"Missing {CALLER_HEADER} header")
    try:
        return parsing.normalize_address(caller_address)
    except ValueError:
        raise AuthorizationError(f"Malformed {CALLER_HEADER} header")


inject_caller = Annotated[str, Security(require_caller)]
