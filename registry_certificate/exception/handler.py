# SPDX-FileCopyrightText: 2024 Swiss Confederation
#
# SPDX-License-Identifier: MIT

import logging

from fastapi import Request, FastAPI
from fastapi.responses import JSONResponse
from fastapi.exceptions import RequestValidationError

from .registry_errors import RegistryError, InvalidArgumentError

_logger = logging.getLogger(__name__)


def configure_exception_handlers(app: FastAPI) -> None:
    """
    Configure exception handlers on the FastAPI app instance rendering registry errors.
    Changed 422 Unprocessable Entity to 400 Bad Request (invalid_argument)

    Args:
        app (FastAPI): the instance to configure the handlers for.
    """

    @app.exception_handler(RegistryError)
    async def registry_exception_handler(request: Request, exc: RegistryError):
        # Create a resonse based on the configured fields
        content_builder = {}

        # Include all required fields
        for field_name in exc._fields:
            content_builder[field_name] = getattr(exc, field_name)

        # Include all optional fields with a value which is not None
        for field_name in exc._optional_fields:
            if getattr(exc, field_name, None) is not None:
                content_builder[field_name] = getattr(exc, field_name)

        _logger.info(f"Registry error {exc.status_code=} {content_builder}")
        return JSONResponse(
            status_code=exc.status_code,
            headers=exc.headers,
            content=content_builder,
        )

    @app.exception_handler(RequestValidationError)
    async def invalid_argument_exception_handler(request: Request, exc: RequestValidationError):
        """
        Recasts Validation Errors to invalid_argument registry errors
        """
        wrapper_exception = InvalidArgumentError(f"Details: {exc.errors()}")
        return await registry_exception_handler(request, wrapper_exception)
