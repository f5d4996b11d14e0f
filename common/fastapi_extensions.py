# SPDX-FileCopyrightText: 2024 Swiss Confederation
#
# SPDX-License-Identifier: MIT

import logging
import contextlib
from typing import Type

from fastapi import FastAPI, Request, status
from fastapi.responses import JSONResponse
from fastapi.middleware.cors import CORSMiddleware
from asgi_correlation_id import CorrelationIdMiddleware

from common.logging.setup import configure_logging, get_log_id
from common.model.exception import ErrorResponse
from common.version import get_version
from common import config as conf

_logger = logging.getLogger(__name__)


@contextlib.asynccontextmanager
async def _lifespan(app: "ExtendedFastAPI"):
    configure_logging(app.config_instance)
    _logger.info(f"Starting {app.title} {app.version}")
    yield


class ExtendedFastAPI(FastAPI):
    """
    FastAPI app set up from the service config.

     - Documentation endpoints only if enabled
     - App name and build version as OpenAPI title and version
     - Logging configured at startup
     - Correlation id per request, returned in the X-Request-ID header
     - CORS if enabled
     - Unexpected exceptions answered with a 500 naming the correlation id
    """

    def __init__(self, config: Type[conf.Config], *args, **kwargs) -> None:
        self.config_instance = config()

        if not self.config_instance.enable_documentation_endpoints:
            kwargs.update(docs_url=None, redoc_url=None, openapi_url=None)
        kwargs.setdefault("title", self.config_instance.app_name)
        kwargs.setdefault("version", get_version())
        kwargs.setdefault("lifespan", _lifespan)
        super().__init__(*args, **kwargs)

        if self.config_instance.enable_cors:
            self.add_middleware(
                CORSMiddleware,
                allow_origins=self.config_instance.allowed_origins,
                allow_credentials=True,
                allow_methods=["*"],
                allow_headers=["*"],
            )
        self.add_middleware(CorrelationIdMiddleware)
        self.add_exception_handler(Exception, self.unhandled_exception_handler)

    async def unhandled_exception_handler(self, request: Request, exc: Exception) -> JSONResponse:
        # the traceback itself is logged by starlette
        _logger.error(f"Unhandled {type(exc).__name__} on {request.method} {request.url.path}")
        body = ErrorResponse(
            error="internal_error",
            error_description="Could not process the request",
            additional_error_description=f"Please contact support with request id {get_log_id()}",
        )
        return JSONResponse(status_code=status.HTTP_500_INTERNAL_SERVER_ERROR, content=body.model_dump())
