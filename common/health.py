# SPDX-FileCopyrightText: 2024 Swiss Confederation
#
# SPDX-License-Identifier: MIT

"""
Health probes `/health/debug`, `/health/liveness` and `/health/readiness`.

Services add readiness checks by subclassing `ReadinessHealthResponse` with one
`HealthStatus` field per check and `HealthAPIRouter.readiness_checks` returning them.
"""

import logging
from enum import Enum

from pydantic import BaseModel
from sqlalchemy import text
from sqlalchemy.orm import Session
import sqlalchemy.exc
from fastapi import APIRouter, Response, status

import common.config as conf
import common.db.postgres as db
from common.version import get_version

_logger = logging.getLogger(__name__)


class HealthStatus(Enum):
    healthy = "HEALTHY"
    unhealthy = "UNHEALTHY"

    @classmethod
    def of(cls, ok: bool) -> "HealthStatus":
        return cls.healthy if ok else cls.unhealthy


class HealthResponse(BaseModel):
    http_server_connectivity: HealthStatus = HealthStatus.healthy

    def is_healthy(self) -> bool:
        return all(value == HealthStatus.healthy for _, value in iter(self) if isinstance(value, HealthStatus))


class DebugHealthResponse(HealthResponse):
    version: str
    debug_mode: bool


class ReadinessHealthResponse(HealthResponse):
    db_connectivity: HealthStatus = HealthStatus.unhealthy


def check_db_connectivity(session: Session) -> bool:
    try:
        session.execute(text("SELECT 1"))
    except sqlalchemy.exc.SQLAlchemyError:
        _logger.exception("Database not reachable in readiness probe")
        session.rollback()
        return False
    return True


def _respond(result: HealthResponse, response: Response) -> HealthResponse:
    response.status_code = status.HTTP_200_OK if result.is_healthy() else status.HTTP_503_SERVICE_UNAVAILABLE
    return result


class HealthAPIRouter(APIRouter):
    readiness_response_model: type[ReadinessHealthResponse] = ReadinessHealthResponse

    def __init__(self, **kwargs) -> None:
        super().__init__(prefix="/health", tags=["Health"], **kwargs)
        probes = [
            ("/debug", self.get_debug_probe, DebugHealthResponse, "Version and debug state of the instance."),
            ("/liveness", self.get_liveness_probe, HealthResponse, "Whether the instance needs to be restarted."),
            ("/readiness", self.get_readiness_probe, self.readiness_response_model, "Whether the instance can serve requests."),
        ]
        for path, endpoint, model, description in probes:
            self.add_api_route(
                path,
                endpoint=endpoint,
                response_model=model,
                description=description,
                responses={status.HTTP_503_SERVICE_UNAVAILABLE: {"model": model}},
            )

    def readiness_checks(self, session: Session) -> dict[str, bool]:
        """Outcome of each readiness check, keyed by its field in `readiness_response_model`"""
        return {"db_connectivity": check_db_connectivity(session)}

    def get_debug_probe(self, response: Response, config: conf.inject) -> DebugHealthResponse:
        return _respond(DebugHealthResponse(version=get_version(), debug_mode=config.enable_debug_mode), response)

    def get_liveness_probe(self, response: Response) -> HealthResponse:
        return _respond(HealthResponse(), response)

    def get_readiness_probe(self, response: Response, session: db.inject) -> ReadinessHealthResponse:
        checks = {name: HealthStatus.of(ok) for name, ok in self.readiness_checks(session).items()}
        return _respond(self.readiness_response_model(**checks), response)
