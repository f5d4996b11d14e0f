# SPDX-FileCopyrightText: 2024 Swiss Confederation
#
# SPDX-License-Identifier: MIT

from sqlalchemy.orm import Session

from common import health

import registry_certificate.db.registry_state as db_state


class CertificateRegistryReadinessHealthResponse(health.ReadinessHealthResponse):
    registry_initialized: health.HealthStatus = health.HealthStatus.unhealthy
    """Without owner no state changing operation can succeed"""


class CertificateRegistryHealthAPIRouter(health.HealthAPIRouter):
    readiness_response_model = CertificateRegistryReadinessHealthResponse

    def readiness_checks(self, session: Session) -> dict[str, bool]:
        checks = super().readiness_checks(session)
        checks["registry_initialized"] = checks["db_connectivity"] and db_state.get_registry_state(session) is not None
        return checks


router = CertificateRegistryHealthAPIRouter()
