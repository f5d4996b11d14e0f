# SPDX-FileCopyrightText: 2024 Swiss Confederation
#
# SPDX-License-Identifier: MIT

from fastapi import APIRouter, Query, Security, status

import common.db.postgres as db
from common.apikey import require_api_key
from common.model.exception import ErrorResponse, HTTPError
from common.fastapi_extensions import ExtendedFastAPI

import registry_certificate.certificate_registry as registry
from registry_certificate import config as conf
from registry_certificate import models
from registry_certificate.principal import inject_caller
from registry_certificate.exception.handler import configure_exception_handlers
from registry_certificate.route.health import router as health_router

app = ExtendedFastAPI(conf.CertificateRegistryConfig)
configure_exception_handlers(app)

_error_responses = {
    status.HTTP_400_BAD_REQUEST: {"model": ErrorResponse, "description": "invalid_argument"},
    status.HTTP_401_UNAUTHORIZED: {"model": HTTPError, "description": "Invalid or missing API Key"},
    status.HTTP_403_FORBIDDEN: {"model": ErrorResponse, "description": "unauthorized - caller lacks the required role"},
    status.HTTP_503_SERVICE_UNAVAILABLE: {"model": ErrorResponse, "description": "registry_not_initialized"},
}
"""Responses common to all endpoints changing the registry"""


###############
# Certificate #
###############

certificate_router = APIRouter(prefix="/certificate", tags=["Certificate"])


@certificate_router.post(
    "",
    status_code=status.HTTP_201_CREATED,
    description="Issues a new certificate. The caller has to be an authorized issuer.",
    responses=_error_responses | {status.HTTP_409_CONFLICT: {"model": ErrorResponse, "description": "already_exists"}},
    dependencies=[Security(require_api_key)],
)
def issue_certificate(request: models.IssueCertificateRequest, caller: inject_caller, session: db.inject) -> models.CertificateRecordData:
    record = registry.issue_certificate(session, caller, request.cert_id, request.cert_hash, request.ipfs_cid)
    return models.CertificateRecordData.from_record(record)


@certificate_router.post(
    "/verify",
    description="""
    True if the certificate exists, is not revoked and has the given hash.
    Does not tell why a certificate is not valid, see /certificate/verify/diagnostic
    """,
)
def verify_certificate(request: models.VerifyCertificateRequest, session: db.inject) -> models.VerificationResult:
    return models.VerificationResult(valid=registry.verify_certificate(session, request.cert_id, request.cert_hash))


@certificate_router.post("/verify/diagnostic", description="Verification including the reason why a certificate is not valid.")
def verify_certificate_diagnostic(request: models.VerifyCertificateRequest, session: db.inject) -> models.VerificationDiagnostic:
    outcome = registry.verify_certificate_diagnostic(session, request.cert_id, request.cert_hash)
    return models.VerificationDiagnostic(valid=outcome == models.VerificationOutcome.valid, outcome=outcome)


@certificate_router.post(
    "/revoke",
    status_code=status.HTTP_204_NO_CONTENT,
    description="Irreversibly revokes a certificate. The caller has to be the issuer of the certificate or the owner.",
    responses=_error_responses
    | {
        status.HTTP_404_NOT_FOUND: {"model": ErrorResponse, "description": "not_found"},
        status.HTTP_409_CONFLICT: {"model": ErrorResponse, "description": "already_revoked"},
    },
    dependencies=[Security(require_api_key)],
)
def revoke_certificate(request: models.RevokeCertificateRequest, caller: inject_caller, session: db.inject) -> None:
    registry.revoke_certificate(session, caller, request.cert_id)


# cert_id may contain slashes
@certificate_router.get(
    "/{cert_id:path}",
    responses={status.HTTP_404_NOT_FOUND: {"model": ErrorResponse, "description": "not_found"}},
)
def get_certificate(cert_id: str, session: db.inject) -> models.CertificateRecordData:
    return models.CertificateRecordData.from_record(registry.get_certificate(session, cert_id))


##########
# Issuer #
##########

issuer_router = APIRouter(tags=["Issuer"])


@issuer_router.get("/owner", responses={status.HTTP_503_SERVICE_UNAVAILABLE: {"model": ErrorResponse}})
def get_owner(session: db.inject) -> models.OwnerData:
    return models.OwnerData(owner=registry.get_owner(session))


@issuer_router.get("/issuers", description="Lists all currently authorized issuers")
def get_issuers(session: db.inject) -> list[str]:
    return registry.list_issuers(session)


@issuer_router.get("/issuer/{address}", responses={status.HTTP_400_BAD_REQUEST: {"model": ErrorResponse}})
def get_issuer(address: str, session: db.inject) -> models.IssuerData:
    authorized = registry.is_issuer(session, address)
    return models.IssuerData(address=address.lower(), authorized=authorized)


@issuer_router.put(
    "/issuer/{address}",
    status_code=status.HTTP_204_NO_CONTENT,
    description="Authorizes the address to issue certificates. Owner only.",
    responses=_error_responses,
    dependencies=[Security(require_api_key)],
)
def add_issuer(address: str, caller: inject_caller, session: db.inject) -> None:
    registry.add_issuer(session, caller, address)


@issuer_router.delete(
    "/issuer/{address}",
    status_code=status.HTTP_204_NO_CONTENT,
    description="Withdraws the authorization to issue certificates. Owner only.",
    responses=_error_responses,
    dependencies=[Security(require_api_key)],
)
def remove_issuer(address: str, caller: inject_caller, session: db.inject) -> None:
    registry.remove_issuer(session, caller, address)


##########
# Events #
##########

event_router = APIRouter(tags=["Events"])


@event_router.get("/events", description="Notifications emitted by the registry in emission order, for external indexers")
def get_events(
    session: db.inject,
    config: conf.inject,
    after: int = Query(default=0, ge=0, description="Only events with a greater sequence number"),
    limit: int | None = Query(default=None, ge=1),
) -> list[models.RegistryEventData]:
    limit = min(limit or config.event_page_size, config.event_page_size)
    events = registry.list_events(session, after, limit)
    return [models.RegistryEventData.model_validate(event, from_attributes=True) for event in events]


app.include_router(certificate_router)
app.include_router(issuer_router)
app.include_router(event_router)


#############
#  Health   #
#############

app.include_router(health_router)
