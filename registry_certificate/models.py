# SPDX-FileCopyrightText: 2024 Swiss Confederation
#
# SPDX-License-Identifier: MIT

from enum import Enum

from pydantic import BaseModel, Field

from common import parsing
from registry_certificate.db.certificate import CertificateRecord, CertificateStatus


class IssueCertificateRequest(BaseModel):
    cert_id: str
    """Caller chosen, unique identifier"""
    cert_hash: str
    """Content hash of the certificate file, 64 hex digits (optionally 0x prefixed)"""
    ipfs_cid: str = ""
    """Optional pointer to the certificate file, not interpreted by the registry"""


class VerifyCertificateRequest(BaseModel):
    cert_id: str
    cert_hash: str


class RevokeCertificateRequest(BaseModel):
    cert_id: str


class VerificationResult(BaseModel):
    valid: bool


class VerificationOutcome(Enum):
    """Reason behind a verification result"""

    valid = "VALID"
    not_found = "NOT_FOUND"
    revoked = "REVOKED"
    hash_mismatch = "HASH_MISMATCH"


class VerificationDiagnostic(BaseModel):
    """
    Verification result including why a certificate is not valid.
    The plain verification does not disclose this.
    """

    valid: bool
    outcome: VerificationOutcome


class CertificateRecordData(BaseModel):
    cert_id: str
    cert_hash: str
    ipfs_cid: str
    issued_by: str
    issued_at: int
    revoked: bool
    status: CertificateStatus

    @classmethod
    def from_record(cls, record: CertificateRecord) -> "CertificateRecordData":
        return cls(
            cert_id=record.cert_id,
            cert_hash=parsing.hash_to_hex(record.cert_hash),
            ipfs_cid=record.ipfs_cid,
            issued_by=record.issued_by,
            issued_at=record.issued_at,
            revoked=record.revoked,
            status=CertificateStatus(record.status),
        )


class IssuerData(BaseModel):
    address: str
    authorized: bool


class OwnerData(BaseModel):
    owner: str


class RegistryEventData(BaseModel):
    """Notification emitted by a registry operation"""

    sequence: int
    event: str = Field(description="IssuerAdded, IssuerRemoved, CertificateIssued or CertificateRevoked")
    emitted_at: int
    payload: dict
