# SPDX-FileCopyrightText: 2024 Swiss Confederation
#
# SPDX-License-Identifier: MIT

"""
Storage for issued certificate records
"""

from enum import Enum

import sqlalchemy.orm as sa_orm
from sqlalchemy.orm import Mapped, mapped_column
from sqlalchemy import TEXT, BigInteger, LargeBinary

import common.db.postgres as db


class CertificateStatus(Enum):
    """
    Lifecycle of a record: Active -> Revoked.
    Absent identifiers have no row at all.
    """

    active = "ACTIVE"
    revoked = "REVOKED"


class CertificateRecord(db.Base):
    __tablename__ = "certificate"
    cert_id: Mapped[str] = mapped_column(TEXT, primary_key=True)
    cert_hash: Mapped[bytes] = mapped_column(LargeBinary(32), nullable=False)
    """Digest of the certificate file, computed by the issuer"""
    ipfs_cid: Mapped[str] = mapped_column(TEXT, nullable=False, default="")
    """Pointer to the certificate file, stored as is"""
    issued_by: Mapped[str] = mapped_column(TEXT, nullable=False)
    issued_at: Mapped[int] = mapped_column(BigInteger, nullable=False)
    """Seconds since 1.1.1970"""
    status: Mapped[str] = mapped_column(TEXT, nullable=False, default=CertificateStatus.active.value)

    @property
    def revoked(self) -> bool:
        return self.status == CertificateStatus.revoked.value


def get_certificate(session: sa_orm.Session, cert_id: str) -> CertificateRecord | None:
    return session.get(CertificateRecord, cert_id)


def add_certificate(session: sa_orm.Session, cert_id: str, cert_hash: bytes, ipfs_cid: str, issued_by: str, issued_at: int) -> CertificateRecord:
    record = CertificateRecord(
        cert_id=cert_id,
        cert_hash=cert_hash,
        ipfs_cid=ipfs_cid,
        issued_by=issued_by,
        issued_at=issued_at,
        status=CertificateStatus.active.value,
    )
    session.add(record)
    session.flush()
    return record


def mark_revoked(session: sa_orm.Session, record: CertificateRecord) -> None:
    record.status = CertificateStatus.revoked.value
    session.add(record)
    session.flush()
