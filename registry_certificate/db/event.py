# SPDX-FileCopyrightText: 2024 Swiss Confederation
#
# SPDX-License-Identifier: MIT

"""
Append-only log of the notifications emitted by the registry, polled by external indexers.
"""

from enum import Enum

import sqlalchemy.orm as sa_orm
from sqlalchemy.orm import Mapped, mapped_column
from sqlalchemy import TEXT, JSON, BigInteger, Integer, select

import common.db.postgres as db


class EventType(Enum):
    issuer_added = "IssuerAdded"
    issuer_removed = "IssuerRemoved"
    certificate_issued = "CertificateIssued"
    certificate_revoked = "CertificateRevoked"


class RegistryEvent(db.Base):
    __tablename__ = "registry_event"
    sequence: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    """Strictly increasing in emission order"""
    event: Mapped[str] = mapped_column(TEXT, nullable=False)
    emitted_at: Mapped[int] = mapped_column(BigInteger, nullable=False)
    payload: Mapped[dict] = mapped_column(JSON, nullable=False)


def emit(session: sa_orm.Session, event_type: EventType, emitted_at: int, **payload) -> RegistryEvent:
    """Appends the event. It only becomes visible with the commit of the state change it belongs to."""
    event = RegistryEvent(event=event_type.value, emitted_at=emitted_at, payload=payload)
    session.add(event)
    session.flush()
    return event


def list_events(session: sa_orm.Session, after: int, limit: int) -> list[RegistryEvent]:
    return list(session.scalars(select(RegistryEvent).where(RegistryEvent.sequence > after).order_by(RegistryEvent.sequence).limit(limit)))
