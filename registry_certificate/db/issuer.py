# SPDX-FileCopyrightText: 2024 Swiss Confederation
#
# SPDX-License-Identifier: MIT

"""
Issuer authorization flags. Entries are never deleted, removing an issuer clears its flag.
"""

import sqlalchemy.orm as sa_orm
from sqlalchemy.orm import Mapped, mapped_column
from sqlalchemy import TEXT, BOOLEAN, select

import common.db.postgres as db


class Issuer(db.Base):
    __tablename__ = "issuer"
    address: Mapped[str] = mapped_column(TEXT, primary_key=True)
    authorized: Mapped[bool] = mapped_column(BOOLEAN, nullable=False, default=False)


def is_authorized(session: sa_orm.Session, address: str) -> bool:
    issuer = session.get(Issuer, address)
    return issuer is not None and issuer.authorized


def set_authorization(session: sa_orm.Session, address: str, authorized: bool) -> Issuer:
    """Sets the flag, creating the entry for addresses never seen before"""
    issuer = session.get(Issuer, address)
    if issuer is None:
        issuer = Issuer(address=address)
        session.add(issuer)
    issuer.authorized = authorized
    session.flush()
    return issuer


def list_authorized(session: sa_orm.Session) -> list[str]:
    return list(session.scalars(select(Issuer.address).where(Issuer.authorized.is_(True)).order_by(Issuer.address)))
