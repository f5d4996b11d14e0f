# SPDX-FileCopyrightText: 2024 Swiss Confederation
#
# SPDX-License-Identifier: MIT

"""
Singleton row holding the registry owner.
Its row lock doubles as the registry wide write lock.
"""

import sqlalchemy.orm as sa_orm
from sqlalchemy.orm import Mapped, mapped_column
from sqlalchemy import TEXT, BigInteger, Integer, select

import common.db.postgres as db

REGISTRY_STATE_ID = 1


class RegistryState(db.Base):
    __tablename__ = "registry"
    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=False)
    owner: Mapped[str] = mapped_column(TEXT, nullable=False)
    """Address of the owner, fixed at initialization"""
    initialized_at: Mapped[int] = mapped_column(BigInteger, nullable=False)


def get_registry_state(session: sa_orm.Session) -> RegistryState | None:
    return session.get(RegistryState, REGISTRY_STATE_ID)


def lock_registry_state(session: sa_orm.Session) -> RegistryState | None:
    """
    Loads the registry state with SELECT ... FOR UPDATE.
    Blocks until no other transaction holds the lock, the lock is held until commit / rollback.
    """
    return session.scalars(select(RegistryState).where(RegistryState.id == REGISTRY_STATE_ID).with_for_update()).one_or_none()


def create_registry_state(session: sa_orm.Session, owner: str, initialized_at: int) -> RegistryState:
    state = RegistryState(id=REGISTRY_STATE_ID, owner=owner, initialized_at=initialized_at)
    session.add(state)
    session.flush()
    return state
