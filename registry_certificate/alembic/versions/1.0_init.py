# SPDX-FileCopyrightText: 2024 Swiss Confederation
#
# SPDX-License-Identifier: MIT

"""init

Revision ID: 1.0
Revises:
Create Date: 2024-03-04 10:21:44.102317

Registry state, issuer flags, certificate records and the event log.
Will check if tables already exist before attempting to create them.

"""

from typing import Sequence, Union

from alembic import op
import sqlalchemy as sa


# revision identifiers, used by Alembic.
revision: str = '1.0'
down_revision: Union[str, None] = None
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None


def upgrade() -> None:
    inspector = sa.inspect(op.get_bind())
    existing_tables = inspector.get_table_names()
    if "registry" not in existing_tables:
        op.create_table(
            "registry",
            sa.Column("id", sa.Integer, primary_key=True, autoincrement=False),
            sa.Column("owner", sa.TEXT, nullable=False),
            sa.Column("initialized_at", sa.BigInteger, nullable=False),
        )
    if "issuer" not in existing_tables:
        op.create_table(
            "issuer",
            sa.Column("address", sa.TEXT, primary_key=True),
            sa.Column("authorized", sa.BOOLEAN, nullable=False),
        )
    if "certificate" not in existing_tables:
        op.create_table(
            "certificate",
            sa.Column("cert_id", sa.TEXT, primary_key=True),
            sa.Column("cert_hash", sa.LargeBinary(32), nullable=False),
            sa.Column("ipfs_cid", sa.TEXT, nullable=False),
            sa.Column("issued_by", sa.TEXT, nullable=False),
            sa.Column("issued_at", sa.BigInteger, nullable=False),
            sa.Column("status", sa.TEXT, nullable=False),
        )
    if "registry_event" not in existing_tables:
        op.create_table(
            "registry_event",
            sa.Column("sequence", sa.Integer, primary_key=True, autoincrement=True),
            sa.Column("event", sa.TEXT, nullable=False),
            sa.Column("emitted_at", sa.BigInteger, nullable=False),
            sa.Column("payload", sa.JSON, nullable=False),
        )


def downgrade() -> None:
    # Records are never deleted
    pass
