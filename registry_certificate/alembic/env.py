# SPDX-FileCopyrightText: 2024 Swiss Confederation
#
# SPDX-License-Identifier: MIT

"""Alembic environment, migrating the schema configured with DB_SCHEMA"""

from alembic import context
from sqlalchemy import create_engine, pool, text
from sqlalchemy.schema import CreateSchema

import common.config

config = context.config
db_config = common.config.DBConfig()


def _database_url() -> str:
    return config.get_main_option("sqlalchemy.url") or db_config.connection_url


def run_migrations_offline() -> None:
    """Emits the migration as SQL script instead of executing it"""
    context.configure(url=_database_url(), literal_binds=True, dialect_opts={"paramstyle": "named"})
    with context.begin_transaction():
        context.run_migrations()


def run_migrations_online() -> None:
    connectable = create_engine(_database_url(), poolclass=pool.NullPool)
    with connectable.connect() as connection:
        schema = None
        if connection.dialect.name == "postgresql":
            schema = db_config.schema
            connection.execute(CreateSchema(schema, if_not_exists=True))
            connection.execute(text(f'SET search_path TO "{schema}"'))
            connection.commit()
        context.configure(connection=connection, version_table_schema=schema)
        with context.begin_transaction():
            context.run_migrations()


if context.is_offline_mode():
    run_migrations_offline()
else:
    run_migrations_online()
