# SPDX-FileCopyrightText: 2024 Swiss Confederation
#
# SPDX-License-Identifier: MIT

"""
Database access on PostgreSQL.

Every service keeps its tables in its own schema; connections get the schema
as search path, so the models are declared without schema.
"""

import os
import logging
from functools import cache
from typing import Annotated
from collections.abc import Generator

from sqlalchemy import Engine, create_engine, event
from sqlalchemy.orm import declarative_base, sessionmaker, DeclarativeBase, Session
from sqlalchemy.schema import CreateSchema
import sqlalchemy.exc

from alembic import command as alembic_command
from alembic.config import Config as AlembicConfig

from fastapi import Depends, status, HTTPException

from common.config import inject_db_config

_logger = logging.getLogger(__name__)

Base: DeclarativeBase = declarative_base()


def alembic_upgrade(alembic_config_file: str, db_connection_string: str | None = None) -> None:
    """Migrates to the head revision, the alembic folder is expected next to `alembic_config_file`"""
    if not os.path.isfile(alembic_config_file):
        raise FileNotFoundError(f"{alembic_config_file=} does not exist!")
    alembic_config = AlembicConfig(alembic_config_file)
    alembic_config.set_main_option("script_location", os.path.join(os.path.dirname(alembic_config_file), "alembic"))
    if db_connection_string:
        alembic_config.set_main_option("sqlalchemy.url", db_connection_string)
    alembic_command.upgrade(alembic_config, "head")
    _logger.info(f"Database migrated with {alembic_config_file}")


def _bind_schema(engine: Engine, db_schema: str) -> None:
    """Creates the schema and sets it as search path on every new connection"""

    # https://docs.sqlalchemy.org/en/20/dialects/postgresql.html#setting-alternate-search-paths-on-connect
    @event.listens_for(engine, "connect", insert=True)
    def set_search_path(dbapi_connection, connection_record):
        existing_autocommit = dbapi_connection.autocommit
        dbapi_connection.autocommit = True
        with dbapi_connection.cursor() as cursor:
            cursor.execute("SET SESSION search_path TO %s", (db_schema,))
        dbapi_connection.autocommit = existing_autocommit

    with engine.connect() as connection:
        connection.execute(CreateSchema(db_schema, if_not_exists=True))
        connection.commit()


@cache
def _session_factory(db_connection_string: str, db_schema: str) -> sessionmaker:
    engine = create_engine(db_connection_string, pool_pre_ping=True)
    _bind_schema(engine, db_schema)
    return sessionmaker(bind=engine)


def session(db_connection_string: str, db_schema: str) -> Session:
    """New session on the schema, the engine is shared with all sessions of the same database"""
    try:
        return _session_factory(db_connection_string, db_schema)()
    except sqlalchemy.exc.OperationalError:
        _logger.exception("Could not establish connection to database.")
        raise HTTPException(status_code=status.HTTP_503_SERVICE_UNAVAILABLE, detail="Could not establish connection to database")


def env_session(db_config: inject_db_config) -> Generator[Session, None, None]:
    db_session = session(db_config.connection_url, db_config.schema)
    try:
        yield db_session
    finally:
        db_session.close()


inject = Annotated[Session, Depends(env_session)]
