# SPDX-FileCopyrightText: 2024 Swiss Confederation
#
# SPDX-License-Identifier: MIT

"""
Fixtures for the certificate registry tests.
Uses an in memory SQLite database instead of the PostgreSQL of the deployment.
"""

import typing

import pytest
import dotenv
from sqlalchemy import create_engine, Engine
from sqlalchemy.orm import Session, sessionmaker
from sqlalchemy.pool import StaticPool

import common.config as common_conf
import common.db.postgres as db

# Register the tables in the metadata
import registry_certificate.db.registry_state  # noqa: F401
import registry_certificate.db.issuer  # noqa: F401
import registry_certificate.db.certificate  # noqa: F401
import registry_certificate.db.event  # noqa: F401
import registry_certificate.certificate_registry as registry
import registry_certificate.config as conf
from registry_certificate.test.dummy import OWNER, ISSUER, OTHER_ISSUER, TEST_TIME


def t_api_key() -> str:
    envs = dotenv.dotenv_values(".env")
    return envs.get("REGISTRY_CERTIFICATE_API_KEY", "tergum_dev_key")


def _create_sqlite_engine(url: str) -> Engine:
    if url == "sqlite://":
        # One in memory database shared by all threads
        engine = create_engine(url, connect_args={"check_same_thread": False}, poolclass=StaticPool)
    else:
        engine = create_engine(url, connect_args={"check_same_thread": False})
    db.Base.metadata.create_all(engine)
    return engine


@pytest.fixture(autouse=True)
def fixed_clock(monkeypatch: pytest.MonkeyPatch) -> int:
    monkeypatch.setattr(registry, "_now", lambda: TEST_TIME)
    return TEST_TIME


@pytest.fixture()
def engine() -> typing.Generator[Engine, None, None]:
    engine = _create_sqlite_engine("sqlite://")
    yield engine
    engine.dispose()


@pytest.fixture()
def session_factory(engine: Engine) -> sessionmaker:
    return sessionmaker(bind=engine)


@pytest.fixture()
def file_session_factory(tmp_path) -> typing.Generator[sessionmaker, None, None]:
    """Database file with a connection per session, like concurrent requests on PostgreSQL"""
    engine = _create_sqlite_engine(f"sqlite:///{tmp_path / 'registry.db'}")
    yield sessionmaker(bind=engine)
    engine.dispose()


@pytest.fixture()
def session(session_factory: sessionmaker) -> typing.Generator[Session, None, None]:
    session = session_factory()
    try:
        yield session
    finally:
        session.close()


@pytest.fixture()
def registry_session(session: Session) -> Session:
    """Session on a registry owned by OWNER with ISSUER and OTHER_ISSUER authorized"""
    registry.initialize_registry(session, OWNER)
    registry.add_issuer(session, OWNER, ISSUER)
    registry.add_issuer(session, OWNER, OTHER_ISSUER)
    return session


@pytest.fixture()
def t_config() -> typing.Callable[[], conf.CertificateRegistryConfig]:
    """Override for the Certificate Registry Config"""

    def _config() -> conf.CertificateRegistryConfig:
        config = conf.CertificateRegistryConfig()
        config.api_key = t_api_key()
        config.enable_debug_mode = True
        config.event_page_size = 3
        return config

    return _config


@pytest.fixture()
def client(session_factory: sessionmaker, t_config):
    from fastapi.testclient import TestClient
    from registry_certificate.registry import app

    def t_session() -> typing.Generator[Session, None, None]:
        """Override function Database Injection using the test database"""
        session = session_factory()
        try:
            yield session
        finally:
            session.close()

    app.dependency_overrides[db.env_session] = t_session
    app.dependency_overrides[conf.CertificateRegistryConfig] = t_config
    # Injected config & injected specialized config are not the same override
    app.dependency_overrides[common_conf.Config] = t_config
    client = TestClient(app, headers={"x-api-key": t_api_key()})
    yield client
    client.close()
    app.dependency_overrides.clear()
