# SPDX-FileCopyrightText: 2024 Swiss Confederation
#
# SPDX-License-Identifier: MIT

import logging
import contextlib

import fastapi

import common.config
import common.db.postgres as db
import registry_certificate.config as conf
import registry_certificate.certificate_registry as registry
import registry_certificate.registry as app_source

_logger = logging.getLogger(__name__)


def startup() -> fastapi.FastAPI:
    """Migrates the database and initializes the registry with the configured owner"""
    db_config = common.config.DBConfig()
    db.alembic_upgrade(db_config.alembic_config_file, db_config.connection_url)

    config = conf.CertificateRegistryConfig()
    if config.owner_address:
        with contextlib.closing(db.session(db_config.connection_url, db_config.schema)) as session:
            registry.initialize_registry(session, config.owner_address)
    else:
        _logger.error("No owner configured! Requires environment variable REGISTRY_OWNER_ADDRESS to be set on the first start")
    return app_source.app


app = startup()

if __name__ == '__main__':
    import uvicorn

    uvicorn.run(app, host="0.0.0.0", port=8000)
