"""Schema management for SQL-backed providers.

The in-memory provider needs no schema, so these helpers only act on
``sqlite`` and ``postgresql`` providers.
"""

import structlog
from protean.domain import Domain
from sqlalchemy import create_engine

logger = structlog.get_logger(__name__)

_SQL_PROVIDERS = ("sqlite", "postgresql")


def _sql_providers(domain: Domain):
    for name, provider in domain.providers.items():
        if provider.conn_info["provider"] in _SQL_PROVIDERS:
            yield name, provider


def setup_db(domain: Domain):
    """Create tables for every aggregate, entity and projection."""
    with domain.domain_context():
        for name, provider in _sql_providers(domain):
            engine = create_engine(provider.conn_info["database_uri"])

            # Touching the DAO registers each model with SQLAlchemy's metadata
            for _, record in domain.registry.aggregates.items():
                if record.cls.meta_.provider == name:
                    domain.repository_for(record.cls)._dao  # noqa: B018

            for _, record in domain.registry.entities.items():
                if record.cls.meta_.provider == name:
                    domain.repository_for(record.cls)._dao  # noqa: B018

            for _, record in domain.registry.projections.items():
                if record.cls.meta_.provider == name:
                    domain.repository_for(record.cls)._dao  # noqa: B018

            provider._metadata.create_all(engine)
            engine.dispose()
            logger.info("Database schema ready", provider=name)


def drop_db(domain: Domain):
    """Drop all tables created by ``setup_db``."""
    with domain.domain_context():
        for name, provider in _sql_providers(domain):
            engine = create_engine(provider.conn_info["database_uri"])
            provider._metadata.drop_all(engine)
            engine.dispose()
            logger.info("Database schema dropped", provider=name)


def close_connections(domain: Domain):
    """Release pooled connections held by every provider."""
    with domain.domain_context():
        for name, provider in domain.providers.items():
            close = getattr(provider, "close", None)
            if close is None:
                continue
            close()
            logger.info("Provider connections closed", provider=name)
