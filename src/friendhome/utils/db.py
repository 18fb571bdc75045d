"""Schema management for SQL-backed FriendHome deployments.

Only providers backed by a relational database need tables; the memory
provider used in development and tests is skipped.
"""

import structlog
from protean.domain import Domain
from sqlalchemy import create_engine

logger = structlog.get_logger(__name__)

SQL_PROVIDERS = ("sqlite", "postgresql")


def _sql_providers(domain: Domain):
    for name, provider in domain.providers.items():
        if provider.conn_info["provider"] in SQL_PROVIDERS:
            yield name, provider


def _register_models(domain: Domain, provider_name: str) -> None:
    # A repository's _dao builds its SQLAlchemy model, which adds the table
    # to the provider's metadata.
    registry = domain.registry
    for records in (registry.aggregates, registry.entities, registry.projections):
        for record in records.values():
            if record.cls.meta_.provider == provider_name:
                domain.repository_for(record.cls)._dao  # noqa: B018


def setup_db(domain: Domain) -> list[str]:
    """Create the tables of every SQL provider and return their names."""
    created = []
    with domain.domain_context():
        for name, provider in _sql_providers(domain):
            _register_models(domain, name)

            engine = create_engine(provider.conn_info["database_uri"])
            try:
                provider._metadata.create_all(engine)
            finally:
                engine.dispose()

            tables = sorted(provider._metadata.tables)
            logger.info("Database schema created", provider=name, tables=len(tables))
            created.extend(tables)
    return created


def drop_db(domain: Domain) -> None:
    """Drop the tables of every SQL provider."""
    with domain.domain_context():
        for name, provider in _sql_providers(domain):
            engine = create_engine(provider.conn_info["database_uri"])
            try:
                provider._metadata.drop_all(engine)
            finally:
                engine.dispose()
            logger.info("Database schema dropped", provider=name)
