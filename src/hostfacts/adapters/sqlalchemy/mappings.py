"""SQLAlchemy mapping metadata for the hostfacts domain model."""

from __future__ import annotations

import logging
import uuid
from datetime import UTC, datetime
from functools import cache
from typing import TYPE_CHECKING

from sqlalchemy import (
    Column,
    DateTime,
    Dialect,
    ForeignKey,
    Index,
    String,
    Table,
    Text,
    TypeDecorator,
    UniqueConstraint,
    Uuid,
    func,
    orm,
)
from sqlalchemy.orm import configure_mappers, relationship

from hostfacts.domain.model import FactName, FactValue, Host

if TYPE_CHECKING:
    from sqlalchemy.engine import Engine

log = logging.getLogger(__name__)

UUIDColumnType = Uuid[uuid.UUID]


class UTCDateTime(TypeDecorator[datetime]):
    impl = DateTime(timezone=True)
    cache_ok = True

    def process_bind_param(self, value: datetime | None, dialect: Dialect) -> datetime | None:
        _ = dialect
        if value is None:
            return None
        if value.tzinfo is None:
            value = value.replace(tzinfo=UTC)
        return value.astimezone(UTC)

    def process_result_value(self, value: datetime | None, dialect: Dialect) -> datetime | None:
        _ = dialect
        if value is None:
            return None
        return value if value.tzinfo else value.replace(tzinfo=UTC)


mapper_registry = orm.registry()
mapper_registry.metadata.naming_convention = {
    "ix": "ix_%(column_0_label)s",
    "uq": "uq_%(table_name)s_%(column_0_label)s",
    "ck": "ck_%(table_name)s_%(constraint_name)s",
    "fk": "fk_%(table_name)s_%(column_0_label)s_%(referred_table_name)s",
    "pk": "pk_%(table_name)s",
}

host_table = Table(
    "host",
    mapper_registry.metadata,
    Column("id", UUIDColumnType, primary_key=True, default=uuid.uuid4),
    Column("name", String, nullable=False, unique=True),
    Column("created_at", UTCDateTime(), nullable=True, server_default=func.now()),
)

fact_name_table = Table(
    "fact_name",
    mapper_registry.metadata,
    Column("id", UUIDColumnType, primary_key=True, default=uuid.uuid4),
    Column("taxonomy", String, nullable=False),
    Column("name", String, nullable=False),
    UniqueConstraint("taxonomy", "name", name="uq_fact_name_taxonomy_name"),
)

fact_value_table = Table(
    "fact_value",
    mapper_registry.metadata,
    Column("id", UUIDColumnType, primary_key=True, default=uuid.uuid4),
    Column(
        "host_id", UUIDColumnType, ForeignKey("host.id", ondelete="CASCADE"), nullable=False
    ),
    Column(
        "fact_name_id",
        UUIDColumnType,
        ForeignKey("fact_name.id", ondelete="CASCADE"),
        nullable=False,
    ),
    Column("value", Text, nullable=False),
    Column("updated_at", UTCDateTime(), nullable=True),
    UniqueConstraint("host_id", "fact_name_id", name="uq_fact_value_host_fact_name"),
    Index("ix_fact_value_fact_name_id", "fact_name_id"),
)


@cache
def start_mappers() -> orm.registry:
    """Configure SQLAlchemy mappers for the domain model."""

    log.info("Starting SQLAlchemy mappers")

    mapper_registry.map_imperatively(
        Host,
        host_table,
        properties={
            "_fact_values": relationship(
                FactValue,
                back_populates="host",
                cascade="all, delete-orphan",
            ),
        },
    )

    mapper_registry.map_imperatively(FactName, fact_name_table)

    mapper_registry.map_imperatively(
        FactValue,
        fact_value_table,
        properties={
            "host": relationship(Host, back_populates="_fact_values"),
            "fact_name": relationship(FactName, lazy="joined", innerjoin=True),
        },
    )

    configure_mappers()
    return mapper_registry


def create_all_tables(engine: Engine) -> None:
    """Create all tables."""
    log.info("Creating all tables")
    mapper_registry.metadata.create_all(engine)
