"""SQLAlchemy adapter package for hostfacts."""

from __future__ import annotations

from .mappings import (
    create_all_tables,
    fact_name_table,
    fact_value_table,
    host_table,
    mapper_registry,
    start_mappers,
)
from .repositories import (
    SqlAlchemyFactNameRepository,
    SqlAlchemyFactValueRepository,
    SqlAlchemyHostRepository,
)

__all__ = [
    "SqlAlchemyFactNameRepository",
    "SqlAlchemyFactValueRepository",
    "SqlAlchemyHostRepository",
    "create_all_tables",
    "fact_name_table",
    "fact_value_table",
    "host_table",
    "mapper_registry",
    "start_mappers",
]
