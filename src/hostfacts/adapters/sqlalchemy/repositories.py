"""Repository implementations backed by SQLAlchemy sessions."""

from __future__ import annotations

from datetime import UTC, datetime
from typing import TYPE_CHECKING, cast

from sqlalchemy import inspect, select

from hostfacts.adapters.sqlalchemy.mappings import fact_name_table, fact_value_table, host_table
from hostfacts.domain.model import FactName, FactValue, Host

if TYPE_CHECKING:
    from collections.abc import Collection, Sequence

    from sqlalchemy import Select
    from sqlalchemy.orm import InstanceState, Session


class SqlAlchemyHostRepository:
    def __init__(self, session: Session) -> None:
        self.session = session

    def add(self, entity: Host) -> None:
        if entity.created_at is None:
            entity.created_at = datetime.now(tz=UTC)
        self.session.add(entity)

    def get_by_name(self, name: str) -> Host | None:
        stmt = select(Host).where(host_table.c.name == name)
        return self.session.execute(stmt).scalar_one_or_none()

    def is_new(self, host: Host) -> bool:
        state = cast("InstanceState[Host]", inspect(host))
        return not state.has_identity


class SqlAlchemyFactNameRepository:
    def __init__(self, session: Session) -> None:
        self.session = session

    def by_taxonomy(self, taxonomy: str) -> dict[str, FactName]:
        stmt = select(FactName).where(fact_name_table.c.taxonomy == taxonomy)
        return {fact_name.name: fact_name for fact_name in self.session.execute(stmt).scalars()}

    def create(self, taxonomy: str, name: str) -> FactName:
        fact_name = FactName(taxonomy=taxonomy, name=name)
        # A savepoint keeps a duplicate-name race from poisoning the outer transaction.
        with self.session.begin_nested():
            self.session.add(fact_name)
        return fact_name


class SqlAlchemyFactValueRepository:
    def __init__(self, session: Session) -> None:
        self.session = session

    def add(self, entity: FactValue) -> None:
        entity.updated_at = datetime.now(tz=UTC)
        # Attaching to a persistent host already cascaded the row into the session;
        # begin_nested() flushes before SAVEPOINT, so the insert must wait until inside it.
        if entity in self.session:
            self.session.expunge(entity)
        with self.session.begin_nested():
            self.session.add(entity)

    def for_host(self, host: Host, taxonomy: str) -> dict[str, FactValue]:
        stmt = self._scoped(host, taxonomy)
        return {fact_value.name: fact_value for fact_value in self.session.execute(stmt).scalars()}

    def stale(self, host: Host, taxonomy: str, keep: Collection[str]) -> Sequence[FactValue]:
        stmt = self._scoped(host, taxonomy)
        if keep:
            stmt = stmt.where(fact_name_table.c.name.not_in(list(keep)))
        return self.session.execute(stmt).scalars().all()

    def remove(self, fact_value: FactValue) -> None:
        self.session.delete(fact_value)
        self.session.flush()

    def update(self, fact_value: FactValue) -> None:
        fact_value.updated_at = datetime.now(tz=UTC)
        self.session.add(fact_value)

    @staticmethod
    def _scoped(host: Host, taxonomy: str) -> Select[tuple[FactValue]]:
        return (
            select(FactValue)
            .join(fact_name_table, fact_value_table.c.fact_name_id == fact_name_table.c.id)
            .where(fact_value_table.c.host_id == host.id)
            .where(fact_name_table.c.taxonomy == taxonomy)
            .order_by(fact_name_table.c.name)
        )


if TYPE_CHECKING:
    from hostfacts.domain.ports.persistence import (
        FactNameRepository,
        FactValueRepository,
        HostRepository,
    )

    _session_stub = cast("Session", object())
    _host_repo: HostRepository = SqlAlchemyHostRepository(_session_stub)
    _fact_name_repo: FactNameRepository = SqlAlchemyFactNameRepository(_session_stub)
    _fact_value_repo: FactValueRepository = SqlAlchemyFactValueRepository(_session_stub)
