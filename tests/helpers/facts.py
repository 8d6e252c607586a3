"""In-memory fakes for the host/fact persistence ports."""

from __future__ import annotations

from typing import TYPE_CHECKING, Literal

from hostfacts.domain.importers import FactImporter
from hostfacts.domain.model import FactName, FactValue, Host
from hostfacts.domain.ports.unit_of_work import FactRepositories

if TYPE_CHECKING:
    from collections.abc import Collection, Iterable, Mapping, Sequence
    from types import TracebackType


class DuplicateFactNameError(RuntimeError):
    """Stands in for a unique constraint violation on fact names."""


class FakeHostRepository:
    def __init__(self) -> None:
        self.hosts: dict[str, Host] = {}

    def add(self, entity: Host) -> None:
        self.hosts[entity.name] = entity

    def get_by_name(self, name: str) -> Host | None:
        return self.hosts.get(name)

    def is_new(self, host: Host) -> bool:
        return self.hosts.get(host.name) is not host


class FakeFactNameRepository:
    def __init__(self, *, failing: Iterable[str] = ()) -> None:
        self.names: dict[tuple[str, str], FactName] = {}
        self.failing = set(failing)

    def by_taxonomy(self, taxonomy: str) -> dict[str, FactName]:
        return {name: fact_name for (tag, name), fact_name in self.names.items() if tag == taxonomy}

    def create(self, taxonomy: str, name: str) -> FactName:
        if name in self.failing or (taxonomy, name) in self.names:
            raise DuplicateFactNameError(f"duplicate fact name {taxonomy}/{name}")
        fact_name = FactName(taxonomy=taxonomy, name=name)
        self.names[(taxonomy, name)] = fact_name
        return fact_name


class FakeFactValueRepository:
    def __init__(self) -> None:
        self.rows: list[FactValue] = []
        self.removed: list[FactValue] = []
        self.updated: list[FactValue] = []

    def add(self, entity: FactValue) -> None:
        self.rows.append(entity)

    def for_host(self, host: Host, taxonomy: str) -> dict[str, FactValue]:
        return {row.name: row for row in self._scoped(host, taxonomy)}

    def stale(self, host: Host, taxonomy: str, keep: Collection[str]) -> Sequence[FactValue]:
        return [row for row in self._scoped(host, taxonomy) if row.name not in keep]

    def remove(self, fact_value: FactValue) -> None:
        self.rows.remove(fact_value)
        self.removed.append(fact_value)

    def update(self, fact_value: FactValue) -> None:
        self.updated.append(fact_value)

    def _scoped(self, host: Host, taxonomy: str) -> list[FactValue]:
        return [
            row
            for row in self.rows
            if row.host is host and row.fact_name.taxonomy == taxonomy
        ]


class FakeFactUnitOfWork:
    """Unit of work over the in-memory repositories, counting commits."""

    def __init__(self, *, failing_names: Iterable[str] = ()) -> None:
        self.hosts = FakeHostRepository()
        self.fact_names = FakeFactNameRepository(failing=failing_names)
        self.fact_values = FakeFactValueRepository()
        self.commits = 0
        self.rollbacks = 0
        self._repositories = FactRepositories(
            hosts=self.hosts,
            fact_names=self.fact_names,
            fact_values=self.fact_values,
        )

    @property
    def repositories(self) -> FactRepositories:
        return self._repositories

    def __enter__(self) -> FakeFactUnitOfWork:
        return self

    def __exit__(
        self,
        exc_type: type[BaseException] | None,
        exc_value: BaseException | None,
        traceback: TracebackType | None,
    ) -> Literal[False]:
        if exc_type is not None:
            self.rollback()
        return False

    def commit(self) -> None:
        self.commits += 1

    def rollback(self) -> None:
        self.rollbacks += 1

    def stored_facts(self, host: Host, taxonomy: str) -> dict[str, str]:
        return {
            name: row.value for name, row in self.fact_values.for_host(host, taxonomy).items()
        }


class CustomFactImporter(FactImporter):
    """Importer owning a namespace of its own, as a plugin would."""

    @property
    def fact_taxonomy(self) -> str:
        return "custom"


def make_host(uow: FakeFactUnitOfWork, name: str = "web01.example.com") -> Host:
    """Create a host that the fake storage already knows."""

    host = Host(name=name)
    uow.hosts.add(host)
    return host


def seed_facts(
    uow: FakeFactUnitOfWork,
    host: Host,
    taxonomy: str,
    facts: Mapping[str, str],
) -> None:
    """Store facts for ``host`` without going through an importer."""

    for name, value in facts.items():
        fact_name = uow.fact_names.by_taxonomy(taxonomy).get(name) or uow.fact_names.create(
            taxonomy, name
        )
        uow.fact_values.add(FactValue(host=host, fact_name=fact_name, value=value))
