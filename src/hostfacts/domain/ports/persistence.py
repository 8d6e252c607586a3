"""Ports for persisting hosts and facts."""

from __future__ import annotations

from typing import TYPE_CHECKING, Protocol, TypeVar, runtime_checkable

from hostfacts.domain.model import FactName, FactValue, Host

if TYPE_CHECKING:
    from collections.abc import Collection, Sequence

TEntity = TypeVar("TEntity")


@runtime_checkable
class Repository(Protocol[TEntity]):
    """Minimal repository contract for a persistent aggregate store."""

    def add(self, entity: TEntity) -> None: ...


@runtime_checkable
class HostRepository(Repository[Host], Protocol):
    """Persistence contract for hosts."""

    def get_by_name(self, name: str) -> Host | None: ...

    def is_new(self, host: Host) -> bool:
        """Return whether ``host`` has not been written to storage yet."""
        ...


@runtime_checkable
class FactNameRepository(Protocol):
    """Persistence contract for fact names of one taxonomy."""

    def by_taxonomy(self, taxonomy: str) -> dict[str, FactName]: ...

    def create(self, taxonomy: str, name: str) -> FactName: ...


@runtime_checkable
class FactValueRepository(Repository[FactValue], Protocol):
    """Persistence contract for per-host fact values."""

    def for_host(self, host: Host, taxonomy: str) -> dict[str, FactValue]: ...

    def stale(self, host: Host, taxonomy: str, keep: Collection[str]) -> Sequence[FactValue]: ...

    def remove(self, fact_value: FactValue) -> None: ...

    def update(self, fact_value: FactValue) -> None: ...
