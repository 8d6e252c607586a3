"""Managed hosts and the facts reported about them."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import TYPE_CHECKING

from hostfacts.domain.model.base import Entity

if TYPE_CHECKING:
    from datetime import datetime


@dataclass(eq=False, kw_only=True)
class Host(Entity):
    name: str
    created_at: datetime | None = None

    _fact_values: list[FactValue] = field(default_factory=list["FactValue"], repr=False)

    @property
    def fact_values(self) -> tuple[FactValue, ...]:
        return tuple(self._fact_values)

    def facts(self, taxonomy: str | None = None) -> dict[str, str]:
        """Return ``name -> value`` for the attached facts, optionally for one taxonomy."""

        return {
            fact_value.name: fact_value.value
            for fact_value in self._fact_values
            if taxonomy is None or fact_value.fact_name.taxonomy == taxonomy
        }

    def attach_fact_value(self, fact_value: FactValue) -> None:
        if fact_value.host is not self:
            raise ValueError("fact value belongs to another host")
        if fact_value not in self._fact_values:
            self._fact_values.append(fact_value)

    def detach_fact_value(self, fact_value: FactValue) -> None:
        if fact_value in self._fact_values:
            self._fact_values.remove(fact_value)

    def __str__(self) -> str:
        return self.name


@dataclass(eq=False, kw_only=True)
class FactName(Entity):
    """A fact name inside one importer's namespace.

    Unique per ``(taxonomy, name)``.
    """

    taxonomy: str
    name: str


@dataclass(eq=False, kw_only=True)
class FactValue(Entity):
    """The value of one fact for one host."""

    host: Host = field(repr=False)
    fact_name: FactName
    value: str
    updated_at: datetime | None = None

    def __post_init__(self) -> None:
        # Keep the host graph consistent without the ORM.
        self.host.attach_fact_value(self)

    @property
    def name(self) -> str:
        return self.fact_name.name
