"""Three-phase reconciliation of reported facts against stored fact values."""

from __future__ import annotations

import logging
from abc import ABC, abstractmethod
from collections.abc import Callable, Mapping, Sequence
from dataclasses import dataclass
from typing import TYPE_CHECKING, Any

from hostfacts.domain.errors import FactImportError
from hostfacts.domain.importers.normalize import normalize_facts
from hostfacts.domain.model import FactName, FactValue, Host

if TYPE_CHECKING:
    from hostfacts.domain.ports.unit_of_work import FactRepositories, FactUnitOfWork

log = logging.getLogger(__name__)

FactDeleteHook = Callable[[Host, FactValue], None]


@dataclass(slots=True)
class ImportCounters:
    """How many facts each phase deleted, considered for addition and updated."""

    added: int = 0
    updated: int = 0
    deleted: int = 0


class FactImporter(ABC):
    """Bring the stored facts of one host in line with a freshly reported set.

    Subclasses own one fact namespace through :attr:`fact_taxonomy`. The three
    phases (delete, add, update) each commit on their own; a failed fact in the
    add phase is logged and the batch keeps going, and :meth:`import_facts`
    raises :class:`FactImportError` once every phase has run.
    """

    def __init__(
        self,
        host: Host,
        facts: Mapping[Any, object] | None = None,
        *,
        uow: FactUnitOfWork,
        on_delete: Sequence[FactDeleteHook] = (),
    ) -> None:
        self._error = False
        self._host = host
        self._facts = normalize_facts(facts or {})
        self._uow = uow
        self._on_delete = tuple(on_delete)
        self.counters = ImportCounters()

    @classmethod
    def support_background(cls) -> bool:
        return False

    @classmethod
    def authorized_features(cls) -> frozenset[str]:
        """Features a reporting proxy needs before its uploads are accepted."""

        log.debug("Importer %s does not implement authorized_features.", cls.__name__)
        return frozenset()

    @property
    @abstractmethod
    def fact_taxonomy(self) -> str:
        """Taxonomy tag of the fact names this importer manages."""
        raise NotImplementedError

    @property
    def host(self) -> Host:
        return self._host

    @property
    def facts(self) -> dict[str, str]:
        return dict(self._facts)

    @property
    def _repositories(self) -> FactRepositories:
        return self._uow.repositories

    def import_facts(self) -> ImportCounters:
        self._delete_removed_facts()
        self._add_new_facts()
        self._update_facts()

        if self._error:
            raise FactImportError(self._host.name)
        log.info(
            "Import facts for '%s' completed. Added: %s, Updated: %s, Deleted %s facts",
            self._host,
            self.counters.added,
            self.counters.updated,
            self.counters.deleted,
        )
        return self.counters

    def _delete_removed_facts(self) -> None:
        repository = self._repositories.fact_values
        build_only = self._repositories.hosts.is_new(self._host)
        if build_only:
            to_delete = [
                fact_value
                for name, fact_value in self._db_facts().items()
                if name not in self._facts
            ]
        else:
            to_delete = repository.stale(self._host, self.fact_taxonomy, self._facts.keys())
        # One DELETE per row so the per-entity hooks see every removal.
        for fact_value in to_delete:
            self._host.detach_fact_value(fact_value)
            if not build_only:
                repository.remove(fact_value)
            for hook in self._on_delete:
                hook(self._host, fact_value)
        self._uow.commit()

        self.counters.deleted = len(to_delete)
        log.debug("Merging facts for '%s': deleted %s facts", self._host, self.counters.deleted)

    def _add_new_facts(self) -> None:
        db_facts = self._db_facts()
        facts_to_create = [name for name in self._facts if name not in db_facts]
        if facts_to_create:
            build_only = self._repositories.hosts.is_new(self._host)
            fact_names = self._repositories.fact_names.by_taxonomy(self.fact_taxonomy)
            for name in facts_to_create:
                fact_value: FactValue | None = None
                try:
                    fact_name = self._fact_name(fact_names, name)
                    fact_value = FactValue(
                        host=self._host, fact_name=fact_name, value=self._facts[name]
                    )
                    if not build_only:
                        self._repositories.fact_values.add(fact_value)
                except Exception as exc:  # noqa: BLE001
                    if fact_value is not None:
                        self._host.detach_fact_value(fact_value)
                    log.error("Fact %s could not be imported because of %s", name, exc)
                    self._error = True
            self._uow.commit()

        self.counters.added = len(facts_to_create)
        log.debug("Merging facts for '%s': added %s facts", self._host, self.counters.added)

    def _fact_name(self, fact_names: dict[str, FactName], name: str) -> FactName:
        fact_name = fact_names.get(name)
        if fact_name is None:
            fact_name = self._repositories.fact_names.create(self.fact_taxonomy, name)
            fact_names[name] = fact_name
        return fact_name

    def _update_facts(self) -> None:
        facts_to_update = [
            (self._facts[name], fact_value)
            for name, fact_value in self._db_facts().items()
            if name in self._facts and fact_value.value != self._facts[name]
        ]

        self.counters.updated = len(facts_to_update)
        if not facts_to_update:
            log.debug("No facts update required for %s", self._host)
            return

        log.debug("Merging facts for '%s': updated %s facts", self._host, self.counters.updated)
        for new_value, fact_value in facts_to_update:
            fact_value.value = new_value
            self._repositories.fact_values.update(fact_value)
        self._uow.commit()

    def _db_facts(self) -> dict[str, FactValue]:
        if self._repositories.hosts.is_new(self._host):
            return {
                fact_value.name: fact_value
                for fact_value in self._host.fact_values
                if fact_value.fact_name.taxonomy == self.fact_taxonomy
            }
        return self._repositories.fact_values.for_host(self._host, self.fact_taxonomy)
