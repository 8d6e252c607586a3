"""Application orchestration entry points."""

from __future__ import annotations

from collections.abc import Callable
from dataclasses import dataclass
from logging import getLogger
from typing import TYPE_CHECKING

from hostfacts.adapters.sqlalchemy.unit_of_work import (
    SqlAlchemyFactUnitOfWork,
    is_started,
    startup,
)
from hostfacts.config import get_import_config
from hostfacts.domain.errors import FactImportError, HostNotFoundError
from hostfacts.domain.importers import default_registry
from hostfacts.domain.model import Host
from hostfacts.domain.ports.unit_of_work import FactUnitOfWork

if TYPE_CHECKING:
    from hostfacts.adapters.upload import HostFactsPayload
    from hostfacts.config import ImportConfig
    from hostfacts.domain.importers import ImportCounters, ImporterRegistry
    from hostfacts.domain.model import FactValue

UnitOfWorkFactory = Callable[[], FactUnitOfWork]


log = getLogger(__name__)


@dataclass(frozen=True, slots=True)
class ImporterInfo:
    key: str
    importer: str
    features: tuple[str, ...]


def audit_fact_deletion(host: Host, fact_value: FactValue) -> None:
    log.info(
        "Deleted fact %s=%r (%s) of host %s",
        fact_value.name,
        fact_value.value,
        fact_value.fact_name.taxonomy,
        host.name,
    )


def import_host_facts(
    payload: HostFactsPayload,
    *,
    registry: ImporterRegistry | None = None,
    unit_of_work_factory: UnitOfWorkFactory | None = None,
    config: ImportConfig | None = None,
) -> ImportCounters:
    """Reconcile the stored facts of the payload's host with the uploaded ones."""

    effective_config = config or get_import_config()
    effective_registry = registry if registry is not None else default_registry()
    if unit_of_work_factory is None:
        if not is_started():
            startup()
        unit_of_work_factory = SqlAlchemyFactUnitOfWork

    importer_key = payload.importer_type or effective_config.default_importer
    importer_cls = effective_registry.resolve(importer_key)
    host_name = payload.host_name
    log.info(
        "Starting fact import: host=%s, type=%s, importer=%s, facts=%s",
        host_name,
        importer_key,
        importer_cls.__name__,
        len(payload.facts),
    )

    with unit_of_work_factory() as uow:
        hosts = uow.repositories.hosts
        host = hosts.get_by_name(host_name)
        if host is None:
            if not effective_config.create_new_hosts:
                raise HostNotFoundError(host_name)
            log.info("Host %s is unknown, creating it", host_name)
            host = Host(name=host_name)

        importer = importer_cls(host, payload.facts, uow=uow, on_delete=(audit_fact_deletion,))
        try:
            counters = importer.import_facts()
        except FactImportError:
            _save_if_new(uow, host)
            raise
        _save_if_new(uow, host)

    return counters


def _save_if_new(uow: FactUnitOfWork, host: Host) -> None:
    hosts = uow.repositories.hosts
    if hosts.is_new(host):
        # Facts of a new host were only built in memory; saving the host writes them.
        hosts.add(host)
        uow.commit()


def list_importers(registry: ImporterRegistry | None = None) -> list[ImporterInfo]:
    """Describe the registered importers and the features they authorize."""

    effective_registry = registry if registry is not None else default_registry()
    return [
        ImporterInfo(
            key=key,
            importer=importer.__name__,
            features=tuple(sorted(importer.authorized_features())),
        )
        for key, importer in effective_registry.items()
    ]
