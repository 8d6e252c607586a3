"""Lookup of fact importers by upload type."""

from __future__ import annotations

import inspect
import logging
import threading
from functools import cache
from typing import TYPE_CHECKING

from hostfacts.config.importing import DEFAULT_IMPORTER_KEY
from hostfacts.domain.importers.ansible import AnsibleFactImporter
from hostfacts.domain.importers.base import FactImporter
from hostfacts.domain.importers.puppet import PuppetFactImporter

if TYPE_CHECKING:
    from collections.abc import Mapping

log = logging.getLogger(__name__)

ImporterType = type[FactImporter]


def _normalize_key(key: object) -> str:
    return str(key).strip().lower()


class ImporterRegistry:
    """Map upload types to importer classes, falling back to a default importer.

    Keys are compared by their stripped, lower-cased string form. Registering
    an existing key replaces the previous importer.
    """

    def __init__(
        self,
        importers: Mapping[str, ImporterType] | None = None,
        *,
        default_key: str = DEFAULT_IMPORTER_KEY,
    ) -> None:
        self._lock = threading.RLock()
        self._importers: dict[str, ImporterType] = {}
        self._default_key = _normalize_key(default_key)
        for key, importer in (importers or {}).items():
            self.register(key, importer)

    @property
    def default_key(self) -> str:
        return self._default_key

    def register(self, key: object, importer: ImporterType) -> None:
        if not (inspect.isclass(importer) and issubclass(importer, FactImporter)):
            raise TypeError(f"{importer!r} is not a FactImporter subclass")
        if inspect.isabstract(importer):
            raise TypeError(f"{importer.__name__} does not declare a fact taxonomy")
        normalized = _normalize_key(key)
        with self._lock:
            previous = self._importers.get(normalized)
            self._importers[normalized] = importer
        if previous is not None and previous is not importer:
            log.debug(
                "Importer for '%s' replaced: %s -> %s",
                normalized,
                previous.__name__,
                importer.__name__,
            )

    def resolve(self, key: object) -> ImporterType:
        normalized = _normalize_key(key)
        with self._lock:
            importer = self._importers.get(normalized)
            if importer is not None:
                return importer
            default = self._importers.get(self._default_key)
        if default is None:
            raise LookupError(f"No importer registered for '{normalized}' and no default importer")
        return default

    def keys(self) -> tuple[str, ...]:
        with self._lock:
            return tuple(self._importers)

    def items(self) -> tuple[tuple[str, ImporterType], ...]:
        with self._lock:
            return tuple(self._importers.items())

    def authorized_features(self) -> frozenset[str]:
        """Union of the authorized features declared by every registered importer."""

        features: set[str] = set()
        for _key, importer in self.items():
            declared = importer.authorized_features()
            if not declared:
                continue
            features.update(declared)
        return frozenset(features)

    def supports_background(self, key: object) -> bool:
        return self.resolve(key).support_background()

    def __contains__(self, key: object) -> bool:
        with self._lock:
            return _normalize_key(key) in self._importers


@cache
def default_registry() -> ImporterRegistry:
    """Process-wide registry preloaded with the bundled importers."""

    log.debug("Building default importer registry")
    return ImporterRegistry(
        {
            "puppet": PuppetFactImporter,
            "ansible": AnsibleFactImporter,
        }
    )
