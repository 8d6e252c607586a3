"""Importer for facts reported by Puppet agents."""

from __future__ import annotations

from typing import Final

from hostfacts.domain.importers.base import FactImporter

PUPPET_TAXONOMY: Final[str] = "puppet"


class PuppetFactImporter(FactImporter):
    @classmethod
    def authorized_features(cls) -> frozenset[str]:
        return frozenset({"Puppet"})

    @property
    def fact_taxonomy(self) -> str:
        return PUPPET_TAXONOMY
