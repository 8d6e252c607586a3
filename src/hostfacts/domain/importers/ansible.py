"""Importer for facts gathered by Ansible's setup module."""

from __future__ import annotations

from typing import Final

from hostfacts.domain.importers.base import FactImporter

ANSIBLE_TAXONOMY: Final[str] = "ansible"


class AnsibleFactImporter(FactImporter):
    @classmethod
    def authorized_features(cls) -> frozenset[str]:
        return frozenset({"Ansible"})

    @property
    def fact_taxonomy(self) -> str:
        return ANSIBLE_TAXONOMY
