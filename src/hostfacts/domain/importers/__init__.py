"""Fact importers and the registry resolving them by upload type."""

from __future__ import annotations

from .ansible import ANSIBLE_TAXONOMY, AnsibleFactImporter
from .base import FactDeleteHook, FactImporter, ImportCounters
from .normalize import fact_string, normalize_facts
from .puppet import PUPPET_TAXONOMY, PuppetFactImporter
from .registry import ImporterRegistry, ImporterType, default_registry

__all__ = [
    "ANSIBLE_TAXONOMY",
    "PUPPET_TAXONOMY",
    "AnsibleFactImporter",
    "FactDeleteHook",
    "FactImporter",
    "ImportCounters",
    "ImporterRegistry",
    "ImporterType",
    "PuppetFactImporter",
    "default_registry",
    "fact_string",
    "normalize_facts",
]
