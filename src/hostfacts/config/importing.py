"""Fact import defaults."""

from __future__ import annotations

import os
from dataclasses import dataclass

from .env import env_flag

DEFAULT_IMPORTER_KEY = "puppet"


@dataclass(frozen=True, slots=True)
class ImportConfig:
    default_importer: str = DEFAULT_IMPORTER_KEY
    create_new_hosts: bool = True


def get_import_config() -> ImportConfig:
    importer = os.getenv("HOSTFACTS_DEFAULT_IMPORTER")
    return ImportConfig(
        default_importer=(importer or "").strip() or DEFAULT_IMPORTER_KEY,
        create_new_hosts=env_flag("HOSTFACTS_CREATE_NEW_HOSTS", default=True),
    )
