"""Domain port definitions for adapters."""

from __future__ import annotations

from .persistence import (
    FactNameRepository,
    FactValueRepository,
    HostRepository,
    Repository,
)
from .unit_of_work import (
    FactRepositories,
    FactUnitOfWork,
    RepositoryCollection,
    UnitOfWork,
)

__all__ = [
    "FactNameRepository",
    "FactRepositories",
    "FactUnitOfWork",
    "FactValueRepository",
    "HostRepository",
    "Repository",
    "RepositoryCollection",
    "UnitOfWork",
]
