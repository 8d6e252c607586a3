"""Domain model for hosts and their facts."""

from __future__ import annotations

from .base import Entity, new_id
from .host import FactName, FactValue, Host

__all__ = [
    "Entity",
    "FactName",
    "FactValue",
    "Host",
    "new_id",
]
