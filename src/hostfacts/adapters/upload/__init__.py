"""JSON fact upload documents."""

from __future__ import annotations

from .loader import PayloadError, load_payload, parse_payload
from .schema import HostFactsPayload

__all__ = [
    "HostFactsPayload",
    "PayloadError",
    "load_payload",
    "parse_payload",
]
