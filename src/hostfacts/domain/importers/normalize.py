"""Coerce raw fact maps into flat ``name -> value`` string mappings."""

from __future__ import annotations

import json
from collections.abc import Mapping
from typing import TYPE_CHECKING, Any

if TYPE_CHECKING:
    from collections.abc import Iterable


def fact_string(value: object) -> str:
    """Return the string form of a raw fact key or value."""

    if isinstance(value, str):
        return value
    if value is None:
        return ""
    if isinstance(value, bool):
        return "true" if value else "false"
    if isinstance(value, (Mapping, list, tuple)):
        return json.dumps(value, sort_keys=True, separators=(",", ":"), default=str)
    return str(value)


def normalize_facts(
    facts: Mapping[Any, object] | Iterable[tuple[object, object]],
) -> dict[str, str]:
    """Stringify every entry and drop the ones with a blank key or value."""

    items = facts.items() if isinstance(facts, Mapping) else facts
    normalized: dict[str, str] = {}
    for raw_key, raw_value in items:
        key = fact_string(raw_key)
        value = fact_string(raw_value)
        if not key.strip() or not value.strip():
            continue
        normalized[key] = value
    return normalized
