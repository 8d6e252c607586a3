"""Read fact upload documents from JSON text or files."""

from __future__ import annotations

from typing import TYPE_CHECKING

from pydantic import ValidationError

from hostfacts.adapters.upload.schema import HostFactsPayload

if TYPE_CHECKING:
    from pathlib import Path


class PayloadError(ValueError):
    """Raised when an upload document cannot be read or validated."""


def parse_payload(text: str | bytes) -> HostFactsPayload:
    try:
        return HostFactsPayload.model_validate_json(text)
    except ValidationError as exc:
        raise PayloadError(f"Invalid fact upload: {exc}") from exc


def load_payload(path: Path) -> HostFactsPayload:
    try:
        content = path.read_bytes()
    except OSError as exc:
        raise PayloadError(f"Cannot read fact upload {path}: {exc}") from exc
    return parse_payload(content)
