"""Pydantic models describing a host fact upload document."""

from __future__ import annotations

from pydantic import BaseModel, ConfigDict, Field, field_validator


def _blank_to_none(value: object) -> object:
    if isinstance(value, str):
        stripped = value.strip()
        return stripped or None
    return value


class UploadBaseModel(BaseModel):
    model_config = ConfigDict(extra="ignore", populate_by_name=True)


class HostFactsPayload(UploadBaseModel):
    """Facts reported for one host.

    ``certname`` wins over ``name`` as the host identity when both are given.
    ``type`` selects the importer; an absent type means the default importer.
    """

    name: str = Field(min_length=1)
    certname: str | None = None
    importer_type: str | None = Field(default=None, alias="type")
    facts: dict[str, object] = Field(default_factory=dict)

    _normalize_optional = field_validator("certname", "importer_type", mode="before")(
        _blank_to_none
    )

    @field_validator("name", mode="before")
    @classmethod
    def _strip_name(cls, value: object) -> object:
        return value.strip() if isinstance(value, str) else value

    @property
    def host_name(self) -> str:
        return self.certname or self.name
