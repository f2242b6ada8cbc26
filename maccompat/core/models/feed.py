"""
Feed models — the parsed SOFA macOS data feed.

Only the parts of the feed the compatibility check reads are modelled;
everything else in the document is ignored. Field aliases match the
published JSON keys exactly.
"""

from __future__ import annotations

from typing import Any

from pydantic import BaseModel, ConfigDict, Field, ValidationInfo, field_validator


class OSVersionRecord(BaseModel):
    """One entry of ``OSVersions`` (newest first, by feed convention)."""

    model_config = ConfigDict(populate_by_name=True, extra="ignore")

    os_version: str = Field(default="", alias="OSVersion")


class ModelSupportRecord(BaseModel):
    """Support window for one hardware model identifier."""

    model_config = ConfigDict(populate_by_name=True, extra="ignore")

    supported_os: list[str] = Field(default_factory=list, alias="SupportedOS")

    @field_validator("supported_os", mode="before")
    @classmethod
    def null_is_empty(cls, value: Any) -> Any:
        return [] if value is None else value

    @property
    def newest_supported(self) -> str | None:
        """First (newest) supported OS version, or None if the list is empty."""
        return self.supported_os[0] if self.supported_os else None


class FeedDocument(BaseModel):
    """Root of the feed document.

    ``os_versions`` keeps the order the feed publishes; it is never sorted.
    ``models`` keys are exact hardware model identifiers (``Mac14,2``).
    """

    model_config = ConfigDict(populate_by_name=True, extra="ignore")

    os_versions: list[OSVersionRecord] = Field(default_factory=list, alias="OSVersions")
    models: dict[str, ModelSupportRecord] = Field(default_factory=dict, alias="Models")

    @field_validator("os_versions", "models", mode="before")
    @classmethod
    def null_is_empty(cls, value: Any, info: ValidationInfo) -> Any:
        if value is None:
            return [] if info.field_name == "os_versions" else {}
        return value

    @property
    def newest_published(self) -> str | None:
        """The feed's current newest release, or None for an empty feed."""
        return self.os_versions[0].os_version if self.os_versions else None

    def lookup_model(self, identifier: str) -> ModelSupportRecord | None:
        """Exact-match lookup of a hardware model identifier."""
        return self.models.get(identifier)

    @classmethod
    def from_bytes(cls, body: bytes) -> FeedDocument:
        """Parse raw feed bytes.

        Raises:
            pydantic.ValidationError: If the body is not JSON or not an
                object of the expected shape.
        """
        return cls.model_validate_json(body)
