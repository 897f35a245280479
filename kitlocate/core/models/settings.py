"""
Settings model — schema of the optional ``kitlocate.yml`` file.

Example::

    kit_root: "D:/SDKs/Windows Kits"
    architecture: arm64
    kit_version: 10.0.22621.0
    allow_missing: false

Every key is optional. Command-line flags override these values.
"""

from __future__ import annotations

from pydantic import BaseModel, ConfigDict, field_validator

from kitlocate.core.models.kit import DEFAULT_ARCHITECTURE


class Settings(BaseModel):
    """Per-user or per-project defaults for lookups."""

    model_config = ConfigDict(extra="forbid")

    kit_root: str | None = None
    architecture: str = DEFAULT_ARCHITECTURE
    kit_version: str | None = None
    allow_missing: bool = False

    @field_validator("kit_version", mode="before")
    @classmethod
    def _version_must_be_text(cls, v: object) -> object:
        # YAML reads an unquoted 10.10 as the float 10.1
        if v is not None and not isinstance(v, str):
            raise ValueError(
                f"kit_version must be a quoted string, e.g. kit_version: \"{v}\""
            )
        return v
