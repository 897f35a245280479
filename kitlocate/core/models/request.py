"""
Resolution request — everything one lookup needs, fixed up front.
"""

from __future__ import annotations

from pydantic import BaseModel, ConfigDict

from kitlocate.core.models.binary import Binary
from kitlocate.core.models.kit import DEFAULT_ARCHITECTURE, is_known_architecture


class ResolutionRequest(BaseModel):
    """A single tool lookup.

    ``kit_version`` of ``None`` means "most recent installed".
    """

    model_config = ConfigDict(frozen=True)

    binary: Binary
    architecture: str = DEFAULT_ARCHITECTURE
    kit_version: str | None = None
    allow_missing: bool = False

    @property
    def has_known_architecture(self) -> bool:
        return is_known_architecture(self.architecture)
