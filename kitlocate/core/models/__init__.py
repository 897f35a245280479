"""
Domain models — pydantic types for kit lookups.

All models are re-exported here for convenient access:

    from kitlocate.core.models import ResolutionRequest, KnownBinary, Settings
"""

from kitlocate.core.models.binary import (
    KNOWN_BINARIES,
    Binary,
    CustomPath,
    KnownBinary,
    parse_binary,
)
from kitlocate.core.models.kit import (
    ARCHITECTURES,
    DEFAULT_ARCHITECTURE,
    RESERVED_NAMES,
    is_known_architecture,
)
from kitlocate.core.models.request import ResolutionRequest
from kitlocate.core.models.settings import Settings

__all__ = [
    # kit.py
    "ARCHITECTURES",
    # binary.py
    "Binary",
    "CustomPath",
    "DEFAULT_ARCHITECTURE",
    "KNOWN_BINARIES",
    "KnownBinary",
    "RESERVED_NAMES",
    # request.py
    "ResolutionRequest",
    # settings.py
    "Settings",
    "is_known_architecture",
    "parse_binary",
]
