"""
Error taxonomy — every way a lookup can fail, as structured exceptions.

Raised by the services, caught by the use cases, formatted by the CLI.
Each error carries a stable ``kind`` string and its own fields so
callers never have to parse messages.
"""

from __future__ import annotations

from pathlib import Path
from typing import Any


class KitError(Exception):
    """Base class for all kitlocate failures."""

    kind = "error"

    def to_dict(self) -> dict[str, Any]:
        return {"kind": self.kind, "message": str(self)}


class ConfigError(KitError):
    """Raised when the installation root or settings cannot be determined."""

    kind = "configuration"


class InvalidBinaryError(KitError):
    """Raised when a binary name cannot be used as a path segment."""

    kind = "invalid_binary"


class InvalidArchitectureError(KitError):
    """Raised when an architecture is not a single plain directory name."""

    kind = "invalid_architecture"


# ── Lookup ──────────────────────────────────────────────────────


class KitLookupError(KitError):
    """The version-listing directory could not be read."""

    kind = "lookup"

    def __init__(self, message: str, path: Path) -> None:
        super().__init__(message)
        self.path = path

    def to_dict(self) -> dict[str, Any]:
        return {**super().to_dict(), "path": str(self.path)}


class DirectoryNotFoundError(KitLookupError):
    """``<root>/10/bin`` does not exist or is not a directory."""


class KitIOError(KitLookupError):
    """Any other filesystem failure (permissions, I/O)."""


# ── Resolution ──────────────────────────────────────────────────


class VersionNotFoundError(KitError):
    """An explicitly requested kit version is not installed.

    ``suggested`` is the most recent installed version, or ``None`` when
    no versions are installed at all.
    """

    kind = "version_not_found"

    def __init__(self, desired: str, suggested: str | None = None) -> None:
        if suggested is None:
            message = f"Kit version {desired} not found: no kit versions are installed"
        else:
            message = f"Kit version {desired} not found (most recent is {suggested})"
        super().__init__(message)
        self.desired = desired
        self.suggested = suggested

    def to_dict(self) -> dict[str, Any]:
        return {
            **super().to_dict(),
            "desired": self.desired,
            "suggested": self.suggested,
        }


class NoVersionsAvailableError(KitError):
    """The kit bin directory exists but holds no version directories."""

    kind = "no_versions"

    def __init__(self, bin_dir: Path | None = None) -> None:
        where = f" in {bin_dir}" if bin_dir else ""
        super().__init__(f"No kit versions found{where}")
        self.bin_dir = bin_dir

    def to_dict(self) -> dict[str, Any]:
        return {
            **super().to_dict(),
            "bin_dir": str(self.bin_dir) if self.bin_dir else None,
        }


class ToolNotFoundError(KitError):
    """The composed tool path does not exist."""

    kind = "tool_not_found"

    def __init__(self, path: Path) -> None:
        super().__init__(f"Tool not found: {path}")
        self.path = path

    def to_dict(self) -> dict[str, Any]:
        return {**super().to_dict(), "path": str(self.path)}
