"""
Kit layout constants — what lives directly under ``<root>/10/bin``.

A Windows Kits bin directory looks like::

    10/bin/
        10.0.19041.0/
        10.0.22000.0/
        arm/        (stray XAML DLLs)
        arm64/      (ditto)
        x64/        (ditto)
        x86/        (ditto)

The architecture-named siblings are not kit versions.
"""

from __future__ import annotations

from pathlib import PureWindowsPath

from kitlocate.core.errors import InvalidArchitectureError

KIT_MAJOR_DIR = "10"
KIT_BIN_DIR = "bin"

ARCHITECTURES: tuple[str, ...] = ("arm", "arm64", "x64", "x86")
DEFAULT_ARCHITECTURE = "x64"

# Exact, case-sensitive names skipped when listing versions
RESERVED_NAMES: frozenset[str] = frozenset(ARCHITECTURES)


def is_known_architecture(architecture: str) -> bool:
    return architecture in ARCHITECTURES


def check_architecture(architecture: str) -> str:
    """Ensure the architecture is one plain directory name.

    Unknown names are allowed; anything that would leave the version
    directory once joined (separators, drives, ``.``/``..``) is not.

    Raises:
        InvalidArchitectureError: If the value is not a single segment.
    """
    if (
        not architecture
        or architecture in (".", "..")
        or "/" in architecture
        or "\\" in architecture
        or PureWindowsPath(architecture).drive
    ):
        raise InvalidArchitectureError(
            f"Architecture must be a single directory name, got '{architecture}'"
        )
    return architecture
