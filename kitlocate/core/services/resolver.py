"""
Resolver — pick a kit version and compose the tool path.

``resolve`` is pure: it works on an already-listed version set and
never touches the filesystem. ``check_tool`` applies the existence
policy to the composed path.
"""

from __future__ import annotations

import logging
from collections.abc import Sequence
from dataclasses import dataclass
from pathlib import Path

from kitlocate.core.errors import (
    KitIOError,
    NoVersionsAvailableError,
    ToolNotFoundError,
    VersionNotFoundError,
)
from kitlocate.core.models.binary import CustomPath, KnownBinary
from kitlocate.core.models.kit import check_architecture

logger = logging.getLogger(__name__)


def select_version(
    versions: Sequence[Path],
    requested_version: str | None = None,
) -> Path:
    """Choose a version directory.

    With a requested version, the entry whose name matches exactly
    (case-sensitive) wins, wherever it sits in the sequence. Without
    one, the last (most recent) entry wins.

    Raises:
        VersionNotFoundError: Requested version absent. ``suggested`` is
            the most recent version, or None when the set is empty.
        NoVersionsAvailableError: No version requested and the set is empty.
    """
    if requested_version is not None:
        for version_dir in versions:
            if version_dir.name == requested_version:
                return version_dir
        suggested = versions[-1].name if versions else None
        raise VersionNotFoundError(requested_version, suggested)

    if not versions:
        raise NoVersionsAvailableError()
    return versions[-1]


def resolve(
    versions: Sequence[Path],
    requested_version: str | None,
    architecture: str,
    binary: KnownBinary | CustomPath,
) -> Path:
    """Compose ``<version_dir>/<architecture>/<binary>``.

    The path is returned whether or not it exists; see ``check_tool``.

    Raises:
        InvalidArchitectureError: The architecture is not a single segment.
    """
    check_architecture(architecture)
    selected = select_version(versions, requested_version)
    path = selected / architecture / binary.segment
    logger.debug("Selected kit %s, composed %s", selected.name, path)
    return path


@dataclass(frozen=True)
class ToolCheck:
    """Outcome of the existence check on a composed path."""

    path: Path
    exists: bool
    warning: str | None = None


def check_tool(path: Path, allow_missing: bool = False) -> ToolCheck:
    """Apply the existence policy to a composed tool path.

    Raises:
        ToolNotFoundError: The path is missing and allow_missing is off.
        KitIOError: The existence check itself failed.
    """
    try:
        exists = path.exists()
    except OSError as e:
        raise KitIOError(f"Cannot check {path}: {e}", path) from e

    if exists:
        return ToolCheck(path=path, exists=True)

    if allow_missing:
        warning = f"Tool not found: {path}"
        logger.debug("Tolerating missing tool %s", path)
        return ToolCheck(path=path, exists=False, warning=warning)

    raise ToolNotFoundError(path)
