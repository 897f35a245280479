"""
Kit locator — discover installed kit versions under an installation root.

Read-only: one directory listing per call, never cached, since kits
can be installed or removed between invocations.
"""

from __future__ import annotations

import logging
from collections.abc import Iterable, Sequence
from pathlib import Path

from kitlocate.core.errors import DirectoryNotFoundError, KitIOError
from kitlocate.core.models.kit import KIT_BIN_DIR, KIT_MAJOR_DIR, RESERVED_NAMES

logger = logging.getLogger(__name__)


def kit_bin_dir(root: Path) -> Path:
    """Return ``<root>/10/bin``, the directory holding one dir per version."""
    return root / KIT_MAJOR_DIR / KIT_BIN_DIR


def list_version_dirs(root: Path) -> list[Path]:
    """List the version directories of a Windows Kits installation.

    Keeps directories only, drops the architecture-named siblings
    (``arm``, ``arm64``, ``x64``, ``x86``), and sorts by directory name
    in plain string order. The last entry is the most recent kit.

    Args:
        root: Installation root (e.g. ``C:/Program Files (x86)/Windows Kits``).

    Returns:
        Version directories, ascending. May be empty.

    Raises:
        DirectoryNotFoundError: If ``<root>/10/bin`` is missing.
        KitIOError: If the directory cannot be read.
    """
    bin_dir = kit_bin_dir(root)

    try:
        entries = list(bin_dir.iterdir())
    except (FileNotFoundError, NotADirectoryError) as e:
        raise DirectoryNotFoundError(f"Kit bin directory not found: {bin_dir}", bin_dir) from e
    except OSError as e:
        raise KitIOError(f"Cannot read {bin_dir}: {e}", bin_dir) from e

    # is_dir() stats each entry; a listable but unsearchable dir fails here
    try:
        versions = [
            entry for entry in entries
            if entry.name not in RESERVED_NAMES and entry.is_dir()
        ]
    except OSError as e:
        raise KitIOError(f"Cannot inspect entries of {bin_dir}: {e}", bin_dir) from e
    versions.sort(key=lambda p: p.name)

    logger.debug(
        "Found %d kit versions in %s: %s",
        len(versions), bin_dir, [v.name for v in versions],
    )
    return versions


def latest_version(versions: Sequence[Path]) -> Path | None:
    """The most recent version directory, or None if there are none."""
    return versions[-1] if versions else None


def has_mixed_width_components(names: Iterable[str]) -> bool:
    """Whether string order may disagree with numeric version order.

    Version names are compared as plain strings, which only matches
    numeric order while every dotted component keeps the same digit
    width across versions (``10.0.9.0`` sorts after ``10.0.10.0``).
    This reports the condition; it does not reorder anything.
    """
    widths: dict[int, set[int]] = {}
    for name in names:
        for idx, part in enumerate(name.split(".")):
            if part.isdigit():
                widths.setdefault(idx, set()).add(len(part))
    return any(len(w) > 1 for w in widths.values())
