"""
Find use case — the whole lookup pipeline for one invocation.

    settings → root → version listing → version selection
             → path composition → existence check

Every failure is captured on the result; nothing here raises.
"""

from __future__ import annotations

import logging
from collections.abc import Mapping
from dataclasses import dataclass
from pathlib import Path

from kitlocate.core.config.loader import load_settings, resolve_kit_root
from kitlocate.core.errors import KitError, NoVersionsAvailableError
from kitlocate.core.models.binary import parse_binary
from kitlocate.core.models.request import ResolutionRequest
from kitlocate.core.services.kit_locator import (
    has_mixed_width_components,
    kit_bin_dir,
    list_version_dirs,
)
from kitlocate.core.services.resolver import check_tool, resolve

logger = logging.getLogger(__name__)


@dataclass
class FindResult:
    """Result of the find use case."""

    request: ResolutionRequest | None = None
    kit_root: Path | None = None
    kit_version: str | None = None
    path: Path | None = None
    exists: bool = False
    warning: str | None = None
    error: KitError | None = None

    @property
    def ok(self) -> bool:
        return self.error is None and self.path is not None

    def to_dict(self) -> dict:
        result: dict = {
            "ok": self.ok,
            "kit_root": str(self.kit_root) if self.kit_root else None,
            "kit_version": self.kit_version,
            "path": str(self.path) if self.path else None,
            "exists": self.exists,
        }
        if self.request:
            result["architecture"] = self.request.architecture
            result["binary"] = self.request.binary.segment
        if self.warning:
            result["warning"] = self.warning
        if self.error:
            result["error"] = self.error.to_dict()
        return result


def run_find(
    binary: str,
    architecture: str | None = None,
    kit_version: str | None = None,
    kit_root: Path | str | None = None,
    allow_missing: bool | None = None,
    config_path: Path | None = None,
    environ: Mapping[str, str] | None = None,
) -> FindResult:
    """Locate a binary inside the Windows Kits installation.

    Arguments left as None fall back to the settings file, then to
    built-in defaults.

    Args:
        binary: Well-known tool name (``signtool``) or file name.
        architecture: Architecture segment (default ``x64``).
        kit_version: Exact kit version; None picks the most recent.
        kit_root: Explicit installation root.
        allow_missing: Report a missing tool as a warning, not an error.
        config_path: Explicit settings file.
        environ: Environment mapping (default: ``os.environ``).

    Returns:
        FindResult with the resolved path or the error.
    """
    result = FindResult()

    try:
        settings = load_settings(config_path)

        request = ResolutionRequest(
            binary=parse_binary(binary),
            architecture=architecture or settings.architecture,
            kit_version=kit_version if kit_version is not None else settings.kit_version,
            allow_missing=settings.allow_missing if allow_missing is None else allow_missing,
        )
        result.request = request

        if not request.has_known_architecture:
            logger.warning(
                "Unknown architecture '%s' (known: arm, arm64, x64, x86)",
                request.architecture,
            )

        # Root is settled once, here, and passed down explicitly
        root = resolve_kit_root(kit_root, settings, environ)
        result.kit_root = root

        versions = list_version_dirs(root)
        if has_mixed_width_components(v.name for v in versions):
            logger.info("Kit version names differ in digit width; 'latest' may be wrong")

        try:
            path = resolve(
                versions,
                request.kit_version,
                request.architecture,
                request.binary,
            )
        except NoVersionsAvailableError as e:
            raise NoVersionsAvailableError(kit_bin_dir(root)) from e

        result.path = path
        result.kit_version = _version_of(path, versions)

        check = check_tool(path, request.allow_missing)
        result.exists = check.exists
        result.warning = check.warning

    except KitError as e:
        logger.debug("Lookup failed: %s", e)
        result.error = e
        return result

    logger.info("Resolved %s → %s", binary, result.path)
    return result


def _version_of(path: Path, versions: list[Path]) -> str | None:
    """Name of the version directory that ``path`` sits under."""
    for version_dir in versions:
        if version_dir in path.parents:
            return version_dir.name
    return None
