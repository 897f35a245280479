"""
List use case — report every installed kit version.
"""

from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass, field
from pathlib import Path

from kitlocate.core.config.loader import load_settings, resolve_kit_root
from kitlocate.core.errors import KitError
from kitlocate.core.services.kit_locator import (
    has_mixed_width_components,
    kit_bin_dir,
    latest_version,
    list_version_dirs,
)


@dataclass
class KitListResult:
    """Result of the list use case."""

    kit_root: Path | None = None
    versions: list[Path] = field(default_factory=list)
    mixed_widths: bool = False
    error: KitError | None = None

    @property
    def latest(self) -> Path | None:
        return latest_version(self.versions)

    def to_dict(self) -> dict:
        if self.error:
            return {"error": self.error.to_dict()}
        latest = self.latest
        return {
            "kit_root": str(self.kit_root) if self.kit_root else None,
            "bin_dir": str(kit_bin_dir(self.kit_root)) if self.kit_root else None,
            "versions": [
                {"name": v.name, "path": str(v), "latest": v == latest}
                for v in self.versions
            ],
            "latest": latest.name if latest else None,
            "mixed_widths": self.mixed_widths,
        }


def list_kits(
    kit_root: Path | str | None = None,
    config_path: Path | None = None,
    environ: Mapping[str, str] | None = None,
) -> KitListResult:
    """List installed kit versions, oldest first.

    Args:
        kit_root: Explicit installation root.
        config_path: Explicit settings file.
        environ: Environment mapping (default: ``os.environ``).
    """
    result = KitListResult()

    try:
        settings = load_settings(config_path)
        root = resolve_kit_root(kit_root, settings, environ)
        result.kit_root = root
        result.versions = list_version_dirs(root)
    except KitError as e:
        result.error = e
        return result

    result.mixed_widths = has_mixed_width_components(v.name for v in result.versions)
    return result
