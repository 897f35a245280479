"""
Config check use case — validate settings and the kit installation.
"""

from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass, field
from pathlib import Path

from kitlocate.core.config.loader import find_settings_file, load_settings, resolve_kit_root
from kitlocate.core.errors import KitError
from kitlocate.core.models.kit import (
    ARCHITECTURES,
    check_architecture,
    is_known_architecture,
)
from kitlocate.core.models.settings import Settings
from kitlocate.core.services.kit_locator import (
    has_mixed_width_components,
    latest_version,
    list_version_dirs,
)


@dataclass
class ConfigCheckResult:
    """Result of configuration validation."""

    valid: bool = False
    settings: Settings | None = None
    settings_path: Path | None = None
    kit_root: Path | None = None
    versions: list[str] = field(default_factory=list)
    errors: list[str] = field(default_factory=list)
    warnings: list[str] = field(default_factory=list)

    def to_dict(self) -> dict:
        return {
            "valid": self.valid,
            "settings_path": str(self.settings_path) if self.settings_path else None,
            "kit_root": str(self.kit_root) if self.kit_root else None,
            "versions": self.versions,
            "errors": self.errors,
            "warnings": self.warnings,
            "settings": self.settings.model_dump() if self.settings else None,
        }


def check_config(
    config_path: Path | None = None,
    kit_root: Path | str | None = None,
    environ: Mapping[str, str] | None = None,
) -> ConfigCheckResult:
    """Validate settings and installation, and report issues.

    Args:
        config_path: Optional explicit path to kitlocate.yml.
        kit_root: Optional explicit installation root.
        environ: Environment mapping (default: ``os.environ``).

    Returns:
        ConfigCheckResult with validation status and any issues.
    """
    result = ConfigCheckResult()

    # Load settings
    if config_path is None:
        config_path = find_settings_file()
    result.settings_path = config_path

    try:
        settings = load_settings(config_path, search=False)
        result.settings = settings
    except KitError as e:
        result.errors.append(str(e))
        return result

    # Root and installation
    try:
        root = resolve_kit_root(kit_root, settings, environ)
        result.kit_root = root
        versions = list_version_dirs(root)
    except KitError as e:
        result.errors.append(str(e))
        return result

    result.versions = [v.name for v in versions]

    # Semantic checks
    if not versions:
        result.warnings.append("No kit versions installed. Every lookup will fail.")

    if has_mixed_width_components(result.versions):
        result.warnings.append(
            "Kit version names differ in digit width; "
            "the most recent version may be picked incorrectly."
        )

    if settings.kit_version and settings.kit_version not in result.versions:
        latest = latest_version(versions)
        hint = f" (most recent is {latest.name})" if latest else ""
        result.warnings.append(
            f"Configured kit_version {settings.kit_version} is not installed{hint}"
        )

    try:
        check_architecture(settings.architecture)
    except KitError as e:
        result.errors.append(str(e))

    if not is_known_architecture(settings.architecture):
        result.warnings.append(
            f"Unknown architecture '{settings.architecture}' "
            f"(known: {', '.join(ARCHITECTURES)})"
        )

    # Result
    result.valid = len(result.errors) == 0
    return result
