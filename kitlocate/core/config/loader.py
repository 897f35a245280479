"""
Configuration loader — settings file and installation root.

Settings come from an optional ``kitlocate.yml`` (YAML, validated
against the Settings model). The installation root is resolved once
per invocation, in precedence order:

    explicit --root  >  kit_root in settings  >  %ProgramFiles(x86)%/Windows Kits
"""

from __future__ import annotations

import logging
import os
from collections.abc import Mapping
from pathlib import Path

import yaml
from pydantic import ValidationError

from kitlocate.core.errors import ConfigError
from kitlocate.core.models.settings import Settings

logger = logging.getLogger(__name__)

# Default config filename
SETTINGS_FILE = "kitlocate.yml"

# Environment variable holding the default Program Files (x86) location
KIT_ROOT_ENV = "ProgramFiles(x86)"
WINDOWS_KITS_DIR = "Windows Kits"


def find_settings_file(start_dir: Path | None = None) -> Path | None:
    """Search for kitlocate.yml starting from the given directory, walking up.

    Args:
        start_dir: Directory to start searching from (default: cwd).

    Returns:
        Path to kitlocate.yml, or None if not found.
    """
    current = (start_dir or Path.cwd()).resolve()

    for _ in range(20):  # safety limit
        candidate = current / SETTINGS_FILE
        if candidate.is_file():
            return candidate
        parent = current.parent
        if parent == current:
            break  # filesystem root
        current = parent

    return None


def load_settings(path: Path | None = None, *, search: bool = True) -> Settings:
    """Load and validate settings.

    A missing file is not an error: built-in defaults apply.

    Args:
        path: Explicit path to a settings file. Must exist if given.
        search: When no path is given, search upward from cwd.

    Returns:
        Validated Settings model.

    Raises:
        ConfigError: If an explicit file is missing, or any file is invalid.
    """
    if path is None and search:
        path = find_settings_file()

    if path is None:
        logger.debug("No %s found, using defaults", SETTINGS_FILE)
        return Settings()

    if not path.is_file():
        raise ConfigError(f"Settings file not found: {path}")

    logger.debug("Loading settings from %s", path)

    try:
        raw = path.read_text(encoding="utf-8")
    except OSError as e:
        raise ConfigError(f"Cannot read {path}: {e}") from e

    try:
        data = yaml.safe_load(raw)
    except yaml.YAMLError as e:
        raise ConfigError(f"Invalid YAML in {path}: {e}") from e

    # An empty file is an empty mapping
    if data is None:
        data = {}

    if not isinstance(data, dict):
        raise ConfigError(f"Expected a YAML mapping in {path}, got {type(data).__name__}")

    try:
        settings = Settings.model_validate(data)
    except ValidationError as e:
        raise ConfigError(f"Invalid settings in {path}: {e}") from e

    logger.info("Loaded settings from %s", path)
    return settings


def resolve_kit_root(
    explicit: Path | str | None,
    settings: Settings,
    environ: Mapping[str, str] | None = None,
) -> Path:
    """Determine the Windows Kits installation root.

    Args:
        explicit: Root given on the command line, if any.
        settings: Loaded settings (may carry ``kit_root``).
        environ: Environment mapping (default: ``os.environ``).

    Returns:
        The installation root. Its existence is not checked here.

    Raises:
        ConfigError: If no source supplies a root.
    """
    if explicit:
        logger.debug("Kit root from command line: %s", explicit)
        return Path(explicit)

    if settings.kit_root:
        logger.debug("Kit root from settings: %s", settings.kit_root)
        return Path(settings.kit_root)

    env = os.environ if environ is None else environ
    program_files = env.get(KIT_ROOT_ENV)
    if not program_files:
        raise ConfigError(
            f"Cannot determine the Windows Kits root: {KIT_ROOT_ENV} is not set. "
            "Pass --root or set kit_root in kitlocate.yml."
        )

    root = Path(program_files) / WINDOWS_KITS_DIR
    logger.debug("Kit root from %s: %s", KIT_ROOT_ENV, root)
    return root
