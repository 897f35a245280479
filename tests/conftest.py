"""
Shared test fixtures and configuration.
"""

from pathlib import Path

import pytest

from kitlocate.core.config.loader import KIT_ROOT_ENV
from kitlocate.core.observability.logging_config import LOG_LEVEL_ENV


def make_kit_tree(root: Path, versions: list[str], extra_dirs: tuple[str, ...] = ()) -> Path:
    """Create ``<root>/10/bin/<version>`` dirs plus any extra siblings."""
    bin_dir = root / "10" / "bin"
    bin_dir.mkdir(parents=True)
    for name in [*versions, *extra_dirs]:
        (bin_dir / name).mkdir()
    return bin_dir


@pytest.fixture(autouse=True)
def isolated_env(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> Path:
    """Run every test from an empty cwd with no kit-related env vars."""
    work = tmp_path / "work"
    work.mkdir()
    monkeypatch.chdir(work)
    monkeypatch.delenv(KIT_ROOT_ENV, raising=False)
    monkeypatch.delenv(LOG_LEVEL_ENV, raising=False)
    return work


@pytest.fixture
def make_kit(tmp_path: Path):
    """Factory building a kit tree under a fresh root; returns the root."""

    def _make(versions: list[str], extra_dirs: tuple[str, ...] = (), name: str = "kits") -> Path:
        root = tmp_path / name
        make_kit_tree(root, versions, extra_dirs)
        return root

    return _make


@pytest.fixture
def kit_root(tmp_path: Path) -> Path:
    """A Windows Kits root with two versions and an x64 sibling.

    Layout::

        10/bin/10.0.19041.0/
        10/bin/10.0.22000.0/x64/accevent.exe
        10/bin/x64/
    """
    root = tmp_path / "Windows Kits"
    bin_dir = make_kit_tree(root, ["10.0.19041.0", "10.0.22000.0"], extra_dirs=("x64",))
    tool_dir = bin_dir / "10.0.22000.0" / "x64"
    tool_dir.mkdir()
    (tool_dir / "accevent.exe").write_bytes(b"MZ")
    return root
