"""
Tests for use cases — find pipeline, kit listing, config check.
"""

import errno
import json
import logging
from pathlib import Path

from kitlocate.core.config.loader import KIT_ROOT_ENV
from kitlocate.core.errors import (
    ConfigError,
    DirectoryNotFoundError,
    InvalidArchitectureError,
    InvalidBinaryError,
    KitIOError,
    NoVersionsAvailableError,
    ToolNotFoundError,
    VersionNotFoundError,
)
from kitlocate.core.use_cases.config_check import check_config
from kitlocate.core.use_cases.find_tool import run_find
from kitlocate.core.use_cases.list_kits import list_kits

# ── Find ─────────────────────────────────────────────────────────


class TestRunFind:
    def test_latest_kit(self, kit_root: Path):
        result = run_find("accevent.exe", kit_root=kit_root)
        assert result.ok
        assert result.exists
        assert result.warning is None
        assert result.kit_version == "10.0.22000.0"
        assert result.path == kit_root / "10" / "bin" / "10.0.22000.0" / "x64" / "accevent.exe"

    def test_known_short_name(self, kit_root: Path):
        result = run_find("accevent", kit_root=kit_root)
        assert result.ok
        assert result.path.name == "accevent.exe"

    def test_missing_tool_fails(self, kit_root: Path):
        result = run_find("doesnotexist.exe", kit_root=kit_root)
        assert not result.ok
        assert isinstance(result.error, ToolNotFoundError)
        assert result.error.path.name == "doesnotexist.exe"

    def test_missing_tool_allowed(self, kit_root: Path):
        result = run_find("doesnotexist.exe", kit_root=kit_root, allow_missing=True)
        assert result.ok
        assert not result.exists
        assert "doesnotexist.exe" in result.warning
        assert result.path.parts[-3:] == ("10.0.22000.0", "x64", "doesnotexist.exe")

    def test_absent_version(self, kit_root: Path):
        result = run_find("accevent.exe", kit_version="10.0.12345.0", kit_root=kit_root)
        assert isinstance(result.error, VersionNotFoundError)
        assert result.error.desired == "10.0.12345.0"
        assert result.error.suggested == "10.0.22000.0"

    def test_explicit_older_version(self, kit_root: Path):
        result = run_find(
            "accevent.exe", kit_version="10.0.19041.0", kit_root=kit_root, allow_missing=True
        )
        assert result.ok
        assert result.kit_version == "10.0.19041.0"
        assert not result.exists

    def test_architecture(self, kit_root: Path):
        result = run_find("accevent.exe", architecture="arm64", kit_root=kit_root)
        assert isinstance(result.error, ToolNotFoundError)
        assert result.error.path.parent.name == "arm64"

    def test_unknown_architecture_still_used(self, kit_root: Path, caplog):
        with caplog.at_level(logging.WARNING):
            result = run_find("a.exe", architecture="riscv", kit_root=kit_root, allow_missing=True)
        assert result.ok
        assert result.path.parent.name == "riscv"
        assert "Unknown architecture" in caplog.text

    def test_architecture_cannot_escape_kit(self, kit_root: Path, tmp_path: Path):
        for arch in (str(tmp_path / "elsewhere"), "..", "x64/../../.."):
            result = run_find("evil.exe", architecture=arch, kit_root=kit_root, allow_missing=True)
            assert not result.ok
            assert isinstance(result.error, InvalidArchitectureError)
            assert result.path is None

    def test_permission_error_on_entry_is_captured(self, kit_root: Path, monkeypatch):
        real_is_dir = Path.is_dir

        def denied(self, *args, **kwargs):
            if self.name == "10.0.19041.0":
                raise PermissionError(errno.EACCES, "Permission denied", str(self))
            return real_is_dir(self, *args, **kwargs)

        monkeypatch.setattr(Path, "is_dir", denied)
        result = run_find("signtool", kit_root=kit_root)
        assert isinstance(result.error, KitIOError)
        assert result.to_dict()["error"]["kind"] == "lookup"

    def test_no_versions(self, make_kit):
        root = make_kit([], extra_dirs=("x64",))
        result = run_find("signtool", kit_root=root)
        assert isinstance(result.error, NoVersionsAvailableError)
        assert result.error.bin_dir == root / "10" / "bin"

    def test_no_versions_with_requested_version(self, make_kit):
        root = make_kit([])
        result = run_find("signtool", kit_version="10.0.19041.0", kit_root=root)
        assert isinstance(result.error, VersionNotFoundError)
        assert result.error.suggested is None

    def test_missing_root(self, tmp_path: Path):
        result = run_find("signtool", kit_root=tmp_path / "absent")
        assert isinstance(result.error, DirectoryNotFoundError)

    def test_no_root_source(self):
        result = run_find("signtool", environ={})
        assert isinstance(result.error, ConfigError)

    def test_root_from_environment(self, tmp_path: Path, kit_root: Path):
        # kit_root fixture lives at <tmp>/Windows Kits
        result = run_find("accevent", environ={KIT_ROOT_ENV: str(tmp_path)})
        assert result.ok
        assert result.kit_root == kit_root

    def test_invalid_binary(self, kit_root: Path):
        result = run_find("", kit_root=kit_root)
        assert isinstance(result.error, InvalidBinaryError)

    def test_settings_supply_defaults(self, kit_root: Path, tmp_path: Path):
        config = tmp_path / "custom.yml"
        config.write_text(
            f"kit_root: '{kit_root.as_posix()}'\n"
            "kit_version: 10.0.19041.0\n"
            "allow_missing: true\n"
        )
        result = run_find("accevent", config_path=config, environ={})
        assert result.ok
        assert result.kit_version == "10.0.19041.0"
        assert result.warning

    def test_arguments_override_settings(self, kit_root: Path, tmp_path: Path):
        config = tmp_path / "custom.yml"
        config.write_text("kit_version: 10.0.19041.0\narchitecture: arm\n")
        result = run_find(
            "accevent",
            kit_version="10.0.22000.0",
            architecture="x64",
            kit_root=kit_root,
            config_path=config,
        )
        assert result.ok
        assert result.exists

    def test_to_dict_success(self, kit_root: Path):
        data = run_find("accevent", kit_root=kit_root).to_dict()
        assert data["ok"] is True
        assert data["kit_version"] == "10.0.22000.0"
        assert data["binary"] == "accevent.exe"
        assert data["architecture"] == "x64"
        assert "error" not in data
        json.dumps(data)

    def test_to_dict_error(self, kit_root: Path):
        data = run_find("accevent", kit_version="1.0", kit_root=kit_root).to_dict()
        assert data["ok"] is False
        assert data["error"]["kind"] == "version_not_found"
        assert data["error"]["suggested"] == "10.0.22000.0"


# ── List ─────────────────────────────────────────────────────────


class TestListKits:
    def test_lists_versions(self, kit_root: Path):
        result = list_kits(kit_root=kit_root)
        assert result.error is None
        assert [v.name for v in result.versions] == ["10.0.19041.0", "10.0.22000.0"]
        assert result.latest.name == "10.0.22000.0"
        assert not result.mixed_widths

    def test_to_dict_marks_latest(self, kit_root: Path):
        data = list_kits(kit_root=kit_root).to_dict()
        assert data["latest"] == "10.0.22000.0"
        assert [v["latest"] for v in data["versions"]] == [False, True]

    def test_mixed_widths_flagged(self, make_kit):
        root = make_kit(["10.0.9.0", "10.0.10.0"])
        result = list_kits(kit_root=root)
        assert result.mixed_widths
        # String order is kept as-is
        assert result.latest.name == "10.0.9.0"

    def test_error(self, tmp_path: Path):
        result = list_kits(kit_root=tmp_path / "absent")
        assert isinstance(result.error, DirectoryNotFoundError)
        assert result.to_dict()["error"]["kind"] == "lookup"


# ── Config check ─────────────────────────────────────────────────


class TestCheckConfig:
    def test_valid_installation(self, kit_root: Path):
        result = check_config(kit_root=kit_root)
        assert result.valid
        assert result.settings_path is None
        assert result.versions == ["10.0.19041.0", "10.0.22000.0"]
        assert result.warnings == []

    def test_invalid_settings(self, tmp_path: Path):
        config = tmp_path / "bad.yml"
        config.write_text("- not a mapping\n")
        result = check_config(config_path=config)
        assert not result.valid
        assert "mapping" in result.errors[0]

    def test_no_root(self):
        result = check_config(environ={})
        assert not result.valid
        assert result.errors

    def test_warns_when_empty(self, make_kit):
        result = check_config(kit_root=make_kit([]))
        assert result.valid
        assert any("No kit versions" in w for w in result.warnings)

    def test_warns_on_mixed_widths(self, make_kit):
        result = check_config(kit_root=make_kit(["10.0.9.0", "10.0.10.0"]))
        assert any("digit width" in w for w in result.warnings)

    def test_warns_on_configured_version_and_arch(self, kit_root: Path, tmp_path: Path):
        config = tmp_path / "custom.yml"
        config.write_text("kit_version: 10.0.1.0\narchitecture: mips\n")
        result = check_config(config_path=config, kit_root=kit_root)
        assert result.valid
        assert any("10.0.1.0" in w and "10.0.22000.0" in w for w in result.warnings)
        assert any("mips" in w for w in result.warnings)

    def test_configured_architecture_must_be_one_segment(self, kit_root: Path, tmp_path: Path):
        config = tmp_path / "custom.yml"
        config.write_text("architecture: ../x64\n")
        result = check_config(config_path=config, kit_root=kit_root)
        assert not result.valid
        assert any("single directory name" in e for e in result.errors)
