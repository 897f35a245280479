"""
kitlocate — CLI entrypoint.

Usage:
    kitlocate find signtool
    kitlocate find accevent.exe --arch arm64 --kit-version 10.0.22000.0
    kitlocate kits
    kitlocate config check
"""

from __future__ import annotations

import json
import os
import sys
from pathlib import Path

import click

from kitlocate import __version__
from kitlocate.core.observability.logging_config import (
    LOG_FILE_ENV,
    LOG_FILE_LEVEL_ENV,
    level_from_flags,
    setup_logging,
)


@click.group()
@click.version_option(version=__version__, prog_name="kitlocate")
@click.option("--verbose", "-v", is_flag=True, help="Enable verbose output.")
@click.option("--quiet", "-q", is_flag=True, help="Suppress non-essential output.")
@click.option("--debug", is_flag=True, help="Enable debug logging (very verbose).")
@click.option(
    "--config",
    "-c",
    "config_path",
    type=click.Path(exists=False),
    default=None,
    help="Path to kitlocate.yml (default: auto-detect).",
)
@click.pass_context
def cli(
    ctx: click.Context,
    verbose: bool,
    quiet: bool,
    debug: bool,
    config_path: str | None,
) -> None:
    """kitlocate — find tools inside Windows Kits installations."""
    ctx.ensure_object(dict)
    ctx.obj["quiet"] = quiet
    ctx.obj["config_path"] = Path(config_path) if config_path else None

    # ── Logging setup (once, at process start) ──────────────────
    setup_logging(
        level=level_from_flags(debug=debug, verbose=verbose, quiet=quiet),
        log_file=os.environ.get(LOG_FILE_ENV),
        log_file_level=os.environ.get(LOG_FILE_LEVEL_ENV),
    )


# ── Find ────────────────────────────────────────────────────────


@cli.command()
@click.argument("binary")
@click.option("--arch", "-a", "architecture", default=None, help="Architecture (default: x64).")
@click.option(
    "--kit-version", "-k", default=None, help="Exact kit version (default: most recent)."
)
@click.option(
    "--root",
    "-r",
    "kit_root",
    type=click.Path(file_okay=False),
    default=None,
    help="Windows Kits root (default: %ProgramFiles(x86)%\\Windows Kits).",
)
@click.option(
    "--allow-missing",
    is_flag=True,
    help="Print the path with a warning even if the tool does not exist.",
)
@click.option("--json-output", "--json", "as_json", is_flag=True, help="Output as JSON.")
@click.pass_context
def find(
    ctx: click.Context,
    binary: str,
    architecture: str | None,
    kit_version: str | None,
    kit_root: str | None,
    allow_missing: bool,
    as_json: bool,
) -> None:
    """Print the path of BINARY inside the most recent (or chosen) kit."""
    from kitlocate.core.use_cases.find_tool import run_find

    result = run_find(
        binary,
        architecture=architecture,
        kit_version=kit_version,
        kit_root=kit_root,
        # An absent flag defers to the settings file
        allow_missing=True if allow_missing else None,
        config_path=ctx.obj.get("config_path"),
    )

    if as_json:
        click.echo(json.dumps(result.to_dict(), indent=2))
        sys.exit(0 if result.ok else 1)

    if result.error:
        click.secho(f"❌ {result.error}", fg="red", err=True)
        sys.exit(1)

    if result.warning:
        click.secho(f"⚠️  Warning: {result.warning}", fg="yellow", err=True)

    click.echo(str(result.path))


# ── Kits ────────────────────────────────────────────────────────


@cli.command()
@click.option(
    "--root",
    "-r",
    "kit_root",
    type=click.Path(file_okay=False),
    default=None,
    help="Windows Kits root (default: auto-detect).",
)
@click.option("--json-output", "--json", "as_json", is_flag=True, help="Output as JSON.")
@click.pass_context
def kits(ctx: click.Context, kit_root: str | None, as_json: bool) -> None:
    """List installed kit versions."""
    from kitlocate.core.use_cases.list_kits import list_kits

    result = list_kits(kit_root=kit_root, config_path=ctx.obj.get("config_path"))

    if as_json:
        click.echo(json.dumps(result.to_dict(), indent=2))
        sys.exit(1 if result.error else 0)

    if result.error:
        click.secho(f"❌ {result.error}", fg="red", err=True)
        sys.exit(1)

    if not ctx.obj.get("quiet"):
        click.secho(f"📦 {result.kit_root}", fg="cyan", bold=True)

    if not result.versions:
        click.secho("⚠️  No kit versions installed", fg="yellow")
        return

    latest = result.latest
    for version in result.versions:
        if version == latest:
            click.secho(f"   • {version.name}  (latest)", fg="green")
        else:
            click.echo(f"   • {version.name}")

    if result.mixed_widths:
        click.echo()
        click.secho(
            "⚠️  Version names differ in digit width; 'latest' is picked by "
            "string order and may be wrong.",
            fg="yellow",
        )


# ── Binaries ────────────────────────────────────────────────────


@cli.command()
@click.option("--json-output", "--json", "as_json", is_flag=True, help="Output as JSON.")
def binaries(as_json: bool) -> None:
    """List well-known SDK binaries that can be named without .exe."""
    from kitlocate.core.models.binary import KNOWN_BINARIES

    if as_json:
        data = [
            {"name": name, "file": file_name, "description": description}
            for name, (file_name, description) in KNOWN_BINARIES.items()
        ]
        click.echo(json.dumps(data, indent=2))
        return

    click.secho("🔧 Well-known binaries:", fg="cyan", bold=True)
    for name, (file_name, description) in KNOWN_BINARIES.items():
        click.echo(f"   {name:<10} {file_name:<14} {description}")


# ── Config ──────────────────────────────────────────────────────


@cli.group()
def config() -> None:
    """Settings and installation checks."""


@config.command("check")
@click.option(
    "--root",
    "-r",
    "kit_root",
    type=click.Path(file_okay=False),
    default=None,
    help="Windows Kits root (default: auto-detect).",
)
@click.option("--json-output", "--json", "as_json", is_flag=True, help="Output as JSON.")
@click.pass_context
def config_check(ctx: click.Context, kit_root: str | None, as_json: bool) -> None:
    """Validate kitlocate.yml and the Windows Kits installation."""
    from kitlocate.core.use_cases.config_check import check_config

    result = check_config(config_path=ctx.obj.get("config_path"), kit_root=kit_root)

    if as_json:
        click.echo(json.dumps(result.to_dict(), indent=2))
        sys.exit(0 if result.valid else 1)

    if result.valid:
        click.secho("✅ Configuration is valid", fg="green", bold=True)
        click.echo(f"   Settings: {result.settings_path or '(defaults)'}")
        click.echo(f"   Kit root: {result.kit_root}")
        click.echo(f"   Versions: {len(result.versions)}")
    else:
        click.secho("❌ Configuration errors:", fg="red", bold=True)
        for err in result.errors:
            click.echo(f"   • {err}")

    if result.warnings:
        click.echo()
        click.secho("⚠️  Warnings:", fg="yellow")
        for warn in result.warnings:
            click.echo(f"   • {warn}")

    if not result.valid:
        click.echo()
        sys.exit(1)


if __name__ == "__main__":
    cli()
