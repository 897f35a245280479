"""
Binary model — what to look for inside ``<version>/<arch>/``.

A binary is either one of the well-known SDK tools (looked up by short
name, e.g. ``signtool``) or an arbitrary file name given verbatim.
Both expose ``segment``, the path segment appended to the architecture
directory.
"""

from __future__ import annotations

from pathlib import PurePosixPath, PureWindowsPath
from typing import Annotated, Literal, Union

from pydantic import BaseModel, ConfigDict, Field, ValidationError, field_validator

from kitlocate.core.errors import InvalidBinaryError

# short name → (file name, description)
KNOWN_BINARIES: dict[str, tuple[str, str]] = {
    "accevent":  ("accevent.exe",  "Accessible Event Watcher"),
    "certmgr":   ("certmgr.exe",   "Certificate Manager"),
    "dxc":       ("dxc.exe",       "DirectX Shader Compiler"),
    "fxc":       ("fxc.exe",       "Effect-Compiler Tool"),
    "inspect":   ("inspect.exe",   "UI Automation Inspect"),
    "makeappx":  ("makeappx.exe",  "App Packager"),
    "makecert":  ("makecert.exe",  "Certificate Creation Tool"),
    "makepri":   ("makepri.exe",   "Package Resource Index generator"),
    "mc":        ("mc.exe",        "Message Compiler"),
    "midl":      ("midl.exe",      "Microsoft Interface Definition Language compiler"),
    "mt":        ("mt.exe",        "Manifest Tool"),
    "pvk2pfx":   ("pvk2pfx.exe",   "PVK to PFX converter"),
    "rc":        ("rc.exe",        "Resource Compiler"),
    "signtool":  ("signtool.exe",  "Sign Tool"),
    "tracewpp":  ("tracewpp.exe",  "WPP trace preprocessor"),
    "uuidgen":   ("uuidgen.exe",   "UUID generator"),
}


class KnownBinary(BaseModel):
    """A well-known SDK tool, referenced by short name."""

    model_config = ConfigDict(frozen=True)

    kind: Literal["known"] = "known"
    name: str

    @field_validator("name")
    @classmethod
    def _must_be_known(cls, v: str) -> str:
        if v not in KNOWN_BINARIES:
            raise ValueError(f"unknown binary '{v}'")
        return v

    @property
    def segment(self) -> str:
        return KNOWN_BINARIES[self.name][0]

    @property
    def description(self) -> str:
        return KNOWN_BINARIES[self.name][1]


class CustomPath(BaseModel):
    """An arbitrary file name (or relative path) under the architecture dir."""

    model_config = ConfigDict(frozen=True)

    kind: Literal["custom"] = "custom"
    path: str

    @field_validator("path")
    @classmethod
    def _must_be_relative(cls, v: str) -> str:
        if not v:
            raise ValueError("binary name must not be empty")
        # Joining an absolute path would silently discard the kit directory
        if PurePosixPath(v).is_absolute() or PureWindowsPath(v).anchor:
            raise ValueError(f"binary must be a relative name, got '{v}'")
        return v

    @property
    def segment(self) -> str:
        return self.path


Binary = Annotated[Union[KnownBinary, CustomPath], Field(discriminator="kind")]


def parse_binary(text: str) -> KnownBinary | CustomPath:
    """Turn user input into a binary reference.

    ``signtool`` and ``signtool.exe`` both map to the known tool; any
    other name is kept verbatim as a custom path. Matching is
    case-sensitive.

    Raises:
        InvalidBinaryError: If the name is empty or absolute.
    """
    if text in KNOWN_BINARIES:
        return KnownBinary(name=text)
    if text.endswith(".exe") and text[: -len(".exe")] in KNOWN_BINARIES:
        return KnownBinary(name=text[: -len(".exe")])

    try:
        return CustomPath(path=text)
    except ValidationError as e:
        message = e.errors()[0]["msg"].removeprefix("Value error, ")
        raise InvalidBinaryError(message) from e
