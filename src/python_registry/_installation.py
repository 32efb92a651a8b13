"""Managed Python installations: identity keys, architectures and the on-disk install directory."""

from __future__ import annotations

import logging
import os
import re
import sys
from dataclasses import dataclass, replace
from enum import Enum
from pathlib import Path
from typing import TYPE_CHECKING, Final

from platformdirs import user_data_path

from ._version import PythonVersion

if TYPE_CHECKING:
    from collections.abc import Mapping

_DC_KW = {"frozen": True, "kw_only": True, "slots": True} if sys.version_info >= (3, 10) else {"frozen": True}

_LOGGER: Final[logging.Logger] = logging.getLogger(__name__)
_INSTALL_DIR_RE: Final[re.Pattern[str]] = re.compile(
    r"""
    ^
    (?P<impl>[a-z]+)      # implementation
    -(?P<version>[^-+]+)  # version
    (?P<variants>(?:\+[a-z]+)*)  # build variants, e.g. +freethreaded
    -(?P<os>[a-z0-9]+)    # operating system
    -(?P<arch>[a-z0-9_]+) # architecture family
    -(?P<libc>[a-z0-9]+)  # libc, ``none`` on Windows
    $
    """,
    re.VERBOSE,
)
_ARCH_ALIASES: Final[dict[str, str]] = {
    "amd64": "x86_64",
    "x64": "x86_64",
    "arm64": "aarch64",
    "x86": "i686",
    "i386": "i686",
    "i586": "i686",
}
_POINTER_WIDTH: Final[dict[str, int]] = {
    "x86_64": 64,
    "aarch64": 64,
    "riscv64": 64,
    "powerpc64": 64,
    "powerpc64le": 64,
    "s390x": 64,
    "i686": 32,
    "armv7": 32,
    "powerpc": 32,
}


class ImplementationName(Enum):
    CPYTHON = "cpython"
    PYPY = "pypy"
    GRAALPY = "graalpy"

    @property
    def pretty(self) -> str:
        return {"cpython": "CPython", "pypy": "PyPy", "graalpy": "GraalPy"}[self.value]

    @property
    def executable_name(self) -> str:
        return "python" if self is ImplementationName.CPYTHON else self.value

    def __str__(self) -> str:
        return self.value


@dataclass(**_DC_KW)
class Arch:
    """An architecture family such as ``x86_64`` or ``i686``."""

    family: str

    @classmethod
    def from_string(cls, arch: str) -> Arch:
        low = arch.strip().lower()
        if not low:
            msg = "empty architecture"
            raise ValueError(msg)
        return cls(family=_ARCH_ALIASES.get(low, low))

    @property
    def pointer_width(self) -> int | None:
        """``32`` or ``64``, ``None`` when the family is not known."""
        return _POINTER_WIDTH.get(self.family)

    def __str__(self) -> str:
        return self.family


@dataclass(**_DC_KW)
class PythonInstallationKey:
    implementation: ImplementationName
    version: PythonVersion
    arch: Arch

    @property
    def sys_version(self) -> str:
        return self.version.sys_version

    def __str__(self) -> str:
        return f"{self.implementation}-{self.version}-{self.arch}"


@dataclass(**_DC_KW)
class ManagedPythonInstallation:
    """A Python installed into a directory we manage, with optional download provenance."""

    key: PythonInstallationKey
    path: Path
    url: str | None = None
    sha256: str | None = None

    def executable(self, windowed: bool) -> Path:  # noqa: FBT001
        name = self.key.implementation.executable_name
        if windowed:
            name += "w"
        return self.path / f"{name}.exe"


def parse_install_dir_name(name: str) -> PythonInstallationKey:
    """Parse a ``<impl>-<version>-<os>-<arch>-<libc>`` directory name into its key."""
    if not (match := _INSTALL_DIR_RE.match(name)):
        msg = f"invalid installation directory name {name!r}"
        raise ValueError(msg)
    try:
        implementation = ImplementationName(match["impl"])
    except ValueError:
        msg = f"unknown implementation {match['impl']!r} in {name!r}"
        raise ValueError(msg) from None
    version = PythonVersion.from_string(match["version"])
    for variant in filter(None, match["variants"].split("+")):
        if variant != "freethreaded":
            msg = f"unsupported build variant {variant!r} in {name!r}"
            raise ValueError(msg)
        version = replace(version, free_threaded=True)
    return PythonInstallationKey(
        implementation=implementation,
        version=version,
        arch=Arch.from_string(match["arch"]),
    )


def managed_install_dir(env: Mapping[str, str] | None = None) -> Path:
    env = os.environ if env is None else env
    if install_dir := env.get("PYTHON_REGISTRY_INSTALL_DIR"):
        return Path(install_dir).expanduser()
    if uv_python_dir := env.get("UV_PYTHON_INSTALL_DIR"):
        return Path(uv_python_dir).expanduser()
    if xdg_data_home := env.get("XDG_DATA_HOME"):
        return Path(xdg_data_home).expanduser() / "uv" / "python"
    return user_data_path("uv") / "python"


def find_managed_installations(directory: Path) -> list[ManagedPythonInstallation]:
    if not directory.is_dir():
        _LOGGER.debug("managed installation directory %s does not exist", directory)
        return []
    installations = []
    for entry in sorted(directory.iterdir(), key=lambda p: p.name):
        if not entry.is_dir() or entry.name.startswith("."):
            continue
        if not _INSTALL_DIR_RE.match(entry.name):
            _LOGGER.debug("skip %s: not an installation directory", entry)
            continue
        try:
            key = parse_install_dir_name(entry.name)
        except ValueError as exc:
            _LOGGER.warning("skip managed installation %s: %s", entry, exc)
            continue
        installations.append(ManagedPythonInstallation(key=key, path=entry))
    return installations


__all__ = [
    "Arch",
    "ImplementationName",
    "ManagedPythonInstallation",
    "PythonInstallationKey",
    "find_managed_installations",
    "managed_install_dir",
    "parse_install_dir_name",
]
