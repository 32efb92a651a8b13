"""Implement https://www.python.org/dev/peps/pep-0514/ to discover interpreters from the registry."""

from __future__ import annotations

import logging
import sys
from dataclasses import dataclass
from logging import getLogger
from pathlib import Path
from typing import TYPE_CHECKING, Final

from ._store import Scope, default_store
from ._version import PythonVersion

if TYPE_CHECKING:
    from collections.abc import Iterable

    from ._store import RegistryKey, RegistryStore

_DC_KW = {"frozen": True, "kw_only": True, "slots": True} if sys.version_info >= (3, 10) else {"frozen": True}

_LOGGER: Final[logging.Logger] = getLogger(__name__)
PYTHON_KEY: Final[str] = r"Software\Python"
RESERVED_COMPANY: Final[str] = "PyLauncher"


@dataclass(**_DC_KW)
class RegistryPython:
    """A Python interpreter found in the registry; only the path and the version are read."""

    path: Path
    version: PythonVersion | None = None


class RegistryScanError(Exception):
    """Enumerating a key that is known to exist failed, the scan cannot produce a complete answer."""

    def __init__(self, scope: Scope, path: str, error: OSError) -> None:
        super().__init__(f"failed to read {scope}\\{path}: {error}")
        self.scope = scope
        self.path = path


def registry_pythons(store: RegistryStore | None = None) -> list[RegistryPython]:
    """Find all Pythons registered following PEP 514, newest first."""
    store = default_store() if store is None else store
    found: list[RegistryPython] = []
    for scope in (Scope.CURRENT_USER, Scope.LOCAL_MACHINE):
        try:
            python_key = store.root(scope).open(PYTHON_KEY)
        except OSError as exc:
            _LOGGER.debug("no %s\\%s: %s", scope, PYTHON_KEY, exc)
            continue
        with python_key:
            found.extend(process_scope(scope, python_key))
    return sort_pythons(found)


def process_scope(scope: Scope, python_key: RegistryKey) -> list[RegistryPython]:
    found = []
    for company in _keys(scope, PYTHON_KEY, python_key):
        if company == RESERVED_COMPANY:
            continue
        try:
            company_key = python_key.open(company)
        except OSError as exc:
            _LOGGER.debug("skip %s\\%s\\%s: %s", scope, PYTHON_KEY, company, exc)
            continue
        with company_key:
            found.extend(process_company(scope, company, company_key))
    return found


def process_company(scope: Scope, company: str, company_key: RegistryKey) -> list[RegistryPython]:
    company_path = rf"{PYTHON_KEY}\{company}"
    found = []
    for tag in _keys(scope, company_path, company_key):
        try:
            tag_key = company_key.open(tag)
        except OSError as exc:
            raise RegistryScanError(scope, rf"{company_path}\{tag}", exc) from exc
        with tag_key:
            if (python := read_registry_entry(company, tag, tag_key)) is not None:
                found.append(python)
    return found


def _keys(scope: Scope, path: str, key: RegistryKey) -> list[str]:
    try:
        return key.keys()
    except OSError as exc:
        raise RegistryScanError(scope, path, exc) from exc


def read_registry_entry(company: str, tag: str, tag_key: RegistryKey) -> RegistryPython | None:
    key_path = rf"{PYTHON_KEY}\{company}\{tag}"
    # ExecutablePath is mandatory for executable Pythons
    try:
        with tag_key.open("InstallPath") as install_path:
            exe = install_path.get_value("ExecutablePath")
    except OSError as exc:
        msg(key_path, f"not executable: {exc}")
        return None
    if not isinstance(exe, str) or not exe:
        msg(key_path, f"not executable, ExecutablePath is {exe!r}")
        return None
    return RegistryPython(path=Path(exe), version=load_version(key_path, exe, tag_key))


def load_version(key_path: str, exe: str, tag_key: RegistryKey) -> PythonVersion | None:
    try:
        sys_version = tag_key.get_value("SysVersion")
    except OSError:
        return None
    if not isinstance(sys_version, str):
        msg(rf"{key_path}\SysVersion", f"version is not string: {sys_version!r} for {exe}")
        return None
    try:
        return PythonVersion.from_string(sys_version)
    except ValueError as exc:
        msg(rf"{key_path}\SysVersion", f"{exc} for {exe}")
    return None


def sort_pythons(pythons: Iterable[RegistryPython]) -> list[RegistryPython]:
    """
    Order the registry entries, which have no natural order, so that the newest come first.

    Entries with a version sort before those without; versions sort descending and the path is the tie-breaker.
    """
    by_path = sorted(pythons, key=lambda p: p.path)
    versioned = [p for p in by_path if p.version is not None]
    versioned.sort(key=lambda p: p.version, reverse=True)  # stable: equal versions stay in path order
    versionless = [p for p in by_path if p.version is None]
    return versioned + versionless


def msg(path: str, what: object) -> None:
    _LOGGER.warning("PEP-514 violation in registry at %s error: %s", path, what)


__all__ = [
    "PYTHON_KEY",
    "RESERVED_COMPANY",
    "RegistryPython",
    "RegistryScanError",
    "read_registry_entry",
    "registry_pythons",
    "sort_pythons",
]
