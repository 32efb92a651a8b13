"""Discover Python interpreters registered following PEP 514 and register managed ones."""

from __future__ import annotations

from importlib.metadata import version

from ._installation import (
    Arch,
    ImplementationName,
    ManagedPythonInstallation,
    PythonInstallationKey,
    find_managed_installations,
    managed_install_dir,
)
from ._pep514 import RegistryPython, RegistryScanError, registry_pythons, sort_pythons
from ._register import (
    DEFAULT_PUBLISHER,
    Publisher,
    UnsupportedPointerWidthError,
    create_registry_entry,
    register_installations,
)
from ._store import MemoryStore, RegistryKey, RegistryStore, RegistryUnavailableError, Scope, default_store
from ._version import PythonVersion

__version__ = version("python-registry")

__all__ = [
    "DEFAULT_PUBLISHER",
    "Arch",
    "ImplementationName",
    "ManagedPythonInstallation",
    "MemoryStore",
    "Publisher",
    "PythonInstallationKey",
    "PythonVersion",
    "RegistryKey",
    "RegistryPython",
    "RegistryScanError",
    "RegistryStore",
    "RegistryUnavailableError",
    "Scope",
    "UnsupportedPointerWidthError",
    "__version__",
    "create_registry_entry",
    "default_store",
    "find_managed_installations",
    "managed_install_dir",
    "register_installations",
    "registry_pythons",
    "sort_pythons",
]
