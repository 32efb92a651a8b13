"""Register managed Python installations in the registry following PEP 514."""

from __future__ import annotations

import logging
import sys
from dataclasses import dataclass
from typing import TYPE_CHECKING, Final

from ._pep514 import PYTHON_KEY
from ._store import Scope, default_store

if TYPE_CHECKING:
    from collections.abc import Iterable

    from ._installation import Arch, ManagedPythonInstallation, PythonInstallationKey
    from ._store import RegistryStore

    RegistrationErrors = list[tuple[PythonInstallationKey, Exception]]

_DC_KW = {"frozen": True, "kw_only": True, "slots": True} if sys.version_info >= (3, 10) else {"frozen": True}

_LOGGER: Final[logging.Logger] = logging.getLogger(__name__)


@dataclass(**_DC_KW)
class Publisher:
    """The company key installations are registered under."""

    company: str
    display_name: str
    support_url: str


DEFAULT_PUBLISHER: Final[Publisher] = Publisher(
    company="python-registry",
    display_name="python-registry",
    support_url="https://github.com/tox-dev/python-registry",
)


class UnsupportedPointerWidthError(ValueError):
    def __init__(self, arch: Arch) -> None:
        super().__init__(f"Windows has an unknown pointer width for arch: `{arch}`")
        self.arch = arch


def create_registry_entry(
    installation: ManagedPythonInstallation,
    errors: RegistrationErrors,
    *,
    store: RegistryStore | None = None,
    publisher: Publisher = DEFAULT_PUBLISHER,
) -> None:
    """
    Register one installation for the current user.

    A store failure is appended to ``errors`` together with the installation key and whatever was written before the
    failure stays in place. An architecture without a known pointer width raises before anything is written.
    """
    pointer_width = installation.key.arch.pointer_width
    if pointer_width is None:
        raise UnsupportedPointerWidthError(installation.key.arch)
    store = default_store() if store is None else store
    try:
        write_registry_entry(store, installation, pointer_width, publisher)
    except OSError as exc:
        _LOGGER.debug("failed to register %s", installation.key, exc_info=True)
        errors.append((installation.key, exc))
    else:
        _LOGGER.info("registered %s in %s\\%s\\%s", installation.key, Scope.CURRENT_USER, PYTHON_KEY, publisher.company)


def write_registry_entry(
    store: RegistryStore,
    installation: ManagedPythonInstallation,
    pointer_width: int,
    publisher: Publisher,
) -> None:
    # existing values are overwritten, values of earlier registrations that are not written again are left alone
    key = installation.key
    with store.root(Scope.CURRENT_USER).create(rf"{PYTHON_KEY}\{publisher.company}") as company:
        company.set_string("DisplayName", publisher.display_name)
        company.set_string("SupportUrl", publisher.support_url)

        pretty = key.implementation.pretty
        with company.create(f"{pretty}{key.version}") as tag:  # e.g. CPython3.13.1
            tag.set_string("DisplayName", f"{pretty} {key.version} ({pointer_width}-bit)")
            tag.set_string("SupportUrl", publisher.support_url)
            tag.set_string("Version", str(key.version))
            tag.set_string("SysVersion", key.sys_version)
            tag.set_string("SysArchitecture", f"{pointer_width}bit")
            if installation.url is not None:
                tag.set_string("DownloadUrl", installation.url)
            if installation.sha256 is not None:
                tag.set_string("DownloadSha256", installation.sha256)

            with tag.create("InstallPath") as install_path:
                install_path.set_string("", str(installation.path))
                install_path.set_string("ExecutablePath", str(installation.executable(windowed=False)))
                install_path.set_string("WindowedExecutablePath", str(installation.executable(windowed=True)))


def register_installations(
    installations: Iterable[ManagedPythonInstallation],
    *,
    store: RegistryStore | None = None,
    publisher: Publisher = DEFAULT_PUBLISHER,
) -> RegistrationErrors:
    """Register each installation in turn; the failures are returned, one bad installation does not stop the rest."""
    store = default_store() if store is None else store
    errors: RegistrationErrors = []
    for installation in installations:
        try:
            create_registry_entry(installation, errors, store=store, publisher=publisher)
        except UnsupportedPointerWidthError as exc:
            errors.append((installation.key, exc))
    return errors


__all__ = [
    "DEFAULT_PUBLISHER",
    "Publisher",
    "UnsupportedPointerWidthError",
    "create_registry_entry",
    "register_installations",
    "write_registry_entry",
]
