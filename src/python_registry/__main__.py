"""Command line interface: ``python -m python_registry {list,register}``."""

from __future__ import annotations

import logging
import sys
from argparse import ArgumentParser, Namespace
from pathlib import Path
from typing import TYPE_CHECKING, Final

from ._installation import find_managed_installations, managed_install_dir
from ._pep514 import RegistryScanError, registry_pythons
from ._register import DEFAULT_PUBLISHER, Publisher, register_installations
from ._store import RegistryUnavailableError, default_store

if TYPE_CHECKING:
    from collections.abc import Mapping, Sequence

    from ._store import RegistryStore

_LOGGER: Final[logging.Logger] = logging.getLogger(__name__)


def build_parser() -> ArgumentParser:
    parser = ArgumentParser(prog="python-registry", description="PEP 514 registry discovery and registration")
    parser.add_argument("-v", "--verbose", action="count", default=0, help="increase logging verbosity")
    sub = parser.add_subparsers(dest="command", required=True)

    sub.add_parser("list", help="list the interpreters registered, newest first")

    register = sub.add_parser("register", help="register the managed installations for the current user")
    register.add_argument("--install-dir", type=Path, default=None, help="directory holding managed installations")
    register.add_argument("--company", default=DEFAULT_PUBLISHER.company)
    register.add_argument("--display-name", default=DEFAULT_PUBLISHER.display_name)
    register.add_argument("--support-url", default=DEFAULT_PUBLISHER.support_url)
    return parser


def main(
    argv: Sequence[str] | None = None,
    *,
    store: RegistryStore | None = None,
    env: Mapping[str, str] | None = None,
) -> int:
    args = build_parser().parse_args(argv)
    logging.basicConfig(level={0: logging.WARNING, 1: logging.INFO}.get(args.verbose, logging.DEBUG))
    try:
        store = default_store() if store is None else store
        if args.command == "list":
            return _list(store)
        return _register(args, store, env)
    except (RegistryUnavailableError, RegistryScanError, OSError) as exc:
        sys.stderr.write(f"error: {exc}\n")
        return 1


def _list(store: RegistryStore) -> int:
    for python in registry_pythons(store):
        sys.stdout.write(f"{python.version or '-'}\t{python.path}\n")
    return 0


def _register(args: Namespace, store: RegistryStore, env: Mapping[str, str] | None) -> int:
    install_dir = args.install_dir or managed_install_dir(env)
    publisher = Publisher(
        company=args.company,
        display_name=args.display_name,
        support_url=args.support_url,
    )
    installations = find_managed_installations(install_dir)
    _LOGGER.info("found %d managed installation(s) in %s", len(installations), install_dir)
    errors = register_installations(installations, store=store, publisher=publisher)
    for key, error in errors:
        sys.stderr.write(f"failed to register {key}: {error}\n")
    return 1 if errors else 0


if __name__ == "__main__":
    raise SystemExit(main())
