"""Hierarchical key-value store protocol (the Windows registry model) and an in-memory implementation."""

from __future__ import annotations

import sys
from enum import Enum
from typing import TYPE_CHECKING, Final, Protocol, runtime_checkable

if TYPE_CHECKING:
    from types import TracebackType

    from typing_extensions import Self

IS_WIN: Final[bool] = sys.platform == "win32"


class Scope(Enum):
    """A root of the store: the machine wide one or the one of the current user."""

    CURRENT_USER = "HKEY_CURRENT_USER"
    LOCAL_MACHINE = "HKEY_LOCAL_MACHINE"

    def __str__(self) -> str:
        return self.value


class RegistryUnavailableError(RuntimeError):
    """Raised when no registry store exists on the running platform."""


@runtime_checkable
class RegistryKey(Protocol):
    """An opened key; sub-key paths are backslash separated."""

    def __enter__(self) -> Self: ...

    def __exit__(
        self, exc_type: type[BaseException] | None, exc_val: BaseException | None, exc_tb: TracebackType | None
    ) -> None: ...

    def open(self, path: str) -> RegistryKey: ...

    def create(self, path: str) -> RegistryKey: ...

    def keys(self) -> list[str]: ...

    def get_value(self, name: str) -> object: ...

    def set_string(self, name: str, value: str) -> None: ...


@runtime_checkable
class RegistryStore(Protocol):
    """Access to the roots of a registry."""

    def root(self, scope: Scope) -> RegistryKey: ...


def split_path(path: str) -> list[str]:
    return [part for part in path.split("\\") if part]


class MemoryKey:
    """A registry key living in memory; names are matched case-insensitively but keep their case."""

    def __init__(self, name: str) -> None:
        self.name = name
        self._children: dict[str, MemoryKey] = {}
        self._values: dict[str, tuple[str, object]] = {}

    def __enter__(self) -> Self:
        return self

    def __exit__(
        self, exc_type: type[BaseException] | None, exc_val: BaseException | None, exc_tb: TracebackType | None
    ) -> None:
        return None

    def __repr__(self) -> str:
        return f"MemoryKey({self.name!r})"

    def open(self, path: str) -> MemoryKey:
        key = self
        for part in split_path(path):
            try:
                key = key._children[part.casefold()]  # noqa: SLF001
            except KeyError:
                msg = f"key {path!r} not found under {self.name!r}"
                raise FileNotFoundError(msg) from None
        return key

    def create(self, path: str) -> MemoryKey:
        key = self
        for part in split_path(path):
            key = key._children.setdefault(part.casefold(), MemoryKey(part))  # noqa: SLF001
        return key

    def keys(self) -> list[str]:
        return [child.name for child in self._children.values()]

    def values(self) -> dict[str, object]:
        """All values of this key by the name they were set with, ``""`` being the default value."""
        return dict(self._values.values())

    def get_value(self, name: str) -> object:
        try:
            return self._values[name.casefold()][1]
        except KeyError:
            msg = f"value {name!r} not found in {self.name!r}"
            raise FileNotFoundError(msg) from None

    def set_value(self, name: str, value: object) -> None:
        self._values[name.casefold()] = (name, value)

    def set_string(self, name: str, value: str) -> None:
        self.set_value(name, value)


class MemoryStore:
    """A registry kept in memory, for callers and tests that must not touch the real one."""

    def __init__(self) -> None:
        self._roots = {scope: MemoryKey(scope.value) for scope in Scope}

    def root(self, scope: Scope) -> MemoryKey:
        return self._roots[scope]


def default_store() -> RegistryStore:
    if IS_WIN:  # pragma: win32 cover
        from ._windows import WinregStore  # noqa: PLC0415

        return WinregStore()
    msg = f"the Windows registry is not available on {sys.platform}"
    raise RegistryUnavailableError(msg)


__all__ = [
    "IS_WIN",
    "MemoryKey",
    "MemoryStore",
    "RegistryKey",
    "RegistryStore",
    "RegistryUnavailableError",
    "Scope",
    "default_store",
    "split_path",
]
