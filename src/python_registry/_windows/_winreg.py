"""Registry store backed by the Windows registry through :mod:`winreg` - Windows only."""

from __future__ import annotations

import logging
import winreg
from typing import TYPE_CHECKING, Any, Final

from python_registry._store import Scope

if TYPE_CHECKING:
    from types import TracebackType

    from typing_extensions import Self

_LOGGER: Final[logging.Logger] = logging.getLogger(__name__)
_ERROR_NO_MORE_ITEMS: Final[int] = 259


class WinregKey:
    def __init__(self, handle: Any, path: str) -> None:  # noqa: ANN401
        self._handle = handle
        self.path = path

    def __enter__(self) -> Self:
        return self

    def __exit__(
        self, exc_type: type[BaseException] | None, exc_val: BaseException | None, exc_tb: TracebackType | None
    ) -> None:
        self.close()

    def __repr__(self) -> str:
        return f"WinregKey({self.path!r})"

    def close(self) -> None:
        if self._handle is not None and not isinstance(self._handle, int):
            self._handle.Close()  # ty: ignore[unresolved-attribute]
        self._handle = None

    def open(self, path: str) -> WinregKey:
        handle = winreg.OpenKeyEx(self._handle, path, 0, winreg.KEY_READ)  # ty: ignore[unresolved-attribute]
        return WinregKey(handle, rf"{self.path}\{path}")

    def create(self, path: str) -> WinregKey:
        handle = winreg.CreateKeyEx(self._handle, path, 0, winreg.KEY_ALL_ACCESS)  # ty: ignore[unresolved-attribute]
        return WinregKey(handle, rf"{self.path}\{path}")

    def keys(self) -> list[str]:
        result = []
        at = 0
        while True:
            try:
                result.append(winreg.EnumKey(self._handle, at))  # ty: ignore[unresolved-attribute]
            except OSError as exc:
                if getattr(exc, "winerror", None) == _ERROR_NO_MORE_ITEMS:
                    break
                raise
            at += 1
        return result

    def get_value(self, name: str) -> object:
        return winreg.QueryValueEx(self._handle, name)[0]  # ty: ignore[unresolved-attribute]

    def set_string(self, name: str, value: str) -> None:
        winreg.SetValueEx(self._handle, name, 0, winreg.REG_SZ, value)  # ty: ignore[unresolved-attribute]
        _LOGGER.debug("set %s\\%s = %r", self.path, name, value)


class WinregStore:
    """The registry of the running Windows machine."""

    def root(self, scope: Scope) -> WinregKey:
        hive = {
            Scope.CURRENT_USER: winreg.HKEY_CURRENT_USER,  # ty: ignore[unresolved-attribute]
            Scope.LOCAL_MACHINE: winreg.HKEY_LOCAL_MACHINE,  # ty: ignore[unresolved-attribute]
        }[scope]
        return WinregKey(hive, scope.value)


__all__ = [
    "WinregKey",
    "WinregStore",
]
