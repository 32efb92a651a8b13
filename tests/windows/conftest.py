from __future__ import annotations

import sys
from types import ModuleType
from typing import TYPE_CHECKING

import pytest

if TYPE_CHECKING:
    from python_registry._windows._winreg import WinregStore

HKEY_CURRENT_USER = 0x80000001
HKEY_LOCAL_MACHINE = 0x80000002
REG_SZ = 1
REG_DWORD = 4


class _NoMoreItems(OSError):
    winerror = 259


class _Handle:
    def __init__(self, path: str) -> None:
        self.path = path
        self.closed = False

    def Close(self) -> None:  # noqa: N802
        self.closed = True


class FakeRegistry:
    """Just enough of the registry behind the ``winreg`` functions the store calls."""

    def __init__(self) -> None:
        self.nodes: dict[str, tuple[list[str], dict[str, tuple[object, int]]]] = {
            "HKCU": ([], {}),
            "HKLM": ([], {}),
        }
        self.handles: list[_Handle] = []
        self.enum_errors: dict[str, OSError] = {}
        self.set_errors: dict[str, OSError] = {}

    def _path(self, key: object) -> str:
        if isinstance(key, _Handle):
            return key.path
        return {HKEY_CURRENT_USER: "HKCU", HKEY_LOCAL_MACHINE: "HKLM"}[key]  # type: ignore[index]

    def _handle(self, path: str) -> _Handle:
        handle = _Handle(path)
        self.handles.append(handle)
        return handle

    def open_key_ex(self, key: object, sub_key: str, reserved: int = 0, access: int = 0) -> _Handle:  # noqa: ARG002
        path = self._path(key)
        for part in sub_key.split("\\"):
            children = self.nodes[path][0]
            names = [c for c in children if c.casefold() == part.casefold()]
            if not names:
                raise FileNotFoundError(2, "The system cannot find the file specified")
            path = f"{path}\\{names[0]}"
        return self._handle(path)

    def create_key_ex(self, key: object, sub_key: str, reserved: int = 0, access: int = 0) -> _Handle:  # noqa: ARG002
        path = self._path(key)
        for part in sub_key.split("\\"):
            children = self.nodes[path][0]
            names = [c for c in children if c.casefold() == part.casefold()]
            if names:
                part = names[0]  # noqa: PLW2901
            else:
                children.append(part)
                self.nodes[f"{path}\\{part}"] = ([], {})
            path = f"{path}\\{part}"
        return self._handle(path)

    def enum_key(self, key: object, index: int) -> str:
        path = self._path(key)
        if path in self.enum_errors:
            raise self.enum_errors[path]
        children = self.nodes[path][0]
        if index >= len(children):
            raise _NoMoreItems(22, "No more data is available")
        return children[index]

    def query_value_ex(self, key: object, name: str) -> tuple[object, int]:
        try:
            return self.nodes[self._path(key)][1][name]
        except KeyError:
            raise FileNotFoundError(2, "The system cannot find the file specified") from None

    def set_value_ex(self, key: object, name: str, reserved: int, type_: int, value: object) -> None:  # noqa: ARG002
        path = self._path(key)
        if path in self.set_errors:
            raise self.set_errors[path]
        self.nodes[path][1][name] = value, type_

    def set(self, path: str, name: str, value: object, type_: int = REG_SZ) -> None:
        self.nodes[path][1][name] = value, type_

    def add_python(self, hive: int, company: str, tag: str) -> str:
        handle = self.create_key_ex(hive, rf"Software\Python\{company}\{tag}\InstallPath")
        return handle.path.rsplit("\\", 1)[0]


def _create_winreg_mock() -> ModuleType:
    """Create a mock winreg module that works on all platforms."""
    winreg = ModuleType("winreg")
    winreg.HKEY_CURRENT_USER = HKEY_CURRENT_USER  # ty: ignore[unresolved-attribute]
    winreg.HKEY_LOCAL_MACHINE = HKEY_LOCAL_MACHINE  # ty: ignore[unresolved-attribute]
    winreg.KEY_READ = 0x20019  # ty: ignore[unresolved-attribute]
    winreg.KEY_ALL_ACCESS = 0xF003F  # ty: ignore[unresolved-attribute]
    winreg.REG_SZ = REG_SZ  # ty: ignore[unresolved-attribute]
    return winreg


@pytest.fixture
def fake_registry(monkeypatch: pytest.MonkeyPatch) -> FakeRegistry:
    if sys.platform != "win32":
        winreg = _create_winreg_mock()
        monkeypatch.setitem(sys.modules, "winreg", winreg)
    else:  # pragma: win32 cover
        import winreg

    from python_registry._windows import _winreg  # noqa: PLC0415

    registry = FakeRegistry()
    monkeypatch.setattr(winreg, "HKEY_CURRENT_USER", HKEY_CURRENT_USER)
    monkeypatch.setattr(winreg, "HKEY_LOCAL_MACHINE", HKEY_LOCAL_MACHINE)
    monkeypatch.setattr(winreg, "OpenKeyEx", registry.open_key_ex, raising=False)
    monkeypatch.setattr(winreg, "CreateKeyEx", registry.create_key_ex, raising=False)
    monkeypatch.setattr(winreg, "EnumKey", registry.enum_key, raising=False)
    monkeypatch.setattr(winreg, "QueryValueEx", registry.query_value_ex, raising=False)
    monkeypatch.setattr(winreg, "SetValueEx", registry.set_value_ex, raising=False)
    monkeypatch.setattr(_winreg, "winreg", winreg)
    return registry


@pytest.fixture
def winreg_store(fake_registry: FakeRegistry) -> WinregStore:  # noqa: ARG001
    from python_registry._windows import WinregStore  # noqa: PLC0415

    return WinregStore()
