from __future__ import annotations

from typing import TYPE_CHECKING

import pytest

from python_registry import MemoryStore, Scope

if TYPE_CHECKING:
    from collections.abc import Callable

    from python_registry._store import MemoryKey


def add_python(  # noqa: PLR0913
    root: MemoryKey,
    company: str,
    tag: str,
    exe: object = None,
    sys_version: object = None,
    *,
    install_path: bool = True,
) -> MemoryKey:
    tag_key = root.create(rf"Software\Python\{company}\{tag}")
    if sys_version is not None:
        tag_key.set_value("SysVersion", sys_version)
    if install_path:
        ip_key = tag_key.create("InstallPath")
        if exe is not None:
            ip_key.set_value("ExecutablePath", exe)
    return tag_key


@pytest.fixture(name="add_python")
def _add_python() -> Callable[..., MemoryKey]:
    return add_python


@pytest.fixture
def store() -> MemoryStore:
    return MemoryStore()


@pytest.fixture
def populated_store(store: MemoryStore) -> MemoryStore:
    user = store.root(Scope.CURRENT_USER)
    machine = store.root(Scope.LOCAL_MACHINE)
    add_python(user, "PythonCore", "3.11", "C:\\Users\\user\\Python311\\python.exe", "3.11.5")
    add_python(user, "PythonCore", "3.12", "C:\\Users\\user\\Python312\\python.exe", "3.12.0")
    add_python(user, "PythonCore", "3.13", None, "3.13")  # no ExecutablePath
    add_python(user, "PythonCore", "3.14", "C:\\Users\\user\\Python314\\python.exe", "magic")
    add_python(user, "PythonCore", "3.9", "C:\\Users\\user\\Python39\\python.exe", install_path=False)
    add_python(user, "PyLauncher", "3.12", "C:\\launcher\\py.exe", "3.12.0")
    add_python(machine, "ContinuumAnalytics", "Anaconda310-64", "C:\\Miniconda3\\python.exe", "3.10")
    add_python(machine, "CompanyA", "1.0", "Z:\\CompanyA\\python.exe")
    return store
