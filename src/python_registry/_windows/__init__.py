"""Windows registry backend for the registry store protocol."""

from __future__ import annotations

from ._winreg import WinregKey, WinregStore

__all__ = [
    "WinregKey",
    "WinregStore",
]
