"""Python version values as stored in the registry (``3.12``, ``3.13.1``, ``3.14.0rc1``, ``3.13t``)."""

from __future__ import annotations

import re
import sys
from dataclasses import dataclass
from typing import Final

_DC_KW = {"frozen": True, "kw_only": True, "slots": True} if sys.version_info >= (3, 10) else {"frozen": True}

_VERSION_RE: Final[re.Pattern[str]] = re.compile(
    r"""
    ^
    (\d+)               # major
    (?:\.(\d+))?        # optional minor
    (?:\.(\d+))?        # optional micro
    (?:(a|b|rc)(\d+))?  # optional pre-release suffix
    (t)?                # optional free-threaded flag
    $
    """,
    re.VERBOSE,
)
_PRE_ORDER: Final[dict[str, int]] = {"a": 1, "b": 2, "rc": 3}
_FINAL: Final[int] = 4


@dataclass(**_DC_KW)
class PythonVersion:
    """A parsed interpreter version with a total order (newer compares greater)."""

    major: int
    minor: int | None
    micro: int | None
    pre_type: str | None
    pre_num: int | None
    free_threaded: bool

    @classmethod
    def from_string(cls, version_str: str) -> PythonVersion:
        stripped = version_str.strip()
        if not (match := _VERSION_RE.match(stripped)):
            msg = f"Invalid version: {version_str}"
            raise ValueError(msg)
        return cls(
            major=int(match.group(1)),
            minor=int(match.group(2)) if match.group(2) else None,
            micro=int(match.group(3)) if match.group(3) else None,
            pre_type=match.group(4),
            pre_num=int(match.group(5)) if match.group(5) else None,
            free_threaded=match.group(6) is not None,
        )

    @property
    def release(self) -> tuple[int, int, int]:
        return self.major, self.minor or 0, self.micro or 0

    @property
    def sys_version(self) -> str:
        """The ``<major>.<minor>`` form used for the ``SysVersion`` registry value, just the major without a minor."""
        if self.minor is None:
            return str(self.major)
        return f"{self.major}.{self.minor}"

    def _sort_key(self) -> tuple[tuple[int, int, int], int, int, bool]:
        pre = _FINAL if self.pre_type is None else _PRE_ORDER[self.pre_type]
        return self.release, pre, self.pre_num or 0, self.free_threaded

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, PythonVersion):
            return NotImplemented
        return self._sort_key() == other._sort_key()

    def __hash__(self) -> int:
        return hash(self._sort_key())

    def __lt__(self, other: object) -> bool:
        if not isinstance(other, PythonVersion):
            return NotImplemented
        return self._sort_key() < other._sort_key()

    def __le__(self, other: object) -> bool:
        if not isinstance(other, PythonVersion):
            return NotImplemented
        return self._sort_key() <= other._sort_key()

    def __gt__(self, other: object) -> bool:
        if not isinstance(other, PythonVersion):
            return NotImplemented
        return self._sort_key() > other._sort_key()

    def __ge__(self, other: object) -> bool:
        if not isinstance(other, PythonVersion):
            return NotImplemented
        return self._sort_key() >= other._sort_key()

    def __str__(self) -> str:
        result = str(self.major)
        if self.minor is not None:
            result += f".{self.minor}"
        if self.micro is not None:
            result += f".{self.micro}"
        if self.pre_type is not None:
            result += f"{self.pre_type}{self.pre_num}"
        if self.free_threaded:
            result += "t"
        return result

    def __repr__(self) -> str:
        return f"PythonVersion('{self}')"


__all__ = [
    "PythonVersion",
]
