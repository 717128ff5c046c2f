# Analyzer version parsing and the minimum supported version check.

from __future__ import annotations

import re
from functools import total_ordering

from packaging.version import InvalidVersion
from packaging.version import Version as _PackagingVersion

VERSION_PATTERN = re.compile(r"(\d+(?:\.\d+)+)")


@total_ordering
class Version:
    """
    Version of the analyzer binary, e.g. parsed from "Cppcheck 1.44".

    Comparison follows packaging's semantics, so "2.13" == "2.13.0".
    """

    def __init__(self, text: str) -> None:
        self._version = _PackagingVersion(text)

    @classmethod
    def parse(cls, text: str) -> Version:
        """
        Extract the first dotted version number in text.

        Raises InvalidVersion (a ValueError) if there is none.
        """
        match = VERSION_PATTERN.search(text)
        if match is None:
            raise InvalidVersion(f"No version number found in {text!r}")
        return cls(match.group(1))

    @staticmethod
    def minimum() -> Version:
        return MIN_VERSION

    def is_compatible(self) -> bool:
        return self >= MIN_VERSION

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Version):
            return NotImplemented
        return self._version == other._version

    def __lt__(self, other: Version) -> bool:
        return self._version < other._version

    def __hash__(self) -> int:
        return hash(self._version)

    def __str__(self) -> str:
        return str(self._version)

    def __repr__(self) -> str:
        return f"Version({str(self)!r})"


MIN_VERSION = Version("1.44")
