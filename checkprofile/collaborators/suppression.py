# In-memory line suppressions: (file, problem id, line) entries that veto reporting.

from __future__ import annotations

import logging
from pathlib import Path
from typing import Iterable, Optional, Tuple

from checkprofile.collaborators.base import SuppressionOracle

logger = logging.getLogger(__name__)

# Problem id matching every problem at a location.
ANY_PROBLEM = "*"

SuppressionEntry = Tuple[str, str, Optional[int]]


def _normalize(file: str | Path) -> str:
    return Path(file).as_posix()


class LineSuppressions(SuppressionOracle):
    """
    Suppressions keyed by file.

    A line of None suppresses the id in the whole file; the id "*" suppresses
    every problem at that line (or in the whole file when line is None too).
    """

    def __init__(self, entries: Iterable[SuppressionEntry] = ()) -> None:
        self._entries: set[tuple[str, str, Optional[int]]] = set()
        for file, problem_id, line in entries:
            self.add(file, problem_id, line)

    def add(self, file: str | Path, problem_id: str, line: Optional[int] = None) -> None:
        self._entries.add((_normalize(file), problem_id, line))

    def remove(self, file: str | Path, problem_id: str, line: Optional[int] = None) -> None:
        self._entries.discard((_normalize(file), problem_id, line))

    def __len__(self) -> int:
        return len(self._entries)

    def is_suppressed(self, file: str, problem_id: str, line: int) -> bool:
        path = _normalize(file)
        for candidate_id in (problem_id, ANY_PROBLEM):
            for candidate_line in (line, None):
                if (path, candidate_id, candidate_line) in self._entries:
                    logger.debug("Suppressed %s at %s:%s", problem_id, path, line)
                    return True
        return False
