# Collaborator interfaces (abstract base classes) consumed by ProblemProfile.
# Concrete implementations live next to this module (catalog, settings,
# suppression, logsink) or in checkprofile.reporting.

from __future__ import annotations

from abc import ABC, abstractmethod
from typing import Callable, Sequence

from checkprofile.problems.models import Finding, Problem
from checkprofile.version import Version

# Returned by SettingsStore.get_string() for a key that has no value.
UNSET = ""

SettingsListener = Callable[[str, str, str], None]


class VersionChecker(ABC):
    """Asks an analyzer binary which version it is."""

    @abstractmethod
    def check_version(self, binary_path: str) -> Version:
        """
        Return the version of the analyzer at binary_path.

        Raises:
            CatalogLoadError subclasses (CatalogIOError, ContentParseError,
            ProcessExecutionError, ...) when the version cannot be determined.
        """
        ...


class CatalogLoader(ABC):
    """Enumerates every problem an analyzer binary can report."""

    @abstractmethod
    def load_catalog(self, binary_path: str) -> Sequence[Problem]:
        """
        Return fresh Problem objects with the analyzer's default state.

        May contain duplicate ids; the profile keeps the last one.
        Raises the same CatalogLoadError subclasses as check_version().
        """
        ...


class SuppressionOracle(ABC):
    """Line-level veto on reporting, independent of the profile."""

    @abstractmethod
    def is_suppressed(self, file: str, problem_id: str, line: int) -> bool:
        """Return True if problem_id at file:line must not be reported. Never raises."""
        ...


class ProblemReporter(ABC):
    """Receives each finding that survived profile and suppression filtering."""

    @abstractmethod
    def report(self, finding: Finding) -> None:
        ...


class SettingsStore(ABC):
    """
    Key/value string store holding persisted preferences.

    get_string() returns UNSET for keys without a value or default.
    Listeners are called with (key, old_value, new_value) after a change.
    """

    def __init__(self) -> None:
        self._listeners: list[SettingsListener] = []

    @abstractmethod
    def get_string(self, key: str) -> str:
        ...

    @abstractmethod
    def set_string(self, key: str, value: str) -> None:
        ...

    @abstractmethod
    def reset_to_default(self, key: str) -> None:
        ...

    def add_listener(self, listener: SettingsListener) -> None:
        self._listeners.append(listener)

    def remove_listener(self, listener: SettingsListener) -> None:
        if listener in self._listeners:
            self._listeners.remove(listener)

    def _fire(self, key: str, old: str, new: str) -> None:
        if old == new:
            return
        for listener in list(self._listeners):
            listener(key, old, new)


class LogSink(ABC):
    """Where the profile sends warnings and errors it does not raise. Must never fail."""

    @abstractmethod
    def log_warning(self, message: str) -> None:
        ...

    @abstractmethod
    def log_error(self, message: str, cause: BaseException | None = None) -> None:
        ...

    @abstractmethod
    def show_user_error(self, message: str, cause: BaseException | None = None) -> None:
        """Report an error the user should see (e.g. corrupt preferences)."""
        ...
