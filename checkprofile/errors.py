# Exception hierarchy for profile construction, catalog loading and persisted overrides.

from __future__ import annotations

from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from checkprofile.version import Version


class ProfileError(Exception):
    """Base class for all errors raised by checkprofile."""


class IncompatibleVersionError(ProfileError):
    """The analyzer binary is older than the minimum supported version."""

    def __init__(self, version: Version) -> None:
        super().__init__(f"Analyzer version {version} is not supported (minimum is {version.minimum()})")
        self.version = version


class CatalogLoadError(ProfileError):
    """The problem catalog (or the analyzer version) could not be obtained."""


class CatalogIOError(CatalogLoadError):
    """Reading the catalog source failed."""


class ConfigurationParseError(CatalogLoadError):
    """The catalog reader itself is misconfigured (bad path, bad options)."""


class ContentParseError(CatalogLoadError):
    """The catalog source was read but its content is not understood."""


class ProcessExecutionError(CatalogLoadError):
    """Running the analyzer binary failed or it exited abnormally."""

    def __init__(self, message: str, exit_code: int | None = None) -> None:
        super().__init__(message)
        self.exit_code = exit_code


class PersistedStateCorruptError(ProfileError):
    """Persisted problem overrides could not be parsed."""
