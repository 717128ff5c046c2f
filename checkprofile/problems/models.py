# Pydantic data models for problems and findings: Severity, Problem, Location, Finding.

from __future__ import annotations

import logging
from enum import Enum
from pathlib import Path
from typing import Any, Optional

from pydantic import BaseModel, Field, PrivateAttr, field_validator

logger = logging.getLogger(__name__)

# Separates the enabled flag from the severity in a serialized problem state.
# Must differ from the delimiters the profile uses between problems ("!" and "=").
STATE_DELIMITER = ";"


class Severity(str, Enum):
    """Severity levels as reported by cppcheck."""

    ERROR = "error"
    WARNING = "warning"
    STYLE = "style"
    PERFORMANCE = "performance"
    PORTABILITY = "portability"
    INFORMATION = "information"

    @classmethod
    def parse(cls, value: str | Severity) -> Severity:
        """Parse a severity name case-insensitively; raises ValueError if unknown."""
        if isinstance(value, Severity):
            return value
        return cls(value.strip().lower())


def _coerce_severity(value: Any) -> Any:
    # Strings go through Severity.parse so catalogs may say "Error" or "ERROR".
    if isinstance(value, str):
        return Severity.parse(value)
    return value


class Problem(BaseModel):
    """
    A single analyzer rule: fixed identity plus user-adjustable state.

    id, category and message come from the analyzer catalog and never change.
    enabled and severity are the mutable part; the values the problem was
    created with are kept as defaults so reset_to_default() can restore them.
    """

    id: str = Field(..., frozen=True, min_length=1)
    category: str = Field(..., frozen=True)
    message: str = Field(default="", frozen=True)
    severity: Severity = Severity.WARNING
    enabled: bool = True

    model_config = {"validate_assignment": True}

    _default_severity: Severity = PrivateAttr()
    _default_enabled: bool = PrivateAttr()

    @field_validator("severity", mode="before")
    @classmethod
    def coerce_severity(cls, value: Any) -> Any:
        return _coerce_severity(value)

    def model_post_init(self, __context: Any) -> None:
        self._default_severity = self.severity
        self._default_enabled = self.enabled

    @property
    def default_severity(self) -> Severity:
        return self._default_severity

    @property
    def default_enabled(self) -> bool:
        return self._default_enabled

    def is_enabled(self) -> bool:
        return self.enabled

    def set_enabled(self, enabled: bool) -> None:
        self.enabled = enabled

    def set_severity(self, severity: Severity | str) -> None:
        self.severity = Severity.parse(severity)

    def serialize_mutable_state(self) -> str:
        """Encode exactly {enabled, severity}, e.g. "true;error"."""
        flag = "true" if self.enabled else "false"
        return f"{flag}{STATE_DELIMITER}{self.severity.value}"

    def deserialize_mutable_state(self, text: str) -> bool:
        """
        Apply a state produced by serialize_mutable_state().

        Malformed input is logged and ignored, leaving the current state as is.
        Returns True if the state was applied.
        """
        parts = text.split(STATE_DELIMITER)
        if len(parts) != 2:
            logger.debug("Ignoring malformed state %r for problem %s", text, self.id)
            return False
        flag, severity_name = parts
        if flag not in ("true", "false"):
            logger.debug("Ignoring invalid enabled flag %r for problem %s", flag, self.id)
            return False
        try:
            severity = Severity.parse(severity_name)
        except ValueError:
            logger.debug("Ignoring unknown severity %r for problem %s", severity_name, self.id)
            return False
        self.enabled = flag == "true"
        self.severity = severity
        return True

    def reset_to_default(self) -> None:
        self.enabled = self._default_enabled
        self.severity = self._default_severity

    def is_default(self) -> bool:
        return self.enabled == self._default_enabled and self.severity == self._default_severity

    def duplicate(self) -> Problem:
        """Independent copy, including the retained defaults."""
        return self.model_copy(deep=True)


class Location(BaseModel):
    """Where in the source a finding was reported (file, line, column)."""

    path: Path
    line: int = Field(..., ge=1, description="1-based line number")
    column: int = Field(1, ge=1, description="1-based column number")
    snippet: Optional[str] = None

    model_config = {"arbitrary_types_allowed": True}


class Finding(BaseModel):
    """A single issue reported by the analyzer (e.g. nullPointer at line 42)."""

    rule_id: str
    message: str
    location: Location
    severity: Severity = Field(default=Severity.WARNING, description="overwritten by the profile")

    model_config = {"arbitrary_types_allowed": True, "validate_assignment": True}

    @field_validator("severity", mode="before")
    @classmethod
    def coerce_severity(cls, value: Any) -> Any:
        return _coerce_severity(value)

    @property
    def file(self) -> str:
        return str(self.location.path)

    @property
    def line(self) -> int:
        return self.location.line

    def set_severity(self, severity: Severity | str) -> None:
        self.severity = Severity.parse(severity)
