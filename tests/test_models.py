"""Unit tests for Problem, Finding, Severity and Version."""

import logging
from pathlib import Path

import pytest
from pydantic import ValidationError

from checkprofile.problems.models import Finding, Location, Problem, Severity
from checkprofile.version import MIN_VERSION, Version


def _problem(**overrides) -> Problem:
    fields = {
        "id": "nullPointer",
        "category": "Null pointers",
        "message": "Possible null pointer dereference: %s",
        "severity": Severity.ERROR,
        "enabled": True,
    }
    fields.update(overrides)
    return Problem(**fields)


def test_severity_parse_is_case_insensitive():
    assert Severity.parse("ERROR") is Severity.ERROR
    assert Severity.parse(" style ") is Severity.STYLE
    assert Severity.parse(Severity.WARNING) is Severity.WARNING
    with pytest.raises(ValueError):
        Severity.parse("fatal")


def test_serialize_encodes_only_mutable_state():
    problem = _problem(severity=Severity.WARNING, enabled=False)
    state = problem.serialize_mutable_state()
    assert state == "false;warning"
    assert "nullPointer" not in state
    assert "=" not in state and "!" not in state


def test_deserialize_applies_state():
    problem = _problem()
    assert problem.deserialize_mutable_state("false;style") is True
    assert problem.enabled is False
    assert problem.severity is Severity.STYLE


@pytest.mark.parametrize("bad", ["", "true", "yes;error", "true;fatal", "true;error;extra"])
def test_deserialize_malformed_is_ignored(bad, caplog):
    """Malformed state is logged and leaves the problem unchanged."""
    problem = _problem()
    with caplog.at_level(logging.DEBUG):
        assert problem.deserialize_mutable_state(bad) is False
    assert problem.enabled is True
    assert problem.severity is Severity.ERROR
    assert "nullPointer" in caplog.text


def test_reset_to_default_restores_catalog_values():
    problem = _problem()
    problem.set_enabled(False)
    problem.set_severity("information")
    assert not problem.is_default()
    problem.reset_to_default()
    assert problem.enabled is True
    assert problem.severity is Severity.ERROR
    assert problem.is_default()


def test_identity_fields_are_immutable():
    problem = _problem()
    with pytest.raises(ValidationError):
        problem.id = "other"
    with pytest.raises(ValidationError):
        problem.category = "other"


def test_duplicate_is_independent():
    original = _problem()
    copy = original.duplicate()
    copy.set_enabled(False)
    copy.set_severity(Severity.STYLE)
    assert original.enabled is True
    assert original.severity is Severity.ERROR
    # defaults travel with the copy
    copy.reset_to_default()
    assert copy.severity is Severity.ERROR
    assert copy.enabled is True


def test_duplicate_keeps_defaults_of_modified_problem():
    original = _problem()
    original.set_severity(Severity.WARNING)
    copy = original.duplicate()
    assert copy.severity is Severity.WARNING
    assert copy.default_severity is Severity.ERROR


def test_finding_location_accessors():
    finding = Finding(
        rule_id="nullPointer",
        message="Null pointer dereference",
        location=Location(path=Path("src/main.c"), line=12),
    )
    assert finding.file == str(Path("src/main.c"))
    assert finding.line == 12
    assert finding.location.column == 1
    assert finding.severity is Severity.WARNING
    finding.set_severity("error")
    assert finding.severity is Severity.ERROR


def test_location_line_must_be_positive():
    with pytest.raises(ValidationError):
        Location(path=Path("a.c"), line=0)


@pytest.mark.parametrize(
    "text, expected",
    [
        ("Cppcheck 1.44", Version("1.44")),
        ("Cppcheck 2.13.0", Version("2.13.0")),
        ("1.43.2", Version("1.43.2")),
    ],
)
def test_version_parse(text, expected):
    assert Version.parse(text) == expected


def test_version_parse_without_number():
    with pytest.raises(ValueError):
        Version.parse("Cppcheck dev")


def test_version_compatibility():
    assert Version("1.44").is_compatible()
    assert Version("2.0").is_compatible()
    assert not Version("1.43.9").is_compatible()
    assert str(MIN_VERSION) == "1.44"


@pytest.mark.parametrize("name", ["ERROR", "Error", " error "])
def test_problem_severity_is_case_insensitive(name):
    problem = Problem(id="memleak", category="Memory", severity=name)
    assert problem.severity is Severity.ERROR
    assert problem.default_severity is Severity.ERROR


def test_finding_severity_is_case_insensitive():
    finding = Finding(
        rule_id="memleak",
        message="Memory leak",
        location=Location(path=Path("a.c"), line=3),
        severity="Performance",
    )
    assert finding.severity is Severity.PERFORMANCE
    finding.severity = "STYLE"
    assert finding.severity is Severity.STYLE


def test_unknown_severity_is_rejected():
    with pytest.raises(ValidationError):
        Problem(id="memleak", category="Memory", severity="fatal")


def test_version_ignores_trailing_zero():
    assert Version.parse("Cppcheck 2.13") == Version("2.13.0")
    assert Version("1.44.1") > MIN_VERSION
