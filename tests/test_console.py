"""Tests for the Rich reporters and problem table."""

from pathlib import Path

from rich.console import Console

from checkprofile.problems.models import Finding, Location, Problem, Severity
from checkprofile.reporting.console import ConsoleReporter, print_problems


def _console() -> Console:
    return Console(record=True, width=120, force_terminal=False)


def test_console_reporter_groups_and_summarizes():
    console = _console()
    reporter = ConsoleReporter(console)
    reporter.report(Finding(rule_id="memleak", message="Memory leak: buf",
                            location=Location(path=Path("b.c"), line=9), severity=Severity.ERROR))
    reporter.report(Finding(rule_id="unusedVariable", message="Unused variable: x",
                            location=Location(path=Path("a.c"), line=2), severity=Severity.STYLE))
    reporter.flush()
    text = console.export_text()
    assert text.index("a.c") < text.index("b.c")
    assert "Memory leak: buf" in text
    assert "2 findings" in text
    assert "1 error" in text
    assert reporter.findings == []


def test_console_reporter_without_findings():
    console = _console()
    ConsoleReporter(console).flush()
    assert "No issues reported." in console.export_text()


def test_print_problems_marks_changed():
    console = _console()
    changed = Problem(id="memleak", category="Memory", severity=Severity.ERROR)
    changed.set_enabled(False)
    untouched = Problem(id="unusedVariable", category="Style", severity=Severity.STYLE)
    print_problems([untouched, changed], console)
    text = console.export_text()
    assert "memleak *" in text
    assert "unusedVariable *" not in text
    assert text.index("memleak") < text.index("unusedVariable")
