# Rich console output: reporters for accepted findings and tables of profile problems.

from __future__ import annotations

from typing import Optional, Sequence

from rich import box
from rich.console import Console
from rich.panel import Panel
from rich.table import Table
from rich.text import Text

from checkprofile.collaborators.base import ProblemReporter
from checkprofile.problems.models import Finding, Problem, Severity

# Severity → Rich style
SEVERITY_STYLE = {
    Severity.ERROR: "bold red",
    Severity.WARNING: "bold yellow",
    Severity.STYLE: "bold blue",
    Severity.PERFORMANCE: "bold magenta",
    Severity.PORTABILITY: "bold cyan",
    Severity.INFORMATION: "bold dim",
}

DEFAULT_SEVERITY_STYLE = "bold white"


def _severity_style(severity: Severity) -> str:
    return SEVERITY_STYLE.get(severity, DEFAULT_SEVERITY_STYLE)


class CollectingReporter(ProblemReporter):
    """Keeps every reported finding, in order."""

    def __init__(self) -> None:
        self.findings: list[Finding] = []

    def report(self, finding: Finding) -> None:
        self.findings.append(finding)


class ConsoleReporter(CollectingReporter):
    """
    Collects findings and prints them with Rich on flush().
    Groups by file, sorts by line and colors by severity.
    """

    def __init__(self, console: Optional[Console] = None) -> None:
        super().__init__()
        self.console = console or Console()

    def flush(self) -> None:
        print_findings(self.findings, self.console)
        self.findings = []


def print_findings(findings: Sequence[Finding], console: Console) -> None:
    if not findings:
        console.print(
            Panel(
                "[green]No issues reported.[/green]",
                title="checkprofile",
                border_style="green",
                box=box.ROUNDED,
            )
        )
        return

    by_file: dict[str, list[Finding]] = {}
    for f in findings:
        by_file.setdefault(f.file, []).append(f)

    for path in sorted(by_file):
        file_findings = sorted(by_file[path], key=lambda x: (x.location.line, x.location.column))
        console.print()
        console.print(Panel(
            f"[bold cyan]{path}[/bold cyan]",
            box=box.SIMPLE_HEAD,
            border_style="blue",
            padding=(0, 1),
        ))

        table = Table(show_header=True, header_style="bold magenta", box=box.SIMPLE, padding=(0, 1))
        table.add_column("Line", justify="right", style="dim", width=5)
        table.add_column("Severity", width=12)
        table.add_column("Id", width=22)
        table.add_column("Message", style="white")
        for f in file_findings:
            table.add_row(
                str(f.location.line),
                Text(f.severity.value.upper(), style=_severity_style(f.severity)),
                Text(f"[{f.rule_id}]", style="dim"),
                f.message,
            )
        console.print(table)

    _print_summary(findings, console)


def _print_summary(findings: Sequence[Finding], console: Console) -> None:
    by_severity: dict[Severity, int] = {}
    for f in findings:
        by_severity[f.severity] = by_severity.get(f.severity, 0) + 1

    total = len(findings)
    summary_parts = [f"[bold]{total} finding{'s' if total != 1 else ''}[/bold]"]
    for sev in Severity:
        if sev in by_severity:
            summary_parts.append(f"[{_severity_style(sev)}]{by_severity[sev]} {sev.value}[/]")

    console.print()
    console.print(Panel(" | ".join(summary_parts), title="Summary", border_style="yellow", box=box.ROUNDED))


def print_problems(problems: Sequence[Problem], console: Console) -> None:
    """Table of problems sorted by category then id; changed entries are marked with *."""
    table = Table(
        title="Problems",
        show_header=True,
        header_style="bold cyan",
        box=box.ROUNDED,
        padding=(0, 1),
    )
    table.add_column("Id", style="white")
    table.add_column("Category")
    table.add_column("Severity", width=12)
    table.add_column("Enabled", width=8)

    for p in sorted(problems, key=lambda x: (x.category, x.id)):
        marker = "" if p.is_default() else " *"
        table.add_row(
            p.id + marker,
            p.category,
            Text(p.severity.value, style=_severity_style(p.severity)),
            Text("yes", style="bold green") if p.enabled else Text("no", style="bold red"),
        )
    console.print(table)
