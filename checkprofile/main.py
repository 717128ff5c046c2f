from __future__ import annotations

"""
Typer CLI entry point for inspecting and editing a problem profile.

The profile is built from an exported analyzer catalog (--catalog) and the
user's overrides are kept in a JSON settings file (--settings). Every
mutating command saves the overrides back before exiting.
"""

import logging
from pathlib import Path
from typing import Optional

import typer
from rich.console import Console
from rich.logging import RichHandler

from checkprofile.collaborators.catalog import JsonCatalogLoader
from checkprofile.collaborators.logsink import LoggingLogSink
from checkprofile.collaborators.settings import JsonSettingsStore
from checkprofile.config import BINARY_PATH_KEY, Config, get_default_config
from checkprofile.errors import IncompatibleVersionError, ProfileError
from checkprofile.problems.models import Problem, Severity
from checkprofile.profile import ProblemProfile
from checkprofile.reporting.console import print_problems

logger = logging.getLogger(__name__)

app = typer.Typer(help="checkprofile - manage which cppcheck problems are reported and how.")


def _open(ctx: typer.Context) -> tuple[ProblemProfile, JsonSettingsStore, Config]:
    """Build the profile from the catalog and apply the saved overrides."""
    config: Config = ctx.obj
    store = JsonSettingsStore(config.settings_path, defaults={BINARY_PATH_KEY: config.binary_path})
    loader = JsonCatalogLoader(config.catalog_path)
    sink = LoggingLogSink()
    try:
        profile = ProblemProfile(sink, store.get_string(BINARY_PATH_KEY), loader, loader)
    except IncompatibleVersionError as e:
        typer.secho(f"Incompatible analyzer: {e}", fg=typer.colors.RED, err=True)
        raise typer.Exit(code=2)
    except ProfileError as e:
        typer.secho(f"Could not load problem catalog: {e}", fg=typer.colors.RED, err=True)
        raise typer.Exit(code=2)
    profile.load_overrides(store, config.problems_key)
    for message, cause in sink.user_errors:
        typer.secho(f"{message}: {cause}", fg=typer.colors.YELLOW, err=True)
    return profile, store, config


def _require(profile: ProblemProfile, problem_id: str) -> Problem:
    problem = profile.get_problem(problem_id)
    if problem is None:
        typer.secho(f"Unknown problem id: {problem_id}", fg=typer.colors.RED, err=True)
        raise typer.Exit(code=1)
    return problem


@app.callback()
def main_options(
    ctx: typer.Context,
    catalog: Optional[Path] = typer.Option(None, "--catalog", "-c", help="Exported analyzer catalog (JSON)."),
    settings: Optional[Path] = typer.Option(None, "--settings", "-s", help="Preferences file (JSON)."),
    verbose: bool = typer.Option(False, "--verbose", "-v", help="Enable debug logging."),
) -> None:
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.WARNING,
        format="%(message)s",
        handlers=[RichHandler(console=Console(stderr=True), show_path=False)],
    )
    ctx.obj = get_default_config(catalog_path=catalog, settings_path=settings)


@app.command()
def problems(
    ctx: typer.Context,
    category: Optional[str] = typer.Option(None, "--category", help="Only show this category."),
) -> None:
    """List problems with their current severity and enabled state."""
    profile, _, _ = _open(ctx)
    selected = profile.problems_in_category(category) if category else profile.all_problems()
    if not selected:
        typer.echo("No problems found.")
        return
    print_problems(selected, Console())


@app.command()
def categories(ctx: typer.Context) -> None:
    """List the problem categories of the catalog."""
    profile, _, _ = _open(ctx)
    for name in sorted(profile.categories()):
        typer.echo(name)


@app.command()
def message(ctx: typer.Context, problem_id: str = typer.Argument(..., help="Problem id.")) -> None:
    """Print the message of a problem."""
    profile, _, _ = _open(ctx)
    text = profile.message_for_id(problem_id)
    if text is None:
        typer.secho(f"Unknown problem id: {problem_id}", fg=typer.colors.RED, err=True)
        raise typer.Exit(code=1)
    typer.echo(text)


@app.command()
def enable(ctx: typer.Context, problem_id: str = typer.Argument(..., help="Problem id.")) -> None:
    """Report this problem."""
    profile, store, config = _open(ctx)
    _require(profile, problem_id).set_enabled(True)
    profile.save_overrides(store, config.problems_key)
    typer.echo(f"Enabled {problem_id}")


@app.command()
def disable(ctx: typer.Context, problem_id: str = typer.Argument(..., help="Problem id.")) -> None:
    """Stop reporting this problem."""
    profile, store, config = _open(ctx)
    _require(profile, problem_id).set_enabled(False)
    profile.save_overrides(store, config.problems_key)
    typer.echo(f"Disabled {problem_id}")


@app.command()
def severity(
    ctx: typer.Context,
    problem_id: str = typer.Argument(..., help="Problem id."),
    level: Severity = typer.Argument(..., case_sensitive=False, help="New severity."),
) -> None:
    """Change the severity findings of this problem are reported with."""
    profile, store, config = _open(ctx)
    _require(profile, problem_id).set_severity(level)
    profile.save_overrides(store, config.problems_key)
    typer.echo(f"Set {problem_id} to {level.value}")


@app.command()
def reset(ctx: typer.Context) -> None:
    """Forget all overrides and return to the catalog defaults."""
    profile, store, config = _open(ctx)
    profile.reset_all_to_defaults(store, config.problems_key)
    typer.echo(f"Reset {len(profile.all_problems())} problems to defaults")


def main() -> None:
    """Entry point for `python -m checkprofile.main`."""
    app()


if __name__ == "__main__":
    main()
