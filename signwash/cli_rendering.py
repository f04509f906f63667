"""CLI output and error rendering helpers."""

from __future__ import annotations

from typing import NoReturn

import typer

from .errors import SanitizerStageError
from .models.datatypes import SanitizeReport


def exit_with_command_error(command_name: str, exc: Exception) -> NoReturn:
    """Print concise diagnostics for command failures and exit with code 1."""

    if isinstance(exc, SanitizerStageError):
        typer.secho(
            f"{command_name} failed at stage `{exc.stage}`: {exc.detail}",
            fg=typer.colors.RED,
            err=True,
        )
        if exc.hint:
            typer.secho(f"Hint: {exc.hint}", fg=typer.colors.YELLOW, err=True)
    else:
        typer.secho(f"{command_name} failed: {exc}", fg=typer.colors.RED, err=True)
    raise typer.Exit(code=1) from exc


def echo_report(report: SanitizeReport, texts: list[str | None]) -> None:
    """Print one row per line outcome with the text now held by the collection."""

    for outcome, text in zip(report.outcomes, texts):
        shown = "(none)" if text is None else repr(text)
        typer.echo(f"{outcome.index}. {outcome.status}: {shown}")


def echo_call_summary(calls: list[tuple[str, int]]) -> None:
    """Print buffer store allocate/release counts."""

    allocations = sum(1 for name, _ in calls if name == "allocate")
    releases = sum(1 for name, _ in calls if name == "release")
    typer.echo(f"Allocations: {allocations}")
    typer.echo(f"Releases: {releases}")
