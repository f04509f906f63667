"""Command-line interface for signwash.

Responsibilities:
- Expose `normalize` for rewriting text lines directly.
- Expose `simulate` for running lines through the host event and buffer protocol.

Key public functions:
- `app`: Typer application instance.
- `main`: invoke the Typer application.
"""

from __future__ import annotations

from dataclasses import replace
from pathlib import Path
import sys
from typing import Annotated

import typer

from .cli_rendering import echo_call_summary, echo_report, exit_with_command_error
from .config import ConfigLoader, SanitizerConfig
from .errors import ConfigError, SanitizerStageError
from .host.buffers import InMemoryBufferStore
from .host.events import InMemoryEventBus, SignChangeEvent
from .models.datatypes import SanitizeReport
from .sanitizer import init_plugin
from .telemetry.logger import SanitizerLogger
from .text.escapes import LEGACY_ESCAPE_RULE, EscapeNormalizer

app = typer.Typer(
    name="signwash",
    no_args_is_help=True,
    help="Normalize legacy sign color codes.",
)


def _load_config(config_path: Path | None, marker: str | None = None) -> SanitizerConfig:
    """Load YAML or environment config and map failures to stage errors."""

    try:
        if config_path is None:
            config = ConfigLoader.from_env()
        else:
            config = ConfigLoader.from_yaml(config_path)
    except FileNotFoundError as exc:
        raise SanitizerStageError(
            stage="config",
            detail=f"Config file not found: `{config_path}`.",
            hint="Provide an existing path via `--config <path.yaml>`.",
        ) from exc
    except ConfigError:
        raise
    except Exception as exc:
        raise SanitizerStageError(
            stage="config",
            detail=f"Failed to load config file `{config_path}`: {exc}",
            hint="Verify YAML syntax and file permissions.",
        ) from exc

    if marker is not None:
        config = replace(config, canonical_marker=marker)
        config.validate()
    return config


def _collect_lines(lines: list[str] | None, input_file: Path | None) -> list[str]:
    """Return lines from arguments, an input file, or stdin, in that order of preference."""

    if lines:
        return list(lines)
    if input_file is not None:
        try:
            return input_file.read_text(encoding="utf-8").splitlines()
        except OSError as exc:
            raise SanitizerStageError(
                stage="input",
                detail=f"Failed to read input file `{input_file}`: {exc}",
            ) from exc
    return sys.stdin.read().splitlines()


@app.command("normalize")
def normalize_command(
    lines: Annotated[
        list[str] | None,
        typer.Argument(help="Lines to normalize. Reads stdin when omitted."),
    ] = None,
    input_file: Annotated[
        Path | None,
        typer.Option("--input", help="Read lines from a UTF-8 text file."),
    ] = None,
    config_file: Annotated[
        Path | None,
        typer.Option("--config", help="Path to YAML config file."),
    ] = None,
    marker: Annotated[
        str | None,
        typer.Option("--marker", help="Canonical marker override."),
    ] = None,
) -> None:
    """Print each line with legacy escapes normalized."""

    try:
        config = _load_config(config_file, marker)
        normalizer = EscapeNormalizer(
            rule=LEGACY_ESCAPE_RULE,
            canonical_marker=config.canonical_marker,
        )
        collected = _collect_lines(lines, input_file)
    except Exception as exc:
        exit_with_command_error("normalize", exc)

    for line in collected:
        typer.echo(normalizer.normalize(line))


@app.command("simulate")
def simulate_command(
    lines: Annotated[
        list[str] | None,
        typer.Argument(help="Sign lines for one event. Reads stdin when omitted."),
    ] = None,
    config_file: Annotated[
        Path | None,
        typer.Option("--config", help="Path to YAML config file."),
    ] = None,
    player: Annotated[
        str | None,
        typer.Option("--player", help="Player name attached to the event."),
    ] = None,
) -> None:
    """Run lines through the host event and buffer replacement protocol."""

    try:
        config = _load_config(config_file)
        store = InMemoryBufferStore(encoding=config.text_encoding)
        bus = InMemoryEventBus()
        reports: list[SanitizeReport] = []
        init_plugin(
            bus,
            store,
            config=config,
            logger=SanitizerLogger(level=config.log_level, exclusive=True),
            report_callback=reports.append,
        )
        event = SignChangeEvent(
            lines=[store.put(line) for line in _collect_lines(lines, None)],
            player=player,
        )
        bus.dispatch(event)
    except Exception as exc:
        exit_with_command_error("simulate", exc)

    texts = [None if handle is None else store.text(handle) for handle in event.lines]
    for report in reports:
        echo_report(report, texts)
    echo_call_summary(store.calls)


def main() -> None:
    """CLI entrypoint for console scripts."""
    app()


if __name__ == "__main__":
    main()
