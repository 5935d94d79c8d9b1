from __future__ import annotations

import sys
from pathlib import Path
from typing import Annotated

import click.utils as click_utils
import typer

from flaketrack.cli._shared import resolve_use_color
from flaketrack.cli.exit_codes import EXIT_CONFIG, EXIT_IOERR, EXIT_OK
from flaketrack.core.config import load_config
from flaketrack.core.pipeline import analyze_paths
from flaketrack.core.types import OutputFormat
from flaketrack.errors import ConfigError, LogReadError
from flaketrack.io import write_output
from flaketrack.render import render


def _is_tty_stdout() -> bool:
    try:
        return bool(getattr(sys.stdout, "isatty", lambda: False)())
    except OSError:
        return False


def _resolve_threshold(threshold: float | None) -> float:
    if threshold is not None:
        return threshold
    try:
        return load_config(Path.cwd() / "pyproject.toml").threshold
    except ConfigError as exc:
        typer.echo(f"ERROR: {exc}", err=True)
        raise typer.Exit(code=EXIT_CONFIG) from exc


def analyze_cmd(
    files: Annotated[
        list[Path] | None,
        typer.Argument(help="go test -v output file(s). If omitted, standard input is read."),
    ] = None,
    threshold: Annotated[
        float | None,
        typer.Option(
            "-t",
            "--threshold",
            help="Failure rate (0-1) a test must exceed to be reported. Defaults to 0.1 or [tool.flaketrack].",
        ),
    ] = None,
    fmt: Annotated[
        OutputFormat,
        typer.Option("--format", help="Report format.", case_sensitive=False),
    ] = OutputFormat.HUMAN,
    output: Annotated[
        Path | None,
        typer.Option("--output", help="Write the report to PATH (use '-' for stdout)."),
    ] = None,
    color: Annotated[
        bool | None,
        typer.Option("--color/--no-color", help="Force or disable color output."),
    ] = None,
) -> None:
    """Analyze go test -v output for flaky tests.

    Example:

        go test -v ./... | flaketrack analyze
    """
    resolved_threshold = _resolve_threshold(threshold)

    try:
        report = analyze_paths(tuple(files or ()), threshold=resolved_threshold)
    except LogReadError as exc:
        typer.echo(f"ERROR: {exc}", err=True)
        raise typer.Exit(code=EXIT_IOERR) from exc

    is_tty_like = _is_tty_stdout() and output in {None, Path("-")}
    color_allowed = is_tty_like and not click_utils.should_strip_ansi(sys.stdout)
    use_color = resolve_use_color(color=color, color_allowed=color_allowed)

    write_output(render(report, fmt, color=use_color), output)
    raise typer.Exit(code=EXIT_OK)


def register(app: typer.Typer) -> None:
    app.command("analyze")(analyze_cmd)


__all__ = ["register"]
