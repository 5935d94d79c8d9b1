from __future__ import annotations

from typing import Annotated

import typer
from typer.main import get_command

from flaketrack import __version__
from flaketrack.cli import analyze, completion, man, rerun
from flaketrack.cli._shared import configure_logging


def create_app() -> typer.Typer:
    app = typer.Typer(help="Track and monitor flaky Go tests from go test -v output.")

    @app.callback(invoke_without_command=True)
    def _root(
        ctx: typer.Context,
        *,
        version: Annotated[
            bool,
            typer.Option("--version", help="Show version and exit"),
        ] = False,
        verbose: Annotated[
            bool,
            typer.Option("-v", "--verbose", help="Emit diagnostic logging"),
        ] = False,
        quiet: Annotated[
            bool,
            typer.Option("-q", "--quiet", help="Suppress INFO logs, emit only errors"),
        ] = False,
    ) -> None:
        if version:
            typer.echo(f"flaketrack {__version__}")
            raise typer.Exit
        configure_logging(quiet=quiet, verbose=verbose)
        if ctx.invoked_subcommand is None:
            typer.echo(ctx.get_help())
            raise typer.Exit

    analyze.register(app)
    rerun.register(app)
    completion.register(app)
    man.register(app)

    return app


def main() -> None:
    app = create_app()
    get_command(app)()


# Click-compatible object for tooling that imports it
cli = get_command(create_app())

__all__ = ["cli", "create_app", "main"]
