from __future__ import annotations

from pathlib import Path  # noqa: TC003
from typing import Annotated

import click
import typer

from flaketrack.cli.exit_codes import EXIT_OK
from flaketrack.io import write_output
from flaketrack.scripts import build_completion_script


def register(app: typer.Typer) -> None:
    @app.command("completion")
    def completion(
        ctx: typer.Context,
        shell: Annotated[
            str,
            typer.Argument(
                help="Shell name: bash, zsh, or fish.",
                click_type=click.Choice(["bash", "zsh", "fish"], case_sensitive=False),
            ),
        ],
        output: Annotated[
            Path | None,
            typer.Option("--output", help="Write script to PATH (use '-' for stdout)."),
        ] = None,
    ) -> None:
        """Generate shell completion scripts."""
        root = ctx.find_root().command
        script = build_completion_script(root, shell.lower())
        write_output(script, output)
        raise typer.Exit(code=EXIT_OK)


__all__ = ["register"]
