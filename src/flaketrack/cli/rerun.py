from __future__ import annotations

import shlex
from typing import Annotated

import typer

from flaketrack.cli.exit_codes import EXIT_OK


def rerun_command_line(test_name: str, package: str) -> str:
    """Return the ``go test`` invocation that isolates *test_name* in *package*."""
    return shlex.join(["go", "test", "-v", "-run", f"^{test_name}$", package])


def build_rerun_plan(test_name: str, *, num_runs: int, package: str) -> str:
    command = rerun_command_line(test_name, package)
    lines = [
        f"Plan for rerunning test '{test_name}' from package '{package}' {num_runs} times:",
        f"  1. Run `{command}` {num_runs} times.",
        "  2. Capture the output of every run into one log.",
        "  3. Feed that log to `flaketrack analyze` to score the test.",
        "",
        "Nothing is executed by this command.",
    ]
    return "\n".join(lines)


def rerun_cmd(
    test_name: Annotated[str, typer.Argument(help="Name of the Go test to rerun.")],
    num_runs: Annotated[
        int,
        typer.Option("-n", "--num-runs", help="Number of times to rerun the test.", min=1),
    ] = 10,
    package: Annotated[
        str,
        typer.Option("-p", "--package", help="Go package containing the test."),
    ] = "./...",
) -> None:
    """Describe how to rerun a single test repeatedly to confirm flakiness."""
    typer.echo(build_rerun_plan(test_name, num_runs=num_runs, package=package))
    raise typer.Exit(code=EXIT_OK)


def register(app: typer.Typer) -> None:
    app.command("rerun")(rerun_cmd)


__all__ = ["build_rerun_plan", "register", "rerun_command_line"]
