"""Utility helpers for generating CLI documentation artefacts."""

from __future__ import annotations

from typing import TYPE_CHECKING, Literal

from click.shell_completion import BashComplete, FishComplete, ShellComplete, ZshComplete

if TYPE_CHECKING:
    from pathlib import Path

    import click

ShellName = Literal["bash", "zsh", "fish"]

_COMPLETE_CLASSES: dict[ShellName, type[ShellComplete]] = {
    "bash": BashComplete,
    "zsh": ZshComplete,
    "fish": FishComplete,
}

_PROG = "flaketrack"
_COMPLETE_VAR = "_FLAKETRACK_COMPLETE"

_EXIT_STATUS = """\
0  success, including when no flaky tests are found
1  a test log could not be opened or read
2  invalid command line usage
78 configuration error in [tool.flaketrack]
"""


def _subcommands(command: click.Command) -> dict[str, click.Command]:
    # typer may build on its own copy of click, so groups are recognised by shape
    return dict(getattr(command, "commands", None) or {})


def _collect_option_flags(command: click.Command) -> tuple[str, ...]:
    flags: list[str] = []
    for cmd in [command, *_subcommands(command).values()]:
        for param in cmd.params:
            if getattr(param, "param_type_name", None) == "option":
                flags.extend(param.opts)
                flags.extend(getattr(param, "secondary_opts", ()))
    return tuple(sorted({flag for flag in flags if flag}))


def _command_summaries(command: click.Command) -> str:
    rows = [
        f"{name:<12}{sub.get_short_help_str(limit=70)}" for name, sub in sorted(_subcommands(command).items())
    ]
    return "\n".join(rows)


def build_man_page(command: click.Command) -> str:
    """Return a plain-text manual page for *command*."""
    summaries = _command_summaries(command)
    sections = [
        "FLAKETRACK(1)\n",
        "NAME\n----\nflaketrack - find flaky tests in go test -v output\n\n",
        "SYNOPSIS\n--------\nflaketrack [OPTIONS] COMMAND [ARGS]...\n\n",
        "COMMANDS\n--------\n",
        summaries,
        "\n\nOPTIONS\n-------\n",
        " ".join(_collect_option_flags(command)),
        "\n\nEXIT STATUS\n-----------\n",
        _EXIT_STATUS.strip(),
        "\n",
    ]
    return "".join(sections)


def write_man_page(command: click.Command, destination: Path) -> None:
    """Write the generated manual page to *destination*."""
    destination.parent.mkdir(parents=True, exist_ok=True)
    destination.write_text(build_man_page(command), encoding="utf-8")


def build_completion_script(command: click.Command, shell: ShellName) -> str:
    """Return a shell completion script for *shell*."""
    complete_cls = _COMPLETE_CLASSES[shell]
    complete = complete_cls(command, {}, _PROG, _COMPLETE_VAR)
    option_comment = "# flaketrack options: " + " ".join(_collect_option_flags(command))
    return f"{option_comment}\n{complete.source()}"


__all__ = ["build_completion_script", "build_man_page", "write_man_page"]
