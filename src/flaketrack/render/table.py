from __future__ import annotations

import sys
from io import StringIO
from typing import TYPE_CHECKING, Any

from rich.console import Console
from rich.table import Table

if TYPE_CHECKING:
    from collections.abc import Sequence


def _render_table(table: Table, *, color: bool) -> str:
    buf = StringIO()
    console = Console(
        file=buf,
        force_terminal=color,
        width=sys.maxsize,
        color_system="standard" if color else None,
        no_color=not color,
    )
    console.print(table)
    return buf.getvalue().rstrip()


def format_table(
    headers: Sequence[str],
    rows: Sequence[Sequence[Any]],
    *,
    right_align: Sequence[int] = (),
    color: bool = False,
) -> str:
    """Render *rows* under *headers* as a Rich table captured to text."""
    if not headers or not rows:
        return ""
    table = Table(show_header=True, header_style="bold")
    for idx, header in enumerate(headers):
        table.add_column(header, justify="right" if idx in right_align else "left", no_wrap=True)
    for row in rows:
        table.add_row(*[str(v) for v in row])
    return _render_table(table, color=color)


__all__ = ["format_table"]
