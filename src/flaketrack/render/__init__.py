from __future__ import annotations

from typing import TYPE_CHECKING

from flaketrack.core.types import OutputFormat
from flaketrack.render.human import render_human
from flaketrack.render.json import render_json

if TYPE_CHECKING:
    from flaketrack.core.model import FlakinessReport


def render(report: FlakinessReport, fmt: OutputFormat = OutputFormat.HUMAN, *, color: bool = False) -> str:
    """Render *report* in the requested output format."""
    if fmt is OutputFormat.JSON:
        return render_json(report)
    return render_human(report, color=color)


__all__ = ["render", "render_human", "render_json"]
