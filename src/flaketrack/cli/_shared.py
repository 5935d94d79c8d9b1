from __future__ import annotations

import logging

from flaketrack.core.config import LOG_FORMAT


def resolve_use_color(*, color: bool | None, color_allowed: bool) -> bool:
    # An explicit --color/--no-color takes precedence over terminal detection.
    if color is not None:
        return color
    return color_allowed


def configure_logging(*, quiet: bool, verbose: bool) -> None:
    """Configure logging based on *quiet*/*verbose*."""
    level = logging.ERROR if quiet else (logging.DEBUG if verbose else logging.INFO)
    logging.basicConfig(level=level, format=LOG_FORMAT)
    logging.getLogger("flaketrack").setLevel(level)
