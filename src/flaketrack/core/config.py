"""Central configuration and constants for ``flaketrack``."""

from __future__ import annotations

import json
import tomllib
from dataclasses import dataclass
from functools import cache
from importlib import resources
from typing import TYPE_CHECKING

from flaketrack import logger
from flaketrack.errors import ConfigError

if TYPE_CHECKING:
    from pathlib import Path

# Minimum failure rate (exclusive) for a test to be reported as flaky.
DEFAULT_THRESHOLD = 0.1

# Default logging format used by the CLI entry point.
LOG_FORMAT = "%(levelname)s: %(message)s"

_SCHEMA_FILES: dict[str, str] = {
    "v1": "schema.json",
}


@dataclass(frozen=True, slots=True)
class Config:
    """Settings resolved from ``[tool.flaketrack]``."""

    threshold: float = DEFAULT_THRESHOLD


@cache
def get_schema(version: str = "v1") -> dict[str, object]:
    """Load and cache the JSON schema for structured output."""
    try:
        filename = _SCHEMA_FILES[version]
    except KeyError as exc:
        choices = ", ".join(sorted(_SCHEMA_FILES))
        msg = f"Unsupported schema version: {version!r}. Available versions: {choices}"
        raise ValueError(msg) from exc
    return json.loads(resources.files("flaketrack.data").joinpath(filename).read_text(encoding="utf-8"))


def _read_tool_table(pyproject: Path) -> dict[str, object]:
    try:
        with pyproject.open("rb") as f:
            data = tomllib.load(f)
    except (OSError, tomllib.TOMLDecodeError) as e:
        logger.warning("Failed to parse %s: %s", pyproject, e)
        return {}

    table = data.get("tool", {}).get("flaketrack", {})
    return table if isinstance(table, dict) else {}


def load_config(pyproject: Path) -> Config:
    """Return the configuration declared in *pyproject*, or defaults if it has none."""
    if not pyproject.exists():
        return Config()

    table = _read_tool_table(pyproject)
    raw = table.get("threshold")
    if raw is None:
        return Config()
    # bool is an int subclass
    if isinstance(raw, bool) or not isinstance(raw, int | float):
        msg = f"[tool.flaketrack] threshold must be a number, got {raw!r} in {pyproject}"
        raise ConfigError(msg)

    logger.info("Using flakiness threshold from config: %s", raw)
    return Config(threshold=float(raw))


__all__ = ["DEFAULT_THRESHOLD", "LOG_FORMAT", "Config", "get_schema", "load_config"]
