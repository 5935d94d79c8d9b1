"""Centralised exception hierarchy for flaketrack."""

from __future__ import annotations


class FlaketrackError(Exception):
    """Base class for all custom flaketrack exceptions."""


class LogReadError(FlaketrackError):
    """A test log could not be opened, read or decoded."""

    def __init__(self, source: str, reason: str) -> None:
        super().__init__(f"failed to read test output from {source}: {reason}")
        self.source = source


class ConfigError(FlaketrackError):
    """The ``[tool.flaketrack]`` configuration table holds an invalid value."""


__all__ = [
    "ConfigError",
    "FlaketrackError",
    "LogReadError",
]
