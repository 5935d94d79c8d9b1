"""Shared enumerations used across flaketrack."""

from __future__ import annotations

from enum import StrEnum


class Status(StrEnum):
    """Outcome reported for a single test execution."""

    PASS = "PASS"
    FAIL = "FAIL"
    SKIP = "SKIP"


class OutputFormat(StrEnum):
    """Supported report formats."""

    HUMAN = "human"
    JSON = "json"


__all__ = ["OutputFormat", "Status"]
