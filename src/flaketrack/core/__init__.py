"""Parsing and aggregation core of flaketrack."""

from __future__ import annotations

from flaketrack.core.flakiness import aggregate
from flaketrack.core.model import FlakinessReport, FlakyTest, TestResult
from flaketrack.core.parser import parse_log, parse_text
from flaketrack.core.pipeline import analyze_paths, parse_sources
from flaketrack.core.types import OutputFormat, Status

__all__ = [
    "FlakinessReport",
    "FlakyTest",
    "OutputFormat",
    "Status",
    "TestResult",
    "aggregate",
    "analyze_paths",
    "parse_log",
    "parse_sources",
    "parse_text",
]
