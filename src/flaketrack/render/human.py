from __future__ import annotations

from typing import TYPE_CHECKING

from flaketrack.render.table import format_table

if TYPE_CHECKING:
    from flaketrack.core.model import FlakinessReport, FlakyTest

HEADING = "--- Flaky Test Report ---"
NO_RESULTS = "No test results found to analyze."

_HEADERS = ("TEST NAME", "PACKAGE", "FLAKINESS SCORE", "FAILURES", "TOTAL RUNS")
_NUMERIC_COLUMNS = (2, 3, 4)


def format_percent(score: float) -> str:
    """``0.125`` -> ``'12.50%'``."""
    return f"{score * 100:.2f}%"


def _threshold_label(threshold: float) -> str:
    return f"threshold: {threshold * 100:.0f}% failure rate"


def _row(test: FlakyTest) -> tuple[str, str, str, int, int]:
    return (
        test.name,
        test.package,
        format_percent(test.flakiness_score),
        test.failures,
        test.total_runs,
    )


def render_human(report: FlakinessReport, *, color: bool = False) -> str:
    if not report.has_results:
        return NO_RESULTS

    label = _threshold_label(report.threshold)
    if not report.flaky_tests:
        return f"{HEADING}\nNo tests identified as flaky ({label})."

    count = len(report.flaky_tests)
    table = format_table(
        _HEADERS,
        [_row(t) for t in report.flaky_tests],
        right_align=_NUMERIC_COLUMNS,
        color=color,
    )
    return f"{HEADING}\nIdentified {count} potentially flaky tests ({label}):\n{table}"


__all__ = ["format_percent", "render_human"]
