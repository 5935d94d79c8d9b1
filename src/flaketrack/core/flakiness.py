"""Reduce parsed test results into ranked :class:`FlakyTest` records."""

from __future__ import annotations

from collections import Counter
from typing import TYPE_CHECKING

from flaketrack.core.model import FlakyTest
from flaketrack.core.types import Status

if TYPE_CHECKING:
    from collections.abc import Iterable

    from flaketrack.core.model import TestKey, TestResult


def _rank_key(test: FlakyTest) -> tuple[float, str, str]:
    return -test.flakiness_score, test.package, test.name


def count_runs(results: Iterable[TestResult]) -> tuple[Counter[TestKey], Counter[TestKey]]:
    """Return ``(total_runs, failures)`` counters keyed by ``(package, name)``."""
    runs: Counter[TestKey] = Counter()
    failures: Counter[TestKey] = Counter()
    for result in results:
        runs[result.key] += 1
        if result.status is Status.FAIL:
            failures[result.key] += 1
    return runs, failures


def aggregate(results: Iterable[TestResult], threshold: float) -> list[FlakyTest]:
    """Return tests whose failure rate is strictly above *threshold*.

    A test must also have failed at least once, so a threshold below zero never flags
    a test that always passed. Output is sorted by score descending, then by package
    and name ascending. *threshold* is not validated.
    """
    runs, failures = count_runs(results)

    flaky: list[FlakyTest] = []
    for (package, name), total in runs.items():
        failed = failures[package, name]
        score = failed / total
        if score > threshold and failed > 0:
            flaky.append(
                FlakyTest(
                    name=name,
                    package=package,
                    total_runs=total,
                    failures=failed,
                    flakiness_score=score,
                )
            )

    flaky.sort(key=_rank_key)
    return flaky


__all__ = ["aggregate", "count_runs"]
