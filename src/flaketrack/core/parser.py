"""Parse ``go test -v`` output into package-attributed :class:`TestResult` records.

The scan is a fold over lines. The accumulator carries the package context most
recently announced by a summary line and the results collected so far; each result
line is stamped with that context. A second pass then backfills records that were
printed before the first summary line of the stream.
"""

from __future__ import annotations

import re
from dataclasses import dataclass, field, replace
from datetime import UTC, datetime
from functools import reduce
from typing import TYPE_CHECKING

from flaketrack import logger
from flaketrack.core.model import TestResult
from flaketrack.core.types import Status
from flaketrack.errors import LogReadError

if TYPE_CHECKING:
    from collections.abc import Callable, Iterable, Sequence

# Duration is captured loosely; parse_duration decides whether it is valid.
_RESULT_RE = re.compile(r"^--- (?P<status>PASS|FAIL|SKIP): (?P<name>.+?) \((?P<duration>[^()\s]+)s\)$")
_SUMMARY_RE = re.compile(
    r"^(?P<status>ok|FAIL|SKIP)\s+(?P<package>\S+)\s+(?P<duration>[\d.]+)s(?:\s+\[build failed\])?$"
)
_DURATION_RE = re.compile(r"[\d.]+")


def _utcnow() -> datetime:
    return datetime.now(UTC)


@dataclass(slots=True)
class ScanState:
    """Accumulator threaded through the line fold."""

    current_package: str = ""
    first_package: str = ""
    results: list[TestResult] = field(default_factory=list)


def parse_duration(text: str) -> float | None:
    """Return *text* as seconds, or ``None`` when it is not a plain decimal number."""
    if not _DURATION_RE.fullmatch(text):
        return None
    try:
        return float(text)
    except ValueError:
        return None


def scan_line(state: ScanState, line: str, *, clock: Callable[[], datetime] = _utcnow) -> ScanState:
    """Fold one line of runner output into *state*."""
    line = line.rstrip("\r\n")

    if m := _RESULT_RE.match(line):
        name = m.group("name")
        raw = m.group("duration")
        duration = parse_duration(raw)
        if duration is None:
            logger.warning("Could not parse duration %r for test %r; skipping line", raw, name)
            return state
        state.results.append(
            TestResult(
                name=name,
                status=Status(m.group("status")),
                duration=duration,
                timestamp=clock(),
                package=state.current_package,
            )
        )
        return state

    if m := _SUMMARY_RE.match(line):
        package = m.group("package")
        return replace(
            state,
            current_package=package,
            first_package=state.first_package or package,
        )

    return state


def backfill_packages(results: Sequence[TestResult], first_package: str) -> list[TestResult]:
    """Attribute records printed before the first summary line to that summary's package.

    Only the leading records of a stream can lack a package, and the nearest package
    line after each of them is the stream's first one. Without any summary line the
    records are returned unchanged.
    """
    if not first_package:
        return list(results)
    return [r if r.package else replace(r, package=first_package) for r in results]


def parse_log(
    lines: Iterable[str],
    *,
    source: str = "<stream>",
    clock: Callable[[], datetime] = _utcnow,
) -> list[TestResult]:
    """Parse one source of ``go test -v`` output.

    Parameters
    ----------
    lines:
        Any iterable of text lines, typically an open text file or ``sys.stdin``.
    source:
        Display name used in error messages.
    clock:
        Supplies the capture timestamp for each record.

    Raises
    ------
    LogReadError
        The underlying stream failed while being read or held invalid UTF-8.
    """
    try:
        state = reduce(lambda acc, line: scan_line(acc, line, clock=clock), lines, ScanState())
    except (OSError, UnicodeDecodeError) as exc:
        raise LogReadError(source, str(exc)) from exc

    results = backfill_packages(state.results, state.first_package)
    logger.debug("parsed %d test results from %s", len(results), source)
    return results


def parse_text(text: str, *, source: str = "<text>") -> list[TestResult]:
    """Parse an in-memory string of runner output."""
    return parse_log(text.splitlines(), source=source)


__all__ = [
    "ScanState",
    "backfill_packages",
    "parse_duration",
    "parse_log",
    "parse_text",
    "scan_line",
]
