from __future__ import annotations

import sys
from typing import TYPE_CHECKING, TextIO

from flaketrack import logger
from flaketrack.core.flakiness import aggregate
from flaketrack.core.model import FlakinessReport
from flaketrack.core.parser import parse_log
from flaketrack.errors import LogReadError

if TYPE_CHECKING:
    from collections.abc import Iterable, Iterator, Sequence
    from pathlib import Path

    from flaketrack.core.model import TestResult

STDIN_NAME = "<stdin>"


def parse_sources(sources: Iterable[tuple[str, Iterable[str]]]) -> list[TestResult]:
    """Parse each ``(name, lines)`` source in order and concatenate the results.

    Package backfill stays within each source; records never pick up a package
    from a different file.
    """
    results: list[TestResult] = []
    for name, lines in sources:
        results.extend(parse_log(lines, source=name))
    return results


def strict_utf8(stream: TextIO) -> TextIO:
    """Make *stream* decode as strict UTF-8 so bad bytes surface as read errors.

    Interpreters running under the C locale read stdin with ``surrogateescape``.
    """
    reconfigure = getattr(stream, "reconfigure", None)
    if reconfigure is not None:
        reconfigure(encoding="utf-8", errors="strict")
    return stream


def open_sources(paths: Sequence[Path], *, stdin: TextIO | None = None) -> Iterator[tuple[str, Iterable[str]]]:
    """Yield ``(name, stream)`` for each path, or for *stdin* when no path is given.

    Each file stays open only until the consumer asks for the next source.
    """
    if not paths:
        logger.info("No input files given; reading test output from stdin")
        stream = stdin if stdin is not None else sys.stdin
        try:
            strict_utf8(stream)
        except (OSError, ValueError) as exc:
            raise LogReadError(STDIN_NAME, str(exc)) from exc
        yield STDIN_NAME, stream
        return

    for path in paths:
        try:
            fh = path.open(encoding="utf-8")
        except OSError as exc:
            raise LogReadError(str(path), exc.strerror or str(exc)) from exc
        with fh:
            yield str(path), fh


def build_report(
    results: Sequence[TestResult],
    *,
    threshold: float,
    sources: tuple[str, ...] = (),
) -> FlakinessReport:
    return FlakinessReport(
        threshold=threshold,
        sources=sources,
        total_results=len(results),
        flaky_tests=tuple(aggregate(results, threshold)),
    )


def analyze_paths(
    paths: Sequence[Path],
    *,
    threshold: float,
    stdin: TextIO | None = None,
) -> FlakinessReport:
    """Parse every source, then aggregate the combined results into a report.

    Raises
    ------
    LogReadError
        Any source could not be opened or read. No partial report is produced.
    """
    sources = tuple(str(p) for p in paths) or (STDIN_NAME,)
    results = parse_sources(open_sources(paths, stdin=stdin))
    report = build_report(results, threshold=threshold, sources=sources)
    logger.debug(
        "aggregated %d results from %d source(s); %d flaky",
        report.total_results,
        len(sources),
        len(report.flaky_tests),
    )
    return report


__all__ = [
    "STDIN_NAME",
    "analyze_paths",
    "build_report",
    "open_sources",
    "parse_sources",
    "strict_utf8",
]
