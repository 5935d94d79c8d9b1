from __future__ import annotations

import logging
from datetime import UTC, datetime

import pytest

from flaketrack.core.parser import (
    ScanState,
    backfill_packages,
    parse_duration,
    parse_log,
    parse_text,
    scan_line,
)
from flaketrack.core.types import Status
from flaketrack.errors import LogReadError


def test_parse_result_line_fields() -> None:
    results = parse_text("ok      example.com/pkg    0.005s\n--- FAIL: TestAnother (0.25s)\n")
    assert len(results) == 1
    (result,) = results
    assert result.name == "TestAnother"
    assert result.status is Status.FAIL
    assert result.duration == pytest.approx(0.25)
    assert result.package == "example.com/pkg"


@pytest.mark.parametrize(
    ("line", "name", "status", "duration"),
    [
        ("--- PASS: TestName (0.01s)", "TestName", Status.PASS, "0.01"),
        ("--- SKIP: TestSkipped (0.00s)", "TestSkipped", Status.SKIP, "0.00"),
        ("--- FAIL: TestTable/case_(1) (12s)", "TestTable/case_(1)", Status.FAIL, "12"),
        ("--- PASS: Test with spaces (1.5s)", "Test with spaces", Status.PASS, "1.5"),
    ],
)
def test_parse_extracts_literal_substrings(line: str, name: str, status: Status, duration: str) -> None:
    (result,) = parse_text(line)
    assert result.name == name
    assert result.status is status
    assert str(result.duration) == str(float(duration))


def test_parse_uses_clock_for_timestamp() -> None:
    stamp = datetime(2020, 5, 17, 12, 0, tzinfo=UTC)
    (result,) = parse_log(["--- PASS: TestA (0.01s)"], clock=lambda: stamp)
    assert result.timestamp == stamp


def test_parse_ignores_unrecognised_lines() -> None:
    text = "\n".join(
        [
            "=== RUN   TestA",
            "    --- PASS: TestA/sub (0.00s)",
            "PASS",
            "FAIL",
            "?       example.com/empty    [no test files]",
            "random noise",
            "--- PASS: TestA (0.01s)",
        ]
    )
    results = parse_text(text)
    assert [r.name for r in results] == ["TestA"]


def test_parse_handles_crlf_line_endings() -> None:
    results = parse_log(["ok  pkg 0.1s\r\n", "--- PASS: TestA (0.01s)\r\n"])
    assert [(r.name, r.package) for r in results] == [("TestA", "pkg")]


def test_summary_line_with_build_failure_sets_package() -> None:
    text = "FAIL    example.com/pkg2   0.120s [build failed]\n--- FAIL: TestBroken (0.00s)\n"
    (result,) = parse_text(text)
    assert result.package == "example.com/pkg2"


def test_package_context_follows_latest_summary_line() -> None:
    text = "\n".join(
        [
            "ok  pkgA 0.1s",
            "--- PASS: TestOne (0.01s)",
            "SKIP  pkgB 0.2s",
            "--- FAIL: TestTwo (0.01s)",
        ]
    )
    results = parse_text(text)
    assert [(r.name, r.package) for r in results] == [("TestOne", "pkgA"), ("TestTwo", "pkgB")]


def test_backfill_assigns_first_package_to_leading_results() -> None:
    text = "\n".join(
        [
            "--- PASS: TestA (0.01s)",
            "--- FAIL: TestB (0.02s)",
            "ok      example.com/pkg    0.005s",
            "--- PASS: TestC (0.01s)",
            "FAIL    example.com/other  0.010s",
            "--- PASS: TestD (0.01s)",
        ]
    )
    results = parse_text(text)
    assert [(r.name, r.package) for r in results] == [
        ("TestA", "example.com/pkg"),
        ("TestB", "example.com/pkg"),
        ("TestC", "example.com/pkg"),
        ("TestD", "example.com/other"),
    ]


def test_backfill_without_summary_line_leaves_package_empty() -> None:
    results = parse_text("--- PASS: TestA (0.01s)\n--- FAIL: TestA (0.01s)\n")
    assert [r.package for r in results] == ["", ""]


def test_backfill_packages_is_pure(make_result) -> None:
    original = [make_result("TestA", package=""), make_result("TestB", package="pkg")]
    filled = backfill_packages(original, "first")
    assert [r.package for r in filled] == ["first", "pkg"]
    assert original[0].package == ""


def test_scan_line_returns_updated_state() -> None:
    state = scan_line(ScanState(), "ok  pkgA 0.1s")
    state = scan_line(state, "ok  pkgB 0.1s")
    assert state.current_package == "pkgB"
    assert state.first_package == "pkgA"
    assert state.results == []


@pytest.mark.parametrize("bad", ["abc", "1.2.3", "."])
def test_unparseable_duration_is_dropped_with_warning(bad: str, caplog: pytest.LogCaptureFixture) -> None:
    text = "\n".join(
        [
            "ok  pkg 0.1s",
            "--- PASS: TestBefore (0.01s)",
            f"--- FAIL: TestBad ({bad}s)",
            "--- PASS: TestAfter (0.02s)",
        ]
    )
    with caplog.at_level(logging.WARNING, logger="flaketrack"):
        results = parse_text(text)

    assert [r.name for r in results] == ["TestBefore", "TestAfter"]
    assert any("TestBad" in rec.getMessage() and bad in rec.getMessage() for rec in caplog.records)


@pytest.mark.parametrize(("text", "expected"), [("0.01", 0.01), ("12", 12.0), ("3.", 3.0), (".5", 0.5)])
def test_parse_duration_accepts_decimal_numbers(text: str, expected: float) -> None:
    assert parse_duration(text) == pytest.approx(expected)


@pytest.mark.parametrize("text", ["-1", "1e3", "inf", "nan", "abc", "1.2.3", ""])
def test_parse_duration_rejects_other_numbers(text: str) -> None:
    assert parse_duration(text) is None


def test_empty_input_yields_no_results() -> None:
    assert parse_text("") == []
    assert parse_log([]) == []


def test_read_error_surfaces_as_log_read_error() -> None:
    def broken():
        yield "--- PASS: TestA (0.01s)\n"
        raise OSError("disk went away")

    with pytest.raises(LogReadError, match="disk went away") as excinfo:
        parse_log(broken(), source="broken.log")
    assert excinfo.value.source == "broken.log"


@pytest.mark.parametrize("duration", ["1e-3", "-0.5", "inf"])
def test_result_shaped_line_with_non_decimal_duration_warns(
    duration: str, caplog: pytest.LogCaptureFixture
) -> None:
    with caplog.at_level(logging.WARNING, logger="flaketrack"):
        results = parse_text(f"--- PASS: T ({duration}s)\n--- PASS: U (0.5s)\n")

    assert [r.name for r in results] == ["U"]
    messages = [rec.getMessage() for rec in caplog.records if rec.levelno == logging.WARNING]
    assert messages == [f"Could not parse duration {duration!r} for test 'T'; skipping line"]


def test_summary_line_with_non_decimal_duration_is_ignored(caplog: pytest.LogCaptureFixture) -> None:
    with caplog.at_level(logging.WARNING, logger="flaketrack"):
        results = parse_text("ok  pkg 1e-3s\n--- PASS: TestA (0.01s)\n")

    assert [r.package for r in results] == [""]
    assert not caplog.records
