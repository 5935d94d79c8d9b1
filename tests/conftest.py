from __future__ import annotations

from collections.abc import Callable, Iterable
from datetime import UTC, datetime
from pathlib import Path

import pytest
from click.testing import CliRunner

from flaketrack.core.model import TestResult
from flaketrack.core.types import Status

FIXED_TIME = datetime(2024, 1, 1, tzinfo=UTC)


@pytest.fixture
def cli_runner() -> CliRunner:
    """Return a Click CLI runner for invoking the command-line interface."""
    return CliRunner()


@pytest.fixture
def go_log(tmp_path: Path) -> Callable[..., Path]:
    """Write ``go test -v`` style lines to a file under *tmp_path*."""

    def write(lines: Iterable[str], *, filename: str = "test.log") -> Path:
        path = tmp_path / filename
        path.write_text("".join(f"{line}\n" for line in lines), encoding="utf-8")
        return path

    return write


@pytest.fixture
def make_result() -> Callable[..., TestResult]:
    def build(name: str, status: str = "PASS", *, package: str = "pkg", duration: float = 0.01) -> TestResult:
        return TestResult(
            name=name,
            status=Status(status),
            duration=duration,
            timestamp=FIXED_TIME,
            package=package,
        )

    return build
