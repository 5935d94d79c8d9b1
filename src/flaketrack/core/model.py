from __future__ import annotations

from dataclasses import dataclass
from typing import TYPE_CHECKING

from flaketrack.core.types import Status

if TYPE_CHECKING:
    from datetime import datetime

TestKey = tuple[str, str]


@dataclass(frozen=True, slots=True)
class TestResult:
    """One observed outcome of one test execution."""

    __test__ = False  # keep pytest from collecting this class

    name: str
    status: Status
    duration: float
    timestamp: datetime
    package: str = ""

    def __post_init__(self) -> None:
        """Validate the status and duration."""
        if self.duration < 0:
            msg = "TestResult.duration must be >= 0"
            raise ValueError(msg)
        if not isinstance(self.status, Status):
            object.__setattr__(self, "status", Status(self.status))

    @property
    def key(self) -> TestKey:
        """Identity of the logical test: ``(package, name)``."""
        return self.package, self.name


@dataclass(frozen=True, slots=True)
class FlakyTest:
    """A test whose observed failure rate exceeded the threshold."""

    name: str
    package: str
    total_runs: int
    failures: int
    flakiness_score: float


@dataclass(frozen=True, slots=True)
class FlakinessReport:
    """Everything a renderer needs to describe one analysis run."""

    threshold: float
    sources: tuple[str, ...]
    total_results: int
    flaky_tests: tuple[FlakyTest, ...]

    @property
    def has_results(self) -> bool:
        return self.total_results > 0


__all__ = ["FlakinessReport", "FlakyTest", "TestKey", "TestResult"]
