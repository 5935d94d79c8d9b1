from __future__ import annotations

import json
from typing import TYPE_CHECKING

from jsonschema import validate

from flaketrack import __version__
from flaketrack.core.config import get_schema

if TYPE_CHECKING:
    from flaketrack.core.model import FlakinessReport, FlakyTest


def _schema_id() -> str:
    return str(get_schema("v1")["$id"])


def _flaky_to_obj(test: FlakyTest) -> dict[str, object]:
    return {
        "name": test.name,
        "package": test.package,
        "flakiness_score": test.flakiness_score,
        "failures": test.failures,
        "total_runs": test.total_runs,
    }


def report_to_obj(report: FlakinessReport) -> dict[str, object]:
    """Project *report* onto the v1 schema shape."""
    return {
        "schema": _schema_id(),
        "version": __version__,
        "threshold": report.threshold,
        "sources": list(report.sources),
        "total_results": report.total_results,
        "flaky_tests": [_flaky_to_obj(t) for t in report.flaky_tests],
    }


def render_json(report: FlakinessReport) -> str:
    """Serialise *report* to JSON, validating it against the bundled schema first."""
    data = report_to_obj(report)
    validate(data, get_schema("v1"))
    return json.dumps(data, indent=2)


__all__ = ["render_json", "report_to_obj"]
