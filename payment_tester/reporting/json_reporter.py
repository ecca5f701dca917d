"""JSON report generator for payment API test results.

Generates structured JSON reports from a catalog and its result store.
"""

import json
from datetime import datetime, timezone
from pathlib import Path
from typing import Any, Optional

from ..catalog.schema import TestCatalog
from ..runner.aggregator import summarize
from ..runner.results import ResultStore


class JsonReporter:
    """Generates JSON reports from test results."""

    def generate(
        self,
        catalog: TestCatalog,
        store: ResultStore,
        endpoint: str,
        duration_ms: int = 0,
        error: Optional[str] = None,
    ) -> dict[str, Any]:
        """Generate a JSON report from test results.

        Args:
            catalog: Catalog the results belong to. Fixes case order.
            store: Results of the run.
            endpoint: API endpoint the cases ran against.
            duration_ms: Run duration in milliseconds.
            error: Overall error message if the run was aborted.

        Returns:
            Report dictionary ready for JSON serialization.
        """
        summary = summarize(catalog, store)

        if error is None and summary.all_passed:
            status = "passed"
        elif error is None and summary.failed == 0:
            status = "incomplete"
        else:
            status = "failed"

        cases = []
        for case in catalog:
            result = store.get(case.id)
            entry: dict[str, Any] = {
                "id": case.id,
                "name": case.name,
                "category": case.category,
                "expected_status": case.expected_status,
                "expected_code": case.expected_code,
            }
            if result is None:
                entry.update({"status": "not_run", "passed": False})
            else:
                entry.update(result.to_dict())
            cases.append(entry)

        return {
            "timestamp": datetime.now(timezone.utc).isoformat(),
            "endpoint": endpoint,
            "catalog": catalog.source,
            "status": status,
            "summary": {**summary.to_dict(), "duration_ms": duration_ms},
            "cases": cases,
            "error": error,
        }

    def save(self, report: dict[str, Any], path: Path) -> Path:
        """Save report to a JSON file.

        Args:
            report: Report dictionary.
            path: Output file path.

        Returns:
            Path to the saved file.
        """
        path = Path(path)
        path.parent.mkdir(parents=True, exist_ok=True)

        with open(path, "w", encoding="utf-8") as f:
            json.dump(report, f, indent=2, ensure_ascii=False)

        return path

    def to_json_string(self, report: dict[str, Any], pretty: bool = True) -> str:
        """Convert report to JSON string."""
        if pretty:
            return json.dumps(report, indent=2, ensure_ascii=False)
        return json.dumps(report, ensure_ascii=False)

    def generate_cli_output(
        self,
        report: dict[str, Any],
        report_path: Optional[str] = None,
    ) -> dict[str, Any]:
        """Generate the machine-readable CLI envelope.

        {
            "success": bool,
            "command": "run",
            "data": { ... },
            "message": str
        }
        """
        summary = report["summary"]
        all_passed = report["status"] == "passed"

        data: dict[str, Any] = {
            "endpoint": report["endpoint"],
            "total_tests": summary["total"],
            "passed": summary["passed"],
            "failed": summary["failed"],
            "pending": summary["pending"],
            "duration_ms": summary["duration_ms"],
        }

        if report_path:
            data["report_path"] = report_path

        if report.get("error"):
            message = f"Run failed: {report['error']}"
        elif all_passed:
            message = "All tests passed"
        elif summary["failed"]:
            message = f"{summary['failed']} of {summary['total']} tests failed"
        else:
            message = f"{summary['pending']} of {summary['total']} tests did not run"

        return {
            "success": all_passed,
            "command": "run",
            "data": data,
            "message": message,
        }
