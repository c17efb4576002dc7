"""JSON report generator for day-runner.

Builds a structured record of a finished run and writes it to a file.
Reports never go to standard output.
"""

import json
from datetime import datetime, timezone
from pathlib import Path
from typing import Any, Optional, Sequence

from ..runner.executor import RunResult


class JsonReporter:
    """Generates JSON reports from run results."""

    def generate(
        self,
        run_result: RunResult,
        command: Sequence[str],
    ) -> dict[str, Any]:
        """Generate a JSON report from a run.

        Args:
            run_result: Result returned by the executor.
            command: Test command argv that was run for each item.

        Returns:
            Report dictionary ready for JSON serialization.
        """
        passed = sum(1 for r in run_result.results if r.passed)
        failed = run_result.attempted_count - passed

        items = [
            {
                "label": r.item.label,
                "path": str(r.item.path),
                "status": "passed" if r.passed else "failed",
                "returncode": r.returncode,
                "duration_ms": r.duration_ms,
                "error": r.error,
            }
            for r in run_result.results
        ]
        items.extend(
            {
                "label": item.label,
                "path": str(item.path),
                "status": "skipped",
                "returncode": None,
                "duration_ms": 0,
                "error": None,
            }
            for item in run_result.skipped
        )

        return {
            "timestamp": datetime.now(timezone.utc).isoformat(),
            "command": list(command),
            "status": "passed" if run_result.all_passed else "failed",
            "exit_status": run_result.exit_status,
            "summary": {
                "total": run_result.attempted_count + len(run_result.skipped),
                "attempted": run_result.attempted_count,
                "passed": passed,
                "failed": failed,
                "skipped": len(run_result.skipped),
                "duration_ms": run_result.duration_ms,
            },
            "items": items,
        }

    def save(self, report: dict[str, Any], path: Path) -> Path:
        """Write the report as indented UTF-8 JSON, replacing any old file.

        Missing parent directories are created.

        Raises:
            OSError: If the file cannot be written.
        """
        target = Path(path)
        target.parent.mkdir(parents=True, exist_ok=True)
        target.write_text(
            json.dumps(report, indent=2, ensure_ascii=False) + "\n",
            encoding="utf-8",
        )
        return target


def write_report(
    run_result: RunResult,
    command: Sequence[str],
    path: Path,
    reporter: Optional[JsonReporter] = None,
) -> Path:
    """Generate and save a report in one step."""
    reporter = reporter or JsonReporter()
    return reporter.save(reporter.generate(run_result, command), path)
