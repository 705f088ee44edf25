"""JSON reporter for machine-readable output.

Stdlib-only reporter, consumed by the inlining stage or CI tooling.
"""

from __future__ import annotations

import json
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from collections.abc import Mapping

    from inlinecheck.domain.model.purity import PurityReport


class JSONReporter:
    """JSON reporter: one object per callable, keyed by label."""

    def __init__(self, *, indent: int | None = 2) -> None:
        """Initialize reporter.

        Args:
            indent: JSON indentation (default: 2, None for compact)
        """
        self._indent = indent

    def report(self, reports: Mapping[str, PurityReport]) -> str:
        """Format purity reports as JSON string.

        Args:
            reports: Callable label → its purity report.

        Returns:
            JSON document with summary and per-callable verdicts.
        """
        pure_count = sum(1 for report in reports.values() if report.is_pure)
        data = {
            "summary": {
                "total": len(reports),
                "pure": pure_count,
                "impure": len(reports) - pure_count,
            },
            "callables": {label: self._report_to_dict(r) for label, r in reports.items()},
        }
        return json.dumps(data, indent=self._indent)

    def _report_to_dict(self, report: PurityReport) -> dict[str, object]:
        """Convert PurityReport to JSON-serializable dict."""
        return {
            "is_pure": report.is_pure,
            "has_by_ref_binding": report.has_by_ref_binding,
            "has_global_state": report.has_global_state,
            "has_side_effecting_access": report.has_side_effecting_access,
            "has_impure_call": report.has_impure_call,
            "violations": list(report.violations),
        }
