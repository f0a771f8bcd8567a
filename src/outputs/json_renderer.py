"""
JSON renderer for comparison and scan reports.

The field names and nesting produced here are a wire format consumed by
downstream tooling; changing them is a breaking change.
"""

import json

from core.exceptions import SerializationException
from outputs.base import ReportRenderer
from outputs.report import CVERow, ComparisonReport, SingleScanReport


def _cve_records(rows: tuple[CVERow, ...]) -> list[dict]:
    return [
        {
            "id": row.id,
            "severity": row.severity.value,
            "affected_images": list(row.affected_images),
        }
        for row in rows
    ]


def _dumps(document: dict) -> str:
    try:
        return json.dumps(document, indent=2, allow_nan=False)
    except (TypeError, ValueError) as e:
        raise SerializationException("json", str(e)) from e


class JSONRenderer(ReportRenderer):
    """JSON report serializer."""

    def supports_format(self) -> str:
        """Return format identifier."""
        return "json"

    def to_document(self, report: ComparisonReport) -> dict:
        """
        Build the JSON document for a comparison report.

        Args:
            report: Intermediate comparison report

        Returns:
            Dictionary with report_type, comparison, summary and the three
            CVE collections
        """
        return {
            "report_type": report.report_type,
            "comparison": {
                "before_chart": report.before,
                "after_chart": report.after,
            },
            "summary": {
                "severity_counts": [
                    {
                        "severity": count.severity.value,
                        "current": count.current,
                        "previous": count.previous,
                        "difference": count.difference,
                    }
                    for count in report.severity_counts
                ],
                "image_changes": [
                    {
                        "name": row.name,
                        "status": row.status.value,
                        "before_repo": row.before_repo,
                        "after_repo": row.after_repo,
                        "before_tag": row.before_tag,
                        "after_tag": row.after_tag,
                    }
                    for row in report.image_changes
                ],
            },
            "added_cves": _cve_records(report.added_cves),
            "removed_cves": _cve_records(report.removed_cves),
            "unchanged_cves": _cve_records(report.unchanged_cves),
        }

    def to_single_document(self, report: SingleScanReport) -> dict:
        """Build the JSON document for a single-artifact scan report."""
        return {
            "report_type": report.report_type,
            "artifact": report.reference,
            "summary": {
                "severity_counts": [
                    {"severity": count.severity.value, "count": count.current}
                    for count in report.severity_counts
                ],
                "total": report.total,
            },
            "vulnerabilities": _cve_records(report.vulnerabilities),
        }

    def render(self, report: ComparisonReport) -> str:
        """
        Render a comparison report as indented JSON.

        Raises:
            SerializationException: If the document cannot be encoded
        """
        return _dumps(self.to_document(report))

    def render_single(self, report: SingleScanReport) -> str:
        """
        Render a single-artifact scan report as indented JSON.

        Raises:
            SerializationException: If the document cannot be encoded
        """
        return _dumps(self.to_single_document(report))


__all__ = ["JSONRenderer"]
