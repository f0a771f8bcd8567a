"""
Markdown renderer for comparison and scan reports.

Produces GitHub-flavored Markdown tables: a severity summary, an image
status table and CVE tables banded by severity.
"""

from constants import REPORT_TITLES
from outputs.base import ReportRenderer
from outputs.report import CVERow, ComparisonReport, ImageRow, ImageStatus, SingleScanReport
from utils.formatting import format_cell, format_signed

SEVERITY_HEADER = [
    "| Severity | Count | Prev Count | Difference |",
    "|----------|-------|------------|------------|",
]

SINGLE_SEVERITY_HEADER = [
    "| Severity | Count |",
    "|----------|-------|",
]

IMAGE_HEADER = [
    "| Image Name | Status | Before Repo | After Repo | Before Tag | After Tag |",
    "|------------|--------|-------------|------------|------------|-----------|",
]

CVE_HEADER = [
    "| CVE ID | Severity | Affected Images |",
    "|--------|----------|-----------------|",
]

NO_CVES = "No CVEs found."


def _cve_section(rows: tuple[CVERow, ...]) -> list[str]:
    """Render CVE rows, emitting a heading and fresh header per severity band."""
    if not rows:
        return [NO_CVES]

    lines = []
    current_severity = None
    for row in rows:
        if row.severity != current_severity:
            if current_severity is not None:
                lines.append("")
            lines.append(f"#### {row.severity.label}")
            lines.extend(CVE_HEADER)
            current_severity = row.severity
        images = ", ".join(row.affected_images)
        lines.append(f"| {format_cell(row.id)} | {row.severity.value} | {format_cell(images)} |")
    return lines


def _image_line(row: ImageRow) -> str:
    has_before = row.status is not ImageStatus.ADDED
    has_after = row.status is not ImageStatus.REMOVED
    cells = [
        format_cell(row.name),
        row.status.value,
        format_cell(row.before_repo if has_before else None),
        format_cell(row.after_repo if has_after else None),
        format_cell(row.before_tag if has_before else None),
        format_cell(row.after_tag if has_after else None),
    ]
    return "| " + " | ".join(cells) + " |"


class MarkdownRenderer(ReportRenderer):
    """Markdown report serializer."""

    def supports_format(self) -> str:
        """Return format identifier."""
        return "markdown"

    def render(self, report: ComparisonReport) -> str:
        """
        Render a comparison report.

        Sections appear in fixed order: severity counts, images, then the
        unchanged, added and removed CVE tables.
        """
        title = REPORT_TITLES.get(report.kind, report.kind.capitalize())
        lines = [
            f"## {title} Comparison Report {report.before} to {report.after}",
            "",
            "### CVE by Severity",
            "",
            *SEVERITY_HEADER,
        ]
        for count in report.severity_counts:
            lines.append(
                f"| {count.severity.value} | {count.current} | {count.previous} "
                f"| {format_signed(count.difference)} |"
            )

        lines += ["", "### Images", "", *IMAGE_HEADER]
        lines.extend(_image_line(row) for row in report.image_changes)

        for heading, rows in (
            ("Unchanged CVEs", report.unchanged_cves),
            ("Added CVEs", report.added_cves),
            ("Removed CVEs", report.removed_cves),
        ):
            lines += ["", f"### {heading}", ""]
            lines.extend(_cve_section(rows))

        return "\n".join(lines) + "\n"

    def render_single(self, report: SingleScanReport) -> str:
        """Render a single-artifact scan report."""
        title = REPORT_TITLES.get(report.kind, report.kind.capitalize())
        lines = [
            f"## {title} Scan Report {report.reference}",
            "",
            "### CVE by Severity",
            "",
            *SINGLE_SEVERITY_HEADER,
        ]
        for count in report.severity_counts:
            lines.append(f"| {count.severity.value} | {count.current} |")
        lines += ["", f"Total findings: {report.total}", "", "### Vulnerabilities", ""]
        lines.extend(_cve_section(report.vulnerabilities))
        return "\n".join(lines) + "\n"


__all__ = ["MarkdownRenderer"]
