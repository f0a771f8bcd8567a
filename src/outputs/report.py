"""
Structured intermediate report.

Both comparison and single-scan reports are materialized here once, with
every externally visible ordering fixed by an explicit sort. Serializers
(Markdown, JSON, HTML) only format what this module produces.
"""

from dataclasses import dataclass
from enum import Enum
from typing import Mapping

from core.diff import validate_snapshot
from core.models import Artifact, DiffResult, Severity, SeverityCount, Vulnerability
from core.severity import severity_delta


class ImageStatus(str, Enum):
    """Image classification labels, in report order."""

    ADDED = "Added"
    REMOVED = "Removed"
    CHANGED = "Changed"
    UNCHANGED = "Unchanged"


@dataclass(frozen=True)
class CVERow:
    """One CVE and the images it affects within a classification."""

    id: str
    severity: Severity
    affected_images: tuple[str, ...]


@dataclass(frozen=True)
class ImageRow:
    """
    One image and its classification.

    Fields for the side that does not apply are empty strings.
    """

    name: str
    status: ImageStatus
    before_repo: str = ""
    after_repo: str = ""
    before_tag: str = ""
    after_tag: str = ""


@dataclass(frozen=True)
class ComparisonReport:
    """Everything needed to serialize a before/after comparison."""

    kind: str
    before: str
    after: str
    severity_counts: tuple[SeverityCount, ...]
    image_changes: tuple[ImageRow, ...]
    unchanged_cves: tuple[CVERow, ...]
    added_cves: tuple[CVERow, ...]
    removed_cves: tuple[CVERow, ...]

    @property
    def report_type(self) -> str:
        return f"{self.kind}_comparison"


@dataclass(frozen=True)
class SingleScanReport:
    """Everything needed to serialize a single artifact scan."""

    kind: str
    reference: str
    severity_counts: tuple[SeverityCount, ...]
    vulnerabilities: tuple[CVERow, ...]

    @property
    def report_type(self) -> str:
        return f"{self.kind}_scan"

    @property
    def total(self) -> int:
        return sum(row.current for row in self.severity_counts)


def build_cve_rows(cves: Mapping[str, Mapping[str, Vulnerability]]) -> tuple[CVERow, ...]:
    """
    Flatten a CVE ID -> image -> Vulnerability map into sorted rows.

    Rows sort by severity (most severe first), then CVE ID. When images
    disagree on a CVE's severity the most severe reading is used.

    Args:
        cves: Classification map from a DiffResult (or a single artifact)

    Returns:
        Sorted tuple of CVERow
    """
    rows = []
    for cve_id, images in cves.items():
        if not images:
            continue
        severity = max((vuln.severity for vuln in images.values()), key=lambda s: s.rank)
        rows.append(CVERow(id=cve_id, severity=severity, affected_images=tuple(sorted(images))))
    rows.sort(key=lambda row: (-row.severity.rank, row.id))
    return tuple(rows)


def build_image_rows(result: DiffResult) -> tuple[ImageRow, ...]:
    """Image rows grouped by status (Added, Removed, Changed, Unchanged), then by name."""
    rows = []
    for name in sorted(result.added_images):
        image = result.added_images[name]
        rows.append(ImageRow(name, ImageStatus.ADDED, after_repo=image.repository, after_tag=image.tag))
    for name in sorted(result.removed_images):
        image = result.removed_images[name]
        rows.append(ImageRow(name, ImageStatus.REMOVED, before_repo=image.repository, before_tag=image.tag))
    for status, pairs in (
        (ImageStatus.CHANGED, result.changed_images),
        (ImageStatus.UNCHANGED, result.unchanged_images),
    ):
        for name in sorted(pairs):
            before, after = pairs[name]
            rows.append(
                ImageRow(
                    name,
                    status,
                    before_repo=before.repository,
                    after_repo=after.repository,
                    before_tag=before.tag,
                    after_tag=after.tag,
                )
            )
    return tuple(rows)


def build_comparison_report(
    result: DiffResult,
    aggregation: list[SeverityCount],
) -> ComparisonReport:
    """
    Build the intermediate report for a comparison.

    Args:
        result: Output of core.diff.compare
        aggregation: Output of core.severity.severity_delta for the same pair

    Returns:
        ComparisonReport ready for serialization
    """
    return ComparisonReport(
        kind=result.kind,
        before=result.before.reference,
        after=result.after.reference,
        severity_counts=tuple(aggregation),
        image_changes=build_image_rows(result),
        unchanged_cves=build_cve_rows(result.unchanged_cves),
        added_cves=build_cve_rows(result.added_cves),
        removed_cves=build_cve_rows(result.removed_cves),
    )


def build_single_report(artifact: Artifact) -> SingleScanReport:
    """
    Build the intermediate report for one artifact.

    Severity counts use the artifact as the only (current) side.

    Raises:
        MalformedSnapshotException: If the artifact is malformed
    """
    images = validate_snapshot(artifact)

    cves: dict[str, dict[str, Vulnerability]] = {}
    for name, image in images.items():
        for cve_id, vuln in image.vulnerabilities.items():
            cves.setdefault(cve_id, {})[name] = vuln

    empty = Artifact(identifier=artifact.identifier, version=artifact.version, kind=artifact.kind)
    return SingleScanReport(
        kind=artifact.kind,
        reference=artifact.reference,
        severity_counts=tuple(severity_delta(empty, artifact)),
        vulnerabilities=build_cve_rows(cves),
    )


__all__ = [
    "ImageStatus",
    "CVERow",
    "ImageRow",
    "ComparisonReport",
    "SingleScanReport",
    "build_cve_rows",
    "build_image_rows",
    "build_comparison_report",
    "build_single_report",
]
