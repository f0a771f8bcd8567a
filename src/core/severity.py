"""
Severity aggregation over artifact snapshots.

Counts are taken over each image's vulnerability map, so a CVE present in
two images counts twice.
"""

from collections import Counter

from constants import SEVERITY_TABLE_ORDER
from core.models import Artifact, Severity, SeverityCount


def count_by_severity(artifact: Artifact) -> dict[Severity, int]:
    """
    Count findings by severity across every image of an artifact.

    Args:
        artifact: Snapshot to count

    Returns:
        Mapping of severity to count, with every severity level present
    """
    counts = Counter(
        vuln.severity
        for image in artifact.images
        for vuln in (image.vulnerabilities or {}).values()
    )
    return {level: counts.get(level, 0) for level in Severity.ordered_levels()}


def severity_delta(before: Artifact, after: Artifact) -> list[SeverityCount]:
    """
    Compute per-severity counts for two artifacts and their difference.

    Rows follow the fixed table order (critical, high, medium, low). An
    unknown row is appended only when either side has unknown findings.

    Args:
        before: Earlier snapshot (previous counts)
        after: Later snapshot (current counts)

    Returns:
        Ordered list of SeverityCount rows
    """
    previous = count_by_severity(before)
    current = count_by_severity(after)

    levels = [Severity(level) for level in SEVERITY_TABLE_ORDER]
    if previous[Severity.UNKNOWN] or current[Severity.UNKNOWN]:
        levels.append(Severity.UNKNOWN)

    return [
        SeverityCount(severity=level, current=current[level], previous=previous[level])
        for level in levels
    ]


__all__ = ["count_by_severity", "severity_delta"]
