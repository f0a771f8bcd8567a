"""Core logic for snapshot comparison and severity aggregation."""

from core.models import (
    Artifact,
    DiffResult,
    Image,
    Severity,
    SeverityCount,
    Vulnerability,
)
from core.diff import compare, validate_snapshot
from core.severity import count_by_severity, severity_delta

__all__ = [
    "Artifact",
    "DiffResult",
    "Image",
    "Severity",
    "SeverityCount",
    "Vulnerability",
    "compare",
    "validate_snapshot",
    "count_by_severity",
    "severity_delta",
]
