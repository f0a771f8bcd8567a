"""
Helmscan - Artifact Vulnerability Comparison Tool

Scan container images or rendered Helm charts with Trivy and produce
deterministic delta reports between two versions of the same artifact.
"""

__version__ = "0.3.0"
__author__ = "Helmscan Contributors"

from core.models import (
    Artifact,
    DiffResult,
    Image,
    Severity,
    Vulnerability,
)

__all__ = [
    "Artifact",
    "DiffResult",
    "Image",
    "Severity",
    "Vulnerability",
]
