"""
Centralized configuration constants for Helmscan.

This module provides a single source of truth for configuration values
that are used across multiple modules, making them easier to update
and maintain.
"""

# ============================================================================
# Concurrency and Performance
# ============================================================================

DEFAULT_MAX_WORKERS = 4
"""Default number of concurrent Trivy scans when scanning a chart's images."""

# ============================================================================
# Timeouts (in seconds)
# ============================================================================

TRIVY_TIMEOUT = 600
"""Timeout for a single Trivy image scan (10 minutes)."""

HELM_REPO_UPDATE_TIMEOUT = 120
"""Timeout for `helm repo update` (2 minutes)."""

HELM_TEMPLATE_TIMEOUT = 120
"""Timeout for `helm template` (2 minutes)."""

VERSION_CHECK_TIMEOUT = 5
"""Timeout for tool version checks (5 seconds)."""

# ============================================================================
# Filesystem Layout
# ============================================================================

DEFAULT_WORKING_DIR = "working-files"
"""Directory for intermediate artifacts such as rendered chart output."""

DEFAULT_REPORT_DIR = "reports"
"""Directory where saved reports are written."""

# ============================================================================
# Severity Ordering
# ============================================================================

SEVERITY_TABLE_ORDER = ["critical", "high", "medium", "low"]
"""Fixed row order of every severity count table."""

# ============================================================================
# Report Identification
# ============================================================================

ARTIFACT_KIND_HELM = "helm"
"""Artifact kind for rendered Helm charts."""

ARTIFACT_KIND_IMAGE = "image"
"""Artifact kind for single container images."""

REPORT_TITLES = {
    ARTIFACT_KIND_HELM: "Helm Chart",
    ARTIFACT_KIND_IMAGE: "Image",
}
"""Human-readable artifact labels used in report headings."""

DEFAULT_IMAGE_TAG = "latest"
"""Tag assumed for image references that do not carry one."""
