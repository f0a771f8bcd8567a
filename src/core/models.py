"""
Domain models for artifact vulnerability comparison.

This module defines the core data structures used throughout the application.
All models are immutable (frozen dataclasses) to prevent accidental mutation;
mapping fields are exposed through read-only proxies.
"""

from dataclasses import dataclass, field
from enum import Enum
from types import MappingProxyType
from typing import Any, Mapping, Optional

from constants import ARTIFACT_KIND_HELM, DEFAULT_IMAGE_TAG


def _freeze(mapping: Mapping) -> Mapping:
    """Return a read-only copy of a mapping."""
    return MappingProxyType(dict(mapping))


class Severity(str, Enum):
    """CVE severity levels as reported by the scanner."""

    CRITICAL = "critical"
    HIGH = "high"
    MEDIUM = "medium"
    LOW = "low"
    UNKNOWN = "unknown"

    @classmethod
    def from_string(cls, value: Optional[str]) -> "Severity":
        """
        Parse a scanner severity string.

        Matching is case-insensitive; anything unrecognised becomes UNKNOWN.

        Examples:
            >>> Severity.from_string("HIGH")
            <Severity.HIGH: 'high'>
            >>> Severity.from_string("negligible")
            <Severity.UNKNOWN: 'unknown'>
        """
        if not value:
            return cls.UNKNOWN
        try:
            return cls(value.strip().lower())
        except ValueError:
            return cls.UNKNOWN

    @classmethod
    def ordered_levels(cls) -> list["Severity"]:
        """Return severity levels from most to least severe."""
        return [cls.CRITICAL, cls.HIGH, cls.MEDIUM, cls.LOW, cls.UNKNOWN]

    @property
    def rank(self) -> int:
        """Numeric rank; higher is more severe."""
        return len(Severity.ordered_levels()) - Severity.ordered_levels().index(self)

    @property
    def label(self) -> str:
        """Capitalized label for headings."""
        return self.value.capitalize()


@dataclass(frozen=True)
class Vulnerability:
    """
    A single CVE finding within one image.

    Attributes:
        id: Vulnerability identifier (e.g., CVE-2024-1234)
        severity: Severity classification
        metadata: Opaque scanner details (package, versions, title)
    """

    id: str
    severity: Severity
    metadata: Mapping[str, Any] = field(default_factory=dict, compare=False)

    def __post_init__(self):
        object.__setattr__(self, "metadata", _freeze(self.metadata or {}))


@dataclass(frozen=True)
class Image:
    """
    One container image and its discovered vulnerabilities.

    Attributes:
        name: Image name, unique within an artifact (e.g., "nginx")
        repository: Registry and path preceding the name (e.g., "docker.io/bitnami")
        tag: Image tag
        vulnerabilities: Mapping of CVE ID to Vulnerability; None only when
            a producer failed to resolve the image (rejected by the diff engine)
    """

    name: str
    repository: str = ""
    tag: str = DEFAULT_IMAGE_TAG
    vulnerabilities: Optional[Mapping[str, Vulnerability]] = field(default_factory=dict)

    def __post_init__(self):
        if self.vulnerabilities is not None:
            object.__setattr__(self, "vulnerabilities", _freeze(self.vulnerabilities))

    @property
    def reference(self) -> str:
        """Full image reference (repository/name:tag)."""
        if self.repository:
            return f"{self.repository}/{self.name}:{self.tag}"
        return f"{self.name}:{self.tag}"

    def __str__(self) -> str:
        return self.reference


@dataclass(frozen=True)
class Artifact:
    """
    One versioned scan result (a single image or a rendered Helm chart).

    Attributes:
        identifier: Artifact identity without version (e.g., "bitnami/nginx")
        version: Artifact version (chart version or image tag)
        images: Scanned images in extraction order, unique by name
        kind: Artifact kind ("helm" or "image")
    """

    identifier: str
    version: str
    images: tuple[Image, ...] = ()
    kind: str = ARTIFACT_KIND_HELM

    def __post_init__(self):
        object.__setattr__(self, "images", tuple(self.images))

    @property
    def reference(self) -> str:
        """Artifact identity in identifier@version form."""
        return f"{self.identifier}@{self.version}"

    @property
    def vulnerability_count(self) -> int:
        """Total number of per-image findings."""
        return sum(len(img.vulnerabilities or {}) for img in self.images)

    def __str__(self) -> str:
        return f"{self.reference} ({len(self.images)} images)"


@dataclass(frozen=True)
class DiffResult:
    """
    Image- and CVE-level partition of two artifacts.

    Image maps are keyed by image name. Changed/unchanged entries hold the
    (before, after) pair. CVE maps are keyed by CVE ID, then image name.
    """

    before: Artifact
    after: Artifact
    added_images: Mapping[str, Image] = field(default_factory=dict)
    removed_images: Mapping[str, Image] = field(default_factory=dict)
    changed_images: Mapping[str, tuple[Image, Image]] = field(default_factory=dict)
    unchanged_images: Mapping[str, tuple[Image, Image]] = field(default_factory=dict)
    added_cves: Mapping[str, Mapping[str, Vulnerability]] = field(default_factory=dict)
    removed_cves: Mapping[str, Mapping[str, Vulnerability]] = field(default_factory=dict)
    unchanged_cves: Mapping[str, Mapping[str, Vulnerability]] = field(default_factory=dict)

    def __post_init__(self):
        for name in ("added_images", "removed_images", "changed_images", "unchanged_images"):
            object.__setattr__(self, name, _freeze(getattr(self, name)))
        for name in ("added_cves", "removed_cves", "unchanged_cves"):
            nested = {cve_id: _freeze(images) for cve_id, images in getattr(self, name).items()}
            object.__setattr__(self, name, _freeze(nested))

    @property
    def kind(self) -> str:
        """Artifact kind of the comparison."""
        return self.after.kind


@dataclass(frozen=True)
class SeverityCount:
    """
    Current and previous finding counts for one severity.

    Attributes:
        severity: Severity level
        current: Count in the after artifact
        previous: Count in the before artifact
    """

    severity: Severity
    current: int = 0
    previous: int = 0

    @property
    def difference(self) -> int:
        """Change from previous to current."""
        return self.current - self.previous


@dataclass(frozen=True)
class ImageScanOutcome:
    """
    Result of scanning one image reference.

    Attributes:
        reference: Image reference that was scanned
        image: Resolved image (None on failure)
        error_message: Error details if the scan failed
    """

    reference: str
    image: Optional[Image] = None
    error_message: Optional[str] = None

    @property
    def scan_successful(self) -> bool:
        return self.image is not None and self.error_message is None


@dataclass(frozen=True)
class ArtifactScanResult:
    """
    A scanned artifact plus the image scans that were excluded from it.

    Attributes:
        artifact: Snapshot built from successful image scans only
        failures: Outcomes of image scans that failed
    """

    artifact: Artifact
    failures: tuple[ImageScanOutcome, ...] = ()

    @property
    def complete(self) -> bool:
        """Whether every extracted image was scanned successfully."""
        return not self.failures


__all__ = [
    "Severity",
    "Vulnerability",
    "Image",
    "Artifact",
    "DiffResult",
    "SeverityCount",
    "ImageScanOutcome",
    "ArtifactScanResult",
]
