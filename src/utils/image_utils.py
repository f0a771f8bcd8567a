"""
Utilities for parsing container image and Helm chart references.
"""

from dataclasses import dataclass
from typing import Optional

from constants import DEFAULT_IMAGE_TAG
from core.exceptions import ValidationException


@dataclass
class ImageReference:
    """Parsed container image reference."""

    repository: str
    name: str
    tag: str
    digest: Optional[str] = None

    @property
    def identifier(self) -> str:
        """Return repository/name without tag or digest."""
        if self.repository:
            return f"{self.repository}/{self.name}"
        return self.name


@dataclass
class ChartReference:
    """Parsed Helm chart reference (repo/chart@version)."""

    repo: str
    chart: str
    version: str

    @property
    def identifier(self) -> str:
        return f"{self.repo}/{self.chart}"

    def __str__(self) -> str:
        return f"{self.repo}/{self.chart}@{self.version}"


def parse_image_reference(image: str) -> ImageReference:
    """
    Parse a container image reference into repository, name and tag.

    The name is the last path component; everything before it is the
    repository. A reference without a tag is treated as ``latest``, and a
    digest-only reference uses the digest as its tag.

    Args:
        image: Image reference (e.g., "docker.io/bitnami/redis:7.2")

    Returns:
        ImageReference with parsed components

    Examples:
        >>> parse_image_reference("nginx")
        ImageReference(repository='', name='nginx', tag='latest', digest=None)

        >>> parse_image_reference("docker.io/bitnami/redis:7.2")
        ImageReference(repository='docker.io/bitnami', name='redis', tag='7.2', digest=None)

        >>> parse_image_reference("localhost:5000/app")
        ImageReference(repository='localhost:5000', name='app', tag='latest', digest=None)
    """
    image = image.strip()
    digest = None
    tag = None

    if "@" in image:
        image, digest = image.rsplit("@", 1)

    # A colon after the last slash is a tag; before it, a registry port
    last_colon = image.rfind(":")
    if last_colon > image.rfind("/"):
        image, tag = image[:last_colon], image[last_colon + 1:]

    repository, _, name = image.rpartition("/")

    if not tag:
        tag = digest or DEFAULT_IMAGE_TAG

    return ImageReference(repository=repository, name=name, tag=tag, digest=digest)


def parse_chart_reference(chart_ref: str) -> ChartReference:
    """
    Parse a Helm chart reference of the form ``repo/chart@version``.

    Raises:
        ValidationException: If the reference does not have that shape
    """
    parts = chart_ref.strip().split("/")
    if len(parts) != 2 or not parts[0]:
        raise ValidationException(f"invalid chart reference: {chart_ref}", "chart")

    chart, sep, version = parts[1].partition("@")
    if not sep or not chart or not version or "@" in version:
        raise ValidationException(f"invalid chart reference: {chart_ref}", "chart")

    return ChartReference(repo=parts[0], chart=chart, version=version)


def is_helm_chart(ref: str) -> bool:
    """
    Heuristically decide whether a reference names a Helm chart.

    Only the two-segment ``repo/chart@version`` shape counts; deeper paths
    and image digests (``@sha256:...``) are image references.

    Examples:
        >>> is_helm_chart("bitnami/nginx@15.0.0")
        True
        >>> is_helm_chart("nginx:1.25")
        False
        >>> is_helm_chart("docker.io/library/nginx@sha256:abc")
        False
        >>> is_helm_chart("docker.io/library/nginx@1.25")
        False
    """
    if ref.count("/") != 1:
        return False
    repo, chart = ref.split("/")
    if not repo or "@" not in chart:
        return False
    version = chart.rsplit("@", 1)[1]
    return ":" not in version


__all__ = [
    "ImageReference",
    "ChartReference",
    "parse_image_reference",
    "parse_chart_reference",
    "is_helm_chart",
]
