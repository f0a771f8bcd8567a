"""
Input validation utilities for Helmscan.

Provides validation functions for artifact references and output options
to ensure data integrity and security before any tool is invoked.
"""

import re
from typing import Iterable

from common import OUTPUT_CONFIGS
from core.exceptions import ValidationException
from utils.image_utils import is_helm_chart, parse_chart_reference

INVALID_REFERENCE_CHARS = ['"', "'", ";", "&", "|", "$", "`", "\n", "\r", " "]


def validate_image_reference(image: str, field_name: str = "image") -> str:
    """
    Validate and normalize container image reference.

    Args:
        image: Image reference to validate
        field_name: Field name for error messages

    Returns:
        Normalized image reference

    Raises:
        ValidationException: If image reference is invalid

    Examples:
        >>> validate_image_reference("nginx:1.25")
        'nginx:1.25'
        >>> validate_image_reference("localhost:5000/team/app@sha256:abc123")
        'localhost:5000/team/app@sha256:abc123'
    """
    if not image or not image.strip():
        raise ValidationException("Image reference cannot be empty", field_name)

    image = image.strip()

    if any(char in image for char in INVALID_REFERENCE_CHARS):
        raise ValidationException(
            f"Image reference contains invalid characters: {image}",
            field_name
        )

    # registry[:port]/path/name[:tag][@digest]
    pattern = (
        r'^[a-z0-9]+([\._\-][a-z0-9]+)*(:[0-9]+)?'
        r'(\/[a-z0-9]+([\._\-][a-z0-9]+)*)*'
        r'(:[a-zA-Z0-9\._\-]+)?'
        r'(@[a-z0-9]+:[a-fA-F0-9]+)?$'
    )
    if not re.match(pattern, image, re.IGNORECASE):
        raise ValidationException(
            f"Invalid image reference format: {image}",
            field_name
        )

    return image


def validate_artifact_reference(ref: str, field_name: str = "artifact") -> str:
    """
    Validate an image or Helm chart reference.

    Returns:
        Normalized reference

    Raises:
        ValidationException: If the reference is invalid
    """
    if not ref or not ref.strip():
        raise ValidationException("Artifact reference cannot be empty", field_name)

    ref = ref.strip()
    if is_helm_chart(ref):
        if any(char in ref for char in INVALID_REFERENCE_CHARS):
            raise ValidationException(
                f"Chart reference contains invalid characters: {ref}",
                field_name
            )
        return str(parse_chart_reference(ref))
    return validate_image_reference(ref, field_name)


def validate_comparable(ref1: str, ref2: str) -> None:
    """
    Ensure two references can be compared (both charts or both images).

    Raises:
        ValidationException: If a chart is compared with an image
    """
    if is_helm_chart(ref1) != is_helm_chart(ref2):
        raise ValidationException(
            "Cannot compare a Helm chart with a container image. "
            "Provide two Helm charts or two container images.",
            "compare"
        )


def validate_output_formats(formats: Iterable[str]) -> list[str]:
    """
    Validate and de-duplicate requested output formats, preserving order.

    Raises:
        ValidationException: If no format or an unknown format is requested
    """
    requested = []
    for fmt in formats:
        fmt = fmt.strip().lower()
        if fmt and fmt not in requested:
            requested.append(fmt)

    if not requested:
        raise ValidationException("At least one output format must be specified", "format")

    invalid = [fmt for fmt in requested if fmt not in OUTPUT_CONFIGS]
    if invalid:
        raise ValidationException(
            f"Invalid output format(s): {', '.join(invalid)}. "
            f"Valid formats: {', '.join(OUTPUT_CONFIGS)}",
            "format"
        )

    return requested


__all__ = [
    "validate_image_reference",
    "validate_artifact_reference",
    "validate_comparable",
    "validate_output_formats",
]
