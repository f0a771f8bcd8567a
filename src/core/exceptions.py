"""
Exception hierarchy for Helmscan.

Provides a standardized exception hierarchy for consistent error handling
across the application. All exceptions inherit from HelmscanException.
"""

from typing import Optional


class HelmscanException(Exception):
    """Base exception for all Helmscan errors."""
    pass


class MalformedSnapshotException(HelmscanException):
    """An artifact snapshot violates a data model invariant."""

    def __init__(
        self,
        artifact: str,
        reason: str,
        image: Optional[str] = None,
        cve_id: Optional[str] = None,
    ):
        """
        Initialize malformed snapshot exception.

        Args:
            artifact: Reference of the offending artifact
            reason: Which invariant was violated
            image: Offending image name (optional)
            cve_id: Offending CVE ID (optional)
        """
        self.artifact = artifact
        self.reason = reason
        self.image = image
        self.cve_id = cve_id

        location = artifact
        if image:
            location += f", image {image}"
        if cve_id:
            location += f", {cve_id}"
        super().__init__(f"Malformed snapshot ({location}): {reason}")


class ScanException(HelmscanException):
    """Scan operation failed."""

    def __init__(self, image: str, reason: str):
        """
        Initialize scan exception.

        Args:
            image: Image reference that failed to scan
            reason: Reason for failure
        """
        self.image = image
        self.reason = reason
        super().__init__(f"Failed to scan {image}: {reason}")


class ValidationException(HelmscanException):
    """Input validation failed."""

    def __init__(self, message: str, field: str = None):
        """
        Initialize validation exception.

        Args:
            message: Validation error message
            field: Field that failed validation (optional)
        """
        self.field = field
        if field:
            super().__init__(f"Validation failed for {field}: {message}")
        else:
            super().__init__(f"Validation failed: {message}")


class IntegrationException(HelmscanException):
    """External tool integration failed."""

    def __init__(self, service: str, reason: str):
        """
        Initialize integration exception.

        Args:
            service: Service or tool name that failed
            reason: Reason for failure
        """
        self.service = service
        self.reason = reason
        super().__init__(f"{service} integration failed: {reason}")


class SerializationException(HelmscanException):
    """A computed report could not be serialized."""

    def __init__(self, format_type: str, reason: str):
        self.format_type = format_type
        self.reason = reason
        super().__init__(f"Failed to serialize {format_type} report: {reason}")


class OutputException(HelmscanException):
    """Output generation failed."""

    def __init__(self, format_type: str, reason: str):
        """
        Initialize output exception.

        Args:
            format_type: Output format (markdown, json, html)
            reason: Reason for failure
        """
        self.format_type = format_type
        self.reason = reason
        super().__init__(f"Failed to generate {format_type} output: {reason}")


class ConfigurationException(HelmscanException):
    """Configuration is invalid or a required tool is missing."""
    pass


__all__ = [
    "HelmscanException",
    "MalformedSnapshotException",
    "ScanException",
    "ValidationException",
    "IntegrationException",
    "SerializationException",
    "OutputException",
    "ConfigurationException",
]
