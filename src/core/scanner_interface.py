"""
Plugin interfaces for external collaborators.

Defines the contracts for vulnerability scanners and chart renderers,
so that scanners and chart renderers can be swapped without touching the scanner.
"""

from abc import ABC, abstractmethod
from typing import Optional

from core.models import Vulnerability


class VulnerabilityProvider(ABC):
    """
    Abstract base class for vulnerability data providers.

    All vulnerability scanners must implement this interface to be
    used with the artifact scanner.
    """

    @abstractmethod
    def name(self) -> str:
        """
        Return the provider name.

        Returns:
            Provider identifier (e.g., "trivy")
        """
        pass

    @abstractmethod
    def scan(self, image: str) -> dict[str, Vulnerability]:
        """
        Scan an image reference for vulnerabilities.

        Args:
            image: Full image reference to scan

        Returns:
            Mapping of vulnerability ID to Vulnerability

        Raises:
            ScanException: If scan fails
        """
        pass

    @abstractmethod
    def is_available(self) -> bool:
        """
        Check if this provider is available/installed.

        Returns:
            True if provider can be used, False otherwise
        """
        pass

    def version(self) -> Optional[str]:
        """
        Get provider version (optional).

        Returns:
            Version string if available, None otherwise
        """
        return None


class ChartRenderer(ABC):
    """
    Abstract base class for chart renderers.

    Turns a chart reference into the list of image references its
    rendered manifests use.
    """

    @abstractmethod
    def name(self) -> str:
        """Return the renderer name (e.g., "helm")."""
        pass

    @abstractmethod
    def extract_images(self, repo: str, chart: str, version: str) -> list[str]:
        """
        Render a chart and return the image references it uses.

        Returns:
            Unique image references in first-seen order

        Raises:
            IntegrationException: If rendering or parsing fails
        """
        pass

    @abstractmethod
    def is_available(self) -> bool:
        """Check if this renderer is available/installed."""
        pass

    def version(self) -> Optional[str]:
        """Get renderer version (optional)."""
        return None


__all__ = [
    "VulnerabilityProvider",
    "ChartRenderer",
]
