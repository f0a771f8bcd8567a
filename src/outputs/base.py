"""
Base report renderer interface.

Defines the contract that all report serializers must implement.
"""

from abc import ABC, abstractmethod

from outputs.report import ComparisonReport, SingleScanReport


class ReportRenderer(ABC):
    """
    Abstract base class for report serializers.

    All serializers (Markdown, JSON, HTML) consume the same intermediate
    report objects and must implement this interface.
    """

    @abstractmethod
    def render(self, report: ComparisonReport) -> str:
        """
        Serialize a comparison report.

        Args:
            report: Intermediate comparison report

        Returns:
            Rendered report text
        """
        pass

    @abstractmethod
    def render_single(self, report: SingleScanReport) -> str:
        """
        Serialize a single-artifact scan report.

        Args:
            report: Intermediate single-scan report

        Returns:
            Rendered report text
        """
        pass

    @abstractmethod
    def supports_format(self) -> str:
        """
        Return the format this renderer supports.

        Returns:
            Format identifier (e.g., "markdown", "json")
        """
        pass
