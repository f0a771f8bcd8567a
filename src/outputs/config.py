"""
Configuration dataclass for report output.

Provides a strongly-typed configuration object for report generation,
replacing loose **kwargs with structured configuration.
"""

from dataclasses import dataclass, field
from pathlib import Path

from constants import DEFAULT_REPORT_DIR
from utils.validation import validate_output_formats


@dataclass
class ReportConfig:
    """Configuration for rendering and saving reports."""

    formats: list[str] = field(default_factory=lambda: ["markdown"])
    output_dir: Path = Path(DEFAULT_REPORT_DIR)
    save_reports: bool = False

    def validate(self) -> None:
        """
        Validate configuration values.

        Raises:
            ValidationException: If configuration is invalid
        """
        self.formats = validate_output_formats(self.formats)


__all__ = ["ReportConfig"]
