"""
Report persistence.

Writes rendered reports to disk under deterministic, filesystem-safe names
derived from artifact identities.
"""

import logging
from pathlib import Path

from constants import DEFAULT_REPORT_DIR
from core.exceptions import OutputException
from core.models import Artifact
from utils.formatting import create_safe_file_name

logger = logging.getLogger(__name__)


def comparison_basename(before: Artifact, after: Artifact) -> str:
    """
    Base file name for a comparison report.

    Examples:
        bitnami/nginx@15.0.0 vs bitnami/nginx@15.1.0 gives
        ``bitnami_nginx_15.0.0_to_bitnami_nginx_15.1.0_helm_comparison``
    """
    return create_safe_file_name(
        f"{before.reference}_to_{after.reference}_{after.kind}_comparison"
    )


def single_scan_basename(artifact: Artifact) -> str:
    """Base file name for a single-artifact scan report."""
    return create_safe_file_name(f"{artifact.kind}_scan_{artifact.reference}")


class ReportWriter:
    """
    Writes report strings into an output directory.

    Writes are atomic: content goes to a temporary file that then replaces
    the target.
    """

    def __init__(self, output_dir: Path = Path(DEFAULT_REPORT_DIR)):
        """
        Initialize report writer.

        Args:
            output_dir: Directory to write reports into (created on demand)
        """
        self.output_dir = output_dir

    def save(self, content: str, filename: str) -> Path:
        """
        Save a report.

        Args:
            content: Rendered report
            filename: Target file name (no directory components)

        Returns:
            Path of the written file

        Raises:
            OutputException: If the file cannot be written
        """
        if Path(filename).name != filename:
            raise OutputException("file", f"Report filename must not contain directories: {filename}")

        path = self.output_dir / filename
        temp_path = path.with_name(path.name + ".tmp")
        try:
            self.output_dir.mkdir(parents=True, exist_ok=True)
            temp_path.write_text(content, encoding="utf-8")
            temp_path.replace(path)
        except OSError as e:
            raise OutputException(path.suffix.lstrip(".") or "file", f"Could not write {path}: {e}") from e

        logger.info(f"Report saved to {path}")
        return path


__all__ = ["ReportWriter", "comparison_basename", "single_scan_basename"]
