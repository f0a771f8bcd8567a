"""
Trivy vulnerability scanner provider implementation.

Implements the VulnerabilityProvider interface for Aqua Security Trivy.
"""

import json
import logging
import subprocess
from typing import Optional

from constants import TRIVY_TIMEOUT, VERSION_CHECK_TIMEOUT
from core.exceptions import ScanException
from core.models import Severity, Vulnerability
from core.scanner_interface import VulnerabilityProvider

logger = logging.getLogger(__name__)


class TrivyProvider(VulnerabilityProvider):
    """
    Trivy vulnerability scanner provider.

    Runs ``trivy image`` against an image reference and collects findings
    keyed by vulnerability ID.
    """

    def __init__(self, timeout: int = TRIVY_TIMEOUT):
        self.timeout = timeout

    def name(self) -> str:
        """Return provider name."""
        return "trivy"

    def is_available(self) -> bool:
        """Check if Trivy is available."""
        try:
            result = subprocess.run(
                ["trivy", "--version"],
                capture_output=True,
                timeout=VERSION_CHECK_TIMEOUT,
            )
            return result.returncode == 0
        except (subprocess.TimeoutExpired, FileNotFoundError):
            return False

    def version(self) -> Optional[str]:
        """Get Trivy version."""
        try:
            result = subprocess.run(
                ["trivy", "--version"],
                capture_output=True,
                text=True,
                timeout=VERSION_CHECK_TIMEOUT,
            )
        except (subprocess.TimeoutExpired, FileNotFoundError):
            return None

        if result.returncode != 0:
            return None
        for line in result.stdout.strip().splitlines():
            if line.lower().startswith("version"):
                return line.split(":", 1)[-1].strip()
        return None

    def scan(self, image: str) -> dict[str, Vulnerability]:
        """
        Scan an image for vulnerabilities using Trivy.

        Args:
            image: Full image reference

        Returns:
            Mapping of vulnerability ID to Vulnerability

        Raises:
            ScanException: If scan fails
        """
        cmd = ["trivy", "image", "--format", "json", "--quiet", image]
        logger.debug(f"Running: {' '.join(cmd)}")

        try:
            result = subprocess.run(
                cmd,
                capture_output=True,
                text=True,
                timeout=self.timeout,
                check=True,
            )
        except subprocess.CalledProcessError as e:
            error_msg = f"Trivy command failed with exit code {e.returncode}"
            if e.stderr:
                error_msg += f"\nStderr: {e.stderr.strip()}"
            raise ScanException(image, error_msg) from e
        except subprocess.TimeoutExpired as e:
            raise ScanException(image, f"Trivy scan timed out after {self.timeout} seconds") from e
        except FileNotFoundError as e:
            raise ScanException(image, "trivy not found in PATH") from e

        try:
            trivy_data = json.loads(result.stdout)
        except json.JSONDecodeError as e:
            raise ScanException(image, f"Invalid Trivy output: {e}") from e

        return self._parse_trivy_output(trivy_data, image)

    def _parse_trivy_output(self, trivy_data: dict, image_name: str) -> dict[str, Vulnerability]:
        """
        Parse Trivy JSON output into findings keyed by vulnerability ID.

        When the same ID is reported for several packages, the first
        occurrence is kept.

        Args:
            trivy_data: Parsed Trivy JSON output
            image_name: Image name for logging

        Returns:
            Mapping of vulnerability ID to Vulnerability
        """
        if not isinstance(trivy_data, dict):
            raise ScanException(image_name, f"Unexpected Trivy output type: {type(trivy_data).__name__}")

        vulnerabilities: dict[str, Vulnerability] = {}
        for target in trivy_data.get("Results") or []:
            for entry in target.get("Vulnerabilities") or []:
                vuln_id = entry.get("VulnerabilityID")
                if not vuln_id:
                    logger.warning(f"Finding without VulnerabilityID in {image_name}, skipping")
                    continue
                if vuln_id in vulnerabilities:
                    continue
                vulnerabilities[vuln_id] = Vulnerability(
                    id=vuln_id,
                    severity=Severity.from_string(entry.get("Severity")),
                    metadata={
                        "target": target.get("Target", ""),
                        "package": entry.get("PkgName", ""),
                        "installed_version": entry.get("InstalledVersion", ""),
                        "fixed_version": entry.get("FixedVersion", ""),
                        "title": entry.get("Title", ""),
                    },
                )

        logger.debug(f"{image_name}: {len(vulnerabilities)} unique vulnerabilities")
        return vulnerabilities


__all__ = ["TrivyProvider"]
