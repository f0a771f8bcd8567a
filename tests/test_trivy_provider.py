"""
Tests for the Trivy provider, focusing on output parsing and error handling.
"""

import json
import subprocess
from unittest.mock import Mock, patch

import pytest

from core.exceptions import ScanException
from core.models import Severity
from integrations.trivy_provider import TrivyProvider


class TestTrivyScan:
    """Tests for TrivyProvider.scan."""

    @pytest.fixture
    def provider(self):
        return TrivyProvider(timeout=30)

    def test_scan_parses_findings(self, provider, trivy_output):
        """Test findings are keyed by vulnerability ID."""
        with patch("subprocess.run") as mock_run:
            mock_run.return_value = Mock(returncode=0, stdout=json.dumps(trivy_output))
            vulns = provider.scan("nginx:1.25")

        assert set(vulns) == {"CVE-2023-44487", "CVE-2024-6387", "GHSA-xxxx-yyyy"}
        assert vulns["CVE-2024-6387"].severity is Severity.CRITICAL
        assert vulns["GHSA-xxxx-yyyy"].severity is Severity.UNKNOWN

        cmd = mock_run.call_args[0][0]
        assert cmd == ["trivy", "image", "--format", "json", "--quiet", "nginx:1.25"]
        assert mock_run.call_args[1]["timeout"] == 30

    def test_first_occurrence_wins(self, provider, trivy_output):
        """Test a repeated ID keeps the first package's finding."""
        vulns = provider._parse_trivy_output(trivy_output, "nginx:1.25")
        rapid_reset = vulns["CVE-2023-44487"]
        assert rapid_reset.severity is Severity.HIGH
        assert rapid_reset.metadata["package"] == "libnghttp2-14"
        assert rapid_reset.metadata["fixed_version"] == "1.52.0-1+deb12u1"
        assert rapid_reset.metadata["target"] == "nginx:1.25 (debian 12.4)"

    def test_no_results(self, provider):
        """Test an image with no findings."""
        assert provider._parse_trivy_output({"SchemaVersion": 2}, "scratch") == {}

    def test_finding_without_id_skipped(self, provider):
        """Test entries without VulnerabilityID are ignored."""
        data = {"Results": [{"Target": "x", "Vulnerabilities": [{"Severity": "HIGH"}]}]}
        assert provider._parse_trivy_output(data, "x") == {}

    def test_unexpected_payload(self, provider):
        """Test non-object output is rejected."""
        with pytest.raises(ScanException, match="Unexpected Trivy output"):
            provider._parse_trivy_output([], "x")

    def test_command_failure(self, provider):
        """Test handling of Trivy command failure."""
        with patch("subprocess.run") as mock_run:
            error = subprocess.CalledProcessError(returncode=1, cmd=["trivy"])
            error.stderr = "FATAL image scan error"
            mock_run.side_effect = error

            with pytest.raises(ScanException) as exc:
                provider.scan("missing:1.0")

        assert "exit code 1" in str(exc.value)
        assert "FATAL image scan error" in str(exc.value)
        assert exc.value.image == "missing:1.0"

    def test_timeout(self, provider):
        """Test handling of Trivy timeout."""
        with patch("subprocess.run") as mock_run:
            mock_run.side_effect = subprocess.TimeoutExpired("trivy", 30)
            with pytest.raises(ScanException, match="timed out after 30 seconds"):
                provider.scan("nginx:1.25")

    def test_not_installed(self, provider):
        """Test handling of a missing binary."""
        with patch("subprocess.run", side_effect=FileNotFoundError()):
            with pytest.raises(ScanException, match="not found in PATH"):
                provider.scan("nginx:1.25")

    def test_invalid_json(self, provider):
        """Test handling of unparseable output."""
        with patch("subprocess.run") as mock_run:
            mock_run.return_value = Mock(returncode=0, stdout="not json")
            with pytest.raises(ScanException, match="Invalid Trivy output"):
                provider.scan("nginx:1.25")


class TestTrivyAvailability:
    """Tests for availability and version checks."""

    def test_available(self):
        """Test a working binary is detected."""
        with patch("subprocess.run", return_value=Mock(returncode=0)):
            assert TrivyProvider().is_available()

    def test_unavailable(self):
        """Test a missing binary is detected."""
        with patch("subprocess.run", side_effect=FileNotFoundError()):
            assert not TrivyProvider().is_available()

    def test_version(self):
        """Test version parsing."""
        with patch("subprocess.run", return_value=Mock(returncode=0, stdout="Version: 0.50.1\n")):
            assert TrivyProvider().version() == "0.50.1"

    def test_version_failure(self):
        """Test version is None when the command fails."""
        with patch("subprocess.run", return_value=Mock(returncode=1, stdout="")):
            assert TrivyProvider().version() is None

    def test_name(self):
        """Test provider name."""
        assert TrivyProvider().name() == "trivy"
