"""
Pytest fixtures and configuration for Helmscan tests.

Provides shared fixtures and test utilities across the test suite.
"""

import pytest

from core.models import Artifact, Image, Severity, Vulnerability


def _vulns(findings):
    return {
        cve_id: Vulnerability(id=cve_id, severity=Severity.from_string(severity))
        for cve_id, severity in findings.items()
    }


@pytest.fixture
def make_image():
    """Factory for images from a {cve_id: severity} mapping."""

    def _make(name, tag="1.0", findings=None, repository="docker.io/bitnami"):
        return Image(
            name=name,
            repository=repository,
            tag=tag,
            vulnerabilities=_vulns(findings or {}),
        )

    return _make


@pytest.fixture
def before_chart(make_image):
    """Chart snapshot before the upgrade."""
    return Artifact(
        identifier="bitnami/nginx",
        version="15.0.0",
        images=(
            make_image("nginx", "1.25.0", {"CVE-2023-44487": "HIGH", "CVE-2023-38545": "MEDIUM"}),
            make_image("nginx-exporter", "0.11", {"CVE-2022-41723": "LOW"}),
            make_image("git", "2.40", {"CVE-2024-24790": "CRITICAL"}),
        ),
        kind="helm",
    )


@pytest.fixture
def after_chart(make_image):
    """Chart snapshot after the upgrade."""
    return Artifact(
        identifier="bitnami/nginx",
        version="15.1.0",
        images=(
            make_image(
                "nginx",
                "1.25.3",
                {"CVE-2023-44487": "HIGH", "CVE-2024-6387": "CRITICAL", "CVE-2024-2511": "HIGH"},
            ),
            make_image("nginx-exporter", "0.11", {"CVE-2022-41723": "LOW", "CVE-2023-39325": "MEDIUM"}),
            make_image("os-shell", "12", {"CVE-2024-0001": "UNKNOWN"}),
        ),
        kind="helm",
    )


@pytest.fixture
def empty_chart():
    """Chart snapshot with no images."""
    return Artifact(identifier="bitnami/nginx", version="14.0.0", images=(), kind="helm")


@pytest.fixture
def single_image_artifact(make_image):
    """One-image artifact as produced by an image scan."""
    return Artifact(
        identifier="docker.io/library/nginx",
        version="1.25",
        images=(
            make_image(
                "nginx",
                "1.25",
                {"CVE-2023-44487": "HIGH", "CVE-2024-6387": "CRITICAL", "CVE-2023-38545": "low"},
                repository="docker.io/library",
            ),
        ),
        kind="image",
    )


@pytest.fixture
def trivy_output():
    """Trimmed Trivy JSON output with two targets."""
    return {
        "SchemaVersion": 2,
        "ArtifactName": "nginx:1.25",
        "Results": [
            {
                "Target": "nginx:1.25 (debian 12.4)",
                "Vulnerabilities": [
                    {
                        "VulnerabilityID": "CVE-2023-44487",
                        "PkgName": "libnghttp2-14",
                        "InstalledVersion": "1.52.0-1",
                        "FixedVersion": "1.52.0-1+deb12u1",
                        "Severity": "HIGH",
                        "Title": "HTTP/2 Rapid Reset",
                    },
                    {
                        "VulnerabilityID": "CVE-2024-6387",
                        "PkgName": "openssh-client",
                        "InstalledVersion": "1:9.2p1-2",
                        "Severity": "CRITICAL",
                    },
                ],
            },
            {
                "Target": "usr/local/bin/app",
                "Vulnerabilities": [
                    {
                        "VulnerabilityID": "CVE-2023-44487",
                        "PkgName": "golang.org/x/net",
                        "InstalledVersion": "0.7.0",
                        "Severity": "MEDIUM",
                    },
                    {
                        "VulnerabilityID": "GHSA-xxxx-yyyy",
                        "PkgName": "golang.org/x/crypto",
                        "Severity": "NEGLIGIBLE",
                    },
                ],
            },
            {"Target": "Java", "Vulnerabilities": None},
        ],
    }
