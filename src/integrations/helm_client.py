"""
Helm chart renderer implementation.

Renders a chart with ``helm template`` and extracts every container image
reference from the resulting manifests.
"""

import logging
import subprocess
from pathlib import Path
from typing import Iterator, Optional

import yaml

from constants import (
    DEFAULT_WORKING_DIR,
    HELM_REPO_UPDATE_TIMEOUT,
    HELM_TEMPLATE_TIMEOUT,
    VERSION_CHECK_TIMEOUT,
)
from core.exceptions import IntegrationException
from core.scanner_interface import ChartRenderer
from utils.formatting import create_safe_file_name

logger = logging.getLogger(__name__)


def _find_image_values(node) -> Iterator[str]:
    """Yield every non-empty string stored under an ``image`` key, depth first."""
    if isinstance(node, dict):
        for key, value in node.items():
            if key == "image" and isinstance(value, str) and value.strip():
                yield value.strip()
            else:
                yield from _find_image_values(value)
    elif isinstance(node, list):
        for item in node:
            yield from _find_image_values(item)


def extract_images_from_yaml(yaml_text: str) -> list[str]:
    """
    Extract container image references from rendered Kubernetes manifests.

    Args:
        yaml_text: Multi-document YAML as produced by ``helm template``

    Returns:
        Unique image references in first-seen order

    Raises:
        IntegrationException: If the YAML cannot be parsed
    """
    try:
        documents = list(yaml.safe_load_all(yaml_text))
    except yaml.YAMLError as e:
        raise IntegrationException("helm", f"Could not parse rendered manifests: {e}") from e

    images = []
    for document in documents:
        for image in _find_image_values(document):
            if image not in images:
                images.append(image)
    return images


class HelmClient(ChartRenderer):
    """
    Helm CLI wrapper.

    Rendered output is kept in the working directory for inspection.
    """

    def __init__(self, working_dir: Path = Path(DEFAULT_WORKING_DIR)):
        self.working_dir = working_dir

    def name(self) -> str:
        """Return renderer name."""
        return "helm"

    def is_available(self) -> bool:
        """Check if Helm is available."""
        try:
            result = subprocess.run(
                ["helm", "version", "--short"],
                capture_output=True,
                timeout=VERSION_CHECK_TIMEOUT,
            )
            return result.returncode == 0
        except (subprocess.TimeoutExpired, FileNotFoundError):
            return False

    def version(self) -> Optional[str]:
        """Get Helm version."""
        try:
            result = subprocess.run(
                ["helm", "version", "--short"],
                capture_output=True,
                text=True,
                timeout=VERSION_CHECK_TIMEOUT,
            )
        except (subprocess.TimeoutExpired, FileNotFoundError):
            return None

        if result.returncode != 0:
            return None
        return result.stdout.strip() or None

    def _run(self, cmd: list[str], timeout: int) -> str:
        try:
            result = subprocess.run(
                cmd,
                capture_output=True,
                text=True,
                timeout=timeout,
                check=True,
            )
        except subprocess.CalledProcessError as e:
            error_msg = f"'{' '.join(cmd)}' failed with exit code {e.returncode}"
            if e.stderr:
                error_msg += f"\nStderr: {e.stderr.strip()}"
            raise IntegrationException("helm", error_msg) from e
        except subprocess.TimeoutExpired as e:
            raise IntegrationException("helm", f"'{' '.join(cmd)}' timed out after {timeout} seconds") from e
        except FileNotFoundError as e:
            raise IntegrationException("helm", "helm not found in PATH") from e
        return result.stdout

    def update_repositories(self) -> None:
        """Run ``helm repo update``."""
        output = self._run(["helm", "repo", "update"], HELM_REPO_UPDATE_TIMEOUT)
        logger.debug(f"Helm repo update output: {output.strip()}")

    def template(self, repo: str, chart: str, version: str) -> str:
        """
        Render a chart and save the output to the working directory.

        Returns:
            Rendered multi-document YAML
        """
        rendered = self._run(
            ["helm", "template", f"{repo}/{chart}", "--version", version],
            HELM_TEMPLATE_TIMEOUT,
        )

        output_file = self.working_dir / create_safe_file_name(
            f"{repo}_{chart}_{version}_helm_output.yaml"
        )
        try:
            self.working_dir.mkdir(parents=True, exist_ok=True)
            output_file.write_text(rendered)
            logger.debug(f"Saved rendered chart to {output_file}")
        except OSError as e:
            raise IntegrationException("helm", f"Error saving helm output to {output_file}: {e}") from e

        return rendered

    def extract_images(self, repo: str, chart: str, version: str) -> list[str]:
        """Update repositories, render the chart and extract its images."""
        self.update_repositories()
        rendered = self.template(repo, chart, version)
        images = extract_images_from_yaml(rendered)
        logger.info(f"Found {len(images)} images in {repo}/{chart}@{version}")
        return images


__all__ = ["HelmClient", "extract_images_from_yaml"]
