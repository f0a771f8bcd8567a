"""
Artifact scanning engine.

Builds Artifact snapshots from image or Helm chart references by fanning
image scans out to a vulnerability provider in parallel. Only images that
scanned successfully are admitted into a snapshot; failures are returned
alongside it.
"""

import logging
from concurrent.futures import ThreadPoolExecutor, as_completed
from typing import Optional

from constants import ARTIFACT_KIND_HELM, ARTIFACT_KIND_IMAGE, DEFAULT_MAX_WORKERS
from core.exceptions import ConfigurationException
from core.models import Artifact, ArtifactScanResult, Image, ImageScanOutcome
from core.scanner_interface import ChartRenderer, VulnerabilityProvider
from utils.image_utils import is_helm_chart, parse_chart_reference, parse_image_reference

logger = logging.getLogger(__name__)


class ArtifactScanner:
    """
    Scanner for images and Helm charts.

    Provides parallel image scanning and explicit per-image success or
    failure outcomes.
    """

    def __init__(
        self,
        provider: VulnerabilityProvider,
        chart_renderer: Optional[ChartRenderer] = None,
        max_workers: int = DEFAULT_MAX_WORKERS,
    ):
        """
        Initialize artifact scanner.

        Args:
            provider: Vulnerability provider used for every image
            chart_renderer: Renderer for chart references (required for charts)
            max_workers: Maximum parallel image scans
        """
        self.provider = provider
        self.chart_renderer = chart_renderer
        self.max_workers = max_workers

    def scan(self, ref: str) -> ArtifactScanResult:
        """
        Scan an image or Helm chart reference.

        Args:
            ref: Image reference or ``repo/chart@version``

        Returns:
            ArtifactScanResult with the snapshot and any failed image scans

        Raises:
            ValidationException: If a chart reference is malformed
            IntegrationException: If chart rendering fails
            ConfigurationException: If a chart is given without a renderer
        """
        if is_helm_chart(ref):
            return self.scan_chart(ref)
        return self.scan_single_image(ref)

    def scan_image(self, ref: str) -> ImageScanOutcome:
        """
        Scan one image reference.

        Never raises for scan failures; they are reported in the outcome.
        """
        parsed = parse_image_reference(ref)
        try:
            vulnerabilities = self.provider.scan(ref)
        except Exception as e:
            logger.error(f"Failed to scan {ref}: {e}")
            return ImageScanOutcome(reference=ref, error_message=str(e))

        logger.info(f"✓ {ref} - {len(vulnerabilities)} vulnerabilities")
        return ImageScanOutcome(
            reference=ref,
            image=Image(
                name=parsed.name,
                repository=parsed.repository,
                tag=parsed.tag,
                vulnerabilities=vulnerabilities,
            ),
        )

    def scan_single_image(self, ref: str) -> ArtifactScanResult:
        """Scan a single image as a one-image artifact."""
        logger.info(f"Scanning image: {ref}")
        parsed = parse_image_reference(ref)
        outcome = self.scan_image(ref)

        images = (outcome.image,) if outcome.scan_successful else ()
        failures = () if outcome.scan_successful else (outcome,)
        artifact = Artifact(
            identifier=parsed.identifier,
            version=parsed.tag,
            images=images,
            kind=ARTIFACT_KIND_IMAGE,
        )
        return ArtifactScanResult(artifact=artifact, failures=failures)

    def scan_chart(self, ref: str) -> ArtifactScanResult:
        """Render a Helm chart and scan every image it uses."""
        chart = parse_chart_reference(ref)
        if self.chart_renderer is None:
            raise ConfigurationException(f"No chart renderer configured to scan {chart}")

        logger.info(f"Scanning Helm chart: {chart}")
        image_refs = self._dedupe_by_name(
            self.chart_renderer.extract_images(chart.repo, chart.chart, chart.version)
        )
        outcomes = self.scan_images_parallel(image_refs)

        artifact = Artifact(
            identifier=chart.identifier,
            version=chart.version,
            images=tuple(o.image for o in outcomes if o.scan_successful),
            kind=ARTIFACT_KIND_HELM,
        )
        failures = tuple(o for o in outcomes if not o.scan_successful)
        return ArtifactScanResult(artifact=artifact, failures=failures)

    def scan_images_parallel(self, refs: list[str]) -> list[ImageScanOutcome]:
        """
        Scan multiple images in parallel.

        Args:
            refs: Image references to scan

        Returns:
            Outcomes in the same order as ``refs``
        """
        if not refs:
            return []

        logger.info(f"Scanning {len(refs)} images with {self.max_workers} workers")

        outcomes: dict[int, ImageScanOutcome] = {}
        with ThreadPoolExecutor(max_workers=self.max_workers) as executor:
            future_to_index = {
                executor.submit(self.scan_image, ref): i for i, ref in enumerate(refs)
            }
            for done, future in enumerate(as_completed(future_to_index), 1):
                i = future_to_index[future]
                try:
                    outcomes[i] = future.result()
                except Exception as e:
                    logger.error(f"Exception scanning {refs[i]}: {e}")
                    outcomes[i] = ImageScanOutcome(reference=refs[i], error_message=str(e))
                logger.info(f"Progress: {done}/{len(refs)} images completed")

        ordered = [outcomes[i] for i in range(len(refs))]
        failed = sum(1 for o in ordered if not o.scan_successful)
        logger.info(f"Image scans complete: {len(ordered) - failed} succeeded, {failed} failed")
        return ordered

    @staticmethod
    def _dedupe_by_name(refs: list[str]) -> list[str]:
        """
        Keep one reference per image name; the last occurrence wins.

        Order follows each name's first appearance.
        """
        by_name: dict[str, str] = {}
        for ref in refs:
            name = parse_image_reference(ref).name
            previous = by_name.get(name)
            if previous is not None and previous != ref:
                logger.warning(f"Image name '{name}' used by {previous} and {ref}; keeping {ref}")
            by_name[name] = ref
        return list(by_name.values())


__all__ = ["ArtifactScanner"]
