"""
Orchestrates the main workflow for Helmscan - Artifact Vulnerability Comparison Tool.
"""
import logging
import sys
from typing import Callable, Optional

from common import OUTPUT_CONFIGS, ToolValidator
from core.diff import compare
from core.exceptions import HelmscanException, ScanException
from core.models import Artifact
from core.persistence import ReportWriter, comparison_basename, single_scan_basename
from core.scanner import ArtifactScanner
from core.severity import severity_delta
from integrations.helm_client import HelmClient
from integrations.trivy_provider import TrivyProvider
from outputs import render, render_single
from outputs.config import ReportConfig
from utils.image_utils import is_helm_chart
from utils.logging_helpers import (
    format_scan_failures,
    log_error_section,
    log_info_header,
    log_warning_section,
)
from utils.validation import validate_artifact_reference, validate_comparable

logger = logging.getLogger(__name__)

MENU = """
--- Artifact Security Scanner Menu ---
1. Scan a single image or Helm chart
2. Compare two images or Helm charts
3. Exit"""


class HelmscanOrchestrator:
    """
    Orchestrates the Helmscan workflow from scanning to report generation.
    """

    def __init__(
        self,
        args,
        scanner: Optional[ArtifactScanner] = None,
        writer: Optional[ReportWriter] = None,
        input_fn: Callable[[str], str] = input,
    ):
        """
        Initialize the orchestrator with parsed command-line arguments.

        Args:
            args: Parsed arguments from argparse.
            scanner: Artifact scanner (built from args when omitted)
            writer: Report writer (built from args when omitted)
            input_fn: Prompt function used by the interactive menu
        """
        self.args = args
        self.config = ReportConfig(
            formats=args.format.split(","),
            output_dir=args.output_dir,
            save_reports=args.report,
        )
        self.provider = TrivyProvider()
        self.chart_renderer = HelmClient(working_dir=args.working_dir)
        self.scanner = scanner or ArtifactScanner(
            provider=self.provider,
            chart_renderer=self.chart_renderer,
            max_workers=args.max_workers,
        )
        self.writer = writer or ReportWriter(self.config.output_dir)
        self.input_fn = input_fn
        self._tools_checked = set()

    def run(self) -> None:
        """
        Execute the workflow selected by the command-line arguments.
        """
        try:
            self.config.validate()
        except HelmscanException as e:
            logger.error(str(e))
            sys.exit(1)

        refs = self.args.refs
        try:
            if self.args.compare:
                if len(refs) != 2:
                    logger.error(f"For comparison, provide exactly two image or Helm chart references. Got: {refs}")
                    sys.exit(1)
                print(self.compare_artifacts(refs[0], refs[1]))
            elif len(refs) == 1:
                print(self.scan_artifact(refs[0]))
            elif not refs:
                self.run_interactive_menu()
            else:
                logger.error("Provide one reference to scan, or use --compare with two references")
                sys.exit(1)
        except HelmscanException as e:
            logger.error(str(e))
            sys.exit(1)

    def run_interactive_menu(self) -> None:
        """Prompt for actions until the user exits."""
        while True:
            print(MENU)
            choice = self.input_fn("Enter your choice (1-3): ").strip()

            try:
                if choice == "1":
                    ref = self.input_fn("Enter the image URL or Helm chart reference to scan: ").strip()
                    print(self.scan_artifact(ref))
                elif choice == "2":
                    ref1 = self.input_fn("Enter the first image URL or Helm chart reference: ").strip()
                    ref2 = self.input_fn("Enter the second image URL or Helm chart reference: ").strip()
                    print(self.compare_artifacts(ref1, ref2))
                elif choice == "3":
                    logger.info("Exiting the program. Goodbye!")
                    return
                else:
                    logger.warning("Invalid option. Please try again.")
            except HelmscanException as e:
                logger.error(str(e))

    def scan_artifact(self, ref: str) -> str:
        """
        Scan one artifact and render its report in every requested format.

        Returns:
            Report in the first requested format
        """
        ref = validate_artifact_reference(ref)
        self._check_tools([ref])

        artifact = self._scan(ref)
        basename = single_scan_basename(artifact)
        reports = {
            fmt: render_single(artifact, fmt) for fmt in self.config.formats
        }
        self._save_reports(reports, basename)
        return reports[self.config.formats[0]]

    def compare_artifacts(self, ref1: str, ref2: str) -> str:
        """
        Scan and compare two artifacts of the same kind.

        Returns:
            Comparison report in the first requested format
        """
        ref1 = validate_artifact_reference(ref1, "before")
        ref2 = validate_artifact_reference(ref2, "after")
        validate_comparable(ref1, ref2)
        self._check_tools([ref1, ref2])

        log_info_header(f"Comparing {ref1} to {ref2}", logger=logger)
        before = self._scan(ref1)
        after = self._scan(ref2)

        result = compare(before, after)
        aggregation = severity_delta(before, after)
        logger.info(
            f"Images: {len(result.added_images)} added, {len(result.removed_images)} removed, "
            f"{len(result.changed_images)} changed, {len(result.unchanged_images)} unchanged"
        )
        logger.info(
            f"CVEs: {len(result.added_cves)} added, {len(result.removed_cves)} removed, "
            f"{len(result.unchanged_cves)} unchanged"
        )

        basename = comparison_basename(before, after)
        reports = {
            fmt: render(result, aggregation, fmt) for fmt in self.config.formats
        }
        self._save_reports(reports, basename)
        return reports[self.config.formats[0]]

    def _scan(self, ref: str) -> Artifact:
        """
        Scan a reference and enforce the incomplete-scan policy.

        Raises:
            ScanException: If any image failed and partial results are not allowed
        """
        scan_result = self.scanner.scan(ref)
        artifact = scan_result.artifact

        if not scan_result.complete:
            failures = format_scan_failures(scan_result.failures)
            if not self.args.allow_partial:
                log_error_section(
                    f"Scan of {ref} is incomplete.",
                    failures + ["", "Re-run with --allow-partial to report on the images that did scan."],
                    logger=logger,
                )
                raise ScanException(ref, f"{len(failures)} image(s) failed to scan")
            log_warning_section(
                f"Scan of {ref} is incomplete; failed images are excluded from the report.",
                failures,
                logger=logger,
            )

        logger.info(f"Scanned {artifact}: {artifact.vulnerability_count} findings")
        return artifact

    def _check_tools(self, refs: list[str]) -> None:
        """Verify the external tools needed for these references, once per tool."""
        tools = [self.provider]
        if any(is_helm_chart(ref) for ref in refs):
            tools.append(self.chart_renderer)

        pending = [tool for tool in tools if tool.name() not in self._tools_checked]
        if pending:
            ToolValidator(pending).validate()
            self._tools_checked.update(tool.name() for tool in pending)

    def _save_reports(self, reports: dict[str, str], basename: str) -> None:
        """Save rendered reports when saving is enabled."""
        if not self.config.save_reports:
            return
        for fmt, content in reports.items():
            suffix = OUTPUT_CONFIGS[fmt]["file_suffix"]
            self.writer.save(content, f"{basename}{suffix}")
