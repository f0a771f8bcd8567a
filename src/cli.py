"""
Command-line interface for Helmscan - Artifact Vulnerability Comparison Tool.

Scans container images or Helm charts with Trivy and reports on the
vulnerabilities they carry. Two references with --compare produce a
comparison report; no references start the interactive menu.
"""

import argparse
import logging
from pathlib import Path
from typing import Optional

from constants import DEFAULT_MAX_WORKERS, DEFAULT_REPORT_DIR, DEFAULT_WORKING_DIR
from common import OUTPUT_CONFIGS
from core.orchestrator import HelmscanOrchestrator


def setup_logging(verbose: bool = False):
    """Configure logging."""
    level = logging.DEBUG if verbose else logging.INFO
    logging.basicConfig(
        level=level,
        format="%(asctime)s - %(levelname)s - %(message)s",
        datefmt="%H:%M:%S",
    )


def parse_args(args: Optional[list[str]] = None) -> argparse.Namespace:
    """Parse command-line arguments."""
    parser = argparse.ArgumentParser(
        description="Helmscan - Artifact Vulnerability Comparison Tool",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog=(
            "examples:\n"
            "  helmscan nginx:1.25\n"
            "  helmscan --compare bitnami/nginx@15.0.0 bitnami/nginx@15.1.0 --report\n"
            "  helmscan --compare nginx:1.24 nginx:1.25 -f markdown,json"
        ),
    )

    io_group = parser.add_argument_group("input/output")
    scan_group = parser.add_argument_group("scan options")

    parser.add_argument("refs", nargs="*", help="Image or Helm chart (repo/chart@version) references.")
    parser.add_argument("--compare", action="store_true", help="Compare two images or Helm charts.")

    io_group.add_argument("--report", action="store_true", help="Save reports to the output directory.")
    io_group.add_argument(
        "-f", "--format", default="markdown",
        help=f"Report formats (comma-separated): {', '.join(OUTPUT_CONFIGS)}.",
    )
    io_group.add_argument("--output-dir", type=Path, default=Path(DEFAULT_REPORT_DIR), help="Report directory.")
    io_group.add_argument("--working-dir", type=Path, default=Path(DEFAULT_WORKING_DIR), help="Directory for rendered charts.")

    scan_group.add_argument("--max-workers", type=int, default=DEFAULT_MAX_WORKERS, help="Number of parallel image scans.")
    scan_group.add_argument(
        "--allow-partial", action="store_true",
        help="Report on the images that scanned when some image scans fail.",
    )

    parser.add_argument("-v", "--verbose", action="store_true", help="Enable verbose logging.")

    return parser.parse_args(args)


def main(args: Optional[list[str]] = None):
    """Main entry point."""
    args = parse_args(args)
    setup_logging(args.verbose)

    orchestrator = HelmscanOrchestrator(args)
    orchestrator.run()


if __name__ == "__main__":
    main()
