"""
Common constants and classes shared across the Helmscan application.
"""

import logging
import sys

from utils.logging_helpers import log_error_section

logger = logging.getLogger(__name__)

# Output configuration for all report formats
OUTPUT_CONFIGS = {
    "markdown": {
        "description": "Markdown Report",
        "file_suffix": ".md",
    },
    "json": {
        "description": "JSON Report",
        "file_suffix": ".json",
    },
    "html": {
        "description": "HTML Report",
        "file_suffix": ".html",
    },
}

INSTALL_HINTS = {
    "trivy": "Install Trivy: https://trivy.dev/latest/getting-started/installation/",
    "helm": "Install Helm: https://helm.sh/docs/intro/install/",
}


class ToolValidator:
    """
    Validates that required external tools are installed.
    """

    def __init__(self, tools):
        """
        Args:
            tools: Providers/renderers exposing name(), is_available() and version()
        """
        self.tools = list(tools)

    def missing(self) -> list[str]:
        """Return the names of tools that are not available."""
        return [tool.name() for tool in self.tools if not tool.is_available()]

    def validate(self) -> None:
        """Exit with an error banner if any required tool is missing."""
        missing = self.missing()
        if not missing:
            for tool in self.tools:
                logger.info(f"Using {tool.name()} {tool.version() or '(version unknown)'}")
            return

        messages = [f"Not found in PATH: {', '.join(missing)}"]
        messages.extend(INSTALL_HINTS[name] for name in missing if name in INSTALL_HINTS)
        log_error_section("Required tool installation check failed.", messages, logger=logger)
        sys.exit(1)
