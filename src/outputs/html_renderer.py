"""
HTML renderer for comparison and scan reports.

Converts the Markdown report to a standalone HTML page so reports can be
opened in a browser or attached to tickets without a Markdown viewer.
"""

import html

import markdown

from outputs.base import ReportRenderer
from outputs.markdown_renderer import MarkdownRenderer
from outputs.report import ComparisonReport, SingleScanReport

MARKDOWN_EXTENSIONS = ["tables"]

PAGE_TEMPLATE = """<!DOCTYPE html>
<html lang="en">
<head>
<meta charset="utf-8">
<title>{title}</title>
<style>
body {{ font-family: -apple-system, BlinkMacSystemFont, "Segoe UI", Helvetica, Arial, sans-serif; margin: 2rem; color: #1f2328; }}
table {{ border-collapse: collapse; margin-bottom: 1.5rem; }}
th, td {{ border: 1px solid #d0d7de; padding: 4px 10px; text-align: left; }}
th {{ background: #f6f8fa; }}
</style>
</head>
<body>
{body}
</body>
</html>
"""


class HTMLRenderer(ReportRenderer):
    """
    HTML report serializer.

    Wraps the Markdown serializer so both formats always show the same
    tables in the same order.
    """

    def __init__(self, markdown_renderer: MarkdownRenderer = None):
        self.markdown_renderer = markdown_renderer or MarkdownRenderer()

    def supports_format(self) -> str:
        """Return format identifier."""
        return "html"

    def _to_page(self, title: str, markdown_text: str) -> str:
        body = markdown.markdown(markdown_text, extensions=MARKDOWN_EXTENSIONS)
        return PAGE_TEMPLATE.format(title=html.escape(title), body=body)

    def render(self, report: ComparisonReport) -> str:
        """Render a comparison report as an HTML page."""
        title = f"{report.before} to {report.after}"
        return self._to_page(title, self.markdown_renderer.render(report))

    def render_single(self, report: SingleScanReport) -> str:
        """Render a single-artifact scan report as an HTML page."""
        return self._to_page(report.reference, self.markdown_renderer.render_single(report))


__all__ = ["HTMLRenderer"]
