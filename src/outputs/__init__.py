"""Report renderers for comparison and single-scan reports."""

from core.exceptions import ValidationException
from core.models import Artifact, DiffResult, SeverityCount
from outputs.base import ReportRenderer
from outputs.html_renderer import HTMLRenderer
from outputs.json_renderer import JSONRenderer
from outputs.markdown_renderer import MarkdownRenderer
from outputs.report import build_comparison_report, build_single_report

RENDERERS = {
    "markdown": MarkdownRenderer,
    "json": JSONRenderer,
    "html": HTMLRenderer,
}


def get_renderer(format_type: str) -> ReportRenderer:
    """
    Look up the renderer for an output format.

    Raises:
        ValidationException: If the format is not supported
    """
    renderer_cls = RENDERERS.get(format_type)
    if renderer_cls is None:
        raise ValidationException(
            f"Unsupported format '{format_type}'. Valid formats: {', '.join(RENDERERS)}",
            "format",
        )
    return renderer_cls()


def render(result: DiffResult, aggregation: list[SeverityCount], format_type: str) -> str:
    """Render a comparison in the requested format."""
    return get_renderer(format_type).render(build_comparison_report(result, aggregation))


def render_single(artifact: Artifact, format_type: str) -> str:
    """Render a single artifact's scan in the requested format."""
    return get_renderer(format_type).render_single(build_single_report(artifact))


__all__ = [
    "ReportRenderer",
    "MarkdownRenderer",
    "JSONRenderer",
    "HTMLRenderer",
    "RENDERERS",
    "get_renderer",
    "render",
    "render_single",
]
