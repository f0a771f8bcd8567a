"""Utility modules for reference parsing, validation and formatting."""

from utils.formatting import create_safe_file_name, format_cell, format_signed
from utils.image_utils import is_helm_chart, parse_chart_reference, parse_image_reference

__all__ = [
    "create_safe_file_name",
    "format_cell",
    "format_signed",
    "is_helm_chart",
    "parse_chart_reference",
    "parse_image_reference",
]
