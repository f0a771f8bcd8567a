"""
Formatting utilities for helmscan output.

Provides common formatting functions for report values and file names.
"""

import re


def format_signed(num: int) -> str:
    """
    Format an integer with an explicit sign.

    Args:
        num: Integer to format

    Returns:
        Signed number string

    Examples:
        >>> format_signed(3)
        '+3'
        >>> format_signed(-1)
        '-1'
        >>> format_signed(0)
        '+0'
    """
    return f"{num:+d}"


def format_cell(value: str, placeholder: str = "-") -> str:
    """
    Format a Markdown table cell, escaping pipes.

    Args:
        value: Cell value (None renders the placeholder)
        placeholder: Text used when the value does not apply

    Examples:
        >>> format_cell(None)
        '-'
        >>> format_cell("a|b")
        'a\\\\|b'
    """
    if value is None:
        return placeholder
    return value.replace("|", "\\|")


def create_safe_file_name(name: str) -> str:
    """
    Derive a filesystem-safe name from an artifact reference.

    Characters other than letters, digits, dots, hyphens and underscores
    become underscores, runs of underscores collapse to one, and leading
    dots are dropped so the result is never hidden or a path component.

    Args:
        name: Raw name (e.g., "bitnami/nginx@15.0.0")

    Returns:
        Safe file name

    Examples:
        >>> create_safe_file_name("bitnami/nginx@15.0.0")
        'bitnami_nginx_15.0.0'
        >>> create_safe_file_name("docker.io/library/nginx@1.25")
        'docker.io_library_nginx_1.25'
        >>> create_safe_file_name("../etc/passwd")
        '_etc_passwd'
    """
    safe_name = re.sub(r"[^A-Za-z0-9._-]", "_", name)
    safe_name = re.sub(r"\.{2,}", "_", safe_name)
    safe_name = re.sub(r"_+", "_", safe_name)
    return safe_name.lstrip(".")
