#  Copyright (c) 2025 Tom Villani, Ph.D.
#
# src/mdx_richtext/extensions/__init__.py
"""Syntax extensions for the mistune parser: MDX JSX and shortcodes."""

from mdx_richtext.extensions.jsx import jsx_plugin, scan_jsx_tag
from mdx_richtext.extensions.shortcodes import (
    format_shortcode_attributes,
    jsx_to_shortcode,
    parse_shortcode_attributes,
    rewrite_directive_delimiters,
    shortcode_plugin,
    shortcode_to_jsx,
)

__all__ = [
    "format_shortcode_attributes",
    "jsx_plugin",
    "jsx_to_shortcode",
    "parse_shortcode_attributes",
    "rewrite_directive_delimiters",
    "scan_jsx_tag",
    "shortcode_plugin",
    "shortcode_to_jsx",
]
