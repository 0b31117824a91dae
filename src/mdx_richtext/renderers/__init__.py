#  Copyright (c) 2025 Tom Villani, Ph.D.
#
# src/mdx_richtext/renderers/__init__.py
"""Rendering of the generic markdown tree to text."""

from mdx_richtext.renderers.base import BaseRenderer, InlineContentMixin
from mdx_richtext.renderers.markdown import MarkdownRenderer

__all__ = ["BaseRenderer", "InlineContentMixin", "MarkdownRenderer"]
