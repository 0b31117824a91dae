#  Copyright (c) 2025 Tom Villani, Ph.D.
#
# src/mdx_richtext/options/__init__.py
"""Configuration classes for rich-text fields and the markdown engine."""

from mdx_richtext.options.base import BaseParserOptions, BaseRendererOptions, CloneFrozenMixin
from mdx_richtext.options.markdown import MarkdownParserOptions, MarkdownRendererOptions
from mdx_richtext.options.richtext import (
    ParserConfig,
    RichTextField,
    ShortcodeMatch,
    ShortcodePattern,
    Template,
    TemplateField,
)

__all__ = [
    "BaseParserOptions",
    "BaseRendererOptions",
    "CloneFrozenMixin",
    "MarkdownParserOptions",
    "MarkdownRendererOptions",
    "ParserConfig",
    "RichTextField",
    "ShortcodeMatch",
    "ShortcodePattern",
    "Template",
    "TemplateField",
]
