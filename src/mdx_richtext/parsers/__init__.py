#  Copyright (c) 2025 Tom Villani, Ph.D.
#
# src/mdx_richtext/parsers/__init__.py
"""Markdown parsing into the generic markdown tree."""

from mdx_richtext.parsers.markdown import MarkdownToAstConverter, markdown_to_ast

__all__ = ["MarkdownToAstConverter", "markdown_to_ast"]
