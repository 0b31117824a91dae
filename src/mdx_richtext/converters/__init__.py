#  Copyright (c) 2025 Tom Villani, Ph.D.
#
# src/mdx_richtext/converters/__init__.py
"""Conversion between the markdown AST and the rich document tree."""

from mdx_richtext.converters.attributes import SerializedComponent, to_attributes, to_props
from mdx_richtext.converters.context import ConversionContext, ImageUrlMapper, identity_url
from mdx_richtext.converters.marks import contract_marks, expand_marks, get_text_marks
from mdx_richtext.converters.to_ast import document_to_ast
from mdx_richtext.converters.to_document import ast_to_document

__all__ = [
    "ConversionContext",
    "ImageUrlMapper",
    "SerializedComponent",
    "ast_to_document",
    "contract_marks",
    "document_to_ast",
    "expand_marks",
    "get_text_marks",
    "identity_url",
    "to_attributes",
    "to_props",
]
