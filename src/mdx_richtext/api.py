#  Copyright (c) 2025 Tom Villani, Ph.D.
#
# src/mdx_richtext/api.py
"""The exported parse and stringify functions."""

from __future__ import annotations

import logging
from typing import Any, Mapping, Optional, Union

from mdx_richtext.converters.context import ConversionContext, ImageUrlMapper, identity_url
from mdx_richtext.converters.to_ast import document_to_ast
from mdx_richtext.converters.to_document import ast_to_document
from mdx_richtext.document.nodes import InvalidMarkdownElement, Root, empty_root
from mdx_richtext.document.serialization import dict_to_document
from mdx_richtext.exceptions import MalformedCallError, RichTextParseError
from mdx_richtext.extensions.shortcodes import rewrite_directive_delimiters
from mdx_richtext.options.markdown import MarkdownParserOptions, MarkdownRendererOptions
from mdx_richtext.options.richtext import RichTextField
from mdx_richtext.parsers.markdown import MarkdownToAstConverter
from mdx_richtext.renderers.markdown import MarkdownRenderer

logger = logging.getLogger(__name__)

FieldLike = Union[RichTextField, Mapping[str, Any], None]


def _context(field: FieldLike, image_url_mapper: Optional[ImageUrlMapper]) -> ConversionContext:
    return ConversionContext(
        field=RichTextField.coerce(field),
        image_url_mapper=image_url_mapper or identity_url,
    )


def markdown_to_document(markdown: str, ctx: ConversionContext) -> Root:
    """Parse markdown into a document tree, raising on any error.

    Used by :func:`parse` and for rich-text props nested in components.

    Parameters
    ----------
    markdown : str
        Markdown or MDX text
    ctx : ConversionContext
        Conversion state

    Returns
    -------
    Root

    Raises
    ------
    RichTextParseError
        If the text uses JSX or attribute syntax that cannot be read

    """
    if not markdown.strip():
        return empty_root()
    options = MarkdownParserOptions.from_field(ctx.field).create_updated(
        max_depth=max(ctx.max_depth - ctx.depth, 1)
    )
    document = MarkdownToAstConverter(options).parse(markdown)
    return ast_to_document(document, ctx)


def document_to_markdown(root: Root, ctx: ConversionContext) -> str:
    """Write a document tree as markdown, raising on any error.

    Parameters
    ----------
    root : Root
        Document tree
    ctx : ConversionContext
        Conversion state

    Returns
    -------
    str
        Markdown without a trailing newline

    """
    ctx.field.ensure_stringifiable()
    document = document_to_ast(root, ctx)
    renderer = MarkdownRenderer(MarkdownRendererOptions.from_field(ctx.field))
    text = renderer.render_to_string(document)
    return rewrite_directive_delimiters(text, ctx.field.shortcode_patterns())


def parse(
    markdown: str,
    field: FieldLike = None,
    image_url_mapper: Optional[ImageUrlMapper] = None,
) -> Root:
    """Parse markdown or MDX text into a rich document tree.

    Parameters
    ----------
    markdown : str
        Source text. Empty or whitespace-only text yields a single empty
        paragraph.
    field : RichTextField, mapping or None, default None
        Field configuration: templates, shortcode syntaxes and parser type.
        Mappings use the same (camelCase or snake_case) keys as
        :meth:`RichTextField.from_dict`.
    image_url_mapper : callable, optional
        Applied to every image URL and image-typed prop

    Returns
    -------
    Root
        Document tree. When the text cannot be read as MDX, the root holds a
        single ``invalid_markdown`` element carrying the text, the error
        message and its position.

    Raises
    ------
    UnsupportedNodeError
        If the markdown holds a construct with no document counterpart
    NestingDepthError
        If nesting exceeds the configured maximum depth

    Examples
    --------
    >>> root = parse("Hello **world**")
    >>> [(leaf.text, leaf.bold) for leaf in root.children[0].children]
    [('Hello ', False), ('world', True)]

    """
    ctx = _context(field, image_url_mapper)
    try:
        return markdown_to_document(markdown, ctx)
    except RichTextParseError as e:
        logger.debug(f"Keeping unreadable markdown as invalid_markdown: {e.message}")
        return Root(children=[InvalidMarkdownElement(value=markdown, message=e.message, position=e.position)])


def stringify(
    root: Union[Root, Mapping[str, Any]],
    field: FieldLike = None,
    image_url_mapper: Optional[ImageUrlMapper] = None,
) -> str:
    """Write a rich document tree as markdown or MDX text.

    Parameters
    ----------
    root : Root or mapping
        Document tree, or its dictionary form
    field : RichTextField, mapping or None, default None
        Field configuration
    image_url_mapper : callable, optional
        Applied to every image URL and image-typed prop

    Returns
    -------
    str
        Markdown without a trailing newline. A tree whose first block is an
        ``invalid_markdown`` element yields that element's original text.

    Raises
    ------
    MalformedCallError
        If given a string instead of a tree, or a component without a name
    ConfigurationError
        If the field has global (unnamed) templates
    UnsupportedNodeError
        If the tree holds a node kind with no markdown counterpart
    MarkConflictError
        If inline code would have to contain other formatted text

    """
    if root is None or isinstance(root, str):
        raise MalformedCallError("Expected an object to stringify, but received a string", parameter_value=root)
    if isinstance(root, Mapping):
        root = dict_to_document(dict(root))
    if not isinstance(root, Root):
        raise MalformedCallError(
            f"Expected a root node to stringify, but received {type(root).__name__}", parameter_value=root
        )

    if root.children and isinstance(root.children[0], InvalidMarkdownElement):
        return root.children[0].value

    return document_to_markdown(root, _context(field, image_url_mapper))
