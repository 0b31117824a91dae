#  Copyright (c) 2025 Tom Villani, Ph.D.
#
# src/mdx_richtext/converters/to_document.py
"""Convert the markdown AST into a rich document tree.

This is the second half of parse, run on the
:class:`~mdx_richtext.ast.Document` produced by
:class:`~mdx_richtext.parsers.MarkdownToAstConverter`.
"""

from __future__ import annotations

import logging
from typing import Any, Callable, Optional, Union

from mdx_richtext.ast.nodes import (
    BlockQuote,
    CodeBlock,
    ContainerDirective,
    Document,
    Heading,
    HTMLBlock,
    HTMLInline,
    Image,
    LeafDirective,
    LineBreak,
    List,
    MdxJsxAttribute,
    MdxJsxFlowElement,
    MdxJsxTextElement,
    Node,
    Paragraph,
    Table,
    TableRow,
    TextDirective,
    ThematicBreak,
)
from mdx_richtext.converters.attributes import to_props
from mdx_richtext.converters.context import ConversionContext
from mdx_richtext.converters.marks import contract_marks
from mdx_richtext.document.nodes import (
    BlockNode,
    BlockquoteElement,
    BreakElement,
    CodeBlockElement,
    ComponentElement,
    ComponentInlineElement,
    HeadingElement,
    HorizontalRuleElement,
    HtmlElement,
    HtmlInlineElement,
    ImageElement,
    InlineNode,
    ListElement,
    ListItemContentElement,
    ListItemElement,
    ParagraphElement,
    Root,
    TableCellElement,
    TableElement,
    TableRowElement,
    TextLeaf,
)
from mdx_richtext.exceptions import UnsupportedNodeError

logger = logging.getLogger(__name__)


def _or_empty_leaf(children: list[InlineNode]) -> list[InlineNode]:
    return children or [TextLeaf(text="")]


# ============================================================================
# Inline content
# ============================================================================


def convert_inline(nodes: list[Node], ctx: ConversionContext) -> list[InlineNode]:
    """Convert markdown inline nodes into flagged document inline nodes."""
    return contract_marks(nodes, lambda node: _convert_inline_node(node, ctx))


def _convert_image(node: Image, ctx: ConversionContext) -> ImageElement:
    return ImageElement(url=ctx.map_image(node.url), alt=node.alt_text or None, caption=node.title)


def _inline_component_children(node: MdxJsxTextElement, ctx: ConversionContext) -> Optional[Root]:
    if not node.children:
        return None
    return Root(children=[ParagraphElement(children=convert_inline(node.children, ctx))])


def _convert_inline_node(node: Node, ctx: ConversionContext) -> InlineNode:
    if isinstance(node, Image):
        return _convert_image(node, ctx)
    elif isinstance(node, LineBreak):
        return BreakElement()
    elif isinstance(node, HTMLInline):
        return HtmlInlineElement(value=node.content)
    elif isinstance(node, MdxJsxTextElement):
        ctx = ctx.descend()
        children = _inline_component_children(node, ctx)
        return ComponentInlineElement(name=node.name, props=to_props(node.name, node.attributes, ctx, children))
    elif isinstance(node, TextDirective):
        return ComponentInlineElement(name=node.name, props=_directive_props(node, ctx))
    raise UnsupportedNodeError(type(node).__name__, "Inline node")


# ============================================================================
# Block content
# ============================================================================


def convert_blocks(nodes: list[Node], ctx: ConversionContext) -> list[BlockNode]:
    """Convert markdown blocks into document blocks."""
    return [convert_block(node, ctx) for node in nodes]


def convert_block(node: Node, ctx: ConversionContext) -> BlockNode:
    """Convert one markdown block.

    Raises
    ------
    UnsupportedNodeError
        If the node kind has no document counterpart

    """
    handler = _BLOCK_HANDLERS.get(type(node))
    if handler is None:
        raise UnsupportedNodeError(type(node).__name__, "Block node")
    return handler(node, ctx)


def _convert_heading(node: Heading, ctx: ConversionContext) -> HeadingElement:
    return HeadingElement(depth=node.level, children=_or_empty_leaf(convert_inline(node.content, ctx)))


def _convert_paragraph(node: Paragraph, ctx: ConversionContext) -> Union[ParagraphElement, ImageElement]:
    if len(node.content) == 1 and isinstance(node.content[0], Image):
        return _convert_image(node.content[0], ctx)
    return ParagraphElement(children=_or_empty_leaf(convert_inline(node.content, ctx)))


def _convert_blockquote(node: BlockQuote, ctx: ConversionContext) -> BlockquoteElement:
    return BlockquoteElement(children=convert_blocks(node.children, ctx.descend()))


def _convert_list_item_child(child: Node, ctx: ConversionContext) -> BlockNode:
    if isinstance(child, Paragraph):
        return ListItemContentElement(children=_or_empty_leaf(convert_inline(child.content, ctx)))
    elif isinstance(child, List):
        return _convert_list(child, ctx)
    elif isinstance(child, BlockQuote):
        return _convert_blockquote(child, ctx)
    raise UnsupportedNodeError(type(child).__name__, "List item content")


def _convert_list(node: List, ctx: ConversionContext) -> ListElement:
    ctx = ctx.descend()
    items = []
    for item in node.items:
        children = [_convert_list_item_child(child, ctx) for child in item.children]
        items.append(ListItemElement(children=children or [ListItemContentElement(children=[TextLeaf(text="")])]))
    return ListElement(ordered=node.ordered, children=items)


def _convert_row(row: TableRow, num_cols: int, ctx: ConversionContext) -> TableRowElement:
    cells = [
        TableCellElement(children=[ParagraphElement(children=_or_empty_leaf(convert_inline(cell.content, ctx)))])
        for cell in row.cells
    ]
    while len(cells) < num_cols:
        cells.append(TableCellElement(children=[ParagraphElement(children=[TextLeaf(text="")])]))
    return TableRowElement(children=cells)


def _convert_table(node: Table, ctx: ConversionContext) -> TableElement:
    rows = ([node.header] if node.header is not None else []) + list(node.rows)
    num_cols = max((len(row.cells) for row in rows), default=0)
    align = list(node.alignments) if any(node.alignments) else None
    return TableElement(children=[_convert_row(row, num_cols, ctx) for row in rows], align=align)


def _directive_props(node: Union[LeafDirective, ContainerDirective, TextDirective], ctx: ConversionContext) -> dict:
    attributes = [MdxJsxAttribute(name=name, value=value) for name, value in node.attributes.items()]
    children = None
    if isinstance(node, ContainerDirective) and node.children:
        children = _children_root(node.children, node.name, ctx)
    return to_props(node.name, attributes, ctx, children)


def _children_root(children: list[Node], name: str, ctx: ConversionContext) -> Root:
    template = ctx.find_template(name)
    children_field = template.field("children") if template is not None else None
    if children_field is not None and children_field.is_rich_text:
        ctx = ctx.nested(children_field)
    return Root(children=convert_blocks(children, ctx))


def _convert_flow_element(node: MdxJsxFlowElement, ctx: ConversionContext) -> ComponentElement:
    ctx = ctx.descend()
    children = _children_root(node.children, node.name, ctx) if node.children else None
    logger.debug(f"Reading JSX component '{node.name}'")
    return ComponentElement(name=node.name, props=to_props(node.name, node.attributes, ctx, children))


def _convert_directive(node: Union[LeafDirective, ContainerDirective], ctx: ConversionContext) -> ComponentElement:
    logger.debug(f"Reading shortcode '{node.name}'")
    return ComponentElement(name=node.name, props=_directive_props(node, ctx.descend()))


_BLOCK_HANDLERS: dict[type, Callable[[Any, ConversionContext], BlockNode]] = {
    Heading: _convert_heading,
    Paragraph: _convert_paragraph,
    CodeBlock: lambda node, ctx: CodeBlockElement(value=node.content, lang=node.language),
    BlockQuote: _convert_blockquote,
    List: _convert_list,
    Table: _convert_table,
    ThematicBreak: lambda node, ctx: HorizontalRuleElement(),
    HTMLBlock: lambda node, ctx: HtmlElement(value=node.content),
    MdxJsxFlowElement: _convert_flow_element,
    LeafDirective: _convert_directive,
    ContainerDirective: _convert_directive,
}


def ast_to_document(document: Document, ctx: ConversionContext) -> Root:
    """Convert a markdown AST document into a document tree.

    Parameters
    ----------
    document : Document
        Parsed markdown
    ctx : ConversionContext
        Conversion state

    Returns
    -------
    Root
        Document tree; a single empty paragraph when the document has no
        blocks

    Raises
    ------
    UnsupportedNodeError
        If the markdown holds a construct with no document counterpart
    RichTextParseError
        If a JSX attribute expression cannot be decoded
    NestingDepthError
        If components or lists nest deeper than allowed

    """
    children = convert_blocks(document.children, ctx)
    if not children:
        children = [ParagraphElement(children=[TextLeaf(text="")])]
    return Root(children=children)
