#  Copyright (c) 2025 Tom Villani, Ph.D.
#
# src/mdx_richtext/converters/to_ast.py
"""Convert a rich document tree into the markdown AST.

This is the first half of stringify: the resulting
:class:`~mdx_richtext.ast.Document` is handed to
:class:`~mdx_richtext.renderers.MarkdownRenderer`.
"""

from __future__ import annotations

import logging
from typing import Any, Callable, Optional

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
    Link,
    List,
    ListItem,
    MdxJsxFlowElement,
    MdxJsxTextElement,
    Node,
    Paragraph,
    Table,
    TableCell,
    TableRow,
    TextDirective,
    ThematicBreak,
)
from mdx_richtext.constants import TABLE_COMPONENT_NAME, Alignment
from mdx_richtext.converters.attributes import to_attributes
from mdx_richtext.converters.context import ConversionContext
from mdx_richtext.converters.marks import expand_marks
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
    LinkElement,
    ListElement,
    ListItemContentElement,
    ListItemElement,
    ParagraphElement,
    Root,
    TableCellElement,
    TableElement,
    TextLeaf,
)
from mdx_richtext.document.serialization import dict_to_document
from mdx_richtext.exceptions import MalformedCallError, UnsupportedNodeError

logger = logging.getLogger(__name__)

_INLINE_TYPES = (TextLeaf, LinkElement, ImageElement, BreakElement, HtmlInlineElement, ComponentInlineElement)


# ============================================================================
# Inline content
# ============================================================================


def convert_inline(children: list[InlineNode], ctx: ConversionContext) -> list[Node]:
    """Convert flagged inline children into markdown inline nodes."""
    return expand_marks(children, lambda node: _convert_inline_node(node, ctx))


def _convert_inline_node(node: InlineNode, ctx: ConversionContext) -> Node:
    if isinstance(node, LinkElement):
        return Link(url=node.url, content=convert_inline(node.children, ctx), title=node.title)
    elif isinstance(node, ImageElement):
        return Image(url=ctx.map_image(node.url), alt_text=node.alt or "", title=node.caption)
    elif isinstance(node, BreakElement):
        return LineBreak()
    elif isinstance(node, HtmlInlineElement):
        return HTMLInline(content=node.value)
    elif isinstance(node, ComponentInlineElement):
        return _convert_inline_component(node, ctx)
    raise UnsupportedNodeError(getattr(node, "type", type(node).__name__), "InlineElement")


def _inline_children_of(root: Root, ctx: ConversionContext) -> list[Node]:
    """Inline content of an inline component's ``children`` prop.

    The editor stores it as a root holding one paragraph.
    """
    content: list[Node] = []
    for block in root.children:
        if isinstance(block, (ParagraphElement, ListItemContentElement, HeadingElement)):
            content.extend(convert_inline(block.children, ctx))
        else:
            logger.warning(f"Dropping {block.type} block from the content of an inline component")
    return content


def _require_name(node: ComponentElement | ComponentInlineElement) -> None:
    if not node.name:
        raise MalformedCallError(f"Expected a name for {node.type} but received none", parameter_value=node.props)


def _convert_inline_component(node: ComponentInlineElement, ctx: ConversionContext) -> Node:
    _require_name(node)
    ctx = ctx.descend()
    serialized = to_attributes(node, ctx, _inline_children_of)
    if serialized.use_directive:
        if serialized.children:
            logger.warning(f"Inline shortcode '{node.name}' cannot hold content, dropping it")
        return TextDirective(name=node.name, attributes=serialized.directive_attributes())
    return MdxJsxTextElement(name=node.name, attributes=serialized.attributes, children=serialized.children)


# ============================================================================
# Block content
# ============================================================================


def convert_blocks(children: list[BlockNode], ctx: ConversionContext) -> list[Node]:
    """Convert document blocks, dropping empty-paragraph sentinels."""
    nodes: list[Node] = []
    for child in children:
        node = convert_block(child, ctx)
        if node is not None:
            nodes.append(node)
    return nodes


def convert_block(block: BlockNode, ctx: ConversionContext) -> Optional[Node]:
    """Convert one document block.

    Parameters
    ----------
    block : BlockNode
        Document block
    ctx : ConversionContext
        Conversion state

    Returns
    -------
    Node or None
        Markdown block, or None for an empty paragraph

    Raises
    ------
    UnsupportedNodeError
        If the block kind has no markdown counterpart

    """
    handler = _BLOCK_HANDLERS.get(type(block))
    if handler is None:
        raise UnsupportedNodeError(getattr(block, "type", type(block).__name__), "BlockElement")
    return handler(block, ctx)


def _convert_heading(node: HeadingElement, ctx: ConversionContext) -> Heading:
    return Heading(level=node.depth, content=convert_inline(node.children, ctx))


def _convert_paragraph(node: ParagraphElement, ctx: ConversionContext) -> Optional[Paragraph]:
    if node.is_empty:
        return None
    return Paragraph(content=convert_inline(node.children, ctx))


def _convert_code_block(node: CodeBlockElement, ctx: ConversionContext) -> CodeBlock:
    return CodeBlock(content=node.value, language=node.lang or None)


def _convert_blockquote(node: BlockquoteElement, ctx: ConversionContext) -> BlockQuote:
    ctx = ctx.descend()
    children = node.children
    if (
        children
        and all(isinstance(child, _INLINE_TYPES) for child in children)
        and not all(isinstance(child, ImageElement) for child in children)
    ):
        # editor artefact: leaves directly under the quote
        return BlockQuote(children=[Paragraph(content=convert_inline(node.children, ctx))])  # type: ignore[arg-type]
    return BlockQuote(children=convert_blocks(node.children, ctx))


def _convert_list_item_child(child: BlockNode, ctx: ConversionContext) -> Optional[Node]:
    if isinstance(child, ListItemContentElement):
        return Paragraph(content=convert_inline(child.children, ctx))
    elif isinstance(child, ParagraphElement):
        return _convert_paragraph(child, ctx)
    elif isinstance(child, ListElement):
        return _convert_list(child, ctx)
    elif isinstance(child, BlockquoteElement):
        return _convert_blockquote(child, ctx)
    raise UnsupportedNodeError(getattr(child, "type", type(child).__name__), "BlockContentElement")


def _convert_list_item(item: ListItemElement, ctx: ConversionContext) -> ListItem:
    children = []
    for child in item.children:
        node = _convert_list_item_child(child, ctx)
        if node is not None:
            children.append(node)
    return ListItem(children=children)


def _convert_list(node: ListElement, ctx: ConversionContext) -> List:
    ctx = ctx.descend()
    return List(ordered=node.ordered, items=[_convert_list_item(item, ctx) for item in node.children])


def _build_table(rows: list[list[list[Node]]], align: list[Optional[Alignment]]) -> Optional[Table]:
    if not rows:
        return None
    num_cols = max(len(row) for row in rows)
    alignments = (list(align) + [None] * num_cols)[:num_cols]

    def make_row(cells: list[list[Node]], is_header: bool) -> TableRow:
        padded = cells + [[] for _ in range(num_cols - len(cells))]
        return TableRow(
            cells=[TableCell(content=content, alignment=alignments[i]) for i, content in enumerate(padded)],
            is_header=is_header,
        )

    return Table(
        header=make_row(rows[0], True),
        rows=[make_row(cells, False) for cells in rows[1:]],
        alignments=alignments,
    )


def _cell_content(cell: TableCellElement, ctx: ConversionContext) -> list[Node]:
    """Inline content of a cell: its first paragraph, as markdown cells hold one line."""
    if len(cell.children) > 1:
        logger.warning(f"Dropping {len(cell.children) - 1} extra block(s) from a table cell")
    first = cell.children[0] if cell.children else None
    if isinstance(first, ParagraphElement) and not first.is_empty:
        return convert_inline(first.children, ctx)
    return []


def _convert_table(node: TableElement, ctx: ConversionContext) -> Optional[Table]:
    rows = [[_cell_content(cell, ctx) for cell in row.children] for row in node.children]
    return _build_table(rows, list(node.align or []))


def _as_root(value: Any) -> Optional[Root]:
    if isinstance(value, Root):
        return value
    if isinstance(value, dict) and value.get("type") == "root":
        return dict_to_document(value)  # type: ignore[return-value]
    return None


def _convert_table_component(node: ComponentElement, ctx: ConversionContext) -> Optional[Table]:
    """Convert the editor's table component (``props.tableRows``) into a table."""
    rows: list[list[list[Node]]] = []
    for table_row in node.props.get("tableRows") or []:
        cells: list[list[Node]] = []
        for table_cell in table_row.get("tableCells") or []:
            root = _as_root(table_cell.get("value"))
            first = root.children[0] if root is not None and root.children else None
            if isinstance(first, ParagraphElement) and not first.is_empty:
                cells.append(convert_inline(first.children, ctx))
            else:
                cells.append([])
        rows.append(cells)
    return _build_table(rows, list(node.props.get("align") or []))


def _convert_component(node: ComponentElement, ctx: ConversionContext) -> Optional[Node]:
    if node.name == TABLE_COMPONENT_NAME and "tableRows" in node.props:
        return _convert_table_component(node, ctx)

    _require_name(node)
    ctx = ctx.descend()
    serialized = to_attributes(node, ctx, lambda root, child_ctx: convert_blocks(root.children, child_ctx))
    if serialized.use_directive:
        attributes = serialized.directive_attributes()
        if serialized.directive_type == "block":
            return ContainerDirective(name=node.name, attributes=attributes, children=serialized.children)
        if serialized.children:
            logger.warning(f"Shortcode '{node.name}' has no children field, dropping its content")
        return LeafDirective(name=node.name, attributes=attributes)
    return MdxJsxFlowElement(name=node.name, attributes=serialized.attributes, children=serialized.children)


def _convert_image(node: ImageElement, ctx: ConversionContext) -> Paragraph:
    return Paragraph(content=[_convert_inline_node(node, ctx)])


_BLOCK_HANDLERS: dict[type, Callable[[Any, ConversionContext], Optional[Node]]] = {
    HeadingElement: _convert_heading,
    ParagraphElement: _convert_paragraph,
    CodeBlockElement: _convert_code_block,
    BlockquoteElement: _convert_blockquote,
    ListElement: _convert_list,
    TableElement: _convert_table,
    ImageElement: _convert_image,
    HtmlElement: lambda node, ctx: HTMLBlock(content=node.value),
    HorizontalRuleElement: lambda node, ctx: ThematicBreak(),
    ComponentElement: _convert_component,
}


def document_to_ast(root: Root, ctx: ConversionContext) -> Document:
    """Convert a document tree into a markdown AST document.

    Parameters
    ----------
    root : Root
        Document tree
    ctx : ConversionContext
        Conversion state

    Returns
    -------
    Document

    Raises
    ------
    UnsupportedNodeError
        If the tree holds a node kind with no markdown counterpart
    MarkConflictError
        If inline code would have to contain other formatted text
    NestingDepthError
        If components or lists nest deeper than allowed

    """
    return Document(children=convert_blocks(root.children, ctx))
