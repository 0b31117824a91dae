#  Copyright (c) 2025 Tom Villani, Ph.D.
#
# src/mdx_richtext/ast/nodes.py
"""AST node classes for the generic markdown tree.

This module defines the node hierarchy produced by the markdown parser and
consumed by the markdown renderer. It mirrors CommonMark plus the GFM,
MDX and directive extensions used by rich-text fields, and is the
intermediate form between markdown text and the rich document tree.

Node Hierarchy
--------------
All nodes inherit from the base Node class and support the visitor pattern.

Block-level nodes:
    - Document, Heading, Paragraph, CodeBlock, BlockQuote
    - List, ListItem, Table, TableRow, TableCell
    - ThematicBreak, HTMLBlock
    - MdxJsxFlowElement, LeafDirective, ContainerDirective

Inline nodes:
    - Text, Emphasis, Strong, Code, Strikethrough
    - Link, Image, LineBreak, HTMLInline
    - MdxJsxTextElement, TextDirective

Attribute values of JSX elements are plain Python scalars, or an
:class:`MdxExpression` holding the raw source of a ``{...}`` expression.

"""

from __future__ import annotations

from abc import ABC, abstractmethod
from dataclasses import dataclass, field
from typing import Any, Optional, Union

from mdx_richtext.constants import Alignment


class Node(ABC):
    """Base class for all AST nodes."""

    @abstractmethod
    def accept(self, visitor: Any) -> Any:
        """Accept a visitor for processing this node.

        Parameters
        ----------
        visitor : Any
            A visitor object with visit_* methods

        Returns
        -------
        Any
            Result from the visitor's visit method

        """
        pass


# ============================================================================
# JSX attributes
# ============================================================================


@dataclass
class MdxExpression:
    """Raw source of a JSX ``{...}`` attribute expression, braces excluded.

    Parameters
    ----------
    value : str
        Expression source, e.g. ``'["a", "b"]'`` or ``"<>**bold**</>"``

    """

    value: str

    @property
    def is_fragment(self) -> bool:
        """Whether the expression is a ``<>...</>`` fragment holding markdown."""
        stripped = self.value.strip()
        return stripped.startswith("<>") and stripped.endswith("</>")

    @property
    def fragment_body(self) -> str:
        """Markdown between the fragment delimiters."""
        stripped = self.value.strip()
        return stripped[2:-3].strip("\n")


AttributeValue = Union[str, int, float, bool, None, MdxExpression]


@dataclass
class MdxJsxAttribute:
    """A single JSX attribute.

    Parameters
    ----------
    name : str
        Attribute name
    value : str, int, float, bool, MdxExpression or None
        Attribute value. ``None`` denotes a bare attribute (``<Foo flag />``).

    """

    name: str
    value: AttributeValue = None


# ============================================================================
# Block Nodes
# ============================================================================


@dataclass
class Document(Node):
    """Root document node containing all other nodes.

    Parameters
    ----------
    children : list of Node, default = empty list
        Block-level nodes in the document

    """

    children: list[Node] = field(default_factory=list)

    def accept(self, visitor: Any) -> Any:
        """Accept a visitor for processing this document.

        Parameters
        ----------
        visitor : Any
            A visitor object with visit_document method

        Returns
        -------
        Any
            Result from visitor.visit_document(self)

        """
        return visitor.visit_document(self)


@dataclass
class Heading(Node):
    """Heading node (h1-h6).

    Parameters
    ----------
    level : int
        Heading level (1-6, where 1 is most important)
    content : list of Node, default = empty list
        Inline nodes representing heading text

    """

    level: int
    content: list[Node] = field(default_factory=list)

    def __post_init__(self) -> None:
        """Validate heading level is between 1 and 6."""
        if not 1 <= self.level <= 6:
            raise ValueError(f"Heading level must be 1-6, got {self.level}")

    def accept(self, visitor: Any) -> Any:
        """Accept a visitor for processing this heading.

        Parameters
        ----------
        visitor : Any
            A visitor object with visit_heading method

        Returns
        -------
        Any
            Result from visitor.visit_heading(self)

        """
        return visitor.visit_heading(self)


@dataclass
class Paragraph(Node):
    """Paragraph node containing inline content.

    Parameters
    ----------
    content : list of Node, default = empty list
        Inline nodes representing paragraph content

    """

    content: list[Node] = field(default_factory=list)

    def accept(self, visitor: Any) -> Any:
        """Accept a visitor for processing this paragraph."""
        return visitor.visit_paragraph(self)


@dataclass
class CodeBlock(Node):
    """Fenced code block.

    Parameters
    ----------
    content : str
        Code content, without the fences
    language : str or None, default = None
        Full info string of the fence (language and any trailing meta)

    """

    content: str
    language: Optional[str] = None

    def accept(self, visitor: Any) -> Any:
        """Accept a visitor for processing this code block."""
        return visitor.visit_code_block(self)


@dataclass
class BlockQuote(Node):
    """Block quote node.

    Parameters
    ----------
    children : list of Node, default = empty list
        Block-level nodes inside the quote

    """

    children: list[Node] = field(default_factory=list)

    def accept(self, visitor: Any) -> Any:
        """Accept a visitor for processing this block quote."""
        return visitor.visit_block_quote(self)


@dataclass
class List(Node):
    """Ordered or unordered list.

    Parameters
    ----------
    ordered : bool, default = False
        True for numbered lists
    items : list of ListItem, default = empty list
        List items
    start : int, default = 1
        First number of an ordered list
    tight : bool, default = True
        Whether items are separated without blank lines

    """

    ordered: bool = False
    items: list[ListItem] = field(default_factory=list)
    start: int = 1
    tight: bool = True

    def accept(self, visitor: Any) -> Any:
        """Accept a visitor for processing this list."""
        return visitor.visit_list(self)


@dataclass
class ListItem(Node):
    """List item containing block-level children.

    Parameters
    ----------
    children : list of Node, default = empty list
        Block nodes of the item (paragraphs, nested lists, quotes)

    """

    children: list[Node] = field(default_factory=list)

    def accept(self, visitor: Any) -> Any:
        """Accept a visitor for processing this list item."""
        return visitor.visit_list_item(self)


@dataclass
class Table(Node):
    """Table node with a header row and alignment (GFM extension).

    Parameters
    ----------
    rows : list of TableRow, default = empty list
        Table rows (excluding header)
    header : TableRow or None, default = None
        Header row
    alignments : list, default = empty list
        Column alignments ('left', 'center', 'right', or None)

    """

    rows: list[TableRow] = field(default_factory=list)
    header: Optional[TableRow] = None
    alignments: list[Optional[Alignment]] = field(default_factory=list)

    def accept(self, visitor: Any) -> Any:
        """Accept a visitor for processing this table."""
        return visitor.visit_table(self)


@dataclass
class TableRow(Node):
    """Table row containing cells.

    Parameters
    ----------
    cells : list of TableCell, default = empty list
        Cells of the row
    is_header : bool, default = False
        Whether this is the header row

    """

    cells: list[TableCell] = field(default_factory=list)
    is_header: bool = False

    def accept(self, visitor: Any) -> Any:
        """Accept a visitor for processing this table row."""
        return visitor.visit_table_row(self)


@dataclass
class TableCell(Node):
    """Table cell.

    Parameters
    ----------
    content : list of Node, default = empty list
        Inline content of the cell
    alignment : {'left', 'center', 'right'} or None, default = None
        Cell alignment

    """

    content: list[Node] = field(default_factory=list)
    alignment: Optional[Alignment] = None

    def accept(self, visitor: Any) -> Any:
        """Accept a visitor for processing this table cell."""
        return visitor.visit_table_cell(self)


@dataclass
class ThematicBreak(Node):
    """Thematic break (horizontal rule)."""

    def accept(self, visitor: Any) -> Any:
        """Accept a visitor for processing this thematic break."""
        return visitor.visit_thematic_break(self)


@dataclass
class HTMLBlock(Node):
    """Raw HTML block, passed through verbatim.

    Parameters
    ----------
    content : str
        Raw HTML source

    """

    content: str

    def accept(self, visitor: Any) -> Any:
        """Accept a visitor for processing this HTML block."""
        return visitor.visit_html_block(self)


@dataclass
class MdxJsxFlowElement(Node):
    """Block-level JSX element (``<Name ...>...</Name>`` on its own lines).

    Parameters
    ----------
    name : str
        Element name
    attributes : list of MdxJsxAttribute, default = empty list
        Attributes in source order
    children : list of Node, default = empty list
        Block-level children; empty for self-closing elements

    """

    name: str
    attributes: list[MdxJsxAttribute] = field(default_factory=list)
    children: list[Node] = field(default_factory=list)

    def accept(self, visitor: Any) -> Any:
        """Accept a visitor for processing this JSX flow element."""
        return visitor.visit_mdx_jsx_flow_element(self)


@dataclass
class LeafDirective(Node):
    """Block-level shortcode without content.

    Parameters
    ----------
    name : str
        Template name
    attributes : dict of str to str, default = empty dict
        Shortcode attributes; ``_value`` holds the positional value

    """

    name: str
    attributes: dict[str, str] = field(default_factory=dict)

    def accept(self, visitor: Any) -> Any:
        """Accept a visitor for processing this leaf directive."""
        return visitor.visit_leaf_directive(self)


@dataclass
class ContainerDirective(Node):
    """Shortcode wrapping block content between an opening and closing tag.

    Parameters
    ----------
    name : str
        Template name
    attributes : dict of str to str, default = empty dict
        Shortcode attributes
    children : list of Node, default = empty list
        Block-level content between the tags

    """

    name: str
    attributes: dict[str, str] = field(default_factory=dict)
    children: list[Node] = field(default_factory=list)

    def accept(self, visitor: Any) -> Any:
        """Accept a visitor for processing this container directive."""
        return visitor.visit_container_directive(self)


# ============================================================================
# Inline Nodes
# ============================================================================


@dataclass
class Text(Node):
    """Plain text.

    Parameters
    ----------
    content : str
        Text content, unescaped

    """

    content: str

    def accept(self, visitor: Any) -> Any:
        """Accept a visitor for processing this text."""
        return visitor.visit_text(self)


@dataclass
class Emphasis(Node):
    """Emphasized (italic) content."""

    content: list[Node] = field(default_factory=list)

    def accept(self, visitor: Any) -> Any:
        return visitor.visit_emphasis(self)


@dataclass
class Strong(Node):
    """Strong (bold) content."""

    content: list[Node] = field(default_factory=list)

    def accept(self, visitor: Any) -> Any:
        return visitor.visit_strong(self)


@dataclass
class Strikethrough(Node):
    """Strikethrough content (GFM extension)."""

    content: list[Node] = field(default_factory=list)

    def accept(self, visitor: Any) -> Any:
        return visitor.visit_strikethrough(self)


@dataclass
class Code(Node):
    """Inline code span.

    Parameters
    ----------
    content : str
        Code text

    """

    content: str

    def accept(self, visitor: Any) -> Any:
        return visitor.visit_code(self)


@dataclass
class Link(Node):
    """Link node.

    Parameters
    ----------
    url : str
        Link destination URL
    content : list of Node, default = empty list
        Inline nodes representing link text
    title : str or None, default = None
        Optional link title

    """

    url: str
    content: list[Node] = field(default_factory=list)
    title: Optional[str] = None

    def accept(self, visitor: Any) -> Any:
        """Accept a visitor for processing this link.

        Parameters
        ----------
        visitor : Any
            A visitor object with visit_link method

        Returns
        -------
        Any
            Result from visitor.visit_link(self)

        """
        return visitor.visit_link(self)


@dataclass
class Image(Node):
    """Image node.

    Parameters
    ----------
    url : str
        Image source URL
    alt_text : str, default = ''
        Alternative text description
    title : str or None, default = None
        Optional image title

    """

    url: str
    alt_text: str = ""
    title: Optional[str] = None

    def accept(self, visitor: Any) -> Any:
        """Accept a visitor for processing this image."""
        return visitor.visit_image(self)


@dataclass
class LineBreak(Node):
    """Hard line break."""

    def accept(self, visitor: Any) -> Any:
        return visitor.visit_line_break(self)


@dataclass
class HTMLInline(Node):
    """Raw inline HTML, passed through verbatim.

    Parameters
    ----------
    content : str
        Raw HTML source

    """

    content: str

    def accept(self, visitor: Any) -> Any:
        return visitor.visit_html_inline(self)


@dataclass
class MdxJsxTextElement(Node):
    """Inline JSX element.

    Parameters
    ----------
    name : str
        Element name
    attributes : list of MdxJsxAttribute, default = empty list
        Attributes in source order
    children : list of Node, default = empty list
        Inline children; empty for self-closing elements

    """

    name: str
    attributes: list[MdxJsxAttribute] = field(default_factory=list)
    children: list[Node] = field(default_factory=list)

    def accept(self, visitor: Any) -> Any:
        return visitor.visit_mdx_jsx_text_element(self)


@dataclass
class TextDirective(Node):
    """Inline shortcode without content.

    Parameters
    ----------
    name : str
        Template name
    attributes : dict of str to str, default = empty dict
        Shortcode attributes

    """

    name: str
    attributes: dict[str, str] = field(default_factory=dict)

    def accept(self, visitor: Any) -> Any:
        return visitor.visit_text_directive(self)


def get_node_children(node: Node) -> list[Node]:
    """Get all child nodes from a node.

    Parameters
    ----------
    node : Node
        The node to get children from

    Returns
    -------
    list of Node
        List of child nodes (empty list if node has no children)

    Examples
    --------
    >>> heading = Heading(level=1, content=[Text("Hello"), Strong(content=[Text("world")])])
    >>> len(get_node_children(heading))
    2

    """
    if isinstance(
        node,
        (Document, BlockQuote, ListItem, MdxJsxFlowElement, MdxJsxTextElement, ContainerDirective),
    ):
        return list(node.children)

    if isinstance(node, (Heading, Paragraph, Emphasis, Strong, Strikethrough, Link, TableCell)):
        return list(node.content)

    if isinstance(node, List):
        return list(node.items)

    if isinstance(node, Table):
        children: list[Node] = []
        if node.header:
            children.append(node.header)
        children.extend(node.rows)
        return children

    if isinstance(node, TableRow):
        return list(node.cells)

    return []

