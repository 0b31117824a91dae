#  Copyright (c) 2025 Tom Villani, Ph.D.
#
# src/mdx_richtext/document/nodes.py
"""Node classes for the rich document tree.

The document tree is the editor-facing representation of a rich-text field.
Formatting is carried as boolean flags on text leaves rather than as nested
wrapper nodes, and embedded components keep their props in a dictionary.
Every node exposes its editor type tag through the ``type`` property.

Block elements:
    - Root, HeadingElement (h1-h6), ParagraphElement (p), CodeBlockElement
    - BlockquoteElement, ListElement (ul/ol), ListItemElement (li),
      ListItemContentElement (lic)
    - TableElement, TableRowElement (tr), TableCellElement (td)
    - ImageElement (img), HtmlElement, HorizontalRuleElement (hr)
    - ComponentElement (mdxJsxFlowElement), InvalidMarkdownElement

Inline elements:
    - TextLeaf, LinkElement (a), BreakElement, HtmlInlineElement
    - ImageElement, ComponentInlineElement (mdxJsxTextElement)

"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, ClassVar, Optional, Union

from mdx_richtext.constants import TEXT_FLAGS, Alignment


@dataclass(frozen=True)
class LinkTarget:
    """Destination of a link that was folded onto a single text leaf."""

    url: str
    title: Optional[str] = None


class DocumentNode:
    """Base class for document tree nodes."""

    node_type: ClassVar[str] = ""

    @property
    def type(self) -> str:
        """Editor type tag of this node."""
        return self.node_type


# ============================================================================
# Inline nodes
# ============================================================================


@dataclass
class TextLeaf(DocumentNode):
    """Text leaf with formatting flags.

    Parameters
    ----------
    text : str
        Text content
    bold, italic, code, strikethrough : bool
        Formatting flags
    pending_link : LinkTarget or None
        Set only while writing markdown, when a link whose sole child was
        this leaf has been folded onto it. Never serialized.

    """

    node_type: ClassVar[str] = "text"

    text: str = ""
    bold: bool = False
    italic: bool = False
    code: bool = False
    strikethrough: bool = False
    pending_link: Optional[LinkTarget] = None

    @property
    def flags(self) -> frozenset[str]:
        """Names of the formatting flags that are set."""
        return frozenset(name for name in TEXT_FLAGS if getattr(self, name))

    @property
    def is_empty(self) -> bool:
        return self.text == ""


@dataclass
class LinkElement(DocumentNode):
    """Hyperlink wrapping inline content.

    Parameters
    ----------
    url : str
        Destination
    title : str or None
        Optional title
    children : list
        Inline children

    """

    node_type: ClassVar[str] = "a"

    url: str
    title: Optional[str] = None
    children: list[InlineNode] = field(default_factory=list)


@dataclass
class BreakElement(DocumentNode):
    """Hard line break."""

    node_type: ClassVar[str] = "break"


@dataclass
class HtmlInlineElement(DocumentNode):
    """Raw inline HTML."""

    node_type: ClassVar[str] = "html_inline"

    value: str = ""


@dataclass
class ImageElement(DocumentNode):
    """Image, used both as a block and inline.

    Parameters
    ----------
    url : str
        Image source, already passed through the image URL mapper
    alt : str or None
        Alternative text
    caption : str or None
        Image title

    """

    node_type: ClassVar[str] = "img"

    url: str = ""
    alt: Optional[str] = None
    caption: Optional[str] = None


@dataclass
class ComponentInlineElement(DocumentNode):
    """Inline component instance.

    Parameters
    ----------
    name : str
        Template name
    props : dict
        Prop values keyed by field name

    """

    node_type: ClassVar[str] = "mdxJsxTextElement"

    name: str
    props: dict[str, Any] = field(default_factory=dict)


InlineNode = Union[TextLeaf, LinkElement, BreakElement, HtmlInlineElement, ImageElement, ComponentInlineElement]


# ============================================================================
# Block nodes
# ============================================================================


@dataclass
class HeadingElement(DocumentNode):
    """Heading with a depth of 1 to 6."""

    depth: int
    children: list[InlineNode] = field(default_factory=list)

    def __post_init__(self) -> None:
        """Validate heading depth is between 1 and 6."""
        if not 1 <= self.depth <= 6:
            raise ValueError(f"Heading depth must be 1-6, got {self.depth}")

    @property
    def type(self) -> str:
        return f"h{self.depth}"


@dataclass
class ParagraphElement(DocumentNode):
    """Paragraph of inline content.

    A paragraph whose only child is an empty text leaf stands for an empty
    line in the editor and is dropped when writing markdown.
    """

    node_type: ClassVar[str] = "p"

    children: list[InlineNode] = field(default_factory=list)

    @property
    def is_empty(self) -> bool:
        return not self.children or (
            len(self.children) == 1 and isinstance(self.children[0], TextLeaf) and self.children[0].is_empty
        )


@dataclass
class CodeBlockElement(DocumentNode):
    """Fenced code block.

    Parameters
    ----------
    value : str
        Code content
    lang : str or None
        Info string of the fence

    """

    node_type: ClassVar[str] = "code_block"

    value: str = ""
    lang: Optional[str] = None


@dataclass
class BlockquoteElement(DocumentNode):
    """Block quote holding block children."""

    node_type: ClassVar[str] = "blockquote"

    children: list[BlockNode] = field(default_factory=list)


@dataclass
class ListItemContentElement(DocumentNode):
    """Inline content of a list item (the editor's ``lic``)."""

    node_type: ClassVar[str] = "lic"

    children: list[InlineNode] = field(default_factory=list)


@dataclass
class ListItemElement(DocumentNode):
    """List item holding ``lic``, nested lists or block quotes."""

    node_type: ClassVar[str] = "li"

    children: list[BlockNode] = field(default_factory=list)


@dataclass
class ListElement(DocumentNode):
    """Ordered (``ol``) or unordered (``ul``) list."""

    ordered: bool = False
    children: list[ListItemElement] = field(default_factory=list)

    @property
    def type(self) -> str:
        return "ol" if self.ordered else "ul"


@dataclass
class TableCellElement(DocumentNode):
    """Table cell holding a single paragraph."""

    node_type: ClassVar[str] = "td"

    children: list[ParagraphElement] = field(default_factory=list)


@dataclass
class TableRowElement(DocumentNode):
    node_type: ClassVar[str] = "tr"

    children: list[TableCellElement] = field(default_factory=list)


@dataclass
class TableElement(DocumentNode):
    """Table whose first row is the header row.

    Parameters
    ----------
    children : list of TableRowElement
        Rows, header first
    align : list or None
        Column alignments

    """

    node_type: ClassVar[str] = "table"

    children: list[TableRowElement] = field(default_factory=list)
    align: Optional[list[Optional[Alignment]]] = None


@dataclass
class HtmlElement(DocumentNode):
    """Raw HTML block."""

    node_type: ClassVar[str] = "html"

    value: str = ""


@dataclass
class HorizontalRuleElement(DocumentNode):
    node_type: ClassVar[str] = "hr"


@dataclass
class ComponentElement(DocumentNode):
    """Block component instance.

    Parameters
    ----------
    name : str
        Template name
    props : dict
        Prop values keyed by field name. Rich-text props hold a nested
        :class:`Root`.

    """

    node_type: ClassVar[str] = "mdxJsxFlowElement"

    name: str
    props: dict[str, Any] = field(default_factory=dict)


@dataclass
class InvalidMarkdownElement(DocumentNode):
    """Sentinel for text that could not be parsed.

    Parameters
    ----------
    value : str
        The original text, returned verbatim when writing markdown
    message : str
        Description of the parse error
    position : dict or None
        ``{"line": int, "column": int}`` of the error, when known

    """

    node_type: ClassVar[str] = "invalid_markdown"

    value: str = ""
    message: str = ""
    position: Optional[dict[str, int]] = None


BlockNode = Union[
    HeadingElement,
    ParagraphElement,
    CodeBlockElement,
    BlockquoteElement,
    ListElement,
    ListItemElement,
    ListItemContentElement,
    TableElement,
    ImageElement,
    HtmlElement,
    HorizontalRuleElement,
    ComponentElement,
    InvalidMarkdownElement,
]


@dataclass
class Root(DocumentNode):
    """Root of a document tree."""

    node_type: ClassVar[str] = "root"

    children: list[BlockNode] = field(default_factory=list)


def empty_root() -> Root:
    """Return the tree for empty input: a single empty paragraph."""
    return Root(children=[ParagraphElement(children=[TextLeaf(text="")])])
