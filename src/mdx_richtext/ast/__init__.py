#  Copyright (c) 2025 Tom Villani, Ph.D.
#
# src/mdx_richtext/ast/__init__.py
"""Generic markdown tree shared by the parser and the renderer."""

from mdx_richtext.ast.nodes import (
    BlockQuote,
    Code,
    CodeBlock,
    ContainerDirective,
    Document,
    Emphasis,
    Heading,
    HTMLBlock,
    HTMLInline,
    Image,
    LeafDirective,
    LineBreak,
    Link,
    List,
    ListItem,
    MdxExpression,
    MdxJsxAttribute,
    MdxJsxFlowElement,
    MdxJsxTextElement,
    Node,
    Paragraph,
    Strikethrough,
    Strong,
    Table,
    TableCell,
    TableRow,
    Text,
    TextDirective,
    ThematicBreak,
    get_node_children,
)
from mdx_richtext.ast.visitors import NodeVisitor

__all__ = [
    "BlockQuote",
    "Code",
    "CodeBlock",
    "ContainerDirective",
    "Document",
    "Emphasis",
    "Heading",
    "HTMLBlock",
    "HTMLInline",
    "Image",
    "LeafDirective",
    "LineBreak",
    "Link",
    "List",
    "ListItem",
    "MdxExpression",
    "MdxJsxAttribute",
    "MdxJsxFlowElement",
    "MdxJsxTextElement",
    "Node",
    "NodeVisitor",
    "Paragraph",
    "Strikethrough",
    "Strong",
    "Table",
    "TableCell",
    "TableRow",
    "Text",
    "TextDirective",
    "ThematicBreak",
    "get_node_children",
]
