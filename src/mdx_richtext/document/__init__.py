#  Copyright (c) 2025 Tom Villani, Ph.D.
#
# src/mdx_richtext/document/__init__.py
"""Rich document tree and its editor JSON form."""

from mdx_richtext.document.nodes import (
    BlockquoteElement,
    BreakElement,
    CodeBlockElement,
    ComponentElement,
    ComponentInlineElement,
    DocumentNode,
    HeadingElement,
    HorizontalRuleElement,
    HtmlElement,
    HtmlInlineElement,
    ImageElement,
    InvalidMarkdownElement,
    LinkElement,
    LinkTarget,
    ListElement,
    ListItemContentElement,
    ListItemElement,
    ParagraphElement,
    Root,
    TableCellElement,
    TableElement,
    TableRowElement,
    TextLeaf,
    empty_root,
)
from mdx_richtext.document.serialization import (
    dict_to_document,
    document_to_dict,
    document_to_json,
    json_to_document,
)

__all__ = [
    "BlockquoteElement",
    "BreakElement",
    "CodeBlockElement",
    "ComponentElement",
    "ComponentInlineElement",
    "DocumentNode",
    "HeadingElement",
    "HorizontalRuleElement",
    "HtmlElement",
    "HtmlInlineElement",
    "ImageElement",
    "InvalidMarkdownElement",
    "LinkElement",
    "LinkTarget",
    "ListElement",
    "ListItemContentElement",
    "ListItemElement",
    "ParagraphElement",
    "Root",
    "TableCellElement",
    "TableElement",
    "TableRowElement",
    "TextLeaf",
    "empty_root",
    "dict_to_document",
    "document_to_dict",
    "document_to_json",
    "json_to_document",
]
