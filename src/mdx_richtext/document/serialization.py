#  Copyright (c) 2025 Tom Villani, Ph.D.
#
# src/mdx_richtext/document/serialization.py
"""JSON serialization and deserialization for the rich document tree.

The dictionary shape matches what the editor stores: every element carries
a ``type`` and a ``children`` list, void elements (images, rules, code
blocks, components) carry a single empty text child as a placeholder, and
text leaves list only the formatting flags that are set.

Examples
--------
    >>> from mdx_richtext.document.nodes import ParagraphElement, Root, TextLeaf
    >>> doc = Root(children=[ParagraphElement(children=[TextLeaf(text="Hi", bold=True)])])
    >>> document_to_dict(doc)
    {'type': 'root', 'children': [{'type': 'p', 'children': [{'type': 'text', 'text': 'Hi', 'bold': True}]}]}

"""

from __future__ import annotations

import json
import logging
import re
from typing import Any, Callable

from mdx_richtext.constants import TEXT_FLAGS
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
from mdx_richtext.exceptions import UnsupportedNodeError, ValidationError

logger = logging.getLogger(__name__)

_HEADING_TYPE_RE = re.compile(r"^h([1-6])$")


def _placeholder() -> list[dict[str, Any]]:
    return [{"type": "text", "text": ""}]


def _serialize_children(node: Any) -> list[dict[str, Any]]:
    return [document_to_dict(child) for child in node.children]


def _serialize_prop_value(value: Any) -> Any:
    if isinstance(value, DocumentNode):
        return document_to_dict(value)
    if isinstance(value, list):
        return [_serialize_prop_value(item) for item in value]
    if isinstance(value, dict):
        return {key: _serialize_prop_value(item) for key, item in value.items()}
    return value


def _serialize_text(node: TextLeaf) -> dict[str, Any]:
    result: dict[str, Any] = {"type": "text", "text": node.text}
    for flag in TEXT_FLAGS:
        if getattr(node, flag):
            result[flag] = True
    return result


def _serialize_link(node: LinkElement) -> dict[str, Any]:
    result: dict[str, Any] = {"type": "a", "url": node.url}
    if node.title is not None:
        result["title"] = node.title
    result["children"] = _serialize_children(node)
    return result


def _serialize_image(node: ImageElement) -> dict[str, Any]:
    return {"type": "img", "url": node.url, "alt": node.alt, "caption": node.caption, "children": _placeholder()}


def _serialize_component(node: ComponentElement | ComponentInlineElement) -> dict[str, Any]:
    return {
        "type": node.type,
        "name": node.name,
        "props": _serialize_prop_value(node.props),
        "children": _placeholder(),
    }


def _serialize_table(node: TableElement) -> dict[str, Any]:
    result: dict[str, Any] = {"type": "table", "children": _serialize_children(node)}
    if node.align is not None:
        result["props"] = {"align": list(node.align)}
    return result


def _serialize_container(node: Any) -> dict[str, Any]:
    return {"type": node.type, "children": _serialize_children(node)}


_SERIALIZATION_DISPATCH: dict[type, Callable[[Any], dict[str, Any]]] = {
    Root: _serialize_container,
    HeadingElement: _serialize_container,
    ParagraphElement: _serialize_container,
    BlockquoteElement: _serialize_container,
    ListElement: _serialize_container,
    ListItemElement: _serialize_container,
    ListItemContentElement: _serialize_container,
    TableRowElement: _serialize_container,
    TableCellElement: _serialize_container,
    TableElement: _serialize_table,
    CodeBlockElement: lambda n: {"type": "code_block", "lang": n.lang, "value": n.value, "children": _placeholder()},
    HtmlElement: lambda n: {"type": "html", "value": n.value, "children": _placeholder()},
    HorizontalRuleElement: lambda n: {"type": "hr", "children": _placeholder()},
    ImageElement: _serialize_image,
    ComponentElement: _serialize_component,
    InvalidMarkdownElement: lambda n: {
        "type": "invalid_markdown",
        "value": n.value,
        "message": n.message,
        "position": n.position,
        "children": _placeholder(),
    },
    TextLeaf: _serialize_text,
    LinkElement: _serialize_link,
    BreakElement: lambda n: {"type": "break", "children": _placeholder()},
    HtmlInlineElement: lambda n: {"type": "html_inline", "value": n.value, "children": _placeholder()},
    ComponentInlineElement: _serialize_component,
}


def document_to_dict(node: DocumentNode) -> dict[str, Any]:
    """Convert a document node to its editor dictionary representation.

    Parameters
    ----------
    node : DocumentNode
        Node to convert

    Returns
    -------
    dict
        Dictionary representation of the node

    Raises
    ------
    UnsupportedNodeError
        If the node class has no serializer

    """
    serializer = _SERIALIZATION_DISPATCH.get(type(node))
    if serializer is None:
        raise UnsupportedNodeError(type(node).__name__, "Serialization")
    return serializer(node)


def _deserialize_children(data: dict[str, Any], strict_mode: bool) -> list[Any]:
    children = []
    for child in data.get("children") or []:
        node = dict_to_document(child, strict_mode=strict_mode)
        if node is not None:
            children.append(node)
    return children


def _deserialize_prop_value(value: Any, strict_mode: bool) -> Any:
    if isinstance(value, dict):
        if value.get("type") == "root":
            return dict_to_document(value, strict_mode=strict_mode)
        return {key: _deserialize_prop_value(item, strict_mode) for key, item in value.items()}
    if isinstance(value, list):
        return [_deserialize_prop_value(item, strict_mode) for item in value]
    return value


def _deserialize_text(data: dict[str, Any], strict_mode: bool) -> TextLeaf:
    return TextLeaf(text=data.get("text", ""), **{flag: bool(data.get(flag, False)) for flag in TEXT_FLAGS})


def _deserialize_component(data: dict[str, Any], strict_mode: bool) -> ComponentElement | ComponentInlineElement:
    cls = ComponentInlineElement if data.get("type") == "mdxJsxTextElement" else ComponentElement
    return cls(name=data.get("name", ""), props=_deserialize_prop_value(data.get("props") or {}, strict_mode))


def _deserialize_table(data: dict[str, Any], strict_mode: bool) -> TableElement:
    props = data.get("props") or {}
    align = props.get("align")
    return TableElement(children=_deserialize_children(data, strict_mode), align=list(align) if align else None)


_DESERIALIZATION_DISPATCH: dict[str, Callable[[dict[str, Any], bool], Any]] = {
    "root": lambda d, s: Root(children=_deserialize_children(d, s)),
    "p": lambda d, s: ParagraphElement(children=_deserialize_children(d, s)),
    "blockquote": lambda d, s: BlockquoteElement(children=_deserialize_children(d, s)),
    "ul": lambda d, s: ListElement(ordered=False, children=_deserialize_children(d, s)),
    "ol": lambda d, s: ListElement(ordered=True, children=_deserialize_children(d, s)),
    "li": lambda d, s: ListItemElement(children=_deserialize_children(d, s)),
    "lic": lambda d, s: ListItemContentElement(children=_deserialize_children(d, s)),
    "table": _deserialize_table,
    "tr": lambda d, s: TableRowElement(children=_deserialize_children(d, s)),
    "td": lambda d, s: TableCellElement(children=_deserialize_children(d, s)),
    "code_block": lambda d, s: CodeBlockElement(value=d.get("value", ""), lang=d.get("lang")),
    "html": lambda d, s: HtmlElement(value=d.get("value", "")),
    "hr": lambda d, s: HorizontalRuleElement(),
    "img": lambda d, s: ImageElement(url=d.get("url", ""), alt=d.get("alt"), caption=d.get("caption")),
    "mdxJsxFlowElement": _deserialize_component,
    "mdxJsxTextElement": _deserialize_component,
    "invalid_markdown": lambda d, s: InvalidMarkdownElement(
        value=d.get("value", ""), message=d.get("message", ""), position=d.get("position")
    ),
    "text": _deserialize_text,
    "a": lambda d, s: LinkElement(url=d.get("url", ""), title=d.get("title"), children=_deserialize_children(d, s)),
    "break": lambda d, s: BreakElement(),
    "html_inline": lambda d, s: HtmlInlineElement(value=d.get("value", "")),
}


def dict_to_document(data: dict[str, Any], strict_mode: bool = True) -> Any:
    """Convert an editor dictionary back to a document node.

    Parameters
    ----------
    data : dict
        Dictionary representation of a node. A dictionary without a ``type``
        key is read as a text leaf.
    strict_mode : bool, default True
        If True, raise on unknown node types. If False, log a warning and
        skip them.

    Returns
    -------
    DocumentNode or None
        Reconstructed node, or None for a skipped unknown node

    Raises
    ------
    ValidationError
        If ``data`` is not a dictionary
    UnsupportedNodeError
        If the node type is unknown and strict_mode is True

    """
    if not isinstance(data, dict):
        raise ValidationError(f"Expected a dictionary, got {type(data).__name__}", parameter_value=data)

    node_type = data.get("type")
    if node_type is None:
        return _deserialize_text(data, strict_mode)

    heading = _HEADING_TYPE_RE.match(str(node_type))
    if heading:
        return HeadingElement(depth=int(heading.group(1)), children=_deserialize_children(data, strict_mode))

    deserializer = _DESERIALIZATION_DISPATCH.get(node_type)
    if deserializer is None:
        if strict_mode:
            raise UnsupportedNodeError(str(node_type), "Deserialization")
        logger.warning(f"Unknown document node type '{node_type}', skipping")
        return None
    return deserializer(data, strict_mode)


def document_to_json(node: DocumentNode, indent: int | None = None) -> str:
    """Serialize a document node to a JSON string.

    Parameters
    ----------
    node : DocumentNode
        Node to serialize
    indent : int or None, default None
        Indentation for pretty printing

    Returns
    -------
    str
        JSON text; non-ASCII characters are kept as is

    """
    return json.dumps(document_to_dict(node), indent=indent, ensure_ascii=False)


def json_to_document(json_str: str, strict_mode: bool = True) -> Any:
    """Deserialize a JSON string produced by :func:`document_to_json`."""
    try:
        data = json.loads(json_str)
    except json.JSONDecodeError as e:
        raise ValidationError(f"Invalid document JSON: {e}", original_error=e) from e
    return dict_to_document(data, strict_mode=strict_mode)
