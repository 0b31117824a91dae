#  Copyright (c) 2025 Tom Villani, Ph.D.
#
# src/mdx_richtext/converters/marks.py
"""Conversion between flag-based and wrapper-based inline formatting.

The document tree marks formatting with flags on each text leaf
(``bold``, ``italic``, ``code``, ``strikethrough``); markdown nests wrapper
nodes instead. This module converts in both directions.

:func:`expand_marks` (document to markdown) groups consecutive leaves
sharing a mark under a single wrapper. For the leading run of leaves that
share at least one mark with the first leaf, the mark carried by the most
consecutive leaves becomes the outermost wrapper, ties going to the order
strong, emphasis, inline code, strikethrough. The wrapper covers only that
prefix and the rest of the siblings is processed afresh, so every leaf ends
up inside exactly the wrappers matching its flags::

    [a(bold,italic), b(bold)]  ->  Strong[Emphasis[a], b]

:func:`contract_marks` (markdown to document) pushes wrapper nodes down into
flags on the leaves and merges adjacent leaves with equal flags.

Both functions receive a callback that converts any node they do not handle
themselves (links, images, components and so on).
"""

from __future__ import annotations

import logging
from dataclasses import replace
from typing import Any, Callable, Sequence

from mdx_richtext.ast.nodes import Code, Emphasis, Link, Node, Strikethrough, Strong, Text
from mdx_richtext.constants import MARK_FLAGS, MARK_PRIORITY, MarkKind
from mdx_richtext.document.nodes import InlineNode, LinkElement, LinkTarget, TextLeaf
from mdx_richtext.exceptions import MarkConflictError

logger = logging.getLogger(__name__)

_WRAPPERS: dict[MarkKind, Callable[[list[Node]], Node]] = {
    "strong": lambda content: Strong(content=content),
    "emphasis": lambda content: Emphasis(content=content),
    "delete": lambda content: Strikethrough(content=content),
}

_FLAG_FOR_WRAPPER: dict[type, str] = {
    Strong: MARK_FLAGS["strong"],
    Emphasis: MARK_FLAGS["emphasis"],
    Strikethrough: MARK_FLAGS["delete"],
}


def get_text_marks(node: Any) -> list[MarkKind]:
    """Return the marks of a text leaf in priority order (empty for other nodes)."""
    if not isinstance(node, TextLeaf):
        return []
    return [mark for mark in MARK_PRIORITY if getattr(node, MARK_FLAGS[mark])]


def _without_mark(leaf: TextLeaf, mark: MarkKind) -> TextLeaf:
    return replace(leaf, **{MARK_FLAGS[mark]: False})


def _fold_trivial_links(children: Sequence[InlineNode]) -> list[InlineNode]:
    """Fold each link whose only child is a text leaf onto that leaf.

    The leaf keeps its own flags, so it can join a run of neighbouring
    formatted leaves; the link is written around its text when emitted.
    """
    folded: list[InlineNode] = []
    for child in children:
        if isinstance(child, LinkElement) and len(child.children) == 1 and isinstance(child.children[0], TextLeaf):
            folded.append(replace(child.children[0], pending_link=LinkTarget(child.url, child.title)))
        else:
            folded.append(child)
    return folded


def _emit_leaf(leaf: TextLeaf, content: Node) -> Node:
    if leaf.pending_link is not None:
        return Link(url=leaf.pending_link.url, content=[content], title=leaf.pending_link.title)
    return content


def _select_mark(run: Sequence[TextLeaf], marks: list[MarkKind]) -> tuple[MarkKind, int]:
    """Pick the mark covering the longest prefix of ``run``.

    Returns
    -------
    tuple
        The chosen mark and the number of leading leaves carrying it

    """
    best_mark, best_count = marks[0], 0
    for mark in marks:
        count = 1
        while count < len(run) and mark in get_text_marks(run[count]):
            count += 1
        if count > best_count:
            best_mark, best_count = mark, count
    return best_mark, best_count


def _emit_code(leaf: TextLeaf) -> Node:
    """Emit a code leaf, wrapping it in its remaining marks."""
    node = _emit_leaf(leaf, Code(content=leaf.text))
    for mark in reversed([m for m in get_text_marks(leaf) if m != "inlineCode"]):
        node = _WRAPPERS[mark]([node])
    return node


def _expand(nodes: list[InlineNode], convert_node: Callable[[InlineNode], Node]) -> list[Node]:
    result: list[Node] = []
    index = 0
    while index < len(nodes):
        first = nodes[index]
        if not isinstance(first, TextLeaf):
            result.append(convert_node(first))
            index += 1
            continue

        marks = get_text_marks(first)
        if not marks:
            result.append(_emit_leaf(first, Text(content=first.text)))
            index += 1
            continue

        run_end = index + 1
        while run_end < len(nodes) and set(marks) & set(get_text_marks(nodes[run_end])):
            run_end += 1
        run = nodes[index:run_end]

        mark, count = _select_mark(run, marks)
        if mark == "inlineCode":
            if count > 1:
                raise MarkConflictError()
            result.append(_emit_code(first))
            index += 1
            continue

        prefix = [_without_mark(leaf, mark) for leaf in run[:count]]
        result.append(_WRAPPERS[mark](_expand(prefix, convert_node)))
        index += count
    return result


def expand_marks(children: Sequence[InlineNode], convert_node: Callable[[InlineNode], Node]) -> list[Node]:
    """Convert flagged document inline nodes into nested markdown wrappers.

    Parameters
    ----------
    children : sequence of InlineNode
        Inline children of one document element
    convert_node : callable
        Converts any child that is not a text leaf (links, images, breaks,
        inline components)

    Returns
    -------
    list of Node
        Markdown inline nodes

    Raises
    ------
    MarkConflictError
        If inline code would have to contain other formatted text

    Examples
    --------
    >>> expand_marks([TextLeaf("a", bold=True, italic=True), TextLeaf("b", bold=True)], convert)
    [Strong(content=[Emphasis(content=[Text(content='a')]), Text(content='b')])]

    """
    return _expand(_fold_trivial_links(children), convert_node)


def _merge_adjacent_leaves(leaves: list[InlineNode]) -> list[InlineNode]:
    merged: list[InlineNode] = []
    for leaf in leaves:
        previous = merged[-1] if merged else None
        if isinstance(leaf, TextLeaf) and isinstance(previous, TextLeaf) and previous.flags == leaf.flags:
            merged[-1] = replace(previous, text=previous.text + leaf.text)
        else:
            merged.append(leaf)
    return merged


def contract_marks(
    nodes: Sequence[Node],
    convert_node: Callable[[Node], InlineNode],
    flags: frozenset[str] = frozenset(),
) -> list[InlineNode]:
    """Convert nested markdown wrappers into flags on document text leaves.

    Parameters
    ----------
    nodes : sequence of Node
        Markdown inline nodes
    convert_node : callable
        Converts inline nodes other than text, code, wrappers and links
    flags : frozenset of str
        Flags inherited from enclosing wrappers

    Returns
    -------
    list of InlineNode
        Document inline nodes, adjacent leaves with equal flags merged

    """
    leaves: list[InlineNode] = []
    for node in nodes:
        if isinstance(node, Text):
            leaves.append(TextLeaf(text=node.content, **{flag: True for flag in flags}))
        elif isinstance(node, Code):
            leaves.append(TextLeaf(text=node.content, code=True, **{flag: True for flag in flags - {"code"}}))
        elif type(node) in _FLAG_FOR_WRAPPER:
            leaves.extend(contract_marks(node.content, convert_node, flags | {_FLAG_FOR_WRAPPER[type(node)]}))
        elif isinstance(node, Link):
            children = contract_marks(node.content, convert_node, flags) or [TextLeaf(text="")]
            leaves.append(LinkElement(url=node.url, title=node.title, children=children))
        else:
            leaves.append(convert_node(node))
    return _merge_adjacent_leaves(leaves)
