#  Copyright (c) 2025 Tom Villani, Ph.D.
#
# src/mdx_richtext/extensions/jsx.py
"""MDX JSX support for the mistune parser.

This module adds two rules to a mistune ``Markdown`` instance:

- a block rule for JSX flow elements, i.e. elements whose opening tag starts
  a line. Their content is parsed as nested markdown.
- an inline rule for JSX text elements inside a paragraph.

Only component names are recognized: any name starting with an upper-case
letter plus the configured template names. Other tags such as ``<div>`` are
left to mistune's raw HTML handling.

Malformed JSX raises :class:`~mdx_richtext.exceptions.RichTextParseError`;
``parse`` recovers from it by returning an invalid-markdown sentinel.
"""

from __future__ import annotations

import logging
import re
import textwrap
from dataclasses import dataclass, field
from typing import Any, Callable, Iterable

from mdx_richtext.ast.nodes import MdxExpression, MdxJsxAttribute
from mdx_richtext.exceptions import NestingDepthError, RichTextParseError, position_from_offset

logger = logging.getLogger(__name__)

_TAG_NAME_RE = re.compile(r"[A-Za-z_$][\w$.:-]*")
_ATTRIBUTE_NAME_RE = re.compile(r"[A-Za-z_$:][\w$.:-]*")
_COMPONENT_NAME = r"[A-Z][\w.]*"

JSX_FLOW_TOKEN = "mdx_jsx_flow"
JSX_TEXT_TOKEN = "mdx_jsx_text"


@dataclass
class JsxTag:
    """An opening JSX tag located in source text.

    Parameters
    ----------
    name : str
        Element name
    attributes : list of MdxJsxAttribute
        Attributes in source order
    self_closing : bool
        Whether the tag ends with ``/>``
    start : int
        Offset of ``<``
    end : int
        Offset just past ``>``

    """

    name: str
    attributes: list[MdxJsxAttribute] = field(default_factory=list)
    self_closing: bool = False
    start: int = 0
    end: int = 0


def _error(message: str, src: str, offset: int) -> RichTextParseError:
    return RichTextParseError(message, position=position_from_offset(src, offset))


def _skip_whitespace(src: str, pos: int) -> int:
    while pos < len(src) and src[pos].isspace():
        pos += 1
    return pos


def _scan_fragment(src: str, pos: int) -> int:
    """Return the offset just past the ``</>`` closing the fragment at ``pos``."""
    depth = 0
    marker = re.compile(r"<>|</>")
    for m in marker.finditer(src, pos):
        depth += 1 if m.group(0) == "<>" else -1
        if depth == 0:
            return m.end()
    raise _error("Unterminated JSX fragment in attribute expression", src, pos)


def _scan_expression(src: str, pos: int) -> tuple[str, int]:
    """Scan a ``{...}`` expression starting at ``pos``.

    Returns
    -------
    tuple[str, int]
        The expression source without braces, and the offset past ``}``

    """
    inner_start = pos + 1
    cursor = _skip_whitespace(src, inner_start)
    if src.startswith("<>", cursor):
        cursor = _skip_whitespace(src, _scan_fragment(src, cursor))
        if cursor >= len(src) or src[cursor] != "}":
            raise _error("Expected '}' after JSX fragment", src, cursor)
        return src[inner_start:cursor], cursor + 1

    depth = 0
    cursor = pos
    while cursor < len(src):
        char = src[cursor]
        if char in "\"'`":
            cursor += 1
            while cursor < len(src) and src[cursor] != char:
                cursor += 2 if src[cursor] == "\\" else 1
            if cursor >= len(src):
                break
        elif char == "{":
            depth += 1
        elif char == "}":
            depth -= 1
            if depth == 0:
                return src[inner_start:cursor], cursor + 1
        cursor += 1
    raise _error("Unterminated attribute expression", src, pos)


def scan_jsx_tag(src: str, pos: int) -> JsxTag:
    """Scan the opening tag starting at ``src[pos] == "<"``.

    Parameters
    ----------
    src : str
        Source text
    pos : int
        Offset of ``<``

    Returns
    -------
    JsxTag

    Raises
    ------
    RichTextParseError
        If the tag is malformed or unterminated

    """
    name_match = _TAG_NAME_RE.match(src, pos + 1)
    if name_match is None:
        raise _error("Expected a JSX element name", src, pos)

    attributes: list[MdxJsxAttribute] = []
    cursor = name_match.end()
    while True:
        cursor = _skip_whitespace(src, cursor)
        if cursor >= len(src):
            raise _error(f"Unterminated JSX tag <{name_match.group(0)}>", src, pos)
        if src.startswith("/>", cursor):
            return JsxTag(name_match.group(0), attributes, True, pos, cursor + 2)
        if src[cursor] == ">":
            return JsxTag(name_match.group(0), attributes, False, pos, cursor + 1)

        attr_match = _ATTRIBUTE_NAME_RE.match(src, cursor)
        if attr_match is None:
            raise _error(f"Unexpected character {src[cursor]!r} in JSX tag", src, cursor)
        cursor = _skip_whitespace(src, attr_match.end())
        if cursor >= len(src) or src[cursor] != "=":
            attributes.append(MdxJsxAttribute(attr_match.group(0), None))
            continue

        cursor = _skip_whitespace(src, cursor + 1)
        quote = src[cursor] if cursor < len(src) else ""
        if quote in ("\"", "'"):
            closing = src.find(quote, cursor + 1)
            if closing == -1:
                raise _error(f"Unterminated value for attribute '{attr_match.group(0)}'", src, cursor)
            attributes.append(MdxJsxAttribute(attr_match.group(0), src[cursor + 1 : closing]))
            cursor = closing + 1
        elif quote == "{":
            expression, cursor = _scan_expression(src, cursor)
            attributes.append(MdxJsxAttribute(attr_match.group(0), MdxExpression(expression)))
        else:
            raise _error(f"Expected a value for attribute '{attr_match.group(0)}'", src, cursor)


def find_closing_tag(src: str, name: str, pos: int) -> tuple[int, int] | None:
    """Find the tag closing element ``name``, honouring nested same-name elements.

    Parameters
    ----------
    src : str
        Source text
    name : str
        Element name
    pos : int
        Offset just past the opening tag

    Returns
    -------
    tuple[int, int] or None
        Start and end offsets of the closing tag, or None if there is none

    """
    tag_re = re.compile(rf"<(/)?\s*{re.escape(name)}(?=[\s/>])")
    close_re = re.compile(rf"</\s*{re.escape(name)}\s*>")
    depth = 1
    cursor = pos
    while True:
        m = tag_re.search(src, cursor)
        if m is None:
            return None
        if m.group(1):
            close = close_re.match(src, m.start())
            if close is None:
                raise _error(f"Malformed closing tag for <{name}>", src, m.start())
            depth -= 1
            if depth == 0:
                return close.start(), close.end()
            cursor = close.end()
        else:
            nested = scan_jsx_tag(src, m.start())
            if not nested.self_closing:
                depth += 1
            cursor = nested.end


def _line_end(src: str, pos: int) -> int:
    end = src.find("\n", pos)
    return len(src) if end == -1 else end


def state_depth(state: Any) -> int:
    """Number of enclosing block states above ``state``."""
    depth = 0
    parent = getattr(state, "parent", None)
    while parent is not None:
        depth += 1
        parent = getattr(parent, "parent", None)
    return depth


def _name_alternatives(names: Iterable[str]) -> str:
    return "|".join([_COMPONENT_NAME] + [re.escape(name) for name in names])


def jsx_plugin(names: Iterable[str] = (), max_depth: int = 64) -> Callable[[Any], None]:
    """Build a mistune plugin recognizing JSX components.

    Parameters
    ----------
    names : iterable of str
        Template names to recognize regardless of case
    max_depth : int
        Maximum nesting of flow elements

    Returns
    -------
    callable
        Plugin taking a ``mistune.Markdown`` instance

    """
    alternatives = _name_alternatives(names)
    block_pattern = rf"^ {{0,3}}<(?:{alternatives})(?=[\s/>])"
    inline_pattern = rf"<(?:{alternatives})(?=[\s/>])"

    def parse_flow(block: Any, m: re.Match, state: Any) -> int | None:
        src = state.src
        tag = scan_jsx_tag(src, src.index("<", m.start()))
        line_end = _line_end(src, tag.end)

        if tag.self_closing:
            if src[tag.end : line_end].strip():
                return None
            state.append_token(
                {"type": JSX_FLOW_TOKEN, "attrs": {"name": tag.name, "attributes": tag.attributes}, "children": []}
            )
            return min(line_end + 1, len(src))

        close = find_closing_tag(src, tag.name, tag.end)
        if close is None:
            raise _error(f"Expected a closing tag for <{tag.name}>", src, tag.start)
        close_line_end = _line_end(src, close[1])
        if close[0] < line_end and src[close[1] : close_line_end].strip():
            # element shares its line with other text, leave it to the inline rule
            return None

        if state_depth(state) + 1 > max_depth:
            raise NestingDepthError(max_depth)

        inner = textwrap.dedent(src[tag.end : close[0]]).strip("\n")
        children: list[dict[str, Any]] = []
        if inner.strip():
            child = state.child_state(inner + "\n")
            block.parse(child)
            children = child.tokens
        logger.debug(f"Parsed JSX flow element <{tag.name}> with {len(children)} child tokens")
        state.append_token(
            {"type": JSX_FLOW_TOKEN, "attrs": {"name": tag.name, "attributes": tag.attributes}, "children": children}
        )
        if src[close[1] : close_line_end].strip():
            return close[1]
        return min(close_line_end + 1, len(src))

    def parse_text(inline: Any, m: re.Match, state: Any) -> int:
        src = state.src
        tag = scan_jsx_tag(src, m.start())
        children: list[dict[str, Any]] = []
        end = tag.end
        if not tag.self_closing:
            close = find_closing_tag(src, tag.name, tag.end)
            if close is None:
                raise _error(f"Expected a closing tag for <{tag.name}>", src, tag.start)
            inner = src[tag.end : close[0]]
            if inner.strip():
                children = inline(inner, state.env)
            end = close[1]
        state.append_token(
            {"type": JSX_TEXT_TOKEN, "attrs": {"name": tag.name, "attributes": tag.attributes}, "children": children}
        )
        return end

    def plugin(md: Any) -> None:
        md.block.register(JSX_FLOW_TOKEN, block_pattern, parse_flow, before="raw_html")
        md.inline.register(JSX_TEXT_TOKEN, inline_pattern, parse_text, before="inline_html")

    return plugin
