#  Copyright (c) 2025 Tom Villani, Ph.D.
#
# src/mdx_richtext/extensions/shortcodes.py
"""Shortcode support.

Shortcodes are template invocations written with custom delimiters, for
example Hugo's ``{{< signature name="Ann" >}}``. This module provides:

- :func:`shortcode_plugin`, which teaches mistune to recognize the shortcodes
  of a field's templates. A template with a rich-text ``children`` field is a
  *block* shortcode wrapping content up to ``{{< /name >}}``; any other is a
  *leaf* shortcode, usable on its own line or inline.
- :func:`format_directive` and :func:`rewrite_directive_delimiters`. The
  renderer writes directives with private-use delimiters, which are then
  rewritten into each template's own delimiters.
- :func:`shortcode_to_jsx` and :func:`jsx_to_shortcode`, standalone text
  rewrites between shortcode and JSX syntax for a single template.

Shortcode attributes are strings only: ``key="value"`` pairs plus at most one
positional value, exposed under the ``_value`` key.
"""

from __future__ import annotations

import logging
import re
from typing import Any, Callable, Iterable, Mapping

from mdx_richtext.constants import DIRECTIVE_CLOSE, DIRECTIVE_OPEN, UNKEYED_ATTRIBUTE_NAME
from mdx_richtext.exceptions import ConfigurationError, NestingDepthError, RichTextParseError
from mdx_richtext.extensions.jsx import state_depth
from mdx_richtext.options.richtext import ShortcodePattern, Template

logger = logging.getLogger(__name__)

SHORTCODE_LEAF_TOKEN = "shortcode_leaf"
SHORTCODE_CONTAINER_TOKEN = "shortcode_container"
SHORTCODE_INLINE_TOKEN = "shortcode_inline"

_ATTRIBUTE_TOKEN_RE = re.compile(
    r"""(?:(?P<key>[\w.:-]+)\s*=\s*)?"""
    r"""(?:"(?P<double>(?:\\.|[^"\\])*)"|'(?P<single>(?:\\.|[^'\\])*)'|(?P<bare>[^\s"'=]+))"""
)
_UNESCAPE_RE = re.compile(r"\\(.)")
_INTERNAL_DIRECTIVE_RE = re.compile(
    re.escape(DIRECTIVE_OPEN) + r"(?P<close>/)?(?P<name>[^\s" + DIRECTIVE_CLOSE + r"]+)(?P<attrs>[^"
    + DIRECTIVE_CLOSE
    + r"]*)"
    + re.escape(DIRECTIVE_CLOSE)
)


def parse_shortcode_attributes(text: str) -> dict[str, str]:
    """Parse the attribute section of a shortcode.

    Parameters
    ----------
    text : str
        Everything between the shortcode name and the closing delimiter

    Returns
    -------
    dict of str to str
        Attributes in source order; a positional value is stored as ``_value``

    Raises
    ------
    RichTextParseError
        On unparseable text or more than one positional value

    Examples
    --------
    >>> parse_shortcode_attributes(' "bar123" size="large"')
    {'_value': 'bar123', 'size': 'large'}

    """
    attributes: dict[str, str] = {}
    cursor = 0
    while True:
        while cursor < len(text) and text[cursor].isspace():
            cursor += 1
        if cursor >= len(text):
            return attributes
        m = _ATTRIBUTE_TOKEN_RE.match(text, cursor)
        if m is None:
            raise RichTextParseError(f"Unable to parse shortcode attributes: {text.strip()!r}")
        raw = next(g for g in (m.group("double"), m.group("single"), m.group("bare")) if g is not None)
        value = _UNESCAPE_RE.sub(r"\1", raw)
        key = m.group("key")
        if key is None:
            if UNKEYED_ATTRIBUTE_NAME in attributes:
                raise RichTextParseError("Shortcodes accept at most one positional value")
            key = UNKEYED_ATTRIBUTE_NAME
        attributes[key] = value
        cursor = m.end()


def _quote(value: str) -> str:
    return '"' + value.replace("\\", "\\\\").replace('"', '\\"') + '"'


def format_shortcode_attributes(attributes: Mapping[str, str]) -> str:
    """Format attributes for a shortcode; the positional value comes first.

    Examples
    --------
    >>> format_shortcode_attributes({"size": "large", "_value": "bar123"})
    '"bar123" size="large"'

    """
    parts = []
    if UNKEYED_ATTRIBUTE_NAME in attributes:
        parts.append(_quote(attributes[UNKEYED_ATTRIBUTE_NAME]))
    parts.extend(f"{key}={_quote(value)}" for key, value in attributes.items() if key != UNKEYED_ATTRIBUTE_NAME)
    return " ".join(parts)


def format_directive(name: str, attributes: Mapping[str, str], closing: bool = False) -> str:
    """Write a directive tag using the internal private-use delimiters."""
    if closing:
        return f"{DIRECTIVE_OPEN}/{name}{DIRECTIVE_CLOSE}"
    formatted = format_shortcode_attributes(attributes)
    return f"{DIRECTIVE_OPEN}{name}{' ' + formatted if formatted else ''}{DIRECTIVE_CLOSE}"


def rewrite_directive_delimiters(text: str, patterns: Iterable[ShortcodePattern]) -> str:
    """Replace internal directive delimiters with each template's own.

    Parameters
    ----------
    text : str
        Rendered markdown containing internal directives
    patterns : iterable of ShortcodePattern
        Shortcode syntaxes; the first declared pattern for a template wins

    Returns
    -------
    str
        Markdown with shortcodes written as ``START name attrs END``

    Raises
    ------
    ConfigurationError
        If a directive names a template that has no shortcode syntax

    """
    by_template: dict[str, ShortcodePattern] = {}
    for pattern in patterns:
        by_template.setdefault(pattern.template_name, pattern)

    def replace(m: re.Match) -> str:
        pattern = by_template.get(m.group("name"))
        if pattern is None:
            raise ConfigurationError(
                f"No shortcode template found for directive '{m.group('name')}'",
                parameter_name="templates",
                parameter_value=m.group("name"),
            )
        if m.group("close"):
            return f"{pattern.start} /{pattern.name} {pattern.end}"
        attrs = m.group("attrs").strip()
        return f"{pattern.start} {pattern.name}{' ' + attrs if attrs else ''} {pattern.end}"

    return _INTERNAL_DIRECTIVE_RE.sub(replace, text)


def _open_tag_source(pattern: ShortcodePattern, capture: bool) -> str:
    attrs = r"(?P<attrs>[^\n]*?)" if capture else r"[^\n]*?"
    return (
        rf"{re.escape(pattern.start)}[ \t]*{re.escape(pattern.name)}"
        rf"(?=[ \t]|{re.escape(pattern.end)}){attrs}{re.escape(pattern.end)}"
    )


def _find_closing_shortcode(src: str, pattern: ShortcodePattern, pos: int) -> tuple[int, int] | None:
    tag_re = re.compile(
        rf"(?P<open>{_open_tag_source(pattern, capture=False)})"
        rf"|(?P<close>{re.escape(pattern.start)}\s*/\s*{re.escape(pattern.name)}\s*{re.escape(pattern.end)})"
    )
    depth = 1
    for m in tag_re.finditer(src, pos):
        depth += 1 if m.group("open") else -1
        if depth == 0:
            return m.start(), m.end()
    return None


def _line_end(src: str, pos: int) -> int:
    end = src.find("\n", pos)
    return len(src) if end == -1 else end


def shortcode_plugin(patterns: Iterable[ShortcodePattern], max_depth: int = 64) -> Callable[[Any], None]:
    """Build a mistune plugin recognizing the given shortcodes.

    Parameters
    ----------
    patterns : iterable of ShortcodePattern
        Shortcode syntaxes in declaration order; earlier patterns win when
        several match at the same position
    max_depth : int
        Maximum nesting of block shortcodes

    Returns
    -------
    callable
        Plugin taking a ``mistune.Markdown`` instance

    """
    patterns = list(patterns)

    def make_block_parser(pattern: ShortcodePattern) -> Callable[..., int | None]:
        open_re = re.compile(rf"[ \t]*{_open_tag_source(pattern, capture=True)}")

        def parse_block(block: Any, m: re.Match, state: Any) -> int | None:
            src = state.src
            opening = open_re.match(src, m.start())
            attributes = parse_shortcode_attributes(opening.group("attrs"))
            line_end = _line_end(src, opening.end())
            after_open = min(line_end + 1, len(src))

            if pattern.placement == "leaf":
                state.append_token(
                    {
                        "type": SHORTCODE_LEAF_TOKEN,
                        "attrs": {"name": pattern.template_name, "attributes": attributes},
                    }
                )
                return after_open

            close = _find_closing_shortcode(src, pattern, after_open)
            if close is None:
                logger.debug(f"No closing tag for shortcode '{pattern.name}', keeping it as text")
                return None
            if state_depth(state) + 1 > max_depth:
                raise NestingDepthError(max_depth)

            children: list[dict[str, Any]] = []
            inner = src[after_open : close[0]]
            if inner.strip():
                child = state.child_state(inner if inner.endswith("\n") else inner + "\n")
                block.parse(child)
                children = child.tokens
            state.append_token(
                {
                    "type": SHORTCODE_CONTAINER_TOKEN,
                    "attrs": {"name": pattern.template_name, "attributes": attributes},
                    "children": children,
                }
            )
            close_line_end = _line_end(src, close[1])
            if src[close[1] : close_line_end].strip():
                return close[1]
            return min(close_line_end + 1, len(src))

        return parse_block

    def make_inline_parser(pattern: ShortcodePattern) -> Callable[..., int]:
        open_re = re.compile(_open_tag_source(pattern, capture=True))

        def parse_inline(inline: Any, m: re.Match, state: Any) -> int:
            opening = open_re.match(state.src, m.start())
            state.append_token(
                {
                    "type": SHORTCODE_INLINE_TOKEN,
                    "attrs": {
                        "name": pattern.template_name,
                        "attributes": parse_shortcode_attributes(opening.group("attrs")),
                    },
                }
            )
            return opening.end()

        return parse_inline

    def plugin(md: Any) -> None:
        for index, pattern in enumerate(patterns):
            md.block.register(
                f"shortcode_{index}",
                rf"^ {{0,3}}{_open_tag_source(pattern, capture=False)}[ \t]*$",
                make_block_parser(pattern),
                before="raw_html",
            )
            if pattern.placement == "leaf":
                md.inline.register(
                    f"shortcode_inline_{index}",
                    _open_tag_source(pattern, capture=False),
                    make_inline_parser(pattern),
                    before="inline_html",
                )

    return plugin


def _legacy_parts(template: Template) -> tuple[str, str, str, bool, bool]:
    if template.match is None:
        raise ConfigurationError(
            f"Template '{template.name}' has no shortcode match", parameter_name="match", parameter_value=None
        )
    name = template.match.name or template.name
    unkeyed = template.field(UNKEYED_ATTRIBUTE_NAME) is not None
    has_children = template.placement == "block"
    return template.match.start, template.match.end, name, unkeyed, has_children


def shortcode_to_jsx(text: str, template: Template) -> str:
    """Rewrite every shortcode of ``template`` in ``text`` as a JSX element.

    Parameters
    ----------
    text : str
        Markdown text
    template : Template
        Template with a shortcode match

    Returns
    -------
    str
        Text with shortcodes replaced

    Examples
    --------
    >>> t = Template(name="signature", match=ShortcodeMatch(start="{{<", end=">}}"))
    >>> shortcode_to_jsx('{{< signature foo="bar123">}}', t)
    '<signature foo="bar123">\\n</signature>'

    """
    start, end, name, unkeyed, has_children = _legacy_parts(template)
    value = r"""['"]?(.*?)['"]?""" if unkeyed else r"(.*?)"
    regex = rf"{re.escape(start)}\s*{re.escape(name)}[\s]+{value}[\s]*{re.escape(end)}"
    if has_children:
        regex += rf"((?:.|\n)*){re.escape(start)}\s/\s*{re.escape(name)}[\s]*{re.escape(end)}"

    def replace(m: re.Match) -> str:
        attrs = m.group(1) or ""
        opening = f'<{template.name} _value="{attrs}">' if unkeyed else f"<{template.name} {attrs}>"
        body = (m.group(2) or "") if has_children else "\n"
        return f"{opening}{body}</{template.name}>"

    return re.sub(regex, replace, text)


def jsx_to_shortcode(text: str, template: Template) -> str:
    """Rewrite every JSX element of ``template`` in ``text`` as a shortcode.

    The inverse of :func:`shortcode_to_jsx`.

    Examples
    --------
    >>> t = Template(name="signature", match=ShortcodeMatch(start="{{<", end=">}}"))
    >>> jsx_to_shortcode('<signature foo="bar123">\\n</signature>', t)
    '{{< signature foo="bar123" >}}'

    """
    start, end, name, unkeyed, has_children = _legacy_parts(template)
    attrs = r"(?:_value=(.*?))?" if unkeyed else r"(.+?)?"
    regex = (
        rf"<[\s]*{re.escape(template.name)}[\s]*{attrs}[\s]*>"
        rf"[\s]*((?:.|\n)*?)[\s]*</[\s]*{re.escape(template.name)}[\s]*>"
    )

    def replace(m: re.Match) -> str:
        value = m.group(1) or ""
        opening = f"{start} {name} {value} {end}" if value else f"{start} {name} {end}"
        if has_children:
            return f"{opening}\n{m.group(2) or ''}\n{start} /{name} {end}"
        return opening

    return re.sub(regex, replace, text)
