#  Copyright (c) 2025 Tom Villani, Ph.D.
#
# src/mdx_richtext/renderers/markdown.py
"""Markdown rendering from AST.

This module provides the MarkdownRenderer class which converts the generic
markdown tree to markdown (or MDX) text.

The renderer uses the visitor pattern and keeps list nesting context while
traversing. Shortcode directives are written with private-use delimiters
that :func:`~mdx_richtext.extensions.shortcodes.rewrite_directive_delimiters`
later replaces with each template's own delimiters.

"""

from __future__ import annotations

import json
import re
from typing import Optional

from mistune.util import unescape

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
)
from mdx_richtext.ast.visitors import NodeVisitor
from mdx_richtext.constants import MARKDOWN_ALWAYS_ESCAPE
from mdx_richtext.extensions.shortcodes import format_directive
from mdx_richtext.options.markdown import MarkdownRendererOptions
from mdx_richtext.renderers.base import BaseRenderer, InlineContentMixin

_TAG_START_RE = re.compile(r"[A-Za-z/!?]")
_ORDERED_MARKER_RE = re.compile(r"^\d+$")
_URL_NEEDS_BRACKETS_RE = re.compile(r"[\s()<>]")
_CHARACTER_REFERENCE_RE = re.compile(r"&(?:#[0-9]{1,7}|#[xX][0-9a-fA-F]+|[A-Za-z][A-Za-z0-9]{0,31});")
_ATTENTION_NODES = (Emphasis, Strong, Strikethrough)


def _character_reference(char: str) -> str:
    return f"&#x{ord(char):X};"


def _is_punctuation(char: str) -> bool:
    return bool(char) and not char.isspace() and not char.isalnum()


def _outside_needs_reference(outside: str, inside: str, run_char: str) -> bool:
    """Whether a letter next to a delimiter keeps it from opening or closing."""
    if not outside.isalnum():
        return False
    if _is_punctuation(inside):
        return True
    return run_char == "_" and inside.isalnum()


def _encode_attention_edges(inner: str, before: str, after: str, run_char: str) -> tuple[str, bool, bool]:
    """Encode the characters around a delimiter pair that would break it.

    Parameters
    ----------
    inner : str
        Rendered content between the delimiters, not empty
    before, after : str
        Character just outside the opening and closing delimiter; empty at
        the edge of the enclosing content
    run_char : str
        Delimiter character

    Returns
    -------
    tuple of (str, bool, bool)
        The content with edge whitespace encoded, and whether the character
        before and the character after must be encoded

    """
    if inner[0].isspace():
        inner = _character_reference(inner[0]) + inner[1:]
    if inner[-1].isspace():
        inner = inner[:-1] + _character_reference(inner[-1])
    if run_char == "~":
        return inner, False, False
    # nested delimiters of the same character join this run
    head = inner.lstrip(run_char)[:1] or run_char
    tail = inner.rstrip(run_char)[-1:] or run_char
    return inner, _outside_needs_reference(before, head, run_char), _outside_needs_reference(after, tail, run_char)


class MarkdownRenderer(NodeVisitor, InlineContentMixin, BaseRenderer):
    """Render AST nodes to markdown text.

    Parameters
    ----------
    options : MarkdownRendererOptions or None, default = None
        Markdown formatting options

    Examples
    --------
    Basic usage:

        >>> from mdx_richtext.ast import Document, Heading, Text
        >>> from mdx_richtext.renderers.markdown import MarkdownRenderer
        >>> doc = Document(children=[
        ...     Heading(level=1, content=[Text(content="Title")])
        ... ])
        >>> print(MarkdownRenderer().render_to_string(doc))
        # Title

    """

    def __init__(self, options: MarkdownRendererOptions | None = None):
        """Initialize the Markdown renderer with options."""
        BaseRenderer._validate_options_type(options, MarkdownRendererOptions, "markdown")
        options = options or MarkdownRendererOptions()
        BaseRenderer.__init__(self, options)
        self.options: MarkdownRendererOptions = options
        self._output: list[str] = []
        self._list_marker_stack: list[str] = []
        self._marker_width_stack: list[int] = []
        self._alternate_list_marker: bool = False

    def render_to_string(self, document: Document) -> str:
        """Render a document AST to markdown string.

        Parameters
        ----------
        document : Document
            The document node to render

        Returns
        -------
        str
            Markdown text without a trailing newline

        """
        self._output = []
        self._list_marker_stack = []
        self._marker_width_stack = []
        self._alternate_list_marker = False

        document.accept(self)

        result = "".join(self._output)
        self._output.clear()
        return self._cleanup_output(result)

    def _cleanup_output(self, text: str) -> str:
        """Normalize line endings and strip trailing whitespace."""
        text = text.replace("\r\n", "\n").replace("\r", "\n")
        return text.rstrip()

    def _escape_markdown(self, text: str) -> str:
        """Escape special markdown characters with context awareness.

        - Backslash, backticks, asterisks, braces and brackets are always escaped
        - ``#``, ``>``, ``-``, ``+``, ``=`` and ``N.`` only at the start of a line
        - ``_`` only at word boundaries, so ``snake_case`` stays readable
        - ``~`` only when doubled, where it could start strikethrough
        - ``<`` only where it could open a tag, unless HTML escaping is off
        - ``&`` only where it starts a character reference

        Parameters
        ----------
        text : str
            Text to escape

        Returns
        -------
        str
            Escaped text

        """
        if not self.options.escape_special:
            return text

        escaped_chars = []
        for i, char in enumerate(text):
            at_line_start = i == 0 or text[i - 1] == "\n"
            prev_char = text[i - 1] if i > 0 else ""
            next_char = text[i + 1] if i < len(text) - 1 else ""

            if char in MARKDOWN_ALWAYS_ESCAPE:
                escaped_chars.append("\\")
            elif char in "#>-+=" and at_line_start:
                escaped_chars.append("\\")
            elif char in ".)" and self._follows_line_start_digits(text, i):
                escaped_chars.append("\\")
            elif char == "_":
                if not (prev_char.isalnum() and next_char.isalnum()):
                    escaped_chars.append("\\")
            elif char == "~" and "~" in (prev_char, next_char):
                escaped_chars.append("\\")
            elif char == "<" and self.options.escape_html and _TAG_START_RE.match(next_char):
                escaped_chars.append("\\")
            elif char == "&" and self._starts_character_reference(text, i):
                escaped_chars.append("\\")
            escaped_chars.append(char)

        return "".join(escaped_chars)

    @staticmethod
    def _starts_character_reference(text: str, index: int) -> bool:
        match = _CHARACTER_REFERENCE_RE.match(text, index)
        return match is not None and unescape(match.group(0)) != match.group(0)

    @staticmethod
    def _follows_line_start_digits(text: str, index: int) -> bool:
        line_start = text.rfind("\n", 0, index) + 1
        return bool(_ORDERED_MARKER_RE.match(text[line_start:index]))

    def _current_indent(self) -> str:
        """Indentation for continuation blocks inside list items."""
        return " " * sum(self._marker_width_stack)

    def _render_blocks(self, children: list[Node], separator: str = "\n\n") -> None:
        """Render block children, alternating markers of adjacent lists.

        Two lists of the same kind written back to back would merge into one
        when read again; switching the marker keeps them apart.
        """
        previous: Optional[Node] = None
        alternate = False
        for i, child in enumerate(children):
            if i > 0:
                self._output.append(separator)
            if isinstance(child, List) and isinstance(previous, List) and child.ordered == previous.ordered:
                alternate = not alternate
            else:
                alternate = False
            self._alternate_list_marker = alternate
            child.accept(self)
            self._alternate_list_marker = False
            previous = child

    def _render_nested_blocks(self, children: list[Node]) -> str:
        """Render blocks into a string, outside of any list indentation."""
        saved_output = self._output
        saved_stack = self._marker_width_stack
        self._output = []
        self._marker_width_stack = []

        self._render_blocks(children)

        result = "".join(self._output)
        self._output = saved_output
        self._marker_width_stack = saved_stack
        return result

    def visit_document(self, node: Document) -> None:
        """Render a Document node.

        Parameters
        ----------
        node : Document
            Document to render

        """
        self._render_blocks(node.children)

    def visit_heading(self, node: Heading) -> None:
        """Render a Heading node.

        Parameters
        ----------
        node : Heading
            Heading to render

        """
        content = self._render_inline_content(node.content)
        self._output.append(f"{self._current_indent()}{'#' * node.level} {content}")

    def visit_paragraph(self, node: Paragraph) -> None:
        """Render a Paragraph node.

        Parameters
        ----------
        node : Paragraph
            Paragraph to render

        """
        content = self._render_inline_content(node.content)
        self._output.append(f"{self._current_indent()}{content}")

    def visit_code_block(self, node: CodeBlock) -> None:
        """Render a CodeBlock node.

        The fence is made longer than any run of fence characters in the
        content so the block cannot be closed early.

        Parameters
        ----------
        node : CodeBlock
            Code block to render

        """
        fence_char = self.options.code_fence_char
        fence_length = self.options.code_fence_min
        runs = re.findall(re.escape(fence_char) + "+", node.content)
        if runs:
            fence_length = max(fence_length, max(len(run) for run in runs) + 1)

        fence = fence_char * fence_length
        lang = node.language or ""

        self._output.append(f"{fence}{lang}\n")
        if node.content:
            self._output.append(node.content + "\n")
        self._output.append(fence)

    def visit_block_quote(self, node: BlockQuote) -> None:
        """Render a BlockQuote node.

        Parameters
        ----------
        node : BlockQuote
            Block quote to render

        """
        indent = self._current_indent()
        quoted = self._render_nested_blocks(node.children)
        quoted_lines = [f"{indent}> {line}" if line else f"{indent}>" for line in quoted.split("\n")]
        self._output.append("\n".join(quoted_lines))

    def _list_marker(self, node: List, index: int) -> str:
        if node.ordered:
            delimiter = ")" if self._alternate_list_marker else "."
            return f"{node.start + index}{delimiter} "
        bullet = self.options.bullet_symbol
        if self._alternate_list_marker:
            bullet = "-" if bullet != "-" else "*"
        return f"{bullet} "

    def visit_list(self, node: List) -> None:
        """Render a List node.

        Parameters
        ----------
        node : List
            List to render

        """
        markers = [self._list_marker(node, i) for i in range(len(node.items))]
        self._alternate_list_marker = False

        for i, item in enumerate(node.items):
            self._list_marker_stack.append(markers[i])
            item.accept(self)
            self._list_marker_stack.pop()

            if i < len(node.items) - 1:
                self._output.append("\n" if node.tight else "\n\n")

    def visit_list_item(self, node: ListItem) -> None:
        """Render a ListItem node.

        The first child goes on the marker line; later children are indented
        by the marker width.

        Parameters
        ----------
        node : ListItem
            List item to render

        """
        indent = self._current_indent()
        marker = self._list_marker_stack[-1] if self._list_marker_stack else f"{self.options.bullet_symbol} "
        self._output.append(f"{indent}{marker}")

        for i, child in enumerate(node.children):
            if i == 0:
                # first child renders without indentation, right after the marker
                saved_output = self._output
                saved_stack = self._marker_width_stack
                self._output = []
                self._marker_width_stack = []

                child.accept(self)

                child_content = "".join(self._output)
                self._marker_width_stack = saved_stack
                self._output = saved_output
                self._output.append(child_content)
            else:
                if i == 1:
                    self._marker_width_stack.append(len(marker))
                self._output.append("\n\n" if isinstance(child, Paragraph) else "\n")
                child.accept(self)

        if len(node.children) > 1:
            self._marker_width_stack.pop()

    def _render_cell(self, cell: TableCell) -> str:
        content = self._render_inline_content(cell.content).replace("\n", " ")
        if self.options.table_pipe_escape:
            content = content.replace("|", "\\|")
        return content

    def _generate_alignment_row(self, node: Table, num_cols: int) -> str:
        """Generate alignment separator row.

        Parameters
        ----------
        node : Table
            Table node with alignment info
        num_cols : int
            Number of columns

        Returns
        -------
        str
            Alignment row string

        """
        alignments = []
        for alignment in (node.alignments or [])[:num_cols]:
            if alignment == "center":
                alignments.append(":---:")
            elif alignment == "right":
                alignments.append("---:")
            elif alignment == "left":
                alignments.append(":---")
            else:
                alignments.append("---")

        while len(alignments) < num_cols:
            alignments.append("---")

        return "| " + " | ".join(alignments) + " |"

    def visit_table(self, node: Table) -> None:
        """Render a Table node.

        Rows are padded with empty cells to the widest row so the table is
        rectangular.

        Parameters
        ----------
        node : Table
            Table to render

        """
        rows = ([node.header] if node.header else []) + list(node.rows)
        if not rows:
            return
        num_cols = max(len(row.cells) for row in rows) or 1
        rendered_rows = []
        for row in rows:
            cells = [self._render_cell(cell) for cell in row.cells]
            cells.extend([""] * (num_cols - len(cells)))
            rendered_rows.append(cells)

        lines = []
        for i, cells in enumerate(rendered_rows):
            lines.append("| " + " | ".join(cells) + " |")
            if i == 0:
                lines.append(self._generate_alignment_row(node, num_cols))
        self._output.append("\n".join(lines))

    def visit_table_row(self, node: TableRow) -> None:
        """Table rows are rendered by visit_table."""
        pass

    def visit_table_cell(self, node: TableCell) -> None:
        """Table cells are rendered by visit_table."""
        pass

    def visit_thematic_break(self, node: ThematicBreak) -> None:
        """Render a ThematicBreak node."""
        self._output.append("---")

    def visit_html_block(self, node: HTMLBlock) -> None:
        """Render an HTMLBlock node verbatim."""
        self._output.append(node.content)

    def _format_jsx_attribute(self, attribute: MdxJsxAttribute) -> str:
        """Format one JSX attribute, including its leading space.

        Strings use whichever quote they do not contain; strings holding both
        quote characters fall back to a JSON string expression.
        """
        name, value = attribute.name, attribute.value
        if value is None:
            return f" {name}"
        if isinstance(value, MdxExpression):
            return f" {name}={{{value.value}}}"
        if isinstance(value, bool):
            return f" {name}={{{'true' if value else 'false'}}}"
        if isinstance(value, (int, float)):
            return f" {name}={{{json.dumps(value)}}}"
        if '"' not in value:
            return f' {name}="{value}"'
        if "'" not in value:
            return f" {name}='{value}'"
        return f" {name}={{{json.dumps(value, ensure_ascii=False)}}}"

    def visit_mdx_jsx_flow_element(self, node: MdxJsxFlowElement) -> None:
        """Render a block-level JSX element.

        Parameters
        ----------
        node : MdxJsxFlowElement
            Element to render

        """
        attributes = "".join(self._format_jsx_attribute(a) for a in node.attributes)
        indent = self._current_indent()
        if not node.children:
            self._output.append(f"{indent}<{node.name}{attributes} />")
            return
        content = self._render_nested_blocks(node.children)
        self._output.append(f"{indent}<{node.name}{attributes}>\n{content}\n{indent}</{node.name}>")

    def visit_leaf_directive(self, node: LeafDirective) -> None:
        """Render a shortcode without content on its own line."""
        self._output.append(f"{self._current_indent()}{format_directive(node.name, node.attributes)}")

    def visit_container_directive(self, node: ContainerDirective) -> None:
        """Render a shortcode wrapping block content.

        Parameters
        ----------
        node : ContainerDirective
            Directive to render

        """
        opening = format_directive(node.name, node.attributes)
        closing = format_directive(node.name, {}, closing=True)
        if not node.children:
            self._output.append(f"{opening}\n{closing}")
            return
        content = self._render_nested_blocks(node.children)
        self._output.append(f"{opening}\n{content}\n{closing}")

    def visit_text(self, node: Text) -> None:
        """Render a Text node.

        Parameters
        ----------
        node : Text
            Text to render

        """
        self._output.append(self._escape_markdown(node.content))

    def _attention_marker(self, node: Node, previous_marker: str) -> str:
        """Delimiter for an emphasis, strong or strikethrough node.

        A delimiter run touching the run of the previous sibling would merge
        with it, so the other emphasis character is used in that case.
        """
        if isinstance(node, Strikethrough):
            return "~~"
        char = self.options.emphasis_symbol
        if previous_marker == char:
            char = "_" if char == "*" else "*"
        return char * 2 if isinstance(node, Strong) else char

    def _render_inline_content(self, content: list[Node]) -> str:
        """Render inline nodes, fitting delimiters to their neighbours.

        Emphasis, strong and strikethrough content is rendered first so that
        the characters on both sides of each delimiter are known. Whitespace
        just inside a delimiter, and letters just outside one that would keep
        it from opening or closing, are written as character references.

        Parameters
        ----------
        content : list of Node
            Inline nodes to render

        Returns
        -------
        str
            Rendered inline content

        """
        pieces = []
        for node in content:
            if isinstance(node, _ATTENTION_NODES):
                pieces.append((node, self._render_inline_content(node.content)))
            else:
                pieces.append((node, InlineContentMixin._render_inline_content(self, [node])))

        output: list[str] = []
        previous_marker = ""
        encode_next = False
        for i, (node, text) in enumerate(pieces):
            if encode_next and isinstance(node, Text) and text[:1].isalnum():
                text = _character_reference(text[0]) + text[1:]
            encode_next = False
            if not isinstance(node, _ATTENTION_NODES):
                if text:
                    output.append(text)
                previous_marker = ""
                continue
            if not text:
                continue

            marker = self._attention_marker(node, previous_marker)
            following = pieces[i + 1] if i + 1 < len(pieces) else None
            if following is None:
                after = ""
            elif isinstance(following[0], _ATTENTION_NODES):
                after = "*"
            else:
                after = following[1][:1]
            before = output[-1][-1:] if output else ""

            inner, encode_before, encode_next = _encode_attention_edges(text, before, after, marker[0])
            if encode_before:
                output[-1] = output[-1][:-1] + _character_reference(before)
            output.append(f"{marker}{inner}{marker}")
            previous_marker = marker[0]

        return "".join(output)

    def visit_emphasis(self, node: Emphasis) -> None:
        """Render an Emphasis node.

        Parameters
        ----------
        node : Emphasis
            Emphasis to render

        """
        self._output.append(self._render_inline_content([node]))

    def visit_strong(self, node: Strong) -> None:
        """Render a Strong node.

        Parameters
        ----------
        node : Strong
            Strong to render

        """
        self._output.append(self._render_inline_content([node]))

    def visit_strikethrough(self, node: Strikethrough) -> None:
        """Render a Strikethrough node."""
        self._output.append(self._render_inline_content([node]))

    def visit_code(self, node: Code) -> None:
        """Render a Code node.

        The backtick fence is one longer than the longest backtick run in the
        content. Content touching a backtick, or with a space at both ends, is
        padded with a space.

        Parameters
        ----------
        node : Code
            Code to render

        """
        runs = re.findall(r"`+", node.content)
        backticks = "`" * (max((len(run) for run in runs), default=0) + 1)
        content = node.content
        spaced = content[:1] == content[-1:] == " " and content.strip(" ")
        if content.startswith("`") or content.endswith("`") or spaced:
            content = f" {content} "
        self._output.append(f"{backticks}{content}{backticks}")

    @staticmethod
    def _format_destination(url: str, title: Optional[str]) -> str:
        destination = f"<{url}>" if not url or _URL_NEEDS_BRACKETS_RE.search(url) else url
        if title:
            escaped_title = title.replace("\\", "\\\\").replace('"', '\\"')
            return f'{destination} "{escaped_title}"'
        return destination

    def visit_link(self, node: Link) -> None:
        """Render a Link node.

        Parameters
        ----------
        node : Link
            Link to render

        """
        content = self._render_inline_content(node.content)
        self._output.append(f"[{content}]({self._format_destination(node.url, node.title)})")

    def visit_image(self, node: Image) -> None:
        """Render an Image node.

        Parameters
        ----------
        node : Image
            Image to render

        """
        alt = node.alt_text.replace("\\", "\\\\").replace("[", "\\[").replace("]", "\\]")
        self._output.append(f"![{alt}]({self._format_destination(node.url, node.title)})")

    def visit_line_break(self, node: LineBreak) -> None:
        """Render a hard LineBreak node."""
        self._output.append("  \n")

    def visit_html_inline(self, node: HTMLInline) -> None:
        """Render an HTMLInline node verbatim."""
        self._output.append(node.content)

    def visit_mdx_jsx_text_element(self, node: MdxJsxTextElement) -> None:
        """Render an inline JSX element.

        Parameters
        ----------
        node : MdxJsxTextElement
            Element to render

        """
        attributes = "".join(self._format_jsx_attribute(a) for a in node.attributes)
        if not node.children:
            self._output.append(f"<{node.name}{attributes} />")
            return
        content = self._render_inline_content(node.children)
        self._output.append(f"<{node.name}{attributes}>{content}</{node.name}>")

    def visit_text_directive(self, node: TextDirective) -> None:
        """Render an inline shortcode."""
        self._output.append(format_directive(node.name, node.attributes))
