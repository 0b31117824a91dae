#  Copyright (c) 2025 Tom Villani, Ph.D.
#
# src/mdx_richtext/parsers/markdown.py
"""Markdown to AST converter.

This module parses markdown (CommonMark plus GFM tables and strikethrough)
with mistune and converts its tokens into the generic markdown tree. The
JSX and shortcode extensions are installed as mistune plugins according to
the parser options.

"""

from __future__ import annotations

import logging
from typing import Any

import mistune
from mistune.util import unescape

from mdx_richtext.ast import (
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
from mdx_richtext.exceptions import UnsupportedNodeError
from mdx_richtext.extensions.jsx import JSX_FLOW_TOKEN, JSX_TEXT_TOKEN, jsx_plugin
from mdx_richtext.extensions.shortcodes import (
    SHORTCODE_CONTAINER_TOKEN,
    SHORTCODE_INLINE_TOKEN,
    SHORTCODE_LEAF_TOKEN,
    shortcode_plugin,
)
from mdx_richtext.options.markdown import MarkdownParserOptions

logger = logging.getLogger(__name__)


class MarkdownToAstConverter:
    r"""Convert Markdown to the generic markdown tree.

    Parameters
    ----------
    options : MarkdownParserOptions or None, default = None
        Parser configuration options

    Examples
    --------
    Basic parsing:

        >>> converter = MarkdownToAstConverter()
        >>> doc = converter.parse("# Hello\\n\\nThis is **bold**.")

    Recognizing a shortcode template:

        >>> options = MarkdownParserOptions(shortcode_patterns=(pattern,))
        >>> doc = MarkdownToAstConverter(options).parse('{{< signature "Ann" >}}')

    """

    def __init__(self, options: MarkdownParserOptions | None = None):
        """Initialize the Markdown parser with options."""
        self.options: MarkdownParserOptions = options or MarkdownParserOptions()

    def _create_markdown(self) -> mistune.Markdown:
        markdown = mistune.create_markdown(renderer=None, plugins=["strikethrough", "table"])
        if self.options.shortcode_patterns:
            shortcode_plugin(self.options.shortcode_patterns, self.options.max_depth)(markdown)
        if self.options.parse_jsx:
            jsx_plugin(self.options.jsx_names, self.options.max_depth)(markdown)
        return markdown

    def parse(self, markdown_content: str) -> Document:
        """Parse Markdown text into an AST Document.

        Parameters
        ----------
        markdown_content : str
            Markdown text

        Returns
        -------
        Document
            AST document node

        Raises
        ------
        RichTextParseError
            If JSX or shortcode syntax is malformed
        NestingDepthError
            If components are nested deeper than ``max_depth``

        """
        markdown = self._create_markdown()
        tokens, _state = markdown.parse(markdown_content)
        logger.debug(f"mistune produced {len(tokens)} top-level tokens")
        return Document(children=self._process_tokens(tokens))

    def _process_tokens(self, tokens: list[dict[str, Any]]) -> list[Node]:
        """Process a list of mistune block tokens into AST nodes."""
        nodes: list[Node] = []
        for token in tokens:
            node = self._process_token(token)
            if node is not None:
                nodes.append(node)
        return nodes

    def _process_token(self, token: dict[str, Any]) -> Node | None:
        """Process a single mistune block token into an AST node.

        Parameters
        ----------
        token : dict
            Mistune token dictionary with 'type' and other fields

        Returns
        -------
        Node or None
            Resulting AST node, or None for blank lines

        Raises
        ------
        UnsupportedNodeError
            If the token type has no counterpart in the tree

        """
        token_type = token.get("type", "")

        if token_type == "blank_line":
            return None
        elif token_type == "heading":
            return Heading(level=token.get("attrs", {}).get("level", 1), content=self._inline_children(token))
        elif token_type in ("paragraph", "block_text"):
            return Paragraph(content=self._inline_children(token))
        elif token_type == "block_code":
            return self._process_code_block(token)
        elif token_type == "block_quote":
            return BlockQuote(children=self._process_tokens(token.get("children", [])))
        elif token_type == "list":
            return self._process_list(token)
        elif token_type == "table":
            return self._process_table(token)
        elif token_type == "thematic_break":
            return ThematicBreak()
        elif token_type == "block_html":
            return HTMLBlock(content=token.get("raw", "").rstrip("\n"))
        elif token_type == JSX_FLOW_TOKEN:
            attrs = token["attrs"]
            return MdxJsxFlowElement(
                name=attrs["name"],
                attributes=list(attrs["attributes"]),
                children=self._process_tokens(token.get("children", [])),
            )
        elif token_type == SHORTCODE_LEAF_TOKEN:
            attrs = token["attrs"]
            return LeafDirective(name=attrs["name"], attributes=dict(attrs["attributes"]))
        elif token_type == SHORTCODE_CONTAINER_TOKEN:
            attrs = token["attrs"]
            return ContainerDirective(
                name=attrs["name"],
                attributes=dict(attrs["attributes"]),
                children=self._process_tokens(token.get("children", [])),
            )

        raise UnsupportedNodeError(token_type, "Markdown token")

    def _process_code_block(self, token: dict[str, Any]) -> CodeBlock:
        """Process code block token.

        The full info string is kept as the language so that meta after the
        language name survives a round trip.
        """
        code_content = token.get("raw", "")
        if code_content.endswith("\n"):
            code_content = code_content[:-1]
        info_string = (token.get("attrs") or {}).get("info")
        language = info_string.strip() if info_string else None
        return CodeBlock(content=code_content, language=language or None)

    def _process_list(self, token: dict[str, Any]) -> List:
        """Process list token.

        Parameters
        ----------
        token : dict
            List token with 'children', 'attrs' (ordered, start) and 'tight'

        Returns
        -------
        List
            List AST node

        """
        attrs = token.get("attrs", {})
        items = [
            ListItem(children=self._process_tokens(child.get("children", [])))
            for child in token.get("children", [])
            if child.get("type") == "list_item"
        ]
        return List(
            ordered=attrs.get("ordered", False),
            items=items,
            start=attrs.get("start", 1),
            tight=token.get("tight", attrs.get("tight", True)),
        )

    def _process_table(self, token: dict[str, Any]) -> Table:
        """Process table token.

        Parameters
        ----------
        token : dict
            Table token with 'table_head' and 'table_body' children

        Returns
        -------
        Table
            Table AST node

        """
        header = None
        rows = []
        alignments = []

        for row_token in token.get("children", []):
            row_type = row_token.get("type", "")
            if row_type == "table_head":
                # cells are direct children of table_head
                cells = self._process_table_row_cells(row_token)
                header = TableRow(cells=cells, is_header=True)
                alignments = [cell.alignment for cell in cells]
            elif row_type == "table_body":
                for body_row_token in row_token.get("children", []):
                    rows.append(TableRow(cells=self._process_table_row_cells(body_row_token)))

        return Table(header=header, rows=rows, alignments=alignments)

    def _process_table_row_cells(self, row_token: dict[str, Any]) -> list[TableCell]:
        cells = []
        for cell_token in row_token.get("children", []):
            alignment = (cell_token.get("attrs") or {}).get("align")
            cells.append(TableCell(content=self._inline_children(cell_token), alignment=alignment))
        return cells

    def _inline_children(self, token: dict[str, Any]) -> list[Node]:
        return self._process_inline_tokens(token.get("children", []))

    def _process_inline_tokens(self, tokens: list[dict[str, Any]]) -> list[Node]:
        """Process inline tokens, merging adjacent text.

        Parameters
        ----------
        tokens : list of dict
            Inline token dictionaries

        Returns
        -------
        list of Node
            Inline AST nodes

        """
        nodes: list[Node] = []
        for token in tokens:
            node = self._process_inline_token(token)
            if isinstance(node, Text) and nodes and isinstance(nodes[-1], Text):
                nodes[-1] = Text(content=nodes[-1].content + node.content)
            else:
                nodes.append(node)
        return nodes

    def _handle_text_token(self, token: dict[str, Any]) -> Text:
        """Handle text token; character references are decoded per token."""
        return Text(content=unescape(token.get("raw", "")))

    def _handle_softbreak_token(self, token: dict[str, Any]) -> Text:
        return Text(content="\n")

    def _handle_strong_token(self, token: dict[str, Any]) -> Strong:
        return Strong(content=self._inline_children(token))

    def _handle_emphasis_token(self, token: dict[str, Any]) -> Emphasis:
        return Emphasis(content=self._inline_children(token))

    def _handle_strikethrough_token(self, token: dict[str, Any]) -> Strikethrough:
        return Strikethrough(content=self._inline_children(token))

    def _handle_codespan_token(self, token: dict[str, Any]) -> Code:
        return Code(content=token.get("raw", ""))

    def _handle_link_token(self, token: dict[str, Any]) -> Link:
        """Handle link token."""
        attrs = token.get("attrs", {})
        return Link(url=attrs.get("url", ""), content=self._inline_children(token), title=attrs.get("title"))

    def _handle_image_token(self, token: dict[str, Any]) -> Image:
        """Handle image token; alt text lives in the children, not attrs."""
        attrs = token.get("attrs", {})
        return Image(
            url=attrs.get("url", ""),
            alt_text=self._plain_text(token.get("children", [])),
            title=attrs.get("title"),
        )

    def _plain_text(self, tokens: list[dict[str, Any]]) -> str:
        parts = []
        for child in tokens:
            if child.get("type") == "text":
                parts.append(unescape(child.get("raw", "")))
            elif "raw" in child:
                parts.append(child["raw"])
            elif child.get("type") == "softbreak":
                parts.append("\n")
            else:
                parts.append(self._plain_text(child.get("children", [])))
        return "".join(parts)

    def _handle_linebreak_token(self, token: dict[str, Any]) -> LineBreak:
        return LineBreak()

    def _handle_inline_html_token(self, token: dict[str, Any]) -> HTMLInline:
        return HTMLInline(content=token.get("raw", ""))

    def _handle_jsx_text_token(self, token: dict[str, Any]) -> MdxJsxTextElement:
        attrs = token["attrs"]
        return MdxJsxTextElement(
            name=attrs["name"],
            attributes=list(attrs["attributes"]),
            children=self._inline_children(token),
        )

    def _handle_shortcode_inline_token(self, token: dict[str, Any]) -> TextDirective:
        attrs = token["attrs"]
        return TextDirective(name=attrs["name"], attributes=dict(attrs["attributes"]))

    def _process_inline_token(self, token: dict[str, Any]) -> Node:
        """Process a single inline token.

        Raises
        ------
        UnsupportedNodeError
            If the token type has no counterpart in the tree

        """
        token_type = token.get("type", "")

        handler_map: dict[str, Any] = {
            "text": self._handle_text_token,
            "softbreak": self._handle_softbreak_token,
            "strong": self._handle_strong_token,
            "emphasis": self._handle_emphasis_token,
            "strikethrough": self._handle_strikethrough_token,
            "codespan": self._handle_codespan_token,
            "link": self._handle_link_token,
            "image": self._handle_image_token,
            "linebreak": self._handle_linebreak_token,
            "inline_html": self._handle_inline_html_token,
            JSX_TEXT_TOKEN: self._handle_jsx_text_token,
            SHORTCODE_INLINE_TOKEN: self._handle_shortcode_inline_token,
        }

        handler = handler_map.get(token_type)
        if handler is None:
            raise UnsupportedNodeError(token_type, "Markdown inline token")
        return handler(token)


def markdown_to_ast(markdown_content: str, options: MarkdownParserOptions | None = None) -> Document:
    r"""Convert Markdown string to AST.

    This is a convenience function that creates a converter and parses
    the markdown in one step.

    Parameters
    ----------
    markdown_content : str
        Markdown text to parse
    options : MarkdownParserOptions or None, default = None
        Parser configuration

    Returns
    -------
    Document
        AST document node

    Examples
    --------
    >>> from mdx_richtext.parsers.markdown import markdown_to_ast
    >>> doc = markdown_to_ast("# Hello\\n\\nWorld")
    >>> len(doc.children)
    2

    """
    return MarkdownToAstConverter(options).parse(markdown_content)
