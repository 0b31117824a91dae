#  Copyright (c) 2025 Tom Villani, Ph.D.
#
# tests/unit/renderers/test_markdown_renderer.py
"""Unit tests for the markdown renderer.

Tests cover:
- Context-aware escaping
- Inline formatting and code spans
- Lists, block quotes, tables and code fences
- JSX attribute formatting
- Directive output

"""

import pytest

from mdx_richtext.ast.nodes import (
    BlockQuote,
    Code,
    CodeBlock,
    ContainerDirective,
    Document,
    Emphasis,
    Heading,
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
    Paragraph,
    Strikethrough,
    Strong,
    Table,
    TableCell,
    TableRow,
    Text,
    ThematicBreak,
)
from mdx_richtext.constants import DIRECTIVE_CLOSE, DIRECTIVE_OPEN
from mdx_richtext.exceptions import ValidationError
from mdx_richtext.options import MarkdownParserOptions, MarkdownRendererOptions
from mdx_richtext.renderers.markdown import MarkdownRenderer


def render(*children, options=None):
    return MarkdownRenderer(options).render_to_string(Document(children=list(children)))


def paragraph(*content):
    return Paragraph(content=list(content))


def item(*children):
    return ListItem(children=list(children))


@pytest.mark.unit
class TestEscaping:
    """Tests for escaping text content."""

    def test_always_escaped(self):
        """Test characters escaped anywhere."""
        assert render(paragraph(Text("a*b [c]"))) == "a\\*b \\[c\\]"

    def test_line_start_only(self):
        """Test characters escaped only at the start of a line."""
        assert render(paragraph(Text("# not a heading"))) == "\\# not a heading"
        assert render(paragraph(Text("a # b"))) == "a # b"

    def test_ordered_marker(self):
        """Test that text looking like an ordered list marker is escaped."""
        assert render(paragraph(Text("1. item"))) == "1\\. item"

    def test_underscore_inside_word(self):
        """Test that intraword underscores are kept."""
        assert render(paragraph(Text("snake_case _x"))) == "snake_case \\_x"

    def test_tag_start(self):
        """Test that '<' is escaped only where it would open a tag."""
        assert render(paragraph(Text("<div> a < b"))) == "\\<div> a < b"

    def test_character_reference(self):
        """Test that an ampersand is escaped only where it starts a character reference."""
        assert render(paragraph(Text("a &amp; b"))) == "a \\&amp; b"
        assert render(paragraph(Text("AT&T &nosuch;"))) == "AT&T &nosuch;"

    def test_html_escaping_disabled(self):
        """Test that HTML escaping can be turned off."""
        options = MarkdownRendererOptions(escape_html=False)
        assert render(paragraph(Text("<div>")), options=options) == "<div>"

    def test_escaping_disabled(self):
        """Test that all escaping can be turned off."""
        options = MarkdownRendererOptions(escape_special=False, escape_html=False)
        assert render(paragraph(Text("*raw*")), options=options) == "*raw*"


@pytest.mark.unit
class TestInline:
    """Tests for inline nodes."""

    def test_heading(self):
        """Test ATX headings."""
        assert render(Heading(level=2, content=[Text("Title")])) == "## Title"

    def test_edge_whitespace_encoded(self):
        """Test that spaces just inside delimiters are written as character references."""
        rendered = render(paragraph(Text("a"), Strong(content=[Text(" b ")]), Text("c")))
        assert rendered == "&#x61;**&#x20;b&#x20;**&#x63;"

    def test_trailing_space_before_word(self):
        """Test that a letter after a closing delimiter is encoded when the content ends in a space."""
        rendered = render(paragraph(Text("a "), Strong(content=[Text("bold ")]), Text("x")))
        assert rendered == "a **bold&#x20;**&#x78;"

    def test_adjacent_emphasis_alternates_markers(self):
        """Test that touching delimiter runs use different characters."""
        first = Strong(content=[Text("x"), Emphasis(content=[Text("y")])])
        assert render(paragraph(first, Emphasis(content=[Text("z")]))) == "**x*y***_z_"
        second = Emphasis(content=[Text("x"), Strong(content=[Text("y")])])
        assert render(paragraph(second, Strong(content=[Text("z")]))) == "*x**y***__z__"

    def test_strikethrough_edge_whitespace(self):
        """Test that strikethrough content keeps its edge spaces."""
        rendered = render(paragraph(Text("a"), Strikethrough(content=[Text(" b")])))
        assert rendered == "a~~&#x20;b~~"

    def test_emphasis_symbol(self):
        """Test the configurable emphasis delimiter."""
        options = MarkdownRendererOptions(emphasis_symbol="_")
        assert render(paragraph(Emphasis(content=[Text("x")])), options=options) == "_x_"

    def test_code_span_with_backtick(self):
        """Test that the code fence is longer than backtick runs inside."""
        assert render(paragraph(Code("a`b"))) == "``a`b``"
        assert render(paragraph(Code("`x"))) == "`` `x ``"

    def test_code_span_with_edge_spaces(self):
        """Test that a code span with a space at both ends keeps them."""
        assert render(paragraph(Code(" a "))) == "`  a  `"
        assert render(paragraph(Code(" "))) == "` `"

    def test_link_with_title(self):
        """Test links with a title."""
        link = Link(url="https://example.com", content=[Text("x")], title='say "hi"')
        assert render(paragraph(link)) == '[x](https://example.com "say \\"hi\\"")'

    def test_link_destination_with_space(self):
        """Test that destinations with spaces are bracketed."""
        assert render(paragraph(Link(url="a b", content=[Text("x")]))) == "[x](<a b>)"

    def test_image(self):
        """Test image output."""
        assert render(paragraph(Image(url="/a.png", alt_text="A [1]"))) == "![A \\[1\\]](/a.png)"

    def test_line_break(self):
        """Test hard line breaks."""
        assert render(paragraph(Text("a"), LineBreak(), Text("b"))) == "a  \nb"


@pytest.mark.unit
class TestBlocks:
    """Tests for block nodes."""

    def test_blocks_separated_by_blank_line(self):
        """Test block separation."""
        assert render(paragraph(Text("a")), ThematicBreak(), paragraph(Text("b"))) == "a\n\n---\n\nb"

    def test_code_block(self):
        """Test fenced code blocks."""
        assert render(CodeBlock(content="x = 1", language="python")) == "```python\nx = 1\n```"

    def test_code_block_fence_longer_than_content(self):
        """Test that fences inside the code lengthen the fence."""
        assert render(CodeBlock(content="```\ninner\n```")) == "````\n```\ninner\n```\n````"

    def test_block_quote(self):
        """Test quoted blocks."""
        quote = BlockQuote(children=[paragraph(Text("a")), paragraph(Text("b"))])
        assert render(quote) == "> a\n>\n> b"

    def test_unordered_list(self):
        """Test bullet lists."""
        assert render(List(items=[item(paragraph(Text("a"))), item(paragraph(Text("b")))])) == "* a\n* b"

    def test_ordered_list(self):
        """Test numbered lists."""
        lst = List(ordered=True, items=[item(paragraph(Text("a"))), item(paragraph(Text("b")))])
        assert render(lst) == "1. a\n2. b"

    def test_nested_list(self):
        """Test that nested lists are indented by the marker width."""
        inner = List(items=[item(paragraph(Text("b")))])
        assert render(List(items=[item(paragraph(Text("a")), inner)])) == "* a\n  * b"

    def test_adjacent_lists_alternate_markers(self):
        """Test that adjacent lists do not merge."""
        first = List(items=[item(paragraph(Text("a")))])
        second = List(items=[item(paragraph(Text("b")))])
        assert render(first, second) == "* a\n\n- b"

    def test_table(self):
        """Test tables with alignment and padding."""
        table = Table(
            header=TableRow(cells=[TableCell(content=[Text("a")]), TableCell(content=[Text("b")])], is_header=True),
            rows=[TableRow(cells=[TableCell(content=[Text("c|d")])])],
            alignments=["left", None],
        )
        assert render(table) == "| a | b |\n| :--- | --- |\n| c\\|d |  |"


@pytest.mark.unit
class TestJsx:
    """Tests for JSX element output."""

    def test_attribute_kinds(self):
        """Test the formatting of each attribute value kind."""
        element = MdxJsxFlowElement(
            name="Callout",
            attributes=[
                MdxJsxAttribute("type", "warning"),
                MdxJsxAttribute("open"),
                MdxJsxAttribute("count", 3),
                MdxJsxAttribute("flag", True),
                MdxJsxAttribute("tags", MdxExpression('["a"]')),
            ],
        )
        assert render(element) == '<Callout type="warning" open count={3} flag={true} tags={["a"]} />'

    def test_string_quoting(self):
        """Test that strings pick a quote they do not contain."""
        element = MdxJsxFlowElement(
            name="Quote",
            attributes=[MdxJsxAttribute("a", 'say "hi"'), MdxJsxAttribute("b", "it's \"x\"")],
        )
        assert render(element) == "<Quote a='say \"hi\"' b={\"it's \\\"x\\\"\"} />"

    def test_flow_element_with_children(self):
        """Test that content goes between the tags."""
        element = MdxJsxFlowElement(name="Callout", children=[paragraph(Text("Hi"))])
        assert render(element) == "<Callout>\nHi\n</Callout>"

    def test_text_element(self):
        """Test inline JSX."""
        element = MdxJsxTextElement(name="Badge", children=[Strong(content=[Text("new")])])
        assert render(paragraph(Text("a "), element)) == "a <Badge>**new**</Badge>"


@pytest.mark.unit
class TestDirectives:
    """Tests for directive output with internal delimiters."""

    def test_leaf_directive(self):
        """Test a shortcode without content."""
        output = render(LeafDirective(name="signature", attributes={"_value": "Jane"}))
        assert output == f'{DIRECTIVE_OPEN}signature "Jane"{DIRECTIVE_CLOSE}'

    def test_container_directive(self):
        """Test a shortcode wrapping content."""
        output = render(ContainerDirective(name="notice", attributes={}, children=[paragraph(Text("Hi"))]))
        assert output == f"{DIRECTIVE_OPEN}notice{DIRECTIVE_CLOSE}\nHi\n{DIRECTIVE_OPEN}/notice{DIRECTIVE_CLOSE}"


@pytest.mark.unit
class TestRendererOptions:
    """Tests for renderer option handling."""

    def test_wrong_options_type(self):
        """Test that parser options are rejected."""
        with pytest.raises(ValidationError):
            MarkdownRenderer(MarkdownParserOptions())

    def test_bullet_symbol(self):
        """Test the configurable bullet."""
        options = MarkdownRendererOptions(bullet_symbol="-")
        assert render(List(items=[item(paragraph(Text("a")))]), options=options) == "- a"
