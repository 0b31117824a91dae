#  Copyright (c) 2025 Tom Villani, Ph.D.
#
# tests/integration/test_roundtrip.py
"""Integration tests for the parse and stringify entry points.

Tests cover:
- Round trips of plain markdown
- JSX components, nested rich-text props and shortcodes
- Recovery from malformed MDX
- Error reporting for malformed calls and configurations

"""

import pytest
from hypothesis import given
from hypothesis import strategies as st

from mdx_richtext import (
    ConfigurationError,
    MalformedCallError,
    MarkConflictError,
    NestingDepthError,
    Root,
    UnsupportedNodeError,
    document_to_dict,
    parse,
    stringify,
)
from mdx_richtext.constants import TABLE_COMPONENT_NAME
from mdx_richtext.document.nodes import (
    CodeBlockElement,
    ComponentElement,
    ComponentInlineElement,
    HeadingElement,
    ImageElement,
    InvalidMarkdownElement,
    ListElement,
    ListItemElement,
    ParagraphElement,
    TableCellElement,
    TableElement,
    TableRowElement,
    TextLeaf,
)


def _cell(text):
    return TableCellElement(children=[ParagraphElement(children=[TextLeaf(text=text)])])


def _cell_value(text):
    return {"value": Root(children=[ParagraphElement(children=[TextLeaf(text=text)])])}


def _merge(leaves):
    merged = []
    for leaf in leaves:
        if merged and merged[-1].flags == leaf.flags:
            merged[-1] = TextLeaf(text=merged[-1].text + leaf.text, **{flag: True for flag in leaf.flags})
        else:
            merged.append(leaf)
    return merged


@pytest.fixture
def box_field():
    return {
        "parser": {"type": "markdown"},
        "templates": [
            {
                "name": "box",
                "fields": [{"name": "children", "type": "rich-text"}],
                "match": {"start": "{{<", "end": ">}}"},
            }
        ],
    }


@pytest.fixture
def hero_field():
    return {
        "templates": [
            {
                "name": "Hero",
                "fields": [
                    {"name": "image", "type": "image"},
                    {"name": "title", "type": "rich-text"},
                    {"name": "tags", "type": "string", "list": True},
                ],
            }
        ]
    }


@pytest.mark.integration
class TestPlainMarkdown:
    """Round trips of markdown without components."""

    @pytest.mark.parametrize(
        "markdown",
        [
            "# Title\n\nSome **bold** and *italic* text.",
            "A ~~deleted~~ word and `code`.",
            "[docs](https://example.com)",
            "> quoted",
            "* one\n* two",
            "1. one\n2. two",
            "```python\nprint(1)\n```",
            "| a | b |\n| --- | --- |\n| 1 | 2 |",
            "a\n\n---\n\nb",
            "a \\* b",
        ],
    )
    def test_round_trip(self, markdown):
        """Test that stringify gives back the parsed markdown."""
        assert stringify(parse(markdown)) == markdown

    def test_parse_structure(self):
        """Test the document produced for formatted text."""
        root = parse("# Title\n\nSome **bold** text")
        assert root.children == [
            HeadingElement(depth=1, children=[TextLeaf(text="Title")]),
            ParagraphElement(
                children=[TextLeaf(text="Some "), TextLeaf(text="bold", bold=True), TextLeaf(text=" text")]
            ),
        ]

    def test_nested_marks(self):
        """Test formatting flags from nested emphasis."""
        root = parse("***both*** **bold**")
        assert root.children[0].children == [
            TextLeaf(text="both", bold=True, italic=True),
            TextLeaf(text=" "),
            TextLeaf(text="bold", bold=True),
        ]

    def test_list_items(self):
        """Test that list paragraphs become list item content."""
        root = parse("* one\n* two")
        lst = root.children[0]
        assert isinstance(lst, ListElement)
        assert [item.children[0].type for item in lst.children] == ["lic", "lic"]
        assert lst.children[1].children[0].children == [TextLeaf(text="two")]

    def test_code_block(self):
        """Test fenced code."""
        assert parse("```js\nlet a;\n```").children == [CodeBlockElement(value="let a;", lang="js")]

    def test_image_url_mapper(self):
        """Test that image URLs are mapped in both directions."""
        root = parse("![Alt](/img.png)", image_url_mapper=lambda url: "https://cdn.example.com" + url)
        assert root.children == [ImageElement(url="https://cdn.example.com/img.png", alt="Alt")]
        markdown = stringify(root, image_url_mapper=lambda url: url.replace("https://cdn.example.com", ""))
        assert markdown == "![Alt](/img.png)"

    def test_empty_input(self):
        """Test that empty input gives a single empty paragraph."""
        for markdown in ("", "   \n\n"):
            assert parse(markdown) == Root(children=[ParagraphElement(children=[TextLeaf(text="")])])

    def test_empty_tree(self):
        """Test that the empty-input tree writes no text."""
        assert stringify(parse("")) == ""

    def test_stringify_dict(self):
        """Test stringify of the editor dictionary form."""
        paragraph = {"type": "p", "children": [{"type": "text", "text": "Hi", "italic": True}]}
        root = {"type": "root", "children": [paragraph]}
        assert stringify(root) == "*Hi*"

    def test_dictionary_round_trip(self):
        """Test that the dictionary form of a parsed tree writes the same text."""
        markdown = "## Heading\n\nText with a [link](https://example.com)."
        assert stringify(document_to_dict(parse(markdown))) == markdown

    def test_table_tree_round_trip(self):
        """Test that a table with column alignments survives stringify and parse."""
        table = TableElement(
            children=[
                TableRowElement(children=[_cell("h1"), _cell("h2")]),
                TableRowElement(children=[_cell("a"), _cell("b")]),
            ],
            align=["left", "right"],
        )
        root = Root(children=[table])
        markdown = stringify(root)
        assert markdown == "| h1 | h2 |\n| :--- | ---: |\n| a | b |"
        assert parse(markdown) == root

    def test_table_component(self):
        """Test that the editor's table component is written as a markdown table."""
        rows = [
            {"tableCells": [_cell_value("h"), _cell_value("i")]},
            {"tableCells": [_cell_value("a"), _cell_value("b")]},
        ]
        component = ComponentElement(name=TABLE_COMPONENT_NAME, props={"tableRows": rows, "align": ["center", None]})
        markdown = stringify(Root(children=[component]))
        assert markdown == "| h | i |\n| :---: | --- |\n| a | b |"
        table = parse(markdown).children[0]
        assert isinstance(table, TableElement)
        assert table.align[0] == "center"
        assert table.children[1].children[1] == _cell("b")


@pytest.mark.integration
class TestComponents:
    """Round trips of JSX components."""

    def test_callout(self, component_field):
        """Test a block component with content."""
        markdown = '<Callout type="warning">\nCareful\n</Callout>'
        root = parse(markdown, component_field)
        assert root.children == [
            ComponentElement(
                name="Callout",
                props={
                    "type": "warning",
                    "children": Root(children=[ParagraphElement(children=[TextLeaf(text="Careful")])]),
                },
            )
        ]
        assert stringify(root, component_field) == markdown

    def test_callout_from_mapping(self):
        """Test a field configuration given as a mapping."""
        field = {
            "templates": [
                {"name": "Callout", "fields": [{"name": "type"}, {"name": "children", "type": "rich-text"}]}
            ]
        }
        markdown = '<Callout type="warning">\nCareful\n</Callout>'
        assert stringify(parse(markdown, field), field) == markdown

    def test_self_closing_props(self, hero_field):
        """Test JSON props and mapped image props."""
        markdown = '<Hero image="/a.png" tags={["x", "y"]} />'
        root = parse(markdown, hero_field)
        assert root.children[0].props == {"image": "/a.png", "tags": ["x", "y"]}
        assert stringify(root, hero_field) == markdown

    def test_rich_text_prop(self, hero_field):
        """Test a nested rich-text prop written as a fragment."""
        root = parse("<Hero title={<>**Big** news</>} />", hero_field)
        title = root.children[0].props["title"]
        leaves = [TextLeaf(text="Big", bold=True), TextLeaf(text=" news")]
        assert title == Root(children=[ParagraphElement(children=leaves)])
        markdown = stringify(root, hero_field)
        assert markdown == "<Hero title={<>\n**Big** news\n</>} />"
        assert parse(markdown, hero_field) == root

    def test_inline_component(self):
        """Test a component inside a paragraph."""
        root = parse('Hello <Badge label="new" /> world')
        assert root.children[0].children == [
            TextLeaf(text="Hello "),
            ComponentInlineElement(name="Badge", props={"label": "new"}),
            TextLeaf(text=" world"),
        ]
        assert stringify(root) == 'Hello <Badge label="new" /> world'

    def test_nested_components(self, component_field):
        """Test components inside component content."""
        markdown = '<Callout type="outer">\n<Callout type="inner">\nDeep\n</Callout>\n</Callout>'
        root = parse(markdown, component_field)
        inner = root.children[0].props["children"].children[0]
        assert inner.props["type"] == "inner"
        assert stringify(root, component_field) == markdown


@pytest.mark.integration
class TestShortcodes:
    """Round trips of shortcodes."""

    def test_leaf_shortcode(self, component_field):
        """Test a shortcode with a positional value."""
        markdown = '{{< signature "Jane" >}}'
        root = parse(markdown, component_field)
        assert root.children == [ComponentElement(name="signature", props={"_value": "Jane"})]
        assert stringify(root, component_field) == markdown

    def test_block_shortcode(self, component_field):
        """Test a shortcode wrapping content."""
        markdown = '{{% notice level="warn" %}}\nBe **careful**\n{{% /notice %}}'
        root = parse(markdown, component_field)
        notice = root.children[0]
        assert notice.props["level"] == "warn"
        assert notice.props["children"] == Root(
            children=[ParagraphElement(children=[TextLeaf(text="Be "), TextLeaf(text="careful", bold=True)])]
        )
        assert stringify(root, component_field) == markdown

    def test_inline_shortcode(self, component_field):
        """Test a leaf shortcode inside a paragraph."""
        markdown = 'Signed {{< signature "Jane" >}} today'
        root = parse(markdown, component_field)
        assert root.children[0].children[1] == ComponentInlineElement(name="signature", props={"_value": "Jane"})
        assert stringify(root, component_field) == markdown

    def test_match_name(self):
        """Test a shortcode whose written name differs from the template name."""
        template = {
            "name": "signature",
            "fields": [{"name": "_value"}],
            "match": {"start": "[[", "end": "]]", "name": "sig"},
        }
        field = {"templates": [template]}
        root = parse('[[ sig "Ann" ]]', field)
        assert root.children == [ComponentElement(name="signature", props={"_value": "Ann"})]
        assert stringify(root, field) == '[[ sig "Ann" ]]'

    def test_nested_same_name_shortcode(self, box_field):
        """Test a block shortcode inside the content of a shortcode of the same template."""
        root = parse("{{< box >}}\nA\n{{< box >}}\nB\n{{< /box >}}\nC\n{{< /box >}}", box_field)
        inner = root.children[0].props["children"].children[1]
        assert inner == ComponentElement(
            name="box", props={"children": Root(children=[ParagraphElement(children=[TextLeaf(text="B")])])}
        )
        written = stringify(root, box_field)
        assert "<box>" not in written
        assert written == "{{< box >}}\nA\n\n{{< box >}}\nB\n{{< /box >}}\n\nC\n{{< /box >}}"
        assert parse(written, box_field) == root

    def test_shortcodes_inside_block_shortcode(self, component_field):
        """Test inline and leaf shortcodes in the content of a block shortcode."""
        markdown = (
            '{{% notice level="warn" %}}\nSee {{< signature "Jane" >}}\n\n'
            '{{< signature "Ann" >}}\n{{% /notice %}}'
        )
        root = parse(markdown, component_field)
        content = root.children[0].props["children"].children
        assert ComponentInlineElement(name="signature", props={"_value": "Jane"}) in content[0].children
        assert content[1] == ComponentElement(name="signature", props={"_value": "Ann"})
        assert stringify(root, component_field) == markdown

    def test_first_declared_template_wins(self):
        """Test that the first template wins when two share the same shortcode syntax."""
        match = {"start": "{{<", "end": ">}}", "name": "q"}
        field = {
            "templates": [
                {"name": "quote", "fields": [{"name": "_value"}], "match": match},
                {"name": "quip", "fields": [{"name": "_value"}], "match": match},
            ]
        }
        root = parse('{{< q "Hi" >}}', field)
        assert root.children == [ComponentElement(name="quote", props={"_value": "Hi"})]
        assert stringify(root, field) == '{{< q "Hi" >}}'

    def test_shared_start_delimiter(self):
        """Test that templates sharing a start delimiter are told apart by name."""
        field = {
            "templates": [
                {"name": "sig", "fields": [{"name": "_value"}], "match": {"start": "{{<", "end": ">}}"}},
                {"name": "signature", "fields": [{"name": "_value"}], "match": {"start": "{{<", "end": ">}}"}},
            ]
        }
        markdown = '{{< signature "Jane" >}}\n\n{{< sig "Ann" >}}'
        root = parse(markdown, field)
        assert root.children == [
            ComponentElement(name="signature", props={"_value": "Jane"}),
            ComponentElement(name="sig", props={"_value": "Ann"}),
        ]
        assert stringify(root, field) == markdown


@pytest.mark.integration
class TestInvalidMarkdown:
    """Recovery from MDX that cannot be read."""

    def test_unclosed_component(self, component_field):
        """Test that an unclosed element yields the invalid-markdown sentinel."""
        markdown = "<Callout>\nHello"
        root = parse(markdown, component_field)
        assert len(root.children) == 1
        invalid = root.children[0]
        assert isinstance(invalid, InvalidMarkdownElement)
        assert invalid.value == markdown
        assert "closing tag" in invalid.message
        assert invalid.position == {"line": 1, "column": 1}

    def test_invalid_returns_original_text(self, component_field):
        """Test that stringify gives back the original text."""
        markdown = "Some text\n\n<Callout>\nunclosed"
        assert stringify(parse(markdown, component_field), component_field) == markdown

    def test_bad_expression(self):
        """Test that an attribute expression that is not JSON is recovered."""
        root = parse("<Chart data={compute()} />")
        assert root.children[0].type == "invalid_markdown"
        assert "Unable to parse expression" in root.children[0].message

    def test_depth_errors_propagate(self):
        """Test that nesting beyond the limit is not recovered."""
        field = {"parser": {"maxDepth": 1}}
        with pytest.raises(NestingDepthError):
            parse("<Box>\n<Box>\nx\n</Box>\n</Box>", field)


@pytest.mark.integration
class TestErrors:
    """Errors reported by stringify."""

    def test_string_argument(self):
        """Test that passing text to stringify is rejected."""
        with pytest.raises(MalformedCallError, match="Expected an object to stringify, but received a string"):
            stringify("# Title")

    def test_none_argument(self):
        """Test that passing None to stringify is rejected."""
        with pytest.raises(MalformedCallError):
            stringify(None)

    def test_global_templates(self):
        """Test that global templates are rejected."""
        with pytest.raises(ConfigurationError, match="Global templates are not supported"):
            stringify(parse("Hi"), {"templates": ["SharedCallout"]})

    def test_global_templates_ignored_by_parse(self):
        """Test that parse skips global templates."""
        assert parse("Hi", {"templates": ["SharedCallout"]}).children[0].children == [TextLeaf(text="Hi")]

    def test_code_conflict(self):
        """Test that code spanning differently formatted leaves is rejected."""
        root = Root(
            children=[
                ParagraphElement(children=[TextLeaf(text="a", code=True, bold=True), TextLeaf(text="b", code=True)])
            ]
        )
        with pytest.raises(MarkConflictError):
            stringify(root)

    def test_code_block_in_list(self):
        """Test that code blocks inside list items are rejected."""
        root = Root(children=[ListElement(children=[ListItemElement(children=[CodeBlockElement(value="x")])])])
        with pytest.raises(UnsupportedNodeError):
            stringify(root)

    def test_unnamed_component(self):
        """Test that components without a name are rejected."""
        with pytest.raises(MalformedCallError, match="Expected a name"):
            stringify(Root(children=[ComponentElement(name="")]))


_formatted_leaves = st.lists(
    st.builds(
        TextLeaf,
        text=st.text(alphabet="abc ", min_size=1, max_size=4),
        bold=st.booleans(),
        italic=st.booleans(),
        strikethrough=st.booleans(),
    ),
    max_size=8,
)


@pytest.mark.integration
class TestFormattingProperty:
    """Property tests for writing and reading formatted text."""

    @given(_formatted_leaves)
    def test_parse_restores_written_leaves(self, leaves):
        """Test that parsing the written text gives back the merged leaves."""
        leaves = [TextLeaf(text="A"), *leaves, TextLeaf(text="Z")]
        root = Root(children=[ParagraphElement(children=leaves)])
        assert parse(stringify(root)).children == [ParagraphElement(children=_merge(leaves))]
