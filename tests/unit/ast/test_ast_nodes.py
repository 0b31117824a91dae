#  Copyright (c) 2025 Tom Villani, Ph.D.
#
# tests/unit/ast/test_ast_nodes.py
"""Unit tests for the generic markdown tree nodes."""

import pytest

from mdx_richtext.ast.nodes import (
    BlockQuote,
    Document,
    Emphasis,
    Heading,
    Link,
    List,
    ListItem,
    MdxExpression,
    MdxJsxAttribute,
    Paragraph,
    Table,
    TableCell,
    TableRow,
    Text,
    get_node_children,
)


@pytest.mark.unit
class TestHeading:
    """Tests for heading validation."""

    @pytest.mark.parametrize("level", [1, 3, 6])
    def test_valid_levels(self, level):
        """Test that levels 1 to 6 are accepted."""
        assert Heading(level=level).level == level

    @pytest.mark.parametrize("level", [0, 7])
    def test_invalid_levels(self, level):
        """Test that levels outside 1 to 6 are rejected."""
        with pytest.raises(ValueError, match="Heading level must be 1-6"):
            Heading(level=level)


@pytest.mark.unit
class TestMdxExpression:
    """Tests for JSX attribute expressions."""

    def test_fragment_detection(self):
        """Test that fragments are recognized."""
        expression = MdxExpression("<>\n**bold**\n</>")
        assert expression.is_fragment
        assert expression.fragment_body == "**bold**"

    def test_fragment_with_surrounding_whitespace(self):
        """Test that whitespace around the fragment is ignored."""
        assert MdxExpression("  <>text</>  ").fragment_body == "text"

    def test_plain_expression(self):
        """Test that other expressions are not fragments."""
        assert not MdxExpression('["a", "b"]').is_fragment

    def test_bare_attribute(self):
        """Test that a bare attribute has no value."""
        assert MdxJsxAttribute(name="open").value is None


@pytest.mark.unit
class TestGetNodeChildren:
    """Tests for child traversal."""

    def test_inline_content(self):
        """Test children of nodes holding inline content."""
        paragraph = Paragraph(content=[Text("a"), Emphasis(content=[Text("b")])])
        assert len(get_node_children(paragraph)) == 2

    def test_block_children(self):
        """Test children of container blocks."""
        document = Document(children=[BlockQuote(children=[Paragraph()])])
        assert isinstance(get_node_children(document)[0], BlockQuote)

    def test_list_items(self):
        """Test that list items are the children of a list."""
        items = [ListItem(), ListItem()]
        assert get_node_children(List(items=items)) == items

    def test_table_header_first(self):
        """Test that the header row comes before body rows."""
        header = TableRow(cells=[TableCell(content=[Text("h")])], is_header=True)
        body = TableRow(cells=[TableCell(content=[Text("b")])])
        assert get_node_children(Table(header=header, rows=[body])) == [header, body]

    def test_leaf_has_no_children(self):
        """Test that text nodes have no children."""
        assert get_node_children(Text("x")) == []

    def test_link_content(self):
        """Test that link content is traversed."""
        assert get_node_children(Link(url="a", content=[Text("x")])) == [Text("x")]
