#  Copyright (c) 2025 Tom Villani, Ph.D.
#
# tests/unit/document/test_document_serialization.py
"""Unit tests for the document tree and its editor JSON form.

Tests cover:
- Node type tags
- Placeholder children on void elements
- Flag serialization on text leaves
- Nested rich-text props
- Strict and lenient handling of unknown types

"""

import json

import pytest

from mdx_richtext.document.nodes import (
    CodeBlockElement,
    ComponentElement,
    HeadingElement,
    HorizontalRuleElement,
    ImageElement,
    LinkElement,
    ListElement,
    ParagraphElement,
    Root,
    TableElement,
    TextLeaf,
    empty_root,
)
from mdx_richtext.document.serialization import (
    dict_to_document,
    document_to_dict,
    document_to_json,
    json_to_document,
)
from mdx_richtext.exceptions import UnsupportedNodeError, ValidationError


@pytest.mark.unit
class TestNodeTypes:
    """Tests for editor type tags."""

    def test_heading_type(self):
        """Test that headings are tagged by depth."""
        assert HeadingElement(depth=2).type == "h2"

    def test_heading_depth_validated(self):
        """Test that invalid heading depths are rejected."""
        with pytest.raises(ValueError):
            HeadingElement(depth=9)

    def test_list_type(self):
        """Test that lists are tagged by kind."""
        assert ListElement(ordered=True).type == "ol"
        assert ListElement().type == "ul"

    def test_empty_root(self):
        """Test the tree for empty input."""
        root = empty_root()
        assert len(root.children) == 1
        assert root.children[0].is_empty

    def test_text_flags(self):
        """Test that only set flags are reported."""
        assert TextLeaf(text="x", bold=True, code=True).flags == frozenset({"bold", "code"})


@pytest.mark.unit
class TestDocumentToDict:
    """Tests for serializing document nodes."""

    def test_text_leaf_lists_only_set_flags(self):
        """Test that unset flags are omitted."""
        assert document_to_dict(TextLeaf(text="x", italic=True)) == {"type": "text", "text": "x", "italic": True}

    def test_void_elements_have_placeholder(self):
        """Test that void elements carry an empty text child."""
        placeholder = [{"type": "text", "text": ""}]
        assert document_to_dict(HorizontalRuleElement())["children"] == placeholder
        assert document_to_dict(CodeBlockElement(value="x", lang="py"))["children"] == placeholder
        assert document_to_dict(ImageElement(url="/a.png"))["children"] == placeholder

    def test_link(self):
        """Test link serialization."""
        result = document_to_dict(LinkElement(url="https://example.com", children=[TextLeaf(text="x")]))
        assert result == {
            "type": "a",
            "url": "https://example.com",
            "children": [{"type": "text", "text": "x"}],
        }

    def test_component_with_nested_root(self):
        """Test that rich-text props are serialized as trees."""
        body = Root(children=[ParagraphElement(children=[TextLeaf(text="Hi")])])
        result = document_to_dict(ComponentElement(name="Callout", props={"type": "warning", "children": body}))
        assert result["type"] == "mdxJsxFlowElement"
        assert result["props"]["type"] == "warning"
        assert result["props"]["children"]["type"] == "root"

    def test_table_alignment(self):
        """Test that table alignment goes under props."""
        assert document_to_dict(TableElement(align=["left", None]))["props"] == {"align": ["left", None]}


@pytest.mark.unit
class TestDictToDocument:
    """Tests for deserializing editor dictionaries."""

    def test_heading(self):
        """Test heading deserialization."""
        node = dict_to_document({"type": "h3", "children": [{"type": "text", "text": "T"}]})
        assert isinstance(node, HeadingElement)
        assert node.depth == 3

    def test_text_without_type(self):
        """Test that a mapping without a type is read as text."""
        assert dict_to_document({"text": "x", "bold": True}) == TextLeaf(text="x", bold=True)

    def test_component_props_restore_roots(self):
        """Test that nested trees in props are rebuilt."""
        node = dict_to_document(
            {
                "type": "mdxJsxFlowElement",
                "name": "Callout",
                "props": {"children": {"type": "root", "children": [{"type": "p", "children": []}]}},
            }
        )
        assert isinstance(node.props["children"], Root)

    def test_unknown_type_strict(self):
        """Test that unknown types raise in strict mode."""
        with pytest.raises(UnsupportedNodeError):
            dict_to_document({"type": "video"})

    def test_unknown_type_lenient(self):
        """Test that unknown children are skipped when not strict."""
        root = dict_to_document(
            {"type": "root", "children": [{"type": "video"}, {"type": "hr"}]},
            strict_mode=False,
        )
        assert len(root.children) == 1
        assert isinstance(root.children[0], HorizontalRuleElement)

    def test_rejects_non_dict(self):
        """Test that other values are rejected."""
        with pytest.raises(ValidationError):
            dict_to_document(["p"])


@pytest.mark.unit
class TestJson:
    """Tests for the JSON helpers."""

    def test_round_trip(self):
        """Test that a tree survives JSON serialization."""
        root = Root(
            children=[
                HeadingElement(depth=1, children=[TextLeaf(text="Título")]),
                ParagraphElement(children=[TextLeaf(text="a", bold=True), TextLeaf(text="b")]),
                TableElement(align=["center"]),
            ]
        )
        text = document_to_json(root)
        assert "Título" in text
        assert json_to_document(text) == root

    def test_indent(self):
        """Test pretty printing."""
        assert "\n" in document_to_json(empty_root(), indent=2)
        assert json.loads(document_to_json(empty_root()))["type"] == "root"

    def test_invalid_json(self):
        """Test that malformed JSON is reported as a validation error."""
        with pytest.raises(ValidationError, match="Invalid document JSON"):
            json_to_document("{not json")
