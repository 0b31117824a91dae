#  Copyright (c) 2025 Tom Villani, Ph.D.
#
# tests/unit/extensions/test_shortcodes.py
"""Unit tests for shortcode attribute handling and text rewrites."""

import pytest

from mdx_richtext.constants import DIRECTIVE_CLOSE, DIRECTIVE_OPEN
from mdx_richtext.exceptions import ConfigurationError, RichTextParseError
from mdx_richtext.extensions.shortcodes import (
    format_directive,
    format_shortcode_attributes,
    jsx_to_shortcode,
    parse_shortcode_attributes,
    rewrite_directive_delimiters,
    shortcode_to_jsx,
)
from mdx_richtext.options.richtext import ShortcodeMatch, Template, TemplateField


@pytest.mark.unit
class TestShortcodeAttributes:
    """Tests for reading and writing shortcode attributes."""

    def test_positional_and_keyed(self):
        """Test a positional value followed by a keyed one."""
        assert parse_shortcode_attributes(' "bar123" size="large"') == {"_value": "bar123", "size": "large"}

    def test_quote_styles(self):
        """Test single quotes, bare values and escapes."""
        assert parse_shortcode_attributes("a='x y' b=z c=\"say \\\"hi\\\"\"") == {
            "a": "x y",
            "b": "z",
            "c": 'say "hi"',
        }

    def test_empty(self):
        """Test that no attributes give an empty mapping."""
        assert parse_shortcode_attributes("   ") == {}

    def test_two_positional_values(self):
        """Test that only one positional value is accepted."""
        with pytest.raises(RichTextParseError, match="at most one positional value"):
            parse_shortcode_attributes('"a" "b"')

    def test_unparseable(self):
        """Test that stray characters are rejected."""
        with pytest.raises(RichTextParseError):
            parse_shortcode_attributes("=x")

    def test_format_puts_positional_first(self):
        """Test that the positional value is written first."""
        assert format_shortcode_attributes({"size": "large", "_value": "bar123"}) == '"bar123" size="large"'

    def test_format_escapes_quotes(self):
        """Test that quotes in values are escaped."""
        assert format_shortcode_attributes({"a": 'x"y'}) == 'a="x\\"y"'


@pytest.mark.unit
class TestDirectiveDelimiters:
    """Tests for rewriting internal directive delimiters."""

    def test_leaf(self, signature_template):
        """Test a shortcode without content."""
        text = format_directive("signature", {"_value": "Jane"})
        result = rewrite_directive_delimiters(text, [signature_template.shortcode_pattern()])
        assert result == '{{< signature "Jane" >}}'

    def test_container(self, notice_template):
        """Test opening and closing tags."""
        text = f"{format_directive('notice', {'level': 'warn'})}\nHi\n{format_directive('notice', {}, closing=True)}"
        result = rewrite_directive_delimiters(text, [notice_template.shortcode_pattern()])
        assert result == '{{% notice level="warn" %}}\nHi\n{{% /notice %}}'

    def test_match_name(self):
        """Test that the match name is written instead of the template name."""
        template = Template(name="signature", match=ShortcodeMatch(start="[[", end="]]", name="sig"))
        text = f"{DIRECTIVE_OPEN}signature{DIRECTIVE_CLOSE}"
        assert rewrite_directive_delimiters(text, [template.shortcode_pattern()]) == "[[ sig ]]"

    def test_unknown_template(self):
        """Test that directives without a template are rejected."""
        with pytest.raises(ConfigurationError, match="No shortcode template found"):
            rewrite_directive_delimiters(f"{DIRECTIVE_OPEN}missing{DIRECTIVE_CLOSE}", [])

    def test_plain_text_untouched(self):
        """Test that text without directives is returned unchanged."""
        assert rewrite_directive_delimiters("a {{< b >}}", []) == "a {{< b >}}"


@pytest.mark.unit
class TestLegacyRewrites:
    """Tests for the standalone shortcode and JSX text rewrites."""

    def test_keyed_shortcode_to_jsx(self):
        """Test a shortcode with keyed attributes."""
        template = Template(name="signature", match=ShortcodeMatch(start="{{<", end=">}}"))
        assert shortcode_to_jsx('{{< signature foo="bar123">}}', template) == '<signature foo="bar123">\n</signature>'

    def test_keyed_jsx_to_shortcode(self):
        """Test the inverse rewrite."""
        template = Template(name="signature", match=ShortcodeMatch(start="{{<", end=">}}"))
        assert jsx_to_shortcode('<signature foo="bar123">\n</signature>', template) == '{{< signature foo="bar123" >}}'

    def test_positional_value(self, signature_template):
        """Test that positional values map to the _value attribute."""
        jsx = shortcode_to_jsx('{{< signature "Jane" >}}', signature_template)
        assert jsx == '<signature _value="Jane">\n</signature>'
        assert jsx_to_shortcode(jsx, signature_template) == '{{< signature "Jane" >}}'

    def test_block_shortcode_to_jsx(self, notice_template):
        """Test that block shortcodes keep their content."""
        source = '{{% notice level="warn" %}}\nHi\n{{% /notice %}}'
        assert shortcode_to_jsx(source, notice_template) == '<notice level="warn">\nHi\n</notice>'

    def test_template_without_match(self):
        """Test that JSX-only templates cannot be rewritten."""
        with pytest.raises(ConfigurationError):
            shortcode_to_jsx("x", Template(name="Callout", fields=(TemplateField(name="children", type="rich-text"),)))
