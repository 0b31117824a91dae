#  Copyright (c) 2025 Tom Villani, Ph.D.
#
# src/mdx_richtext/options/markdown.py
"""Configuration options for the markdown parser and renderer.

The options here drive the external engine only. They are normally derived
from a :class:`~mdx_richtext.options.richtext.RichTextField` with the
``from_field`` constructors rather than built by hand.
"""

from __future__ import annotations

from dataclasses import dataclass, field

from mdx_richtext.constants import (
    DEFAULT_BULLET_SYMBOL,
    DEFAULT_CODE_FENCE_CHAR,
    DEFAULT_CODE_FENCE_MIN,
    DEFAULT_EMPHASIS_SYMBOL,
    DEFAULT_TABLE_PIPE_ESCAPE,
    BulletSymbol,
    CodeFenceChar,
    EmphasisSymbol,
)
from mdx_richtext.exceptions import ValidationError
from mdx_richtext.options.base import BaseParserOptions, BaseRendererOptions
from mdx_richtext.options.richtext import RichTextField, ShortcodePattern


@dataclass(frozen=True)
class MarkdownParserOptions(BaseParserOptions):
    """Configuration options for parsing markdown into the generic tree.

    Parameters
    ----------
    parse_jsx : bool, default True
        Recognize JSX elements (MDX mode). When False only shortcodes are
        added on top of CommonMark and GFM.
    jsx_names : tuple[str, ...], default ()
        Lower-case component names to treat as JSX in addition to any name
        starting with an upper-case letter.
    shortcode_patterns : tuple[ShortcodePattern, ...], default ()
        Shortcode delimiters to recognize, in declaration order.

    """

    parse_jsx: bool = field(
        default=True,
        metadata={"help": "Recognize JSX flow and text elements (MDX mode)"},
    )
    jsx_names: tuple[str, ...] = field(
        default=(),
        metadata={"help": "Component names recognized as JSX regardless of case"},
    )
    shortcode_patterns: tuple[ShortcodePattern, ...] = field(
        default=(),
        metadata={"help": "Shortcode delimiter patterns, first declared wins"},
    )

    @classmethod
    def from_field(cls, rich_text_field: RichTextField) -> MarkdownParserOptions:
        """Derive parser options from a rich-text field configuration.

        Global (string) templates are skipped here; they carry no syntax to
        recognize.

        Parameters
        ----------
        rich_text_field : RichTextField
            Field configuration

        Returns
        -------
        MarkdownParserOptions
            Options for :class:`~mdx_richtext.parsers.markdown.MarkdownParser`

        """
        return cls(
            parse_jsx=rich_text_field.parser.type == "mdx",
            jsx_names=tuple(t.name for t in rich_text_field.reachable_templates()),
            shortcode_patterns=tuple(rich_text_field.shortcode_patterns()),
            max_depth=rich_text_field.parser.max_depth,
        )


@dataclass(frozen=True)
class MarkdownRendererOptions(BaseRendererOptions):
    """Configuration options for rendering the generic tree to markdown.

    Parameters
    ----------
    escape_special : bool, default True
        Escape markdown punctuation in text content
    escape_html : bool, default True
        Escape ``<`` where it would otherwise open an HTML or JSX tag
    bullet_symbol : {"*", "-", "+"}, default "*"
        Marker used for unordered list items
    emphasis_symbol : {"*", "_"}, default "*"
        Delimiter used for emphasis
    code_fence_char : {"`", "~"}, default "`"
        Character used for fenced code blocks
    code_fence_min : int, default 3
        Minimum fence length
    table_pipe_escape : bool, default True
        Escape ``|`` inside table cells

    Notes
    -----
    List item content is indented by the marker width plus one space, so
    nested content lines up with the first character after the marker.

    """

    escape_special: bool = field(
        default=True,
        metadata={"help": "Escape markdown punctuation in text content"},
    )
    escape_html: bool = field(
        default=True,
        metadata={"help": "Escape '<' where it would open a tag"},
    )
    bullet_symbol: BulletSymbol = field(
        default=DEFAULT_BULLET_SYMBOL,
        metadata={"help": "Marker for unordered list items", "choices": ["*", "-", "+"]},
    )
    emphasis_symbol: EmphasisSymbol = field(
        default=DEFAULT_EMPHASIS_SYMBOL,
        metadata={"help": "Delimiter for emphasis", "choices": ["*", "_"]},
    )
    code_fence_char: CodeFenceChar = field(
        default=DEFAULT_CODE_FENCE_CHAR,
        metadata={"help": "Character for fenced code blocks", "choices": ["`", "~"]},
    )
    code_fence_min: int = field(
        default=DEFAULT_CODE_FENCE_MIN,
        metadata={"help": "Minimum fence length", "type": int},
    )
    table_pipe_escape: bool = field(
        default=DEFAULT_TABLE_PIPE_ESCAPE,
        metadata={"help": "Escape '|' inside table cells"},
    )

    def __post_init__(self) -> None:
        """Validate the fence length.

        Raises
        ------
        ValidationError
            If ``code_fence_min`` is below 3.

        """
        if self.code_fence_min < 3:
            raise ValidationError(
                f"code_fence_min must be at least 3, got {self.code_fence_min}",
                parameter_name="code_fence_min",
                parameter_value=self.code_fence_min,
            )

    @classmethod
    def from_field(cls, rich_text_field: RichTextField) -> MarkdownRendererOptions:
        """Derive renderer options from a rich-text field configuration.

        ``skip_escaping`` only takes effect for the plain markdown parser; MDX
        output is always escaped.

        Parameters
        ----------
        rich_text_field : RichTextField
            Field configuration

        Returns
        -------
        MarkdownRendererOptions
            Options for :class:`~mdx_richtext.renderers.markdown.MarkdownRenderer`

        """
        parser = rich_text_field.parser
        skip = parser.skip_escaping if parser.type == "markdown" else "none"
        return cls(escape_special=skip != "all", escape_html=skip == "none")
