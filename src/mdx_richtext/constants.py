#  Copyright (c) 2025 Tom Villani, Ph.D.
"""Constants and default values for mdx_richtext.

This module centralizes the literal types, delimiter characters and default
configuration values used across the package.

Constants are organized by category:
1. Type Definitions - All Literal types and type aliases
2. Document Tree - Node type tags and mark ordering
3. Markdown Formatting - Renderer defaults
4. Shortcodes and Directives - Delimiters used during stringify
"""

from __future__ import annotations

from typing import Literal

# =============================================================================
# Type Definitions - All Literal Types and Type Aliases
# =============================================================================

ParserType = Literal["markdown", "mdx"]
SkipEscaping = Literal["all", "html", "none"]
Placement = Literal["block", "leaf"]
MarkKind = Literal["strong", "emphasis", "inlineCode", "delete"]
Alignment = Literal["left", "center", "right"]
EmphasisSymbol = Literal["*", "_"]
BulletSymbol = Literal["*", "-", "+"]
CodeFenceChar = Literal["`", "~"]

FieldType = Literal[
    "string",
    "number",
    "boolean",
    "datetime",
    "image",
    "reference",
    "object",
    "rich-text",
    "password",
]

# =============================================================================
# Document Tree
# =============================================================================

# Priority order used to choose the outermost wrapper when several marks tie
MARK_PRIORITY: tuple[MarkKind, ...] = ("strong", "emphasis", "inlineCode", "delete")

# Leaf flag carried by a text leaf for each mark kind
MARK_FLAGS: dict[MarkKind, str] = {
    "strong": "bold",
    "emphasis": "italic",
    "inlineCode": "code",
    "delete": "strikethrough",
}

TEXT_FLAGS: tuple[str, ...] = ("bold", "italic", "code", "strikethrough")

# Prop name holding the positional (unkeyed) shortcode value
UNKEYED_ATTRIBUTE_NAME = "_value"

# Prop name reserved for rich-text component children
CHILDREN_FIELD_NAME = "children"

# Component name used by the editor for table payloads
TABLE_COMPONENT_NAME = "table"

DEFAULT_MAX_NESTING_DEPTH = 64

# =============================================================================
# Markdown Formatting
# =============================================================================

DEFAULT_PARSER_TYPE: ParserType = "mdx"
DEFAULT_SKIP_ESCAPING: SkipEscaping = "none"
DEFAULT_BULLET_SYMBOL: BulletSymbol = "*"
DEFAULT_EMPHASIS_SYMBOL: EmphasisSymbol = "*"
DEFAULT_CODE_FENCE_CHAR: CodeFenceChar = "`"
DEFAULT_CODE_FENCE_MIN = 3
DEFAULT_TABLE_PIPE_ESCAPE = True

# Characters escaped wherever they appear in text content
MARKDOWN_ALWAYS_ESCAPE = "\\`*{}[]"

# =============================================================================
# Shortcodes and Directives
# =============================================================================

# Private-use characters delimiting directives in intermediate output. They are
# rewritten into each template's own delimiters before stringify returns.
DIRECTIVE_OPEN = "\ue000"
DIRECTIVE_CLOSE = "\ue001"
