"""mdx_richtext - Markdown and MDX to rich document tree conversion.

mdx_richtext converts the markdown stored in a content repository into the
structured tree edited by a rich-text editor, and back. Besides CommonMark and
GFM tables and strikethrough, it understands:

- MDX JSX components (``<Callout type="warning">...</Callout>``), described by
  templates that declare each component's fields
- Shortcodes (``{{< signature "Jane" >}}``), for templates that declare their
  own delimiters
- Nested rich-text props, written as JSX fragments (``title={<>**Hi**</>}``)

Formatting is kept as flags on text leaves in the document tree and as nested
emphasis nodes in markdown; the conversion between the two is lossless for
bold, italic and strikethrough.

Requirements
------------
- Python 3.10+
- mistune 3

Examples
--------
Round trip with a component template:

    >>> from mdx_richtext import parse, stringify
    >>> field = {"templates": [{"name": "Callout", "fields": [
    ...     {"name": "type", "type": "string"},
    ...     {"name": "children", "type": "rich-text"},
    ... ]}]}
    >>> root = parse('<Callout type="warning">\\nCareful\\n</Callout>', field)
    >>> stringify(root, field)
    '<Callout type="warning">\\nCareful\\n</Callout>'

Shortcodes:

    >>> field = {"templates": [{"name": "signature", "fields": [{"name": "_value"}],
    ...                         "match": {"start": "{{<", "end": ">}}"}}]}
    >>> stringify(parse('{{< signature "Jane" >}}', field), field)
    '{{< signature "Jane" >}}'

"""

#  Copyright (c) 2025 Tom Villani, Ph.D.

import sys

if sys.version_info < (3, 10):
    raise ImportError(
        "mdx_richtext requires Python 3.10 or later. "
        f"You are using Python {sys.version_info.major}.{sys.version_info.minor}."
    )

__version__ = "0.1.0"

from mdx_richtext.api import parse, stringify
from mdx_richtext.document.nodes import Root
from mdx_richtext.document.serialization import document_to_dict, document_to_json, dict_to_document, json_to_document
from mdx_richtext.exceptions import (
    ConfigurationError,
    MalformedCallError,
    MarkConflictError,
    MdxRichTextError,
    NestingDepthError,
    ParsingError,
    RichTextParseError,
    UnsupportedNodeError,
    ValidationError,
)
from mdx_richtext.extensions.shortcodes import jsx_to_shortcode, shortcode_to_jsx
from mdx_richtext.options.richtext import ParserConfig, RichTextField, ShortcodeMatch, Template, TemplateField

__all__ = [
    "__version__",
    "parse",
    "stringify",
    "Root",
    "document_to_dict",
    "dict_to_document",
    "document_to_json",
    "json_to_document",
    "RichTextField",
    "ParserConfig",
    "Template",
    "TemplateField",
    "ShortcodeMatch",
    "shortcode_to_jsx",
    "jsx_to_shortcode",
    "MdxRichTextError",
    "ValidationError",
    "ConfigurationError",
    "MalformedCallError",
    "ParsingError",
    "RichTextParseError",
    "UnsupportedNodeError",
    "MarkConflictError",
    "NestingDepthError",
]
