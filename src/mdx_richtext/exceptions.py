#  Copyright (c) 2025 Tom Villani, Ph.D.
"""Custom exceptions for the mdx_richtext library.

This module defines specialized exception classes for the error conditions
that can occur while converting between markdown text and the rich document
tree.

Exception Hierarchy
-------------------
- MdxRichTextError (base exception)

  - ValidationError (parameter/option validation)
    - ConfigurationError (unsupported field or template configuration)
    - MalformedCallError (wrong argument type passed to an entry point)

  - ParsingError (input text parsing failures)
    - RichTextParseError (malformed MDX/shortcode syntax, recovered by parse)

  - UnsupportedNodeError (node kind with no mapping in the target tree)

  - MarkConflictError (mark combination that cannot be expressed)

  - NestingDepthError (input nested beyond the configured limit)

"""

from typing import Any


class MdxRichTextError(Exception):
    """Base exception class for all mdx_richtext-specific errors.

    Parameters
    ----------
    message : str
        Human-readable description of the error
    original_error : Exception, optional
        The original exception that caused this error, if applicable

    Attributes
    ----------
    message : str
        The error message
    original_error : Exception or None
        The wrapped original exception, if any

    """

    def __init__(self, message: str, original_error: Exception | None = None):
        """Initialize the error with a message and optional original exception."""
        super().__init__(message)
        self.message = message
        self.original_error = original_error


class ValidationError(MdxRichTextError):
    """Exception raised for invalid input parameters or options.

    Parameters
    ----------
    message : str
        Description of the validation error
    parameter_name : str, optional
        Name of the invalid parameter
    parameter_value : any, optional
        The invalid value that was provided
    original_error : Exception, optional
        The original exception that caused this error

    """

    def __init__(
        self,
        message: str,
        parameter_name: str | None = None,
        parameter_value: Any = None,
        original_error: Exception | None = None,
    ):
        """Initialize the validation error with parameter details."""
        super().__init__(message, original_error=original_error)
        self.parameter_name = parameter_name
        self.parameter_value = parameter_value


class ConfigurationError(ValidationError):
    """Exception raised when a field configuration cannot be honoured.

    Raised for global (string) templates, which are not supported, and for
    directives whose template cannot be found when delimiters are rewritten.
    """


class MalformedCallError(ValidationError):
    """Exception raised when an entry point receives an argument of the wrong type.

    Parameters
    ----------
    message : str
        Description of the malformed call
    parameter_value : any, optional
        The value that was received

    """

    def __init__(self, message: str, parameter_value: Any = None):
        """Initialize the malformed call error."""
        super().__init__(message, parameter_name="value", parameter_value=parameter_value)


class ParsingError(MdxRichTextError):
    """Exception raised when input text cannot be parsed."""


class RichTextParseError(ParsingError):
    """Exception raised for malformed MDX, JSX or shortcode syntax.

    ``parse`` recovers from this error by returning a document whose single
    child is an invalid-markdown sentinel carrying the original text.

    Parameters
    ----------
    message : str
        Description of the syntax problem
    position : dict, optional
        Location of the problem as ``{"line": int, "column": int}`` (both 1-based)
    original_error : Exception, optional
        The original exception that caused this error

    """

    def __init__(
        self,
        message: str,
        position: dict[str, int] | None = None,
        original_error: Exception | None = None,
    ):
        """Initialize the parse error with an optional source position."""
        super().__init__(message, original_error=original_error)
        self.position = position


class UnsupportedNodeError(MdxRichTextError):
    """Exception raised when a node kind has no mapping in the target tree.

    Parameters
    ----------
    node_kind : str
        Type tag or class name of the offending node
    context : str
        Where the node was encountered (e.g. ``"BlockElement"``)

    """

    def __init__(self, node_kind: str, context: str):
        """Initialize the error with the unsupported node kind."""
        super().__init__(f"{context}: {node_kind} is not supported")
        self.node_kind = node_kind
        self.context = context


class MarkConflictError(MdxRichTextError):
    """Exception raised when marks would have to be nested inside inline code."""

    def __init__(self, message: str = "Marks inside inline code are not supported"):
        """Initialize the mark conflict error."""
        super().__init__(message)


class NestingDepthError(MdxRichTextError):
    """Exception raised when a tree is nested deeper than the configured limit.

    Parameters
    ----------
    max_depth : int
        The limit that was exceeded

    """

    def __init__(self, max_depth: int):
        """Initialize the error with the exceeded limit."""
        super().__init__(f"Maximum nesting depth of {max_depth} exceeded")
        self.max_depth = max_depth


def position_from_offset(text: str, offset: int) -> dict[str, int]:
    """Compute a 1-based line/column position for an offset into ``text``.

    Parameters
    ----------
    text : str
        Source text
    offset : int
        Character offset into the source

    Returns
    -------
    dict
        ``{"line": int, "column": int}``

    """
    offset = max(0, min(offset, len(text)))
    line = text.count("\n", 0, offset) + 1
    line_start = text.rfind("\n", 0, offset) + 1
    return {"line": line, "column": offset - line_start + 1}


__all__ = [
    "MdxRichTextError",
    "ValidationError",
    "ConfigurationError",
    "MalformedCallError",
    "ParsingError",
    "RichTextParseError",
    "UnsupportedNodeError",
    "MarkConflictError",
    "NestingDepthError",
    "position_from_offset",
]
