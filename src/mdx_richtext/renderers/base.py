#  Copyright (c) 2025 Tom Villani, Ph.D.
#
# src/mdx_richtext/renderers/base.py
"""Base classes for AST renderers.

The BaseRenderer provides a consistent interface for turning the generic
markdown tree into text, and InlineContentMixin the capture-and-restore
pattern used to render nested inline content.
"""

from __future__ import annotations

from abc import ABC, abstractmethod

from mdx_richtext.ast import Document
from mdx_richtext.ast.nodes import Node
from mdx_richtext.exceptions import ValidationError
from mdx_richtext.options.base import BaseRendererOptions


class BaseRenderer(ABC):
    """Abstract base class for AST renderers.

    Parameters
    ----------
    options : BaseRendererOptions or None, default = None
        Format-specific rendering options

    """

    def __init__(self, options: BaseRendererOptions | None = None):
        """Initialize the renderer with optional configuration."""
        self.options = options

    @abstractmethod
    def render_to_string(self, doc: Document) -> str:
        """Render the AST to a string.

        Parameters
        ----------
        doc : Document
            AST Document node to render

        Returns
        -------
        str
            Rendered document

        """
        pass

    @staticmethod
    def _validate_options_type(options: BaseRendererOptions | None, expected_type: type, renderer_name: str) -> None:
        """Validate that options are of the correct type for this renderer.

        Raises
        ------
        ValidationError
            If options are not None and not an instance of expected_type

        """
        if options is not None and not isinstance(options, expected_type):
            raise ValidationError(
                f"{renderer_name} expected options of type '{expected_type.__name__}' "
                f"but received '{type(options).__name__}'",
                parameter_name="options",
                parameter_value=type(options),
            )


class InlineContentMixin:
    """Mixin providing inline content rendering for text-based renderers.

    The implementing class must have an ``_output`` attribute (list[str])
    that its visitor methods append to.
    """

    _output: list[str]

    def _render_inline_content(self, content: list[Node]) -> str:
        """Render a list of inline nodes to text.

        Parameters
        ----------
        content : list of Node
            Inline nodes to render

        Returns
        -------
        str
            Rendered inline content as a string

        """
        saved_output = self._output
        self._output = []

        for node in content:
            node.accept(self)

        result = "".join(self._output)
        self._output = saved_output
        return result
