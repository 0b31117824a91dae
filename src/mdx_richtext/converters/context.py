#  Copyright (c) 2025 Tom Villani, Ph.D.
#
# src/mdx_richtext/converters/context.py
"""Immutable state threaded through tree conversion."""

from __future__ import annotations

from dataclasses import dataclass, replace
from typing import Callable

from mdx_richtext.exceptions import NestingDepthError
from mdx_richtext.options.richtext import RichTextField, Template, TemplateField

ImageUrlMapper = Callable[[str], str]


def identity_url(url: str) -> str:
    return url


@dataclass(frozen=True)
class ConversionContext:
    """Configuration and nesting depth for one conversion.

    Parameters
    ----------
    field : RichTextField
        Field whose templates and parser settings apply
    image_url_mapper : callable
        Applied once to every image URL encountered
    depth : int
        Current nesting depth

    """

    field: RichTextField
    image_url_mapper: ImageUrlMapper = identity_url
    depth: int = 0

    @property
    def max_depth(self) -> int:
        return self.field.parser.max_depth

    def descend(self) -> ConversionContext:
        """Return a context one level deeper.

        Raises
        ------
        NestingDepthError
            If the new depth exceeds the configured maximum

        """
        if self.depth + 1 > self.max_depth:
            raise NestingDepthError(self.max_depth)
        return replace(self, depth=self.depth + 1)

    def nested(self, template_field: TemplateField) -> ConversionContext:
        """Context for a rich-text prop; its own templates are searched before the enclosing ones."""
        return replace(self, field=self.field.nested(template_field))

    def find_template(self, name: str) -> Template | None:
        return self.field.find_template(name)

    def map_image(self, url: str) -> str:
        return self.image_url_mapper(url) if url else url
