#  Copyright (c) 2025 Tom Villani, Ph.D.
#
# src/mdx_richtext/options/base.py
"""Base classes for parser and renderer options.

This module defines the foundation classes for the engine options used by
the markdown parser and renderer.
"""

from __future__ import annotations

import sys
from dataclasses import dataclass, field, replace
from typing import Any

if sys.version_info >= (3, 11):
    from typing import Self
else:
    from typing_extensions import Self

from mdx_richtext.constants import DEFAULT_MAX_NESTING_DEPTH
from mdx_richtext.exceptions import ValidationError


@dataclass(frozen=True)
class CloneFrozenMixin:
    """Mixin providing frozen dataclass cloning capabilities.

    Options objects are immutable; this adds a way to derive a modified copy.
    """

    def create_updated(self, **kwargs: Any) -> Self:
        """Create a new instance with updated field values.

        Parameters
        ----------
        **kwargs : Any
            Field names and their new values

        Returns
        -------
        Self
            New instance with specified fields updated

        """
        return replace(self, **kwargs)


@dataclass(frozen=True)
class BaseRendererOptions(CloneFrozenMixin):
    """Base class for renderer options.

    Notes
    -----
    Subclasses should define format-specific rendering options as frozen dataclass fields.

    """


@dataclass(frozen=True)
class BaseParserOptions(CloneFrozenMixin):
    """Base class for parser options.

    Parameters
    ----------
    max_depth : int
        Maximum block nesting accepted before parsing is aborted

    """

    max_depth: int = field(
        default=DEFAULT_MAX_NESTING_DEPTH,
        metadata={"help": "Maximum block nesting depth accepted by the parser", "type": int},
    )

    def __post_init__(self) -> None:
        """Validate numeric ranges for parser options.

        Raises
        ------
        ValidationError
            If ``max_depth`` is not positive.

        """
        if self.max_depth <= 0:
            raise ValidationError(
                f"max_depth must be positive, got {self.max_depth}",
                parameter_name="max_depth",
                parameter_value=self.max_depth,
            )
