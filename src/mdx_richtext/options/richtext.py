#  Copyright (c) 2025 Tom Villani, Ph.D.
#
# src/mdx_richtext/options/richtext.py
"""Rich-text field configuration.

A :class:`RichTextField` describes one rich-text field of a content schema:
the component templates it may embed and how its markdown is parsed. The
classes are immutable and validated on construction, and ``from_dict``
accepts the camelCase mappings produced by JavaScript tooling::

    >>> field = RichTextField.from_dict({
    ...     "name": "body",
    ...     "parser": {"type": "markdown", "skipEscaping": "html"},
    ...     "templates": [{
    ...         "name": "signature",
    ...         "match": {"start": "{{<", "end": ">}}"},
    ...         "fields": [{"name": "_value", "type": "string"}],
    ...     }],
    ... })
    >>> field.templates[0].placement
    'leaf'

"""

from __future__ import annotations

import re
from dataclasses import dataclass, field
from typing import Any, Mapping, Union

from mdx_richtext.constants import (
    CHILDREN_FIELD_NAME,
    DEFAULT_MAX_NESTING_DEPTH,
    DEFAULT_PARSER_TYPE,
    DEFAULT_SKIP_ESCAPING,
    ParserType,
    Placement,
    SkipEscaping,
)
from mdx_richtext.exceptions import ConfigurationError, ValidationError
from mdx_richtext.options.base import CloneFrozenMixin

_PARSER_TYPES = ("markdown", "mdx")
_SKIP_ESCAPING = ("all", "html", "none")
_CAMEL_RE = re.compile(r"(?<!^)(?=[A-Z])")


def _snake_keys(data: Mapping[str, Any]) -> dict[str, Any]:
    return {_CAMEL_RE.sub("_", key).lower(): value for key, value in data.items()}


def _require_mapping(data: Any, what: str) -> Mapping[str, Any]:
    if not isinstance(data, Mapping):
        raise ValidationError(f"{what} must be a mapping, got {type(data).__name__}", parameter_value=data)
    return data


@dataclass(frozen=True)
class ShortcodeMatch(CloneFrozenMixin):
    """Delimiters of a shortcode.

    Parameters
    ----------
    start : str
        Opening delimiter, e.g. ``"{{<"``
    end : str
        Closing delimiter, e.g. ``">}}"``
    name : str or None
        Name written between the delimiters; defaults to the template name

    """

    start: str
    end: str
    name: str | None = None

    def __post_init__(self) -> None:
        """Reject empty delimiters."""
        if not self.start or not self.end:
            raise ValidationError(
                "Shortcode match requires non-empty start and end delimiters",
                parameter_name="match",
                parameter_value=(self.start, self.end),
            )


@dataclass(frozen=True)
class ShortcodePattern:
    """A fully resolved shortcode syntax for one template.

    Parameters
    ----------
    start : str
        Opening delimiter
    end : str
        Closing delimiter
    name : str
        Name token written between the delimiters
    template_name : str
        Name of the template the shortcode produces
    placement : {"block", "leaf"}
        Whether the shortcode wraps content between an opening and closing tag

    """

    start: str
    end: str
    name: str
    template_name: str
    placement: Placement


@dataclass(frozen=True)
class TemplateField(CloneFrozenMixin):
    """One field of a component template.

    Parameters
    ----------
    name : str
        Prop name
    type : str
        Field type, e.g. ``"string"``, ``"image"`` or ``"rich-text"``
    label : str or None
        Display label
    list : bool
        Whether the field holds a list of values
    required : bool
        Whether the field is required
    fields : tuple[TemplateField, ...]
        Sub-fields of an object field
    templates : tuple[Template | str, ...]
        Templates available to a nested rich-text field
    extra : dict
        Any additional keys, kept verbatim

    """

    name: str
    type: str = "string"
    label: str | None = None
    list: bool = False
    required: bool = False
    fields: tuple[TemplateField, ...] = ()
    templates: tuple[Union[Template, str], ...] = ()
    extra: dict[str, Any] = field(default_factory=dict, compare=False)

    def __post_init__(self) -> None:
        """Reject unnamed fields."""
        if not self.name:
            raise ValidationError("Template fields must have a name", parameter_name="name")

    @property
    def is_rich_text(self) -> bool:
        return self.type == "rich-text"

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> TemplateField:
        """Build a field from a (possibly camelCase) mapping.

        Parameters
        ----------
        data : Mapping
            Field definition

        Returns
        -------
        TemplateField

        """
        values = _snake_keys(_require_mapping(data, "Template field"))
        known = {
            "name": values.pop("name", ""),
            "type": values.pop("type", "string"),
            "label": values.pop("label", None),
            "list": bool(values.pop("list", False)),
            "required": bool(values.pop("required", False)),
            "fields": tuple(cls.from_dict(sub) for sub in values.pop("fields", None) or ()),
            "templates": tuple(_template_from_value(t) for t in values.pop("templates", None) or ()),
        }
        return cls(extra=values, **known)


@dataclass(frozen=True)
class Template(CloneFrozenMixin):
    """A component template.

    Parameters
    ----------
    name : str
        Component name used in JSX and in the document tree
    fields : tuple[TemplateField, ...]
        Declared props
    label : str or None
        Display label
    inline : bool
        Whether the component is used inline by the editor
    match : ShortcodeMatch or None
        Shortcode delimiters. Templates with a match are written as
        shortcodes instead of JSX.

    """

    name: str
    fields: tuple[TemplateField, ...] = ()
    label: str | None = None
    inline: bool = False
    match: ShortcodeMatch | None = None

    def __post_init__(self) -> None:
        """Reject unnamed templates."""
        if not self.name:
            raise ValidationError("Templates must have a name", parameter_name="name")

    @property
    def placement(self) -> Placement:
        """Return ``"block"`` when the template has a rich-text ``children`` field."""
        children = self.field(CHILDREN_FIELD_NAME)
        return "block" if children is not None and children.is_rich_text else "leaf"

    def field(self, name: str) -> TemplateField | None:
        """Return the declared field called ``name``, if any."""
        for template_field in self.fields:
            if template_field.name == name:
                return template_field
        return None

    def shortcode_pattern(self) -> ShortcodePattern | None:
        """Return the resolved shortcode syntax, or None for JSX templates."""
        if self.match is None:
            return None
        return ShortcodePattern(
            start=self.match.start,
            end=self.match.end,
            name=self.match.name or self.name,
            template_name=self.name,
            placement=self.placement,
        )

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> Template:
        """Build a template from a (possibly camelCase) mapping.

        Parameters
        ----------
        data : Mapping
            Template definition

        Returns
        -------
        Template

        """
        values = _snake_keys(_require_mapping(data, "Template"))
        match = values.get("match")
        return cls(
            name=values.get("name", ""),
            fields=tuple(TemplateField.from_dict(f) for f in values.get("fields") or ()),
            label=values.get("label"),
            inline=bool(values.get("inline", False)),
            match=_match_from_value(match) if match else None,
        )


def _match_from_value(value: Any) -> ShortcodeMatch:
    if isinstance(value, ShortcodeMatch):
        return value
    values = _require_mapping(value, "Template match")
    return ShortcodeMatch(start=values.get("start", ""), end=values.get("end", ""), name=values.get("name"))


def _template_from_value(value: Any) -> Union[Template, str]:
    if isinstance(value, (Template, str)):
        return value
    return Template.from_dict(value)


@dataclass(frozen=True)
class ParserConfig(CloneFrozenMixin):
    """How a rich-text field's markdown is parsed and written.

    Parameters
    ----------
    type : {"markdown", "mdx"}, default "mdx"
        ``"mdx"`` enables JSX components
    skip_escaping : {"all", "html", "none"}, default "none"
        Escaping to suppress when writing; honoured for ``"markdown"`` only
    max_depth : int
        Maximum nesting depth accepted in either direction

    """

    type: ParserType = DEFAULT_PARSER_TYPE
    skip_escaping: SkipEscaping = DEFAULT_SKIP_ESCAPING
    max_depth: int = DEFAULT_MAX_NESTING_DEPTH

    def __post_init__(self) -> None:
        """Validate the parser type, escaping mode and depth."""
        if self.type not in _PARSER_TYPES:
            raise ValidationError(
                f"Parser type must be one of {_PARSER_TYPES}, got {self.type!r}",
                parameter_name="type",
                parameter_value=self.type,
            )
        if self.skip_escaping not in _SKIP_ESCAPING:
            raise ValidationError(
                f"skip_escaping must be one of {_SKIP_ESCAPING}, got {self.skip_escaping!r}",
                parameter_name="skip_escaping",
                parameter_value=self.skip_escaping,
            )
        if self.max_depth <= 0:
            raise ValidationError(
                f"max_depth must be positive, got {self.max_depth}",
                parameter_name="max_depth",
                parameter_value=self.max_depth,
            )

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> ParserConfig:
        values = _snake_keys(_require_mapping(data, "Parser config"))
        return cls(
            type=values.get("type", DEFAULT_PARSER_TYPE),
            skip_escaping=values.get("skip_escaping") or DEFAULT_SKIP_ESCAPING,
            max_depth=values.get("max_depth", DEFAULT_MAX_NESTING_DEPTH),
        )


@dataclass(frozen=True)
class RichTextField(CloneFrozenMixin):
    """Configuration of one rich-text field.

    Parameters
    ----------
    name : str, default "body"
        Field name
    templates : tuple[Template | str, ...]
        Component templates. Strings denote global templates, which parse
        ignores and stringify rejects.
    parser : ParserConfig
        Parser configuration
    enclosing_templates : tuple[Template, ...]
        Templates reachable from the enclosing field, searched after
        ``templates``. Set by :meth:`nested`.

    """

    name: str = "body"
    templates: tuple[Union[Template, str], ...] = ()
    parser: ParserConfig = field(default_factory=ParserConfig)
    enclosing_templates: tuple[Template, ...] = field(default=(), compare=False, repr=False)

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> RichTextField:
        """Build a field configuration from a (possibly camelCase) mapping.

        Parameters
        ----------
        data : Mapping
            Field definition with optional ``templates`` and ``parser`` keys

        Returns
        -------
        RichTextField

        Raises
        ------
        ValidationError
            If any part of the configuration is invalid

        """
        values = _snake_keys(_require_mapping(data, "Rich-text field"))
        parser = values.get("parser")
        return cls(
            name=values.get("name") or "body",
            templates=tuple(_template_from_value(t) for t in values.get("templates") or ()),
            parser=ParserConfig.from_dict(parser) if parser else ParserConfig(),
        )

    @classmethod
    def coerce(cls, value: Union[RichTextField, Mapping[str, Any], None]) -> RichTextField:
        """Accept a field, a mapping or None and return a validated field."""
        if value is None:
            return cls()
        if isinstance(value, RichTextField):
            return value
        if isinstance(value, Mapping):
            return cls.from_dict(value)
        raise ValidationError(
            f"Expected a RichTextField or mapping, got {type(value).__name__}",
            parameter_name="field",
            parameter_value=value,
        )

    def named_templates(self) -> list[Template]:
        """Return the templates, skipping global (string) templates."""
        return [t for t in self.templates if isinstance(t, Template)]

    def find_template(self, name: str) -> Template | None:
        """Return the first template called ``name``, if any.

        The field's own templates are searched before those of the
        enclosing field, matching the order of :meth:`reachable_templates`.
        """
        for template in (*self.named_templates(), *self.enclosing_templates):
            if template.name == name:
                return template
        return None

    def reachable_templates(self) -> list[Template]:
        """Return the templates usable anywhere in this field.

        Templates of rich-text fields nested inside components follow the
        field's own templates, then come the enclosing field's templates; the
        first template with a given name wins.
        """
        found: dict[str, Template] = {}
        pending = [*self.named_templates(), *self.enclosing_templates]
        while pending:
            template = pending.pop(0)
            if template.name in found:
                continue
            found[template.name] = template
            for template_field in template.fields:
                if template_field.is_rich_text:
                    pending.extend(t for t in template_field.templates if isinstance(t, Template))
        return list(found.values())

    def shortcode_patterns(self) -> list[ShortcodePattern]:
        """Return the shortcode syntaxes of all reachable templates, in declaration order."""
        patterns = []
        for template in self.reachable_templates():
            pattern = template.shortcode_pattern()
            if pattern is not None:
                patterns.append(pattern)
        return patterns

    def ensure_stringifiable(self) -> None:
        """Raise ConfigurationError when global templates are configured."""
        for template in self.templates:
            if isinstance(template, str):
                raise ConfigurationError(
                    "Global templates are not supported",
                    parameter_name="templates",
                    parameter_value=template,
                )

    def nested(self, template_field: TemplateField) -> RichTextField:
        """Configuration for a rich-text prop nested inside a component.

        The prop's own templates come first. Templates reachable from this
        field stay available, since the shortcode grammar recognizes them at
        any depth.
        """
        return RichTextField(
            name=template_field.name,
            templates=template_field.templates,
            parser=self.parser,
            enclosing_templates=tuple(self.reachable_templates()),
        )
