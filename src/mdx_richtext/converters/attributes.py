#  Copyright (c) 2025 Tom Villani, Ph.D.
#
# src/mdx_richtext/converters/attributes.py
"""Conversion between component props and markdown attributes.

A component in the document tree keeps its props in a plain dictionary. In
markdown the same component is either a JSX element, whose attributes may
hold any JSON value, or a shortcode, whose attributes are strings only.
Which of the two is written depends on the component's template: templates
declaring a shortcode ``match`` are written as shortcodes.

Rich-text props are nested document trees. The ``children`` prop becomes the
element content; any other rich-text prop is written as a JSX fragment
expression holding markdown (``title={<>**Hi**</>}``).
"""

from __future__ import annotations

import json
import logging
from dataclasses import dataclass, field
from typing import Any, Callable, Iterable

from mdx_richtext.ast.nodes import AttributeValue, MdxExpression, MdxJsxAttribute, Node
from mdx_richtext.constants import CHILDREN_FIELD_NAME, Placement
from mdx_richtext.converters.context import ConversionContext
from mdx_richtext.document.nodes import ComponentElement, ComponentInlineElement, Root
from mdx_richtext.exceptions import RichTextParseError
from mdx_richtext.options.richtext import Template, TemplateField

logger = logging.getLogger(__name__)

ChildrenConverter = Callable[[Root, ConversionContext], list[Node]]


@dataclass
class SerializedComponent:
    """Markdown-side view of a component's props.

    Parameters
    ----------
    attributes : list of MdxJsxAttribute
        Attributes in prop order. String-valued only when ``use_directive``.
    children : list of Node
        Converted ``children`` prop
    use_directive : bool
        Whether the component is written as a shortcode
    directive_type : {'block', 'leaf'}
        Shortcode placement, from the template

    """

    attributes: list[MdxJsxAttribute] = field(default_factory=list)
    children: list[Node] = field(default_factory=list)
    use_directive: bool = False
    directive_type: Placement = "leaf"

    def directive_attributes(self) -> dict[str, str]:
        return {attribute.name: str(attribute.value) for attribute in self.attributes}


def _nested_context(ctx: ConversionContext, template_field: TemplateField | None) -> ConversionContext:
    if template_field is not None and template_field.is_rich_text:
        return ctx.nested(template_field)
    return ctx


def _map_images(value: Any, ctx: ConversionContext) -> Any:
    if isinstance(value, str):
        return ctx.map_image(value)
    if isinstance(value, list):
        return [_map_images(item, ctx) for item in value]
    return value


def _literal_attribute_value(value: Any) -> AttributeValue:
    if isinstance(value, (str, bool, int, float)):
        return value
    return MdxExpression(json.dumps(value, ensure_ascii=False))


def to_attributes(
    element: ComponentElement | ComponentInlineElement,
    ctx: ConversionContext,
    convert_children: ChildrenConverter,
) -> SerializedComponent:
    """Serialize a component's props into markdown attributes.

    Parameters
    ----------
    element : ComponentElement or ComponentInlineElement
        Component to serialize
    ctx : ConversionContext
        Conversion state; supplies the component's template
    convert_children : callable
        Converts the ``children`` prop (a :class:`Root`) into markdown
        nodes, block or inline depending on the caller

    Returns
    -------
    SerializedComponent

    """
    template = ctx.find_template(element.name)
    if template is None:
        logger.warning(f"No template found for component '{element.name}', writing its props as they are")
    use_directive = template is not None and template.match is not None
    result = SerializedComponent(
        use_directive=use_directive,
        directive_type=template.placement if template is not None else "leaf",
    )
    logger.debug(f"Writing component '{element.name}' as {'a shortcode' if use_directive else 'JSX'}")

    for name, value in element.props.items():
        if value is None:
            continue
        template_field = template.field(name) if template is not None else None

        if name == CHILDREN_FIELD_NAME and isinstance(value, Root):
            result.children = convert_children(value, _nested_context(ctx, template_field))
            continue

        if isinstance(value, Root):
            if use_directive:
                logger.warning(f"Dropping rich-text prop '{name}' of shortcode '{element.name}'")
                continue
            from mdx_richtext.api import document_to_markdown

            body = document_to_markdown(value, _nested_context(ctx, template_field).descend())
            result.attributes.append(MdxJsxAttribute(name=name, value=MdxExpression(f"<>\n{body}\n</>")))
            continue

        if template_field is not None and template_field.type == "image":
            value = _map_images(value, ctx)

        if use_directive:
            if isinstance(value, str):
                result.attributes.append(MdxJsxAttribute(name=name, value=value))
            else:
                logger.warning(
                    f"Dropping non-string prop '{name}' of shortcode '{element.name}' "
                    f"({type(value).__name__} values cannot be written as shortcode attributes)"
                )
            continue

        result.attributes.append(MdxJsxAttribute(name=name, value=_literal_attribute_value(value)))

    return result


def _decode_expression(name: str, element_name: str, expression: MdxExpression) -> Any:
    try:
        return json.loads(expression.value)
    except json.JSONDecodeError as e:
        raise RichTextParseError(
            f"Unable to parse expression for attribute '{name}' of <{element_name}>: {expression.value}",
            original_error=e,
        ) from e


def to_props(
    element_name: str,
    attributes: Iterable[MdxJsxAttribute],
    ctx: ConversionContext,
    children: Root | None = None,
) -> dict[str, Any]:
    """Decode markdown attributes into component props.

    Parameters
    ----------
    element_name : str
        Component name, used to find its template
    attributes : iterable of MdxJsxAttribute
        Attributes as parsed
    ctx : ConversionContext
        Conversion state
    children : Root or None
        Already converted element content, stored as the ``children`` prop

    Returns
    -------
    dict
        Props keyed by attribute name

    Raises
    ------
    RichTextParseError
        If an attribute expression is neither a fragment nor a JSON literal

    """
    template: Template | None = ctx.find_template(element_name)
    props: dict[str, Any] = {}
    for attribute in attributes:
        template_field = template.field(attribute.name) if template is not None else None
        value: Any = attribute.value
        if value is None:
            value = True
        elif isinstance(value, MdxExpression):
            if value.is_fragment:
                from mdx_richtext.api import markdown_to_document

                value = markdown_to_document(value.fragment_body, _nested_context(ctx, template_field).descend())
            else:
                value = _decode_expression(attribute.name, element_name, value)

        if template_field is not None and template_field.type == "image":
            value = _map_images(value, ctx)
        props[attribute.name] = value

    if children is not None:
        props[CHILDREN_FIELD_NAME] = children
    return props
