"""Pytest configuration and shared fixtures for the mdx_richtext test suite.

This module provides shared fixtures and test configuration used across the
unit and integration tests.
"""

import os

import pytest
from hypothesis import Phase, Verbosity, settings

from mdx_richtext.options.richtext import RichTextField, ShortcodeMatch, Template, TemplateField

# Register custom Hypothesis profiles
settings.register_profile("ci", max_examples=200, verbosity=Verbosity.verbose)
settings.register_profile("dev", max_examples=50)
settings.register_profile(
    "debug", max_examples=10, verbosity=Verbosity.verbose, phases=[Phase.explicit, Phase.reuse, Phase.generate]
)
settings.load_profile(os.getenv("HYPOTHESIS_PROFILE", "dev"))


def pytest_configure(config):
    """Configure pytest with custom markers."""
    config.addinivalue_line("markers", "unit: Unit tests - fast, isolated component tests")
    config.addinivalue_line("markers", "integration: Integration tests - component interaction tests")


@pytest.fixture
def callout_template() -> Template:
    """Block JSX component with a string prop and rich-text children."""
    return Template(
        name="Callout",
        fields=(
            TemplateField(name="type"),
            TemplateField(name="children", type="rich-text"),
        ),
    )


@pytest.fixture
def signature_template() -> Template:
    """Leaf shortcode with a positional value."""
    return Template(
        name="signature",
        fields=(TemplateField(name="_value"),),
        match=ShortcodeMatch(start="{{<", end=">}}"),
    )


@pytest.fixture
def notice_template() -> Template:
    """Block shortcode wrapping rich-text content."""
    return Template(
        name="notice",
        fields=(
            TemplateField(name="level"),
            TemplateField(name="children", type="rich-text"),
        ),
        match=ShortcodeMatch(start="{{%", end="%}}"),
    )


@pytest.fixture
def component_field(callout_template, signature_template, notice_template) -> RichTextField:
    """Field configuration with JSX and shortcode templates."""
    return RichTextField(templates=(callout_template, signature_template, notice_template))
