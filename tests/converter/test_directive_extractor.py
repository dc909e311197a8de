"""Tests for the directive extractor."""

import pytest

from sphinx_docs.converter.directive_extractor import DirectiveExtractor
from sphinx_docs.converter.errors import DirectiveMalformed


class TestDirectiveExtractor:
    """Test the greedy directive block scanner."""

    def test_extract_options_and_body(self):
        """Test name, argument, options and de-indented content."""
        lines = [
            ".. image:: pic.png",
            "   :alt: A picture",
            "   :width: 200",
            "",
            "   Caption text",
            "",
            "Next paragraph",
        ]
        directive, next_index = DirectiveExtractor().extract(lines, 0)

        assert directive.name == "image"
        assert directive.arguments == ["pic.png"]
        assert directive.argument == "pic.png"
        assert directive.options == {"alt": "A picture", "width": "200"}
        assert directive.content == ["Caption text", ""]
        assert next_index == 6
        assert directive.raw == "\n".join(lines[:5])

    def test_directive_without_body(self):
        """Test that a directive directly followed by text has no content."""
        directive, next_index = DirectiveExtractor().extract([".. automodule:: foo", "Text"], 0)

        assert directive.content == []
        assert directive.raw == ".. automodule:: foo"
        assert next_index == 1

    def test_domain_qualified_name(self):
        """Test directive names with a domain prefix."""
        directive, _ = DirectiveExtractor().extract([".. py:function:: spam(eggs)"], 0)

        assert directive.name == "py:function"
        assert directive.argument == "spam(eggs)"

    def test_name_is_lowercased(self):
        """Test that directive names are normalized to lowercase."""
        directive, _ = DirectiveExtractor().extract([".. Code-Block:: python", "", "   x"], 0)

        assert directive.name == "code-block"

    def test_flag_option_without_value(self):
        """Test options that carry no value."""
        directive, _ = DirectiveExtractor().extract([".. code-block:: python", "   :linenos:", "", "   x"], 0)

        assert directive.options == {"linenos": ""}
        assert directive.content == ["x"]

    def test_nested_directive_is_kept_as_content(self):
        """Test that the scanner does not recurse into nested directives."""
        lines = [".. container::", "", "   .. note::", "", "      Inner", ""]
        directive, next_index = DirectiveExtractor().extract(lines, 0)

        assert directive.content == [".. note::", "", "   Inner", ""]
        assert next_index == len(lines)

    def test_malformed_open_line_raises(self):
        """Test that an unparseable directive line raises DirectiveMalformed."""
        extractor = DirectiveExtractor()

        assert extractor.is_directive_open(".. 9lives::")
        with pytest.raises(DirectiveMalformed):
            extractor.extract([".. 9lives::"], 0)

    def test_is_directive_open(self):
        """Test which lines are handed to the extractor."""
        extractor = DirectiveExtractor()

        assert extractor.is_directive_open(".. code-block:: python")
        assert extractor.is_directive_open(".. toctree::")
        assert not extractor.is_directive_open(".. _label:")
        assert not extractor.is_directive_open(".. |sub| image:: x.png")
        assert not extractor.is_directive_open(".. just a comment")
        assert not extractor.is_directive_open("   .. indented:: x")
