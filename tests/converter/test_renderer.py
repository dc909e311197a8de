"""Tests for the Markdown renderer."""

from sphinx_docs.converter.data_classes import ConversionOptions, Directive, Document, Section
from sphinx_docs.converter.renderer import MarkdownRenderer


def render(text: str, **options) -> str:
    return MarkdownRenderer().render_content(text, ConversionOptions(**options))


class TestInlineRules:
    """Test the ordered inline substitutions."""

    def test_double_backtick_code(self):
        """Test inline literals become single-backtick spans."""
        assert render("Use ``foo()`` here.") == "Use `foo()` here."

    def test_emphasis_passes_through(self):
        """Test that strong and emphasis markers are unchanged."""
        assert render("This is **bold** and *italic*.") == "This is **bold** and *italic*."

    def test_bullet_markers(self):
        """Test bullet markers normalize to '- '."""
        assert render("* one\n+ two\n- three\n  * nested") == "- one\n- two\n- three\n  - nested"

    def test_enumerated_markers(self):
        """Test auto-numbered and parenthesized enumerators."""
        assert render("#. first\n#. second\n3) third") == "1. first\n1. second\n3. third"

    def test_doc_reference_preserved(self):
        """Test :doc: references become Markdown links."""
        assert render("See :doc:`Target<label>`.") == "See [label](label.md)."

    def test_doc_reference_bare(self):
        """Test :doc: references without reference preservation."""
        assert render("See :doc:`Target<label>`.", preserve_references=False) == "See label."

    def test_doc_reference_with_base_url(self):
        """Test :doc: references resolved against a base URL."""
        result = render(":doc:`install`", base_url="https://docs.example.com/")

        assert result == "[install](https://docs.example.com/install.md)"

    def test_ref_reference(self):
        """Test :ref: references become anchor links."""
        assert render(":ref:`getting started`") == "[getting started](#getting-started)"

    def test_code_roles(self):
        """Test Python domain roles become inline code."""
        assert render(":func:`~pkg.mod.run`") == "`run`"
        assert render(":py:class:`pkg.Widget`") == "`pkg.Widget`"

    def test_term_role(self):
        """Test glossary terms become their label."""
        assert render(":term:`API key <api-key>`") == "API key"

    def test_external_link(self):
        """Test decorated external links."""
        assert render("See `Python <https://python.org>`_ now.") == "See [Python](https://python.org) now."

    def test_named_link(self):
        """Test named hyperlink references lose their markup."""
        assert render("See `Python`_ docs.") == "See Python docs."


class TestLiteralBlocks:
    """Test '::' literal blocks."""

    def test_literal_block_becomes_fence(self):
        """Test the literal block with a trailing '::' paragraph."""
        result = render("Example::\n\n    code here\n    more\n\nAfter.")

        assert result == "Example:\n\n```\ncode here\nmore\n```\n\nAfter."

    def test_spaced_marker_is_removed(self):
        """Test that 'Text ::' drops both colons."""
        assert render("Example ::\n\n    x = 1\n") == "Example\n\n```\nx = 1\n```"

    def test_lone_marker_is_dropped(self):
        """Test that a paragraph of only '::' disappears."""
        assert render("::\n\n    x = 1\n") == "```\nx = 1\n```"

    def test_code_is_not_rewritten(self):
        """Test that inline rules never touch literal block content."""
        result = render("Run::\n\n    * not a bullet\n    ``raw``\n")

        assert result == "Run:\n\n```\n* not a bullet\n``raw``\n```"

    def test_shallow_indent_is_not_code(self):
        """Test that fewer than four spaces do not start a literal block."""
        result = render("Example::\n\n  two spaces\n")

        assert "```" not in result


class TestDocumentRendering:
    """Test heading depth and section layout."""

    def test_title_shifts_section_depth(self):
        """Test sections render one level deeper below a title."""
        document = Document(title="T", sections=[Section(title="S", level=2, content="Body\n")])

        assert MarkdownRenderer().render(document) == "# T\n\n### S\n\nBody\n\n"

    def test_depth_is_clamped(self):
        """Test heading depth never exceeds six."""
        document = Document(title="T", sections=[Section(title="Deep", level=6, content="")])

        assert MarkdownRenderer().render(document) == "# T\n\n###### Deep\n\n"

    def test_without_title(self):
        """Test sections keep their level without a title."""
        document = Document(sections=[Section(title="S", level=1, content="x\n")])

        assert MarkdownRenderer().render(document) == "# S\n\nx\n\n"

    def test_inline_markup_in_titles(self):
        """Test titles get inline code and roles but keep leading list-like markers."""
        document = Document(
            title="Using ``foo``",
            sections=[
                Section(title="The :class:`Parser` class", level=2, content=""),
                Section(title="1. Getting started", level=2, content=""),
            ],
        )

        assert MarkdownRenderer().render(document) == (
            "# Using `foo`\n\n### The `Parser` class\n\n### 1. Getting started\n\n"
        )


class TestDirectiveRendering:
    """Test directive output."""

    def test_code_block_with_caption(self):
        """Test code-block language and caption."""
        directive = Directive(
            name="code-block",
            arguments=["python"],
            options={"caption": "Example"},
            content=["    x = 1", ""],
        )

        assert MarkdownRenderer().render_directive(directive) == "*Example*\n\n```python\nx = 1\n```"

    def test_autodoc_placeholder(self):
        """Test auto* directives become placeholders."""
        renderer = MarkdownRenderer()

        assert renderer.render_directive(Directive(name="automodule", arguments=["pkg.mod"])) == (
            "<!-- AUTO-MODULE: pkg.mod -->"
        )
        assert renderer.render_directive(Directive(name="autoclass", arguments=["pkg.A"])) == (
            "<!-- AUTO-CLASS: pkg.A -->"
        )

    def test_image(self):
        """Test image directives become Markdown images."""
        directive = Directive(name="image", arguments=["pic.png"], options={"alt": "Alt"})

        assert MarkdownRenderer().render_directive(directive) == "![Alt](pic.png)"

    def test_unknown_directive_passes_through(self):
        """Test unrecognized directives are emitted verbatim."""
        directive = Directive(name="versionadded", arguments=["2.0"], raw=".. versionadded:: 2.0")

        assert MarkdownRenderer().render_directive(directive) == ".. versionadded:: 2.0"

    def test_malformed_directive_falls_back_to_raw(self):
        """Test an empty code block is emitted as its source text."""
        directive = Directive(name="code-block", arguments=["python"], raw=".. code-block:: python", offset=0)

        result = MarkdownRenderer().render_body("", [directive], ConversionOptions())

        assert result == ".. code-block:: python"
