"""Tests for the converter facade."""

import frontmatter
import pytest

from sphinx_docs.converter import ConversionOptions, ParseError, SphinxConverter, decode_markup
from sphinx_docs.converter.directive_rules import ADMONITION_ICONS


class TestConvertToMarkdown:
    """Test end-to-end conversion of markup text."""

    def test_title_and_body(self):
        """Test the minimal titled document."""
        result = SphinxConverter().convert_to_markdown("Title\n=====\n\nBody text.\n")

        assert result == "# Title\n\nBody text.\n"

    def test_note_admonition(self):
        """Test note admonitions render as an icon blockquote."""
        result = SphinxConverter().convert_to_markdown("Title\n=====\n\n.. note::\n\n   Be careful.\n")

        assert f"> {ADMONITION_ICONS['note']} **NOTE**" in result
        assert "> Be careful." in result

    def test_multi_paragraph_admonition(self):
        """Test every paragraph of an admonition stays inside one blockquote."""
        result = SphinxConverter().convert_to_markdown(
            "Guide\n=====\n\n.. note::\n\n   First para.\n\n   Second para.\n\n   Third.\n"
        )

        assert result == (
            f"# Guide\n\n> {ADMONITION_ICONS['note']} **NOTE**\n"
            ">\n> First para.\n>\n> Second para.\n>\n> Third.\n"
        )
        assert [line for line in result.split("\n") if line.startswith("#")] == ["# Guide"]

    def test_late_title_keeps_source_order(self):
        """Test text after a late title is not moved ahead of earlier sections."""
        result = SphinxConverter().convert_to_markdown("Sub\n---\n\nfirst body\n\nMain\n====\n\nafter main\n")

        assert result == "# Main\n\n### Sub\n\nfirst body\n\nafter main\n"

    def test_doc_reference(self):
        """Test :doc: references with reference preservation."""
        result = SphinxConverter().convert_to_markdown(
            "Title\n=====\n\nSee :doc:`Target<label>`.\n",
            options=ConversionOptions(preserve_references=True),
        )

        assert "[label](label.md)" in result

    def test_deterministic(self):
        """Test that converting twice yields identical output."""
        text = "Title\n=====\n\nIntro.\n\nSection\n-------\n\n* a\n* b\n\n.. code-block:: python\n\n   x = 1\n"
        converter = SphinxConverter()

        assert converter.convert_to_markdown(text) == converter.convert_to_markdown(text)

    def test_stable_level_mapping(self):
        """Test a '~' section renders at the same depth regardless of earlier headers."""
        converter = SphinxConverter()
        first = converter.convert_to_markdown("A\n===\n\nB\n~~~\n\nText.\n")
        second = converter.convert_to_markdown("A\n===\n\nC\n---\n\nText.\n\nB\n~~~\n\nText.\n")

        assert "#### B" in first
        assert "#### B" in second

    def test_code_block_in_place(self):
        """Test code-block directives render where they appear."""
        text = "Title\n=====\n\nBefore.\n\n.. code-block:: python\n\n   x = 1\n\nAfter.\n"
        result = SphinxConverter().convert_to_markdown(text)

        assert result == "# Title\n\nBefore.\n\n```python\nx = 1\n```\n\nAfter.\n"

    def test_toctree_placeholder(self):
        """Test toctree blocks become a comment placeholder."""
        text = "Title\n=====\n\n.. toctree::\n   :maxdepth: 2\n\n   install\n"
        result = SphinxConverter().convert_to_markdown(text)

        assert "<!-- TOCTREE:\n:maxdepth: 2\n\ninstall\n-->" in result

    def test_malformed_directive_degrades_to_text(self):
        """Test an empty code block is kept as literal text."""
        result = SphinxConverter().convert_to_markdown(".. code-block:: python\n\nText\n")

        assert ".. code-block:: python" in result
        assert "Text" in result

    def test_empty_input(self):
        """Test converting empty input."""
        assert SphinxConverter().convert_to_markdown("") == ""

    def test_bytes_with_bom_and_crlf(self):
        """Test UTF-8 bytes with a byte order mark and CRLF newlines."""
        result = SphinxConverter().convert_to_markdown(b"\xef\xbb\xbfTitle\r\n=====\r\n\r\nBody.\r\n")

        assert result == "# Title\n\nBody.\n"

    def test_include_metadata(self):
        """Test YAML front matter with extracted metadata."""
        text = "Guide\n=====\n\n:author: Jane Doe\n:date: 2024-01-01\n\nText.\n"
        result = SphinxConverter().convert_to_markdown(
            text, "guide.rst", ConversionOptions(include_metadata=True)
        )

        post = frontmatter.loads(result)
        assert post["title"] == "Guide"
        assert post["author"] == "Jane Doe"
        assert str(post["date"]) == "2024-01-01"
        assert post["source"] == "guide.rst"
        assert post.content.lstrip().startswith("# Guide")


class TestDecodeErrors:
    """Test rejection of input that is not text."""

    def test_invalid_utf8(self):
        """Test undecodable bytes raise ParseError naming the document."""
        with pytest.raises(ParseError) as exc_info:
            SphinxConverter().convert_to_markdown(b"\xff\xfe bad", "broken.rst")

        assert exc_info.value.document_id == "broken.rst"
        assert "broken.rst" in str(exc_info.value)

    def test_nul_bytes(self):
        """Test text containing NUL characters is rejected."""
        with pytest.raises(ParseError):
            decode_markup("abc\x00def")

    def test_non_text_input(self):
        """Test non-string input is rejected."""
        with pytest.raises(ParseError):
            decode_markup(42)

    def test_tabs_are_expanded(self):
        """Test tab characters are expanded to spaces."""
        assert decode_markup("a\tb") == "a       b"


class TestHelpers:
    """Test post-processing and metadata extraction."""

    def test_post_process(self):
        """Test whitespace normalization."""
        assert SphinxConverter().post_process("a  \n\n\n\nb\n\n") == "a\n\nb\n"

    def test_extract_metadata_with_overline(self):
        """Test title extraction from an overlined title."""
        metadata = SphinxConverter().extract_metadata("=====\nTitle\n=====\n\nText.\n")

        assert metadata == {"title": "Title"}
