"""Tests for batch document processing."""

from pathlib import Path

import pytest

from sphinx_docs.sources.crawler import CrawledPage
from sphinx_docs.sources.processor import DocumentProcessor

LIST_MARKUP = "Title\n=====\n\nIntro text.\n\n* one\n* two\n"


@pytest.fixture
def source_tree(tmp_path):
    source = tmp_path / "docs"
    (source / "sub").mkdir(parents=True)
    (source / "good.rst").write_text("Good\n====\n\nHello world.\n", encoding="utf-8")
    (source / "sub" / "other.rst").write_text("Other\n=====\n\nNested page.\n", encoding="utf-8")
    (source / "bad.rst").write_bytes(b"\xff\xfe\x00broken")
    return source


class TestProcessContent:
    """Test in-memory conversion."""

    def test_optimize_enabled(self):
        """Test the cleanup pass runs when optimize is on."""
        result = DocumentProcessor().process_content(LIST_MARKUP, "list.rst")

        assert result.success
        assert "• one" in result.markdown

    def test_optimize_disabled(self):
        """Test plain converter output when optimize is off."""
        result = DocumentProcessor(optimize=False).process_content(LIST_MARKUP, "list.rst")

        assert result.success
        assert result.markdown == "# Title\n\nIntro text.\n\n- one\n- two\n"

    def test_undecodable_bytes(self):
        """Test ParseError becomes a failed result."""
        result = DocumentProcessor().process_content(b"\xff\xfe", "broken.rst")

        assert not result.success
        assert result.source == "broken.rst"
        assert "UTF-8" in result.error


class TestProcessFile:
    """Test single file conversion."""

    def test_missing_file(self, tmp_path):
        """Test a missing source is reported, not raised."""
        result = DocumentProcessor().process_file(tmp_path / "missing.rst")

        assert not result.success
        assert result.error

    def test_without_output_path(self, source_tree):
        """Test nothing is written when no output path is given."""
        result = DocumentProcessor().process_file(source_tree / "good.rst")

        assert result.success
        assert result.output_path is None
        assert "Hello world." in result.markdown

    def test_writes_output(self, source_tree, tmp_path):
        """Test the Markdown lands at the output path."""
        target = tmp_path / "out" / "good.md"
        result = DocumentProcessor().process_file(source_tree / "good.rst", target)

        assert result.output_path == str(target)
        assert target.read_text(encoding="utf-8") == result.markdown


class TestProcessDirectory:
    """Test directory conversion."""

    def test_mirrors_layout_and_continues_after_failure(self, source_tree, tmp_path):
        """Test a bad file is skipped while the rest is converted."""
        output = tmp_path / "out"

        summary = DocumentProcessor().process_directory(source_tree, output)

        assert summary.converted == 2
        assert summary.failed == 1
        assert (output / "good.md").is_file()
        assert (output / "sub" / "other.md").is_file()
        assert not (output / "bad.md").exists()

        failed = [result for result in summary.results if not result.success]
        assert Path(failed[0].source).name == "bad.rst"

    def test_non_recursive(self, source_tree, tmp_path):
        """Test subdirectories are ignored without recursion."""
        output = tmp_path / "out"

        summary = DocumentProcessor().process_directory(source_tree, output, recursive=False)

        assert len(summary.results) == 2
        assert not (output / "sub").exists()


class TestProcessPages:
    """Test conversion of crawled pages."""

    def test_unique_filenames(self, tmp_path):
        """Test duplicate and empty titles get distinct file names."""
        pages = [
            CrawledPage(url="https://d.example.com/a.html", title="Install", content="Install\n=======\n\nA.\n", path="a"),
            CrawledPage(url="https://d.example.com/b.html", title="Install", content="Install\n=======\n\nB.\n", path="b"),
            CrawledPage(url="https://d.example.com/", title="???", content="Text only.\n", path=""),
        ]

        summary = DocumentProcessor().process_pages(pages, tmp_path)

        assert summary.converted == 3
        assert sorted(p.name for p in tmp_path.iterdir()) == ["install-2.md", "install.md", "page.md"]
        assert "B." in (tmp_path / "install-2.md").read_text(encoding="utf-8")
