"""Tests for the markup directory scanner."""

import tempfile
from pathlib import Path

import pytest

from sphinx_docs.sources.scanner import DirectoryScanner, ScannerConfig


def build_tree(root: Path):
    (root / "index.rst").write_text("Index\n=====\n")
    (root / "notes.txt").write_text("not markup")
    (root / ".hidden.rst").write_text("Hidden\n======\n")
    (root / "guide").mkdir()
    (root / "guide" / "install.rst").write_text("Install\n=======\n")
    (root / "_build").mkdir()
    (root / "_build" / "index.rst").write_text("Built\n=====\n")
    (root / "venv").mkdir()
    (root / "venv" / "pkg.rst").write_text("Pkg\n===\n")


class TestDirectoryScanner:
    """Test the DirectoryScanner component."""

    def test_scanner_config_defaults(self):
        """Test scanner configuration defaults."""
        config = ScannerConfig()

        assert config.skip_hidden_files is True
        assert config.recursive is True
        assert config.supported_extensions == [".rst"]
        assert "node_modules" in config.ignored_directories

    def test_scan_recursive(self):
        """Test recursive scanning skips hidden files and ignored directories."""
        with tempfile.TemporaryDirectory() as temp_dir:
            build_tree(Path(temp_dir))

            files = list(DirectoryScanner().scan_for_markup_files(temp_dir))

        assert files == [str(Path("guide/install.rst")), "index.rst"]

    def test_scan_non_recursive(self):
        """Test scanning only the top level."""
        with tempfile.TemporaryDirectory() as temp_dir:
            build_tree(Path(temp_dir))

            files = list(DirectoryScanner(ScannerConfig(recursive=False)).scan_for_markup_files(temp_dir))

        assert files == ["index.rst"]

    def test_custom_extensions(self):
        """Test scanning with custom extensions."""
        with tempfile.TemporaryDirectory() as temp_dir:
            build_tree(Path(temp_dir))
            config = ScannerConfig(supported_extensions=[".txt"])

            files = list(DirectoryScanner(config).scan_for_markup_files(temp_dir))

        assert files == ["notes.txt"]

    def test_missing_directory(self):
        """Test error for a directory that does not exist."""
        with pytest.raises(FileNotFoundError):
            list(DirectoryScanner().scan_for_markup_files("/nonexistent/docs"))

    def test_path_is_a_file(self):
        """Test error when the root is a file."""
        with tempfile.NamedTemporaryFile(suffix=".rst") as temp_file:
            with pytest.raises(NotADirectoryError):
                list(DirectoryScanner().scan_for_markup_files(temp_file.name))
