"""Main orchestration for markup to Markdown conversion."""

import logging
import re
from typing import Any, Dict, Union

import frontmatter

from .data_classes import ConversionOptions
from .directive_rules import apply_rewrite_rules
from .errors import ParseError
from .parser import StructuralParser
from .renderer import MarkdownRenderer

logger = logging.getLogger(__name__)


def decode_markup(content: Union[str, bytes], document_id: str = None) -> str:
    """
    Turn raw input into normalized markup text.

    Args:
        content: Markup as text or UTF-8 bytes
        document_id: Identifier used in error messages

    Returns:
        Text with BOM removed, newlines normalized and tabs expanded

    Raises:
        ParseError: If the input cannot be read as text
    """
    if isinstance(content, (bytes, bytearray)):
        try:
            text = bytes(content).decode("utf-8")
        except UnicodeDecodeError as e:
            raise ParseError(f"Unable to read input as UTF-8: {e}", document_id) from e
    elif isinstance(content, str):
        text = content
    else:
        raise ParseError(f"Expected text input, got {type(content).__name__}", document_id)

    if "\x00" in text:
        raise ParseError("Input is not text (contains NUL bytes)", document_id)

    text = text.lstrip("\ufeff").replace("\r\n", "\n").replace("\r", "\n")
    return text.expandtabs(8)


class SphinxConverter:
    """Converts Sphinx markup documents to Markdown.

    Pipeline: rewrite rules -> structural parse -> render -> post-process.
    Every call is independent; the converter holds no per-document state.
    """

    def __init__(self):
        self.parser = StructuralParser()
        self.renderer = MarkdownRenderer()

    def convert_to_markdown(
        self,
        content: Union[str, bytes],
        document_id: str = "document",
        options: ConversionOptions = None,
    ) -> str:
        """
        Convert markup content to Markdown.

        Args:
            content: Markup text (or UTF-8 bytes)
            document_id: Identifier of the document, used for metadata and errors
            options: Conversion options

        Returns:
            Best-effort Markdown; malformed markup degrades to literal text

        Raises:
            ParseError: Only when the input cannot be decoded as text
        """
        options = options or ConversionOptions()
        text = decode_markup(content, document_id)

        logger.debug(f"Converting {document_id} ({len(text)} characters)")

        preprocessed = apply_rewrite_rules(text)
        document = self.parser.parse(preprocessed)
        markdown = self.renderer.render(document, options)
        markdown = self.post_process(markdown)

        if options.include_metadata:
            metadata = self.extract_metadata(text)
            metadata["source"] = document_id
            markdown = frontmatter.dumps(frontmatter.Post(markdown, **metadata)) + "\n"

        return markdown

    def post_process(self, markdown: str) -> str:
        """Strip trailing spaces, collapse blank runs and end with one newline."""
        processed = re.sub(r"[ \t]+$", "", markdown, flags=re.MULTILINE)
        processed = re.sub(r"\n{3,}", "\n\n", processed)
        processed = processed.strip()
        return processed + "\n" if processed else ""

    def extract_metadata(self, content: str) -> Dict[str, Any]:
        """
        Extract document metadata from markup text.

        Args:
            content: Markup text

        Returns:
            Dictionary with any of ``title``, ``author`` and ``date``
        """
        metadata: Dict[str, Any] = {}

        title_match = re.search(r"^(?:=+\n)?([^\n]+)\n=+[ \t]*$", content, re.MULTILINE)
        if title_match and title_match.group(1).strip():
            metadata["title"] = title_match.group(1).strip()

        author_match = re.search(r"^:author:\s*(.+)$", content, re.MULTILINE)
        if author_match:
            metadata["author"] = author_match.group(1).strip()

        date_match = re.search(r"^:date:\s*(.+)$", content, re.MULTILINE)
        if date_match:
            metadata["date"] = date_match.group(1).strip()

        return metadata
