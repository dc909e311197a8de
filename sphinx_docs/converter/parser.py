"""Structural parser that recovers title, sections and directives from markup text."""

import logging
from typing import List, Optional, Tuple

from .data_classes import Directive, Document, Section
from .directive_extractor import DirectiveExtractor
from .errors import DirectiveMalformed

logger = logging.getLogger(__name__)

# Characters accepted as header underlines, in priority order
UNDERLINE_CHARS = "=-~^\"'`.+*#<>_"

# Fixed underline-to-level table. Any other underline character maps to
# DEFAULT_HEADER_LEVEL, so unrelated styles can alias to the same depth.
HEADER_LEVELS = {
    "=": 1,
    "-": 2,
    "~": 3,
    "^": 4,
    '"': 5,
    "'": 6,
}
DEFAULT_HEADER_LEVEL = 2

INTRODUCTION_TITLE = "Introduction"

# Underlines shorter than the title are accepted only from this length on
MIN_SHORT_UNDERLINE = 4


class StructuralParser:
    """Single forward pass over markup lines producing a Document."""

    def __init__(self, directive_extractor: DirectiveExtractor = None):
        self.directive_extractor = directive_extractor or DirectiveExtractor()

    def parse(self, text: str) -> Document:
        """
        Parse markup text into a document tree.

        Never fails on malformed markup: anything unrecognized is kept as
        plain body text.

        Args:
            text: Markup text (admonitions and toctrees already rewritten)

        Returns:
            Document with title, sections, directives and preamble
        """
        document = Document()
        lines = text.split("\n")
        current: Optional[Section] = None

        i = 0
        while i < len(lines):
            header = self._match_header(lines, i)
            if header:
                title, level, consumed = header
                if document.title is None and level == 1:
                    # Text after a late title stays in the open section, in source order
                    document.title = title
                else:
                    current = Section(title=title, level=level)
                    document.sections.append(current)
                i += consumed
                continue

            line = lines[i]

            if self.directive_extractor.is_directive_open(line):
                try:
                    directive, next_index = self.directive_extractor.extract(lines, i)
                except DirectiveMalformed as e:
                    logger.debug(f"Keeping directive line as text: {e}")
                else:
                    current = self._ensure_body(document, current)
                    self._anchor(document, current, directive)
                    document.directives.append(directive)
                    i = next_index
                    continue

            if current is None and document.title is None and not line.strip():
                # Blank lines before any content are dropped
                i += 1
                continue

            current = self._ensure_body(document, current)
            if current is not None:
                current.content += line + "\n"
            else:
                document.preamble += line + "\n"
            i += 1

        logger.debug(
            f"Parsed document: title={document.title!r}, "
            f"{len(document.sections)} sections, {len(document.directives)} directives"
        )
        return document

    def is_underline(self, line: str) -> bool:
        """Check if a line is a header underline (one repeated character at column 0)."""
        stripped = line.rstrip()
        if not stripped or stripped[0].isspace():
            return False
        char = stripped[0]
        return char in UNDERLINE_CHARS and stripped == char * len(stripped)

    def get_header_level(self, char: str) -> int:
        """Map an underline character to a nesting level."""
        return HEADER_LEVELS.get(char, DEFAULT_HEADER_LEVEL)

    def _match_header(self, lines: List[str], i: int) -> Optional[Tuple[str, int, int]]:
        """Return (title, level, lines consumed) if a header starts at line i."""
        line = lines[i]
        if i + 1 >= len(lines):
            return None

        # Overlined title: underline, text, identical underline
        if self.is_underline(line):
            if i + 2 < len(lines):
                overline = line.rstrip()
                title = lines[i + 1].strip()
                if (
                    self._is_title(title)
                    and not self.is_underline(lines[i + 1])
                    and lines[i + 2].rstrip() == overline
                    and self._underline_fits(overline, title)
                ):
                    return title, self.get_header_level(overline[0]), 3
            return None

        title = line.strip()
        if not self._is_title(title) or line[0].isspace():
            return None

        underline = lines[i + 1].rstrip()
        if not self.is_underline(underline) or not self._underline_fits(underline, title):
            return None

        return title, self.get_header_level(underline[0]), 2

    def _is_title(self, title: str) -> bool:
        """Blockquote lines produced by the admonition rewrite are never titles."""
        return bool(title) and not title.startswith(">")

    def _underline_fits(self, underline: str, title: str) -> bool:
        return len(underline) >= len(title) or len(underline) >= MIN_SHORT_UNDERLINE

    def _ensure_body(self, document: Document, current: Optional[Section]) -> Optional[Section]:
        """Open the implicit introduction section for text before any header."""
        if current is None and document.title is None:
            current = Section(title=INTRODUCTION_TITLE, level=1)
            document.sections.append(current)
        return current

    def _anchor(self, document: Document, current: Optional[Section], directive: Directive):
        """Record where in the body the directive was found."""
        if current is None:
            directive.section_index = None
            directive.offset = len(document.preamble)
        else:
            directive.section_index = len(document.sections) - 1
            directive.offset = len(current.content)
