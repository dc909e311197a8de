"""Header extractor for splitting Markdown by heading boundaries."""

import re
from dataclasses import dataclass
from typing import Iterator, List, Optional, Tuple

from .data_classes import MarkdownSection

INTRODUCTION_TITLE = "Introduction"

FENCE_PATTERN = re.compile(r"^\s{0,3}(```|~~~)")


FENCE_OPEN = "open"
FENCE_BODY = "body"
FENCE_CLOSE = "close"


def iter_fence_state(lines: List[str]) -> Iterator[Tuple[str, Optional[str]]]:
    """Yield (line, fence_role) pairs; the role is None outside fenced code."""
    fence = None
    for line in lines:
        match = FENCE_PATTERN.match(line)
        if fence is None:
            if match:
                fence = match.group(1)
                yield line, FENCE_OPEN
            else:
                yield line, None
        elif match and match.group(1) == fence and not line.strip().strip(fence[0]):
            fence = None
            yield line, FENCE_CLOSE
        else:
            yield line, FENCE_BODY


@dataclass
class Header:
    """Represents a markdown header with position information."""

    level: int  # 1-6 (number of # symbols)
    text: str  # Header text without # symbols
    line_number: int  # Line number (1-based)
    raw_line: str  # Full line including # symbols


class HeaderExtractor:
    """Extracts header structure from markdown content."""

    def __init__(self):
        # Regex pattern to match markdown headers (1-6 levels)
        self.header_pattern = re.compile(r"^(#{1,6})\s+(.+?)\s*$")

    def match_header(self, line: str):
        """Return the header match for a line, or None."""
        return self.header_pattern.match(line)

    def extract_headers(self, content: str) -> List[Header]:
        """
        Extract all headers from markdown content, skipping fenced code.

        Args:
            content: Markdown content string

        Returns:
            List of Header objects in document order
        """
        headers = []
        lines = content.split("\n")

        for line_num, (line, fence_role) in enumerate(iter_fence_state(lines), 1):
            if fence_role:
                continue
            match = self.header_pattern.match(line)
            if match:
                headers.append(
                    Header(
                        level=len(match.group(1)),
                        text=match.group(2),
                        line_number=line_num,
                        raw_line=line,
                    )
                )

        return headers

    def split_by_headers(self, content: str) -> List[MarkdownSection]:
        """
        Split markdown into sections at every heading.

        Text before the first heading becomes an "Introduction" section.

        Args:
            content: Markdown content string

        Returns:
            List of MarkdownSection objects in document order
        """
        sections: List[MarkdownSection] = []
        intro_lines: List[str] = []
        current = None
        current_lines: List[str] = []

        for line_num, (line, fence_role) in enumerate(iter_fence_state(content.split("\n")), 1):
            match = None if fence_role else self.header_pattern.match(line)
            if match:
                if current is not None:
                    current.content = "\n".join(current_lines).rstrip()
                current = MarkdownSection(
                    title=match.group(2),
                    level=len(match.group(1)),
                    content="",
                    line_number=line_num,
                )
                sections.append(current)
                current_lines = [line]
            elif current is not None:
                current_lines.append(line)
            else:
                intro_lines.append(line)

        if current is not None:
            current.content = "\n".join(current_lines).rstrip()

        intro = "\n".join(intro_lines).strip("\n").rstrip()
        if intro.strip():
            sections.insert(0, MarkdownSection(title=INTRODUCTION_TITLE, level=1, content=intro))

        return sections
