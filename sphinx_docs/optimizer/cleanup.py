"""Document-wide Markdown rewrites applied before LLM consumption.

Every rewrite leaves fenced code untouched and is idempotent, so running a
cleaned document through the cleaner again changes nothing.
"""

import re
from typing import Callable, List

from .header_extractor import FENCE_OPEN, HeaderExtractor, iter_fence_state

MAX_HEADING_DEPTH = 4
CONTEXT_MIN_DEPTH = 3  # Breadcrumbs are added from this depth on
CONTEXT_SEPARATOR = " → "

FENCED_BLOCK_PATTERN = re.compile(r"^(```|~~~)[^\n]*\n.*?^\1[ \t]*$", re.MULTILINE | re.DOTALL)

TABLE_PATTERN = re.compile(
    r"^\|[^\n]*\|[ \t]*\n\|[ \t:|-]+\|[ \t]*\n(?:\|[^\n]*\|[ \t]*(?:\n|$))*",
    re.MULTILINE,
)


def apply_outside_code(text: str, transform: Callable[[str], str]) -> str:
    """Apply a text transform to everything except fenced code blocks."""
    pieces = []
    last = 0
    for match in FENCED_BLOCK_PATTERN.finditer(text):
        pieces.append(transform(text[last:match.start()]))
        pieces.append(match.group(0))
        last = match.end()
    pieces.append(transform(text[last:]))
    return "".join(pieces)


def _table_cells(row: str) -> List[str]:
    return [cell.strip() for cell in row.strip().strip("|").split("|") if cell.strip()]


class MarkdownCleaner:
    """Structural cleanup, redundancy removal, breadcrumbs and LLM formatting."""

    def __init__(self):
        self.header_extractor = HeaderExtractor()

    def simplify_structure(self, markdown: str) -> str:
        """Clamp heading depth to 4, flatten lettered/roman lists and pipe tables."""

        def simplify(text: str) -> str:
            text = re.sub(r"^#{5,}[ \t]+", "#" * MAX_HEADING_DEPTH + " ", text, flags=re.MULTILINE)
            text = re.sub(r"^[ \t]*[a-zA-Z]\)[ \t]+", "- ", text, flags=re.MULTILINE)
            text = re.sub(r"^[ \t]*[ivx]+\)[ \t]+", "- ", text, flags=re.MULTILINE)
            return TABLE_PATTERN.sub(self._simplify_table, text)

        return apply_outside_code(markdown, simplify)

    def remove_redundancy(self, markdown: str) -> str:
        """Collapse blank runs, triple emphasis and self links; drop empty headings."""

        def clean(text: str) -> str:
            text = re.sub(r"\n{3,}", "\n\n", text)
            text = re.sub(r"\*\*\*([^*\n]+)\*\*\*", r"**\1**", text)
            text = re.sub(r"\[([^\]\n]+)\]\(\1\)", r"\1", text)
            # A heading directly followed by another heading has no body
            return re.sub(
                r"^#{1,6}[ \t]+[^\n]*\n(?:[ \t]*\n)*(?=#{1,6}[ \t])",
                "",
                text,
                flags=re.MULTILINE,
            )

        return apply_outside_code(markdown, clean)

    def add_context_headers(self, markdown: str) -> str:
        """Insert an italic breadcrumb after headings of depth 3 and deeper."""
        lines = markdown.split("\n")
        result: List[str] = []
        stack: List[str] = []

        for index, (line, fence_role) in enumerate(iter_fence_state(lines)):
            match = None if fence_role else self.header_extractor.match_header(line)
            result.append(line)
            if not match:
                continue

            level = len(match.group(1))
            stack = stack[: level - 1]
            stack.extend([""] * (level - 1 - len(stack)))
            stack.append(match.group(2))

            ancestors = [title for title in stack[:-1] if title]
            if level < CONTEXT_MIN_DEPTH or not ancestors:
                continue

            breadcrumb = f"*Context: {CONTEXT_SEPARATOR.join(ancestors)}*"
            following = [rest for rest in lines[index + 1:] if rest.strip()]
            if following and following[0].strip() == breadcrumb:
                continue

            result.extend(["", breadcrumb])
            if index + 1 < len(lines) and lines[index + 1].strip():
                result.append("")

        return "\n".join(result)

    def optimize_formatting(self, markdown: str) -> str:
        """Add fence language hints, use bullet glyphs and separate major sections."""
        lines = markdown.split("\n")
        result: List[str] = []

        for index, (line, fence_role) in enumerate(iter_fence_state(lines)):
            if fence_role == FENCE_OPEN:
                if line.strip() in ("```", "~~~") and index + 1 < len(lines):
                    line = line.rstrip() + self._language_hint(lines[index + 1])
            elif fence_role is None:
                match = self.header_extractor.match_header(line)
                if match and len(match.group(1)) <= 2:
                    self._add_separator(result)
                else:
                    line = re.sub(r"^([ \t]*)- ", r"\1• ", line)
            result.append(line)

        return "\n".join(result)

    def _add_separator(self, result: List[str]):
        """Put a `---` rule before a major heading unless it starts the document."""
        content_before = [prior for prior in result if prior.strip()]
        if not content_before or content_before[-1].strip() == "---":
            return
        while result and not result[-1].strip():
            result.pop()
        result.extend(["", "---", ""])

    def _language_hint(self, first_code_line: str) -> str:
        if "#" in first_code_line:
            return "bash"
        if "//" in first_code_line:
            return "javascript"
        return ""

    def _simplify_table(self, match) -> str:
        rows = match.group(0).strip("\n").split("\n")
        if len(rows) < 3:
            return match.group(0)

        headers = _table_cells(rows[0])
        result = f"**{' | '.join(headers)}**\n\n"
        for row in rows[2:]:
            cells = _table_cells(row)
            if cells:
                result += f"- {' • '.join(cells)}\n"
        return result
