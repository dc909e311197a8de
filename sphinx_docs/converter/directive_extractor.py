"""Directive extractor for block directives in markup text."""

import re
from typing import List, Tuple

from .data_classes import Directive
from .errors import DirectiveMalformed

INDENT_UNIT = "   "  # Directive bodies are indented by three spaces


class DirectiveExtractor:
    """Captures a directive block starting at a directive-open line.

    The scanner is greedy and non-recursive: directives nested inside a body
    stay as raw text in ``content``.
    """

    def __init__(self):
        # Loose marker used to decide whether a line belongs to the extractor
        self.marker_pattern = re.compile(r"^\.\. [^\s:|_][^\s]*::(?:\s|$)")
        # Strict pattern: name (optionally domain-qualified) and argument
        self.open_pattern = re.compile(
            r"^\.\. ([a-zA-Z][\w-]*(?::[a-zA-Z][\w-]*)*)::(?:\s+(.*?))?\s*$"
        )
        self.option_pattern = re.compile(r"^\s*:([a-zA-Z][\w-]*):(?:\s+(.*?))?\s*$")

    def is_directive_open(self, line: str) -> bool:
        """Check whether a line opens a directive block."""
        return bool(self.marker_pattern.match(line))

    def extract(self, lines: List[str], start_index: int) -> Tuple[Directive, int]:
        """
        Extract the directive opened at ``lines[start_index]``.

        Args:
            lines: All lines of the markup text
            start_index: Index of the directive-open line

        Returns:
            Tuple of (Directive, index of the first line after the block)

        Raises:
            DirectiveMalformed: If the open line is not a well-formed directive
        """
        open_line = lines[start_index]
        match = self.open_pattern.match(open_line)
        if not match:
            raise DirectiveMalformed(open_line.strip(), "unparseable directive line")

        directive = Directive(
            name=match.group(1).lower(),
            arguments=[match.group(2)] if match.group(2) else [],
        )

        i = start_index + 1

        # Option lines directly after the header
        while i < len(lines):
            option_match = self.option_pattern.match(lines[i])
            if not option_match:
                break
            directive.options[option_match.group(1)] = option_match.group(2) or ""
            i += 1

        header_end = i

        # One optional blank separator
        if i < len(lines) and not lines[i].strip():
            i += 1

        # Indented body; blank lines are part of the run
        last_content = header_end
        while i < len(lines) and (lines[i].startswith(INDENT_UNIT) or not lines[i].strip()):
            if lines[i].strip():
                directive.content.append(lines[i][len(INDENT_UNIT):].rstrip())
                last_content = i + 1
            else:
                directive.content.append("")
            i += 1

        directive.raw = "\n".join(lines[start_index:last_content]).rstrip()

        return directive, i
