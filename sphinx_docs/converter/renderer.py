"""Markdown renderer for parsed markup documents."""

import logging
import re
import textwrap
from typing import Callable, List, Match, Optional, Pattern, Tuple

from .data_classes import ConversionOptions, Directive, Document
from .errors import DirectiveMalformed

logger = logging.getLogger(__name__)

MAX_HEADING_DEPTH = 6
LITERAL_INDENT = 4  # Minimum indentation of a `::` literal block

CODE_DIRECTIVES = {"code-block", "code", "sourcecode"}
IMAGE_DIRECTIVES = {"image", "figure"}

CODE_ROLES = (
    "class", "func", "meth", "mod", "attr", "exc", "data", "obj", "const",
    "envvar", "option", "program", "command", "file",
)

InlineRule = Tuple[str, Pattern, Callable[[Match, ConversionOptions], str]]

# Line-structure rules that never apply to a heading
BODY_ONLY_RULES = {"bullet", "enumerator"}


def _split_role_text(text: str) -> Tuple[str, str]:
    """Split ``Title <target>`` role text into (title, target)."""
    match = re.match(r"^(.*?)\s*<([^<>]+)>\s*$", text, re.DOTALL)
    if match:
        title = " ".join(match.group(1).split())
        return title or match.group(2).strip(), match.group(2).strip()
    text = " ".join(text.split())
    return text, text


def _slugify(text: str) -> str:
    return re.sub(r"\s+", "-", text.strip().lower())


class MarkdownRenderer:
    """Walks a Document and emits flat Markdown."""

    def __init__(self):
        self.inline_rules: List[InlineRule] = [
            ("inline-code", re.compile(r"``([^`]+)``"), lambda m, o: f"`{m.group(1)}`"),
            ("bullet", re.compile(r"^([ \t]*)[*+•-][ \t]+(?=\S)", re.MULTILINE), lambda m, o: f"{m.group(1)}- "),
            ("enumerator", re.compile(r"^([ \t]*)(\d+|#)[.)][ \t]+(?=\S)", re.MULTILINE), self._enumerator),
            ("doc-role", re.compile(r":doc:`([^`]+)`"), self._doc_reference),
            ("ref-role", re.compile(r":ref:`([^`]+)`"), self._ref_reference),
            (
                "code-role",
                re.compile(r":(?:py:)?(?:%s):`(~?)([^`]+)`" % "|".join(CODE_ROLES)),
                self._code_reference,
            ),
            ("term-role", re.compile(r":term:`([^`]+)`"), lambda m, o: _split_role_text(m.group(1))[0]),
            (
                "external-link",
                re.compile(r"`([^`<]+?)\s*<([^>`]+)>`__?"),
                lambda m, o: f"[{' '.join(m.group(1).split())}]({m.group(2).strip()})",
            ),
            ("named-link", re.compile(r"(?<![`\w])`([^`<]+)`__?(?![\w])"), lambda m, o: m.group(1)),
        ]

    def render(self, document: Document, options: ConversionOptions = None) -> str:
        """
        Render a document tree to Markdown.

        Args:
            document: Parsed document
            options: Rendering options (reference handling)

        Returns:
            Markdown text; every section ends with one blank line
        """
        options = options or ConversionOptions()
        parts = []

        offset = 0
        if document.title:
            offset = 1
            parts.append(f"# {self.render_title(document.title, options)}\n\n")
            preamble = self.render_body(document.preamble, document.directives_for(None), options)
            if preamble:
                parts.append(preamble + "\n\n")

        for index, section in enumerate(document.sections):
            depth = min(section.level + offset, MAX_HEADING_DEPTH)
            parts.append(f"{'#' * depth} {self.render_title(section.title, options)}\n\n")
            body = self.render_body(section.content, document.directives_for(index), options)
            if body:
                parts.append(body + "\n\n")

        return "".join(parts)

    def render_title(self, title: str, options: ConversionOptions) -> str:
        """Apply the inline rules to a heading, skipping list-marker rules."""
        for name, pattern, replace in self.inline_rules:
            if name not in BODY_ONLY_RULES:
                title = pattern.sub(lambda m: replace(m, options), title)
        return title

    def render_body(self, text: str, directives: List[Directive], options: ConversionOptions) -> str:
        """Render body text with its directives emitted at their anchors."""
        pieces = []
        cursor = 0
        for directive in sorted(directives, key=lambda d: d.offset):
            pieces.append(self.render_content(text[cursor:directive.offset], options))
            pieces.append(self._render_directive_safely(directive))
            cursor = directive.offset
        pieces.append(self.render_content(text[cursor:], options))
        return "\n\n".join(piece for piece in pieces if piece)

    def render_content(self, text: str, options: ConversionOptions) -> str:
        """Convert body text; literal blocks become fences and are not rewritten further."""
        pieces = []
        for is_code, segment in self._split_literal_blocks(text):
            if is_code:
                pieces.append(segment)
                continue
            segment = segment.strip("\n")
            if not segment.strip():
                continue
            for name, pattern, replace in self.inline_rules:
                segment = pattern.sub(lambda m: replace(m, options), segment)
            pieces.append(segment)
        return "\n\n".join(pieces)

    def render_directive(self, directive: Directive) -> str:
        """Render a captured directive; unknown directives pass through verbatim."""
        if directive.name in CODE_DIRECTIVES:
            return self._render_code(directive)
        if directive.name.startswith("auto"):
            if not directive.argument:
                raise DirectiveMalformed(directive.name, "missing target")
            return f"<!-- AUTO-{directive.name[4:].upper()}: {directive.argument} -->"
        if directive.name in IMAGE_DIRECTIVES:
            return self._render_image(directive)
        return directive.raw

    def _render_directive_safely(self, directive: Directive) -> str:
        try:
            return self.render_directive(directive)
        except DirectiveMalformed as e:
            logger.warning(f"{e}; emitting as text")
            return directive.raw

    def _render_code(self, directive: Directive) -> str:
        code = textwrap.dedent("\n".join(directive.content)).strip("\n")
        if not code.strip():
            raise DirectiveMalformed(directive.name, "empty code block")

        language = directive.argument or directive.options.get("language", "")
        fenced = f"```{language}\n{code}\n```"
        caption = directive.options.get("caption")
        if caption:
            return f"*{caption}*\n\n{fenced}"
        return fenced

    def _render_image(self, directive: Directive) -> str:
        if not directive.argument:
            raise DirectiveMalformed(directive.name, "missing image URI")
        alt = directive.options.get("alt", "")
        image = f"![{alt}]({directive.argument})"
        caption = " ".join(line for line in directive.content if line.strip()).strip()
        if caption:
            return f"{image}\n\n*{caption}*"
        return image

    def _split_literal_blocks(self, text: str) -> List[Tuple[bool, str]]:
        """Split text into (is_code, segment) pairs around `::` literal blocks."""
        lines = text.split("\n")
        segments = []
        buffer: List[str] = []
        i = 0

        while i < len(lines):
            line = lines[i]
            if line.rstrip().endswith("::") and self._literal_block_follows(lines, i):
                intro = self._literal_intro(line)
                if intro is not None:
                    buffer.append(intro)
                segments.append((False, "\n".join(buffer)))
                buffer = []

                i += 1
                code_lines = []
                while i < len(lines) and (not lines[i].strip() or self._indent(lines[i]) >= LITERAL_INDENT):
                    code_lines.append(lines[i])
                    i += 1
                code = textwrap.dedent("\n".join(code_lines)).strip("\n")
                segments.append((True, f"```\n{code}\n```"))
                continue

            buffer.append(line)
            i += 1

        segments.append((False, "\n".join(buffer)))
        return segments

    def _literal_block_follows(self, lines: List[str], index: int) -> bool:
        """A blank line, then a line indented by at least LITERAL_INDENT."""
        if index + 1 >= len(lines) or lines[index + 1].strip():
            return False
        for line in lines[index + 1:]:
            if line.strip():
                return self._indent(line) >= LITERAL_INDENT
        return False

    def _literal_intro(self, line: str) -> Optional[str]:
        """`Text::` keeps one colon, `Text ::` drops both, a lone `::` is removed."""
        stripped = line.rstrip()
        if stripped.strip() == "::":
            return None
        if stripped.endswith(" ::"):
            return stripped[:-3].rstrip()
        return stripped[:-1]

    @staticmethod
    def _indent(line: str) -> int:
        return len(line) - len(line.lstrip(" "))

    def _enumerator(self, match: Match, options: ConversionOptions) -> str:
        number = "1" if match.group(2) == "#" else match.group(2)
        return f"{match.group(1)}{number}. "

    def _doc_reference(self, match: Match, options: ConversionOptions) -> str:
        _, target = _split_role_text(match.group(1))
        if not options.preserve_references:
            return target
        if options.base_url:
            return f"[{target}]({options.base_url.rstrip('/')}/{target.lstrip('/')}.md)"
        return f"[{target}]({target}.md)"

    def _ref_reference(self, match: Match, options: ConversionOptions) -> str:
        _, target = _split_role_text(match.group(1))
        if not options.preserve_references:
            return target
        return f"[{target}](#{_slugify(target)})"

    def _code_reference(self, match: Match, options: ConversionOptions) -> str:
        title, target = _split_role_text(match.group(2))
        if match.group(1):
            title = target.split(".")[-1]
        return f"`{title}`"
