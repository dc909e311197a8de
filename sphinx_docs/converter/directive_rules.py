"""Rewrite rules applied to markup text before structural parsing.

Admonitions and toctree blocks are rewritten straight into their Markdown
form here, so they never reach the structural parser as directives. Every
other directive is left in place and captured by the DirectiveExtractor.

Each rule is independent and the list is applied in order.
"""

import logging
import re
import textwrap
from dataclasses import dataclass
from typing import Callable, List, Match, Pattern

logger = logging.getLogger(__name__)

# Indented directive body: any number of (blank lines, then one indented
# non-blank line). Trailing blank lines are left for the following text.
_BODY = r"((?:(?:[ \t]*\n)*[ \t]+\S[^\n]*(?:\n|\Z))*)"

ADMONITION_ICONS = {
    "note": "ℹ️",
    "warning": "⚠️",
    "tip": "💡",
    "important": "❗",
}


@dataclass
class RewriteRule:
    """A single regex rewrite with its documented contract."""

    name: str
    pattern: Pattern
    replace: Callable[[Match], str]
    description: str

    def apply(self, text: str) -> str:
        result, count = self.pattern.subn(self.replace, text)
        if count:
            logger.debug(f"Rewrite rule '{self.name}' applied {count} time(s)")
        return result


def _body_lines(body: str) -> List[str]:
    """De-indent a directive body and drop surrounding blank lines."""
    lines = textwrap.dedent(body).rstrip().split("\n")
    while lines and not lines[0].strip():
        lines.pop(0)
    return [line.rstrip() for line in lines]


def _replace_toctree(match: Match) -> str:
    body = "\n".join(_body_lines(match.group(1)))
    return f"<!-- TOCTREE:\n{body}\n-->\n"


def _replace_admonition(match: Match) -> str:
    kind = match.group(1).lower()
    inline = match.group(2).strip()
    lines = _body_lines(match.group(3))
    if inline:
        lines = [inline] + lines
    while lines and not lines[-1]:
        lines.pop()

    quoted = [f"> {ADMONITION_ICONS[kind]} **{kind.upper()}**"]
    if lines:
        quoted.append(">")
        quoted.extend(f"> {line}" if line else ">" for line in lines)
    return "\n".join(quoted) + "\n"


TOCTREE_RULE = RewriteRule(
    name="toctree",
    pattern=re.compile(r"^\.\. toctree::[ \t]*(?:\n|\Z)" + _BODY, re.MULTILINE),
    replace=_replace_toctree,
    description=(
        "`.. toctree::` and its indented body (options and entries) become "
        "'<!-- TOCTREE:\\n<dedented body>\\n-->'."
    ),
)

ADMONITION_RULE = RewriteRule(
    name="admonition",
    pattern=re.compile(
        r"^\.\. (note|warning|tip|important)::[ \t]*([^\n]*)(?:\n|\Z)" + _BODY,
        re.MULTILINE | re.IGNORECASE,
    ),
    replace=_replace_admonition,
    description=(
        "`.. note|warning|tip|important::` with optional inline text and its "
        "indented body become a blockquote: '> <icon> **KIND**', '>', then "
        "'> <line>' per de-indented body line."
    ),
)

PREPROCESS_RULES: List[RewriteRule] = [TOCTREE_RULE, ADMONITION_RULE]


def apply_rewrite_rules(text: str, rules: List[RewriteRule] = None) -> str:
    """Apply rewrite rules to markup text in order."""
    for rule in PREPROCESS_RULES if rules is None else rules:
        text = rule.apply(text)
    return text
