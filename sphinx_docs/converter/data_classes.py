"""Data classes for the markup document tree."""

from dataclasses import dataclass, field
from typing import Dict, List, Optional


@dataclass
class Directive:
    """A block directive captured by the parser."""

    name: str  # e.g. "code-block", "automodule"
    arguments: List[str] = field(default_factory=list)
    options: Dict[str, str] = field(default_factory=dict)
    content: List[str] = field(default_factory=list)  # De-indented body lines
    raw: str = ""  # Verbatim source block

    # Anchor: which body the directive interrupted and where
    section_index: Optional[int] = None  # None = document preamble
    offset: int = 0  # Character offset into that body

    @property
    def argument(self) -> str:
        """First argument or an empty string."""
        return self.arguments[0] if self.arguments else ""


@dataclass
class Section:
    """A titled section of the document."""

    title: str
    level: int  # 1-6, derived from the underline character
    content: str = ""


@dataclass
class Document:
    """Parsed markup document."""

    title: Optional[str] = None
    sections: List[Section] = field(default_factory=list)
    directives: List[Directive] = field(default_factory=list)
    preamble: str = ""  # Body text between the title and the first section

    def directives_for(self, section_index: Optional[int]) -> List[Directive]:
        """Directives anchored in the given body, in source order."""
        return [d for d in self.directives if d.section_index == section_index]


@dataclass
class ConversionOptions:
    """Options for markup to Markdown conversion."""

    preserve_references: bool = True
    include_metadata: bool = False
    base_url: Optional[str] = None
