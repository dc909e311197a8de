"""Converter for Sphinx markup documents into Markdown."""

from .converter import SphinxConverter, decode_markup
from .data_classes import ConversionOptions, Directive, Document, Section
from .directive_extractor import DirectiveExtractor
from .directive_rules import PREPROCESS_RULES, RewriteRule, apply_rewrite_rules
from .errors import DirectiveMalformed, ParseError
from .parser import HEADER_LEVELS, StructuralParser
from .renderer import MarkdownRenderer

__all__ = [
    "SphinxConverter",
    "decode_markup",
    "ConversionOptions",
    "Directive",
    "Document",
    "Section",
    "DirectiveExtractor",
    "PREPROCESS_RULES",
    "RewriteRule",
    "apply_rewrite_rules",
    "DirectiveMalformed",
    "ParseError",
    "HEADER_LEVELS",
    "StructuralParser",
    "MarkdownRenderer",
]
