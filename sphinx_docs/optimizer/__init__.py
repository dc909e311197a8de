"""Optimizer that prepares Markdown for LLM context windows."""

from .chunker import ContentChunker, count_words
from .cleanup import MarkdownCleaner, apply_outside_code
from .data_classes import DEFAULT_CHUNK_SIZE, ChunkStats, ContentChunk, MarkdownSection, OptimizationOptions
from .header_extractor import Header, HeaderExtractor
from .navigation_builder import NavigationBuilder
from .optimizer import LLMOptimizer
from .token_counter import TokenCounter

__all__ = [
    "ContentChunker",
    "count_words",
    "MarkdownCleaner",
    "apply_outside_code",
    "DEFAULT_CHUNK_SIZE",
    "ChunkStats",
    "ContentChunk",
    "MarkdownSection",
    "OptimizationOptions",
    "Header",
    "HeaderExtractor",
    "NavigationBuilder",
    "LLMOptimizer",
    "TokenCounter",
]
