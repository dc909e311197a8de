"""Sphinx markup to Markdown conversion and LLM chunking."""

from .converter import ConversionOptions, DirectiveMalformed, ParseError, SphinxConverter
from .optimizer import ChunkStats, ContentChunk, LLMOptimizer, OptimizationOptions
from .pipeline import chunk, convert, optimize

__version__ = "1.0.0"

__all__ = [
    "convert",
    "optimize",
    "chunk",
    "ConversionOptions",
    "OptimizationOptions",
    "ContentChunk",
    "ChunkStats",
    "SphinxConverter",
    "LLMOptimizer",
    "ParseError",
    "DirectiveMalformed",
]
