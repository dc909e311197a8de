"""Main orchestration for LLM-oriented Markdown optimization."""

import logging
from typing import List

from .chunker import ContentChunker, count_words
from .cleanup import MarkdownCleaner
from .data_classes import ChunkStats, ContentChunk, OptimizationOptions
from .token_counter import DEFAULT_TIKTOKEN_MODEL, TokenCounter

logger = logging.getLogger(__name__)


class LLMOptimizer:
    """Cleans rendered Markdown and splits it into context-annotated chunks."""

    def __init__(self, tiktoken_model: str = DEFAULT_TIKTOKEN_MODEL):
        self.cleaner = MarkdownCleaner()
        self.tiktoken_model = tiktoken_model
        self._token_counter = None

    @property
    def token_counter(self) -> TokenCounter:
        """Tokenizer, loaded on first use."""
        if self._token_counter is None:
            self._token_counter = TokenCounter(self.tiktoken_model)
        return self._token_counter

    def optimize(self, markdown: str, options: OptimizationOptions = None) -> str:
        """
        Apply the enabled cleanup transforms in order.

        Args:
            markdown: Rendered Markdown
            options: Optimization options

        Returns:
            Optimized Markdown
        """
        options = options or OptimizationOptions()
        optimized = markdown

        if options.simplify_structure:
            optimized = self.cleaner.simplify_structure(optimized)

        if options.remove_redundancy:
            optimized = self.cleaner.remove_redundancy(optimized)

        if options.add_context_headers:
            optimized = self.cleaner.add_context_headers(optimized)

        if options.optimize_formatting:
            optimized = self.cleaner.optimize_formatting(optimized)

        logger.debug(f"Optimized {count_words(markdown)} words into {count_words(optimized)} words")
        return optimized

    def chunk_content(self, markdown: str, options: OptimizationOptions = None) -> List[ContentChunk]:
        """
        Split Markdown into chunks of at most ``chunk_size`` words.

        Structural cleanups run first; breadcrumbs and formatting are left
        out so chunk word counts reflect the document text.

        Args:
            markdown: Rendered Markdown
            options: Optimization options

        Returns:
            Ordered chunks; empty input yields an empty list
        """
        options = options or OptimizationOptions()
        cleaned = markdown

        if options.simplify_structure:
            cleaned = self.cleaner.simplify_structure(cleaned)

        if options.remove_redundancy:
            cleaned = self.cleaner.remove_redundancy(cleaned)

        return ContentChunker(options.chunk_size).chunk(cleaned)

    def get_chunk_stats(self, chunks: List[ContentChunk]) -> ChunkStats:
        """
        Summarize a chunk sequence.

        Args:
            chunks: Chunks produced by chunk_content

        Returns:
            ChunkStats with word and token totals
        """
        if not chunks:
            return ChunkStats()

        word_counts = [chunk.word_count for chunk in chunks]
        total_words = sum(word_counts)

        return ChunkStats(
            total_chunks=len(chunks),
            total_words=total_words,
            total_tokens=sum(self.token_counter.count(chunk.content) for chunk in chunks),
            avg_word_count=round(total_words / len(chunks), 1),
            max_word_count=max(word_counts),
            overflow_chunks=sum(1 for chunk in chunks if chunk.metadata.get("overflow")),
        )
