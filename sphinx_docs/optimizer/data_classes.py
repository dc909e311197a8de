"""Data classes for Markdown optimization and chunking."""

import logging
from dataclasses import asdict, dataclass, field
from typing import Any, Dict, Optional

logger = logging.getLogger(__name__)

DEFAULT_CHUNK_SIZE = 4000  # Words


@dataclass
class OptimizationOptions:
    """Options for LLM optimization and chunking."""

    chunk_size: int = DEFAULT_CHUNK_SIZE
    preserve_references: bool = True
    add_context_headers: bool = True
    simplify_structure: bool = True
    remove_redundancy: bool = True
    optimize_formatting: bool = True

    def __post_init__(self):
        """Validate configuration values."""
        if self.chunk_size < 1:
            logger.warning(f"Chunk size {self.chunk_size} is not positive, using 1")
            self.chunk_size = 1


@dataclass
class MarkdownSection:
    """A heading-delimited slice of Markdown."""

    title: str
    level: int  # 1-6, number of # symbols
    content: str  # Includes the heading line
    line_number: int = 1  # Line of the heading (1-based)


@dataclass
class ContentChunk:
    """A bounded-size slice of Markdown with navigation metadata."""

    id: str
    title: str
    content: str
    word_count: int
    metadata: Dict[str, Any] = field(default_factory=dict)
    context: Optional[str] = None

    def to_dict(self) -> Dict[str, Any]:
        return asdict(self)


@dataclass
class ChunkStats:
    """Summary statistics for a chunk sequence."""

    total_chunks: int = 0
    total_words: int = 0
    total_tokens: int = 0
    avg_word_count: float = 0.0
    max_word_count: int = 0
    overflow_chunks: int = 0
