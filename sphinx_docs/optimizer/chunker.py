"""Word-budgeted chunker that packs Markdown sections into bounded chunks."""

import itertools
import logging
from typing import Iterator, List, Tuple

from .data_classes import DEFAULT_CHUNK_SIZE, ContentChunk, MarkdownSection
from .header_extractor import HeaderExtractor, iter_fence_state
from .navigation_builder import NavigationBuilder

logger = logging.getLogger(__name__)


def count_words(text: str) -> int:
    """Count whitespace-separated tokens."""
    return len(text.split())


class ContentChunker:
    """Greedy section packer with paragraph-level splitting of oversized sections.

    Sections are accumulated while the running word count stays within the
    budget. A section that alone exceeds the budget is split at paragraph
    boundaries; a single paragraph is never split, so a part may overshoot
    and is then flagged with ``overflow`` in its metadata.
    """

    def __init__(self, chunk_size: int = DEFAULT_CHUNK_SIZE):
        self.chunk_size = chunk_size
        self.header_extractor = HeaderExtractor()
        self.navigation_builder = NavigationBuilder()

    def chunk(self, markdown: str) -> List[ContentChunk]:
        """
        Split Markdown into ordered chunks.

        Args:
            markdown: Rendered Markdown

        Returns:
            Chunks with ids ``chunk-1``..``chunk-n`` and navigation context
        """
        if not markdown.strip():
            return []

        sections = self.header_extractor.split_by_headers(markdown)
        counter = itertools.count(1)
        chunks: List[ContentChunk] = []
        current = None

        for section in sections:
            word_count = count_words(section.content)

            if current is not None and current.word_count + word_count <= self.chunk_size:
                current.content += "\n\n" + section.content
                current.word_count += word_count
                current.metadata["sections"].append(section.title)
                continue

            if current is not None:
                chunks.append(current)
                current = None

            if word_count > self.chunk_size:
                chunks.extend(self._split_large_section(section, counter))
            else:
                index = next(counter)
                current = ContentChunk(
                    id=f"chunk-{index}",
                    title=section.title or f"Chunk {index}",
                    content=section.content,
                    word_count=word_count,
                    metadata={
                        "sections": [section.title],
                        "chunk_type": "section",
                        "section_level": section.level,
                    },
                )

        if current is not None:
            chunks.append(current)

        logger.debug(f"Chunked {len(sections)} sections into {len(chunks)} chunks")
        return self.navigation_builder.add_chunk_context(chunks)

    def split_paragraphs(self, content: str) -> List[str]:
        """Split at blank lines, keeping fenced code blocks whole."""
        paragraphs = []
        buffer: List[str] = []

        for line, fence_role in iter_fence_state(content.split("\n")):
            if not fence_role and not line.strip():
                if buffer:
                    paragraphs.append("\n".join(buffer))
                    buffer = []
                continue
            buffer.append(line)

        if buffer:
            paragraphs.append("\n".join(buffer))
        return paragraphs

    def _split_large_section(self, section: MarkdownSection, counter: Iterator[int]) -> List[ContentChunk]:
        """Split one oversized section into parts of at most chunk_size words."""
        pieces: List[Tuple[str, int]] = []
        buffer: List[str] = []
        buffer_words = 0

        for paragraph in self.split_paragraphs(section.content):
            paragraph_words = count_words(paragraph)
            if buffer and buffer_words + paragraph_words <= self.chunk_size:
                buffer.append(paragraph)
                buffer_words += paragraph_words
            else:
                if buffer:
                    pieces.append(("\n\n".join(buffer), buffer_words))
                buffer = [paragraph]
                buffer_words = paragraph_words

        if buffer:
            pieces.append(("\n\n".join(buffer), buffer_words))

        total_parts = len(pieces)
        chunks = []
        for part_index, (content, word_count) in enumerate(pieces, 1):
            metadata = {
                "part_of": section.title,
                "part_index": part_index,
                "total_parts": total_parts,
                "chunk_type": "subsection",
                "section_level": section.level,
            }
            if word_count > self.chunk_size:
                metadata["overflow"] = True
                metadata["overflow_words"] = word_count - self.chunk_size
                logger.debug(f"Part {part_index} of '{section.title}' exceeds budget by {word_count - self.chunk_size} words")

            chunks.append(
                ContentChunk(
                    id=f"chunk-{next(counter)}",
                    title=f"{section.title} (Part {part_index})" if total_parts > 1 else section.title,
                    content=content,
                    word_count=word_count,
                    metadata=metadata,
                )
            )

        return chunks
