"""Navigation builder for sequential relationships between chunks."""

from typing import List

from .data_classes import ContentChunk


class NavigationBuilder:
    """Annotates chunks with their position and neighbours."""

    def add_chunk_context(self, chunks: List[ContentChunk]) -> List[ContentChunk]:
        """
        Add navigation context to every chunk.

        A single chunk gets no context. Otherwise the context reads
        ``Document part i of n | Previous: "..." | Next: "..."`` and the
        neighbouring chunk ids are recorded in the metadata.

        Args:
            chunks: Chunks in emission order

        Returns:
            The same chunks, annotated
        """
        total = len(chunks)
        if total < 2:
            return chunks

        for index, chunk in enumerate(chunks):
            context = f"Document part {index + 1} of {total}"

            if index > 0:
                previous_chunk = chunks[index - 1]
                context += f' | Previous: "{previous_chunk.title}"'
                chunk.metadata["previous_chunk"] = previous_chunk.id

            if index < total - 1:
                next_chunk = chunks[index + 1]
                context += f' | Next: "{next_chunk.title}"'
                chunk.metadata["next_chunk"] = next_chunk.id

            chunk.context = context

        return chunks
