"""Chunk command - splits a document into LLM-sized chunks."""

import json
import logging
import sys
from pathlib import Path

from ...converter import ParseError, SphinxConverter
from ...optimizer import LLMOptimizer
from ...sources import FileHandler
from ..config import Config

logger = logging.getLogger(__name__)


def chunk_command(config: Config, source_path: str, output_path: str = None, chunk_size: int = None):
    """Chunk a markup or Markdown file and emit the chunks as JSON."""
    file_handler = FileHandler()
    source = Path(source_path)

    try:
        text = file_handler.read_file(source)
    except (OSError, ParseError) as e:
        logger.error(f"❌ Failed to read {source_path}: {e}")
        sys.exit(1)

    if source.suffix.lower() in config.source_extensions:
        text = SphinxConverter().convert_to_markdown(text, str(source), config.conversion_options())

    optimizer = LLMOptimizer(config.tiktoken_model)
    chunks = optimizer.chunk_content(text, config.optimization_options(chunk_size))
    stats = optimizer.get_chunk_stats(chunks)

    logger.info(f"🧩 {stats.total_chunks} chunks, {stats.total_words} words, {stats.total_tokens} tokens")
    logger.info(f"📊 Average {stats.avg_word_count} words, largest {stats.max_word_count} words")
    if stats.overflow_chunks:
        logger.warning(f"⚠️ {stats.overflow_chunks} chunks exceed the word budget")

    payload = json.dumps([chunk.to_dict() for chunk in chunks], indent=2, ensure_ascii=False)
    if output_path:
        file_handler.write_file(output_path, payload + "\n")
        logger.info(f"✅ Chunks written to {output_path}")
    else:
        print(payload)
