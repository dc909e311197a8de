"""Convert-local command - converts local markup files or directories."""

import logging
import sys
from pathlib import Path

from ...sources import DocumentProcessor, FileHandler
from ..config import Config

logger = logging.getLogger(__name__)


def convert_local_command(
    config: Config,
    source_path: str,
    output_path: str,
    recursive: bool = True,
    chunk_size: int = None,
    optimize: bool = None,
):
    """Convert a markup file, or every markup file below a directory, to Markdown."""
    logger.info("🚀 Converting local Sphinx documentation")
    logger.info(f"📂 Source: {source_path}")
    logger.info(f"📁 Output: {output_path}")

    source = Path(source_path)
    if not source.exists():
        logger.error(f"❌ Source not found: {source_path}")
        sys.exit(1)

    processor = DocumentProcessor(
        conversion_options=config.conversion_options(),
        optimization_options=config.optimization_options(chunk_size),
        optimize=config.optimize_output if optimize is None else optimize,
        file_handler=FileHandler(config.scanner_config(recursive)),
    )

    if source.is_file():
        result = processor.process_file(source, output_path)
        if not result.success:
            logger.error(f"❌ Conversion failed: {result.error}")
            sys.exit(1)
        logger.info(f"✅ Converted: {source_path} → {result.output_path}")
        return

    summary = processor.process_directory(source, output_path, recursive=recursive)
    logger.info(f"📁 Files saved in: {output_path}")
    if summary.failed:
        logger.warning(f"⚠️ {summary.failed} files could not be converted")
