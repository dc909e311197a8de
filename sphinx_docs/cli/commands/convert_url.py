"""Convert-url command - crawls a published Sphinx site and converts its pages."""

import logging
import sys

from ...sources import DocumentProcessor, SphinxCrawler
from ..config import Config

logger = logging.getLogger(__name__)


def convert_url_command(
    config: Config,
    url: str,
    output_dir: str = None,
    max_depth: int = None,
    chunk_size: int = None,
    optimize: bool = None,
):
    """Crawl a documentation site and write one Markdown file per page."""
    output_dir = output_dir or config.output_dir
    logger.info(f"🚀 Converting Sphinx documentation from: {url}")
    logger.info(f"📁 Output directory: {output_dir}")

    crawler = SphinxCrawler(config.crawler_config(max_depth))
    pages = crawler.crawl(url)
    if not pages:
        logger.error(f"❌ No pages could be fetched from {url}")
        sys.exit(1)

    logger.info(f"📄 Found {len(pages)} pages to convert")

    processor = DocumentProcessor(
        conversion_options=config.conversion_options(),
        optimization_options=config.optimization_options(chunk_size),
        optimize=config.optimize_output if optimize is None else optimize,
    )
    processor.process_pages(pages, output_dir)
    logger.info(f"📁 Files saved in: {output_dir}")
