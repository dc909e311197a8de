"""Batch conversion of local files and crawled pages."""

import logging
from dataclasses import dataclass, field
from pathlib import Path
from typing import List, Optional, Union

from ..converter import ConversionOptions, ParseError, SphinxConverter
from ..optimizer import LLMOptimizer, OptimizationOptions
from .crawler import CrawledPage
from .file_handler import FileHandler

logger = logging.getLogger(__name__)


@dataclass
class ConversionResult:
    """Result of converting one document."""

    success: bool
    source: str
    output_path: Optional[str] = None
    markdown: Optional[str] = None
    error: Optional[str] = None


@dataclass
class BatchSummary:
    """Totals for a batch of conversions."""

    results: List[ConversionResult] = field(default_factory=list)

    @property
    def converted(self) -> int:
        return sum(1 for result in self.results if result.success)

    @property
    def failed(self) -> int:
        return len(self.results) - self.converted


class DocumentProcessor:
    """Converts documents and writes the Markdown, logging and skipping failures."""

    def __init__(
        self,
        conversion_options: ConversionOptions = None,
        optimization_options: OptimizationOptions = None,
        optimize: bool = True,
        file_handler: FileHandler = None,
    ):
        """
        Initialize the document processor.

        Args:
            conversion_options: Options for markup to Markdown conversion
            optimization_options: Options for the LLM cleanup pass
            optimize: Whether to run the LLM cleanup pass at all
            file_handler: File handler used for reading and writing
        """
        self.conversion_options = conversion_options or ConversionOptions()
        self.optimization_options = optimization_options or OptimizationOptions()
        self.optimize = optimize
        self.file_handler = file_handler or FileHandler()
        self.converter = SphinxConverter()
        self.optimizer = LLMOptimizer()

    def process_content(self, content: Union[str, bytes], document_id: str) -> ConversionResult:
        """Convert (and optionally optimize) markup held in memory."""
        try:
            markdown = self.converter.convert_to_markdown(content, document_id, self.conversion_options)
        except ParseError as e:
            logger.error(f"❌ Failed to convert {document_id}: {e}")
            return ConversionResult(success=False, source=document_id, error=str(e))

        if self.optimize:
            markdown = self.optimizer.optimize(markdown, self.optimization_options)

        return ConversionResult(success=True, source=document_id, markdown=markdown)

    def process_file(
        self, source_path: Union[str, Path], output_path: Union[str, Path] = None
    ) -> ConversionResult:
        """
        Convert a single markup file.

        Args:
            source_path: Markup file to read
            output_path: Where to write the Markdown; nothing is written if None

        Returns:
            ConversionResult describing the outcome
        """
        source = str(source_path)
        try:
            content = self.file_handler.read_file(source_path)
        except (OSError, ParseError) as e:
            logger.error(f"❌ Failed to read {source}: {e}")
            return ConversionResult(success=False, source=source, error=str(e))

        result = self.process_content(content, source)
        if result.success and output_path is not None:
            result = self._write(result, output_path)
        return result

    def process_directory(
        self,
        source_dir: Union[str, Path],
        output_dir: Union[str, Path],
        recursive: bool = True,
    ) -> BatchSummary:
        """
        Convert every markup file below source_dir into output_dir.

        The directory layout is mirrored and extensions become ``.md``.
        """
        source_dir = Path(source_dir)
        files = self.file_handler.find_markup_files(source_dir, recursive=recursive)
        logger.info(f"📄 Found {len(files)} markup files")

        summary = BatchSummary()
        for source_file in files:
            output_path = self.file_handler.output_path_for(source_file, source_dir, output_dir)
            result = self.process_file(source_file, output_path)
            if result.success:
                logger.info(f"   ✓ {source_file} → {output_path}")
            summary.results.append(result)

        logger.info(f"✅ Converted {summary.converted}/{len(files)} files")
        return summary

    def process_pages(self, pages: List[CrawledPage], output_dir: Union[str, Path]) -> BatchSummary:
        """Convert crawled pages, naming output files after page titles."""
        summary = BatchSummary()
        used_names = set()

        for page in pages:
            logger.info(f"   Converting: {page.title or page.url}")
            result = self.process_content(page.content, page.url)
            if result.success:
                filename = self._unique_filename(page, used_names)
                result = self._write(result, Path(output_dir) / filename)
            summary.results.append(result)

        logger.info(f"✅ Successfully converted {summary.converted}/{len(pages)} pages")
        return summary

    def _unique_filename(self, page: CrawledPage, used_names: set) -> str:
        stem = self.file_handler.create_safe_filename(page.title) or self.file_handler.create_safe_filename(page.path)
        stem = stem or "page"
        candidate = stem
        suffix = 2
        while candidate in used_names:
            candidate = f"{stem}-{suffix}"
            suffix += 1
        used_names.add(candidate)
        return f"{candidate}.md"

    def _write(self, result: ConversionResult, output_path: Union[str, Path]) -> ConversionResult:
        try:
            self.file_handler.write_file(output_path, result.markdown)
        except OSError as e:
            logger.error(f"❌ Failed to write {output_path}: {e}")
            result.success = False
            result.error = str(e)
            return result
        result.output_path = str(output_path)
        return result
