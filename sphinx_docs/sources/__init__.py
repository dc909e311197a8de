"""Document sources: local files, crawled sites and batch conversion."""

from .crawler import CrawledPage, CrawlerConfig, HtmlContentParser, SphinxCrawler
from .file_handler import FileHandler, FileStructure
from .processor import BatchSummary, ConversionResult, DocumentProcessor
from .scanner import DirectoryScanner, ScannerConfig

__all__ = [
    "CrawledPage",
    "CrawlerConfig",
    "HtmlContentParser",
    "SphinxCrawler",
    "FileHandler",
    "FileStructure",
    "BatchSummary",
    "ConversionResult",
    "DocumentProcessor",
    "DirectoryScanner",
    "ScannerConfig",
]
