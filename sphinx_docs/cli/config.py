"""Configuration management for the Sphinx docs CLI and MCP server."""

import os
from pathlib import Path
from typing import Optional

from dotenv import load_dotenv

from ..converter import ConversionOptions
from ..optimizer import DEFAULT_CHUNK_SIZE, OptimizationOptions
from ..sources import CrawlerConfig, ScannerConfig
from ..sources.crawler import DEFAULT_USER_AGENT


def _env_flag(name: str, default: str = "true") -> bool:
    return os.getenv(name, default).lower() == "true"


class Config:
    """Configuration loaded from .env file."""

    def __init__(self, env_file: Optional[str] = None):
        """Load configuration from .env file."""
        if env_file:
            load_dotenv(env_file)
        else:
            # Load from working directory .env
            env_path = Path.cwd() / ".env"
            if env_path.exists():
                load_dotenv(env_path)

        # Conversion
        self.preserve_references = _env_flag("PRESERVE_REFERENCES")
        self.include_metadata = _env_flag("INCLUDE_METADATA", "false")
        self.base_url = os.getenv("BASE_URL") or None
        self.source_extensions = os.getenv("SOURCE_EXTENSIONS", ".rst").split(",")
        self.output_dir = os.getenv("OUTPUT_DIR", "./output")

        # Optimization
        self.chunk_size = int(os.getenv("CHUNK_SIZE", str(DEFAULT_CHUNK_SIZE)))
        self.add_context_headers = _env_flag("ADD_CONTEXT_HEADERS")
        self.simplify_structure = _env_flag("SIMPLIFY_STRUCTURE")
        self.remove_redundancy = _env_flag("REMOVE_REDUNDANCY")
        self.optimize_output = _env_flag("OPTIMIZE_OUTPUT")
        self.tiktoken_model = os.getenv("TIKTOKEN_MODEL", "gpt-4")

        # Crawling
        self.crawl_max_pages = int(os.getenv("CRAWL_MAX_PAGES", "50"))
        self.crawl_max_depth = int(os.getenv("CRAWL_MAX_DEPTH", "3"))
        self.crawl_timeout = float(os.getenv("CRAWL_TIMEOUT", "10"))
        self.crawl_user_agent = os.getenv("CRAWL_USER_AGENT", DEFAULT_USER_AGENT)

        # MCP Server
        self.mcp_server_name = os.getenv("MCP_SERVER_NAME", "mcp-sphinx-docs")

    def conversion_options(self) -> ConversionOptions:
        return ConversionOptions(
            preserve_references=self.preserve_references,
            include_metadata=self.include_metadata,
            base_url=self.base_url,
        )

    def optimization_options(self, chunk_size: int = None) -> OptimizationOptions:
        return OptimizationOptions(
            chunk_size=chunk_size or self.chunk_size,
            preserve_references=self.preserve_references,
            add_context_headers=self.add_context_headers,
            simplify_structure=self.simplify_structure,
            remove_redundancy=self.remove_redundancy,
        )

    def scanner_config(self, recursive: bool = True) -> ScannerConfig:
        return ScannerConfig(recursive=recursive, supported_extensions=self.source_extensions)

    def crawler_config(self, max_depth: int = None) -> CrawlerConfig:
        return CrawlerConfig(
            max_pages=self.crawl_max_pages,
            max_depth=self.crawl_max_depth if max_depth is None else max_depth,
            timeout=self.crawl_timeout,
            user_agent=self.crawl_user_agent,
        )
