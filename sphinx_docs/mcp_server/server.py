"""FastMCP server exposing Sphinx to Markdown conversion tools."""

import json
from pathlib import Path

from mcp.server.fastmcp import FastMCP

from ..cli.config import Config
from ..converter import ParseError
from ..optimizer import LLMOptimizer
from ..sources import DocumentProcessor, FileHandler
from ..utils.logging_config import setup_logging

# Setup logging for MCP (silent mode - ERROR level only)
setup_logging(verbose=False)

# Create MCP server
mcp = FastMCP("mcp-sphinx-docs")

_config = None


def get_config() -> Config:
    """Configuration for tool defaults, loaded on first use."""
    global _config
    if _config is None:
        _config = Config()
    return _config


def _processor(optimize: bool, chunk_size: int, preserve_references: bool = None, recursive: bool = True):
    config = get_config()
    conversion_options = config.conversion_options()
    if preserve_references is not None:
        conversion_options.preserve_references = preserve_references
    return DocumentProcessor(
        conversion_options=conversion_options,
        optimization_options=config.optimization_options(chunk_size),
        optimize=optimize,
        file_handler=FileHandler(config.scanner_config(recursive)),
    )


@mcp.tool()
async def convert_sphinx_file(
    source_path: str,
    output_path: str = "",
    optimize: bool = True,
    chunk_size: int = 4000,
    preserve_references: bool = True,
) -> str:
    """
    Convert a single Sphinx RST file to LLM-optimized Markdown.

    Args:
        source_path: Path to the RST file to convert
        output_path: Output path for the converted Markdown file (optional)
        optimize: Apply LLM optimizations
        chunk_size: Maximum chunk size in words
        preserve_references: Keep :doc: references as Markdown links

    Returns:
        Confirmation followed by the converted Markdown, or an error message
    """
    processor = _processor(optimize, chunk_size, preserve_references)
    result = processor.process_file(source_path, output_path or None)
    if not result.success:
        return f"Error: {result.error}"

    saved = f" and saved to {result.output_path}" if result.output_path else ""
    return f"Successfully converted {source_path} to Markdown{saved}\n\nConverted content:\n\n{result.markdown}"


@mcp.tool()
async def convert_sphinx_directory(
    source_path: str,
    output_path: str,
    recursive: bool = True,
    optimize: bool = True,
    chunk_size: int = 4000,
) -> str:
    """
    Convert an entire Sphinx documentation directory to LLM-optimized Markdown.

    The directory layout is preserved and every .rst file becomes a .md file.

    Args:
        source_path: Path to the Sphinx documentation directory
        output_path: Output directory for converted Markdown files
        recursive: Process subdirectories recursively
        optimize: Apply LLM optimizations
        chunk_size: Maximum chunk size in words

    Returns:
        One line per converted file, plus any failures
    """
    processor = _processor(optimize, chunk_size, recursive=recursive)
    try:
        summary = processor.process_directory(source_path, output_path, recursive=recursive)
    except (FileNotFoundError, NotADirectoryError) as e:
        return f"Error: {e}"

    lines = []
    for result in summary.results:
        if result.success:
            lines.append(f"✓ {result.source} → {result.output_path}")
        else:
            lines.append(f"✗ {result.source}: {result.error}")

    return f"Successfully converted {summary.converted} of {len(summary.results)} files:\n\n" + "\n".join(lines)


@mcp.tool()
async def analyze_sphinx_structure(source_path: str, depth: int = 3) -> str:
    """
    Analyze the structure of a Sphinx documentation project.

    Args:
        source_path: Path to the Sphinx documentation directory
        depth: Maximum depth to analyze

    Returns:
        JSON description of the documentation tree
    """
    file_handler = FileHandler(get_config().scanner_config())
    try:
        structure = file_handler.analyze_structure(source_path, depth)
    except FileNotFoundError as e:
        return f"Error: {e}"

    report = {"structure": structure.to_dict()}
    if structure.type == "directory":
        report["sphinx_files"] = file_handler.find_sphinx_config(source_path)
        report["markup_files"] = structure.count_files(".rst")

        index_rst = report["sphinx_files"].get("index_rst")
        if index_rst:
            try:
                report["toctree"] = file_handler.extract_toctree(index_rst)
            except (OSError, ParseError) as e:
                report["toctree"] = []
                report["toctree_error"] = str(e)

    return f"Sphinx Documentation Structure Analysis:\n\n{json.dumps(report, indent=2)}"


@mcp.tool()
async def chunk_markdown(source_path: str, chunk_size: int = 4000, convert: bool = True) -> str:
    """
    Split a document into word-budgeted chunks with navigation context.

    Args:
        source_path: Markup (.rst) or Markdown file to chunk
        chunk_size: Maximum chunk size in words
        convert: Convert markup files to Markdown before chunking

    Returns:
        JSON list of chunks with ids, titles, word counts, metadata and context
    """
    config = get_config()
    file_handler = FileHandler()
    try:
        text = file_handler.read_file(source_path)
    except (OSError, ParseError) as e:
        return f"Error: {e}"

    if convert and Path(source_path).suffix.lower() in config.source_extensions:
        result = _processor(optimize=False, chunk_size=chunk_size).process_content(text, source_path)
        if not result.success:
            return f"Error: {result.error}"
        text = result.markdown

    chunks = LLMOptimizer(config.tiktoken_model).chunk_content(text, config.optimization_options(chunk_size))
    return json.dumps([chunk.to_dict() for chunk in chunks], indent=2, ensure_ascii=False)


def start_server(config: Config):
    """Start MCP server on stdio."""
    global _config
    _config = config

    # Start the MCP server
    mcp.run()


if __name__ == "__main__":
    # Load config for standalone execution
    start_server(Config())
