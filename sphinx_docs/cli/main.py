"""Main CLI entry point for mcp-sphinx-docs."""

import argparse

from ..utils.logging_config import setup_logging
from .commands.analyze import analyze_command
from .commands.chunk import chunk_command
from .commands.convert_local import convert_local_command
from .commands.convert_url import convert_url_command
from .commands.serve import serve_command
from .config import Config


def build_parser() -> argparse.ArgumentParser:
    """Build the argument parser with all sub-commands."""
    parser = argparse.ArgumentParser(
        prog="sphinx-docs",
        description="Convert Sphinx documentation to LLM-optimized Markdown",
    )

    subparsers = parser.add_subparsers(dest="command", help="Available commands")

    # Convert-url command
    url_parser = subparsers.add_parser("convert-url", help="Convert Sphinx documentation from a URL to Markdown")
    url_parser.add_argument("url", help="URL of the Sphinx documentation site")
    url_parser.add_argument("output_dir", nargs="?", help="Directory to save the converted Markdown files")
    url_parser.add_argument("-d", "--max-depth", type=int, help="Maximum depth to crawl (default: 3)")
    url_parser.add_argument("-c", "--chunk-size", type=int, help="Maximum chunk size in words (default: 4000)")
    url_parser.add_argument("--no-optimize", action="store_true", help="Skip LLM optimizations")
    url_parser.add_argument("--config", help="Path to .env configuration file", default=None)

    # Convert-local command
    local_parser = subparsers.add_parser("convert-local", help="Convert local Sphinx documentation to Markdown")
    local_parser.add_argument("source_path", help="Path to markup file or directory")
    local_parser.add_argument("output_path", help="Output file or directory path")
    local_parser.add_argument(
        "--no-recursive", action="store_true", help="Only convert files directly inside the source directory"
    )
    local_parser.add_argument("-c", "--chunk-size", type=int, help="Maximum chunk size in words (default: 4000)")
    local_parser.add_argument("--no-optimize", action="store_true", help="Skip LLM optimizations")
    local_parser.add_argument("--config", help="Path to .env configuration file", default=None)

    # Chunk command
    chunk_parser = subparsers.add_parser("chunk", help="Split a markup or Markdown file into LLM-sized chunks")
    chunk_parser.add_argument("source_path", help="Markup (.rst) or Markdown file")
    chunk_parser.add_argument("-o", "--output", help="Write chunks as JSON to this file instead of stdout")
    chunk_parser.add_argument("-c", "--chunk-size", type=int, help="Maximum chunk size in words (default: 4000)")
    chunk_parser.add_argument("--config", help="Path to .env configuration file", default=None)
    chunk_parser.add_argument("-v", "--verbose", action="store_true", help="Show chunk statistics")

    # Analyze command
    analyze_parser = subparsers.add_parser("analyze", help="Analyze the structure of a Sphinx documentation project")
    analyze_parser.add_argument("source_path", help="Path to the documentation directory")
    analyze_parser.add_argument("--depth", type=int, default=3, help="Maximum depth to analyze (default: 3)")
    analyze_parser.add_argument("--config", help="Path to .env configuration file", default=None)
    analyze_parser.add_argument("-v", "--verbose", action="store_true", help="Show detected Sphinx files")

    # Serve command
    serve_parser = subparsers.add_parser("serve", help="Start MCP server")
    serve_parser.add_argument("--config", help="Path to .env configuration file", default=None)
    serve_parser.add_argument(
        "-v",
        "--verbose",
        action="store_true",
        help="Show startup messages (default: silent for MCP compatibility)",
    )

    return parser


def main(argv=None):
    """Main CLI entry point."""
    parser = build_parser()
    args = parser.parse_args(argv)

    if not args.command:
        parser.print_help()
        return

    # Conversion commands show progress by default (they're long-running operations)
    verbose = getattr(args, "verbose", False)
    if args.command in ("convert-url", "convert-local"):
        setup_logging(verbose=True)
    else:
        setup_logging(verbose=verbose)

    # Load configuration
    config = Config(args.config)

    # Execute command
    if args.command == "convert-url":
        convert_url_command(
            config=config,
            url=args.url,
            output_dir=args.output_dir,
            max_depth=args.max_depth,
            chunk_size=args.chunk_size,
            optimize=False if args.no_optimize else None,
        )
    elif args.command == "convert-local":
        convert_local_command(
            config=config,
            source_path=args.source_path,
            output_path=args.output_path,
            recursive=not args.no_recursive,
            chunk_size=args.chunk_size,
            optimize=False if args.no_optimize else None,
        )
    elif args.command == "chunk":
        chunk_command(
            config=config,
            source_path=args.source_path,
            output_path=args.output,
            chunk_size=args.chunk_size,
        )
    elif args.command == "analyze":
        analyze_command(config=config, source_path=args.source_path, depth=args.depth)
    elif args.command == "serve":
        serve_command(config, verbose=verbose)
    else:
        parser.print_help()


if __name__ == "__main__":
    main()
