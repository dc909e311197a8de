"""Analyze command - reports the structure of a documentation tree."""

import json
import logging
import sys

from ...converter import ParseError
from ...sources import FileHandler
from ..config import Config

logger = logging.getLogger(__name__)


def analyze_command(config: Config, source_path: str, depth: int = 3):
    """Print the documentation tree of source_path as JSON."""
    file_handler = FileHandler(config.scanner_config())

    try:
        structure = file_handler.analyze_structure(source_path, depth)
    except FileNotFoundError as e:
        logger.error(f"❌ {e}")
        sys.exit(1)

    if structure.type == "directory":
        sphinx_files = file_handler.find_sphinx_config(source_path)
        logger.info(f"📄 {structure.count_files('.rst')} markup files within depth {depth}")
        for key, path in sphinx_files.items():
            logger.info(f"🔧 {key}: {path}")

        if "index_rst" in sphinx_files:
            try:
                entries = file_handler.extract_toctree(sphinx_files["index_rst"])
            except (OSError, ParseError) as e:
                logger.warning(f"⚠️  Could not read toctree: {e}")
            else:
                logger.info(f"📑 Root toctree: {', '.join(entries) or '(empty)'}")

    print(json.dumps(structure.to_dict(), indent=2))
