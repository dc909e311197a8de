"""Directory Scanner for markup source files."""

import logging
from dataclasses import dataclass
from pathlib import Path
from typing import Iterator, List

logger = logging.getLogger(__name__)

DEFAULT_IGNORED_DIRECTORIES = ["node_modules", "venv", "__pycache__", "_build"]


@dataclass
class ScannerConfig:
    """Configuration for the directory scanner."""

    skip_hidden_files: bool = True
    recursive: bool = True
    supported_extensions: List[str] = None
    ignored_directories: List[str] = None

    def __post_init__(self):
        if self.supported_extensions is None:
            self.supported_extensions = [".rst"]
        if self.ignored_directories is None:
            self.ignored_directories = list(DEFAULT_IGNORED_DIRECTORIES)


class DirectoryScanner:
    """Scans directories for markup source files."""

    def __init__(self, config: ScannerConfig = None):
        self.config = config or ScannerConfig()

    def scan_for_markup_files(self, root_dir: str) -> Iterator[str]:
        """
        Scan for markup files in sorted order.

        Args:
            root_dir: Root directory path to scan

        Yields:
            Relative file paths with a supported extension (.rst by default)
        """
        root_path = Path(root_dir)

        if not root_path.exists():
            raise FileNotFoundError(f"Directory not found: {root_dir}")

        if not root_path.is_dir():
            raise NotADirectoryError(f"Path is not a directory: {root_dir}")

        for file_path in sorted(self._walk_directory(root_path)):
            relative_path = file_path.relative_to(root_path)
            yield str(relative_path)

    def _walk_directory(self, path: Path) -> Iterator[Path]:
        """Walk directory tree and yield matching files."""
        try:
            for item in path.iterdir():
                # Skip hidden files/directories if configured
                if self.config.skip_hidden_files and item.name.startswith("."):
                    continue

                if item.is_file():
                    if self._is_markup_file(item):
                        yield item
                elif item.is_dir() and self.config.recursive:
                    if item.name in self.config.ignored_directories:
                        continue
                    yield from self._walk_directory(item)
        except PermissionError as e:
            logger.warning(f"Skipping unreadable directory {path}: {e}")

    def _is_markup_file(self, file_path: Path) -> bool:
        """Check if file has a supported markup extension."""
        return file_path.suffix.lower() in self.config.supported_extensions
