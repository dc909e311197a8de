"""File operations and documentation tree analysis."""

import logging
import re
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Dict, List, Optional, Union

from ..converter import decode_markup
from .scanner import DirectoryScanner, ScannerConfig

logger = logging.getLogger(__name__)

# Entries never listed by analyze_structure
SKIPPED_ENTRIES = {"node_modules", "__pycache__", "venv", "_build", "_static", "_templates"}

REQUIREMENTS_CANDIDATES = ["requirements.txt", "requirements-docs.txt", "docs/requirements.txt"]
INDEX_CANDIDATES = ["index.rst", "docs/index.rst", "source/index.rst"]


@dataclass
class FileStructure:
    """A node of an analysed documentation tree."""

    name: str
    type: str  # "file" or "directory"
    path: str
    size: Optional[int] = None
    extension: Optional[str] = None
    children: List["FileStructure"] = field(default_factory=list)

    def to_dict(self) -> Dict[str, Any]:
        data: Dict[str, Any] = {"name": self.name, "type": self.type, "path": self.path}
        if self.type == "file":
            data["size"] = self.size
            data["extension"] = self.extension
        else:
            data["children"] = [child.to_dict() for child in self.children]
        return data

    def count_files(self, extension: str = None) -> int:
        """Count files below this node, optionally filtered by extension."""
        if self.type == "file":
            return int(extension is None or self.extension == extension)
        return sum(child.count_files(extension) for child in self.children)


class FileHandler:
    """Reads markup files, writes Markdown and analyses documentation trees."""

    def __init__(self, scanner_config: ScannerConfig = None):
        self.scanner_config = scanner_config or ScannerConfig()

    def read_file(self, file_path: Union[str, Path]) -> str:
        """
        Read a markup file as normalized text.

        Raises:
            FileNotFoundError: If the file does not exist
            ParseError: If the file is not UTF-8 text
        """
        file_path = Path(file_path)
        if not file_path.is_file():
            raise FileNotFoundError(f"File not found: {file_path}")
        return decode_markup(file_path.read_bytes(), str(file_path))

    def write_file(self, file_path: Union[str, Path], content: str):
        """Write text to a file, creating parent directories."""
        file_path = Path(file_path)
        self.ensure_directory(file_path.parent)
        file_path.write_text(content, encoding="utf-8")
        logger.debug(f"Wrote {len(content)} characters to {file_path}")

    def ensure_directory(self, dir_path: Union[str, Path]):
        """Ensure directory exists."""
        Path(dir_path).mkdir(parents=True, exist_ok=True)

    def find_markup_files(self, directory: Union[str, Path], recursive: bool = True) -> List[Path]:
        """Return sorted paths of every markup file below a directory."""
        config = ScannerConfig(
            skip_hidden_files=self.scanner_config.skip_hidden_files,
            recursive=recursive,
            supported_extensions=self.scanner_config.supported_extensions,
            ignored_directories=self.scanner_config.ignored_directories,
        )
        directory = Path(directory)
        return [directory / relative for relative in DirectoryScanner(config).scan_for_markup_files(str(directory))]

    def output_path_for(
        self, source_file: Union[str, Path], source_root: Union[str, Path], output_root: Union[str, Path]
    ) -> Path:
        """Mirror a source file's location under output_root with a .md extension."""
        source_file = Path(source_file)
        try:
            relative = source_file.relative_to(source_root)
        except ValueError:
            relative = Path(source_file.name)
        return self.change_extension(Path(output_root) / relative, ".md")

    def analyze_structure(self, path: Union[str, Path], max_depth: int = 3) -> FileStructure:
        """
        Analyse a documentation directory.

        Args:
            path: File or directory to analyse
            max_depth: Number of directory levels to descend

        Returns:
            FileStructure tree; hidden entries and build directories are skipped
        """
        path = Path(path)
        if not path.exists():
            raise FileNotFoundError(f"Path not found: {path}")

        if not path.is_dir():
            return FileStructure(
                name=path.name,
                type="file",
                path=str(path),
                size=path.stat().st_size,
                extension=path.suffix,
            )

        structure = FileStructure(name=path.name, type="directory", path=str(path))
        if max_depth > 0:
            for entry in sorted(path.iterdir(), key=lambda p: p.name):
                if entry.name.startswith(".") or entry.name in SKIPPED_ENTRIES:
                    continue
                structure.children.append(self.analyze_structure(entry, max_depth - 1))

        return structure

    def find_sphinx_config(self, directory: Union[str, Path]) -> Dict[str, str]:
        """Locate conf.py, Makefile, a requirements file and the root index."""
        directory = Path(directory)
        found: Dict[str, str] = {}

        for key, name in (("conf_py", "conf.py"), ("makefile", "Makefile")):
            if (directory / name).is_file():
                found[key] = str(directory / name)

        for key, candidates in (("requirements", REQUIREMENTS_CANDIDATES), ("index_rst", INDEX_CANDIDATES)):
            for candidate in candidates:
                if (directory / candidate).is_file():
                    found[key] = str(directory / candidate)
                    break

        return found

    def extract_toctree(self, index_path: Union[str, Path]) -> List[str]:
        """List the documents referenced by the first toctree of an index file."""
        content = self.read_file(index_path)
        match = re.search(r"^\.\. toctree::[^\n]*\n((?:[ \t]+[^\n]*\n|[ \t]*\n)*)", content + "\n", re.MULTILINE)
        if not match:
            return []

        entries = []
        for line in match.group(1).split("\n"):
            entry = line.strip()
            if entry and not entry.startswith(":") and not entry.startswith(".."):
                entries.append(re.sub(r"\.(rst|md)$", "", entry) + ".rst")
        return entries

    def create_safe_filename(self, title: str) -> str:
        """Lowercase, keep [a-z0-9 -], join words with single dashes."""
        name = re.sub(r"[^a-z0-9\s-]", "", title.lower())
        name = re.sub(r"\s+", "-", name)
        name = re.sub(r"-+", "-", name)
        return name.strip("-")

    def change_extension(self, file_path: Union[str, Path], extension: str) -> Path:
        return Path(file_path).with_suffix(extension)
