"""Filesystem Gateway - Infrastructure implementation of FileSystemProtocol."""

import shutil
from pathlib import Path
from typing import List, Optional

from closure_end_linter.domain.constants import SWIFT_GLOB
from closure_end_linter.domain.protocols import FileSystemProtocol


class FileSystemGateway(FileSystemProtocol):
    """Infrastructure implementation of FileSystemProtocol using pathlib."""

    def resolve_path(self, path: str) -> str:
        """Resolve and normalize a path string."""
        return str(Path(path).resolve())

    def glob_swift_files(self, path: str, excluded: Optional[List[str]] = None) -> List[str]:
        """Get all Swift files in path (recursive if directory), sorted, minus excluded globs."""
        path_obj = Path(self.resolve_path(path))
        if not path_obj.is_dir():
            return [str(path_obj)] if path_obj.suffix == ".swift" else []
        patterns = excluded or []
        files: List[str] = []
        for candidate in sorted(path_obj.glob(SWIFT_GLOB)):
            relative = candidate.relative_to(path_obj)
            if any(relative.match(pattern) or relative.as_posix().startswith(pattern.rstrip("/") + "/")
                   for pattern in patterns):
                continue
            files.append(str(candidate))
        return files

    def read_text(self, path: str, encoding: str = "utf-8") -> str:
        """Read text content from a file, keeping its line endings."""
        with open(path, encoding=encoding, newline="") as f:
            return f.read()

    def write_text(self, path: str, content: str, encoding: str = "utf-8") -> None:
        """Write text content to a file, keeping its line endings."""
        with open(path, "w", encoding=encoding, newline="") as f:
            f.write(content)

    def copy_file(self, source: str, destination: str) -> None:
        """Copy a file with metadata."""
        shutil.copy2(source, destination)
