"""
Source tree traversal: exclusion-aware, depth-bounded, lazy.
"""

import logging
import os
from pathlib import Path
from typing import Iterable, Iterator, List, Set

from .candidate import ScanWarning

logger = logging.getLogger(__name__)

DEFAULT_MAX_DEPTH = 10


class SourceWalker:
    """Yields source files under a root, pruning excluded directories.

    Exclusions are plain substrings matched against the path below the root, so
    ``".test."`` drops test files and ``"node_modules"`` prunes the directory
    before it is descended into. I/O errors never escape: they are recorded in
    ``warnings`` and the walk continues.
    """

    def __init__(
        self,
        extensions: Iterable[str],
        exclusions: Iterable[str] = (),
        max_depth: int = DEFAULT_MAX_DEPTH,
    ):
        self.extensions = frozenset(ext.lower() for ext in extensions)
        self.exclusions = tuple(exclusions)
        self.max_depth = max_depth
        self.warnings: List[ScanWarning] = []
        self._root = Path(".")

    def walk(self, root: Path) -> Iterator[Path]:
        """Absolute paths of matching files under root, in sorted order."""
        root = Path(root).absolute()
        if not root.is_dir():
            self._warn(root, f"Source root does not exist or is not a directory: {root}")
            return
        self._root = root
        visited: Set[str] = set()
        yield from self._walk_dir(root, 0, visited)

    def _walk_dir(self, directory: Path, depth: int, visited: Set[str]) -> Iterator[Path]:
        if depth > self.max_depth:
            self._warn(directory, f"Maximum traversal depth {self.max_depth} reached at {directory}", "depth")
            return
        real = os.path.realpath(directory)
        if real in visited:
            return
        visited.add(real)

        try:
            with os.scandir(directory) as it:
                entries = sorted(it, key=lambda e: e.name)
        except OSError as e:
            self._warn(directory, f"Could not read directory {directory}: {e}")
            return

        for entry in entries:
            path = Path(entry.path)
            if self._is_excluded(path):
                continue
            try:
                is_dir = entry.is_dir()
                is_file = not is_dir and entry.is_file()
            except OSError as e:
                self._warn(path, f"Could not stat {path}: {e}")
                continue
            if is_dir:
                yield from self._walk_dir(path, depth + 1, visited)
            elif is_file and path.suffix.lower() in self.extensions:
                yield path

    def _is_excluded(self, path: Path) -> bool:
        try:
            text = path.relative_to(self._root).as_posix()
        except ValueError:
            text = path.as_posix()
        return any(pattern in text for pattern in self.exclusions)

    def _warn(self, path: Path, message: str, category: str = "io"):
        logger.warning(message)
        self.warnings.append(ScanWarning(path.as_posix(), category, message))
