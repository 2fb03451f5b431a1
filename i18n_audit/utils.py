"""
Utility functions for the hardcoded-text audit.
"""

import re
from pathlib import Path
from typing import Optional, Tuple

# MIME type pattern: "type/subtype" - not file paths.
_MIME_TYPE_PATTERN = re.compile(
    r"^(text|application|image|audio|video|font|multipart)/[a-zA-Z0-9.+*-]+$",
    re.IGNORECASE,
)
_ROUTE_PATH_PATTERN = re.compile(r"^/[\w/.\-:*?=&{}$\[\]]*$")

# Path fragments that identify the structural role of a backend file.
SERVER_FILE_TYPES = (
    ("controller", "controller"),
    ("service", "service"),
    ("middleware", "middleware"),
    ("route", "route"),
    ("model", "model"),
    ("util", "utility"),
    ("config", "config"),
    ("seed", "seed"),
)


def looks_like_file_path(s: str) -> bool:
    """True if the string is an absolute file-system or route path, not prose or a MIME type."""
    s = (s or "").strip().strip("'\"")
    if not s or len(s) < 2:
        return False
    if _MIME_TYPE_PATTERN.match(s):
        return False
    if re.match(r"^[A-Za-z]:[/\\]", s) or s.startswith("\\\\"):
        return True
    if "://" in s or s.startswith("//"):
        return False
    return _ROUTE_PATH_PATTERN.match(s) is not None


def detect_grammar(file_path: Path) -> Optional[str]:
    """Grammar name used to parse a UI file, or None when it is not parseable markup."""
    ext = file_path.suffix.lower()
    grammar_map = {
        '.ts': 'typescript',
        '.tsx': 'tsx',
        '.jsx': 'tsx',
        '.js': 'tsx',
        '.mjs': 'tsx',
        '.cjs': 'tsx',
    }
    return grammar_map.get(ext)


def owner_name_for(file_path: Path, keep_extension: bool = False) -> str:
    """Component name (UI) or file name (backend) a file's candidates are attributed to."""
    if keep_extension:
        return file_path.name
    return file_path.stem


def server_file_type(file_path: str) -> str:
    """Classify a backend file by the first structural fragment found in its path."""
    path_lower = file_path.lower()
    for fragment, file_type in SERVER_FILE_TYPES:
        if fragment in path_lower:
            return file_type
    return "server"


def offset_to_position(content: str, offset: int) -> Tuple[int, int]:
    """Convert a character offset into a 1-based line and 0-based column."""
    line = content.count("\n", 0, offset) + 1
    column = offset - (content.rfind("\n", 0, offset) + 1)
    return line, column


def relative_posix(path: Path, root: Path) -> str:
    """Path relative to root with forward slashes; the absolute path when outside root."""
    try:
        return path.resolve().relative_to(root.resolve()).as_posix()
    except ValueError:
        return path.resolve().as_posix()
