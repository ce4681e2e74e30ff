"""
gentr Path Resolver.

Turns the --input option or a line-delimited stream into the initial
list of files to watch.
Requires Python 3.11+.
"""

import glob
from collections.abc import Iterable
from pathlib import Path

from utils.errors import StartupError

GLOB_CHARACTERS = "*?[]"


def is_glob(pattern: str) -> bool:
    """Check if the input looks like a glob pattern."""
    return any(char in pattern for char in GLOB_CHARACTERS)


def walk_files(root: Path) -> list[Path]:
    """All regular files below root, in a stable order."""
    return sorted(path for path in root.rglob("*") if path.is_file())


def without_paths(paths: Iterable[Path], exclude: Iterable[Path]) -> list[Path]:
    """Drop every path that resolves to one of the excluded files."""
    excluded = {path.resolve() for path in exclude}
    if not excluded:
        return list(paths)
    return [path for path in paths if path.resolve() not in excluded]


def resolve_files(input_path: str, recursive: bool = False) -> list[Path]:
    """
    Resolve the --input option into files.

    Args:
        input_path: File, directory or glob pattern
        recursive: Walk directories instead of listing their top level

    Returns:
        Files to watch; glob matches that are directories are skipped

    Raises:
        StartupError: If the input does not exist or cannot be listed
    """
    if is_glob(input_path):
        matches = sorted(glob.glob(input_path, recursive=recursive))
        return [Path(match) for match in matches if Path(match).is_file()]

    path = Path(input_path)
    try:
        if not path.is_dir():
            path.stat()
            return [path]
        if recursive:
            return walk_files(path)
        return sorted(entry for entry in path.iterdir() if entry.is_file())
    except OSError as e:
        raise StartupError(f"Error accessing input {input_path}: {e}") from e


def read_paths(lines: Iterable[str]) -> list[Path]:
    """Parse line-delimited paths, skipping blank lines."""
    paths = []
    for line in lines:
        line = line.strip()
        if line:
            paths.append(Path(line))
    return paths


def root_directories(input_path: str, recursive: bool) -> list[Path]:
    """Directories the rescanner should walk (only in recursive mode)."""
    if not recursive or is_glob(input_path):
        return []
    path = Path(input_path)
    return [path] if path.is_dir() else []
