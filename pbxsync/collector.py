"""
Source File Collection Module.

Recursively finds source files under a set of roots and applies the
substring denylist used to keep files out of the project.

Usage:
    from pbxsync.collector import collect_source_files, filter_excluded

    candidates = collect_source_files(["../source_common"], [".cpp", ".h"])
    kept, excluded = filter_excluded(candidates, ["imgui", "main.cpp"])
"""

import os
from collections.abc import Iterable
from pathlib import Path

from loguru import logger

DEFAULT_EXTENSIONS = [".cpp", ".h", ".m", ".mm"]


def collect_source_files(
    roots: Iterable[str | Path], extensions: list[str] | None = None
) -> list[Path]:
    """
    Recursively collect files with the given extensions under each root.

    Files are returned in scan order: roots in the order given, then the
    top-down order of ``os.walk``. Nothing is sorted. Paths keep the form of
    the root they were found under, so relative roots yield relative paths.

    Args:
        roots: Directories to scan.
        extensions: File suffixes to include. If None, uses DEFAULT_EXTENSIONS.

    Returns:
        Paths of matching files.

    Raises:
        FileNotFoundError: If a root does not exist.
        NotADirectoryError: If a root is a file.
    """
    if extensions is None:
        extensions = DEFAULT_EXTENSIONS

    collected_files = []
    for root in roots:
        base_path = os.path.normpath(root)

        if not os.path.exists(base_path):
            raise FileNotFoundError(f"The path {base_path} does not exist")
        if not os.path.isdir(base_path):
            raise NotADirectoryError(f"The path {base_path} is not a directory")

        for current, _dirs, files in os.walk(base_path, topdown=True):
            for file in files:
                if any(file.endswith(ext) for ext in extensions):
                    collected_files.append(Path(current) / file)

        logger.debug(f"Scanned {base_path}")

    return collected_files


def is_excluded(path: str | Path, patterns: Iterable[str]) -> bool:
    """Return True if any pattern occurs in ``path`` (case-sensitive substring)."""
    path_str = str(path)
    return any(pattern in path_str for pattern in patterns)


def filter_excluded(
    paths: Iterable[Path], patterns: list[str]
) -> tuple[list[Path], list[Path]]:
    """
    Split paths into kept and excluded, preserving order.

    Args:
        paths: Candidate paths.
        patterns: Substrings that reject a path.

    Returns:
        A ``(kept, excluded)`` tuple.
    """
    kept: list[Path] = []
    excluded: list[Path] = []
    for path in paths:
        if is_excluded(path, patterns):
            excluded.append(path)
        else:
            kept.append(path)
    return kept, excluded
