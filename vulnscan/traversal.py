"""
File system traversal: walk a project tree and collect Rust source files.

The walker recurses depth-first, visiting the entries of each directory in
sorted order so that scans are reproducible. Hidden directories (names
starting with '.') and build output directories (``target`` by default) are
never entered.

Typical usage:
    from pathlib import Path
    from vulnscan.traversal import walk

    # A single file is returned as-is when it has the .rs extension
    files = walk(Path("src/lib.rs"))

    # A directory is searched recursively
    files = walk(Path("./programs"))

    # Custom exclusions
    files = walk(Path("."), ignore_dirs={"target", "vendor"})

Unlike most linters, an unreadable directory is an error here: the scan
reports ScanIOError instead of silently producing a partial file list.
"""

import logging
import os
from pathlib import Path
from typing import Callable, Iterable, List, Optional, Set, Tuple

from vulnscan.config import DEFAULT_IGNORE_DIRS, RUST_EXTENSION
from vulnscan.errors import ScanIOError

logger = logging.getLogger(__name__)


def is_source_file(path: Path, extension: str = RUST_EXTENSION) -> bool:
    """
    Check if a path has the recognized source extension.

    Args:
        path: Path to check. Only the suffix is inspected.
        extension: Extension including the dot (".rs").

    Returns:
        True if the suffix matches exactly. Matching is case-sensitive, so
        "LIB.RS" is not a source file.

    Examples:
        >>> is_source_file(Path("lib.rs"))
        True
        >>> is_source_file(Path("Cargo.toml"))
        False
    """
    return path.suffix == extension


def should_ignore_directory(dir_path: Path, ignore_dirs: Iterable[str]) -> bool:
    """
    Check if a directory should be skipped during traversal.

    Args:
        dir_path: Path to the directory. Only its name is checked.
        ignore_dirs: Directory names to skip (case-sensitive).

    Returns:
        True for hidden directories (name starts with '.') and for any name
        listed in ignore_dirs.

    Examples:
        >>> should_ignore_directory(Path(".git"), {"target"})
        True
        >>> should_ignore_directory(Path("target"), {"target"})
        True
        >>> should_ignore_directory(Path("src"), {"target"})
        False
    """
    name = dir_path.name
    return name.startswith(".") or name in ignore_dirs


def _list_entries(directory: Path) -> List[Path]:
    try:
        return sorted(directory.iterdir(), key=lambda p: p.name)
    except OSError as e:
        logger.error("Cannot read directory %s: %s", directory, e)
        raise ScanIOError(directory, e) from e


def _entry_kind(entry: Path) -> Tuple[bool, bool, bool]:
    """Return (is_symlink, is_dir, is_file) for a directory entry."""
    try:
        return entry.is_symlink(), entry.is_dir(), entry.is_file()
    except OSError as e:
        logger.error("Cannot stat %s: %s", entry, e)
        raise ScanIOError(entry, e) from e


def walk(
    root: Path,
    *,
    extension: str = RUST_EXTENSION,
    ignore_dirs: Optional[Set[str]] = None,
    follow_symlinks: bool = True,
    filter_fn: Optional[Callable[[Path], bool]] = None,
    on_error: Optional[Callable[[ScanIOError], None]] = None,
) -> List[Path]:
    """
    Enumerate candidate source files under `root`.

    Args:
        root: A source file or a directory.
        extension: Source extension to collect (".rs").
        ignore_dirs: Directory names to skip. If None, uses DEFAULT_IGNORE_DIRS.
                     Hidden directories are always skipped.
        follow_symlinks: If True (default), descend into symlinked directories
                         and collect symlinked files. Each real directory is
                         visited at most once, so symlink cycles terminate.
                         If False, symlinks are skipped.
        filter_fn: Optional extra predicate; only files for which it returns
                   True are collected.
        on_error: Optional callback. When given, a directory or entry that
                  cannot be read is passed to it as a ScanIOError and
                  skipped, and the walk continues.

    Returns:
        - [root] if root is a file with the source extension
        - every matching file under root, depth-first in sorted order, if
          root is a directory
        - [] otherwise (a warning is logged)

    Raises:
        ScanIOError: if a directory cannot be listed or an entry cannot be
                     inspected, unless on_error is given.
    """
    if ignore_dirs is None:
        ignore_dirs = set(DEFAULT_IGNORE_DIRS)

    if root.is_file():
        if is_source_file(root, extension):
            return [root]
        logger.warning("Path is not a Rust file or directory: %s", root)
        return []

    if not root.is_dir():
        logger.warning("Path is not a Rust file or directory: %s", root)
        return []

    logger.info("Starting traversal from: %s", root)
    logger.debug(
        "Traversal config: extension=%s, follow_symlinks=%s, ignore_dirs=%s",
        extension,
        follow_symlinks,
        sorted(ignore_dirs),
    )

    collected: List[Path] = []
    visited: Set[str] = set()

    def _walk_directory(current_dir: Path) -> None:
        """Recursive helper to walk directory tree."""
        real = os.path.realpath(current_dir)
        if real in visited:
            logger.debug("Already visited %s (via %s); skipping", real, current_dir)
            return
        visited.add(real)

        try:
            entries = _list_entries(current_dir)
        except ScanIOError as exc:
            if on_error is None:
                raise
            on_error(exc)
            return

        for entry in entries:
            try:
                is_link, is_dir, is_file = _entry_kind(entry)
            except ScanIOError as exc:
                if on_error is None:
                    raise
                on_error(exc)
                continue

            if is_link and not follow_symlinks:
                logger.debug("Skipping symlink: %s", entry)
                continue

            if is_dir:
                if should_ignore_directory(entry, ignore_dirs):
                    logger.debug("Ignoring directory: %s", entry)
                    continue
                _walk_directory(entry)

            elif is_file and is_source_file(entry, extension):
                if filter_fn is not None and not filter_fn(entry):
                    logger.debug("Filtered out by custom filter: %s", entry)
                    continue
                logger.debug("Found source file: %s", entry)
                collected.append(entry)

    _walk_directory(root)

    logger.info(
        "Traversal complete: found %d source file(s) in %s",
        len(collected),
        root,
    )
    return collected
