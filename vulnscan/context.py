# Per-file analysis context: file path, decoded source, and its lines.
# Handles reading files as UTF-8 text and turns unreadable or non-text
# files into ScanIOError so the caller decides whether the scan continues.

import logging
from pathlib import Path
from typing import List

from vulnscan.errors import ScanIOError

logger = logging.getLogger(__name__)

# Lines of context kept on each side of a matching line.
CONTEXT_RADIUS = 2


def split_lines(text: str) -> List[str]:
    """
    Split text into lines on '\\n', dropping one trailing '\\r' per line.

    A final newline does not produce an extra empty line, and an empty
    string has no lines. Other Unicode line separators are kept as text.
    """
    if not text:
        return []
    lines = text.split("\n")
    if lines[-1] == "":
        lines.pop()
    return [line[:-1] if line.endswith("\r") else line for line in lines]


class FileContext:
    """
    Per-file state for scanning: path, source text, and lines.

    Patterns are applied to context.lines; context_window(i) gives the
    snippet stored on a Finding for a match on 0-based line i.
    """

    def __init__(self, path: Path, source: str) -> None:
        self.path = path
        self.source = source
        self.lines = split_lines(source)

    @property
    def line_count(self) -> int:
        return len(self.lines)

    def context_window(self, index: int, radius: int = CONTEXT_RADIUS) -> str:
        """
        Return lines [index - radius, index + radius] joined with newlines.

        The window is clipped at the start and end of the file and always
        contains line `index` itself.
        """
        if not 0 <= index < len(self.lines):
            raise IndexError(f"line index {index} out of range for {self.path}")
        start = max(0, index - radius)
        end = min(len(self.lines), index + radius + 1)
        return "\n".join(self.lines[start:end])


def create_context(path: Path) -> FileContext:
    """
    Read a source file into a FileContext.

    Raises:
        ScanIOError: if the file cannot be read or is not valid UTF-8.
    """
    try:
        # Decode bytes directly; read_text() would translate bare '\r' to '\n'.
        source = path.read_bytes().decode("utf-8")
    except (OSError, UnicodeDecodeError) as e:
        logger.error("Failed to read file %s: %s", path, e)
        raise ScanIOError(path, e) from e

    ctx = FileContext(path=path, source=source)
    logger.debug("Loaded %s: %d line(s)", path, ctx.line_count)
    return ctx
