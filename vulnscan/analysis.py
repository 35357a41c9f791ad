"""
Line scanner and scan pipeline.

scan_file() applies every applicable pattern to every line of one file.
scan_path() walks a project tree and accumulates findings across files in
traversal order. Both are synchronous; each file is read once and the
pattern list is shared read-only.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from pathlib import Path
from typing import List, Sequence

from vulnscan.config import ScanConfig, get_default_config, get_enabled_patterns
from vulnscan.context import FileContext, create_context
from vulnscan.errors import ScanIOError
from vulnscan.findings.models import Finding, Platform
from vulnscan.rules.base import Pattern
from vulnscan.traversal import walk

logger = logging.getLogger(__name__)


@dataclass
class ScanResult:
    """Findings plus the files that were scanned and those that failed."""

    findings: List[Finding] = field(default_factory=list)
    files: List[Path] = field(default_factory=list)
    errors: List[ScanIOError] = field(default_factory=list)

    @property
    def ok(self) -> bool:
        return not self.errors


def scan_context(
    context: FileContext,
    patterns: Sequence[Pattern],
    target_platform: Platform = Platform.ALL,
) -> List[Finding]:
    """
    Apply patterns to an already loaded file.

    Lines are visited in order and, within a line, patterns in registry
    order. Every match produces its own Finding; nothing is deduplicated.
    """
    applicable = [p for p in patterns if p.applies_to(target_platform)]
    findings: List[Finding] = []

    for index, line in enumerate(context.lines):
        for pattern in applicable:
            if not pattern.matches(line):
                continue
            findings.append(
                Finding(
                    vulnerability_name=pattern.name,
                    file_path=context.path,
                    line_number=index + 1,
                    code_context=context.context_window(index),
                    description=pattern.description,
                    severity=pattern.severity,
                )
            )
    return findings


def scan_file(
    path: Path,
    patterns: Sequence[Pattern],
    target_platform: Platform = Platform.ALL,
) -> List[Finding]:
    """
    Read `path` and return the findings for it.

    Raises:
        ScanIOError: if the file is unreadable or not UTF-8 text.
    """
    context = create_context(path)
    findings = scan_context(context, patterns, target_platform)
    logger.info("Scanned %s: %d finding(s)", path, len(findings))
    return findings


def scan_path(root: Path, config: ScanConfig | None = None) -> ScanResult:
    """
    Walk `root` and scan every source file found.

    With config.fail_fast (the default) the first ScanIOError propagates and
    no result is returned. Otherwise the failing directory or file is
    logged, recorded in ScanResult.errors, and everything else is still
    scanned.

    Raises:
        ScanIOError: on an unreadable directory or file when fail_fast is set.
    """
    if config is None:
        config = get_default_config()

    patterns = get_enabled_patterns(config)
    result = ScanResult()

    def _record(exc: ScanIOError) -> None:
        logger.error("Skipping unreadable path %s", exc.path)
        result.errors.append(exc)

    files = walk(
        root,
        extension=config.extension,
        ignore_dirs=set(config.ignore_dirs),
        follow_symlinks=config.follow_symlinks,
        on_error=None if config.fail_fast else _record,
    )

    for path in files:
        try:
            result.findings.extend(scan_file(path, patterns, config.platform))
        except ScanIOError as exc:
            if config.fail_fast:
                raise
            _record(exc)
            continue
        result.files.append(path)

    logger.info(
        "Scan complete: %d file(s), %d finding(s), %d error(s)",
        len(result.files),
        len(result.findings),
        len(result.errors),
    )
    return result
