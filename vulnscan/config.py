from __future__ import annotations

"""
Scanner configuration: which patterns run, for which platform, over which files.

The CLI in main.py builds one ScanConfig per invocation via
get_default_config(); tests build their own to exercise individual knobs.
The pattern list is taken from rules/registry.py and never mutated.
"""

from dataclasses import dataclass, field
from typing import List, Sequence, Set

from vulnscan.findings.models import Platform
from vulnscan.rules.base import Pattern
from vulnscan.rules.registry import load_patterns

RUST_EXTENSION = ".rs"

# Cargo build output; hidden directories are excluded separately by traversal.
DEFAULT_IGNORE_DIRS: frozenset[str] = frozenset({"target"})


@dataclass
class ScanConfig:
    """
    Settings for one scan invocation.

    - patterns: detection rules, in registry order
    - platform: target platform; ALL runs every pattern
    - extension: source file extension to collect
    - ignore_dirs: directory names skipped during traversal
    - follow_symlinks: descend into symlinked directories (cycles are guarded)
    - fail_fast: abort on the first unreadable file instead of logging it
    """

    patterns: Sequence[Pattern] = field(default_factory=load_patterns)
    platform: Platform = Platform.ALL
    extension: str = RUST_EXTENSION
    ignore_dirs: Set[str] = field(default_factory=lambda: set(DEFAULT_IGNORE_DIRS))
    follow_symlinks: bool = True
    fail_fast: bool = True


def get_default_config(
    platform: Platform = Platform.ALL,
    *,
    fail_fast: bool = True,
) -> ScanConfig:
    """Return a configuration with every built-in pattern registered."""
    return ScanConfig(patterns=load_patterns(), platform=platform, fail_fast=fail_fast)


def get_enabled_patterns(config: ScanConfig | None = None) -> List[Pattern]:
    """
    Return the patterns from `config` that apply to its target platform.

    Registry order is preserved.
    """
    if config is None:
        config = get_default_config()
    return [p for p in config.patterns if p.applies_to(config.platform)]
