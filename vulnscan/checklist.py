# Markdown security checklist built from the vulnerability catalog.

from __future__ import annotations

import logging
from pathlib import Path

from vulnscan.catalog.entries import entries_for_platform
from vulnscan.errors import ScanIOError
from vulnscan.findings.models import Platform

logger = logging.getLogger(__name__)

SOLANA_HEADER = """\
# Solana-Specific Security Checklist

This is a placeholder for the Solana security checklist.
Please refer to the full checklist in the checklists directory."""

GENERAL_HEADER = """\
# General Rust Smart Contract Security Checklist

This is a placeholder for the general security checklist.
Please refer to the full checklist in the checklists directory."""


def generate_checklist(platform: str) -> str:
    """
    Return a Markdown checklist for `platform`.

    Only "solana" has a dedicated title; every other token, known or not,
    gets the general one. The body lists the detection methods of each
    catalog entry relevant to the platform as unchecked items.
    """
    header = SOLANA_HEADER if platform.strip().lower() == "solana" else GENERAL_HEADER
    target = Platform.from_string(platform)

    sections = [header]
    for entry in entries_for_platform(target):
        items = "\n".join(f"- [ ] {method}" for method in entry.detection_methods)
        sections.append(f"## {entry.name}\n\n{items}")
    return "\n\n".join(sections) + "\n"


def write_checklist(content: str, output: Path) -> None:
    """Write checklist content to `output`; failures raise ScanIOError."""
    try:
        output.write_text(content, encoding="utf-8")
    except OSError as e:
        logger.error("Failed to write checklist %s: %s", output, e)
        raise ScanIOError(output, e) from e
    logger.info("Wrote checklist to %s", output)
