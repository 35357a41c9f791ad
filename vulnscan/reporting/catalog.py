# Catalog output: render vulnerability catalog entries as text or Rich output.

from __future__ import annotations

from typing import Sequence

from rich.console import Console
from rich.text import Text

from vulnscan.catalog.models import CatalogEntry, VulnerabilityKind

HEADING_STYLE = "bold cyan"


def _heading(title: str) -> list[Text]:
    return [Text(""), Text(title, style=HEADING_STYLE)]


def _bullets(items: Sequence[str], marker: str = "  - ") -> list[Text]:
    return [Text(f"{marker}{item}") for item in items]


def _numbered(items: Sequence[str]) -> list[Text]:
    return [Text(f"{i}. {item}") for i, item in enumerate(items, start=1)]


def _code(block: str) -> list[Text]:
    return [Text(line, style="dim") for line in block.rstrip("\n").split("\n")]


def build_entry(entry: CatalogEntry) -> list[Text]:
    """Full reference page for one vulnerability class."""
    lines = [
        Text(""),
        Text(entry.name, style="bold"),
        Text("=" * len(entry.name)),
    ]
    lines += _heading("Description:")
    lines.append(Text(entry.description))
    lines += _heading("Affected Platforms:")
    lines += _bullets(entry.affected_platforms)
    lines += _heading("Example Vulnerability:")
    lines += _code(entry.exploit_example)
    lines += _heading("Detection Methods:")
    lines += _bullets(entry.detection_methods)
    lines += _heading("Remediation Strategies:")
    lines += _bullets(entry.remediation)
    return lines


def build_listing(catalog: dict[VulnerabilityKind, CatalogEntry]) -> list[Text]:
    """One line per entry: the alias accepted by `show` and the entry name."""
    lines = [Text("Available vulnerability types:")]
    for entry in catalog.values():
        lines.append(Text.assemble("  - ", (entry.alias, "bold"), f": {entry.name}"))
    return lines


def build_overview(entries: Sequence[CatalogEntry]) -> list[Text]:
    """Numbered summary of every entry followed by a detailed report of the first."""
    lines: list[Text] = []
    for i, entry in enumerate(entries, start=1):
        lines.append(Text.assemble(f"{i}. ", (entry.name, "bold")))
        lines.append(Text(f"   Description: {entry.description}"))
        lines.append(Text(f"   Affected platforms: {', '.join(entry.affected_platforms)}"))
        lines.append(Text(""))

    if entries:
        lines += build_detailed_report(entries[0])
    return lines


def build_detailed_report(entry: CatalogEntry) -> list[Text]:
    title = f"Detailed Report: {entry.name}"
    lines = [Text(title, style="bold"), Text("=" * len(title))]
    lines += _heading("DESCRIPTION:")
    lines.append(Text(entry.description))
    lines += _heading("AFFECTED PLATFORMS:")
    lines += _bullets(entry.affected_platforms, marker="- ")
    lines += _heading("VULNERABLE CODE EXAMPLE:")
    lines += _code(entry.exploit_example)
    lines += _heading("DETECTION METHODS:")
    lines += _numbered(entry.detection_methods)
    lines += _heading("REMEDIATION STRATEGIES:")
    lines += _numbered(entry.remediation)
    return lines


def render(lines: Sequence[Text]) -> str:
    """Join styled lines into plain text."""
    return "\n".join(line.plain for line in lines)


def print_lines(lines: Sequence[Text], console: Console | None = None) -> None:
    console = console or Console()
    for line in lines:
        console.print(line, soft_wrap=True)
