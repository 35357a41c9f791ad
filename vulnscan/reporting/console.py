# Console report: group findings by severity and render them as text or Rich output.

from __future__ import annotations

from pathlib import Path
from typing import Sequence

from rich import box
from rich.console import Console
from rich.panel import Panel
from rich.table import Table
from rich.text import Text

from vulnscan.findings.models import Finding, Severity

NO_FINDINGS_MESSAGE = "No vulnerabilities found!"

# Severity → Rich style
SEVERITY_STYLE = {
    Severity.HIGH: "bold red",
    Severity.MEDIUM: "bold yellow",
    Severity.LOW: "green",
    Severity.INFO: "blue",
}

DEFAULT_SEVERITY_STYLE = "bold white"


def _severity_text(severity: Severity) -> Text:
    return Text(severity.label, style=SEVERITY_STYLE.get(severity, DEFAULT_SEVERITY_STYLE))


def group_by_severity(findings: Sequence[Finding]) -> dict[Severity, list[Finding]]:
    """
    Bucket findings by severity, keeping scan order inside each bucket.

    Only severities that occur are present; iterate Severity.ordered() to
    walk the buckets in priority order.
    """
    buckets: dict[Severity, list[Finding]] = {}
    for f in findings:
        buckets.setdefault(f.severity, []).append(f)
    return buckets


def build_report(findings: Sequence[Finding], detailed: bool = False) -> list[Text]:
    """
    Build the report as styled lines.

    Layout: a summary (total, then one count per severity present) followed
    by every finding, HIGH first. The code context is included only when
    `detailed` is set.
    """
    if not findings:
        return [Text(NO_FINDINGS_MESSAGE, style="bold green")]

    by_severity = group_by_severity(findings)
    lines: list[Text] = [
        Text(""),
        Text("Summary:", style="bold"),
        Text(f"{len(findings)} potential vulnerabilities found:"),
    ]
    for sev in Severity.ordered():
        count = len(by_severity.get(sev, ()))
        if count > 0:
            lines.append(Text.assemble("  ", _severity_text(sev), f" : {count}"))

    lines.append(Text(""))
    lines.append(Text("Findings:", style="bold"))

    for sev in Severity.ordered():
        for i, f in enumerate(by_severity.get(sev, ()), start=1):
            lines.append(Text(""))
            lines.append(
                Text.assemble(
                    f"[{i}] ",
                    (f.vulnerability_name, "bold"),
                    " (",
                    _severity_text(f.severity),
                    ")",
                )
            )
            lines.append(Text.assemble("File: ", (str(f.file_path), "cyan")))
            lines.append(Text.assemble("Line: ", (str(f.line_number), "cyan")))
            lines.append(Text(f"Description: {f.description}"))
            if detailed:
                lines.append(Text(""))
                lines.append(Text("Code:"))
                lines.extend(Text(code_line, style="dim") for code_line in f.code_context.split("\n"))
    return lines


def render_report(findings: Sequence[Finding], detailed: bool = False) -> str:
    """Return the report as plain text (no colour codes)."""
    return "\n".join(line.plain for line in build_report(findings, detailed))


def print_report(
    findings: Sequence[Finding],
    detailed: bool = False,
    console: Console | None = None,
) -> None:
    """Print the report through Rich, colouring severities."""
    console = console or Console()
    for line in build_report(findings, detailed):
        console.print(line, soft_wrap=True)


def _shorten_path(path: str | Path, root: Path | None = None) -> str:
    """Return the path relative to root when possible."""
    p = Path(path)
    if root is not None:
        try:
            rel = p.relative_to(root)
        except ValueError:
            return p.as_posix()
        return p.name if rel == Path(".") else rel.as_posix()
    return p.as_posix()


def print_file_summary(
    findings: Sequence[Finding],
    scanned_files: Sequence[Path],
    console: Console | None = None,
    root: Path | None = None,
) -> None:
    """Print a table of scanned files, flagged UNSAFE when they have findings."""
    console = console or Console()

    by_path: dict[str, int] = {}
    for f in findings:
        key = str(f.file_path)
        by_path[key] = by_path.get(key, 0) + 1

    table = Table(
        title="Files Summary",
        show_header=True,
        header_style="bold cyan",
        box=box.ROUNDED,
        padding=(0, 1),
    )
    table.add_column("File", style="white")
    table.add_column("Status", width=10)
    table.add_column("Findings", justify="right", width=8)

    unsafe_files = [p for p in scanned_files if str(p) in by_path]
    safe_files = [p for p in scanned_files if str(p) not in by_path]

    for p in unsafe_files:
        table.add_row(
            _shorten_path(p, root),
            Text("UNSAFE", style="bold red"),
            str(by_path[str(p)]),
        )
    for p in safe_files:
        table.add_row(
            _shorten_path(p, root),
            Text("OK", style="bold green"),
            "0",
        )

    console.print()
    console.print(Panel(table, border_style="cyan", box=box.ROUNDED))
