from __future__ import annotations

"""
Typer CLI entry point for the scanner: `vuln-scanner scan` and `vuln-scanner checklist`.

scan:
- Accepts a Rust file or a project directory (--path)
- Collects .rs files (traversal.walk), skipping hidden and target/ directories
- Applies the built-in patterns for the selected platform
- Prints a severity-grouped report; --detailed adds code context

Finding vulnerabilities is not a failure: the exit code is 0 unless a file
or directory could not be read.
"""

import logging
from pathlib import Path
from typing import Optional

import typer
from rich.console import Console
from rich.logging import RichHandler

from vulnscan.analysis import scan_path
from vulnscan.checklist import generate_checklist, write_checklist
from vulnscan.config import get_default_config
from vulnscan.errors import ScanIOError
from vulnscan.findings.models import Platform
from vulnscan.reporting.console import print_file_summary, print_report

logger = logging.getLogger(__name__)

app = typer.Typer(help="vuln-scanner - pattern-based vulnerability scanner for Rust smart contracts.")

PLATFORM_HELP = "Platform to target (solana, near, cosmwasm, substrate, or all)."


def configure_logging(verbose: bool = False) -> None:
    """Send vulnscan log records to stderr through Rich, WARNING and up unless verbose."""
    pkg_logger = logging.getLogger("vulnscan")
    for handler in list(pkg_logger.handlers):
        if isinstance(handler, RichHandler):
            pkg_logger.removeHandler(handler)
    handler = RichHandler(console=Console(stderr=True), show_path=False, show_time=False)
    pkg_logger.addHandler(handler)
    pkg_logger.setLevel(logging.DEBUG if verbose else logging.WARNING)


def _resolve_platform(token: str) -> Platform:
    if not Platform.is_known(token):
        logger.warning("Unknown platform %r; scanning with patterns for all platforms", token)
    return Platform.from_string(token)


@app.command()
def scan(
    path: Path = typer.Option(..., "--path", "-p", help="Path to the smart contract or project to scan."),
    platform: str = typer.Option("all", "--platform", "-P", help=PLATFORM_HELP),
    detailed: bool = typer.Option(False, "--detailed", "-d", help="Include code context for each finding."),
    keep_going: bool = typer.Option(
        False,
        "--keep-going",
        help="Report unreadable files and continue instead of aborting on the first one.",
    ),
    files: bool = typer.Option(False, "--files", help="Show a per-file summary table."),
    verbose: bool = typer.Option(False, "--verbose", "-v", help="Show debug logging on stderr."),
) -> None:
    """
    Scan a Rust smart contract or project for potential vulnerabilities.
    """
    configure_logging(verbose)
    target = _resolve_platform(platform)
    config = get_default_config(target, fail_fast=not keep_going)

    typer.echo(f"Scanning {path} for vulnerabilities...")
    try:
        result = scan_path(path, config)
    except ScanIOError as exc:
        typer.echo(f"Error: {exc}", err=True)
        raise typer.Exit(code=1)

    console = Console()
    print_report(result.findings, detailed=detailed, console=console)
    if files and result.files:
        print_file_summary(result.findings, result.files, console=console, root=path)

    typer.echo(f"\nScan complete! Found {len(result.findings)} potential vulnerabilities.")

    if result.errors:
        for exc in result.errors:
            typer.echo(f"Error: {exc}", err=True)
        raise typer.Exit(code=1)


@app.command()
def checklist(
    platform: str = typer.Option("all", "--platform", "-P", help=PLATFORM_HELP),
    output: Optional[Path] = typer.Option(None, "--output", "-o", help="Write the checklist to this file."),
) -> None:
    """
    Generate a security checklist for a specific platform.
    """
    configure_logging()
    typer.echo(f"Generating security checklist for {platform}...")
    content = generate_checklist(platform)

    if output is None:
        typer.echo(f"\n{content}")
        return

    try:
        write_checklist(content, output)
    except ScanIOError as exc:
        typer.echo(f"Error: {exc}", err=True)
        raise typer.Exit(code=1)
    typer.echo(f"Checklist written to {output}")


def main() -> None:
    """Entry point for `python -m vulnscan.main` and the vuln-scanner script."""
    app()


if __name__ == "__main__":
    main()
