"""
Typer CLI for browsing the vulnerability catalog (`vuln-guide`).

    vuln-guide list              # aliases and names
    vuln-guide show reentrancy   # full reference page
    vuln-guide demo              # overview of every entry
"""

import typer
from rich.console import Console

from vulnscan.catalog.entries import CATALOG, all_entries, find_kind, get_entry
from vulnscan.reporting.catalog import build_entry, build_listing, build_overview, print_lines

app = typer.Typer(help="vuln-guide - reference catalog of Rust smart contract vulnerabilities.")

BANNER = "Rust Smart Contract Vulnerabilities Guide"


@app.callback(invoke_without_command=True)
def banner(ctx: typer.Context) -> None:
    typer.echo(BANNER)
    typer.echo("=" * len(BANNER))
    if ctx.invoked_subcommand is None:
        typer.echo("Usage: vuln-guide show <vulnerability-type>")
        typer.echo("Example: vuln-guide show reentrancy")
        typer.echo("Use 'vuln-guide list' to see all available vulnerabilities")


@app.command("list")
def list_types() -> None:
    """List the available vulnerability types."""
    print_lines(build_listing(CATALOG), Console())


@app.command()
def show(vulnerability_type: str = typer.Argument(..., help="Alias from `list`, e.g. reentrancy or dos.")) -> None:
    """Show the full reference page for one vulnerability type."""
    kind = find_kind(vulnerability_type)
    if kind is None:
        typer.echo(f"Unknown vulnerability type: {vulnerability_type}")
        typer.echo("Use 'list' to see all available vulnerabilities")
        raise typer.Exit(code=1)
    print_lines(build_entry(get_entry(kind)), Console())


@app.command()
def demo() -> None:
    """Summarize every vulnerability type, then show the first in detail."""
    print_lines(build_overview(all_entries()), Console())


def main() -> None:
    app()


if __name__ == "__main__":
    main()
