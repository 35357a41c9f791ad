"""Tests for the severity-grouped console report."""

from io import StringIO
from pathlib import Path

from rich.console import Console

from vulnscan.findings.models import Finding, Severity
from vulnscan.reporting.console import (
    NO_FINDINGS_MESSAGE,
    group_by_severity,
    print_file_summary,
    print_report,
    render_report,
)


def _finding(name: str, severity: Severity, line: int = 1, path: str = "src/lib.rs") -> Finding:
    return Finding(
        vulnerability_name=name,
        file_path=Path(path),
        line_number=line,
        code_context=f"// context for {name}",
        description=f"{name} description",
        severity=severity,
    )


def _sample() -> list[Finding]:
    return [
        _finding("Reentrancy Vulnerability", Severity.HIGH, line=3),
        _finding("Integer Overflow", Severity.MEDIUM, line=5),
        _finding("Missing Access Control", Severity.HIGH, line=9),
        _finding("Low One", Severity.LOW, line=11),
    ]


def test_empty_report_is_single_line():
    assert render_report([]) == NO_FINDINGS_MESSAGE
    assert render_report([], detailed=True) == NO_FINDINGS_MESSAGE


def test_group_by_severity_keeps_insertion_order():
    groups = group_by_severity(_sample())
    assert [f.line_number for f in groups[Severity.HIGH]] == [3, 9]
    assert Severity.INFO not in groups


def test_summary_counts_in_priority_order():
    lines = render_report(_sample()).split("\n")

    start = lines.index("Summary:")
    assert lines[start + 1] == "4 potential vulnerabilities found:"
    assert lines[start + 2 : start + 5] == ["  HIGH : 2", "  MEDIUM : 1", "  LOW : 1"]
    assert "  INFO : 0" not in lines
    assert lines[start + 5] == ""
    assert lines[start + 6] == "Findings:"


def test_details_grouped_by_severity_with_per_bucket_index():
    text = render_report(_sample())
    headers = [line for line in text.split("\n") if line.startswith("[")]
    assert headers == [
        "[1] Reentrancy Vulnerability (HIGH)",
        "[2] Missing Access Control (HIGH)",
        "[1] Integer Overflow (MEDIUM)",
        "[1] Low One (LOW)",
    ]


def test_detail_fields():
    text = render_report([_finding("Integer Overflow", Severity.MEDIUM, line=5)])
    assert "File: src/lib.rs" in text
    assert "Line: 5" in text
    assert "Description: Integer Overflow description" in text


def test_code_context_only_when_detailed():
    findings = [_finding("Integer Overflow", Severity.MEDIUM)]
    plain = render_report(findings)
    detailed = render_report(findings, detailed=True)

    assert "Code:" not in plain
    assert "// context for Integer Overflow" not in plain
    assert "Code:" in detailed
    assert detailed.endswith("Code:\n// context for Integer Overflow")


def test_markup_like_text_is_printed_verbatim():
    """Square brackets in code context must not be treated as Rich markup."""
    finding = Finding(
        vulnerability_name="Integer Overflow",
        file_path=Path("src/lib.rs"),
        line_number=1,
        code_context="let a = [bold]x[/bold];",
        description="d",
        severity=Severity.MEDIUM,
    )
    buf = StringIO()
    print_report([finding], detailed=True, console=Console(file=buf, width=200))
    assert "let a = [bold]x[/bold];" in buf.getvalue()


def test_print_report_matches_render(tmp_path):
    buf = StringIO()
    print_report(_sample(), console=Console(file=buf, width=200))
    assert buf.getvalue().rstrip("\n") == render_report(_sample())


def test_print_file_summary_marks_files():
    buf = StringIO()
    root = Path("/project")
    findings = [_finding("Integer Overflow", Severity.MEDIUM, path="/project/src/lib.rs")]
    files = [Path("/project/src/lib.rs"), Path("/project/src/state.rs")]

    print_file_summary(findings, files, console=Console(file=buf, width=120), root=root)

    output = buf.getvalue()
    assert "Files Summary" in output
    assert "src/lib.rs" in output
    assert "UNSAFE" in output
    assert "src/state.rs" in output
    assert "OK" in output
