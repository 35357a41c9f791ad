"""Tests for the line scanner and scan pipeline."""

import re
from pathlib import Path

import pytest

from vulnscan.analysis import scan_context, scan_file, scan_path
from vulnscan.config import ScanConfig, get_default_config
from vulnscan.context import FileContext
from vulnscan.errors import ScanIOError
from vulnscan.findings.models import Platform, Severity
from vulnscan.rules.base import Pattern
from vulnscan.rules.registry import (
    INTEGER_OVERFLOW,
    MISSING_ACCESS_CONTROL,
    REENTRANCY,
    UNCHECKED_RETURN_VALUE,
    load_patterns,
)

HIT = Pattern(
    name="Hit",
    description="test pattern",
    matcher=re.compile(r"^hit$"),
    severity=Severity.LOW,
    platform=Platform.ALL,
)


def _seven_lines(hit_index: int) -> FileContext:
    lines = [f"line{i}" for i in range(1, 8)]
    lines[hit_index] = "hit"
    return FileContext(path=Path("ctx.rs"), source="\n".join(lines) + "\n")


def test_line_number_is_one_based():
    findings = scan_context(_seven_lines(3), [HIT])
    assert len(findings) == 1
    assert findings[0].line_number == 4


def test_context_at_first_line_has_no_leading_lines():
    (finding,) = scan_context(_seven_lines(0), [HIT])
    assert finding.code_context == "hit\nline2\nline3"


def test_context_at_last_line_has_no_trailing_lines():
    (finding,) = scan_context(_seven_lines(6), [HIT])
    assert finding.code_context == "line5\nline6\nhit"
    assert finding.line_number == 7


def test_context_mid_file_is_five_lines():
    (finding,) = scan_context(_seven_lines(3), [HIT])
    assert finding.code_context == "line2\nline3\nhit\nline5\nline6"


def test_finding_copies_pattern_metadata():
    (finding,) = scan_context(_seven_lines(2), [HIT])
    assert finding.vulnerability_name == HIT.name
    assert finding.description == HIT.description
    assert finding.severity is HIT.severity
    assert finding.file_path == Path("ctx.rs")


def test_end_to_end_two_line_file(tmp_path):
    """invoke_signed without '?' and a compound assignment each trip a pattern."""
    rs_file = tmp_path / "lib.rs"
    rs_file.write_text("invoke_signed(x);\nbalance += amount;")

    findings = scan_file(rs_file, load_patterns(), Platform.ALL)

    assert [(f.vulnerability_name, f.line_number) for f in findings] == [
        (UNCHECKED_RETURN_VALUE, 1),
        (INTEGER_OVERFLOW, 2),
    ]
    assert findings[0].severity is Severity.MEDIUM
    assert findings[0].code_context == "invoke_signed(x);\nbalance += amount;"


def test_solana_patterns_skipped_for_other_platform(tmp_path):
    rs_file = tmp_path / "lib.rs"
    rs_file.write_text("invoke_signed(x);\nbalance += amount;")

    findings = scan_file(rs_file, load_patterns(), Platform.NEAR)

    assert [f.vulnerability_name for f in findings] == [INTEGER_OVERFLOW]


def test_multiple_patterns_on_one_line(tmp_path):
    """Each applicable pattern produces its own finding, in registry order."""
    rs_file = tmp_path / "lib.rs"
    rs_file.write_text("invoke(&ix, &accounts)?; vault.balance -= amount;\n")

    findings = scan_file(rs_file, load_patterns(), Platform.SOLANA)

    assert [f.vulnerability_name for f in findings] == [REENTRANCY, INTEGER_OVERFLOW]
    assert {f.line_number for f in findings} == {1}


def test_same_pattern_on_several_lines_is_not_deduplicated(tmp_path):
    rs_file = tmp_path / "lib.rs"
    rs_file.write_text("a += b;\na += b;\n")
    findings = scan_file(rs_file, load_patterns())
    assert [f.line_number for f in findings] == [1, 2]


def test_clean_file_has_no_findings(tmp_path):
    rs_file = tmp_path / "lib.rs"
    rs_file.write_text("fn helper() -> u64 {\n    42\n}\n")
    assert scan_file(rs_file, load_patterns()) == []


def test_scan_file_unreadable_raises(tmp_path):
    rs_file = tmp_path / "bad.rs"
    rs_file.write_bytes(b"\xff\xfe invoke(x);")
    with pytest.raises(ScanIOError):
        scan_file(rs_file, load_patterns())


@pytest.fixture
def workspace(tmp_path):
    """Same vulnerable line in src/, target/ and .git/."""
    for rel in ("src/foo.rs", "target/foo.rs", ".git/bar.rs"):
        path = tmp_path / rel
        path.parent.mkdir(parents=True, exist_ok=True)
        path.write_text("balance += amount;\n")
    return tmp_path


def test_scan_path_excludes_target_and_hidden(workspace):
    result = scan_path(workspace)

    assert [f.file_path for f in result.findings] == [workspace / "src" / "foo.rs"]
    assert result.files == [workspace / "src" / "foo.rs"]
    assert result.ok


def test_scan_path_single_file(workspace):
    target = workspace / "target" / "foo.rs"
    result = scan_path(target)
    assert len(result.findings) == 1
    assert result.findings[0].file_path == target


def test_scan_path_non_rust_file_yields_nothing(tmp_path):
    notes = tmp_path / "notes.txt"
    notes.write_text("balance += amount;\n")
    result = scan_path(notes)
    assert result.findings == []
    assert result.files == []


def test_scan_path_keeps_traversal_order(tmp_path):
    (tmp_path / "b.rs").write_text("x += 1;\n")
    (tmp_path / "a").mkdir()
    (tmp_path / "a" / "z.rs").write_text("fn f() {}\ny -= 1;\n")
    (tmp_path / "c.rs").write_text("pub fn open() {\n")

    result = scan_path(tmp_path)

    assert [(f.file_path.name, f.vulnerability_name) for f in result.findings] == [
        ("z.rs", INTEGER_OVERFLOW),
        ("b.rs", INTEGER_OVERFLOW),
        ("c.rs", MISSING_ACCESS_CONTROL),
    ]


def test_scan_path_aborts_on_unreadable_file_by_default(tmp_path):
    (tmp_path / "a.rs").write_bytes(b"\xff\xfe")
    (tmp_path / "b.rs").write_text("x += 1;\n")

    with pytest.raises(ScanIOError) as excinfo:
        scan_path(tmp_path)
    assert excinfo.value.path == tmp_path / "a.rs"


def test_scan_path_best_effort_collects_errors(tmp_path):
    (tmp_path / "a.rs").write_bytes(b"\xff\xfe")
    (tmp_path / "b.rs").write_text("x += 1;\n")

    result = scan_path(tmp_path, get_default_config(fail_fast=False))

    assert not result.ok
    assert [e.path for e in result.errors] == [tmp_path / "a.rs"]
    assert result.files == [tmp_path / "b.rs"]
    assert [f.vulnerability_name for f in result.findings] == [INTEGER_OVERFLOW]


def test_scan_path_respects_config_platform(tmp_path):
    (tmp_path / "lib.rs").write_text("invoke_signed(x);\n")

    assert scan_path(tmp_path, ScanConfig(platform=Platform.COSMWASM)).findings == []
    solana = scan_path(tmp_path, ScanConfig(platform=Platform.SOLANA)).findings
    assert [f.vulnerability_name for f in solana] == [UNCHECKED_RETURN_VALUE]


def test_scan_path_custom_ignore_dirs(workspace):
    result = scan_path(workspace, ScanConfig(ignore_dirs=set()))
    names = sorted(f.file_path.relative_to(workspace).as_posix() for f in result.findings)
    assert names == ["src/foo.rs", "target/foo.rs"]


def _deny_listing(monkeypatch, blocked: Path) -> None:
    original_iterdir = Path.iterdir

    def fake_iterdir(self):
        if self == blocked:
            raise PermissionError(13, "Permission denied")
        return original_iterdir(self)

    monkeypatch.setattr(Path, "iterdir", fake_iterdir)


def test_scan_path_aborts_on_unreadable_directory_by_default(workspace, monkeypatch):
    _deny_listing(monkeypatch, workspace / "src")
    with pytest.raises(ScanIOError) as excinfo:
        scan_path(workspace)
    assert excinfo.value.path == workspace / "src"


def test_scan_path_best_effort_records_unreadable_directory(workspace, monkeypatch):
    (workspace / "lib.rs").write_text("x += 1;\n")
    _deny_listing(monkeypatch, workspace / "src")

    result = scan_path(workspace, get_default_config(fail_fast=False))

    assert [e.path for e in result.errors] == [workspace / "src"]
    assert result.files == [workspace / "lib.rs"]
    assert [f.vulnerability_name for f in result.findings] == [INTEGER_OVERFLOW]


def test_scan_path_best_effort_records_uninspectable_entry(workspace, monkeypatch):
    locked = workspace / "src" / "foo.rs"
    original_is_dir = Path.is_dir

    def fake_is_dir(self, **kwargs):
        if self == locked:
            raise PermissionError(13, "Permission denied", str(self))
        return original_is_dir(self, **kwargs)

    monkeypatch.setattr(Path, "is_dir", fake_is_dir)

    result = scan_path(workspace, get_default_config(fail_fast=False))

    assert [e.path for e in result.errors] == [locked]
    assert result.findings == []
