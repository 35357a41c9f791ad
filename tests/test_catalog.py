"""Tests for the vulnerability catalog and its text rendering."""

import pytest

from vulnscan.catalog.entries import CATALOG, all_entries, entries_for_platform, find_kind, get_entry
from vulnscan.catalog.models import VulnerabilityKind
from vulnscan.findings.models import Platform
from vulnscan.reporting.catalog import (
    build_detailed_report,
    build_entry,
    build_listing,
    build_overview,
    render,
)


def test_every_kind_has_an_entry():
    assert set(CATALOG) == set(VulnerabilityKind)
    assert len(all_entries()) == 15


def test_entries_are_complete():
    for entry in all_entries():
        assert entry.name.endswith("Vulnerability")
        assert entry.description
        assert entry.affected_platforms
        assert entry.exploit_example.strip()
        assert len(entry.detection_methods) == 5
        assert len(entry.remediation) == 5


def test_aliases_are_unique():
    aliases = [e.alias for e in all_entries()]
    assert len(aliases) == len(set(aliases))


def test_all_entries_in_declaration_order():
    assert all_entries()[0].name == "Reentrancy Vulnerability"
    assert all_entries()[-1].name == "Storage Management Vulnerability"


@pytest.mark.parametrize(
    "token,kind",
    [
        ("reentrancy", VulnerabilityKind.REENTRANCY),
        ("Overflow", VulnerabilityKind.OVERFLOW),
        ("unchecked", VulnerabilityKind.UNCHECKED_INPUTS),
        ("dos", VulnerabilityKind.DENIAL_OF_SERVICE),
        ("fee", VulnerabilityKind.ILLICIT_FEE_COLLECTION),
        ("flash", VulnerabilityKind.FLASH_LOAN),
        ("denial_of_service", VulnerabilityKind.DENIAL_OF_SERVICE),
        ("front-running", VulnerabilityKind.FRONT_RUNNING),
    ],
)
def test_find_kind(token, kind):
    assert find_kind(token) is kind


def test_find_kind_unknown():
    assert find_kind("sql-injection") is None


def test_entries_are_frozen():
    entry = get_entry(VulnerabilityKind.FLASH_LOAN)
    with pytest.raises(Exception):
        entry.name = "changed"


def test_platform_filter_all_returns_everything():
    assert len(entries_for_platform(Platform.ALL)) == 15


def test_platform_filter_solana_returns_everything():
    assert len(entries_for_platform(Platform.SOLANA)) == 15


def test_platform_filter_cosmwasm():
    names = {e.name for e in entries_for_platform(Platform.COSMWASM)}
    assert "Account Confusion Vulnerability" not in names
    assert "Reentrancy Vulnerability" not in names
    # wildcard entries ("All DeFi platforms") apply everywhere
    assert "Flash Loan Vulnerability" in names
    assert "Signature Verification Bypass Vulnerability" in names


def test_platform_filter_substrate_matches_polkadot():
    names = {e.name for e in entries_for_platform(Platform.SUBSTRATE)}
    assert "Reentrancy Vulnerability" in names
    assert "Account Confusion Vulnerability" not in names


def test_render_entry_sections():
    text = render(build_entry(get_entry(VulnerabilityKind.REENTRANCY)))
    lines = text.split("\n")

    assert lines[1] == "Reentrancy Vulnerability"
    assert lines[2] == "=" * len("Reentrancy Vulnerability")
    for heading in (
        "Description:",
        "Affected Platforms:",
        "Example Vulnerability:",
        "Detection Methods:",
        "Remediation Strategies:",
    ):
        assert heading in lines
    assert "  - Solana" in lines
    assert "  - Check if the contract uses a reentrancy guard" in lines
    assert "    transfer_tokens(ctx.accounts.recipient.key, amount)?;" in lines


def test_render_listing():
    text = render(build_listing(CATALOG))
    assert text.startswith("Available vulnerability types:")
    assert "  - dos: Denial of Service Vulnerability" in text
    assert len(text.split("\n")) == 16


def test_render_overview_numbers_entries_and_details_first():
    text = render(build_overview(all_entries()))
    assert "1. Reentrancy Vulnerability" in text
    assert "15. Storage Management Vulnerability" in text
    assert "   Affected platforms: Solana, NEAR, Polkadot" in text
    assert "Detailed Report: Reentrancy Vulnerability" in text


def test_render_detailed_report_numbers_methods():
    text = render(build_detailed_report(get_entry(VulnerabilityKind.OVERFLOW)))
    assert "DETECTION METHODS:" in text
    assert "1. Check arithmetic operations that could potentially overflow/underflow" in text
    assert "5. Keep panic-on-overflow enabled in release builds for critical code paths" in text
