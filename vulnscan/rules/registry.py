# Built-in detection patterns for Rust smart contracts.
# Order matters: findings on the same line are emitted in registry order.

from __future__ import annotations

import re
from typing import List

from vulnscan.findings.models import Platform, Severity
from vulnscan.rules.base import Pattern

REENTRANCY = "Reentrancy Vulnerability"
INTEGER_OVERFLOW = "Integer Overflow"
MISSING_OWNERSHIP_CHECK = "Missing Ownership Check"
MISSING_ACCESS_CONTROL = "Missing Access Control"
UNCHECKED_RETURN_VALUE = "Unchecked Return Value"

# (name, description, regex, severity, platform)
_PATTERN_SPECS = (
    (
        REENTRANCY,
        "Potential reentrancy vulnerability detected. Consider implementing a "
        "reentrancy guard or following the checks-effects-interactions pattern.",
        # CPI call followed by a state mutation on the same line
        r"invoke(_signed)?\(.*\).*;\s*.*\w+\s*[-+*\/]?=",
        Severity.HIGH,
        Platform.SOLANA,
    ),
    (
        INTEGER_OVERFLOW,
        "Potential integer overflow. Consider using checked, saturating, or "
        "wrapping operations.",
        r"\w+\s*[+\-*\/]=\s*\w+|let\s+\w+\s*=\s*\w+\s*[+\-*\/]\s*\w+",
        Severity.MEDIUM,
        Platform.ALL,
    ),
    (
        MISSING_OWNERSHIP_CHECK,
        "Account ownership is not verified. Always check account.owner before "
        "using account data.",
        r"let\s+\w+\s*=\s*next_account_info\(.*\).*;\s*(?!.*owner)",
        Severity.HIGH,
        Platform.SOLANA,
    ),
    (
        MISSING_ACCESS_CONTROL,
        "Potential missing access control. Verify that only authorized users "
        "can call this function.",
        r"pub\s+fn\s+\w+\(.*\).*\{(?!.*require\(|.*assert\(|.*if\s+.*==)",
        Severity.HIGH,
        Platform.ALL,
    ),
    (
        UNCHECKED_RETURN_VALUE,
        "Return value from external call is not checked. Always check the "
        "result of external calls.",
        r"invoke(_signed)?\(.*\);(?!\s*\?)",
        Severity.MEDIUM,
        Platform.SOLANA,
    ),
)

# Compiled once at import; a bad literal raises re.error here.
_PATTERNS: tuple[Pattern, ...] = tuple(
    Pattern(
        name=name,
        description=description,
        matcher=re.compile(regex),
        severity=severity,
        platform=platform,
    )
    for name, description, regex, severity, platform in _PATTERN_SPECS
)


def load_patterns() -> List[Pattern]:
    """Return the built-in patterns in registration order."""
    return list(_PATTERNS)
