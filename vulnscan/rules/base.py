# Pattern type: a named detection rule pairing a line regex with severity and platform.
# The built-in patterns live in rules/registry.py.

from __future__ import annotations

import re
from dataclasses import dataclass

from vulnscan.findings.models import Platform, Severity


@dataclass(frozen=True)
class Pattern:
    """
    A single line-oriented detection rule.

    Attributes:
    - name (str): identifier shown in reports (e.g. "Integer Overflow")
    - description (str): auditor-facing explanation and advice
    - matcher (re.Pattern): applied to one line of text at a time
    - severity: Severity
    - platform (Platform): ALL means the rule is relevant everywhere
    """

    name: str
    description: str
    matcher: re.Pattern[str]
    severity: Severity
    platform: Platform

    def applies_to(self, target: Platform) -> bool:
        """
        True if this pattern should run when scanning for `target`.

        Fires when the platforms are equal, when the pattern is tagged ALL,
        or when the scan itself targets ALL.
        """
        return (
            self.platform == target
            or self.platform is Platform.ALL
            or target is Platform.ALL
        )

    def matches(self, line: str) -> bool:
        """True if the regex matches anywhere within `line`."""
        return self.matcher.search(line) is not None
