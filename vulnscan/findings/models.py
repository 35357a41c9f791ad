# Data models for scan results: Severity, Platform, Finding.

from __future__ import annotations

from enum import Enum, IntEnum
from pathlib import Path

from pydantic import BaseModel, Field


class Severity(IntEnum):
    """Ordinal risk ranking. Higher value means more severe."""

    INFO = 0
    LOW = 1
    MEDIUM = 2
    HIGH = 3

    @property
    def label(self) -> str:
        return self.name

    @classmethod
    def ordered(cls) -> tuple["Severity", ...]:
        """Severities in reporting priority order (HIGH first)."""
        return (cls.HIGH, cls.MEDIUM, cls.LOW, cls.INFO)


class Platform(str, Enum):
    """Blockchain runtime a pattern or catalog entry is relevant to."""

    SOLANA = "solana"
    NEAR = "near"
    COSMWASM = "cosmwasm"
    SUBSTRATE = "substrate"
    ALL = "all"

    @classmethod
    def from_string(cls, value: str) -> "Platform":
        """
        Map a user-supplied token to a Platform, case-insensitively.

        Unrecognized tokens map to ALL, which disables platform filtering.
        Callers that want to surface this should compare with is_known().
        """
        try:
            return cls(value.strip().lower())
        except ValueError:
            return cls.ALL

    @classmethod
    def is_known(cls, value: str) -> bool:
        return value.strip().lower() in {p.value for p in cls}


class Finding(BaseModel):
    """One match of a pattern against a specific line of a specific file."""

    vulnerability_name: str
    file_path: Path
    line_number: int = Field(..., ge=1, description="1-based line number")
    code_context: str = Field(..., description="Matching line plus up to two lines either side")
    description: str
    severity: Severity

    model_config = {"arbitrary_types_allowed": True, "frozen": True}
