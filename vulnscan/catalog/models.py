# Vulnerability catalog: a closed set of vulnerability classes with static reference data.

from __future__ import annotations

from enum import Enum

from pydantic import BaseModel, Field

from vulnscan.findings.models import Platform


class CatalogEntry(BaseModel):
    """Reference material for one vulnerability class."""

    name: str
    description: str
    affected_platforms: tuple[str, ...]
    exploit_example: str
    detection_methods: tuple[str, ...] = Field(default_factory=tuple)
    remediation: tuple[str, ...] = Field(default_factory=tuple)
    alias: str = Field(..., description="Short name accepted by the guide CLI")

    model_config = {"frozen": True}

    def affects(self, platform: Platform) -> bool:
        """
        True if this class is listed for `platform`.

        "Polkadot" counts as Substrate, and a wildcard entry such as
        "All Rust-based contracts" matches every platform.
        """
        if platform is Platform.ALL:
            return True
        names = {_PLATFORM_ALIASES.get(p.lower(), p.lower()) for p in self.affected_platforms}
        if any(n.startswith("all ") for n in names):
            return True
        return platform.value in names


_PLATFORM_ALIASES = {
    "polkadot": Platform.SUBSTRATE.value,
}


class VulnerabilityKind(str, Enum):
    """The fixed set of vulnerability classes documented by the catalog."""

    REENTRANCY = "reentrancy"
    OVERFLOW = "overflow"
    UNCHECKED_INPUTS = "unchecked_inputs"
    ORACLE_MANIPULATION = "oracle_manipulation"
    ACCESS_CONTROL = "access_control"
    DENIAL_OF_SERVICE = "denial_of_service"
    ILLICIT_FEE_COLLECTION = "illicit_fee_collection"
    FLASH_LOAN = "flash_loan"
    LOGIC_ERRORS = "logic_errors"
    RANDOM_MANIPULATION = "random_manipulation"
    SIGNATURE_VERIFICATION = "signature_verification"
    ACCOUNT_CONFUSION = "account_confusion"
    FRONT_RUNNING = "front_running"
    INADEQUATE_EVENTS = "inadequate_events"
    STORAGE_MANAGEMENT = "storage_management"
