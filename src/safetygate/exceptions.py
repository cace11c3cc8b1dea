"""
SafetyGate Exception Hierarchy

Domain-specific exceptions for the safety gate.
All exceptions include error codes for tracking and logging.

Exception codes follow the pattern: SG_<CATEGORY>_<SPECIFIC>

Note: detection, scoring and rewriting never raise on string input.
Only the configuration surfaces (phrase packs, settings, CLI input) do.
"""
from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any


@dataclass
class SafetyGateError(Exception):
    """
    Base exception for all SafetyGate errors.

    Attributes:
        message: Human-readable error description
        code: Machine-readable error code (SG_*)
        details: Additional context about the error
    """
    message: str
    code: str = "SG_INTERNAL_ERROR"
    details: dict[str, Any] = field(default_factory=dict)

    def __post_init__(self) -> None:
        super().__init__(self.message)

    def __str__(self) -> str:
        return f"[{self.code}] {self.message}"

    def to_dict(self) -> dict[str, Any]:
        """Serialize exception for logging/CLI output."""
        result: dict[str, Any] = {
            "code": self.code,
            "message": self.message,
        }
        if self.details:
            result["details"] = self.details
        return result


# =============================================================================
# Phrase Pack Errors
# =============================================================================

@dataclass
class PhrasePackLoadError(SafetyGateError):
    """Failed to read or parse a phrase override pack."""
    code: str = "SG_PHRASE_PACK_LOAD_ERROR"


@dataclass
class PhrasePackValidationError(SafetyGateError):
    """Phrase override pack failed schema validation."""
    code: str = "SG_PHRASE_PACK_VALIDATION_ERROR"


@dataclass
class PhrasePackVersionMismatch(SafetyGateError):
    """Phrase pack schema version doesn't match the supported version."""
    code: str = "SG_PHRASE_PACK_VERSION_MISMATCH"


# =============================================================================
# Configuration / Input Errors
# =============================================================================

@dataclass
class ConfigurationError(SafetyGateError):
    """Environment or settings value is invalid."""
    code: str = "SG_CONFIGURATION_ERROR"


@dataclass
class InvalidInputError(SafetyGateError):
    """Caller-supplied input (context file, mode name) is invalid."""
    code: str = "SG_INVALID_INPUT"
