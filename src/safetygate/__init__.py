"""
SafetyGate - Deterministic Defamation, Sub Judice and Privacy Risk Gate

SafetyGate scans investigative narratives for risky statements, scores the
risk, and produces a court-safe rewrite with an audit log of every change.
It RECOMMENDS mitigations and blocks export; a human reviewer decides.

Key Features:
- Rule-table detection (criminal allegations, institutional accusations,
  certainty markers, inflammatory labels, sub judice, personal data)
- Claim units tied to named targets with heuristic evidence linkage
- Decision table scoring with mode-dependent mitigations
- Span-safe rewriting, redaction and allegation framing
- Court-safe phrase library with YAML/JSON override packs

Quick Start:
    from safetygate import DistributionMode, run_safety_gate

    result = run_safety_gate(
        "Ali Khan committed fraud against the company.",
        mode=DistributionMode.COURT_MODE,
    )
    print(result.decision.overall.value)
    print(result.rewritten_text)

Version: 0.1.0
"""
from __future__ import annotations

__version__ = "0.1.0"

from .config import GateSettings, configure_logging
from .exceptions import (
    ConfigurationError,
    InvalidInputError,
    PhrasePackLoadError,
    PhrasePackValidationError,
    PhrasePackVersionMismatch,
    SafetyGateError,
)
from .models import (
    ClaimUnit,
    CourtStyle,
    DefamationDetectionResult,
    DetectionContext,
    DisclaimerKey,
    DistributionMode,
    FilingType,
    MitigationType,
    PhraseKey,
    RedactionField,
    ReputationMitigation,
    ReputationRiskDecision,
    RewriteTransformation,
    RiskCategory,
    RiskLevel,
    RiskSignal,
    SafetyGateResult,
)
from .phrases import (
    PhraseLibrary,
    first_phrase,
    get_court_safe_phrases,
    load_phrase_library,
    resolve_phrases,
)
from .engine import (
    CourtSafeRewriter,
    DefamationRiskDetector,
    ReputationRiskFilter,
    RewriteOptions,
    SafetyGate,
    assess,
    detect,
    redact_sensitive_data,
    rewrite,
    run_safety_gate,
    run_safety_qa,
)

__all__ = [
    "__version__",
    # Config
    "GateSettings",
    "configure_logging",
    # Exceptions
    "ConfigurationError",
    "InvalidInputError",
    "PhrasePackLoadError",
    "PhrasePackValidationError",
    "PhrasePackVersionMismatch",
    "SafetyGateError",
    # Models
    "ClaimUnit",
    "CourtStyle",
    "DefamationDetectionResult",
    "DetectionContext",
    "DisclaimerKey",
    "DistributionMode",
    "FilingType",
    "MitigationType",
    "PhraseKey",
    "RedactionField",
    "ReputationMitigation",
    "ReputationRiskDecision",
    "RewriteTransformation",
    "RiskCategory",
    "RiskLevel",
    "RiskSignal",
    "SafetyGateResult",
    # Phrases
    "PhraseLibrary",
    "first_phrase",
    "get_court_safe_phrases",
    "load_phrase_library",
    "resolve_phrases",
    # Engine
    "CourtSafeRewriter",
    "DefamationRiskDetector",
    "ReputationRiskFilter",
    "RewriteOptions",
    "SafetyGate",
    "assess",
    "detect",
    "redact_sensitive_data",
    "rewrite",
    "run_safety_gate",
    "run_safety_qa",
]
