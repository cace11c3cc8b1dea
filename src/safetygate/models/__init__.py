"""
SafetyGate Models

All domain models for the safety gate, exported for convenient imports:

    from safetygate.models import (
        # Enums
        RiskCategory, RiskLevel, DistributionMode, CourtStyle, FilingType,
        # Detection
        RiskSignal, ClaimUnit, RewriteTransformation, DefamationDetectionResult,
        # Decision
        ReputationMitigation, ReputationRiskDecision, SafetyGateResult,
    )
"""
from __future__ import annotations

# =============================================================================
# Enums
# =============================================================================
from .enums import (
    CourtStyle,
    DisclaimerKey,
    DistributionMode,
    FilingType,
    MitigationType,
    PhraseKey,
    RedactionField,
    RiskCategory,
    RiskLevel,
)

# =============================================================================
# Detection
# =============================================================================
from .signals import (
    PLACEHOLDER_SPAN,
    ClaimUnit,
    DefamationDetectionResult,
    DetectionContext,
    EvidenceArtifact,
    NamedEntity,
    RewritePlan,
    RewriteTransformation,
    RiskSignal,
    Span,
)

# =============================================================================
# Decision
# =============================================================================
from .decision import (
    GateIssue,
    ReputationMitigation,
    ReputationRiskDecision,
    SafetyGateResult,
)

__all__ = [
    # Enums
    "CourtStyle",
    "DisclaimerKey",
    "DistributionMode",
    "FilingType",
    "MitigationType",
    "PhraseKey",
    "RedactionField",
    "RiskCategory",
    "RiskLevel",
    # Detection
    "PLACEHOLDER_SPAN",
    "ClaimUnit",
    "DefamationDetectionResult",
    "DetectionContext",
    "EvidenceArtifact",
    "NamedEntity",
    "RewritePlan",
    "RewriteTransformation",
    "RiskSignal",
    "Span",
    # Decision
    "GateIssue",
    "ReputationMitigation",
    "ReputationRiskDecision",
    "SafetyGateResult",
]
