"""
SafetyGate Decision Models

Output of the scorer (ReputationRiskDecision) and of the full gate
pipeline (SafetyGateResult).

Core Principle: the gate recommends mitigations and blocks export; a
human reviewer decides whether the text is fit to distribute.
"""
from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Optional

from .enums import (
    CourtStyle,
    DisclaimerKey,
    DistributionMode,
    FilingType,
    MitigationType,
    RedactionField,
    RiskCategory,
    RiskLevel,
)
from .signals import RewriteTransformation, RiskSignal


# =============================================================================
# Mitigations
# =============================================================================

@dataclass(frozen=True)
class ReputationMitigation:
    """
    A required corrective action attached to a risk decision.

    Only the attributes relevant to the mitigation type are set:
    - add_disclaimer: key
    - require_evidence: min, for_targets
    - remove_or_redact: fields
    - restrict_distribution: allowed_modes
    - require_human_review: role
    """
    type: MitigationType
    key: Optional[DisclaimerKey] = None
    min: Optional[int] = None
    for_targets: tuple[str, ...] = ()
    fields: tuple[RedactionField, ...] = ()
    role: Optional[str] = None
    allowed_modes: tuple[DistributionMode, ...] = ()

    def to_dict(self) -> dict[str, Any]:
        result: dict[str, Any] = {"type": self.type.value}
        if self.key is not None:
            result["key"] = self.key.value
        if self.min is not None:
            result["min"] = self.min
        if self.for_targets:
            result["for_targets"] = list(self.for_targets)
        if self.fields:
            result["fields"] = [f.value for f in self.fields]
        if self.role is not None:
            result["role"] = self.role
        if self.allowed_modes:
            result["allowed_modes"] = [m.value for m in self.allowed_modes]
        return result


# =============================================================================
# Risk Decision
# =============================================================================

@dataclass
class ReputationRiskDecision:
    """
    Overall risk level, triggered categories and required mitigations.

    Derived purely from a detection result and a distribution mode;
    stateless and recomputable.
    """
    overall: RiskLevel
    categories: list[RiskCategory] = field(default_factory=list)
    signals: list[RiskSignal] = field(default_factory=list)
    required_mitigations: list[ReputationMitigation] = field(default_factory=list)

    @property
    def requires_human_review(self) -> bool:
        return any(
            m.type == MitigationType.REQUIRE_HUMAN_REVIEW
            for m in self.required_mitigations
        )

    @property
    def is_distribution_restricted(self) -> bool:
        return any(
            m.type == MitigationType.RESTRICT_DISTRIBUTION
            for m in self.required_mitigations
        )

    @property
    def disclaimer_keys(self) -> list[DisclaimerKey]:
        return [
            m.key for m in self.required_mitigations
            if m.type == MitigationType.ADD_DISCLAIMER and m.key is not None
        ]

    def mitigations_of(self, mitigation_type: MitigationType) -> list[ReputationMitigation]:
        return [m for m in self.required_mitigations if m.type == mitigation_type]

    def to_dict(self) -> dict[str, Any]:
        return {
            "overall": self.overall.value,
            "categories": [c.value for c in self.categories],
            "signals": [s.to_dict() for s in self.signals],
            "required_mitigations": [m.to_dict() for m in self.required_mitigations],
        }


# =============================================================================
# Gate Result
# =============================================================================

@dataclass(frozen=True)
class GateIssue:
    """A blocker or warning raised by the gate."""
    code: str
    message: str
    action: Optional[str] = None

    def to_dict(self) -> dict[str, Any]:
        result: dict[str, Any] = {"code": self.code, "message": self.message}
        if self.action:
            result["action"] = self.action
        return result


@dataclass
class SafetyGateResult:
    """
    Full output of one gate run: decision, rewritten text and audit log.

    Consumed by the report renderer, which embeds the rewritten text,
    optionally the audit log as an appendix, and honours the blockers.
    """
    mode: DistributionMode
    decision: ReputationRiskDecision
    rewritten_text: str
    transformations: list[RewriteTransformation] = field(default_factory=list)
    blockers: list[GateIssue] = field(default_factory=list)
    warnings: list[GateIssue] = field(default_factory=list)
    court_style: Optional[CourtStyle] = None
    filing_type: Optional[FilingType] = None
    input_hash: str = ""

    @property
    def signals(self) -> list[RiskSignal]:
        return self.decision.signals

    @property
    def is_blocked(self) -> bool:
        return bool(self.blockers)

    def to_dict(self) -> dict[str, Any]:
        result: dict[str, Any] = {
            "mode": self.mode.value,
            "decision": self.decision.to_dict(),
            "rewrite_plan": {
                "transformations": [t.to_dict() for t in self.transformations],
                "rewritten_text": self.rewritten_text,
            },
            "blockers": [b.to_dict() for b in self.blockers],
            "warnings": [w.to_dict() for w in self.warnings],
            "input_hash": self.input_hash,
        }
        if self.court_style and self.filing_type:
            result["court"] = {
                "court_style": self.court_style.value,
                "filing_type": self.filing_type.value,
            }
        return result

    def seal(self) -> str:
        """SHA-256 over the canonical JSON of this result, for audit."""
        from ..canon import content_hash

        return content_hash(self.to_dict())
