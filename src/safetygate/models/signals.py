"""
SafetyGate Detection Models

Models produced by the Risk Detector and consumed by the scorer and rewriter.

Key components:
- Span: half-open character range into a specific text buffer
- RiskSignal: one detected risk occurrence
- ClaimUnit: structured allegation tied to a named target
- RewriteTransformation: a planned or applied text edit
- DefamationDetectionResult: aggregate output of one detection call
- DetectionContext: optional entity / evidence context from collaborators
"""
from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Optional

from .enums import RiskCategory, RiskLevel


# =============================================================================
# Span
# =============================================================================

@dataclass(frozen=True)
class Span:
    """
    Half-open character range [start, end) into a text buffer.

    A span is only meaningful against the buffer it was computed on; it
    goes stale once that buffer is mutated ahead of it. Redactions,
    allegation wraps and court openings carry the 0/0 placeholder span
    and must not be replayed positionally.
    """
    start: int
    end: int

    @property
    def length(self) -> int:
        return self.end - self.start

    @property
    def is_placeholder(self) -> bool:
        return self.start == 0 and self.end == 0

    def overlaps(self, other: "Span") -> bool:
        """True if the two half-open ranges share at least one character."""
        return self.start < other.end and other.start < self.end

    def to_dict(self) -> dict[str, int]:
        return {"start": self.start, "end": self.end}


PLACEHOLDER_SPAN = Span(0, 0)


# =============================================================================
# Risk Signal
# =============================================================================

@dataclass(frozen=True)
class RiskSignal:
    """
    One detected risk occurrence.

    Attributes:
        id: Identifier, numbered per detection call (DRD-1, DRD-2, ...)
        category: Risk category
        level: Severity level
        span: Location of the match in the original text
        text: Surrounding sentence or matched text (truncated to 200 chars)
        rationale: Why this was flagged
        targets: Named targets found in the sentence
        confidence: Heuristic confidence in [0, 1]
    """
    id: str
    category: RiskCategory
    level: RiskLevel
    span: Span
    text: str
    rationale: str
    targets: tuple[str, ...] = ()
    confidence: float = 0.85

    def to_dict(self) -> dict[str, Any]:
        return {
            "id": self.id,
            "category": self.category.value,
            "level": self.level.value,
            "span": self.span.to_dict(),
            "text": self.text,
            "rationale": self.rationale,
            "targets": list(self.targets),
            "confidence": self.confidence,
        }


# =============================================================================
# Claim Unit
# =============================================================================

@dataclass
class ClaimUnit:
    """
    A structured allegation extracted from a criminal-allegation match.

    Evidence linkage is back-filled by the detector against the
    caller's evidence-artifact index; nothing else mutates a claim unit.
    """
    target: str
    predicate_summary: str
    severity: RiskLevel
    has_evidence: bool = False
    evidence_refs: list[str] = field(default_factory=list)
    suggested_rewrite: str = ""

    @property
    def is_severe_unverified(self) -> bool:
        """No linked evidence and HIGH/CRITICAL severity."""
        return not self.has_evidence and self.severity.is_severe

    def to_dict(self) -> dict[str, Any]:
        return {
            "target": self.target,
            "predicate_summary": self.predicate_summary,
            "severity": self.severity.value,
            "has_evidence": self.has_evidence,
            "evidence_refs": list(self.evidence_refs),
            "suggested_rewrite": self.suggested_rewrite,
        }


# =============================================================================
# Rewrite Transformations
# =============================================================================

@dataclass(frozen=True)
class RewriteTransformation:
    """
    A planned or applied text edit.

    Attributes:
        rule_id: Rule that produced the edit (RW01, REDACT_CNIC, ...)
        from_text: Original substring
        to_text: Replacement substring
        reason: Human rationale
        span: Span in the original text (placeholder for non-positional edits)
    """
    rule_id: str
    from_text: str
    to_text: str
    reason: str
    span: Span = PLACEHOLDER_SPAN

    def to_dict(self) -> dict[str, Any]:
        return {
            "rule_id": self.rule_id,
            "from": self.from_text,
            "to": self.to_text,
            "reason": self.reason,
            "span": self.span.to_dict(),
        }


@dataclass
class RewritePlan:
    """Ordered list of transformations planned by the detector."""
    transformations: list[RewriteTransformation] = field(default_factory=list)

    def __len__(self) -> int:
        return len(self.transformations)

    def rule_ids(self) -> list[str]:
        return [t.rule_id for t in self.transformations]


# =============================================================================
# Detection Context
# =============================================================================

@dataclass(frozen=True)
class NamedEntity:
    """An entity known to the case (from the entity store)."""
    name: str
    category: Optional[str] = None


@dataclass(frozen=True)
class EvidenceArtifact:
    """An evidence artifact (id + extracted value string)."""
    id: str
    value: Optional[str] = None


@dataclass
class DetectionContext:
    """Optional context supplied by collaborators for target/evidence matching."""
    entities: list[NamedEntity] = field(default_factory=list)
    evidence_artifacts: list[EvidenceArtifact] = field(default_factory=list)

    @property
    def entity_names(self) -> list[str]:
        return [e.name for e in self.entities if e.name]

    @classmethod
    def from_dict(cls, data: Optional[dict[str, Any]]) -> "DetectionContext":
        """
        Build a context from the collaborator JSON shape.

        Accepts ``evidence_artifacts`` / ``evidenceArtifacts`` and
        ``artifact_value`` as an alias of ``value``.
        """
        if not data:
            return cls()

        entities = [
            NamedEntity(name=str(e.get("name", "")), category=e.get("category"))
            for e in data.get("entities") or []
        ]
        raw_artifacts = data.get("evidence_artifacts")
        if raw_artifacts is None:
            raw_artifacts = data.get("evidenceArtifacts") or []
        artifacts = [
            EvidenceArtifact(
                id=str(a.get("id", "")),
                value=a.get("value", a.get("artifact_value")),
            )
            for a in raw_artifacts
        ]
        return cls(entities=entities, evidence_artifacts=artifacts)


# =============================================================================
# Detection Result
# =============================================================================

@dataclass
class DefamationDetectionResult:
    """Aggregate output of one detection call."""
    signals: list[RiskSignal] = field(default_factory=list)
    claim_units: list[ClaimUnit] = field(default_factory=list)
    rewrite_plan: RewritePlan = field(default_factory=RewritePlan)

    @property
    def is_empty(self) -> bool:
        return not self.signals and not self.claim_units and not self.rewrite_plan.transformations

    def has_category(self, category: RiskCategory) -> bool:
        return any(s.category == category for s in self.signals)

    def signals_for(self, category: RiskCategory) -> list[RiskSignal]:
        return [s for s in self.signals if s.category == category]

    def to_dict(self) -> dict[str, Any]:
        return {
            "signals": [s.to_dict() for s in self.signals],
            "claim_units": [c.to_dict() for c in self.claim_units],
            "rewrite_plan": {
                "transformations": [t.to_dict() for t in self.rewrite_plan.transformations],
            },
        }
