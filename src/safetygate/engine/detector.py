"""
SafetyGate Risk Detector

Scans free text against the categorized pattern tables and produces:
1. A flat list of RiskSignals
2. ClaimUnits for criminal allegations aimed at a named target
3. A rewrite plan (non-overlapping RewriteTransformations)

Key features:
- Allegation-marker suppression (already-hedged sentences are not flagged)
- Unconditional sensitive-data scanning
- Inflammatory labels only flagged when aimed at someone identifiable
- Heuristic evidence back-fill against a supplied artifact index

Mode is informational at this stage: it never changes which signals fire.
"""
from __future__ import annotations

import logging
import re
from dataclasses import dataclass, field
from typing import Optional, Sequence

from ..models import (
    ClaimUnit,
    DefamationDetectionResult,
    DetectionContext,
    DistributionMode,
    RewritePlan,
    RewriteTransformation,
    RiskCategory,
    RiskLevel,
    RiskSignal,
    Span,
)
from .patterns import (
    CERTAINTY_RULES,
    CRIMINAL_ALLEGATION_RULES,
    INFLAMMATORY_RULES,
    INSTITUTIONAL_RULES,
    REDACTION_RULES,
    REWRITE_RULES,
    SUB_JUDICE_RULES,
    PatternRule,
    RedactionRule,
    RewriteRule,
)
from .targets import (
    extract_candidate_targets,
    has_allegation_frame,
    surrounding_sentence,
    targets_in,
)

logger = logging.getLogger(__name__)

MAX_SIGNAL_TEXT = 200
DEFAULT_CONFIDENCE = 0.85
CERTAINTY_CONFIDENCE = 0.7
SENSITIVE_CONFIDENCE = 0.95
MIN_EVIDENCE_TOKEN = 5

_TOKEN_SPLIT = re.compile(r"\W+")


# =============================================================================
# Per-call State
# =============================================================================

@dataclass
class _Scan:
    """Mutable state for one detection call."""
    text: str
    candidates: list[str]
    entity_names: list[str]
    signals: list[RiskSignal] = field(default_factory=list)
    claim_units: list[ClaimUnit] = field(default_factory=list)
    counter: int = 0

    def emit(
        self,
        rule: PatternRule,
        match: re.Match,
        level: Optional[RiskLevel] = None,
        targets: Sequence[str] = (),
        confidence: float = DEFAULT_CONFIDENCE,
    ) -> RiskSignal:
        self.counter += 1
        signal = RiskSignal(
            id=f"DRD-{self.counter}",
            category=rule.category,
            level=level or rule.level,
            span=Span(match.start(), match.end()),
            text=match.group(0)[:MAX_SIGNAL_TEXT],
            rationale=rule.rationale,
            targets=tuple(targets),
            confidence=confidence,
        )
        self.signals.append(signal)
        return signal

    def emit_sensitive(self, rule: RedactionRule, match: re.Match) -> RiskSignal:
        self.counter += 1
        signal = RiskSignal(
            id=f"DRD-{self.counter}",
            category=RiskCategory.SENSITIVE_PERSONAL_DATA,
            level=RiskLevel.CRITICAL,
            span=Span(match.start(), match.end()),
            text=match.group(0)[:MAX_SIGNAL_TEXT],
            rationale=f"Sensitive personal data detected ({rule.label}): must be redacted",
            confidence=SENSITIVE_CONFIDENCE,
        )
        self.signals.append(signal)
        return signal


# =============================================================================
# Detector
# =============================================================================

@dataclass
class DefamationRiskDetector:
    """
    Rule-table driven defamation / sub-judice / privacy risk detector.

    Usage:
        detector = DefamationRiskDetector()
        result = detector.detect("Ali Khan committed fraud against the company.")

        for signal in result.signals:
            print(signal.id, signal.category.value, signal.level.value)
    """
    criminal_rules: Sequence[PatternRule] = CRIMINAL_ALLEGATION_RULES
    institutional_rules: Sequence[PatternRule] = INSTITUTIONAL_RULES
    certainty_rules: Sequence[PatternRule] = CERTAINTY_RULES
    inflammatory_rules: Sequence[PatternRule] = INFLAMMATORY_RULES
    sub_judice_rules: Sequence[PatternRule] = SUB_JUDICE_RULES
    redaction_rules: Sequence[RedactionRule] = REDACTION_RULES
    rewrite_rules: Sequence[RewriteRule] = REWRITE_RULES

    def detect(
        self,
        text: str,
        context: Optional[DetectionContext] = None,
        mode: DistributionMode = DistributionMode.CONTROLLED_LEGAL,
    ) -> DefamationDetectionResult:
        """
        Detect risk signals, claim units and the rewrite plan for ``text``.

        Args:
            text: Free-text narrative
            context: Optional entities / evidence artifacts from collaborators
            mode: Distribution mode (does not affect detection)

        Returns:
            DefamationDetectionResult (empty for empty or blank text)
        """
        if not text or not text.strip():
            return DefamationDetectionResult()

        context = context or DetectionContext()
        scan = _Scan(
            text=text,
            candidates=extract_candidate_targets(text),
            entity_names=context.entity_names,
        )

        self._scan_criminal(scan)
        self._scan_institutional(scan)
        self._scan_certainty(scan)
        self._scan_sensitive(scan)
        self._scan_inflammatory(scan)
        self._scan_sub_judice(scan)

        plan = self._plan_rewrites(text)

        if context.evidence_artifacts:
            self._backfill_evidence(scan.claim_units, context)

        logger.debug(
            "Detected %d signals, %d claim units, %d planned rewrites (mode=%s)",
            len(scan.signals), len(scan.claim_units), len(plan), getattr(mode, "value", mode),
        )
        return DefamationDetectionResult(
            signals=scan.signals,
            claim_units=scan.claim_units,
            rewrite_plan=plan,
        )

    # -------------------------------------------------------------------------
    # Category scans
    # -------------------------------------------------------------------------

    def _scan_criminal(self, scan: _Scan) -> None:
        for rule in self.criminal_rules:
            for match in rule.regex.finditer(scan.text):
                sentence = surrounding_sentence(scan.text, match.start())
                if has_allegation_frame(sentence):
                    continue
                targets = targets_in(sentence, scan.candidates)
                scan.emit(rule, match, targets=targets)
                if targets:
                    predicate = match.group(0)
                    scan.claim_units.append(
                        ClaimUnit(
                            target=targets[0],
                            predicate_summary=predicate,
                            severity=rule.level,
                            suggested_rewrite=f"It is alleged that {predicate.lower()}",
                        )
                    )

    def _scan_institutional(self, scan: _Scan) -> None:
        for rule in self.institutional_rules:
            for match in rule.regex.finditer(scan.text):
                sentence = surrounding_sentence(scan.text, match.start())
                if has_allegation_frame(sentence):
                    continue
                scan.emit(rule, match, targets=targets_in(sentence, scan.candidates))

    def _scan_certainty(self, scan: _Scan) -> None:
        for rule in self.certainty_rules:
            for match in rule.regex.finditer(scan.text):
                sentence = surrounding_sentence(scan.text, match.start())
                scan.emit(
                    rule,
                    match,
                    targets=targets_in(sentence, scan.candidates),
                    confidence=CERTAINTY_CONFIDENCE,
                )

    def _scan_sensitive(self, scan: _Scan) -> None:
        for rule in self.redaction_rules:
            for match in rule.regex.finditer(scan.text):
                scan.emit_sensitive(rule, match)

    def _scan_inflammatory(self, scan: _Scan) -> None:
        for rule in self.inflammatory_rules:
            for match in rule.regex.finditer(scan.text):
                sentence = surrounding_sentence(scan.text, match.start())
                if has_allegation_frame(sentence):
                    continue
                targets = targets_in(sentence, scan.candidates)
                entities = targets_in(sentence, scan.entity_names)
                if not targets and not entities:
                    continue
                level = RiskLevel.HIGH if targets else rule.level
                scan.emit(rule, match, level=level, targets=targets or entities)

    def _scan_sub_judice(self, scan: _Scan) -> None:
        for rule in self.sub_judice_rules:
            for match in rule.regex.finditer(scan.text):
                scan.emit(rule, match, targets=targets_in(match.group(0), scan.candidates))

    # -------------------------------------------------------------------------
    # Rewrite plan
    # -------------------------------------------------------------------------

    def _plan_rewrites(self, text: str) -> RewritePlan:
        """
        Run the ordered rewrite table over ``text``.

        A match overlapping a span already claimed by an earlier rule is
        skipped, so the plan never holds overlapping spans.
        """
        planned: list[RewriteTransformation] = []
        for rule in self.rewrite_rules:
            for match in rule.regex.finditer(text):
                sentence = surrounding_sentence(text, match.start())
                if has_allegation_frame(sentence):
                    continue
                span = Span(match.start(), match.end())
                clash = next((t for t in planned if t.span.overlaps(span)), None)
                if clash is not None:
                    logger.debug(
                        "Skipping %s at %d-%d: overlaps %s at %d-%d",
                        rule.rule_id, span.start, span.end,
                        clash.rule_id, clash.span.start, clash.span.end,
                    )
                    continue
                planned.append(
                    RewriteTransformation(
                        rule_id=rule.rule_id,
                        from_text=match.group(0),
                        to_text=match.expand(rule.replacement),
                        reason=rule.reason,
                        span=span,
                    )
                )
        return RewritePlan(transformations=planned)

    # -------------------------------------------------------------------------
    # Evidence back-fill
    # -------------------------------------------------------------------------

    def _backfill_evidence(
        self, claim_units: list[ClaimUnit], context: DetectionContext
    ) -> None:
        """Link artifacts sharing a significant predicate token (heuristic)."""
        for unit in claim_units:
            tokens = [
                t.lower() for t in _TOKEN_SPLIT.split(unit.predicate_summary)
                if len(t) >= MIN_EVIDENCE_TOKEN
            ]
            if not tokens:
                continue
            for artifact in context.evidence_artifacts:
                value = (artifact.value or "").lower()
                if value and any(t in value for t in tokens):
                    unit.has_evidence = True
                    if artifact.id not in unit.evidence_refs:
                        unit.evidence_refs.append(artifact.id)


# =============================================================================
# Convenience Functions
# =============================================================================

_DEFAULT_DETECTOR = DefamationRiskDetector()


def detect(
    text: str,
    context: Optional[DetectionContext] = None,
    mode: DistributionMode = DistributionMode.CONTROLLED_LEGAL,
) -> DefamationDetectionResult:
    """Run the default detector over ``text``."""
    return _DEFAULT_DETECTOR.detect(text, context=context, mode=mode)
