"""
SafetyGate Orchestration

Single entry point for reputation / defamation risk control:

    detect -> assess -> rewrite -> blockers & warnings

Blockers stop export until resolved (or an admin overrides them):
- CRITICAL_RISK: overall decision is CRITICAL
- PII_DETECTED: sensitive personal data was found

Warnings are advisory:
- COURT_EVIDENCE_GAP: severe claims without evidence in court mode
- SIGNAL_<CATEGORY>: each MEDIUM / LOW signal
"""
from __future__ import annotations

import logging
import time
from dataclasses import dataclass, field
from typing import Optional, Union

from ..canon import content_hash_short, text_hash
from ..config import GateSettings
from ..models import (
    CourtStyle,
    DefamationDetectionResult,
    DetectionContext,
    DistributionMode,
    FilingType,
    GateIssue,
    ReputationRiskDecision,
    RiskCategory,
    RiskLevel,
    SafetyGateResult,
)
from ..phrases import DEFAULT_LIBRARY, PhraseLibrary, coerce_pair
from .detector import DefamationRiskDetector
from .rewriter import CourtSafeRewriter, RewriteOptions
from .scorer import ReputationRiskFilter

logger = logging.getLogger(__name__)


def build_blockers(
    detection: DefamationDetectionResult,
    decision: ReputationRiskDecision,
    is_admin_override: bool = False,
) -> list[GateIssue]:
    """Issues that must be resolved before export."""
    if is_admin_override:
        return []

    blockers: list[GateIssue] = []
    if decision.overall == RiskLevel.CRITICAL:
        blockers.append(
            GateIssue(
                code="CRITICAL_RISK",
                message="Critical reputation/defamation risk detected; export blocked",
                action="Review and resolve critical signals, or use admin override",
            )
        )
    if detection.has_category(RiskCategory.SENSITIVE_PERSONAL_DATA):
        blockers.append(
            GateIssue(
                code="PII_DETECTED",
                message="Sensitive personal data detected (CNIC/phone/address); must be redacted",
                action="Data has been auto-redacted in rewritten text",
            )
        )
    return blockers


def build_warnings(
    detection: DefamationDetectionResult,
    mode: DistributionMode,
    is_admin_override: bool = False,
) -> list[GateIssue]:
    """Advisory issues; never block export."""
    warnings: list[GateIssue] = []

    if mode == DistributionMode.COURT_MODE and not is_admin_override:
        severe = sum(1 for c in detection.claim_units if c.is_severe_unverified)
        if severe:
            warnings.append(
                GateIssue(
                    code="COURT_EVIDENCE_GAP",
                    message=(
                        f"{severe} severe claim(s) lack evidence; will appear in Key "
                        f"Issues appendix with \"requires verification\""
                    ),
                )
            )

    for signal in detection.signals:
        if signal.level in (RiskLevel.MEDIUM, RiskLevel.LOW):
            warnings.append(
                GateIssue(
                    code=f"SIGNAL_{signal.category.value.upper()}",
                    message=signal.rationale,
                )
            )
    return warnings


@dataclass
class SafetyGate:
    """
    Runs the full detect / assess / rewrite pipeline on one text.

    Usage:
        gate = SafetyGate()
        result = gate.run(
            "Ali Khan committed fraud against the company.",
            mode=DistributionMode.COURT_MODE,
        )
        if result.is_blocked:
            for blocker in result.blockers:
                print(blocker.code, blocker.message)
    """
    settings: GateSettings = field(default_factory=GateSettings)
    phrase_library: PhraseLibrary = DEFAULT_LIBRARY
    detector: DefamationRiskDetector = field(default_factory=DefamationRiskDetector)
    scorer: ReputationRiskFilter = field(default_factory=ReputationRiskFilter)

    def run(
        self,
        text: str,
        context: Optional[DetectionContext] = None,
        mode: Optional[Union[DistributionMode, str]] = None,
        court_style: Optional[Union[CourtStyle, str]] = None,
        filing_type: Optional[Union[FilingType, str]] = None,
        is_admin_override: bool = False,
    ) -> SafetyGateResult:
        """
        Run the gate.

        Args:
            text: Narrative to scan and rewrite
            context: Optional entities / evidence artifacts
            mode: Distribution mode (settings default when omitted)
            court_style: Court style for the opening phrase
            filing_type: Filing type for the opening phrase
            is_admin_override: Suppress blockers and the evidence-gap warning

        Returns:
            SafetyGateResult with decision, rewritten text, audit log and issues
        """
        started = time.perf_counter()
        text = text or ""
        mode = DistributionMode(mode) if mode else self.settings.default_mode

        style: Optional[CourtStyle] = None
        filing: Optional[FilingType] = None
        if court_style and filing_type:
            style, filing = coerce_pair(court_style, filing_type)
        elif mode == DistributionMode.COURT_MODE:
            style, filing = coerce_pair(
                court_style or self.settings.default_court_style,
                filing_type or self.settings.default_filing_type,
            )
            logger.debug(
                "Incomplete court pair (%r, %r); using %s/%s",
                court_style, filing_type, style.value, filing.value,
            )

        detection = self.detector.detect(text, context=context, mode=mode)
        court_context = {"court_style": style, "filing_type": filing} if style else None
        decision = self.scorer.assess(detection, mode, court_context=court_context)

        rewriter = CourtSafeRewriter(phrase_library=self.phrase_library)
        outcome = rewriter.rewrite(
            text,
            RewriteOptions(mode=mode, court_style=style, filing_type=filing),
            detection,
        )

        result = SafetyGateResult(
            mode=mode,
            decision=decision,
            rewritten_text=outcome.rewritten_text,
            transformations=outcome.transformations,
            blockers=build_blockers(detection, decision, is_admin_override),
            warnings=build_warnings(detection, mode, is_admin_override),
            court_style=style,
            filing_type=filing,
            input_hash=text_hash(text),
        )

        logger.info(
            "Safety gate %s: %s with %d signals, %d blockers",
            mode.value, decision.overall.value, len(detection.signals), len(result.blockers),
            extra={
                "input_hash_short": result.input_hash[:12],
                "result_hash_short": content_hash_short(result.to_dict()),
                "mode": mode.value,
                "overall": decision.overall.value,
                "signal_count": len(detection.signals),
                "blocker_count": len(result.blockers),
                "duration_ms": round((time.perf_counter() - started) * 1000, 2),
            },
        )
        return result


def run_safety_gate(
    text: str,
    context: Optional[DetectionContext] = None,
    mode: Optional[Union[DistributionMode, str]] = None,
    court_style: Optional[Union[CourtStyle, str]] = None,
    filing_type: Optional[Union[FilingType, str]] = None,
    is_admin_override: bool = False,
    settings: Optional[GateSettings] = None,
) -> SafetyGateResult:
    """Run the gate with default components."""
    gate = SafetyGate(settings=settings or GateSettings())
    return gate.run(
        text,
        context=context,
        mode=mode,
        court_style=court_style,
        filing_type=filing_type,
        is_admin_override=is_admin_override,
    )
