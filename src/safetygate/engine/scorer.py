"""
SafetyGate Risk Scorer / Mitigation Planner

Maps a detection result plus a distribution mode to a ReputationRiskDecision.

Scoring is a fixed decision table, evaluated top-down, first match wins:
- CRITICAL: sensitive personal data, CRITICAL sub judice, or CRITICAL
  unverified criminal allegation
- HIGH: >= 2 severe institutional accusations, or >= 2 severe claim
  units without evidence
- MEDIUM: any signal at HIGH or MEDIUM
- LOW: everything else

Mitigations are cumulative; every applicable directive is included.
"""
from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Any, Optional

from ..models import (
    DefamationDetectionResult,
    DisclaimerKey,
    DistributionMode,
    MitigationType,
    RedactionField,
    ReputationMitigation,
    ReputationRiskDecision,
    RiskCategory,
    RiskLevel,
)
from .patterns import PII_FIELDS

logger = logging.getLogger(__name__)

REVIEW_ROLE = "admin"
SEVERE_COUNT_THRESHOLD = 2

LEGAL_DISCLAIMERS = (
    DisclaimerKey.NO_JUDICIAL_DETERMINATION,
    DisclaimerKey.DATA_LIMITATIONS,
    DisclaimerKey.METHODOLOGY,
)
COURT_DISCLAIMERS = (
    DisclaimerKey.LOD_APPENDIX,
    DisclaimerKey.KEY_ISSUES_APPENDIX,
)
PUBLIC_ALLOWED_MODES = (
    DistributionMode.CONTROLLED_LEGAL,
    DistributionMode.RESEARCH_ONLY,
)


def score_overall(detection: DefamationDetectionResult) -> RiskLevel:
    """Apply the decision table to a detection result."""
    signals = detection.signals

    def any_critical(category: RiskCategory) -> bool:
        return any(
            s.category == category and s.level == RiskLevel.CRITICAL for s in signals
        )

    if (
        detection.has_category(RiskCategory.SENSITIVE_PERSONAL_DATA)
        or any_critical(RiskCategory.SUB_JUDICE)
        or any_critical(RiskCategory.UNVERIFIED_CRIMINAL_ALLEGATION)
    ):
        return RiskLevel.CRITICAL

    severe_institutional = sum(
        1 for s in signals
        if s.category == RiskCategory.INSTITUTIONAL_ACCUSATION and s.level.is_severe
    )
    severe_unverified = sum(1 for c in detection.claim_units if c.is_severe_unverified)
    if (
        severe_institutional >= SEVERE_COUNT_THRESHOLD
        or severe_unverified >= SEVERE_COUNT_THRESHOLD
    ):
        return RiskLevel.HIGH

    if any(s.level in (RiskLevel.HIGH, RiskLevel.MEDIUM) for s in signals):
        return RiskLevel.MEDIUM

    return RiskLevel.LOW


@dataclass
class ReputationRiskFilter:
    """
    Scores detection output and plans the required mitigations.

    Stateless: the same detection result and mode always produce the same
    decision.

    Usage:
        decision = ReputationRiskFilter().assess(detection, DistributionMode.COURT_MODE)
        if decision.requires_human_review:
            ...
    """
    review_role: str = REVIEW_ROLE

    def assess(
        self,
        detection: DefamationDetectionResult,
        mode: DistributionMode,
        court_context: Optional[dict[str, Any]] = None,
    ) -> ReputationRiskDecision:
        """
        Score ``detection`` for ``mode``.

        ``court_context`` is accepted for callers that carry a court pair
        along; the decision table does not depend on it.
        """
        mode = DistributionMode(mode)
        overall = score_overall(detection)

        categories: list[RiskCategory] = []
        for signal in detection.signals:
            if signal.category not in categories:
                categories.append(signal.category)

        mitigations = self._plan_mitigations(detection, mode, overall)

        logger.debug(
            "Assessed %d signals as %s for %s (%d mitigations)",
            len(detection.signals), overall.value, mode.value, len(mitigations),
        )
        return ReputationRiskDecision(
            overall=overall,
            categories=categories,
            signals=list(detection.signals),
            required_mitigations=mitigations,
        )

    def _plan_mitigations(
        self,
        detection: DefamationDetectionResult,
        mode: DistributionMode,
        overall: RiskLevel,
    ) -> list[ReputationMitigation]:
        mitigations: list[ReputationMitigation] = []

        if mode.is_legal:
            mitigations.extend(
                ReputationMitigation(type=MitigationType.ADD_DISCLAIMER, key=key)
                for key in LEGAL_DISCLAIMERS
            )
            mitigations.append(
                ReputationMitigation(type=MitigationType.FORCE_ALLEGATION_LANGUAGE)
            )

            unverified_targets: list[str] = []
            for unit in detection.claim_units:
                if unit.is_severe_unverified and unit.target not in unverified_targets:
                    unverified_targets.append(unit.target)
            if unverified_targets:
                mitigations.append(
                    ReputationMitigation(
                        type=MitigationType.REQUIRE_EVIDENCE,
                        min=1,
                        for_targets=tuple(unverified_targets),
                    )
                )

            if mode == DistributionMode.COURT_MODE:
                mitigations.extend(
                    ReputationMitigation(type=MitigationType.ADD_DISCLAIMER, key=key)
                    for key in COURT_DISCLAIMERS
                )

        if detection.has_category(RiskCategory.SENSITIVE_PERSONAL_DATA):
            mitigations.append(
                ReputationMitigation(type=MitigationType.REMOVE_OR_REDACT, fields=PII_FIELDS)
            )

        if mode == DistributionMode.PUBLIC:
            if overall.is_severe:
                mitigations.append(
                    ReputationMitigation(
                        type=MitigationType.RESTRICT_DISTRIBUTION,
                        allowed_modes=PUBLIC_ALLOWED_MODES,
                    )
                )
            mitigations.append(
                ReputationMitigation(
                    type=MitigationType.REMOVE_OR_REDACT,
                    fields=(RedactionField.NAMES_UNLESS_PUBLIC_RECORD,),
                )
            )

        if overall == RiskLevel.CRITICAL:
            mitigations.append(
                ReputationMitigation(
                    type=MitigationType.REQUIRE_HUMAN_REVIEW, role=self.review_role
                )
            )

        return mitigations


# =============================================================================
# Convenience Functions
# =============================================================================

def assess(
    detection: DefamationDetectionResult,
    mode: DistributionMode,
    court_context: Optional[dict[str, Any]] = None,
) -> ReputationRiskDecision:
    """Score ``detection`` with the default filter."""
    return ReputationRiskFilter().assess(detection, mode, court_context=court_context)
