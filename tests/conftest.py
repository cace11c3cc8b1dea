"""
Pytest configuration and fixtures for SafetyGate tests.

Provides factory helpers for detection results and common fixtures.
"""
import pytest

from safetygate.config import GateSettings
from safetygate.engine import (
    CourtSafeRewriter,
    DefamationRiskDetector,
    ReputationRiskFilter,
    SafetyGate,
)
from safetygate.models import (
    ClaimUnit,
    DefamationDetectionResult,
    RewritePlan,
    RewriteTransformation,
    RiskCategory,
    RiskLevel,
    RiskSignal,
    Span,
)


# =============================================================================
# Sample Narratives
# =============================================================================

CRIMINAL_TEXT = "Ali Khan committed fraud against the company."
PII_TEXT = "Contact him at 0300-1234567 or CNIC 12345-1234567-1."
HEDGED_TEXT = "It is alleged that the agency was corrupt."


# =============================================================================
# Factory Helpers
# =============================================================================

def make_signal(
    category: RiskCategory = RiskCategory.DEFAMATION,
    level: RiskLevel = RiskLevel.MEDIUM,
    span: Span = Span(0, 5),
    text: str = "text",
    signal_id: str = "DRD-1",
    targets: tuple = (),
) -> RiskSignal:
    """Create a RiskSignal with sensible defaults."""
    return RiskSignal(
        id=signal_id,
        category=category,
        level=level,
        span=span,
        text=text,
        rationale="test rationale",
        targets=targets,
    )


def make_claim(
    target: str = "Ali Khan",
    severity: RiskLevel = RiskLevel.CRITICAL,
    has_evidence: bool = False,
    predicate: str = "committed fraud",
) -> ClaimUnit:
    """Create a ClaimUnit."""
    return ClaimUnit(
        target=target,
        predicate_summary=predicate,
        severity=severity,
        has_evidence=has_evidence,
        evidence_refs=["EV-1"] if has_evidence else [],
        suggested_rewrite=f"It is alleged that {predicate}",
    )


def make_transformation(
    start: int,
    end: int,
    from_text: str,
    to_text: str,
    rule_id: str = "RW99",
) -> RewriteTransformation:
    """Create a planned RewriteTransformation."""
    return RewriteTransformation(
        rule_id=rule_id,
        from_text=from_text,
        to_text=to_text,
        reason="test",
        span=Span(start, end),
    )


def make_detection(signals=(), claims=(), transformations=()) -> DefamationDetectionResult:
    """Create a DefamationDetectionResult from parts."""
    return DefamationDetectionResult(
        signals=list(signals),
        claim_units=list(claims),
        rewrite_plan=RewritePlan(transformations=list(transformations)),
    )


# =============================================================================
# Fixtures
# =============================================================================

@pytest.fixture
def detector():
    return DefamationRiskDetector()


@pytest.fixture
def scorer():
    return ReputationRiskFilter()


@pytest.fixture
def rewriter():
    return CourtSafeRewriter()


@pytest.fixture
def settings():
    return GateSettings(log_format="text")


@pytest.fixture
def gate(settings):
    return SafetyGate(settings=settings)
