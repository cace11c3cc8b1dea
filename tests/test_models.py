"""
Tests for SafetyGate models, exceptions and canonical hashing

Tests cover:
- Span arithmetic
- Enum helpers
- Claim unit / decision helpers
- DetectionContext parsing of collaborator JSON
- Serialization and sealing
"""
import pytest

from safetygate.canon import canonical_json, content_hash, text_hash
from safetygate.exceptions import ConfigurationError, PhrasePackLoadError, SafetyGateError
from safetygate.models import (
    PLACEHOLDER_SPAN,
    DisclaimerKey,
    DistributionMode,
    DetectionContext,
    GateIssue,
    MitigationType,
    RedactionField,
    ReputationMitigation,
    ReputationRiskDecision,
    RiskCategory,
    RiskLevel,
    SafetyGateResult,
    Span,
)

from tests.conftest import make_claim, make_detection, make_signal, make_transformation


# =============================================================================
# Span Tests
# =============================================================================

class TestSpan:
    """Tests for half-open spans."""

    def test_length(self):
        assert Span(3, 10).length == 7

    def test_adjacent_spans_do_not_overlap(self):
        assert not Span(0, 5).overlaps(Span(5, 9))

    def test_overlapping_spans(self):
        assert Span(0, 6).overlaps(Span(5, 9))
        assert Span(5, 9).overlaps(Span(0, 6))

    def test_placeholder(self):
        assert PLACEHOLDER_SPAN.is_placeholder
        assert not Span(0, 1).is_placeholder

    def test_frozen(self):
        span = Span(1, 2)
        with pytest.raises(AttributeError):
            span.start = 5


# =============================================================================
# Enum Tests
# =============================================================================

class TestEnums:
    """Tests for enum helpers."""

    def test_risk_level_rank_ordering(self):
        ranks = [level.rank for level in (RiskLevel.LOW, RiskLevel.MEDIUM, RiskLevel.HIGH, RiskLevel.CRITICAL)]
        assert ranks == sorted(ranks)
        assert len(set(ranks)) == 4

    def test_severe_levels(self):
        assert RiskLevel.HIGH.is_severe
        assert RiskLevel.CRITICAL.is_severe
        assert not RiskLevel.MEDIUM.is_severe

    def test_legal_modes(self):
        assert DistributionMode.COURT_MODE.is_legal
        assert DistributionMode.CONTROLLED_LEGAL.is_legal
        assert not DistributionMode.PUBLIC.is_legal
        assert not DistributionMode.RESEARCH_ONLY.is_legal

    def test_str_enum_json_values(self):
        assert canonical_json({"mode": DistributionMode.COURT_MODE}) == '{"mode":"court_mode"}'


# =============================================================================
# Claim Unit / Decision Tests
# =============================================================================

class TestClaimUnit:

    def test_severe_unverified(self):
        assert make_claim(severity=RiskLevel.HIGH).is_severe_unverified

    def test_evidence_clears_unverified(self):
        assert not make_claim(has_evidence=True).is_severe_unverified

    def test_medium_is_not_severe(self):
        assert not make_claim(severity=RiskLevel.MEDIUM).is_severe_unverified


class TestReputationRiskDecision:

    def test_helpers(self):
        decision = ReputationRiskDecision(
            overall=RiskLevel.CRITICAL,
            required_mitigations=[
                ReputationMitigation(type=MitigationType.ADD_DISCLAIMER, key=DisclaimerKey.METHODOLOGY),
                ReputationMitigation(type=MitigationType.REQUIRE_HUMAN_REVIEW, role="admin"),
            ],
        )
        assert decision.requires_human_review
        assert not decision.is_distribution_restricted
        assert decision.disclaimer_keys == [DisclaimerKey.METHODOLOGY]
        assert len(decision.mitigations_of(MitigationType.ADD_DISCLAIMER)) == 1

    def test_mitigation_to_dict_omits_unset(self):
        mitigation = ReputationMitigation(
            type=MitigationType.REMOVE_OR_REDACT,
            fields=(RedactionField.CNIC, RedactionField.PHONE),
        )
        assert mitigation.to_dict() == {"type": "remove_or_redact", "fields": ["cnic", "phone"]}


# =============================================================================
# Detection Context Tests
# =============================================================================

class TestDetectionContext:
    """Tests for DetectionContext.from_dict."""

    def test_empty(self):
        context = DetectionContext.from_dict(None)
        assert context.entities == []
        assert context.evidence_artifacts == []

    def test_collaborator_shape(self):
        context = DetectionContext.from_dict({
            "entities": [{"name": "Ali Khan", "category": "person"}],
            "evidenceArtifacts": [{"id": "EV-1", "artifact_value": "bank statement"}],
        })
        assert context.entity_names == ["Ali Khan"]
        assert context.evidence_artifacts[0].id == "EV-1"
        assert context.evidence_artifacts[0].value == "bank statement"

    def test_snake_case_shape(self):
        context = DetectionContext.from_dict({
            "evidence_artifacts": [{"id": "EV-2", "value": "audit report"}],
        })
        assert context.evidence_artifacts[0].value == "audit report"


# =============================================================================
# Serialization Tests
# =============================================================================

class TestSerialization:

    def test_transformation_to_dict_keys(self):
        data = make_transformation(0, 5, "fraud", "alleged irregularity", rule_id="RW05").to_dict()
        assert data == {
            "rule_id": "RW05",
            "from": "fraud",
            "to": "alleged irregularity",
            "reason": "test",
            "span": {"start": 0, "end": 5},
        }

    def test_detection_to_dict(self):
        detection = make_detection(signals=[make_signal()], claims=[make_claim()])
        data = detection.to_dict()
        assert data["signals"][0]["category"] == "defamation"
        assert data["claim_units"][0]["target"] == "Ali Khan"
        assert data["rewrite_plan"]["transformations"] == []

    def test_seal_is_deterministic(self):
        def build():
            return SafetyGateResult(
                mode=DistributionMode.PUBLIC,
                decision=ReputationRiskDecision(
                    overall=RiskLevel.MEDIUM,
                    categories=[RiskCategory.DEFAMATION],
                    signals=[make_signal()],
                ),
                rewritten_text="text",
                warnings=[GateIssue("SIGNAL_DEFAMATION", "test rationale")],
            )

        assert build().seal() == build().seal()
        assert len(build().seal()) == 64

    def test_seal_changes_with_text(self):
        decision = ReputationRiskDecision(overall=RiskLevel.LOW)
        a = SafetyGateResult(mode=DistributionMode.PUBLIC, decision=decision, rewritten_text="a")
        b = SafetyGateResult(mode=DistributionMode.PUBLIC, decision=decision, rewritten_text="b")
        assert a.seal() != b.seal()

    def test_canonical_json_sorts_keys(self):
        assert canonical_json({"b": 1, "a": 2}) == '{"a":2,"b":1}'
        assert content_hash({"b": 1, "a": 2}) == content_hash({"a": 2, "b": 1})

    def test_text_hash(self):
        assert len(text_hash("narrative")) == 64


# =============================================================================
# Exception Tests
# =============================================================================

class TestExceptions:

    def test_str_includes_code(self):
        error = ConfigurationError(message="bad value")
        assert str(error) == "[SG_CONFIGURATION_ERROR] bad value"

    def test_to_dict(self):
        error = PhrasePackLoadError(message="nope", details={"path": "x.yaml"})
        assert error.to_dict() == {
            "code": "SG_PHRASE_PACK_LOAD_ERROR",
            "message": "nope",
            "details": {"path": "x.yaml"},
        }

    def test_hierarchy(self):
        with pytest.raises(SafetyGateError):
            raise PhrasePackLoadError(message="nope")
