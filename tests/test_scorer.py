"""
Tests for the Risk Scorer / Mitigation Planner

Tests cover:
- Decision table precedence
- Mode-dependent mitigation assembly
- Monotonicity under added sensitive-data signals
"""
import pytest

from safetygate.engine import assess, detect, score_overall
from safetygate.models import (
    DisclaimerKey,
    DistributionMode,
    MitigationType,
    RedactionField,
    RiskCategory,
    RiskLevel,
)

from tests.conftest import (
    CRIMINAL_TEXT,
    HEDGED_TEXT,
    make_claim,
    make_detection,
    make_signal,
)


def _types(decision):
    return [m.type for m in decision.required_mitigations]


# =============================================================================
# Decision Table Tests
# =============================================================================

class TestScoreOverall:

    def test_empty_is_low(self):
        assert score_overall(make_detection()) == RiskLevel.LOW

    def test_sensitive_data_is_critical(self):
        detection = make_detection(signals=[
            make_signal(RiskCategory.SENSITIVE_PERSONAL_DATA, RiskLevel.CRITICAL)
        ])
        assert score_overall(detection) == RiskLevel.CRITICAL

    def test_critical_sub_judice(self):
        detection = make_detection(signals=[make_signal(RiskCategory.SUB_JUDICE, RiskLevel.CRITICAL)])
        assert score_overall(detection) == RiskLevel.CRITICAL

    def test_critical_criminal_allegation(self):
        detection = make_detection(signals=[
            make_signal(RiskCategory.UNVERIFIED_CRIMINAL_ALLEGATION, RiskLevel.CRITICAL)
        ])
        assert score_overall(detection) == RiskLevel.CRITICAL

    def test_critical_defamation_alone_is_low(self):
        detection = make_detection(signals=[make_signal(RiskCategory.DEFAMATION, RiskLevel.CRITICAL)])
        assert score_overall(detection) == RiskLevel.LOW

    def test_detected_criminal_label_is_low(self):
        detection = detect("Bilal was a criminal.")
        assert [(s.category, s.level) for s in detection.signals] == [
            (RiskCategory.DEFAMATION, RiskLevel.CRITICAL)
        ]
        assert assess(detection, DistributionMode.RESEARCH_ONLY).overall == RiskLevel.LOW

    def test_high_signal_is_medium(self):
        detection = make_detection(signals=[make_signal(level=RiskLevel.HIGH)])
        assert score_overall(detection) == RiskLevel.MEDIUM

    def test_two_institutional_accusations_are_high(self):
        detection = make_detection(signals=[
            make_signal(RiskCategory.INSTITUTIONAL_ACCUSATION, RiskLevel.HIGH, signal_id="DRD-1"),
            make_signal(RiskCategory.INSTITUTIONAL_ACCUSATION, RiskLevel.HIGH, signal_id="DRD-2"),
        ])
        assert score_overall(detection) == RiskLevel.HIGH

    def test_one_institutional_accusation_is_medium(self):
        detection = make_detection(signals=[
            make_signal(RiskCategory.INSTITUTIONAL_ACCUSATION, RiskLevel.HIGH)
        ])
        assert score_overall(detection) == RiskLevel.MEDIUM

    def test_two_unverified_severe_claims_are_high(self):
        detection = make_detection(claims=[make_claim("Ali Khan"), make_claim("Bilal Ahmed")])
        assert score_overall(detection) == RiskLevel.HIGH

    def test_verified_claims_do_not_count(self):
        detection = make_detection(claims=[
            make_claim("Ali Khan", has_evidence=True),
            make_claim("Bilal Ahmed"),
        ])
        assert score_overall(detection) == RiskLevel.LOW

    def test_low_signals_stay_low(self):
        detection = make_detection(signals=[make_signal(level=RiskLevel.LOW)])
        assert score_overall(detection) == RiskLevel.LOW

    def test_adding_sensitive_data_never_lowers_level(self):
        cases = [
            make_detection(),
            make_detection(signals=[make_signal(level=RiskLevel.MEDIUM)]),
            make_detection(claims=[make_claim("A Person"), make_claim("B Person")]),
            make_detection(signals=[make_signal(RiskCategory.SUB_JUDICE, RiskLevel.CRITICAL)]),
        ]
        pii = make_signal(RiskCategory.SENSITIVE_PERSONAL_DATA, RiskLevel.CRITICAL, signal_id="DRD-99")
        for detection in cases:
            before = score_overall(detection)
            after = score_overall(make_detection(
                signals=detection.signals + [pii], claims=detection.claim_units
            ))
            assert after.rank >= before.rank


# =============================================================================
# Mitigation Tests
# =============================================================================

class TestMitigations:

    def test_controlled_legal(self):
        decision = assess(make_detection(), DistributionMode.CONTROLLED_LEGAL)
        assert decision.disclaimer_keys == [
            DisclaimerKey.NO_JUDICIAL_DETERMINATION,
            DisclaimerKey.DATA_LIMITATIONS,
            DisclaimerKey.METHODOLOGY,
        ]
        assert MitigationType.FORCE_ALLEGATION_LANGUAGE in _types(decision)
        assert MitigationType.REQUIRE_EVIDENCE not in _types(decision)

    def test_court_mode_adds_appendices(self):
        decision = assess(make_detection(), DistributionMode.COURT_MODE)
        assert DisclaimerKey.LOD_APPENDIX in decision.disclaimer_keys
        assert DisclaimerKey.KEY_ISSUES_APPENDIX in decision.disclaimer_keys

    def test_require_evidence_lists_unique_targets(self):
        detection = make_detection(claims=[
            make_claim("Ali Khan"),
            make_claim("Ali Khan", predicate="convicted of theft"),
            make_claim("Bilal Ahmed", severity=RiskLevel.HIGH),
            make_claim("Verified Person", has_evidence=True),
        ])
        decision = assess(detection, DistributionMode.COURT_MODE)
        [evidence] = decision.mitigations_of(MitigationType.REQUIRE_EVIDENCE)
        assert evidence.min == 1
        assert evidence.for_targets == ("Ali Khan", "Bilal Ahmed")

    def test_sensitive_data_redaction(self):
        detection = make_detection(signals=[
            make_signal(RiskCategory.SENSITIVE_PERSONAL_DATA, RiskLevel.CRITICAL)
        ])
        decision = assess(detection, DistributionMode.RESEARCH_ONLY)
        [redact] = decision.mitigations_of(MitigationType.REMOVE_OR_REDACT)
        assert redact.fields == (
            RedactionField.CNIC,
            RedactionField.PHONE,
            RedactionField.ADDRESS,
            RedactionField.BANK_NUMBER,
        )
        assert decision.requires_human_review
        assert decision.mitigations_of(MitigationType.REQUIRE_HUMAN_REVIEW)[0].role == "admin"

    def test_public_severe_restricts_distribution(self):
        decision = assess(detect(CRIMINAL_TEXT), DistributionMode.PUBLIC)
        assert decision.overall == RiskLevel.CRITICAL
        [restrict] = decision.mitigations_of(MitigationType.RESTRICT_DISTRIBUTION)
        assert restrict.allowed_modes == (
            DistributionMode.CONTROLLED_LEGAL,
            DistributionMode.RESEARCH_ONLY,
        )

    def test_public_low_only_names_redaction(self):
        decision = assess(detect(HEDGED_TEXT), DistributionMode.PUBLIC)
        assert decision.overall == RiskLevel.LOW
        assert decision.categories == []
        assert [m.to_dict() for m in decision.required_mitigations] == [
            {"type": "remove_or_redact", "fields": ["names_unless_public_record"]}
        ]

    def test_research_only_low_has_no_mitigations(self):
        decision = assess(make_detection(), DistributionMode.RESEARCH_ONLY)
        assert decision.required_mitigations == []

    def test_categories_are_ordered_unique(self):
        detection = make_detection(signals=[
            make_signal(RiskCategory.DEFAMATION, signal_id="DRD-1"),
            make_signal(RiskCategory.SUB_JUDICE, RiskLevel.CRITICAL, signal_id="DRD-2"),
            make_signal(RiskCategory.DEFAMATION, signal_id="DRD-3"),
        ])
        decision = assess(detection, DistributionMode.PUBLIC)
        assert decision.categories == [RiskCategory.DEFAMATION, RiskCategory.SUB_JUDICE]

    def test_mode_strings_are_accepted(self):
        decision = assess(make_detection(), "court_mode")
        assert DisclaimerKey.LOD_APPENDIX in decision.disclaimer_keys

    @pytest.mark.parametrize("mode", list(DistributionMode))
    def test_every_mode_produces_a_decision(self, mode):
        decision = assess(detect(CRIMINAL_TEXT), mode)
        assert decision.overall == RiskLevel.CRITICAL
        assert decision.requires_human_review
