"""
SafetyGate Engine

Core services for risk detection, scoring and court-safe rewriting.

Services:
- DefamationRiskDetector: Scan text for risk signals, claim units, rewrite plan
- ReputationRiskFilter: Score detection output and plan mitigations
- CourtSafeRewriter: Apply the plan, redact, frame allegations, add openings
- SafetyGate: Orchestrate detect -> assess -> rewrite with blockers
- Front-matter builders: Methodology, distribution and disclaimer blocks
- run_safety_qa: Report-level safety assertions

Usage:
    from safetygate.engine import (
        DefamationRiskDetector,
        ReputationRiskFilter,
        CourtSafeRewriter,
        RewriteOptions,
        SafetyGate,
    )
"""
from __future__ import annotations

from .detector import DefamationRiskDetector, detect
from .front_matter import (
    DISCLAIMER_BUILDERS,
    DISTRIBUTION_LABELS,
    MITIGATION_BUILDERS,
    FrontMatterBlock,
    build_decision_blocks,
    build_disclaimer_block,
    build_mitigation_block,
    build_safety_disclaimers,
    build_safety_front_matter,
    distribution_label,
    render_blocks,
)
from .gate import SafetyGate, build_blockers, build_warnings, run_safety_gate
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
from .qa import SafetyQAContext, SafetyQAIssue, SafetyQAReport, YearRange, run_safety_qa
from .rewriter import (
    CourtSafeRewriter,
    RewriteOptions,
    RewriteOutcome,
    redact_sensitive_data,
    rewrite,
)
from .scorer import ReputationRiskFilter, assess, score_overall
from .targets import extract_candidate_targets, has_allegation_frame, surrounding_sentence

__all__ = [
    # Detector
    "DefamationRiskDetector",
    "detect",
    "extract_candidate_targets",
    "has_allegation_frame",
    "surrounding_sentence",
    # Rule tables
    "CERTAINTY_RULES",
    "CRIMINAL_ALLEGATION_RULES",
    "INFLAMMATORY_RULES",
    "INSTITUTIONAL_RULES",
    "REDACTION_RULES",
    "REWRITE_RULES",
    "SUB_JUDICE_RULES",
    "PatternRule",
    "RedactionRule",
    "RewriteRule",
    # Scorer
    "ReputationRiskFilter",
    "assess",
    "score_overall",
    # Rewriter
    "CourtSafeRewriter",
    "RewriteOptions",
    "RewriteOutcome",
    "redact_sensitive_data",
    "rewrite",
    # Front matter
    "DISCLAIMER_BUILDERS",
    "DISTRIBUTION_LABELS",
    "MITIGATION_BUILDERS",
    "FrontMatterBlock",
    "build_decision_blocks",
    "build_disclaimer_block",
    "build_mitigation_block",
    "build_safety_disclaimers",
    "build_safety_front_matter",
    "distribution_label",
    "render_blocks",
    # Gate
    "SafetyGate",
    "build_blockers",
    "build_warnings",
    "run_safety_gate",
    # QA
    "SafetyQAContext",
    "SafetyQAIssue",
    "SafetyQAReport",
    "YearRange",
    "run_safety_qa",
]
