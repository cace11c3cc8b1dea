"""
SafetyGate Front-Matter / Disclaimer Builder

Pure, format-agnostic builders for the methodology, distribution and legal
disclaimer blocks a report renderer embeds around the rewritten text.

Every DisclaimerKey and every MitigationType the scorer can emit has a
builder here (DISCLAIMER_BUILDERS / MITIGATION_BUILDERS), so a decision
never carries a mitigation the renderer cannot show.
"""
from __future__ import annotations

from dataclasses import dataclass
from typing import Callable, Iterable, Optional, Union

from ..models import (
    CourtStyle,
    DisclaimerKey,
    DistributionMode,
    FilingType,
    MitigationType,
    PhraseKey,
    RedactionField,
    ReputationMitigation,
    ReputationRiskDecision,
)
from ..phrases import DEFAULT_LIBRARY, FALLBACK_PAIR, PhraseLibrary

StyleArg = Union[CourtStyle, str, None]
FilingArg = Union[FilingType, str, None]


# =============================================================================
# Block
# =============================================================================

@dataclass(frozen=True)
class FrontMatterBlock:
    """A titled run of plain-text paragraphs."""
    key: str
    title: str
    paragraphs: tuple[str, ...] = ()

    def render(self) -> str:
        lines = [self.title, "=" * len(self.title)]
        for paragraph in self.paragraphs:
            lines.append("")
            lines.append(paragraph)
        return "\n".join(lines)


def render_blocks(blocks: Iterable[FrontMatterBlock]) -> str:
    """Render blocks separated by a blank line."""
    return "\n\n".join(block.render() for block in blocks)


# =============================================================================
# Static Text
# =============================================================================

PROCESSING_STEPS = (
    "Entity canonicalization (name variant consolidation)",
    "Event deduplication (85% similarity threshold)",
    "Neutral language enforcement (court-safe allegation framing)",
    "Sensitive data redaction (CNIC, phone, address patterns)",
    "Reputation risk filtering (defamation/privacy signal detection)",
)

DISTRIBUTION_LABELS = {
    DistributionMode.COURT_MODE: "Restricted - Court Filing Only",
    DistributionMode.CONTROLLED_LEGAL: "Controlled Legal Distribution",
    DistributionMode.RESEARCH_ONLY: "Research Only",
    DistributionMode.PUBLIC: "Public",
}

LEGAL_DISCLAIMER_CLAUSES = (
    "This report presents analytical findings only. It does not constitute a judicial "
    "determination or adjudication of any allegation.",
    "All allegations remain subject to due process. No person named herein is deemed "
    "guilty unless adjudicated by a court of competent jurisdiction.",
    "This report does not constitute legal advice. Independent counsel is recommended "
    "before reliance.",
    "The publisher accepts no liability for consequences arising from use or misuse "
    "of this report.",
    "Sensitive personal data has been redacted where detected. If any remains, it is "
    "inadvertent and should not be further disseminated.",
)

COURT_COUNSEL_CLAUSE = (
    "Court filings must be reviewed by qualified counsel before submission. This "
    "document is a draft analytical product, not a final legal filing."
)

REDACTION_LABELS = {
    RedactionField.CNIC: "CNIC numbers",
    RedactionField.PHONE: "phone numbers",
    RedactionField.ADDRESS: "residential addresses",
    RedactionField.BANK_NUMBER: "bank and card numbers",
    RedactionField.NAMES_UNLESS_PUBLIC_RECORD: "names not already on the public record",
}


def distribution_label(mode: DistributionMode) -> str:
    return DISTRIBUTION_LABELS.get(DistributionMode(mode), "Public")


def _pair(court_style: StyleArg, filing_type: FilingArg) -> tuple[StyleArg, FilingArg]:
    if court_style and filing_type:
        return court_style, filing_type
    return FALLBACK_PAIR


# =============================================================================
# Front Matter
# =============================================================================

def build_safety_front_matter(
    mode: DistributionMode,
    court_style: StyleArg = None,
    filing_type: FilingArg = None,
    case_title: Optional[str] = None,
    event_count: int = 0,
    source_count: int = 0,
    library: Optional[PhraseLibrary] = None,
) -> list[FrontMatterBlock]:
    """
    Methodology and distribution blocks for a report.

    In court mode with a court pair the methodology block carries a court
    filing note built from the ``no_judicial_determination`` phrase.
    """
    library = library or DEFAULT_LIBRARY
    mode = DistributionMode(mode)

    scope = "This report is generated from the case database"
    if case_title:
        scope += f" for {case_title}"
    scope += (
        f", covering {event_count:,} events and {source_count:,} evidence sources."
    )
    paragraphs = [
        scope,
        "Processing Applied:\n" + "\n".join(f"- {step}" for step in PROCESSING_STEPS),
    ]
    if mode == DistributionMode.COURT_MODE and court_style and filing_type:
        note = library.first(court_style, filing_type, PhraseKey.NO_JUDICIAL_DETERMINATION)
        paragraphs.append(f"Court Filing Note: {note}")

    return [
        FrontMatterBlock("methodology", "Methodology & Scope", tuple(paragraphs)),
        FrontMatterBlock(
            "distribution", "Distribution", (distribution_label(mode),)
        ),
    ]


def build_safety_disclaimers(mode: DistributionMode) -> FrontMatterBlock:
    """Numbered legal disclaimer; court mode adds the counsel-review clause."""
    clauses = list(LEGAL_DISCLAIMER_CLAUSES)
    if DistributionMode(mode) == DistributionMode.COURT_MODE:
        clauses.append(COURT_COUNSEL_CLAUSE)
    return FrontMatterBlock(
        "legal_disclaimer",
        "Legal Disclaimer & Safety Notice",
        tuple(f"{i}. {clause}" for i, clause in enumerate(clauses, start=1)),
    )


# =============================================================================
# Disclaimer Blocks
# =============================================================================

DisclaimerBuilder = Callable[[DistributionMode, StyleArg, FilingArg, PhraseLibrary], FrontMatterBlock]


def _no_judicial_determination(mode, court_style, filing_type, library):
    style, filing = _pair(court_style, filing_type)
    return FrontMatterBlock(
        DisclaimerKey.NO_JUDICIAL_DETERMINATION.value,
        "No Judicial Determination",
        (library.first(style, filing, PhraseKey.NO_JUDICIAL_DETERMINATION),),
    )


def _data_limitations(mode, court_style, filing_type, library):
    style, filing = _pair(court_style, filing_type)
    return FrontMatterBlock(
        DisclaimerKey.DATA_LIMITATIONS.value,
        "Data Limitations",
        (library.first(style, filing, PhraseKey.DATA_LIMITATIONS),),
    )


def _methodology(mode, court_style, filing_type, library):
    return FrontMatterBlock(
        DisclaimerKey.METHODOLOGY.value,
        "Methodology",
        (
            "Findings were produced by deterministic, rule-based processing:\n"
            + "\n".join(f"- {step}" for step in PROCESSING_STEPS),
        ),
    )


def _lod_appendix(mode, court_style, filing_type, library):
    return FrontMatterBlock(
        DisclaimerKey.LOD_APPENDIX.value,
        "List of Documents",
        (
            "A List of Documents relied upon is annexed to this submission. Each "
            "allegation is cross-referenced to the annexure supporting it.",
        ),
    )


def _key_issues_appendix(mode, court_style, filing_type, library):
    style, filing = _pair(court_style, filing_type)
    return FrontMatterBlock(
        DisclaimerKey.KEY_ISSUES_APPENDIX.value,
        "Key Issues for Determination",
        (
            "The key issues arising for determination are set out in the annexed "
            "appendix, "
            + library.first(style, filing, PhraseKey.WITHOUT_PREJUDICE)
            + ".",
        ),
    )


DISCLAIMER_BUILDERS: dict[DisclaimerKey, DisclaimerBuilder] = {
    DisclaimerKey.NO_JUDICIAL_DETERMINATION: _no_judicial_determination,
    DisclaimerKey.DATA_LIMITATIONS: _data_limitations,
    DisclaimerKey.METHODOLOGY: _methodology,
    DisclaimerKey.LOD_APPENDIX: _lod_appendix,
    DisclaimerKey.KEY_ISSUES_APPENDIX: _key_issues_appendix,
}


def build_disclaimer_block(
    key: DisclaimerKey,
    mode: DistributionMode = DistributionMode.CONTROLLED_LEGAL,
    court_style: StyleArg = None,
    filing_type: FilingArg = None,
    library: Optional[PhraseLibrary] = None,
) -> FrontMatterBlock:
    """Renderable block for one disclaimer key."""
    builder = DISCLAIMER_BUILDERS[DisclaimerKey(key)]
    return builder(DistributionMode(mode), court_style, filing_type, library or DEFAULT_LIBRARY)


# =============================================================================
# Mitigation Blocks
# =============================================================================

def _disclaimer_mitigation(mitigation, mode, court_style, filing_type, library):
    key = mitigation.key or DisclaimerKey.NO_JUDICIAL_DETERMINATION
    return build_disclaimer_block(key, mode, court_style, filing_type, library)


def _allegation_language(mitigation, mode, court_style, filing_type, library):
    style, filing = _pair(court_style, filing_type)
    return FrontMatterBlock(
        MitigationType.FORCE_ALLEGATION_LANGUAGE.value,
        "Allegation Framing",
        (
            "Statements of wrongdoing in this document are framed as allegations, "
            + library.first(style, filing, PhraseKey.SUBJECT_TO_PROOF)
            + ".",
        ),
    )


def _require_evidence(mitigation, mode, court_style, filing_type, library):
    minimum = mitigation.min or 1
    targets = ", ".join(mitigation.for_targets) or "all named persons"
    return FrontMatterBlock(
        MitigationType.REQUIRE_EVIDENCE.value,
        "Evidence Required",
        (
            f"At least {minimum} supporting evidence reference(s) must be linked "
            f"before filing for: {targets}.",
        ),
    )


def _remove_or_redact(mitigation, mode, court_style, filing_type, library):
    labels = ", ".join(REDACTION_LABELS[f] for f in mitigation.fields) or "sensitive data"
    return FrontMatterBlock(
        MitigationType.REMOVE_OR_REDACT.value,
        "Redaction Notice",
        (f"The following must be removed or redacted before distribution: {labels}.",),
    )


def _restrict_distribution(mitigation, mode, court_style, filing_type, library):
    allowed = ", ".join(distribution_label(m) for m in mitigation.allowed_modes)
    return FrontMatterBlock(
        MitigationType.RESTRICT_DISTRIBUTION.value,
        "Distribution Restricted",
        (f"This document may only be distributed as: {allowed or 'none'}.",),
    )


def _human_review(mitigation, mode, court_style, filing_type, library):
    role = mitigation.role or "admin"
    return FrontMatterBlock(
        MitigationType.REQUIRE_HUMAN_REVIEW.value,
        "Human Review Required",
        (f"Distribution is blocked until a reviewer with the '{role}' role signs off.",),
    )


MitigationBuilder = Callable[
    [ReputationMitigation, DistributionMode, StyleArg, FilingArg, PhraseLibrary],
    FrontMatterBlock,
]

MITIGATION_BUILDERS: dict[MitigationType, MitigationBuilder] = {
    MitigationType.ADD_DISCLAIMER: _disclaimer_mitigation,
    MitigationType.FORCE_ALLEGATION_LANGUAGE: _allegation_language,
    MitigationType.REQUIRE_EVIDENCE: _require_evidence,
    MitigationType.REMOVE_OR_REDACT: _remove_or_redact,
    MitigationType.RESTRICT_DISTRIBUTION: _restrict_distribution,
    MitigationType.REQUIRE_HUMAN_REVIEW: _human_review,
}


def build_mitigation_block(
    mitigation: ReputationMitigation,
    mode: DistributionMode = DistributionMode.CONTROLLED_LEGAL,
    court_style: StyleArg = None,
    filing_type: FilingArg = None,
    library: Optional[PhraseLibrary] = None,
) -> FrontMatterBlock:
    """Renderable block for one required mitigation."""
    builder = MITIGATION_BUILDERS[MitigationType(mitigation.type)]
    return builder(
        mitigation, DistributionMode(mode), court_style, filing_type, library or DEFAULT_LIBRARY
    )


def build_decision_blocks(
    decision: ReputationRiskDecision,
    mode: DistributionMode,
    court_style: StyleArg = None,
    filing_type: FilingArg = None,
    library: Optional[PhraseLibrary] = None,
) -> list[FrontMatterBlock]:
    """One block per required mitigation, in decision order."""
    return [
        build_mitigation_block(m, mode, court_style, filing_type, library)
        for m in decision.required_mitigations
    ]
