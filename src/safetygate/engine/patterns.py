"""
SafetyGate Pattern Tables

Declarative, ordered rule tables for detection, rewriting and redaction.
New rules are additive: append a row, no code branches change.

Every pattern is bounded: gaps between anchor words use a bounded
quantifier over a bounded character class ([^.!?\\n]{0,200}), never an
open ``.*``, so no input can trigger catastrophic backtracking.

Tables:
- CRIMINAL_ALLEGATION_RULES   criminal wrongdoing stated as fact (claim units)
- INSTITUTIONAL_RULES         institutions accused as statement of fact
- CERTAINTY_RULES             absolute certainty markers
- INFLAMMATORY_RULES          labels only flagged when aimed at a named target
- SUB_JUDICE_RULES            guilt declared about matters before a court
- REDACTION_RULES             sensitive personal data (always CRITICAL)
- REWRITE_RULES               regex -> templated allegation-framed replacement
"""
from __future__ import annotations

import re
from dataclasses import dataclass
from re import Pattern

from ..models import RedactionField, RiskCategory, RiskLevel


def _rx(pattern: str, flags: int = re.IGNORECASE) -> Pattern[str]:
    return re.compile(pattern, flags)


# Bounded gap between two anchor phrases inside one sentence
_GAP = r"[^.!?\n]{0,200}?"

# Capitalized name of one to four words (case-sensitive inside an
# IGNORECASE pattern), or any single word
_NAME = r"((?-i:[A-Z][a-z]+)(?:[ \t]+(?-i:[A-Z][a-z]+)){0,3}|\w+)"


# =============================================================================
# Rule Types
# =============================================================================

@dataclass(frozen=True)
class PatternRule:
    """A detection pattern with its category, severity and rationale."""
    rule_id: str
    regex: Pattern[str]
    category: RiskCategory
    level: RiskLevel
    rationale: str


@dataclass(frozen=True)
class RewriteRule:
    """A regex with a templated replacement (``\\1`` back-references allowed)."""
    rule_id: str
    regex: Pattern[str]
    replacement: str
    reason: str


@dataclass(frozen=True)
class RedactionRule:
    """A sensitive-data pattern and the placeholder that replaces it."""
    rule_id: str
    field: RedactionField
    regex: Pattern[str]
    placeholder: str
    label: str


# =============================================================================
# Allegation / Opening / Severity Markers
# =============================================================================

ALLEGATION_MARKERS = _rx(
    r"\b(?:alleged(?:ly)?"
    r"|it\s+is\s+(?:alleged|submitted|respectfully\s+submitted)"
    r"|prima\s+facie"
    r"|appears?\s+(?:to\s+be|that)"
    r"|reportedly|purportedly"
    r"|subject\s+to\s+(?:proof|verification))\b"
)

COURT_OPENING_MARKERS = _rx(
    r"\b(?:may\s+it\s+please|it\s+is\s+(?:humbly|respectfully)\s+submitted)\b"
)

SEVERE_WORDS = _rx(
    r"\b(?:fraud|corruption|criminal|harassment|sabotage|torture"
    r"|extortion|kidnapping|murder|bribery)\b"
)

# Two to five capitalized tokens, optionally joined by connector words
NAMED_TARGET = re.compile(
    r"\b[A-Z][a-z]+(?:[ \t]+(?:(?:of|the|and|bin|bint|ibn)[ \t]+){0,2}[A-Z][a-z]+){1,4}\b"
)


# =============================================================================
# Detection Tables
# =============================================================================

CRIMINAL_ALLEGATION_RULES: tuple[PatternRule, ...] = (
    PatternRule(
        "CR01",
        _rx(
            r"\b(?:committed|perpetrated|carried\s+out|is\s+guilty\s+of|convicted\s+of)\s+"
            r"(?:fraud|corruption|murder|theft|kidnapping|extortion|bribery"
            r"|money\s+laundering|terrorism)"
        ),
        RiskCategory.UNVERIFIED_CRIMINAL_ALLEGATION,
        RiskLevel.CRITICAL,
        "Criminal wrongdoing asserted as fact without allegation framing",
    ),
    PatternRule(
        "CR02",
        _rx(
            r"\b(?:is|are|was|were)\s+(?:a\s+)?"
            r"(?:criminal|fraudster|terrorist|murderer|thief|corrupt|crook|traitor)\b"
        ),
        RiskCategory.DEFAMATION,
        RiskLevel.CRITICAL,
        "Criminal label attached to a person as statement of fact",
    ),
    PatternRule(
        "CR03",
        _rx(
            r"\b(?:guilty|convicted|proved|confirmed|undeniable|established)\b"
            + _GAP
            + r"\b(?:fraud|corruption|harassment|abuse|crime)"
        ),
        RiskCategory.UNVERIFIED_CRIMINAL_ALLEGATION,
        RiskLevel.HIGH,
        "Guilt for wrongdoing presented as established",
    ),
)

INSTITUTIONAL_RULES: tuple[PatternRule, ...] = (
    PatternRule(
        "IN01",
        _rx(
            r"\b(?:NADRA|FIA|NAB|ISI|Military\s+Intelligence|Police|CDA|Army|Government)\b"
            + _GAP
            + r"\b(?:corrupt|criminal|mafia|involved\s+in|complicit|perpetrated)"
        ),
        RiskCategory.INSTITUTIONAL_ACCUSATION,
        RiskLevel.HIGH,
        "Institution accused of wrongdoing as statement of fact",
    ),
    PatternRule(
        "IN02",
        _rx(
            r"\b(?:state\s+terrorism|institutional\s+corruption|systemic\s+abuse"
            r"|government\s+conspiracy)"
        ),
        RiskCategory.INSTITUTIONAL_ACCUSATION,
        RiskLevel.HIGH,
        "Systemic institutional wrongdoing asserted as fact",
    ),
)

CERTAINTY_RULES: tuple[PatternRule, ...] = (
    PatternRule(
        "CE01",
        _rx(
            r"\b(?:proved|confirmed|undeniable|indisputable|conclusively"
            r"|without\s+doubt|irrefutable)\b"
        ),
        RiskCategory.DEFAMATION,
        RiskLevel.HIGH,
        "Absolute certainty marker used without evidence reference",
    ),
)

INFLAMMATORY_RULES: tuple[PatternRule, ...] = (
    PatternRule(
        "IF01",
        _rx(r"\b(?:mafia|crooks?|traitors?|blackmailers?|goons?|thugs?|gangsters?)\b"),
        RiskCategory.INCITEMENT_OR_HARASSMENT,
        RiskLevel.HIGH,
        "Inflammatory label targeting named person/entity",
    ),
    PatternRule(
        "IF02",
        _rx(r"\b(?:vendetta|sabotage|hijacked|abducted|terrorized|extorted)\b"),
        RiskCategory.DEFAMATION,
        RiskLevel.MEDIUM,
        "Inflammatory characterisation targeting named person/entity",
    ),
)

SUB_JUDICE_RULES: tuple[PatternRule, ...] = (
    PatternRule(
        "SJ01",
        _rx(
            r"\b(?:pending\s+(?:before|in)\s+(?:the\s+)?(?:court|tribunal)"
            r"|sub[\s-]?judice|ongoing\s+(?:trial|proceedings?))\b"
            + _GAP
            + r"\b(?:guilty|criminal|corrupt|fraudster)"
        ),
        RiskCategory.SUB_JUDICE,
        RiskLevel.CRITICAL,
        "Guilt declaration about matter that is sub judice",
    ),
)


# =============================================================================
# Redaction Table
# =============================================================================

# Order matters: CNIC before phone so a CNIC never half-matches as a phone.
REDACTION_RULES: tuple[RedactionRule, ...] = (
    RedactionRule(
        "REDACT_CNIC",
        RedactionField.CNIC,
        re.compile(r"\b\d{5}-\d{7}-\d\b"),
        "[CNIC REDACTED]",
        "CNIC number",
    ),
    RedactionRule(
        "REDACT_PHONE",
        RedactionField.PHONE,
        re.compile(r"(?<![\w+])(?:\+92|0)\d{3}[ \t-]?\d{7}\b"),
        "[PHONE REDACTED]",
        "phone number",
    ),
    RedactionRule(
        "REDACT_ADDR",
        RedactionField.ADDRESS,
        _rx(
            r"\b(?:House|Plot|Flat|Apartment)\s+(?:No\.?\s{0,3})?\d{1,6}[A-Z]?(?:/\d{1,6})?"
            r"[,\s]{1,4}(?:Street|Block|Sector|Phase)\s+\w+"
        ),
        "[ADDRESS REDACTED]",
        "structured address",
    ),
    RedactionRule(
        "REDACT_BANK",
        RedactionField.BANK_NUMBER,
        re.compile(r"\b\d{4}[ \t-]?\d{4}[ \t-]?\d{4}[ \t-]?\d{4}\b"),
        "[BANK NUMBER REDACTED]",
        "card-like number",
    ),
)

PII_FIELDS: tuple[RedactionField, ...] = tuple(r.field for r in REDACTION_RULES)


# =============================================================================
# Rewrite Table
# =============================================================================

REWRITE_RULES: tuple[RewriteRule, ...] = (
    RewriteRule(
        "RW01",
        _rx(_NAME + r"\s+committed\s+fraud\b"),
        r"it is alleged that \1 engaged in irregular conduct",
        "Criminal allegation stated as fact",
    ),
    RewriteRule(
        "RW02",
        _rx(_NAME + r"\s+(?:is|are|was|were)\s+corrupt\b"),
        r"\1 is alleged to have engaged in corrupt practices",
        "Corruption asserted as fact",
    ),
    RewriteRule(
        "RW03",
        _rx(_NAME + r"\s+(?:is|are|was|were)\s+(?:a\s+)?criminal\b"),
        r"\1 is alleged to have engaged in unlawful conduct",
        "Criminal label stated as fact",
    ),
    RewriteRule("RW04", _rx(r"\billegal\b"), "allegedly unlawful",
                "Legality not judicially determined"),
    RewriteRule("RW05", _rx(r"\bfraud\b"), "alleged irregularity",
                "Fraud not adjudicated"),
    RewriteRule("RW06", _rx(r"\bcorruption\b"), "alleged corruption",
                "Corruption not adjudicated"),
    RewriteRule("RW07", _rx(r"\bsabotage\b"), "alleged adverse impact",
                "Inflammatory language"),
    RewriteRule("RW08", _rx(r"\bharassment\b"), "alleged harassment",
                "Not judicially determined"),
    RewriteRule(
        "RW09",
        _rx(r"\bcriminal\s+conspiracy\b"),
        "potential criminal conspiracy (subject to judicial determination)",
        "Conspiracy not proved",
    ),
    RewriteRule("RW10", _rx(r"\bfabricated\s+evidence\b"), "alleged fabrication of evidence",
                "Fabrication not adjudicated"),
    RewriteRule("RW11", _rx(r"\bmafia\b"), "alleged organized network",
                "Inflammatory label"),
    RewriteRule("RW12", _rx(r"\bcrooks?\b"), "persons under scrutiny",
                "Defamatory label"),
    RewriteRule("RW13", _rx(r"\btraitors?\b"), "persons alleged to have acted contrary to duty",
                "Defamatory label"),
    RewriteRule("RW14", _rx(r"\bblackmailers?\b"), "persons alleged to have engaged in coercion",
                "Defamatory label"),
)
