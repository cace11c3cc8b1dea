"""
SafetyGate Enumerations

All enumeration types used throughout the safety gate.
Organized by domain area for clarity.

All enums inherit from (str, Enum) for JSON serialization compatibility.
"""
from __future__ import annotations

from enum import Enum


# =============================================================================
# Risk Classification
# =============================================================================

class RiskCategory(str, Enum):
    """Categories of reputation/defamation risk a signal can carry."""
    UNVERIFIED_CRIMINAL_ALLEGATION = "unverified_criminal_allegation"
    INSTITUTIONAL_ACCUSATION = "institutional_accusation"
    DEFAMATION = "defamation"
    INCITEMENT_OR_HARASSMENT = "incitement_or_harassment"
    SENSITIVE_PERSONAL_DATA = "sensitive_personal_data"
    SUB_JUDICE = "sub_judice"


class RiskLevel(str, Enum):
    """Severity of a signal or of an overall decision."""
    LOW = "LOW"
    MEDIUM = "MEDIUM"
    HIGH = "HIGH"
    CRITICAL = "CRITICAL"

    @property
    def rank(self) -> int:
        """Numeric rank for ordering comparisons (LOW=0 .. CRITICAL=3)."""
        return _RISK_RANK[self]

    @property
    def is_severe(self) -> bool:
        """HIGH or CRITICAL."""
        return self in (RiskLevel.HIGH, RiskLevel.CRITICAL)


_RISK_RANK = {
    RiskLevel.LOW: 0,
    RiskLevel.MEDIUM: 1,
    RiskLevel.HIGH: 2,
    RiskLevel.CRITICAL: 3,
}


# =============================================================================
# Distribution
# =============================================================================

class DistributionMode(str, Enum):
    """Intended audience/channel for the output text."""
    PUBLIC = "public"
    CONTROLLED_LEGAL = "controlled_legal"
    RESEARCH_ONLY = "research_only"
    COURT_MODE = "court_mode"

    @property
    def is_legal(self) -> bool:
        """Modes that force allegation language and legal disclaimers."""
        return self in (DistributionMode.COURT_MODE, DistributionMode.CONTROLLED_LEGAL)


# =============================================================================
# Phrase Library Axes
# =============================================================================

class CourtStyle(str, Enum):
    """Jurisdiction style of the target court."""
    IHC = "IHC"      # Islamabad High Court
    SHC = "SHC"      # Sindh High Court
    LHC = "LHC"      # Lahore High Court
    PHC = "PHC"      # Peshawar High Court
    BHC = "BHC"      # Balochistan High Court
    AJKHC = "AJKHC"  # Azad Jammu & Kashmir High Court
    GBCC = "GBCC"    # Gilgit-Baltistan Chief Court
    SC = "SC"        # Supreme Court


class FilingType(str, Enum):
    """Kind of filing the text is destined for."""
    WRIT = "writ"
    CRIMINAL_MISC = "criminal_misc"
    APPEAL = "appeal"
    REPRESENTATION = "representation"


class PhraseKey(str, Enum):
    """Keys of the canonical boilerplate phrases."""
    SUBMISSION_OPEN = "submission_open"
    IT_IS_RESPECTFULLY_SUBMITTED = "it_is_respectfully_submitted"
    PRIMA_FACIE = "prima_facie"
    ALLEGATION_SOFTENER = "allegation_softener"
    SUBJECT_TO_PROOF = "subject_to_proof"
    WITHOUT_PREJUDICE = "without_prejudice"
    NO_JUDICIAL_DETERMINATION = "no_judicial_determination"
    DATA_LIMITATIONS = "data_limitations"
    RELIEF_PRAYED = "relief_prayed"
    VERIFICATION = "verification"


# =============================================================================
# Mitigations
# =============================================================================

class MitigationType(str, Enum):
    """Corrective actions the scorer can require."""
    ADD_DISCLAIMER = "add_disclaimer"
    FORCE_ALLEGATION_LANGUAGE = "force_allegation_language"
    REQUIRE_EVIDENCE = "require_evidence"
    REMOVE_OR_REDACT = "remove_or_redact"
    RESTRICT_DISTRIBUTION = "restrict_distribution"
    REQUIRE_HUMAN_REVIEW = "require_human_review"


class DisclaimerKey(str, Enum):
    """Disclaimer blocks an add_disclaimer mitigation can reference."""
    NO_JUDICIAL_DETERMINATION = "no_judicial_determination"
    DATA_LIMITATIONS = "data_limitations"
    METHODOLOGY = "methodology"
    LOD_APPENDIX = "lod_appendix"                # List of documents
    KEY_ISSUES_APPENDIX = "key_issues_appendix"


class RedactionField(str, Enum):
    """Field classes a remove_or_redact mitigation can name."""
    CNIC = "cnic"
    PHONE = "phone"
    ADDRESS = "address"
    BANK_NUMBER = "bank_number"
    NAMES_UNLESS_PUBLIC_RECORD = "names_unless_public_record"
