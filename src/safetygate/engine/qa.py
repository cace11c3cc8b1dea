"""
Report Safety QA

Hard assertions a rendered report must satisfy before it leaves the
system. Critical issues fail the report; warnings are advisory.
"""
from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Optional

from ..models import DistributionMode, RedactionField
from .patterns import REDACTION_RULES

CRITICAL = "critical"
WARNING = "warning"

TIMELINE_SLACK_YEARS = 2

# Same patterns the rewriter redacts with
_PII_PATTERNS = {rule.field: rule.regex for rule in REDACTION_RULES}
CNIC_RE = _PII_PATTERNS[RedactionField.CNIC]
PHONE_RE = _PII_PATTERNS[RedactionField.PHONE]
ADDRESS_RE = _PII_PATTERNS[RedactionField.ADDRESS]


@dataclass(frozen=True)
class YearRange:
    min: int
    max: int


@dataclass
class SafetyQAContext:
    """Facts about a rendered report."""
    mode: DistributionMode
    relationships_total: int = 0
    connections_total: int = 0
    court_mode: bool = False
    has_evidence: bool = False
    severe_claims: int = 0
    has_front_matter: bool = True
    has_disclaimer: bool = True
    raw_output: Optional[str] = None
    year_range: Optional[YearRange] = None
    case_year_range: Optional[YearRange] = None


@dataclass(frozen=True)
class SafetyQAIssue:
    code: str
    level: str
    message: str
    action: Optional[str] = None

    def to_dict(self) -> dict[str, Any]:
        result: dict[str, Any] = {"code": self.code, "level": self.level, "message": self.message}
        if self.action:
            result["action"] = self.action
        return result


@dataclass
class SafetyQAReport:
    passed: bool
    issues: list[SafetyQAIssue] = field(default_factory=list)

    @property
    def critical_issues(self) -> list[SafetyQAIssue]:
        return [i for i in self.issues if i.level == CRITICAL]

    def codes(self) -> list[str]:
        return [i.code for i in self.issues]

    def to_dict(self) -> dict[str, Any]:
        return {"passed": self.passed, "issues": [i.to_dict() for i in self.issues]}


def run_safety_qa(ctx: SafetyQAContext) -> SafetyQAReport:
    """Check a rendered report against the safety assertions."""
    issues: list[SafetyQAIssue] = []

    # Network consistency
    if ctx.relationships_total > 0 and ctx.connections_total == 0:
        issues.append(SafetyQAIssue(
            code="NET_ZERO",
            level=CRITICAL,
            message=f"{ctx.relationships_total} relationships exist but connections shows 0",
            action="Use relationship count or load graph snapshot",
        ))

    if not ctx.has_front_matter:
        issues.append(SafetyQAIssue(
            code="NO_FRONTMATTER",
            level=WARNING,
            message="Report missing front-matter blocks (Methodology, Definitions, Data Quality)",
        ))

    if not ctx.has_disclaimer:
        issues.append(SafetyQAIssue(
            code="NO_DISCLAIMER",
            level=WARNING,
            message="Report missing legal disclaimer",
        ))

    if ctx.court_mode and ctx.severe_claims > 0 and not ctx.has_evidence:
        issues.append(SafetyQAIssue(
            code="COURT_NO_EVIDENCE_SEVERE",
            level=CRITICAL,
            message=f"{ctx.severe_claims} severe claims without evidence annexures in court mode",
            action="Add evidence documents before generating court submission",
        ))

    # Public output must not leak PII
    if ctx.mode == DistributionMode.PUBLIC and ctx.raw_output:
        if CNIC_RE.search(ctx.raw_output):
            issues.append(SafetyQAIssue(
                "PII_CNIC", CRITICAL, "CNIC number detected in public-mode report"
            ))
        if PHONE_RE.search(ctx.raw_output):
            issues.append(SafetyQAIssue(
                "PII_PHONE", CRITICAL, "Phone number detected in public-mode report"
            ))
        if ADDRESS_RE.search(ctx.raw_output):
            issues.append(SafetyQAIssue(
                "PII_ADDRESS", WARNING, "Possible address detected in public-mode report"
            ))

    if ctx.year_range and ctx.case_year_range:
        if ctx.year_range.min < ctx.case_year_range.min - TIMELINE_SLACK_YEARS:
            issues.append(SafetyQAIssue(
                code="TIMELINE_EARLY",
                level=WARNING,
                message=(
                    f"Events found from {ctx.year_range.min} but case starts "
                    f"{ctx.case_year_range.min}"
                ),
            ))

    return SafetyQAReport(
        passed=not any(i.level == CRITICAL for i in issues),
        issues=issues,
    )
