"""
SafetyGate Court-Safe Rewriter

Applies a detection result's rewrite plan and the mode-dependent safety
passes to produce court-safe text plus an audit log of every edit.

Steps, strictly in order (each works on the previous step's output):
1. Plan transformations, in descending span-start order
2. Sensitive-data redaction (every mode)
3. Allegation framing of severe, unhedged sentences (court/controlled legal)
4. Court opening phrase (court mode with a court pair)

The rewriter never raises on string input: a transformation whose span has
drifted degrades to a first-occurrence replacement of its original text.
"""
from __future__ import annotations

import logging
import re
from dataclasses import dataclass, field
from typing import Any, Optional, Sequence, Union

from ..models import (
    CourtStyle,
    DefamationDetectionResult,
    DistributionMode,
    FilingType,
    PhraseKey,
    RewritePlan,
    RewriteTransformation,
)
from ..phrases import DEFAULT_LIBRARY, PhraseLibrary
from .patterns import COURT_OPENING_MARKERS, REDACTION_RULES, SEVERE_WORDS, RedactionRule
from .targets import has_allegation_frame

logger = logging.getLogger(__name__)

ALLEGE_PREFIX = "It is alleged that "
OPENING_WINDOW = 200
NO_OPENING = "(none)"

REDACTION_REASON = "Sensitive personal data"
ALLEGE_WRAP_RULE = "COURT_ALLEGE_WRAP"
ALLEGE_WRAP_REASON = "Court-safe allegation framing"
OPENING_RULE = "COURT_OPENING"
OPENING_REASON = "Court submission opening prepended"

# Sentence boundaries; the captured whitespace keeps the original separators
_SENTENCE_BREAK = re.compile(r"(?<=[.!?])(\s+)")

_LEGAL_MODES = (DistributionMode.COURT_MODE, DistributionMode.CONTROLLED_LEGAL)


# =============================================================================
# Options / Outcome
# =============================================================================

@dataclass(frozen=True)
class RewriteOptions:
    """Mode parameters for one rewrite call."""
    mode: DistributionMode = DistributionMode.CONTROLLED_LEGAL
    court_style: Optional[Union[CourtStyle, str]] = None
    filing_type: Optional[Union[FilingType, str]] = None

    @property
    def has_court_pair(self) -> bool:
        return bool(self.court_style) and bool(self.filing_type)


@dataclass
class RewriteOutcome:
    """Rewritten text and the ordered audit log of applied transformations."""
    rewritten_text: str
    transformations: list[RewriteTransformation] = field(default_factory=list)

    def rule_ids(self) -> list[str]:
        return [t.rule_id for t in self.transformations]

    def to_dict(self) -> dict[str, Any]:
        return {
            "rewritten_text": self.rewritten_text,
            "transformations": [t.to_dict() for t in self.transformations],
        }


# =============================================================================
# Rewriter
# =============================================================================

@dataclass
class CourtSafeRewriter:
    """
    Span-safe rewriter with redaction, allegation framing and court openings.

    Usage:
        rewriter = CourtSafeRewriter()
        outcome = rewriter.rewrite(
            text,
            RewriteOptions(
                mode=DistributionMode.COURT_MODE,
                court_style=CourtStyle.IHC,
                filing_type=FilingType.WRIT,
            ),
            detection,
        )
        print(outcome.rewritten_text)
    """
    phrase_library: PhraseLibrary = DEFAULT_LIBRARY
    redaction_rules: Sequence[RedactionRule] = REDACTION_RULES

    def rewrite(
        self,
        text: str,
        options: Optional[RewriteOptions] = None,
        detection: Optional[DefamationDetectionResult] = None,
    ) -> RewriteOutcome:
        """Run all rewrite steps over ``text`` and return the outcome."""
        options = options or RewriteOptions()
        text = text or ""
        log: list[RewriteTransformation] = []

        if detection is not None:
            text = self.apply_plan(text, detection.rewrite_plan, log)

        text = self.redact(text, log)

        if options.mode in _LEGAL_MODES:
            text = self.frame_allegations(text, log)

        if options.mode == DistributionMode.COURT_MODE and options.has_court_pair:
            text = self.prepend_opening(text, options.court_style, options.filing_type, log)

        return RewriteOutcome(rewritten_text=text, transformations=log)

    # -------------------------------------------------------------------------
    # Step 1: rewrite plan
    # -------------------------------------------------------------------------

    def apply_plan(
        self,
        text: str,
        plan: RewritePlan,
        log: list[RewriteTransformation],
    ) -> str:
        """
        Apply planned transformations in descending span-start order.

        A span is spliced in place only if it lies wholly below every region
        already edited and the live text still holds ``from_text`` there.
        """
        # Lowest offset touched so far; spans ending above it have drifted
        floor = len(text)
        ordered = sorted(plan.transformations, key=lambda t: t.span.start, reverse=True)
        for transformation in ordered:
            span = transformation.span
            if (
                0 <= span.start <= span.end <= floor
                and text[span.start:span.end] == transformation.from_text
            ):
                text = text[:span.start] + transformation.to_text + text[span.end:]
                floor = span.start
            else:
                logger.debug(
                    "Span %d-%d for %s no longer matches; first-occurrence replace",
                    span.start, span.end, transformation.rule_id,
                )
                index = text.find(transformation.from_text) if transformation.from_text else -1
                if index >= 0:
                    end = index + len(transformation.from_text)
                    text = text[:index] + transformation.to_text + text[end:]
                    floor = min(floor, index)
            log.append(transformation)
        return text

    # -------------------------------------------------------------------------
    # Step 2: redaction
    # -------------------------------------------------------------------------

    def redact(self, text: str, log: Optional[list[RewriteTransformation]] = None) -> str:
        """Replace sensitive data with bracketed placeholders (idempotent)."""
        for rule in self.redaction_rules:

            def replace(match: re.Match, rule: RedactionRule = rule) -> str:
                if log is not None:
                    log.append(
                        RewriteTransformation(
                            rule_id=rule.rule_id,
                            from_text=match.group(0),
                            to_text=rule.placeholder,
                            reason=REDACTION_REASON,
                        )
                    )
                return rule.placeholder

            text = rule.regex.sub(replace, text)
        return text

    # -------------------------------------------------------------------------
    # Step 3: allegation framing
    # -------------------------------------------------------------------------

    def frame_allegations(self, text: str, log: list[RewriteTransformation]) -> str:
        """Prefix severe, unhedged sentences with an allegation frame."""
        pieces = _SENTENCE_BREAK.split(text)
        # Even indexes are sentences, odd indexes the captured separators
        for i in range(0, len(pieces), 2):
            sentence = pieces[i]
            body = sentence.lstrip()
            if not body or not SEVERE_WORDS.search(body) or has_allegation_frame(body):
                continue
            lead = sentence[:len(sentence) - len(body)]
            framed = ALLEGE_PREFIX + body[0].lower() + body[1:]
            pieces[i] = lead + framed
            log.append(
                RewriteTransformation(
                    rule_id=ALLEGE_WRAP_RULE,
                    from_text=body,
                    to_text=framed,
                    reason=ALLEGE_WRAP_REASON,
                )
            )
        return "".join(pieces)

    # -------------------------------------------------------------------------
    # Step 4: court opening
    # -------------------------------------------------------------------------

    def prepend_opening(
        self,
        text: str,
        court_style: Union[CourtStyle, str, None],
        filing_type: Union[FilingType, str, None],
        log: list[RewriteTransformation],
    ) -> str:
        """Prepend ``submission_open`` unless the text already opens formally."""
        if COURT_OPENING_MARKERS.search(text[:OPENING_WINDOW]):
            return text
        opening = self.phrase_library.first(court_style, filing_type, PhraseKey.SUBMISSION_OPEN)
        if not opening:
            return text
        log.append(
            RewriteTransformation(
                rule_id=OPENING_RULE,
                from_text=NO_OPENING,
                to_text=opening,
                reason=OPENING_REASON,
            )
        )
        return f"{opening}\n\n{text}"


# =============================================================================
# Convenience Functions
# =============================================================================

def rewrite(
    text: str,
    options: Optional[RewriteOptions] = None,
    detection: Optional[DefamationDetectionResult] = None,
) -> RewriteOutcome:
    """Rewrite ``text`` with the built-in phrase library."""
    return CourtSafeRewriter().rewrite(text, options, detection)


def redact_sensitive_data(text: str) -> str:
    """Redact CNIC, phone, address and card-like numbers from ``text``."""
    return CourtSafeRewriter().redact(text or "")
