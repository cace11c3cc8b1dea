"""
SafetyGate Phrase Library

Deterministic court-safe boilerplate phrases keyed by
(court style x filing type x phrase key).

Resolution is a flat two-level merge:
1. DEFAULT_PHRASES - one or more alternative wordings per key
2. COURT_OVERRIDES - sparse per-(style, filing) replacements

An override replaces only the keys it defines; every other key keeps the
default alternatives. The first alternative is the canonical choice for
callers that need a single string.

The built-in library is computed once at import and never mutated.
Override packs loaded at runtime produce a new library via
PhraseLibrary.with_pack().
"""
from __future__ import annotations

import logging
from dataclasses import dataclass, field
from types import MappingProxyType
from typing import Mapping, Optional, Sequence, Union

from ..models import CourtStyle, FilingType, PhraseKey

logger = logging.getLogger(__name__)

PhraseSet = Mapping[PhraseKey, tuple[str, ...]]
CourtPair = tuple[CourtStyle, FilingType]

FALLBACK_PAIR: CourtPair = (CourtStyle.IHC, FilingType.WRIT)


# =============================================================================
# Default Phrases
# =============================================================================

DEFAULT_PHRASES: dict[PhraseKey, tuple[str, ...]] = {
    PhraseKey.SUBMISSION_OPEN: (
        "May it please this Honourable Court,",
        "It is humbly submitted before this Honourable Court that,",
    ),
    PhraseKey.IT_IS_RESPECTFULLY_SUBMITTED: (
        "It is respectfully submitted that",
        "It is humbly submitted that",
        "The petitioner respectfully submits that",
    ),
    PhraseKey.PRIMA_FACIE: (
        "prima facie",
        "on the face of the record",
        "as appears from the available material",
    ),
    PhraseKey.ALLEGATION_SOFTENER: (
        "it is alleged that",
        "it appears that",
        "it is submitted that",
        "according to the available record",
        "as per the petitioner's case",
    ),
    PhraseKey.SUBJECT_TO_PROOF: (
        "subject to proof and verification",
        "subject to further evidence",
        "as may be established during trial",
    ),
    PhraseKey.WITHOUT_PREJUDICE: (
        "without prejudice to the rights of the parties",
        "without prejudice to any rights or claims",
    ),
    PhraseKey.NO_JUDICIAL_DETERMINATION: (
        "This submission does not constitute a judicial determination of any fact alleged herein.",
        "The facts stated herein are based on the petitioner's instructions and available "
        "documentary evidence, and remain subject to judicial scrutiny.",
    ),
    PhraseKey.DATA_LIMITATIONS: (
        "The data presented herein is derived from case records and analytical tools. "
        "Independent verification is recommended.",
        "Findings are analytical in nature and should not be treated as conclusive evidence "
        "without independent verification.",
    ),
    PhraseKey.RELIEF_PRAYED: (
        "In view of the foregoing, it is most respectfully prayed that this Honourable Court "
        "may be pleased to:",
        "The petitioner therefore humbly prays that this Honourable Court may graciously:",
    ),
    PhraseKey.VERIFICATION: (
        "I solemnly affirm and declare that the contents of this submission are true and "
        "correct to the best of my knowledge and belief, and nothing material has been "
        "concealed therefrom.",
    ),
}


# =============================================================================
# Court Overrides
# =============================================================================

COURT_OVERRIDES: dict[CourtPair, dict[PhraseKey, tuple[str, ...]]] = {
    (CourtStyle.SC, FilingType.WRIT): {
        PhraseKey.SUBMISSION_OPEN: (
            "May it please this Honourable Supreme Court of Pakistan,",
        ),
        PhraseKey.RELIEF_PRAYED: (
            "In light of the above submissions, it is most humbly prayed that this "
            "Honourable Supreme Court may be pleased to:",
        ),
    },
    (CourtStyle.SC, FilingType.APPEAL): {
        PhraseKey.SUBMISSION_OPEN: (
            "May it please this Honourable Supreme Court of Pakistan,",
            "Before this Apex Court, it is respectfully submitted that,",
        ),
    },
    (CourtStyle.IHC, FilingType.WRIT): {
        PhraseKey.SUBMISSION_OPEN: ("May it please this Honourable Islamabad High Court,",),
    },
    (CourtStyle.SHC, FilingType.WRIT): {
        PhraseKey.SUBMISSION_OPEN: ("May it please this Honourable Sindh High Court,",),
    },
    (CourtStyle.LHC, FilingType.WRIT): {
        PhraseKey.SUBMISSION_OPEN: ("May it please this Honourable Lahore High Court,",),
    },
    (CourtStyle.PHC, FilingType.WRIT): {
        PhraseKey.SUBMISSION_OPEN: ("May it please this Honourable Peshawar High Court,",),
    },
    (CourtStyle.BHC, FilingType.WRIT): {
        PhraseKey.SUBMISSION_OPEN: ("May it please this Honourable Balochistan High Court,",),
    },
}


# =============================================================================
# Merge
# =============================================================================

def merge_phrases(
    base: Mapping[PhraseKey, Sequence[str]],
    overrides: Optional[Mapping[PhraseKey, Sequence[str]]] = None,
) -> dict[PhraseKey, tuple[str, ...]]:
    """
    Layer an override set on top of a base phrase set.

    Only keys present in ``overrides`` are replaced; all other keys keep
    the base alternatives.
    """
    merged = {key: tuple(values) for key, values in base.items()}
    for key, values in (overrides or {}).items():
        merged[key] = tuple(values)
    return merged


def coerce_pair(
    court_style: Union[CourtStyle, str, None],
    filing_type: Union[FilingType, str, None],
) -> CourtPair:
    """
    Coerce a (style, filing) pair to enums.

    Anything that doesn't name an enumerated value resolves to
    FALLBACK_PAIR; resolution never raises.
    """
    try:
        return CourtStyle(court_style), FilingType(filing_type)
    except ValueError:
        logger.debug(
            "Unresolved phrase pair (%r, %r); using fallback %s/%s",
            court_style, filing_type, FALLBACK_PAIR[0].value, FALLBACK_PAIR[1].value,
        )
        return FALLBACK_PAIR


# =============================================================================
# Phrase Library
# =============================================================================

@dataclass(frozen=True)
class PhrasePack:
    """
    A loaded override pack (see phrases.loader).

    Attributes:
        id: Pack identifier
        version: Schema version the pack was written against
        description: Free-text description
        overrides: Per-(style, filing) phrase replacements
    """
    id: str
    version: str = "1.0.0"
    description: str = ""
    overrides: Mapping[CourtPair, Mapping[PhraseKey, tuple[str, ...]]] = field(
        default_factory=dict
    )


@dataclass(frozen=True)
class PhraseLibrary:
    """
    Fully resolved phrase sets for every (court style, filing type) pair.

    Usage:
        library = PhraseLibrary.build()
        phrases = library.resolve(CourtStyle.SC, FilingType.WRIT)
        opening = library.first(CourtStyle.SC, FilingType.WRIT, PhraseKey.SUBMISSION_OPEN)
    """
    table: Mapping[CourtPair, PhraseSet]
    pack_ids: tuple[str, ...] = ()

    @classmethod
    def build(
        cls,
        defaults: Mapping[PhraseKey, Sequence[str]] = DEFAULT_PHRASES,
        overrides: Mapping[CourtPair, Mapping[PhraseKey, Sequence[str]]] = COURT_OVERRIDES,
    ) -> "PhraseLibrary":
        """Precompute the merged phrase set for every enumerated pair."""
        table = {}
        for style in CourtStyle:
            for filing in FilingType:
                merged = merge_phrases(defaults, overrides.get((style, filing)))
                table[(style, filing)] = MappingProxyType(merged)
        return cls(table=MappingProxyType(table))

    def with_overrides(
        self,
        overrides: Mapping[CourtPair, Mapping[PhraseKey, Sequence[str]]],
        pack_id: str = "",
    ) -> "PhraseLibrary":
        """Return a new library with another override layer on top of this one."""
        table = dict(self.table)
        for pair, phrases in overrides.items():
            table[pair] = MappingProxyType(merge_phrases(self.table[pair], phrases))
        pack_ids = self.pack_ids + ((pack_id,) if pack_id else ())
        return PhraseLibrary(table=MappingProxyType(table), pack_ids=pack_ids)

    def with_pack(self, pack: PhrasePack) -> "PhraseLibrary":
        """Layer a loaded override pack on top of this library."""
        logger.debug("Layering phrase pack %s (%d overrides)", pack.id, len(pack.overrides))
        return self.with_overrides(pack.overrides, pack_id=pack.id)

    def resolve(
        self,
        court_style: Union[CourtStyle, str, None],
        filing_type: Union[FilingType, str, None],
    ) -> dict[PhraseKey, list[str]]:
        """All alternatives per key for a (style, filing) pair."""
        phrases = self.table[coerce_pair(court_style, filing_type)]
        return {key: list(values) for key, values in phrases.items()}

    def first(
        self,
        court_style: Union[CourtStyle, str, None],
        filing_type: Union[FilingType, str, None],
        key: PhraseKey,
    ) -> str:
        """The canonical (first) alternative for one key, or "" if none."""
        values = self.table[coerce_pair(court_style, filing_type)].get(PhraseKey(key), ())
        return values[0] if values else ""

    def flatten(
        self,
        court_style: Union[CourtStyle, str, None],
        filing_type: Union[FilingType, str, None],
    ) -> dict[PhraseKey, str]:
        """Key -> first alternative for a (style, filing) pair."""
        phrases = self.table[coerce_pair(court_style, filing_type)]
        return {key: (values[0] if values else "") for key, values in phrases.items()}


DEFAULT_LIBRARY = PhraseLibrary.build()


# =============================================================================
# Convenience Functions
# =============================================================================

def resolve_phrases(
    court_style: Union[CourtStyle, str, None],
    filing_type: Union[FilingType, str, None],
    library: Optional[PhraseLibrary] = None,
) -> dict[PhraseKey, list[str]]:
    """Resolve the phrase set for a (style, filing) pair."""
    return (library or DEFAULT_LIBRARY).resolve(court_style, filing_type)


def first_phrase(
    court_style: Union[CourtStyle, str, None],
    filing_type: Union[FilingType, str, None],
    key: PhraseKey,
    library: Optional[PhraseLibrary] = None,
) -> str:
    """Canonical phrase for one key of a (style, filing) pair."""
    return (library or DEFAULT_LIBRARY).first(court_style, filing_type, key)


def get_court_safe_phrases(
    court_style: Union[CourtStyle, str, None],
    filing_type: Union[FilingType, str, None],
    library: Optional[PhraseLibrary] = None,
) -> dict[PhraseKey, str]:
    """Flattened key -> first phrase mapping for a (style, filing) pair."""
    return (library or DEFAULT_LIBRARY).flatten(court_style, filing_type)
