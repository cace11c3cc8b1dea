"""
SafetyGate Phrase Library

Court-safe boilerplate phrases keyed by court style x filing type, with
optional YAML/JSON override packs.

Usage:
    from safetygate.phrases import first_phrase, load_phrase_library
    from safetygate.models import CourtStyle, FilingType, PhraseKey

    opening = first_phrase(CourtStyle.SC, FilingType.WRIT, PhraseKey.SUBMISSION_OPEN)

    # Layer a custom override pack on top of the built-in phrases
    library = load_phrase_library("packs/sc_criminal.yaml")
"""
from __future__ import annotations

from .library import (
    COURT_OVERRIDES,
    DEFAULT_LIBRARY,
    DEFAULT_PHRASES,
    FALLBACK_PAIR,
    PhraseLibrary,
    PhrasePack,
    coerce_pair,
    first_phrase,
    get_court_safe_phrases,
    merge_phrases,
    resolve_phrases,
)
from .loader import (
    PhrasePackLoader,
    load_phrase_library,
    load_phrase_pack,
    load_phrase_pack_from_string,
)
from .schema import (
    SCHEMA_VERSION,
    PhraseOverrideSchema,
    PhrasePackSchema,
    check_schema_version,
    validate_phrase_pack,
)

__all__ = [
    # Library
    "COURT_OVERRIDES",
    "DEFAULT_LIBRARY",
    "DEFAULT_PHRASES",
    "FALLBACK_PAIR",
    "PhraseLibrary",
    "PhrasePack",
    "coerce_pair",
    "first_phrase",
    "get_court_safe_phrases",
    "merge_phrases",
    "resolve_phrases",
    # Loader
    "PhrasePackLoader",
    "load_phrase_library",
    "load_phrase_pack",
    "load_phrase_pack_from_string",
    # Schemas
    "SCHEMA_VERSION",
    "PhraseOverrideSchema",
    "PhrasePackSchema",
    "check_schema_version",
    "validate_phrase_pack",
]
