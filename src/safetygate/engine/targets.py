"""
Named-target and sentence helpers for the Risk Detector.

The capitalized-phrase extractor is a stand-in for a real NER model and is
kept behind extract_candidate_targets() so it can be swapped out without
touching detection or scoring.
"""
from __future__ import annotations

from typing import Iterable

from .patterns import ALLEGATION_MARKERS, NAMED_TARGET

SENTENCE_WINDOW = 300


def extract_candidate_targets(text: str) -> list[str]:
    """Unique capitalized multi-word phrases, in first-seen order."""
    seen: dict[str, None] = {}
    for match in NAMED_TARGET.finditer(text or ""):
        seen.setdefault(match.group(0), None)
    return list(seen)


def surrounding_sentence(text: str, index: int, window: int = SENTENCE_WINDOW) -> str:
    """
    Text between the nearest '.' at or before ``index`` and the next '.'
    after it, stripped.

    Sentences longer than ``window`` are cut to a ``window``-sized slice
    centred on ``index``, so the result always covers the offset.
    """
    start = text.rfind(".", 0, index + 1) + 1
    end = text.find(".", index)
    end = len(text) if end == -1 else end + 1
    if end - start > window:
        start = max(start, index - window // 2)
        end = min(end, start + window)
    return text[start:end].strip()


def has_allegation_frame(sentence: str) -> bool:
    """True if the sentence already hedges with an allegation marker."""
    return ALLEGATION_MARKERS.search(sentence) is not None


def targets_in(sentence: str, candidates: Iterable[str]) -> list[str]:
    """Candidates that appear case-insensitively inside the sentence."""
    lowered = sentence.lower()
    return [c for c in candidates if c.lower() in lowered]
