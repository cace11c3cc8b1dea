"""
Canonical JSON Serialization

Provides deterministic JSON serialization for hashing gate results.
Based on RFC 8785 (JSON Canonicalization Scheme) principles:
- Sorted keys (lexicographic)
- No whitespace
- UTF-8 encoding

The same gate result always produces the same JSON string, so the
rewritten text, audit log and decision can be sealed with one hash and
re-verified when the report is rendered.
"""
from __future__ import annotations

import hashlib
import json
from dataclasses import asdict, is_dataclass
from enum import Enum
from typing import Any


def _default_serializer(obj: Any) -> Any:
    """
    Custom JSON serializer for non-standard types.

    Handles:
    - Enum: value
    - dataclass: dict
    - set/frozenset: sorted list
    - tuple: list
    """
    if isinstance(obj, Enum):
        return obj.value
    if is_dataclass(obj) and not isinstance(obj, type):
        return asdict(obj)
    if isinstance(obj, (set, frozenset)):
        return sorted(obj, key=str)
    if isinstance(obj, tuple):
        return list(obj)
    raise TypeError(f"Object of type {type(obj).__name__} is not JSON serializable")


def canonical_json(obj: Any) -> str:
    """
    Serialize object to canonical JSON string.

    Example:
        >>> canonical_json({"b": 1, "a": 2})
        '{"a":2,"b":1}'
    """
    return json.dumps(
        obj,
        sort_keys=True,
        separators=(",", ":"),
        default=_default_serializer,
        ensure_ascii=False,
    )


def content_hash(obj: Any) -> str:
    """
    Compute SHA-256 hash of canonical JSON representation.

    Returns:
        Hex-encoded SHA-256 hash string (64 characters)
    """
    return hashlib.sha256(canonical_json(obj).encode("utf-8")).hexdigest()


def content_hash_short(obj: Any, length: int = 12) -> str:
    """Truncated content hash for display and log lines."""
    return content_hash(obj)[:length]


def text_hash(text: str) -> str:
    """SHA-256 of raw text (used to fingerprint the input narrative)."""
    return hashlib.sha256(text.encode("utf-8")).hexdigest()
