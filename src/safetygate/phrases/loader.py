"""
SafetyGate Phrase Pack Loader

Loads and validates phrase override packs from YAML or JSON files and
converts the Pydantic schema models into a PhrasePack domain object that
PhraseLibrary.with_pack() can layer onto the built-in library.
"""
from __future__ import annotations

import json
import logging
from pathlib import Path
from typing import Any, Optional, Union

import yaml
from pydantic import ValidationError

from ..exceptions import (
    PhrasePackLoadError,
    PhrasePackValidationError,
    PhrasePackVersionMismatch,
)
from ..models import CourtStyle, FilingType, PhraseKey
from .library import DEFAULT_LIBRARY, PhraseLibrary, PhrasePack
from .schema import (
    SCHEMA_VERSION,
    PhrasePackSchema,
    check_schema_version,
    validate_phrase_pack,
)

logger = logging.getLogger(__name__)


def _convert_pack(schema: PhrasePackSchema) -> PhrasePack:
    """Convert a validated PhrasePackSchema into a PhrasePack."""
    overrides = {}
    for override in schema.overrides:
        pair = (CourtStyle(override.court_style), FilingType(override.filing_type))
        overrides[pair] = {
            PhraseKey(key): tuple(alternatives)
            for key, alternatives in override.phrases.items()
        }
    return PhrasePack(
        id=schema.id,
        version=schema.schema_version,
        description=schema.description,
        overrides=overrides,
    )


class PhrasePackLoader:
    """
    Loads phrase override packs from YAML or JSON files.

    Usage:
        loader = PhrasePackLoader()
        pack = loader.load("packs/sc_criminal.yaml")
        library = DEFAULT_LIBRARY.with_pack(pack)
    """

    def __init__(self, strict_version: bool = True):
        """
        Args:
            strict_version: If True, reject packs with incompatible schema versions
        """
        self.strict_version = strict_version

    def load(self, path: Union[str, Path]) -> PhrasePack:
        """
        Load a phrase pack from a file.

        Raises:
            PhrasePackLoadError: If file cannot be read or parsed
            PhrasePackValidationError: If validation fails
            PhrasePackVersionMismatch: If schema version incompatible
        """
        path = Path(path)
        try:
            data = self._load_file(path)
        except (OSError, yaml.YAMLError, json.JSONDecodeError) as e:
            raise PhrasePackLoadError(
                message=f"Failed to load phrase pack: {e}",
                details={"path": str(path), "error": str(e)},
            )
        return self._build(data, source=str(path))

    def load_string(self, content: str, format: str = "yaml") -> PhrasePack:
        """Load a phrase pack from a YAML or JSON string."""
        try:
            if format.lower() == "json":
                data = json.loads(content)
            else:
                data = yaml.safe_load(content)
        except (yaml.YAMLError, json.JSONDecodeError) as e:
            raise PhrasePackLoadError(
                message=f"Failed to parse phrase pack: {e}",
                details={"format": format, "error": str(e)},
            )
        return self._build(data, source="<string>")

    def _build(self, data: Any, source: str) -> PhrasePack:
        if self.strict_version and not check_schema_version(data):
            pack_version = data.get("schema_version", "unknown")
            raise PhrasePackVersionMismatch(
                message=(
                    f"Schema version mismatch: pack has {pack_version}, "
                    f"expected {SCHEMA_VERSION}"
                ),
                details={
                    "pack_version": pack_version,
                    "expected_version": SCHEMA_VERSION,
                    "source": source,
                },
            )

        try:
            schema = validate_phrase_pack(data)
        except ValidationError as e:
            raise PhrasePackValidationError(
                message=f"Phrase pack validation failed: {e.error_count()} errors",
                details={"errors": e.errors(include_url=False), "source": source},
            )

        pack = _convert_pack(schema)
        logger.info("Loaded phrase pack %s from %s", pack.id, source)
        return pack

    def _load_file(self, path: Path) -> Any:
        """Load data from YAML or JSON file."""
        with open(path, "r", encoding="utf-8") as f:
            if path.suffix.lower() == ".json":
                return json.load(f)
            return yaml.safe_load(f)


# =============================================================================
# Convenience Functions
# =============================================================================

def load_phrase_pack(path: Union[str, Path]) -> PhrasePack:
    """Load a phrase pack from a file."""
    return PhrasePackLoader().load(path)


def load_phrase_pack_from_string(content: str, format: str = "yaml") -> PhrasePack:
    """Load a phrase pack from a YAML or JSON string."""
    return PhrasePackLoader().load_string(content, format=format)


def load_phrase_library(
    path: Optional[Union[str, Path]] = None,
    base: PhraseLibrary = DEFAULT_LIBRARY,
) -> PhraseLibrary:
    """
    Built-in library, optionally with one override pack layered on top.

    With no path this returns ``base`` unchanged.
    """
    if path is None:
        return base
    return base.with_pack(load_phrase_pack(path))
