"""
SafetyGate Phrase Pack Schemas

Pydantic models for validating phrase override packs (YAML/JSON).

A phrase pack layers court- and filing-specific wordings on top of the
built-in library without code changes:

    schema_version: "1.0.0"
    id: pk-sc-criminal
    description: Supreme Court criminal miscellaneous openings
    overrides:
      - court_style: SC
        filing_type: criminal_misc
        phrases:
          submission_open:
            - "May it please this Honourable Supreme Court of Pakistan,"

Schema versioning:
- schema_version field tracks breaking changes
- Loaders check the major version for compatibility
"""
from __future__ import annotations

from typing import Any, Literal

from pydantic import BaseModel, Field, field_validator, model_validator


# =============================================================================
# Schema Version
# =============================================================================

SCHEMA_VERSION = "1.0.0"


# =============================================================================
# Enums as Literals (for YAML validation)
# =============================================================================

CourtStyleValue = Literal["IHC", "SHC", "LHC", "PHC", "BHC", "AJKHC", "GBCC", "SC"]

FilingTypeValue = Literal["writ", "criminal_misc", "appeal", "representation"]

PhraseKeyValue = Literal[
    "submission_open", "it_is_respectfully_submitted", "prima_facie",
    "allegation_softener", "subject_to_proof", "without_prejudice",
    "no_judicial_determination", "data_limitations", "relief_prayed",
    "verification",
]


# =============================================================================
# Pack Schemas
# =============================================================================

class PhraseOverrideSchema(BaseModel):
    """Phrase replacements for one (court style, filing type) pair."""
    court_style: CourtStyleValue = Field(..., description="Court style, e.g. 'SC'")
    filing_type: FilingTypeValue = Field(..., description="Filing type, e.g. 'writ'")
    phrases: dict[PhraseKeyValue, list[str]] = Field(
        ..., description="Phrase key -> ordered alternatives (first is canonical)"
    )

    @field_validator("phrases")
    @classmethod
    def validate_alternatives(cls, v: dict[str, list[str]]) -> dict[str, list[str]]:
        """Every overridden key needs at least one non-blank alternative."""
        if not v:
            raise ValueError("Override must define at least one phrase key")
        for key, alternatives in v.items():
            if not alternatives:
                raise ValueError(f"Phrase key '{key}' has no alternatives")
            if any(not a.strip() for a in alternatives):
                raise ValueError(f"Phrase key '{key}' contains a blank alternative")
        return v

    model_config = {
        "extra": "forbid",
    }


class PhrasePackSchema(BaseModel):
    """Root schema of a phrase override pack."""
    schema_version: str = Field(SCHEMA_VERSION, description="Pack schema version")
    id: str = Field(..., min_length=1, description="Pack identifier")
    description: str = Field("", description="Human-readable description")
    overrides: list[PhraseOverrideSchema] = Field(
        default_factory=list,
        description="Per-(court style, filing type) phrase overrides",
    )

    @model_validator(mode="after")
    def validate_unique_pairs(self) -> "PhrasePackSchema":
        """Each (court style, filing type) pair may appear once per pack."""
        seen: set[tuple[str, str]] = set()
        for override in self.overrides:
            pair = (override.court_style, override.filing_type)
            if pair in seen:
                raise ValueError(
                    f"Duplicate override for {override.court_style}/{override.filing_type}"
                )
            seen.add(pair)
        return self

    model_config = {
        "extra": "forbid",  # Reject unknown fields
    }


# =============================================================================
# Validation Helpers
# =============================================================================

def validate_phrase_pack(data: Any) -> PhrasePackSchema:
    """
    Validate a phrase pack dictionary against the schema.

    Raises:
        pydantic.ValidationError: If validation fails
    """
    return PhrasePackSchema.model_validate(data)


def check_schema_version(data: Any) -> bool:
    """Major version of the pack must match SCHEMA_VERSION."""
    if not isinstance(data, dict):
        # Let schema validation report the shape problem
        return True
    pack_version = str(data.get("schema_version", SCHEMA_VERSION))
    return pack_version.split(".")[0] == SCHEMA_VERSION.split(".")[0]
