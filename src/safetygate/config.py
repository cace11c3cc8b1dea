"""
SafetyGate Configuration

Environment-driven settings and logging setup.

Environment variables:
    SAFETYGATE_LOG_LEVEL       Log level for the safetygate logger (INFO)
    SAFETYGATE_LOG_FORMAT      "json" for structured lines, "text" otherwise (json)
    SAFETYGATE_DEFAULT_COURT   Court style used in court mode without a pair (IHC)
    SAFETYGATE_DEFAULT_FILING  Filing type used in court mode without a pair (writ)
    SAFETYGATE_DEFAULT_MODE    Distribution mode when the caller gives none (controlled_legal)
    SAFETYGATE_PHRASE_PACK     Optional path to a phrase override pack
"""
from __future__ import annotations

import json
import logging
import os
from dataclasses import dataclass
from datetime import datetime, timezone
from enum import Enum
from typing import Mapping, Optional, TypeVar

from .exceptions import ConfigurationError
from .models import CourtStyle, DistributionMode, FilingType

E = TypeVar("E", bound=Enum)

LOG_FORMATS = ("json", "text")
TEXT_FORMAT = "%(asctime)s %(levelname)s %(name)s: %(message)s"

# LogRecord attributes copied into JSON lines when present
EXTRA_LOG_FIELDS = (
    "input_hash_short",
    "result_hash_short",
    "mode",
    "overall",
    "signal_count",
    "blocker_count",
    "duration_ms",
)


def _enum_from_env(env: Mapping[str, str], name: str, enum_cls: type[E], default: E) -> E:
    raw = env.get(name)
    if raw is None or raw == "":
        return default
    try:
        return enum_cls(raw)
    except ValueError:
        allowed = ", ".join(m.value for m in enum_cls)
        raise ConfigurationError(
            message=f"{name}={raw!r} is not one of: {allowed}",
            details={"variable": name, "value": raw},
        )


@dataclass(frozen=True)
class GateSettings:
    """Process-wide gate settings."""
    log_level: str = "INFO"
    log_format: str = "json"
    default_court_style: CourtStyle = CourtStyle.IHC
    default_filing_type: FilingType = FilingType.WRIT
    default_mode: DistributionMode = DistributionMode.CONTROLLED_LEGAL
    phrase_pack: Optional[str] = None

    @classmethod
    def from_env(cls, env: Optional[Mapping[str, str]] = None) -> "GateSettings":
        """
        Read settings from ``env`` (defaults to ``os.environ``).

        Raises:
            ConfigurationError: If a value is outside its allowed set
        """
        env = os.environ if env is None else env

        log_level = env.get("SAFETYGATE_LOG_LEVEL", "INFO").upper()
        if not isinstance(logging.getLevelName(log_level), int):
            raise ConfigurationError(
                message=f"SAFETYGATE_LOG_LEVEL={log_level!r} is not a logging level",
                details={"variable": "SAFETYGATE_LOG_LEVEL", "value": log_level},
            )

        log_format = env.get("SAFETYGATE_LOG_FORMAT", "json").lower()
        if log_format not in LOG_FORMATS:
            raise ConfigurationError(
                message=f"SAFETYGATE_LOG_FORMAT={log_format!r} must be json or text",
                details={"variable": "SAFETYGATE_LOG_FORMAT", "value": log_format},
            )

        return cls(
            log_level=log_level,
            log_format=log_format,
            default_court_style=_enum_from_env(
                env, "SAFETYGATE_DEFAULT_COURT", CourtStyle, CourtStyle.IHC
            ),
            default_filing_type=_enum_from_env(
                env, "SAFETYGATE_DEFAULT_FILING", FilingType, FilingType.WRIT
            ),
            default_mode=_enum_from_env(
                env, "SAFETYGATE_DEFAULT_MODE", DistributionMode,
                DistributionMode.CONTROLLED_LEGAL,
            ),
            phrase_pack=env.get("SAFETYGATE_PHRASE_PACK") or None,
        )


# =============================================================================
# Logging Setup (Structured JSON)
# =============================================================================

class JSONFormatter(logging.Formatter):
    """JSON log formatter for structured logging."""

    def format(self, record):
        log_entry = {
            "timestamp": datetime.now(timezone.utc).isoformat(),
            "level": record.levelname,
            "logger": record.name,
            "message": record.getMessage(),
        }
        for name in EXTRA_LOG_FIELDS:
            if hasattr(record, name):
                log_entry[name] = getattr(record, name)
        if record.exc_info:
            log_entry["exception"] = self.formatException(record.exc_info)
        return json.dumps(log_entry)


def configure_logging(settings: Optional[GateSettings] = None) -> logging.Logger:
    """
    Attach one stream handler to the ``safetygate`` logger.

    Calling it again replaces the handler rather than stacking another.
    """
    settings = settings or GateSettings()
    logger = logging.getLogger("safetygate")
    logger.setLevel(getattr(logging, settings.log_level.upper()))

    for handler in list(logger.handlers):
        if getattr(handler, "_safetygate", False):
            logger.removeHandler(handler)

    handler = logging.StreamHandler()
    if settings.log_format == "json":
        handler.setFormatter(JSONFormatter())
    else:
        handler.setFormatter(logging.Formatter(TEXT_FORMAT))
    handler._safetygate = True
    logger.addHandler(handler)
    return logger
