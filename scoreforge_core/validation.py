"""
Input validation schemas using Pydantic v2
Validates match configuration and every scoring event type
"""

import logging
import re
from typing import Optional, Self

from pydantic import BaseModel, ConfigDict, Field, ValidationError, field_validator, model_validator

from .errors import InvalidInputError

logger = logging.getLogger(__name__)

DEFAULT_SETS_TO_WIN = 2
DEFAULT_SET_TIEBREAK_TARGET = 7
DEFAULT_FINAL_SET_TIEBREAK_TARGET = 7
DEFAULT_MATCH_TIEBREAK_TARGET = 10

DEFAULT_VOLLEYBALL_SETS_TO_WIN = 3
DEFAULT_POINTS_PER_SET = 25
DEFAULT_POINTS_PER_DECIDING_SET = 15
DEFAULT_MIN_LEAD_TO_WIN = 2

EVENT_TYPES = {
    "INIT_MATCH",
    "SCORE_POINT",
    "ACE",
    "FAULT",
    "UNDO",
    "SET_SERVER",
    "ADJUST_SCORE",
}

SPORTS = {"tennis", "volleyball"}

# ==================== CONFIGURATION ====================


class TennisConfig(BaseModel):
    """Tennis rules captured once at match initialization"""

    isAdScoring: bool = True
    setsToWin: int = Field(DEFAULT_SETS_TO_WIN, ge=1, le=5, description="2 = best of 3")
    setTiebreakTarget: int = Field(DEFAULT_SET_TIEBREAK_TARGET, ge=1, le=99)
    finalSetTiebreakTarget: int = Field(DEFAULT_FINAL_SET_TIEBREAK_TARGET, ge=1, le=99)
    useMatchTiebreak: bool = False
    matchTiebreakTarget: int = Field(DEFAULT_MATCH_TIEBREAK_TARGET, ge=1, le=99)

    model_config = ConfigDict(extra="ignore", frozen=True)


class VolleyballConfig(BaseModel):
    """Volleyball rules captured once at match initialization"""

    setsToWin: int = Field(DEFAULT_VOLLEYBALL_SETS_TO_WIN, ge=1, le=5, description="3 = best of 5")
    pointsPerSet: int = Field(DEFAULT_POINTS_PER_SET, ge=1, le=99)
    pointsPerDecidingSet: int = Field(DEFAULT_POINTS_PER_DECIDING_SET, ge=1, le=99)
    minLeadToWin: int = Field(DEFAULT_MIN_LEAD_TO_WIN, ge=1, le=10)

    model_config = ConfigDict(extra="ignore", frozen=True)


# ==================== EVENTS ====================


class ValidatedEvent(BaseModel):
    """Scoring event with per-type field requirements"""

    type: str = Field(..., min_length=1, max_length=50, description="Event type")
    matchId: Optional[str] = Field(None, min_length=1, max_length=128)

    # INIT_MATCH
    sport: Optional[str] = None
    firstServer: Optional[int] = Field(None, ge=1, le=2)
    config: Optional[dict] = None

    # SCORE_POINT
    winner: Optional[int] = Field(None, ge=1, le=2, description="Side winning the point")

    # SET_SERVER / ADJUST_SCORE
    team: Optional[int] = Field(None, ge=1, le=2)
    adjustment: Optional[int] = Field(None, ge=-99, le=99)

    @field_validator("type")
    @classmethod
    def validate_type(cls, v: str) -> str:
        """Validate event type is one of allowed types"""
        v = v.strip().upper()
        if v not in EVENT_TYPES:
            raise ValueError(f"type must be one of {sorted(EVENT_TYPES)}, got {v}")
        return v

    @field_validator("sport")
    @classmethod
    def validate_sport(cls, v: Optional[str]) -> Optional[str]:
        if v is None:
            return v
        v = v.strip().lower()
        if v not in SPORTS:
            raise ValueError(f"sport must be one of {sorted(SPORTS)}, got {v}")
        return v

    @field_validator("winner", "team", "firstServer", mode="before")
    @classmethod
    def reject_bool_side(cls, v):
        # bool is an int subclass; True would otherwise pass as side 1
        if isinstance(v, bool):
            raise ValueError("side must be 1 or 2")
        return v

    @model_validator(mode="after")
    def validate_event_fields(self) -> Self:
        """Validate required fields based on event type"""
        etype = self.type

        if etype == "INIT_MATCH":
            if self.sport is None:
                raise ValueError("INIT_MATCH requires sport")
            if self.firstServer is None:
                raise ValueError("INIT_MATCH requires firstServer")

        elif etype == "SCORE_POINT":
            if self.winner is None:
                raise ValueError("SCORE_POINT requires winner")

        elif etype == "SET_SERVER":
            if self.team is None:
                raise ValueError("SET_SERVER requires team")

        elif etype == "ADJUST_SCORE":
            if self.team is None or self.adjustment is None:
                raise ValueError("ADJUST_SCORE requires team and adjustment")

        return self

    model_config = ConfigDict(extra="allow")


def _format_errors(exc: ValidationError) -> str:
    return "; ".join(
        f"{'.'.join(str(p) for p in err['loc']) or 'event'}: {err['msg']}"
        for err in exc.errors()
    )


def parse_tennis_config(config: Optional[dict]) -> TennisConfig:
    try:
        return TennisConfig(**(config or {}))
    except ValidationError as e:
        logger.warning(f"Tennis config rejected: {e}")
        raise InvalidInputError(f"Invalid tennis config: {_format_errors(e)}") from e


def parse_volleyball_config(config: Optional[dict]) -> VolleyballConfig:
    try:
        return VolleyballConfig(**(config or {}))
    except ValidationError as e:
        logger.warning(f"Volleyball config rejected: {e}")
        raise InvalidInputError(f"Invalid volleyball config: {_format_errors(e)}") from e


def validate_side(value, field: str = "side") -> int:
    """Return ``value`` if it names a side (1 or 2), else raise INVALID_INPUT"""
    if isinstance(value, bool) or not isinstance(value, int) or value not in (1, 2):
        raise InvalidInputError(f"{field} must be 1 or 2, got {value!r}")
    return value


class InputSanitizer:
    """Utility class for input sanitization"""

    @staticmethod
    def sanitize_string(value: str, max_length: int = 255) -> str:
        """Sanitize string input"""
        if not isinstance(value, str):
            return str(value)[:max_length]

        value = value.strip()
        value = value[:max_length]
        value = value.replace("\0", "")

        return value

    @staticmethod
    def sanitize_participant_name(name: str) -> str:
        """Sanitize participant name for display, keeping letters with diacritics"""
        name = InputSanitizer.sanitize_string(name, 255)

        # Strip control characters and markup, keep " / " used by doubles names
        dangerous_chars = r'[<>{}[\]\\|;()&$`"\*\x00-\x1f\x7f]'
        name = re.sub(dangerous_chars, "", name)

        return name.strip()

    @staticmethod
    def validate_event(event_dict: dict) -> ValidatedEvent:
        """
        Validate an event dictionary

        Returns:
            ValidatedEvent: Validated event object

        Raises:
            InvalidInputError: If validation fails
        """
        if not isinstance(event_dict, dict):
            logger.warning(f"Event validation failed: not a dict ({type(event_dict).__name__})")
            raise InvalidInputError("Invalid event: expected an object with a 'type' field")
        try:
            return ValidatedEvent(**event_dict)
        except ValidationError as e:
            logger.warning(f"Event validation failed: {e}")
            raise InvalidInputError(f"Invalid event: {_format_errors(e)}") from e
        except TypeError as e:
            # non-string keys cannot be passed as fields
            logger.warning(f"Event validation failed: {e}")
            raise InvalidInputError(f"Invalid event: {e}") from e


# ==================== EXPORT ====================

__all__ = [
    "TennisConfig",
    "VolleyballConfig",
    "ValidatedEvent",
    "InputSanitizer",
    "parse_tennis_config",
    "parse_volleyball_config",
    "validate_side",
]
