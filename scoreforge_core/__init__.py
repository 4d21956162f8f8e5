from . import tennis, volleyball
from .display import (
    game_status,
    point_label,
    score_summary,
    score_summary_compact,
    set_status,
    tennis_point_labels,
    tiebreak_server,
    volleyball_point_labels,
)
from .engine import EventOutcome, apply_event, is_complete, sport_module
from .errors import InvalidInputError, InvalidStateError, ScoringError
from .match_point import detect_match_point, detect_volleyball_match_point
from .types import EventPayload, MatchState, TennisState, VolleyballState
from .validation import InputSanitizer, TennisConfig, ValidatedEvent, VolleyballConfig

__all__ = [
    "tennis",
    "volleyball",
    "EventOutcome",
    "EventPayload",
    "MatchState",
    "TennisState",
    "VolleyballState",
    "ScoringError",
    "InvalidInputError",
    "InvalidStateError",
    "apply_event",
    "is_complete",
    "sport_module",
    "detect_match_point",
    "detect_volleyball_match_point",
    "game_status",
    "point_label",
    "score_summary",
    "score_summary_compact",
    "set_status",
    "tennis_point_labels",
    "tiebreak_server",
    "volleyball_point_labels",
    "TennisConfig",
    "VolleyballConfig",
    "ValidatedEvent",
    "InputSanitizer",
]
