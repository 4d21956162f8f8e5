"""Event dispatcher over the sport engines (pure, no storage/transport).

The backend mutation layer holds the authoritative state per match, receives
an event and calls apply_event(); it persists EventOutcome.state and pushes it
to subscribers. Nothing here touches storage or the network.

Architecture:
- State is a sport-tagged dict: state["sport"] is "tennis" or "volleyball"
- Events are plain dicts with a 'type' field, validated with pydantic
  (INIT_MATCH, SCORE_POINT, ACE, FAULT, UNDO, SET_SERVER, ADJUST_SCORE)
- apply_event() never mutates its input; a rejected event raises a
  ScoringError and the caller keeps its previous state

Sport rules:
- ACE and FAULT are tennis-only (serve statistics)
- SET_SERVER and ADJUST_SCORE are volleyball-only corrections, they do not
  add history entries
"""
from __future__ import annotations

import logging
from dataclasses import dataclass
from types import ModuleType
from typing import Any, Dict, Optional

from . import tennis, volleyball
from .errors import InvalidInputError, InvalidStateError
from .validation import InputSanitizer

logger = logging.getLogger(__name__)

_SPORTS: Dict[str, ModuleType] = {
    tennis.SPORT: tennis,
    volleyball.SPORT: volleyball,
}


@dataclass
class EventOutcome:
    """Result of applying a scoring event."""

    state: Dict[str, Any]
    event_payload: Dict[str, Any]
    snapshot_required: bool
    match_completed: bool = False


def sport_module(sport: Optional[str]) -> ModuleType:
    try:
        return _SPORTS[sport]
    except KeyError:
        raise InvalidInputError(f"Unsupported sport: {sport!r}") from None


def is_complete(state: Optional[Dict[str, Any]]) -> bool:
    return bool(state and state.get("isMatchComplete"))


def apply_event(state: Optional[Dict[str, Any]], event: Dict[str, Any]) -> EventOutcome:
    """Apply a scoring event to a match state.

    Args:
        state: Current match state (ignored for INIT_MATCH, may be None)
        event: Event dict with 'type' and type-specific fields

    Returns:
        EventOutcome with:
        - state: New state (the input is left untouched)
        - event_payload: Normalized event (resolved sport, winner, ...)
        - snapshot_required: True when the state changed and should be persisted;
          False for a no-op correction
        - match_completed: True when this event ended the match

    Raises:
        InvalidInputError: malformed event, or event not valid for the sport
        InvalidStateError: scoring a finished match, undo with no history,
            or any non-init event before INIT_MATCH
    """
    validated = InputSanitizer.validate_event(event)
    etype = validated.type
    payload = validated.model_dump(exclude_none=True)

    if etype == "INIT_MATCH":
        engine = sport_module(validated.sport)
        new_state = engine.init_match(validated.firstServer, validated.config)
        logger.debug(f"Initialized {validated.sport} match {validated.matchId or ''}".rstrip())
        return EventOutcome(state=new_state, event_payload=payload, snapshot_required=True)

    if not state:
        raise InvalidStateError("Match state not initialized")

    sport = state.get("sport")
    engine = sport_module(sport)
    payload["sport"] = sport
    was_complete = is_complete(state)

    if etype == "SCORE_POINT":
        new_state = engine.score_point(state, validated.winner)

    elif etype == "UNDO":
        new_state = engine.undo(state)

    elif etype in ("ACE", "FAULT"):
        if engine is not tennis:
            raise InvalidInputError(f"{etype} is only supported for tennis")
        payload["servingParticipant"] = tennis.current_server(state)
        if etype == "ACE":
            new_state = tennis.score_ace(state)
        else:
            payload["doubleFault"] = bool(state.get("faultState"))
            new_state = tennis.score_fault(state)

    elif etype == "SET_SERVER":
        if engine is not volleyball:
            raise InvalidInputError("SET_SERVER is only supported for volleyball")
        new_state = volleyball.set_server(state, validated.team)

    elif etype == "ADJUST_SCORE":
        if engine is not volleyball:
            raise InvalidInputError("ADJUST_SCORE is only supported for volleyball")
        new_state = volleyball.adjust_score(state, validated.team, validated.adjustment)

    else:
        raise InvalidInputError(f"Unhandled event type: {etype}")

    match_completed = not was_complete and is_complete(new_state)
    if match_completed:
        payload["matchWinner"] = engine.match_winner(new_state)

    # Corrections that change nothing (same serving team, adjustment clamped
    # at 0) need no persist or broadcast
    changed = new_state != state
    if not changed:
        logger.debug(f"{etype} left the {sport} state unchanged")

    return EventOutcome(
        state=new_state,
        event_payload=payload,
        snapshot_required=changed,
        match_completed=match_completed,
    )
