"""Volleyball scoring engine (pure, rally scoring).

Every rally scores a point and the rally winner serves next. A set is won at
``pointsPerSet`` (``pointsPerDecidingSet`` in the deciding set) with a lead of
``minLeadToWin``; there is no point cap, play goes on until the lead exists.
Undo uses the same full-snapshot history stack as tennis.
"""
from __future__ import annotations

import logging
from copy import deepcopy
from typing import Any, Dict, List, Optional, Tuple

from .errors import InvalidInputError, InvalidStateError
from .types import VolleyballSnapshot, VolleyballState
from .validation import (
    DEFAULT_MIN_LEAD_TO_WIN,
    DEFAULT_POINTS_PER_DECIDING_SET,
    DEFAULT_POINTS_PER_SET,
    DEFAULT_VOLLEYBALL_SETS_TO_WIN,
    parse_volleyball_config,
    validate_side,
)

logger = logging.getLogger(__name__)

SPORT = "volleyball"


def init_match(first_server: int, config: Optional[dict] = None) -> VolleyballState:
    """Create a fresh volleyball state serving from ``first_server``."""
    validate_side(first_server, "firstServer")
    cfg = parse_volleyball_config(config)

    return {
        "sport": SPORT,
        "sets": [],
        "currentSetPoints": [0, 0],
        "currentSetNumber": 1,
        "servingTeam": first_server,
        "setsToWin": cfg.setsToWin,
        "pointsPerSet": cfg.pointsPerSet,
        "pointsPerDecidingSet": cfg.pointsPerDecidingSet,
        "minLeadToWin": cfg.minLeadToWin,
        "isMatchComplete": False,
        "history": [],
    }


def create_snapshot(state: VolleyballState) -> VolleyballSnapshot:
    return {key: deepcopy(value) for key, value in state.items() if key != "history"}


def count_sets_won(sets: List[List[int]]) -> Tuple[int, int]:
    p1 = sum(1 for s in sets if s[0] > s[1])
    p2 = sum(1 for s in sets if s[1] > s[0])
    return p1, p2


def is_deciding_set(state: VolleyballState) -> bool:
    """The set being played is the last possible one (index setsToWin * 2 - 1)."""
    sets_to_win = state.get("setsToWin", DEFAULT_VOLLEYBALL_SETS_TO_WIN)
    return len(state.get("sets") or []) + 1 == sets_to_win * 2 - 1


def set_target(state: VolleyballState) -> int:
    if is_deciding_set(state):
        return state.get("pointsPerDecidingSet", DEFAULT_POINTS_PER_DECIDING_SET)
    return state.get("pointsPerSet", DEFAULT_POINTS_PER_SET)


def is_set_won(points: List[int], target: int, min_lead: int) -> Tuple[bool, Optional[int]]:
    p1, p2 = points
    lead = abs(p1 - p2)
    if p1 >= target and lead >= min_lead:
        return True, 1
    if p2 >= target and lead >= min_lead:
        return True, 2
    return False, None


def _ensure_scorable(state: VolleyballState) -> None:
    if state.get("isMatchComplete"):
        logger.warning("Scoring rejected: match already complete")
        raise InvalidStateError("Match is already complete")

    pair = state.get("currentSetPoints")
    if (
        not isinstance(pair, list)
        or len(pair) != 2
        or any(isinstance(v, bool) or not isinstance(v, int) or v < 0 for v in pair)
    ):
        raise InvalidInputError(f"currentSetPoints must be two non-negative integers, got {pair!r}")


def score_point(state: VolleyballState, winning_side: int) -> VolleyballState:
    """Apply one rally won by ``winning_side`` and return the new state.

    Raises:
        InvalidStateError: match already complete
        InvalidInputError: side not in {1, 2} or corrupt counters
    """
    _ensure_scorable(state)
    validate_side(winning_side, "winner")

    new_state: Dict[str, Any] = create_snapshot(state)
    new_state["history"] = [*(state.get("history") or []), create_snapshot(state)]

    points = list(new_state["currentSetPoints"])
    points[winning_side - 1] += 1
    new_state["currentSetPoints"] = points
    # Side out: the rally winner serves next
    new_state["servingTeam"] = winning_side

    won, set_winner = is_set_won(points, set_target(state), new_state["minLeadToWin"])
    if not won:
        return new_state

    new_state["sets"] = [list(s) for s in new_state["sets"]] + [points]
    new_state["currentSetPoints"] = [0, 0]
    logger.debug(f"Set {len(new_state['sets'])} won by team {set_winner} ({points[0]}-{points[1]})")

    p1, p2 = count_sets_won(new_state["sets"])
    if p1 >= new_state["setsToWin"] or p2 >= new_state["setsToWin"]:
        new_state["isMatchComplete"] = True
        logger.debug(f"Match won by team {1 if p1 > p2 else 2} ({p1}-{p2})")
    else:
        new_state["currentSetNumber"] = new_state["currentSetNumber"] + 1
    return new_state


def set_server(state: VolleyballState, team: int) -> VolleyballState:
    """Correct the serving team. Corrections are not undoable points."""
    validate_side(team, "team")
    new_state = deepcopy(state)
    new_state["servingTeam"] = team
    return new_state


def adjust_score(state: VolleyballState, team: int, adjustment: int) -> VolleyballState:
    """Manually correct the current set points of ``team`` (floored at 0).

    Adjustments never complete a set; the next rally applies the usual rules.
    """
    if state.get("isMatchComplete"):
        raise InvalidStateError("Cannot adjust score of completed match")
    validate_side(team, "team")
    if isinstance(adjustment, bool) or not isinstance(adjustment, int):
        raise InvalidInputError(f"adjustment must be an integer, got {adjustment!r}")

    new_state = deepcopy(state)
    points = list(new_state["currentSetPoints"])
    points[team - 1] = max(0, points[team - 1] + adjustment)
    new_state["currentSetPoints"] = points
    return new_state


def undo(state: VolleyballState) -> VolleyballState:
    history = state.get("history") or []
    if not history:
        logger.warning("Undo rejected: no history")
        raise InvalidStateError("No history available to undo")

    previous: Dict[str, Any] = deepcopy(history[-1])
    previous["history"] = list(history[:-1])
    return previous


def match_winner(state: VolleyballState) -> Optional[int]:
    if not state.get("isMatchComplete"):
        return None
    p1, p2 = count_sets_won(state["sets"])
    return 1 if p1 > p2 else 2
