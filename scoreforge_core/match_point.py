"""Match-point detection (read-only, safe to call on every render).

A detector answers: if side S wins the next point, does S win the match?
Callers use it to ask for confirmation before an irreversible scoring action;
it has no influence on the transition functions.
"""
from __future__ import annotations

from typing import Optional

from . import tennis, volleyball
from .types import TennisState, VolleyballState
from .validation import DEFAULT_MIN_LEAD_TO_WIN, DEFAULT_VOLLEYBALL_SETS_TO_WIN


def _wins_set_with_game(games: int, opp_games: int) -> bool:
    # 5-x with a lead goes to 6-x, 6-5 goes to 7-5
    return (games >= 5 and games > opp_games) or (games == 6 and opp_games == 5)


def _wins_game_with_point(points: int, opp_points: int, is_ad_scoring: bool) -> bool:
    if is_ad_scoring:
        return points >= 3 and points > opp_points
    return points >= 3 and points >= opp_points


def detect_match_point(state: Optional[TennisState]) -> Optional[int]:
    """Return the side (1 or 2) holding match point in a tennis match, else None."""
    if not state or state.get("isMatchComplete"):
        return None

    sets_won = tennis.count_sets_won(state.get("sets") or [])
    sets_to_win = state.get("setsToWin", 2)
    games = state.get("currentSetGames") or [0, 0]
    points = state.get("currentGamePoints") or [0, 0]
    tiebreak_points = state.get("tiebreakPoints") or [0, 0]

    for side in (1, 2):
        me, opp = side - 1, 2 - side
        if sets_won[me] != sets_to_win - 1:
            continue

        if state.get("isTiebreak"):
            target = state.get("tiebreakTarget") or 7
            if tiebreak_points[me] >= target - 1 and tiebreak_points[me] - tiebreak_points[opp] >= 1:
                return side
            continue

        if not _wins_set_with_game(games[me], games[opp]):
            continue
        if _wins_game_with_point(points[me], points[opp], state.get("isAdScoring", True)):
            return side

    return None


def detect_volleyball_match_point(state: Optional[VolleyballState]) -> Optional[int]:
    """Volleyball counterpart: one set away, and one rally from taking this set."""
    if not state or state.get("isMatchComplete"):
        return None

    sets_won = volleyball.count_sets_won(state.get("sets") or [])
    target = volleyball.set_target(state)
    sets_to_win = state.get("setsToWin", DEFAULT_VOLLEYBALL_SETS_TO_WIN)
    min_lead = state.get("minLeadToWin", DEFAULT_MIN_LEAD_TO_WIN)
    points = state.get("currentSetPoints") or [0, 0]

    for side in (1, 2):
        me, opp = side - 1, 2 - side
        if sets_won[me] != sets_to_win - 1:
            continue
        if points[me] >= target - 1 and points[me] - points[opp] >= min_lead - 1:
            return side

    return None
