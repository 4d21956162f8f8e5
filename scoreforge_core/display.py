"""Display helpers: raw counters -> scoreboard labels.

Pure functions, no state mutation. Tennis game points render as 0/15/30/40
with "AD" for the leader past deuce under ad scoring; tiebreak and volleyball
points render as plain integers.
"""
from __future__ import annotations

from typing import List, Optional, Tuple

from . import tennis, volleyball
from .types import MatchState, TennisState, VolleyballState
from .validation import InputSanitizer

POINT_NAMES = ["0", "15", "30", "40"]


def point_label(points: List[int], side: int, is_ad_scoring: bool, is_tiebreak: bool) -> str:
    """Label for one side's score in the current tennis game (side is 1 or 2)."""
    mine = points[side - 1] if len(points) >= side else 0
    theirs = points[2 - side] if len(points) > 2 - side else 0

    if is_tiebreak:
        return str(mine)

    if tennis.is_deuce(mine, theirs):
        if is_ad_scoring and mine > theirs:
            return "AD"
        return "40"

    return POINT_NAMES[min(mine, 3)]


def tennis_point_labels(state: TennisState) -> Tuple[str, str]:
    if state.get("isTiebreak"):
        points = state.get("tiebreakPoints") or [0, 0]
    else:
        points = state.get("currentGamePoints") or [0, 0]
    ad = state.get("isAdScoring", True)
    tiebreak = bool(state.get("isTiebreak"))
    return point_label(points, 1, ad, tiebreak), point_label(points, 2, ad, tiebreak)


def volleyball_point_labels(state: VolleyballState) -> Tuple[str, str]:
    p1, p2 = state.get("currentSetPoints") or [0, 0]
    return str(p1), str(p2)


def _first_name(name: str) -> str:
    clean = InputSanitizer.sanitize_participant_name(name)
    return clean.split(" ")[0] if clean else clean


def game_status(state: TennisState, participant1_name: str, participant2_name: str) -> Optional[str]:
    """Status line for the current tennis game, or None when nothing special applies.

    Examples:
        - tiebreak -> "Tiebreak" / "Match Tiebreak"
        - 3-3, 5-5 (ad) -> "Deuce"
        - 4-3 (ad) -> "Advantage Alice"
        - 3-3 (no-ad) -> "Deciding Point (Bob chooses side)", naming the receiver
    """
    if state.get("isTiebreak"):
        return "Match Tiebreak" if state.get("tiebreakMode") == "match" else "Tiebreak"

    p1, p2 = state.get("currentGamePoints") or [0, 0]

    if state.get("isAdScoring", True):
        if tennis.is_deuce(p1, p2):
            if p1 == p2:
                return "Deuce"
            leader = participant1_name if p1 > p2 else participant2_name
            return f"Advantage {_first_name(leader)}"
    elif p1 == 3 and p2 == 3:
        receiver = participant2_name if state.get("servingParticipant") == 1 else participant1_name
        return f"Deciding Point ({_first_name(receiver)} chooses side)"

    return None


def tiebreak_server(state: TennisState) -> int:
    """Side serving the next point, for the server marker on the scoreboard."""
    return tennis.current_server(state)


def set_status(state: VolleyballState) -> str:
    if state.get("isMatchComplete"):
        return "Final"
    if volleyball.is_deciding_set(state):
        return "Deciding Set"
    return f"Set {state.get('currentSetNumber', len(state.get('sets') or []) + 1)}"


def _current_pair(state: MatchState) -> List[int]:
    if state.get("sport") == "volleyball":
        return state.get("currentSetPoints") or [0, 0]
    return state.get("currentSetGames") or [0, 0]


def score_summary(state: Optional[MatchState]) -> str:
    """Completed sets plus the live set marked with '*', e.g. "6-4  3-2*"."""
    if not state:
        return "0-0"
    scores = [f"{s[0]}-{s[1]}" for s in state.get("sets") or []]
    if not state.get("isMatchComplete"):
        current = _current_pair(state)
        scores.append(f"{current[0]}-{current[1]}*")
    return "  ".join(scores) or "0-0"


def score_summary_compact(state: Optional[MatchState]) -> str:
    """Sets won by each side, e.g. "2-1"."""
    if not state:
        return "0-0"
    sets = state.get("sets") or []
    p1 = sum(1 for s in sets if s[0] > s[1])
    p2 = sum(1 for s in sets if s[1] > s[0])
    return f"{p1}-{p2}"
