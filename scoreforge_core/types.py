"""Type definitions for match state, configuration and scoring events."""
from __future__ import annotations

from typing import List, Literal, Optional, TypedDict, Union

Side = Literal[1, 2]
TiebreakMode = Literal["set", "match"]


class TennisSnapshot(TypedDict, total=False):
    """A tennis state without its history stack."""
    sport: str
    sets: List[List[int]]
    currentSetGames: List[int]
    currentGamePoints: List[int]
    servingParticipant: int
    firstServerOfSet: int
    isAdScoring: bool
    setsToWin: int
    setTiebreakTarget: int
    finalSetTiebreakTarget: int
    useMatchTiebreak: bool
    matchTiebreakTarget: int
    isTiebreak: bool
    tiebreakPoints: List[int]
    tiebreakTarget: int
    tiebreakMode: Optional[TiebreakMode]
    isMatchComplete: bool
    # Serve statistics
    aces: List[int]
    doubleFaults: List[int]
    faultState: int  # 0 = first serve pending, 1 = second serve pending


class TennisState(TennisSnapshot, total=False):
    """
    TypedDict representing a tennis match.

    Point, game and tiebreak counters are raw integers; rendering them as
    "15"/"AD"/"Deuce" is the job of scoreforge_core.display.
    """
    history: List[TennisSnapshot]


class VolleyballSnapshot(TypedDict, total=False):
    """A volleyball state without its history stack."""
    sport: str
    sets: List[List[int]]
    currentSetPoints: List[int]
    currentSetNumber: int
    servingTeam: int
    setsToWin: int
    pointsPerSet: int
    pointsPerDecidingSet: int
    minLeadToWin: int
    isMatchComplete: bool


class VolleyballState(VolleyballSnapshot, total=False):
    history: List[VolleyballSnapshot]


class TennisConfigDict(TypedDict, total=False):
    isAdScoring: bool
    setsToWin: int
    setTiebreakTarget: int
    finalSetTiebreakTarget: int
    useMatchTiebreak: bool
    matchTiebreakTarget: int


class VolleyballConfigDict(TypedDict, total=False):
    setsToWin: int
    pointsPerSet: int
    pointsPerDecidingSet: int
    minLeadToWin: int


class EventPayload(TypedDict, total=False):
    """
    TypedDict for events sent to apply_event().

    Fields vary by event type.
    """
    # Common
    type: str
    matchId: Optional[str]

    # INIT_MATCH
    sport: Optional[str]
    firstServer: Optional[int]
    config: Optional[dict]

    # SCORE_POINT
    winner: Optional[int]

    # SET_SERVER / ADJUST_SCORE (volleyball corrections)
    team: Optional[int]
    adjustment: Optional[int]


MatchState = Union[TennisState, VolleyballState]
