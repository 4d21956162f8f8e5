"""Tennis scoring engine (pure, no storage/transport).

Tracks points -> games -> sets, with set tiebreaks at 6-6, an optional match
tiebreak played in place of the deciding set, and serve statistics.

Architecture:
- State is a plain dict with camelCase keys (see types.TennisState)
- score_point()/score_ace()/score_fault()/undo() take a state and return a new one
- Mutations are performed on a copy; the caller's state is never modified
- Every accepted event pushes a full snapshot onto ``history`` before mutating,
  so undo() is a pop and never has to run the scoring rules backwards

Serve rotation:
- servingParticipant flips once per completed game, never mid-game
- inside a tiebreak it names the player who served the first tiebreak point;
  current_server() derives the on-court server from the point count, and
  aces and double faults are credited to that side
- the next set's first server follows from the parity of games in the set
"""
from __future__ import annotations

import logging
from copy import deepcopy
from typing import Any, Dict, List, Optional, Tuple

from .errors import InvalidInputError, InvalidStateError
from .types import TennisSnapshot, TennisState
from .validation import parse_tennis_config, validate_side

logger = logging.getLogger(__name__)

SPORT = "tennis"

_COUNTER_KEYS = ("currentSetGames", "currentGamePoints", "tiebreakPoints")


def _other(side: int) -> int:
    return 2 if side == 1 else 1


def init_match(first_server: int, config: Optional[dict] = None) -> TennisState:
    """Create a fresh tennis state.

    Args:
        first_server: Side serving the first game (1 or 2)
        config: Optional dict of TennisConfig fields; missing keys use defaults

    Raises:
        InvalidInputError: bad server or configuration
    """
    validate_side(first_server, "firstServer")
    cfg = parse_tennis_config(config)

    return {
        "sport": SPORT,
        "sets": [],
        "currentSetGames": [0, 0],
        "currentGamePoints": [0, 0],
        "servingParticipant": first_server,
        "firstServerOfSet": first_server,
        "isAdScoring": cfg.isAdScoring,
        "setsToWin": cfg.setsToWin,
        "setTiebreakTarget": cfg.setTiebreakTarget,
        "finalSetTiebreakTarget": cfg.finalSetTiebreakTarget,
        "useMatchTiebreak": cfg.useMatchTiebreak,
        "matchTiebreakTarget": cfg.matchTiebreakTarget,
        "isTiebreak": False,
        "tiebreakPoints": [0, 0],
        "tiebreakTarget": cfg.setTiebreakTarget,
        "tiebreakMode": None,
        "isMatchComplete": False,
        "aces": [0, 0],
        "doubleFaults": [0, 0],
        "faultState": 0,
        "history": [],
    }


# ==================== HISTORY ====================


def create_snapshot(state: TennisState) -> TennisSnapshot:
    """Full copy of ``state`` minus its history stack."""
    return {key: deepcopy(value) for key, value in state.items() if key != "history"}


def _with_history(state: TennisState) -> TennisState:
    new_state: Dict[str, Any] = create_snapshot(state)
    new_state["history"] = [*(state.get("history") or []), create_snapshot(state)]
    return new_state


def undo(state: TennisState) -> TennisState:
    """Restore the state as it was before the most recent scoring event.

    Raises:
        InvalidStateError: history is empty
    """
    history = state.get("history") or []
    if not history:
        logger.warning("Undo rejected: no history")
        raise InvalidStateError("No history available to undo")

    previous: Dict[str, Any] = deepcopy(history[-1])
    previous["history"] = list(history[:-1])
    if state.get("isMatchComplete") and not previous.get("isMatchComplete"):
        logger.debug("Undo reopened a completed match")
    return previous


# ==================== RULE HELPERS ====================


def count_sets_won(sets: List[List[int]]) -> Tuple[int, int]:
    p1 = sum(1 for s in sets if s[0] > s[1])
    p2 = sum(1 for s in sets if s[1] > s[0])
    return p1, p2


def is_deciding_set(state: TennisState) -> bool:
    """True when both sides are one set away from the match."""
    p1, p2 = count_sets_won(state["sets"])
    needed = state["setsToWin"] - 1
    return p1 == needed and p2 == needed


def is_deuce(p1_points: int, p2_points: int) -> bool:
    return p1_points >= 3 and p2_points >= 3


def process_game_point(state: TennisState, winner: int) -> Tuple[bool, Optional[int], List[int]]:
    """Add a point to the regular game.

    Returns (game_over, game_winner, new_points). Raw counts are kept past
    deuce, so losing an advantage reads 4-4.
    """
    points = list(state["currentGamePoints"])
    points[winner - 1] += 1
    won = points[winner - 1]
    lost = points[2 - winner]

    if state["isAdScoring"]:
        if won >= 4 and won - lost >= 2:
            return True, winner, [0, 0]
    elif won >= 4:
        # No-ad: 3-3 is the deciding point, the next point takes the game
        return True, winner, [0, 0]

    return False, None, points


def process_tiebreak_point(state: TennisState, winner: int) -> Tuple[bool, Optional[int], List[int]]:
    """Returns (tiebreak_over, tiebreak_winner, new_points)."""
    points = list(state["tiebreakPoints"])
    points[winner - 1] += 1
    target = state.get("tiebreakTarget") or state["setTiebreakTarget"]
    p1, p2 = points

    if max(p1, p2) >= target and abs(p1 - p2) >= 2:
        return True, 1 if p1 > p2 else 2, points
    return False, None, points


def process_set_game(state: TennisState, game_winner: int) -> Tuple[bool, Optional[int], List[int], bool]:
    """Credit a game and check the set.

    Returns (set_over, set_winner, new_games, start_tiebreak). ``new_games``
    is the final set score when ``set_over`` is true.
    """
    games = list(state["currentSetGames"])
    games[game_winner - 1] += 1
    p1, p2 = games

    if p1 == 6 and p2 == 6:
        return False, None, games, True

    if max(p1, p2) >= 6 and abs(p1 - p2) >= 2:
        return True, 1 if p1 > p2 else 2, games, False

    return False, None, games, False


def process_match_set(state: TennisState, set_score: List[int]) -> Tuple[bool, Optional[int], List[List[int]]]:
    """Append a finished set. Returns (match_over, match_winner, new_sets)."""
    new_sets = [list(s) for s in state["sets"]] + [list(set_score)]
    p1, p2 = count_sets_won(new_sets)

    if p1 >= state["setsToWin"]:
        return True, 1, new_sets
    if p2 >= state["setsToWin"]:
        return True, 2, new_sets
    return False, None, new_sets


def next_server(state: TennisState) -> int:
    return _other(state["servingParticipant"])


def current_server(state: TennisState) -> int:
    """Side serving the next point.

    Outside a tiebreak this is servingParticipant. Inside one,
    servingParticipant holds the tiebreak's first server and service changes
    after the first point and every two points after that.
    """
    first = state.get("servingParticipant", 1)
    if not state.get("isTiebreak"):
        return first
    played = sum(state.get("tiebreakPoints") or [0, 0])
    changes = (played + 1) // 2
    return first if changes % 2 == 0 else _other(first)


def next_first_server_of_set(first_server_of_set: int, set_score: List[int]) -> int:
    """Server of the next set's first game, continuing the game rotation."""
    if sum(set_score) % 2 == 0:
        return first_server_of_set
    return _other(first_server_of_set)


# ==================== TRANSITIONS ====================


def _ensure_scorable(state: TennisState) -> None:
    if state.get("isMatchComplete"):
        logger.warning("Scoring rejected: match already complete")
        raise InvalidStateError("Match is already complete")

    for key in _COUNTER_KEYS:
        pair = state.get(key)
        if (
            not isinstance(pair, list)
            or len(pair) != 2
            or any(isinstance(v, bool) or not isinstance(v, int) or v < 0 for v in pair)
        ):
            raise InvalidInputError(f"{key} must be two non-negative integers, got {pair!r}")


def _start_tiebreak(state: Dict[str, Any], mode: str, target: int) -> None:
    state["isTiebreak"] = True
    state["tiebreakPoints"] = [0, 0]
    state["tiebreakMode"] = mode
    state["tiebreakTarget"] = target
    logger.debug(f"{mode} tiebreak started (first to {target})")


def _finish_set(state: Dict[str, Any], set_score: List[int]) -> None:
    match_over, match_winner, new_sets = process_match_set(state, set_score)

    state["sets"] = new_sets
    state["currentSetGames"] = [0, 0]
    state["currentGamePoints"] = [0, 0]
    state["isTiebreak"] = False
    state["tiebreakPoints"] = [0, 0]
    state["tiebreakMode"] = None

    if match_over:
        state["isMatchComplete"] = True
        logger.debug(f"Match won by side {match_winner} ({new_sets})")
        return

    logger.debug(f"Set {len(new_sets)} finished {set_score[0]}-{set_score[1]}")

    server = next_first_server_of_set(state["firstServerOfSet"], set_score)
    state["firstServerOfSet"] = server
    state["servingParticipant"] = server

    if state.get("useMatchTiebreak") and is_deciding_set(state):
        # Deciding set is replaced by a single match tiebreak
        _start_tiebreak(state, "match", state["matchTiebreakTarget"])
    elif is_deciding_set(state):
        state["tiebreakTarget"] = state["finalSetTiebreakTarget"]
    else:
        state["tiebreakTarget"] = state["setTiebreakTarget"]


def _apply_point(state: Dict[str, Any], winner: int) -> None:
    """Credit one point to ``winner`` in place (state is already a copy)."""
    if state["isTiebreak"]:
        over, tiebreak_winner, points = process_tiebreak_point(state, winner)
        if not over:
            state["tiebreakPoints"] = points
            return

        if state.get("tiebreakMode") == "match":
            set_score = points
        else:
            # Tiebreak counts as the deciding game: 7-6
            set_score = list(state["currentSetGames"])
            set_score[tiebreak_winner - 1] += 1
        _finish_set(state, set_score)
        return

    game_over, game_winner, points = process_game_point(state, winner)
    if not game_over:
        state["currentGamePoints"] = points
        return

    state["currentGamePoints"] = [0, 0]
    set_over, _, games, start_tiebreak = process_set_game(state, game_winner)

    if set_over:
        _finish_set(state, games)
        return

    state["currentSetGames"] = games
    state["servingParticipant"] = next_server(state)
    if start_tiebreak:
        target = (
            state["finalSetTiebreakTarget"] if is_deciding_set(state) else state["setTiebreakTarget"]
        )
        _start_tiebreak(state, "set", target)


def score_point(state: TennisState, winning_side: int) -> TennisState:
    """Apply one point won by ``winning_side`` and return the new state.

    Raises:
        InvalidStateError: match already complete
        InvalidInputError: side not in {1, 2} or corrupt counters
    """
    _ensure_scorable(state)
    validate_side(winning_side, "winner")

    new_state = _with_history(state)
    new_state["faultState"] = 0
    _apply_point(new_state, winning_side)
    return new_state


def score_ace(state: TennisState) -> TennisState:
    """The side serving this point wins it outright; counts an ace for them."""
    _ensure_scorable(state)

    new_state = _with_history(state)
    server = current_server(new_state)
    aces = list(new_state.get("aces") or [0, 0])
    aces[server - 1] += 1
    new_state["aces"] = aces
    new_state["faultState"] = 0
    _apply_point(new_state, server)
    return new_state


def score_fault(state: TennisState) -> TennisState:
    """Record a service fault.

    A first fault only moves to the second serve. A second fault is a double
    fault: it is counted against the server and the receiver wins the point.
    """
    _ensure_scorable(state)

    new_state = _with_history(state)
    if not new_state.get("faultState"):
        new_state["faultState"] = 1
        return new_state

    server = current_server(new_state)
    double_faults = list(new_state.get("doubleFaults") or [0, 0])
    double_faults[server - 1] += 1
    new_state["doubleFaults"] = double_faults
    new_state["faultState"] = 0
    _apply_point(new_state, _other(server))
    return new_state


def match_winner(state: TennisState) -> Optional[int]:
    if not state.get("isMatchComplete"):
        return None
    p1, p2 = count_sets_won(state["sets"])
    return 1 if p1 > p2 else 2
