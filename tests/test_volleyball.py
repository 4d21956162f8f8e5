from copy import deepcopy
from itertools import cycle

import pytest

from scoreforge_core import InvalidInputError, InvalidStateError, volleyball


def _points(state, side, n=1):
    for _ in range(n):
        state = volleyball.score_point(state, side)
    return state


def _level(state, n):
    for _ in range(n):
        state = volleyball.score_point(state, 1)
        state = volleyball.score_point(state, 2)
    return state


def test_init_match_defaults():
    state = volleyball.init_match(1)
    assert state["sport"] == "volleyball"
    assert state["setsToWin"] == 3
    assert state["pointsPerSet"] == 25
    assert state["pointsPerDecidingSet"] == 15
    assert state["minLeadToWin"] == 2
    assert state["currentSetNumber"] == 1
    assert state["servingTeam"] == 1
    assert state["history"] == []


def test_init_match_rejects_bad_input():
    with pytest.raises(InvalidInputError):
        volleyball.init_match(0)
    with pytest.raises(InvalidInputError):
        volleyball.init_match(1, {"pointsPerSet": -5})


def test_rally_winner_takes_serve():
    state = volleyball.init_match(1)
    state = volleyball.score_point(state, 2)
    assert state["servingTeam"] == 2
    state = volleyball.score_point(state, 2)
    assert state["servingTeam"] == 2
    state = volleyball.score_point(state, 1)
    assert state["servingTeam"] == 1
    assert state["currentSetPoints"] == [1, 2]


def test_set_won_at_target_with_two_point_lead():
    state = _level(volleyball.init_match(1), 23)
    state = volleyball.score_point(state, 1)
    assert state["sets"] == []
    state = volleyball.score_point(state, 1)
    assert state["sets"] == [[25, 23]]
    assert state["currentSetPoints"] == [0, 0]
    assert state["currentSetNumber"] == 2
    assert state["servingTeam"] == 1


def test_no_cap_past_target():
    state = _level(volleyball.init_match(1), 24)
    assert state["currentSetPoints"] == [24, 24]
    state = volleyball.score_point(state, 1)
    assert state["sets"] == []
    state = volleyball.score_point(state, 2)
    state = _level(state, 10)
    assert state["currentSetPoints"] == [35, 35]
    assert state["sets"] == []
    state = _points(state, 2, 2)
    assert state["sets"] == [[35, 37]]


def test_extended_set_won_twenty_six_twenty_four():
    state = _level(volleyball.init_match(1), 24)
    state = volleyball.score_point(state, 1)
    assert state["currentSetPoints"] == [25, 24]
    state = volleyball.score_point(state, 1)
    assert state["sets"] == [[26, 24]]


def test_deciding_set_uses_deciding_target():
    state = volleyball.init_match(1, {"setsToWin": 2})
    state = _points(state, 1, 25)
    state = _points(state, 2, 25)
    assert state["sets"] == [[25, 0], [0, 25]]
    assert volleyball.is_deciding_set(state)
    assert volleyball.set_target(state) == 15

    state = _level(state, 13)
    state = _points(state, 2, 2)
    assert state["sets"][-1] == [13, 15]
    assert state["isMatchComplete"] is True
    assert volleyball.match_winner(state) == 2


def test_completed_match_rejects_scoring_and_adjustments():
    state = volleyball.init_match(1, {"setsToWin": 1})
    # a single-set match is its own deciding set
    state = _points(state, 1, 15)
    assert state["isMatchComplete"] is True

    before = deepcopy(state)
    with pytest.raises(InvalidStateError):
        volleyball.score_point(state, 2)
    with pytest.raises(InvalidStateError):
        volleyball.adjust_score(state, 1, 1)
    assert state == before


def test_undo_inverts_every_rally():
    state = volleyball.init_match(2, {"setsToWin": 2})
    pattern = cycle([1, 2, 2, 1, 1, 1, 2])
    while not state["isMatchComplete"]:
        new_state = volleyball.score_point(state, next(pattern))
        assert volleyball.undo(new_state) == state
        assert len(new_state["sets"]) >= len(state["sets"])
        state = new_state

    assert len(state["sets"]) <= 3
    assert len(state["history"]) == sum(sum(s) for s in state["sets"])


def test_undo_with_empty_history_raises():
    with pytest.raises(InvalidStateError):
        volleyball.undo(volleyball.init_match(1))


def test_set_server_and_adjust_score_are_corrections():
    state = _points(volleyball.init_match(1), 1, 3)
    moved = volleyball.set_server(state, 2)
    assert moved["servingTeam"] == 2
    assert moved["history"] == state["history"]

    adjusted = volleyball.adjust_score(state, 1, -5)
    assert adjusted["currentSetPoints"] == [0, 0]
    adjusted = volleyball.adjust_score(state, 2, 4)
    assert adjusted["currentSetPoints"] == [3, 4]
    assert state["currentSetPoints"] == [3, 0]

    with pytest.raises(InvalidInputError):
        volleyball.set_server(state, 3)
    with pytest.raises(InvalidInputError):
        volleyball.adjust_score(state, 1, 1.5)
