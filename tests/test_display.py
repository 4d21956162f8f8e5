import pytest

from scoreforge_core import (
    game_status,
    point_label,
    score_summary,
    score_summary_compact,
    set_status,
    tennis,
    tennis_point_labels,
    tiebreak_server,
    volleyball,
    volleyball_point_labels,
)


@pytest.mark.parametrize("points, expected", [(0, "0"), (1, "15"), (2, "30"), (3, "40")])
def test_point_label_regular_names(points, expected):
    assert point_label([points, 0], 1, True, False) == expected
    assert point_label([points, 0], 1, False, False) == expected


def test_point_label_past_deuce():
    assert point_label([3, 3], 1, True, False) == "40"
    assert point_label([4, 3], 1, True, False) == "AD"
    assert point_label([4, 3], 2, True, False) == "40"
    assert point_label([6, 7], 2, True, False) == "AD"
    assert point_label([5, 5], 1, True, False) == "40"
    # no advantage state exists without ad scoring
    assert point_label([4, 3], 1, False, False) == "40"


def test_point_label_tiebreak_and_missing_points():
    assert point_label([12, 11], 1, True, True) == "12"
    assert point_label([12, 11], 2, True, True) == "11"
    assert point_label([], 1, True, False) == "0"
    assert point_label([], 2, True, True) == "0"


def test_tennis_point_labels_use_tiebreak_points():
    state = tennis.init_match(1)
    state.update(isTiebreak=True, tiebreakMode="set", tiebreakPoints=[5, 3], currentGamePoints=[0, 0])
    assert tennis_point_labels(state) == ("5", "3")


def test_game_status_labels():
    state = tennis.init_match(2)
    assert game_status(state, "Alice", "Bob") is None

    state["currentGamePoints"] = [5, 6]
    assert game_status(state, "Alice Smith", "  Bob Jones ") == "Advantage Bob"

    state.update(isTiebreak=True, tiebreakMode="set")
    assert game_status(state, "Alice", "Bob") == "Tiebreak"
    state["tiebreakMode"] = "match"
    assert game_status(state, "Alice", "Bob") == "Match Tiebreak"


def test_no_ad_deciding_point_names_receiver():
    state = tennis.init_match(2, {"isAdScoring": False})
    state["currentGamePoints"] = [3, 3]
    assert game_status(state, "Alice Smith", "Bob Jones") == "Deciding Point (Alice chooses side)"


def test_tiebreak_server_alternates_every_two_points():
    state = tennis.init_match(1)
    state.update(isTiebreak=True, tiebreakMode="set", servingParticipant=2)
    servers = []
    for played in range(7):
        state["tiebreakPoints"] = [played, 0]
        servers.append(tiebreak_server(state))
    assert servers == [2, 1, 1, 2, 2, 1, 1]

    assert tiebreak_server(tennis.init_match(1)) == 1


def test_score_summary_tennis():
    state = tennis.init_match(1)
    assert score_summary(state) == "0-0*"
    state.update(sets=[[6, 4]], currentSetGames=[3, 2])
    assert score_summary(state) == "6-4  3-2*"
    assert score_summary_compact(state) == "1-0"

    state.update(sets=[[6, 4], [7, 6]], isMatchComplete=True)
    assert score_summary(state) == "6-4  7-6"
    assert score_summary_compact(state) == "2-0"
    assert score_summary(None) == "0-0"


def test_volleyball_labels_and_summary():
    state = volleyball.init_match(1, {"setsToWin": 2})
    state.update(sets=[[25, 20]], currentSetPoints=[12, 9], currentSetNumber=2)
    assert volleyball_point_labels(state) == ("12", "9")
    assert score_summary(state) == "25-20  12-9*"
    assert set_status(state) == "Set 2"

    state.update(sets=[[25, 20], [18, 25]], currentSetNumber=3)
    assert set_status(state) == "Deciding Set"

    state["isMatchComplete"] = True
    assert set_status(state) == "Final"
