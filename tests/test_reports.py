import pytest

from league_heatmap.services.reports import (
    build_category_stats,
    build_weekly_matrix,
    get_weekly_matrix,
    weekly_rows,
)
from league_heatmap.services.season import SeasonStats, collect_season_stats
from league_heatmap.services.yahoo.errors import NoData

from yahoo_payloads import FakeYahooClient, LEAGUE_KEY, matchup, scoreboard, team, teams_payload, tkey, two_team_league, winner


def _week(w, a, b, winners):
    return {"week": w, "matchups": [matchup(w, team(a, f"N{a[-1]}", {}), team(b, f"N{b[-1]}", {}), winners)]}


def test_weekly_rows_two_per_decided_matchup() -> None:
    a, b = tkey(1), tkey(2)
    weeks = [
        _week(1, a, b, [winner("5", a), winner("9", a), winner("12", b), winner("14", tied=True)]),
        _week(2, a, b, []),
    ]
    rows = weekly_rows(weeks, {a: "Alpha"})
    assert rows == [
        {"week": 1, "team": "Alpha", "points": 2, "opp_points": 1, "result": "W", "opp_name": "N2"},
        {"week": 1, "team": "N2", "points": 1, "opp_points": 2, "result": "L", "opp_name": "Alpha"},
    ]


def test_weekly_matrix_grids_are_aligned_and_sorted() -> None:
    rows = [
        {"week": 1, "team": "A", "points": 2, "opp_points": 5, "result": "L", "opp_name": "B"},
        {"week": 1, "team": "B", "points": 5, "opp_points": 2, "result": "W", "opp_name": "A"},
        {"week": 3, "team": "A", "points": 4, "opp_points": 4, "result": "T", "opp_name": "C"},
        {"week": 3, "team": "C", "points": 4, "opp_points": 4, "result": "T", "opp_name": "A"},
    ]
    out = build_weekly_matrix(rows)

    assert out["teams"] == ["B", "C", "A"]
    assert out["weeks"] == [1, 3]
    assert out["points"] == [[5, None], [None, 4], [2, 4]]
    assert out["outcome"] == [["W", None], [None, "T"], ["L", "T"]]
    assert out["oppPoints"] == [[2, None], [None, 4], [5, 4]]
    assert out["oppName"] == [["A", ""], ["", "A"], ["B", "C"]]


def test_get_weekly_matrix_from_client() -> None:
    client, _, _ = two_team_league()
    out = get_weekly_matrix(client, LEAGUE_KEY, 1, 25)
    assert out["league_key"] == LEAGUE_KEY
    assert out["teams"] == ["Alpha", "Bravo"]
    assert out["weeks"] == [1]
    assert out["outcome"] == [["W"], ["L"]]


def test_get_weekly_matrix_no_data() -> None:
    a, b = tkey(1), tkey(2)
    client = (
        FakeYahooClient()
        .add("teams", teams_payload({a: "Alpha", b: "Bravo"}))
        .add("scoreboard;week=1", scoreboard(1, [matchup(1, team(a, "Alpha", {}), team(b, "Bravo", {}), [])]))
    )
    with pytest.raises(NoData):
        get_weekly_matrix(client, LEAGUE_KEY, 1, 3)


def test_category_stats_rows() -> None:
    client, a, b = two_team_league()
    out = build_category_stats(collect_season_stats(client, LEAGUE_KEY, 1, 25))

    assert [c["id"] for c in out["categories"]] == ["5", "9"]
    teams = {t["key"]: t for t in out["teams"]}
    assert teams[a]["name"] == "Alpha"
    assert teams[a]["totals"] == {"5": pytest.approx(0.5), "9": pytest.approx(40)}
    assert teams[a]["outcomes"]["5"] == {"wins": 1, "losses": 0, "ties": 0, "winPct": 1.0, "played": 1}
    assert teams[b]["outcomes"]["9"]["winPct"] == 0.5


def test_category_stats_empty_is_no_data() -> None:
    with pytest.raises(NoData):
        build_category_stats(SeasonStats(team_dir={}, weeks=[], categories=[]))
