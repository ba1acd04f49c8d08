from league_heatmap.services.yahoo.matchups import (
    decided_counts,
    find_matchups,
    stat_nodes_of,
    stat_values_of,
    stat_winners,
    team_keys_of,
    team_node,
)

from yahoo_payloads import matchup, scoreboard, team, tkey, winner


def _pair(winners=None):
    a, b = tkey(1), tkey(2)
    m = matchup(
        3,
        team(a, "Alpha", {"5": ".480", "9": "33"}),
        team(b, "Bravo", {"5": ".470", "9": "41"}),
        winners if winners is not None else [winner("5", a), winner("9", b)],
    )
    return m, a, b


def test_find_matchups_sentinel_container_collects_each_once() -> None:
    m1, _, _ = _pair()
    m2, _, _ = _pair()
    found = find_matchups(scoreboard(3, [m1, m2]))
    assert found == [m1, m2]
    assert found[0] is m1 and found[1] is m2


def test_find_matchups_array_container_and_bare_matchup_field() -> None:
    m1, _, _ = _pair()
    m2, _, _ = _pair()
    payload = {"league": {"scoreboard": {"matchups": [{"matchup": m1}, m2]}}}
    assert find_matchups(payload) == [m1, m2]
    assert find_matchups({"x": {"matchup": [m1, m2]}}) == [m1, m2]
    assert find_matchups({"nothing": "here"}) == []


def test_team_keys_of_well_formed_matchup() -> None:
    m, a, b = _pair()
    assert team_keys_of(m) == [a, b]


def test_team_keys_of_malformed_matchup_has_fewer_than_two() -> None:
    a = tkey(1)
    broken = {"0": {"teams": {"0": team(a, "Alpha", {}), "1": {"team": [[{"name": "No key"}]]}, "count": 2}}}
    assert team_keys_of(broken) == [a]
    assert team_keys_of({"teams": {}}) == []


def test_team_keys_of_dedupes_and_uses_embedded_keys() -> None:
    a, b = tkey(1), tkey(2)
    m = {"teams": [{"url": f"https://x/{a}/x"}, {"team_key": a}, {"team_key": b}, {"team_key": tkey(3)}]}
    assert team_keys_of(m) == [a, b]


def test_team_node_finds_each_side() -> None:
    m, a, b = _pair()
    node_a = team_node(m, a)
    node_b = team_node(m, b)
    assert stat_values_of(node_a) == {"5": 0.48, "9": 33.0}
    assert stat_values_of(node_b) == {"5": 0.47, "9": 41.0}
    assert team_node(m, tkey(9)) is None


def test_stat_nodes_accept_stat_value_and_sentinel_stats() -> None:
    node = {
        "team_stats": {
            "stats": {
                "count": 3,
                "0": {"stat": {"stat_id": "1", "stat_value": "7"}},
                "1": {"stat_id": "2", "value": ""},
                "2": {"stat": {"value": "99"}},  # no id: dropped
            }
        }
    }
    assert len(stat_nodes_of(node)) == 3
    assert stat_values_of(node) == {"1": 7.0, "2": 0.0}
    assert stat_nodes_of(None) == []
    assert stat_values_of({"team_points": {"total": "3"}}) == {}


def test_stat_winners_root_then_child_zero_then_child_one() -> None:
    a = tkey(1)
    root = {"stat_winners": [winner("1", a)], "0": {"stat_winners": [winner("2", a)]}}
    assert [w["stat_id"] for w in stat_winners(root)] == ["1"]

    child0 = {"0": {"stat_winners": [winner("2", a)]}, "1": {"stat_winners": [winner("3", a)]}}
    assert [w["stat_id"] for w in stat_winners(child0)] == ["2"]

    child1 = {"0": {"teams": {}}, "1": {"stat_winners": {"count": 1, "0": winner("3", a)}}}
    assert [w["stat_id"] for w in stat_winners(child1)] == ["3"]

    # list-shaped matchup: positions are indexes
    as_list = [{"teams": {}}, {"stat_winners": [winner("4", a)]}]
    assert [w["stat_id"] for w in stat_winners(as_list)] == ["4"]

    assert stat_winners({"0": {}, "1": {}}) == []


def test_stat_winners_tie_spellings() -> None:
    raw = [
        {"stat_winner": {"stat_id": "1", "is_tied": 1}},
        {"stat_winner": {"stat_id": "2", "is_tied": "1"}},
        {"stat_winner": {"stat_id": "3", "is_tied": True}},
        {"stat_winner": {"stat_id": "4", "is_tied": "TRUE"}},
        {"stat_winner": {"stat_id": "5", "is_tied": "0", "winner_team_key": tkey(1)}},
        {"stat_winner": {"is_tied": 1}},  # no stat id
    ]
    out = stat_winners({"stat_winners": raw})
    assert [w["is_tied"] for w in out] == [True, True, True, True, False]
    assert out[4]["winner_key"] == tkey(1)
    assert out[0]["winner_key"] is None


def test_decided_counts() -> None:
    a, b = tkey(1), tkey(2)
    m, _, _ = _pair([winner("5", a), winner("9", b), winner("12", a),
                     winner("14", tied=True), winner("15", tkey(77))])
    assert decided_counts(m, a, b) == {"wins_a": 2, "wins_b": 1, "ties": 1, "total": 4}


def test_decided_counts_zero_for_in_progress() -> None:
    m, a, b = _pair([])
    assert decided_counts(m, a, b)["total"] == 0
