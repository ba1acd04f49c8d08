from league_heatmap.services.yahoo.teams import (
    build_team_directory,
    parse_team_directory,
    pick_team_name,
    resolve_team_name,
)

from yahoo_payloads import FakeYahooClient, matchup, team, teams_payload, tkey


def test_structured_directory_from_sentinel_teams() -> None:
    payload = teams_payload({tkey(1): "Alpha", tkey(2): "  Bravo  "})
    assert parse_team_directory(payload) == {tkey(1): "Alpha", tkey(2): "Bravo"}


def test_structured_directory_from_array_teams() -> None:
    payload = {
        "fantasy_content": {
            "league": {
                "teams": [
                    {"team": {"team_key": tkey(3), "name": {"full": "Charlie"}}},
                    {"team": {"team_key": tkey(4), "team_name": "Delta", "name": "ignored"}},
                ]
            }
        }
    }
    assert parse_team_directory(payload) == {tkey(3): "Charlie", tkey(4): "Delta"}


def test_fallback_walk_when_structure_is_unrecognized() -> None:
    payload = {
        "fantasy_content": {
            "weird": {"wrapper": [{"team_key": tkey(5), "nickname": "Echo"}]},
            "other": {"deep": {"team_key": tkey(6), "name": "Foxtrot"}},
        }
    }
    assert parse_team_directory(payload) == {tkey(5): "Echo", tkey(6): "Foxtrot"}


def test_pick_team_name_order_and_blank_names() -> None:
    assert pick_team_name({"name": "   ", "nickname": "Nick"}) == "Nick"
    assert pick_team_name({"team_name": "T", "name": "N"}) == "T"
    assert pick_team_name({"team_key": tkey(1)}) is None


def test_build_team_directory_fetches_teams_endpoint() -> None:
    client = FakeYahooClient().add("teams", teams_payload({tkey(1): "Alpha"}))
    assert build_team_directory(client, "453.l.1520") == {tkey(1): "Alpha"}
    assert client.calls == ["/league/453.l.1520/teams"]


def test_resolve_team_name_layers() -> None:
    a, b = tkey(1), tkey(2)
    m = matchup(1, team(a, "Alpha", {}), {"team": [[{"team_key": b}]]}, [])
    directory = {}

    assert resolve_team_name(directory, m, a) == "Alpha"
    assert directory == {a: "Alpha"}  # remembered

    # no name anywhere for b: the key itself, never None
    assert resolve_team_name(directory, m, b) == b
    assert b not in directory

    directory[b] = "Known"
    assert resolve_team_name(directory, m, b) == "Known"
