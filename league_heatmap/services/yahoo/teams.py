from __future__ import annotations

from typing import Any, Dict, Optional

from league_heatmap.services.yahoo.client import league_path
from league_heatmap.services.yahoo.matchups import pick_team_key, team_node
from league_heatmap.services.yahoo.tree import _get, first_match, list_of, unwrap, value_by_key

NAME_FIELDS = ("team_name", "name", "nickname")


def pick_team_name(node: Any) -> Optional[str]:
    for field in NAME_FIELDS:
        val = value_by_key(node, field)
        if isinstance(val, str) and val.strip():
            return val.strip()
    return None


def _teams_container(payload: Any) -> Any:
    league = _get(payload, "fantasy_content", "league")
    if isinstance(league, list):
        for part in league:
            if isinstance(part, dict) and part.get("teams") is not None:
                return part["teams"]
        return None
    if isinstance(league, dict):
        return league.get("teams")
    return None


def parse_team_directory(payload: Any) -> Dict[str, str]:
    """
    {team_key: name} from a /league/{key}/teams payload.
    Structured pass over fantasy_content.league[].teams first; if that resolves
    nothing, walk the entire payload and keep any (team_key, name) pair found.
    """
    out: Dict[str, str] = {}

    container = _teams_container(payload)
    for entry in list_of(unwrap(container, "team")):
        team = unwrap(entry, "team")
        key = pick_team_key(team)
        name = pick_team_name(team)
        if key and name:
            out[key] = name

    if out:
        return out

    # Fallback: any node anywhere carrying both. Deeper nodes are visited later and win.
    def collect(n: Any):
        if isinstance(n, dict):
            key = pick_team_key(n)
            name = pick_team_name(n)
            if key and name:
                out[key] = name
        return None

    first_match(payload, collect)
    return out


def build_team_directory(client, league_key: str) -> Dict[str, str]:
    payload = client.get(league_path(league_key, "teams"))
    return parse_team_directory(payload)


def resolve_team_name(directory: Dict[str, str], matchup: Any, team_key: str) -> str:
    """
    Directory name for team_key; otherwise the name embedded in the matchup (remembered
    in the directory for next time); otherwise the key itself. Never None.
    """
    cached = directory.get(team_key)
    if cached:
        return cached
    node = team_node(matchup, team_key)
    if node is not None:
        name = pick_team_name(node)
        if name:
            directory[team_key] = name
            return name
    return team_key
