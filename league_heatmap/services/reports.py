from __future__ import annotations

from typing import Any, Dict, List, Tuple

from league_heatmap.services.season import SeasonStats
from league_heatmap.services.yahoo.errors import NoData
from league_heatmap.services.yahoo.matchups import decided_counts, team_keys_of
from league_heatmap.services.yahoo.scoreboard import clamp_week_range, fetch_scoreboard_weeks
from league_heatmap.services.yahoo.teams import build_team_directory, resolve_team_name


def _result(mine: int, theirs: int) -> str:
    if mine > theirs:
        return "W"
    if mine < theirs:
        return "L"
    return "T"


# ---------------- Weekly matrix ----------------

def weekly_rows(weeks: List[Dict[str, Any]], team_dir: Dict[str, str]) -> List[Dict[str, Any]]:
    """
    Two rows per decided matchup, one from each side:
    {team, week, points, opp_points, result, opp_name}. points = categories won.
    """
    rows: List[Dict[str, Any]] = []
    for wk in weeks:
        for m in wk.get("matchups") or []:
            keys = team_keys_of(m)
            if len(keys) < 2:
                continue
            a_key, b_key = keys
            sw = decided_counts(m, a_key, b_key)
            if sw["total"] == 0:
                continue  # in-progress week

            a_name = resolve_team_name(team_dir, m, a_key)
            b_name = resolve_team_name(team_dir, m, b_key)
            a_pts, b_pts = sw["wins_a"], sw["wins_b"]
            rows.append({"week": wk["week"], "team": a_name, "points": a_pts, "opp_points": b_pts,
                         "result": _result(a_pts, b_pts), "opp_name": b_name})
            rows.append({"week": wk["week"], "team": b_name, "points": b_pts, "opp_points": a_pts,
                         "result": _result(b_pts, a_pts), "opp_name": a_name})
    return rows


def build_weekly_matrix(rows: List[Dict[str, Any]]) -> Dict[str, Any]:
    """
    teams x weeks grids, index-aligned: teams sorted by average weekly points (desc),
    weeks ascending. Cells with no game are None ("" for oppName).
    """
    totals: Dict[str, float] = {}
    counts: Dict[str, int] = {}
    by_cell: Dict[Tuple[str, int], Dict[str, Any]] = {}
    for r in rows:
        totals[r["team"]] = totals.get(r["team"], 0) + r["points"]
        counts[r["team"]] = counts.get(r["team"], 0) + 1
        by_cell.setdefault((r["team"], r["week"]), r)

    teams = sorted(totals, key=lambda t: totals[t] / counts[t], reverse=True)
    weeks = sorted({r["week"] for r in rows})

    def grid(field: str, default: Any) -> List[List[Any]]:
        return [
            [by_cell[(t, w)][field] if (t, w) in by_cell else default for w in weeks]
            for t in teams
        ]

    return {
        "teams": teams,
        "weeks": weeks,
        "points": grid("points", None),
        "outcome": grid("result", None),
        "oppPoints": grid("opp_points", None),
        "oppName": grid("opp_name", ""),
    }


def get_weekly_matrix(client, league_key: str, from_week: int = 1, to_week: int = 40) -> Dict[str, Any]:
    lo, hi = clamp_week_range(from_week, to_week)
    team_dir = build_team_directory(client, league_key)
    weeks = fetch_scoreboard_weeks(client, league_key, lo, hi)
    rows = weekly_rows(weeks, team_dir)
    if not rows:
        raise NoData()
    return {"league_key": league_key, **build_weekly_matrix(rows)}


# ---------------- Category stats ----------------

def build_category_stats(stats: SeasonStats) -> Dict[str, Any]:
    """
    {categories, teams:[{key, name, totals{stat_id: sum}, outcomes{stat_id: {wins, losses, ties, winPct, played}}}]}
    Every team carries every category (0 / empty record when it never had one).
    """
    team_keys = list(dict.fromkeys([*stats.totals_by_team, *stats.outcomes_by_team]))
    if not team_keys:
        raise NoData()

    teams = []
    for team_key in team_keys:
        totals_map = stats.totals_by_team.get(team_key, {})
        totals: Dict[str, float] = {}
        outcomes: Dict[str, Dict[str, Any]] = {}
        for cat in stats.categories:
            sid = cat["id"]
            totals[sid] = totals_map.get(sid, 0)
            rec = stats.outcome(team_key, sid)
            played = rec["wins"] + rec["losses"] + rec["ties"]
            outcomes[sid] = {
                "wins": rec["wins"],
                "losses": rec["losses"],
                "ties": rec["ties"],
                "winPct": ((rec["wins"] + 0.5 * rec["ties"]) / played) if played else None,
                "played": played,
            }
        teams.append({"key": team_key, "name": stats.team_name(team_key), "totals": totals, "outcomes": outcomes})

    return {"categories": stats.categories, "teams": teams}
