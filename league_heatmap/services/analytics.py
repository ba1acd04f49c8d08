# league_heatmap/services/analytics.py
from __future__ import annotations

from statistics import mean, pstdev
from typing import Any, Dict, List, Optional, Sequence

from league_heatmap.services.season import SeasonStats


# ========= Per-category metrics (pure) =========

def consistency(values: Sequence[float]) -> Dict[str, Any]:
    """
    Sharpe-style consistency of a margin series: mean / population std-dev.
    Fewer than 2 samples has std-dev 0, and std-dev 0 has no score.
    """
    avg = mean(values) if values else 0.0
    std = pstdev(values, avg) if len(values) >= 2 else 0.0
    return {
        "mean": avg,
        "stdDev": std,
        "sharpe": (avg / std) if std > 0 else None,
        "samples": len(values),
    }


def contribution_value(record: Dict[str, int]) -> float:
    """Win-equivalents earned: wins + half the ties."""
    return record.get("wins", 0) + 0.5 * record.get("ties", 0)


def efficiency_delta(
    volume: float,
    record: Dict[str, int],
    league_volume: float,
    league_win_equivalents: float,
) -> Dict[str, float]:
    """
    actual = wins + 0.5 * ties
    expected = share of the league's raw volume * league win-equivalents (0 if no volume)
    Across all teams the deltas of one category sum to 0.
    """
    actual = contribution_value(record)
    expected = (volume / league_volume) * league_win_equivalents if league_volume else 0.0
    return {"actual": actual, "expected": expected, "delta": actual - expected}


def win_pct(wins: float, losses: float, ties: float, explicit: Optional[float] = None) -> Optional[float]:
    if explicit is not None:
        return explicit
    games = wins + losses + ties
    return ((wins + 0.5 * ties) / games) if games > 0 else None


# ========= Season-level builders =========

def sharpe_rows(stats: SeasonStats) -> List[Dict[str, Any]]:
    out: List[Dict[str, Any]] = []
    for team_key in stats.team_keys():
        margins = stats.margins_by_team.get(team_key, {})
        cats = []
        for cat in stats.categories:
            values = margins.get(cat["id"]) or []
            if not values:
                continue
            cats.append({"statId": cat["id"], "label": cat["display_name"], **consistency(values)})
        out.append({"teamKey": team_key, "teamName": stats.team_name(team_key), "categories": cats})
    return out


def ebitda_rows(stats: SeasonStats) -> List[Dict[str, Any]]:
    out: List[Dict[str, Any]] = []
    for team_key in stats.team_keys():
        totals = stats.totals_by_team.get(team_key, {})
        total_delta = 0.0
        cats = []
        for cat in stats.categories:
            sid = cat["id"]
            row = efficiency_delta(
                totals.get(sid, 0),
                stats.outcome(team_key, sid),
                stats.totals_by_category.get(sid, 0),
                stats.win_equivalents_by_category.get(sid, 0),
            )
            total_delta += row["delta"]
            cats.append({"statId": sid, "label": cat["display_name"], **row})
        out.append({
            "teamKey": team_key,
            "teamName": stats.team_name(team_key),
            "totalDelta": total_delta,
            "categories": cats,
        })
    return out


def contribution_rows(stats: SeasonStats) -> List[Dict[str, Any]]:
    out: List[Dict[str, Any]] = []
    for team_key in stats.team_keys():
        total = 0.0
        cats = []
        for cat in stats.categories:
            value = contribution_value(stats.outcome(team_key, cat["id"]))
            total += value
            cats.append({"statId": cat["id"], "label": cat["display_name"], "value": value})
        out.append({
            "teamKey": team_key,
            "teamName": stats.team_name(team_key),
            "total": total,
            "categories": cats,
        })
    return out


def roster_moves_row(team_key: str, team_name: str, summary: Dict[str, Any]) -> Dict[str, Any]:
    wins = summary.get("wins") or 0
    losses = summary.get("losses") or 0
    ties = summary.get("ties") or 0
    return {
        "teamKey": team_key,
        "teamName": team_name,
        "moves": summary.get("moves") or 0,
        "trades": summary.get("trades") or 0,
        "wins": wins,
        "losses": losses,
        "ties": ties,
        "winPct": win_pct(wins, losses, ties, summary.get("win_pct")),
    }


def build_season_analytics(stats: SeasonStats, standings: Dict[str, Dict[str, Any]]) -> Dict[str, Any]:
    return {
        "sharpe": sharpe_rows(stats),
        "ebitda": ebitda_rows(stats),
        "contributionTree": contribution_rows(stats),
        "rosterMoves": [
            roster_moves_row(team_key, stats.team_name(team_key), summary)
            for team_key, summary in standings.items()
        ],
    }

