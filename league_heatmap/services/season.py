# league_heatmap/services/season.py
from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional

from league_heatmap.services.cache import TTLCache, key_tuple
from league_heatmap.services.yahoo.categories import get_stat_categories, order_categories
from league_heatmap.services.yahoo.errors import NoData
from league_heatmap.services.yahoo.matchups import (
    decided_counts,
    stat_values_of,
    stat_winners,
    team_keys_of,
    team_node,
)
from league_heatmap.services.yahoo.scoreboard import clamp_week_range, fetch_scoreboard_weeks
from league_heatmap.services.yahoo.teams import build_team_directory, resolve_team_name


def empty_record() -> Dict[str, int]:
    return {"wins": 0, "losses": 0, "ties": 0}


@dataclass
class SeasonStats:
    """Season-wide fold of every decided matchup in a week range."""

    team_dir: Dict[str, str]
    weeks: List[Dict[str, Any]]
    categories: List[Dict[str, Any]]
    # team -> stat_id -> summed value
    totals_by_team: Dict[str, Dict[str, float]] = field(default_factory=dict)
    # team -> stat_id -> {wins, losses, ties}
    outcomes_by_team: Dict[str, Dict[str, Dict[str, int]]] = field(default_factory=dict)
    # team -> stat_id -> per-game (team - opponent), in week order
    margins_by_team: Dict[str, Dict[str, List[float]]] = field(default_factory=dict)
    totals_by_category: Dict[str, float] = field(default_factory=dict)
    win_equivalents_by_category: Dict[str, float] = field(default_factory=dict)
    games_by_category: Dict[str, int] = field(default_factory=dict)
    matchups_used: int = 0
    league_key: Optional[str] = None
    from_week: Optional[int] = None
    to_week: Optional[int] = None

    def team_keys(self) -> List[str]:
        """Every team that shows up in totals, outcomes or margins (first-seen order)."""
        seen: Dict[str, None] = {}
        for store in (self.totals_by_team, self.outcomes_by_team, self.margins_by_team):
            for k in store:
                seen.setdefault(k, None)
        return list(seen)

    def team_name(self, team_key: str) -> str:
        return self.team_dir.get(team_key) or team_key

    def outcome(self, team_key: str, stat_id: str) -> Dict[str, int]:
        return self.outcomes_by_team.get(team_key, {}).get(stat_id) or empty_record()


def _add(store: Dict[str, float], key: str, amount: float) -> None:
    store[key] = store.get(key, 0) + amount


def _record(stats: SeasonStats, team_key: str, stat_id: str) -> Dict[str, int]:
    return stats.outcomes_by_team.setdefault(team_key, {}).setdefault(stat_id, empty_record())


def _fold_matchup(stats: SeasonStats, matchup: Any, seen_ids: Dict[str, None]) -> bool:
    keys = team_keys_of(matchup)
    if len(keys) < 2:
        return False
    key_a, key_b = keys
    if decided_counts(matchup, key_a, key_b)["total"] == 0:
        return False  # in-progress / not started

    values: Dict[str, Dict[str, float]] = {}
    for key in keys:
        node = team_node(matchup, key)
        if node is None:
            return False
        values[key] = stat_values_of(node)
        resolve_team_name(stats.team_dir, matchup, key)

    for key in keys:
        totals = stats.totals_by_team.setdefault(key, {})
        for sid, value in values[key].items():
            seen_ids.setdefault(sid, None)
            _add(totals, sid, value)
            _add(stats.totals_by_category, sid, value)

    ids = list(dict.fromkeys([*values[key_a], *values[key_b]]))
    for sid in ids:
        a_val = values[key_a].get(sid, 0)
        b_val = values[key_b].get(sid, 0)
        stats.margins_by_team.setdefault(key_a, {}).setdefault(sid, []).append(a_val - b_val)
        stats.margins_by_team.setdefault(key_b, {}).setdefault(sid, []).append(b_val - a_val)

    for w in stat_winners(matchup):
        sid = w["stat_id"]
        seen_ids.setdefault(sid, None)
        # games count stat_winner entries, not stat-map ids, so credit summed over teams equals games
        _add(stats.games_by_category, sid, 1)
        winner = w["winner_key"]
        if w["is_tied"] or winner not in keys:
            for key in keys:
                _record(stats, key, sid)["ties"] += 1
                _add(stats.win_equivalents_by_category, sid, 0.5)
            continue
        loser = key_b if winner == key_a else key_a
        _record(stats, winner, sid)["wins"] += 1
        _record(stats, loser, sid)["losses"] += 1
        _add(stats.win_equivalents_by_category, sid, 1)

    return True


def aggregate_season(
    weeks: List[Dict[str, Any]],
    catalog: List[Dict[str, Any]],
    team_dir: Optional[Dict[str, str]] = None,
) -> SeasonStats:
    """
    Pure fold over [{"week": N, "matchups": [...]}, ...].
    A matchup counts only with two team keys, both team nodes present and at
    least one decided category; anything else is skipped without touching the totals.
    """
    stats = SeasonStats(team_dir=dict(team_dir or {}), weeks=weeks, categories=[])
    seen_ids: Dict[str, None] = {}

    for wk in weeks:
        for matchup in wk.get("matchups") or []:
            if _fold_matchup(stats, matchup, seen_ids):
                stats.matchups_used += 1

    stats.categories = order_categories(catalog, seen_ids)
    return stats


def collect_season_stats(
    client,
    league_key: str,
    from_week: int = 1,
    to_week: int = 40,
    *,
    season_cache: Optional[TTLCache] = None,
    category_cache: Optional[TTLCache] = None,
) -> SeasonStats:
    """
    Fetch teams + every scoreboard week in range + settings, then fold.
    Cached per (league, from, to); a miss recomputes everything.
    Raises NoData when the range holds no decided matchup.
    """
    lo, hi = clamp_week_range(from_week, to_week)

    def _compute() -> SeasonStats:
        team_dir = build_team_directory(client, league_key)
        weeks = fetch_scoreboard_weeks(client, league_key, lo, hi)
        if not weeks:
            raise NoData()
        catalog = get_stat_categories(client, league_key, category_cache)
        stats = aggregate_season(weeks, catalog, team_dir)
        if stats.matchups_used == 0:
            raise NoData()
        stats.league_key = league_key
        stats.from_week = lo
        stats.to_week = hi
        return stats

    if season_cache is None:
        return _compute()
    return season_cache.get_or_compute(key_tuple(league_key, lo, hi), _compute)
