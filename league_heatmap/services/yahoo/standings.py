from __future__ import annotations

from typing import Any, Dict, List, Optional

from league_heatmap.services.yahoo.client import league_path
from league_heatmap.services.yahoo.matchups import pick_team_key
from league_heatmap.services.yahoo.tree import (
    _get,
    first_match,
    list_of,
    number_or_none,
    scalar_of,
    sum_numeric_deep,
    unwrap,
    value_by_key,
)


def _maybe_int(v: Any) -> Optional[int]:
    n = number_or_none(scalar_of(v) if isinstance(v, (dict, list)) else v)
    return int(n) if n is not None else None


def _maybe_float(v: Any) -> Optional[float]:
    # Yahoo sends "" for percentage before games start
    return number_or_none(scalar_of(v) if isinstance(v, (dict, list)) else v)


def _standings_teams(n: Any) -> Any:
    # standings is either {"teams": ...} or a one-element list [{"teams": ...}]
    if not isinstance(n, dict) or "standings" not in n:
        return None
    return first_match(n["standings"], lambda s: s.get("teams") if isinstance(s, dict) else None)


def _teams_from_standings(payload: Any) -> List[Any]:
    container = first_match(payload, _standings_teams)
    return [unwrap(t, "team") for t in list_of(unwrap(container, "team"))]


def _txn_counter(node: Any) -> Any:
    return first_match(node, lambda n: n.get("transaction_counter") if isinstance(n, dict) else None)


def _count_with_fallback(raw: Any, derive) -> float:
    """
    Top-level count, unless missing, non-numeric or exactly 0; then the derived
    transaction-counter sum if positive, else 0.
    NOTE: a real 0 is indistinguishable from "absent" here, so a team with no
    activity always pays for the derivation. Kept as-is for compatibility.
    """
    n = _maybe_float(raw)
    if n is not None and n != 0:
        return n
    derived = derive()
    return derived if derived > 0 else 0


def _team_summary(node: Any) -> Dict[str, Any]:
    standings = first_match(node, lambda n: n.get("team_standings") if isinstance(n, dict) else None)
    outcome_totals = _get(standings, "outcome_totals")

    moves_raw = (
        value_by_key(node, "number_of_moves")
        or _get(standings, "moves")
        or (value_by_key(standings, "moves") if standings is not None else None)
    )
    trades_raw = (
        value_by_key(node, "number_of_trades")
        or _get(standings, "trades")
        or (value_by_key(standings, "trades") if standings is not None else None)
    )

    def derived_moves() -> float:
        txn = _txn_counter(node)
        if txn is None:
            return 0
        total = _get(txn, "total")
        return sum_numeric_deep(total if total is not None else txn)

    def derived_trades() -> float:
        txn = _txn_counter(node)
        trades = _get(txn, "trades")
        if trades is None:
            trades = _get(txn, "trade")
        return sum_numeric_deep(trades)

    moves = _count_with_fallback(moves_raw, derived_moves)
    trades = _count_with_fallback(trades_raw, derived_trades)

    return {
        "wins": _maybe_int(_get(outcome_totals, "wins")) or 0,
        "losses": _maybe_int(_get(outcome_totals, "losses")) or 0,
        "ties": _maybe_int(_get(outcome_totals, "ties")) or 0,
        "win_pct": _maybe_float(_get(outcome_totals, "percentage")),  # None when absent/blank
        "moves": int(moves) if float(moves).is_integer() else moves,
        "trades": int(trades) if float(trades).is_integer() else trades,
    }


def summarize_standings(payload: Any) -> Dict[str, Dict[str, Any]]:
    """
    {team_key: {wins, losses, ties, win_pct, moves, trades}} from a
    /league/{key}/standings payload. Teams without a resolvable key are skipped.
    """
    out: Dict[str, Dict[str, Any]] = {}
    for node in _teams_from_standings(payload):
        if not isinstance(node, (dict, list)):
            continue
        key = pick_team_key(node)
        if not key:
            continue
        out[key] = _team_summary(node)
    return out


def get_league_standings_raw(client, league_key: str) -> Any:
    """Untouched /league/{key}/standings payload (passthrough for the UI)."""
    return client.get(league_path(league_key, "standings"))


def get_team_standings_summary(client, league_key: str) -> Dict[str, Dict[str, Any]]:
    return summarize_standings(get_league_standings_raw(client, league_key))
