# league_heatmap/services/yahoo/matchups.py
from __future__ import annotations

import re
from typing import Any, Dict, List, Optional, Set

from league_heatmap.services.yahoo.tree import (
    _get,
    first_match,
    list_of,
    to_number,
    unwrap,
    value_by_key,
)

TEAM_KEY_RE = re.compile(r"\b\d+\.l\.\d+\.t\.\d+\b")

# -------- tiny local helpers --------
def _as_list(x: Any) -> List:
    if x is None:
        return []
    if isinstance(x, list):
        return x
    return [x]

def _child(node: Any, pos: str) -> Any:
    """
    Positional child "0"/"1": a numeric key on a dict, or the index on a list
    (Yahoo flips between the two for the same matchup).
    """
    if isinstance(node, dict):
        return node.get(pos)
    if isinstance(node, list):
        i = int(pos)
        return node[i] if i < len(node) else None
    return None

def pick_team_key(node: Any) -> Optional[str]:
    key = value_by_key(node, "team_key")
    return key if isinstance(key, str) and key else None


# ----------------------------- matchup discovery -----------------------------

def find_matchups(week_payload: Any) -> List[Any]:
    """
    Every node hanging off a `matchup` or `matchups` field anywhere in the payload,
    in traversal order. A matchup reachable both ways is collected once.
    """
    found: List[Any] = []
    seen_matchups: Set[int] = set()
    visited: Set[int] = set()

    def take(m: Any):
        if m is None or id(m) in seen_matchups:
            return
        seen_matchups.add(id(m))
        found.append(m)

    def visit(node: Any):
        if not isinstance(node, (dict, list)) or id(node) in visited:
            return
        visited.add(id(node))

        if isinstance(node, dict):
            if "matchup" in node:
                for m in _as_list(node["matchup"]):
                    take(m)
            if "matchups" in node:
                for item in list_of(node["matchups"]):
                    for m in _as_list(unwrap(item, "matchup")):
                        take(m)
            children = node.values()
        else:
            children = node
        for child in children:
            visit(child)

    visit(week_payload)
    return found


def team_keys_of(matchup: Any) -> List[str]:
    """
    First two distinct team keys found in the matchup's `teams` subtree
    (or the whole matchup when there is none). Fewer than two means unusable.
    """
    teams = _get(matchup, "teams")
    if teams is None:
        teams = first_match(matchup, lambda n: n.get("teams") if isinstance(n, dict) else None)
    root = teams if teams is not None else matchup

    keys: List[str] = []
    seen: Set[int] = set()

    def walk(x: Any):
        if len(keys) >= 2 or x is None:
            return
        if isinstance(x, str):
            mm = TEAM_KEY_RE.search(x)
            if mm and mm.group(0) not in keys:
                keys.append(mm.group(0))
            return
        if not isinstance(x, (dict, list)) or id(x) in seen:
            return
        seen.add(id(x))
        for v in (x if isinstance(x, list) else x.values()):
            walk(v)

    walk(root)
    return keys[:2]


def team_node(matchup: Any, team_key: str) -> Any:
    """
    The subtree belonging to `team_key`: a `team` container whose key matches,
    else the first node whose resolved team_key matches.
    """
    if not team_key:
        return None

    def team_container(n: Any):
        if isinstance(n, dict) and n.get("team") is not None:
            cand = n["team"]
            if pick_team_key(cand) == team_key:
                return cand
        return None

    found = first_match(matchup, team_container)
    if found is not None:
        return found
    return first_match(matchup, lambda c: c if pick_team_key(c) == team_key else None)


# ----------------------------- per-team stats -----------------------------

def stat_nodes_of(node: Any) -> List[Dict[str, Any]]:
    """Stat entries under team_stats.stats, each unwrapped from its `stat` wrapper."""
    if node is None:
        return []
    container = _get(node, "team_stats", "stats")
    if container is None:
        container = first_match(node, lambda n: _get(n, "team_stats", "stats"))
    if container is None:
        return []
    raw = list_of(unwrap(container, "stat"))
    return [unwrap(item, "stat") for item in raw if item is not None]


def stat_values_of(node: Any) -> Dict[str, float]:
    """{stat_id: value} for one team node; blank/unparsable values count as 0."""
    out: Dict[str, float] = {}
    for stat in stat_nodes_of(node):
        sid = value_by_key(stat, "stat_id")
        if not sid:
            continue
        raw = value_by_key(stat, "value")
        if raw is None:
            raw = value_by_key(stat, "stat_value")
        out[sid] = to_number(raw)
    return out


# ----------------------------- category outcomes -----------------------------

def _is_tied(raw: Optional[str]) -> bool:
    # scalar_of already folded 1/True into "1"
    return raw is not None and (raw == "1" or raw.lower() == "true")


def stat_winners(matchup: Any) -> List[Dict[str, Any]]:
    """
    [{stat_id, winner_key, is_tied}] for one matchup.
    stat_winners is looked up on the matchup, then child "0", then child "1", in that order.
    """
    swc = _get(matchup, "stat_winners")
    if swc is None:
        swc = _get(_child(matchup, "0"), "stat_winners")
    if swc is None:
        swc = _get(_child(matchup, "1"), "stat_winners")
    if swc is None:
        return []

    winners: List[Dict[str, Any]] = []
    for item in list_of(swc):
        node = unwrap(item, "stat_winner")
        if node is None:
            continue
        sid = value_by_key(node, "stat_id")
        if not sid:
            continue
        winners.append({
            "stat_id": sid,
            "winner_key": value_by_key(node, "winner_team_key") or None,
            "is_tied": _is_tied(value_by_key(node, "is_tied")),
        })
    return winners


def decided_counts(matchup: Any, key_a: str, key_b: str) -> Dict[str, int]:
    """
    Category wins per side plus ties. total == 0 means the matchup has not been
    decided yet (in-progress week) and must stay out of every aggregate.
    """
    a = b = ties = 0
    for w in stat_winners(matchup):
        if w["is_tied"]:
            ties += 1
        elif w["winner_key"] == key_a:
            a += 1
        elif w["winner_key"] == key_b:
            b += 1
    return {"wins_a": a, "wins_b": b, "ties": ties, "total": a + b + ties}
