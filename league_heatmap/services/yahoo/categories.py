from __future__ import annotations

from typing import Any, Dict, Iterable, List, Optional

from league_heatmap.services.cache import TTLCache
from league_heatmap.services.yahoo.client import league_path
from league_heatmap.services.yahoo.tree import _get, first_match, list_of, number_or_none, unwrap, value_by_key


def _maybe_num(raw: Any) -> Optional[int | float]:
    v = number_or_none(raw)
    if v is None:
        return None
    return int(v) if v.is_integer() else v


def _truthy_flag(raw: Optional[str]) -> bool:
    return raw is not None and (raw == "1" or raw.lower() == "true")


def category_sort_key(cat: Dict[str, Any]) -> float:
    """sort_order, else the numeric stat id, else 0."""
    order = cat.get("sort_order")
    if order is not None:
        return order
    num = number_or_none(cat.get("id"))
    return num if num is not None else 0


def sort_categories(categories: Iterable[Dict[str, Any]]) -> List[Dict[str, Any]]:
    # sorted() is stable: equal keys keep their enumeration order
    return sorted(categories, key=category_sort_key)


def placeholder_category(stat_id: str) -> Dict[str, Any]:
    return {
        "id": stat_id,
        "name": stat_id,
        "display_name": stat_id,
        "sort_order": None,
        "decimal_places": None,
        "position_type": None,
        "is_only_display": False,
    }


def _normalize_category(node: Any) -> Optional[Dict[str, Any]]:
    sid = value_by_key(node, "stat_id")
    if not sid:
        return None
    name = value_by_key(node, "name") or None
    display = (
        value_by_key(node, "display_name")
        or value_by_key(node, "abbrev")
        or name
        or sid
    )
    sort_order = _maybe_num(value_by_key(node, "sort_order"))
    if sort_order is None:
        sort_order = _maybe_num(sid)
    if sort_order is None:
        sort_order = 0
    return {
        "id": sid,
        "name": name or display,
        "display_name": display,
        "sort_order": sort_order,
        "decimal_places": _maybe_num(value_by_key(node, "decimal_places")),
        "position_type": value_by_key(node, "position_type") or None,
        "is_only_display": _truthy_flag(value_by_key(node, "is_only_display_stat")),
    }


def normalize_categories(settings_payload: Any) -> List[Dict[str, Any]]:
    """
    Stat categories from a /league/{key}/settings payload, sorted for display.
    Nodes without a stat_id are dropped.
    """
    container = first_match(settings_payload, lambda n: _get(n, "stat_categories", "stats"))
    out: List[Dict[str, Any]] = []
    for item in list_of(unwrap(container, "stat")):
        cat = _normalize_category(unwrap(item, "stat"))
        if cat is not None:
            out.append(cat)
    return sort_categories(out)


def get_stat_categories(
    client,
    league_key: str,
    cache: Optional[TTLCache] = None,
) -> List[Dict[str, Any]]:
    def _fetch() -> List[Dict[str, Any]]:
        payload = client.get(league_path(league_key, "settings"))
        return normalize_categories(payload)

    if cache is None:
        return _fetch()
    return cache.get_or_compute(league_key, _fetch)


def order_categories(catalog: List[Dict[str, Any]], stat_ids: Iterable[str]) -> List[Dict[str, Any]]:
    """
    Catalog entries plus a placeholder for every id the catalog does not know,
    re-sorted with the same key. Catalog order comes first among equal keys.
    """
    known: Dict[str, Dict[str, Any]] = {c["id"]: c for c in catalog}
    for sid in stat_ids:
        if sid not in known:
            known[sid] = placeholder_category(sid)
    return sort_categories(known.values())
