"""
Shape-agnostic helpers over Yahoo's JSON.

Yahoo represents the same collection as a list in one payload and as a
{"count": N, "0": {...}, "1": {...}} object in the next, and wraps scalars as
{"$": ...}, {"full": ...} or {"value": ...} about half the time. Everything that
reads a payload goes through the four primitives here instead of branching on shape.
"""
from __future__ import annotations

import math
from typing import Any, Callable, List, Optional, Set

JSON = Any
Predicate = Callable[[JSON], Any]

WRAPPER_KEYS = ("$", "full", "value")
COUNT_SENTINEL = "count"


# ---------------- Small utils ----------------
def _get(d: Any, *keys) -> Any:
    cur = d
    for k in keys:
        if isinstance(cur, dict) and k in cur:
            cur = cur[k]
        else:
            return None
    return cur


def _present(v: Optional[str]) -> bool:
    return v is not None and v != ""


def _number_to_str(v: int | float) -> str:
    if isinstance(v, float) and v.is_integer():
        return str(int(v))
    return str(v)


# ---------------- Primitives ----------------
def scalar_of(node: JSON) -> Optional[str]:
    """
    Coerce any node to one string scalar.
      - str passes through, numbers are stringified, booleans become "1"/"0"
      - lists: first element with a non-empty scalar
      - dicts: wrapper keys "$", "full", "value" first, then every key in order
    """
    seen: Set[int] = set()

    def rec(v: JSON) -> Optional[str]:
        if v is None:
            return None
        if isinstance(v, bool):
            return "1" if v else "0"
        if isinstance(v, str):
            return v
        if isinstance(v, (int, float)):
            return _number_to_str(v)
        if not isinstance(v, (list, dict)):
            return None
        if id(v) in seen:
            return None
        seen.add(id(v))

        if isinstance(v, list):
            for item in v:
                got = rec(item)
                if _present(got):
                    return got
            return None

        for k in WRAPPER_KEYS:
            if k in v:
                got = rec(v[k])
                if _present(got):
                    return got
        for k in v:
            got = rec(v[k])
            if _present(got):
                return got
        return None

    return rec(node)


def first_match(root: JSON, predicate: Predicate) -> Any:
    """
    Depth-first, pre-order walk over lists (index order) and dicts (key order).
    `predicate` runs on every list/dict node; the first non-None result wins.
    Scalars are leaves and are never handed to the predicate.
    """
    seen: Set[int] = set()

    def walk(x: JSON) -> Any:
        if not isinstance(x, (list, dict)):
            return None
        if id(x) in seen:
            return None
        seen.add(id(x))

        got = predicate(x)
        if got is not None:
            return got

        children = x if isinstance(x, list) else x.values()
        for child in children:
            found = walk(child)
            if found is not None:
                return found
        return None

    return walk(root)


def value_by_key(root: JSON, key: str) -> Optional[str]:
    """Scalar value of the first node (pre-order) that owns `key`."""
    return first_match(
        root,
        lambda n: scalar_of(n[key]) if isinstance(n, dict) and key in n else None,
    )


def list_of(node: JSON) -> List[JSON]:
    """
    list -> itself; dict -> values of every key except "count" (in order);
    any other non-null value -> [value]; None -> [].
    """
    if node is None:
        return []
    if isinstance(node, list):
        return node
    if isinstance(node, dict):
        return [v for k, v in node.items() if k != COUNT_SENTINEL and v is not None]
    return [node]


def unwrap(node: JSON, key: str) -> JSON:
    """node[key] when node is a dict that has it, else node itself."""
    if isinstance(node, dict) and node.get(key) is not None:
        return node[key]
    return node


# ---------------- Numbers ----------------
def number_or_none(raw: Any) -> Optional[float]:
    if raw is None or isinstance(raw, bool):
        return None
    if isinstance(raw, (int, float)):
        return float(raw) if math.isfinite(raw) else None
    if isinstance(raw, str):
        s = raw.strip()
        if s == "":
            return None
        try:
            v = float(s)
        except ValueError:
            return None
        return v if math.isfinite(v) else None
    return None


def to_number(raw: Any) -> float:
    """Stat value parsing: missing, blank or non-numeric counts as 0."""
    v = number_or_none(raw)
    return v if v is not None else 0.0


def sum_numeric_deep(node: JSON) -> float:
    """Sum every numeric leaf (numeric strings included) under node."""
    seen: Set[int] = set()

    def rec(x: JSON) -> float:
        if isinstance(x, (list, dict)):
            if id(x) in seen:
                return 0.0
            seen.add(id(x))
            children = x if isinstance(x, list) else x.values()
            return sum(rec(c) for c in children)
        v = number_or_none(x)
        return v if v is not None else 0.0

    return rec(node)
