import pytest

from league_heatmap.services.yahoo.tree import (
    first_match,
    list_of,
    number_or_none,
    scalar_of,
    sum_numeric_deep,
    to_number,
    value_by_key,
)


def test_scalar_of_passes_plain_values_and_stringifies() -> None:
    assert scalar_of("abc") == "abc"
    assert scalar_of(12) == "12"
    assert scalar_of(3.0) == "3"
    assert scalar_of(0.25) == "0.25"
    assert scalar_of(True) == "1"
    assert scalar_of(False) == "0"
    assert scalar_of(None) is None


def test_scalar_of_wrapper_keys_in_order() -> None:
    assert scalar_of({"value": "v", "full": "f", "$": "d"}) == "d"
    assert scalar_of({"value": "v", "full": "f"}) == "f"
    assert scalar_of({"other": "o", "value": "v"}) == "v"
    # no wrapper: first non-empty value in key order
    assert scalar_of({"a": "", "b": None, "c": "third"}) == "third"


def test_scalar_of_lists_skip_empty_entries() -> None:
    assert scalar_of(["", None, [], {"full": "Team Name"}]) == "Team Name"
    assert scalar_of([]) is None


def test_scalar_of_survives_cycles() -> None:
    node: dict = {"a": {}}
    node["a"]["back"] = node
    assert scalar_of(node) is None
    node["z"] = "found"
    assert scalar_of(node) == "found"


def test_first_match_is_preorder_and_sees_containers() -> None:
    tree = {"outer": [{"hit": 1, "inner": {"hit": 2}}, {"hit": 3}]}
    seen = []

    def pred(n):
        seen.append(type(n).__name__)
        return n["hit"] if isinstance(n, dict) and "hit" in n else None

    assert first_match(tree, pred) == 1
    # root dict, the list, then the first element
    assert seen == ["dict", "list", "dict"]


def test_first_match_terminates_on_cycle() -> None:
    a: dict = {"name": "a"}
    b: dict = {"name": "b", "next": a}
    a["next"] = b
    lst: list = [a]
    lst.append(lst)
    assert first_match(lst, lambda n: None) is None
    assert first_match(lst, lambda n: n.get("name") if isinstance(n, dict) and n["name"] == "b" else None) == "b"


def test_value_by_key_finds_first_owner_and_coerces() -> None:
    payload = {"team": [[{"team_id": 7}, {"name": {"full": "Gamma"}}], {"team_key": "453.l.1.t.7"}]}
    assert value_by_key(payload, "name") == "Gamma"
    assert value_by_key(payload, "team_id") == "7"
    assert value_by_key(payload, "team_key") == "453.l.1.t.7"
    assert value_by_key(payload, "missing") is None


def test_value_by_key_continues_past_unresolvable_owner() -> None:
    payload = [{"stat_id": None}, {"stat_id": "12"}]
    assert value_by_key(payload, "stat_id") == "12"


def test_list_of_shapes() -> None:
    arr = [{"a": 1}, {"b": 2}]
    assert list_of(arr) is arr
    assert list_of({"count": 2, "0": "x", "1": "y"}) == ["x", "y"]
    assert list_of("solo") == ["solo"]
    assert list_of(0) == [0]
    assert list_of(None) == []
    assert list_of({"count": 0}) == []


def test_numbers() -> None:
    assert to_number(".455") == pytest.approx(0.455)
    assert to_number(" 12 ") == 12
    assert to_number("") == 0
    assert to_number("-") == 0
    assert to_number(None) == 0
    assert to_number("nan") == 0
    assert number_or_none("inf") is None
    assert number_or_none(True) is None
    assert number_or_none("7") == 7


def test_sum_numeric_deep() -> None:
    node = {"adds": "3", "drops": 2, "nested": [{"x": "1.5"}, "junk", None, True]}
    assert sum_numeric_deep(node) == pytest.approx(6.5)
    assert sum_numeric_deep(None) == 0
