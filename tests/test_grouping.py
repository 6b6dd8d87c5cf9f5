import pytest
from processing.grouping import group_by, to_lookup

ROWS = [
    {"addr": "A", "n": 1},
    {"addr": "B", "n": 2},
    {"addr": None, "n": 3},
    {"addr": "A", "n": 4},
    {"n": 5},
    {"addr": "C", "n": 6},
    {"addr": "B", "n": 7},
]


def test_group_by_keeps_input_order_within_groups():
    groups = group_by(ROWS, lambda o: o.get("addr"))
    assert [o["n"] for o in groups["A"]] == [1, 4]
    assert [o["n"] for o in groups["B"]] == [2, 7]
    assert [o["n"] for o in groups["C"]] == [6]

def test_group_by_drops_absent_keys():
    groups = group_by(ROWS, lambda o: o.get("addr"))
    assert list(groups.keys()) == ["A", "B", "C"]
    grouped = [o["n"] for group in groups.values() for o in group]
    assert 3 not in grouped
    assert 5 not in grouped

def test_group_by_keys_are_exactly_the_distinct_present_keys():
    groups = group_by(ROWS, lambda o: o.get("addr"))
    assert set(groups) == {o["addr"] for o in ROWS if o.get("addr") is not None}
    for key, members in groups.items():
        assert members == [o for o in ROWS if o.get("addr") == key]

def test_group_by_empty_input():
    assert group_by([], lambda o: o) == {}

def test_group_by_accepts_any_iterable():
    groups = group_by((n for n in range(6)), lambda n: n % 2)
    assert groups == {"0": [0, 2, 4], "1": [1, 3, 5]}

def test_group_by_numeric_and_string_keys_collide():
    groups = group_by([{"k": 1}, {"k": "1"}, {"k": 2}], lambda o: o["k"])
    assert groups == {"1": [{"k": 1}, {"k": "1"}], "2": [{"k": 2}]}

def test_group_by_falsy_but_present_keys_are_kept():
    groups = group_by([{"k": 0}, {"k": ""}, {"k": None}], lambda o: o["k"])
    assert groups == {"0": [{"k": 0}], "": [{"k": ""}]}


def test_to_lookup_last_write_wins():
    lookup = to_lookup(ROWS, lambda o: o.get("addr"), lambda o: o["n"])
    assert lookup == {"A": 4, "B": 7, "C": 6}

def test_to_lookup_overwrite_keeps_first_position():
    lookup = to_lookup(ROWS, lambda o: o.get("addr"), lambda o: o["n"])
    assert list(lookup) == ["A", "B", "C"]

def test_to_lookup_defaults_to_membership_marker():
    lookup = to_lookup(ROWS, lambda o: o.get("addr"))
    assert lookup == {"A": True, "B": True, "C": True}

def test_to_lookup_drops_absent_keys():
    lookup = to_lookup([{"k": None, "v": 1}, {"v": 2}], lambda o: o.get("k"), lambda o: o["v"])
    assert lookup == {}

def test_to_lookup_keeps_falsy_values():
    lookup = to_lookup([{"k": "A", "v": False}], lambda o: o["k"], lambda o: o["v"])
    assert lookup == {"A": False}

@pytest.mark.parametrize("key, expected", [(1, "1"), (True, "true"), ("x", "x")])
def test_to_lookup_normalizes_keys_to_str(key, expected):
    assert list(to_lookup([key], lambda o: o)) == [expected]
