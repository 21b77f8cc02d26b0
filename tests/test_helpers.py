import pytest

from lalrgen.helpers import (
    add_to_set_map,
    assign_indices,
    merge_set_maps,
    record_nested,
    unescape,
)


def test_assign_indices_sorted_and_consecutive():
    mapping = {}
    symbols = {"id", "+", "(", ")", "*"}
    end = assign_indices(symbols, mapping, 0)
    assert end == len(symbols)
    assert [name for name, _ in sorted(mapping.items(), key=lambda kv: kv[1])] == sorted(symbols)


def test_assign_indices_continues_from_start():
    mapping = {}
    first_end = assign_indices({"b", "a"}, mapping, 0)
    second_end = assign_indices({"Y", "X"}, mapping, first_end)
    assert second_end == len(mapping)
    assert sorted(mapping.values()) == list(range(len(mapping)))
    assert mapping["X"] < mapping["Y"]


def test_assign_indices_keeps_existing_but_counts_it():
    mapping = {"b": 99}
    end = assign_indices({"a", "b", "c"}, mapping, 0)
    assert end == 3
    assert mapping["b"] == 99
    assert mapping["c"] == 2


@pytest.mark.parametrize(
    "token, expected",
    [
        ("a", "a"),
        ("\\n", "\n"),
        ("\\t", "\t"),
        ("\\r", "\r"),
        ("\\f", "\f"),
        ("\\v", "\v"),
        ("\\*", "*"),
        ("\\\\", "\\"),
        ("\\{", "{"),
        ("\\|", "|"),
    ],
)
def test_unescape(token, expected):
    assert unescape(token) == expected


@pytest.mark.parametrize("token", ["", "\\q", "abc"])
def test_unescape_rejects_unknown(token):
    with pytest.raises(ValueError):
        unescape(token)


def test_add_to_set_map_groups_by_goal():
    mapping = {}
    add_to_set_map(mapping, 1, 7)
    add_to_set_map(mapping, 2, 7)
    add_to_set_map(mapping, 1, 8)
    assert mapping == {7: {1, 2}, 8: {1}}


def test_merge_set_maps_unions_inner_maps():
    target = {1: {10}}
    nested = {5: {1: {11}, 2: {20}}, 6: {2: {21}, 3: {30}}}
    merge_set_maps(target, nested)
    assert target == {1: {10, 11}, 2: {20, 21}, 3: {30}}


def test_record_nested_overwrites_existing_entry():
    table = {}
    record_nested(table, 1, 2, 3, 4)
    assert table == {2: {1: {3: 4}}}
    record_nested(table, 1, 2, 3, 9)
    record_nested(table, 1, 2, 5, 6)
    assert table == {2: {1: {3: 9, 5: 6}}}