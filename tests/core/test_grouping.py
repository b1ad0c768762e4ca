from groupdrag_toolkit.core.grouping import (
    find_group,
    find_row,
    flatten,
    interleaved_groups,
    is_contiguous,
    partition,
    recompute_group_sizes,
)
from groupdrag_toolkit.core.models import Row


def test_partition_orders_groups_by_first_member_and_members_by_key(seed_rows):
    shuffled = list(reversed(seed_rows))

    groups = partition(shuffled)

    assert [g.group_key for g in groups] == ["group-A", "group-B", "group-C"]
    assert [r.key for r in groups[0].rows] == ["1-1", "1-2", "1-3"]
    assert groups[1].first_key == 4 and groups[1].last_key == 5
    assert groups[2].header.key == "3-1"


def test_partition_of_empty_collection_is_empty():
    assert partition([]) == []


def test_flatten_is_inverse_of_partition(seed_rows):
    assert flatten(partition(seed_rows)) == sorted(seed_rows, key=lambda r: r.sort)


def test_flatten_renumbers_in_group_list_order(seed_rows):
    groups = partition(seed_rows)
    reordered = [groups[2], groups[0], groups[1]]

    flat = flatten(reordered, renumber_from=1)

    assert [(r.key, r.sort) for r in flat] == [
        ("3-1", 1), ("1-1", 2), ("1-2", 3), ("1-3", 4), ("2-1", 5), ("2-2", 6),
    ]


def test_recompute_group_sizes_marks_only_first_member():
    rows = [
        Row("a", "g1", 1.0),
        Row("b", "g1", 2.0, group_size=7),
        Row("c", "g2", 3.0),
    ]

    result = recompute_group_sizes(rows)

    assert [(r.key, r.group_size) for r in result] == [("a", 2), ("b", 0), ("c", 1)]


def test_recompute_group_sizes_is_idempotent(seed_rows):
    once = recompute_group_sizes(seed_rows)
    assert recompute_group_sizes(once) == once


def test_find_row_and_group(seed_rows):
    assert find_row(seed_rows, "2-2").sort == 5
    assert find_row(seed_rows, "nope") is None
    assert [r.key for r in find_group(seed_rows, "group-B").rows] == ["2-1", "2-2"]
    assert find_group(seed_rows, "group-Z") is None


def test_interleaved_groups_detected():
    rows = [Row("a", "g1", 1), Row("b", "g2", 2), Row("c", "g1", 3)]

    assert interleaved_groups(rows) == [("g1", "g2")]
    assert not is_contiguous(rows)


def test_seed_table_is_contiguous(seed_rows):
    assert is_contiguous(seed_rows)
