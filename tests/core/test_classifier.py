import pytest

from groupdrag_toolkit.core.classifier import MoveDirection, classify_move
from groupdrag_toolkit.core.models import GroupRef, RowRef


def test_row_moving_down_uses_target_row_key(seed_rows):
    plan = classify_move(seed_rows, RowRef("1-2"), RowRef("2-1"))

    assert plan.direction is MoveDirection.DOWN
    assert plan.active_key == 2
    assert plan.boundary_key == 4
    assert plan.target_group_key == "group-B"


def test_group_target_boundary_depends_on_direction(seed_rows):
    down = classify_move(seed_rows, RowRef("1-1"), GroupRef("group-B"))
    up = classify_move(seed_rows, RowRef("3-1"), GroupRef("group-B"))

    assert down.direction is MoveDirection.DOWN
    assert down.boundary_key == 5  # last member going down
    assert up.direction is MoveDirection.UP
    assert up.boundary_key == 4  # first member going up


def test_active_group_uses_first_member_key(seed_rows):
    plan = classify_move(seed_rows, GroupRef("group-B"), GroupRef("group-A"))

    assert plan.active_key == 4
    assert plan.direction is MoveDirection.UP
    assert [r.key for r in plan.moving] == ["2-1", "2-2"]
    assert plan.is_group_move


def test_group_over_row_targets_the_rows_whole_group(seed_rows):
    plan = classify_move(seed_rows, GroupRef("group-C"), RowRef("1-2"))

    assert plan.target == GroupRef("group-A")
    assert plan.direction is MoveDirection.UP
    assert plan.boundary_key == 1


@pytest.mark.parametrize(
    "active,over",
    [
        (RowRef("1-1"), RowRef("1-1")),
        (GroupRef("group-A"), GroupRef("group-A")),
        (RowRef("missing"), RowRef("1-1")),
        (RowRef("1-1"), GroupRef("group-missing")),
        (GroupRef("group-A"), RowRef("1-3")),  # group over its own row
        (RowRef("2-2"), GroupRef("group-B")),  # row over its own group header
    ],
)
def test_non_moves_classify_to_none(seed_rows, active, over):
    assert classify_move(seed_rows, active, over) is None


def test_unsupported_id_type_raises(seed_rows):
    with pytest.raises(TypeError):
        classify_move(seed_rows, "row:1-1", RowRef("2-1"))
