from dataclasses import replace

import pytest

from groupdrag_toolkit.core.models import TableState
from groupdrag_toolkit.core.services.undo_service import UndoService


def _bump(state, key, sort):
    state.rows = [replace(r, sort=sort) if r.key == key else r for r in state.rows]


@pytest.fixture
def service():
    return UndoService(max_history=3)


def test_push_snapshot_enforces_max_history(seed_state, service):
    service.push_snapshot(seed_state)  # 1
    _bump(seed_state, "1-1", 10)
    service.push_snapshot(seed_state)  # 2
    _bump(seed_state, "1-2", 11)
    service.push_snapshot(seed_state)  # 3
    _bump(seed_state, "1-3", 12)
    service.push_snapshot(seed_state)  # 4 -> trims snapshot 1

    assert service.undo(seed_state) is True
    assert service.undo(seed_state) is True
    assert service.undo(seed_state) is False  # snapshot 1 trimmed away
    assert {r.key: r.sort for r in seed_state.rows}["1-1"] == 10


def test_undo_redo_roundtrip_restores_state_in_place(seed_state, service):
    service.push_snapshot(seed_state)
    baseline = list(seed_state.rows)
    _bump(seed_state, "3-1", 0.5)
    service.push_snapshot(seed_state)
    mutated = list(seed_state.rows)

    assert service.undo(seed_state) is True
    assert seed_state.rows == baseline

    assert service.redo(seed_state) is True
    assert seed_state.rows == mutated


def test_can_undo_can_redo_transitions(seed_state, service):
    assert service.can_undo() is False
    assert service.can_redo() is False

    service.push_snapshot(seed_state)
    assert service.can_undo() is False  # a single baseline has nothing to go back to

    _bump(seed_state, "2-1", 9)
    service.push_snapshot(seed_state)
    assert service.can_undo() is True

    service.undo(seed_state)
    assert service.can_redo() is True

    service.redo(seed_state)
    assert service.can_redo() is False

    service.undo(seed_state)
    _bump(seed_state, "2-2", 9.5)
    service.push_snapshot(seed_state)
    assert service.can_redo() is False  # new snapshot clears redo


def test_identical_snapshot_not_pushed_twice(seed_state, service):
    assert service.push_snapshot(seed_state) is True
    assert service.push_snapshot(seed_state) is False


def test_discard_last(seed_state, service):
    service.push_snapshot(seed_state)
    service.discard_last()

    assert service.undo(seed_state) is False
    service.discard_last()  # empty stack is fine


def test_undo_on_empty_stack_returns_false(seed_state, service):
    assert service.undo(seed_state) is False
    assert service.redo(seed_state) is False


def test_corrupted_snapshot_is_skipped_gracefully(seed_state, service):
    service.push_snapshot(seed_state)
    original = list(seed_state.rows)

    class BadSnap:
        rows = ["not a row"]

    service._undo_stack.insert(0, BadSnap())  # type: ignore[attr-defined]

    assert service.undo(seed_state) is False
    assert seed_state.rows == original


def test_clear(seed_state, service):
    service.push_snapshot(seed_state)
    _bump(seed_state, "1-1", 0.1)
    service.push_snapshot(seed_state)
    service.clear()

    assert service.can_undo() is False


def test_max_history_from_config(isolated_config):
    isolated_config.mkdir(parents=True, exist_ok=True)
    (isolated_config / "history.yml").write_text("max_history: 0\n", encoding="utf-8")

    svc = UndoService()
    state = TableState()

    assert svc._max_history == 1  # coerced to at least one
    svc.push_snapshot(state)
