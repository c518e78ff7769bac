# backend/tests/test_todo_service.py
from datetime import datetime, timedelta, timezone

import pytest

from auth.service import register
from core.errors import Forbidden, InvalidInput, NotFound
from database import SessionLocal
from models.todo import Todo
from models.user import User
from todos import service


@pytest.fixture
def alice(db):
    return register(db, "alice@example.com", "secret123")


@pytest.fixture
def bob(db):
    return register(db, "bob@example.com", "secret123")


def test_create_applies_defaults(db, alice):
    todo = service.create_todo(db, alice.id, "Buy milk")

    assert todo.id is not None
    assert todo.user_id == alice.id
    assert todo.description == ""
    assert todo.priority == 1
    assert todo.completed is False
    assert todo.created_at is not None
    assert todo.updated_at is not None


def test_create_zero_priority_defaults_to_one(db, alice):
    assert service.create_todo(db, alice.id, "Buy milk", priority=0).priority == 1
    assert service.create_todo(db, alice.id, "Buy eggs", priority=3).priority == 3


def test_create_requires_title(db, alice):
    with pytest.raises(InvalidInput) as exc_info:
        service.create_todo(db, alice.id, "")
    assert exc_info.value.message == "Title is required"


def test_list_is_scoped_to_owner(db, alice, bob):
    todo = service.create_todo(db, alice.id, "Alice's todo")

    assert [t.id for t in service.list_todos(db, alice.id)] == [todo.id]
    assert service.list_todos(db, bob.id) == []


def test_list_returns_newest_first(db, alice):
    first = service.create_todo(db, alice.id, "first")
    second = service.create_todo(db, alice.id, "second")
    third = service.create_todo(db, alice.id, "third")

    assert [t.id for t in service.list_todos(db, alice.id)] == [third.id, second.id, first.id]


def test_update_replaces_fields(db, alice):
    todo = service.create_todo(db, alice.id, "Buy milk", "2 litres", 2)
    before = todo.updated_at

    updated = service.update_todo(db, alice.id, todo.id, "Buy oat milk", "1 litre", 0)

    assert updated.title == "Buy oat milk"
    assert updated.description == "1 litre"
    assert updated.priority == 1
    assert updated.updated_at > before


def test_update_missing_todo_is_not_found(db, alice):
    with pytest.raises(NotFound):
        service.update_todo(db, alice.id, 999, "title", "", 1)


def test_update_other_users_todo_is_forbidden(db, alice, bob):
    todo = service.create_todo(db, alice.id, "Buy milk")

    with pytest.raises(Forbidden):
        service.update_todo(db, bob.id, todo.id, "Hijacked", "", 1)

    db.expire_all()
    assert db.get(Todo, todo.id).title == "Buy milk"


def test_update_requires_title(db, alice):
    todo = service.create_todo(db, alice.id, "Buy milk")
    with pytest.raises(InvalidInput):
        service.update_todo(db, alice.id, todo.id, "", "", 1)


def test_update_checks_ownership_before_body(db, alice, bob):
    todo = service.create_todo(db, alice.id, "Buy milk")

    with pytest.raises(Forbidden):
        service.update_todo(db, bob.id, todo.id, "", "", 1)
    with pytest.raises(NotFound):
        service.update_todo(db, bob.id, 999, "", "", 1)


def test_toggle_twice_restores_state_with_increasing_timestamps(db, alice):
    todo = service.create_todo(db, alice.id, "Buy milk")
    stamps = [todo.updated_at]

    toggled = service.toggle_todo(db, alice.id, todo.id)
    assert toggled.completed is True
    stamps.append(toggled.updated_at)

    toggled = service.toggle_todo(db, alice.id, todo.id)
    assert toggled.completed is False
    stamps.append(toggled.updated_at)

    assert stamps[0] < stamps[1] < stamps[2]


def test_toggle_other_users_todo_is_forbidden(db, alice, bob):
    todo = service.create_todo(db, alice.id, "Buy milk")

    with pytest.raises(Forbidden):
        service.toggle_todo(db, bob.id, todo.id)

    db.expire_all()
    assert db.get(Todo, todo.id).completed is False


def test_toggle_missing_todo_is_not_found(db, alice):
    with pytest.raises(NotFound):
        service.toggle_todo(db, alice.id, 12345)


def test_delete_removes_todo(db, alice):
    todo = service.create_todo(db, alice.id, "Buy milk")
    service.delete_todo(db, alice.id, todo.id)
    assert service.list_todos(db, alice.id) == []


def test_delete_other_users_todo_is_not_found(db, alice, bob):
    todo = service.create_todo(db, alice.id, "Buy milk")

    with pytest.raises(NotFound) as exc_info:
        service.delete_todo(db, bob.id, todo.id)

    assert exc_info.value.message == "Todo not found or unauthorized"
    assert [t.id for t in service.list_todos(db, alice.id)] == [todo.id]


def test_write_after_concurrent_delete_is_not_found(db, alice):
    todo = service.create_todo(db, alice.id, "Buy milk")
    loaded = db.query(Todo).filter(Todo.id == todo.id).one()

    other = SessionLocal()
    try:
        other.query(Todo).filter(Todo.id == todo.id).delete()
        other.commit()
    finally:
        other.close()

    with pytest.raises(NotFound):
        service._apply(db, loaded, {Todo.title: "too late"})


def test_next_timestamp_is_strictly_later_than_previous():
    future = datetime.now(timezone.utc) + timedelta(hours=1)
    assert service._next_timestamp(future) == future + timedelta(microseconds=1)
    # Naive values from SQLite are treated as UTC
    assert service._next_timestamp(future.replace(tzinfo=None)) > future


def test_deleting_user_cascades_to_todos(db, alice):
    service.create_todo(db, alice.id, "Buy milk")
    service.create_todo(db, alice.id, "Buy eggs")

    db.delete(db.get(User, alice.id))
    db.commit()

    assert db.query(Todo).count() == 0
