# backend/tests/test_seed.py
from auth.service import authenticate
from models.todo import Todo
from seed import TEST_USER_EMAIL, TEST_USER_PASSWORD, insert_test_data


def test_insert_test_data_creates_user_and_todos(db):
    assert insert_test_data(db) is True

    user = authenticate(db, TEST_USER_EMAIL, TEST_USER_PASSWORD)
    todos = db.query(Todo).filter(Todo.user_id == user.id).all()
    assert len(todos) == 5
    assert sum(t.completed for t in todos) == 1


def test_insert_test_data_is_idempotent(db):
    insert_test_data(db)
    assert insert_test_data(db) is False
    assert db.query(Todo).count() == 5
