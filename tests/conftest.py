"""
Shared pytest fixtures.

Uses a throwaway SQLite file so no external database is required. The
process-wide view controller is replaced per test through
`app.dependency_overrides`, the same way a database session would be.
"""
import os

os.environ["DATABASE_URL"] = "sqlite:///./test_goals.db"
os.environ["AUTO_CREATE_TABLES"] = "true"

from datetime import date  # noqa: E402

import pytest  # noqa: E402
from fastapi.testclient import TestClient  # noqa: E402

from app.core.errors import StorageWriteError  # noqa: E402
from app.db.base import Base, SessionLocal, engine  # noqa: E402
from app.dependencies import get_controller  # noqa: E402
from app.main import app  # noqa: E402
from app.models.kv_entry import KeyValueEntry  # noqa: E402
from app.services.goal_store import GoalStore  # noqa: E402
from app.services.storage import KeyValueGoalStorage  # noqa: E402
from app.services.view_controller import ViewController  # noqa: E402

REFERENCE_DATE = date(2024, 3, 10)


class MemoryGoalStorage:
    """In-memory stand-in for the key-value store, with save counting and write failures."""

    key = "goals"

    def __init__(self, payload=None):
        self.payload = payload
        self.saves = 0
        self.fail_writes = False

    def load_goals(self):
        return self.payload

    def save_goals(self, goals):
        if self.fail_writes:
            raise StorageWriteError(self.key)
        self.payload = [g.to_dict() for g in goals]
        self.saves += 1


@pytest.fixture(scope="session", autouse=True)
def create_tables():
    Base.metadata.create_all(bind=engine)
    yield
    Base.metadata.drop_all(bind=engine)


@pytest.fixture()
def db():
    db = SessionLocal()
    try:
        db.query(KeyValueEntry).delete()
        db.commit()
        yield db
    finally:
        db.close()


@pytest.fixture()
def memory_storage():
    return MemoryGoalStorage()


@pytest.fixture()
def store(memory_storage):
    s = GoalStore(memory_storage)
    s.load()
    return s


@pytest.fixture()
def kv_storage(db):
    return KeyValueGoalStorage(SessionLocal)


@pytest.fixture()
def controller(kv_storage):
    s = GoalStore(kv_storage)
    s.load()
    return ViewController(s, reference_date=REFERENCE_DATE)


@pytest.fixture()
def client(controller):
    app.dependency_overrides[get_controller] = lambda: controller
    with TestClient(app) as c:
        yield c
    app.dependency_overrides.clear()
