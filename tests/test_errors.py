"""
Tests for the error envelope and the custom exception classes.
"""
from fastapi import APIRouter
from fastapi.testclient import TestClient

from app.core.errors import (
    GoalTrackerException,
    StorageCorruptError,
    StorageReadError,
    StorageWriteError,
)
from app.main import app


class TestExceptionClasses:
    def test_storage_corrupt_error(self):
        err = StorageCorruptError(key="goals", reason="invalid JSON")
        assert err.code == "STORAGE_CORRUPT"
        assert err.http_status == 500
        assert "goals" in err.message
        assert err.to_dict()["details"] == {"key": "goals", "reason": "invalid JSON"}

    def test_storage_read_error(self):
        err = StorageReadError(key="goals")
        assert err.http_status == 503
        assert err.code == "STORAGE_READ_FAILED"

    def test_storage_write_error(self):
        err = StorageWriteError(key="goals")
        assert err.http_status == 503
        assert err.code == "STORAGE_WRITE_FAILED"
        assert err.details["key"] == "goals"

    def test_to_dict_without_details(self):
        d = GoalTrackerException("boom").to_dict()
        assert d == {"code": "INTERNAL_ERROR", "message": "boom"}


_boom = APIRouter()


@_boom.get("/_test/storage-error")
def _raise_storage_error():
    raise StorageWriteError(key="goals")


@_boom.get("/_test/crash")
def _raise_unexpected():
    raise RuntimeError("unexpected")


app.include_router(_boom)


class TestHandlers:
    def test_application_error_uses_envelope(self, client):
        r = client.get("/_test/storage-error")
        assert r.status_code == 503
        assert r.json() == {
            "code": "STORAGE_WRITE_FAILED",
            "message": "Could not persist value under 'goals'.",
            "details": {"key": "goals"},
        }

    def test_unhandled_error_returns_500(self, db):
        with TestClient(app, raise_server_exceptions=False) as c:
            r = c.get("/_test/crash")
        assert r.status_code == 500
        assert r.json()["code"] == "INTERNAL_ERROR"

    def test_validation_error_envelope(self, client):
        r = client.put("/view", json={"reference_date": "2024-13-01"})
        assert r.status_code == 422
        body = r.json()
        assert body["code"] == "VALIDATION_ERROR"
        assert isinstance(body["details"]["errors"], list)
