"""
Key-value storage adapter for the goal collection.

The whole collection is one JSON array stored under a single fixed key in
`kv_store`. There is no schema versioning: what `save_goals` writes is exactly
what `load_goals` hands back.

Each call opens its own short-lived session, so the adapter can live as long
as the process while sessions stay request-sized.
"""
from __future__ import annotations

import json
from typing import Any, Callable, Iterable, Optional

from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from app.core.config import settings
from app.core.errors import StorageCorruptError, StorageReadError, StorageWriteError
from app.models.kv_entry import KeyValueEntry
from app.services.goal_store import Goal


class KeyValueGoalStorage:
    def __init__(
        self,
        session_factory: Callable[[], Session],
        key: Optional[str] = None,
    ):
        self._session_factory = session_factory
        self.key = key or settings.GOALS_STORAGE_KEY

    def load_goals(self) -> Optional[list[Any]]:
        """Return the stored array, or None when nothing (or only whitespace) is stored."""
        try:
            with self._session_factory() as db:
                row = db.get(KeyValueEntry, self.key)
                text = row.value if row is not None else None
        except SQLAlchemyError as exc:
            raise StorageReadError(self.key) from exc

        if text is None or not text.strip():
            return None
        try:
            data = json.loads(text)
        except (ValueError, RecursionError) as exc:
            # RecursionError: nesting deeper than the decoder can follow
            raise StorageCorruptError(self.key, "invalid JSON") from exc
        if not isinstance(data, list):
            raise StorageCorruptError(self.key, "expected a JSON array")
        return data

    def save_goals(self, goals: Iterable[Goal]) -> None:
        payload = json.dumps([g.to_dict() for g in goals], ensure_ascii=False)
        try:
            with self._session_factory() as db:
                row = db.get(KeyValueEntry, self.key)
                if row is None:
                    db.add(KeyValueEntry(key=self.key, value=payload))
                else:
                    row.value = payload
                db.commit()
        except SQLAlchemyError as exc:
            raise StorageWriteError(self.key) from exc
