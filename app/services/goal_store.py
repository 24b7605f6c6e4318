"""
Goal store — the in-memory, ordered collection of goals for one session.

Rules
-----
- The store is the only thing that creates, toggles or removes a Goal.
- Every mutation is followed by a full save of the collection. A failed save
  is logged and swallowed: the in-memory collection stays authoritative.
- `load()` never raises. Absent, empty or unreadable data means "no goals yet".
- Invalid input (blank title) and unknown ids are silent no-ops.

Public API
----------
Goal                        frozen record, `to_dict()` / `Goal.from_dict()`
GoalStore.load()            -> None
GoalStore.add(title, day)   -> Goal | None
GoalStore.toggle(goal_id)   -> Goal | None
GoalStore.remove(goal_id)   -> Goal | None
GoalStore.goals             -> tuple[Goal, ...]   (snapshot, insertion order)
GoalStore.version           -> int                (bumped on load and on every change)
"""
from __future__ import annotations

import dataclasses
import logging
import threading
import uuid
from dataclasses import dataclass
from datetime import date
from typing import Any, Callable, Iterable, Optional, Protocol

from app.core.errors import GoalTrackerException, StorageCorruptError

logger = logging.getLogger(__name__)


# ---------------------------------------------------------------------------
# Record type
# ---------------------------------------------------------------------------

@dataclass(frozen=True)
class Goal:
    id: str
    title: str
    completed: bool
    date: date

    def to_dict(self) -> dict[str, Any]:
        return {
            "id": self.id,
            "title": self.title,
            "completed": self.completed,
            "date": self.date.isoformat(),
        }

    @classmethod
    def from_dict(cls, raw: Any) -> "Goal":
        """Rebuild a Goal from its stored form. Raises ValueError on any defect."""
        if not isinstance(raw, dict):
            raise ValueError("goal record is not an object")
        goal_id = raw.get("id")
        title = raw.get("title")
        completed = raw.get("completed")
        day = raw.get("date")
        if not isinstance(goal_id, str) or not goal_id:
            raise ValueError("goal id must be a non-empty string")
        if not isinstance(title, str) or not title.strip():
            raise ValueError(f"goal {goal_id}: title must be a non-empty string")
        if not isinstance(completed, bool):
            raise ValueError(f"goal {goal_id}: completed must be a boolean")
        if not isinstance(day, str):
            raise ValueError(f"goal {goal_id}: date must be an ISO date string")
        return cls(id=goal_id, title=title, completed=completed, date=date.fromisoformat(day))


class GoalStorage(Protocol):
    """Persistence collaborator: one opaque array under one fixed key."""

    key: str

    def load_goals(self) -> Optional[list[Any]]: ...

    def save_goals(self, goals: Iterable[Goal]) -> None: ...


def _new_goal_id() -> str:
    return uuid.uuid4().hex


# ---------------------------------------------------------------------------
# Store
# ---------------------------------------------------------------------------

class GoalStore:
    def __init__(
        self,
        storage: GoalStorage,
        id_factory: Callable[[], str] = _new_goal_id,
    ):
        self._storage = storage
        self._new_id = id_factory
        self._goals: list[Goal] = []
        self._version = 0
        # Handlers run on a threadpool; each change and its save happen as one step
        self._lock = threading.RLock()

    @property
    def goals(self) -> tuple[Goal, ...]:
        with self._lock:
            return tuple(self._goals)

    @property
    def version(self) -> int:
        return self._version

    def __len__(self) -> int:
        return len(self._goals)

    # --- loading -----------------------------------------------------------

    def load(self) -> None:
        with self._lock:
            try:
                raw = self._storage.load_goals()
                goals = self._decode(raw or [])
            except GoalTrackerException as exc:
                logger.warning("Starting with an empty goal collection: %s", exc.message)
                goals = []
            self._goals = goals
            self._version += 1
        logger.info("Loaded %d goal(s)", len(goals))

    def _decode(self, raw: list[Any]) -> list[Goal]:
        goals: list[Goal] = []
        seen: set[str] = set()
        for index, item in enumerate(raw):
            try:
                goal = Goal.from_dict(item)
            except ValueError as exc:
                raise StorageCorruptError(self._storage.key, f"record {index}: {exc}") from exc
            if goal.id in seen:
                raise StorageCorruptError(self._storage.key, f"duplicate goal id {goal.id}")
            seen.add(goal.id)
            goals.append(goal)
        return goals

    # --- mutations ---------------------------------------------------------

    def add(self, title: str, day: date) -> Optional[Goal]:
        cleaned = title.strip() if isinstance(title, str) else ""
        if not cleaned:
            return None

        with self._lock:
            goal_id = self._new_id()
            while any(g.id == goal_id for g in self._goals):
                goal_id = self._new_id()

            goal = Goal(id=goal_id, title=cleaned, completed=False, date=day)
            self._goals.append(goal)
            logger.debug("Added goal %s for %s", goal.id, goal.date)
            self._changed()
        return goal

    def toggle(self, goal_id: str) -> Optional[Goal]:
        with self._lock:
            index = self._index_of(goal_id)
            if index is None:
                return None
            goal = self._goals[index]
            updated = dataclasses.replace(goal, completed=not goal.completed)
            self._goals[index] = updated
            logger.debug("Goal %s completed=%s", goal_id, updated.completed)
            self._changed()
        return updated

    def remove(self, goal_id: str) -> Optional[Goal]:
        with self._lock:
            index = self._index_of(goal_id)
            if index is None:
                return None
            removed = self._goals.pop(index)
            logger.debug("Removed goal %s", goal_id)
            self._changed()
        return removed

    # --- helpers -----------------------------------------------------------

    def _index_of(self, goal_id: str) -> Optional[int]:
        for index, goal in enumerate(self._goals):
            if goal.id == goal_id:
                return index
        return None

    def _changed(self) -> None:
        # caller holds self._lock
        self._version += 1
        self._save()

    def _save(self) -> None:
        try:
            self._storage.save_goals(self.goals)
        except GoalTrackerException:
            logger.exception("Saving %d goal(s) failed; keeping in-memory state", len(self._goals))
