"""
View controller — the selected view mode and reference date, plus everything
derived from them.

Derived values are memoized per `(store.version, view_mode, reference_date)`.
Any change to one of those three drops the whole memo; the next access
recomputes from the store's current snapshot. Derived sequences are handed out
as tuples so a caller cannot edit the memo in place.
"""
from __future__ import annotations

import threading
from dataclasses import dataclass
from datetime import date
from typing import Any, Callable, Optional

from app.services import aggregation
from app.services.aggregation import CompletionStats, PeriodStats, StatusSlice, ViewMode
from app.services.goal_store import Goal, GoalStore


@dataclass(frozen=True)
class ViewSnapshot:
    view_mode: ViewMode
    reference_date: date
    goals: tuple[Goal, ...]
    stats: CompletionStats
    status_distribution: tuple[StatusSlice, ...]
    period_series: tuple[PeriodStats, ...]


class ViewController:
    def __init__(
        self,
        store: GoalStore,
        view_mode: ViewMode = ViewMode.daily,
        reference_date: Optional[date] = None,
    ):
        self._store = store
        self._view_mode = ViewMode(view_mode)
        self._reference_date = reference_date or date.today()
        self._memo: dict[str, Any] = {}
        self._memo_key: Optional[tuple] = None
        self._lock = threading.RLock()

    # --- selectors ---------------------------------------------------------

    @property
    def store(self) -> GoalStore:
        return self._store

    @property
    def view_mode(self) -> ViewMode:
        return self._view_mode

    @property
    def reference_date(self) -> date:
        return self._reference_date

    def set_view_mode(self, view_mode: ViewMode) -> None:
        with self._lock:
            self._view_mode = ViewMode(view_mode)
            self.invalidate()

    def set_reference_date(self, reference_date: date) -> None:
        with self._lock:
            self._reference_date = reference_date
            self.invalidate()

    def invalidate(self) -> None:
        with self._lock:
            self._memo.clear()
            self._memo_key = None

    # --- store actions -----------------------------------------------------

    def add_goal(self, title: str, day: Optional[date] = None) -> Optional[Goal]:
        """New goals land on the selected reference date unless a day is given."""
        return self._store.add(title, day or self._reference_date)

    def toggle_goal(self, goal_id: str) -> Optional[Goal]:
        return self._store.toggle(goal_id)

    def remove_goal(self, goal_id: str) -> Optional[Goal]:
        return self._store.remove(goal_id)

    # --- derived values ----------------------------------------------------

    def _derive(self, name: str, compute: Callable[[], Any]) -> Any:
        with self._lock:
            key = (self._store.version, self._view_mode, self._reference_date)
            if key != self._memo_key:
                self._memo.clear()
                self._memo_key = key
            if name not in self._memo:
                self._memo[name] = compute()
            return self._memo[name]

    def filtered_goals(self) -> tuple[Goal, ...]:
        return self._derive(
            "filtered",
            lambda: tuple(aggregation.filter_goals(
                self._store.goals, self._view_mode, self._reference_date
            )),
        )

    def stats(self) -> CompletionStats:
        return self._derive(
            "stats",
            lambda: aggregation.completion_stats(self.filtered_goals()),
        )

    def status_distribution(self) -> tuple[StatusSlice, ...]:
        return self._derive(
            "distribution",
            lambda: tuple(aggregation.status_distribution(self.stats())),
        )

    def monthly_series(self, year: Optional[int] = None) -> tuple[PeriodStats, ...]:
        target = year if year is not None else self._reference_date.year
        return self._derive(
            f"monthly:{target}",
            lambda: tuple(aggregation.monthly_series(self._store.goals, target)),
        )

    def yearly_series(self) -> tuple[PeriodStats, ...]:
        return self._derive(
            "yearly",
            lambda: tuple(aggregation.yearly_series(self._store.goals)),
        )

    def period_series(self) -> tuple[PeriodStats, ...]:
        return self._derive(
            "period",
            lambda: tuple(aggregation.period_series(
                self._store.goals, self._view_mode, self._reference_date
            )),
        )

    def snapshot(self) -> ViewSnapshot:
        with self._lock:
            return ViewSnapshot(
                view_mode=self._view_mode,
                reference_date=self._reference_date,
                goals=self.filtered_goals(),
                stats=self.stats(),
                status_distribution=self.status_distribution(),
                period_series=self.period_series(),
            )
