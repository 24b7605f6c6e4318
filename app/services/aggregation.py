"""
Aggregation engine — calendar bucketing and completion metrics.

Everything here is pure: inputs are the full goal collection plus a view mode
and a reference date, outputs are plain dataclasses. Nothing is cached and
nothing touches storage; the view controller decides when to recompute.

Filtering
---------
  daily    goal.date == reference
  monthly  same calendar month and year as the reference
  yearly   same calendar year as the reference

Series
------
  monthly  always 12 entries (Jan..Dec) for the reference year; empty months
           are reported as completed=0, total=0.
  yearly   one entry per year that has at least one goal, ascending. Years
           without goals are never synthesised, so an empty collection gives
           an empty series.

Public API
----------
filter_goals(goals, view_mode, reference)   -> list[Goal]
completion_stats(goals)                     -> CompletionStats
status_distribution(stats)                  -> list[StatusSlice]
monthly_series(goals, year)                 -> list[PeriodStats]
yearly_series(goals)                        -> list[PeriodStats]
period_series(goals, view_mode, reference)  -> list[PeriodStats]
"""
from __future__ import annotations

import enum
from dataclasses import dataclass
from datetime import date
from decimal import Decimal, ROUND_HALF_UP
from typing import Iterable

from app.services.goal_store import Goal


class ViewMode(str, enum.Enum):
    daily = "daily"
    monthly = "monthly"
    yearly = "yearly"


MONTH_LABELS = (
    "Jan", "Feb", "Mar", "Apr", "May", "Jun",
    "Jul", "Aug", "Sep", "Oct", "Nov", "Dec",
)

COMPLETED_LABEL = "Completed"
PENDING_LABEL = "Pending"


# ---------------------------------------------------------------------------
# Result types (plain dataclasses — no ORM, no Pydantic)
# ---------------------------------------------------------------------------

@dataclass(frozen=True)
class CompletionStats:
    completed: int
    total: int
    completion_rate: int     # whole percent, 0 – 100

    @property
    def pending(self) -> int:
        return self.total - self.completed


@dataclass(frozen=True)
class StatusSlice:
    name: str
    value: int


@dataclass(frozen=True)
class PeriodStats:
    label: str               # "Jan".."Dec" or a year such as "2024"
    completed: int
    total: int


# ---------------------------------------------------------------------------
# Filtering
# ---------------------------------------------------------------------------

def _matches(goal_day: date, view_mode: ViewMode, reference: date) -> bool:
    if view_mode == ViewMode.daily:
        return goal_day == reference
    if view_mode == ViewMode.monthly:
        return goal_day.year == reference.year and goal_day.month == reference.month
    return goal_day.year == reference.year


def filter_goals(goals: Iterable[Goal], view_mode: ViewMode, reference: date) -> list[Goal]:
    """Goals visible in `view_mode` around `reference`, in collection order."""
    mode = ViewMode(view_mode)
    return [g for g in goals if _matches(g.date, mode, reference)]


# ---------------------------------------------------------------------------
# Statistics
# ---------------------------------------------------------------------------

def completion_rate(completed: int, total: int) -> int:
    """Whole-percent completion, halves rounded up. Zero when there is nothing to complete."""
    if total <= 0:
        return 0
    rate = (Decimal(100) * completed / total).quantize(Decimal("1"), rounding=ROUND_HALF_UP)
    return int(rate)


def completion_stats(goals: Iterable[Goal]) -> CompletionStats:
    total = 0
    completed = 0
    for goal in goals:
        total += 1
        if goal.completed:
            completed += 1
    return CompletionStats(
        completed=completed,
        total=total,
        completion_rate=completion_rate(completed, total),
    )


def status_distribution(stats: CompletionStats) -> list[StatusSlice]:
    """The two pie-chart slices, completed first."""
    return [
        StatusSlice(name=COMPLETED_LABEL, value=stats.completed),
        StatusSlice(name=PENDING_LABEL, value=stats.pending),
    ]


# ---------------------------------------------------------------------------
# Series
# ---------------------------------------------------------------------------

def monthly_series(goals: Iterable[Goal], year: int) -> list[PeriodStats]:
    completed = [0] * 12
    total = [0] * 12
    for goal in goals:
        if goal.date.year != year:
            continue
        slot = goal.date.month - 1
        total[slot] += 1
        if goal.completed:
            completed[slot] += 1
    return [
        PeriodStats(label=label, completed=completed[i], total=total[i])
        for i, label in enumerate(MONTH_LABELS)
    ]


def yearly_series(goals: Iterable[Goal]) -> list[PeriodStats]:
    buckets: dict[int, list[int]] = {}
    for goal in goals:
        counts = buckets.setdefault(goal.date.year, [0, 0])
        counts[1] += 1
        if goal.completed:
            counts[0] += 1
    return [
        PeriodStats(label=str(year), completed=buckets[year][0], total=buckets[year][1])
        for year in sorted(buckets)
    ]


def period_series(goals: Iterable[Goal], view_mode: ViewMode, reference: date) -> list[PeriodStats]:
    """Series shown next to a view: yearly for the yearly view, monthly otherwise."""
    if ViewMode(view_mode) == ViewMode.yearly:
        return yearly_series(goals)
    return monthly_series(goals, reference.year)
