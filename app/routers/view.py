"""
View router.

GET  /view                  — current view state + filtered goals, stats and chart series
PUT  /view                  — select view mode and/or reference date
GET  /view/series/monthly   — 12-month series for one year
GET  /view/series/yearly    — one entry per year that has goals
"""
from __future__ import annotations

from typing import Optional

from fastapi import APIRouter, Depends, Query

from app.dependencies import get_controller
from app.schemas.common import ErrorResponse
from app.schemas.goal import GoalResponse
from app.schemas.view import (
    DashboardResponse,
    PeriodStatsResponse,
    SeriesResponse,
    StatsResponse,
    StatusSliceResponse,
    ViewUpdateRequest,
)
from app.services.aggregation import PeriodStats
from app.services.view_controller import ViewController

router = APIRouter(prefix="/view", tags=["view"])


# ---------------------------------------------------------------------------
# Serialization helpers
# ---------------------------------------------------------------------------

def _period_to_response(p: PeriodStats) -> PeriodStatsResponse:
    return PeriodStatsResponse(label=p.label, completed=p.completed, total=p.total)


def dashboard_response(controller: ViewController) -> DashboardResponse:
    snap = controller.snapshot()
    return DashboardResponse(
        view_mode=snap.view_mode,
        reference_date=snap.reference_date.isoformat(),
        goals=[GoalResponse.from_goal(g) for g in snap.goals],
        stats=StatsResponse(
            completed=snap.stats.completed,
            pending=snap.stats.pending,
            total=snap.stats.total,
            completion_rate=snap.stats.completion_rate,
        ),
        status_distribution=[
            StatusSliceResponse(name=s.name, value=s.value) for s in snap.status_distribution
        ],
        period_series=[_period_to_response(p) for p in snap.period_series],
    )


# ---------------------------------------------------------------------------
# Endpoints
# ---------------------------------------------------------------------------

@router.get(
    "",
    response_model=DashboardResponse,
    summary="Current view with derived statistics",
)
def get_view(controller: ViewController = Depends(get_controller)):
    """
    Return the selected view mode and reference date together with:
    - the goals visible in that view,
    - completed / pending / total counts and the completion rate,
    - the completed-vs-pending distribution,
    - the period series (yearly in the yearly view, monthly otherwise).
    """
    return dashboard_response(controller)


@router.put(
    "",
    response_model=DashboardResponse,
    summary="Select view mode and/or reference date",
    responses={422: {"model": ErrorResponse, "description": "Unknown view mode or malformed date."}},
)
def update_view(payload: ViewUpdateRequest, controller: ViewController = Depends(get_controller)):
    if payload.view_mode is not None:
        controller.set_view_mode(payload.view_mode)
    if payload.reference_date is not None:
        controller.set_reference_date(payload.reference_date)
    return dashboard_response(controller)


@router.get(
    "/series/monthly",
    response_model=SeriesResponse,
    summary="Monthly completion series (always 12 entries)",
)
def get_monthly_series(
    year: Optional[int] = Query(
        default=None,
        ge=1,
        le=9999,
        description="Calendar year. Defaults to the year of the reference date.",
        examples=[2024],
    ),
    controller: ViewController = Depends(get_controller),
):
    return SeriesResponse(items=[_period_to_response(p) for p in controller.monthly_series(year)])


@router.get(
    "/series/yearly",
    response_model=SeriesResponse,
    summary="Yearly completion series (years with goals only)",
)
def get_yearly_series(controller: ViewController = Depends(get_controller)):
    return SeriesResponse(items=[_period_to_response(p) for p in controller.yearly_series()])
