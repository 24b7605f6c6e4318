"""
View / dashboard schemas.

GET /view                  → DashboardResponse
PUT /view                  → ViewUpdateRequest → DashboardResponse
GET /view/series/monthly   → SeriesResponse
GET /view/series/yearly    → SeriesResponse
"""
from __future__ import annotations

from datetime import date
from typing import Optional

from pydantic import BaseModel, ConfigDict, Field

from app.schemas.goal import GoalResponse
from app.services.aggregation import ViewMode


class ViewUpdateRequest(BaseModel):
    """Change the selected view mode and/or reference date. Omitted fields are kept."""
    model_config = ConfigDict(use_enum_values=True)

    view_mode: Optional[ViewMode] = Field(default=None, examples=["monthly"])
    reference_date: Optional[date] = Field(default=None, examples=["2024-03-15"])


class StatsResponse(BaseModel):
    completed: int
    pending: int
    total: int
    completion_rate: int = Field(description="Whole percent, 0–100. 0 when total is 0.")


class StatusSliceResponse(BaseModel):
    name: str = Field(examples=["Completed", "Pending"])
    value: int


class PeriodStatsResponse(BaseModel):
    label: str = Field(description="Month abbreviation (Jan..Dec) or year.", examples=["Mar", "2024"])
    completed: int
    total: int


class SeriesResponse(BaseModel):
    items: list[PeriodStatsResponse]


class DashboardResponse(BaseModel):
    """Current view state plus every value derived from it."""
    view_mode: ViewMode
    reference_date: str
    goals: list[GoalResponse] = Field(description="Goals visible in the current view.")
    stats: StatsResponse
    status_distribution: list[StatusSliceResponse]
    period_series: list[PeriodStatsResponse] = Field(
        description="Yearly series in the yearly view, otherwise the 12-month series.",
    )
