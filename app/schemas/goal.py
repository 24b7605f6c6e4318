"""
Goal request / response schemas.

POST /goals        → GoalCreateRequest → DashboardResponse
GET  /goals        → GoalListResponse
"""
from __future__ import annotations

import datetime as dt
from typing import Optional

from pydantic import BaseModel, ConfigDict, Field

from app.services.goal_store import Goal


class GoalCreateRequest(BaseModel):
    """A new goal.

    A blank or whitespace-only title is not a validation error: the request
    succeeds and nothing is created.
    """
    title: str = Field(
        description="Goal text. Leading/trailing whitespace is trimmed.",
        examples=["Run 5k"],
    )
    date: Optional[dt.date] = Field(
        default=None,
        description="Day the goal belongs to. Defaults to the selected reference date.",
        examples=["2024-03-10"],
    )


class GoalResponse(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: str
    title: str
    completed: bool
    date: str = Field(description="ISO date (YYYY-MM-DD).")

    @classmethod
    def from_goal(cls, goal: Goal) -> "GoalResponse":
        return cls(**goal.to_dict())


class GoalListResponse(BaseModel):
    """The raw, unfiltered collection in insertion order."""
    total: int
    items: list[GoalResponse]
