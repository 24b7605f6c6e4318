"""
Goals router.

GET    /goals               — raw collection, unfiltered
POST   /goals               — add a goal (blank titles are ignored)
POST   /goals/{id}/toggle   — flip completed (unknown ids are ignored)
DELETE /goals/{id}          — remove a goal (unknown ids are ignored)
GET    /goals/export        — the raw collection as an .xlsx download

Every mutation answers with the refreshed dashboard so a client can re-render
from a single response.
"""
from __future__ import annotations

from fastapi import APIRouter, Depends, Response

from app.dependencies import get_controller
from app.routers.view import dashboard_response
from app.schemas.common import ErrorResponse
from app.schemas.goal import GoalCreateRequest, GoalListResponse, GoalResponse
from app.schemas.view import DashboardResponse
from app.services import export
from app.services.view_controller import ViewController

router = APIRouter(prefix="/goals", tags=["goals"])


@router.get("", response_model=GoalListResponse, summary="All goals, unfiltered")
def list_goals(controller: ViewController = Depends(get_controller)):
    goals = controller.store.goals
    return GoalListResponse(
        total=len(goals),
        items=[GoalResponse.from_goal(g) for g in goals],
    )


@router.get(
    "/export",
    summary="Download every goal as a spreadsheet",
    response_class=Response,
    responses={200: {"content": {export.XLSX_MEDIA_TYPE: {}}}},
)
def export_goals(controller: ViewController = Depends(get_controller)):
    """One row per goal with columns Date, Goal, Status. Ignores the current view."""
    content = export.build_workbook(controller.store.goals)
    return Response(
        content=content,
        media_type=export.XLSX_MEDIA_TYPE,
        headers={"Content-Disposition": f'attachment; filename="{export.export_filename()}"'},
    )


@router.post(
    "",
    response_model=DashboardResponse,
    summary="Add a goal",
    responses={422: {"model": ErrorResponse, "description": "Malformed date or missing title field."}},
)
def add_goal(payload: GoalCreateRequest, controller: ViewController = Depends(get_controller)):
    """
    Create a goal on `date`, or on the selected reference date when omitted.
    A title that is empty after trimming creates nothing; the dashboard is
    returned unchanged.
    """
    controller.add_goal(payload.title, payload.date)
    return dashboard_response(controller)


@router.post("/{goal_id}/toggle", response_model=DashboardResponse, summary="Toggle completion")
def toggle_goal(goal_id: str, controller: ViewController = Depends(get_controller)):
    controller.toggle_goal(goal_id)
    return dashboard_response(controller)


@router.delete("/{goal_id}", response_model=DashboardResponse, summary="Delete a goal")
def delete_goal(goal_id: str, controller: ViewController = Depends(get_controller)):
    controller.remove_goal(goal_id)
    return dashboard_response(controller)
