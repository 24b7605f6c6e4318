"""
Shared FastAPI dependencies.

The goal store and view controller are built once in the app lifespan and
live on `app.state` for the whole process (single user, single worker).
Tests swap them out with `app.dependency_overrides[get_controller]`.
"""
from fastapi import Request

from app.services.view_controller import ViewController


def get_controller(request: Request) -> ViewController:
    return request.app.state.controller
