import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI, Depends
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from sqlalchemy.orm import Session
from sqlalchemy import text

from app.db.base import Base, SessionLocal, engine, get_db
from app.core.config import settings
from app.core.logging_config import configure_logging
from app.routers import goals as goals_router
from app.routers import view as view_router
from app.services.goal_store import GoalStore
from app.services.storage import KeyValueGoalStorage
from app.services.view_controller import ViewController
from app.core.errors import (
    GoalTrackerException,
    goal_tracker_exception_handler,
    validation_exception_handler,
    unhandled_exception_handler,
)

configure_logging(settings.LOG_LEVEL)
logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    if settings.AUTO_CREATE_TABLES:
        Base.metadata.create_all(bind=engine)
    store = GoalStore(KeyValueGoalStorage(SessionLocal))
    store.load()
    app.state.controller = ViewController(store)
    logger.info("Goal tracker ready (env=%s)", settings.APP_ENV)
    yield


app = FastAPI(
    title="Goal Tracker API",
    description=(
        "**Single-user goal tracker**\n\n"
        "Record goals, mark them complete and read completion statistics for a "
        "daily, monthly or yearly view, plus chart-ready series and an Excel export.\n\n"
        "All error responses follow the `{code, message, details}` envelope."
    ),
    version="1.0.0",
    docs_url="/docs",
    redoc_url="/redoc",
    lifespan=lifespan,
)

# --- CORS ---
app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.cors_origins_list,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

# --- Exception handlers (most specific first) ---
app.add_exception_handler(GoalTrackerException, goal_tracker_exception_handler)
app.add_exception_handler(RequestValidationError, validation_exception_handler)
app.add_exception_handler(Exception, unhandled_exception_handler)

# --- Routers ---
app.include_router(goals_router.router)
app.include_router(view_router.router)


@app.get("/health", tags=["health"], summary="Health check")
def health(db: Session = Depends(get_db)):
    """
    Returns `{"status": "ok", "db": "ok"}` when both the API and the key-value
    store are reachable. Returns HTTP 503 if the DB is down.
    """
    try:
        db.execute(text("SELECT 1"))
        db_status = "ok"
    except Exception:
        logger.warning("Health check could not reach the database", exc_info=True)
        db_status = "unreachable"

    if db_status != "ok":
        return JSONResponse(
            status_code=503,
            content={"status": "error", "db": db_status},
        )
    return {"status": "ok", "db": "ok", "env": settings.APP_ENV}
