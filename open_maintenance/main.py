"""
Main FastAPI application
"""
import asyncio
import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI, Request
from fastapi.encoders import jsonable_encoder
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException

from open_maintenance.config import get_settings
from open_maintenance.database import engine, Base, AsyncSessionLocal
from open_maintenance.models import MaintenanceTask  # noqa: F401 - registers the tasks table
from open_maintenance.api import tasks
from open_maintenance.services.task_store import TaskStore, TaskStoreError, TaskAlreadyCompletedError
from open_maintenance.services.task_seeder import seed_tasks_for
from open_maintenance.utils.helpers import site_today, utc_timestamp
from open_maintenance.utils.logger import configure_logging

settings = get_settings()
configure_logging()
logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    # Create all tables
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)
    logger.info("Database tables created")

    # Seed today's checklist if missing
    if settings.SEED_ON_STARTUP:
        today = site_today()
        async with AsyncSessionLocal() as session:
            inserted = await seed_tasks_for(
                TaskStore(session), today, purge_past=settings.PURGE_PAST_TASKS
            )
        logger.info(f"Startup seeding for {today}: {inserted} new tasks")

    yield

    await engine.dispose()

app = FastAPI(
    title=settings.APP_NAME,
    version=settings.APP_VERSION,
    debug=settings.DEBUG,
    lifespan=lifespan,
)

# CORS - any origin may read the task list
app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.CORS_ORIGINS,
    allow_methods=["*"],
    allow_headers=["*"],
)


@app.middleware("http")
async def request_timeout(request: Request, call_next):
    try:
        return await asyncio.wait_for(call_next(request), timeout=settings.REQUEST_TIMEOUT_SECONDS)
    except asyncio.TimeoutError:
        logger.warning(f"Request timed out: {request.method} {request.url.path}")
        return JSONResponse(status_code=504, content={"error": "Request timed out"})


# Error mapping
@app.exception_handler(TaskStoreError)
async def storage_error_handler(request: Request, exc: TaskStoreError):
    logger.error(f"Storage failure on {request.method} {request.url.path}: {exc}")
    return JSONResponse(status_code=500, content={"error": str(exc)})


@app.exception_handler(TaskAlreadyCompletedError)
async def already_completed_handler(request: Request, exc: TaskAlreadyCompletedError):
    return JSONResponse(status_code=409, content={"error": str(exc)})


@app.exception_handler(RequestValidationError)
async def validation_error_handler(request: Request, exc: RequestValidationError):
    return JSONResponse(
        status_code=400,
        content={"error": "Invalid request", "details": jsonable_encoder(exc.errors())},
    )


@app.exception_handler(StarletteHTTPException)
async def http_error_handler(request: Request, exc: StarletteHTTPException):
    return JSONResponse(status_code=exc.status_code, content={"error": exc.detail})


# Include routers
app.include_router(tasks.router, prefix="/api/tasks", tags=["Tasks"])


@app.get("/")
async def root():
    return {
        "app": settings.APP_NAME,
        "version": settings.APP_VERSION,
        "status": "running",
        "endpoints": {
            "today": "GET /api/tasks/today",
            "by_date": "GET /api/tasks?date=YYYY-MM-DD",
            "task": "GET /api/tasks/{id}",
            "complete": "POST /api/tasks/{id}/complete",
            "health": "GET /api/health",
        },
    }


@app.get("/api/health")
async def health_check():
    return {
        "status": "OK",
        "service": settings.APP_NAME,
        "version": settings.APP_VERSION,
        "timestamp": utc_timestamp(),
    }


if __name__ == "__main__":
    import uvicorn
    uvicorn.run(
        "open_maintenance.main:app",
        host=settings.HOST,
        port=settings.PORT,
        reload=settings.DEBUG
    )
