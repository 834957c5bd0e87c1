"""Main FastAPI application for the Kanban task tracker."""
from contextlib import asynccontextmanager
from datetime import datetime, timezone

from fastapi import FastAPI, Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse

from app.config import ENVIRONMENT
from app.db.init import init_db
from app.exceptions import KanbanError
from app.middleware.cors import add_cors_middleware
from app.routers import auth_router, tasks_router
from app.utils.logger import get_logger

logger = get_logger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Create tables on startup."""
    try:
        init_db()
    except Exception as e:
        logger.exception("Database initialization failed", error=str(e))
        raise
    logger.info("Application startup complete", environment=ENVIRONMENT)
    yield
    logger.info("Application shutdown")


app = FastAPI(
    title="Kanban Task Tracker API",
    description="REST API for a personal Kanban board with due dates and reminders",
    version="1.0.0",
    lifespan=lifespan,
)

add_cors_middleware(app)


@app.exception_handler(KanbanError)
async def kanban_error_handler(request: Request, exc: KanbanError):
    """Render domain errors as {"msg": ...} with their status code."""
    logger.info(
        "Request failed",
        method=request.method,
        path=request.url.path,
        status=exc.status_code,
        msg=exc.message,
    )
    return JSONResponse(status_code=exc.status_code, content=exc.to_dict())


@app.exception_handler(RequestValidationError)
async def request_validation_handler(request: Request, exc: RequestValidationError):
    """Malformed bodies are client errors; a non-integer task id can never be owned."""
    errors = exc.errors()
    if any(error.get("loc", ("",))[0] == "path" for error in errors):
        return JSONResponse(status_code=status.HTTP_404_NOT_FOUND, content={"msg": "task not found"})
    logger.info("Malformed request", path=request.url.path, errors=str(errors))
    return JSONResponse(status_code=status.HTTP_400_BAD_REQUEST, content={"msg": "invalid request body"})


@app.get("/api/health")
async def health_check():
    """Health check endpoint."""
    return {
        "status": "ok",
        "environment": ENVIRONMENT,
        "timestamp": datetime.now(timezone.utc).isoformat(),
    }


app.include_router(auth_router, prefix="/api/auth")  # /api/auth/register, /api/auth/login
app.include_router(tasks_router, prefix="/api/tasks")  # /api/tasks, /api/tasks/{task_id}, ...


if __name__ == "__main__":
    import uvicorn
    uvicorn.run(
        "app.main:app",
        host="0.0.0.0",
        port=5000,
        reload=ENVIRONMENT == "development",
    )
