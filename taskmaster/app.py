import logging
import time
from collections.abc import AsyncIterator, Iterator
from contextlib import asynccontextmanager

from fastapi import Body, Depends, FastAPI, Request
from fastapi.exception_handlers import http_exception_handler
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from sqlalchemy import create_engine
from sqlalchemy.orm import Session, sessionmaker
from starlette.exceptions import HTTPException as StarletteHTTPException

from .config import get_settings
from .errors import TaskError
from .models import (
    Base,
    DeleteResponse,
    StatsResponse,
    TaskListResponse,
    TaskPayload,
    TaskResponse,
)
from .service import TaskService
from .store import TaskStore
from .utils import SAMPLE_TASKS, utcnow

logger = logging.getLogger(__name__)

settings = get_settings()

connect_args = {"check_same_thread": False} if settings.database_url.startswith("sqlite") else {}
engine = create_engine(settings.database_url, connect_args=connect_args)

SessionLocal = sessionmaker(autocommit=False, autoflush=False, bind=engine)


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncIterator[None]:
    Base.metadata.create_all(bind=engine)
    logger.info("Tasks table ready db=%s", engine.url.render_as_string(hide_password=True))

    if settings.seed_sample_data:
        with SessionLocal() as db:
            store = TaskStore(db)
            if store.count() == 0:
                store.seed(SAMPLE_TASKS)

    yield

    engine.dispose()
    logger.info("Database connection closed")


app = FastAPI(title="TaskMaster API", lifespan=lifespan)

app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.cors_origin_list,
    allow_methods=["*"],
    allow_headers=["*"],
)


@app.middleware("http")
async def log_requests(request: Request, call_next):
    start_time = time.perf_counter()
    response = await call_next(request)
    process_time = time.perf_counter() - start_time
    logger.info("%s %s -> %s (%.4fs)", request.method, request.url.path, response.status_code, process_time)
    return response


@app.exception_handler(TaskError)
async def task_error_handler(request: Request, exc: TaskError) -> JSONResponse:
    return JSONResponse(status_code=exc.status_code, content=exc.to_dict())


@app.exception_handler(RequestValidationError)
async def request_validation_handler(request: Request, exc: RequestValidationError) -> JSONResponse:
    errors = exc.errors()
    if any(err.get("type") == "json_invalid" for err in errors):
        message = "Invalid JSON in request body"
    elif any(err.get("loc", ())[:1] == ("body",) for err in errors):
        message = "Request body must be a JSON object or array"
    else:
        message = "Invalid request parameters"
    return JSONResponse(status_code=400, content={"error": message, "code": "invalid_request"})


@app.exception_handler(StarletteHTTPException)
async def api_not_found_handler(request: Request, exc: StarletteHTTPException):
    # Unknown paths and unsupported methods under /api/ both read as a missing endpoint.
    if exc.status_code in (404, 405) and request.url.path.startswith("/api/"):
        return JSONResponse(status_code=404, content={"error": "API endpoint not found", "code": "endpoint_not_found"})
    return await http_exception_handler(request, exc)


def get_db() -> Iterator[Session]:
    db = SessionLocal()
    try:
        yield db
    finally:
        db.close()


def get_service(db: Session = Depends(get_db)) -> TaskService:
    return TaskService(TaskStore(db))


@app.get("/health", status_code=200)
def health() -> dict:
    return {
        "status": "OK",
        "message": "Task Management API is running",
        "timestamp": utcnow().isoformat(),
    }


@app.get("/api/tasks", status_code=200)
def list_tasks(
    status: str | None = None,
    priority: str | None = None,
    service: TaskService = Depends(get_service),
) -> TaskListResponse:
    return service.list_tasks(status=status, priority=priority)


@app.get("/api/tasks/{task_id}", status_code=200)
def get_task(task_id: str, service: TaskService = Depends(get_service)) -> TaskResponse:
    return service.get_task(task_id)


@app.post("/api/tasks", status_code=201)
def create_task(
    payload: TaskPayload | None = Body(default=None),
    service: TaskService = Depends(get_service),
) -> TaskResponse:
    return service.create_task(payload)


@app.put("/api/tasks/{task_id}", status_code=200)
def update_task(
    task_id: str,
    payload: TaskPayload | None = Body(default=None),
    service: TaskService = Depends(get_service),
) -> TaskResponse:
    return service.update_task(task_id, payload)


@app.delete("/api/tasks/{task_id}", status_code=200)
def delete_task(task_id: str, service: TaskService = Depends(get_service)) -> DeleteResponse:
    return service.delete_task(task_id)


@app.get("/api/stats", status_code=200)
def get_stats(service: TaskService = Depends(get_service)) -> StatsResponse:
    return service.stats()
