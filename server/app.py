"""FastAPI web server for todo-service."""
from __future__ import annotations

import logging
import uuid
from contextlib import asynccontextmanager
from datetime import datetime
from pathlib import Path
from typing import Optional

from fastapi import APIRouter, Depends, FastAPI, Request, Response
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import HTMLResponse, JSONResponse
from fastapi.templating import Jinja2Templates

from todo_service.config import Settings, get_settings
from todo_service.db.database import Database
from todo_service.db.migrate import schema_version
from todo_service.db.todo_repo import TodoRepository
from todo_service.errors import StorageError, TodoNotFoundError
from todo_service.models.todo import CreateTodoRequest, Todo, UpdateTodoRequest

logger = logging.getLogger(__name__)

templates = Jinja2Templates(directory=str(Path(__file__).parent / "templates"))


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Open the pool and migrate the schema before accepting traffic."""
    settings: Settings = app.state.settings
    db = Database.from_settings(settings)
    try:
        version = db.init()
    except StorageError as e:
        logger.error(f"Failed to initialize database: {e}")
        db.close()
        raise
    app.state.db = db
    logger.info(f"Server started - DB: {settings.safe_database_url} (schema v{version})")
    yield

    db.close()
    logger.info("Server shutting down")


# Dependencies
def get_db(request: Request) -> Database:
    return request.app.state.db


def get_repo(db: Database = Depends(get_db)) -> TodoRepository:
    return TodoRepository(db)


def get_app_settings(request: Request) -> Settings:
    return request.app.state.settings


def public_message(exc: StorageError, settings: Settings) -> str:
    if settings.EXPOSE_ERROR_DETAIL:
        return str(exc)
    return "Internal storage error"


# Exception handlers
async def storage_error_handler(request: Request, exc: StorageError) -> JSONResponse:
    logger.error(f"{request.method} {request.url.path} failed: {exc}")
    return JSONResponse(
        status_code=500,
        content={"detail": public_message(exc, request.app.state.settings)},
    )


async def not_found_handler(request: Request, exc: TodoNotFoundError) -> JSONResponse:
    logger.info(f"{request.method} {request.url.path}: {exc}")
    return JSONResponse(status_code=404, content={"detail": str(exc)})


# /todos routes
todos = APIRouter(prefix="/todos", tags=["Todos"])


@todos.get("/", response_model=list[Todo])
def list_todos(repo: TodoRepository = Depends(get_repo)):
    """List every todo. Order is whatever the store returns."""
    return [t.to_dict() for t in repo.list_all()]


@todos.post("/", response_model=Todo)
def create_todo(payload: CreateTodoRequest, repo: TodoRepository = Depends(get_repo)):
    """Create a todo; the store assigns its id."""
    return repo.create(payload.content).to_dict()


@todos.put("/{todo_id}")
def update_todo(
    todo_id: uuid.UUID,
    payload: UpdateTodoRequest,
    repo: TodoRepository = Depends(get_repo),
    settings: Settings = Depends(get_app_settings),
):
    matched = repo.update(todo_id, payload.content)
    if not matched and settings.STRICT_NOT_FOUND:
        raise TodoNotFoundError(todo_id)
    return Response(status_code=200)


@todos.delete("/{todo_id}")
def delete_todo(
    todo_id: uuid.UUID,
    repo: TodoRepository = Depends(get_repo),
    settings: Settings = Depends(get_app_settings),
):
    matched = repo.delete(todo_id)
    if not matched and settings.STRICT_NOT_FOUND:
        raise TodoNotFoundError(todo_id)
    return Response(status_code=200)


@todos.delete("/")
def clear_todos(repo: TodoRepository = Depends(get_repo)):
    repo.delete_all()
    return Response(status_code=200)


def create_app(settings: Optional[Settings] = None) -> FastAPI:
    settings = settings or get_settings()

    app = FastAPI(
        title=settings.APP_NAME,
        description="Create, read, update and delete todos",
        version=settings.APP_VERSION,
        lifespan=lifespan,
    )
    app.state.settings = settings

    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.CORS_ORIGINS,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    app.add_exception_handler(StorageError, storage_error_handler)
    app.add_exception_handler(TodoNotFoundError, not_found_handler)

    @app.get("/", response_class=HTMLResponse)
    def home(request: Request, repo: TodoRepository = Depends(get_repo)):
        """Render the todo list. Storage failures render the error page."""
        try:
            items = repo.list_all()
        except StorageError as e:
            logger.error(f"Failed to list todos for home page: {e}")
            return templates.TemplateResponse(
                request, "err.html", {"err": public_message(e, settings)}
            )
        return templates.TemplateResponse(request, "home.html", {"todos": items})

    @app.get("/status")
    def get_status(db: Database = Depends(get_db)):
        """Get system status."""
        return {
            "status": "ok",
            "timestamp": datetime.now().isoformat(),
            "database": {
                "dialect": db.dialect,
                "schema_version": schema_version(db),
            },
        }

    app.include_router(todos)
    return app


app = create_app()
