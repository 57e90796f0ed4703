from __future__ import annotations

import json
import logging
from typing import Any, Optional

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException

from .logging_config import configure_logging
from .repositories import Repository, build_repository, load_seed_todos, seed_if_empty
from .routers import todos as todos_router
from .settings import Settings, get_settings

logger = logging.getLogger(__name__)

INVALID_ID_MESSAGE = "Invalid ID"
INVALID_TODO_MESSAGE = "Invalid task format -- ID is int, Task is string, Completed is bool"

openapi_tags = [
    {"name": "health", "description": "Service health and status endpoints."},
    {"name": "todos", "description": "CRUD operations for Todo items."},
]


class IndentedJSONResponse(JSONResponse):
    """JSON response rendered with indentation."""

    def render(self, content: Any) -> bytes:
        return json.dumps(content, ensure_ascii=False, allow_nan=False, indent=4).encode("utf-8")


async def validation_exception_handler(request: Request, exc: RequestValidationError) -> JSONResponse:
    """
    Map request validation errors to 400.

    Response format:
        {"message": "Invalid ID"}  for a bad path id
        {"message": "Invalid task format -- ..."}  for a bad body
    """
    errors = exc.errors()
    if any(err.get("loc", ("",))[0] == "path" for err in errors):
        message = INVALID_ID_MESSAGE
    else:
        message = INVALID_TODO_MESSAGE
    logger.info("Rejected %s %s: %s", request.method, request.url.path, errors)
    return IndentedJSONResponse(status_code=400, content={"message": message})


async def http_exception_handler(request: Request, exc: StarletteHTTPException) -> JSONResponse:
    """Render every HTTPException as {"message": detail}."""
    return IndentedJSONResponse(
        status_code=exc.status_code,
        content={"message": exc.detail},
        headers=getattr(exc, "headers", None),
    )


# PUBLIC_INTERFACE
def create_app(settings: Optional[Settings] = None, repository: Optional[Repository] = None) -> FastAPI:
    """
    Build the FastAPI application.

    Configures the log file, builds the repository from settings unless one
    is given, creates and seeds the table, and wires the routes. Storage
    failures here raise RepositoryError; callers treat them as fatal.
    """
    settings = settings or get_settings()
    configure_logging(settings)

    repo = repository if repository is not None else build_repository(settings)
    if settings.seed_on_empty:
        seed_if_empty(repo, load_seed_todos(settings.seed_file))

    app = FastAPI(
        title="Todo Service",
        description="Minimal CRUD service for a todo list backed by a single table.",
        version="0.1.0",
        openapi_tags=openapi_tags,
        default_response_class=IndentedJSONResponse,
    )
    app.state.settings = settings
    app.state.repository = repo

    app.add_exception_handler(RequestValidationError, validation_exception_handler)
    app.add_exception_handler(StarletteHTTPException, http_exception_handler)

    # PUBLIC_INTERFACE
    @app.get("/", summary="Health Check", tags=["health"])
    def health_check():
        """
        Health check endpoint.

        Returns:
            A JSON object indicating service health.
        """
        return {"message": "Healthy", "backend": repo.name}

    app.include_router(todos_router.router)
    return app
