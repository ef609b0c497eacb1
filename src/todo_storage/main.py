from __future__ import annotations

from typing import Optional

from fastapi import FastAPI, Request
from fastapi.encoders import jsonable_encoder
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from .diagnostics import Diagnostics
from .logging_setup import setup_logging
from .routers import todos as todos_router
from .settings import Settings, get_settings
from .storage import TodoStorage
from .stores import KeyValueStore, get_store

openapi_tags = [
    {"name": "health", "description": "Service health and status endpoints."},
    {
        "name": "todos",
        "description": "Read and replace the stored todo collection.",
    },
]


async def validation_exception_handler(request: Request, exc: RequestValidationError) -> JSONResponse:
    """
    Return a consistent JSON structure for request validation errors.

    Response format:
        {
            "error": "ValidationError",
            "detail": [... pydantic/fastapi error details ...],
            "message": "Request validation failed"
        }
    """
    return JSONResponse(
        status_code=422,
        content={
            "error": "ValidationError",
            "message": "Request validation failed",
            "detail": jsonable_encoder(exc.errors()),
        },
    )


def health_check(request: Request):
    """
    Health check endpoint.

    Returns:
        A JSON object indicating service health.
    """
    settings: Settings = request.app.state.settings
    return {"message": "Healthy", "backend": settings.persistence_backend}


# PUBLIC_INTERFACE
def create_app(settings: Optional[Settings] = None, store: Optional[KeyValueStore] = None) -> FastAPI:
    """
    Build the FastAPI application around a single TodoStorage.

    settings defaults to the environment; store defaults to the backend named by
    settings.persistence_backend.
    """
    settings = settings or get_settings()
    setup_logging(settings.log_level)

    app = FastAPI(
        title="Todo Storage",
        description="Normalized persistence of todo records in a key-value store.",
        version="0.1.0",
        openapi_tags=openapi_tags,
    )
    app.state.settings = settings
    app.state.storage = TodoStorage(
        store if store is not None else get_store(settings),
        diagnostics=Diagnostics(enabled=settings.dev_mode),
    )

    # Configure CORS based on settings (CORS_ALLOW_ORIGINS), with '*' fallback
    allow_all = (settings.cors_allow_origins == ["*"]) or (len(settings.cors_allow_origins) == 0)
    app.add_middleware(
        CORSMiddleware,
        allow_origins=["*"] if allow_all else settings.cors_allow_origins,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    app.add_exception_handler(RequestValidationError, validation_exception_handler)
    app.add_api_route("/", health_check, methods=["GET"], summary="Health Check", tags=["health"])
    app.include_router(todos_router.router)
    return app


app = create_app()
