"""FastAPI application factory."""
from __future__ import annotations

from typing import List

from fastapi import FastAPI, Request, status
from fastapi.encoders import jsonable_encoder
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from ecoscan.api.v1 import api_router
from ecoscan.config import settings
from ecoscan.schemas import HealthResponse
from ecoscan.utils.exceptions import (
    NotFoundOrAlreadyCompleted,
    StorageError,
    ValidationError,
    handle_challenge_error,
    handle_storage_error,
    handle_validation_error,
)


tags_metadata: List[dict[str, str]] = [
    {"name": "classification", "description": "Classify waste images and earn points."},
    {"name": "leaderboard", "description": "Top players and rank lookups."},
    {"name": "challenges", "description": "Shared daily challenges."},
    {"name": "progress", "description": "Achievements, daily counter and profile."},
]


def create_app() -> FastAPI:
    """Create and configure the FastAPI application instance."""

    app = FastAPI(
        title=settings.PROJECT_NAME,
        description="Gamified waste sorting: classify, earn points, climb the leaderboard.",
        version="0.1.0",
        openapi_tags=tags_metadata,
        docs_url=f"{settings.API_V1_STR}/docs",
        redoc_url=f"{settings.API_V1_STR}/redoc",
    )

    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.BACKEND_CORS_ORIGINS,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    @app.exception_handler(RequestValidationError)
    async def validation_exception_handler(
        request: Request, exc: RequestValidationError
    ) -> JSONResponse:
        return JSONResponse(
            status_code=status.HTTP_400_BAD_REQUEST,
            content={"error": "Invalid request.", "detail": jsonable_encoder(exc.errors())},
        )

    app.add_exception_handler(ValidationError, handle_validation_error)
    app.add_exception_handler(NotFoundOrAlreadyCompleted, handle_challenge_error)
    app.add_exception_handler(StorageError, handle_storage_error)

    @app.get("/healthz", response_model=HealthResponse, tags=["health"])
    def healthcheck() -> HealthResponse:
        return HealthResponse(status="ok", environment=settings.ENVIRONMENT)

    app.include_router(api_router, prefix=settings.API_V1_STR)
    return app


app = create_app()
