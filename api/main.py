"""
FastAPI application for the Bet Tracker API.

Main entry point for the REST API that exposes:
- Credentials sign-up and session tokens
- Pick and parlay tracking with settlement
- Bankroll history, deposits and withdrawals
- User profile management
- Performance statistics
- Health check endpoints

Run with:
    uvicorn api.main:app --reload
"""

import logging
from contextlib import asynccontextmanager
from typing import Optional

from fastapi import FastAPI, Request
from fastapi.encoders import jsonable_encoder
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException

from api.routers import auth, bankroll, health, parlays, picks, stats, user
from api.state import AppState
from bet_tracker import __version__
from bet_tracker.config.settings import Settings, get_settings
from bet_tracker.exceptions import BetTrackerError

logger = logging.getLogger(__name__)

MUTATING_METHODS = frozenset({"POST", "PUT", "PATCH", "DELETE"})

# Mutations open to signed-out callers
PUBLIC_MUTATION_PATHS = frozenset({"/api/auth/signup", "/api/auth/login", "/api/parlays/quote"})


def _error_body(error: str, details=None) -> dict:
    body = {"error": error}
    if details is not None:
        body["details"] = details
    return body


def _is_anonymous_mutation(request: Request) -> bool:
    if request.method not in MUTATING_METHODS or request.url.path in PUBLIC_MUTATION_PATHS:
        return False
    scheme, _, token = request.headers.get("authorization", "").partition(" ")
    return scheme.lower() != "bearer" or not token.strip()


def register_exception_handlers(app: FastAPI) -> None:
    """Render every error as ``{"error": ..., "details"?: ...}``."""

    @app.exception_handler(RequestValidationError)
    async def validation_error_handler(request: Request, exc: RequestValidationError):
        # the body is parsed before the auth dependency runs
        if _is_anonymous_mutation(request):
            return JSONResponse(status_code=401, content=_error_body("Unauthorized"))
        return JSONResponse(
            status_code=400,
            content=_error_body("Validation error", jsonable_encoder(exc.errors())),
        )

    @app.exception_handler(BetTrackerError)
    async def domain_error_handler(request: Request, exc: BetTrackerError):
        return JSONResponse(
            status_code=exc.status_code,
            content=_error_body(exc.message, jsonable_encoder(exc.details)),
        )

    @app.exception_handler(HTTPException)
    async def http_error_handler(request: Request, exc: HTTPException):
        return JSONResponse(
            status_code=exc.status_code,
            content=_error_body(str(exc.detail)),
            headers=getattr(exc, "headers", None),
        )

    @app.exception_handler(Exception)
    async def unhandled_error_handler(request: Request, exc: Exception):
        logger.exception(f"Unhandled error on {request.method} {request.url.path}")
        return JSONResponse(status_code=500, content=_error_body("Internal server error"))


def create_app(settings: Optional[Settings] = None) -> FastAPI:
    """
    Build the application.

    Args:
        settings: Settings to run with; loaded from the environment if omitted
    """
    settings = settings or get_settings()

    @asynccontextmanager
    async def lifespan(app: FastAPI):
        """
        Application lifespan manager.

        Initializes components on startup and cleans up on shutdown.
        """
        logger.info("Starting Bet Tracker API...")

        state = AppState(settings)
        state.initialize()
        app.state.app_state = state

        logger.info("Bet Tracker API started successfully")

        yield

        logger.info("Shutting down Bet Tracker API...")
        state.shutdown()
        logger.info("Bet Tracker API shutdown complete")

    app = FastAPI(
        title="Bet Tracker API",
        description="Track sports picks, parlays and bankroll performance",
        version=__version__,
        docs_url="/api/docs",
        redoc_url="/api/redoc",
        openapi_url="/api/openapi.json",
        lifespan=lifespan,
    )

    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_origins,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    register_exception_handlers(app)

    app.include_router(health.router, prefix="/api", tags=["Health"])
    app.include_router(auth.router, prefix="/api", tags=["Auth"])
    app.include_router(picks.router, prefix="/api", tags=["Picks"])
    app.include_router(parlays.router, prefix="/api", tags=["Parlays"])
    app.include_router(bankroll.router, prefix="/api", tags=["Bankroll"])
    app.include_router(user.router, prefix="/api", tags=["User"])
    app.include_router(stats.router, prefix="/api", tags=["Stats"])

    @app.get("/")
    async def root():
        """Root endpoint pointing to the API documentation."""
        return {
            "name": "Bet Tracker API",
            "version": __version__,
            "docs": "/api/docs",
            "health": "/api/health",
        }

    return app


app = create_app()
