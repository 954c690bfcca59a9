"""
FastAPI application factory.

Creates and configures the FastAPI application instance.
"""

import logging
from contextlib import asynccontextmanager
from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.encoders import jsonable_encoder
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from shared.config import get_settings
from shared.exceptions import AuthenticationError, TrakError
from modules.auth.routes import router as auth_router
from modules.challenges.routes import router as challenges_router
from modules.commutes.routes import router as commutes_router
from modules.leaderboard.routes import router as leaderboard_router
from modules.rewards.routes import router as rewards_router
from modules.users.routes import router as users_router

from .dependencies import get_container
from .models.errors import ValidationErrorResponse, error_body
from .routes import health
from .seed import seed_demo_data

logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """
    Application lifespan handler.

    Runs startup and shutdown logic.
    """
    # Startup
    settings = get_settings()
    logger.info(
        f"Starting {settings.app_name} on {settings.host}:{settings.port} "
        f"({settings.storage_backend} storage)"
    )
    if settings.storage_backend == "memory" and settings.seed_demo_data:
        await seed_demo_data(get_container())
    yield
    # Shutdown
    logger.info(f"Shutting down {settings.app_name}")


async def trak_error_handler(request: Request, exc: TrakError) -> JSONResponse:
    if exc.status_code >= 500:
        logger.error(f"{request.method} {request.url.path} failed: {exc.message}")
    headers = {"WWW-Authenticate": "Bearer"} if isinstance(exc, AuthenticationError) else None
    return JSONResponse(
        status_code=exc.status_code,
        content=jsonable_encoder(error_body(exc)),
        headers=headers,
    )


async def validation_error_handler(request: Request, exc: RequestValidationError) -> JSONResponse:
    body = ValidationErrorResponse(errors=jsonable_encoder(exc.errors()))
    return JSONResponse(status_code=400, content=body.model_dump())


def create_app() -> FastAPI:
    """
    Create and configure the FastAPI application.

    Returns:
        Configured FastAPI instance
    """
    settings = get_settings()

    app = FastAPI(
        title=settings.app_name,
        description="Sustainable commuting tracker API",
        version=settings.app_version,
        lifespan=lifespan,
        docs_url="/api/docs" if settings.debug else None,
        redoc_url="/api/redoc" if settings.debug else None,
    )

    # Configure CORS
    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_origins,
        allow_credentials=settings.cors_allow_credentials,
        allow_methods=settings.cors_allow_methods,
        allow_headers=settings.cors_allow_headers,
    )

    app.add_exception_handler(TrakError, trak_error_handler)
    app.add_exception_handler(RequestValidationError, validation_error_handler)

    # Register routes
    app.include_router(health.router, prefix="/api", tags=["health"])
    app.include_router(auth_router, prefix="/api/auth", tags=["auth"])
    app.include_router(users_router, prefix="/api/user", tags=["users"])
    app.include_router(commutes_router, prefix="/api/commutes", tags=["commutes"])
    app.include_router(challenges_router, prefix="/api", tags=["challenges"])
    app.include_router(rewards_router, prefix="/api", tags=["rewards"])
    app.include_router(leaderboard_router, prefix="/api", tags=["leaderboard"])

    return app


# Application instance for uvicorn
app = create_app()
