"""FastAPI application."""

from contextlib import asynccontextmanager

from dishka import AsyncContainer
from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from memehub.config import Settings
from memehub.interface.api.routes import (
    auth,
    comments,
    health,
    memes,
    moderation,
    users,
    votes,
)
from memehub.interface.error import register_exception_handlers
from memehub.util.di.container import create_container, setup_di
from memehub.util.observability import SERVICE_VERSION, instrument_fastapi


@asynccontextmanager
async def lifespan(app_instance: FastAPI):
    """Release pooled database connections on shutdown."""
    yield
    await app_instance.state.dishka_container.close()


def create_app(container: AsyncContainer | None = None) -> FastAPI:
    """Create FastAPI application.

    Args:
        container: DI container to use; the production container by default

    Note: Logfire should be configured before calling this function.
    In production, start_app.py handles this.
    In tests, conftest.py does.
    """
    settings = Settings()

    app_instance = FastAPI(
        title="MemeGenHub API",
        description="Backend API for MemeGenHub - create, share, vote on and discuss memes",
        version=SERVICE_VERSION,
        lifespan=lifespan,
    )

    instrument_fastapi(app_instance)

    app_instance.add_middleware(
        CORSMiddleware,
        allow_origins=[
            settings.api.frontend_url,
            "http://localhost:3000",  # Local development
        ],
        allow_credentials=True,
        allow_methods=["GET", "POST", "PUT", "DELETE", "OPTIONS", "PATCH"],
        allow_headers=[
            "Authorization",
            "Content-Type",
            "Accept",
            "Origin",
            "X-Requested-With",
        ],
        expose_headers=["Content-Length", "Content-Type"],
        max_age=600,  # Cache preflight requests for 10 minutes
    )

    setup_di(app_instance, container or create_container())

    register_exception_handlers(app_instance)

    app_instance.include_router(health.router)
    app_instance.include_router(auth.router)
    app_instance.include_router(users.router)
    # Literal paths (/comments/flagged) before parameterised ones
    app_instance.include_router(moderation.router)
    app_instance.include_router(memes.router)
    app_instance.include_router(votes.router)
    app_instance.include_router(comments.router)

    return app_instance


# Create app instance for uvicorn
# Note: Logfire must be configured before this module is imported
app = create_app()
