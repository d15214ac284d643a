"""Logfire setup.

Domain services emit spans and events directly:

    with logfire.span("vote_service.cast_vote", meme_id=str(meme_id)):
        ...
        logfire.info("Vote cast", action=action.value, votes=votes)

This module configures where those go and instruments FastAPI and
SQLAlchemy so requests and queries appear as parent spans.
"""

import logfire
from fastapi import FastAPI
from sqlalchemy.ext.asyncio import AsyncEngine

from memehub.config import Settings

SERVICE_NAME = "memehub-api"
SERVICE_VERSION = "0.1.0"


def configure_logfire(settings: Settings) -> None:
    """Configure Logfire once per process, before the app is created.

    Without a token (or with OBSERVABILITY__SEND_TO_LOGFIRE=false) events
    only go to the console.
    """
    observability = settings.observability

    logfire.configure(
        service_name=SERVICE_NAME,
        service_version=SERVICE_VERSION,
        environment=settings.environment,
        send_to_logfire=observability.sends_to_cloud,
        token=observability.logfire_token,
        console=logfire.ConsoleOptions(
            colors="auto",
            span_style="show-parents",
            include_timestamps=True,
            verbose=settings.debug,
        ),
    )

    logfire.info(
        "Observability configured",
        environment=settings.environment,
        send_to_logfire=observability.sends_to_cloud,
        git_sha=settings.git_sha,
    )


def instrument_fastapi(app: FastAPI) -> None:
    """Trace every request.

    Headers are not captured, so the auth_token cookie never reaches a
    trace; only whether one was sent is recorded.
    """

    def _request_attributes(request, attributes):
        return {
            **attributes,
            "path": request.url.path,
            "authenticated": "auth_token" in request.cookies,
        }

    logfire.instrument_fastapi(
        app,
        capture_headers=False,
        request_attributes_mapper=_request_attributes,
    )


def instrument_sqlalchemy(engine: AsyncEngine) -> None:
    """Trace queries on ``engine``, tagging SQL with the calling span."""
    logfire.instrument_sqlalchemy(engine=engine.sync_engine, enable_commenter=True)
