#!/usr/bin/env python3
"""Serve the MemeGenHub API with uvicorn.

Usage:
    python scripts/start_app.py            # production-style
    python scripts/start_app.py --reload   # local development
"""

import argparse
import sys

import logfire
import uvicorn

from memehub.config import Settings
from memehub.util.logging import setup_logging
from memehub.util.observability import configure_logfire


def main() -> int:
    parser = argparse.ArgumentParser(description="Start the MemeGenHub API")
    parser.add_argument("--reload", action="store_true", help="Restart on code changes")
    parser.add_argument("--workers", type=int, default=1, help="Worker processes")
    args = parser.parse_args()

    settings = Settings()
    setup_logging(settings)
    # Before uvicorn imports the app, so import-time failures are traced too
    configure_logfire(settings)

    logfire.info(
        "Starting API",
        port=settings.port,
        environment=settings.environment,
        workers=args.workers,
    )
    try:
        uvicorn.run(
            "memehub.interface.api.app:app",
            host="0.0.0.0",
            port=settings.port,
            reload=args.reload,
            workers=None if args.reload else args.workers,
            log_level="debug" if settings.debug else "info",
        )
    except Exception as e:
        logfire.error(
            "API failed to start",
            error=str(e),
            error_type=type(e).__name__,
            _exc_info=sys.exc_info(),
        )
        raise
    return 0


if __name__ == "__main__":
    sys.exit(main())
