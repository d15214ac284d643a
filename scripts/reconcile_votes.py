#!/usr/bin/env python3
"""Recompute every meme's vote total from the votes table.

Corrects and reports any meme whose stored total has drifted from the sum
of its votes.
"""

import asyncio
import sys

import logfire

from memehub.application.usecase.vote import ReconcileVotesUseCase
from memehub.config import Settings
from memehub.util.di.container import create_container
from memehub.util.observability import configure_logfire


async def reconcile() -> int:
    container = create_container()
    try:
        async with container() as request_container:
            use_case = await request_container.get(ReconcileVotesUseCase)
            result = await use_case.execute()
    finally:
        await container.close()

    for drift in result.corrected:
        print(f"{drift.meme_id}: {drift.stored} -> {drift.actual}")
    print(f"Corrected {len(result.corrected)} memes")
    return len(result.corrected)


def main() -> int:
    configure_logfire(Settings())

    try:
        asyncio.run(reconcile())
    except Exception as e:
        logfire.error(
            "Vote reconciliation failed",
            error=str(e),
            error_type=type(e).__name__,
            _exc_info=sys.exc_info(),
        )
        raise
    return 0


if __name__ == "__main__":
    sys.exit(main())
