"""Production container and FastAPI wiring."""

from dishka import AsyncContainer, make_async_container
from dishka.integrations.fastapi import FastapiProvider, setup_dishka
from fastapi import FastAPI

from memehub.util.di import PROVIDERS, get_provider


def create_container() -> AsyncContainer:
    """Build the container used when serving traffic and in scripts.

    Settings come from the environment when the config provider first
    resolves them, so building the container does not touch the database.
    """
    providers = [get_provider(entry, use_mock=False)() for entry in PROVIDERS]
    return make_async_container(*providers, FastapiProvider())


def setup_di(app: FastAPI, container: AsyncContainer) -> None:
    """Attach ``container`` to ``app`` so routes can use ``FromDishka``."""
    setup_dishka(container, app)
