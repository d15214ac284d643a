"""Dependency injection wiring.

Every provider class the app needs is listed in ``PROVIDERS``. A provider
that has subclasses is a swappable component (currently only persistence):
production and tests pick the subclass they want with ``get_provider``.
"""

from typing import Type

from memehub.util.di.application import ProdApplicationProvider
from memehub.util.di.base import Component, ProviderBase
from memehub.util.di.core import ProdConfigProvider
from memehub.util.di.domain import ProdDomainProvider
from memehub.util.di.infrastructure import (
    PersistenceProvider,
    ProdPersistenceProvider,
)

PROVIDERS: list[Type[ProviderBase]] = [
    ProdConfigProvider,
    ProdDomainProvider,
    ProdApplicationProvider,
    # Swappable: Postgres in production, in-memory repositories in tests
    PersistenceProvider,
]


def get_provider(
    base: Type[ProviderBase], use_mock: bool = False
) -> Type[ProviderBase]:
    """Resolve a provider entry to the class that should be instantiated.

    Args:
        base: Entry from ``PROVIDERS``
        use_mock: Pick the test double rather than the production subclass

    Returns:
        Provider class (not instantiated)

    Raises:
        ValueError: If the component has no subclass of the requested kind
    """
    candidates = base.__subclasses__()
    if not candidates:
        return base

    for candidate in candidates:
        if candidate.__is_mock__ == use_mock:
            return candidate

    component = base.__mock_component__ or base.__name__
    raise ValueError(
        f"{component} has no {'mock' if use_mock else 'production'} provider"
    )


__all__ = [
    "Component",
    "PROVIDERS",
    "PersistenceProvider",
    "ProdApplicationProvider",
    "ProdConfigProvider",
    "ProdDomainProvider",
    "ProdPersistenceProvider",
    "ProviderBase",
    "get_provider",
]
