"""Infrastructure providers.

``ProdPersistenceProvider`` is imported so it is registered as a subclass
of ``PersistenceProvider`` before ``get_provider`` looks for it.
"""

from .persistence import PersistenceProvider, ProdPersistenceProvider

__all__ = ["PersistenceProvider", "ProdPersistenceProvider"]
