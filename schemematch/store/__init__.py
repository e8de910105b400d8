"""Store adapters behind the recommendation core."""

from schemematch.store.base import CatalogStore, ProfileStore, RecommendationStore, Store
from schemematch.store.memory import InMemoryStore
from schemematch.store.sql import SqlAlchemyStore

__all__ = [
    "RecommendationStore",
    "ProfileStore",
    "CatalogStore",
    "Store",
    "InMemoryStore",
    "SqlAlchemyStore",
]
